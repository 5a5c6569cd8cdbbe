"""Seeded pseudo-random number generator.

Every source of variance in a battle (damage spread, critical hits, loot
drops, enemy move choice) draws from one of these generators, so a battle
can be replayed exactly from its seed.

The seed string is folded into a 32-bit state with an FNV-1a style hash
(with a bit rotation per character), which then drives a mulberry32
generator. All arithmetic is done modulo 2^32 over UTF-16 code units so the
sequence matches the JavaScript client bit for bit.
"""

from dataclasses import dataclass

MASK_32 = 0xFFFFFFFF
EMPTY_SEED_HASH = 0x6D2B79F5
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
MULBERRY_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, wrapping like Math.imul."""
    return (a * b) & MASK_32


def _utf16_units(seed: str) -> list[int]:
    """Split a string into UTF-16 code units (what String.charCodeAt sees)."""
    data = seed.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def hash_seed(seed: str) -> int:
    """Hash a seed string into an unsigned 32-bit generator state.

    Any string is valid, the empty string maps to a fixed constant.
    """
    if not seed:
        return EMPTY_SEED_HASH

    units = _utf16_units(seed)
    value = (FNV_OFFSET_BASIS ^ len(units)) & MASK_32
    for code in units:
        value ^= code
        value = _imul(value, FNV_PRIME)
        value = ((value << 13) | (value >> 19)) & MASK_32
    return value


@dataclass(frozen=True)
class RandomSnapshot:
    """Serializable position of a generator: its seed and number of draws taken."""

    seed: str
    cursor: int


class SeededRandom:
    """Deterministic float stream for a single battle.

    Not thread-safe: one instance belongs to exactly one battle context.
    """

    def __init__(self, seed: str) -> None:
        self.seed = seed
        self.cursor = 0
        self._state = hash_seed(seed)

    @classmethod
    def from_snapshot(cls, snapshot: RandomSnapshot) -> "SeededRandom":
        """Rebuild a generator positioned at the snapshot's cursor."""
        if snapshot.cursor < 0:
            raise ValueError(f"Cursor must be non-negative, got {snapshot.cursor}")
        rng = cls(snapshot.seed)
        for _ in range(snapshot.cursor):
            rng.next_float()
        return rng

    def next_float(self) -> float:
        """Advance the generator and return a float in [0, 1)."""
        self._state = (self._state + MULBERRY_INCREMENT) & MASK_32
        state = self._state
        t = _imul(state ^ (state >> 15), 1 | state)
        t ^= (t + _imul(t ^ (t >> 7), 61 | t)) & MASK_32
        self.cursor += 1
        return ((t ^ (t >> 14)) & MASK_32) / TWO_POW_32

    def snapshot(self) -> RandomSnapshot:
        """Capture the current position of the generator."""
        return RandomSnapshot(seed=self.seed, cursor=self.cursor)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r}, cursor={self.cursor})"


def create_seeded_random(seed: str) -> SeededRandom:
    """Create a fresh generator for a seed."""
    return SeededRandom(seed)
