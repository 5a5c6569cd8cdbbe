"""Type definitions for the battle engine.

All battle values are immutable snapshots. State changes produce new
instances via ``dataclasses.replace``; sequences are tuples so copies never
share a mutable container.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .enums import BattleOutcome, CombatantKind, DropRarity, MoveKind

if TYPE_CHECKING:
    from .rng import SeededRandom


@dataclass(frozen=True)
class CombatantAttributes:
    """Base stats of a combatant, already scaled for its level."""

    max_health: int
    attack: int
    defense: int
    speed: int
    crit_rate: float
    crit_damage: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "max_health": self.max_health,
            "attack": self.attack,
            "defense": self.defense,
            "speed": self.speed,
            "crit_rate": self.crit_rate,
            "crit_damage": self.crit_damage,
        }


@dataclass(frozen=True)
class StatusEffect:
    """Temporary additive modifier attached to a combatant."""

    id: str
    name: str
    duration: int  # Remaining turns, always >= 1 while attached
    attack_modifier: int = 0
    defense_modifier: int = 0
    speed_modifier: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "attack_modifier": self.attack_modifier,
            "defense_modifier": self.defense_modifier,
            "speed_modifier": self.speed_modifier,
        }


@dataclass(frozen=True)
class CombatantState:
    """Snapshot of one side of the battle.

    Only the combatant state machine produces new snapshots; current_health is
    kept within [0, max_health] and special_meter within [0, 100].
    """

    id: str
    name: str
    level: int
    kind: CombatantKind
    attributes: CombatantAttributes
    current_health: int
    status_effects: tuple[StatusEffect, ...] = ()
    special_meter: int = 0
    combo_count: int = 0
    is_blocking: bool = False

    def is_alive(self) -> bool:
        """Check if the combatant still has health left."""
        return self.current_health > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "kind": self.kind.value,
            "attributes": self.attributes.to_dict(),
            "current_health": self.current_health,
            "status_effects": [effect.to_dict() for effect in self.status_effects],
            "special_meter": self.special_meter,
            "combo_count": self.combo_count,
            "is_blocking": self.is_blocking,
        }


@dataclass(frozen=True)
class DamageResult:
    """Outcome of a single strike; also stored on log entries as the damage snapshot."""

    amount: int
    is_critical: bool
    was_blocked: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "amount": self.amount,
            "is_critical": self.is_critical,
            "was_blocked": self.was_blocked,
        }


@dataclass(frozen=True)
class BattleLogEntry:
    """Player-facing line of the battle log. Never edited once appended."""

    id: str
    turn: int
    actor: CombatantKind
    description: str
    damage: DamageResult | None = None
    move: MoveKind | None = None  # Move actually resolved (after any downgrade)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "id": self.id,
            "turn": self.turn,
            "actor": self.actor.value,
            "description": self.description,
        }
        if self.damage is not None:
            result["damage"] = self.damage.to_dict()
        if self.move is not None:
            result["move"] = self.move.value
        return result


@dataclass(frozen=True)
class RewardDrop:
    """Item granted on victory."""

    id: str
    name: str
    rarity: DropRarity
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "rarity": self.rarity.value,
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class RewardBundle:
    """Rewards computed once, on the transition to victory."""

    experience: int
    credits: int
    drops: tuple[RewardDrop, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "experience": self.experience,
            "credits": self.credits,
            "drops": [drop.to_dict() for drop in self.drops],
        }


@dataclass(frozen=True)
class BattleState:
    """Complete state of a battle between the hero and one enemy."""

    seed: str
    turn: int
    hero: CombatantState
    enemy: CombatantState
    log: tuple[BattleLogEntry, ...] = ()
    outcome: BattleOutcome = BattleOutcome.IN_PROGRESS
    rewards: RewardBundle | None = None
    run_id: str | None = None
    rng_cursor: int = 0  # Draws consumed from the seed so far

    @property
    def is_terminal(self) -> bool:
        """True once the battle has been won or lost."""
        return self.outcome != BattleOutcome.IN_PROGRESS

    def get_combatant(self, kind: CombatantKind) -> CombatantState:
        """Get the combatant fighting on the given side."""
        return self.hero if kind == CombatantKind.HERO else self.enemy

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "seed": self.seed,
            "turn": self.turn,
            "hero": self.hero.to_dict(),
            "enemy": self.enemy.to_dict(),
            "log": [entry.to_dict() for entry in self.log],
            "outcome": self.outcome.value,
            "rng_cursor": self.rng_cursor,
        }
        if self.rewards is not None:
            result["rewards"] = self.rewards.to_dict()
        if self.run_id is not None:
            result["run_id"] = self.run_id
        return result


@dataclass(frozen=True)
class BattleContext:
    """A battle state paired with the generator that continues its draws.

    The context owns both; callers rebind it after every resolved turn and
    never run two turns against the same context at once.
    """

    state: BattleState
    rng: "SeededRandom"


@dataclass(frozen=True)
class TurnResolution:
    """Result of resolving one turn."""

    state: BattleState
    events: tuple[BattleLogEntry, ...]
