"""Encounter templates and level scaling of characters into combatants."""

from dataclasses import dataclass

from ..engine.damage import round_half_up
from ..engine.enums import CombatantKind
from ..engine.types import CombatantAttributes, CombatantState

LEVEL_SCALING_PER_LEVEL = 0.15


class EncounterNotFoundError(LookupError):
    """Raised when an encounter slug is not known."""


@dataclass(frozen=True)
class EncounterTemplate:
    """Enemy encounter with stats already set for its level."""

    slug: str
    name: str
    level: int
    max_health: int
    attack: int
    defense: int
    speed: int
    crit_rate: float
    crit_damage: float

    def to_combatant(self) -> CombatantState:
        """Create a full-health enemy snapshot."""
        return CombatantState(
            id=self.slug,
            name=self.name,
            level=self.level,
            kind=CombatantKind.ENEMY,
            attributes=CombatantAttributes(
                max_health=self.max_health,
                attack=self.attack,
                defense=self.defense,
                speed=self.speed,
                crit_rate=self.crit_rate,
                crit_damage=self.crit_damage,
            ),
            current_health=self.max_health,
        )


@dataclass(frozen=True)
class CharacterTemplate:
    """Playable character with level-1 base stats."""

    slug: str
    name: str
    base_health: int
    base_attack: int
    base_defense: int
    base_speed: int
    base_crit_rate: float
    base_crit_damage: float


ENCOUNTERS: dict[str, EncounterTemplate] = {
    "training-drone": EncounterTemplate(
        slug="training-drone",
        name="Training Drone",
        level=2,
        max_health=90,
        attack=22,
        defense=18,
        speed=12,
        crit_rate=0.08,
        crit_damage=0.35,
    ),
    "echo-warlord": EncounterTemplate(
        slug="echo-warlord",
        name="Echo Warlord",
        level=5,
        max_health=180,
        attack=42,
        defense=28,
        speed=16,
        crit_rate=0.12,
        crit_damage=0.6,
    ),
}

DEFAULT_CHARACTER = CharacterTemplate(
    slug="operative",
    name="Operative",
    base_health=92,
    base_attack=26,
    base_defense=15,
    base_speed=11,
    base_crit_rate=0.12,
    base_crit_damage=0.5,
)


def get_encounter(slug: str) -> EncounterTemplate:
    """Look up an encounter by slug.

    Raises:
        EncounterNotFoundError: If no encounter has this slug
    """
    encounter = ENCOUNTERS.get(slug)
    if encounter is None:
        raise EncounterNotFoundError(f"Encounter {slug} not found")
    return encounter


def scaling_factor(level: int) -> float:
    """Stat multiplier for a level: +15% per level above 1."""
    return 1 + (level - 1) * LEVEL_SCALING_PER_LEVEL


def create_combatant(character: CharacterTemplate, kind: CombatantKind, level: int = 3) -> CombatantState:
    """Scale a character's base stats to a level and build a full-health snapshot.

    Crit stats do not scale with level.
    """
    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}")

    factor = scaling_factor(level)
    max_health = round_half_up(character.base_health * factor)
    return CombatantState(
        id=character.slug,
        name=character.name,
        level=level,
        kind=kind,
        attributes=CombatantAttributes(
            max_health=max_health,
            attack=round_half_up(character.base_attack * factor),
            defense=round_half_up(character.base_defense * factor),
            speed=round_half_up(character.base_speed * factor),
            crit_rate=character.base_crit_rate,
            crit_damage=character.base_crit_damage,
        ),
        current_health=max_health,
    )
