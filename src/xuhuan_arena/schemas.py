"""Validation schemas for combatant snapshots and battle results.

The persistence layer speaks camelCase JSON; these models accept either
camelCase or snake_case keys and convert to and from engine types.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .engine.enums import BattleOutcome, CombatantKind
from .engine.types import BattleState, CombatantAttributes, CombatantState, StatusEffect


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Incoming snapshots
# =============================================================================


class CombatantAttributesPayload(_CamelModel):
    """Level-scaled base stats."""

    max_health: int = Field(ge=1, description="Maximum health")
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    speed: int = Field(ge=0)
    crit_rate: float = Field(ge=0.0, le=1.0, description="Chance of a critical hit")
    crit_damage: float = Field(ge=0.0, description="Bonus added to the 1.5x critical multiplier")

    def to_attributes(self) -> CombatantAttributes:
        return CombatantAttributes(
            max_health=self.max_health,
            attack=self.attack,
            defense=self.defense,
            speed=self.speed,
            crit_rate=self.crit_rate,
            crit_damage=self.crit_damage,
        )


class StatusEffectPayload(_CamelModel):
    """Status effect attached by the surrounding game."""

    id: str
    name: str
    duration: int = Field(ge=1, description="Remaining turns")
    attack_modifier: int = 0
    defense_modifier: int = 0
    speed_modifier: int = 0

    def to_effect(self) -> StatusEffect:
        return StatusEffect(
            id=self.id,
            name=self.name,
            duration=self.duration,
            attack_modifier=self.attack_modifier,
            defense_modifier=self.defense_modifier,
            speed_modifier=self.speed_modifier,
        )


class CombatantSnapshotPayload(_CamelModel):
    """Combatant snapshot supplied at battle start."""

    id: str = Field(min_length=1)
    name: str
    level: int = Field(ge=1)
    kind: CombatantKind
    attributes: CombatantAttributesPayload
    current_health: int | None = Field(default=None, ge=0, description="Defaults to max health")
    status_effects: list[StatusEffectPayload] = Field(default_factory=list)
    special_meter: int = Field(default=0, ge=0, le=100)
    combo_count: int = Field(default=0, ge=0)
    is_blocking: bool = False

    def to_state(self) -> CombatantState:
        """Convert to an engine snapshot, clamping health to the maximum."""
        attributes = self.attributes.to_attributes()
        current_health = attributes.max_health if self.current_health is None else self.current_health
        return CombatantState(
            id=self.id,
            name=self.name,
            level=self.level,
            kind=self.kind,
            attributes=attributes,
            current_health=min(current_health, attributes.max_health),
            status_effects=tuple(effect.to_effect() for effect in self.status_effects),
            special_meter=self.special_meter,
            combo_count=self.combo_count,
            is_blocking=self.is_blocking,
        )


# =============================================================================
# Outgoing results
# =============================================================================


class RewardsPayload(_CamelModel):
    """Experience and credits credited to the player."""

    experience: int = Field(default=0, ge=0)
    credits: int = Field(default=0, ge=0)


class BattleResolvePayload(_CamelModel):
    """Body handed to the persistence layer once a battle has finished."""

    run_id: str | None = None
    outcome: BattleOutcome
    rewards: RewardsPayload = Field(default_factory=RewardsPayload)
    log: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: BattleState) -> "BattleResolvePayload":
        """Build the payload for a finished battle.

        Raises:
            ValueError: If the battle is still in progress
        """
        if not state.is_terminal:
            raise ValueError("Cannot build a resolve payload for a battle in progress")

        rewards = RewardsPayload()
        if state.rewards is not None:
            rewards = RewardsPayload(experience=state.rewards.experience, credits=state.rewards.credits)

        return cls(
            run_id=state.run_id,
            outcome=state.outcome,
            rewards=rewards,
            log=[entry.to_dict() for entry in state.log],
        )
