"""Combatant state transitions.

Every function returns a new CombatantState and leaves its input untouched;
callers thread the returned value forward.
"""

from dataclasses import replace

from .types import CombatantState, DamageResult

METER_MIN = 0
METER_MAX = 100
METER_GAIN_ON_DAMAGE = 10


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Clamp a value into [minimum, maximum]."""
    if value <= minimum:
        return minimum
    if value >= maximum:
        return maximum
    return value


def apply_damage(
    combatant: CombatantState,
    damage: DamageResult,
    meter_gain_on_damage: int = METER_GAIN_ON_DAMAGE,
) -> CombatantState:
    """Apply an incoming strike.

    Taking a hit builds meter. A hit that connects breaks the combatant's own
    combo; a blocked hit keeps it. The guard is used up either way.
    """
    return replace(
        combatant,
        current_health=clamp(combatant.current_health - damage.amount, 0, combatant.attributes.max_health),
        special_meter=clamp(combatant.special_meter + meter_gain_on_damage, METER_MIN, METER_MAX),
        combo_count=combatant.combo_count if damage.was_blocked else 0,
        is_blocking=False,
    )


def heal(combatant: CombatantState, amount: int) -> CombatantState:
    """Restore health, capped at max health."""
    return replace(
        combatant,
        current_health=clamp(combatant.current_health + amount, 0, combatant.attributes.max_health),
    )


def tick_status_effects(combatant: CombatantState) -> CombatantState:
    """Count down every status effect by one turn and drop the expired ones."""
    if not combatant.status_effects:
        return combatant
    remaining = tuple(
        replace(effect, duration=effect.duration - 1)
        for effect in combatant.status_effects
        if effect.duration - 1 > 0
    )
    return replace(combatant, status_effects=remaining)


def gain_meter(combatant: CombatantState, delta: int) -> CombatantState:
    """Add (or with a negative delta, spend) special meter."""
    return replace(
        combatant,
        special_meter=clamp(combatant.special_meter + delta, METER_MIN, METER_MAX),
    )


def increment_combo(combatant: CombatantState) -> CombatantState:
    return replace(combatant, combo_count=combatant.combo_count + 1)


def reset_combo(combatant: CombatantState) -> CombatantState:
    return replace(combatant, combo_count=0)


def set_blocking(combatant: CombatantState, flag: bool = True) -> CombatantState:
    return replace(combatant, is_blocking=flag)
