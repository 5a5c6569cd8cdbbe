"""Damage model - computes the outcome of a single strike."""

import math
from dataclasses import replace

from .enums import MoveKind
from .moves import COUNTER_MULTIPLIER, get_move_properties
from .rng import SeededRandom
from .types import CombatantAttributes, CombatantState, DamageResult, StatusEffect

DAMAGE_VARIATION_MIN = 0.85
DAMAGE_VARIATION_SPAN = 0.3
DEFENSE_WEIGHT = 0.6
CRIT_MULTIPLIER_BASE = 1.5
BLOCK_DAMAGE_FACTOR = 0.3
MIN_DAMAGE = 1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (like Math.round)."""
    return math.floor(value + 0.5)


def apply_status_modifiers(
    attributes: CombatantAttributes,
    effects: tuple[StatusEffect, ...],
) -> CombatantAttributes:
    """Get effective attributes with all status effect modifiers summed in.

    Only attack, defense and speed are affected; health and crit stats are not.
    """
    if not effects:
        return attributes
    return replace(
        attributes,
        attack=attributes.attack + sum(effect.attack_modifier for effect in effects),
        defense=attributes.defense + sum(effect.defense_modifier for effect in effects),
        speed=attributes.speed + sum(effect.speed_modifier for effect in effects),
    )


def calculate_damage(
    attacker: CombatantState,
    defender: CombatantState,
    rng: SeededRandom,
    move: MoveKind,
    is_counter: bool = False,
) -> DamageResult:
    """Calculate the damage of one strike.

    Draws exactly two values from the generator: the variance roll, then the
    critical roll. Inputs are never modified.

    Args:
        attacker: Combatant performing the move
        defender: Combatant receiving it
        rng: Battle generator
        move: Move being performed
        is_counter: Apply the counter multiplier on top of the move's own

    Returns:
        DamageResult with the final amount (always >= 1)
    """
    attacker_attributes = apply_status_modifiers(attacker.attributes, attacker.status_effects)
    defender_attributes = apply_status_modifiers(defender.attributes, defender.status_effects)

    variation = DAMAGE_VARIATION_MIN + rng.next_float() * DAMAGE_VARIATION_SPAN

    multiplier = get_move_properties(move).damage_multiplier
    if is_counter:
        multiplier *= COUNTER_MULTIPLIER

    defense_mitigation = defender_attributes.defense * DEFENSE_WEIGHT
    damage = max(MIN_DAMAGE, (attacker_attributes.attack * multiplier - defense_mitigation) * variation)

    is_critical = rng.next_float() < attacker_attributes.crit_rate
    if is_critical:
        damage *= CRIT_MULTIPLIER_BASE + attacker_attributes.crit_damage

    # Specials go through a raised guard
    was_blocked = defender.is_blocking and move != MoveKind.SPECIAL_MOVE
    if was_blocked:
        damage *= BLOCK_DAMAGE_FACTOR

    return DamageResult(
        amount=max(MIN_DAMAGE, round_half_up(damage)),
        is_critical=is_critical,
        was_blocked=was_blocked,
    )
