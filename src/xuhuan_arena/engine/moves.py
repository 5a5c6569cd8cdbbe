"""Move catalogue - multipliers, meter costs and log text for every move."""

from dataclasses import dataclass

from .enums import MoveKind
from .types import DamageResult

COUNTER_MULTIPLIER = 1.8


@dataclass(frozen=True)
class MoveProperties:
    """Static description of a move."""

    kind: MoveKind
    display_name: str
    damage_multiplier: float
    meter_cost: int  # Meter spent on use; 0 means the move builds meter instead
    hero_text: str  # Log text when the hero uses it, may reference {target}
    is_strike: bool = True  # False for moves that deal no damage
    is_legacy: bool = False


MOVE_PROPERTIES: dict[MoveKind, MoveProperties] = {
    MoveKind.LIGHT_ATTACK: MoveProperties(
        kind=MoveKind.LIGHT_ATTACK,
        display_name="Light Attack",
        damage_multiplier=0.8,
        meter_cost=0,
        hero_text="You jab {target} with a quick light attack.",
    ),
    MoveKind.HEAVY_ATTACK: MoveProperties(
        kind=MoveKind.HEAVY_ATTACK,
        display_name="Heavy Attack",
        damage_multiplier=1.5,
        meter_cost=0,
        hero_text="You wind up and slam {target} with a heavy attack.",
    ),
    MoveKind.SPECIAL_MOVE: MoveProperties(
        kind=MoveKind.SPECIAL_MOVE,
        display_name="Special Move",
        damage_multiplier=2.2,
        meter_cost=50,
        hero_text="You unleash your special move on {target}!",
    ),
    MoveKind.BLOCK: MoveProperties(
        kind=MoveKind.BLOCK,
        display_name="Block",
        damage_multiplier=0.0,
        meter_cost=0,
        hero_text="You raise your guard and brace for the next blow.",
        is_strike=False,
    ),
    MoveKind.COUNTER: MoveProperties(
        kind=MoveKind.COUNTER,
        display_name="Counter",
        damage_multiplier=1.0,
        meter_cost=25,
        hero_text="You read {target}'s rhythm and punish with a counter.",
    ),
    MoveKind.BASIC_ATTACK: MoveProperties(
        kind=MoveKind.BASIC_ATTACK,
        display_name="Basic Attack",
        damage_multiplier=1.0,
        meter_cost=0,
        hero_text="You attack {target} with a swift strike.",
        is_legacy=True,
    ),
    MoveKind.CHARGED_STRIKE: MoveProperties(
        kind=MoveKind.CHARGED_STRIKE,
        display_name="Charged Strike",
        damage_multiplier=1.35,
        meter_cost=0,
        hero_text="You channel resonance and strike {target} with amplified force.",
        is_legacy=True,
    ),
    MoveKind.FORTIFY: MoveProperties(
        kind=MoveKind.FORTIFY,
        display_name="Fortify",
        damage_multiplier=0.0,
        meter_cost=0,
        hero_text="You brace for impact, restoring a portion of your guard.",
        is_strike=False,
        is_legacy=True,
    ),
}

# Moves offered to players, in keyboard order
FIGHTING_MOVES: tuple[MoveKind, ...] = (
    MoveKind.LIGHT_ATTACK,
    MoveKind.HEAVY_ATTACK,
    MoveKind.SPECIAL_MOVE,
    MoveKind.COUNTER,
    MoveKind.BLOCK,
)


def get_move_properties(move: MoveKind) -> MoveProperties:
    """Look up the properties of a move."""
    return MOVE_PROPERTIES[move]


def can_afford(move: MoveKind, special_meter: int) -> bool:
    """Check whether a combatant with this much meter can pay for a move."""
    return special_meter >= MOVE_PROPERTIES[move].meter_cost


def describe_hero_move(move: MoveKind, target_name: str, damage: DamageResult | None = None) -> str:
    """Build the log line for a move performed by the hero."""
    text = MOVE_PROPERTIES[move].hero_text.format(target=target_name)
    if damage is None:
        return text
    return f"{text} {_describe_damage(damage)}"


def describe_enemy_move(move: MoveKind, enemy_name: str, damage: DamageResult) -> str:
    """Build the log line for an enemy retaliation."""
    display = MOVE_PROPERTIES[move].display_name.lower()
    return f"{enemy_name} retaliates with a {display}. {_describe_damage(damage)}"


def _describe_damage(damage: DamageResult) -> str:
    suffix = ""
    if damage.is_critical:
        suffix += " Critical hit!"
    if damage.was_blocked:
        suffix += " The blow was blocked."
    return f"{damage.amount} damage.{suffix}"
