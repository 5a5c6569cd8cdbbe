"""Outcome detection and victory rewards."""

from dataclasses import replace

from .enums import BattleOutcome, DropRarity
from .rng import SeededRandom
from .types import BattleState, CombatantState, RewardBundle, RewardDrop

BASE_EXPERIENCE_PER_LEVEL = 18
BASE_CREDITS_PER_LEVEL = 12
DROP_BASE_CHANCE = 0.15
DROP_LEVEL_SCALING = 0.02

# (threshold, rarity, quantity), checked in order against the rarity roll
RARITY_TIERS: tuple[tuple[float, DropRarity, int], ...] = (
    (0.85, DropRarity.EPIC, 1),
    (0.55, DropRarity.RARE, 2),
)
FALLBACK_TIER = (DropRarity.COMMON, 3)


def drop_chance(level: int) -> float:
    """Probability that a defeated combatant of this level drops its core."""
    return DROP_BASE_CHANCE + level * DROP_LEVEL_SCALING


def roll_drops(defeated: CombatantState, rng: SeededRandom) -> tuple[RewardDrop, ...]:
    """Roll for the defeated combatant's core.

    Draws once for the chance and, only when it succeeds, once more for rarity.
    """
    if rng.next_float() > drop_chance(defeated.level):
        return ()

    rarity_roll = rng.next_float()
    rarity, quantity = FALLBACK_TIER
    for threshold, tier_rarity, tier_quantity in RARITY_TIERS:
        if rarity_roll > threshold:
            rarity, quantity = tier_rarity, tier_quantity
            break

    return (
        RewardDrop(
            id=f"{defeated.id}-core",
            name=f"{defeated.name} Core",
            rarity=rarity,
            quantity=quantity,
        ),
    )


def create_rewards(defeated: CombatantState, rng: SeededRandom) -> RewardBundle:
    """Compute the reward bundle for beating a combatant."""
    return RewardBundle(
        experience=defeated.level * BASE_EXPERIENCE_PER_LEVEL,
        credits=defeated.level * BASE_CREDITS_PER_LEVEL,
        drops=roll_drops(defeated, rng),
    )


def evaluate_outcome(state: BattleState, rng: SeededRandom) -> BattleState:
    """Check for victory or defeat and finalize the state if the battle is over.

    Enemy death is checked first, so a battle where both sides reach zero
    counts as a victory. Rewards are rolled only on the transition to victory.
    """
    if state.is_terminal:
        return state

    if not state.enemy.is_alive():
        return replace(
            state,
            outcome=BattleOutcome.VICTORY,
            rewards=create_rewards(state.enemy, rng),
        )

    if not state.hero.is_alive():
        return replace(state, outcome=BattleOutcome.DEFEAT, rewards=None)

    return state
