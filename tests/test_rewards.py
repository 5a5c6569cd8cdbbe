"""Tests for outcome detection and rewards."""

from dataclasses import replace

import pytest
from conftest import FixedRandom

from xuhuan_arena.engine.enums import BattleOutcome, DropRarity
from xuhuan_arena.engine.rewards import create_rewards, drop_chance, evaluate_outcome, roll_drops
from xuhuan_arena.engine.rng import SeededRandom


class TestDrops:
    """Tests for reward drops."""

    def test_drop_chance_scales_with_level(self):
        """Test chance is 15% plus 2% per level."""
        assert drop_chance(1) == pytest.approx(0.17)
        assert drop_chance(2) == pytest.approx(0.19)
        assert drop_chance(5) == pytest.approx(0.25)

    def test_failed_roll_drops_nothing(self, enemy):
        """Test a roll above the chance gives no drop and no rarity draw."""
        rng = FixedRandom([0.5])

        assert roll_drops(enemy, rng) == ()
        assert rng.cursor == 1

    @pytest.mark.parametrize(
        "rarity_roll,rarity,quantity",
        [
            (0.9, DropRarity.EPIC, 1),
            (0.6, DropRarity.RARE, 2),
            (0.2, DropRarity.COMMON, 3),
            (0.85, DropRarity.RARE, 2),
            (0.55, DropRarity.COMMON, 3),
        ],
    )
    def test_rarity_tiers(self, enemy, rarity_roll, rarity, quantity):
        """Test the rarity roll picks the tier and quantity."""
        drops = roll_drops(enemy, FixedRandom([0.05, rarity_roll]))

        assert len(drops) == 1
        assert drops[0].rarity == rarity
        assert drops[0].quantity == quantity

    def test_drop_named_after_defeated(self, enemy):
        """Test the drop is the defeated combatant's core."""
        drops = roll_drops(enemy, FixedRandom([0.0, 0.0]))

        assert drops[0].id == "drone-1-core"
        assert drops[0].name == "Training Drone Core"


class TestCreateRewards:
    """Tests for the reward bundle."""

    def test_experience_and_credits_scale_with_level(self, enemy):
        """Test level 2 gives 36 experience and 24 credits."""
        rewards = create_rewards(enemy, FixedRandom([0.99]))

        assert rewards.experience == 36
        assert rewards.credits == 24
        assert rewards.drops == ()

    def test_higher_level(self, enemy):
        """Test level 5 gives 90 experience and 60 credits."""
        rewards = create_rewards(replace(enemy, level=5), FixedRandom([0.99]))

        assert rewards.experience == 90
        assert rewards.credits == 60


class TestEvaluateOutcome:
    """Tests for outcome detection."""

    def test_in_progress(self, context):
        """Test a battle with both sides alive is unchanged and takes no draws."""
        rng = SeededRandom("outcome")

        result = evaluate_outcome(context.state, rng)

        assert result is context.state
        assert rng.cursor == 0

    def test_victory(self, context):
        """Test enemy at zero health is a victory with rewards."""
        state = replace(context.state, enemy=replace(context.state.enemy, current_health=0))

        result = evaluate_outcome(state, SeededRandom("win"))

        assert result.outcome == BattleOutcome.VICTORY
        assert result.rewards is not None
        assert result.rewards.experience == 36

    def test_defeat(self, context):
        """Test hero at zero health is a defeat with no rewards and no draws."""
        state = replace(context.state, hero=replace(context.state.hero, current_health=0))
        rng = SeededRandom("lose")

        result = evaluate_outcome(state, rng)

        assert result.outcome == BattleOutcome.DEFEAT
        assert result.rewards is None
        assert rng.cursor == 0

    def test_both_down_is_victory(self, context):
        """Test enemy death is checked first."""
        state = replace(
            context.state,
            hero=replace(context.state.hero, current_health=0),
            enemy=replace(context.state.enemy, current_health=0),
        )

        result = evaluate_outcome(state, SeededRandom("both"))

        assert result.outcome == BattleOutcome.VICTORY

    def test_terminal_state_untouched(self, context):
        """Test a finished battle is never re-evaluated."""
        state = replace(
            context.state,
            enemy=replace(context.state.enemy, current_health=0),
            outcome=BattleOutcome.DEFEAT,
        )
        rng = SeededRandom("done")

        assert evaluate_outcome(state, rng) is state
        assert rng.cursor == 0
