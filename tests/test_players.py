"""Tests for player progress."""

import pytest

from xuhuan_arena.engine.enums import BattleOutcome, DropRarity
from xuhuan_arena.engine.types import RewardDrop
from xuhuan_arena.schemas import BattleResolvePayload, RewardsPayload
from xuhuan_arena.services.players import PlayerService


def victory(experience: int = 30, credits: int = 12) -> BattleResolvePayload:
    return BattleResolvePayload(
        run_id="run-1",
        outcome=BattleOutcome.VICTORY,
        rewards=RewardsPayload(experience=experience, credits=credits),
    )


@pytest.fixture
def players() -> PlayerService:
    return PlayerService()


class TestGetOrCreate:
    """Tests for looking up player records."""

    def test_unknown_player(self, players: PlayerService):
        """Test a player with no battles has no record."""
        assert players.get_player(42) is None

    def test_create_starts_at_zero(self, players: PlayerService):
        """Test a new record starts with empty totals."""
        player = players.get_or_create_player(42, "Ari")

        assert player.experience == 0
        assert player.credits == 0
        assert player.battles_played == 0
        assert players.get_player(42) is player

    def test_display_name_refreshed(self, players: PlayerService):
        """Test a renamed user keeps their totals under the new name."""
        players.apply_battle(42, "Ari", victory())

        player = players.get_or_create_player(42, "Ari the Bold")

        assert player.display_name == "Ari the Bold"
        assert player.experience == 30


class TestApplyBattle:
    """Tests for crediting finished battles."""

    def test_victory_adds_rewards(self, players: PlayerService):
        """Test rewards accumulate across victories."""
        players.apply_battle(42, "Ari", victory(30, 12))
        player = players.apply_battle(42, "Ari", victory(20, 8))

        assert player.experience == 50
        assert player.credits == 20
        assert player.victories == 2
        assert player.defeats == 0

    def test_defeat_counts_without_rewards(self, players: PlayerService):
        """Test a defeat is recorded but credits nothing."""
        player = players.apply_battle(42, "Ari", BattleResolvePayload(outcome=BattleOutcome.DEFEAT))

        assert player.defeats == 1
        assert player.experience == 0
        assert player.credits == 0

    def test_drops_stack_in_inventory(self, players: PlayerService):
        """Test repeated drops of one item add up."""
        core = RewardDrop(id="core", name="Echo Core", rarity=DropRarity.RARE, quantity=1)

        players.apply_battle(42, "Ari", victory(), drops=(core,))
        player = players.apply_battle(42, "Ari", victory(), drops=(core,))

        assert player.inventory == {"Echo Core": 2}

    def test_unfinished_battle_rejected(self, players: PlayerService):
        """Test a battle still in progress cannot be credited."""
        with pytest.raises(ValueError):
            players.apply_battle(42, "Ari", BattleResolvePayload(outcome=BattleOutcome.IN_PROGRESS))

        assert players.get_player(42).battles_played == 0

    def test_players_are_separate(self, players: PlayerService):
        """Test rewards go only to the player who won."""
        players.apply_battle(1, "One", victory())

        assert players.get_or_create_player(2, "Two").experience == 0
