"""Player service - accumulates battle rewards per Telegram user."""

import logging
from dataclasses import dataclass, field

from ..engine.enums import BattleOutcome
from ..engine.types import RewardDrop
from ..schemas import BattleResolvePayload

logger = logging.getLogger(__name__)


@dataclass
class PlayerProgress:
    """Running totals for one player."""

    telegram_user_id: int
    display_name: str
    experience: int = 0
    credits: int = 0
    victories: int = 0
    defeats: int = 0
    inventory: dict[str, int] = field(default_factory=dict)  # drop name -> quantity

    @property
    def battles_played(self) -> int:
        return self.victories + self.defeats


class PlayerService:
    """Service for player progress.

    Like battle sessions, progress lives in memory for the lifetime of the
    bot process.
    """

    def __init__(self) -> None:
        self._players: dict[int, PlayerProgress] = {}

    def get_player(self, telegram_user_id: int) -> PlayerProgress | None:
        """Get a player's progress, if they have any."""
        return self._players.get(telegram_user_id)

    def get_or_create_player(self, telegram_user_id: int, display_name: str) -> PlayerProgress:
        """Get existing progress or start a fresh record.

        Args:
            telegram_user_id: Telegram user ID
            display_name: Display name from Telegram

        Returns:
            PlayerProgress instance
        """
        player = self._players.get(telegram_user_id)
        if player:
            # Update display name if changed
            if player.display_name != display_name:
                player.display_name = display_name
            return player

        player = PlayerProgress(telegram_user_id=telegram_user_id, display_name=display_name)
        self._players[telegram_user_id] = player
        return player

    def apply_battle(
        self,
        telegram_user_id: int,
        display_name: str,
        payload: BattleResolvePayload,
        drops: tuple[RewardDrop, ...] = (),
    ) -> PlayerProgress:
        """Credit a finished battle to the player.

        Args:
            telegram_user_id: Telegram user ID
            display_name: Display name from Telegram
            payload: Result of the finished battle
            drops: Items dropped on victory

        Returns:
            Updated PlayerProgress
        """
        player = self.get_or_create_player(telegram_user_id, display_name)

        if payload.outcome == BattleOutcome.VICTORY:
            player.victories += 1
        elif payload.outcome == BattleOutcome.DEFEAT:
            player.defeats += 1
        else:
            raise ValueError(f"Cannot apply a battle that is still {payload.outcome.value}")

        player.experience += payload.rewards.experience
        player.credits += payload.rewards.credits
        for drop in drops:
            player.inventory[drop.name] = player.inventory.get(drop.name, 0) + drop.quantity

        logger.info(
            f"Player {telegram_user_id} credited {payload.rewards.experience} XP, {payload.rewards.credits} credits "
            f"(now {player.experience} XP, {player.credits} credits)"
        )
        return player
