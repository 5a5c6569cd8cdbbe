"""Bot application setup and dispatcher."""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from xuhuan_arena.config import get_settings
from xuhuan_arena.services.battles import BattleService


def create_bot() -> Bot:
    """Create and configure the Telegram bot instance."""
    settings = get_settings()
    if not settings.bot_token:
        raise ValueError("BOT_TOKEN is not set")
    return Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )


def create_dispatcher(battle_service: BattleService | None = None) -> Dispatcher:
    """Create and configure the dispatcher with routers.

    The battle service and the player service it credits are shared by all
    handlers through dispatcher workflow data.
    """
    from xuhuan_arena.bot.handlers import battles_router, common_router

    battle_service = battle_service or BattleService()

    dp = Dispatcher()
    dp["battle_service"] = battle_service
    dp["player_service"] = battle_service.players
    dp.include_router(common_router)
    dp.include_router(battles_router)
    return dp
