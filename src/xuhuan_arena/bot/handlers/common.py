"""Common bot handlers - /start, /help, /profile commands."""

import html

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from ...engine.moves import FIGHTING_MOVES, get_move_properties
from ...services.encounters import ENCOUNTERS
from ...services.players import PlayerProgress, PlayerService
from ..utils import get_display_name, log_command, safe_handler, validate_message_user

router = Router(name="common")


def format_move_list() -> str:
    """List the fighting moves with their meter costs."""
    lines = []
    for move in FIGHTING_MOVES:
        properties = get_move_properties(move)
        cost = f" - costs {properties.meter_cost} meter" if properties.meter_cost else ""
        lines.append(f" {properties.display_name}{cost}")
    return "\n".join(lines)


def format_encounter_list() -> str:
    """List the available encounters."""
    return "\n".join(
        f" <code>{slug}</code> - {html.escape(encounter.name)} (Lv.{encounter.level})"
        for slug, encounter in ENCOUNTERS.items()
    )


def format_profile(player: PlayerProgress) -> str:
    """Format a player's running totals."""
    lines = [
        f"<b>{html.escape(player.display_name)}</b>",
        "",
        f"Experience: {player.experience}",
        f"Credits: {player.credits}",
        f"Battles: {player.battles_played} ({player.victories} won, {player.defeats} lost)",
    ]
    if player.inventory:
        lines.append("")
        lines.append("<b>Inventory</b>")
        for name, quantity in sorted(player.inventory.items()):
            lines.append(f" {html.escape(name)} x{quantity}")
    return "\n".join(lines)


@router.message(Command("start"))
@safe_handler
@log_command("/start")
async def cmd_start(message: Message) -> None:
    """Handle /start command."""
    name = html.escape(get_display_name(message.from_user))
    await message.answer(
        f"<b>Welcome to Xuhuan Arena, {name}!</b>\n\n"
        "A turn-based arena where you trade blows with echo constructs.\n\n"
        "<b>Quick Start:</b>\n"
        " Use /fight to enter the arena\n"
        " Pick a move each turn; the enemy answers right away\n"
        " Win to earn experience, credits and sometimes a core drop\n\n"
        f"<b>Moves:</b>\n{format_move_list()}\n\n"
        "Use /help for detailed commands and tips!"
    )


@router.message(Command("help"))
@safe_handler
@log_command("/help")
async def cmd_help(message: Message) -> None:
    """Handle /help command."""
    await message.answer(format_help())


def format_help() -> str:
    """Build the /help text."""
    return (
        "<b>Xuhuan Arena Help</b>\n\n"
        "<b>Commands</b>\n"
        "/start - Welcome message\n"
        "/help - Show this help message\n"
        "/fight [encounter] - Start a battle\n"
        "/battle - Show your current battle\n"
        "/abandon - Leave your current battle\n"
        "/profile - Show your experience and credits\n\n"
        "<b>Encounters</b>\n"
        f"{format_encounter_list()}\n\n"
        "<b>Moves</b>\n"
        f"{format_move_list()}\n\n"
        "<b>Tips</b>\n"
        " Hitting builds your special meter; taking hits builds it too\n"
        " Blocking cuts incoming damage to 30%, but not a special move\n"
        " A move you cannot afford falls back to a light attack\n"
        " Landed hits build a combo; a blocked hit breaks it"
    )


@router.message(Command("profile"))
@safe_handler
@log_command("/profile")
async def cmd_profile(message: Message, player_service: PlayerService) -> None:
    """Handle /profile command."""
    if not validate_message_user(message):
        await message.answer("Could not identify user. Please try again.")
        return

    player = player_service.get_or_create_player(message.from_user.id, get_display_name(message.from_user))
    await message.answer(format_profile(player))
