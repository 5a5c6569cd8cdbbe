"""Battle handlers - /fight, /battle, /abandon commands and move selection."""

import html

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message

from ...engine.enums import BattleOutcome, MoveKind
from ...engine.moves import FIGHTING_MOVES, can_afford, get_move_properties
from ...engine.types import BattleLogEntry, BattleState, CombatantState, RewardBundle
from ...services.battles import BattleResult, BattleService
from ...services.encounters import ENCOUNTERS
from ..utils import (
    get_display_name,
    log_callback,
    log_command,
    safe_handler,
    validate_callback_message,
    validate_message_user,
)

router = Router(name="battles")

# Callback data prefixes
MOVE_PREFIX = "battle_move:"
ABANDON_BATTLE = "battle_abandon"

HEALTH_BAR_WIDTH = 10

MOVE_ICONS = {
    MoveKind.LIGHT_ATTACK: "👊",
    MoveKind.HEAVY_ATTACK: "💥",
    MoveKind.SPECIAL_MOVE: "⚡",
    MoveKind.COUNTER: "🔄",
    MoveKind.BLOCK: "🛡️",
}

RARITY_NAMES = {"common": "Common", "rare": "Rare", "epic": "Epic"}


def format_health_bar(current: int, maximum: int, width: int = HEALTH_BAR_WIDTH) -> str:
    """Render health as a fixed-width bar; any health left shows at least one block."""
    if maximum <= 0 or current <= 0:
        filled = 0
    else:
        filled = min(width, -(-current * width // maximum))
    return "█" * filled + "░" * (width - filled)


def format_combatant(combatant: CombatantState) -> str:
    """Format one side's HUD."""
    max_health = combatant.attributes.max_health
    lines = [
        f"<b>{html.escape(combatant.name)}</b> (Lv.{combatant.level})",
        f"HP {format_health_bar(combatant.current_health, max_health)} {combatant.current_health}/{max_health}",
        f"Meter: {combatant.special_meter}/100",
    ]

    if combatant.combo_count > 0:
        lines.append(f"🔥 Combo x{combatant.combo_count}")
    if combatant.is_blocking:
        lines.append("🛡️ Blocking")
    if combatant.status_effects:
        effects = ", ".join(f"{html.escape(e.name)} ({e.duration})" for e in combatant.status_effects)
        lines.append(f"Effects: {effects}")

    return "\n".join(lines)


def format_battle_state(state: BattleState) -> str:
    """Format the battle HUD for display."""
    return "\n".join(
        [
            f"<b>⚔️ Turn {state.turn}</b>",
            "",
            format_combatant(state.hero),
            "",
            "<i>vs</i>",
            "",
            format_combatant(state.enemy),
        ]
    )


def format_events(events: tuple[BattleLogEntry, ...]) -> str:
    """Format the log entries produced by one turn."""
    if not events:
        return ""

    lines = [f"\n<b>📜 Turn {events[0].turn}:</b>"]
    for entry in events:
        lines.append(f"• {html.escape(entry.description)}")
    return "\n".join(lines)


def format_rewards(rewards: RewardBundle | None) -> str:
    """Format a reward bundle."""
    if rewards is None:
        return "No rewards."

    lines = [
        "<b>🎁 Rewards</b>",
        f"Experience: +{rewards.experience}",
        f"Credits: +{rewards.credits}",
    ]
    for drop in rewards.drops:
        rarity = RARITY_NAMES.get(drop.rarity.value, drop.rarity.value)
        lines.append(f"{html.escape(drop.name)} x{drop.quantity} ({rarity})")
    return "\n".join(lines)


def format_outcome(state: BattleState) -> str:
    """Format the end-of-battle message."""
    if state.outcome == BattleOutcome.VICTORY:
        return f"<b>🏆 Victory!</b> {html.escape(state.enemy.name)} is defeated.\n\n{format_rewards(state.rewards)}"
    if state.outcome == BattleOutcome.DEFEAT:
        return f"<b>💀 Defeat.</b> {html.escape(state.enemy.name)} wins this time."
    return ""


def get_move_keyboard(special_meter: int) -> InlineKeyboardMarkup:
    """Create move selection keyboard; moves the fighter cannot afford are marked locked."""

    def button(move: MoveKind) -> InlineKeyboardButton:
        properties = get_move_properties(move)
        label = f"{MOVE_ICONS[move]} {properties.display_name}"
        if properties.meter_cost:
            label += f" ({properties.meter_cost})"
        if not can_afford(move, special_meter):
            label = f"🔒 {label}"
        return InlineKeyboardButton(text=label, callback_data=f"{MOVE_PREFIX}{move.value}")

    buttons = [button(move) for move in FIGHTING_MOVES]
    rows = [buttons[i : i + 2] for i in range(0, len(buttons), 2)]
    rows.append([InlineKeyboardButton(text="🏳️ Abandon", callback_data=ABANDON_BATTLE)])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def parse_move(callback_data: str) -> MoveKind | None:
    """Parse move callback data: battle_move:{move}. Only fighting moves are accepted."""
    if not callback_data.startswith(MOVE_PREFIX):
        return None
    try:
        move = MoveKind(callback_data[len(MOVE_PREFIX) :])
    except ValueError:
        return None
    return move if move in FIGHTING_MOVES else None


def format_turn_message(result: BattleResult) -> str:
    """Format the message shown after a resolved turn."""
    state = result.state
    if state is None:
        return result.message

    parts = [format_battle_state(state), format_events(result.events)]
    if state.is_terminal:
        parts.append("\n" + format_outcome(state))
    if result.progress is not None:
        parts.append(f"\nTotal: {result.progress.experience} XP, {result.progress.credits} credits. See /profile")
    return "\n".join(part for part in parts if part)


@router.message(Command("fight"))
@safe_handler
@log_command("/fight")
async def cmd_fight(message: Message, command: CommandObject, battle_service: BattleService) -> None:
    """Start a battle: /fight [encounter]."""
    if not validate_message_user(message):
        return

    slug = command.args.strip() if command.args else None
    if slug and slug not in ENCOUNTERS:
        available = ", ".join(f"<code>{s}</code>" for s in ENCOUNTERS)
        await message.answer(f"Unknown encounter. Available: {available}")
        return

    result = await battle_service.start_battle(
        user_id=message.from_user.id,
        display_name=get_display_name(message.from_user),
        encounter_slug=slug,
    )

    if not result.success or result.state is None:
        await message.answer(html.escape(result.message))
        return

    await message.answer(
        f"<b>{html.escape(result.message)}</b>\n\n{format_battle_state(result.state)}",
        reply_markup=get_move_keyboard(result.state.hero.special_meter),
    )


@router.message(Command("battle"))
@safe_handler
@log_command("/battle")
async def cmd_battle(message: Message, battle_service: BattleService) -> None:
    """Show the current battle again."""
    if not validate_message_user(message):
        return

    state = battle_service.get_battle(message.from_user.id)
    if state is None:
        await message.answer("You are not in a battle. Use /fight to start one.")
        return

    await message.answer(
        format_battle_state(state),
        reply_markup=get_move_keyboard(state.hero.special_meter),
    )


@router.callback_query(F.data.startswith(MOVE_PREFIX))
@safe_handler
@log_callback("battle_move")
async def callback_battle_move(callback: CallbackQuery, battle_service: BattleService) -> None:
    """Handle move selection button."""
    if not callback.data or not validate_callback_message(callback):
        return

    move = parse_move(callback.data)
    if move is None:
        await callback.answer("Unknown move.", show_alert=True)
        return

    result = await battle_service.submit_move(callback.from_user.id, move)
    if not result.success:
        await callback.answer(result.message, show_alert=True)
        return

    await callback.answer()

    state = result.state
    reply_markup = None if state is None or state.is_terminal else get_move_keyboard(state.hero.special_meter)
    await callback.message.edit_text(format_turn_message(result), reply_markup=reply_markup)


@router.callback_query(F.data == ABANDON_BATTLE)
@safe_handler
@log_callback("battle_abandon")
async def callback_abandon_battle(callback: CallbackQuery, battle_service: BattleService) -> None:
    """Handle the abandon button."""
    if not validate_callback_message(callback):
        return

    result = await battle_service.abandon_battle(callback.from_user.id)
    if not result.success:
        await callback.answer(result.message, show_alert=True)
        return

    await callback.answer()
    await callback.message.edit_text(html.escape(result.message), reply_markup=None)


@router.message(Command("abandon"))
@safe_handler
@log_command("/abandon")
async def cmd_abandon(message: Message, battle_service: BattleService) -> None:
    """Leave the current battle without rewards."""
    if not validate_message_user(message):
        return

    result = await battle_service.abandon_battle(message.from_user.id)
    await message.answer(html.escape(result.message))
