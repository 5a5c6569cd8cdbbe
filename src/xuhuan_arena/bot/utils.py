"""Bot utilities - handler decorators and Telegram update helpers."""

import functools
import logging
from typing import Any, Callable

from aiogram import types
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import CallbackQuery, Message

logger = logging.getLogger("xuhuan_arena.bot")

# Bad requests that only mean the user was faster than the bot
IGNORED_BAD_REQUESTS = (
    "query is too old",
    "message is not modified",
)

ERROR_REPLY = "The arena stumbled. Please try again in a moment."

Update = Message | CallbackQuery


def find_update(args: tuple[Any, ...]) -> Update | None:
    """Pick the Message or CallbackQuery out of a handler's arguments."""
    return next((arg for arg in args if isinstance(arg, (Message, CallbackQuery))), None)


def describe_update(update: Update | None) -> tuple[int | None, int | None]:
    """Return (user_id, chat_id) for an update; either may be unknown."""
    if isinstance(update, Message):
        return (update.from_user.id if update.from_user else None), update.chat.id
    if isinstance(update, CallbackQuery):
        return update.from_user.id, (update.message.chat.id if update.message else None)
    return None, None


def is_ignorable(error: TelegramBadRequest) -> bool:
    text = str(error).lower()
    return any(reason in text for reason in IGNORED_BAD_REQUESTS)


async def notify_failure(update: Update | None) -> None:
    """Tell the user their action failed. Delivery problems are only logged."""
    try:
        if isinstance(update, Message):
            await update.reply(ERROR_REPLY)
        elif isinstance(update, CallbackQuery):
            await update.answer(ERROR_REPLY, show_alert=True)
    except TelegramBadRequest as e:
        if not is_ignorable(e):
            logger.exception("Could not deliver error reply")
    except Exception:
        logger.exception("Could not deliver error reply")


def safe_handler(func: Callable) -> Callable:
    """Decorator that keeps handler failures away from the dispatcher.

    Stale-button and no-op edit errors are dropped quietly. Anything else is
    logged with the user and chat it came from, and the user gets a short
    apology instead of silence.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except TelegramBadRequest as e:
            if not is_ignorable(e):
                raise
            logger.debug(f"{func.__name__}: ignored bad request ({e})")
            return None
        except Exception as e:
            update = find_update(args)
            user_id, chat_id = describe_update(update)
            logger.exception(
                f"{func.__name__} failed for user {user_id}: {e}",
                extra={"user_id": user_id, "chat_id": chat_id, "handler": func.__name__},
            )
            await notify_failure(update)
            return None

    return wrapper


def _log_update(kind: str, name: str, update_type: type) -> Callable:
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            update = find_update(args)
            if isinstance(update, update_type):
                user_id, chat_id = describe_update(update)
                username = update.from_user.username if update.from_user else None
                logger.info(f"{kind} {name} from user {user_id} (@{username}) in chat {chat_id}")
            return await func(*args, **kwargs)

        return wrapper

    return decorator


def log_command(command: str) -> Callable:
    """Decorator logging each use of a command, e.g. log_command("/fight")."""
    return _log_update("Command", command, Message)


def log_callback(action: str) -> Callable:
    """Decorator logging each press of an inline button, e.g. log_callback("battle_move")."""
    return _log_update("Callback", action, CallbackQuery)


def validate_message_user(message: Message) -> bool:
    return message.from_user is not None and message.from_user.id is not None


def validate_callback_message(callback: CallbackQuery) -> bool:
    return callback.message is not None


def get_display_name(user: types.User | None) -> str:
    """Name to show for a fighter: full name, then @username, then the numeric id."""
    if user is None:
        return "Unknown"
    return user.full_name or (f"@{user.username}" if user.username else f"User {user.id}")
