"""Xuhuan Arena - seeded turn-based battles for a Telegram mini-game."""

__version__ = "0.1.0"
