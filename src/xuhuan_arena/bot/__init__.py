"""Telegram bot front end for arena battles."""
