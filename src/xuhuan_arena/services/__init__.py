"""Service layer for game logic."""

from .battles import BattleResult, BattleService, BattleSession
from .encounters import (
    ENCOUNTERS,
    CharacterTemplate,
    EncounterNotFoundError,
    EncounterTemplate,
    create_combatant,
    get_encounter,
)
from .players import PlayerProgress, PlayerService

__all__ = [
    "BattleService",
    "BattleSession",
    "BattleResult",
    "PlayerService",
    "PlayerProgress",
    "ENCOUNTERS",
    "CharacterTemplate",
    "EncounterTemplate",
    "EncounterNotFoundError",
    "create_combatant",
    "get_encounter",
]
