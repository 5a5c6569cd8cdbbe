"""Enums for battle engine values."""

from enum import Enum


class CombatantKind(str, Enum):
    """Which side of the battle a combatant fights on."""

    HERO = "hero"  # Acting side, controlled by the player
    ENEMY = "enemy"  # Opposing side, retaliates automatically


class MoveKind(str, Enum):
    """Moves a combatant can perform on its turn."""

    # Fighting-game move set
    LIGHT_ATTACK = "light_attack"
    HEAVY_ATTACK = "heavy_attack"
    SPECIAL_MOVE = "special_move"  # Costs meter, bypasses block
    BLOCK = "block"
    COUNTER = "counter"  # Costs meter, bonus multiplier

    # Legacy action set (replay of old battle logs)
    BASIC_ATTACK = "basic_attack"
    CHARGED_STRIKE = "charged_strike"
    FORTIFY = "fortify"


class BattleOutcome(str, Enum):
    """Outcome of a battle."""

    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DEFEAT = "defeat"


class DropRarity(str, Enum):
    """Rarity tier of a reward drop."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
