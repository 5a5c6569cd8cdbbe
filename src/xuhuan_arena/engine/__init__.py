"""Battle engine module - seeded turn resolution, damage calculation and rewards."""

from .battle import (
    auto_resolve,
    create_battle_state,
    resolve_turn,
    restore_battle_context,
    update_battle_context,
)
from .damage import calculate_damage
from .enums import BattleOutcome, CombatantKind, DropRarity, MoveKind
from .errors import BattleAlreadyResolvedError, BattleEngineError, InsufficientMeterError
from .logging import CombatLog, CombatLogger, LogEntry, LogEventType, StateSnapshot
from .moves import FIGHTING_MOVES, MoveProperties, get_move_properties
from .rewards import create_rewards, evaluate_outcome
from .rng import RandomSnapshot, SeededRandom, create_seeded_random
from .turn import TurnResolver
from .types import (
    BattleContext,
    BattleLogEntry,
    BattleState,
    CombatantAttributes,
    CombatantState,
    DamageResult,
    RewardBundle,
    RewardDrop,
    StatusEffect,
    TurnResolution,
)

__all__ = [
    "auto_resolve",
    "create_battle_state",
    "resolve_turn",
    "restore_battle_context",
    "update_battle_context",
    "calculate_damage",
    "create_rewards",
    "evaluate_outcome",
    "create_seeded_random",
    "get_move_properties",
    "FIGHTING_MOVES",
    "MoveProperties",
    "TurnResolver",
    "SeededRandom",
    "RandomSnapshot",
    "BattleOutcome",
    "CombatantKind",
    "DropRarity",
    "MoveKind",
    "BattleEngineError",
    "BattleAlreadyResolvedError",
    "InsufficientMeterError",
    "BattleContext",
    "BattleLogEntry",
    "BattleState",
    "CombatantAttributes",
    "CombatantState",
    "DamageResult",
    "RewardBundle",
    "RewardDrop",
    "StatusEffect",
    "TurnResolution",
    "CombatLogger",
    "CombatLog",
    "LogEntry",
    "LogEventType",
    "StateSnapshot",
]
