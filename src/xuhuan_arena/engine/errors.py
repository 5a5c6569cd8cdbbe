"""Battle engine exceptions."""

from .enums import MoveKind


class BattleEngineError(Exception):
    """Base class for battle engine errors."""


class BattleAlreadyResolvedError(BattleEngineError):
    """Raised when a turn is requested on a battle that has already ended."""

    def __init__(self, outcome: str) -> None:
        super().__init__(f"Battle is already over ({outcome}), no further turns can be resolved")
        self.outcome = outcome


class InsufficientMeterError(BattleEngineError):
    """Raised in strict mode when a move costs more meter than is available."""

    def __init__(self, move: MoveKind, cost: int, available: int) -> None:
        super().__init__(f"{move.value} costs {cost} meter, only {available} available")
        self.move = move
        self.cost = cost
        self.available = available
