"""Combat trace logging for verifying the battle engine's behaviour.

Provides structured logging of turn internals:
- Turn boundaries with state snapshots
- Move downgrades and resolutions
- Damage, healing and guard changes with before/after state
- Status effect ticks
- Outcome determination

This trace is separate from the player-facing BattleLogEntry log stored on
BattleState.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .enums import BattleOutcome, CombatantKind, MoveKind
from .types import CombatantState, DamageResult, RewardBundle


class LogEventType(str, Enum):
    """Types of log events."""

    # Turn lifecycle
    TURN_START = "turn_start"
    TURN_END = "turn_end"

    # Move selection
    MOVE_DOWNGRADED = "move_downgraded"  # Not enough meter, fell back
    MOVE_RESOLVED = "move_resolved"

    # State changes
    DAMAGE_APPLIED = "damage_applied"
    HEAL_APPLIED = "heal_applied"
    BLOCK_RAISED = "block_raised"
    STATUS_TICKED = "status_ticked"

    # Win condition
    OUTCOME_DETERMINED = "outcome_determined"


@dataclass
class StateSnapshot:
    """Snapshot of a combatant's state at a point in time."""

    combatant_id: str
    kind: CombatantKind
    current_health: int
    max_health: int
    special_meter: int
    combo_count: int
    is_blocking: bool
    status_effects: dict[str, int]  # effect name -> remaining duration

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "combatant_id": self.combatant_id,
            "kind": self.kind.value,
            "current_health": self.current_health,
            "max_health": self.max_health,
            "special_meter": self.special_meter,
            "combo_count": self.combo_count,
            "is_blocking": self.is_blocking,
            "status_effects": dict(self.status_effects),
        }


@dataclass
class LogEntry:
    """A single log entry representing a combat event."""

    event_type: LogEventType
    turn_number: int
    timestamp_order: int = 0  # Order within the battle for deterministic sorting

    # Event-specific data
    actor: CombatantKind | None = None
    target: CombatantKind | None = None
    move: MoveKind | None = None
    requested_move: MoveKind | None = None
    value: int | None = None
    is_critical: bool | None = None
    was_blocked: bool | None = None
    description: str | None = None

    # State before/after for state change events
    state_before: StateSnapshot | None = None
    state_after: StateSnapshot | None = None

    # For turn boundaries - both combatants
    all_states: dict[str, StateSnapshot] | None = None

    # Outcome info
    outcome: BattleOutcome | None = None
    rewards: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_type": self.event_type.value,
            "turn_number": self.turn_number,
            "timestamp_order": self.timestamp_order,
        }

        if self.actor is not None:
            result["actor"] = self.actor.value
        if self.target is not None:
            result["target"] = self.target.value
        if self.move is not None:
            result["move"] = self.move.value
        if self.requested_move is not None:
            result["requested_move"] = self.requested_move.value
        if self.value is not None:
            result["value"] = self.value
        if self.is_critical is not None:
            result["is_critical"] = self.is_critical
        if self.was_blocked is not None:
            result["was_blocked"] = self.was_blocked
        if self.description is not None:
            result["description"] = self.description
        if self.state_before is not None:
            result["state_before"] = self.state_before.to_dict()
        if self.state_after is not None:
            result["state_after"] = self.state_after.to_dict()
        if self.all_states is not None:
            result["all_states"] = {side: state.to_dict() for side, state in self.all_states.items()}
        if self.outcome is not None:
            result["outcome"] = self.outcome.value
        if self.rewards is not None:
            result["rewards"] = self.rewards

        return result


@dataclass
class CombatLog:
    """Complete trace of a battle."""

    battle_id: str
    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "battle_id": self.battle_id,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def get_entries_by_type(self, event_type: LogEventType) -> list[LogEntry]:
        """Get all entries of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def get_entries_for_turn(self, turn_number: int) -> list[LogEntry]:
        """Get all entries for a specific turn."""
        return [e for e in self.entries if e.turn_number == turn_number]

    def format_readable(self) -> str:
        """Format the log as human-readable text."""
        lines: list[str] = []
        lines.append(f"=== Combat Log (Battle {self.battle_id}) ===\n")

        current_turn = -1
        for entry in self.entries:
            if entry.turn_number != current_turn:
                current_turn = entry.turn_number
                lines.append(f"\n--- Turn {current_turn} ---\n")

            lines.append(self._format_entry(entry))

        return "\n".join(lines)

    def _format_entry(self, entry: LogEntry) -> str:
        """Format a single log entry."""
        match entry.event_type:
            case LogEventType.TURN_START:
                return f"  Turn {entry.turn_number} begins{self._format_states(entry)}"

            case LogEventType.TURN_END:
                return f"  Turn {entry.turn_number} ends{self._format_states(entry)}"

            case LogEventType.MOVE_DOWNGRADED:
                requested = entry.requested_move.value if entry.requested_move else "?"
                resolved = entry.move.value if entry.move else "?"
                return f"    ! {entry.actor.value if entry.actor else '?'} {requested} -> {resolved} ({entry.description})"

            case LogEventType.MOVE_RESOLVED:
                return f"    → {entry.actor.value if entry.actor else '?'} uses {entry.move.value if entry.move else '?'}"

            case LogEventType.DAMAGE_APPLIED:
                flags = []
                if entry.is_critical:
                    flags.append("crit")
                if entry.was_blocked:
                    flags.append("blocked")
                flag_text = f" [{', '.join(flags)}]" if flags else ""
                hp_change = ""
                if entry.state_before and entry.state_after:
                    hp_change = f" [HP: {entry.state_before.current_health} → {entry.state_after.current_health}]"
                target = entry.target.value if entry.target else "?"
                return f"    → {target} takes {entry.value} damage{flag_text}{hp_change}"

            case LogEventType.HEAL_APPLIED:
                return f"    → {entry.target.value if entry.target else '?'} heals {entry.value}"

            case LogEventType.BLOCK_RAISED:
                return f"    → {entry.actor.value if entry.actor else '?'} raises guard"

            case LogEventType.STATUS_TICKED:
                before = entry.state_before.status_effects if entry.state_before else {}
                after = entry.state_after.status_effects if entry.state_after else {}
                expired = [name for name in before if name not in after]
                expired_text = f", expired: {', '.join(expired)}" if expired else ""
                return f"    ~ {entry.target.value if entry.target else '?'} effects tick{expired_text}"

            case LogEventType.OUTCOME_DETERMINED:
                outcome = entry.outcome.value.upper() if entry.outcome else "?"
                return f"  *** OUTCOME: {outcome} ***"

            case _:
                return f"    {entry.event_type.value}: {entry.description or ''}"

    @staticmethod
    def _format_states(entry: LogEntry) -> str:
        if not entry.all_states:
            return ""
        parts = [
            f"{side}: HP={state.current_health}/{state.max_health}, "
            f"meter={state.special_meter}, combo={state.combo_count}"
            for side, state in entry.all_states.items()
        ]
        return " (" + "; ".join(parts) + ")"


class CombatLogger:
    """Logger for tracking combat events.

    Usage:
        logger = CombatLogger(battle_id="run-42")
        resolver = TurnResolver(logger=logger)
        resolver.resolve_turn(context, MoveKind.LIGHT_ATTACK)

        # Get the complete log
        log = logger.get_log()
        print(log.format_readable())
    """

    def __init__(self, battle_id: str) -> None:
        """Initialize the logger for a battle."""
        self.battle_id = battle_id
        self._log = CombatLog(battle_id=battle_id)
        self._order_counter = 0

    def _next_order(self) -> int:
        """Get the next timestamp order value."""
        self._order_counter += 1
        return self._order_counter

    def get_log(self) -> CombatLog:
        """Get the complete combat log."""
        return self._log

    def clear(self) -> None:
        """Clear all log entries."""
        self._log.entries.clear()
        self._order_counter = 0

    @staticmethod
    def snapshot_state(state: CombatantState) -> StateSnapshot:
        """Create a snapshot from a CombatantState."""
        return StateSnapshot(
            combatant_id=state.id,
            kind=state.kind,
            current_health=state.current_health,
            max_health=state.attributes.max_health,
            special_meter=state.special_meter,
            combo_count=state.combo_count,
            is_blocking=state.is_blocking,
            status_effects={effect.name: effect.duration for effect in state.status_effects},
        )

    def _snapshot_all(self, hero: CombatantState, enemy: CombatantState) -> dict[str, StateSnapshot]:
        return {
            CombatantKind.HERO.value: self.snapshot_state(hero),
            CombatantKind.ENEMY.value: self.snapshot_state(enemy),
        }

    def log_turn_start(self, turn_number: int, hero: CombatantState, enemy: CombatantState) -> None:
        """Log the start of a turn with initial state snapshot."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.TURN_START,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                all_states=self._snapshot_all(hero, enemy),
            )
        )

    def log_turn_end(self, turn_number: int, hero: CombatantState, enemy: CombatantState) -> None:
        """Log the end of a turn with final state snapshot."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.TURN_END,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                all_states=self._snapshot_all(hero, enemy),
            )
        )

    def log_move_downgraded(
        self,
        turn_number: int,
        actor: CombatantKind,
        requested_move: MoveKind,
        resolved_move: MoveKind,
        available_meter: int,
    ) -> None:
        """Log a move that fell back because its meter cost could not be paid."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.MOVE_DOWNGRADED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                actor=actor,
                requested_move=requested_move,
                move=resolved_move,
                value=available_meter,
                description=f"only {available_meter} meter available",
            )
        )

    def log_move_resolved(self, turn_number: int, actor: CombatantKind, move: MoveKind) -> None:
        """Log the move a combatant actually performed."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.MOVE_RESOLVED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                actor=actor,
                move=move,
            )
        )

    def log_damage_applied(
        self,
        turn_number: int,
        actor: CombatantKind,
        move: MoveKind,
        damage: DamageResult,
        state_before: CombatantState,
        state_after: CombatantState,
    ) -> None:
        """Log damage dealt to a combatant with before/after state."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.DAMAGE_APPLIED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                actor=actor,
                target=state_after.kind,
                move=move,
                value=damage.amount,
                is_critical=damage.is_critical,
                was_blocked=damage.was_blocked,
                state_before=self.snapshot_state(state_before),
                state_after=self.snapshot_state(state_after),
            )
        )

    def log_heal_applied(
        self,
        turn_number: int,
        amount: int,
        state_before: CombatantState,
        state_after: CombatantState,
    ) -> None:
        """Log healing with before/after state."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.HEAL_APPLIED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                actor=state_after.kind,
                target=state_after.kind,
                value=amount,
                state_before=self.snapshot_state(state_before),
                state_after=self.snapshot_state(state_after),
            )
        )

    def log_block_raised(self, turn_number: int, state_after: CombatantState) -> None:
        """Log a combatant raising its guard."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.BLOCK_RAISED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                actor=state_after.kind,
                state_after=self.snapshot_state(state_after),
            )
        )

    def log_status_ticked(self, turn_number: int, state_before: CombatantState, state_after: CombatantState) -> None:
        """Log status effect durations counting down."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.STATUS_TICKED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                target=state_after.kind,
                state_before=self.snapshot_state(state_before),
                state_after=self.snapshot_state(state_after),
            )
        )

    def log_outcome(self, turn_number: int, outcome: BattleOutcome, rewards: RewardBundle | None) -> None:
        """Log the battle outcome."""
        self._log.entries.append(
            LogEntry(
                event_type=LogEventType.OUTCOME_DETERMINED,
                turn_number=turn_number,
                timestamp_order=self._next_order(),
                outcome=outcome,
                rewards=rewards.to_dict() if rewards is not None else None,
            )
        )
