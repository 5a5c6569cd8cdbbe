"""Battle service - manages in-progress battles for bot handlers."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field, replace

from ..config import Settings, get_settings
from ..engine.battle import create_battle_state, update_battle_context
from ..engine.enums import CombatantKind, MoveKind
from ..engine.errors import InsufficientMeterError
from ..engine.logging import CombatLog, CombatLogger
from ..engine.turn import TurnResolver
from ..engine.types import BattleContext, BattleLogEntry, BattleState
from ..schemas import BattleResolvePayload
from .encounters import DEFAULT_CHARACTER, EncounterNotFoundError, create_combatant, get_encounter
from .players import PlayerProgress, PlayerService

logger = logging.getLogger(__name__)


@dataclass
class BattleSession:
    """A user's battle in progress.

    The lock is held while a turn resolves; a second submission arriving in
    that window is rejected rather than queued. Turn resolution itself never
    awaits, so the lock is only contended once something inside the locked
    block does (for example persisting progress to a database).
    """

    user_id: int
    display_name: str
    context: BattleContext
    combat_logger: CombatLogger | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def is_resolving(self) -> bool:
        return self.lock.locked()


@dataclass
class BattleResult:
    """Result of a battle operation."""

    success: bool
    message: str
    state: BattleState | None = None
    events: tuple[BattleLogEntry, ...] = ()
    resolve_payload: BattleResolvePayload | None = None
    combat_log: CombatLog | None = None
    progress: PlayerProgress | None = None


class BattleService:
    """Service for battle operations.

    Sessions live in memory for the lifetime of the bot process; a session is
    closed as soon as its battle ends or is abandoned.
    """

    def __init__(self, settings: Settings | None = None, player_service: PlayerService | None = None) -> None:
        self.settings = settings or get_settings()
        self.players = player_service or PlayerService()
        self._sessions: dict[int, BattleSession] = {}

    def get_battle(self, user_id: int) -> BattleState | None:
        """Get the current state of a user's battle, if any."""
        session = self._sessions.get(user_id)
        return session.context.state if session else None

    async def start_battle(
        self,
        user_id: int,
        display_name: str,
        encounter_slug: str | None = None,
        seed: str | None = None,
    ) -> BattleResult:
        """Start a battle against an encounter.

        Args:
            user_id: Telegram user ID of the player
            display_name: Name shown for the player's fighter
            encounter_slug: Encounter to fight (defaults to the configured one)
            seed: Optional seed for a reproducible battle

        Returns:
            BattleResult with the initial state
        """
        if user_id in self._sessions:
            return BattleResult(
                success=False,
                message="You are already in a battle! Finish it or /abandon it first.",
                state=self._sessions[user_id].context.state,
            )

        slug = encounter_slug or self.settings.default_encounter
        try:
            encounter = get_encounter(slug)
        except EncounterNotFoundError:
            return BattleResult(success=False, message=f"Unknown encounter: {slug}")

        hero = replace(
            create_combatant(DEFAULT_CHARACTER, CombatantKind.HERO, level=self.settings.hero_level),
            id=f"player-{user_id}",
            name=display_name,
        )
        run_id = uuid.uuid4().hex
        context = create_battle_state(hero, encounter.to_combatant(), seed=seed, run_id=run_id)

        combat_logger = CombatLogger(battle_id=run_id) if self.settings.combat_trace else None
        self._sessions[user_id] = BattleSession(
            user_id=user_id, display_name=display_name, context=context, combat_logger=combat_logger
        )

        logger.info(f"Battle {run_id} started: user {user_id} vs {encounter.slug} (seed {context.state.seed!r})")

        return BattleResult(
            success=True,
            message=f"{encounter.name} (Lv.{encounter.level}) steps into the arena!",
            state=context.state,
        )

    async def submit_move(self, user_id: int, move: MoveKind) -> BattleResult:
        """Submit the player's move and resolve the turn.

        Args:
            user_id: Telegram user ID of the player
            move: Move chosen by the player

        Returns:
            BattleResult with the new state and this turn's log entries. When the
            battle ends the session is closed and resolve_payload is filled in.
        """
        session = self._sessions.get(user_id)
        if session is None:
            return BattleResult(success=False, message="You are not in a battle. Use /fight to start one.")

        if session.is_resolving:
            logger.debug(f"Rejected move from user {user_id}: turn still resolving")
            return BattleResult(
                success=False,
                message="Your previous move is still resolving.",
                state=session.context.state,
            )

        async with session.lock:
            resolver = TurnResolver(logger=session.combat_logger, strict_moves=self.settings.strict_moves)
            try:
                result = resolver.resolve_turn(session.context, move)
            except InsufficientMeterError as e:
                logger.debug(f"Rejected move from user {user_id}: {e}")
                return BattleResult(
                    success=False,
                    message=f"Not enough meter: {e}",
                    state=session.context.state,
                )
            session.context = update_battle_context(session.context, result.state)

        resolved_move = result.events[0].move
        if resolved_move != move:
            logger.debug(
                f"User {user_id} requested {move.value} without enough meter, resolved as {resolved_move.value}"
            )

        state = result.state
        if not state.is_terminal:
            return BattleResult(success=True, message="Turn resolved", state=state, events=result.events)

        del self._sessions[user_id]
        logger.info(f"Battle {state.run_id} finished on turn {state.turn}: {state.outcome.value}")

        payload = BattleResolvePayload.from_state(state)
        drops = state.rewards.drops if state.rewards else ()
        progress = self.players.apply_battle(user_id, session.display_name, payload, drops=drops)

        return BattleResult(
            success=True,
            message="Battle finished",
            state=state,
            events=result.events,
            resolve_payload=payload,
            combat_log=session.combat_logger.get_log() if session.combat_logger else None,
            progress=progress,
        )

    async def abandon_battle(self, user_id: int) -> BattleResult:
        """Walk away from the current battle without rewards."""
        session = self._sessions.get(user_id)
        if session is None:
            return BattleResult(success=False, message="You are not in a battle.")

        if session.is_resolving:
            return BattleResult(success=False, message="Your previous move is still resolving.")

        del self._sessions[user_id]
        logger.info(f"Battle {session.context.state.run_id} abandoned by user {user_id}")

        return BattleResult(success=True, message="You leave the arena.", state=session.context.state)
