"""Turn resolver - resolves the hero's move and the enemy's automatic retaliation."""

from dataclasses import replace
from typing import TYPE_CHECKING

from .combatant import (
    METER_GAIN_ON_DAMAGE,
    apply_damage,
    gain_meter,
    heal,
    increment_combo,
    reset_combo,
    set_blocking,
    tick_status_effects,
)
from .damage import calculate_damage, round_half_up
from .enums import CombatantKind, MoveKind
from .errors import BattleAlreadyResolvedError, InsufficientMeterError
from .moves import can_afford, describe_enemy_move, describe_hero_move, get_move_properties
from .rewards import evaluate_outcome
from .rng import SeededRandom
from .types import (
    BattleContext,
    BattleLogEntry,
    BattleState,
    CombatantState,
    DamageResult,
    TurnResolution,
)

if TYPE_CHECKING:
    from .logging import CombatLogger

METER_GAIN_ON_HIT = 15
FORTIFY_HEAL_RATIO = 0.08
ENEMY_HEAVY_THRESHOLD = 0.6  # Draws above this pick a heavy attack
FALLBACK_MOVE = MoveKind.LIGHT_ATTACK


def create_log_entry(
    turn: int,
    actor: CombatantKind,
    description: str,
    damage: DamageResult | None = None,
    move: MoveKind | None = None,
) -> BattleLogEntry:
    """Create a player-facing log entry."""
    return BattleLogEntry(
        id=f"turn-{turn}-{actor.value}",
        turn=turn,
        actor=actor,
        description=description,
        damage=damage,
        move=move,
    )


def choose_enemy_move(rng: SeededRandom) -> MoveKind:
    """Pick the enemy's retaliation: heavy attack 40% of the time, light otherwise."""
    return MoveKind.HEAVY_ATTACK if rng.next_float() > ENEMY_HEAVY_THRESHOLD else MoveKind.LIGHT_ATTACK


class TurnResolver:
    """Resolves one complete turn of a battle."""

    def __init__(self, logger: "CombatLogger | None" = None, strict_moves: bool = False) -> None:
        self.logger = logger
        self.strict_moves = strict_moves

    def resolve_turn(self, context: BattleContext, move: MoveKind) -> TurnResolution:
        """Resolve a complete turn.

        Turn flow:
        1. Resource check (unaffordable moves fall back to a light attack)
        2. Hero move resolves
        3. Outcome check - a finished battle returns here, no retaliation
        4. Enemy retaliates automatically
        5. Outcome check
        6. Turn counter advances and status effects tick (only if still in progress)

        Args:
            context: Battle context; its generator is advanced in place
            move: Move chosen by the hero

        Returns:
            TurnResolution with the new state and the log entries produced this turn

        Raises:
            BattleAlreadyResolvedError: If the battle has already ended
            InsufficientMeterError: In strict mode, if the move cannot be paid for
        """
        initial = context.state
        if initial.is_terminal:
            raise BattleAlreadyResolvedError(initial.outcome.value)

        rng = context.rng
        turn = initial.turn
        move = MoveKind(move)

        if self.logger:
            self.logger.log_turn_start(turn, initial.hero, initial.enemy)

        move = self.check_resources(initial.hero, move, turn)

        state, hero_entry = self._resolve_hero_move(initial, rng, move)
        events = [hero_entry]

        state = evaluate_outcome(state, rng)
        if not state.is_terminal:
            state, enemy_entry = self._resolve_retaliation(state, rng)
            events.append(enemy_entry)
            state = evaluate_outcome(state, rng)

        if state.is_terminal:
            if self.logger:
                self.logger.log_outcome(turn, state.outcome, state.rewards)
        else:
            state = self._advance_turn(state)

        if self.logger:
            self.logger.log_turn_end(turn, state.hero, state.enemy)

        state = replace(state, log=initial.log + tuple(events), rng_cursor=rng.cursor)
        return TurnResolution(state=state, events=tuple(events))

    def check_resources(self, combatant: CombatantState, move: MoveKind, turn_number: int) -> MoveKind:
        """Return the move that will actually be performed.

        A move whose meter cost cannot be paid becomes a light attack, or raises
        InsufficientMeterError when strict_moves is set.
        """
        if can_afford(move, combatant.special_meter):
            return move

        cost = get_move_properties(move).meter_cost
        if self.strict_moves:
            raise InsufficientMeterError(move, cost, combatant.special_meter)

        if self.logger:
            self.logger.log_move_downgraded(
                turn_number,
                combatant.kind,
                requested_move=move,
                resolved_move=FALLBACK_MOVE,
                available_meter=combatant.special_meter,
            )
        return FALLBACK_MOVE

    def _resolve_hero_move(
        self,
        state: BattleState,
        rng: SeededRandom,
        move: MoveKind,
    ) -> tuple[BattleState, BattleLogEntry]:
        """Resolve the hero's move against the enemy."""
        hero, enemy = state.hero, state.enemy

        if self.logger:
            self.logger.log_move_resolved(state.turn, hero.kind, move)

        match move:
            case MoveKind.BLOCK:
                next_hero = set_blocking(hero, True)
                if self.logger:
                    self.logger.log_block_raised(state.turn, next_hero)
                entry = create_log_entry(state.turn, hero.kind, describe_hero_move(move, enemy.name), move=move)
                return replace(state, hero=next_hero), entry

            case MoveKind.FORTIFY:
                amount = round_half_up(hero.attributes.max_health * FORTIFY_HEAL_RATIO)
                next_hero = heal(hero, amount)
                if self.logger:
                    self.logger.log_heal_applied(state.turn, amount, hero, next_hero)
                entry = create_log_entry(state.turn, hero.kind, describe_hero_move(move, enemy.name), move=move)
                return replace(state, hero=next_hero), entry

            case (
                MoveKind.LIGHT_ATTACK
                | MoveKind.HEAVY_ATTACK
                | MoveKind.SPECIAL_MOVE
                | MoveKind.COUNTER
                | MoveKind.BASIC_ATTACK
                | MoveKind.CHARGED_STRIKE
            ):
                next_hero, next_enemy, damage = self._strike(state.turn, hero, enemy, rng, move)
                entry = create_log_entry(
                    state.turn,
                    hero.kind,
                    describe_hero_move(move, enemy.name, damage),
                    damage=damage,
                    move=move,
                )
                return replace(state, hero=next_hero, enemy=next_enemy), entry

            case _:
                raise ValueError(f"Unsupported move: {move}")

    def _resolve_retaliation(self, state: BattleState, rng: SeededRandom) -> tuple[BattleState, BattleLogEntry]:
        """The enemy always strikes back while the battle is in progress."""
        move = choose_enemy_move(rng)

        if self.logger:
            self.logger.log_move_resolved(state.turn, state.enemy.kind, move)

        next_enemy, next_hero, damage = self._strike(state.turn, state.enemy, state.hero, rng, move)
        entry = create_log_entry(
            state.turn,
            state.enemy.kind,
            describe_enemy_move(move, state.enemy.name, damage),
            damage=damage,
            move=move,
        )
        return replace(state, hero=next_hero, enemy=next_enemy), entry

    def _strike(
        self,
        turn_number: int,
        attacker: CombatantState,
        defender: CombatantState,
        rng: SeededRandom,
        move: MoveKind,
    ) -> tuple[CombatantState, CombatantState, DamageResult]:
        """Compute and apply one strike. Returns (attacker, defender, damage)."""
        damage = calculate_damage(attacker, defender, rng, move, is_counter=move == MoveKind.COUNTER)
        next_defender = apply_damage(defender, damage, METER_GAIN_ON_DAMAGE)

        # Paid moves spend their cost, everything else builds meter
        cost = get_move_properties(move).meter_cost
        next_attacker = gain_meter(attacker, -cost if cost else METER_GAIN_ON_HIT)
        if damage.was_blocked:
            next_attacker = reset_combo(next_attacker)
        else:
            next_attacker = increment_combo(next_attacker)

        if self.logger:
            self.logger.log_damage_applied(turn_number, attacker.kind, move, damage, defender, next_defender)

        return next_attacker, next_defender, damage

    def _advance_turn(self, state: BattleState) -> BattleState:
        """Move to the next turn and count down status effects on both sides."""
        hero = tick_status_effects(state.hero)
        enemy = tick_status_effects(state.enemy)

        if self.logger:
            if hero is not state.hero:
                self.logger.log_status_ticked(state.turn, state.hero, hero)
            if enemy is not state.enemy:
                self.logger.log_status_ticked(state.turn, state.enemy, enemy)

        return replace(state, turn=state.turn + 1, hero=hero, enemy=enemy)
