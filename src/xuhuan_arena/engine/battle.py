"""Battle context - creating, updating and replaying battles."""

import time
from dataclasses import replace
from typing import Callable

from .combatant import METER_MAX, METER_MIN, clamp
from .enums import CombatantKind, MoveKind
from .rng import RandomSnapshot, SeededRandom, create_seeded_random
from .turn import TurnResolver
from .types import BattleContext, BattleState, CombatantState, TurnResolution

MoveStrategy = Callable[[BattleState], MoveKind]

_default_resolver = TurnResolver()


def default_seed(hero: CombatantState, enemy: CombatantState) -> str:
    """Seed used when the caller does not supply one. Not reproducible."""
    return f"{hero.id}-{enemy.id}-{int(time.time() * 1000)}"


def _prepare_combatant(combatant: CombatantState, kind: CombatantKind) -> CombatantState:
    return replace(
        combatant,
        kind=kind,
        current_health=clamp(combatant.current_health, 0, combatant.attributes.max_health),
        special_meter=clamp(combatant.special_meter, METER_MIN, METER_MAX),
        status_effects=tuple(combatant.status_effects),
    )


def create_battle_state(
    hero: CombatantState,
    enemy: CombatantState,
    seed: str | None = None,
    run_id: str | None = None,
) -> BattleContext:
    """Start a new battle.

    Args:
        hero: Snapshot of the acting side, already scaled for its level
        enemy: Snapshot of the opposing side
        seed: Seed for every random draw; pass one explicitly for reproducible battles
        run_id: Optional identifier of the run this battle belongs to

    Returns:
        BattleContext at turn 1 with a fresh generator
    """
    if seed is None:
        seed = default_seed(hero, enemy)

    state = BattleState(
        seed=seed,
        turn=1,
        hero=_prepare_combatant(hero, CombatantKind.HERO),
        enemy=_prepare_combatant(enemy, CombatantKind.ENEMY),
        run_id=run_id,
    )
    return BattleContext(state=state, rng=create_seeded_random(seed))


def update_battle_context(context: BattleContext, state: BattleState) -> BattleContext:
    """Rebind a context to a newer state, keeping its generator."""
    return BattleContext(state=state, rng=context.rng)


def restore_battle_context(state: BattleState) -> BattleContext:
    """Rebuild a live context from a stored state by replaying its generator."""
    rng = SeededRandom.from_snapshot(RandomSnapshot(seed=state.seed, cursor=state.rng_cursor))
    return BattleContext(state=state, rng=rng)


def resolve_turn(context: BattleContext, move: MoveKind) -> TurnResolution:
    """Resolve one turn with the default (lenient, untraced) resolver."""
    return _default_resolver.resolve_turn(context, move)


def auto_resolve(
    context: BattleContext,
    strategy: MoveStrategy,
    max_turns: int = 100,
    resolver: TurnResolver | None = None,
) -> BattleContext:
    """Play turns chosen by a strategy until the battle ends or max_turns is reached."""
    resolver = resolver or _default_resolver
    for _ in range(max_turns):
        if context.state.is_terminal:
            break
        result = resolver.resolve_turn(context, strategy(context.state))
        context = update_battle_context(context, result.state)
    return context
