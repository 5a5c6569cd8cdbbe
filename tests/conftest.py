"""Shared fixtures for battle engine tests."""

import pytest

from xuhuan_arena.config import Settings
from xuhuan_arena.engine.battle import create_battle_state
from xuhuan_arena.engine.enums import CombatantKind
from xuhuan_arena.engine.types import BattleContext, CombatantAttributes, CombatantState

TEST_SEED = "test-seed-1"


class FixedRandom:
    """Stand-in generator that replays a fixed list of draws."""

    def __init__(self, values: list[float]) -> None:
        self.values = list(values)
        self.cursor = 0

    def next_float(self) -> float:
        value = self.values[self.cursor]
        self.cursor += 1
        return value


def make_combatant(
    kind: CombatantKind = CombatantKind.HERO,
    *,
    id: str = "fighter",
    name: str = "Fighter",
    level: int = 1,
    max_health: int = 100,
    attack: int = 20,
    defense: int = 10,
    speed: int = 10,
    crit_rate: float = 0.0,
    crit_damage: float = 0.0,
    **overrides,
) -> CombatantState:
    """Build a combatant at full health unless overridden."""
    return CombatantState(
        id=id,
        name=name,
        level=level,
        kind=kind,
        attributes=CombatantAttributes(
            max_health=max_health,
            attack=attack,
            defense=defense,
            speed=speed,
            crit_rate=crit_rate,
            crit_damage=crit_damage,
        ),
        current_health=overrides.pop("current_health", max_health),
        **overrides,
    )


@pytest.fixture
def hero() -> CombatantState:
    """Level 3 hero used by the reference scenarios."""
    return make_combatant(
        CombatantKind.HERO,
        id="hero-1",
        name="Ari",
        level=3,
        max_health=120,
        attack=34,
        defense=20,
        speed=14,
        crit_rate=0.12,
        crit_damage=0.5,
    )


@pytest.fixture
def enemy() -> CombatantState:
    """Level 2 enemy used by the reference scenarios."""
    return make_combatant(
        CombatantKind.ENEMY,
        id="drone-1",
        name="Training Drone",
        level=2,
        max_health=90,
        attack=22,
        defense=18,
        speed=12,
        crit_rate=0.08,
        crit_damage=0.35,
    )


@pytest.fixture
def context(hero: CombatantState, enemy: CombatantState) -> BattleContext:
    """Fresh battle between the scenario hero and enemy on the test seed."""
    return create_battle_state(hero, enemy, seed=TEST_SEED, run_id="run-test")


@pytest.fixture
def settings() -> Settings:
    """Settings that do not depend on the environment."""
    return Settings(
        _env_file=None,
        bot_token=None,
        debug=False,
        strict_moves=False,
        hero_level=3,
        default_encounter="training-drone",
        combat_trace=False,
    )
