"""Tests for the damage model."""

from dataclasses import replace

from conftest import FixedRandom, make_combatant

from xuhuan_arena.engine.damage import apply_status_modifiers, calculate_damage, round_half_up
from xuhuan_arena.engine.enums import CombatantKind, MoveKind
from xuhuan_arena.engine.rng import SeededRandom
from xuhuan_arena.engine.types import StatusEffect

# Variance roll of 0.5 gives a variation of exactly 1.0; 0.99 never crits
NEUTRAL_ROLLS = [0.5, 0.99]


class TestRoundHalfUp:
    """Tests for rounding."""

    def test_rounds_halves_up(self):
        """Test .5 rounds towards +infinity."""
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-0.5) == 0

    def test_rounds_to_nearest(self):
        """Test ordinary rounding."""
        assert round_half_up(4.49) == 4
        assert round_half_up(4.51) == 5


class TestStatusModifiers:
    """Tests for effective attributes."""

    def test_no_effects_returns_same_attributes(self, hero):
        """Test attributes are untouched without effects."""
        assert apply_status_modifiers(hero.attributes, ()) is hero.attributes

    def test_modifiers_are_summed(self, hero):
        """Test multiple effects add up."""
        effects = (
            StatusEffect(id="a", name="Rage", duration=2, attack_modifier=5),
            StatusEffect(id="b", name="Focus", duration=1, attack_modifier=3, defense_modifier=-4, speed_modifier=2),
        )

        result = apply_status_modifiers(hero.attributes, effects)

        assert result.attack == 42
        assert result.defense == 16
        assert result.speed == 16
        assert result.max_health == hero.attributes.max_health
        assert result.crit_rate == hero.attributes.crit_rate


class TestCalculateDamage:
    """Tests for single strike damage."""

    def test_light_attack(self, hero, enemy):
        """Test light attack: 34 * 0.8 - 18 * 0.6 = 16.4."""
        result = calculate_damage(hero, enemy, FixedRandom(NEUTRAL_ROLLS), MoveKind.LIGHT_ATTACK)

        assert result.amount == 16
        assert result.is_critical is False
        assert result.was_blocked is False

    def test_heavy_attack(self, hero, enemy):
        """Test heavy attack: 34 * 1.5 - 10.8 = 40.2."""
        result = calculate_damage(hero, enemy, FixedRandom(NEUTRAL_ROLLS), MoveKind.HEAVY_ATTACK)
        assert result.amount == 40

    def test_special_move(self, hero, enemy):
        """Test special move: 34 * 2.2 - 10.8 = 64."""
        result = calculate_damage(hero, enemy, FixedRandom(NEUTRAL_ROLLS), MoveKind.SPECIAL_MOVE)
        assert result.amount == 64

    def test_counter_applies_bonus_multiplier(self, hero, enemy):
        """Test counter: 34 * 1.0 * 1.8 - 10.8 = 50.4."""
        result = calculate_damage(hero, enemy, FixedRandom(NEUTRAL_ROLLS), MoveKind.COUNTER, is_counter=True)
        assert result.amount == 50

    def test_variance_bounds(self, hero, enemy):
        """Test the variance roll scales damage between 0.85x and 1.15x."""
        low = calculate_damage(hero, enemy, FixedRandom([0.0, 0.99]), MoveKind.LIGHT_ATTACK)
        high = calculate_damage(hero, enemy, FixedRandom([0.999999, 0.99]), MoveKind.LIGHT_ATTACK)

        assert low.amount == round_half_up(16.4 * 0.85)
        assert high.amount == round_half_up(16.4 * 1.15)

    def test_critical_hit(self, hero, enemy):
        """Test a crit roll below crit rate multiplies by 1.5 + crit damage."""
        result = calculate_damage(hero, enemy, FixedRandom([0.5, 0.0]), MoveKind.LIGHT_ATTACK)

        assert result.is_critical is True
        assert result.amount == 33  # 16.4 * 2.0

    def test_crit_roll_at_rate_is_not_critical(self, hero, enemy):
        """Test the crit comparison is strict."""
        result = calculate_damage(hero, enemy, FixedRandom([0.5, 0.12]), MoveKind.LIGHT_ATTACK)
        assert result.is_critical is False

    def test_block_reduces_damage(self, hero, enemy):
        """Test a blocking defender takes 30% damage."""
        blocking = replace(enemy, is_blocking=True)

        result = calculate_damage(hero, blocking, FixedRandom(NEUTRAL_ROLLS), MoveKind.LIGHT_ATTACK)

        assert result.was_blocked is True
        assert result.amount == 5  # 16.4 * 0.3 = 4.92

    def test_special_ignores_block(self, hero, enemy):
        """Test special moves go through a raised guard."""
        blocking = replace(enemy, is_blocking=True)

        result = calculate_damage(hero, blocking, FixedRandom(NEUTRAL_ROLLS), MoveKind.SPECIAL_MOVE)

        assert result.was_blocked is False
        assert result.amount == 64

    def test_minimum_damage(self, hero):
        """Test damage never drops below 1."""
        fortress = make_combatant(CombatantKind.ENEMY, defense=1000)

        result = calculate_damage(hero, fortress, FixedRandom(NEUTRAL_ROLLS), MoveKind.LIGHT_ATTACK)

        assert result.amount == 1

    def test_minimum_damage_when_blocked(self, hero):
        """Test a blocked minimum hit still deals 1."""
        fortress = make_combatant(CombatantKind.ENEMY, defense=1000, is_blocking=True)

        result = calculate_damage(hero, fortress, FixedRandom(NEUTRAL_ROLLS), MoveKind.LIGHT_ATTACK)

        assert result.amount == 1
        assert result.was_blocked is True

    def test_status_effects_apply(self, hero, enemy):
        """Test attacker status effects feed into damage."""
        buffed = replace(hero, status_effects=(StatusEffect(id="r", name="Rage", duration=2, attack_modifier=10),))

        result = calculate_damage(buffed, enemy, FixedRandom(NEUTRAL_ROLLS), MoveKind.LIGHT_ATTACK)

        assert result.amount == 24  # 44 * 0.8 - 10.8 = 24.4

    def test_draws_exactly_two_values(self, hero, enemy):
        """Test one strike consumes two draws."""
        rng = SeededRandom("draws")

        calculate_damage(hero, enemy, rng, MoveKind.HEAVY_ATTACK)

        assert rng.cursor == 2

    def test_inputs_unchanged(self, hero, enemy):
        """Test attacker and defender are not modified."""
        hero_before, enemy_before = hero, replace(enemy)

        calculate_damage(hero, enemy, SeededRandom("pure"), MoveKind.LIGHT_ATTACK)

        assert hero == hero_before
        assert enemy == enemy_before

    def test_same_seed_same_damage(self, hero, enemy):
        """Test damage is reproducible from the seed."""
        a = calculate_damage(hero, enemy, SeededRandom("same"), MoveKind.HEAVY_ATTACK)
        b = calculate_damage(hero, enemy, SeededRandom("same"), MoveKind.HEAVY_ATTACK)
        assert a == b
