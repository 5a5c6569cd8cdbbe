"""Tests for combatant state transitions."""

from dataclasses import replace

from conftest import make_combatant

from xuhuan_arena.engine.combatant import (
    apply_damage,
    clamp,
    gain_meter,
    heal,
    increment_combo,
    reset_combo,
    set_blocking,
    tick_status_effects,
)
from xuhuan_arena.engine.types import DamageResult, StatusEffect


class TestClamp:
    """Tests for clamp helper."""

    def test_clamp(self):
        """Test values are kept in range."""
        assert clamp(-5, 0, 100) == 0
        assert clamp(50, 0, 100) == 50
        assert clamp(150, 0, 100) == 100


class TestApplyDamage:
    """Tests for taking a hit."""

    def test_reduces_health_and_builds_meter(self):
        """Test damage lowers health and adds 10 meter."""
        fighter = make_combatant(special_meter=20)

        result = apply_damage(fighter, DamageResult(amount=30, is_critical=False))

        assert result.current_health == 70
        assert result.special_meter == 30

    def test_health_floors_at_zero(self):
        """Test overkill stops at zero health."""
        fighter = make_combatant(current_health=5)

        result = apply_damage(fighter, DamageResult(amount=50, is_critical=True))

        assert result.current_health == 0
        assert not result.is_alive()

    def test_meter_caps_at_100(self):
        """Test meter never exceeds 100."""
        fighter = make_combatant(special_meter=95)

        result = apply_damage(fighter, DamageResult(amount=1, is_critical=False))

        assert result.special_meter == 100

    def test_hit_resets_combo(self):
        """Test a connecting hit breaks the combatant's combo."""
        fighter = make_combatant(combo_count=4)

        result = apply_damage(fighter, DamageResult(amount=3, is_critical=False))

        assert result.combo_count == 0

    def test_blocked_hit_keeps_combo(self):
        """Test a blocked hit leaves the combo alone."""
        fighter = make_combatant(combo_count=4, is_blocking=True)

        result = apply_damage(fighter, DamageResult(amount=3, is_critical=False, was_blocked=True))

        assert result.combo_count == 4

    def test_guard_is_consumed(self):
        """Test blocking is cleared after any hit."""
        fighter = make_combatant(is_blocking=True)

        result = apply_damage(fighter, DamageResult(amount=3, is_critical=False, was_blocked=True))

        assert result.is_blocking is False

    def test_input_not_modified(self):
        """Test the original snapshot is untouched."""
        fighter = make_combatant()

        apply_damage(fighter, DamageResult(amount=30, is_critical=False))

        assert fighter.current_health == 100
        assert fighter.special_meter == 0


class TestHeal:
    """Tests for healing."""

    def test_heal(self):
        """Test healing restores health."""
        fighter = make_combatant(current_health=50)
        assert heal(fighter, 20).current_health == 70

    def test_heal_capped_at_max(self):
        """Test healing never exceeds max health."""
        fighter = make_combatant(current_health=95)
        assert heal(fighter, 20).current_health == 100


class TestStatusEffects:
    """Tests for status effect ticking."""

    def test_durations_count_down(self):
        """Test every effect loses one turn."""
        fighter = make_combatant(
            status_effects=(
                StatusEffect(id="a", name="Rage", duration=3),
                StatusEffect(id="b", name="Slow", duration=2),
            )
        )

        result = tick_status_effects(fighter)

        assert [effect.duration for effect in result.status_effects] == [2, 1]

    def test_expired_effects_removed(self):
        """Test effects reaching zero are dropped."""
        fighter = make_combatant(
            status_effects=(
                StatusEffect(id="a", name="Rage", duration=1),
                StatusEffect(id="b", name="Slow", duration=2),
            )
        )

        result = tick_status_effects(fighter)

        assert [effect.name for effect in result.status_effects] == ["Slow"]

    def test_no_effects_is_noop(self):
        """Test a combatant without effects comes back unchanged."""
        fighter = make_combatant()
        assert tick_status_effects(fighter) is fighter


class TestMeterAndCombo:
    """Tests for meter, combo and guard helpers."""

    def test_gain_meter_clamps(self):
        """Test meter is kept in [0, 100]."""
        fighter = make_combatant(special_meter=40)

        assert gain_meter(fighter, 15).special_meter == 55
        assert gain_meter(fighter, -50).special_meter == 0
        assert gain_meter(fighter, 100).special_meter == 100

    def test_combo(self):
        """Test combo increments and resets."""
        fighter = make_combatant()

        fighter = increment_combo(increment_combo(fighter))
        assert fighter.combo_count == 2

        assert reset_combo(fighter).combo_count == 0

    def test_set_blocking(self):
        """Test the guard flag can be raised and lowered."""
        fighter = make_combatant()

        raised = set_blocking(fighter)
        assert raised.is_blocking is True
        assert set_blocking(raised, False).is_blocking is False

    def test_other_fields_preserved(self):
        """Test transitions only touch their own fields."""
        fighter = make_combatant(special_meter=30, combo_count=2)

        result = heal(replace(fighter, current_health=10), 5)

        assert result.special_meter == 30
        assert result.combo_count == 2
        assert result.attributes == fighter.attributes
