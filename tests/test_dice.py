"""Unit tests for the dice rolling engine."""

import random

import pytest

from rolltables.dice import DiceError, DiceRoller, get_roller, outcome_count, parse


class TestParse:
    def test_simple_notation(self) -> None:
        assert parse("2d6") == (2, 6, 0)

    def test_implicit_one_die(self) -> None:
        assert parse("d20") == (1, 20, 0)

    def test_positive_modifier(self) -> None:
        assert parse("2d6+3") == (2, 6, 3)

    def test_negative_modifier(self) -> None:
        assert parse("3d10-2") == (3, 10, -2)

    def test_case_insensitive(self) -> None:
        assert parse("2D6") == (2, 6, 0)

    def test_surrounding_whitespace(self) -> None:
        assert parse(" 1d8 ") == (1, 8, 0)

    def test_invalid_word(self) -> None:
        with pytest.raises(DiceError):
            parse("roll some dice")

    def test_invalid_zero_dice(self) -> None:
        with pytest.raises(DiceError):
            parse("0d6")

    def test_invalid_zero_sides(self) -> None:
        with pytest.raises(DiceError):
            parse("2d0")

    def test_invalid_dangling_sign(self) -> None:
        with pytest.raises(DiceError):
            parse("2d6+")

    def test_invalid_empty(self) -> None:
        with pytest.raises(DiceError):
            parse("")

    def test_too_many_dice(self) -> None:
        with pytest.raises(DiceError, match="Too many dice"):
            parse("101d6")

    def test_too_many_sides(self) -> None:
        with pytest.raises(DiceError, match="Too many sides"):
            parse("2d1001")


class TestOutcomeCount:
    def test_single_die(self) -> None:
        assert outcome_count("d6") == 6

    def test_several_dice(self) -> None:
        assert outcome_count("2d6") == 11

    def test_modifier_does_not_change_spread(self) -> None:
        assert outcome_count("1d4+10") == 4

    def test_one_sided(self) -> None:
        assert outcome_count("3d1") == 1


class TestDiceRoller:
    def test_roll_returns_each_die_and_sum(self) -> None:
        rolls, total = DiceRoller().roll(4, 6)
        assert len(rolls) == 4
        assert all(1 <= r <= 6 for r in rolls)
        assert total == sum(rolls)

    def test_roll_zero_dice(self) -> None:
        assert DiceRoller().roll(0, 6) == ([], 0)

    def test_roll_rejects_sideless_die(self) -> None:
        with pytest.raises(DiceError):
            DiceRoller().roll(1, 0)

    def test_roll_rejects_negative_count(self) -> None:
        with pytest.raises(DiceError):
            DiceRoller().roll(-1, 6)

    def test_roll_expression_applies_modifier(self) -> None:
        assert DiceRoller().roll_expression("2d1+3") == ([1, 1], 5)

    def test_roll_expression_negative_modifier(self) -> None:
        assert DiceRoller().roll_expression("1d1-1") == ([1], 0)

    def test_same_seed_same_rolls(self) -> None:
        a = DiceRoller(random.Random(7))
        b = DiceRoller(random.Random(7))
        assert [a.roll_expression("3d20") for _ in range(5)] == [
            b.roll_expression("3d20") for _ in range(5)
        ]

    def test_roll_expression_invalid_raises(self) -> None:
        with pytest.raises(DiceError):
            DiceRoller().roll_expression("d")

    def test_default_roller_is_shared(self) -> None:
        assert get_roller() is get_roller()


    def test_default_roller_totals_in_range(self) -> None:
        for _ in range(20):
            _, total = get_roller().roll_expression("2d6")
            assert 2 <= total <= 12
