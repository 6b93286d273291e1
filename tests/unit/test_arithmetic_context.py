"""
Тесты для ArithmeticContext и round_to_scale

Проверяемые инварианты:
1. precision > 0, иначе InvalidPrecision
2. add/subtract/multiply точны, пока результат помещается в precision
3. HALF_UP: первая отброшенная цифра >= 5 → от нуля, знак сохраняется
4. divide: DivideByZero; частное сразу до precision цифр
5. round_to_scale идемпотентна и не зависит от precision
6. Identity laws: x + 0 == x, x × 1 == x
"""

import dataclasses

import pytest

from src.core.arith import (
    ONE,
    ZERO,
    ArithmeticContext,
    DecimalValue,
    DivideByZero,
    InvalidPrecision,
    RoundingMode,
    round_to_scale,
)


def D(text: str) -> DecimalValue:
    return DecimalValue.from_string(text)


# =============================================================================
# ТЕСТЫ: Конструирование
# =============================================================================


class TestContextConstruction:
    """Тесты валидации контекста."""

    @pytest.mark.parametrize("precision", [0, -1, -100])
    def test_non_positive_precision_rejected(self, precision) -> None:
        with pytest.raises(InvalidPrecision):
            ArithmeticContext(precision=precision)

    @pytest.mark.parametrize("precision", ["10", 2.5, True])
    def test_non_int_precision_rejected(self, precision) -> None:
        with pytest.raises(InvalidPrecision):
            ArithmeticContext(precision=precision)

    def test_defaults(self) -> None:
        ctx = ArithmeticContext(precision=28)
        assert ctx.precision == 28
        assert ctx.rounding_mode is RoundingMode.HALF_UP

    def test_immutable(self) -> None:
        ctx = ArithmeticContext(precision=28)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.precision = 5

    def test_with_precision_returns_new_context(self) -> None:
        ctx = ArithmeticContext(precision=28)
        other = ctx.with_precision(5)
        assert other.precision == 5
        assert ctx.precision == 28

        with pytest.raises(InvalidPrecision):
            ctx.with_precision(0)


# =============================================================================
# ТЕСТЫ: add / subtract
# =============================================================================


class TestAddSubtract:
    """Тесты сложения и вычитания."""

    def test_exact_sum_not_perturbed(self) -> None:
        ctx = ArithmeticContext(precision=10)
        result = ctx.add(D("1.5"), D("0.25"))
        assert result.to_string() == "1.75"
        assert result.scale == 2

    def test_finer_scale_kept(self) -> None:
        ctx = ArithmeticContext(precision=28)
        assert ctx.add(D("0.1"), D("0.2")).to_string() == "0.3"
        assert ctx.add(D("1"), D("0.001")).to_string() == "1.001"

    def test_rounds_when_exceeding_precision(self) -> None:
        ctx = ArithmeticContext(precision=5)
        # 123.451 → 6 цифр → 123.45
        assert ctx.add(D("123.45"), D("0.001")).to_string() == "123.45"
        # 123.455 → 123.46
        assert ctx.add(D("123.45"), D("0.005")).to_string() == "123.46"

    def test_carry_drops_extra_digit(self) -> None:
        """9.995 при precision=3 → перенос до 10.0."""
        ctx = ArithmeticContext(precision=3)
        assert ctx.add(D("9.99"), D("0.005")).to_string() == "10.0"

    def test_large_magnitude_rounds_to_negative_scale(self) -> None:
        ctx = ArithmeticContext(precision=3)
        result = ctx.add(D("12345"), ZERO)
        assert result.to_string() == "12300"
        assert result.scale == -2

    def test_half_up_away_from_zero_for_negatives(self) -> None:
        ctx = ArithmeticContext(precision=3)
        assert ctx.add(D("-1.234"), ZERO).to_string() == "-1.23"
        assert ctx.add(D("-1.235"), ZERO).to_string() == "-1.24"

    def test_subtract(self) -> None:
        ctx = ArithmeticContext(precision=10)
        assert ctx.subtract(D("1"), D("3.25")).to_string() == "-2.25"
        assert ctx.subtract(D("-1"), D("-3.25")).to_string() == "2.25"

    def test_subtract_to_zero_is_unsigned(self) -> None:
        ctx = ArithmeticContext(precision=10)
        result = ctx.subtract(D("1.5"), D("1.5"))
        assert result.is_zero()
        assert result.sign == 0
        assert result.to_string() == "0.0"

    @pytest.mark.parametrize("text", ["3.14", "-2.5", "0", "123456789", "0.000000001"])
    def test_additive_identity(self, text) -> None:
        """x + 0 == x."""
        ctx = ArithmeticContext(precision=10)
        x = D(text)
        assert ctx.add(x, ZERO) == x
        assert ctx.add(ZERO, x) == x

    def test_operands_not_mutated(self) -> None:
        ctx = ArithmeticContext(precision=3)
        a, b = D("9.99"), D("0.005")
        ctx.add(a, b)
        assert a.to_string() == "9.99"
        assert b.to_string() == "0.005"


# =============================================================================
# ТЕСТЫ: multiply
# =============================================================================


class TestMultiply:
    """Тесты умножения."""

    def test_exact_product(self) -> None:
        ctx = ArithmeticContext(precision=10)
        result = ctx.multiply(D("1.5"), D("-2.25"))
        assert result.to_string() == "-3.375"
        assert result.scale == 3

    def test_product_rounded_to_precision(self) -> None:
        """1.23 × 4.56 = 5.6088 → 5.61 при precision=3."""
        ctx = ArithmeticContext(precision=3)
        assert ctx.multiply(D("1.23"), D("4.56")).to_string() == "5.61"

    def test_product_with_zero(self) -> None:
        ctx = ArithmeticContext(precision=10)
        result = ctx.multiply(D("-7.5"), ZERO)
        assert result.is_zero()
        assert result.sign == 0

    @pytest.mark.parametrize("text", ["3.14", "-2.5", "0", "123456789", "0.000000001"])
    def test_multiplicative_identity(self, text) -> None:
        """x × 1 == x."""
        ctx = ArithmeticContext(precision=10)
        x = D(text)
        assert ctx.multiply(x, ONE) == x
        assert ctx.multiply(ONE, x) == x


# =============================================================================
# ТЕСТЫ: divide
# =============================================================================


class TestDivide:
    """Тесты деления."""

    def test_non_terminating_quotient(self) -> None:
        ctx = ArithmeticContext(precision=5)
        assert ctx.divide(D("2"), D("3")).to_string() == "0.66667"
        assert ctx.divide(D("-1"), D("3")).to_string() == "-0.33333"

    def test_exact_quotient_stripped_to_ideal_scale(self) -> None:
        ctx = ArithmeticContext(precision=10)
        assert ctx.divide(D("1"), D("4")).to_string() == "0.25"
        assert ctx.divide(D("10"), D("4")).to_string() == "2.5"
        assert ctx.divide(D("1.00"), D("0.5")).to_string() == "2.0"

    def test_exact_quotient_negative_ideal_scale(self) -> None:
        ctx = ArithmeticContext(precision=10)
        result = ctx.divide(D("100"), D("0.1"))
        assert result.to_string() == "1000"
        assert result.scale == -1

    def test_half_up_tie(self) -> None:
        """0.125 при precision=2 → 0.13."""
        ctx = ArithmeticContext(precision=2)
        assert ctx.divide(D("1"), D("8")).to_string() == "0.13"

    def test_carry_on_rounding(self) -> None:
        ctx = ArithmeticContext(precision=3)
        assert ctx.divide(D("0.9999"), D("1")).to_string() == "1.00"

    def test_quotient_has_precision_digits(self) -> None:
        ctx = ArithmeticContext(precision=30)
        result = ctx.divide(D("22"), D("7"))
        assert result.digits == 30
        assert result.to_string() == "3.14285714285714285714285714286"

    def test_zero_numerator(self) -> None:
        ctx = ArithmeticContext(precision=5)
        assert ctx.divide(ZERO, D("7")).is_zero()

    @pytest.mark.parametrize("x", ["1", "-3.5", "0", "123456789.987654321"])
    @pytest.mark.parametrize("zero", ["0", "0.000", "-0"])
    def test_divide_by_zero(self, x, zero) -> None:
        ctx = ArithmeticContext(precision=10)
        with pytest.raises(DivideByZero):
            ctx.divide(D(x), D(zero))

    def test_divide_by_zero_is_zero_division_error(self) -> None:
        ctx = ArithmeticContext(precision=10)
        with pytest.raises(ZeroDivisionError):
            ctx.divide(ONE, ZERO)


# =============================================================================
# ТЕСТЫ: round_to_scale / round
# =============================================================================


class TestRoundToScale:
    """Тесты округления до scale."""

    @pytest.mark.parametrize(
        "text, scale, expected",
        [
            ("2.345", 2, "2.35"),
            ("-2.345", 2, "-2.35"),
            ("2.344", 2, "2.34"),
            ("2.3", 5, "2.3"),
            ("0.005", 2, "0.01"),
            ("0.004", 2, "0.00"),
            ("1234.5", -2, "1200"),
            ("1250", -2, "1300"),
            ("9.96", 1, "10.0"),
            ("3.14159265358979", 8, "3.14159265"),
        ],
    )
    def test_round(self, text, scale, expected) -> None:
        assert round_to_scale(D(text), scale, RoundingMode.HALF_UP).to_string() == expected

    def test_rounded_to_zero_is_unsigned(self) -> None:
        result = round_to_scale(D("-0.004"), 2)
        assert result.is_zero()
        assert result.to_string() == "0.00"

    @pytest.mark.parametrize(
        "text", ["2.345", "-0.5", "1.99999", "3.14159265358979323846", "1250", "0"]
    )
    @pytest.mark.parametrize("scale", [-1, 0, 1, 3, 10])
    def test_idempotent(self, text, scale) -> None:
        """round(round(x, n), n) == round(x, n)."""
        once = round_to_scale(D(text), scale)
        twice = round_to_scale(once, scale)
        assert twice == once
        assert twice.to_string() == once.to_string()

    def test_independent_of_context_precision(self) -> None:
        """Результат не ограничен precision какого-либо контекста."""
        text = "1234567890123456789012345.123456789"
        assert round_to_scale(D(text), 3).to_string() == "1234567890123456789012345.123"


class TestContextRound:
    """Тесты округления до значащих цифр контекста."""

    def test_round_significant(self) -> None:
        ctx = ArithmeticContext(precision=9)
        assert ctx.round(D("3.14159265358979")).to_string() == "3.14159265"

    def test_round_fitting_value_unchanged(self) -> None:
        ctx = ArithmeticContext(precision=9)
        assert ctx.round(D("3.14")).to_string() == "3.14"

    def test_round_to_single_digit(self) -> None:
        ctx = ArithmeticContext(precision=1)
        assert ctx.round(D("3.5")).to_string() == "4"
        assert ctx.round(D("-0.0951")).to_string() == "-0.1"
