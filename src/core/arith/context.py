"""
ArithmeticContext — Precision-Bound Decimal Operations

Контекст хранит рабочую точность (значащие цифры) и режим округления и
предоставляет операции add / subtract / multiply / divide над DecimalValue.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Контекст иммутабелен: операции читают его, но никогда не изменяют
2. add/subtract/multiply точны, пока результат помещается в precision цифр
3. divide никогда не материализует точное частное (оно может быть бесконечным)
4. round_to_scale не зависит от precision и идемпотентна

HALF_UP:
    Смотрим первую отброшенную цифру; если она >= 5, модуль последней
    сохранённой цифры увеличивается (от нуля). Знак применяется после.
"""

from dataclasses import dataclass, replace
from enum import Enum

from src.core.arith.decimal_value import DecimalValue, digit_count
from src.core.arith.errors import DivideByZero, InvalidPrecision


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """
    Режим округления.

    HALF_UP: к ближайшему, половина — от нуля.
    """

    HALF_UP = "HALF_UP"


# =============================================================================
# ОКРУГЛЕНИЕ COEFFICIENT
# =============================================================================


def _drop_digits(coefficient: int, drop: int, mode: RoundingMode) -> int:
    """Отбрасывает drop младших цифр модуля с округлением по mode."""
    divisor = 10**drop
    kept, dropped = divmod(coefficient, divisor)

    if mode is RoundingMode.HALF_UP:
        # dropped >= divisor / 2 ⇔ первая отброшенная цифра >= 5
        if dropped * 2 >= divisor:
            kept += 1
    else:
        raise ValueError(f"Unsupported rounding mode: {mode}")

    return kept


def _fit_precision(
    negative: bool,
    coefficient: int,
    scale: int,
    precision: int,
    mode: RoundingMode,
) -> DecimalValue:
    """
    Ограничение результата precision значащими цифрами.

    Если точный результат уже помещается, он возвращается без изменений.
    """
    digits = digit_count(coefficient)
    if digits <= precision:
        return DecimalValue.from_parts(negative, coefficient, scale)

    drop = digits - precision
    coefficient = _drop_digits(coefficient, drop, mode)
    scale -= drop

    # Перенос 99..9 → 100..0 даёт лишнюю (нулевую) цифру
    if digit_count(coefficient) > precision:
        coefficient //= 10
        scale -= 1

    return DecimalValue.from_parts(negative, coefficient, scale)


def round_to_scale(
    value: DecimalValue,
    target_scale: int,
    mode: RoundingMode = RoundingMode.HALF_UP,
) -> DecimalValue:
    """
    Округление дробной части до target_scale цифр после точки.

    Не зависит от точности контекста. Значение, у которого уже не больше
    target_scale дробных цифр, возвращается как есть (идемпотентность).

    Args:
        value: Исходное значение
        target_scale: Количество цифр после точки (может быть < 0)
        mode: Режим округления (default: HALF_UP)

    Returns:
        Новое DecimalValue со scale == target_scale (или исходное значение)

    Examples:
        >>> round_to_scale(DecimalValue.from_string("2.345"), 2).to_string()
        '2.35'
        >>> round_to_scale(DecimalValue.from_string("-2.345"), 2).to_string()
        '-2.35'
        >>> round_to_scale(DecimalValue.from_string("2.3"), 5).to_string()
        '2.3'
    """
    if value.scale <= target_scale:
        return value

    drop = value.scale - target_scale
    coefficient = _drop_digits(value.coefficient, drop, mode)
    return DecimalValue.from_parts(value.sign < 0, coefficient, target_scale)


# =============================================================================
# ARITHMETIC CONTEXT
# =============================================================================


@dataclass(frozen=True)
class ArithmeticContext:
    """
    Конфигурация арифметики: precision (значащие цифры) + rounding_mode.

    Создаётся один раз на целевую точность и не меняется во время вычисления.

    Raises:
        InvalidPrecision: Если precision <= 0
    """

    precision: int
    rounding_mode: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise InvalidPrecision(
                self.precision, f"precision must be an int, got {self.precision!r}"
            )
        if self.precision <= 0:
            raise InvalidPrecision(self.precision)

    def with_precision(self, precision: int) -> "ArithmeticContext":
        return replace(self, precision=precision)

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def add(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        """
        a + b: точная сумма на более мелком scale, затем ограничение precision.

        Examples:
            >>> ctx = ArithmeticContext(precision=3)
            >>> ctx.add(DecimalValue.from_string("1.5"),
            ...         DecimalValue.from_string("0.25")).to_string()
            '1.75'
            >>> ctx.add(DecimalValue.from_string("9.99"),
            ...         DecimalValue.from_string("0.005")).to_string()
            '10.0'
        """
        scale = max(a.scale, b.scale)
        total = a.rescaled(scale) + b.rescaled(scale)
        return _fit_precision(total < 0, abs(total), scale, self.precision, self.rounding_mode)

    def subtract(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        """a - b с той же политикой округления, что и add."""
        return self.add(a, b.negate())

    def multiply(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        """a × b: точное произведение coefficient, сумма scale, затем precision."""
        return _fit_precision(
            a.sign * b.sign < 0,
            a.coefficient * b.coefficient,
            a.scale + b.scale,
            self.precision,
            self.rounding_mode,
        )

    def divide(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        """
        a ÷ b сразу до precision значащих цифр.

        Частное считается целочисленным делением с одной (или двумя)
        дополнительными цифрами под округление. Если деление точное,
        хвостовые нули снимаются до идеального scale(a) - scale(b).

        Raises:
            DivideByZero: Если b == 0

        Examples:
            >>> ctx = ArithmeticContext(precision=5)
            >>> ctx.divide(DecimalValue.from_integer(2),
            ...            DecimalValue.from_integer(3)).to_string()
            '0.66667'
            >>> ctx.divide(DecimalValue.from_integer(1),
            ...            DecimalValue.from_integer(4)).to_string()
            '0.25'
        """
        if b.is_zero():
            raise DivideByZero(f"division of {a.to_string()} by zero")

        negative = a.sign * b.sign < 0
        ideal_scale = a.scale - b.scale

        if a.is_zero():
            return DecimalValue(0, 0, ideal_scale)

        # Сдвиг, при котором целое частное имеет precision + 1 или + 2 цифры
        shift = self.precision + 1 + b.digits - a.digits
        if shift >= 0:
            numerator, denominator = a.coefficient * 10**shift, b.coefficient
        else:
            numerator, denominator = a.coefficient, b.coefficient * 10 ** (-shift)

        quotient, remainder = divmod(numerator, denominator)
        scale = ideal_scale + shift

        drop = digit_count(quotient) - self.precision
        exact = remainder == 0 and quotient % 10**drop == 0

        result = _fit_precision(negative, quotient, scale, self.precision, self.rounding_mode)
        if not exact:
            return result

        coefficient, scale = result.coefficient, result.scale
        while scale > ideal_scale and coefficient % 10 == 0:
            coefficient //= 10
            scale -= 1
        return DecimalValue.from_parts(negative, coefficient, scale)

    def round(self, value: DecimalValue) -> DecimalValue:
        """Округление произвольного значения до precision значащих цифр."""
        return _fit_precision(
            value.sign < 0, value.coefficient, value.scale, self.precision, self.rounding_mode
        )
