"""
DecimalValue — Immutable Arbitrary-Precision Decimal

Иммутабельное знаковое decimal-число произвольной точности:

    value = sign × coefficient × 10^-scale

- sign ∈ {+1, -1, 0}
- coefficient — неотрицательный int произвольной длины
- scale — количество цифр coefficient после десятичной точки (может быть < 0)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. coefficient == 0 ⇔ sign == 0 (канонический ноль без знака)
2. Значение никогда не мутирует: каждая операция создаёт новый объект
3. Сравнение точное (без округления), ноль равен нулю при любом scale
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Final

from src.core.arith.errors import FormatError

# =============================================================================
# ГРАММАТИКА ЛИТЕРАЛА
# =============================================================================

# [sign] digits [. digits]: только ASCII-цифры, без экспоненты и пробелов
_LITERAL_RE: Final = re.compile(r"([+-]?)([0-9]*)(?:\.([0-9]*))?")


def split_literal(text: str) -> tuple[int, str, str]:
    """
    Разбор decimal-литерала на (sign, integer_digits, fraction_digits).

    Общая грамматика для всех backend'ов: необязательный знак, целая часть,
    необязательная точка и дробная часть. Хотя бы одна цифра обязательна.

    Args:
        text: Исходная строка

    Returns:
        (sign, integer_digits, fraction_digits), где sign ∈ {+1, -1}

    Raises:
        FormatError: Нет цифр, одиночный знак или посторонние символы

    Examples:
        >>> split_literal("-12.50")
        (-1, '12', '50')
        >>> split_literal(".5")
        (1, '', '5')
    """
    if not isinstance(text, str):
        raise TypeError(f"decimal literal must be str, got {type(text).__name__}")

    match = _LITERAL_RE.fullmatch(text)
    if match is None:
        raise FormatError(text, "unexpected characters in decimal literal")

    sign_char, integer_digits, fraction_digits = match.groups()
    fraction_digits = fraction_digits or ""

    if not integer_digits and not fraction_digits:
        if sign_char:
            raise FormatError(text, "isolated sign in decimal literal")
        raise FormatError(text, "no digits in decimal literal")

    return (-1 if sign_char == "-" else 1), integer_digits, fraction_digits


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ПРИМИТИВЫ
# =============================================================================


def digit_count(n: int) -> int:
    """
    Количество десятичных цифр неотрицательного int (0 → 1).

    Не использует str(n): строковая конверсия ограничена интерпретатором
    для очень длинных чисел.
    """
    if n < 0:
        raise ValueError(f"digit_count expects a non-negative int, got {n}")
    if n == 0:
        return 1

    # 1233 / 4096 ≈ log10(2) снизу, поэтому count не превышает истинное значение
    count = max(1, (n.bit_length() * 1233) >> 12)
    while n >= 10**count:
        count += 1
    return count


# =============================================================================
# DECIMAL VALUE
# =============================================================================


@total_ordering
@dataclass(frozen=True, eq=False)
class DecimalValue:
    """
    Иммутабельное decimal-значение (sign, coefficient, scale).

    Конструируется только через from_integer / from_string или как результат
    арифметической операции (см. ArithmeticContext). Равенство и порядок
    определяются через compare(): Decimal("1.0") == Decimal("1").
    """

    sign: int
    coefficient: int
    scale: int = 0

    def __post_init__(self) -> None:
        if self.sign not in (-1, 0, 1):
            raise ValueError(f"sign must be -1, 0 or +1, got {self.sign}")
        if self.coefficient < 0:
            raise ValueError(f"coefficient must be non-negative, got {self.coefficient}")
        if (self.coefficient == 0) != (self.sign == 0):
            raise ValueError(
                f"zero coefficient requires sign 0 and vice versa "
                f"(sign={self.sign}, coefficient={self.coefficient})"
            )

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_parts(cls, negative: bool, coefficient: int, scale: int) -> "DecimalValue":
        """Сборка из модуля и флага знака с нормализацией нуля."""
        if coefficient == 0:
            return cls(0, 0, scale)
        return cls(-1 if negative else 1, coefficient, scale)

    @classmethod
    def from_signed(cls, signed_coefficient: int, scale: int) -> "DecimalValue":
        """Сборка из знакового coefficient."""
        return cls.from_parts(signed_coefficient < 0, abs(signed_coefficient), scale)

    @classmethod
    def from_integer(cls, value: int, scale: int = 0) -> "DecimalValue":
        """
        Точное построение: value × 10^-scale. Округления нет.

        Examples:
            >>> DecimalValue.from_integer(314, 2).to_string()
            '3.14'
            >>> DecimalValue.from_integer(-5).to_string()
            '-5'
        """
        return cls.from_signed(int(value), int(scale))

    @classmethod
    def from_string(cls, text: str) -> "DecimalValue":
        """
        Парсинг decimal-литерала.

        Raises:
            FormatError: Нет цифр, одиночный знак или посторонние символы
        """
        sign, integer_digits, fraction_digits = split_literal(text)
        try:
            coefficient = int(integer_digits + fraction_digits)
        except ValueError as e:
            # Лимит int/str конверсии интерпретатора
            raise FormatError(text, "decimal literal too long") from e
        return cls.from_parts(sign < 0, coefficient, len(fraction_digits))

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def signed_coefficient(self) -> int:
        return self.sign * self.coefficient

    @property
    def digits(self) -> int:
        """Количество значащих цифр coefficient."""
        return digit_count(self.coefficient)

    def adjusted(self) -> int:
        """Показатель старшей цифры: 3.14 → 0, 0.05 → -2, 1200 → 3."""
        return self.digits - 1 - self.scale

    def is_zero(self) -> bool:
        return self.sign == 0

    def negate(self) -> "DecimalValue":
        return DecimalValue(-self.sign, self.coefficient, self.scale)

    def copy_abs(self) -> "DecimalValue":
        return DecimalValue(abs(self.sign), self.coefficient, self.scale)

    def rescaled(self, scale: int) -> int:
        """
        Знаковый coefficient при более мелком scale (точно, без округления).

        Raises:
            ValueError: Если scale меньше текущего (потребовалось бы округление)
        """
        if scale < self.scale:
            raise ValueError(f"cannot rescale from {self.scale} down to {scale} exactly")
        return self.signed_coefficient * 10 ** (scale - self.scale)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    @staticmethod
    def compare(a: "DecimalValue", b: "DecimalValue") -> int:
        """
        Точное сравнение: -1 / 0 / +1.

        Оба операнда приводятся к большему из двух scale. Значения,
        отличающиеся только хвостовыми нулями, равны.

        Examples:
            >>> DecimalValue.compare(DecimalValue.from_string("1.10"),
            ...                      DecimalValue.from_string("1.1"))
            0
        """
        if a.sign != b.sign:
            return -1 if a.sign < b.sign else 1
        if a.sign == 0:
            return 0

        common_scale = max(a.scale, b.scale)
        left = a.rescaled(common_scale)
        right = b.rescaled(common_scale)

        if left == right:
            return 0
        return -1 if left < right else 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return DecimalValue.compare(self, other) == 0

    def __lt__(self, other: "DecimalValue") -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return DecimalValue.compare(self, other) < 0

    def __hash__(self) -> int:
        # Хеш по нормализованной форме, согласован с __eq__
        coefficient, scale = self.coefficient, self.scale
        if coefficient == 0:
            return hash((0, 0, 0))
        while coefficient % 10 == 0:
            coefficient //= 10
            scale -= 1
        return hash((self.sign, coefficient, scale))

    # -------------------------------------------------------------------------
    # Форматирование
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """
        Каноническое fixed-point представление.

        Знак только для отрицательных, дробная часть дополняется ведущими
        нулями до scale; без точки при scale <= 0.

        Examples:
            >>> DecimalValue.from_integer(5, 3).to_string()
            '0.005'
            >>> DecimalValue.from_integer(12, -2).to_string()
            '1200'
            >>> DecimalValue.from_string("-0.00").to_string()
            '0.00'
        """
        digits = str(self.coefficient)
        prefix = "-" if self.sign < 0 else ""

        if self.scale <= 0:
            if self.coefficient == 0:
                return "0"
            return prefix + digits + "0" * (-self.scale)

        digits = digits.rjust(self.scale + 1, "0")
        return f"{prefix}{digits[:-self.scale]}.{digits[-self.scale:]}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"DecimalValue({self.to_string()!r})"


# Общие константы (только чтение)
ZERO: Final[DecimalValue] = DecimalValue(0, 0, 0)
ONE: Final[DecimalValue] = DecimalValue(1, 1, 0)
