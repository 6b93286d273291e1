"""
DecimalArithmetic Backends — взаимозаменяемые decimal-движки

Единый набор возможностей, через который series engine и workload
работают с любым decimal-движком:

- NativeDecimalArithmetic: DecimalValue + ArithmeticContext
- StdlibDecimalArithmetic: модуль decimal стандартной библиотеки

Оба backend'а используют одну грамматику литералов, одну таксономию ошибок
и один формат вывода (fixed-point, см. DecimalValue.to_string).
"""

import decimal
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Final

from src.core.arith.context import ArithmeticContext, RoundingMode, round_to_scale
from src.core.arith.decimal_value import DecimalValue, split_literal
from src.core.arith.errors import DivideByZero, FormatError, InvalidPrecision


# =============================================================================
# BASE
# =============================================================================


class DecimalArithmetic(ABC):
    """
    Абстрактный decimal backend с фиксированной precision.

    Значения backend'а непрозрачны для вызывающего кода: их можно только
    передавать обратно в операции того же backend'а.
    """

    name: str = "abstract"

    def __init__(self, precision: int, rounding_mode: RoundingMode = RoundingMode.HALF_UP):
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise InvalidPrecision(precision, f"precision must be an int, got {precision!r}")
        if precision <= 0:
            raise InvalidPrecision(precision)
        self.precision = precision
        self.rounding_mode = rounding_mode

    @abstractmethod
    def from_integer(self, value: int) -> Any: ...

    @abstractmethod
    def from_string(self, text: str) -> Any: ...

    @abstractmethod
    def add(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def subtract(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def multiply(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def divide(self, a: Any, b: Any) -> Any: ...

    @abstractmethod
    def compare(self, a: Any, b: Any) -> int: ...

    @abstractmethod
    def copy_abs(self, value: Any) -> Any: ...

    @abstractmethod
    def round_to_scale(self, value: Any, target_scale: int) -> Any: ...

    @abstractmethod
    def round_significant(self, value: Any, precision: int) -> Any: ...

    @abstractmethod
    def to_string(self, value: Any) -> str: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(precision={self.precision})"


# =============================================================================
# NATIVE
# =============================================================================


class NativeDecimalArithmetic(DecimalArithmetic):
    """Backend на собственном DecimalValue / ArithmeticContext."""

    name = "native"

    def __init__(self, precision: int, rounding_mode: RoundingMode = RoundingMode.HALF_UP):
        super().__init__(precision, rounding_mode)
        self.context = ArithmeticContext(precision=precision, rounding_mode=rounding_mode)

    def from_integer(self, value: int) -> DecimalValue:
        return DecimalValue.from_integer(value)

    def from_string(self, text: str) -> DecimalValue:
        return DecimalValue.from_string(text)

    def add(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        return self.context.add(a, b)

    def subtract(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        return self.context.subtract(a, b)

    def multiply(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        return self.context.multiply(a, b)

    def divide(self, a: DecimalValue, b: DecimalValue) -> DecimalValue:
        return self.context.divide(a, b)

    def compare(self, a: DecimalValue, b: DecimalValue) -> int:
        return DecimalValue.compare(a, b)

    def copy_abs(self, value: DecimalValue) -> DecimalValue:
        return value.copy_abs()

    def round_to_scale(self, value: DecimalValue, target_scale: int) -> DecimalValue:
        return round_to_scale(value, target_scale, self.rounding_mode)

    def round_significant(self, value: DecimalValue, precision: int) -> DecimalValue:
        return self.context.with_precision(precision).round(value)

    def to_string(self, value: DecimalValue) -> str:
        return value.to_string()


# =============================================================================
# STDLIB
# =============================================================================

_STDLIB_ROUNDING: Final[Dict[RoundingMode, str]] = {
    RoundingMode.HALF_UP: decimal.ROUND_HALF_UP,
}


class StdlibDecimalArithmetic(DecimalArithmetic):
    """
    Backend на decimal.Decimal с локальным decimal.Context.

    Context создаётся на экземпляр backend'а (не глобальный), поэтому
    параллельные вычисления с разной precision не влияют друг на друга.
    """

    name = "stdlib"

    def __init__(self, precision: int, rounding_mode: RoundingMode = RoundingMode.HALF_UP):
        super().__init__(precision, rounding_mode)
        self.context = self._make_context(precision)

    def _make_context(self, precision: int) -> decimal.Context:
        return decimal.Context(
            prec=precision,
            rounding=_STDLIB_ROUNDING[self.rounding_mode],
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )

    def from_integer(self, value: int) -> decimal.Decimal:
        return decimal.Decimal(int(value))

    def from_string(self, text: str) -> decimal.Decimal:
        # Своя грамматика: decimal.Decimal принимает экспоненты, NaN и пробелы
        sign, integer_digits, fraction_digits = split_literal(text)
        literal = f"{'-' if sign < 0 else ''}{integer_digits or '0'}"
        if fraction_digits:
            literal += f".{fraction_digits}"
        try:
            return decimal.Decimal(literal)
        except (ValueError, decimal.InvalidOperation) as e:
            raise FormatError(text, "decimal literal too long") from e

    def add(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self.context.add(a, b)

    def subtract(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self.context.subtract(a, b)

    def multiply(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self.context.multiply(a, b)

    def divide(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        if b.is_zero():
            raise DivideByZero(f"division of {self.to_string(a)} by zero")
        return self.context.divide(a, b)

    def compare(self, a: decimal.Decimal, b: decimal.Decimal) -> int:
        return int(a.compare(b))

    def copy_abs(self, value: decimal.Decimal) -> decimal.Decimal:
        return value.copy_abs()

    def round_to_scale(self, value: decimal.Decimal, target_scale: int) -> decimal.Decimal:
        if -value.as_tuple().exponent <= target_scale:
            return value
        # quantize требует precision, достаточную для всех цифр результата
        digits = max(value.adjusted() + target_scale + 2, 1)
        context = self._make_context(max(digits, self.precision))
        return value.quantize(decimal.Decimal(1).scaleb(-target_scale), context=context)

    def round_significant(self, value: decimal.Decimal, precision: int) -> decimal.Decimal:
        return self._make_context(precision).plus(value)

    def to_string(self, value: decimal.Decimal) -> str:
        if value.is_zero():
            value = value.copy_abs()
        return format(value, "f")


# =============================================================================
# REGISTRY
# =============================================================================

BACKENDS: Final[Dict[str, Callable[[int], DecimalArithmetic]]] = {
    NativeDecimalArithmetic.name: NativeDecimalArithmetic,
    StdlibDecimalArithmetic.name: StdlibDecimalArithmetic,
}


def get_backend(name: str, precision: int) -> DecimalArithmetic:
    """
    Создание backend'а по имени.

    Raises:
        KeyError: Неизвестное имя backend'а
        InvalidPrecision: precision <= 0
    """
    try:
        factory = BACKENDS[name]
    except KeyError:
        raise KeyError(f"Unknown decimal backend {name!r}; known: {sorted(BACKENDS)}") from None
    return factory(precision)
