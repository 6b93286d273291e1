"""
Decimal Arithmetic Errors — таксономия ошибок

Все ошибки арифметического ядра, series engine и верификации.
Ни одна ошибка не подавляется и не ретраится: алгоритм детерминирован,
повторный вызов воспроизводит ту же ошибку.
"""


class DecimalArithmeticError(Exception):
    """Базовый класс всех ошибок decimal-арифметики."""
    pass


class FormatError(DecimalArithmeticError, ValueError):
    """
    Некорректная строка при парсинге decimal.

    Возникает при отсутствии цифр, одиночном знаке или посторонних символах.
    """

    def __init__(self, text: str, reason: str = "malformed decimal literal"):
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class DivideByZero(DecimalArithmeticError, ZeroDivisionError):
    """Делитель — точный ноль. Фатально для операции."""
    pass


class InvalidPrecision(DecimalArithmeticError, ValueError):
    """Запрошена неположительная (или неподдерживаемая) точность."""

    def __init__(self, precision: int, message: str | None = None):
        self.precision = precision
        super().__init__(message or f"precision must be positive, got {precision}")


class ResourceExhausted(DecimalArithmeticError):
    """
    Рабочая точность превышает потолок реализации.

    Содержит запрошенную и максимальную точность для диагностики.
    """

    def __init__(self, requested: int, maximum: int):
        self.requested = requested
        self.maximum = maximum
        super().__init__(
            f"working precision {requested} exceeds the configured maximum {maximum}"
        )


class MismatchError(DecimalArithmeticError, AssertionError):
    """
    Результат не совпал с эталоном.

    Используется слоем верификации, не арифметическим ядром.
    """

    def __init__(self, expected: str, actual: str, precision: int | None = None):
        self.expected = expected
        self.actual = actual
        self.precision = precision
        prefix = f"precision {precision}: " if precision is not None else ""
        super().__init__(f"{prefix}expected {expected!r}, got {actual!r}")
