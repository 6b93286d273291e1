"""
Workload Operations — строковые точки входа

Единый внешний интерфейс workload'а: на вход decimal-строки и точность,
на выход decimal-строка в каноническом fixed-point формате.

- compute_pi: π с precision значащими цифрами
- add_strings / subtract_strings / multiply_strings / divide_strings
- round_string: округление до ROUND_SCALE (18) цифр после точки
- random_operand: случайный операнд для сравнения backend'ов
"""

import random
from typing import Final, Optional

from src.core.arith.backends import BACKENDS, get_backend
from src.core.arith.errors import InvalidPrecision
from src.series.pi_engine import PiSeriesConfig, PiSeriesEngine

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

DEFAULT_BACKEND: Final[str] = "native"

# Количество цифр после точки для round_string
ROUND_SCALE: Final[int] = 18

# Точность контекста, в котором выполняется round_string
ROUND_CONTEXT_PRECISION: Final[int] = 28


# =============================================================================
# π
# =============================================================================


def compute_pi(
    precision: int,
    backend: str = DEFAULT_BACKEND,
    config: Optional[PiSeriesConfig] = None,
) -> str:
    """
    π с precision значащими цифрами.

    Examples:
        >>> compute_pi(9)
        '3.14159265'

    Raises:
        InvalidPrecision: precision <= 0
        ResourceExhausted: рабочая точность выше потолка
        KeyError: неизвестный backend
    """
    if backend not in BACKENDS:
        raise KeyError(f"Unknown decimal backend {backend!r}; known: {sorted(BACKENDS)}")
    engine = PiSeriesEngine(config=config, backend_factory=BACKENDS[backend])
    return engine.compute(precision).text


# =============================================================================
# ЭЛЕМЕНТАРНЫЕ ОПЕРАЦИИ
# =============================================================================


def add_strings(x: str, y: str, precision: int, backend: str = DEFAULT_BACKEND) -> str:
    """x + y с precision значащими цифрами."""
    arith = get_backend(backend, precision)
    return arith.to_string(arith.add(arith.from_string(x), arith.from_string(y)))


def subtract_strings(x: str, y: str, precision: int, backend: str = DEFAULT_BACKEND) -> str:
    """x - y с precision значащими цифрами."""
    arith = get_backend(backend, precision)
    return arith.to_string(arith.subtract(arith.from_string(x), arith.from_string(y)))


def multiply_strings(x: str, y: str, precision: int, backend: str = DEFAULT_BACKEND) -> str:
    """x × y с precision значащими цифрами."""
    arith = get_backend(backend, precision)
    return arith.to_string(arith.multiply(arith.from_string(x), arith.from_string(y)))


def divide_strings(x: str, y: str, precision: int, backend: str = DEFAULT_BACKEND) -> str:
    """
    x ÷ y с precision значащими цифрами.

    Raises:
        DivideByZero: y == 0
    """
    arith = get_backend(backend, precision)
    return arith.to_string(arith.divide(arith.from_string(x), arith.from_string(y)))


def round_string(
    x: str,
    backend: str = DEFAULT_BACKEND,
    scale: int = ROUND_SCALE,
) -> str:
    """
    Округление HALF_UP до scale цифр после точки (default: 18).

    Examples:
        >>> round_string("1.1234567890123456785")
        '1.123456789012345679'
    """
    arith = get_backend(backend, ROUND_CONTEXT_PRECISION)
    return arith.to_string(arith.round_to_scale(arith.from_string(x), scale))


# =============================================================================
# СЛУЧАЙНЫЕ ОПЕРАНДЫ
# =============================================================================


def random_operand(precision: int, rng: Optional[random.Random] = None) -> str:
    """
    Случайный операнд из precision цифр 1-9 с точкой внутри.

    Позиция точки случайна в [1, precision - 1], поэтому есть хотя бы одна
    целая и одна дробная цифра; нулей нет.

    Args:
        precision: Количество цифр (>= 2)
        rng: Источник случайности (default: новый random.Random())

    Raises:
        InvalidPrecision: precision < 2
    """
    if precision < 2:
        raise InvalidPrecision(
            precision, f"random operand needs at least 2 digits, got {precision}"
        )

    rng = rng or random.Random()
    radix = rng.randint(1, precision - 1)
    digits = "".join(str(rng.randint(1, 9)) for _ in range(precision))
    return f"{digits[:radix]}.{digits[radix:]}"
