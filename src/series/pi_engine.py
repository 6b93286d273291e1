"""PiSeriesEngine — вычисление π рядом с фиксированной точкой сходимости.

Ряд (через четыре аккумулятора и слагаемое t):

    s = t = 3, n = 1, na = 0, d = 0, da = 24
    повторять:
        previous = s
        n += na;  na += 8
        d += da;  da += 32
        t = t × n ÷ d
        s += t
    пока s != previous

Каждая итерация добавляет примерно постоянное число верных цифр, поэтому
число итераций растёт с точностью. Все операции выполняются с рабочей
точностью ceil(target × 1.1) значащих цифр (guard digits), результат
округляется HALF_UP до target - 1 цифр после точки (старшая "3" —
целая цифра, поэтому target значащих цифр = target - 1 дробных).

States:
- RUNNING: частичная сумма ещё меняется
- CONVERGED: терминальное, s == previous (или |s - previous| < 10^-target)
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Final, Iterator, Optional

from src.core.arith.backends import DecimalArithmetic, NativeDecimalArithmetic
from src.core.arith.errors import InvalidPrecision, ResourceExhausted

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ РЯДА
# =============================================================================

# Приращения аккумуляторов (только чтение, общие для всех вычислений)
NA_INCREMENT: Final[int] = 8
DA_SEED: Final[int] = 24
DA_INCREMENT: Final[int] = 32

# Эмпирический запас guard digits; достаточность для любой точности не доказана
GUARD_DIGIT_MULTIPLIER_DEFAULT: Final[float] = 1.1

# Потолок рабочей точности (ниже лимита int/str конверсии интерпретатора)
MAX_WORKING_PRECISION_DEFAULT: Final[int] = 4000


# =============================================================================
# ENUMS / CONFIG
# =============================================================================


class SeriesState(str, Enum):
    """Состояние вычисления ряда."""

    RUNNING = "RUNNING"
    CONVERGED = "CONVERGED"


class ConvergencePolicy(str, Enum):
    """Критерий остановки.

    FIXED_POINT: частичная сумма не изменилась на рабочей точности
    EPSILON: |s - previous| < 10^-target
    """

    FIXED_POINT = "FIXED_POINT"
    EPSILON = "EPSILON"


@dataclass(frozen=True)
class PiSeriesConfig:
    """Конфигурация series engine."""

    guard_digit_multiplier: float = GUARD_DIGIT_MULTIPLIER_DEFAULT
    max_working_precision: int = MAX_WORKING_PRECISION_DEFAULT
    convergence: ConvergencePolicy = ConvergencePolicy.FIXED_POINT


@dataclass(frozen=True)
class SeriesStep:
    """Снапшот одной итерации ряда."""

    iteration: int
    term: Any
    partial_sum: Any
    previous_sum: Any
    state: SeriesState


@dataclass(frozen=True)
class PiSeriesResult:
    """Результат вычисления π."""

    value: Any
    text: str
    target_precision: int
    working_precision: int
    iterations: int
    state: SeriesState
    backend: str


# =============================================================================
# ENGINE
# =============================================================================


class PiSeriesEngine:
    """Series engine поверх произвольного DecimalArithmetic backend'а.

    Экземпляр не хранит состояния вычисления: аккумуляторы живут только
    внутри одного вызова, поэтому вычисления для разных точностей
    независимы и могут выполняться параллельно.
    """

    def __init__(
        self,
        config: Optional[PiSeriesConfig] = None,
        backend_factory: Callable[[int], DecimalArithmetic] = NativeDecimalArithmetic,
    ):
        """
        Args:
            config: конфигурация (default: PiSeriesConfig())
            backend_factory: фабрика backend'а по рабочей точности
        """
        self.config = config or PiSeriesConfig()
        self.backend_factory = backend_factory

    def working_precision(self, target_precision: int) -> int:
        """Рабочая точность = ceil(target × multiplier).

        Raises:
            InvalidPrecision: target_precision <= 0
            ResourceExhausted: рабочая точность выше max_working_precision
        """
        if isinstance(target_precision, bool) or not isinstance(target_precision, int):
            raise InvalidPrecision(
                target_precision, f"precision must be an int, got {target_precision!r}"
            )
        if target_precision <= 0:
            raise InvalidPrecision(target_precision)

        work = math.ceil(target_precision * self.config.guard_digit_multiplier)
        if work > self.config.max_working_precision:
            raise ResourceExhausted(work, self.config.max_working_precision)
        return work

    def iter_steps(self, target_precision: int) -> Iterator[SeriesStep]:
        """Пошаговое выполнение ряда до CONVERGED.

        Валидация выполняется сразу (до первой итерации).
        """
        work = self.working_precision(target_precision)
        arith = self.backend_factory(work)
        return self._run(arith, target_precision)

    def compute(self, target_precision: int) -> PiSeriesResult:
        """Вычисление π с target_precision значащими цифрами.

        Raises:
            InvalidPrecision: target_precision <= 0
            ResourceExhausted: рабочая точность выше потолка
        """
        work = self.working_precision(target_precision)
        arith = self.backend_factory(work)

        last_step: Optional[SeriesStep] = None
        for last_step in self._run(arith, target_precision):
            pass
        if last_step is None or last_step.state is not SeriesState.CONVERGED:
            raise RuntimeError(
                f"pi series for precision {target_precision} ended without converging"
            )

        value = arith.round_to_scale(last_step.partial_sum, target_precision - 1)
        text = arith.to_string(value)

        logger.debug(
            f"pi[{arith.name}] target={target_precision} work={work} "
            f"converged after {last_step.iteration} iterations"
        )

        return PiSeriesResult(
            value=value,
            text=text,
            target_precision=target_precision,
            working_precision=work,
            iterations=last_step.iteration,
            state=last_step.state,
            backend=arith.name,
        )

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _run(self, arith: DecimalArithmetic, target_precision: int) -> Iterator[SeriesStep]:
        eight = arith.from_integer(NA_INCREMENT)
        thirty_two = arith.from_integer(DA_INCREMENT)

        s = t = arith.from_integer(3)
        n = arith.from_integer(1)
        na = arith.from_integer(0)
        d = arith.from_integer(0)
        da = arith.from_integer(DA_SEED)

        epsilon = None
        if self.config.convergence is ConvergencePolicy.EPSILON:
            epsilon = arith.from_string("0." + "0" * (target_precision - 1) + "1")

        iteration = 0
        while True:
            previous = s
            n = arith.add(n, na)
            na = arith.add(na, eight)
            d = arith.add(d, da)
            da = arith.add(da, thirty_two)
            t = arith.multiply(t, n)
            t = arith.divide(t, d)
            s = arith.add(s, t)
            iteration += 1

            if epsilon is None:
                converged = arith.compare(s, previous) == 0
            else:
                delta = arith.copy_abs(arith.subtract(s, previous))
                converged = arith.compare(delta, epsilon) < 0

            state = SeriesState.CONVERGED if converged else SeriesState.RUNNING
            yield SeriesStep(
                iteration=iteration,
                term=t,
                partial_sum=s,
                previous_sum=previous,
                state=state,
            )
            if converged:
                return
