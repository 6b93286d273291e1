"""
Workload Runner — прогон π и элементарных операций по backend'ам

Формирует отчёты (PiRunReport / OperationReport) для набора точностей и
backend'ов. Ошибки вычисления и расхождения с эталоном не прерывают прогон
остальных, независимых вычислений: они фиксируются в отчёте и логируются.
"""

import logging
import random
from typing import Callable, Dict, Final, List, Optional, Sequence, Tuple

from src.core.arith.backends import BACKENDS
from src.core.arith.errors import (
    DecimalArithmeticError,
    InvalidPrecision,
    MismatchError,
    ResourceExhausted,
)
from src.core.domain.reports import OperationKind, OperationReport, PiRunReport
from src.series.pi_engine import PiSeriesConfig, PiSeriesEngine
from src.verification.oracle import CorrectnessOracle
from src.workload.operations import (
    add_strings,
    divide_strings,
    multiply_strings,
    random_operand,
    round_string,
    subtract_strings,
)

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

DEFAULT_PRECISIONS: Final[Tuple[int, ...]] = (9, 19, 38, 100)
DEFAULT_BACKENDS: Final[Tuple[str, ...]] = tuple(BACKENDS)

_BINARY_OPERATIONS: Final[Dict[OperationKind, Callable[[str, str, int, str], str]]] = {
    OperationKind.ADD: add_strings,
    OperationKind.SUBTRACT: subtract_strings,
    OperationKind.MULTIPLY: multiply_strings,
    OperationKind.DIVIDE: divide_strings,
}


# =============================================================================
# π SUITE
# =============================================================================


def run_pi_suite(
    precisions: Sequence[int] = DEFAULT_PRECISIONS,
    backends: Sequence[str] = DEFAULT_BACKENDS,
    config: Optional[PiSeriesConfig] = None,
    oracle: Optional[CorrectnessOracle] = None,
) -> List[PiRunReport]:
    """
    Вычисление π на каждой точности каждым backend'ом со сверкой по эталону.

    Args:
        precisions: Целевые точности (значащие цифры)
        backends: Имена backend'ов (см. BACKENDS)
        config: Конфигурация series engine
        oracle: Эталон (default: CorrectnessOracle())

    Returns:
        Отчёты в порядке backend → precision

    Raises:
        KeyError: Неизвестный backend
    """
    oracle = oracle or CorrectnessOracle()
    reports: List[PiRunReport] = []

    for backend in backends:
        engine = PiSeriesEngine(config=config, backend_factory=BACKENDS[backend])

        for precision in precisions:
            try:
                result = engine.compute(precision)
            except (InvalidPrecision, ResourceExhausted) as e:
                logger.warning(f"pi[{backend}] precision={precision} failed: {e}")
                reports.append(
                    PiRunReport(
                        backend=backend,
                        target_precision=precision,
                        matched=False,
                        error=f"{type(e).__name__}: {e}",
                    )
                )
                continue

            expected: Optional[str] = None
            error: Optional[str] = None
            try:
                expected = oracle.expected(precision)
                matched = oracle.verify(result.text, precision)
            except MismatchError as e:
                logger.warning(f"pi[{backend}] precision={precision} mismatch: {e}")
                matched = False
                error = f"{type(e).__name__}: {e}"
            except InvalidPrecision as e:
                # Точность выше цифр эталона: сверка невозможна
                logger.warning(f"pi[{backend}] precision={precision} not verifiable: {e}")
                matched = False
                error = f"{type(e).__name__}: {e}"

            logger.info(
                f"pi[{backend}] precision={precision} iterations={result.iterations} "
                f"matched={matched}"
            )
            reports.append(
                PiRunReport(
                    backend=backend,
                    target_precision=precision,
                    working_precision=result.working_precision,
                    iterations=result.iterations,
                    value=result.text,
                    expected=expected,
                    matched=matched,
                    error=error,
                )
            )

    return reports


# =============================================================================
# OPERATION SUITE
# =============================================================================


def _run_operation(
    operation: OperationKind,
    operands: List[str],
    precision: int,
    backend: str,
) -> OperationReport:
    try:
        if operation is OperationKind.ROUND:
            result = round_string(operands[0], backend=backend)
        else:
            result = _BINARY_OPERATIONS[operation](operands[0], operands[1], precision, backend)
    except DecimalArithmeticError as e:
        logger.warning(f"{operation.value}[{backend}] precision={precision} failed: {e}")
        return OperationReport(
            backend=backend,
            operation=operation,
            precision=precision,
            operands=operands,
            error=f"{type(e).__name__}: {e}",
        )

    return OperationReport(
        backend=backend,
        operation=operation,
        precision=precision,
        operands=operands,
        result=result,
    )


def run_operation_suite(
    precisions: Sequence[int] = DEFAULT_PRECISIONS,
    backends: Sequence[str] = DEFAULT_BACKENDS,
    rng: Optional[random.Random] = None,
    operands: Optional[Dict[int, Tuple[str, str]]] = None,
) -> List[OperationReport]:
    """
    Прогон add / subtract / multiply / divide / round на одних и тех же
    операндах всеми backend'ами.

    Args:
        precisions: Точности контекста
        backends: Имена backend'ов
        rng: Источник случайных операндов
        operands: Явные операнды {precision: (x, y)}; иначе random_operand

    Returns:
        Отчёты в порядке precision → operation → backend
    """
    rng = rng or random.Random()
    reports: List[OperationReport] = []

    for precision in precisions:
        if operands is not None and precision in operands:
            x, y = operands[precision]
        else:
            try:
                x, y = random_operand(precision, rng), random_operand(precision, rng)
            except InvalidPrecision as e:
                logger.warning(f"operations precision={precision} skipped: {e}")
                for operation in OperationKind:
                    for backend in backends:
                        reports.append(
                            OperationReport(
                                backend=backend,
                                operation=operation,
                                precision=precision,
                                operands=[],
                                error=f"{type(e).__name__}: {e}",
                            )
                        )
                continue

        for operation in OperationKind:
            args = [x] if operation is OperationKind.ROUND else [x, y]
            for backend in backends:
                reports.append(_run_operation(operation, args, precision, backend))

        logger.info(f"operations precision={precision} x={x} y={y} done")

    return reports
