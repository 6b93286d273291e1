"""Series engine — итеративное вычисление π произвольной точности.

Содержит:
- PiSeriesEngine: ряд с guard digits и проверкой сходимости
- PiSeriesConfig / ConvergencePolicy: настройки
- SeriesStep / PiSeriesResult: снапшоты и результат
"""

from .pi_engine import (
    DA_INCREMENT,
    DA_SEED,
    GUARD_DIGIT_MULTIPLIER_DEFAULT,
    MAX_WORKING_PRECISION_DEFAULT,
    NA_INCREMENT,
    ConvergencePolicy,
    PiSeriesConfig,
    PiSeriesEngine,
    PiSeriesResult,
    SeriesState,
    SeriesStep,
)

__all__ = [
    "DA_INCREMENT",
    "DA_SEED",
    "GUARD_DIGIT_MULTIPLIER_DEFAULT",
    "MAX_WORKING_PRECISION_DEFAULT",
    "NA_INCREMENT",
    "ConvergencePolicy",
    "PiSeriesConfig",
    "PiSeriesEngine",
    "PiSeriesResult",
    "SeriesState",
    "SeriesStep",
]
