"""
Workload Reports — модели отчётов по прогонам

Immutable Pydantic модели результатов workload'а:
- PiRunReport: вычисление π на одной точности одним backend'ом
- OperationReport: одна элементарная операция над строковыми операндами

Полная совместимость с JSON Schema (src/core/contracts/schema/*.json).
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

# Decimal-литерал в каноническом fixed-point формате
DECIMAL_PATTERN = r"^-?[0-9]+(\.[0-9]+)?$"


# =============================================================================
# ENUMS
# =============================================================================


class OperationKind(str, Enum):
    """Элементарная операция workload'а."""

    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    ROUND = "ROUND"


# =============================================================================
# REPORT MODELS
# =============================================================================


class PiRunReport(BaseModel):
    """
    Отчёт о вычислении π.

    matched=False означает расхождение с эталоном (expected/value в отчёте)
    или ошибку вычисления (error).
    """

    schema_version: str = Field("1", pattern="^1$", description="Версия схемы")
    backend: str = Field(..., min_length=1, description="Имя decimal backend'а")
    target_precision: int = Field(..., description="Запрошенные значащие цифры")
    working_precision: Optional[int] = Field(
        None, gt=0, description="Рабочая точность с guard digits"
    )
    iterations: Optional[int] = Field(None, ge=1, description="Итерации до сходимости")

    value: Optional[str] = Field(None, pattern=DECIMAL_PATTERN, description="Результат")
    expected: Optional[str] = Field(None, pattern=DECIMAL_PATTERN, description="Эталон")
    matched: bool = Field(..., description="Совпадение с эталоном")
    error: Optional[str] = Field(None, description="Сообщение об ошибке")

    model_config = {"frozen": True}


class OperationReport(BaseModel):
    """
    Отчёт об элементарной операции.

    Ровно одно из result / error заполнено.
    """

    schema_version: str = Field("1", pattern="^1$", description="Версия схемы")
    backend: str = Field(..., min_length=1, description="Имя decimal backend'а")
    operation: OperationKind = Field(..., description="Операция")
    precision: int = Field(..., description="Точность контекста")
    operands: List[str] = Field(
        ..., max_length=2, description="Операнды (пусто, если их не удалось построить)"
    )

    result: Optional[str] = Field(None, pattern=DECIMAL_PATTERN, description="Результат")
    error: Optional[str] = Field(None, description="Сообщение об ошибке")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_outcome(self) -> "OperationReport":
        """Проверка, что заполнено ровно одно из result / error"""
        if (self.result is None) == (self.error is None):
            raise ValueError("exactly one of result and error must be set")
        return self
