"""
JSON Schema Contract Validators

Модуль для валидации JSON отчётов workload'а согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (src/core/contracts/schema/):
- pi_run_report.json
- operation_report.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.reports import OperationReport, PiRunReport


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат рядом с модулем (schema/) и устанавливаются вместе с пакетом.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'pi_run_report')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class PiRunReportValidator(ContractValidator):
    """Валидатор для pi_run_report контракта."""

    def __init__(self):
        super().__init__("pi_run_report")


class OperationReportValidator(ContractValidator):
    """Валидатор для operation_report контракта."""

    def __init__(self):
        super().__init__("operation_report")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_pi_run_report(data: Dict[str, Any] | PiRunReport) -> None:
    """
    Валидация pi_run_report данных (dict или модель).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    if isinstance(data, PiRunReport):
        data = data.model_dump(mode="json")
    PiRunReportValidator().validate(data)


def validate_operation_report(data: Dict[str, Any] | OperationReport) -> None:
    """
    Валидация operation_report данных (dict или модель).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    if isinstance(data, OperationReport):
        data = data.model_dump(mode="json")
    OperationReportValidator().validate(data)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "PiRunReportValidator",
    "OperationReportValidator",
    "ValidationError",
    "validate_pi_run_report",
    "validate_operation_report",
]
