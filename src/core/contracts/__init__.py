"""
Contract Validation Module

Модуль для валидации JSON отчётов decimal-pi-bench.
"""

from .validators import (
    ContractValidator,
    OperationReportValidator,
    PiRunReportValidator,
    SchemaLoader,
    validate_operation_report,
    validate_pi_run_report,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PiRunReportValidator",
    "OperationReportValidator",
    # Functions
    "validate_pi_run_report",
    "validate_operation_report",
]
