"""
Domain models and value objects.

Contains the report models produced by the decimal workload.
"""

from src.core.domain.reports import (
    DECIMAL_PATTERN,
    OperationKind,
    OperationReport,
    PiRunReport,
)

__all__ = [
    "DECIMAL_PATTERN",
    "OperationKind",
    "OperationReport",
    "PiRunReport",
]
