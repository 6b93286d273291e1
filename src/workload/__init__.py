"""
Workload — строковые точки входа и прогоны по backend'ам.
"""

from .operations import (
    DEFAULT_BACKEND,
    ROUND_SCALE,
    add_strings,
    compute_pi,
    divide_strings,
    multiply_strings,
    random_operand,
    round_string,
    subtract_strings,
)
from .runner import (
    DEFAULT_BACKENDS,
    DEFAULT_PRECISIONS,
    run_operation_suite,
    run_pi_suite,
)

__all__ = [
    "DEFAULT_BACKEND",
    "ROUND_SCALE",
    "add_strings",
    "compute_pi",
    "divide_strings",
    "multiply_strings",
    "random_operand",
    "round_string",
    "subtract_strings",
    "DEFAULT_BACKENDS",
    "DEFAULT_PRECISIONS",
    "run_operation_suite",
    "run_pi_suite",
]
