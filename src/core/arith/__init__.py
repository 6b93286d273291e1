"""
Decimal arithmetic core для decimal-pi-bench

Иммутабельные decimal-значения произвольной точности, контекст точности
и округления, взаимозаменяемые backend'ы и таксономия ошибок.
"""

# Errors
from src.core.arith.errors import (
    DecimalArithmeticError,
    DivideByZero,
    FormatError,
    InvalidPrecision,
    MismatchError,
    ResourceExhausted,
)

# Values
from src.core.arith.decimal_value import (
    ONE,
    ZERO,
    DecimalValue,
    digit_count,
    split_literal,
)

# Context
from src.core.arith.context import (
    ArithmeticContext,
    RoundingMode,
    round_to_scale,
)

# Backends
from src.core.arith.backends import (
    BACKENDS,
    DecimalArithmetic,
    NativeDecimalArithmetic,
    StdlibDecimalArithmetic,
    get_backend,
)

__all__ = [
    # Errors
    "DecimalArithmeticError",
    "DivideByZero",
    "FormatError",
    "InvalidPrecision",
    "MismatchError",
    "ResourceExhausted",
    # Values
    "ONE",
    "ZERO",
    "DecimalValue",
    "digit_count",
    "split_literal",
    # Context
    "ArithmeticContext",
    "RoundingMode",
    "round_to_scale",
    # Backends
    "BACKENDS",
    "DecimalArithmetic",
    "NativeDecimalArithmetic",
    "StdlibDecimalArithmetic",
    "get_backend",
]
