"""
Verification — сверка результатов с эталонными константами.
"""

from .oracle import PI_REFERENCE, CorrectnessOracle

__all__ = [
    "PI_REFERENCE",
    "CorrectnessOracle",
]
