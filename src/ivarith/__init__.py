"""
ivarith — interval arithmetic with fixed-precision decimal semantics.

Closed intervals with enclosure-correct arithmetic and Taylor-series
transcendental functions, plus triangular fuzzy sets composed on top of them.
"""

from src.ivarith.config import ArithmeticConfig, get_default_config, setup_logging
from src.ivarith.domain import CenterOutOfRange, FuzzySet
from src.ivarith.math import (
    DivisionByZero,
    DivisionUndefined,
    Interval,
    IntervalArithmeticError,
    InvalidRange,
)

__version__ = "0.1.0"

__all__ = [
    "ArithmeticConfig",
    "get_default_config",
    "setup_logging",
    "Interval",
    "IntervalArithmeticError",
    "InvalidRange",
    "DivisionUndefined",
    "DivisionByZero",
    "FuzzySet",
    "CenterOutOfRange",
]
