"""
Math modules для ivarith

Интервальная арифметика и decimal-примитивы фиксированной точности.
"""

# Decimal Context
from src.ivarith.math.decimal_context import (
    DEFAULT_CONTEXTS,
    ArithmeticContexts,
    exact_add,
    exact_subtract,
    factorial,
    make_context,
    make_contexts,
    spans_zero,
    to_decimal,
    validate_terms,
)

# Interval
from src.ivarith.math.interval import (
    DivisionByZero,
    DivisionUndefined,
    Interval,
    IntervalArithmeticError,
    InvalidRange,
)

__all__ = [
    # Decimal Context — Types
    "ArithmeticContexts",
    "DEFAULT_CONTEXTS",
    # Decimal Context — Functions
    "exact_add",
    "exact_subtract",
    "factorial",
    "make_context",
    "make_contexts",
    "spans_zero",
    "to_decimal",
    "validate_terms",
    # Interval — Exceptions
    "IntervalArithmeticError",
    "InvalidRange",
    "DivisionUndefined",
    "DivisionByZero",
    # Interval — Types
    "Interval",
]
