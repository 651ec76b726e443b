"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных Interval и FuzzySet.
"""

from .validators import (
    ContractValidator,
    FuzzySetValidator,
    IntervalValidator,
    SchemaLoader,
    validate_fuzzy_set_payload,
    validate_interval_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IntervalValidator",
    "FuzzySetValidator",
    # Functions
    "validate_interval_payload",
    "validate_fuzzy_set_payload",
]
