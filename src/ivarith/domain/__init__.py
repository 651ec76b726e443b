"""
Domain models and value objects.

Contains the fuzzy-set layer composed over interval arithmetic.
"""

from src.ivarith.domain.fuzzy_set import CenterOutOfRange, FuzzySet

__all__ = [
    "FuzzySet",
    "CenterOutOfRange",
]
