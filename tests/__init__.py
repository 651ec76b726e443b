"""
Test suite for ivarith

Contains:
- tests/unit/          : Unit tests for interval arithmetic, fuzzy sets and contracts
"""
