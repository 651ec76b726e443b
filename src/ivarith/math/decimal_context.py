"""
Decimal Context — контексты точности и безопасные decimal-примитивы

Модуль обеспечивает единообразную точность всех интервальных операций:
- Три контекста decimal: lower (к −∞), upper (к +∞), nearest (скаляры)
- Безопасная конверсия входных значений в Decimal (без NaN/Inf)
- Точные сумма и разность (без округления) для отклонений fuzzy sets
- Точный факториал в произвольной точности
- Валидация параметров (число членов ряда, конечность значений)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждый результат интервальной арифметики округляется до precision
   значащих цифр (exact_add/exact_subtract не округляют)
2. При outward_rounding нижняя граница никогда не округляется вверх,
   верхняя никогда не округляется вниз
3. NaN/Inf никогда не попадают в границы интервала
4. Все операции детерминированы и воспроизводимы
"""

import decimal
import math
from decimal import Decimal
from typing import Final, NamedTuple, Union

from src.ivarith.config import ArithmeticConfig, get_default_config

DecimalLike = Union[Decimal, int, float, str]

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)


# =============================================================================
# КОНТЕКСТЫ ТОЧНОСТИ
# =============================================================================


class ArithmeticContexts(NamedTuple):
    """Контексты decimal для границ интервала и скалярных операций."""

    lower: decimal.Context
    upper: decimal.Context
    nearest: decimal.Context


def make_context(precision: int, rounding: str) -> decimal.Context:
    """
    Создание decimal.Context с фиксированной точностью.

    Ловушки InvalidOperation/DivisionByZero/Overflow включены: невалидная
    операция всегда поднимает exception, а не возвращает NaN/Inf.

    Args:
        precision: Число значащих цифр
        rounding: Режим округления (decimal.ROUND_*)

    Returns:
        Новый decimal.Context
    """
    return decimal.Context(
        prec=precision,
        rounding=rounding,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )


def make_contexts(config: ArithmeticConfig) -> ArithmeticContexts:
    """
    Построение набора контекстов по конфигурации.

    Args:
        config: Конфигурация арифметики

    Returns:
        ArithmeticContexts(lower, upper, nearest)

    Examples:
        >>> ctx = make_contexts(ArithmeticConfig(precision=4))
        >>> ctx.lower.divide(Decimal(1), Decimal(3))
        Decimal('0.3333')
        >>> ctx.upper.divide(Decimal(1), Decimal(3))
        Decimal('0.3334')
    """
    nearest = make_context(config.precision, config.rounding)
    if not config.outward_rounding:
        return ArithmeticContexts(lower=nearest, upper=nearest, nearest=nearest)

    return ArithmeticContexts(
        lower=make_context(config.precision, decimal.ROUND_FLOOR),
        upper=make_context(config.precision, decimal.ROUND_CEILING),
        nearest=nearest,
    )


# Контексты по умолчанию: выбираются один раз и используются всеми операциями
DEFAULT_CONTEXTS: Final[ArithmeticContexts] = make_contexts(get_default_config())


# =============================================================================
# КОНВЕРСИЯ В DECIMAL
# =============================================================================


def to_decimal(value: DecimalLike) -> Decimal:
    """
    Безопасная конверсия числа в Decimal.

    float конвертируется через кратчайшее repr (0.1 → Decimal('0.1')),
    а не через точное двоичное значение.

    Args:
        value: Decimal, int, float или строка

    Returns:
        Конечное Decimal значение

    Raises:
        ValueError: Если значение NaN/Inf или не является числом
        TypeError: Если тип не поддерживается

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal("2.50")
        Decimal('2.50')
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric bound")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"value must be finite (not NaN/Inf), got {value}")
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ValueError(f"Not a decimal number: {value!r}") from None
    else:
        raise TypeError(f"Unsupported numeric type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"value must be finite (not NaN/Inf), got {value}")
    return result


# =============================================================================
# ТОЧНЫЕ СУММА И РАЗНОСТЬ
# =============================================================================


def _exact_context(a: Decimal, b: Decimal) -> decimal.Context:
    # Точность покрывает разброс порядков операндов плюс перенос
    top = max(a.adjusted(), b.adjusted()) + 2
    bottom = min(a.as_tuple().exponent, b.as_tuple().exponent)
    return make_context(max(top - bottom, 1), decimal.ROUND_HALF_EVEN)


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    """
    Сумма a + b без округления.

    Examples:
        >>> exact_add(Decimal(1), Decimal("1e-20"))
        Decimal('1.00000000000000000001')
    """
    return _exact_context(a, b).add(a, b)


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    """
    Разность a − b без округления.

    Examples:
        >>> exact_subtract(Decimal(1), Decimal("-1e-20"))
        Decimal('1.00000000000000000001')
    """
    return _exact_context(a, b).subtract(a, b)


# =============================================================================
# ФАКТОРИАЛ
# =============================================================================


def factorial(n: int) -> Decimal:
    """
    Точный факториал n! как Decimal.

    Накопление выполняется в целых числах произвольной точности, поэтому
    результат не округляется.

    Args:
        n: Неотрицательное целое

    Returns:
        n! (Decimal)

    Raises:
        ValueError: Если n < 0

    Examples:
        >>> factorial(0)
        Decimal('1')
        >>> factorial(5)
        Decimal('120')
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    result = 1
    for i in range(2, n + 1):
        result *= i
    return Decimal(result)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_terms(terms: int) -> None:
    """
    Валидация числа членов ряда.

    Raises:
        ValueError: Если terms не целое или terms < 1
    """
    if isinstance(terms, bool) or not isinstance(terms, int):
        raise ValueError(f"terms must be an integer, got {terms!r}")

    if terms < 1:
        raise ValueError(f"terms must be positive, got {terms}")


def spans_zero(start: Decimal, end: Decimal) -> bool:
    """True если start <= 0 <= end (ноль включён как граница)."""
    return start <= ZERO <= end
