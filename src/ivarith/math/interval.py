"""
Interval — замкнутый интервал [start, end] с decimal-арифметикой

Immutable Pydantic модель замкнутого интервала вещественной прямой.
Все операции возвращают новый экземпляр, исходные объекты не изменяются.

Модуль обеспечивает:
- Арифметику с правилами enclosure: +, −, ×, ÷ (интервал и скаляр)
- Защиту деления: интервал, содержащий ноль → DivisionUndefined,
  скаляр ноль → DivisionByZero
- Принадлежность (contains) и пересечение (intersects), обе границы включены
- sin/cos/exp через усечённый ряд Тейлора в интервальной арифметике
- sin_direct/cos_direct/exp_direct: float-функция к каждой границе
  (дешевле, без гарантий decimal enclosure)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. start <= end всегда (иначе InvalidRange, без нормализации)
2. Каждый результат округляется контекстом фиксированной точности;
   нижняя граница к −∞, верхняя к +∞ (outward rounding)
3. Деление на интервал, содержащий 0 (включая границу), никогда не
   возвращает бесконечность
4. Вырожденный интервал [a, a] обрабатывается без особых случаев

ФОРМУЛЫ:
    [a, b] + [c, d] = [a + c, b + d]
    [a, b] − [c, d] = [a − d, b − c]
    [a, b] × [c, d] = [min(ac, ad, bc, bd), max(ac, ad, bc, bd)]
    [a, b] ÷ [c, d] = [a, b] × [min(1/c, 1/d), max(1/c, 1/d)],  0 ∉ [c, d]

    sin(X) ≈ Σ_{k<n} (−1)^k X^(2k+1) / (2k+1)!
    cos(X) ≈ Σ_{k<n} (−1)^k X^(2k)   / (2k)!
    exp(X) ≈ Σ_{i<n} X^i / i!
"""

import logging
import math
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, field_validator, model_validator

from src.ivarith.config import SERIES_TERMS_DEFAULT
from src.ivarith.contracts.validators import validate_interval_payload
from src.ivarith.math.decimal_context import (
    DEFAULT_CONTEXTS,
    ONE,
    ZERO,
    DecimalLike,
    factorial,
    spans_zero,
    to_decimal,
    validate_terms,
)

logger = logging.getLogger("ivarith.math")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class IntervalArithmeticError(ArithmeticError):
    """Базовая ошибка интервальной арифметики."""


class InvalidRange(IntervalArithmeticError):
    """
    Интервал с start > end.

    Инвертированная пара никогда не нормализуется перестановкой: это
    маскировало бы ошибку вызывающего кода.
    """


class DivisionUndefined(IntervalArithmeticError):
    """Деление на интервал, содержащий ноль (start <= 0 <= end)."""


class DivisionByZero(IntervalArithmeticError, ZeroDivisionError):
    """Деление интервала на скаляр, равный нулю."""


# =============================================================================
# INTERVAL MODEL
# =============================================================================


class Interval(BaseModel):
    """
    Замкнутый интервал [start, end], обе границы включены.

    Immutable модель (frozen=True): все операции создают новый экземпляр.
    Допускается позиционный вызов: Interval(2, 5).
    """

    start: Decimal
    end: Decimal

    model_config = {"frozen": True}  # Immutable

    def __init__(self, start: DecimalLike, end: DecimalLike, **data: Any) -> None:
        super().__init__(start=start, end=end, **data)

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_bound(cls, v: Any) -> Decimal:
        """Конверсия границы в конечный Decimal (NaN/Inf запрещены)."""
        return to_decimal(v)

    @model_validator(mode="after")
    def check_ordering(self) -> "Interval":
        if self.start > self.end:
            raise InvalidRange(
                f"Start must be less than or equal to end: [{self.start}, {self.end}]"
            )
        return self

    @classmethod
    def point(cls, value: DecimalLike) -> "Interval":
        """Вырожденный интервал [value, value]."""
        v = to_decimal(value)
        return cls(v, v)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    def width(self) -> Decimal:
        """Ширина end − start (округление вверх)."""
        return DEFAULT_CONTEXTS.upper.subtract(self.end, self.start)

    def midpoint(self) -> Decimal:
        """Середина интервала (start + end) / 2."""
        total = DEFAULT_CONTEXTS.nearest.add(self.start, self.end)
        return DEFAULT_CONTEXTS.nearest.divide(total, Decimal(2))

    def is_degenerate(self) -> bool:
        return self.start == self.end

    def spans_zero(self) -> bool:
        """True если start <= 0 <= end."""
        return spans_zero(self.start, self.end)

    def contains(self, value: DecimalLike) -> bool:
        """
        Принадлежность значения интервалу.

        Returns:
            True если start <= value <= end (обе границы включены)
        """
        v = to_decimal(value)
        return self.start <= v <= self.end

    def intersects(self, other: "Interval") -> bool:
        """
        Пересечение с другим интервалом.

        Касание в одной граничной точке считается пересечением:
        [1, 2] и [2, 3] пересекаются.
        """
        return self.end >= other.start and other.end >= self.start

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "Interval") -> "Interval":
        """[a, b] + [c, d] = [a + c, b + d]"""
        ctx = DEFAULT_CONTEXTS
        return Interval(
            ctx.lower.add(self.start, other.start),
            ctx.upper.add(self.end, other.end),
        )

    def subtract(self, other: "Interval") -> "Interval":
        """
        [a, b] − [c, d] = [a − d, b − c]

        Перекрёстные границы, а не поэлементная разность: это наименьший
        интервал, содержащий все возможные разности.
        """
        ctx = DEFAULT_CONTEXTS
        return Interval(
            ctx.lower.subtract(self.start, other.end),
            ctx.upper.subtract(self.end, other.start),
        )

    def negate(self) -> "Interval":
        """−[a, b] = [−b, −a]"""
        ctx = DEFAULT_CONTEXTS
        return Interval(ctx.lower.minus(self.end), ctx.upper.minus(self.start))

    def multiply(self, other: "Interval") -> "Interval":
        """
        Произведение интервалов.

        Вычисляются все четыре граничных произведения, результат —
        [min, max] из них. Знаковые shortcuts не используются.
        """
        ctx = DEFAULT_CONTEXTS
        pairs = (
            (self.start, other.start),
            (self.start, other.end),
            (self.end, other.start),
            (self.end, other.end),
        )
        new_start = min(ctx.lower.multiply(x, y) for x, y in pairs)
        new_end = max(ctx.upper.multiply(x, y) for x, y in pairs)
        return Interval(new_start, new_end)

    def reciprocal(self) -> "Interval":
        """
        Обратный интервал 1 / [c, d] = [min(1/c, 1/d), max(1/c, 1/d)].

        Raises:
            DivisionUndefined: Если интервал содержит ноль
        """
        if self.spans_zero():
            logger.debug("Reciprocal of zero-spanning interval %s rejected", self)
            raise DivisionUndefined(
                f"Division by an interval that spans zero is undefined: {self}"
            )

        ctx = DEFAULT_CONTEXTS
        low = min(ctx.lower.divide(ONE, self.start), ctx.lower.divide(ONE, self.end))
        high = max(ctx.upper.divide(ONE, self.start), ctx.upper.divide(ONE, self.end))
        return Interval(low, high)

    def divide(self, other: Union["Interval", DecimalLike]) -> "Interval":
        """
        Деление на интервал или скаляр.

        Интервал: умножение на reciprocal делителя.
        Скаляр: каждая граница делится на скаляр; при отрицательном
        скаляре границы меняются местами.

        Raises:
            DivisionUndefined: Если делитель-интервал содержит ноль
            DivisionByZero: Если делитель-скаляр равен нулю
        """
        if isinstance(other, Interval):
            return self.multiply(other.reciprocal())
        return self._divide_scalar(to_decimal(other))

    def _divide_scalar(self, scalar: Decimal) -> "Interval":
        if scalar == ZERO:
            logger.debug("Scalar division of %s by zero rejected", self)
            raise DivisionByZero(f"Division of interval {self} by zero")

        ctx = DEFAULT_CONTEXTS
        if scalar > ZERO:
            return Interval(
                ctx.lower.divide(self.start, scalar),
                ctx.upper.divide(self.end, scalar),
            )

        # Отрицательный скаляр меняет порядок границ
        return Interval(
            ctx.lower.divide(self.end, scalar),
            ctx.upper.divide(self.start, scalar),
        )

    # -------------------------------------------------------------------------
    # Ряды Тейлора
    # -------------------------------------------------------------------------

    def sin(self, terms: Optional[int] = None) -> "Interval":
        """
        sin(X) через усечённый ряд Тейлора в интервальной арифметике.

        Σ_{k=0}^{terms-1} (−1)^k X^(2k+1) / (2k+1)!

        Степень X^(2k+1) строится последовательным самоумножением
        интервала, первый член прибавляется, далее знаки чередуются.
        Больше членов — точнее приближение, но больше умножений.

        Args:
            terms: Число членов ряда (default: series_terms из конфигурации)

        Returns:
            Интервал, содержащий sin(x) для x из X (с точностью до усечения)

        Raises:
            ValueError: Если terms < 1
        """
        terms = _resolve_terms(terms)
        result = self._series(self, 1, terms)
        logger.debug("sin%s with %d terms = %s", self, terms, result)
        return result

    def cos(self, terms: Optional[int] = None) -> "Interval":
        """
        cos(X) через усечённый ряд Тейлора.

        Σ_{k=0}^{terms-1} (−1)^k X^(2k) / (2k)!

        Нулевой член — [1, 1] (X^0).

        Raises:
            ValueError: Если terms < 1
        """
        terms = _resolve_terms(terms)
        result = self._series(Interval.point(ONE), 0, terms)
        logger.debug("cos%s with %d terms = %s", self, terms, result)
        return result

    def _series(self, power: "Interval", exponent: int, terms: int) -> "Interval":
        # Знакочередующийся ряд по степеням exponent, exponent + 2, ...
        result = Interval.point(ZERO)
        for k in range(terms):
            if k > 0:
                power = power.multiply(self).multiply(self)
                exponent += 2
            term = power.divide(factorial(exponent))
            result = result.add(term) if k % 2 == 0 else result.subtract(term)
        return result

    def exp(self, terms: Optional[int] = None) -> "Interval":
        """
        exp(X) через усечённый ряд Тейлора.

        Σ_{i=0}^{terms-1} X^i / i!

        Член ряда накапливается инкрементально: term_i = term_{i-1} × (X / i),
        начиная с [1, 1]. Делится на целое i, а не на i!.

        Raises:
            ValueError: Если terms < 1
        """
        terms = _resolve_terms(terms)
        term = Interval.point(ONE)
        result = term
        for i in range(1, terms):
            term = term.multiply(self.divide(i))
            result = result.add(term)
        logger.debug("exp%s with %d terms = %s", self, terms, result)
        return result

    # -------------------------------------------------------------------------
    # Прямые (float) варианты
    # -------------------------------------------------------------------------

    def sin_direct(self) -> "Interval":
        """
        math.sin к каждой границе, результат [min, max] двух значений.

        Не является enclosure для интервалов, содержащих экстремум sin.
        """
        return self._map_bounds(math.sin)

    def cos_direct(self) -> "Interval":
        """math.cos к каждой границе, результат [min, max] двух значений."""
        return self._map_bounds(math.cos)

    def exp_direct(self) -> "Interval":
        """math.exp к каждой границе (монотонна, поэтому [exp(a), exp(b)])."""
        return self._map_bounds(math.exp)

    def _map_bounds(self, func: Callable[[float], float]) -> "Interval":
        a = func(float(self.start))
        b = func(float(self.end))
        return Interval(min(a, b), max(a, b))

    # -------------------------------------------------------------------------
    # Сериализация
    # -------------------------------------------------------------------------

    def to_payload(self) -> Dict[str, Any]:
        """JSON-совместимый dict, границы как строки (без потери точности)."""
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Interval":
        """
        Создание интервала из payload.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
            InvalidRange: Если start > end
        """
        validate_interval_payload(data)
        return cls(data["start"], data["end"])

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"

    def __contains__(self, value: DecimalLike) -> bool:
        return self.contains(value)

    def __add__(self, other: Any) -> "Interval":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "Interval":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> "Interval":
        if not isinstance(other, Interval):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Any) -> "Interval":
        if not isinstance(other, (Interval, Decimal, int, float)) or isinstance(other, bool):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> "Interval":
        return self.negate()


def _resolve_terms(terms: Optional[int]) -> int:
    if terms is None:
        return SERIES_TERMS_DEFAULT
    validate_terms(terms)
    return terms
