"""
FuzzySet — треугольное нечёткое множество поверх Interval

Immutable Pydantic модель: центр (value), левое и правое отклонения
(left, right) и эквивалентный интервал [value − left, value + right].

Арифметика делегируется Interval:
- центр результата — скалярная операция над центрами
- интервал результата — интервальная операция над интервалами
- left/right результата пересчитываются как фактическое расстояние от
  нового центра до границ нового интервала, а не комбинируются из
  исходных отклонений

Поэтому все гарантии enclosure интервальной арифметики автоматически
переносятся на fuzzy sets.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. interval.start == value − left, interval.end == value + right
2. value ∈ interval (left >= 0, right >= 0), иначе CenterOutOfRange
"""

from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, computed_field, model_validator

from src.ivarith.contracts.validators import validate_fuzzy_set_payload
from src.ivarith.math.decimal_context import (
    DEFAULT_CONTEXTS,
    ONE,
    ZERO,
    DecimalLike,
    exact_add,
    exact_subtract,
    to_decimal,
)
from src.ivarith.math.interval import Interval, InvalidRange


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CenterOutOfRange(InvalidRange):
    """
    Центр fuzzy set лежит вне его интервала.

    Такой набор дал бы отрицательное отклонение ("skewed" fuzzy set);
    он отклоняется при создании.
    """


# =============================================================================
# FUZZY SET MODEL
# =============================================================================


class FuzzySet(BaseModel):
    """
    Треугольное нечёткое множество.

    Функция принадлежности равна 1 в value и линейно убывает до 0 на
    границах interval.

    Создание:
        FuzzySet.from_deviations(10, 2, 3)          → interval [8, 13]
        FuzzySet.from_interval(5, Interval(4, 7))   → left 1, right 2
    """

    value: Decimal
    interval: Interval

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="before")
    @classmethod
    def coerce_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and "value" in data:
            data = {**data, "value": to_decimal(data["value"])}
        return data

    @model_validator(mode="after")
    def check_center(self) -> "FuzzySet":
        if not self.interval.contains(self.value):
            raise CenterOutOfRange(
                f"Center {self.value} lies outside interval {self.interval}"
            )
        return self

    @classmethod
    def from_deviations(
        cls, value: DecimalLike, left: DecimalLike, right: DecimalLike
    ) -> "FuzzySet":
        """
        Создание по центру и отклонениям: interval = [value − left, value + right].

        Границы вычисляются точно, без округления до precision: отклонения
        сохраняются такими, как заданы.

        Raises:
            InvalidRange: Если получившийся интервал инвертирован
            CenterOutOfRange: Если одно из отклонений отрицательно
        """
        v = to_decimal(value)
        interval = Interval(
            exact_subtract(v, to_decimal(left)),
            exact_add(v, to_decimal(right)),
        )
        return cls(value=v, interval=interval)

    @classmethod
    def from_interval(cls, value: DecimalLike, interval: Interval) -> "FuzzySet":
        """
        Создание по центру и интервалу: left = value − start, right = end − value.

        Raises:
            CenterOutOfRange: Если value вне interval
        """
        return cls(value=value, interval=interval)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def left(self) -> Decimal:
        """Левое отклонение value − interval.start (точно)."""
        return exact_subtract(self.value, self.interval.start)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def right(self) -> Decimal:
        """Правое отклонение interval.end − value (точно)."""
        return exact_subtract(self.interval.end, self.value)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, other: "FuzzySet") -> "FuzzySet":
        interval = self.interval.add(other.interval)
        return FuzzySet.from_interval(
            DEFAULT_CONTEXTS.nearest.add(self.value, other.value), interval
        )

    def subtract(self, other: "FuzzySet") -> "FuzzySet":
        interval = self.interval.subtract(other.interval)
        return FuzzySet.from_interval(
            DEFAULT_CONTEXTS.nearest.subtract(self.value, other.value), interval
        )

    def multiply(self, other: "FuzzySet") -> "FuzzySet":
        """
        Произведение fuzzy sets.

        left/right результата — расстояния до границ произведения
        интервалов, а не left1·value2 + left2·value1.
        """
        interval = self.interval.multiply(other.interval)
        return FuzzySet.from_interval(
            DEFAULT_CONTEXTS.nearest.multiply(self.value, other.value), interval
        )

    def divide(self, other: "FuzzySet") -> "FuzzySet":
        """
        Частное fuzzy sets.

        Интервал вычисляется первым: делитель с интервалом, содержащим 0,
        отклоняется до деления центров.

        Raises:
            DivisionUndefined: Если интервал делителя содержит ноль
        """
        interval = self.interval.divide(other.interval)
        return FuzzySet.from_interval(
            DEFAULT_CONTEXTS.nearest.divide(self.value, other.value), interval
        )

    # -------------------------------------------------------------------------
    # Принадлежность
    # -------------------------------------------------------------------------

    def contains(self, value: DecimalLike) -> bool:
        return self.interval.contains(value)

    def intersects(self, other: Interval) -> bool:
        return self.interval.intersects(other)

    def membership(self, x: DecimalLike) -> Decimal:
        """
        Степень принадлежности треугольной функции в точке x.

        Returns:
            1 в центре, линейно до 0 на границах, 0 вне интервала.
            Сторона с нулевым отклонением чёткая (0 сразу за центром).

        Examples:
            >>> FuzzySet.from_deviations(10, 2, 4).membership(9)
            Decimal('0.5')
            >>> FuzzySet.from_deviations(10, 2, 4).membership(13)
            Decimal('0.25')
        """
        x = to_decimal(x)
        if x == self.value:
            return ONE
        if not self.interval.contains(x):
            return ZERO

        ctx = DEFAULT_CONTEXTS.nearest
        if x < self.value:
            if self.left == ZERO:
                return ZERO
            return ctx.divide(ctx.subtract(x, self.interval.start), self.left)

        if self.right == ZERO:
            return ZERO
        return ctx.divide(ctx.subtract(self.interval.end, x), self.right)

    # -------------------------------------------------------------------------
    # Сериализация
    # -------------------------------------------------------------------------

    def to_payload(self) -> Dict[str, Any]:
        """JSON-совместимый dict: value, left, right, interval."""
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "FuzzySet":
        """
        Создание fuzzy set из payload.

        left/right в payload необязательны; если переданы, должны совпадать
        с отклонениями, вычисленными из value и interval.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
            ValueError: Если left/right противоречат interval
        """
        validate_fuzzy_set_payload(data)
        interval = Interval(data["interval"]["start"], data["interval"]["end"])
        fuzzy = cls.from_interval(data["value"], interval)

        for name in ("left", "right"):
            if name in data and to_decimal(data[name]) != getattr(fuzzy, name):
                raise ValueError(
                    f"Inconsistent {name} deviation: payload {data[name]}, "
                    f"derived {getattr(fuzzy, name)}"
                )
        return fuzzy

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{{{self.value}, {self.left}, {self.right}}}"

    def __contains__(self, value: DecimalLike) -> bool:
        return self.contains(value)

    def __add__(self, other: Any) -> "FuzzySet":
        if not isinstance(other, FuzzySet):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "FuzzySet":
        if not isinstance(other, FuzzySet):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: Any) -> "FuzzySet":
        if not isinstance(other, FuzzySet):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: Any) -> "FuzzySet":
        if not isinstance(other, FuzzySet):
            return NotImplemented
        return self.divide(other)
