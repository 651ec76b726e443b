"""
Тесты для модели FuzzySet

Проверяет:
1. Создание по отклонениям и по интервалу
2. Отказ при инвертированном интервале и центре вне интервала
3. Арифметику через Interval (интервал — источник истины)
4. Делегирование contains/intersects
5. Треугольную функцию принадлежности
6. Immutability, текстовый формат {value, left, right}, payload
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.ivarith.domain import CenterOutOfRange, FuzzySet
from src.ivarith.math import DivisionUndefined, Interval, InvalidRange


@pytest.fixture
def fx() -> FuzzySet:
    """{10, 2, 3} → [8, 13]"""
    return FuzzySet.from_deviations(10, 2, 3)


@pytest.fixture
def fy() -> FuzzySet:
    """{5, 1, 2} → [4, 7]"""
    return FuzzySet.from_deviations(5, 1, 2)


# =============================================================================
# СОЗДАНИЕ
# =============================================================================


class TestConstruction:
    """Тесты создания FuzzySet"""

    def test_from_deviations(self, fx: FuzzySet) -> None:
        """{10, 2, 3} → interval [8, 13]"""
        assert fx.interval == Interval(8, 13)
        assert fx.value == Decimal(10)
        assert fx.left == Decimal(2)
        assert fx.right == Decimal(3)

    def test_from_interval(self) -> None:
        """value 5, interval [4, 7] → left 1, right 2"""
        fuzzy = FuzzySet.from_interval(5, Interval(4, 7))
        assert fuzzy.left == Decimal(1)
        assert fuzzy.right == Decimal(2)

    def test_invariant_holds(self, fx: FuzzySet) -> None:
        """interval.start == value − left, interval.end == value + right"""
        assert fx.interval.start == fx.value - fx.left
        assert fx.interval.end == fx.value + fx.right

    def test_decimal_deviations(self) -> None:
        fuzzy = FuzzySet.from_deviations("1.5", "0.25", "0.75")
        assert fuzzy.interval == Interval("1.25", "2.25")

    def test_crisp_set(self) -> None:
        """Нулевые отклонения — вырожденный интервал"""
        fuzzy = FuzzySet.from_deviations(3, 0, 0)
        assert fuzzy.interval.is_degenerate()

    def test_inverted_interval_propagates_invalid_range(self) -> None:
        """Отрицательные отклонения с инверсией → InvalidRange от Interval"""
        with pytest.raises(InvalidRange) as exc_info:
            FuzzySet.from_deviations(5, -3, -3)
        assert type(exc_info.value) is InvalidRange

    def test_negative_deviation_rejected(self) -> None:
        """Отрицательное отклонение без инверсии → CenterOutOfRange"""
        with pytest.raises(CenterOutOfRange):
            FuzzySet.from_deviations(5, -1, 2)

    def test_center_outside_interval_rejected(self) -> None:
        """value вне interval → CenterOutOfRange (skewed sets запрещены)"""
        with pytest.raises(CenterOutOfRange, match="outside interval"):
            FuzzySet.from_interval(10, Interval(4, 7))

    def test_center_on_boundary_allowed(self) -> None:
        """value на границе → нулевое отклонение"""
        fuzzy = FuzzySet.from_interval(4, Interval(4, 7))
        assert fuzzy.left == 0
        assert fuzzy.right == 3

    def test_immutable(self, fx: FuzzySet) -> None:
        """FuzzySet immutable (frozen=True)"""
        with pytest.raises(ValidationError):
            fx.value = Decimal(0)  # type: ignore[misc]


# =============================================================================
# ОТОБРАЖЕНИЕ
# =============================================================================


class TestDisplay:
    """Тесты текстового формата"""

    def test_str_format(self, fx: FuzzySet) -> None:
        """Формат {value, left, right}"""
        assert str(fx) == "{10, 2, 3}"

    def test_str_from_interval(self) -> None:
        assert str(FuzzySet.from_interval("5.5", Interval(4, 7))) == "{5.5, 1.5, 1.5}"


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты арифметики fuzzy sets"""

    def test_add(self, fx: FuzzySet, fy: FuzzySet) -> None:
        """Интервал суммы = сумма интервалов"""
        result = fx.add(fy)
        assert result.interval == fx.interval.add(fy.interval)
        assert result.interval == Interval(12, 20)
        assert result.value == 15
        assert str(result) == "{15, 3, 5}"

    def test_subtract(self, fx: FuzzySet, fy: FuzzySet) -> None:
        """[8, 13] − [4, 7] = [1, 9], центр 5"""
        result = fx - fy
        assert result.interval == fx.interval.subtract(fy.interval)
        assert result.interval == Interval(1, 9)
        assert result.value == 5
        assert result.left == 4
        assert result.right == 4

    def test_multiply_deviations_are_geometric(self, fx: FuzzySet, fy: FuzzySet) -> None:
        """left/right — расстояние до границ произведения интервалов"""
        result = fx.multiply(fy)
        assert result.interval == Interval(32, 91)
        assert result.value == 50
        assert result.left == 18
        assert result.right == 41
        # Не left1·value2 + left2·value1
        naive_left = fx.left * fy.value + fy.left * fx.value
        assert result.left != naive_left

    def test_divide(self, fx: FuzzySet, fy: FuzzySet) -> None:
        result = fx / fy
        assert result.interval == fx.interval.divide(fy.interval)
        assert result.value == 2
        assert result.left == result.value - result.interval.start
        assert result.right == result.interval.end - result.value
        assert result.contains(result.value)

    def test_divide_by_zero_spanning_set(self, fx: FuzzySet) -> None:
        """Делитель с интервалом, содержащим 0 → DivisionUndefined"""
        with pytest.raises(DivisionUndefined):
            fx.divide(FuzzySet.from_deviations(0, 1, 1))
        with pytest.raises(DivisionUndefined):
            fx.divide(FuzzySet.from_deviations(1, 1, 1))

    @pytest.mark.parametrize("op", ["add", "subtract", "multiply", "divide"])
    def test_interval_is_ground_truth(self, op: str) -> None:
        """interval(fx ∘ fy) == interval(fx) ∘ interval(fy)"""
        a = FuzzySet.from_deviations("-2.5", "0.5", "1.25")
        b = FuzzySet.from_deviations("3", "0.75", "2")
        result = getattr(a, op)(b)
        assert result.interval == getattr(a.interval, op)(b.interval)

    def test_unsupported_operand(self, fx: FuzzySet) -> None:
        with pytest.raises(TypeError):
            fx + Interval(1, 2)  # type: ignore[operator]


# =============================================================================
# ТОЧНЫЕ ОТКЛОНЕНИЯ
# =============================================================================


class TestExactDeviations:
    """Отклонения не округляются при разных порядках центра и границ"""

    def test_left_with_tiny_negative_start(self) -> None:
        """value 1, start −1e-20 → left = 1.00000000000000000001"""
        fuzzy = FuzzySet.from_interval(1, Interval("-1e-20", "2"))
        assert fuzzy.left == Decimal("1.00000000000000000001")
        assert fuzzy.value - fuzzy.left == fuzzy.interval.start
        assert fuzzy.value + fuzzy.right == fuzzy.interval.end

    def test_sum_with_tiny_operand(self) -> None:
        """Центр суммы округлён, но left/right точно описывают интервал"""
        a = FuzzySet.from_interval(1, Interval(0, 1))
        b = FuzzySet.from_deviations("1e-20", 0, 0)
        result = a.add(b)
        assert result.interval.start == Decimal("1e-20")
        assert result.value - result.left == result.interval.start
        assert result.value + result.right == result.interval.end
        assert result.left == Decimal("0.99999999999999999999")
        assert "0.99999999999999999999" in str(result)

    def test_from_deviations_keeps_tiny_left(self) -> None:
        """Интервал конструктора строится без округления до 16 цифр"""
        fuzzy = FuzzySet.from_deviations(1, "1e-20", 0)
        assert fuzzy.left == Decimal("1e-20")
        assert fuzzy.right == 0
        assert fuzzy.interval.start == Decimal("0.99999999999999999999")
        assert fuzzy.interval.end == 1

    def test_payload_with_exact_deviations(self) -> None:
        """Payload с точными left/right проходит проверку согласованности"""
        fuzzy = FuzzySet.from_interval(1, Interval("-1e-20", "2"))
        assert FuzzySet.from_payload(fuzzy.to_payload()) == fuzzy


# =============================================================================
# ПРИНАДЛЕЖНОСТЬ
# =============================================================================


class TestMembership:
    """Тесты contains, intersects, membership"""

    def test_contains_delegates(self, fx: FuzzySet) -> None:
        assert fx.contains(8)
        assert fx.contains(13)
        assert not fx.contains("13.01")
        assert 10 in fx

    def test_intersects_delegates(self, fx: FuzzySet) -> None:
        assert fx.intersects(Interval(13, 20))
        assert not fx.intersects(Interval("13.5", 20))

    def test_membership_triangle(self) -> None:
        """1 в центре, линейно до 0 на границах"""
        fuzzy = FuzzySet.from_deviations(10, 2, 4)
        assert fuzzy.membership(10) == 1
        assert fuzzy.membership(9) == Decimal("0.5")
        assert fuzzy.membership(13) == Decimal("0.25")
        assert fuzzy.membership(8) == 0
        assert fuzzy.membership(14) == 0

    def test_membership_outside(self, fx: FuzzySet) -> None:
        assert fx.membership(0) == 0
        assert fx.membership(100) == 0

    def test_membership_crisp_side(self) -> None:
        """Нулевое отклонение — чёткая сторона"""
        fuzzy = FuzzySet.from_interval(4, Interval(4, 8))
        assert fuzzy.membership(4) == 1
        assert fuzzy.membership(6) == Decimal("0.5")
        assert fuzzy.membership("3.99") == 0


# =============================================================================
# PAYLOAD
# =============================================================================


class TestPayload:
    """Тесты сериализации fuzzy set"""

    def test_to_payload(self, fx: FuzzySet) -> None:
        assert fx.to_payload() == {
            "value": "10",
            "left": "2",
            "right": "3",
            "interval": {"start": "8", "end": "13"},
        }

    def test_payload_roundtrip(self, fx: FuzzySet) -> None:
        assert FuzzySet.from_payload(fx.to_payload()) == fx

    def test_payload_without_deviations(self) -> None:
        """left/right в payload необязательны"""
        fuzzy = FuzzySet.from_payload(
            {"value": "5", "interval": {"start": "4", "end": "7"}}
        )
        assert fuzzy.left == 1
        assert fuzzy.right == 2

    def test_inconsistent_deviation_rejected(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent left deviation"):
            FuzzySet.from_payload(
                {"value": "5", "left": "2", "interval": {"start": "4", "end": "7"}}
            )
