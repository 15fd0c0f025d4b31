"""
Тесты для Vector

Проверяет:
1. Фиксированный размер (нет удаления элементов)
2. Индексацию с проверкой границ и типов
3. Операции: add, sub, mul, div, dot, cross
4. Равенство с толерантностью
"""

import pytest

from superclasses.core.math.errors import (
    IndexOutOfBoundsError,
    InvalidArgumentError,
    MathDomainError,
)
from superclasses.core.math.vector import Vector


class TestConstruction:
    """Тесты создания векторов"""

    def test_zero_filled(self) -> None:
        v = Vector(3)
        assert v.size == 3
        assert v.to_array() == [0, 0, 0]

    def test_invalid_size(self) -> None:
        with pytest.raises(InvalidArgumentError, match="positive"):
            Vector(0)

    def test_from_array(self) -> None:
        data = [1, 2.5, -3]
        v = Vector.from_array(data)
        data.append(4)
        assert v.to_array() == [1, 2.5, -3]
        assert len(v) == 3

    def test_from_array_accepts_tuple(self) -> None:
        v = Vector.from_array((1, 2))
        v[0] = 5
        assert v.to_array() == [5, 2]

    def test_from_array_invalid(self) -> None:
        for data in [[], [1, "2"], [[1]], [False], None]:
            with pytest.raises(InvalidArgumentError):
                Vector.from_array(data)


class TestElementAccess:
    """Тесты индексации"""

    def test_get_set(self) -> None:
        v = Vector(2)
        v[1] = 7.5
        assert v[1] == 7.5
        assert list(v) == [0, 7.5]

    def test_out_of_bounds(self) -> None:
        v = Vector(2)
        with pytest.raises(IndexOutOfBoundsError):
            v[2]
        with pytest.raises(IndexError):
            v[-1] = 1

    def test_set_rejects_non_numbers(self) -> None:
        with pytest.raises(InvalidArgumentError, match="numbers"):
            Vector(1)[0] = "a"

    def test_delete_is_domain_error(self) -> None:
        v = Vector.from_array([1, 2])
        with pytest.raises(MathDomainError):
            del v[0]
        assert v.size == 2


class TestOperations:
    """Тесты векторных операций"""

    def test_add_sub(self) -> None:
        a = Vector.from_array([1, 2, 3])
        b = Vector.from_array([3, 2, 1])
        assert a.add(b).to_array() == [4, 4, 4]
        assert (a - b).to_array() == [-2, 0, 2]

    def test_size_mismatch(self) -> None:
        with pytest.raises(InvalidArgumentError, match="same size"):
            Vector(2).add(Vector(3))
        with pytest.raises(InvalidArgumentError):
            Vector(2).dot(Vector(3))

    def test_scalar(self) -> None:
        v = Vector.from_array([2, -4])
        assert v.mul(1.5).to_array() == [3.0, -6.0]
        assert (v / 2).to_array() == [1.0, -2.0]
        with pytest.raises(MathDomainError):
            v.div(0)

    def test_dot(self) -> None:
        assert Vector.from_array([1, 2, 3]).dot(Vector.from_array([4, 5, 6])) == 32.0

    def test_cross(self) -> None:
        x = Vector.from_array([1, 0, 0])
        y = Vector.from_array([0, 1, 0])
        assert x.cross(y).to_array() == [0, 0, 1]
        assert y.cross(x).to_array() == [0, 0, -1]

    def test_cross_requires_size_3(self) -> None:
        with pytest.raises(MathDomainError, match="size 3"):
            Vector(2).cross(Vector(3))
        with pytest.raises(MathDomainError, match="Second operand"):
            Vector(3).cross(Vector(4))

    def test_mag(self) -> None:
        assert Vector.from_array([3, 4]).mag == 5.0


class TestEquality:
    """Тесты равенства"""

    def test_eq_with_tolerance(self) -> None:
        a = Vector.from_array([1.0, 2.0])
        assert a.eq(Vector.from_array([1.0 + 1e-12, 2.0]))
        assert not a.eq(Vector.from_array([1.01, 2.0]))
        assert a.eq(Vector.from_array([1.01, 2.0]), epsilon=0.1)

    def test_eq_size_mismatch_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector(2).eq(Vector(3))

    def test_operator_equality(self) -> None:
        assert Vector.from_array([1, 2]) == Vector.from_array([1.0, 2.0])
        assert Vector(2) != Vector(3)

    def test_str(self) -> None:
        assert str(Vector.from_array([1, 2.5, -3.0])) == "[1, 2.5, -3]"
