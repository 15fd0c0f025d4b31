"""
Vector — Одномерный числовой массив фиксированной длины

Размер задаётся при создании (>= 1) и больше не меняется: элементы можно
переприсваивать, но не добавлять и не удалять.
"""

import math
from typing import Iterator, Union

from superclasses.core.contracts import validators as contracts
from superclasses.core.math.errors import (
    IndexOutOfBoundsError,
    InvalidArgumentError,
    MathDomainError,
)
from superclasses.core.math.numbers import (
    VECTOR_EQ_EPS,
    is_int,
    is_number,
    number_to_string,
)

Number = Union[int, float]


class Vector:
    """Вектор фиксированной длины."""

    __slots__ = ("_data",)

    def __init__(self, size: int) -> None:
        """
        Нулевой вектор длины size.

        Raises:
            InvalidArgumentError: Если size не положительное целое
        """
        if not is_int(size) or size <= 0:
            raise InvalidArgumentError("Vector size must be a positive integer.")

        self._data: list[Number] = [0] * size

    @classmethod
    def from_array(cls, data: list[Number]) -> "Vector":
        """
        Raises:
            InvalidArgumentError: Пустой список или нечисловые элементы
        """
        contracts.validate_vector_data(data)

        vector = cls(len(data))
        vector._data = list(data)
        return vector

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def mag(self) -> float:
        """Евклидова норма."""
        return math.sqrt(sum(x * x for x in self._data))

    # =========================================================================
    # ELEMENT ACCESS
    # =========================================================================

    def _check_index(self, index: object) -> None:
        if not is_int(index) or not 0 <= index < len(self._data):
            raise IndexOutOfBoundsError(f"Vector index {index!r} out of bounds.")

    def __getitem__(self, index: int) -> Number:
        self._check_index(index)
        return self._data[index]

    def __setitem__(self, index: int, value: Number) -> None:
        self._check_index(index)
        if not is_number(value):
            raise InvalidArgumentError(f"Vector elements must be numbers, got {value!r}")
        self._data[index] = value

    def __delitem__(self, index: int) -> None:
        raise MathDomainError("Cannot delete elements of a fixed-size vector.")

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Number]:
        return iter(list(self._data))

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def _require_same_size(self, other: "Vector", operation: str) -> None:
        if not isinstance(other, Vector):
            raise InvalidArgumentError(f"Vector {operation} requires a Vector, got {other!r}")
        if self.size != other.size:
            raise InvalidArgumentError(
                f"Vectors must have the same size for {operation}: {self.size} vs {other.size}."
            )

    def add(self, other: "Vector") -> "Vector":
        self._require_same_size(other, "addition")
        return Vector.from_array([a + b for a, b in zip(self._data, other._data)])

    def sub(self, other: "Vector") -> "Vector":
        self._require_same_size(other, "subtraction")
        return Vector.from_array([a - b for a, b in zip(self._data, other._data)])

    def mul(self, scalar: Number) -> "Vector":
        if not is_number(scalar):
            raise InvalidArgumentError(f"Vector can only be multiplied by a number, got {scalar!r}")
        return Vector.from_array([x * scalar for x in self._data])

    def div(self, scalar: Number) -> "Vector":
        """
        Raises:
            MathDomainError: Деление на 0
        """
        if not is_number(scalar):
            raise InvalidArgumentError(f"Vector can only be divided by a number, got {scalar!r}")
        if scalar == 0:
            raise MathDomainError("Cannot divide a vector by zero.")
        return self.mul(1.0 / scalar)

    def dot(self, other: "Vector") -> float:
        self._require_same_size(other, "dot product")
        return float(sum(a * b for a, b in zip(self._data, other._data)))

    def cross(self, other: "Vector") -> "Vector":
        """
        Векторное произведение в R³.

        Raises:
            MathDomainError: Если любой из векторов не длины 3
        """
        if self.size != 3:
            raise MathDomainError("First operand must be a vector of size 3.")
        if not isinstance(other, Vector) or other.size != 3:
            raise MathDomainError("Second operand must be a vector of size 3.")

        a1, a2, a3 = self._data
        b1, b2, b3 = other._data
        return Vector.from_array([a2 * b3 - a3 * b2, a3 * b1 - a1 * b3, a1 * b2 - a2 * b1])

    def eq(self, other: "Vector", epsilon: float = VECTOR_EQ_EPS) -> bool:
        """
        Поэлементное равенство с толерантностью.

        Raises:
            InvalidArgumentError: Если размеры различаются
        """
        self._require_same_size(other, "comparison")
        return all(abs(a - b) < epsilon for a, b in zip(self._data, other._data))

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and self.eq(other)

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: "Vector") -> "Vector":
        return self.add(other)

    def __sub__(self, other: "Vector") -> "Vector":
        return self.sub(other)

    def __mul__(self, scalar: Number) -> "Vector":
        return self.mul(scalar)

    def __rmul__(self, scalar: Number) -> "Vector":
        return self.mul(scalar)

    def __truediv__(self, scalar: Number) -> "Vector":
        return self.div(scalar)

    def __neg__(self) -> "Vector":
        return self.mul(-1)

    def __matmul__(self, other: "Vector") -> float:
        return self.dot(other)

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def to_array(self) -> list[Number]:
        return list(self._data)

    def __str__(self) -> str:
        return "[" + ", ".join(number_to_string(x) for x in self._data) + "]"

    def __repr__(self) -> str:
        return f"Vector.from_array({self._data!r})"
