"""
Matrix — Плотная матрица фиксированной формы и линейная алгебра

Данные: прямоугольный список строк (rows >= 1, cols >= 1), форма фиксирована
при создании. Матрица 1×n или n×1 — "вектор".

Алгоритмы намеренно простые:
- det: рекурсивное разложение Лапласа по первой строке, O(n!)
- inverse: присоединённая матрица (транспонированные алгебраические
  дополнения) / det; |det| < MATRIX_SINGULAR_EPS → MathDomainError
- pow: возведение в квадрат, O(log k) умножений
"""

import logging
import math
from typing import Iterator, Optional, Union

from superclasses.core.contracts import validators as contracts
from superclasses.core.math.errors import (
    IndexOutOfBoundsError,
    InvalidArgumentError,
    MathDomainError,
)
from superclasses.core.math.numbers import (
    MATRIX_SINGULAR_EPS,
    is_int,
    is_number,
    number_to_string,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]
Rows = list[list[Number]]


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Матрица rows × cols.

    Элементы изменяемы через set(), форма — нет.
    """

    EPSILON = MATRIX_SINGULAR_EPS

    __slots__ = ("_data",)

    def __init__(self, row_count: int, col_count: int) -> None:
        """
        Нулевая матрица заданной формы.

        Raises:
            InvalidArgumentError: Если размеры не положительные целые
        """
        if not is_int(row_count) or not is_int(col_count) or row_count <= 0 or col_count <= 0:
            raise InvalidArgumentError("Matrix dimensions must be positive integers.")

        self._data: Rows = [[0] * col_count for _ in range(row_count)]

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_array(cls, data: Rows) -> "Matrix":
        """
        Матрица из списка строк.

        Raises:
            InvalidArgumentError: Пустые данные, нечисловые элементы или
                строки разной длины
        """
        contracts.validate_matrix_data(data)

        col_count = len(data[0])
        for row in data:
            if len(row) != col_count:
                raise InvalidArgumentError("All rows must have the same number of columns.")

        matrix = cls(len(data), col_count)
        matrix._data = [list(row) for row in data]
        return matrix

    @classmethod
    def row_vector(cls, data: list[Number]) -> "Matrix":
        """Матрица 1×n."""
        contracts.validate_vector_data(data)
        return cls.from_array([list(data)])

    @classmethod
    def col_vector(cls, data: list[Number]) -> "Matrix":
        """Матрица n×1."""
        contracts.validate_vector_data(data)
        return cls.from_array([[value] for value in data])

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """Единичная матрица size × size."""
        result = cls(size, size)
        for i in range(size):
            result._data[i][i] = 1.0
        return result

    # =========================================================================
    # SHAPE
    # =========================================================================

    @property
    def row_count(self) -> int:
        return len(self._data)

    @property
    def col_count(self) -> int:
        return len(self._data[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.row_count, self.col_count

    def is_square(self, size: Optional[int] = None) -> bool:
        return self.row_count == self.col_count and (size is None or self.row_count == size)

    def is_row_vector(self, size: Optional[int] = None) -> bool:
        return self.row_count == 1 and (size is None or self.col_count == size)

    def is_col_vector(self, size: Optional[int] = None) -> bool:
        return self.col_count == 1 and (size is None or self.row_count == size)

    def is_vector(self, size: Optional[int] = None) -> bool:
        return self.is_row_vector(size) or self.is_col_vector(size)

    # =========================================================================
    # ELEMENT ACCESS
    # =========================================================================

    def _check_indices(self, row: int, col: int) -> None:
        if not is_int(row) or not is_int(col):
            raise IndexOutOfBoundsError("Matrix indices must be integers.")
        if not (0 <= row < self.row_count and 0 <= col < self.col_count):
            raise IndexOutOfBoundsError(
                f"Matrix indices ({row}, {col}) out of bounds for shape {self.shape}."
            )

    def get(self, row: int, col: int) -> Number:
        self._check_indices(row, col)
        return self._data[row][col]

    def set(self, row: int, col: int, value: Number) -> None:
        self._check_indices(row, col)
        if not is_number(value):
            raise InvalidArgumentError(f"Matrix elements must be numbers, got {value!r}")
        self._data[row][col] = value

    def get_row(self, row: int) -> "Matrix":
        """Строка как матрица 1×cols."""
        if not is_int(row) or not 0 <= row < self.row_count:
            raise IndexOutOfBoundsError(f"Row index {row!r} out of bounds.")
        return Matrix.from_array([self._data[row]])

    def get_col(self, col: int) -> "Matrix":
        """Столбец как матрица rows×1."""
        if not is_int(col) or not 0 <= col < self.col_count:
            raise IndexOutOfBoundsError(f"Column index {col!r} out of bounds.")
        return Matrix.from_array([[row[col]] for row in self._data])

    def __getitem__(self, index: tuple[int, int]) -> Number:
        row, col = index
        return self.get(row, col)

    def __setitem__(self, index: tuple[int, int], value: Number) -> None:
        row, col = index
        self.set(row, col, value)

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def _require_same_shape(self, other: "Matrix", operation: str) -> None:
        if not isinstance(other, Matrix):
            raise InvalidArgumentError(f"Matrix {operation} requires a Matrix, got {other!r}")
        if self.shape != other.shape:
            raise InvalidArgumentError(
                f"Matrices must have the same dimensions for {operation}: "
                f"{self.shape} vs {other.shape}."
            )

    def add(self, other: "Matrix") -> "Matrix":
        self._require_same_shape(other, "addition")
        return self._from_rows(
            [[a + b for a, b in zip(row_a, row_b)] for row_a, row_b in zip(self._data, other._data)]
        )

    def sub(self, other: "Matrix") -> "Matrix":
        self._require_same_shape(other, "subtraction")
        return self._from_rows(
            [[a - b for a, b in zip(row_a, row_b)] for row_a, row_b in zip(self._data, other._data)]
        )

    def mul(self, other: Union["Matrix", Number]) -> "Matrix":
        """
        Умножение на скаляр (поэлементно) или матричное произведение.

        Raises:
            InvalidArgumentError: Если self.cols != other.rows
        """
        if is_number(other):
            return self._from_rows([[value * other for value in row] for row in self._data])

        if not isinstance(other, Matrix):
            raise InvalidArgumentError(f"Cannot multiply a Matrix by {other!r}")

        if self.col_count != other.row_count:
            raise InvalidArgumentError(
                "Matrix A columns must equal Matrix B rows for multiplication: "
                f"{self.shape} x {other.shape}."
            )

        result = Matrix(self.row_count, other.col_count)
        for i in range(self.row_count):
            for j in range(other.col_count):
                total = 0.0
                for k in range(self.col_count):
                    total += self._data[i][k] * other._data[k][j]
                result._data[i][j] = total

        return result

    def div(self, other: Union["Matrix", Number]) -> "Matrix":
        """
        Деление на скаляр или умножение на обратную матрицу.

        Raises:
            MathDomainError: Деление на скаляр 0 или на вырожденную матрицу
        """
        if is_number(other):
            if other == 0:
                raise MathDomainError("Cannot divide a matrix by zero.")
            return self.mul(1.0 / other)

        if not isinstance(other, Matrix):
            raise InvalidArgumentError(f"Cannot divide a Matrix by {other!r}")

        return self.mul(other.inverse())

    def transpose(self) -> "Matrix":
        return self._from_rows([list(col) for col in zip(*self._data)])

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def det(self) -> float:
        """
        Определитель (разложение Лапласа по первой строке).

        Raises:
            MathDomainError: Для неквадратной матрицы
        """
        if not self.is_square():
            raise MathDomainError("Determinant can only be calculated for square matrices.")

        return _determinant(self._data)

    def inverse(self) -> "Matrix":
        """
        Обратная матрица через присоединённую: adj(A) / det(A).

        Raises:
            MathDomainError: Неквадратная матрица или |det| < EPSILON
        """
        if not self.is_square():
            raise MathDomainError("Inverse can only be calculated for square matrices.")

        det = self.det()
        if abs(det) < self.EPSILON:
            logger.debug("Rejecting inverse of near-singular matrix, det=%r", det)
            raise MathDomainError(f"Matrix is not invertible (determinant {det!r} is zero).")

        n = self.row_count
        if n == 1:
            return self._from_rows([[1.0 / det]])

        adjugate = Matrix(n, n)
        for i in range(n):
            for j in range(n):
                cofactor = (-1) ** (i + j) * _determinant(_minor(self._data, i, j))
                # транспонирование: adj[j][i] = C[i][j]
                adjugate._data[j][i] = cofactor / det

        return adjugate

    def pow(self, power: int) -> "Matrix":
        """
        Целая степень квадратной матрицы.

        k = 0 → I; k < 0 → inverse().pow(-k); k > 0 → возведение в квадрат.

        Raises:
            InvalidArgumentError: Если power не целое
            MathDomainError: Неквадратная матрица (или вырожденная при k < 0)
        """
        if not is_int(power):
            raise InvalidArgumentError(f"Matrix power must be an integer, got {power!r}")
        if not self.is_square():
            raise MathDomainError("Power can only be calculated for square matrices.")

        if power == 0:
            return Matrix.identity(self.row_count)

        if power < 0:
            return self.inverse().pow(-power)

        result = Matrix.identity(self.row_count)
        base = self.copy()
        while power > 0:
            if power % 2 == 1:
                result = result.mul(base)
            power //= 2
            if power:
                base = base.mul(base)

        return result

    # =========================================================================
    # VECTOR OPERATIONS
    # =========================================================================

    def dot(self, other: "Matrix") -> float:
        """
        Скалярное произведение столбцов одинаковой длины.

        Raises:
            InvalidArgumentError: Если операнды не столбцы одной длины
        """
        if not self.is_col_vector():
            raise InvalidArgumentError("First operand must be a column vector.")
        if not isinstance(other, Matrix) or not other.is_col_vector():
            raise InvalidArgumentError("Second operand must be a column vector.")
        if self.row_count != other.row_count:
            raise InvalidArgumentError("Column vectors must have the same size for dot product.")

        return sum(a[0] * b[0] for a, b in zip(self._data, other._data))

    def cross(self, other: "Matrix") -> "Matrix":
        """
        Векторное произведение столбцов длины 3.

        Raises:
            InvalidArgumentError: Если операнды не столбцы длины 3
        """
        if not self.is_col_vector(3):
            raise InvalidArgumentError("First operand must be a column vector of size 3.")
        if not isinstance(other, Matrix) or not other.is_col_vector(3):
            raise InvalidArgumentError("Second operand must be a column vector of size 3.")

        (a1,), (a2,), (a3,) = self._data
        (b1,), (b2,), (b3,) = other._data
        return Matrix.from_array([[a2 * b3 - a3 * b2], [a3 * b1 - a1 * b3], [a1 * b2 - a2 * b1]])

    def mag(self) -> float:
        """
        Евклидова норма вектора (строки или столбца).

        Raises:
            InvalidArgumentError: Если матрица не вектор
        """
        if not self.is_vector():
            raise InvalidArgumentError("Matrix must be a vector.")

        column = self if self.is_col_vector() else self.transpose()
        return math.sqrt(column.dot(column))

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def equals(self, other: "Matrix", epsilon: float = EPSILON) -> bool:
        """Поэлементное равенство с толерантностью; разная форма → False."""
        if not isinstance(other, Matrix) or self.shape != other.shape:
            return False

        return all(
            abs(a - b) < epsilon
            for row_a, row_b in zip(self._data, other._data)
            for a, b in zip(row_a, row_b)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __add__(self, other: "Matrix") -> "Matrix":
        return self.add(other)

    def __sub__(self, other: "Matrix") -> "Matrix":
        return self.sub(other)

    def __mul__(self, other: Union["Matrix", Number]) -> "Matrix":
        return self.mul(other)

    def __rmul__(self, other: Number) -> "Matrix":
        return self.mul(other)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: Union["Matrix", Number]) -> "Matrix":
        return self.div(other)

    def __neg__(self) -> "Matrix":
        return self.mul(-1)

    def __pow__(self, power: int) -> "Matrix":
        return self.pow(power)

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def copy(self) -> "Matrix":
        return self._from_rows([list(row) for row in self._data])

    def to_array(self) -> Rows:
        """Копия данных в виде списка строк."""
        return [list(row) for row in self._data]

    def __iter__(self) -> Iterator[list[Number]]:
        return iter(self.to_array())

    def __str__(self) -> str:
        """Сетка с выравниванием по правому краю, ширина — по самому длинному элементу."""
        cells = [[number_to_string(value) for value in row] for row in self._data]
        width = max(len(cell) for row in cells for cell in row)
        return "\n".join(
            "[" + " ".join(cell.rjust(width) for cell in row) + "]" for row in cells
        )

    def __repr__(self) -> str:
        return f"Matrix.from_array({self._data!r})"

    @classmethod
    def _from_rows(cls, rows: Rows) -> "Matrix":
        matrix = cls.__new__(cls)
        matrix._data = rows
        return matrix


# =============================================================================
# HELPERS
# =============================================================================


def _minor(data: Rows, exclude_row: int, exclude_col: int) -> Rows:
    return [
        [value for j, value in enumerate(row) if j != exclude_col]
        for i, row in enumerate(data)
        if i != exclude_row
    ]


def _determinant(data: Rows) -> float:
    n = len(data)

    if n == 1:
        return data[0][0]

    if n == 2:
        return data[0][0] * data[1][1] - data[0][1] * data[1][0]

    det = 0.0
    for j in range(n):
        if data[0][j] == 0:
            continue
        det += (-1) ** j * data[0][j] * _determinant(_minor(data, 0, j))

    return det
