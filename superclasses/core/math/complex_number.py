"""
Complex — Комплексное число с кэшируемыми полярными атрибутами

Состояние: real, imag (всегда конечные float) + лениво вычисляемые mag и phase.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/±inf в компонентах запрещены (InvalidArgumentError при присваивании)
2. Любое изменение real/imag сбрасывает ОБА кэша (mag и phase)
3. Равенство — по толерантности (|Δreal| < eps и |Δimag| < eps)
4. Многозначные функции (pow, ln) возвращают главное значение;
   все ветви корней даёт только roots(n)
"""

import math
import re
from typing import Final, Iterator, Optional, Union

from superclasses.core.math.errors import (
    IndexOutOfBoundsError,
    InvalidArgumentError,
    MathDomainError,
    MathRangeError,
)
from superclasses.core.math.numbers import EPS_MACHINE, is_int, is_number, number_to_string

ComplexLike = Union["Complex", int, float]

# ln(π): известное значение для точных shortcut'ов ln/exp
LN_PI: Final[float] = 1.1447298858494002
LN_2: Final[float] = math.log(2)
LN_10: Final[float] = math.log(10)
LOG2_E: Final[float] = 1.4426950408889634
LOG10_E: Final[float] = 0.4342944819032518

# Число без знака: "3", "2.", ".5", "1.5e-3"
_NUM: Final[str] = r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_UNIT: Final[str] = r"[ijIJ]"

_REAL_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"\s*(?P<sign>[+-]?)\s*(?P<real>{_NUM})\s*"
)
_IMAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"\s*(?P<sign>[+-]?)\s*(?P<imag>{_NUM})?{_UNIT}\s*"
)
_REAL_FIRST_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"\s*(?P<rsign>[+-]?)\s*(?P<real>{_NUM})\s*"
    rf"(?P<isign>[+-])\s*(?P<imag>{_NUM})?{_UNIT}\s*"
)
_IMAG_FIRST_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"\s*(?P<isign>[+-]?)\s*(?P<imag>{_NUM})?{_UNIT}\s*"
    rf"(?P<rsign>[+-])\s*(?P<real>{_NUM})\s*"
)


def _finite_component(value: object) -> float:
    if not is_number(value):
        raise InvalidArgumentError(f"Complex components must be numbers, got {value!r}")

    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgumentError("Complex numbers must have finite components.")
    return value


def _signed(sign_text: str, value: float) -> float:
    return -value if sign_text == "-" else value


def _arithmetic_result(real: float, imag: float, operation: str) -> "Complex":
    """Результат арифметики; переполнение компоненты → MathRangeError."""
    if not math.isfinite(real) or not math.isfinite(imag):
        raise MathRangeError(f"Complex {operation} result is out of range.")
    return Complex(real, imag)


# =============================================================================
# COMPLEX
# =============================================================================


class Complex:
    """
    Комплексное число a + bi.

    real/imag изменяемы; mag и phase вычисляются при первом обращении и
    кэшируются до следующего изменения компонент.
    """

    __slots__ = ("_real", "_imag", "_mag", "_phase")

    def __init__(self, real: float = 0.0, imag: float = 0.0) -> None:
        self._real = 0.0
        self._imag = 0.0
        self._mag: Optional[float] = None
        self._phase: Optional[float] = None

        self.real = real
        self.imag = imag

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def real(self) -> float:
        return self._real

    @real.setter
    def real(self, value: float) -> None:
        value = _finite_component(value)
        if value != self._real:
            self._real = value
            self._invalidate()

    @property
    def imag(self) -> float:
        return self._imag

    @imag.setter
    def imag(self, value: float) -> None:
        value = _finite_component(value)
        if value != self._imag:
            self._imag = value
            self._invalidate()

    @property
    def mag(self) -> float:
        """Модуль |z| (кэшируется)."""
        if self._mag is None:
            self._mag = abs(self._real) if self.is_real() else math.hypot(self._real, self._imag)
        return self._mag

    @property
    def phase(self) -> float:
        """Аргумент arg(z) в (-π, π] (кэшируется)."""
        if self._phase is None:
            if self.is_real():
                self._phase = math.pi if self._real < 0 else 0.0
            else:
                self._phase = math.atan2(self._imag, self._real)
        return self._phase

    def _invalidate(self) -> None:
        self._mag = None
        self._phase = None

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @staticmethod
    def i() -> "Complex":
        """Мнимая единица."""
        return Complex(0.0, 1.0)

    @staticmethod
    def to_complex(value: ComplexLike) -> "Complex":
        """Число → Complex; Complex возвращается как есть."""
        if isinstance(value, Complex):
            return value
        return Complex(value)

    @staticmethod
    def from_polar(mag: float, phase: float) -> "Complex":
        """
        Комплексное число из полярных координат.

        Если (mag, phase) уже канонические (mag >= 0, -π < phase <= π),
        они сразу сохраняются в кэш.
        """
        if not is_number(mag) or not is_number(phase):
            raise InvalidArgumentError(f"Polar coordinates must be numbers, got ({mag!r}, {phase!r})")
        if not math.isfinite(mag) or not math.isfinite(phase):
            raise InvalidArgumentError("Polar coordinates must be finite.")

        try:
            z = Complex(mag * math.cos(phase), mag * math.sin(phase))
        except InvalidArgumentError as e:
            raise MathRangeError(f"Polar value ({mag}, {phase}) is not representable.") from e

        if mag > 0 and -math.pi < phase <= math.pi:
            z._mag = float(mag)
            z._phase = float(phase)

        return z

    @staticmethod
    def parse(text: str) -> "Complex":
        """
        Парсинг строкового представления.

        Поддерживаемые формы:
        - Вещественное: "5", "-3.14", "0"
        - Мнимое: "i", "-i", "3i", "-2.5j", "I", "J"
        - Полное: "3+4i", "5 - 2j", "-1+i", "2.5-3.7I"
        - Любой порядок: "4i+3", "-2j + 5"

        Пробелы допустимы между лексемами, но не между числом и единицей.

        Raises:
            InvalidArgumentError: Если строка не является комплексным числом
        """
        if not isinstance(text, str):
            raise InvalidArgumentError(f"Expected a string, got {text!r}")

        if text.strip() == "":
            raise InvalidArgumentError("Cannot parse empty string as complex number.")

        match = _REAL_PATTERN.fullmatch(text)
        if match:
            return Complex(_signed(match["sign"], float(match["real"])))

        match = _IMAG_PATTERN.fullmatch(text)
        if match:
            imag = 1.0 if match["imag"] is None else float(match["imag"])
            return Complex(0.0, _signed(match["sign"], imag))

        match = _REAL_FIRST_PATTERN.fullmatch(text) or _IMAG_FIRST_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidArgumentError(f"Cannot parse '{text}' as complex number.")

        imag = 1.0 if match["imag"] is None else float(match["imag"])
        real = float(match["real"])

        return Complex(_signed(match["rsign"], real), _signed(match["isign"], imag))

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def neg(self) -> "Complex":
        return Complex(-self._real, -self._imag)

    def conj(self) -> "Complex":
        """Сопряжённое a - bi."""
        return Complex(self._real, -self._imag)

    def add(self, other: ComplexLike) -> "Complex":
        other = Complex.to_complex(other)
        return _arithmetic_result(self._real + other.real, self._imag + other.imag, "addition")

    def sub(self, other: ComplexLike) -> "Complex":
        other = Complex.to_complex(other)
        return _arithmetic_result(self._real - other.real, self._imag - other.imag, "subtraction")

    def mul(self, other: ComplexLike) -> "Complex":
        """(a + bi)(c + di) = (ac - bd) + (ad + bc)i"""
        other = Complex.to_complex(other)
        a, b = self._real, self._imag
        c, d = other.real, other.imag
        return _arithmetic_result(a * c - b * d, a * d + b * c, "multiplication")

    def div(self, other: ComplexLike) -> "Complex":
        """
        (a + bi)/(c + di) = [(ac + bd) + (bc - ad)i] / (c² + d²)

        Raises:
            MathDomainError: Если делитель (численно) равен нулю
            MathRangeError: Если компонента результата переполняется
        """
        other = Complex.to_complex(other)
        if other.equals(0):
            raise MathDomainError("Cannot divide by 0.")

        a, b = self._real, self._imag
        c, d = other.real, other.imag
        f = c * c + d * d
        return _arithmetic_result((a * c + b * d) / f, (b * c - a * d) / f, "division")

    # =========================================================================
    # TRANSCENDENTAL
    # =========================================================================

    def ln(self) -> "Complex":
        """
        Натуральный логарифм (главное значение): ln|z| + i·arg(z).

        Raises:
            MathDomainError: Для нуля
        """
        if self.equals(0):
            raise MathDomainError("The logarithm of 0 is undefined.")

        if self.equals(1):
            return Complex(0.0)
        if self.equals(2):
            return Complex(LN_2)
        if self.equals(math.e):
            return Complex(1.0)
        if self.equals(math.pi):
            return Complex(LN_PI)
        if self.equals(10):
            return Complex(LN_10)

        return Complex(math.log(self.mag), self.phase)

    def log(self, base: ComplexLike) -> "Complex":
        """
        Логарифм по основанию: log_b(z) = ln(z) / ln(b).

        Raises:
            MathDomainError: Если base равно 0 или 1, либо z равно 0
        """
        base = Complex.to_complex(base)

        if base.equals(0):
            raise MathDomainError("Logarithm base cannot be 0.")
        if base.equals(1):
            raise MathDomainError("Logarithm base cannot be 1.")

        if base.equals(math.e):
            return self.ln()

        if self.equals(math.e):
            if base.equals(2):
                return Complex(LOG2_E)
            if base.equals(10):
                return Complex(LOG10_E)

        # Положительные вещественные аргументы: через math.log
        if self.is_real() and base.is_real() and self._real > 0 and base.real > 0:
            return Complex(math.log(self._real, base.real))

        return self.ln().div(base.ln())

    def exp(self) -> "Complex":
        """
        e^z = e^a · (cos b + i·sin b)

        Raises:
            MathRangeError: Если e^a не представимо
        """
        if self.equals(0):
            return Complex(1.0)
        if self.equals(LN_2):
            return Complex(2.0)
        if self.equals(1):
            return Complex(math.e)
        if self.equals(LN_PI):
            return Complex(math.pi)
        if self.equals(LN_10):
            return Complex(10.0)

        # Тождество Эйлера: e^(iπ) = -1 точно
        if self.equals(Complex(0.0, math.pi)):
            return Complex(-1.0)

        try:
            magnitude = math.exp(self._real)
        except OverflowError as e:
            raise MathRangeError(f"exp({self}) overflows.") from e

        return Complex.from_polar(magnitude, self._imag)

    def pow(self, exponent: ComplexLike) -> "Complex":
        """
        z^w (только главное значение).

        Особые случаи:
        - 0^w: w комплексное или отрицательное → MathDomainError;
          0^0 = 1 по соглашению; 0^(w>0) = 0
        - z^0 = 1, z^1 = z, i^2 = -1, e^w = exp(w)
        Общий случай: exp(w · ln(z)).
        """
        exponent = Complex.to_complex(exponent)

        if self.equals(0):
            if not exponent.is_real():
                raise MathDomainError("Cannot raise 0 to a complex number.")
            if exponent.real < 0:
                raise MathDomainError("Cannot raise 0 to a negative real number.")
            if exponent.equals(0):
                return Complex(1.0)
            return Complex()

        if exponent.equals(0):
            return Complex(1.0)

        if exponent.equals(1):
            return self.copy()

        if self.equals(Complex.i()) and exponent.equals(2):
            return Complex(-1.0)

        if self.equals(math.e):
            return exponent.exp()

        return exponent.mul(self.ln()).exp()

    def roots(self, n: int) -> list["Complex"]:
        """
        Все n корней степени n (формула Муавра).

        |z|^(1/n) · e^(i(φ + 2πk)/n), k = 0..n-1

        Raises:
            InvalidArgumentError: Если n не положительное целое
        """
        if not is_int(n) or n <= 0:
            raise InvalidArgumentError("Root index must be a positive integer.")

        if self.equals(0):
            return [Complex()]

        root_mag = self.mag ** (1.0 / n)
        return [
            Complex.from_polar(root_mag, (self.phase + 2 * math.pi * k) / n)
            for k in range(n)
        ]

    def sqr(self) -> "Complex":
        return self.pow(2)

    def sqrt(self) -> "Complex":
        """Главный квадратный корень; оба корня — roots(2)."""
        return self.pow(0.5)

    def cube(self) -> "Complex":
        return self.pow(3)

    def cbrt(self) -> "Complex":
        """Главный кубический корень; все три — roots(3)."""
        return self.pow(1 / 3)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def is_real(self) -> bool:
        return self._imag == 0

    def equals(self, other: ComplexLike, epsilon: float = EPS_MACHINE) -> bool:
        """Равенство с толерантностью по каждой компоненте."""
        other = Complex.to_complex(other)
        return abs(self._real - other.real) < epsilon and abs(self._imag - other.imag) < epsilon

    def same(self, other: "Complex") -> bool:
        """Тот же объект (identity)."""
        return self is other

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def copy(self) -> "Complex":
        z = Complex(self._real, self._imag)
        z._mag, z._phase = self._mag, self._phase
        return z

    def to_array(self) -> list[float]:
        return [self._real, self._imag]

    def __str__(self) -> str:
        """Формы: "a", "bi", "a + bi", "a - bi"; коэффициент ±1 опускается."""
        if self.is_real():
            return number_to_string(self._real)

        if self._real == 0:
            if self._imag == 1:
                return "i"
            if self._imag == -1:
                return "-i"
            return f"{number_to_string(self._imag)}i"

        op = " + " if self._imag > 0 else " - "
        magnitude = abs(self._imag)
        coefficient = "" if magnitude == 1 else number_to_string(magnitude)
        return f"{number_to_string(self._real)}{op}{coefficient}i"

    def __repr__(self) -> str:
        return f"Complex({self._real!r}, {self._imag!r})"

    def __complex__(self) -> complex:
        return complex(self._real, self._imag)

    # =========================================================================
    # ITEM ACCESS: z[0] is real, z[1] is imag
    # =========================================================================

    def __len__(self) -> int:
        return 2

    def __iter__(self) -> Iterator[float]:
        yield self._real
        yield self._imag

    def __getitem__(self, index: int) -> float:
        _check_offset(index)
        return self._real if index == 0 else self._imag

    def __setitem__(self, index: int, value: float) -> None:
        _check_offset(index)
        if index == 0:
            self.real = value
        else:
            self.imag = value

    def __delitem__(self, index: int) -> None:
        """Удаление компоненты обнуляет её."""
        self[index] = 0.0

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Complex) and not is_number(other):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __neg__(self) -> "Complex":
        return self.neg()

    def __abs__(self) -> float:
        return self.mag

    def __add__(self, other: ComplexLike) -> "Complex":
        return self.add(other)

    def __radd__(self, other: ComplexLike) -> "Complex":
        return Complex.to_complex(other).add(self)

    def __sub__(self, other: ComplexLike) -> "Complex":
        return self.sub(other)

    def __rsub__(self, other: ComplexLike) -> "Complex":
        return Complex.to_complex(other).sub(self)

    def __mul__(self, other: ComplexLike) -> "Complex":
        return self.mul(other)

    def __rmul__(self, other: ComplexLike) -> "Complex":
        return Complex.to_complex(other).mul(self)

    def __truediv__(self, other: ComplexLike) -> "Complex":
        return self.div(other)

    def __rtruediv__(self, other: ComplexLike) -> "Complex":
        return Complex.to_complex(other).div(self)

    def __pow__(self, exponent: ComplexLike) -> "Complex":
        return self.pow(exponent)

    def __rpow__(self, base: ComplexLike) -> "Complex":
        return Complex.to_complex(base).pow(self)


def _check_offset(index: object) -> None:
    if not is_int(index) or index not in (0, 1):
        raise IndexOutOfBoundsError(f"Invalid offset: {index!r}")
