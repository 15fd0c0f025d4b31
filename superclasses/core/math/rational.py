"""
Rational — Точная дробь с контролем переполнения

Immutable Pydantic модель {num, den}:
- Канонический вид: den > 0, gcd(|num|, den) == 1, ноль всегда 0/1
- Вся арифметика через checked-операции numbers.int_* → любое промежуточное
  переполнение поднимает IntegerOverflowError, а не портит результат
- mul/div сокращают перекрёстные множители ДО умножения
- from_number: наилучшее приближение цепной дробью с ограничением знаменателя

КОМПРОМИСС (документированный):
    compare() при переполнении перекрёстного умножения сравнивает float-значения.
    Две различные дроби, округляющиеся к одному float, будут признаны равными.
"""

import logging
import math
import re
from fractions import Fraction
from typing import Any, Final, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from superclasses.core.math.errors import (
    IntegerOverflowError,
    InvalidArgumentError,
    MathDomainError,
    MathRangeError,
)
from superclasses.core.math.numbers import (
    DEFAULT_INT_LIMITS,
    gcd,
    int_add,
    int_mul,
    int_sub,
    is_int,
    is_number,
    sign,
    try_parse_int,
)

logger = logging.getLogger(__name__)

# Максимальный знаменатель from_number по умолчанию
DEFAULT_MAX_DENOMINATOR: Final[int] = 1_000_000

_NUMERIC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*"
)

RationalLike = Union["Rational", int, float]


# =============================================================================
# КАНОНИЗАЦИЯ
# =============================================================================


def _simplify(num: int, den: int) -> tuple[int, int]:
    """
    Сокращение дроби и перенос знака в числитель.

    INT_MIN не имеет положительной пары в том же диапазоне: если после
    сокращения знак приходится переносить с INT_MIN, результат
    непредставим → MathRangeError.
    """
    if num == 0:
        return 0, 1

    divisor = gcd(num, den)
    if divisor > 1:
        num //= divisor
        den //= divisor

    if den < 0:
        limits = DEFAULT_INT_LIMITS
        if num == limits.min_value or den == limits.min_value:
            raise MathRangeError(
                f"Cannot put {num}/{den} into canonical form: "
                "negating the minimum integer overflows."
            )
        num, den = -num, -den

    return num, den


# =============================================================================
# RATIONAL MODEL
# =============================================================================


class Rational(BaseModel):
    """
    Рациональное число num/den в каноническом виде.

    Immutable модель (frozen=True): все операции возвращают новый экземпляр.
    Позиционный конструктор Rational(num, den) канонизирует дробь.
    Именованные поля (Rational(num=..., den=...), model_validate) идут через
    строгую pydantic-валидацию: неканонические данные → ValidationError.
    """

    num: int = Field(0, description="Числитель")
    den: int = Field(1, gt=0, description="Знаменатель (всегда положительный)")

    model_config = ConfigDict(frozen=True, strict=True)

    def __init__(self, num: int = 0, den: int = 1, /, **data: Any) -> None:
        if data:
            super().__init__(**data)
            return

        if not is_int(num) or not is_int(den):
            raise InvalidArgumentError(
                f"Numerator and denominator must be integers, got {num!r}/{den!r}"
            )

        limits = DEFAULT_INT_LIMITS
        if not limits.contains(num) or not limits.contains(den):
            raise IntegerOverflowError(
                f"Numerator and denominator must fit in {limits.bits}-bit integers."
            )

        if den == 0:
            raise InvalidArgumentError("Denominator cannot be zero.")

        num, den = _simplify(num, den)
        super().__init__(num=num, den=den)

    @model_validator(mode="after")
    def _check_canonical(self) -> "Rational":
        """Инвариант канонического вида на любом пути создания."""
        limits = DEFAULT_INT_LIMITS
        if not limits.contains(self.num) or not limits.contains(self.den):
            raise ValueError(f"{self.num}/{self.den} exceeds {limits.bits}-bit range")
        if self.num == 0 and self.den != 1:
            raise ValueError("zero must be represented as 0/1")
        if gcd(self.num, self.den) != 1 and self.num != 0:
            raise ValueError(f"{self.num}/{self.den} is not reduced")
        return self

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_number(
        cls, value: float, max_denominator: int = DEFAULT_MAX_DENOMINATOR
    ) -> "Rational":
        """
        Наилучшее рациональное приближение числа цепной дробью.

        Алгоритм:
            h_k = a_k·h_{k-1} + h_{k-2}
            k_k = a_k·k_{k-1} + k_{k-2}
        Отслеживается подходящая дробь с наименьшей ошибкой; как только
        следующий знаменатель превышает max_denominator, возвращается лучшая
        найденная. Точное совпадение (ошибка 0) возвращается сразу.

        Args:
            value: Конечное число
            max_denominator: Максимальный знаменатель (>= 1)

        Returns:
            Ближайшая дробь со знаменателем <= max_denominator

        Raises:
            InvalidArgumentError: value не число/не конечно, max_denominator < 1
            MathRangeError: |value| > INT_MAX или 0 < |value| < 1/INT_MAX

        Examples:
            >>> str(Rational.from_number(0.75))
            '3/4'
            >>> str(Rational.from_number(math.pi, 1000))
            '355/113'
        """
        if not is_number(value):
            raise InvalidArgumentError(f"Value must be a number, got {value!r}")
        if not is_int(max_denominator) or max_denominator < 1:
            raise InvalidArgumentError("Maximum denominator must be positive.")

        if is_int(value):
            return cls(value)

        if not math.isfinite(value):
            raise InvalidArgumentError(f"Cannot convert non-finite value {value} to Rational.")

        if value == 0:
            return cls()

        limits = DEFAULT_INT_LIMITS
        magnitude = abs(value)
        if magnitude > limits.max_value or magnitude < 1.0 / limits.max_value:
            raise MathRangeError(
                f"Value {value} is outside the range convertible to Rational."
            )

        if value == int(value):
            return cls(int(value))

        value_sign = sign(value)

        # Подходящие дроби: h0/k0 предыдущая, h1/k1 пред-предыдущая
        h0, h1 = 1, 0
        k0, k1 = 0, 1
        x = magnitude

        h_best = 0 if magnitude < 0.5 else 1
        k_best = 1
        min_error = abs(h_best - magnitude)

        while True:
            a = math.floor(x)

            h_new = a * h0 + h1
            k_new = a * k0 + k1

            if k_new > max_denominator:
                return cls(value_sign * h_best, k_best)

            error = abs(h_new / k_new - magnitude)
            if error == 0:
                return cls(value_sign * h_new, k_new)

            if error < min_error:
                h_best, k_best, min_error = h_new, k_new, error

            h1, h0 = h0, h_new
            k1, k0 = k0, k_new

            remainder = x - a
            if remainder == 0:
                return cls(value_sign * h0, k0)

            x = 1.0 / remainder

    @classmethod
    def parse(cls, s: str) -> "Rational":
        """
        Парсинг строки: число ("0.75", "-3", "1e-3") или дробь ("3/4", "-6 / 8").

        Raises:
            InvalidArgumentError: Если строка не является рациональным числом
        """
        if not isinstance(s, str):
            raise InvalidArgumentError(f"Expected a string, got {s!r}")

        integer = try_parse_int(s.strip())
        if integer is not None:
            return cls(integer)

        if _NUMERIC_PATTERN.fullmatch(s):
            return cls.from_number(float(s))

        parts = s.split("/")
        if len(parts) == 2:
            num = try_parse_int(parts[0].strip())
            den = try_parse_int(parts[1].strip())
            if num is not None and den is not None:
                return cls(num, den)

        raise InvalidArgumentError(f"Invalid rational number: {s}")

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def to_float(self) -> float:
        """Ближайший float (корректно округлённое деление целых)."""
        return self.num / self.den

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return str(self.num) if self.den == 1 else f"{self.num}/{self.den}"

    def __hash__(self) -> int:
        # Совместим с hash() равных int/float
        return hash(Fraction(self.num, self.den))

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def neg(self) -> "Rational":
        """-(a/b)"""
        return Rational(int_sub(0, self.num), self.den)

    def abs(self) -> "Rational":
        """|a/b|"""
        return self if self.num >= 0 else self.neg()

    def inv(self) -> "Rational":
        """
        Обратное число b/a.

        Raises:
            MathDomainError: Для нуля
        """
        if self.num == 0:
            raise MathDomainError("Cannot take reciprocal of zero.")

        return Rational(self.den, self.num)

    def add(self, other: RationalLike) -> "Rational":
        """(a/b) + (c/d) = (ad + bc) / bd"""
        other = _to_rational(other)

        f = int_mul(self.num, other.den)
        g = int_mul(self.den, other.num)
        h = int_add(f, g)
        k = int_mul(self.den, other.den)

        return Rational(h, k)

    def sub(self, other: RationalLike) -> "Rational":
        """(a/b) - (c/d)"""
        return self.add(_to_rational(other).neg())

    def mul(self, other: RationalLike) -> "Rational":
        """
        (a/b) · (c/d) с перекрёстным сокращением.

        gcd(a, d) и gcd(b, c) убираются до умножения, что уменьшает
        вероятность переполнения по сравнению с наивным ac/bd.
        """
        other = _to_rational(other)

        if self.num == 0 or other.num == 0:
            return Rational()

        gcd1 = gcd(self.num, other.den)
        gcd2 = gcd(self.den, other.num)

        a = self.num // gcd1
        b = self.den // gcd2
        c = other.num // gcd2
        d = other.den // gcd1

        return Rational(int_mul(a, c), int_mul(b, d))

    def div(self, other: RationalLike) -> "Rational":
        """
        (a/b) / (c/d)

        Raises:
            MathDomainError: При делении на ноль
        """
        other = _to_rational(other)
        if other.num == 0:
            raise MathDomainError("Cannot divide by zero.")

        return self.mul(other.inv())

    def pow(self, exponent: int) -> "Rational":
        """
        Целая степень (возведение в квадрат для положительных показателей).

        0^0 = 1 по соглашению. Отрицательная степень = обратное в
        положительной степени.

        Raises:
            InvalidArgumentError: Если exponent не целое
            MathDomainError: Ноль в отрицательной степени
        """
        if not is_int(exponent):
            raise InvalidArgumentError(f"Exponent must be an integer, got {exponent!r}")

        if exponent == 0:
            return Rational(1)

        if self.num == 0:
            if exponent < 0:
                raise MathDomainError("Cannot raise zero to a negative power.")
            return Rational()

        if exponent < 0:
            return self.inv().pow(-exponent)

        result = Rational(1)
        base = self
        while exponent > 0:
            if exponent & 1:
                result = result.mul(base)
            exponent >>= 1
            if exponent:
                base = base.mul(base)

        return result

    # =========================================================================
    # ROUNDING
    # =========================================================================

    def floor(self) -> int:
        """Наибольшее целое <= a/b."""
        quotient, _ = divmod(self.num, self.den)
        return quotient

    def ceil(self) -> int:
        """Наименьшее целое >= a/b."""
        quotient, remainder = divmod(self.num, self.den)
        return quotient + 1 if remainder else quotient

    def round(self) -> int:
        """Округление "половина от нуля": 1/2 → 1, -1/2 → -1."""
        quotient, remainder = divmod(abs(self.num), self.den)
        if 2 * remainder >= self.den:
            quotient += 1
        return -quotient if self.num < 0 else quotient

    def __floor__(self) -> int:
        return self.floor()

    def __ceil__(self) -> int:
        return self.ceil()

    def __round__(self, ndigits: Any = None) -> int:
        if ndigits is not None:
            raise InvalidArgumentError("Rational rounding supports integers only.")
        return self.round()

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def compare(self, other: RationalLike) -> int:
        """
        Сравнение: -1, 0 или 1.

        Перекрёстное умножение ad <=> bc через checked-операции; при
        переполнении сравниваются float-значения (приближённо).
        """
        other = _to_rational(other)

        try:
            left: float = int_mul(self.num, other.den)
            right: float = int_mul(self.den, other.num)
        except IntegerOverflowError:
            logger.debug(
                "Cross-multiplication overflow comparing %s with %s, using floats",
                self,
                other,
            )
            left = self.to_float()
            right = other.to_float()

        return (left > right) - (left < right)

    def eq(self, other: RationalLike) -> bool:
        return self.compare(other) == 0

    def lt(self, other: RationalLike) -> bool:
        return self.compare(other) == -1

    def gt(self, other: RationalLike) -> bool:
        return self.compare(other) == 1

    def lte(self, other: RationalLike) -> bool:
        return self.compare(other) != 1

    def gte(self, other: RationalLike) -> bool:
        return self.compare(other) != -1

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rational) and not is_number(other):
            return NotImplemented
        if isinstance(other, Rational):
            return self.num == other.num and self.den == other.den
        # Точное сравнение: согласовано с __hash__, без приближения from_number
        return Fraction(self.num, self.den) == other

    def __lt__(self, other: RationalLike) -> bool:
        return self.lt(other)

    def __le__(self, other: RationalLike) -> bool:
        return self.lte(other)

    def __gt__(self, other: RationalLike) -> bool:
        return self.gt(other)

    def __ge__(self, other: RationalLike) -> bool:
        return self.gte(other)

    def __neg__(self) -> "Rational":
        return self.neg()

    def __abs__(self) -> "Rational":
        return self.abs()

    def __add__(self, other: RationalLike) -> "Rational":
        return self.add(other)

    def __radd__(self, other: RationalLike) -> "Rational":
        return _to_rational(other).add(self)

    def __sub__(self, other: RationalLike) -> "Rational":
        return self.sub(other)

    def __rsub__(self, other: RationalLike) -> "Rational":
        return _to_rational(other).sub(self)

    def __mul__(self, other: RationalLike) -> "Rational":
        return self.mul(other)

    def __rmul__(self, other: RationalLike) -> "Rational":
        return _to_rational(other).mul(self)

    def __truediv__(self, other: RationalLike) -> "Rational":
        return self.div(other)

    def __rtruediv__(self, other: RationalLike) -> "Rational":
        return _to_rational(other).div(self)

    def __pow__(self, exponent: int) -> "Rational":
        return self.pow(exponent)


# =============================================================================
# HELPERS
# =============================================================================


def _to_rational(value: RationalLike) -> Rational:
    """int → n/1, float → from_number(), Rational как есть."""
    if isinstance(value, Rational):
        return value
    if is_int(value):
        return Rational(value)
    if is_number(value):
        return Rational.from_number(value)

    raise InvalidArgumentError(f"Cannot convert {value!r} to Rational.")
