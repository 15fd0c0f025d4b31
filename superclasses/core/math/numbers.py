"""
Numbers — Знаковые примитивы и checked-арифметика целых

Модуль является листом численного ядра, от него зависят Rational, Complex,
Matrix/Vector и Angle:
- Классификация значений (is_number, is_unsigned_int)
- Различение +0.0 / -0.0 и знаковых бесконечностей по IEEE-754
- sign / copy_sign / fdiv (деление без исключений)
- Checked-арифметика над нативным знаковым диапазоном (int_add, int_sub,
  int_mul, int_pow): при выходе за диапазон → IntegerOverflowError,
  без молчаливого перехода во float
- gcd, строгий парсинг целых, форматирование чисел

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат checked-операции либо точен, либо операция падает с Overflow
2. fdiv никогда не бросает ZeroDivisionError (возвращает ±inf или NaN)
3. bool не считается числом
"""

import math
import os
import re
import struct
import sys
from dataclasses import dataclass
from typing import Final, Optional

from superclasses.core.math.errors import InvalidArgumentError, IntegerOverflowError

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Машинный epsilon double (равенство комплексных чисел по умолчанию)
EPS_MACHINE: Final[float] = sys.float_info.epsilon

# Порог вырожденности матрицы: |det| < eps → обращение запрещено
MATRIX_SINGULAR_EPS: Final[float] = 1e-10

# Поэлементная толерантность сравнения векторов
VECTOR_EQ_EPS: Final[float] = 1e-10


# =============================================================================
# ДИАПАЗОН НАТИВНЫХ ЦЕЛЫХ
# =============================================================================


@dataclass(frozen=True)
class IntLimits:
    """
    Диапазон эмулируемых нативных знаковых целых.

    Python int не переполняется, поэтому граница задаётся явно:
    по умолчанию 64-битное дополнение до двух.
    """

    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits < 2:
            raise InvalidArgumentError(f"bits must be >= 2, got {self.bits}")

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


DEFAULT_INT_LIMITS: Final[IntLimits] = IntLimits()

INT_MAX: Final[int] = DEFAULT_INT_LIMITS.max_value
INT_MIN: Final[int] = DEFAULT_INT_LIMITS.min_value


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def is_number(value: object) -> bool:
    """
    Проверка, является ли значение числом (int или float).

    В отличие от "похоже на число", строки не принимаются; bool тоже
    исключён, хотя в Python это подкласс int.

    Examples:
        >>> is_number(3), is_number(2.5), is_number("3"), is_number(True)
        (True, True, False, False)
    """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_int(value: object) -> bool:
    """Целое число (не bool)."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_unsigned_int(value: object) -> bool:
    """Неотрицательное целое (не bool)."""
    return is_int(value) and value >= 0


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли значение конечным (не NaN, не Inf).

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


# =============================================================================
# ЗНАКОВЫЙ НОЛЬ И БЕСКОНЕЧНОСТИ
# =============================================================================


def fdiv(numerator: float, denominator: float) -> float:
    """
    Деление по правилам IEEE-754 без исключений.

    Python поднимает ZeroDivisionError при делении float на 0.0; здесь
    поведение соответствует аппаратному делению:
        x / ±0.0 → ±inf (знак = знак x XOR знак нуля)
        0 / 0, NaN / 0 → NaN

    Examples:
        >>> fdiv(1.0, -0.0)
        -inf
        >>> fdiv(-1.0, -0.0)
        inf
        >>> math.isnan(fdiv(0.0, 0.0))
        True
    """
    if denominator != 0.0:
        return numerator / denominator

    if numerator == 0.0 or math.isnan(numerator):
        return math.nan

    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def is_negative_zero(x: float) -> bool:
    """
    Проверка на отрицательный ноль (-0.0).

    -0.0 == 0.0 по сравнению, но 1 / -0.0 = -inf по IEEE-754.
    """
    return x == 0.0 and fdiv(1.0, x) == -math.inf


def is_positive_zero(x: float) -> bool:
    """Проверка на положительный ноль (+0.0): 1 / +0.0 = +inf."""
    return x == 0.0 and fdiv(1.0, x) == math.inf


def is_negative(x: float) -> bool:
    """
    Отрицательное значение, включая -0.0 и -inf.

    Для NaN всегда False.
    """
    return not math.isnan(x) and (x < 0 or is_negative_zero(x))


def is_positive(x: float) -> bool:
    """
    Положительное значение, включая +0.0 и +inf.

    Для NaN всегда False.
    """
    return not math.isnan(x) and (x > 0 or is_positive_zero(x))


def sign(x: float, zero_for_zero: bool = True) -> int:
    """
    Функция знака.

    Args:
        x: Число
        zero_for_zero: Если True (default) — для нуля возвращается 0;
            иначе знак нуля (-1 для -0.0, 1 для +0.0). Второй режим нужен,
            когда результат используется как множитель и не должен быть 0.

    Returns:
        -1, 0 или 1

    Examples:
        >>> sign(-3.5), sign(0.0), sign(-0.0, zero_for_zero=False)
        (-1, 0, -1)
    """
    if x > 0:
        return 1
    if x < 0:
        return -1
    if zero_for_zero:
        return 0
    return -1 if is_negative_zero(x) else 1


def copy_sign(magnitude_source: float, sign_source: float) -> float:
    """
    |magnitude_source| со знаком sign_source (учитывая знак нуля).

    Raises:
        InvalidArgumentError: Если любой из аргументов NaN
    """
    if math.isnan(magnitude_source) or math.isnan(sign_source):
        raise InvalidArgumentError("NaN is not allowed for either parameter.")

    return abs(magnitude_source) * sign(sign_source, zero_for_zero=False)


# =============================================================================
# CHECKED-АРИФМЕТИКА ЦЕЛЫХ
# =============================================================================


def _require_int(value: object, name: str) -> int:
    if not is_int(value):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    return value


def _checked(result: int, operation: str, limits: IntLimits) -> int:
    if not limits.contains(result):
        raise IntegerOverflowError(f"Overflow in integer {operation}.")
    return result


def int_add(a: int, b: int, limits: IntLimits = DEFAULT_INT_LIMITS) -> int:
    """
    Сложение с контролем переполнения.

    Raises:
        IntegerOverflowError: Если a + b вне диапазона limits
    """
    return _checked(_require_int(a, "a") + _require_int(b, "b"), "addition", limits)


def int_sub(a: int, b: int, limits: IntLimits = DEFAULT_INT_LIMITS) -> int:
    """
    Вычитание с контролем переполнения.

    Raises:
        IntegerOverflowError: Если a - b вне диапазона limits
    """
    return _checked(_require_int(a, "a") - _require_int(b, "b"), "subtraction", limits)


def int_mul(a: int, b: int, limits: IntLimits = DEFAULT_INT_LIMITS) -> int:
    """
    Умножение с контролем переполнения.

    Examples:
        >>> int_mul(3037000499, 3037000499)
        9223372030926249001
        >>> int_mul(3037000500, 3037000500)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        IntegerOverflowError: Overflow in integer multiplication.
    """
    return _checked(
        _require_int(a, "a") * _require_int(b, "b"), "multiplication", limits
    )


def int_pow(base: int, exponent: int, limits: IntLimits = DEFAULT_INT_LIMITS) -> int:
    """
    Возведение целого в неотрицательную целую степень с контролем переполнения.

    Raises:
        InvalidArgumentError: Если exponent < 0
        IntegerOverflowError: Если результат вне диапазона limits
    """
    _require_int(base, "base")
    _require_int(exponent, "exponent")

    if exponent < 0:
        raise InvalidArgumentError("Negative exponents are not supported.")

    # |base| >= 2 при exponent >= bits гарантированно переполняется;
    # ранний выход не даёт вычислять гигантские степени
    if abs(base) >= 2 and exponent >= limits.bits:
        raise IntegerOverflowError("Overflow in exponentiation.")

    return _checked(base**exponent, "exponentiation", limits)


def gcd(a: int, b: int) -> int:
    """
    Наибольший общий делитель (алгоритм Евклида по модулям).

    Examples:
        >>> gcd(-12, 18), gcd(7, 0), gcd(0, 0)
        (6, 7, 0)
    """
    a = abs(_require_int(a, "a"))
    b = abs(_require_int(b, "b"))
    while b != 0:
        a, b = b, a % b
    return a


# =============================================================================
# ПАРСИНГ И ФОРМАТИРОВАНИЕ
# =============================================================================

_INT_PATTERN: Final[re.Pattern[str]] = re.compile(r"-?(?:0|[1-9][0-9]*)")


def try_parse_int(s: str, limits: IntLimits = DEFAULT_INT_LIMITS) -> Optional[int]:
    """
    Строгий парсинг целого.

    Строка должна выглядеть ровно как каноническое целое: цифры без ведущих
    нулей, опциональный минус (но не "-0"), без пробелов и "+", значение в
    пределах limits.

    Returns:
        int при успехе, иначе None

    Examples:
        >>> try_parse_int("-42"), try_parse_int("042"), try_parse_int(" 1")
        (-42, None, None)
    """
    if not isinstance(s, str) or s == "-0" or not _INT_PATTERN.fullmatch(s):
        return None

    value = int(s)
    return value if limits.contains(value) else None


def number_to_string(value: float) -> str:
    """
    Кратчайшее текстовое представление числа, пригодное для обратного парсинга.

    Целые float выводятся без ".0", ноль без знака.

    Examples:
        >>> number_to_string(3.0), number_to_string(-0.0), number_to_string(0.1)
        ('3', '0', '0.1')
        >>> number_to_string(1e-07)
        '1e-07'
    """
    if is_int(value):
        return str(value)

    if value == 0.0:
        return "0"

    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def round_half_away_from_zero(value: float, decimals: int = 0) -> float:
    """
    Округление до decimals знаков "половина от нуля".

    Встроенный round() использует банковское округление (half-even),
    что даёт round(0.5) == 0; здесь 0.5 → 1, -0.5 → -1.

    Raises:
        InvalidArgumentError: Если decimals < 0
    """
    if decimals < 0:
        raise InvalidArgumentError(f"decimals must be non-negative, got {decimals}")

    if not math.isfinite(value):
        return value

    scale = 10.0**decimals
    scaled = value * scale
    if scaled >= 0:
        steps = math.floor(scaled + 0.5)
    else:
        steps = math.ceil(scaled - 0.5)

    return steps / scale


def compare_with_tolerance(a: float, b: float, tol: float) -> int:
    """
    Сравнение двух float с учётом толерантности.

    Returns:
        -1 если a < b, 0 если |a - b| <= tol, 1 если a > b
    """
    diff = a - b

    if abs(diff) <= tol:
        return 0
    elif diff < 0:
        return -1
    else:
        return 1


# =============================================================================
# СЛУЧАЙНЫЕ ЧИСЛА
# =============================================================================


def random_finite_float() -> float:
    """
    Случайный конечный float из 8 случайных байт.

    Покрывает весь диапазон double (включая субнормальные и -0.0);
    NaN/Inf отбрасываются, повтор цикла крайне редок.
    """
    while True:
        (value,) = struct.unpack("<d", os.urandom(8))
        if math.isfinite(value):
            return value
