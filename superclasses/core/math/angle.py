"""
Angle — Угол с единицами измерения, нормализацией и парсингом

Внутреннее представление: одно значение в радианах. Градусы, грады, обороты
и DMS (градусы/минуты/секунды) — производные представления, не хранятся.

Сравнение и нормализация (wrap) определены по модулю полного оборота:
2π рад = 360° = 400 grad = 1 turn.

Строковые формы:
- CSS: число вплотную к единице ("12.5deg", "1.2rad", "100grad", "0.25turn")
- DMS: "12° 34′ 56.7″" (опциональный знак; пробелы между частями допустимы,
  между числом и его знаком единицы — нет)
"""

import math
import re
from typing import Final, Optional, Union

from superclasses.core.math.errors import InvalidArgumentError, MathRangeError
from superclasses.core.math.numbers import (
    copy_sign,
    compare_with_tolerance,
    fdiv,
    is_int,
    is_negative,
    is_number,
    number_to_string,
    round_half_away_from_zero,
)

Number = Union[int, float]

# =============================================================================
# КОНСТАНТЫ ЕДИНИЦ
# =============================================================================

TAU: Final[float] = 2 * math.pi

RADIANS_PER_TURN: Final[float] = TAU
DEGREES_PER_RADIAN: Final[float] = 180 / math.pi
ARCMINUTES_PER_RADIAN: Final[float] = 10800 / math.pi
ARCSECONDS_PER_RADIAN: Final[float] = 648000 / math.pi

DEGREES_PER_TURN: Final[float] = 360.0
ARCMINUTES_PER_DEGREE: Final[float] = 60.0
ARCSECONDS_PER_ARCMINUTE: Final[float] = 60.0
ARCSECONDS_PER_DEGREE: Final[float] = 3600.0

GRADIANS_PER_TURN: Final[float] = 400.0
GRADIANS_PER_RADIAN: Final[float] = 200 / math.pi
DEGREES_PER_GRADIAN: Final[float] = 0.9

# Толерантность сравнения углов и дрейфа при переносе в DMS
RAD_EPSILON: Final[float] = 1e-9

# |x| <= TRIG_EPSILON считается нулём в знаменателях sec/csc/cot/tan
TRIG_EPSILON: Final[float] = 1e-12

# =============================================================================
# ГРАММАТИКИ
# =============================================================================

_NUM = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"

_CSS_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"(?P<value>[+-]?{_NUM})(?P<unit>rad|deg|grad|turn)", re.IGNORECASE
)

_DMS_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"(?P<sign>[+-]?)\s*"
    rf"(?:(?P<deg>{_NUM})°\s*)?"
    rf"(?:(?P<min>{_NUM})[′']\s*)?"
    rf"(?:(?P<sec>{_NUM})[″\"])?"
)

_CSS_FORMATS: Final[tuple[str, ...]] = ("rad", "deg", "grad", "turn")
_DMS_FORMATS: Final[dict[str, int]] = {"d": 0, "dm": 1, "dms": 2}


# =============================================================================
# HELPERS
# =============================================================================


def _check_decimals(decimals: Optional[int]) -> None:
    if decimals is not None and (not is_int(decimals) or decimals < 0):
        raise InvalidArgumentError(f"decimals must be a non-negative integer or None, got {decimals!r}")


def _require_finite(value: object, name: str) -> float:
    if not is_number(value) or not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def _format_float(value: float, decimals: Optional[int] = None) -> str:
    # -0.0 → 0.0
    if value == 0.0:
        value = 0.0

    if decimals is None:
        return number_to_string(value)

    text = f"{value:.{decimals}f}"
    # Отрицательное значение, округлённое до нуля: "-0.00" → "0.00"
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def _inverse(x: float) -> float:
    """1/x; |x| <= TRIG_EPSILON заменяется нулём того же знака (результат ±inf)."""
    if abs(x) <= TRIG_EPSILON:
        x = copy_sign(0.0, x)
    return fdiv(1.0, x)


def _wrap_scalar(value: float, units_per_turn: float, signed: bool = False) -> float:
    """
    Приведение value по модулю units_per_turn в полуинтервал.

    signed=False → [0, units_per_turn); signed=True → [-half, half).
    """
    r = math.fmod(value, units_per_turn)

    half = units_per_turn / 2.0
    lower = -half if signed else 0.0
    upper = half if signed else units_per_turn

    if r < lower:
        r += units_per_turn
        # r чуть меньше lower, сумма округлилась до upper
        if r >= upper:
            r = lower
    elif r >= upper:
        r -= units_per_turn

    if r == 0.0:
        r = 0.0

    return r


# =============================================================================
# ANGLE
# =============================================================================


class Angle:
    """
    Угол, хранящийся в радианах.

    Создаётся только через фабрики (from_radians, from_degrees, from_dms,
    from_gradians, from_turns, from_string). Все операции возвращают новые
    экземпляры, кроме wrap_this().
    """

    __slots__ = ("_radians",)

    def __init__(self, radians: float = 0.0) -> None:
        self._radians = _require_finite(radians, "radians")

    @classmethod
    def _from_result(cls, radians: float) -> "Angle":
        if not math.isfinite(radians):
            raise MathRangeError(f"Angle result is not finite: {radians!r}")
        return cls(radians)

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def from_radians(cls, radians: float) -> "Angle":
        return cls(radians)

    @classmethod
    def from_degrees(cls, degrees: float) -> "Angle":
        return cls(_require_finite(degrees, "degrees") / DEGREES_PER_RADIAN)

    @classmethod
    def from_dms(cls, degrees: float, minutes: float = 0.0, seconds: float = 0.0) -> "Angle":
        """
        Угол из градусов, минут и секунд.

        Части не обязаны лежать в каноническом диапазоне (секунд может быть
        больше 60). Угол отрицателен, если отрицательна хотя бы одна часть
        (включая -0.0); величина = |d| + |m|/60 + |s|/3600.

        Examples:
            >>> round(Angle.from_dms(-12, 34, 56).to_degrees(), 5)
            -12.58222
        """
        d = _require_finite(degrees, "degrees")
        m = _require_finite(minutes, "minutes")
        s = _require_finite(seconds, "seconds")

        magnitude = abs(d) + abs(m) / ARCMINUTES_PER_DEGREE + abs(s) / ARCSECONDS_PER_DEGREE
        negative = is_negative(d) or is_negative(m) or is_negative(s)

        return cls.from_degrees(-magnitude if negative else magnitude)

    @classmethod
    def from_gradians(cls, gradians: float) -> "Angle":
        return cls(_require_finite(gradians, "gradians") / GRADIANS_PER_RADIAN)

    @classmethod
    def from_turns(cls, turns: float) -> "Angle":
        return cls(_require_finite(turns, "turns") * RADIANS_PER_TURN)

    # =========================================================================
    # UNIT VIEWS
    # =========================================================================

    def to_radians(self) -> float:
        return self._radians

    def to_degrees(self) -> float:
        return self._radians * DEGREES_PER_RADIAN

    def to_gradians(self) -> float:
        return self._radians * GRADIANS_PER_RADIAN

    def to_turns(self) -> float:
        return self._radians / RADIANS_PER_TURN

    def to_dms(self, smallest_unit: int = 2, decimals: Optional[int] = None) -> list[float]:
        """
        Разложение на градусы / минуты / секунды.

        Дробной может быть только наименьшая единица; старшие части целые.
        Округление (если задано decimals) применяется к наименьшей единице
        с переносом 60″ → 1′ и 60′ → 1°. Знак применяется ко всем частям,
        -0.0 заменяется на 0.0.

        Args:
            smallest_unit: 0 — только градусы, 1 — градусы и минуты,
                2 — градусы, минуты и секунды (default)
            decimals: Число знаков для наименьшей единицы (None — без округления)

        Returns:
            Список из 1-3 float

        Raises:
            InvalidArgumentError: Если smallest_unit не 0/1/2 или decimals < 0

        Examples:
            >>> Angle.from_degrees(10.9999999).to_dms(2, decimals=0)
            [11.0, 0.0, 0.0]
        """
        _check_decimals(decimals)
        if smallest_unit not in (0, 1, 2) or isinstance(smallest_unit, bool):
            raise InvalidArgumentError(
                "smallest_unit must be 0 for degrees, 1 for arcminutes or 2 for arcseconds, "
                f"got {smallest_unit!r}"
            )

        total = self.to_degrees()
        sign = -1.0 if total < 0 else 1.0
        total = abs(total)

        def _round(value: float) -> float:
            return value if decimals is None else round_half_away_from_zero(value, decimals)

        if smallest_unit == 0:
            parts = [_round(total)]

        elif smallest_unit == 1:
            d = float(math.floor(total))
            m = _round((total - d) * ARCMINUTES_PER_DEGREE)

            if m >= ARCMINUTES_PER_DEGREE - RAD_EPSILON:
                m = 0.0
                d += 1.0

            parts = [d, m]

        else:
            d = float(math.floor(total))
            minutes = (total - d) * ARCMINUTES_PER_DEGREE
            m = float(math.floor(minutes))
            s = _round((minutes - m) * ARCSECONDS_PER_ARCMINUTE)

            if s >= ARCSECONDS_PER_ARCMINUTE - RAD_EPSILON:
                s = 0.0
                m += 1.0
            if m >= ARCMINUTES_PER_DEGREE - RAD_EPSILON:
                m = 0.0
                d += 1.0

            parts = [d, m, s]

        return [sign * part if part != 0.0 else 0.0 for part in parts]

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def add(self, other: "Angle") -> "Angle":
        return Angle._from_result(self._radians + _require_angle(other)._radians)

    def sub(self, other: "Angle") -> "Angle":
        return Angle._from_result(self._radians - _require_angle(other)._radians)

    def mul(self, k: float) -> "Angle":
        if not is_number(k):
            raise InvalidArgumentError(f"Angle can only be multiplied by a number, got {k!r}")
        return Angle._from_result(self._radians * k)

    def div(self, k: float) -> "Angle":
        """
        Raises:
            MathRangeError: Если делитель 0, NaN или ±inf
        """
        if not is_number(k):
            raise InvalidArgumentError(f"Angle can only be divided by a number, got {k!r}")
        if k == 0 or not math.isfinite(k):
            raise MathRangeError("Divisor cannot be 0, NaN or ±inf.")
        return Angle._from_result(self._radians / k)

    def abs(self) -> "Angle":
        return Angle(abs(self._radians))

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def compare(self, other: "Angle", eps: float = RAD_EPSILON) -> int:
        """
        Сравнение по минимальной знаковой разности в [-π, π).

        Углы по разные стороны границы оборота (359.9° и 0.1°) сравниваются
        корректно: разность берётся после нормализации.

        Returns:
            -1, 0 или 1

        Raises:
            InvalidArgumentError: Если eps < 0
        """
        if not is_number(eps) or eps < 0:
            raise InvalidArgumentError(f"Epsilon must be non-negative, got {eps!r}")

        delta = Angle.wrap_radians(self._radians - _require_angle(other)._radians, signed=True)
        return compare_with_tolerance(delta, 0.0, eps)

    def equals(self, other: "Angle", eps: float = RAD_EPSILON) -> bool:
        return self.compare(other, eps) == 0

    # =========================================================================
    # TRIGONOMETRY
    # =========================================================================

    def sin(self) -> float:
        return math.sin(self._radians)

    def cos(self) -> float:
        return math.cos(self._radians)

    def tan(self) -> float:
        """Тангенс; при cos ≈ 0 возвращает ±inf со знаком синуса."""
        s = math.sin(self._radians)
        c = math.cos(self._radians)

        if abs(c) <= TRIG_EPSILON:
            return copy_sign(math.inf, s)

        return s / c

    def sec(self) -> float:
        return _inverse(self.cos())

    def csc(self) -> float:
        return _inverse(self.sin())

    def cot(self) -> float:
        return _inverse(self.tan())

    def sinh(self) -> float:
        try:
            return math.sinh(self._radians)
        except OverflowError:
            return copy_sign(math.inf, self._radians)

    def cosh(self) -> float:
        try:
            return math.cosh(self._radians)
        except OverflowError:
            return math.inf

    def tanh(self) -> float:
        return math.tanh(self._radians)

    def sech(self) -> float:
        return _inverse(self.cosh())

    def csch(self) -> float:
        return _inverse(self.sinh())

    def coth(self) -> float:
        return _inverse(self.tanh())

    # =========================================================================
    # WRAPPING
    # =========================================================================

    def wrap(self, signed: bool = False) -> "Angle":
        """Новый угол в [0, τ) или, при signed=True, в [-π, π)."""
        return Angle(Angle.wrap_radians(self._radians, signed))

    def wrap_this(self, signed: bool = False) -> "Angle":
        """То же, что wrap(), но изменяет текущий экземпляр и возвращает его."""
        self._radians = Angle.wrap_radians(self._radians, signed)
        return self

    @staticmethod
    def wrap_radians(radians: float, signed: bool = False) -> float:
        return _wrap_scalar(radians, TAU, signed)

    @staticmethod
    def wrap_degrees(degrees: float, signed: bool = False) -> float:
        return _wrap_scalar(degrees, DEGREES_PER_TURN, signed)

    @staticmethod
    def wrap_gradians(gradians: float, signed: bool = False) -> float:
        return _wrap_scalar(gradians, GRADIANS_PER_TURN, signed)

    # =========================================================================
    # FORMATTING & PARSING
    # =========================================================================

    def format(self, fmt: str = "rad", decimals: Optional[int] = None) -> str:
        """
        Строковое представление угла.

        Форматы (регистр не важен):
        - 'rad', 'deg', 'grad', 'turn' — CSS: число и единица без пробела
        - 'd', 'dm', 'dms' — градусы / градусы+минуты / градусы+минуты+секунды

        Args:
            fmt: Формат
            decimals: Число знаков (для DMS — у наименьшей единицы)

        Raises:
            InvalidArgumentError: Неизвестный формат или decimals < 0

        Examples:
            >>> Angle.from_degrees(12.5).format("deg")
            '12.5deg'
            >>> Angle.from_degrees(12.5).format("dms", 0)
            '12° 30′ 0″'
        """
        _check_decimals(decimals)
        key = fmt.lower() if isinstance(fmt, str) else fmt

        if key == "rad":
            return _format_float(self._radians, decimals) + "rad"
        if key == "deg":
            return _format_float(self.to_degrees(), decimals) + "deg"
        if key == "grad":
            return _format_float(self.to_gradians(), decimals) + "grad"
        if key == "turn":
            return _format_float(self.to_turns(), decimals) + "turn"
        if key in _DMS_FORMATS:
            return self._format_dms(_DMS_FORMATS[key], decimals)

        raise InvalidArgumentError(
            f"Invalid format {fmt!r}. Allowed: rad, deg, grad, turn, d, dm, dms."
        )

    def _format_dms(self, smallest_unit: int, decimals: Optional[int]) -> str:
        parts = self.abs().to_dms(smallest_unit, decimals)
        # Знак по округлённым частям: -0° 0′ 0″ не выводится
        sign = "-" if self._radians < 0 and any(parts) else ""

        if smallest_unit == 0:
            (d,) = parts
            return f"{sign}{_format_float(d, decimals)}°"

        if smallest_unit == 1:
            d, m = parts
            return f"{sign}{number_to_string(d)}° {_format_float(m, decimals)}′"

        d, m, s = parts
        return f"{sign}{number_to_string(d)}° {number_to_string(m)}′ {_format_float(s, decimals)}″"

    @classmethod
    def from_string(cls, value: str) -> "Angle":
        """
        Парсинг CSS-формы ("45deg") или DMS-формы ("12° 34′ 56″").

        Для минут допускается ASCII-апостроф ', для секунд — кавычка ".

        Raises:
            InvalidArgumentError: Если строка не является углом
        """
        error_message = f"The provided string {value!r} does not represent a valid angle."
        if not isinstance(value, str):
            raise InvalidArgumentError(error_message)

        text = value.strip()
        if not text:
            raise InvalidArgumentError(error_message)

        match = _DMS_PATTERN.fullmatch(text)
        if match is not None:
            if match["deg"] is None and match["min"] is None and match["sec"] is None:
                raise InvalidArgumentError(error_message)

            magnitude = (
                float(match["deg"] or 0.0)
                + float(match["min"] or 0.0) / ARCMINUTES_PER_DEGREE
                + float(match["sec"] or 0.0) / ARCSECONDS_PER_DEGREE
            )
            if match["sign"] == "-":
                magnitude = -magnitude
            return cls.from_degrees(_require_parsed(magnitude, error_message))

        match = _CSS_PATTERN.fullmatch(text)
        if match is not None:
            number = _require_parsed(float(match["value"]), error_message)
            unit = match["unit"].lower()
            if unit == "rad":
                return cls.from_radians(number)
            if unit == "deg":
                return cls.from_degrees(number)
            if unit == "grad":
                return cls.from_gradians(number)
            return cls.from_turns(number)

        raise InvalidArgumentError(error_message)

    @classmethod
    def try_parse(cls, value: str) -> tuple[bool, Optional["Angle"]]:
        """
        Парсинг без исключения.

        Returns:
            (True, angle) при успехе, (False, None) иначе
        """
        try:
            return True, cls.from_string(value)
        except InvalidArgumentError:
            return False, None

    # =========================================================================
    # DUNDERS
    # =========================================================================

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Angle.from_radians({self._radians!r})"

    def __float__(self) -> float:
        return self._radians

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, k: Number) -> "Angle":
        return self.mul(k)

    def __rmul__(self, k: Number) -> "Angle":
        return self.mul(k)

    def __truediv__(self, k: Number) -> "Angle":
        return self.div(k)

    def __neg__(self) -> "Angle":
        return Angle(-self._radians)

    def __abs__(self) -> "Angle":
        return self.abs()


def _require_angle(value: object) -> Angle:
    if not isinstance(value, Angle):
        raise InvalidArgumentError(f"Expected an Angle, got {value!r}")
    return value


def _require_parsed(value: float, error_message: str) -> float:
    # "1e999deg" проходит грамматику, но даёт inf
    if not math.isfinite(value):
        raise InvalidArgumentError(error_message)
    return value
