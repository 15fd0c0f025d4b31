"""
Тесты для Complex

Проверяет:
1. Конструирование и запрет NaN/inf
2. Ленивый кэш mag/phase и его сброс
3. Арифметику и деление на ноль
4. Трансцендентные функции и их shortcut'ы (тождество Эйлера)
5. pow / roots (главное значение и все ветви)
6. Парсинг и строковое представление (round-trip)
"""

import math

import pytest

from superclasses.core.math.complex_number import Complex
from superclasses.core.math.errors import (
    IndexOutOfBoundsError,
    InvalidArgumentError,
    MathDomainError,
    MathRangeError,
)

# =============================================================================
# КОНСТРУИРОВАНИЕ И КЭШ
# =============================================================================


class TestConstruction:
    """Тесты создания Complex"""

    def test_components(self) -> None:
        z = Complex(3, -4)
        assert z.real == 3.0
        assert z.imag == -4.0
        assert Complex().to_array() == [0.0, 0.0]

    def test_rejects_non_finite(self) -> None:
        with pytest.raises(InvalidArgumentError, match="finite"):
            Complex(math.nan, 0)
        with pytest.raises(InvalidArgumentError, match="finite"):
            Complex(0, math.inf)

    def test_rejects_non_numbers(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Complex("1", 0)

    def test_assignment_rejects_non_finite(self) -> None:
        z = Complex(1, 1)
        with pytest.raises(InvalidArgumentError):
            z.imag = -math.inf
        assert z.imag == 1.0

    def test_imaginary_unit(self) -> None:
        assert Complex.i().to_array() == [0.0, 1.0]


class TestPolarCache:
    """Тесты кэша mag/phase"""

    def test_mag_and_phase(self) -> None:
        z = Complex(3, 4)
        assert z.mag == 5.0
        assert z.phase == pytest.approx(math.atan2(4, 3))
        assert abs(z) == 5.0

    def test_mutation_invalidates_cache(self) -> None:
        z = Complex(3, 4)
        assert z.mag == 5.0

        z.real = 0
        assert z.mag == 4.0
        assert z.phase == pytest.approx(math.pi / 2)

        z[1] = -2
        assert z.mag == 2.0
        assert z.phase == pytest.approx(-math.pi / 2)

    def test_from_polar(self) -> None:
        z = Complex.from_polar(2, math.pi / 2)
        assert z.real == pytest.approx(0.0, abs=1e-15)
        assert z.imag == pytest.approx(2.0)
        assert z.mag == 2
        assert z.phase == math.pi / 2

    def test_from_polar_non_canonical_recomputes(self) -> None:
        """Отрицательный модуль не кэшируется: mag всегда >= 0"""
        z = Complex.from_polar(-2, math.pi / 2)
        assert z.imag == pytest.approx(-2.0)
        assert z.mag == pytest.approx(2.0)
        assert z.phase == pytest.approx(-math.pi / 2)

    def test_from_polar_rejects_non_finite(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Complex.from_polar(math.inf, 0)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты арифметики"""

    def test_add_sub(self) -> None:
        assert Complex(1, 2).add(Complex(3, -5)) == Complex(4, -3)
        assert Complex(1, 2).sub(3) == Complex(-2, 2)
        assert 1 + Complex(0, 1) == Complex(1, 1)

    def test_mul(self) -> None:
        assert Complex(1, 2).mul(Complex(3, 4)) == Complex(-5, 10)
        assert Complex(1, 2) * 2 == Complex(2, 4)

    def test_div(self) -> None:
        z = Complex(1, 2).div(Complex(3, 4))
        assert z.real == pytest.approx(0.44)
        assert z.imag == pytest.approx(0.08)

    def test_div_by_zero(self) -> None:
        with pytest.raises(MathDomainError, match="divide by 0"):
            Complex(1, 1).div(Complex())

    def test_overflow_is_range_error(self) -> None:
        """Переполнение компоненты результата: Range, а не InvalidArgument"""
        with pytest.raises(MathRangeError, match="addition"):
            Complex(1e308, 0).add(Complex(1e308, 0))
        with pytest.raises(MathRangeError):
            Complex(0, -1e308).sub(Complex(0, 1e308))
        with pytest.raises(MathRangeError):
            Complex(1e200, 1).mul(Complex(1e200, 0))
        with pytest.raises(MathRangeError, match="division"):
            Complex(1e308, 0).div(Complex(0.5, 0))

    def test_conj_neg(self) -> None:
        assert Complex(1, 2).conj() == Complex(1, -2)
        assert -Complex(1, -2) == Complex(-1, 2)

    def test_native_complex(self) -> None:
        assert complex(Complex(1.5, -2)) == complex(1.5, -2)


# =============================================================================
# ТРАНСЦЕНДЕНТНЫЕ ФУНКЦИИ
# =============================================================================


class TestTranscendental:
    """Тесты ln / log / exp"""

    def test_ln_shortcuts(self) -> None:
        assert Complex(1).ln() == Complex(0)
        assert Complex(math.e).ln() == Complex(1)
        assert Complex(10).ln().real == pytest.approx(math.log(10))

    def test_ln_negative_real(self) -> None:
        z = Complex(-1).ln()
        assert z.real == pytest.approx(0.0)
        assert z.imag == pytest.approx(math.pi)

    def test_ln_zero(self) -> None:
        with pytest.raises(MathDomainError, match="logarithm of 0"):
            Complex().ln()

    def test_log(self) -> None:
        assert Complex(8).log(2).real == pytest.approx(3.0)
        assert Complex(math.e).log(10) == Complex(math.log10(math.e))
        assert Complex(5).log(math.e) == Complex(5).ln()

    def test_log_invalid_base(self) -> None:
        with pytest.raises(MathDomainError, match="cannot be 0"):
            Complex(2).log(0)
        with pytest.raises(MathDomainError, match="cannot be 1"):
            Complex(2).log(1)

    def test_euler_identity(self) -> None:
        """e^(iπ) = -1"""
        assert Complex(0, math.pi).exp() == Complex(-1, 0)

    def test_exp(self) -> None:
        assert Complex(0).exp() == Complex(1)
        assert Complex(1).exp() == Complex(math.e)
        z = Complex(1, math.pi / 2).exp()
        assert z.real == pytest.approx(0.0, abs=1e-15)
        assert z.imag == pytest.approx(math.e)

    def test_exp_overflow(self) -> None:
        with pytest.raises(MathRangeError):
            Complex(1000).exp()


class TestPowRoots:
    """Тесты pow / roots"""

    def test_zero_base(self) -> None:
        assert Complex().pow(0) == Complex(1)
        assert Complex().pow(3) == Complex()

    def test_zero_base_errors(self) -> None:
        with pytest.raises(MathDomainError, match="complex"):
            Complex().pow(Complex(0, 1))
        with pytest.raises(MathDomainError, match="negative"):
            Complex().pow(-1)

    def test_shortcuts(self) -> None:
        z = Complex(2, 3)
        assert z.pow(0) == Complex(1)
        assert z.pow(1) == z
        assert Complex.i().pow(2) == Complex(-1)
        assert Complex(math.e).pow(Complex(0, math.pi)) == Complex(-1)

    def test_general_case(self) -> None:
        z = Complex(1, 1).pow(2)
        assert z.real == pytest.approx(0.0, abs=1e-12)
        assert z.imag == pytest.approx(2.0)

    def test_principal_sqrt(self) -> None:
        z = Complex(-4).sqrt()
        assert z.real == pytest.approx(0.0, abs=1e-12)
        assert z.imag == pytest.approx(2.0)

    def test_roots_all_branches(self) -> None:
        roots = Complex(1).roots(3)
        assert len(roots) == 3
        for root in roots:
            assert root.mag == pytest.approx(1.0)
            assert root.cube().equals(Complex(1), 1e-9)
        assert roots[0].equals(Complex(1), 1e-12)

    def test_roots_of_zero(self) -> None:
        assert Complex().roots(4) == [Complex()]

    def test_roots_invalid(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Complex(1).roots(0)


# =============================================================================
# СРАВНЕНИЕ И ДОСТУП
# =============================================================================


class TestComparisonAndAccess:
    """Тесты равенства и индексации"""

    def test_tolerance_equality(self) -> None:
        assert Complex(1, 1).equals(Complex(1 + 1e-17, 1))
        assert not Complex(1, 1).equals(Complex(1.001, 1))
        assert Complex(1, 1).equals(Complex(1.001, 1), epsilon=0.01)

    def test_same_is_identity(self) -> None:
        z = Complex(1, 1)
        assert z.same(z)
        assert not z.same(z.copy())

    def test_is_real(self) -> None:
        assert Complex(3).is_real()
        assert not Complex(3, 1).is_real()

    def test_indexing(self) -> None:
        z = Complex(3, 4)
        assert (z[0], z[1]) == (3.0, 4.0)
        assert list(z) == [3.0, 4.0]
        assert len(z) == 2

    def test_delete_resets_component(self) -> None:
        z = Complex(3, 4)
        del z[1]
        assert z.to_array() == [3.0, 0.0]
        assert z.mag == 3.0

    def test_invalid_offset(self) -> None:
        z = Complex(3, 4)
        with pytest.raises(IndexOutOfBoundsError):
            z[2]
        with pytest.raises(IndexError):
            z[-1] = 1.0


# =============================================================================
# ПАРСИНГ И СТРОКИ
# =============================================================================


class TestParse:
    """Тесты Complex.parse"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5", (5.0, 0.0)),
            ("-3.14", (-3.14, 0.0)),
            ("1e3", (1000.0, 0.0)),
            ("i", (0.0, 1.0)),
            ("-i", (0.0, -1.0)),
            ("3i", (0.0, 3.0)),
            ("-2.5j", (0.0, -2.5)),
            ("I", (0.0, 1.0)),
            ("3+4i", (3.0, 4.0)),
            ("5 - 2j", (5.0, -2.0)),
            ("-1+i", (-1.0, 1.0)),
            ("2.5-3.7I", (2.5, -3.7)),
            ("4i+3", (3.0, 4.0)),
            ("-2j + 5", (5.0, -2.0)),
            ("  -i - 1  ", (-1.0, -1.0)),
        ],
    )
    def test_valid(self, text: str, expected: tuple) -> None:
        assert Complex.parse(text).to_array() == pytest.approx(list(expected))

    @pytest.mark.parametrize("text", ["", "   ", "abc", "3 i", "3+4", "3++4i", "i+i", "1,5", "2ii"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidArgumentError):
            Complex.parse(text)


class TestToString:
    """Тесты строкового представления"""

    def test_forms(self) -> None:
        assert str(Complex(2)) == "2"
        assert str(Complex(0, 1)) == "i"
        assert str(Complex(0, -1)) == "-i"
        assert str(Complex(0, -2.5)) == "-2.5i"
        assert str(Complex(3, 4)) == "3 + 4i"
        assert str(Complex(3, -4)) == "3 - 4i"
        assert str(Complex(1.5, 1)) == "1.5 + i"

    def test_round_trip(self) -> None:
        """parse(str(z)) == z в каждой ветви грамматики"""
        for z in [
            Complex(2.5),
            Complex(0, 1),
            Complex(0, -1),
            Complex(0, 7.25),
            Complex(-3, 1),
            Complex(3, -4.5),
            Complex(-0.1, -1),
        ]:
            assert Complex.parse(str(z)) == z
