"""
Core math modules для superclasses

Численное ядро: знаковые примитивы, точные дроби, комплексные числа,
матрицы/векторы и углы.
"""

# Errors
from superclasses.core.math.errors import (
    IndexOutOfBoundsError,
    IntegerOverflowError,
    InvalidArgumentError,
    MathDomainError,
    MathRangeError,
)

# Numbers
from superclasses.core.math.numbers import (
    # Epsilon constants
    EPS_MACHINE,
    MATRIX_SINGULAR_EPS,
    VECTOR_EQ_EPS,
    # Integer range
    DEFAULT_INT_LIMITS,
    INT_MAX,
    INT_MIN,
    IntLimits,
    # Classification
    is_int,
    is_number,
    is_unsigned_int,
    is_valid_float,
    # Signed zero
    copy_sign,
    fdiv,
    is_negative,
    is_negative_zero,
    is_positive,
    is_positive_zero,
    sign,
    # Checked arithmetic
    gcd,
    int_add,
    int_mul,
    int_pow,
    int_sub,
    # Parsing / formatting
    compare_with_tolerance,
    number_to_string,
    random_finite_float,
    round_half_away_from_zero,
    try_parse_int,
)

# Value types
from superclasses.core.math.rational import DEFAULT_MAX_DENOMINATOR, Rational
from superclasses.core.math.complex_number import Complex
from superclasses.core.math.matrix import Matrix
from superclasses.core.math.vector import Vector
from superclasses.core.math.angle import Angle

__all__ = [
    # Errors
    "InvalidArgumentError",
    "IndexOutOfBoundsError",
    "MathDomainError",
    "MathRangeError",
    "IntegerOverflowError",
    # Numbers: Epsilon constants
    "EPS_MACHINE",
    "MATRIX_SINGULAR_EPS",
    "VECTOR_EQ_EPS",
    # Numbers: Integer range
    "IntLimits",
    "DEFAULT_INT_LIMITS",
    "INT_MAX",
    "INT_MIN",
    # Numbers: Classification
    "is_number",
    "is_int",
    "is_unsigned_int",
    "is_valid_float",
    # Numbers: Signed zero
    "fdiv",
    "is_negative_zero",
    "is_positive_zero",
    "is_negative",
    "is_positive",
    "sign",
    "copy_sign",
    # Numbers: Checked arithmetic
    "int_add",
    "int_sub",
    "int_mul",
    "int_pow",
    "gcd",
    # Numbers: Parsing / formatting
    "try_parse_int",
    "number_to_string",
    "round_half_away_from_zero",
    "compare_with_tolerance",
    "random_finite_float",
    # Value types
    "DEFAULT_MAX_DENOMINATOR",
    "Rational",
    "Complex",
    "Matrix",
    "Vector",
    "Angle",
]
