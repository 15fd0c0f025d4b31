"""
Errors — Иерархия исключений численного ядра

Три рода ошибок:
- InvalidArgument: некорректная форма входа (строка не парсится, матрица
  не прямоугольная, NaN там, где нужен знак)
- Domain: операция математически не определена (деление на 0, ln(0),
  обращение вырожденной матрицы)
- Range/Overflow: результат или промежуточное значение вне представимого
  диапазона (переполнение целых, канонизация INT_MIN)

Каждый класс наследует соответствующий built-in Python, поэтому вызывающий
код может ловить как ValueError/ArithmeticError, так и конкретный класс.
"""


# =============================================================================
# INVALID ARGUMENT
# =============================================================================


class InvalidArgumentError(ValueError):
    """Некорректный аргумент: неверный тип, форма или строка."""

    pass


class IndexOutOfBoundsError(InvalidArgumentError, IndexError):
    """Индекс элемента вне допустимых границ."""

    pass


# =============================================================================
# DOMAIN
# =============================================================================


class MathDomainError(ArithmeticError):
    """
    Операция не определена для корректно сформированного входа.

    Примеры: деление на нулевое комплексное/рациональное число, логарифм нуля,
    обращение (почти) вырожденной матрицы, ноль в отрицательной степени.
    """

    pass


# =============================================================================
# RANGE / OVERFLOW
# =============================================================================


class MathRangeError(ArithmeticError):
    """Значение вне представимого диапазона."""

    pass


class IntegerOverflowError(MathRangeError, OverflowError):
    """Переполнение checked-арифметики над нативными знаковыми целыми."""

    pass
