"""
Array Data Contract Validators

Модуль для валидации "сырых" массивов, из которых строятся Matrix и Vector,
согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки структуры данных.

Схемы:
- matrix_data.json (непустой список непустых строк чисел)
- vector_data.json (непустой плоский список чисел)

Прямоугольность матрицы JSON Schema не выражает — её проверяет
Matrix.from_array после структурной валидации.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

from superclasses.core.math.errors import InvalidArgumentError
from superclasses.core.math.numbers import is_number


# =============================================================================
# TYPE CHECKER
# =============================================================================

# "number" в jsonschema принимает любой numbers.Number (complex, Decimal);
# контракты ядра допускают только int/float (без bool).
# "array" принимает и tuple: строки копируются в list при построении
_TYPE_CHECKER = Draft202012Validator.TYPE_CHECKER.redefine_many(
    {
        "number": lambda checker, instance: is_number(instance),
        "array": lambda checker, instance: isinstance(instance, (list, tuple)),
    }
)

NumericArrayValidator = jsonschema.validators.extend(
    Draft202012Validator, type_checker=_TYPE_CHECKER
)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем (package data).
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'matrix_data')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ArrayContractValidator:
    """
    Базовый класс для валидаторов массивов.

    Инкапсулирует проверку данных против JSON Schema и перевод нарушений
    в InvalidArgumentError ядра.
    """

    def __init__(self, schema_name: str, subject: str):
        """
        Args:
            schema_name: Имя схемы для валидации
            subject: Название объекта для сообщений об ошибке ("Matrix", "Vector")
        """
        self.schema_name = schema_name
        self.subject = subject
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = NumericArrayValidator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            InvalidArgumentError: Если данные не соответствуют схеме
                (исходная ValidationError доступна как __cause__)
        """
        error = best_match(self.validator.iter_errors(data))
        if error is not None:
            location = "".join(f"[{p}]" for p in error.absolute_path) or "<root>"
            raise InvalidArgumentError(
                f"{self.subject} data is invalid at {location}: {error.message}"
            ) from error

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class MatrixDataValidator(ArrayContractValidator):
    """Валидатор для matrix_data контракта."""

    def __init__(self):
        super().__init__("matrix_data", "Matrix")


class VectorDataValidator(ArrayContractValidator):
    """Валидатор для vector_data контракта."""

    def __init__(self):
        super().__init__("vector_data", "Vector")


_MATRIX_DATA_VALIDATOR = MatrixDataValidator()
_VECTOR_DATA_VALIDATOR = VectorDataValidator()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_matrix_data(data: Any) -> None:
    """
    Валидация данных матрицы (список строк чисел).

    Raises:
        InvalidArgumentError: Если данные не соответствуют схеме
    """
    _MATRIX_DATA_VALIDATOR.validate(data)


def validate_vector_data(data: Any) -> None:
    """
    Валидация данных вектора (плоский список чисел).

    Raises:
        InvalidArgumentError: Если данные не соответствуют схеме
    """
    _VECTOR_DATA_VALIDATOR.validate(data)
