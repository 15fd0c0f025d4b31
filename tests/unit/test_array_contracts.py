"""
Tests for Array Data Contract Validators

Проверяет:
- Валидность самих схем (meta-validation) и кэш загрузчика
- Валидацию корректных массивов
- Детекцию нарушений структуры и типов (bool/complex не числа)
- Перевод ValidationError в InvalidArgumentError с указанием позиции
"""

import json
from pathlib import Path

import pytest
from jsonschema import Draft202012Validator, ValidationError

from superclasses.core.contracts import (
    MatrixDataValidator,
    SchemaLoader,
    VectorDataValidator,
    validate_matrix_data,
    validate_vector_data,
)
from superclasses.core.math.errors import InvalidArgumentError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    @pytest.mark.parametrize("schema_name", ["matrix_data", "vector_data"])
    def test_schemas_are_valid(self, schema_name: str) -> None:
        schema = SchemaLoader().load_schema(schema_name)
        Draft202012Validator.check_schema(schema)
        assert schema["type"] == "array"

    def test_cache(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("matrix_data") is loader.load_schema("matrix_data")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "missing")

    def test_invalid_schema(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# MATRIX DATA
# =============================================================================


class TestMatrixData:
    """Тесты контракта matrix_data"""

    def test_valid(self) -> None:
        validate_matrix_data([[1, 2.5], [-3, 0]])
        validate_matrix_data([[7]])

    def test_tuples_are_arrays(self) -> None:
        validate_matrix_data(((1, 2), [3, 4]))
        assert not MatrixDataValidator().is_valid(((1, "2"),))

    def test_ragged_rows_pass_schema(self) -> None:
        """Прямоугольность проверяет Matrix.from_array, не схема"""
        assert MatrixDataValidator().is_valid([[1, 2], [3]])

    @pytest.mark.parametrize(
        "data",
        [[], [[]], [1, 2], [[1, "2"]], [[True]], [[1j]], [[None]], {"rows": []}],
    )
    def test_invalid(self, data: object) -> None:
        assert not MatrixDataValidator().is_valid(data)
        with pytest.raises(InvalidArgumentError, match="Matrix data is invalid"):
            validate_matrix_data(data)

    def test_error_location_and_cause(self) -> None:
        with pytest.raises(InvalidArgumentError, match=r"at \[1\]\[0\]") as exc_info:
            validate_matrix_data([[1, 2], ["x", 4]])
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_iter_errors(self) -> None:
        errors = list(MatrixDataValidator().iter_errors([["a", "b"]]))
        assert len(errors) == 2


# =============================================================================
# VECTOR DATA
# =============================================================================


class TestVectorData:
    """Тесты контракта vector_data"""

    def test_valid(self) -> None:
        validate_vector_data([1, -2.5, 0])
        validate_vector_data((1, -2.5, 0))

    @pytest.mark.parametrize("data", [[], [[1]], ["1"], [False], 5])
    def test_invalid(self, data: object) -> None:
        assert not VectorDataValidator().is_valid(data)
        with pytest.raises(InvalidArgumentError, match="Vector data is invalid"):
            validate_vector_data(data)

    def test_root_location(self) -> None:
        with pytest.raises(InvalidArgumentError, match="<root>"):
            validate_vector_data([])
