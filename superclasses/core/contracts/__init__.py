"""
Array Contract Validation Module

Модуль для валидации входных массивов Matrix/Vector по JSON Schema.
"""

from .validators import (
    ArrayContractValidator,
    MatrixDataValidator,
    NumericArrayValidator,
    SchemaLoader,
    VectorDataValidator,
    validate_matrix_data,
    validate_vector_data,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "NumericArrayValidator",
    "ArrayContractValidator",
    "MatrixDataValidator",
    "VectorDataValidator",
    # Functions
    "validate_matrix_data",
    "validate_vector_data",
]
