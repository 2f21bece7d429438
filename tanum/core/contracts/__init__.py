"""
Contract Validation Module

Модуль для валидации JSON контрактов числового ядра.
"""

from .validators import (
    ContractValidator,
    NumValueValidator,
    SchemaLoader,
    validate_num_value,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "NumValueValidator",
    # Functions
    "validate_num_value",
]
