"""
Contract Validation Module

Модуль для валидации JSON контрактов multiply-divide.
"""

from .validators import (
    ContractValidator,
    MulDivRequestValidator,
    MulDivResultValidator,
    SchemaLoader,
    validate_muldiv_request,
    validate_muldiv_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MulDivRequestValidator",
    "MulDivResultValidator",
    # Functions
    "validate_muldiv_request",
    "validate_muldiv_result",
]
