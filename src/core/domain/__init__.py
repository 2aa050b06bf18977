"""
Domain models and value objects.

Contains request/result models for the exact multiply-divide core.
"""

from src.core.domain.muldiv_request import (
    SCHEMA_VERSION,
    MulDivAlgorithm,
    MulDivRequest,
    MulDivResult,
)

__all__ = [
    "SCHEMA_VERSION",
    "MulDivAlgorithm",
    "MulDivRequest",
    "MulDivResult",
]
