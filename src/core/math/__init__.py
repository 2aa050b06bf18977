"""
Core math modules для exact128

Точная целочисленная арифметика над u128 без float и без молчаливого
переполнения.
"""

# Uint128
from src.core.math.uint128 import (
    LIMB_BITS,
    U64_BITS,
    U64_MAX,
    U128_BITS,
    U128_MAX,
    checked_add,
    checked_mul,
    checked_neg,
    is_u128,
    limb_count,
    saturating_add,
    split,
    validate_u128,
)

# Rounding
from src.core.math.rounding import Rounding

# Double128
from src.core.math.double128 import DIV_FOLD_LIMIT, Double128

# MulDiv
from src.core.math.muldiv import (
    MulDivOverflow,
    multiply_by_rational,
    multiply_by_rational_with_rounding,
)

# Number theory
from src.core.math.number_theory import gcd, integer_sqrt

__all__ = [
    # Uint128 — Constants
    "LIMB_BITS",
    "U64_BITS",
    "U64_MAX",
    "U128_BITS",
    "U128_MAX",
    # Uint128 — Functions
    "checked_add",
    "checked_mul",
    "checked_neg",
    "is_u128",
    "limb_count",
    "saturating_add",
    "split",
    "validate_u128",
    # Rounding
    "Rounding",
    # Double128
    "DIV_FOLD_LIMIT",
    "Double128",
    # MulDiv — Exceptions
    "MulDivOverflow",
    # MulDiv — Functions
    "multiply_by_rational",
    "multiply_by_rational_with_rounding",
    # Number theory
    "gcd",
    "integer_sqrt",
]
