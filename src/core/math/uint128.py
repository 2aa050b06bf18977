"""
Uint128 — Беззнаковые 128-битные величины

Модуль задаёт публичный тип величин для всей арифметики `a * b / c`:
Python int в диапазоне [0, 2^128 - 1].

Содержит:
- Константы ширины (U128_MAX, U64_MAX, LIMB_BITS)
- Валидацию входных аргументов
- Checked/saturating операции в духе native u128

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никаких float — только целочисленная арифметика
2. Переполнение никогда не "заворачивается" молча (checked → None)
3. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ ШИРИНЫ
# =============================================================================

U128_BITS: Final[int] = 128
U64_BITS: Final[int] = 64

U128_MAX: Final[int] = (1 << U128_BITS) - 1
U64_MAX: Final[int] = (1 << U64_BITS) - 1

# Ширина limb для arbitrary-precision представления (base 2^32)
LIMB_BITS: Final[int] = 32


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_u128(value: object) -> bool:
    """
    Проверка, что значение — целое в диапазоне u128.

    bool явно исключён, хотя и является подклассом int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= U128_MAX


def validate_u128(value: object, name: str) -> None:
    """
    Валидация, что аргумент является u128.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        TypeError: Если value не int (или bool)
        ValueError: Если value вне [0, U128_MAX]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value > U128_MAX:
        raise ValueError(f"{name} must be <= U128_MAX, got {value}")


# =============================================================================
# LIMBS
# =============================================================================


def split(a: int) -> tuple[int, int]:
    """
    Разбиение u128 на два 64-битных limb.

    Returns:
        (high, low) — старшие и младшие 64 бита

    Examples:
        >>> split(1 << 64)
        (1, 0)
        >>> split(U128_MAX)
        (18446744073709551615, 18446744073709551615)
    """
    return (a >> U64_BITS, a & U64_MAX)


def limb_count(a: int) -> int:
    """
    Количество 32-битных limb в представлении без ведущих нулей.

    Ноль занимает один limb.
    """
    return max(1, -(-a.bit_length() // LIMB_BITS))


# =============================================================================
# CHECKED / SATURATING
# =============================================================================


def checked_mul(a: int, b: int) -> int | None:
    """
    Умножение u128 с проверкой переполнения.

    Returns:
        a * b если результат помещается в u128, иначе None
    """
    product = a * b
    if product > U128_MAX:
        return None
    return product


def checked_add(a: int, b: int) -> int | None:
    """Сложение u128 с проверкой переполнения."""
    total = a + b
    if total > U128_MAX:
        return None
    return total


def checked_neg(a: int) -> int | None:
    """
    Checked-отрицание в беззнаковом домене.

    Без переполнения отрицается только ноль.

    Examples:
        >>> checked_neg(0)
        0
        >>> checked_neg(1) is None
        True
    """
    if a == 0:
        return 0
    return None


def saturating_add(a: int, b: int) -> int:
    """
    Сложение u128 с насыщением.

    Returns:
        min(a + b, U128_MAX)
    """
    return min(a + b, U128_MAX)
