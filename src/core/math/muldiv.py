"""
MulDiv — Точное вычисление a * b / c для u128

Модуль обеспечивает два независимых алгоритма масштабирования на дробь b / c:
- multiply_by_rational_with_rounding: основной алгоритм на Double128
  с явной политикой округления (DOWN / UP / NEAREST)
- multiply_by_rational: legacy best-effort алгоритм — сначала native
  умножение, при переполнении fallback на arbitrary-precision int
  с округлением к ближайшему

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат точен для выбранной политики округления, никаких приближений
2. Переполнение результата за 128 бит — явный исход (None / MulDivOverflow)
3. Деление на ноль в rounded-алгоритме — фатальная ошибка (ZeroDivisionError)
4. Legacy-алгоритм структурно исключает деление на ноль: c = max(c, 1)

РАЗЛИЧИЕ TIE-BREAK:
    rounded NEAREST: remainder >= c // 2 + c % 2  (половина → вверх)
    legacy fallback: remainder > c // 2           (половина → вниз при чётном c)
Оба поведения сохраняются раздельно.
"""

import logging

from src.core.math.double128 import Double128
from src.core.math.rounding import Rounding
from src.core.math.uint128 import (
    U128_MAX,
    checked_add,
    checked_mul,
    limb_count,
    validate_u128,
)

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MulDivOverflow(OverflowError):
    """
    Точный результат a * b / c не помещается в u128.

    Возникает только в legacy-алгоритме; rounded-алгоритм возвращает None.
    """

    pass


# =============================================================================
# ROUNDED MULDIV
# =============================================================================


def multiply_by_rational_with_rounding(
    a: int,
    b: int,
    c: int,
    rounding: Rounding,
) -> int | None:
    """
    Вычисление a * b / c с заданной политикой округления.

    Произведение считается точно в 256 битах (Double128), затем делится
    на c с остатком; остаток определяет округление.

    Args:
        a: Множитель (u128)
        b: Числитель дроби (u128)
        c: Знаменатель дроби (u128, > 0)
        rounding: Политика округления

    Returns:
        Округлённый результат, или None если он (включая +1 при
        округлении вверх) не помещается в u128

    Raises:
        ZeroDivisionError: Если c == 0
        TypeError, ValueError: Если аргументы не u128

    Examples:
        >>> multiply_by_rational_with_rounding(1, 2, 3, Rounding.DOWN)
        0
        >>> multiply_by_rational_with_rounding(1, 2, 3, Rounding.NEAREST)
        1
        >>> multiply_by_rational_with_rounding(U128_MAX, 2, 1, Rounding.DOWN) is None
        True
    """
    validate_u128(a, "a")
    validate_u128(b, "b")
    validate_u128(c, "c")
    rounding = Rounding(rounding)

    if c == 0:
        raise ZeroDivisionError("attempt to divide by zero")

    quotient, remainder = divmod(Double128.product_of(a, b), c)

    try:
        result = quotient.try_into_u128()
    except OverflowError:
        return None

    if rounding.should_round_up(remainder, c):
        return checked_add(result, 1)

    return result


# =============================================================================
# LEGACY MULDIV
# =============================================================================


def multiply_by_rational(a: int, b: int, c: int) -> int:
    """
    Best-effort вычисление a * b / c.

    Алгоритм:
    1. a == 0 или b == 0 → 0
    2. c = max(c, 1); упорядочиваем a >= b
    3. Если c делит a (или b) — делим заранее, c = 1
    4. Если a * b помещается в u128 → floor(a * b / c)
    5. Иначе — arbitrary-precision divmod(a * b, c) с округлением
       к ближайшему (r > c // 2 → +1)

    Args:
        a: Множитель (u128)
        b: Числитель дроби (u128)
        c: Знаменатель дроби (u128, 0 трактуется как 1)

    Returns:
        Результат в u128

    Raises:
        MulDivOverflow: Если результат не помещается в u128
        TypeError, ValueError: Если аргументы не u128

    Examples:
        >>> multiply_by_rational(10, 10, 3)
        33
        >>> multiply_by_rational(6, 7, 0)
        42
    """
    validate_u128(a, "a")
    validate_u128(b, "b")
    validate_u128(c, "c")

    if a == 0 or b == 0:
        return 0

    c = max(c, 1)

    # Большее из a, b умножается на дробь b / c < 1 с большей вероятностью
    # без переполнения
    if b > a:
        a, b = b, a

    if a % c == 0:
        a //= c
        c = 1
    elif b % c == 0:
        b //= c
        c = 1

    product = checked_mul(a, b)
    if product is not None:
        return product // c

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "multiply_by_rational: a * b overflows u128, arbitrary-precision fallback "
            "(divisor limbs=%d)",
            limb_count(c),
        )

    # Python int — arbitrary-precision; делитель из одного limb
    # обрабатывается внутренним fast path деления
    q, r = divmod(a * b, c)
    if r > c // 2:
        q += 1

    if q > U128_MAX:
        raise MulDivOverflow("result cannot fit in u128")

    return q
