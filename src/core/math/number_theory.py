"""
Number Theory — GCD и целочисленный квадратный корень для u128

Утилиты для нормализации дробей и вычисления границ:
- gcd: бинарный алгоритм Стейна (только сдвиги и вычитания)
- integer_sqrt: floor(sqrt(n)) побитовым извлечением, без float
"""

from src.core.math.uint128 import validate_u128


def gcd(a: int, b: int) -> int:
    """
    Наибольший общий делитель двух u128 (binary GCD).

    Порядок разбора случаев:
        a == b          → a
        один из них 0   → другой
        оба чётные      → gcd(a/2, b/2) * 2
        один чётный     → чётный делится на 2
        оба нечётные    → gcd((max - min) / 2, min)

    Общие множители 2 накапливаются в shift вместо рекурсии.

    Examples:
        >>> gcd(12, 18)
        6
        >>> gcd(0, 7)
        7
    """
    validate_u128(a, "a")
    validate_u128(b, "b")

    shift = 0
    while True:
        if a == b:
            return a << shift
        if a == 0:
            return b << shift
        if b == 0:
            return a << shift

        a_odd, b_odd = a & 1, b & 1
        if not a_odd and not b_odd:
            a >>= 1
            b >>= 1
            shift += 1
        elif not a_odd:
            a >>= 1
        elif not b_odd:
            b >>= 1
        else:
            low, high = min(a, b), max(a, b)
            a, b = (high - low) >> 1, low


def integer_sqrt(n: int) -> int:
    """
    Floor квадратного корня u128.

    Начинаем с наибольшей степени 4, не превосходящей n, и для каждого
    бита (шаг — 2 бита) жадно добавляем его к результату, если остаток
    позволяет ("деление столбиком" для корня).

    Returns:
        r такое, что r^2 <= n < (r + 1)^2

    Examples:
        >>> integer_sqrt(0)
        0
        >>> integer_sqrt(15)
        3
        >>> integer_sqrt(16)
        4
    """
    validate_u128(n, "n")

    if n == 0:
        return 0

    bit = 1 << ((n.bit_length() - 1) & ~1)

    result = 0
    while bit != 0:
        if n >= result + bit:
            n -= result + bit
            result = (result >> 1) + bit
        else:
            result >>= 1
        bit >>= 2

    return result
