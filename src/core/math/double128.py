"""
Double128 — 256-битное беззнаковое целое из двух u128 limb

Модуль обеспечивает точное промежуточное представление произведения a * b
для вычисления a * b / c без потери точности:
- Произведение 128×128→256 через четыре частичных 64×64 произведения
- Сложение с явным переносом из младшего limb в старший
- Деление на u128 с остатком через "сворачивание" старшего limb

АЛГОРИТМ ДЕЛЕНИЯ (value = high * 2^128 + low, делитель d):
    q = 2^128 // d,  r = 2^128 % d
    value / d = high * q + (high * r + low) / d
    Пока high != 0: quotient += high * q; value = high * r + low
    Затем: quotient += low // d, remainder = low % d

Так как r < 2^127 для любого d >= 2, старший limb как минимум
вдвое уменьшается на каждой итерации.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. (high, low) — единственное представление числа в [0, 2^256)
2. Остаток деления всегда < делителя
3. Количество итераций деления ограничено DIV_FOLD_LIMIT
"""

from dataclasses import dataclass
from typing import Final

from src.core.math.uint128 import U64_BITS, U64_MAX, U128_BITS, U128_MAX

# Верхняя граница итераций сворачивания: ~128 делений старшего limb пополам
# плюс не более двух итераций при high == 1
DIV_FOLD_LIMIT: Final[int] = 2 * U128_BITS + 2


# =============================================================================
# 128-BIT HELPERS
# =============================================================================


def _low_64(a: int) -> int:
    return a & U64_MAX


def _high_64(a: int) -> int:
    return a >> U64_BITS


def _neg128(a: int) -> int:
    """2^128 - a (two's complement в ширине u128)"""
    return (~a + 1) & U128_MAX


def _div128(a: int) -> int:
    """2^128 // a, для a >= 2"""
    return (_neg128(a) // a + 1) & U128_MAX


def _mod128(a: int) -> int:
    """2^128 % a"""
    return _neg128(a) % a


# =============================================================================
# DOUBLE128
# =============================================================================


@dataclass(frozen=True)
class Double128:
    """
    Беззнаковое 256-битное целое: high * 2^128 + low.

    Immutable value-объект (frozen=True). Живёт только в рамках одного
    вызова multiply-divide.
    """

    high: int
    low: int

    @classmethod
    def zero(cls) -> "Double128":
        return cls(high=0, low=0)

    @classmethod
    def from_low(cls, low: int) -> "Double128":
        """Значение только из младших 128 бит (high = 0)."""
        return cls(high=0, low=low)

    @classmethod
    def from_int(cls, value: int) -> "Double128":
        """
        Построение из Python int.

        Raises:
            ValueError: Если value вне [0, 2^256)
        """
        if value < 0 or value >> (2 * U128_BITS):
            raise ValueError(f"value must fit in 256 bits, got {value}")
        return cls(high=value >> U128_BITS, low=value & U128_MAX)

    @classmethod
    def left_shift_64(cls, scaled_value: int) -> "Double128":
        """
        Значение scaled_value << 64.

        Старшие 64 бита scaled_value попадают в младшую половину high,
        младшие 64 бита — в старшую половину low.
        """
        return cls(
            high=scaled_value >> U64_BITS,
            low=(scaled_value << U64_BITS) & U128_MAX,
        )

    @classmethod
    def product_of(cls, a: int, b: int) -> "Double128":
        """
        Точное произведение a * b двух u128 (256 бит).

        a = a_low + a_high << 64,  b = b_low + b_high << 64
        a * b = f + (o + i) << 64 + l << 128, где
            f = a_low * b_low
            o = a_low * b_high
            i = a_high * b_low
            l = a_high * b_high
        Каждое частичное произведение помещается в u128.
        """
        a_low, a_high = _low_64(a), _high_64(a)
        b_low, b_high = _low_64(b), _high_64(b)

        f = a_low * b_low
        o = a_low * b_high
        i = a_high * b_low
        l = a_high * b_high

        fl = cls(high=l, low=f)
        return fl.add(cls.left_shift_64(i)).add(cls.left_shift_64(o))

    def is_zero(self) -> bool:
        return self.high == 0 and self.low == 0

    def low_part(self) -> "Double128":
        """То же значение без старших 128 бит."""
        return Double128(high=0, low=self.low)

    def add(self, other: "Double128") -> "Double128":
        """
        Сложение с переносом из low в high.

        Переполнение high заворачивается по модулю 2^128: внутренние
        вызовы никогда не выходят за 256 бит.
        """
        low = self.low + other.low
        carry = 1 if low > U128_MAX else 0
        high = (self.high + other.high + carry) & U128_MAX
        return Double128(high=high, low=low & U128_MAX)

    def div(self, divisor: int) -> tuple["Double128", int]:
        """
        Деление на u128 с остатком.

        Args:
            divisor: Делитель (u128, > 0)

        Returns:
            (quotient, remainder), remainder < divisor

        Raises:
            ZeroDivisionError: Если divisor == 0
            RuntimeError: Если сворачивание не сошлось за DIV_FOLD_LIMIT итераций
        """
        if divisor == 0:
            raise ZeroDivisionError("attempt to divide by zero")

        if divisor == 1:
            return (self, 0)

        q, r = _div128(divisor), _mod128(divisor)

        value = self
        quotient = Double128.zero()
        folds = 0
        while value.high != 0:
            if folds >= DIV_FOLD_LIMIT:
                raise RuntimeError(
                    f"Double128 division did not converge after {DIV_FOLD_LIMIT} folds "
                    f"(divisor={divisor})"
                )
            quotient = quotient.add(Double128.product_of(value.high, q))
            value = Double128.product_of(value.high, r).add(value.low_part())
            folds += 1

        quotient = quotient.add(Double128.from_low(value.low // divisor))
        return (quotient, value.low % divisor)

    def try_into_u128(self) -> int:
        """
        Сужение до u128.

        Raises:
            OverflowError: Если high != 0
        """
        if self.high != 0:
            raise OverflowError("Double128 value does not fit in u128")
        return self.low

    # Python protocols

    def __add__(self, other: "Double128") -> "Double128":
        if not isinstance(other, Double128):
            return NotImplemented
        return self.add(other)

    def __divmod__(self, divisor: int) -> tuple["Double128", int]:
        return self.div(divisor)

    def __int__(self) -> int:
        return (self.high << U128_BITS) | self.low
