"""
Rounding — Политика округления частного

Превращает пару (quotient, remainder) в одно округлённое целое.
"""

from enum import Enum


class Rounding(str, Enum):
    """
    Политика округления результата деления.

    - DOWN: floor, остаток отбрасывается
    - UP: ceiling, +1 при любом ненулевом остатке
    - NEAREST: round half up, +1 если remainder >= ceil(divisor / 2)
    """

    DOWN = "down"
    UP = "up"
    NEAREST = "nearest"

    def should_round_up(self, remainder: int, divisor: int) -> bool:
        """
        Нужно ли добавить 1 к частному.

        Для NEAREST порог divisor // 2 + divisor % 2 округляет половину
        вверх при любой чётности делителя.

        Args:
            remainder: Остаток деления (0 <= remainder < divisor)
            divisor: Делитель (> 0)

        Returns:
            True если частное следует увеличить на 1
        """
        if self is Rounding.UP:
            return remainder > 0
        if self is Rounding.NEAREST:
            return remainder >= divisor // 2 + divisor % 2
        return False
