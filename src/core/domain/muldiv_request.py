"""
MulDivRequest — Модель запроса масштабирования a * b / c

Immutable Pydantic модели запроса и результата точного multiply-divide.
Соответствуют контрактам muldiv_request и muldiv_result.

В JSON-контрактах величины u128 передаются десятичными строками:
39-значные числа не переживают JSON number во многих потребителях.
"""

import logging
from enum import Enum
from typing import Any, Dict, Final

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.contracts.validators import validate_muldiv_request
from src.core.math.muldiv import (
    MulDivOverflow,
    multiply_by_rational,
    multiply_by_rational_with_rounding,
)
from src.core.math.rounding import Rounding
from src.core.math.uint128 import is_u128

logger = logging.getLogger(__name__)

# Версия JSON-контрактов muldiv_request / muldiv_result
SCHEMA_VERSION: Final[str] = "1"


# =============================================================================
# ENUMS
# =============================================================================


class MulDivAlgorithm(str, Enum):
    """Алгоритм multiply-divide"""

    ROUNDED = "rounded"
    LEGACY = "legacy"


# =============================================================================
# RESULT MODEL
# =============================================================================


class MulDivResult(BaseModel):
    """
    Результат multiply-divide.

    value = None означает переполнение u128 (явный исход, не ошибка).
    """

    value: int | None = Field(
        ..., strict=True, description="Результат (u128) или None при переполнении"
    )
    algorithm: MulDivAlgorithm = Field(..., description="Использованный алгоритм")
    rounding: Rounding | None = Field(None, description="Политика округления (только rounded)")

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def validate_value_range(cls, v: int | None) -> int | None:
        """Результат, если есть, обязан помещаться в u128"""
        if v is not None and not is_u128(v):
            raise ValueError(f"value must be in [0, U128_MAX], got {v}")
        return v

    @model_validator(mode="after")
    def validate_rounding_matches_algorithm(self) -> "MulDivResult":
        """rounding задан ровно для rounded-алгоритма"""
        if self.algorithm == MulDivAlgorithm.ROUNDED and self.rounding is None:
            raise ValueError("rounded result requires a rounding policy")
        if self.algorithm == MulDivAlgorithm.LEGACY and self.rounding is not None:
            raise ValueError("legacy result must not carry a rounding policy")
        return self

    @property
    def overflow(self) -> bool:
        return self.value is None

    def to_contract(self) -> Dict[str, Any]:
        """
        Сериализация в JSON-контракт muldiv_result.

        Returns:
            dict, валидный по схеме muldiv_result
        """
        return {
            "schema_version": SCHEMA_VERSION,
            "value": None if self.value is None else str(self.value),
            "overflow": self.overflow,
            "algorithm": self.algorithm.value,
            "rounding": None if self.rounding is None else self.rounding.value,
        }


# =============================================================================
# REQUEST MODEL
# =============================================================================


class MulDivRequest(BaseModel):
    """
    Запрос на вычисление a * b / c.

    Immutable модель (frozen=True). rounding выбирает алгоритм:
    - rounding задан → multiply_by_rational_with_rounding
    - rounding = None → legacy multiply_by_rational

    Для rounded-алгоритма c == 0 отклоняется на этапе валидации, а не
    при вычислении.
    """

    a: int = Field(..., strict=True, description="Множитель (u128)")
    b: int = Field(..., strict=True, description="Числитель дроби (u128)")
    c: int = Field(..., strict=True, description="Знаменатель дроби (u128)")
    rounding: Rounding | None = Field(
        None, description="Политика округления; None — legacy алгоритм"
    )

    model_config = {"frozen": True}

    @field_validator("a", "b", "c")
    @classmethod
    def validate_u128_range(cls, v: int, info) -> int:
        """Все величины — u128"""
        if not is_u128(v):
            raise ValueError(f"{info.field_name} must be in [0, U128_MAX], got {v}")
        return v

    @field_validator("rounding")
    @classmethod
    def validate_nonzero_divisor(cls, v: Rounding | None, info) -> Rounding | None:
        """Rounded-алгоритм требует c > 0"""
        if v is not None and info.data.get("c") == 0:
            raise ValueError("c must be nonzero for rounded multiply-divide")
        return v

    @property
    def algorithm(self) -> MulDivAlgorithm:
        if self.rounding is None:
            return MulDivAlgorithm.LEGACY
        return MulDivAlgorithm.ROUNDED

    def evaluate(self) -> MulDivResult:
        """
        Выполнение запроса.

        Переполнение обоих алгоритмов приводится к value = None.

        Returns:
            MulDivResult
        """
        logger.debug(
            "Evaluating muldiv request: algorithm=%s rounding=%s",
            self.algorithm.value,
            None if self.rounding is None else self.rounding.value,
        )

        if self.rounding is None:
            try:
                value = multiply_by_rational(self.a, self.b, self.c)
            except MulDivOverflow:
                value = None
        else:
            value = multiply_by_rational_with_rounding(self.a, self.b, self.c, self.rounding)

        return MulDivResult(value=value, algorithm=self.algorithm, rounding=self.rounding)

    def to_contract(self) -> Dict[str, Any]:
        """
        Сериализация в JSON-контракт muldiv_request.

        Returns:
            dict, валидный по схеме muldiv_request
        """
        return {
            "schema_version": SCHEMA_VERSION,
            "a": str(self.a),
            "b": str(self.b),
            "c": str(self.c),
            "rounding": None if self.rounding is None else self.rounding.value,
        }

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "MulDivRequest":
        """
        Построение запроса из JSON-контракта muldiv_request.

        Сначала данные проверяются контрактом (схема и диапазон u128),
        затем — Pydantic.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют контракту
            pydantic.ValidationError: Если модель отвергает значения
        """
        validate_muldiv_request(data)
        return cls(
            a=int(data["a"]),
            b=int(data["b"]),
            c=int(data["c"]),
            rounding=data.get("rounding"),
        )
