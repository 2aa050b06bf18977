"""
JSON Schema Contract Validators

Проверка JSON-контрактов multiply-divide в два этапа:
1. Структура и формат — JSON Schema (Draft 2020-12)
2. Диапазон u128 — десятичные строки сравниваются с U128_MAX

Второй этап нужен потому, что pattern схемы ограничивает только длину
(до 39 цифр), а 39-значные числа выше 2^128 - 1 формат проходят.

Схемы:
- muldiv_request.json (запрос a * b / c)
- muldiv_result.json (результат или переполнение)

Скомпилированные валидаторы кэшируются в SchemaLoader: повторные проверки
(например, каждый MulDivRequest.from_contract) не пересобирают схему.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.math.uint128 import U128_MAX


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузка, meta-валидация и компиляция схем из каталога schema/.

    Кэширует и сами схемы, и скомпилированные Draft202012Validator.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema по имени (без расширения).

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является корректной Draft 2020-12 схемой
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema

    def validator(self, schema_name: str) -> Draft202012Validator:
        """Скомпилированный валидатор схемы (один экземпляр на имя)"""
        compiled = self._validators.get(schema_name)
        if compiled is None:
            compiled = Draft202012Validator(self.load_schema(schema_name))
            self._validators[schema_name] = compiled
        return compiled


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор контракта: JSON Schema + проверка диапазона u128.

    Подклассы задают schema_name и u128_fields — поля, которые в контракте
    несут u128 десятичной строкой.
    """

    schema_name: str = ""
    u128_fields: Tuple[str, ...] = ()

    def __init__(self, loader: SchemaLoader | None = None):
        self._schema = (loader or _SCHEMA_LOADER).validator(self.schema_name)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """Все ошибки: сначала ошибки схемы, затем выходы за U128_MAX"""
        yield from self._schema.iter_errors(data)
        yield from self._range_errors(data)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Первая найденная ошибка (схема или диапазон)
        """
        self._schema.validate(data)
        for error in self._range_errors(data):
            raise error

    def is_valid(self, data: Any) -> bool:
        return next(self.iter_errors(data), None) is None

    def _range_errors(self, data: Any) -> Iterator[ValidationError]:
        if not isinstance(data, dict):
            return
        for field in self.u128_fields:
            value = data.get(field)
            # Формат проверяет схема; здесь только корректные цифровые строки
            if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
                continue
            if int(value) > U128_MAX:
                yield ValidationError(
                    f"{field} must be <= U128_MAX, got {value}",
                    validator="maximum",
                    validator_value=str(U128_MAX),
                    instance=value,
                    path=(field,),
                )


class MulDivRequestValidator(ContractValidator):
    """muldiv_request: a, b, c — u128"""

    schema_name = "muldiv_request"
    u128_fields = ("a", "b", "c")


class MulDivResultValidator(ContractValidator):
    """muldiv_result: value — u128 или null"""

    schema_name = "muldiv_result"
    u128_fields = ("value",)


_REQUEST_VALIDATOR = MulDivRequestValidator()
_RESULT_VALIDATOR = MulDivResultValidator()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_muldiv_request(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если запрос не соответствует контракту
    """
    _REQUEST_VALIDATOR.validate(data)


def validate_muldiv_result(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если результат не соответствует контракту
    """
    _RESULT_VALIDATOR.validate(data)
