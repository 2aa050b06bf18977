"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и формата u128 строк
- Детекция условных ограничений (c != 0 для rounded, value/overflow)
- Интеграция с Pydantic моделями
"""

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    MulDivRequestValidator,
    MulDivResultValidator,
    SchemaLoader,
    validate_muldiv_request,
    validate_muldiv_result,
)
from src.core.domain import MulDivRequest
from src.core.math import U128_MAX, Rounding


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_request():
    """Валидный muldiv_request для тестирования."""
    return {
        "schema_version": "1",
        "a": str(U128_MAX),
        "b": str(U128_MAX - 1),
        "c": str(U128_MAX),
        "rounding": "down",
    }


@pytest.fixture
def valid_result():
    """Валидный muldiv_result для тестирования."""
    return {
        "schema_version": "1",
        "value": str(U128_MAX - 1),
        "overflow": False,
        "algorithm": "rounded",
        "rounding": "down",
    }


@pytest.fixture
def loader():
    """Отдельный SchemaLoader с пустым кэшем."""
    return SchemaLoader()


@pytest.fixture
def request_validator(loader):
    return MulDivRequestValidator(loader)


@pytest.fixture
def result_validator(loader):
    return MulDivResultValidator(loader)


# =============================================================================
# SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_all_schemas(loader):
    """Проверка, что SchemaLoader загружает все схемы."""
    for name in ("muldiv_request", "muldiv_result"):
        schema = loader.load_schema(name)
        assert schema["title"] == name
        assert "properties" in schema


def test_schema_loader_caches_compiled_validator(loader):
    """Один скомпилированный валидатор на схему."""
    first = loader.validator("muldiv_request")
    assert loader.validator("muldiv_request") is first
    assert first.schema is loader.load_schema("muldiv_request")
    assert loader.validator("muldiv_result") is not first


def test_contract_validators_share_compiled_schema(loader):
    """Валидаторы одного loader-а не пересобирают схему."""
    first = MulDivRequestValidator(loader)
    second = MulDivRequestValidator(loader)
    assert first._schema is second._schema


def test_schema_loader_raises_on_missing_schema(loader):
    """Проверка ошибки при отсутствии схемы."""
    with pytest.raises(FileNotFoundError):
        loader.validator("nonexistent_schema")


def test_schema_loader_raises_on_missing_directory(tmp_path):
    with pytest.raises(RuntimeError, match="Schema directory not found"):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path):
    """Meta-валидация схемы при загрузке."""
    (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
        SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# MULDIV REQUEST
# =============================================================================


def test_request_validator_accepts_valid_data(request_validator, valid_request):
    """Валидный запрос проходит проверку."""
    request_validator.validate(valid_request)
    assert request_validator.is_valid(valid_request)


def test_request_validate_function(valid_request):
    """Convenience-функция принимает валидный запрос."""
    validate_muldiv_request(valid_request)


def test_request_accepts_null_rounding(valid_request):
    """rounding = null выбирает legacy алгоритм."""
    valid_request["rounding"] = None
    validate_muldiv_request(valid_request)


def test_request_accepts_zero_divisor_for_legacy(valid_request):
    """c = 0 допустим для legacy (делитель clamp-ится до 1)."""
    valid_request["c"] = "0"
    valid_request["rounding"] = None
    validate_muldiv_request(valid_request)


def test_request_rejects_zero_divisor_for_rounded(valid_request):
    """c = 0 запрещён при заданном rounding."""
    valid_request["c"] = "0"

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


def test_request_rejects_missing_required_field(valid_request):
    """Отсутствие обязательного поля."""
    del valid_request["b"]

    with pytest.raises(ValidationError, match="'b' is a required property"):
        validate_muldiv_request(valid_request)


def test_request_rejects_json_number(valid_request):
    """Величины передаются строками, не JSON number."""
    valid_request["a"] = 5

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


@pytest.mark.parametrize("bad_value", ["", "-1", "01", "1.5", "0x10", " 1", "1" * 40])
def test_request_rejects_malformed_u128(valid_request, bad_value):
    """Некорректные десятичные строки отклоняются."""
    valid_request["a"] = bad_value

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


def test_request_rejects_invalid_rounding(valid_request):
    """rounding вне enum."""
    valid_request["rounding"] = "ceil"

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


def test_request_rejects_wrong_schema_version(valid_request):
    """Неверная версия схемы."""
    valid_request["schema_version"] = "2"

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


def test_request_rejects_additional_property(valid_request):
    """Лишние поля запрещены."""
    valid_request["d"] = "1"

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


@pytest.mark.parametrize("field", ["a", "b", "c"])
def test_request_accepts_u128_max(request_validator, valid_request, field):
    """39-значный U128_MAX — допустимая граница."""
    valid_request[field] = str(U128_MAX)
    request_validator.validate(valid_request)


@pytest.mark.parametrize("field", ["a", "b", "c"])
def test_request_rejects_above_u128_max(request_validator, valid_request, field):
    """2^128 проходит pattern схемы, но не диапазон u128."""
    valid_request[field] = str(U128_MAX + 1)

    assert request_validator.is_valid(valid_request) is False
    with pytest.raises(ValidationError, match=f"{field} must be <= U128_MAX") as exc:
        request_validator.validate(valid_request)
    assert list(exc.value.path) == [field]


def test_request_rejects_largest_39_digit_string(valid_request):
    valid_request["c"] = "9" * 39

    with pytest.raises(ValidationError):
        validate_muldiv_request(valid_request)


# =============================================================================
# MULDIV RESULT
# =============================================================================


def test_result_validator_accepts_valid_data(result_validator, valid_result):
    """Валидный результат проходит проверку."""
    result_validator.validate(valid_result)
    assert result_validator.is_valid(valid_result)


def test_result_rejects_value_above_u128_max(result_validator, valid_result):
    valid_result["value"] = str(U128_MAX + 1)

    with pytest.raises(ValidationError, match="value must be <= U128_MAX"):
        result_validator.validate(valid_result)


def test_result_accepts_overflow(valid_result):
    """Переполнение: value = null, overflow = true."""
    valid_result["value"] = None
    valid_result["overflow"] = True
    validate_muldiv_result(valid_result)


def test_result_rejects_value_with_overflow(valid_result):
    """overflow = true требует value = null."""
    valid_result["overflow"] = True

    with pytest.raises(ValidationError):
        validate_muldiv_result(valid_result)


def test_result_rejects_null_value_without_overflow(valid_result):
    """overflow = false требует value."""
    valid_result["value"] = None

    with pytest.raises(ValidationError):
        validate_muldiv_result(valid_result)


def test_result_rejects_rounding_for_legacy(valid_result):
    """Legacy результат не имеет политики округления."""
    valid_result["algorithm"] = "legacy"

    with pytest.raises(ValidationError):
        validate_muldiv_result(valid_result)


def test_result_rejects_missing_rounding_for_rounded(valid_result):
    """Rounded результат обязан указывать политику округления."""
    valid_result["rounding"] = None

    with pytest.raises(ValidationError):
        validate_muldiv_result(valid_result)


def test_result_accepts_legacy(valid_result):
    """Legacy результат с rounding = null."""
    valid_result["algorithm"] = "legacy"
    valid_result["rounding"] = None
    validate_muldiv_result(valid_result)


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


def test_request_model_generates_valid_json():
    """Проверка, что Pydantic MulDivRequest генерирует валидный JSON."""
    request = MulDivRequest(a=U128_MAX, b=3, c=7, rounding=Rounding.NEAREST)
    validate_muldiv_request(request.to_contract())

    legacy = MulDivRequest(a=1, b=2, c=0)
    validate_muldiv_request(legacy.to_contract())


def test_result_model_generates_valid_json():
    """Проверка, что MulDivResult (включая переполнение) генерирует валидный JSON."""
    ok = MulDivRequest(a=U128_MAX, b=U128_MAX - 1, c=U128_MAX, rounding=Rounding.DOWN)
    validate_muldiv_result(ok.evaluate().to_contract())

    overflow = MulDivRequest(a=U128_MAX, b=U128_MAX, c=2)
    validate_muldiv_result(overflow.evaluate().to_contract())


def test_iter_errors_returns_all_errors(request_validator):
    """Проверка, что iter_errors возвращает все ошибки валидации."""
    invalid_data = {
        "schema_version": "0",  # const violation - НАРУШЕНИЕ
        "a": "-1",  # pattern - НАРУШЕНИЕ
        "b": 7,  # type - НАРУШЕНИЕ
        "c": "01",  # pattern - НАРУШЕНИЕ
        "rounding": "sideways",  # enum - НАРУШЕНИЕ
    }

    errors = list(request_validator.iter_errors(invalid_data))
    assert len(errors) >= 5


def test_iter_errors_includes_range_errors(request_validator, valid_request):
    """Ошибки диапазона идут вместе с ошибками схемы."""
    valid_request["a"] = str(U128_MAX + 1)
    valid_request["b"] = "9" * 39
    valid_request["rounding"] = "sideways"

    errors = list(request_validator.iter_errors(valid_request))
    range_paths = sorted(list(e.path) for e in errors if e.validator == "maximum")
    assert range_paths == [["a"], ["b"]]
    assert any(e.validator == "enum" for e in errors)


def test_iter_errors_ignores_non_object(request_validator):
    """Не-объект даёт только ошибку типа схемы."""
    errors = list(request_validator.iter_errors(["1", "2", "3"]))
    assert [e.validator for e in errors] == ["type"]
