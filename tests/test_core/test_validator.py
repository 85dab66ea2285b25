from __future__ import annotations

from typing import Any, Dict

import pytest
from pydantic import BaseModel
from rich.console import Console

from shape_guardian import (
    ObjectSchema,
    SchemaValidator,
    ValidationFailedError,
    ValidationResult,
    german,
    number,
    object_,
)


def test_valid_payload(lazy_validator: SchemaValidator, valid_user: Dict[str, Any]) -> None:
    result = lazy_validator.validate(valid_user)

    assert result.is_valid
    assert result.value["name"] == "Alice"
    assert result.errors == []
    assert result.metadata == {"issues": 0}
    assert result.to_error() is None


def test_lazy_validator_returns_failures(lazy_validator: SchemaValidator, invalid_user: Dict[str, Any]) -> None:
    result = lazy_validator.validate(invalid_user)

    assert not result.is_valid
    assert len(result.errors) == result.metadata["issues"]
    assert result.to_error() is not None

    with pytest.raises(ValidationFailedError):
        result.raise_for_errors()


def test_eager_validator_raises(user_schema: ObjectSchema, invalid_user: Dict[str, Any]) -> None:
    validator = SchemaValidator(user_schema)

    with pytest.raises(ValidationFailedError) as exc_info:
        validator.validate(invalid_user)

    assert exc_info.value.result.errors
    assert str(exc_info.value).startswith("Validation failed with")


def test_accepts_json_text(server_schema: ObjectSchema) -> None:
    result = SchemaValidator(server_schema).validate('{"name": "api", "port": 80, "workers": 1}')
    assert result.value == {"name": "api", "port": 80, "workers": 1}


def test_invalid_json_is_reported(server_schema: ObjectSchema) -> None:
    result = SchemaValidator(server_schema, lazy=True).validate("{not json")
    assert result.errors[0].key == "parse_error"


def test_resolver_translates_messages(server_schema: ObjectSchema) -> None:
    validator = SchemaValidator(server_schema, lazy=True, resolver=german())

    result = validator.validate({"name": "api", "port": "80", "workers": 1})

    assert result.errors[0].message == "number erwartet, string erhalten"


def test_pydantic_model_is_converted() -> None:
    class Order(BaseModel):
        order_id: int
        amount: float

    validator = SchemaValidator(Order, lazy=True)

    assert validator.validate({"order_id": 1, "amount": 9.5}).is_valid
    assert not validator.validate({"order_id": "x", "amount": 9.5}).is_valid


def test_unsupported_schema_type() -> None:
    with pytest.raises(TypeError):
        SchemaValidator(dict)  # type: ignore[arg-type]


def test_validate_many_prefixes_global_index() -> None:
    validator = SchemaValidator(object_().field("n", number().int()), lazy=True)
    items = [{"n": 1}, {"n": "x"}, {"n": 3}, {"n": 4.5}, {"n": 5}]

    chunks = list(validator.validate_many(items, chunk_size=2))

    assert [chunk.metadata["offset"] for chunk in chunks] == [0, 2, 4]
    assert chunks[0].errors[0].path == (1, "n")
    assert chunks[1].errors[0].path == (3, "n")
    assert chunks[1].metadata["failed"] == 1
    assert chunks[2].is_valid
    assert chunks[0].value == [{"n": 1}, None]


def test_validate_many_rejects_bad_chunk_size(lazy_validator: SchemaValidator) -> None:
    with pytest.raises(ValueError):
        list(lazy_validator.validate_many([], chunk_size=0))


def test_console_rendering(lazy_validator: SchemaValidator, invalid_user: Dict[str, Any]) -> None:
    console = Console(record=True, width=160)

    lazy_validator.validate(invalid_user, console=console)

    output = console.export_text()
    assert "Validation failed" in output
    assert ".address.zip" in output


def test_result_defaults() -> None:
    result = ValidationResult(is_valid=True)
    assert result.errors == []
    assert result.metadata == {}
