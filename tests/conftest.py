from __future__ import annotations

from typing import Any, Dict

import pytest
from pydantic import BaseModel, Field

from shape_guardian import (
    ObjectSchema,
    SchemaValidator,
    array,
    boolean,
    enumeration,
    number,
    object_,
    string,
)


@pytest.fixture()
def server_schema() -> ObjectSchema:
    """Server config schema with one constraint per field."""
    return (
        object_()
        .field("name", string().non_empty())
        .field("port", number().int().min(1).max(65535))
        .field("workers", number().int().min(1))
    )


@pytest.fixture()
def user_schema() -> ObjectSchema:
    """Nested user schema used across object, reporting and validator tests."""
    address = object_().field("city", string().min(1)).field("zip", string().length(5))
    return (
        object_()
        .field("name", string().min(2).max(50))
        .field("email", string().email())
        .field("age", number().int().min(0).max(150).optional())
        .field("role", enumeration(["admin", "user"]).with_default("user"))
        .field("active", boolean())
        .field("tags", array(string()).max_len(5))
        .field("address", address)
    )


@pytest.fixture()
def valid_user() -> Dict[str, Any]:
    return {
        "name": "Alice",
        "email": "alice@example.com",
        "age": 30,
        "active": True,
        "tags": ["ops", "dev"],
        "address": {"city": "Berlin", "zip": "10115"},
    }


@pytest.fixture()
def invalid_user() -> Dict[str, Any]:
    """User payload with several errors, including nested ones."""
    return {
        "name": "A",
        "email": "not-an-email",
        "age": -5,
        "active": "yes",
        "tags": ["ok", 1],
        "address": {"city": "", "zip": "123"},
    }


@pytest.fixture()
def sample_pydantic_model() -> type[BaseModel]:
    """Sample Pydantic model for conversion tests."""

    class UserRecord(BaseModel):
        id: int = Field(ge=0)
        email: str = Field(pattern=r"^[^@]+@[^@]+$")
        age: int = Field(ge=0, le=120)
        score: float = Field(ge=0.0, le=100.0)
        active: bool
        nickname: str | None = None

    return UserRecord


@pytest.fixture()
def lazy_validator(user_schema: ObjectSchema) -> SchemaValidator:
    """SchemaValidator that returns failing results instead of raising."""
    return SchemaValidator(user_schema, lazy=True)
