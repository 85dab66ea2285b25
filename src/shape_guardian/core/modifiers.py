"""Wrapper schemas that adjust how an inner schema treats its input or output."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .errors import IssueCode, IssueCollector, VldError
from .schema import Schema
from .values import MISSING, to_json_value

T = TypeVar("T")
U = TypeVar("U")


def _nullable_projection(inner: Schema[Any]) -> Dict[str, Any]:
    return {"oneOf": [inner.json_schema(), {"type": "null"}]}


@dataclass(frozen=True)
class OptionalSchema(Schema[Optional[T]], Generic[T]):
    """``None`` or an absent key produce ``None``; anything else is validated."""

    inner: Schema[T]

    _handles_missing = True

    def unwrap(self) -> Schema[T]:
        return self.inner

    def is_optional(self) -> bool:
        return True

    def _parse(self, value: Any) -> T | None:
        if value is None or value is MISSING:
            return None
        return self.inner.parse_value(value)

    def json_schema(self) -> Dict[str, Any]:
        return _nullable_projection(self.inner)


@dataclass(frozen=True)
class NullableSchema(Schema[Optional[T]], Generic[T]):
    """Only an explicit ``None`` is accepted in place of a value."""

    inner: Schema[T]

    def unwrap(self) -> Schema[T]:
        return self.inner

    def _parse(self, value: Any) -> T | None:
        if value is None:
            return None
        return self.inner.parse_value(value)

    def json_schema(self) -> Dict[str, Any]:
        return _nullable_projection(self.inner)


@dataclass(frozen=True)
class NullishSchema(Schema[Optional[T]], Generic[T]):
    inner: Schema[T]

    _handles_missing = True

    def unwrap(self) -> Schema[T]:
        return self.inner

    def is_optional(self) -> bool:
        return True

    def _parse(self, value: Any) -> T | None:
        if value is None or value is MISSING:
            return None
        return self.inner.parse_value(value)

    def json_schema(self) -> Dict[str, Any]:
        return _nullable_projection(self.inner)


@dataclass(frozen=True)
class DefaultSchema(Schema[T], Generic[T]):
    """Substitutes ``default`` for ``None`` or an absent key.

    The default is deep-copied on each use so callers may mutate the output.
    """

    inner: Schema[T]
    default: T

    _handles_missing = True

    def unwrap(self) -> Schema[T]:
        return self.inner

    def is_optional(self) -> bool:
        return True

    def _parse(self, value: Any) -> T:
        if value is None or value is MISSING:
            return copy.deepcopy(self.default)
        return self.inner.parse_value(value)

    def json_schema(self) -> Dict[str, Any]:
        schema = self.inner.json_schema()
        schema["default"] = to_json_value(self.default)
        return schema


@dataclass(frozen=True)
class CatchSchema(Schema[T], Generic[T]):
    """Replaces any failure with ``fallback``."""

    inner: Schema[T]
    fallback: T

    _handles_missing = True

    def is_optional(self) -> bool:
        return True

    def _parse(self, value: Any) -> T:
        try:
            return self.inner.parse_value(value)
        except VldError:
            return copy.deepcopy(self.fallback)

    def json_schema(self) -> Dict[str, Any]:
        return self.inner.json_schema()


@dataclass(frozen=True)
class RefineSchema(Schema[T], Generic[T]):
    inner: Schema[T]
    check: Callable[[T], bool]
    error_message: str = "Invalid value"

    _handles_missing = True

    def is_optional(self) -> bool:
        return self.inner.is_optional()

    def _parse(self, value: Any) -> T:
        output = self.inner.parse_value(value)
        if not self.check(output):
            raise VldError.single(IssueCode.CUSTOM, self.error_message, received=value)
        return output

    def json_schema(self) -> Dict[str, Any]:
        return self.inner.json_schema()


@dataclass(frozen=True)
class SuperRefineSchema(Schema[T], Generic[T]):
    """Runs ``check(output, collector)``; every issue pushed becomes part of the error."""

    inner: Schema[T]
    check: Callable[[T, IssueCollector], None]

    _handles_missing = True

    def is_optional(self) -> bool:
        return self.inner.is_optional()

    def _parse(self, value: Any) -> T:
        output = self.inner.parse_value(value)
        collector = IssueCollector()
        self.check(output, collector)
        collector.raise_if_any()
        return output

    def json_schema(self) -> Dict[str, Any]:
        return self.inner.json_schema()


@dataclass(frozen=True)
class TransformSchema(Schema[U], Generic[T, U]):
    inner: Schema[T]
    func: Callable[[T], U]

    _handles_missing = True

    def is_optional(self) -> bool:
        return self.inner.is_optional()

    def _parse(self, value: Any) -> U:
        return self.func(self.inner.parse_value(value))

    def json_schema(self) -> Dict[str, Any]:
        return self.inner.json_schema()


@dataclass(frozen=True)
class PipeSchema(Schema[U], Generic[T, U]):
    """Feeds the output of ``first`` to ``second`` as a JSON-like value."""

    first: Schema[T]
    second: Schema[U]

    _handles_missing = True

    def is_optional(self) -> bool:
        return self.first.is_optional()

    def _parse(self, value: Any) -> U:
        intermediate = self.first.parse_value(value)
        return self.second.parse_value(to_json_value(intermediate))

    def json_schema(self) -> Dict[str, Any]:
        return self.first.json_schema()


@dataclass(frozen=True)
class PreprocessSchema(Schema[T], Generic[T]):
    """Maps the raw value before validation; absent keys skip the mapper."""

    mapper: Callable[[Any], Any]
    inner: Schema[T]

    _handles_missing = True

    def is_optional(self) -> bool:
        return self.inner.is_optional()

    def _parse(self, value: Any) -> T:
        if value is MISSING:
            return self.inner.parse_value(value)
        return self.inner.parse_value(self.mapper(value))

    def json_schema(self) -> Dict[str, Any]:
        return self.inner.json_schema()


@dataclass(frozen=True)
class DescribeSchema(Schema[T], Generic[T]):
    inner: Schema[T]
    text: str

    _handles_missing = True

    @property
    def description(self) -> str | None:
        return self.text

    def unwrap(self) -> Schema[T]:
        return self.inner

    def is_optional(self) -> bool:
        return self.inner.is_optional()

    def _parse(self, value: Any) -> T:
        return self.inner.parse_value(value)

    def json_schema(self) -> Dict[str, Any]:
        schema = self.inner.json_schema()
        schema["description"] = self.text
        return schema


@dataclass(frozen=True)
class MessageSchema(Schema[T], Generic[T]):
    """Rewrites the message of every issue raised by ``inner``."""

    inner: Schema[T]
    text: str

    _handles_missing = True

    def is_optional(self) -> bool:
        return self.inner.is_optional()

    def _parse(self, value: Any) -> T:
        try:
            return self.inner.parse_value(value)
        except VldError as exc:
            raise VldError(issue.with_message(self.text) for issue in exc.issues) from None

    def json_schema(self) -> Dict[str, Any]:
        return self.inner.json_schema()

