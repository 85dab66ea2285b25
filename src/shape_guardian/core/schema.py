"""Abstract schema base, entry points, and the fluent modifier surface."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, TypeVar

from .errors import IssueCode, IssueCollector, VldError, missing_field
from .values import MISSING

if TYPE_CHECKING:
    from .combinators import IntersectionSchema, UnionSchema
    from .modifiers import (
        CatchSchema,
        DefaultSchema,
        DescribeSchema,
        MessageSchema,
        NullableSchema,
        NullishSchema,
        OptionalSchema,
        PipeSchema,
        RefineSchema,
        SuperRefineSchema,
        TransformSchema,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

OPAQUE_JSON_SCHEMA: Dict[str, Any] = {"x-opaque": True}


def load_input(data: Any) -> Any:
    """Turn raw parse input into a JSON-like value.

    Text and bytes are decoded as JSON, paths are read from disk, and every
    other object is taken to be an already-parsed value.
    """
    if isinstance(data, PurePath):
        try:
            with open(data, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise VldError.single(IssueCode.IO_ERROR, f"Failed to read file: {exc}") from exc
        return load_input(text)

    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise VldError.single(IssueCode.PARSE_ERROR, f"Invalid JSON: {exc}") from exc

    if isinstance(data, str):
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            logger.debug("JSON decode failed at line %s column %s", exc.lineno, exc.colno)
            raise VldError.single(IssueCode.PARSE_ERROR, f"Invalid JSON: {exc}") from exc

    return data


@dataclass(frozen=True)
class SafeParseResult(Generic[T]):
    """Outcome of ``safe_parse``: either data or an error, never both."""

    success: bool
    data: T | None = None
    error: VldError | None = None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.data  # type: ignore[return-value]


class Schema(ABC, Generic[T]):
    """Base class for every validator.

    Subclasses are frozen dataclasses implementing ``_parse``. Wrappers that
    want to see absent object keys set ``_handles_missing`` to True.
    """

    _handles_missing = False

    @abstractmethod
    def _parse(self, value: Any) -> T:
        """Validate an already-decoded value."""

    def json_schema(self) -> Dict[str, Any]:
        return dict(OPAQUE_JSON_SCHEMA)

    @property
    def description(self) -> str | None:
        return None

    def is_optional(self) -> bool:
        """True when an absent key is acceptable for this schema."""
        return False

    # entry points

    def parse_value(self, value: Any) -> T:
        if value is MISSING and not self._handles_missing:
            raise missing_field()
        return self._parse(value)

    def parse(self, data: Any) -> T:
        return self.parse_value(load_input(data))

    def safe_parse(self, data: Any) -> SafeParseResult[T]:
        try:
            return SafeParseResult(True, data=self.parse(data))
        except VldError as exc:
            return SafeParseResult(False, error=exc)

    def is_valid(self, data: Any) -> bool:
        return self.safe_parse(data).success

    # modifiers

    def optional(self) -> "OptionalSchema[T]":
        from .modifiers import OptionalSchema

        return OptionalSchema(self)

    def nullable(self) -> "NullableSchema[T]":
        from .modifiers import NullableSchema

        return NullableSchema(self)

    def nullish(self) -> "NullishSchema[T]":
        from .modifiers import NullishSchema

        return NullishSchema(self)

    def with_default(self, value: T) -> "DefaultSchema[T]":
        from .modifiers import DefaultSchema

        return DefaultSchema(self, value)

    def catch(self, fallback: T) -> "CatchSchema[T]":
        from .modifiers import CatchSchema

        return CatchSchema(self, fallback)

    def refine(self, check: Callable[[T], bool], message: str = "Invalid value") -> "RefineSchema[T]":
        from .modifiers import RefineSchema

        return RefineSchema(self, check, message)

    def super_refine(self, check: Callable[[T, IssueCollector], None]) -> "SuperRefineSchema[T]":
        from .modifiers import SuperRefineSchema

        return SuperRefineSchema(self, check)

    def transform(self, func: Callable[[T], U]) -> "TransformSchema[U]":
        from .modifiers import TransformSchema

        return TransformSchema(self, func)

    def pipe(self, other: "Schema[U]") -> "PipeSchema[U]":
        from .modifiers import PipeSchema

        return PipeSchema(self, other)

    def describe(self, text: str) -> "DescribeSchema[T]":
        from .modifiers import DescribeSchema

        return DescribeSchema(self, text)

    def message(self, text: str) -> "MessageSchema[T]":
        from .modifiers import MessageSchema

        return MessageSchema(self, text)

    def or_(self, other: "Schema[U]") -> "UnionSchema[T, U]":
        from .combinators import UnionSchema

        return UnionSchema(self, other)

    def and_(self, other: "Schema[Any]") -> "IntersectionSchema[T]":
        from .combinators import IntersectionSchema

        return IntersectionSchema(self, other)
