from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Dict, Generic, Iterable, Iterator, List, Type, TypeVar, Union

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .errors import Issue, ValidationFailedError, VldError
from .schema import Schema, load_input
from .values import format_value_short

logger = logging.getLogger(__name__)

T = TypeVar("T")
SchemaLike = Union[Schema[Any], Type[BaseModel]]


@dataclass
class ValidationResult:
    """Validation outcome returned by SchemaValidator."""

    is_valid: bool
    value: Any = None
    errors: List[Issue] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def raise_for_errors(self) -> None:
        if not self.is_valid:
            raise ValidationFailedError(self)

    def to_error(self) -> VldError | None:
        return VldError(self.errors) if self.errors else None


class SchemaValidator(Generic[T]):
    """High-level validator wrapping a schema with translation, rendering and batching."""

    def __init__(
        self,
        schema: SchemaLike,
        *,
        lazy: bool = False,
        resolver: Any = None,
        console: Console | None = None,
    ) -> None:
        self._schema: Schema[Any] = self._coerce_schema(schema)
        self.lazy = lazy
        self.resolver = resolver
        self._console = console

    @property
    def schema(self) -> Schema[Any]:
        return self._schema

    def validate(self, data: Any, *, console: Console | None = None) -> ValidationResult:
        logger.debug("validating payload of type %s", type(data).__name__)
        try:
            value = self._schema.parse(data)
        except VldError as exc:
            result = ValidationResult(False, errors=self._localize(exc), metadata={"issues": len(exc)})
        else:
            result = ValidationResult(True, value=value, metadata={"issues": 0})
        return self._finish(result, console)

    def validate_many(
        self,
        items: Iterable[Any],
        *,
        chunk_size: int = 1000,
        console: Console | None = None,
    ) -> Iterator[ValidationResult]:
        """Validate items in chunks, yielding one result per chunk.

        Issue paths are prefixed with the item's position in the whole stream.
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        iterator = iter(items)
        offset = 0
        while True:
            chunk = list(islice(iterator, chunk_size))
            if not chunk:
                break
            yield self._finish(self._validate_chunk(chunk, offset), console)
            offset += len(chunk)

    def _validate_chunk(self, chunk: List[Any], offset: int) -> ValidationResult:
        values: List[Any] = []
        errors: List[Issue] = []
        failed = 0
        for position, item in enumerate(chunk, start=offset):
            try:
                values.append(self._schema.parse_value(load_input(item)))
            except VldError as exc:
                failed += 1
                values.append(None)
                errors.extend(self._localize(exc.with_prefix(position)))
        metadata = {"offset": offset, "count": len(chunk), "failed": failed, "issues": len(errors)}
        logger.debug("validated chunk at offset %d: %d of %d items failed", offset, failed, len(chunk))
        return ValidationResult(failed == 0, value=values, errors=errors, metadata=metadata)

    def _finish(self, result: ValidationResult, console: Console | None) -> ValidationResult:
        display_console = console or self._console
        if display_console is not None:
            self._render_console(display_console, result)

        if not result.is_valid and not self.lazy:
            raise ValidationFailedError(result)

        return result

    def _localize(self, error: VldError) -> List[Issue]:
        if self.resolver is None:
            return list(error.issues)
        from ..utils.i18n import translate_error

        return list(translate_error(error, self.resolver).issues)

    def _coerce_schema(self, schema: SchemaLike) -> Schema[Any]:
        if isinstance(schema, Schema):
            return schema
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            from .converters import SchemaConverter

            return SchemaConverter.from_pydantic(schema)
        raise TypeError("Unsupported schema type provided to SchemaValidator")

    def _render_console(self, console: Console, result: ValidationResult) -> None:
        table = Table(title="Validation Result", expand=True)
        table.add_column("Path")
        table.add_column("Code")
        table.add_column("Message")
        table.add_row("", "status", "Validation passed" if result.is_valid else "Validation failed")
        for issue in result.errors:
            message = issue.message
            if issue.has_received:
                message = f"{message} (received {format_value_short(issue.received)})"
            table.add_row(Text(issue.path_str or "<root>"), issue.key, Text(message))
        console.print(table)
