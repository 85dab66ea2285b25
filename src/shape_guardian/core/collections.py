"""Array-like and keyed container schemas."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Set, Tuple, TypeVar

from .errors import IssueCode, IssueCollector, VldError, invalid_type
from .schema import Schema
from .values import is_array, value_type_name

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def _parse_items(schema: Schema[T], items: Any, collector: IssueCollector) -> List[T]:
    parsed: List[T] = []
    for index, item in enumerate(items):
        try:
            parsed.append(schema.parse_value(item))
        except VldError as exc:
            collector.extend(exc, prefix=index)
    return parsed


@dataclass(frozen=True)
class ArraySchema(Schema[List[T]]):
    """Validates every element and accumulates all element issues."""

    element: Schema[T]
    min_length: int | None = None
    max_length: int | None = None
    exact_length: int | None = None
    custom_type_error: str | None = None

    def type_error(self, message: str) -> "ArraySchema[T]":
        return replace(self, custom_type_error=message)

    def min_len(self, length: int) -> "ArraySchema[T]":
        return replace(self, min_length=length)

    def max_len(self, length: int) -> "ArraySchema[T]":
        return replace(self, max_length=length)

    def length(self, length: int) -> "ArraySchema[T]":
        return replace(self, exact_length=length)

    len = length

    def non_empty(self) -> "ArraySchema[T]":
        return self.min_len(1)

    def _parse(self, value: Any) -> List[T]:
        if not is_array(value):
            raise invalid_type("array", value, self.custom_type_error)

        size = len(value)
        collector = IssueCollector()
        if self.min_length is not None and size < self.min_length:
            collector.add(
                IssueCode.TOO_SMALL,
                f"Array must have at least {self.min_length} elements",
                received=value,
                minimum=self.min_length,
                inclusive=True,
            )
        if self.max_length is not None and size > self.max_length:
            collector.add(
                IssueCode.TOO_BIG,
                f"Array must have at most {self.max_length} elements",
                received=value,
                maximum=self.max_length,
                inclusive=True,
            )
        if self.exact_length is not None and size != self.exact_length:
            collector.add(
                IssueCode.INVALID_LENGTH,
                f"Array must have exactly {self.exact_length} elements",
                received=value,
                exact=self.exact_length,
            )

        parsed = _parse_items(self.element, value, collector)
        collector.raise_if_any()
        return parsed

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "array", "items": self.element.json_schema()}
        minimum = self.exact_length if self.exact_length is not None else self.min_length
        maximum = self.exact_length if self.exact_length is not None else self.max_length
        if minimum is not None:
            schema["minItems"] = minimum
        if maximum is not None:
            schema["maxItems"] = maximum
        return schema


@dataclass(frozen=True)
class TupleSchema(Schema[Tuple[Any, ...]]):
    """Fixed-arity array; each position has its own schema."""

    items: Tuple[Schema[Any], ...]

    def _parse(self, value: Any) -> Tuple[Any, ...]:
        if not is_array(value):
            raise invalid_type("array", value)
        if len(value) != len(self.items):
            raise VldError.single(
                IssueCode.INVALID_TUPLE_LENGTH,
                f"Expected tuple of {len(self.items)} elements, received {len(value)}",
                received=value,
                expected=len(self.items),
            )

        collector = IssueCollector()
        parsed: List[Any] = []
        for index, (schema, item) in enumerate(zip(self.items, value)):
            try:
                parsed.append(schema.parse_value(item))
            except VldError as exc:
                collector.extend(exc, prefix=index)
        collector.raise_if_any()
        return tuple(parsed)

    def json_schema(self) -> Dict[str, Any]:
        return {
            "type": "array",
            "prefixItems": [schema.json_schema() for schema in self.items],
            "minItems": len(self.items),
            "maxItems": len(self.items),
        }


@dataclass(frozen=True)
class RecordSchema(Schema[Dict[str, V]]):
    """Object with arbitrary string keys and uniformly typed values."""

    value_schema: Schema[V]
    min_keys_count: int | None = None
    max_keys_count: int | None = None

    def min_keys(self, count: int) -> "RecordSchema[V]":
        return replace(self, min_keys_count=count)

    def max_keys(self, count: int) -> "RecordSchema[V]":
        return replace(self, max_keys_count=count)

    def _parse(self, value: Any) -> Dict[str, V]:
        if not isinstance(value, dict):
            raise invalid_type("object", value)

        collector = IssueCollector()
        if self.min_keys_count is not None and len(value) < self.min_keys_count:
            collector.add(
                IssueCode.TOO_SMALL,
                f"Record must have at least {self.min_keys_count} keys",
                minimum=self.min_keys_count,
                inclusive=True,
            )
        if self.max_keys_count is not None and len(value) > self.max_keys_count:
            collector.add(
                IssueCode.TOO_BIG,
                f"Record must have at most {self.max_keys_count} keys",
                maximum=self.max_keys_count,
                inclusive=True,
            )

        parsed: Dict[str, V] = {}
        for key, item in value.items():
            try:
                parsed[key] = self.value_schema.parse_value(item)
            except VldError as exc:
                collector.extend(exc, prefix=key)
        collector.raise_if_any()
        return parsed

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "additionalProperties": self.value_schema.json_schema(),
        }
        if self.min_keys_count is not None:
            schema["minProperties"] = self.min_keys_count
        if self.max_keys_count is not None:
            schema["maxProperties"] = self.max_keys_count
        return schema


@dataclass(frozen=True)
class MapSchema(Schema[Dict[K, V]]):
    """Array of ``[key, value]`` pairs producing a dictionary."""

    key_schema: Schema[K]
    value_schema: Schema[V]

    def _parse(self, value: Any) -> Dict[K, V]:
        if not is_array(value):
            raise VldError.single(
                IssueCode.INVALID_TYPE,
                f"Expected array of [key, value] pairs, received {value_type_name(value)}",
                received=value,
                expected="array",
                received_type=value_type_name(value),
            )

        collector = IssueCollector()
        parsed: Dict[K, V] = {}
        for index, entry in enumerate(value):
            if not is_array(entry) or len(entry) != 2:
                collector.add(
                    IssueCode.INVALID_MAP_ENTRY,
                    "Each Map entry must be a [key, value] array of length 2",
                    path=(index,),
                    received=entry,
                )
                continue

            raw_key, raw_value = entry
            key: Any = None
            key_ok = value_ok = True
            try:
                key = self.key_schema.parse_value(raw_key)
            except VldError as exc:
                key_ok = False
                collector.extend(exc.with_prefix(0), prefix=index)
            try:
                item = self.value_schema.parse_value(raw_value)
            except VldError as exc:
                value_ok = False
                collector.extend(exc.with_prefix(1), prefix=index)
            if not (key_ok and value_ok):
                continue
            try:
                parsed[key] = item
            except TypeError as exc:
                collector.add(
                    IssueCode.INVALID_TYPE,
                    f"Map keys must be hashable: {exc}",
                    path=(index, 0),
                    received=raw_key,
                )
        collector.raise_if_any()
        return parsed

    def json_schema(self) -> Dict[str, Any]:
        return {
            "type": "array",
            "items": {
                "type": "array",
                "prefixItems": [self.key_schema.json_schema(), self.value_schema.json_schema()],
                "minItems": 2,
                "maxItems": 2,
            },
        }


@dataclass(frozen=True)
class SetSchema(Schema[Set[T]]):
    """Validates elements, then deduplicates the validated outputs."""

    element: Schema[T]
    min_size_count: int | None = None
    max_size_count: int | None = None

    def min_size(self, count: int) -> "SetSchema[T]":
        return replace(self, min_size_count=count)

    def max_size(self, count: int) -> "SetSchema[T]":
        return replace(self, max_size_count=count)

    def _parse(self, value: Any) -> Set[T]:
        if not is_array(value):
            raise invalid_type("array", value)

        collector = IssueCollector()
        items = _parse_items(self.element, value, collector)
        collector.raise_if_any()

        try:
            unique = set(items)
        except TypeError as exc:
            raise VldError.single(
                IssueCode.INVALID_TYPE,
                f"Set elements must be hashable: {exc}",
                received=value,
            ) from exc

        if self.min_size_count is not None and len(unique) < self.min_size_count:
            collector.add(
                IssueCode.TOO_SMALL,
                f"Set must have at least {self.min_size_count} unique elements",
                received=value,
                minimum=self.min_size_count,
                inclusive=True,
            )
        if self.max_size_count is not None and len(unique) > self.max_size_count:
            collector.add(
                IssueCode.TOO_BIG,
                f"Set must have at most {self.max_size_count} unique elements",
                received=value,
                maximum=self.max_size_count,
                inclusive=True,
            )
        collector.raise_if_any()
        return unique

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "array",
            "items": self.element.json_schema(),
            "uniqueItems": True,
        }
        if self.min_size_count is not None:
            schema["minItems"] = self.min_size_count
        if self.max_size_count is not None:
            schema["maxItems"] = self.max_size_count
        return schema
