"""Fluent constructors for every schema kind."""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from .collections import ArraySchema, MapSchema, RecordSchema, SetSchema, TupleSchema
from .combinators import (
    CustomSchema,
    DiscriminatedUnionSchema,
    IntersectionSchema,
    LazySchema,
    UnionNSchema,
    UnionSchema,
)
from .errors import SchemaDefinitionError
from .modifiers import PreprocessSchema
from .objects import ObjectSchema
from .primitives import (
    AnySchema,
    BooleanSchema,
    DateSchema,
    DateTimeSchema,
    EnumSchema,
    LiteralSchema,
    NumberSchema,
    StringSchema,
)
from .schema import Schema

T = TypeVar("T")
U = TypeVar("U")


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def literal(value: Any) -> LiteralSchema:
    return LiteralSchema(value)


def enumeration(options: Iterable[str]) -> EnumSchema:
    values = tuple(options)
    if not values:
        raise SchemaDefinitionError("enumeration() needs at least one option")
    return EnumSchema(values)


def any_() -> AnySchema:
    return AnySchema()


def date() -> DateSchema:
    return DateSchema()


def datetime() -> DateTimeSchema:
    return DateTimeSchema()


def array(element: Schema[T]) -> ArraySchema[T]:
    return ArraySchema(element)


def tuple_(*items: Schema[Any]) -> TupleSchema:
    return TupleSchema(tuple(items))


def record(value_schema: Schema[T]) -> RecordSchema[T]:
    return RecordSchema(value_schema)


def map_(key_schema: Schema[T], value_schema: Schema[U]) -> MapSchema[T, U]:
    return MapSchema(key_schema, value_schema)


def set_(element: Schema[T]) -> SetSchema[T]:
    return SetSchema(element)


def object_() -> ObjectSchema:
    return ObjectSchema()


def union(first: Schema[T], second: Schema[U]) -> UnionSchema[T, U]:
    return UnionSchema(first, second)


def union3(first: Schema[Any], second: Schema[Any], third: Schema[Any]) -> UnionNSchema:
    return UnionNSchema((first, second, third))


def union_n(*options: Schema[Any]) -> UnionNSchema:
    if len(options) < 2:
        raise SchemaDefinitionError("union_n() needs at least two schemas")
    return UnionNSchema(tuple(options))


def discriminated_union(discriminator: str) -> DiscriminatedUnionSchema:
    return DiscriminatedUnionSchema(discriminator)


def intersection(first: Schema[T], second: Schema[Any]) -> IntersectionSchema[T]:
    return IntersectionSchema(first, second)


def custom(func: Callable[[Any], T]) -> CustomSchema[T]:
    return CustomSchema(func)


def lazy(factory: Callable[[], Schema[T]]) -> LazySchema[T]:
    return LazySchema(factory)


def preprocess(mapper: Callable[[Any], Any], inner: Schema[T]) -> PreprocessSchema[T]:
    return PreprocessSchema(mapper, inner)
