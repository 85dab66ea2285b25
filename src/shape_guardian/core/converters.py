from __future__ import annotations

import logging
import types
from datetime import date, datetime
from typing import Annotated, Any, Dict, Iterable, Literal, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic_core import PydanticUndefined

from .builders import (
    any_,
    array,
    boolean,
    enumeration,
    literal,
    number,
    object_,
    record,
    set_,
    string,
    tuple_,
    union_n,
)
from .builders import date as date_schema
from .builders import datetime as datetime_schema
from .collections import ArraySchema, SetSchema
from .modifiers import NullableSchema
from .objects import ObjectSchema
from .primitives import IntSchema, NumberSchema, StringSchema
from .schema import Schema

logger = logging.getLogger(__name__)

NoneType = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def _collect_constraints(metadata: Iterable[Any]) -> Dict[str, Any]:
    constraints: Dict[str, Any] = {}
    for meta in metadata:
        nested = getattr(meta, "metadata", None)
        if isinstance(nested, list):
            constraints.update(_collect_constraints(nested))
        for name in ("ge", "le", "gt", "lt", "multiple_of", "min_length", "max_length", "pattern"):
            value = getattr(meta, name, None)
            if value is not None:
                constraints[name] = value
    return constraints


def _apply_constraints(schema: Schema[Any], constraints: Dict[str, Any]) -> Schema[Any]:
    if not constraints:
        return schema
    if isinstance(schema, NullableSchema):
        return NullableSchema(_apply_constraints(schema.inner, constraints))
    if isinstance(schema, StringSchema):
        if "min_length" in constraints:
            schema = schema.min(constraints["min_length"])
        if "max_length" in constraints:
            schema = schema.max(constraints["max_length"])
        if "pattern" in constraints:
            schema = schema.regex(constraints["pattern"])
    elif isinstance(schema, (NumberSchema, IntSchema)):
        if "ge" in constraints:
            schema = schema.min(constraints["ge"])
        if "le" in constraints:
            schema = schema.max(constraints["le"])
        if "gt" in constraints:
            schema = schema.gt(constraints["gt"])
        if "lt" in constraints:
            schema = schema.lt(constraints["lt"])
        if "multiple_of" in constraints:
            schema = schema.multiple_of(constraints["multiple_of"])
    elif isinstance(schema, ArraySchema):
        if "min_length" in constraints:
            schema = schema.min_len(constraints["min_length"])
        if "max_length" in constraints:
            schema = schema.max_len(constraints["max_length"])
    elif isinstance(schema, SetSchema):
        if "min_length" in constraints:
            schema = schema.min_size(constraints["min_length"])
        if "max_length" in constraints:
            schema = schema.max_size(constraints["max_length"])
    return schema


class SchemaConverter:
    """Utilities for converting between schema formats."""

    @staticmethod
    def from_pydantic(model: Type[BaseModel]) -> ObjectSchema:
        """Convert a Pydantic model to an equivalent ObjectSchema.

        Aliases become renames, defaults become ``with_default`` (``None``
        defaults become ``optional``), descriptions are attached with
        ``describe`` and ``Field`` constraints map onto schema checks.
        """
        schema = object_()
        for field_name, field_info in model.model_fields.items():
            field_schema = SchemaConverter.from_annotation(field_info.annotation)
            field_schema = _apply_constraints(field_schema, _collect_constraints(field_info.metadata))

            if not field_info.is_required():
                default = field_info.get_default(call_default_factory=True)
                if default is None or default is PydanticUndefined:
                    if isinstance(field_schema, NullableSchema):
                        field_schema = field_schema.inner
                    field_schema = field_schema.optional()
                else:
                    field_schema = field_schema.with_default(default)

            if field_info.description:
                field_schema = field_schema.describe(field_info.description)

            schema = schema.field(field_name, field_schema, rename=field_info.alias)
        return schema

    @staticmethod
    def from_annotation(annotation: Any) -> Schema[Any]:
        """Map a type annotation onto a schema."""
        if annotation is None or annotation is NoneType:
            return literal(None)
        if annotation is Any:
            return any_()

        origin = get_origin(annotation)
        args = get_args(annotation)

        if origin is Annotated:
            inner = SchemaConverter.from_annotation(args[0])
            return _apply_constraints(inner, _collect_constraints(args[1:]))

        if origin in _UNION_ORIGINS:
            options = [arg for arg in args if arg is not NoneType]
            if len(options) == 1:
                inner = SchemaConverter.from_annotation(options[0])
            else:
                inner = union_n(*(SchemaConverter.from_annotation(arg) for arg in options))
            return inner.nullable() if NoneType in args else inner

        if origin is Literal:
            if all(isinstance(arg, str) for arg in args):
                return enumeration(args) if len(args) > 1 else literal(args[0])
            if len(args) == 1:
                return literal(args[0])
            return union_n(*(literal(arg) for arg in args))

        if origin is list:
            return array(SchemaConverter.from_annotation(args[0]) if args else any_())
        if origin in (set, frozenset):
            return set_(SchemaConverter.from_annotation(args[0]) if args else any_())
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return array(SchemaConverter.from_annotation(args[0])).transform(tuple)
            return tuple_(*(SchemaConverter.from_annotation(arg) for arg in args))
        if origin is dict:
            return record(SchemaConverter.from_annotation(args[1]) if args else any_())

        if isinstance(annotation, type):
            if issubclass(annotation, BaseModel):
                return SchemaConverter.from_pydantic(annotation)
            if annotation is bool:
                return boolean()
            if annotation is int:
                return number().int()
            if annotation is float:
                return number()
            if annotation is str:
                return string()
            if annotation is datetime:
                return datetime_schema()
            if annotation is date:
                return date_schema()
            if annotation is list:
                return array(any_())
            if annotation is dict:
                return record(any_())

        logger.warning("Unsupported annotation %r; falling back to any_()", annotation)
        return any_()
