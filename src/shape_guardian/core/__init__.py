"""Core schema primitives and combinators for shape_guardian."""

from .builders import (
    any_,
    array,
    boolean,
    custom,
    date,
    datetime,
    discriminated_union,
    enumeration,
    intersection,
    lazy,
    literal,
    map_,
    number,
    object_,
    preprocess,
    record,
    set_,
    string,
    tuple_,
    union,
    union3,
    union_n,
)
from .collections import ArraySchema, MapSchema, RecordSchema, SetSchema, TupleSchema
from .combinators import (
    CustomSchema,
    DiscriminatedUnionSchema,
    Either,
    IntersectionSchema,
    LazySchema,
    Left,
    OneOf,
    Right,
    UnionNSchema,
    UnionSchema,
)
from .converters import SchemaConverter
from .errors import (
    CustomValidationError,
    Issue,
    IssueCode,
    IssueCollector,
    SchemaDefinitionError,
    ValidationException,
    ValidationFailedError,
    VldError,
)
from .json_schema import (
    OPENAPI_VERSION,
    to_json_schema,
    to_openapi_document,
    to_openapi_document_multi,
)
from .modifiers import (
    CatchSchema,
    DefaultSchema,
    DescribeSchema,
    MessageSchema,
    NullableSchema,
    NullishSchema,
    OptionalSchema,
    PipeSchema,
    PreprocessSchema,
    RefineSchema,
    SuperRefineSchema,
    TransformSchema,
)
from .objects import FieldResult, LenientResult, ObjectSchema, UnknownKeys
from .primitives import (
    AnySchema,
    BooleanSchema,
    DateSchema,
    DateTimeSchema,
    EnumSchema,
    IntSchema,
    LiteralSchema,
    NumberSchema,
    StringSchema,
)
from .schema import SafeParseResult, Schema
from .validator import SchemaValidator, ValidationResult
from .values import MISSING

__all__ = [
    "MISSING",
    "OPENAPI_VERSION",
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "CatchSchema",
    "CustomSchema",
    "CustomValidationError",
    "DateSchema",
    "DateTimeSchema",
    "DefaultSchema",
    "DescribeSchema",
    "DiscriminatedUnionSchema",
    "Either",
    "EnumSchema",
    "FieldResult",
    "IntSchema",
    "IntersectionSchema",
    "Issue",
    "IssueCode",
    "IssueCollector",
    "LazySchema",
    "Left",
    "LenientResult",
    "LiteralSchema",
    "MapSchema",
    "MessageSchema",
    "NullableSchema",
    "NullishSchema",
    "NumberSchema",
    "ObjectSchema",
    "OneOf",
    "OptionalSchema",
    "PipeSchema",
    "PreprocessSchema",
    "RecordSchema",
    "RefineSchema",
    "Right",
    "SafeParseResult",
    "Schema",
    "SchemaConverter",
    "SchemaDefinitionError",
    "SchemaValidator",
    "SetSchema",
    "StringSchema",
    "SuperRefineSchema",
    "TransformSchema",
    "TupleSchema",
    "UnionNSchema",
    "UnionSchema",
    "UnknownKeys",
    "ValidationException",
    "ValidationFailedError",
    "ValidationResult",
    "VldError",
    "any_",
    "array",
    "boolean",
    "custom",
    "date",
    "datetime",
    "discriminated_union",
    "enumeration",
    "intersection",
    "lazy",
    "literal",
    "map_",
    "number",
    "object_",
    "preprocess",
    "record",
    "set_",
    "string",
    "to_json_schema",
    "to_openapi_document",
    "to_openapi_document_multi",
    "tuple_",
    "union",
    "union3",
    "union_n",
]
