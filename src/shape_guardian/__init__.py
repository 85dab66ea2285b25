"""Public interface for the shape_guardian package."""

from .core import (
    MISSING,
    OPENAPI_VERSION,
    AnySchema,
    ArraySchema,
    BooleanSchema,
    CustomValidationError,
    DateSchema,
    DateTimeSchema,
    DiscriminatedUnionSchema,
    Either,
    EnumSchema,
    FieldResult,
    IntSchema,
    Issue,
    IssueCode,
    IssueCollector,
    Left,
    LenientResult,
    LiteralSchema,
    MapSchema,
    NumberSchema,
    ObjectSchema,
    OneOf,
    RecordSchema,
    Right,
    SafeParseResult,
    Schema,
    SchemaConverter,
    SchemaDefinitionError,
    SchemaValidator,
    SetSchema,
    StringSchema,
    TupleSchema,
    UnknownKeys,
    ValidationException,
    ValidationFailedError,
    ValidationResult,
    VldError,
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
    to_json_schema,
    to_openapi_document,
    to_openapi_document_multi,
    tuple_,
    union,
    union3,
    union_n,
)
from .utils.diff import ChangeKind, SchemaChange, SchemaDiff, diff_schemas
from .utils.formatting import ErrorTree, FlattenedError, flatten_error, prettify_error, treeify_error
from .utils.i18n import english, german, resolver_for, russian, spanish, translate_error
from .utils.reporting import ValidationReporter

__all__ = [
    "MISSING",
    "OPENAPI_VERSION",
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "ChangeKind",
    "CustomValidationError",
    "DateSchema",
    "DateTimeSchema",
    "DiscriminatedUnionSchema",
    "Either",
    "EnumSchema",
    "ErrorTree",
    "FieldResult",
    "FlattenedError",
    "IntSchema",
    "Issue",
    "IssueCode",
    "IssueCollector",
    "Left",
    "LenientResult",
    "LiteralSchema",
    "MapSchema",
    "NumberSchema",
    "ObjectSchema",
    "OneOf",
    "RecordSchema",
    "Right",
    "SafeParseResult",
    "Schema",
    "SchemaChange",
    "SchemaConverter",
    "SchemaDefinitionError",
    "SchemaDiff",
    "SchemaValidator",
    "SetSchema",
    "StringSchema",
    "TupleSchema",
    "UnknownKeys",
    "ValidationException",
    "ValidationFailedError",
    "ValidationReporter",
    "ValidationResult",
    "VldError",
    "any_",
    "array",
    "boolean",
    "custom",
    "date",
    "datetime",
    "diff_schemas",
    "discriminated_union",
    "english",
    "enumeration",
    "flatten_error",
    "german",
    "intersection",
    "lazy",
    "literal",
    "map_",
    "number",
    "object_",
    "preprocess",
    "prettify_error",
    "record",
    "resolver_for",
    "russian",
    "set_",
    "spanish",
    "string",
    "to_json_schema",
    "to_openapi_document",
    "to_openapi_document_multi",
    "translate_error",
    "treeify_error",
    "tuple_",
    "union",
    "union3",
    "union_n",
]

__version__ = "0.1.0"
