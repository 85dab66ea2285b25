"""Utility helpers for error formatting, translation, diffing and reporting."""

from .diff import ChangeKind, SchemaChange, SchemaDiff, diff_schemas
from .formatting import ErrorTree, FlattenedError, flatten_error, prettify_error, treeify_error
from .i18n import english, german, resolver_for, russian, spanish, translate_error, translate_issue
from .reporting import ValidationReporter

__all__ = [
    "ChangeKind",
    "ErrorTree",
    "FlattenedError",
    "SchemaChange",
    "SchemaDiff",
    "ValidationReporter",
    "diff_schemas",
    "english",
    "flatten_error",
    "german",
    "prettify_error",
    "resolver_for",
    "russian",
    "spanish",
    "translate_error",
    "translate_issue",
    "treeify_error",
]
