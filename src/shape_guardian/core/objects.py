"""Object schema with ordered fields, unknown-key policies and lenient parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from .errors import IssueCode, IssueCollector, VldError, invalid_type
from .schema import Schema, load_input
from .values import MISSING, format_value_short, json_equal, to_json_value


class UnknownKeys(str, Enum):
    """How keys that no field declares are treated."""

    STRIP = "strip"
    PASSTHROUGH = "passthrough"
    STRICT = "strict"


@dataclass(frozen=True)
class ObjectField:
    """A declared field: logical name, schema and optional JSON key."""

    name: str
    schema: Schema[Any]
    json_key: str | None = None
    partial: bool = False

    @property
    def key(self) -> str:
        return self.json_key or self.name


@dataclass(frozen=True)
class ConditionalRule:
    """When ``condition_field`` equals ``condition_value``, ``target_field`` must pass ``schema``."""

    condition_field: str
    condition_value: Any
    target_field: str
    schema: Schema[Any]


@dataclass(frozen=True)
class FieldResult:
    """Outcome of validating one field during lenient parsing."""

    name: str
    input: Any
    value: Any = None
    error: VldError | None = None

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def __str__(self) -> str:
        if self.error is None:
            return f"✔ {self.name}: {format_value_short(to_json_value(self.value))}"
        received = format_value_short(self.input) if self.input is not MISSING else "undefined"
        return "\n".join(
            f"✖ {self.name}: {issue.message} (received: {received})" for issue in self.error.issues
        )


@dataclass(frozen=True)
class LenientResult:
    """A best-effort object plus per-field diagnostics; failed fields are ``None``."""

    value: Dict[str, Any]
    fields: Tuple[FieldResult, ...]

    def field(self, name: str) -> FieldResult | None:
        return next((result for result in self.fields if result.name == name), None)

    @property
    def valid_fields(self) -> List[FieldResult]:
        return [result for result in self.fields if result.is_ok]

    @property
    def error_fields(self) -> List[FieldResult]:
        return [result for result in self.fields if result.is_err]

    @property
    def is_valid(self) -> bool:
        return all(result.is_ok for result in self.fields)

    @property
    def has_errors(self) -> bool:
        return not self.is_valid

    @property
    def valid_count(self) -> int:
        return len(self.valid_fields)

    @property
    def error_count(self) -> int:
        return len(self.error_fields)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(to_json_value(self.value), indent=indent)

    def __str__(self) -> str:
        lines = [f"LenientResult ({self.valid_count} valid, {self.error_count} errors):"]
        lines.extend(f"  {result}" for result in self.fields)
        return "\n".join(lines)


def _names(names: Tuple[Any, ...]) -> List[str]:
    if len(names) == 1 and not isinstance(names[0], str):
        return list(names[0])
    return list(names)


def _deep_partial_schema(schema: Schema[Any]) -> Schema[Any]:
    from .collections import ArraySchema
    from .modifiers import DefaultSchema, DescribeSchema, NullableSchema, NullishSchema, OptionalSchema

    if isinstance(schema, (OptionalSchema, NullableSchema, NullishSchema, DefaultSchema, DescribeSchema)):
        return replace(schema, inner=_deep_partial_schema(schema.inner))
    if isinstance(schema, ObjectSchema):
        return schema.deep_partial()
    if isinstance(schema, ArraySchema) and isinstance(schema.element, ObjectSchema):
        return replace(schema, element=schema.element.deep_partial())
    return schema


@dataclass(frozen=True)
class ObjectSchema(Schema[Dict[str, Any]]):
    """Validates a dictionary field by field, accumulating every issue."""

    fields: Tuple[ObjectField, ...] = ()
    unknown_keys: UnknownKeys = UnknownKeys.STRIP
    catchall_schema: Schema[Any] | None = None
    rules: Tuple[ConditionalRule, ...] = ()
    custom_type_error: str | None = None

    # builders

    def field(self, name: str, schema: Schema[Any], *, rename: str | None = None) -> "ObjectSchema":
        """Add (or replace) a field; ``rename`` sets the key read from the input."""
        new_field = ObjectField(name, schema, rename)
        if any(existing.name == name for existing in self.fields):
            fields = tuple(new_field if existing.name == name else existing for existing in self.fields)
        else:
            fields = (*self.fields, new_field)
        return replace(self, fields=fields)

    def field_optional(self, name: str, schema: Schema[Any], *, rename: str | None = None) -> "ObjectSchema":
        return self.field(name, schema.optional(), rename=rename)

    def rename(self, name: str, json_key: str) -> "ObjectSchema":
        if not any(existing.name == name for existing in self.fields):
            raise KeyError(name)
        return replace(
            self,
            fields=tuple(
                replace(existing, json_key=json_key) if existing.name == name else existing
                for existing in self.fields
            ),
        )

    def type_error(self, message: str) -> "ObjectSchema":
        return replace(self, custom_type_error=message)

    def strict(self) -> "ObjectSchema":
        return replace(self, unknown_keys=UnknownKeys.STRICT)

    def strip(self) -> "ObjectSchema":
        return replace(self, unknown_keys=UnknownKeys.STRIP)

    def passthrough(self) -> "ObjectSchema":
        return replace(self, unknown_keys=UnknownKeys.PASSTHROUGH)

    def catchall(self, schema: Schema[Any]) -> "ObjectSchema":
        return replace(self, catchall_schema=schema)

    def partial(self) -> "ObjectSchema":
        """Null or absent values for any field become ``None``."""
        return replace(self, fields=tuple(replace(existing, partial=True) for existing in self.fields))

    def deep_partial(self) -> "ObjectSchema":
        return replace(
            self,
            fields=tuple(
                replace(existing, schema=_deep_partial_schema(existing.schema), partial=True)
                for existing in self.fields
            ),
        )

    def required(self) -> "ObjectSchema":
        """Undo ``partial`` and strip ``optional``/``nullish`` wrappers."""
        from .modifiers import NullishSchema, OptionalSchema

        fields: List[ObjectField] = []
        for existing in self.fields:
            schema = existing.schema
            while isinstance(schema, (OptionalSchema, NullishSchema)):
                schema = schema.inner
            fields.append(replace(existing, schema=schema, partial=False))
        return replace(self, fields=tuple(fields))

    def pick(self, *names: str | Iterable[str]) -> "ObjectSchema":
        wanted = set(_names(names))
        return replace(self, fields=tuple(existing for existing in self.fields if existing.name in wanted))

    def omit(self, *names: str | Iterable[str]) -> "ObjectSchema":
        dropped = set(_names(names))
        return replace(self, fields=tuple(existing for existing in self.fields if existing.name not in dropped))

    def extend(self, other: "ObjectSchema") -> "ObjectSchema":
        """Append the fields of ``other``; on a name clash the field from ``other`` wins."""
        incoming = {existing.name for existing in other.fields}
        kept = tuple(existing for existing in self.fields if existing.name not in incoming)
        return replace(self, fields=(*kept, *other.fields), rules=(*self.rules, *other.rules))

    merge = extend

    def when(
        self,
        condition_field: str,
        condition_value: Any,
        target_field: str,
        schema: Schema[Any],
    ) -> "ObjectSchema":
        rule = ConditionalRule(condition_field, condition_value, target_field, schema)
        return replace(self, rules=(*self.rules, rule))

    def keyof(self) -> List[str]:
        return [existing.name for existing in self.fields]

    # parsing

    def _parse_field(self, field_def: ObjectField, raw: Any) -> Any:
        if field_def.partial and (raw is None or raw is MISSING):
            return None
        return field_def.schema.parse_value(raw)

    def _parse(self, value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise invalid_type("object", value, self.custom_type_error)

        collector = IssueCollector()
        result: Dict[str, Any] = {}
        for field_def in self.fields:
            try:
                result[field_def.name] = self._parse_field(field_def, value.get(field_def.key, MISSING))
            except VldError as exc:
                collector.extend(exc, prefix=field_def.key)

        known = {field_def.key for field_def in self.fields}
        unknown = [key for key in value if key not in known]
        # declared logical names are never overwritten by extra keys
        extra = [key for key in unknown if not any(field_def.name == key for field_def in self.fields)]
        if self.catchall_schema is not None:
            for key in extra:
                try:
                    result[key] = self.catchall_schema.parse_value(value[key])
                except VldError as exc:
                    collector.extend(exc, prefix=key)
        elif self.unknown_keys is UnknownKeys.STRICT:
            for key in unknown:
                collector.add(IssueCode.UNRECOGNIZED_KEY, f'Unrecognized key: "{key}"', path=(key,))
        elif self.unknown_keys is UnknownKeys.PASSTHROUGH:
            for key in extra:
                result[key] = value[key]

        for rule in self.rules:
            condition = value.get(rule.condition_field, MISSING)
            if condition is MISSING or not json_equal(condition, rule.condition_value):
                continue
            try:
                rule.schema.parse_value(value.get(rule.target_field, MISSING))
            except VldError as exc:
                collector.extend(exc, prefix=rule.target_field)

        collector.raise_if_any()
        return result

    def parse_lenient(self, data: Any) -> LenientResult:
        """Validate each field independently and never fail on field errors.

        Raises ``VldError`` only when the input is not an object at all.
        """
        value = load_input(data)
        if not isinstance(value, dict):
            raise invalid_type("object", value, self.custom_type_error)

        output: Dict[str, Any] = {}
        results: List[FieldResult] = []
        for field_def in self.fields:
            raw = value.get(field_def.key, MISSING)
            try:
                parsed = self._parse_field(field_def, raw)
            except VldError as exc:
                output[field_def.name] = None
                results.append(FieldResult(field_def.name, raw, error=exc))
            else:
                output[field_def.name] = parsed
                results.append(FieldResult(field_def.name, raw, value=parsed))
        return LenientResult(output, tuple(results))

    def json_schema(self) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        required: List[str] = []
        for field_def in self.fields:
            properties[field_def.key] = field_def.schema.json_schema()
            if not field_def.partial and not field_def.schema.is_optional():
                required.append(field_def.key)

        schema: Dict[str, Any] = {"type": "object", "properties": properties, "required": required}
        if self.catchall_schema is not None:
            schema["additionalProperties"] = self.catchall_schema.json_schema()
        else:
            schema["additionalProperties"] = self.unknown_keys is not UnknownKeys.STRICT
        return schema
