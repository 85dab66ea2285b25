"""Compatibility diff between two JSON Schema projections."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Set

from ..core.schema import Schema

_MISSING = object()

_BOUNDS = (
    ("minimum", True),
    ("maximum", False),
    ("exclusiveMinimum", True),
    ("exclusiveMaximum", False),
    ("minLength", True),
    ("maxLength", False),
    ("minItems", True),
    ("maxItems", False),
)


class ChangeKind(str, Enum):
    NON_BREAKING = "non-breaking"
    BREAKING = "BREAKING"


@dataclass(frozen=True)
class SchemaChange:
    path: str
    kind: ChangeKind
    description: str

    @property
    def is_breaking(self) -> bool:
        return self.kind is ChangeKind.BREAKING

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.path}: {self.description}"


@dataclass
class SchemaDiff:
    """Ordered list of changes found by ``diff_schemas``."""

    changes: List[SchemaChange] = field(default_factory=list)

    @property
    def has_breaking(self) -> bool:
        return any(change.is_breaking for change in self.changes)

    def breaking_changes(self) -> List[SchemaChange]:
        return [change for change in self.changes if change.is_breaking]

    def non_breaking_changes(self) -> List[SchemaChange]:
        return [change for change in self.changes if not change.is_breaking]

    def __bool__(self) -> bool:
        return bool(self.changes)

    def __str__(self) -> str:
        if not self.changes:
            return "No changes detected."
        return "\n".join(str(change) for change in self.changes)


def _join(base: str, segment: str) -> str:
    return f"{base}.{segment}" if base else segment


def _show(value: Any) -> str:
    return "(none)" if value is _MISSING else json.dumps(value, ensure_ascii=False)


def _as_projection(schema: Schema[Any] | Mapping[str, Any]) -> Mapping[str, Any]:
    return schema.json_schema() if isinstance(schema, Schema) else schema


def diff_schemas(old: Schema[Any] | Mapping[str, Any], new: Schema[Any] | Mapping[str, Any]) -> SchemaDiff:
    """Classify every difference between ``old`` and ``new`` as breaking or not.

    A change is breaking when some value accepted by ``old`` may be rejected
    by ``new``.
    """
    diff = SchemaDiff()
    _diff_node(_as_projection(old), _as_projection(new), "", diff.changes)
    return diff


def _diff_node(old: Mapping[str, Any], new: Mapping[str, Any], path: str, changes: List[SchemaChange]) -> None:
    old_type, new_type = old.get("type", _MISSING), new.get("type", _MISSING)
    if old_type != new_type:
        changes.append(
            SchemaChange(
                _join(path, "type"),
                ChangeKind.BREAKING,
                f"Type changed from {_show(old_type)} to {_show(new_type)}",
            )
        )
        return

    _diff_required(old, new, path, changes)
    _diff_properties(old, new, path, changes)
    for key, lower in _BOUNDS:
        _diff_bound(old, new, path, key, lower, changes)
    for key in ("format", "pattern"):
        _diff_keyword(old, new, path, key, changes)
    _diff_enum(old, new, path, changes)

    old_items, new_items = old.get("items"), new.get("items")
    if isinstance(old_items, Mapping) and isinstance(new_items, Mapping):
        _diff_node(old_items, new_items, _join(path, "items"), changes)

    _diff_additional(old, new, path, changes)


def _string_set(value: Any) -> Set[str]:
    if not isinstance(value, list):
        return set()
    return {item for item in value if isinstance(item, str)}


def _properties(node: Mapping[str, Any]) -> Dict[str, Any] | None:
    props = node.get("properties")
    return props if isinstance(props, dict) else None


def _diff_required(old: Mapping[str, Any], new: Mapping[str, Any], path: str, changes: List[SchemaChange]) -> None:
    old_required = _string_set(old.get("required"))
    new_required = _string_set(new.get("required"))
    new_props = _properties(new) or {}

    for name in sorted(new_required - old_required):
        changes.append(
            SchemaChange(_join(path, f"required[{name}]"), ChangeKind.BREAKING, f'Field "{name}" is now required')
        )
    for name in sorted(old_required - new_required):
        if name not in new_props:
            continue
        changes.append(
            SchemaChange(
                _join(path, f"required[{name}]"),
                ChangeKind.NON_BREAKING,
                f'Field "{name}" is no longer required',
            )
        )


def _diff_properties(old: Mapping[str, Any], new: Mapping[str, Any], path: str, changes: List[SchemaChange]) -> None:
    old_props, new_props = _properties(old), _properties(new)
    if old_props is None and new_props is None:
        return
    if new_props is None:
        changes.append(SchemaChange(_join(path, "properties"), ChangeKind.BREAKING, "Properties removed entirely"))
        return
    if old_props is None:
        changes.append(SchemaChange(_join(path, "properties"), ChangeKind.NON_BREAKING, "Properties added"))
        return

    new_required = _string_set(new.get("required"))
    for key in old_props:
        if key not in new_props:
            changes.append(
                SchemaChange(_join(path, f"properties.{key}"), ChangeKind.BREAKING, f'Property "{key}" removed')
            )
    for key in new_props:
        if key not in old_props:
            kind = ChangeKind.BREAKING if key in new_required else ChangeKind.NON_BREAKING
            changes.append(SchemaChange(_join(path, f"properties.{key}"), kind, f'Property "{key}" added'))
    for key, old_value in old_props.items():
        if key in new_props and isinstance(old_value, Mapping) and isinstance(new_props[key], Mapping):
            _diff_node(old_value, new_props[key], _join(path, f"properties.{key}"), changes)


def _diff_bound(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    path: str,
    key: str,
    lower: bool,
    changes: List[SchemaChange],
) -> None:
    old_value, new_value = old.get(key, _MISSING), new.get(key, _MISSING)
    if old_value is _MISSING and new_value is _MISSING:
        return
    if old_value is _MISSING:
        changes.append(SchemaChange(_join(path, key), ChangeKind.BREAKING, f"{key} constraint added: {new_value}"))
    elif new_value is _MISSING:
        changes.append(
            SchemaChange(_join(path, key), ChangeKind.NON_BREAKING, f"{key} constraint removed (was {old_value})")
        )
    elif old_value != new_value:
        tightened = new_value > old_value if lower else new_value < old_value
        kind = ChangeKind.BREAKING if tightened else ChangeKind.NON_BREAKING
        changes.append(SchemaChange(_join(path, key), kind, f"{key} changed from {old_value} to {new_value}"))


def _diff_keyword(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    path: str,
    key: str,
    changes: List[SchemaChange],
) -> None:
    old_value, new_value = old.get(key, _MISSING), new.get(key, _MISSING)
    if old_value == new_value:
        return
    kind = ChangeKind.NON_BREAKING if new_value is _MISSING else ChangeKind.BREAKING
    changes.append(
        SchemaChange(
            _join(path, key),
            kind,
            f"{key.capitalize()} changed from {_show(old_value)} to {_show(new_value)}",
        )
    )


def _diff_enum(old: Mapping[str, Any], new: Mapping[str, Any], path: str, changes: List[SchemaChange]) -> None:
    old_enum, new_enum = old.get("enum"), new.get("enum")
    if old_enum is None and new_enum is None:
        return
    if old_enum is None:
        changes.append(SchemaChange(_join(path, "enum"), ChangeKind.BREAKING, "Enum constraint added"))
        return
    if new_enum is None:
        changes.append(SchemaChange(_join(path, "enum"), ChangeKind.NON_BREAKING, "Enum constraint removed"))
        return

    old_values = {json.dumps(value, sort_keys=True) for value in old_enum}
    new_values = {json.dumps(value, sort_keys=True) for value in new_enum}
    for value in sorted(old_values - new_values):
        changes.append(SchemaChange(_join(path, "enum"), ChangeKind.BREAKING, f"Enum value {value} removed"))
    for value in sorted(new_values - old_values):
        changes.append(SchemaChange(_join(path, "enum"), ChangeKind.NON_BREAKING, f"Enum value {value} added"))


def _diff_additional(old: Mapping[str, Any], new: Mapping[str, Any], path: str, changes: List[SchemaChange]) -> None:
    old_value = old.get("additionalProperties", _MISSING)
    new_value = new.get("additionalProperties", _MISSING)
    if old_value == new_value:
        return
    breaking = new_value is False and old_value in (True, _MISSING)
    changes.append(
        SchemaChange(
            _join(path, "additionalProperties"),
            ChangeKind.BREAKING if breaking else ChangeKind.NON_BREAKING,
            f"additionalProperties changed from {_show(old_value)} to {_show(new_value)}",
        )
    )
