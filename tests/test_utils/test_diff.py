"""Tests for breaking/non-breaking schema change detection."""

from __future__ import annotations

from shape_guardian import ChangeKind, diff_schemas, enumeration, number, object_, string


def base_schema():
    return object_().field("name", string().min(1)).field("age", number().min(0)).field("role", enumeration(["a", "b"]))


def test_identical_schemas() -> None:
    diff = diff_schemas(base_schema(), base_schema())

    assert not diff
    assert str(diff) == "No changes detected."


def test_type_change_is_breaking_and_stops_recursion() -> None:
    diff = diff_schemas({"type": "string", "minLength": 1}, {"type": "number", "minimum": 3})

    assert [change.path for change in diff.changes] == ["type"]
    assert diff.changes[0].description == 'Type changed from "string" to "number"'
    assert diff.has_breaking


def test_new_required_field_is_breaking() -> None:
    new = base_schema().field("email", string())

    diff = diff_schemas(base_schema(), new)

    paths = {change.path: change.kind for change in diff.changes}
    assert paths["required[email]"] is ChangeKind.BREAKING
    assert paths["properties.email"] is ChangeKind.BREAKING


def test_new_optional_field_is_not_breaking() -> None:
    diff = diff_schemas(base_schema(), base_schema().field("nick", string().optional()))

    assert not diff.has_breaking
    assert [str(change) for change in diff.changes] == ['[non-breaking] properties.nick: Property "nick" added']


def test_removed_field_is_breaking() -> None:
    diff = diff_schemas(base_schema(), base_schema().omit("age"))

    assert any(change.path == "properties.age" and change.is_breaking for change in diff.changes)


def test_bounds() -> None:
    tighter = diff_schemas(base_schema(), base_schema().field("age", number().min(18)))
    looser = diff_schemas(base_schema().field("age", number().min(18)), base_schema())

    assert tighter.breaking_changes()[0].path == "properties.age.minimum"
    assert not looser.has_breaking
    assert looser.non_breaking_changes()[0].description == "minimum changed from 18 to 0"


def test_enum_values() -> None:
    diff = diff_schemas(base_schema(), base_schema().field("role", enumeration(["a", "c"])))

    descriptions = {change.description: change.kind for change in diff.changes}
    assert descriptions['Enum value "b" removed'] is ChangeKind.BREAKING
    assert descriptions['Enum value "c" added'] is ChangeKind.NON_BREAKING


def test_strict_is_breaking() -> None:
    diff = diff_schemas(base_schema(), base_schema().strict())

    change = diff.changes[0]
    assert change.path == "additionalProperties"
    assert change.is_breaking


def test_format_added() -> None:
    diff = diff_schemas(string(), string().email())
    assert str(diff) == '[BREAKING] format: Format changed from (none) to "email"'
