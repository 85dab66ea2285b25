"""Tests for prettified, flattened and tree-shaped error renderings."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from shape_guardian import (
    ObjectSchema,
    VldError,
    flatten_error,
    number,
    prettify_error,
    string,
    treeify_error,
)
from shape_guardian.core.errors import IssueCode


@pytest.fixture()
def user_error(user_schema: ObjectSchema, invalid_user: Dict[str, Any]) -> VldError:
    result = user_schema.safe_parse(invalid_user)
    assert result.error is not None
    return result.error


def test_prettify_lists_every_issue(user_error: VldError) -> None:
    text = prettify_error(user_error)

    assert text.count("✖") == len(user_error)
    assert "  → at .address.zip, received \"123\"" in text
    assert "✖ String must be at least 2 characters" in text


def test_prettify_groups_by_path() -> None:
    error = VldError(
        [
            *VldError.single(IssueCode.TOO_SMALL, "first", path=("a",)),
            *VldError.single(IssueCode.CUSTOM, "second", path=("b",)),
            *VldError.single(IssueCode.TOO_BIG, "third", path=("a",)),
        ]
    )

    lines = [line for line in prettify_error(error).splitlines() if line.startswith("✖")]

    assert lines == ["✖ first", "✖ third", "✖ second"]


def test_prettify_root_issue_without_location() -> None:
    error = string().safe_parse("1").error
    assert prettify_error(error) == "✖ Expected string, received number\n  → received 1"


def test_flatten_splits_form_and_field_errors(user_error: VldError) -> None:
    flat = flatten_error(user_error)

    assert flat.form_errors == []
    assert set(flat.field_errors) == {"name", "email", "age", "active", "tags", "address"}
    assert len(flat.field_errors["address"]) == 2


def test_flatten_root_issue() -> None:
    flat = flatten_error(number().safe_parse('"x"').error)

    assert flat.form_errors == ["Expected number, received string"]
    assert flat.to_dict() == {"form_errors": ["Expected number, received string"], "field_errors": {}}


def test_treeify_mirrors_input_shape(user_error: VldError) -> None:
    tree = treeify_error(user_error)

    assert tree.errors == []
    assert tree.properties["address"].properties["zip"].errors == ["String must be exactly 5 characters"]

    tags = tree.properties["tags"]
    assert tags.items[0] is None
    assert tags.items[1].errors == ["Expected string, received number"]


def test_treeify_to_dict() -> None:
    error = VldError.single(IssueCode.CUSTOM, "bad", path=("list", 1))

    assert treeify_error(error).to_dict() == {
        "errors": [],
        "properties": {"list": {"errors": [], "items": [None, {"errors": ["bad"]}]}},
    }
