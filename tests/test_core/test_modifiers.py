"""Tests for optional/nullable/default/catch wrappers and output transforms."""

from __future__ import annotations

import pytest

from shape_guardian import (
    MISSING,
    IssueCode,
    VldError,
    array,
    number,
    object_,
    preprocess,
    string,
)
from shape_guardian.core.errors import IssueCollector


def test_optional_accepts_null_and_missing() -> None:
    schema = string().optional()

    assert schema.parse("null") is None
    assert schema.parse_value(MISSING) is None
    assert schema.parse('"x"') == "x"
    assert schema.is_optional()


def test_nullable_rejects_missing_key() -> None:
    schema = object_().field("nickname", string().nullable())

    assert schema.parse('{"nickname": null}') == {"nickname": None}

    with pytest.raises(VldError) as exc_info:
        schema.parse("{}")
    issue = exc_info.value.issues[0]
    assert issue.code is IssueCode.MISSING_FIELD
    assert issue.path == ("nickname",)


def test_nullish() -> None:
    schema = number().nullish()
    assert schema.parse_value(MISSING) is None
    assert schema.parse("null") is None
    assert schema.parse("3") == 3.0


def test_default_is_copied_per_parse() -> None:
    schema = array(string()).with_default([])

    first = schema.parse("null")
    first.append("mutated")

    assert schema.parse_value(MISSING) == []
    assert schema.parse('["a"]') == ["a"]


def test_default_projection() -> None:
    assert number().with_default(3).json_schema() == {"type": "number", "default": 3}


def test_catch_never_raises() -> None:
    schema = number().int().min(1).catch(1)

    assert schema.parse('"not a number"') == 1
    assert schema.parse("-5") == 1
    assert schema.parse_value(MISSING) == 1
    assert schema.parse("7") == 7


def test_refine() -> None:
    schema = string().refine(lambda text: text == text[::-1], "Must be a palindrome")

    assert schema.parse('"level"') == "level"

    result = schema.safe_parse('"hello"')
    issue = result.error.issues[0]
    assert issue.code is IssueCode.CUSTOM
    assert issue.message == "Must be a palindrome"
    assert issue.received == "hello"


def test_refine_runs_after_inner_succeeds() -> None:
    calls = []
    schema = number().min(0).refine(lambda n: calls.append(n) or True)

    assert not schema.is_valid("-1")
    assert calls == []


def test_super_refine_can_report_several_issues() -> None:
    def check_password(text: str, collector: IssueCollector) -> None:
        if not any(ch.isdigit() for ch in text):
            collector.custom("Needs a digit", code="no_digit")
        if not any(ch.isupper() for ch in text):
            collector.custom("Needs an uppercase letter", code="no_upper")

    schema = string().super_refine(check_password)

    result = schema.safe_parse('"password"')
    assert [issue.key for issue in result.error.issues] == ["no_digit", "no_upper"]
    assert schema.is_valid('"Passw0rd"')


def test_transform() -> None:
    schema = string().transform(len)
    assert schema.parse('"hello"') == 5


def test_pipe_feeds_output_to_second_schema() -> None:
    schema = string().transform(lambda text: int(text)).pipe(number().positive())

    assert schema.parse('"42"') == 42.0
    assert not schema.is_valid('"-1"')


def test_preprocess() -> None:
    schema = preprocess(lambda raw: raw.strip() if isinstance(raw, str) else raw, string().min(1))

    assert schema.parse('"  ok  "') == "ok"
    assert not schema.is_valid('"   "')


def test_preprocess_does_not_see_missing_keys() -> None:
    seen = []
    schema = object_().field("name", preprocess(lambda raw: seen.append(raw) or raw, string().optional()))

    assert schema.parse("{}") == {"name": None}
    assert seen == []


def test_describe() -> None:
    schema = string().describe("Display name")

    assert schema.description == "Display name"
    assert schema.json_schema() == {"type": "string", "description": "Display name"}
    assert schema.parse('"x"') == "x"


def test_message_overrides_every_issue() -> None:
    schema = string().min(5).email().message("Invalid contact")

    result = schema.safe_parse('"ab"')
    assert [issue.message for issue in result.error.issues] == ["Invalid contact", "Invalid contact"]


def test_or_and_and() -> None:
    either = string().or_(number())
    assert either.parse("1").is_right

    both = string().min(2).and_(string().max(4))
    assert both.parse('"abc"') == "abc"
    assert not both.is_valid('"abcde"')
