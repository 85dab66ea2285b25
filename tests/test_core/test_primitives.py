"""Tests for string, number, boolean, literal, enum and date schemas."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone

import pytest

from shape_guardian import (
    IssueCode,
    SchemaDefinitionError,
    VldError,
    any_,
    boolean,
    date as date_schema,
    datetime as datetime_schema,
    enumeration,
    literal,
    number,
    string,
)


def issue_codes(error: VldError) -> list[str]:
    return [issue.key for issue in error.issues]


class TestStringSchema:
    def test_accepts_plain_string(self) -> None:
        assert string().parse('"hello"') == "hello"
        assert string().parse_value("hello") == "hello"

    def test_rejects_non_string(self) -> None:
        with pytest.raises(VldError) as exc_info:
            string().parse_value(42)

        issue = exc_info.value.issues[0]
        assert issue.code is IssueCode.INVALID_TYPE
        assert issue.message == "Expected string, received number"
        assert issue.received == 42

    def test_accumulates_every_failing_check(self) -> None:
        schema = string().min(5).email().starts_with("x")

        with pytest.raises(VldError) as exc_info:
            schema.parse_value("ab")

        assert issue_codes(exc_info.value) == ["too_small", "invalid_email", "invalid_starts_with"]

    def test_length_messages(self) -> None:
        schema = string().min(3).max(5)

        short = schema.safe_parse('"ab"')
        long = schema.safe_parse('"abcdef"')

        assert short.error.issues[0].message == "String must be at least 3 characters"
        assert long.error.issues[0].message == "String must be at most 5 characters"

    def test_exact_length_and_alias(self) -> None:
        assert string().length(3).is_valid('"abc"')
        assert not string().len(3).is_valid('"abcd"')

    def test_non_empty(self) -> None:
        result = string().non_empty().safe_parse('""')
        assert result.error.issues[0].code is IssueCode.TOO_SMALL
        assert result.error.issues[0].message == "String must not be empty"

    @pytest.mark.parametrize(
        ("method", "good", "bad"),
        [
            ("email", "user@example.com", "user@"),
            ("url", "https://example.com/path", "example.com"),
            ("uuid", "550e8400-e29b-41d4-a716-446655440000", "550e8400"),
            ("ipv4", "192.168.0.1", "256.1.1.1"),
            ("ipv6", "::1", "12345::"),
            ("iso_date", "2024-02-29", "2023-02-29"),
            ("iso_time", "12:30:00", "25:00"),
            ("iso_datetime", "2024-01-15T10:30:00Z", "2024-01-15"),
            ("hostname", "api.example.com", "-bad-.com"),
            ("ulid", "01ARZ3NDEKTSV4RRFFQ69G5FAV", "short"),
        ],
    )
    def test_formats(self, method: str, good: str, bad: str) -> None:
        schema = getattr(string(), method)()
        assert schema.is_valid(f'"{good}"')
        assert not schema.is_valid(f'"{bad}"')

    def test_regex_uses_search(self) -> None:
        schema = string().regex(r"\d{3}")
        assert schema.is_valid('"abc123"')

        result = schema.safe_parse('"abc"')
        assert result.error.issues[0].code is IssueCode.INVALID_REGEX
        assert result.error.issues[0].message == "String does not match pattern"

    def test_transforms_run_before_checks(self) -> None:
        schema = string().trim().to_lowercase().min(3)
        assert schema.parse('"  HeLLo  "') == "hello"
        assert not schema.is_valid('"  AB  "')

    def test_coerce(self) -> None:
        schema = string().coerce()
        assert schema.parse_value(42) == "42"
        assert schema.parse_value(2.0) == "2"
        assert schema.parse_value(True) == "true"

    def test_custom_messages(self) -> None:
        schema = string().min(3, message="Too short!").with_messages({"invalid_email": "Bad email"}).email()

        result = schema.safe_parse('"a"')
        messages = [issue.message for issue in result.error.issues]

        assert messages == ["Too short!", "Invalid email address"]
        assert string().email().with_messages({"invalid_email": "Bad email"}).safe_parse('"a"').error.issues[
            0
        ].message == "Bad email"

    def test_with_messages_accepts_callable(self) -> None:
        schema = string().min(3).with_messages(lambda key: f"custom {key}")
        assert schema.safe_parse('"a"').error.issues[0].message == "custom too_small"

    def test_type_error_override(self) -> None:
        result = string().type_error("Need text").safe_parse("5")
        assert result.error.issues[0].message == "Need text"

    def test_json_schema(self) -> None:
        projection = string().min(1).max(10).email().regex("^a").json_schema()
        assert projection == {
            "type": "string",
            "minLength": 1,
            "maxLength": 10,
            "format": "email",
            "pattern": "^a",
        }


class TestNumberSchema:
    def test_rejects_boolean(self) -> None:
        result = number().safe_parse("true")
        assert result.error.issues[0].message == "Expected number, received boolean"

    def test_output_is_float(self) -> None:
        value = number().parse("3")
        assert value == 3.0
        assert isinstance(value, float)

    def test_bounds(self) -> None:
        schema = number().min(0).max(10)
        assert schema.is_valid("0")
        assert schema.is_valid("10")

        result = schema.safe_parse("11")
        assert result.error.issues[0].code is IssueCode.TOO_BIG
        assert result.error.issues[0].message == "Number must be at most 10"

    def test_exclusive_bounds(self) -> None:
        schema = number().gt(0).lt(1)
        assert schema.is_valid("0.5")
        assert not schema.is_valid("0")
        assert not schema.is_valid("1")

    @pytest.mark.parametrize(
        ("method", "good", "bad", "code"),
        [
            ("positive", 1, 0, IssueCode.TOO_SMALL),
            ("negative", -1, 0, IssueCode.TOO_BIG),
            ("non_negative", 0, -1, IssueCode.TOO_SMALL),
            ("non_positive", 0, 1, IssueCode.TOO_BIG),
        ],
    )
    def test_sign_checks(self, method: str, good: int, bad: int, code: IssueCode) -> None:
        schema = getattr(number(), method)()
        assert schema.parse_value(good) == good

        with pytest.raises(VldError) as exc_info:
            schema.parse_value(bad)
        assert exc_info.value.issues[0].code is code

    def test_finite(self) -> None:
        assert not number().finite().is_valid(math.inf)
        assert number().finite().is_valid(1.5)

    def test_multiple_of_tolerates_float_error(self) -> None:
        schema = number().multiple_of(0.1)
        assert schema.is_valid(0.3)
        assert not schema.is_valid(0.35)

    def test_multiple_of_zero_is_rejected(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            number().multiple_of(0)

    def test_safe(self) -> None:
        assert number().safe().is_valid(2**53 - 1)
        assert not number().safe().is_valid(2**53)

    def test_integer_beyond_float_range(self) -> None:
        result = number().safe_parse("1" + "0" * 400)

        assert not result.success
        assert result.error.issues[0].code is IssueCode.NOT_FINITE
        assert result.error.issues[0].message == "Number is too large to represent"

    def test_coerce(self) -> None:
        schema = number().coerce()
        assert schema.parse_value("4.5") == 4.5
        assert schema.parse_value(True) == 1.0

        result = schema.safe_parse('"abc"')
        assert result.error.issues[0].message == 'Cannot coerce "abc" to number'

    def test_json_schema(self) -> None:
        projection = number().min(1).lt(10).multiple_of(2).json_schema()
        assert projection == {"type": "number", "minimum": 1, "exclusiveMaximum": 10, "multipleOf": 2}


class TestIntSchema:
    def test_accepts_integral_values(self) -> None:
        value = number().int().parse("5")
        assert value == 5
        assert isinstance(value, int)
        assert number().int().parse("5.0") == 5

    def test_rejects_fraction(self) -> None:
        result = number().int().safe_parse("5.5")
        issue = result.error.issues[0]
        assert issue.code is IssueCode.NOT_INT
        assert issue.message == "Expected integer, received float"

    def test_number_checks_still_apply(self) -> None:
        schema = number().int().min(1).max(65535)
        assert not schema.is_valid("0")
        assert schema.parse("8080") == 8080

    def test_int_error_and_messages(self) -> None:
        assert number().int().int_error("whole only").safe_parse("1.5").error.issues[0].message == "whole only"

        schema = number().int().min(1).with_messages({"not_int": "integer!", "too_small": "tiny"})
        assert schema.safe_parse("1.5").error.issues[0].message == "integer!"
        assert schema.safe_parse("0").error.issues[0].message == "tiny"

    def test_json_schema(self) -> None:
        assert number().int().min(0).json_schema() == {"type": "integer", "minimum": 0}


class TestScalarSchemas:
    def test_boolean(self) -> None:
        assert boolean().parse("true") is True
        assert not boolean().is_valid("1")

    def test_boolean_coerce(self) -> None:
        schema = boolean().coerce()
        assert schema.parse_value("1") is True
        assert schema.parse_value("false") is False
        assert schema.parse_value(0) is False
        assert not schema.is_valid('"yes"')

    def test_literal(self) -> None:
        assert literal("admin").parse('"admin"') == "admin"

        result = literal("admin").safe_parse('"user"')
        assert result.error.issues[0].code is IssueCode.INVALID_LITERAL
        assert result.error.issues[0].message == 'Expected literal "admin", received "user"'

    def test_literal_keeps_booleans_and_numbers_apart(self) -> None:
        assert not literal(1).is_valid("true")
        assert literal(1).is_valid("1.0")

    def test_enumeration(self) -> None:
        schema = enumeration(["admin", "user"])
        assert schema.parse('"user"') == "user"

        result = schema.safe_parse('"guest"')
        assert result.error.issues[0].code is IssueCode.INVALID_ENUM_VALUE
        assert result.error.issues[0].message == 'Invalid enum value: "guest". Expected one of: "admin", "user"'
        assert schema.json_schema() == {"type": "string", "enum": ["admin", "user"]}

    def test_empty_enumeration_is_rejected(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            enumeration([])

    def test_any(self) -> None:
        assert any_().parse('{"a": [1]}') == {"a": [1]}
        assert any_().json_schema() == {}


class TestDateSchemas:
    def test_date(self) -> None:
        assert date_schema().parse('"2024-02-29"') == date(2024, 2, 29)
        assert date_schema().safe_parse('"2023-02-29"').error.issues[0].code is IssueCode.INVALID_DATE

    def test_date_bounds(self) -> None:
        schema = date_schema().min("2024-01-01").max(date(2024, 12, 31))
        assert schema.is_valid('"2024-06-01"')

        result = schema.safe_parse('"2023-12-31"')
        assert result.error.issues[0].message == "Date must be on or after 2024-01-01"

    def test_invalid_date_literal(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            date_schema().min("01/01/2024")

    def test_datetime_normalises_to_utc(self) -> None:
        value = datetime_schema().parse('"2024-01-15T12:00:00+02:00"')
        assert value == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    def test_datetime_bounds(self) -> None:
        schema = datetime_schema().min("2024-01-01T00:00:00Z")
        assert not schema.is_valid('"2023-12-31T23:59:59Z"')

        result = datetime_schema().safe_parse('"yesterday"')
        assert result.error.issues[0].code is IssueCode.INVALID_DATETIME

    def test_naive_datetime_bound_is_rejected(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            datetime_schema().max(datetime(2024, 1, 1))
