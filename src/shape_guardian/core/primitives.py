"""Leaf schemas: strings, numbers, booleans, literals, enums and dates."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple, Union

from . import formats
from .errors import IssueCode, IssueCollector, SchemaDefinitionError, VldError, invalid_type
from .schema import Schema
from .values import format_number, format_value_short, is_number, json_equal

MessageLookup = Union[Mapping[str, str], Callable[[str], Optional[str]]]

MAX_SAFE_INTEGER = 2**53 - 1


def resolve_message(lookup: MessageLookup, key: str) -> str | None:
    if callable(lookup):
        return lookup(key)
    return lookup.get(key)


@dataclass(frozen=True)
class Check:
    """One constraint of a leaf schema.

    ``key`` is the name used by ``with_messages``; ``keywords`` are merged into
    the JSON Schema projection.
    """

    key: str
    code: IssueCode
    message: str
    predicate: Callable[[Any], bool]
    params: Tuple[Tuple[str, Any], ...] = ()
    keywords: Tuple[Tuple[str, Any], ...] = ()
    custom_code: str | None = None


def _run_checks(checks: Sequence[Check], value: Any) -> None:
    collector = IssueCollector()
    for check in checks:
        if not check.predicate(value):
            collector.add(
                check.code,
                check.message,
                received=value,
                custom_code=check.custom_code,
                **dict(check.params),
            )
    collector.raise_if_any()


def _apply_messages(checks: Sequence[Check], lookup: MessageLookup) -> Tuple[Check, ...]:
    updated: List[Check] = []
    for check in checks:
        message = resolve_message(lookup, check.key)
        updated.append(check if message is None else replace(check, message=message))
    return tuple(updated)


def _project(base: Dict[str, Any], checks: Sequence[Check]) -> Dict[str, Any]:
    schema = dict(base)
    for check in checks:
        schema.update(check.keywords)
    return schema


_FORMAT_CHECKS: Dict[str, Tuple[IssueCode, str, Callable[[str], bool], str | None]] = {
    "email": (IssueCode.INVALID_EMAIL, "Invalid email address", formats.is_email, "email"),
    "url": (IssueCode.INVALID_URL, "Invalid URL", formats.is_url, "uri"),
    "uuid": (IssueCode.INVALID_UUID, "Invalid UUID", formats.is_uuid, "uuid"),
    "ipv4": (IssueCode.INVALID_IPV4, "Invalid IPv4 address", formats.is_ipv4, "ipv4"),
    "ipv6": (IssueCode.INVALID_IPV6, "Invalid IPv6 address", formats.is_ipv6, "ipv6"),
    "base64": (IssueCode.INVALID_BASE64, "Invalid Base64 string", formats.is_base64, None),
    "iso_date": (
        IssueCode.INVALID_ISO_DATE,
        "Invalid ISO date (expected YYYY-MM-DD)",
        formats.is_iso_date,
        "date",
    ),
    "iso_datetime": (IssueCode.INVALID_ISO_DATETIME, "Invalid ISO datetime", formats.is_iso_datetime, "date-time"),
    "iso_time": (IssueCode.INVALID_ISO_TIME, "Invalid ISO time", formats.is_iso_time, "time"),
    "hostname": (IssueCode.INVALID_HOSTNAME, "Invalid hostname", formats.is_hostname, "hostname"),
    "cuid2": (IssueCode.INVALID_CUID2, "Invalid CUID2", formats.is_cuid2, "cuid2"),
    "ulid": (IssueCode.INVALID_ULID, "Invalid ULID", formats.is_ulid, "ulid"),
    "nanoid": (IssueCode.INVALID_NANOID, "Invalid Nano ID", formats.is_nanoid, "nanoid"),
    "emoji": (IssueCode.INVALID_EMOJI, "String must contain an emoji", formats.is_emoji, "emoji"),
}

_TRANSFORMS: Dict[str, Callable[[str], str]] = {
    "trim": str.strip,
    "lower": str.lower,
    "upper": str.upper,
}


@dataclass(frozen=True)
class StringSchema(Schema[str]):
    """String validator with length, format and pattern checks."""

    checks: Tuple[Check, ...] = ()
    transforms: Tuple[str, ...] = ()
    coerce_input: bool = False
    custom_type_error: str | None = None

    def _add(self, check: Check) -> "StringSchema":
        return replace(self, checks=(*self.checks, check))

    def _format(self, name: str, message: str | None) -> "StringSchema":
        code, default, predicate, fmt = _FORMAT_CHECKS[name]
        keywords = (("format", fmt),) if fmt else ()
        return self._add(Check(code.value, code, message or default, predicate, keywords=keywords))

    def type_error(self, message: str) -> "StringSchema":
        return replace(self, custom_type_error=message)

    def with_messages(self, lookup: MessageLookup) -> "StringSchema":
        """Override check messages by key, e.g. ``{"too_small": "Too short!"}``."""
        return replace(self, checks=_apply_messages(self.checks, lookup))

    def min(self, length: int, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "too_small",
                IssueCode.TOO_SMALL,
                message or f"String must be at least {length} characters",
                lambda text: len(text) >= length,
                params=(("minimum", length), ("inclusive", True)),
                keywords=(("minLength", length),),
            )
        )

    def max(self, length: int, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "too_big",
                IssueCode.TOO_BIG,
                message or f"String must be at most {length} characters",
                lambda text: len(text) <= length,
                params=(("maximum", length), ("inclusive", True)),
                keywords=(("maxLength", length),),
            )
        )

    def length(self, length: int, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "invalid_length",
                IssueCode.INVALID_LENGTH,
                message or f"String must be exactly {length} characters",
                lambda text: len(text) == length,
                params=(("exact", length),),
                keywords=(("minLength", length), ("maxLength", length)),
            )
        )

    len = length

    def non_empty(self, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "non_empty",
                IssueCode.TOO_SMALL,
                message or "String must not be empty",
                bool,
                params=(("minimum", 1), ("inclusive", True)),
                keywords=(("minLength", 1),),
            )
        )

    def email(self, message: str | None = None) -> "StringSchema":
        return self._format("email", message)

    def url(self, message: str | None = None) -> "StringSchema":
        return self._format("url", message)

    def uuid(self, message: str | None = None) -> "StringSchema":
        return self._format("uuid", message)

    def ipv4(self, message: str | None = None) -> "StringSchema":
        return self._format("ipv4", message)

    def ipv6(self, message: str | None = None) -> "StringSchema":
        return self._format("ipv6", message)

    def base64(self, message: str | None = None) -> "StringSchema":
        return self._format("base64", message)

    def iso_date(self, message: str | None = None) -> "StringSchema":
        return self._format("iso_date", message)

    def iso_datetime(self, message: str | None = None) -> "StringSchema":
        return self._format("iso_datetime", message)

    def iso_time(self, message: str | None = None) -> "StringSchema":
        return self._format("iso_time", message)

    def hostname(self, message: str | None = None) -> "StringSchema":
        return self._format("hostname", message)

    def cuid2(self, message: str | None = None) -> "StringSchema":
        return self._format("cuid2", message)

    def ulid(self, message: str | None = None) -> "StringSchema":
        return self._format("ulid", message)

    def nanoid(self, message: str | None = None) -> "StringSchema":
        return self._format("nanoid", message)

    def emoji(self, message: str | None = None) -> "StringSchema":
        return self._format("emoji", message)

    def regex(self, pattern: str | Pattern[str], message: str | None = None) -> "StringSchema":
        compiled = re.compile(pattern)
        return self._add(
            Check(
                "invalid_regex",
                IssueCode.INVALID_REGEX,
                message or "String does not match pattern",
                lambda text: compiled.search(text) is not None,
                params=(("pattern", compiled.pattern),),
                keywords=(("pattern", compiled.pattern),),
            )
        )

    pattern = regex

    def starts_with(self, prefix: str, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "invalid_starts_with",
                IssueCode.INVALID_STARTS_WITH,
                message or f'String must start with "{prefix}"',
                lambda text: text.startswith(prefix),
            )
        )

    def ends_with(self, suffix: str, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "invalid_ends_with",
                IssueCode.INVALID_ENDS_WITH,
                message or f'String must end with "{suffix}"',
                lambda text: text.endswith(suffix),
            )
        )

    def contains(self, needle: str, message: str | None = None) -> "StringSchema":
        return self._add(
            Check(
                "invalid_contains",
                IssueCode.INVALID_CONTAINS,
                message or f'String must contain "{needle}"',
                lambda text: needle in text,
            )
        )

    def trim(self) -> "StringSchema":
        return replace(self, transforms=(*self.transforms, "trim"))

    def to_lowercase(self) -> "StringSchema":
        return replace(self, transforms=(*self.transforms, "lower"))

    def to_uppercase(self) -> "StringSchema":
        return replace(self, transforms=(*self.transforms, "upper"))

    def coerce(self) -> "StringSchema":
        """Accept numbers and booleans by stringifying them."""
        return replace(self, coerce_input=True)

    def _parse(self, value: Any) -> str:
        if isinstance(value, str):
            text = value
        elif self.coerce_input and isinstance(value, bool):
            text = "true" if value else "false"
        elif self.coerce_input and is_number(value):
            text = format_number(value)
        else:
            raise invalid_type("string", value, self.custom_type_error)

        for name in self.transforms:
            text = _TRANSFORMS[name](text)

        _run_checks(self.checks, text)
        return text

    def json_schema(self) -> Dict[str, Any]:
        return _project({"type": "string"}, self.checks)


@dataclass(frozen=True)
class NumberSchema(Schema[float]):
    """Float validator. Booleans are never accepted as numbers."""

    checks: Tuple[Check, ...] = ()
    coerce_input: bool = False
    custom_type_error: str | None = None

    def _add(self, check: Check) -> "NumberSchema":
        return replace(self, checks=(*self.checks, check))

    def type_error(self, message: str) -> "NumberSchema":
        return replace(self, custom_type_error=message)

    def with_messages(self, lookup: MessageLookup) -> "NumberSchema":
        return replace(self, checks=_apply_messages(self.checks, lookup))

    def min(self, value: float, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "too_small",
                IssueCode.TOO_SMALL,
                message or f"Number must be at least {format_number(value)}",
                lambda n: n >= value,
                params=(("minimum", value), ("inclusive", True)),
                keywords=(("minimum", value),),
            )
        )

    def max(self, value: float, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "too_big",
                IssueCode.TOO_BIG,
                message or f"Number must be at most {format_number(value)}",
                lambda n: n <= value,
                params=(("maximum", value), ("inclusive", True)),
                keywords=(("maximum", value),),
            )
        )

    gte = min
    lte = max

    def gt(self, value: float, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "too_small",
                IssueCode.TOO_SMALL,
                message or f"Number must be greater than {format_number(value)}",
                lambda n: n > value,
                params=(("minimum", value), ("inclusive", False)),
                keywords=(("exclusiveMinimum", value),),
            )
        )

    def lt(self, value: float, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "too_big",
                IssueCode.TOO_BIG,
                message or f"Number must be less than {format_number(value)}",
                lambda n: n < value,
                params=(("maximum", value), ("inclusive", False)),
                keywords=(("exclusiveMaximum", value),),
            )
        )

    def positive(self, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "not_positive",
                IssueCode.TOO_SMALL,
                message or "Number must be positive",
                lambda n: n > 0,
                params=(("minimum", 0), ("inclusive", False)),
                keywords=(("exclusiveMinimum", 0),),
            )
        )

    def negative(self, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "not_negative",
                IssueCode.TOO_BIG,
                message or "Number must be negative",
                lambda n: n < 0,
                params=(("maximum", 0), ("inclusive", False)),
                keywords=(("exclusiveMaximum", 0),),
            )
        )

    def non_negative(self, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "not_non_negative",
                IssueCode.TOO_SMALL,
                message or "Number must be non-negative",
                lambda n: n >= 0,
                params=(("minimum", 0), ("inclusive", True)),
                keywords=(("minimum", 0),),
            )
        )

    def non_positive(self, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "not_non_positive",
                IssueCode.TOO_BIG,
                message or "Number must be non-positive",
                lambda n: n <= 0,
                params=(("maximum", 0), ("inclusive", True)),
                keywords=(("maximum", 0),),
            )
        )

    def finite(self, message: str | None = None) -> "NumberSchema":
        return self._add(Check("not_finite", IssueCode.NOT_FINITE, message or "Number must be finite", math.isfinite))

    def multiple_of(self, step: float, message: str | None = None) -> "NumberSchema":
        if step == 0:
            raise SchemaDefinitionError("multiple_of step must be non-zero")

        def _is_multiple(n: float) -> bool:
            ratio = n / step
            return math.isfinite(ratio) and math.isclose(ratio, round(ratio), rel_tol=0.0, abs_tol=1e-9)

        return self._add(
            Check(
                "not_multiple_of",
                IssueCode.NOT_MULTIPLE_OF,
                message or f"Number must be a multiple of {format_number(step)}",
                _is_multiple,
                params=(("multiple_of", step),),
                keywords=(("multipleOf", step),),
            )
        )

    def safe(self, message: str | None = None) -> "NumberSchema":
        return self._add(
            Check(
                "not_safe",
                IssueCode.NOT_SAFE,
                message or "Number must be a safe integer (-(2^53-1) to 2^53-1)",
                lambda n: -MAX_SAFE_INTEGER <= n <= MAX_SAFE_INTEGER,
            )
        )

    def coerce(self) -> "NumberSchema":
        """Accept numeric strings and booleans."""
        return replace(self, coerce_input=True)

    def int(self) -> "IntSchema":
        return IntSchema(inner=self)

    def _extract(self, value: Any) -> float | int:
        if is_number(value):
            return value
        if self.coerce_input:
            if isinstance(value, bool):
                return 1 if value else 0
            if isinstance(value, str):
                try:
                    return float(value.strip())
                except ValueError:
                    raise VldError.single(
                        IssueCode.INVALID_TYPE,
                        self.custom_type_error or f"Cannot coerce {format_value_short(value)} to number",
                        received=value,
                        expected="number",
                        received_type="string",
                    ) from None
        raise invalid_type("number", value, self.custom_type_error)

    def _parse(self, value: Any) -> float:
        try:
            number = float(self._extract(value))
        except OverflowError:
            raise VldError.single(
                IssueCode.NOT_FINITE,
                "Number is too large to represent",
                received=value,
            ) from None
        _run_checks(self.checks, number)
        return number

    def json_schema(self) -> Dict[str, Any]:
        return _project({"type": "number"}, self.checks)


@dataclass(frozen=True)
class IntSchema(Schema[int]):
    """Integer view over a ``NumberSchema``; every number check still applies."""

    inner: NumberSchema = NumberSchema()
    custom_int_error: str | None = None

    def _wrap(self, inner: NumberSchema) -> "IntSchema":
        return replace(self, inner=inner)

    def type_error(self, message: str) -> "IntSchema":
        return self._wrap(self.inner.type_error(message))

    def int_error(self, message: str) -> "IntSchema":
        return replace(self, custom_int_error=message)

    def with_messages(self, lookup: MessageLookup) -> "IntSchema":
        message = resolve_message(lookup, "not_int")
        updated = self._wrap(self.inner.with_messages(lookup))
        return updated if message is None else replace(updated, custom_int_error=message)

    def min(self, value: float, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.min(value, message))

    def max(self, value: float, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.max(value, message))

    gte = min
    lte = max

    def gt(self, value: float, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.gt(value, message))

    def lt(self, value: float, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.lt(value, message))

    def positive(self, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.positive(message))

    def negative(self, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.negative(message))

    def non_negative(self, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.non_negative(message))

    def non_positive(self, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.non_positive(message))

    def multiple_of(self, step: float, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.multiple_of(step, message))

    def safe(self, message: str | None = None) -> "IntSchema":
        return self._wrap(self.inner.safe(message))

    def coerce(self) -> "IntSchema":
        return self._wrap(self.inner.coerce())

    def _parse(self, value: Any) -> int:
        number = self.inner._extract(value)
        if isinstance(number, float) and not number.is_integer():
            raise VldError.single(
                IssueCode.NOT_INT,
                self.custom_int_error or "Expected integer, received float",
                received=value,
            )
        _run_checks(self.inner.checks, number)
        return int(number)

    def json_schema(self) -> Dict[str, Any]:
        schema = self.inner.json_schema()
        schema["type"] = "integer"
        return schema


@dataclass(frozen=True)
class BooleanSchema(Schema[bool]):
    coerce_input: bool = False
    custom_type_error: str | None = None

    def type_error(self, message: str) -> "BooleanSchema":
        return replace(self, custom_type_error=message)

    def coerce(self) -> "BooleanSchema":
        """Accept ``"true"``/``"false"``/``"1"``/``"0"`` and numbers (zero is False)."""
        return replace(self, coerce_input=True)

    def _parse(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if self.coerce_input:
            if isinstance(value, str) and value in ("true", "1"):
                return True
            if isinstance(value, str) and value in ("false", "0"):
                return False
            if is_number(value):
                return value != 0
        raise invalid_type("boolean", value, self.custom_type_error)

    def json_schema(self) -> Dict[str, Any]:
        return {"type": "boolean"}


@dataclass(frozen=True)
class LiteralSchema(Schema[Any]):
    """Accepts exactly one JSON value."""

    expected: Any

    def _parse(self, value: Any) -> Any:
        if json_equal(value, self.expected):
            return value
        raise VldError.single(
            IssueCode.INVALID_LITERAL,
            f"Expected literal {format_value_short(self.expected)}, received {format_value_short(value)}",
            received=value,
            expected=self.expected,
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"enum": [self.expected]}


@dataclass(frozen=True)
class EnumSchema(Schema[str]):
    """Accepts one of a fixed set of strings."""

    options: Tuple[str, ...]
    custom_type_error: str | None = None

    def type_error(self, message: str) -> "EnumSchema":
        return replace(self, custom_type_error=message)

    def _parse(self, value: Any) -> str:
        if not isinstance(value, str):
            raise invalid_type("string", value, self.custom_type_error)
        if value not in self.options:
            expected = ", ".join(f'"{option}"' for option in self.options)
            raise VldError.single(
                IssueCode.INVALID_ENUM_VALUE,
                f'Invalid enum value: "{value}". Expected one of: {expected}',
                received=value,
                options=list(self.options),
            )
        return value

    def json_schema(self) -> Dict[str, Any]:
        return {"type": "string", "enum": list(self.options)}


@dataclass(frozen=True)
class AnySchema(Schema[Any]):
    """Accepts every present value unchanged."""

    def _parse(self, value: Any) -> Any:
        return value

    def json_schema(self) -> Dict[str, Any]:
        return {}


def _date_bound(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = formats.parse_iso_date(value)
    if parsed is None:
        raise SchemaDefinitionError(f"Invalid date literal {value!r}: expected YYYY-MM-DD")
    return parsed


def _datetime_bound(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise SchemaDefinitionError("datetime bounds must be timezone-aware")
        return value
    parsed = formats.parse_rfc3339(value)
    if parsed is None:
        raise SchemaDefinitionError(f"Invalid datetime literal {value!r}")
    return parsed


@dataclass(frozen=True)
class DateSchema(Schema[date]):
    """Parses ``YYYY-MM-DD`` strings into ``datetime.date``."""

    minimum: date | None = None
    maximum: date | None = None
    min_message: str | None = None
    max_message: str | None = None
    custom_type_error: str | None = None

    def type_error(self, message: str) -> "DateSchema":
        return replace(self, custom_type_error=message)

    def min(self, value: str | date, message: str | None = None) -> "DateSchema":
        return replace(self, minimum=_date_bound(value), min_message=message)

    def max(self, value: str | date, message: str | None = None) -> "DateSchema":
        return replace(self, maximum=_date_bound(value), max_message=message)

    def _parse(self, value: Any) -> date:
        if not isinstance(value, str):
            raise invalid_type("date string (YYYY-MM-DD)", value, self.custom_type_error)
        parsed = formats.parse_iso_date(value)
        if parsed is None:
            raise VldError.single(
                IssueCode.INVALID_DATE,
                f'Invalid date format: expected YYYY-MM-DD, got "{value}"',
                received=value,
            )
        collector = IssueCollector()
        if self.minimum is not None and parsed < self.minimum:
            collector.add(
                IssueCode.TOO_SMALL,
                self.min_message or f"Date must be on or after {self.minimum.isoformat()}",
                received=value,
                minimum=self.minimum.isoformat(),
                inclusive=True,
            )
        if self.maximum is not None and parsed > self.maximum:
            collector.add(
                IssueCode.TOO_BIG,
                self.max_message or f"Date must be on or before {self.maximum.isoformat()}",
                received=value,
                maximum=self.maximum.isoformat(),
                inclusive=True,
            )
        collector.raise_if_any()
        return parsed

    def json_schema(self) -> Dict[str, Any]:
        return {"type": "string", "format": "date"}


@dataclass(frozen=True)
class DateTimeSchema(Schema[datetime]):
    """Parses RFC 3339 timestamps into UTC ``datetime`` objects."""

    minimum: datetime | None = None
    maximum: datetime | None = None
    min_message: str | None = None
    max_message: str | None = None
    custom_type_error: str | None = None

    def type_error(self, message: str) -> "DateTimeSchema":
        return replace(self, custom_type_error=message)

    def min(self, value: str | datetime, message: str | None = None) -> "DateTimeSchema":
        return replace(self, minimum=_datetime_bound(value), min_message=message)

    def max(self, value: str | datetime, message: str | None = None) -> "DateTimeSchema":
        return replace(self, maximum=_datetime_bound(value), max_message=message)

    def _parse(self, value: Any) -> datetime:
        if not isinstance(value, str):
            raise invalid_type("datetime string", value, self.custom_type_error)
        parsed = formats.parse_rfc3339(value)
        if parsed is None:
            raise VldError.single(
                IssueCode.INVALID_DATETIME,
                f'Invalid datetime format: "{value}"',
                received=value,
            )
        collector = IssueCollector()
        if self.minimum is not None and parsed < self.minimum:
            collector.add(
                IssueCode.TOO_SMALL,
                self.min_message or f"Datetime must be on or after {self.minimum.isoformat()}",
                received=value,
                minimum=self.minimum.isoformat(),
                inclusive=True,
            )
        if self.maximum is not None and parsed > self.maximum:
            collector.add(
                IssueCode.TOO_BIG,
                self.max_message or f"Datetime must be on or before {self.maximum.isoformat()}",
                received=value,
                maximum=self.maximum.isoformat(),
                inclusive=True,
            )
        collector.raise_if_any()
        return parsed

    def json_schema(self) -> Dict[str, Any]:
        return {"type": "string", "format": "date-time"}

