"""Issue model and exception hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Mapping

from .path import Path, PathSegment, format_path
from .values import MISSING, format_value_short, truncate_value, value_type_name

if TYPE_CHECKING:
    from .validator import ValidationResult


class IssueCode(str, Enum):
    """Stable keys for every kind of validation issue."""

    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_LENGTH = "invalid_length"
    NOT_INT = "not_int"
    NOT_FINITE = "not_finite"
    NOT_MULTIPLE_OF = "not_multiple_of"
    NOT_SAFE = "not_safe"
    INVALID_EMAIL = "invalid_email"
    INVALID_URL = "invalid_url"
    INVALID_UUID = "invalid_uuid"
    INVALID_REGEX = "invalid_regex"
    INVALID_STARTS_WITH = "invalid_starts_with"
    INVALID_ENDS_WITH = "invalid_ends_with"
    INVALID_CONTAINS = "invalid_contains"
    INVALID_IPV4 = "invalid_ipv4"
    INVALID_IPV6 = "invalid_ipv6"
    INVALID_BASE64 = "invalid_base64"
    INVALID_ISO_DATE = "invalid_iso_date"
    INVALID_ISO_DATETIME = "invalid_iso_datetime"
    INVALID_ISO_TIME = "invalid_iso_time"
    INVALID_HOSTNAME = "invalid_hostname"
    INVALID_CUID2 = "invalid_cuid2"
    INVALID_ULID = "invalid_ulid"
    INVALID_NANOID = "invalid_nanoid"
    INVALID_EMOJI = "invalid_emoji"
    INVALID_DATE = "invalid_date"
    INVALID_DATETIME = "invalid_datetime"
    INVALID_LITERAL = "invalid_literal"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    INVALID_UNION = "invalid_union"
    INVALID_DISCRIMINATOR = "invalid_discriminator"
    INVALID_TUPLE_LENGTH = "invalid_tuple_length"
    INVALID_MAP_ENTRY = "invalid_map_entry"
    MISSING_FIELD = "missing_field"
    UNRECOGNIZED_KEY = "unrecognized_key"
    PARSE_ERROR = "parse_error"
    IO_ERROR = "io_error"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Issue:
    """A single validation failure at a location inside the input."""

    code: IssueCode
    message: str
    path: Path = ()
    received: Any = MISSING
    params: Mapping[str, Any] = field(default_factory=dict)
    custom_code: str | None = None

    @property
    def key(self) -> str:
        return self.custom_code or self.code.value

    @property
    def has_received(self) -> bool:
        return self.received is not MISSING

    @property
    def path_str(self) -> str:
        return format_path(self.path)

    def with_prefix(self, segment: PathSegment) -> "Issue":
        return replace(self, path=(segment, *self.path))

    def with_message(self, message: str) -> "Issue":
        return replace(self, message=message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        data: Dict[str, Any] = {
            "code": self.key,
            "message": self.message,
            "path": list(self.path),
        }
        if self.has_received:
            data["received"] = self.received
        if self.params:
            data["params"] = dict(self.params)
        return data

    def __str__(self) -> str:
        text = self.message
        if self.path:
            text = f"{self.path_str}: {text}"
        if self.has_received:
            text = f"{text}, received {format_value_short(self.received)}"
        return text


class ValidationException(Exception):
    """Base exception for shape_guardian."""


class SchemaDefinitionError(ValidationException, ValueError):
    """Raised while building a schema from an invalid literal."""


class CustomValidationError(ValidationException, ValueError):
    """Raised by user callables passed to ``custom()`` to reject a value."""


class VldError(ValidationException):
    """Non-empty collection of issues produced by a failed parse."""

    def __init__(self, issues: Iterable[Issue]) -> None:
        collected = list(issues)
        if not collected:
            raise ValueError("VldError requires at least one issue")
        self.issues: List[Issue] = collected
        super().__init__(self.__str__())

    @classmethod
    def single(
        cls,
        code: IssueCode,
        message: str,
        *,
        received: Any = MISSING,
        path: Path = (),
        custom_code: str | None = None,
        **params: Any,
    ) -> "VldError":
        if received is not MISSING:
            received = truncate_value(received)
        return cls([Issue(code, message, tuple(path), received, params, custom_code)])

    def with_prefix(self, segment: PathSegment) -> "VldError":
        return VldError(issue.with_prefix(segment) for issue in self.issues)

    def merge(self, other: "VldError") -> "VldError":
        return VldError([*self.issues, *other.issues])

    def __iter__(self) -> Iterator[Issue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def __str__(self) -> str:
        return "\n".join(str(issue) for issue in self.issues)

    def __repr__(self) -> str:
        return f"VldError({len(self.issues)} issue(s))"


class ValidationFailedError(ValidationException):
    """Raised by an eager validator when the input does not validate."""

    def __init__(self, result: "ValidationResult") -> None:
        self.result = result
        count = len(result.errors)
        super().__init__(f"Validation failed with {count} issue(s)")


class IssueCollector:
    """Accumulates issues while a combinator visits its children."""

    def __init__(self) -> None:
        self.issues: List[Issue] = []

    def add(
        self,
        code: IssueCode,
        message: str,
        *,
        path: Path = (),
        received: Any = MISSING,
        custom_code: str | None = None,
        **params: Any,
    ) -> None:
        if received is not MISSING:
            received = truncate_value(received)
        self.issues.append(Issue(code, message, tuple(path), received, params, custom_code))

    def custom(self, message: str, *, code: str | None = None, path: Path = (), received: Any = MISSING) -> None:
        """Push a user-defined issue, optionally under its own code."""
        self.add(IssueCode.CUSTOM, message, path=path, received=received, custom_code=code)

    def extend(self, error: VldError, prefix: PathSegment | None = None) -> None:
        if prefix is None:
            self.issues.extend(error.issues)
        else:
            self.issues.extend(issue.with_prefix(prefix) for issue in error.issues)

    def is_empty(self) -> bool:
        return not self.issues

    def __len__(self) -> int:
        return len(self.issues)

    def raise_if_any(self) -> None:
        if self.issues:
            raise VldError(self.issues)


def invalid_type(expected: str, value: Any, message: str | None = None) -> VldError:
    """Build the standard type-mismatch error."""
    received_type = value_type_name(value)
    return VldError.single(
        IssueCode.INVALID_TYPE,
        message or f"Expected {expected}, received {received_type}",
        received=value,
        expected=expected,
        received_type=received_type,
    )


def missing_field() -> VldError:
    return VldError.single(IssueCode.MISSING_FIELD, "Required field is missing")
