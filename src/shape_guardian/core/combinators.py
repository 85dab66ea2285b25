"""Unions, intersections, user-defined and recursive schemas."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Generic, List, Tuple, TypeVar

from .errors import IssueCode, IssueCollector, VldError, invalid_type
from .schema import OPAQUE_JSON_SCHEMA, Schema
from .values import MISSING, format_value_short, json_equal

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Either(Generic[T, U]):
    """Result of a two-branch union."""

    __slots__ = ("value",)

    is_left = False
    is_right = False

    def __init__(self, value: Any) -> None:
        self.value = value

    def left(self) -> T | None:
        return self.value if self.is_left else None

    def right(self) -> U | None:
        return self.value if self.is_right else None

    def unwrap(self) -> Any:
        return self.value

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.value == other.value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class Left(Either[T, Any]):
    is_left = True


class Right(Either[Any, U]):
    is_right = True


@dataclass(frozen=True)
class OneOf:
    """Result of an n-way union: which branch matched and its output."""

    index: int
    value: Any

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_second(self) -> bool:
        return self.index == 1

    @property
    def is_third(self) -> bool:
        return self.index == 2

    def _at(self, index: int) -> Any:
        return self.value if self.index == index else None

    def first(self) -> Any:
        return self._at(0)

    def second(self) -> Any:
        return self._at(1)

    def third(self) -> Any:
        return self._at(2)

    def unwrap(self) -> Any:
        return self.value


def _union_failure(value: Any, errors: List[VldError]) -> VldError:
    return VldError.single(
        IssueCode.INVALID_UNION,
        "Input did not match any variant of the union",
        received=value,
        branch_errors=len(errors),
    )


@dataclass(frozen=True)
class UnionSchema(Schema[Either[T, U]]):
    """Tries ``first`` then ``second``; the first success wins."""

    first: Schema[T]
    second: Schema[U]

    def _parse(self, value: Any) -> Either[T, U]:
        errors: List[VldError] = []
        for branch, wrap in ((self.first, Left), (self.second, Right)):
            try:
                return wrap(branch.parse_value(value))
            except VldError as exc:
                errors.append(exc)
        raise _union_failure(value, errors)

    def json_schema(self) -> Dict[str, Any]:
        return {"oneOf": [self.first.json_schema(), self.second.json_schema()]}


@dataclass(frozen=True)
class UnionNSchema(Schema[OneOf]):
    options: Tuple[Schema[Any], ...]

    def _parse(self, value: Any) -> OneOf:
        errors: List[VldError] = []
        for index, option in enumerate(self.options):
            try:
                return OneOf(index, option.parse_value(value))
            except VldError as exc:
                errors.append(exc)
        raise _union_failure(value, errors)

    def json_schema(self) -> Dict[str, Any]:
        return {"oneOf": [option.json_schema() for option in self.options]}


@dataclass(frozen=True)
class DiscriminatedUnionSchema(Schema[Any]):
    """Chooses a variant by the value of one tag field."""

    discriminator: str
    variants: Tuple[Tuple[Any, Schema[Any]], ...] = ()

    def variant(self, tag: Any, schema: Schema[Any]) -> "DiscriminatedUnionSchema":
        return replace(self, variants=(*self.variants, (tag, schema)))

    def _parse(self, value: Any) -> Any:
        if not isinstance(value, dict):
            raise invalid_type("object", value)

        tag = value.get(self.discriminator, MISSING)
        if tag is MISSING:
            raise VldError.single(
                IssueCode.MISSING_FIELD,
                f'Missing discriminator field "{self.discriminator}"',
                path=(self.discriminator,),
            )

        for expected, schema in self.variants:
            if json_equal(tag, expected):
                return schema.parse_value(value)

        known = ", ".join(format_value_short(expected) for expected, _ in self.variants)
        raise VldError.single(
            IssueCode.INVALID_DISCRIMINATOR,
            f'Invalid discriminator value {format_value_short(tag)} for "{self.discriminator}". '
            f"Expected one of: {known}",
            received=tag,
            path=(self.discriminator,),
            options=[expected for expected, _ in self.variants],
        )

    def json_schema(self) -> Dict[str, Any]:
        return {
            "oneOf": [schema.json_schema() for _, schema in self.variants],
            "discriminator": {"propertyName": self.discriminator},
        }


@dataclass(frozen=True)
class IntersectionSchema(Schema[T]):
    """Runs both sides, reports every issue, and returns the first side's output."""

    first: Schema[T]
    second: Schema[Any]

    def _parse(self, value: Any) -> T:
        collector = IssueCollector()
        output: Any = None
        try:
            output = self.first.parse_value(value)
        except VldError as exc:
            collector.extend(exc)
        try:
            self.second.parse_value(value)
        except VldError as exc:
            collector.extend(exc)
        collector.raise_if_any()
        return output

    def json_schema(self) -> Dict[str, Any]:
        return {"allOf": [self.first.json_schema(), self.second.json_schema()]}


@dataclass(frozen=True)
class CustomSchema(Schema[T]):
    """Delegates validation to a callable.

    The callable returns the output, or raises ``CustomValidationError`` (any
    ``ValueError`` works) whose message becomes a ``custom`` issue.
    """

    func: Callable[[Any], T]

    def _parse(self, value: Any) -> T:
        try:
            return self.func(value)
        except ValueError as exc:
            raise VldError.single(IssueCode.CUSTOM, str(exc) or "Invalid value", received=value) from exc

    def json_schema(self) -> Dict[str, Any]:
        return dict(OPAQUE_JSON_SCHEMA)


@dataclass(frozen=True)
class LazySchema(Schema[T]):
    """Builds its schema on every parse, which allows self-reference."""

    factory: Callable[[], Schema[T]]

    _handles_missing = True

    def is_optional(self) -> bool:
        return False

    def _parse(self, value: Any) -> T:
        schema = self.factory()
        logger.debug("lazy schema resolved to %s", type(schema).__name__)
        return schema.parse_value(value)

    def json_schema(self) -> Dict[str, Any]:
        return dict(OPAQUE_JSON_SCHEMA)
