"""Issue locations inside nested values."""

from __future__ import annotations

from typing import Iterable, Tuple, Union

PathSegment = Union[str, int]
Path = Tuple[PathSegment, ...]


def format_segment(segment: PathSegment) -> str:
    if isinstance(segment, int):
        return f"[{segment}]"
    return f".{segment}"


def format_path(path: Iterable[PathSegment]) -> str:
    """Render ``("user", "tags", 0)`` as ``.user.tags[0]``."""
    return "".join(format_segment(segment) for segment in path)


def segment_key(segment: PathSegment) -> str:
    """Plain key used for grouping, without leading dot or brackets."""
    return str(segment)
