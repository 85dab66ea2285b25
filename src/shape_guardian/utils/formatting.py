"""Human-oriented renderings of ``VldError``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.errors import Issue, VldError
from ..core.path import format_path, segment_key
from ..core.values import format_value_short


@dataclass
class FlattenedError:
    """Messages grouped by top-level field; root issues go to ``form_errors``."""

    form_errors: List[str] = field(default_factory=list)
    field_errors: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"form_errors": list(self.form_errors), "field_errors": {k: list(v) for k, v in self.field_errors.items()}}


@dataclass
class ErrorTree:
    """Nested view mirroring the shape of the input."""

    errors: List[str] = field(default_factory=list)
    properties: Dict[str, "ErrorTree"] = field(default_factory=dict)
    items: List[Optional["ErrorTree"]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"errors": list(self.errors)}
        if self.properties:
            data["properties"] = {name: child.to_dict() for name, child in self.properties.items()}
        if self.items:
            data["items"] = [None if child is None else child.to_dict() for child in self.items]
        return data


def _grouped(issues: List[Issue]) -> List[Issue]:
    order: Dict[tuple, int] = {}
    for issue in issues:
        order.setdefault(issue.path, len(order))
    return sorted(issues, key=lambda issue: order[issue.path])


def prettify_error(error: VldError) -> str:
    """Render one ``✖`` line per issue with an optional location line.

    Issues sharing a path are listed together, in order of first appearance.
    """
    lines: List[str] = []
    for issue in _grouped(error.issues):
        lines.append(f"✖ {issue.message}")
        parts: List[str] = []
        if issue.path:
            parts.append(f"at {format_path(issue.path)}")
        if issue.has_received:
            parts.append(f"received {format_value_short(issue.received)}")
        if parts:
            lines.append(f"  → {', '.join(parts)}")
    return "\n".join(lines)


def flatten_error(error: VldError) -> FlattenedError:
    flat = FlattenedError()
    for issue in error.issues:
        if not issue.path:
            flat.form_errors.append(issue.message)
        else:
            flat.field_errors.setdefault(segment_key(issue.path[0]), []).append(issue.message)
    return flat


def treeify_error(error: VldError) -> ErrorTree:
    root = ErrorTree()
    for issue in error.issues:
        current = root
        for segment in issue.path:
            if isinstance(segment, int):
                while len(current.items) <= segment:
                    current.items.append(None)
                child = current.items[segment]
                if child is None:
                    child = current.items[segment] = ErrorTree()
            else:
                child = current.properties.setdefault(segment, ErrorTree())
            current = child
        current.errors.append(issue.message)
    return root
