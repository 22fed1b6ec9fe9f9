"""
Input validation for the diagram router MCP tool parameters.

Structural problems (a node without an id, a negative width) are rejected
with a clear message.  Values that only steer routing, such as handle names
or the routing mode, are left to the router's permissive parsing.
"""

from __future__ import annotations

import math
from typing import Any

from diagram_router.models import DiagramEdge, NodeGeometry, Point


# ---------------------------------------------------------------------------
# Validation result
# ---------------------------------------------------------------------------

class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# Primitive validators
# ---------------------------------------------------------------------------

def validate_non_empty_string(value: Any, field_name: str) -> str:
    """Ensure *value* is a non-empty string after stripping whitespace."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field_name}' must be a non-empty string.")
    return value.strip()


def validate_number(
    value: Any,
    field_name: str,
    *,
    min_val: float | None = None,
) -> float:
    """Validate a numeric value and optional lower bound."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValidationError(
            f"'{field_name}' must be a number, got {type(value).__name__}."
        )
    val = float(value)
    if not math.isfinite(val):
        raise ValidationError(f"'{field_name}' must be a finite number, got {val}.")
    if min_val is not None and val < min_val:
        raise ValidationError(
            f"'{field_name}' must be >= {min_val}, got {val}."
        )
    return val


def validate_positive_int(value: Any, field_name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValidationError(f"'{field_name}' must be a positive integer, got {value!r}.")
    return value


def validate_list(value: Any, field_name: str, *, min_length: int = 0) -> list:
    """Ensure *value* is a list with at least *min_length* items."""
    if not isinstance(value, list):
        raise ValidationError(
            f"'{field_name}' must be a list, got {type(value).__name__}."
        )
    if len(value) < min_length:
        raise ValidationError(
            f"'{field_name}' must contain at least {min_length} item(s), got {len(value)}."
        )
    return value


def validate_dict(value: Any, field_name: str) -> dict:
    if not isinstance(value, dict):
        raise ValidationError(
            f"'{field_name}' must be a dict, got {type(value).__name__}."
        )
    return value


# ---------------------------------------------------------------------------
# Domain validators
# ---------------------------------------------------------------------------

_ROUTE_ACTIONS = {"EDGE", "DIAGRAM", "GRID"}


def validate_action(value: Any, tool_name: str, allowed: set[str]) -> str:
    """Validate and normalise an action name (case-insensitive)."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{tool_name}' requires a non-empty 'action'.")
    normalized = value.strip().upper()
    if normalized not in allowed:
        choices = ", ".join(sorted(a.lower() for a in allowed))
        raise ValidationError(
            f"Unknown {tool_name} action '{value}'. Valid actions: {choices}."
        )
    return normalized


def validate_point(value: Any, field_name: str) -> Point:
    """Accept ``{"x": .., "y": ..}`` or an ``[x, y]`` pair."""
    if isinstance(value, dict):
        if "x" not in value or "y" not in value:
            raise ValidationError(f"'{field_name}' must have 'x' and 'y'.")
        return Point(
            validate_number(value["x"], f"{field_name}.x"),
            validate_number(value["y"], f"{field_name}.y"),
        )
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point(
            validate_number(value[0], f"{field_name}[0]"),
            validate_number(value[1], f"{field_name}[1]"),
        )
    raise ValidationError(f"'{field_name}' must be a point {{x, y}} or [x, y].")


def validate_id(value: Any, field_name: str) -> str:
    """Ids may be strings or integers; surrounding whitespace is dropped."""
    if isinstance(value, bool) or not isinstance(value, (str, int)) or str(value).strip() == "":
        raise ValidationError(f"'{field_name}' must be a non-empty string.")
    return str(value).strip()


def validate_node_dict(n: Any, index: int) -> NodeGeometry:
    """Validate one node entry and convert it to :class:`NodeGeometry`."""
    prefix = f"nodes[{index}]"
    validate_dict(n, prefix)
    if "id" not in n:
        raise ValidationError(f"{prefix} is missing required key 'id'.")
    node_id = validate_id(n["id"], f"{prefix}.id")
    for key in ("x", "y"):
        if key not in n:
            raise ValidationError(f"{prefix} is missing required key '{key}'.")
        validate_number(n[key], f"{prefix}.{key}")
    for key in ("width", "height"):
        if key not in n:
            raise ValidationError(f"{prefix} is missing required key '{key}'.")
        validate_number(n[key], f"{prefix}.{key}", min_val=0)
    return NodeGeometry.from_dict({**n, "id": node_id})


def validate_nodes(value: Any) -> list[NodeGeometry]:
    """Validate the node list; ids must be unique."""
    items = validate_list(value, "nodes")
    nodes = [validate_node_dict(n, i) for i, n in enumerate(items)]
    seen: set[str] = set()
    for node in nodes:
        if node.id in seen:
            raise ValidationError(f"Duplicate node id '{node.id}'.")
        seen.add(node.id)
    return nodes


def validate_edge_dict(e: Any, index: int) -> DiagramEdge:
    """Validate one edge entry; handles and routing are parsed permissively."""
    prefix = f"edges[{index}]"
    validate_dict(e, prefix)
    ids: dict[str, str] = {}
    for key in ("id", "source", "target"):
        if key not in e:
            raise ValidationError(f"{prefix} is missing required key '{key}'.")
        ids[key] = validate_id(e[key], f"{prefix}.{key}")
    if "curve" in e and not isinstance(e["curve"], bool):
        raise ValidationError(f"'{prefix}.curve' must be a boolean.")
    return DiagramEdge.from_dict({**e, **ids})


def validate_edges(value: Any) -> list[DiagramEdge]:
    items = validate_list(value, "edges")
    return [validate_edge_dict(e, i) for i, e in enumerate(items)]
