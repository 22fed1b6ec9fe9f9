"""
Core value types for the diagram edge router.

Every routing request builds these fresh from a snapshot of the diagram
and discards them once the path commands have been returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class HandleDirection(Enum):
    """Side of a node an edge attaches to."""
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @classmethod
    def parse(cls, value: Any) -> Optional["HandleDirection"]:
        """Permissive conversion: anything unrecognised means *no handle*."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def unit(self) -> tuple[float, float]:
        """Outward unit vector in canvas space (y grows downwards)."""
        return _HANDLE_VECTORS[self]


_HANDLE_VECTORS: dict[HandleDirection, tuple[float, float]] = {
    HandleDirection.TOP: (0.0, -1.0),
    HandleDirection.RIGHT: (1.0, 0.0),
    HandleDirection.BOTTOM: (0.0, 1.0),
    HandleDirection.LEFT: (-1.0, 0.0),
}


class RoutingMode(Enum):
    DEFAULT = "default"
    ORTHOGONAL = "orthogonal"

    @classmethod
    def parse(cls, value: Any) -> "RoutingMode":
        """Permissive conversion: anything unrecognised is ``DEFAULT``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.DEFAULT


class CommandKind(Enum):
    MOVE = "M"
    LINE = "L"
    QUAD = "Q"
    CUBIC = "C"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Point:
    """A 2-D coordinate in canvas pixels."""
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its four sides."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def cx(self) -> float:
        return self.left + self.width / 2

    @property
    def cy(self) -> float:
        return self.top + self.height / 2


@dataclass(frozen=True)
class NodeGeometry:
    """The part of a diagram node the router cares about."""
    id: str
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeGeometry":
        return cls(
            id=str(data["id"]),
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )


@dataclass(frozen=True)
class DiagramEdge:
    """A connection between two nodes as stored by the diagram editor."""
    id: str
    source: str
    target: str
    source_handle: Optional[HandleDirection] = None
    target_handle: Optional[HandleDirection] = None
    routing: RoutingMode = RoutingMode.DEFAULT
    curve: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiagramEdge":
        return cls(
            id=str(data["id"]),
            source=str(data["source"]),
            target=str(data["target"]),
            source_handle=HandleDirection.parse(data.get("source_handle")),
            target_handle=HandleDirection.parse(data.get("target_handle")),
            routing=RoutingMode.parse(data.get("routing")),
            curve=data.get("curve") is True,
        )


@dataclass(frozen=True)
class Grid:
    """Sorted, de-duplicated coordinates the search may visit."""
    x_lines: tuple[float, ...]
    y_lines: tuple[float, ...]

    def to_dict(self) -> dict[str, list[float]]:
        return {"x_lines": list(self.x_lines), "y_lines": list(self.y_lines)}


@dataclass(frozen=True)
class PathCommand:
    """One drawing instruction; ``points`` holds control points then the end point."""
    kind: CommandKind
    points: tuple[Point, ...] = field(default_factory=tuple)

    @property
    def end(self) -> Point:
        return self.points[-1]

    def to_svg(self) -> str:
        coords = " ".join(f"{_fmt(p.x)} {_fmt(p.y)}" for p in self.points)
        return f"{self.kind.value} {coords}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "points": [p.to_dict() for p in self.points],
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fmt(value: float) -> str:
    """Compact number formatting for path strings (``10`` rather than ``10.0``)."""
    value = round(float(value), 3)
    if value.is_integer():
        return str(int(value))
    return repr(value)
