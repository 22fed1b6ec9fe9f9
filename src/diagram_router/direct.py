"""
Direct routing: a straight line or a handle-aware cubic bezier.

Used for edges in ``default`` mode; it never looks at other nodes.
"""

from __future__ import annotations

from typing import Optional

from diagram_router.geometry import distance, offset_point
from diagram_router.models import CommandKind, HandleDirection, PathCommand, Point


def straight_path(start: Point, end: Point) -> list[PathCommand]:
    return [
        PathCommand(CommandKind.MOVE, (start,)),
        PathCommand(CommandKind.LINE, (end,)),
    ]


def bezier_controls(
    start: Point,
    end: Point,
    source_handle: Optional[HandleDirection],
    target_handle: Optional[HandleDirection],
) -> tuple[Point, Point]:
    """Control points for the curved edge.

    Each control point sits half the start/end distance away from its
    endpoint, in the direction of that endpoint's handle.  Without a source
    handle the first control point is moved to the horizontal midpoint
    instead (kept at the start's y), which gives handle-less edges their
    familiar S shape.
    """
    pull = distance(start, end) * 0.5
    c1 = offset_point(start, source_handle, pull)
    c2 = offset_point(end, target_handle, pull)
    if source_handle is None:
        c1 = Point(start.x + (end.x - start.x) / 2, c1.y)
    return c1, c2


def curved_path(
    start: Point,
    end: Point,
    source_handle: Optional[HandleDirection] = None,
    target_handle: Optional[HandleDirection] = None,
) -> list[PathCommand]:
    c1, c2 = bezier_controls(start, end, source_handle, target_handle)
    return [
        PathCommand(CommandKind.MOVE, (start,)),
        PathCommand(CommandKind.CUBIC, (c1, c2, end)),
    ]


def direct_path(
    start: Point,
    end: Point,
    source_handle: Optional[HandleDirection] = None,
    target_handle: Optional[HandleDirection] = None,
    curve: bool = False,
) -> list[PathCommand]:
    if curve:
        return curved_path(start, end, source_handle, target_handle)
    return straight_path(start, end)
