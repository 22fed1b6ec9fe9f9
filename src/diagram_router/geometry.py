"""
Rectangle and point helpers shared by the routing stages.
"""

from __future__ import annotations

import math
from typing import Optional

from diagram_router.models import HandleDirection, NodeGeometry, Point, Rect


def rectangle_of(node: NodeGeometry) -> Rect:
    """Bounding box of a node."""
    return Rect(
        left=node.x,
        top=node.y,
        right=node.x + node.width,
        bottom=node.y + node.height,
    )


def inflate(rect: Rect, margin: float) -> Rect:
    """Grow every side of *rect* outwards by *margin*."""
    return Rect(
        left=rect.left - margin,
        top=rect.top - margin,
        right=rect.right + margin,
        bottom=rect.bottom + margin,
    )


def contains(rect: Rect, x: float, y: float) -> bool:
    """Strict interior test; points on the boundary are outside."""
    return rect.left < x < rect.right and rect.top < y < rect.bottom


def manhattan(a: Point, b: Point) -> float:
    return abs(a.x - b.x) + abs(a.y - b.y)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def handle_position(node: NodeGeometry, handle: Optional[HandleDirection]) -> Point:
    """Anchor point of *handle* on *node*: the middle of that side, or the centre."""
    cx = node.x + node.width / 2
    cy = node.y + node.height / 2
    if handle is HandleDirection.TOP:
        return Point(cx, node.y)
    if handle is HandleDirection.RIGHT:
        return Point(node.x + node.width, cy)
    if handle is HandleDirection.BOTTOM:
        return Point(cx, node.y + node.height)
    if handle is HandleDirection.LEFT:
        return Point(node.x, cy)
    return Point(cx, cy)


def offset_point(point: Point, handle: Optional[HandleDirection], amount: float) -> Point:
    """Push *point* *amount* units outwards along *handle*; no handle, no move."""
    if handle is None:
        return point
    ux, uy = handle.unit
    return Point(point.x + ux * amount, point.y + uy * amount)
