"""
Collision tests used while expanding the search.

The search only asks about the midpoint of each move.  A move always spans
two adjacent grid lines and every node side sits on a grid line, so the
midpoint lands inside any node the move would cut through.  Obstacles
thinner than the grid spacing can still be tunnelled; pass
``segment=True`` to :func:`move_blocked` for the exact test.
"""

from __future__ import annotations

from typing import Collection, Iterable

from diagram_router.geometry import contains, inflate, rectangle_of
from diagram_router.models import NodeGeometry, Rect


def is_blocked(
    x: float,
    y: float,
    nodes: Iterable[NodeGeometry],
    exclude_ids: Collection[str],
    buffer: float = 10,
) -> bool:
    """True when (x, y) is strictly inside an inflated node not in *exclude_ids*."""
    for node in nodes:
        if node.id in exclude_ids:
            continue
        if contains(inflate(rectangle_of(node), buffer), x, y):
            return True
    return False


def segment_hits_rect(
    x1: float, y1: float, x2: float, y2: float,
    rect: Rect,
) -> bool:
    """Does an axis-aligned segment pass through the interior of *rect*?

    Running flush along a side does not count.
    """
    if x1 == x2:
        lo, hi = min(y1, y2), max(y1, y2)
        return rect.left < x1 < rect.right and hi > rect.top and lo < rect.bottom
    if y1 == y2:
        lo, hi = min(x1, x2), max(x1, x2)
        return rect.top < y1 < rect.bottom and hi > rect.left and lo < rect.right
    raise ValueError("segment is not axis-aligned")


def move_blocked(
    x1: float, y1: float, x2: float, y2: float,
    nodes: Iterable[NodeGeometry],
    exclude_ids: Collection[str],
    buffer: float = 10,
    segment: bool = False,
) -> bool:
    """Check one orthogonal move of the search."""
    if not segment:
        return is_blocked((x1 + x2) / 2, (y1 + y2) / 2, nodes, exclude_ids, buffer)
    for node in nodes:
        if node.id in exclude_ids:
            continue
        if segment_hits_rect(x1, y1, x2, y2, inflate(rectangle_of(node), buffer)):
            return True
    return False
