"""
Sparse routing grid built from obstacle boundaries.

Instead of rasterising the canvas, only the coordinates where something
interesting happens become grid lines: the two endpoints and the inflated
sides of every node.  The grid therefore grows with the number of nodes,
not with the canvas size.
"""

from __future__ import annotations

import math
from typing import Iterable

from diagram_router.geometry import inflate, rectangle_of
from diagram_router.models import Grid, NodeGeometry, Point


def generate_grid(
    start: Point,
    end: Point,
    nodes: Iterable[NodeGeometry],
    margin: float = 20,
) -> Grid:
    """Build the grid for a single route.

    Endpoint coordinates are kept exact so the search can finish on them.
    Node sides are inflated by *margin* and floored to whole pixels.

    Args:
        start: Where the search starts.
        end: Where the search should finish.
        nodes: Every node on the canvas, including the edge's own nodes.
        margin: Clearance between a node and the channel running beside it.

    Returns:
        The grid with both axes sorted ascending.
    """
    xs: set[float] = {start.x, end.x}
    ys: set[float] = {start.y, end.y}

    for node in nodes:
        r = inflate(rectangle_of(node), margin)
        xs.add(math.floor(r.left))
        xs.add(math.floor(r.right))
        ys.add(math.floor(r.top))
        ys.add(math.floor(r.bottom))

    return Grid(x_lines=tuple(sorted(xs)), y_lines=tuple(sorted(ys)))
