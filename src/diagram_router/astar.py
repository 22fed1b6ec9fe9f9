"""
A* search over the implicit routing grid.

Nodes are addressed by their (x index, y index) into the grid lines, so no
explicit graph is ever built.  Each move steps to the adjacent grid line on
one axis, which keeps every segment orthogonal.
"""

from __future__ import annotations

import heapq
import time
from dataclasses import dataclass, field
from typing import Collection, Optional, Sequence

from diagram_router.collision import move_blocked
from diagram_router.geometry import manhattan
from diagram_router.grid import generate_grid
from diagram_router.models import Grid, NodeGeometry, Point


# Neighbour order: x before y, decreasing before increasing.
_STEPS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class SearchResult:
    """Outcome of a search.

    ``points`` is the orthogonal path when ``found`` is true, otherwise the
    straight ``[start, end]`` fallback.
    """
    points: list[Point]
    found: bool
    iterations: int = 0
    grid: Optional[Grid] = field(default=None, repr=False)


def find_orthogonal_path(
    start: Point,
    end: Point,
    nodes: Sequence[NodeGeometry],
    exclude_ids: Collection[str],
    *,
    grid: Optional[Grid] = None,
    grid_margin: float = 20,
    collision_buffer: float = 10,
    goal_tolerance: float = 5,
    max_iterations: int = 3000,
    deadline: Optional[float] = None,
    segment_collision: bool = False,
) -> SearchResult:
    """Find a Manhattan-shortest orthogonal path on the routing grid.

    Args:
        start: Search origin; its coordinates are always grid lines.
        end: Search goal.
        nodes: Every node on the canvas.
        exclude_ids: Nodes the path may cross (the edge's own endpoints).
        grid: Precomputed grid; built from *nodes* when omitted.
        grid_margin: Inflation used for grid lines when building the grid.
        collision_buffer: Inflation used for collision checks.
        goal_tolerance: Per-axis distance at which the goal counts as reached.
        max_iterations: Cap on node expansions.
        deadline: Absolute ``time.monotonic()`` value after which to give up.
        segment_collision: Test whole moves instead of their midpoints.

    Returns:
        A :class:`SearchResult`.  The search never raises on geometry; when
        it runs dry or out of budget, or *start* is not on the supplied
        *grid*, the result carries ``[start, end]``.
    """
    if grid is None:
        grid = generate_grid(start, end, nodes, grid_margin)
    xs, ys = grid.x_lines, grid.y_lines
    x_index = {x: i for i, x in enumerate(xs)}
    y_index = {y: i for i, y in enumerate(ys)}
    exclude = frozenset(exclude_ids)

    def _h(xi: int, yi: int) -> float:
        return abs(xs[xi] - end.x) + abs(ys[yi] - end.y)

    if start.x not in x_index or start.y not in y_index:
        return SearchResult(points=[start, end], found=False, iterations=0, grid=grid)

    origin = (x_index[start.x], y_index[start.y])
    g_score: dict[tuple[int, int], float] = {origin: 0.0}
    came_from: dict[tuple[int, int], tuple[int, int]] = {}
    closed: set[tuple[int, int]] = set()

    # (f, insertion counter, key); the counter keeps ties in insertion order.
    counter = 0
    open_set: list[tuple[float, int, tuple[int, int]]] = [(_h(*origin), counter, origin)]

    iterations = 0
    while open_set:
        if iterations >= max_iterations:
            break
        if deadline is not None and time.monotonic() > deadline:
            break

        _, _, current = heapq.heappop(open_set)
        if current in closed:
            # Stale entry superseded by a cheaper push.
            continue
        iterations += 1

        xi, yi = current
        cx, cy = xs[xi], ys[yi]
        if abs(cx - end.x) < goal_tolerance and abs(cy - end.y) < goal_tolerance:
            return SearchResult(
                points=_reconstruct(current, came_from, xs, ys),
                found=True,
                iterations=iterations,
                grid=grid,
            )

        closed.add(current)

        for dxi, dyi in _STEPS:
            nxi, nyi = xi + dxi, yi + dyi
            if not (0 <= nxi < len(xs) and 0 <= nyi < len(ys)):
                continue
            neighbor = (nxi, nyi)
            if neighbor in closed:
                continue
            nx, ny = xs[nxi], ys[nyi]
            if move_blocked(cx, cy, nx, ny, nodes, exclude,
                            buffer=collision_buffer, segment=segment_collision):
                continue

            tent_g = g_score[current] + manhattan(Point(cx, cy), Point(nx, ny))
            if tent_g >= g_score.get(neighbor, float("inf")):
                continue
            g_score[neighbor] = tent_g
            came_from[neighbor] = current
            counter += 1
            heapq.heappush(open_set, (tent_g + _h(nxi, nyi), counter, neighbor))

    return SearchResult(points=[start, end], found=False, iterations=iterations, grid=grid)


def _reconstruct(
    node: tuple[int, int],
    came_from: dict[tuple[int, int], tuple[int, int]],
    xs: Sequence[float],
    ys: Sequence[float],
) -> list[Point]:
    path: list[Point] = []
    key: Optional[tuple[int, int]] = node
    while key is not None:
        path.append(Point(xs[key[0]], ys[key[1]]))
        key = came_from.get(key)
    path.reverse()
    return path
