"""
Edge routing entry points.

``compute_edge_path`` routes one edge: ``default`` edges are drawn directly
(straight or bezier), ``orthogonal`` edges go through the grid search and
are rendered with sharp or rounded corners.  ``route_diagram_edges`` does
the same for every edge of a diagram snapshot.

Routing is pure computation on copies of the caller's data.  It never
raises for awkward geometry; a failed search degrades to a straight line.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from diagram_router.astar import find_orthogonal_path
from diagram_router.direct import direct_path
from diagram_router.geometry import handle_position, offset_point
from diagram_router.grid import generate_grid
from diagram_router.models import (
    DiagramEdge,
    Grid,
    HandleDirection,
    NodeGeometry,
    PathCommand,
    Point,
    RoutingMode,
)
from diagram_router.path import attach_anchors, render_rounded, render_sharp, simplify_path

logger = logging.getLogger("diagram-router")

NodeLike = Union[NodeGeometry, dict[str, Any]]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class RouterConfig:
    """Tuning knobs for the edge router."""
    # Geometry
    grid_margin: float = 20        # Inflation for grid lines (routing channels)
    collision_buffer: float = 10   # Inflation for collision checks
    handle_offset: float = 20      # How far a route leaves a handle before turning
    corner_radius: float = 10      # Rounded-corner radius

    # Search
    goal_tolerance: float = 5
    max_iterations: int = 3000
    time_budget: Optional[float] = None  # Seconds; None means no deadline

    # Behaviour switches
    segment_collision: bool = False  # Exact segment test instead of midpoints
    simplify: bool = False           # Drop collinear points before rendering


@dataclass
class EdgeRoute:
    """Full result of routing one edge."""
    commands: list[PathCommand]
    points: list[Point]
    mode: RoutingMode
    # Only meaningful for orthogonal routes.
    found: Optional[bool] = None
    iterations: int = 0
    grid: Optional[Grid] = field(default=None, repr=False)


# ---------------------------------------------------------------------------
# Single edge
# ---------------------------------------------------------------------------

def compute_edge_path(
    start: Point,
    end: Point,
    source_node: Optional[NodeLike],
    target_node: Optional[NodeLike],
    source_handle: Any = None,
    target_handle: Any = None,
    all_nodes: Iterable[NodeLike] = (),
    mode: Any = RoutingMode.DEFAULT,
    smooth: bool = False,
    config: Optional[RouterConfig] = None,
) -> list[PathCommand]:
    """Route a single edge and return its drawing commands.

    The first command always moves to *start* and the last one always ends
    on *end*.  Unknown *mode* or handle values are treated as ``default``
    and *no handle*.
    """
    return route_edge(
        start, end, source_node, target_node,
        source_handle, target_handle, all_nodes, mode, smooth, config,
    ).commands


def route_edge(
    start: Point,
    end: Point,
    source_node: Optional[NodeLike],
    target_node: Optional[NodeLike],
    source_handle: Any = None,
    target_handle: Any = None,
    all_nodes: Iterable[NodeLike] = (),
    mode: Any = RoutingMode.DEFAULT,
    smooth: bool = False,
    config: Optional[RouterConfig] = None,
) -> EdgeRoute:
    """Like :func:`compute_edge_path` but also reports points and search stats."""
    cfg = config or RouterConfig()
    src_handle = HandleDirection.parse(source_handle)
    tgt_handle = HandleDirection.parse(target_handle)
    routing = RoutingMode.parse(mode)

    if routing is RoutingMode.DEFAULT:
        return EdgeRoute(
            commands=direct_path(start, end, src_handle, tgt_handle, curve=bool(smooth)),
            points=[start, end],
            mode=routing,
        )

    nodes = tuple(_snapshot(n) for n in all_nodes)
    exclude = {
        n.id for n in (_snapshot(source_node), _snapshot(target_node)) if n is not None
    }

    search_start = offset_point(start, src_handle, cfg.handle_offset)
    search_end = offset_point(end, tgt_handle, cfg.handle_offset)
    grid = generate_grid(search_start, search_end, nodes, cfg.grid_margin)
    deadline = time.monotonic() + cfg.time_budget if cfg.time_budget is not None else None

    result = find_orthogonal_path(
        search_start, search_end, nodes, exclude,
        grid=grid,
        collision_buffer=cfg.collision_buffer,
        goal_tolerance=cfg.goal_tolerance,
        max_iterations=cfg.max_iterations,
        deadline=deadline,
        segment_collision=cfg.segment_collision,
    )

    if result.found:
        points = attach_anchors(start, result.points, end)
    else:
        logger.debug(
            "No orthogonal route from (%s, %s) to (%s, %s) after %d expansions; "
            "drawing a straight line",
            start.x, start.y, end.x, end.y, result.iterations,
        )
        points = attach_anchors(start, [], end)

    if cfg.simplify:
        points = simplify_path(points)

    if smooth:
        commands = render_rounded(points, cfg.corner_radius)
    else:
        commands = render_sharp(points)

    return EdgeRoute(
        commands=commands,
        points=points,
        mode=routing,
        found=result.found,
        iterations=result.iterations,
        grid=grid,
    )


# ---------------------------------------------------------------------------
# Whole diagram
# ---------------------------------------------------------------------------

def edge_anchors(
    source: NodeGeometry,
    target: NodeGeometry,
    edge: DiagramEdge,
) -> tuple[Point, Point]:
    """Start and end points of *edge*: handle positions, or node centres."""
    return (
        handle_position(source, edge.source_handle),
        handle_position(target, edge.target_handle),
    )


def route_diagram_edges(
    nodes: Iterable[NodeLike],
    edges: Iterable[Union[DiagramEdge, dict[str, Any]]],
    config: Optional[RouterConfig] = None,
) -> dict[str, EdgeRoute]:
    """Route every edge of a diagram independently.

    Edges pointing at a node that does not exist are skipped.

    Returns:
        Mapping of edge id to its route, in edge order.
    """
    snapshot = tuple(_snapshot(n) for n in nodes)
    by_id = {n.id: n for n in snapshot}

    routes: dict[str, EdgeRoute] = {}
    for raw in edges:
        edge = raw if isinstance(raw, DiagramEdge) else DiagramEdge.from_dict(raw)
        source = by_id.get(edge.source)
        target = by_id.get(edge.target)
        if source is None or target is None:
            logger.warning(
                "Skipping edge '%s': unknown node '%s'",
                edge.id, edge.source if source is None else edge.target,
            )
            continue
        start, end = edge_anchors(source, target, edge)
        routes[edge.id] = route_edge(
            start, end, source, target,
            edge.source_handle, edge.target_handle,
            snapshot, edge.routing, edge.curve, config,
        )
    return routes


def _snapshot(node: Optional[NodeLike]) -> Optional[NodeGeometry]:
    if node is None or isinstance(node, NodeGeometry):
        return node
    return NodeGeometry.from_dict(node)
