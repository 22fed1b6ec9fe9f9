"""
Diagram Router MCP Server — compute edge paths for diagram editors via
Model Context Protocol.

Exposes a single ``route`` tool; the ``action`` parameter picks the
operation:
  1. edge     — route one edge between two nodes
  2. diagram  — route every edge of a diagram
  3. grid     — show the routing grid an orthogonal edge would search
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from diagram_router.geometry import handle_position, offset_point
from diagram_router.grid import generate_grid
from diagram_router.models import HandleDirection, NodeGeometry
from diagram_router.path import to_svg_path
from diagram_router.router import EdgeRoute, RouterConfig, route_diagram_edges, route_edge
from diagram_router.validation import (
    ValidationError,
    validate_action,
    validate_edges,
    validate_non_empty_string,
    validate_nodes,
    validate_number,
    validate_point,
    validate_positive_int,
    _ROUTE_ACTIONS,
)

# ---------------------------------------------------------------------------
# Logging — keep FastMCP's routine INFO chatter off stderr.
# ---------------------------------------------------------------------------
logging.getLogger("mcp.server").setLevel(logging.WARNING)
logger = logging.getLogger("diagram-router")

# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------
mcp = FastMCP(
    "diagram-router",
    instructions=(
        "MCP server that computes edge paths between shapes on a 2-D canvas.\n\n"
        "One tool: route(action, ...).\n"
        "- route(action='edge')    — path for one edge between source_id and target_id.\n"
        "- route(action='diagram') — paths for every edge in 'edges'.\n"
        "- route(action='grid')    — candidate grid lines for an orthogonal edge.\n\n"
        "Nodes are {id, x, y, width, height} in canvas pixels (y grows down).\n"
        "routing='orthogonal' weaves right-angle segments around other nodes;\n"
        "routing='default' draws a straight line, or a bezier when curve=true.\n"
        "Details on modes and handles: resource router://guide.\n"
    ),
)


# ===================================================================
# RESOURCES
# ===================================================================

@mcp.resource("router://guide")
def routing_guide() -> str:
    """How routing modes, handles and options interact."""
    return (
        "# Edge routing guide\n\n"
        "## Modes\n"
        "- default + curve=false: straight line from start to end.\n"
        "- default + curve=true: cubic bezier; control points are pulled out\n"
        "  along each handle by half the start/end distance.\n"
        "- orthogonal + curve=false: right-angle path around other nodes.\n"
        "- orthogonal + curve=true: same path with rounded corners.\n\n"
        "## Handles\n"
        "top / right / bottom / left attach the edge to the middle of that side.\n"
        "Orthogonal routes leave a handle straight outwards before turning.\n"
        "Without a handle the edge attaches to the node centre.\n"
        "Unknown handle or routing names are ignored rather than rejected.\n\n"
        "## Failure\n"
        "If no orthogonal path is found within the iteration budget the edge\n"
        "is drawn as a straight line; 'found' is false in the result.\n"
    )


# ===================================================================
# TOOL: route
# ===================================================================

@mcp.tool()
def route(
    action: str,
    nodes: list[dict[str, Any]] | None = None,
    # -- edge / grid --
    source_id: str = "",
    target_id: str = "",
    source_handle: str = "",
    target_handle: str = "",
    start: dict[str, float] | None = None,
    end: dict[str, float] | None = None,
    routing: str = "orthogonal",
    curve: bool = False,
    # -- diagram --
    edges: list[dict[str, Any]] | None = None,
    # -- tuning --
    grid_margin: float = 20,
    collision_buffer: float = 10,
    handle_offset: float = 20,
    corner_radius: float = 10,
    max_iterations: int = 3000,
    segment_collision: bool = False,
    simplify: bool = False,
) -> str:
    """Edge routing operations.

    Actions:
      edge     — Route one edge. Params: nodes, source_id, target_id,
                 source_handle?, target_handle?, start?, end?, routing, curve.
                 start/end default to the handle positions.
      diagram  — Route every edge. Params: nodes, edges (list of {id, source,
                 target, source_handle?, target_handle?, routing?, curve?}).
      grid     — Grid lines for an orthogonal edge. Same params as edge.

    Tuning params (all actions): grid_margin, collision_buffer,
    handle_offset, corner_radius, max_iterations, segment_collision, simplify.

    Returns:
        JSON results or an error message.
    """
    try:
        action = validate_action(action, "route", _ROUTE_ACTIONS)
        node_list = validate_nodes(nodes if nodes is not None else [])
        config = RouterConfig(
            grid_margin=validate_number(grid_margin, "grid_margin", min_val=0),
            collision_buffer=validate_number(collision_buffer, "collision_buffer", min_val=0),
            handle_offset=validate_number(handle_offset, "handle_offset", min_val=0),
            corner_radius=validate_number(corner_radius, "corner_radius", min_val=0),
            max_iterations=validate_positive_int(max_iterations, "max_iterations"),
            segment_collision=bool(segment_collision),
            simplify=bool(simplify),
        )
    except ValidationError as exc:
        return f"Error: {exc.message}"

    try:
        if action == "DIAGRAM":
            edge_list = validate_edges(edges if edges is not None else [])
            routes = route_diagram_edges(node_list, edge_list, config)
            logger.debug("Routed %d of %d edges", len(routes), len(edge_list))
            return json.dumps({eid: _route_to_dict(r) for eid, r in routes.items()}, indent=2)

        by_id = {n.id: n for n in node_list}
        source = _lookup(by_id, source_id, "source_id")
        target = _lookup(by_id, target_id, "target_id")
        src_handle = HandleDirection.parse(source_handle)
        tgt_handle = HandleDirection.parse(target_handle)
        start_pt = validate_point(start, "start") if start is not None else handle_position(source, src_handle)
        end_pt = validate_point(end, "end") if end is not None else handle_position(target, tgt_handle)
    except ValidationError as exc:
        return f"Error: {exc.message}"

    if action == "GRID":
        grid = generate_grid(
            offset_point(start_pt, src_handle, config.handle_offset),
            offset_point(end_pt, tgt_handle, config.handle_offset),
            node_list,
            config.grid_margin,
        )
        return json.dumps(grid.to_dict(), indent=2)

    result = route_edge(
        start_pt, end_pt, source, target, src_handle, tgt_handle,
        node_list, routing, curve, config,
    )
    return json.dumps(_route_to_dict(result), indent=2)


# ===================================================================
# Helpers
# ===================================================================

def _lookup(by_id: dict[str, NodeGeometry], node_id: str, field_name: str) -> NodeGeometry:
    node_id = validate_non_empty_string(node_id, field_name)
    node = by_id.get(node_id)
    if node is None:
        raise ValidationError(f"'{field_name}' refers to unknown node '{node_id}'.")
    return node


def _route_to_dict(r: EdgeRoute) -> dict[str, Any]:
    out: dict[str, Any] = {
        "path": to_svg_path(r.commands),
        "mode": r.mode.value,
        "commands": [c.to_dict() for c in r.commands],
        "points": [p.to_dict() for p in r.points],
    }
    if r.found is not None:
        out["found"] = r.found
        out["iterations"] = r.iterations
    return out


# ===================================================================
# Entry point
# ===================================================================

def main() -> None:
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
