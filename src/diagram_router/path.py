"""
Turn a list of route points into drawing commands.
"""

from __future__ import annotations

from typing import Sequence

from diagram_router.geometry import distance
from diagram_router.models import CommandKind, PathCommand, Point


def attach_anchors(start: Point, raw: Sequence[Point], end: Point) -> list[Point]:
    """Frame *raw* with the exact anchors.

    A raw endpoint that coincides with its anchor is dropped so the path
    does not carry a zero-length first or last segment.
    """
    points = [start]
    for p in raw:
        if p != points[-1]:
            points.append(p)
    if end != points[-1] or len(points) == 1:
        points.append(end)
    return points


def simplify_path(points: Sequence[Point]) -> list[Point]:
    """Remove interior points that do not change direction.

    Both ends are always kept.
    """
    if len(points) <= 2:
        return list(points)

    result: list[Point] = [points[0]]
    for i in range(1, len(points) - 1):
        prev, cur, nxt = result[-1], points[i], points[i + 1]
        if cur == prev:
            continue
        ax, ay = cur.x - prev.x, cur.y - prev.y
        bx, by = nxt.x - cur.x, nxt.y - cur.y
        # Collinear and still heading the same way: redundant.
        if abs(ax * by - ay * bx) < 1e-9 and ax * bx + ay * by >= 0:
            continue
        result.append(cur)
    result.append(points[-1])
    return result


def corner_radius(prev: Point, corner: Point, nxt: Point, radius: float) -> float:
    """Radius actually usable at *corner*: never more than half of either leg."""
    return min(radius, distance(prev, corner) / 2, distance(corner, nxt) / 2)


def render_sharp(points: Sequence[Point]) -> list[PathCommand]:
    commands = [PathCommand(CommandKind.MOVE, (points[0],))]
    for p in points[1:]:
        commands.append(PathCommand(CommandKind.LINE, (p,)))
    return commands


def render_rounded(points: Sequence[Point], radius: float = 10) -> list[PathCommand]:
    """Replace every interior corner with a quadratic curve.

    The curve starts *r* before the corner on the incoming leg, uses the
    corner as control point and ends *r* after it on the outgoing leg, with
    *r* from :func:`corner_radius`.  Corners whose radius drops below one
    pixel stay sharp.
    """
    commands = [PathCommand(CommandKind.MOVE, (points[0],))]
    for i in range(1, len(points) - 1):
        p1, p2, p3 = points[i - 1], points[i], points[i + 1]
        r = corner_radius(p1, p2, p3, radius)
        if r < 1:
            commands.append(PathCommand(CommandKind.LINE, (p2,)))
            continue

        d1 = distance(p1, p2)
        d2 = distance(p2, p3)
        f1 = (d1 - r) / d1
        f2 = r / d2
        before = Point(p1.x + (p2.x - p1.x) * f1, p1.y + (p2.y - p1.y) * f1)
        after = Point(p2.x + (p3.x - p2.x) * f2, p2.y + (p3.y - p2.y) * f2)
        commands.append(PathCommand(CommandKind.LINE, (before,)))
        commands.append(PathCommand(CommandKind.QUAD, (p2, after)))
    if len(points) > 1:
        commands.append(PathCommand(CommandKind.LINE, (points[-1],)))
    return commands


def to_svg_path(commands: Sequence[PathCommand]) -> str:
    """Serialise commands as an SVG ``d`` attribute."""
    return " ".join(cmd.to_svg() for cmd in commands)
