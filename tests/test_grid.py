"""Tests for the sparse routing grid."""

from diagram_router.grid import generate_grid
from diagram_router.models import Grid, NodeGeometry, Point


def test_empty_canvas_uses_only_endpoints() -> None:
    grid = generate_grid(Point(0, 50), Point(200, 50), [])
    assert grid == Grid(x_lines=(0, 200), y_lines=(50,))


def test_obstacle_sides_become_lines(blocked_row: list[NodeGeometry]) -> None:
    grid = generate_grid(Point(0, 50), Point(200, 50), blocked_row, margin=20)
    assert grid.x_lines == (-80, 0, 20, 60, 140, 180, 200, 280)
    assert grid.y_lines == (-20, 10, 50, 90, 120)


def test_lines_sorted_and_unique() -> None:
    nodes = [NodeGeometry("a", 0, 0, 10, 10), NodeGeometry("b", 0, 0, 10, 10)]
    grid = generate_grid(Point(50, 50), Point(-50, -50), nodes, margin=5)
    assert list(grid.x_lines) == sorted(set(grid.x_lines))
    assert list(grid.y_lines) == sorted(set(grid.y_lines))
    assert grid.x_lines == (-50, -5, 15, 50)


def test_node_sides_floored_endpoints_exact() -> None:
    nodes = [NodeGeometry("a", 10.5, 10.5, 10, 10)]
    grid = generate_grid(Point(0.25, 0.75), Point(99.5, 99.5), nodes, margin=20)
    assert 0.25 in grid.x_lines
    assert 99.5 in grid.x_lines
    assert 0.75 in grid.y_lines
    # 10.5 - 20 = -9.5 -> -10 ; 20.5 + 20 = 40.5 -> 40
    assert -10 in grid.x_lines
    assert 40 in grid.x_lines


def test_to_dict() -> None:
    grid = generate_grid(Point(0, 0), Point(10, 20), [])
    assert grid.to_dict() == {"x_lines": [0, 10], "y_lines": [0, 20]}
