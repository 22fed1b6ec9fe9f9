"""Tests for the geometry primitives and value types."""

from diagram_router.geometry import (
    contains,
    handle_position,
    inflate,
    manhattan,
    offset_point,
    rectangle_of,
)
from diagram_router.models import (
    CommandKind,
    HandleDirection,
    NodeGeometry,
    PathCommand,
    Point,
    Rect,
    RoutingMode,
)


NODE = NodeGeometry("n", 10, 20, 30, 40)


def test_rectangle_of() -> None:
    assert rectangle_of(NODE) == Rect(10, 20, 40, 60)


def test_inflate_grows_every_side() -> None:
    r = inflate(Rect(10, 20, 40, 60), 5)
    assert r == Rect(5, 15, 45, 65)
    assert r.width == 40
    assert r.height == 50


def test_contains_is_strict() -> None:
    r = Rect(0, 0, 100, 50)
    assert contains(r, 50, 25)
    assert not contains(r, 0, 25)
    assert not contains(r, 100, 25)
    assert not contains(r, 50, 0)
    assert not contains(r, 50, 50)
    assert not contains(r, 150, 25)


def test_manhattan() -> None:
    assert manhattan(Point(0, 0), Point(3, -4)) == 7


class TestHandles:
    """Handle anchoring and outward offsets."""

    def test_handle_positions(self) -> None:
        assert handle_position(NODE, HandleDirection.TOP) == Point(25, 20)
        assert handle_position(NODE, HandleDirection.RIGHT) == Point(40, 40)
        assert handle_position(NODE, HandleDirection.BOTTOM) == Point(25, 60)
        assert handle_position(NODE, HandleDirection.LEFT) == Point(10, 40)

    def test_no_handle_is_centre(self) -> None:
        assert handle_position(NODE, None) == Point(25, 40)

    def test_offset_point(self) -> None:
        p = Point(10, 10)
        assert offset_point(p, HandleDirection.TOP, 20) == Point(10, -10)
        assert offset_point(p, HandleDirection.RIGHT, 20) == Point(30, 10)
        assert offset_point(p, HandleDirection.BOTTOM, 20) == Point(10, 30)
        assert offset_point(p, HandleDirection.LEFT, 20) == Point(-10, 10)
        assert offset_point(p, None, 20) == p

    def test_parse_handle_is_permissive(self) -> None:
        assert HandleDirection.parse("top") is HandleDirection.TOP
        assert HandleDirection.parse(" Left ") is HandleDirection.LEFT
        assert HandleDirection.parse(HandleDirection.RIGHT) is HandleDirection.RIGHT
        assert HandleDirection.parse("diagonal") is None
        assert HandleDirection.parse("") is None
        assert HandleDirection.parse(None) is None
        assert HandleDirection.parse(3) is None


def test_parse_routing_mode() -> None:
    assert RoutingMode.parse("orthogonal") is RoutingMode.ORTHOGONAL
    assert RoutingMode.parse("ORTHOGONAL") is RoutingMode.ORTHOGONAL
    assert RoutingMode.parse("default") is RoutingMode.DEFAULT
    assert RoutingMode.parse("zigzag") is RoutingMode.DEFAULT
    assert RoutingMode.parse(None) is RoutingMode.DEFAULT


def test_path_command_svg_formatting() -> None:
    cmd = PathCommand(CommandKind.QUAD, (Point(100.0, 0), Point(100, 10.25)))
    assert cmd.to_svg() == "Q 100 0 100 10.25"
    assert cmd.end == Point(100, 10.25)
    assert cmd.to_dict() == {
        "kind": "Q",
        "points": [{"x": 100.0, "y": 0}, {"x": 100, "y": 10.25}],
    }


def test_node_from_dict_copies_values() -> None:
    raw = {"id": 7, "x": "1", "y": 2, "width": 3, "height": 4, "label": "ignored"}
    node = NodeGeometry.from_dict(raw)
    assert node == NodeGeometry("7", 1.0, 2.0, 3.0, 4.0)
    assert raw["id"] == 7
