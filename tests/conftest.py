"""Shared fixtures for the router tests."""

import pytest

from diagram_router.models import NodeGeometry


@pytest.fixture
def blocked_row() -> list[NodeGeometry]:
    """Source, obstacle and target side by side on one row.

    The obstacle spans x 80..120 and y 0..100, squarely between the
    source's right side (0, 50) and the target's left side (200, 50).
    """
    return [
        NodeGeometry("a", -60, 30, 60, 40),
        NodeGeometry("o", 80, 0, 40, 100),
        NodeGeometry("b", 200, 30, 60, 40),
    ]
