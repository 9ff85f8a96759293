"""Integer rectangles and axis-aligned bounding box tests."""

from __future__ import annotations

from typing import NamedTuple


class Rect(NamedTuple):
    """An integer rectangle: top-left corner plus width and height."""

    x: int
    y: int
    w: int
    h: int


def check_aabb_collision(a: Rect, b: Rect) -> bool:
    """Return True if the two rectangles overlap; touching edges do not count."""
    return (
        a.x + a.w > b.x
        and b.x + b.w > a.x
        and a.y + a.h > b.y
        and b.y + b.h > a.y
    )