"""Two-dimensional vectors and the transform component built on them."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Vector2f:
    """A mutable 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __mul__(self, scalar: float) -> Vector2f:
        return Vector2f(self.x * scalar, self.y * scalar)

    def __add__(self, other: Vector2f) -> Vector2f:
        return Vector2f(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2f) -> Vector2f:
        return Vector2f(self.x - other.x, self.y - other.y)

    def __iadd__(self, other: Vector2f) -> Vector2f:
        self.x += other.x
        self.y += other.y
        return self


def _unit_scale() -> Vector2f:
    return Vector2f(1.0, 1.0)


@dataclass
class TransformComponent:
    """Position, scale and rotation of an entity."""

    position: Vector2f = field(default_factory=Vector2f)
    scale: Vector2f = field(default_factory=_unit_scale)
    rotation: float = 0.0