"""A rigid body that moves a transform and collides with static walls."""

from __future__ import annotations

import math
from collections.abc import Iterable

from platformer2d.collision import Rect, check_aabb_collision
from platformer2d.vector import TransformComponent, Vector2f

_STEP_SIZE = 1.0


class PhysicsBody:
    """Velocity, gravity and collision handling for an attached transform.

    Without a transform the body does not move and reports the origin as its
    position.
    """

    def __init__(
        self,
        transform: TransformComponent | None = None,
        max_fall_speed: float = 500.0,
    ) -> None:
        self.velocity = Vector2f()
        self.max_fall_speed = max_fall_speed
        self.transform = transform
        self._rect = Rect(0, 0, 0, 0)

    def place(self, x: float, y: float, w: int, h: int) -> None:
        """Set the position and the collision box size."""
        if self.transform is None:
            return
        self.transform.position = Vector2f(x, y)
        self._rect = Rect(int(x), int(y), w, h)

    def set_position(self, x: float, y: float) -> None:
        if self.transform is None:
            return
        self.transform.position = Vector2f(x, y)
        self._sync_rect()

    @property
    def position(self) -> Vector2f:
        if self.transform is None:
            return Vector2f()
        return self.transform.position

    @property
    def rect(self) -> Rect:
        return self._rect

    def apply_gravity(self, gravity: float, delta_time: float) -> None:
        self.velocity.y += gravity * delta_time
        if self.velocity.y > self.max_fall_speed:
            self.velocity.y = self.max_fall_speed

    def update(self, delta_time: float) -> None:
        """Move by velocity without collision checks."""
        if self.transform is None:
            return
        self.transform.position += self.velocity * delta_time
        self._sync_rect()

    def move_with_collision(self, walls: Iterable[Rect], delta: Vector2f) -> None:
        """Move by ``delta`` in unit steps, resolving X then Y against each wall.

        Hitting a wall on an axis snaps the body against it and zeroes the
        velocity on that axis.
        """
        if self.transform is None:
            return
        if delta.x == 0.0 and delta.y == 0.0:
            return

        walls = tuple(walls)
        position = self.transform.position
        steps = math.ceil(math.hypot(delta.x, delta.y) / _STEP_SIZE)
        if steps <= 0:
            return
        step = Vector2f(delta.x / steps, delta.y / steps)

        for _ in range(steps):
            position.x += step.x
            self._sync_rect()
            wall = self._first_hit(walls)
            if wall is not None:
                if step.x > 0.0:
                    position.x = wall.x - self._rect.w
                elif step.x < 0.0:
                    position.x = wall.x + wall.w
                self.velocity.x = 0.0
                self._sync_rect()

            position.y += step.y
            self._sync_rect()
            wall = self._first_hit(walls)
            if wall is not None:
                if step.y > 0.0:
                    position.y = wall.y - self._rect.h
                elif step.y < 0.0:
                    position.y = wall.y + wall.h
                self.velocity.y = 0.0
                self._sync_rect()

    def _first_hit(self, walls: tuple[Rect, ...]) -> Rect | None:
        return next((w for w in walls if check_aabb_collision(self._rect, w)), None)

    def _sync_rect(self) -> None:
        if self.transform is None:
            return
        pos = self.transform.position
        self._rect = self._rect._replace(x=int(pos.x), y=int(pos.y))