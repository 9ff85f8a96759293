"""Sprite-sheet animations, a per-entity controller and a shared registry."""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from typing import Any

from platformer2d.collision import Rect

FRAME_STEP_MS = 16
"""Milliseconds added on every update (about 60 frames per second)."""


@dataclass
class Animation:
    """A row of equally sized frames in a sprite sheet."""

    frame_width: int = 0
    frame_height: int = 0
    total_frames: int = 1
    frame_duration: int = 100
    row: int = 0
    spacing_x: int = 0
    spacing_y: int = 0
    margin_x: int = 0
    margin_y: int = 0
    current_frame: int = field(default=0, init=False)
    elapsed_time: int = field(default=0, init=False)

    def update(self) -> None:
        """Advance the clock by one frame step, moving on when the frame expires."""
        self.elapsed_time += FRAME_STEP_MS
        if self.elapsed_time >= self.frame_duration:
            self.elapsed_time = 0
            self.current_frame = (self.current_frame + 1) % self.total_frames

    def reset(self) -> None:
        self.current_frame = 0
        self.elapsed_time = 0

    def set_frame(self, frame: int) -> None:
        """Jump to a frame; frames outside the animation are ignored."""
        if 0 <= frame < self.total_frames:
            self.current_frame = frame
            self.elapsed_time = 0

    def set_row(self, row: int) -> None:
        self.row = row

    def current_frame_rect(self) -> Rect:
        """The source rectangle of the current frame in the sprite sheet."""
        return Rect(
            self.margin_x + self.current_frame * (self.frame_width + self.spacing_x),
            self.margin_y + self.row * (self.frame_height + self.spacing_y),
            self.frame_width,
            self.frame_height,
        )

    def copy(self) -> Animation:
        """An independent copy including the playback state."""
        return copy.copy(self)


class AnimationController:
    """Holds named animations of one entity and plays one of them."""

    def __init__(self) -> None:
        self._animations: dict[str, Animation] = {}
        self._current: str | None = None

    def add(self, name: str, animation: Animation) -> None:
        """Store a copy of the animation; the first one added becomes current."""
        self._animations[name] = animation.copy()
        if self._current is None:
            self._current = name

    def play(self, name: str, reset_if_same: bool = False) -> None:
        """Switch to the named animation from its first frame.

        Playing the current animation again does nothing unless
        ``reset_if_same`` is set. Unknown names raise KeyError.
        """
        if name == self.current_name and not reset_if_same:
            return
        try:
            animation = self._animations[name]
        except KeyError:
            raise KeyError(f"animation {name!r} not found in controller") from None
        self._current = name
        animation.reset()

    @property
    def _active(self) -> Animation | None:
        if self._current is None:
            return None
        return self._animations[self._current]

    def update(self) -> None:
        active = self._active
        if active is not None:
            active.update()

    def reset(self) -> None:
        active = self._active
        if active is not None:
            active.reset()

    def current_frame_rect(self) -> Rect:
        active = self._active
        return active.current_frame_rect() if active is not None else Rect(0, 0, 0, 0)

    @property
    def current_name(self) -> str:
        return self._current if self._current is not None else ""

    def __contains__(self, name: object) -> bool:
        return name in self._animations


_REQUIRED = ("name", "row", "frames", "frameTime")


def _require(entry: dict[str, Any], key: str) -> Any:
    try:
        return entry[key]
    except KeyError:
        raise ValueError(f"animation entry missing {key!r}") from None


class AnimationManager:
    """Registry of animations loaded from a JSON configuration file."""

    def __init__(self) -> None:
        self._animations: dict[str, Animation] = {}

    def load_from_file(
        self,
        path: str | os.PathLike[str],
        default_frame_width: int,
        default_frame_height: int,
    ) -> None:
        """Load animations from a JSON file.

        Raises OSError if the file cannot be read and ValueError if it is not
        valid JSON or an entry lacks a required field.
        """
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError("animation config must be a JSON object")
        entries = data.get("animations")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ValueError("'animations' must be a list")

        loaded: dict[str, Animation] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValueError("animation entry must be a JSON object")
            name, row, frames, frame_time = (_require(entry, key) for key in _REQUIRED)
            loaded[str(name)] = Animation(
                frame_width=int(entry.get("width", default_frame_width)),
                frame_height=int(entry.get("height", default_frame_height)),
                total_frames=int(frames),
                frame_duration=int(frame_time),
                row=int(row),
                spacing_x=int(entry.get("spacingX", 0)),
                spacing_y=int(entry.get("spacingY", 0)),
                margin_x=int(entry.get("marginX", 0)),
                margin_y=int(entry.get("marginY", 0)),
            )
        self._animations.update(loaded)

    def get(self, name: str) -> Animation:
        """Return the named animation; raises KeyError if it is unknown."""
        return self._animations[name]

    def __contains__(self, name: object) -> bool:
        return name in self._animations