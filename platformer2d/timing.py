"""Frame timing: capped and smoothed delta time with an optional FPS limit."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _sleep_ms(ms: int) -> None:
    time.sleep(ms / 1000)


class TimeManager:
    """Measures frame times in milliseconds and reports them in seconds.

    ``ticks`` returns the current time in whole milliseconds and ``delay``
    waits for a number of milliseconds; both default to the system clock.
    """

    def __init__(
        self,
        ticks: Callable[[], int] | None = None,
        delay: Callable[[int], None] | None = None,
    ) -> None:
        self._ticks = ticks or _monotonic_ms
        self._delay = delay or _sleep_ms
        self.delta_time = 0.0
        self.max_delta_time = 0.05
        self._last_frame_time = self._ticks()
        self._frame_start_time = 0
        self._target_fps: int | None = None
        self._frame_times: deque[float] = deque()
        self._window = 10

    def update(self) -> None:
        """Measure the last frame and wait out the rest of a capped frame."""
        self._frame_start_time = self._ticks()

        now = self._ticks()
        delta = (now - self._last_frame_time) / 1000.0
        self._last_frame_time = now
        self.delta_time = min(delta, self.max_delta_time)

        self._frame_times.append(self.delta_time)
        if len(self._frame_times) > self._window:
            self._frame_times.popleft()

        self._enforce_frame_cap()

    @property
    def smoothed_delta_time(self) -> float:
        """Mean delta time over the smoothing window."""
        if not self._frame_times:
            return self.delta_time
        return sum(self._frame_times) / len(self._frame_times)

    @property
    def fps(self) -> int:
        smoothed = self.smoothed_delta_time
        return int(1.0 / smoothed) if smoothed > 0.0 else 0

    def disable_frame_cap(self) -> None:
        self._target_fps = None

    @property
    def target_fps(self) -> int | None:
        return self._target_fps

    @target_fps.setter
    def target_fps(self, fps: int) -> None:
        self._target_fps = max(1, fps)

    @property
    def smoothing_window(self) -> int:
        return self._window

    @smoothing_window.setter
    def smoothing_window(self, frames: int) -> None:
        self._window = max(1, frames)

    def _enforce_frame_cap(self) -> None:
        if self._target_fps is None:
            return
        frame_delay = 1000 // self._target_fps
        frame_time = self._ticks() - self._frame_start_time
        if frame_time < frame_delay:
            self._delay(frame_delay - frame_time)