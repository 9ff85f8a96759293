"""Keyboard, window-event and gamepad state, polled once per frame."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

import pygame

log = logging.getLogger(__name__)


class Gamepad(Protocol):
    """The part of a joystick object the input manager relies on."""

    def get_numbuttons(self) -> int: ...

    def get_button(self, index: int) -> bool: ...

    def get_numhats(self) -> int: ...

    def get_hat(self, index: int) -> tuple[int, int]: ...

    def quit(self) -> None: ...


# Directional pad buttons read from the first hat: (hat axis, sign).
_DPAD = {
    pygame.CONTROLLER_BUTTON_DPAD_LEFT: (0, -1),
    pygame.CONTROLLER_BUTTON_DPAD_RIGHT: (0, 1),
    pygame.CONTROLLER_BUTTON_DPAD_UP: (1, 1),
    pygame.CONTROLLER_BUTTON_DPAD_DOWN: (1, -1),
}


def _open_first_joystick() -> Gamepad | None:
    if not pygame.joystick.get_init():
        pygame.joystick.init()
    if pygame.joystick.get_count() == 0:
        return None
    try:
        return pygame.joystick.Joystick(0)
    except pygame.error as exc:
        log.warning("gamepad not opened: %s", exc)
        return None


def _toggle_fullscreen(preferred_width: int, preferred_height: int) -> None:
    surface = pygame.display.get_surface()
    if surface is None:
        return
    flags = surface.get_flags()
    if flags & pygame.FULLSCREEN and not flags & pygame.SCALED:
        pygame.display.set_mode((preferred_width, preferred_height), pygame.RESIZABLE)
    else:
        pygame.display.toggle_fullscreen()


def _is_down(state: Any, key: int) -> bool:
    if state is None:
        return False
    try:
        return bool(state[key])
    except (KeyError, IndexError):
        return False


class InputManager:
    """Tracks quit requests, keyboard state and one gamepad.

    ``events`` yields the pending window events, ``key_state`` returns a
    snapshot indexable by key code, ``open_gamepad`` returns a joystick or
    None, and ``toggle_fullscreen`` switches the window mode. All default to
    the pygame display.
    """

    def __init__(
        self,
        events: Callable[[], Iterable[Any]] | None = None,
        key_state: Callable[[], Any] | None = None,
        open_gamepad: Callable[[], Gamepad | None] | None = None,
        toggle_fullscreen: Callable[[int, int], None] | None = None,
    ) -> None:
        self._events = events or pygame.event.get
        self._key_state = key_state or pygame.key.get_pressed
        self._open_gamepad = open_gamepad or _open_first_joystick
        self._toggle_fullscreen = toggle_fullscreen or _toggle_fullscreen
        self._current: Any = None
        self._previous: Any = None
        self._gamepad: Gamepad | None = None
        self._quit_requested = False

    def update(self, preferred_width: int, preferred_height: int) -> None:
        """Handle pending events and take a new keyboard snapshot.

        Escape or closing the window requests quitting; F toggles fullscreen,
        restoring the preferred size when going back to a window.
        """
        self._quit_requested = False
        for event in self._events():
            if event.type == pygame.QUIT:
                self._quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._quit_requested = True
                elif event.key == pygame.K_f:
                    self._toggle_fullscreen(preferred_width, preferred_height)
        self._previous = self._current
        self._current = self._key_state()

    def is_key_down(self, key: int) -> bool:
        return _is_down(self._current, key)

    def is_key_pressed(self, key: int) -> bool:
        """True if the key went down since the previous snapshot."""
        return _is_down(self._current, key) and not _is_down(self._previous, key)

    def is_key_released(self, key: int) -> bool:
        """True if the key went up since the previous snapshot."""
        return not _is_down(self._current, key) and _is_down(self._previous, key)

    def should_quit(self) -> bool:
        return self._quit_requested

    def init_gamepad(self) -> None:
        """Open the first gamepad, if one is connected."""
        self._gamepad = self._open_gamepad()

    def close_gamepad(self) -> None:
        if self._gamepad is not None:
            self._gamepad.quit()
            self._gamepad = None

    def is_gamepad_button_down(self, button: int) -> bool:
        """Whether a controller button (``pygame.CONTROLLER_BUTTON_*``) is held."""
        pad = self._gamepad
        if pad is None:
            return False
        if button in _DPAD and pad.get_numhats() > 0:
            axis, sign = _DPAD[button]
            return pad.get_hat(0)[axis] == sign
        if 0 <= button < pad.get_numbuttons():
            return bool(pad.get_button(button))
        return False

    def is_gamepad_connected(self) -> bool:
        return self._gamepad is not None