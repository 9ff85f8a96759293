"""The game: window, scene setup and the main loop."""

from __future__ import annotations

import argparse
import enum
import logging
import math
import os
from collections.abc import Sequence
from pathlib import Path

import pygame

from platformer2d.animation import AnimationManager
from platformer2d.collision import Rect
from platformer2d.entities import Enemy, EntityManager, Player
from platformer2d.input import InputManager
from platformer2d.resources import ResourceManager
from platformer2d.timing import TimeManager

log = logging.getLogger(__name__)

VIRTUAL_WIDTH = 960
VIRTUAL_HEIGHT = 540

_BLACK = (0, 0, 0)
_GREEN = (0, 255, 0)


class AssetStyle(enum.Enum):
    """How the virtual screen is scaled up to the window."""

    PIXEL_ART = enum.auto()
    HD_ART = enum.auto()


def _default_walls() -> list[Rect]:
    return [
        Rect(10, 10, VIRTUAL_WIDTH - 20, 32),
        Rect(10, VIRTUAL_HEIGHT - 32 - 10, VIRTUAL_WIDTH - 20, 32),
        Rect(100, 400, 50, 50),
        Rect(300, 400, 100, 50),
        Rect(500, 400, 100, 50),
    ]


class Game:
    """Owns the window, the managers and the scene, and runs the frame loop.

    Everything is drawn onto a fixed-size virtual canvas which is scaled to
    the window when presented: by whole multiples for pixel art, smoothly
    otherwise.
    """

    def __init__(
        self,
        assets_dir: str | os.PathLike[str] = "assets",
        *,
        input_manager: InputManager | None = None,
        time_manager: TimeManager | None = None,
    ) -> None:
        self.assets_dir = Path(assets_dir)
        self.resources = ResourceManager()
        self.input = input_manager or InputManager()
        self.entities = EntityManager()
        self.animations = AnimationManager()
        self.time = time_manager or TimeManager()
        self.player: Player | None = None
        self.enemy: Enemy | None = None
        self.running = False
        self.style = AssetStyle.PIXEL_ART
        self.preferred_size = (0, 0)
        self.walls: list[Rect] = []
        self.window: pygame.Surface | None = None
        self.canvas: pygame.Surface | None = None

    def __enter__(self) -> Game:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clean()

    def init(
        self, title: str, style: AssetStyle, window_width: int, window_height: int
    ) -> None:
        """Open the window and build the scene.

        Raises pygame.error or RuntimeError if the display cannot be set up,
        OSError if an asset cannot be read and ValueError or KeyError if the
        animation configuration is unusable.
        """
        self.style = style
        self.preferred_size = (window_width, window_height)

        pygame.display.init()
        try:
            pygame.joystick.init()
        except pygame.error as exc:
            log.warning("joystick initialisation failed: %s", exc)
        if not pygame.image.get_extended():
            raise RuntimeError("PNG image support is not available")

        self.window = pygame.display.set_mode(
            (window_width, window_height), pygame.RESIZABLE
        )
        pygame.display.set_caption(title)
        self.canvas = pygame.Surface((VIRTUAL_WIDTH, VIRTUAL_HEIGHT), 0, 32)

        self.input.init_gamepad()

        self.animations.load_from_file(self.assets_dir / "animations.json", 64, 64)

        player = Player(self.resources, self.input, self.animations)
        player.spawn(str(self.assets_dir / "player_spritesheet.png"), 100, 100, 48, 48)
        self.player = player

        enemy = Enemy(self.resources, self.animations)
        enemy.spawn(str(self.assets_dir / "enemy_spritesheet.png"), 400, 300, 48, 48)
        self.enemy = enemy

        self.entities.add(player)
        self.entities.add(enemy)

        self.walls = _default_walls()
        self.running = True

    def run(self) -> None:
        """Run frames until quitting is requested."""
        self.time.target_fps = 60
        self.time.max_delta_time = 0.05
        self.time.smoothing_window = 10

        while self.running:
            self.time.update()
            delta_time = self.time.smoothed_delta_time
            self._handle_events()
            self._update(delta_time)
            self._render()

    def clean(self) -> None:
        """Release the gamepad, the entities, the textures and the display."""
        self.input.close_gamepad()
        self.entities.clean_all()
        self.resources.clear()
        self.window = None
        pygame.quit()

    def _handle_events(self) -> None:
        self.input.update(*self.preferred_size)
        if self.input.should_quit():
            self.running = False

    def _update(self, delta_time: float) -> None:
        self.entities.update_all(self.walls, delta_time)

    def _render(self) -> None:
        canvas = self.canvas
        if canvas is None:
            return
        canvas.fill(_BLACK)
        for wall in self.walls:
            pygame.draw.rect(canvas, _GREEN, pygame.Rect(wall), 1)

        self.entities.render_all(canvas)

        pygame.draw.rect(canvas, _GREEN, pygame.Rect(0, 0, VIRTUAL_WIDTH, VIRTUAL_HEIGHT), 1)
        self._present(canvas)

    def _present(self, canvas: pygame.Surface) -> None:
        window = pygame.display.get_surface()
        if window is None:
            return
        win_w, win_h = window.get_size()
        scale = min(win_w / VIRTUAL_WIDTH, win_h / VIRTUAL_HEIGHT)
        if self.style is AssetStyle.PIXEL_ART:
            scale = max(1, math.floor(scale))
        size = (max(1, int(VIRTUAL_WIDTH * scale)), max(1, int(VIRTUAL_HEIGHT * scale)))

        if size == canvas.get_size():
            frame = canvas
        elif self.style is AssetStyle.PIXEL_ART:
            frame = pygame.transform.scale(canvas, size)
        else:
            frame = pygame.transform.smoothscale(canvas, size)

        window.fill(_BLACK)
        window.blit(frame, ((win_w - size[0]) // 2, (win_h - size[1]) // 2))
        pygame.display.flip()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game; returns the process exit status."""
    parser = argparse.ArgumentParser(prog="platformer2d", description="A 2D platformer.")
    parser.add_argument(
        "--assets", default="assets", help="directory holding sprites and animations"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    game = Game(args.assets)
    try:
        try:
            game.init("Game2D", AssetStyle.PIXEL_ART, 1280, 720)
        except (OSError, ValueError, KeyError, RuntimeError) as exc:
            log.error("could not start the game: %s", exc)
            return 1
        game.run()
    finally:
        game.clean()
    return 0