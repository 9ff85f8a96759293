"""Texture cache and sprite drawing."""

from __future__ import annotations

import logging
import os

import pygame

from platformer2d.collision import Rect

log = logging.getLogger(__name__)

_FLIP_HORIZONTAL = 1
_FLIP_VERTICAL = 2


class ResourceManager:
    """Loads images once and hands them out by identifier."""

    def __init__(self) -> None:
        self._textures: dict[str, pygame.Surface] = {}

    def load_texture(self, texture_id: str, path: str | os.PathLike[str]) -> None:
        """Load an image under ``texture_id``; an identifier already used is kept.

        Raises OSError if the image cannot be read.
        """
        if texture_id in self._textures:
            log.info("texture already loaded: %s", texture_id)
            return
        try:
            surface = pygame.image.load(os.fspath(path))
        except pygame.error as exc:
            raise OSError(f"failed to load texture {os.fspath(path)!r}: {exc}") from exc
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            surface = surface.convert_alpha()
        self._textures[texture_id] = surface

    def get_texture(self, texture_id: str) -> pygame.Surface:
        """Return a loaded texture; raises KeyError if it is unknown."""
        try:
            return self._textures[texture_id]
        except KeyError:
            raise KeyError(f"texture not found: {texture_id!r}") from None

    def clear(self) -> None:
        self._textures.clear()


def draw_sprite(
    target: pygame.Surface,
    texture: pygame.Surface,
    src_rect: Rect,
    dst_rect: Rect,
    flip: int = 0,
) -> None:
    """Copy ``src_rect`` of the texture into ``dst_rect`` of the target.

    The frame is scaled to the destination size; bit 1 of ``flip`` mirrors it
    horizontally and bit 2 vertically.
    """
    frame = pygame.Surface((src_rect.w, src_rect.h), pygame.SRCALPHA)
    frame.blit(texture, (0, 0), pygame.Rect(src_rect))
    flip_bits = int(flip)
    if flip_bits & (_FLIP_HORIZONTAL | _FLIP_VERTICAL):
        frame = pygame.transform.flip(
            frame, bool(flip_bits & _FLIP_HORIZONTAL), bool(flip_bits & _FLIP_VERTICAL)
        )
    if (dst_rect.w, dst_rect.h) != (src_rect.w, src_rect.h):
        frame = pygame.transform.scale(frame, (dst_rect.w, dst_rect.h))
    target.blit(frame, (dst_rect.x, dst_rect.y))