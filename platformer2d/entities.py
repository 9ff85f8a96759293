"""Game entities: the player, a patrolling enemy and their manager."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

import pygame

from platformer2d.animation import AnimationController, AnimationManager
from platformer2d.collision import Rect, check_aabb_collision
from platformer2d.input import InputManager
from platformer2d.physics import PhysicsBody
from platformer2d.resources import ResourceManager, draw_sprite
from platformer2d.vector import TransformComponent, Vector2f


class EntityType(enum.Enum):
    NONE = enum.auto()
    PLAYER = enum.auto()
    ENEMY = enum.auto()
    WALL = enum.auto()
    ITEM = enum.auto()


class Flip(enum.IntFlag):
    """How a sprite is mirrored when drawn."""

    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2


class Entity(ABC):
    """Something that lives in the world, updates every frame and draws itself."""

    def __init__(self) -> None:
        self.flip = Flip.NONE

    @abstractmethod
    def spawn(self, image_path: str, x: int, y: int, w: int, h: int) -> None:
        """Load the sprite sheet and place the entity."""

    @abstractmethod
    def update(
        self, walls: Sequence[Rect], others: Sequence[Entity], delta_time: float
    ) -> None:
        """Advance the entity by ``delta_time`` seconds."""

    @abstractmethod
    def render(self, target: pygame.Surface) -> None:
        """Draw the entity onto the target surface."""

    @abstractmethod
    def clean(self) -> None:
        """Release the entity's resources."""

    @property
    def entity_type(self) -> EntityType:
        return EntityType.NONE


class EntityManager:
    """Owns the entities of a scene and drives them in insertion order."""

    def __init__(self) -> None:
        self._entities: list[Entity] = []

    def add(self, entity: Entity) -> None:
        self._entities.append(entity)

    def update_all(self, walls: Sequence[Rect], delta_time: float) -> None:
        for entity in self._entities:
            entity.update(walls, self._entities, delta_time)

    def render_all(self, target: pygame.Surface) -> None:
        for entity in self._entities:
            entity.render(target)

    def clean_all(self) -> None:
        for entity in self._entities:
            entity.clean()
        self._entities.clear()

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)


class _Sprite(Entity):
    """Shared state of entities drawn from a sprite sheet with a physics body."""

    _texture_id = ""

    def __init__(self, resources: ResourceManager) -> None:
        super().__init__()
        self._resources = resources
        self.texture: pygame.Surface | None = None
        self.transform = TransformComponent()
        self.body = PhysicsBody(self.transform)
        self.animation = AnimationController()

    def _load(self, image_path: str) -> None:
        self._resources.load_texture(self._texture_id, image_path)
        self.texture = self._resources.get_texture(self._texture_id)

    def _draw(self, target: pygame.Surface) -> None:
        if self.texture is None:
            return
        src = self.animation.current_frame_rect()
        pos = self.transform.position
        dst = Rect(int(pos.x), int(pos.y), src.w, src.h)
        draw_sprite(target, self.texture, src, dst, self.flip)

    def _release(self) -> None:
        self.texture = None


class Player(_Sprite):
    """The keyboard- or gamepad-controlled character."""

    _texture_id = "player"

    gravity = 1500.0
    max_fall_speed = 900.0
    move_speed = 300.0
    jump_strength = -650.0
    coyote_time = 0.1
    jump_buffer_time = 0.1

    def __init__(
        self,
        resources: ResourceManager,
        input_manager: InputManager,
        animations: AnimationManager,
    ) -> None:
        super().__init__(resources)
        self._input = input_manager
        self._animations = animations
        for name in ("idle", "run", "jump"):
            self.animation.add(name, animations.get(name))
        self.animation.play("idle")
        self.on_ground = False
        self.coyote_timer = 0.0
        self.jump_buffer_timer = 0.0
        self.wants_to_jump = False

    def spawn(self, image_path: str, x: int, y: int, w: int, h: int) -> None:
        self._load(image_path)
        self.body.place(float(x), float(y), w, h)
        self.body.max_fall_speed = self.max_fall_speed

    def update(
        self, walls: Sequence[Rect], others: Sequence[Entity], delta_time: float
    ) -> None:
        self._handle_input()
        self.body.apply_gravity(self.gravity, delta_time)
        self.body.move_with_collision(walls, self.body.velocity * delta_time)
        self._check_if_standing(walls)

        if self.on_ground:
            self.coyote_timer = self.coyote_time
        else:
            self.coyote_timer -= delta_time

        if self.jump_buffer_timer > 0.0:
            self.jump_buffer_timer -= delta_time
            if self.coyote_timer > 0.0:
                self.body.velocity = Vector2f(self.body.velocity.x, self.jump_strength)
                self.on_ground = False
                self.coyote_timer = 0.0
                self.jump_buffer_timer = 0.0
                self.wants_to_jump = False

        vel = self.body.velocity
        if vel.x > 0.0:
            self.flip = Flip.NONE
        elif vel.x < 0.0:
            self.flip = Flip.HORIZONTAL

        if not self.on_ground:
            self.animation.play("jump")
        elif vel.x != 0.0:
            self.animation.play("run")
        else:
            self.animation.play("idle")
        self.animation.update()

    def render(self, target: pygame.Surface) -> None:
        self._draw(target)

    def clean(self) -> None:
        self._release()

    @property
    def entity_type(self) -> EntityType:
        return EntityType.PLAYER

    def _handle_input(self) -> None:
        keys = self._input
        vx = 0.0
        if keys.is_key_down(pygame.K_LEFT) or keys.is_gamepad_button_down(
            pygame.CONTROLLER_BUTTON_DPAD_LEFT
        ):
            vx = -self.move_speed
        elif keys.is_key_down(pygame.K_RIGHT) or keys.is_gamepad_button_down(
            pygame.CONTROLLER_BUTTON_DPAD_RIGHT
        ):
            vx = self.move_speed

        if keys.is_key_down(pygame.K_SPACE) or keys.is_gamepad_button_down(
            pygame.CONTROLLER_BUTTON_A
        ):
            self.wants_to_jump = True
            self.jump_buffer_timer = self.jump_buffer_time

        self.body.velocity = Vector2f(vx, self.body.velocity.y)

    def _check_if_standing(self, walls: Sequence[Rect]) -> None:
        rect = self.body.rect
        feet = rect._replace(y=rect.y + 1)
        self.on_ground = any(check_aabb_collision(feet, wall) for wall in walls)


class Enemy(_Sprite):
    """Walks left and right, turning at the edges of the playfield."""

    _texture_id = "enemy"

    speed = 40.0
    field_width = 800

    def __init__(self, resources: ResourceManager, animations: AnimationManager) -> None:
        super().__init__(resources)
        self._animations = animations
        self.animation.add("idle", animations.get("enemy_idle"))
        self.animation.add("run", animations.get("enemy_run"))
        self.animation.play("run")
        self.direction = -1

    def spawn(self, image_path: str, x: int, y: int, w: int, h: int) -> None:
        self._load(image_path)
        self.body.place(float(x), float(y), w, h)

    def update(
        self, walls: Sequence[Rect], others: Sequence[Entity], delta_time: float
    ) -> None:
        self.body.velocity = Vector2f(self.speed * self.direction, self.body.velocity.y)
        self.body.move_with_collision(walls, self.body.velocity * delta_time)

        rect = self.body.rect
        if rect.x <= 0 or rect.x + rect.w >= self.field_width:
            self.direction *= -1

        self.flip = Flip.HORIZONTAL if self.direction < 0 else Flip.NONE
        self.animation.play("run")
        self.animation.update()

    def render(self, target: pygame.Surface) -> None:
        self._draw(target)

    def clean(self) -> None:
        self._release()

    @property
    def entity_type(self) -> EntityType:
        return EntityType.ENEMY