import json

import pygame
import pytest

from platformer2d.animation import AnimationManager
from platformer2d.collision import Rect
from platformer2d.entities import Enemy, Entity, EntityManager, EntityType, Flip, Player
from platformer2d.input import InputManager
from platformer2d.resources import ResourceManager

RED = pygame.Color(255, 0, 0)
NAMES = ["idle", "run", "jump", "enemy_idle", "enemy_run"]


@pytest.fixture
def animations(tmp_path):
    config = {
        "animations": [
            {"name": name, "row": row, "frames": 4, "frameTime": 100}
            for row, name in enumerate(NAMES)
        ]
    }
    path = tmp_path / "animations.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    manager = AnimationManager()
    manager.load_from_file(path, 48, 48)
    return manager


@pytest.fixture
def sheet(tmp_path):
    surface = pygame.Surface((192, 240))
    surface.fill(RED)
    path = tmp_path / "sheet.png"
    pygame.image.save(surface, str(path))
    return str(path)


@pytest.fixture
def keys():
    return {}


@pytest.fixture
def inputs(keys):
    return InputManager(
        events=lambda: [],
        key_state=lambda: dict(keys),
        open_gamepad=lambda: None,
        toggle_fullscreen=lambda w, h: None,
    )


@pytest.fixture
def player(animations, sheet, inputs):
    p = Player(ResourceManager(), inputs, animations)
    p.spawn(sheet, 100, 100, 48, 48)
    return p


FLOOR = Rect(0, 200, 800, 32)


def settle(player, inputs, frames=200):
    for _ in range(frames):
        inputs.update(1280, 720)
        player.update([FLOOR], [], 0.016)


def test_entity_types(player, animations, sheet):
    enemy = Enemy(ResourceManager(), animations)
    assert player.entity_type is EntityType.PLAYER
    assert enemy.entity_type is EntityType.ENEMY


def test_player_starts_idle(player):
    assert player.animation.current_name == "idle"
    assert player.flip is Flip.NONE


def test_player_lands_on_floor(player, inputs):
    settle(player, inputs)
    assert player.on_ground is True
    assert player.body.rect.y + player.body.rect.h == FLOOR.y
    assert player.animation.current_name == "idle"


def test_player_jumps_from_ground(player, inputs, keys):
    settle(player, inputs)
    keys[pygame.K_SPACE] = True
    inputs.update(1280, 720)
    player.update([FLOOR], [], 0.016)
    assert player.body.velocity.y == Player.jump_strength
    assert player.on_ground is False
    assert player.animation.current_name == "jump"


def test_player_cannot_jump_in_mid_air(player, inputs, keys):
    keys[pygame.K_SPACE] = True
    inputs.update(1280, 720)
    for _ in range(10):
        player.update([], [], 0.016)
    assert player.body.velocity.y > 0.0


@pytest.mark.parametrize(
    "key, sign, flip",
    [(pygame.K_RIGHT, 1, Flip.NONE), (pygame.K_LEFT, -1, Flip.HORIZONTAL)],
)
def test_player_runs(player, inputs, keys, key, sign, flip):
    settle(player, inputs)
    start_x = player.body.position.x
    keys[key] = True
    inputs.update(1280, 720)
    player.update([FLOOR], [], 0.016)
    assert player.body.velocity.x == sign * Player.move_speed
    assert player.flip is flip
    assert player.animation.current_name == "run"
    assert (player.body.position.x - start_x) * sign > 0


def test_player_renders_at_position(player):
    target = pygame.Surface((300, 300))
    player.render(target)
    assert target.get_at((100, 100)) == RED
    assert target.get_at((99, 99)) == pygame.Color(0, 0, 0)


def test_spawn_with_missing_image_raises(animations, inputs, tmp_path):
    p = Player(ResourceManager(), inputs, animations)
    with pytest.raises(OSError):
        p.spawn(str(tmp_path / "missing.png"), 0, 0, 48, 48)


def test_player_needs_its_animations(inputs):
    with pytest.raises(KeyError):
        Player(ResourceManager(), inputs, AnimationManager())


def test_clean_drops_texture(player):
    player.clean()
    target = pygame.Surface((300, 300))
    player.render(target)
    assert player.texture is None
    assert target.get_at((100, 100)) == pygame.Color(0, 0, 0)


def test_enemy_walks_left(animations, sheet):
    enemy = Enemy(ResourceManager(), animations)
    enemy.spawn(sheet, 400, 300, 48, 48)
    enemy.update([], [], 0.05)
    assert enemy.body.position.x < 400
    assert enemy.flip is Flip.HORIZONTAL
    assert enemy.animation.current_name == "run"


def test_enemy_turns_at_left_edge(animations, sheet):
    enemy = Enemy(ResourceManager(), animations)
    enemy.spawn(sheet, 1, 300, 48, 48)
    enemy.update([], [], 0.05)
    assert enemy.direction == 1
    assert enemy.flip is Flip.NONE


def test_enemy_stops_at_wall(animations, sheet):
    enemy = Enemy(ResourceManager(), animations)
    enemy.spawn(sheet, 400, 300, 48, 48)
    wall = Rect(350, 300, 49, 48)
    enemy.update([wall], [], 0.05)
    assert enemy.body.rect.x == wall.x + wall.w


class Recorder(Entity):
    def __init__(self, log, name):
        super().__init__()
        self.log = log
        self.name = name

    def spawn(self, image_path, x, y, w, h):
        self.log.append(("spawn", self.name))

    def update(self, walls, others, delta_time):
        self.log.append(("update", self.name, len(others), delta_time))

    def render(self, target):
        self.log.append(("render", self.name))

    def clean(self):
        self.log.append(("clean", self.name))


def test_manager_drives_entities_in_order():
    log = []
    manager = EntityManager()
    first, second = Recorder(log, "a"), Recorder(log, "b")
    manager.add(first)
    manager.add(second)
    assert len(manager) == 2
    assert list(manager) == [first, second]

    manager.update_all([], 0.5)
    manager.render_all(pygame.Surface((1, 1)))
    assert log == [
        ("update", "a", 2, 0.5),
        ("update", "b", 2, 0.5),
        ("render", "a"),
        ("render", "b"),
    ]


def test_manager_clean_all_empties():
    log = []
    manager = EntityManager()
    manager.add(Recorder(log, "a"))
    manager.clean_all()
    assert log == [("clean", "a")]
    assert len(manager) == 0


def test_base_entity_type_is_none():
    manager = EntityManager()
    manager.add(Recorder([], "x"))
    assert [entity.entity_type for entity in manager] == [EntityType.NONE]