# platformer2d

A small 2D side-scrolling platformer built on pygame. A player character
runs and jumps across a walled arena while an enemy walks back and forth.

Features:

- sprite-sheet animation driven by a JSON configuration file
  (`Animation`, `AnimationController`, `AnimationManager` in
  `platformer2d.animation`)
- axis-aligned bounding box collision resolved in unit steps, X before Y
  (`PhysicsBody` in `platformer2d.physics`, `Rect` and
  `check_aabb_collision` in `platformer2d.collision`)
- gravity, coyote time and jump buffering for the player
  (`Player` in `platformer2d.entities`)
- frame timing with a frame-rate cap and a smoothed delta time
  (`TimeManager` in `platformer2d.timing`)
- keyboard and gamepad input (`InputManager` in `platformer2d.input`)
- a fixed 960x540 virtual screen scaled to the window, by whole multiples
  for pixel art and smoothly otherwise (`Game`, `AssetStyle` in
  `platformer2d.game`)

## Installing

```
pip install .
```

## Running

```
platformer2d
platformer2d --assets path/to/assets
```

The game opens a 1280x720 resizable window and runs at up to 60 frames per
second. It reads its assets from `assets/` in the working directory, or from
the directory given with `--assets`:

- `animations.json` — the animation definitions
- `player_spritesheet.png` — the player's sprite sheet
- `enemy_spritesheet.png` — the enemy's sprite sheet

If an asset is missing or the animation file is unusable, the error is
logged and the command exits with status 1.

### Animation file

```json
{
  "animations": [
    {"name": "idle", "row": 0, "frames": 4, "frameTime": 120},
    {"name": "run", "row": 1, "frames": 6, "frameTime": 80},
    {"name": "jump", "row": 2, "frames": 1, "frameTime": 100},
    {"name": "enemy_idle", "row": 0, "frames": 4, "frameTime": 120},
    {"name": "enemy_run", "row": 1, "frames": 6, "frameTime": 100,
     "width": 48, "height": 48, "spacingX": 2, "marginX": 1}
  ]
}
```

`name`, `row`, `frames` and `frameTime` (milliseconds per frame) are
required. The game passes 64 as the default `width` and `height`;
`spacingX`, `spacingY`, `marginX` and `marginY` default to 0. The player
uses `idle`, `run` and `jump`; the enemy uses `enemy_idle` and `enemy_run`.
Animations advance 16 ms per game frame.

### Controls

| Action      | Keyboard    | Gamepad       |
|-------------|-------------|---------------|
| Move left   | Left arrow  | D-pad left    |
| Move right  | Right arrow | D-pad right   |
| Jump        | Space       | A             |
| Fullscreen  | F           |               |
| Quit        | Escape      |               |

Closing the window also quits. The first connected joystick is used as the
gamepad.

## Using the pieces

```python
from platformer2d.collision import Rect
from platformer2d.physics import PhysicsBody
from platformer2d.vector import TransformComponent, Vector2f

body = PhysicsBody(TransformComponent())
body.place(100.0, 100.0, 48, 48)
floor = [Rect(0, 200, 960, 32)]
body.move_with_collision(floor, Vector2f(0.0, 500.0))
print(body.rect)  # Rect(x=100, y=152, w=48, h=48): resting on the floor
```

A `PhysicsBody` moves only when it has a transform attached; without one it
stays at the origin.

`TimeManager` and `InputManager` take their clock, event source, keyboard
snapshot and gamepad as optional callables, so they can be driven without a
display.

## What it does not do

The arena is a single fixed set of five walls; there are no levels, no
scrolling camera, no sound, no score and no saving. Entities do not interact
with one another: the enemy never touches or harms the player. The enemy
turns around at the edges of an 800-pixel-wide strip, not at walls.

## Tests

```
pip install .[test]
pytest
```