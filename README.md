# loglog

A small turn-based puzzle game. Logs roll down a 12 × 12 board, two tiles per turn,
and three birds hover above some of its tiles. Step around the logs, and jump beneath
a bird to rescue it. Rescue every bird to win. If a log touches you, the game is over.

## Installing

```
pip install .
```

This also installs `pygame`, which opens the window and draws the game.

## Playing

```
loglog
```

Each turn you choose one action. The logs then roll.

| Key    | Action                              |
|--------|-------------------------------------|
| W      | move north                          |
| S      | move south                          |
| A      | move east                           |
| D      | move west                           |
| J      | jump (rescues a bird overhead)      |
| Space  | pause / resume                      |
| Z      | debug: toggle skipping player input |
| X      | debug: toggle player collisions     |
| Escape | quit (while waiting for your move)  |

The rescued-bird count is shown in the top-left corner of the window. After a loss
or a win, the board resets and a new game begins.

Options:

| Option           | Default | Meaning                       |
|------------------|---------|-------------------------------|
| `--width`        | 960     | window width in pixels        |
| `--height`       | 720     | window height in pixels       |
| `--fps`          | 60      | frame rate cap                |
| `--scale`        | 40      | pixels per world unit         |
| `--max-frames`   | none    | stop after this many frames   |

## Using the pieces

The game logic does not depend on the display, so it can be driven from code:

```python
from loglog.simulation import Simulation, Command

sim = Simulation()
sim.handle_command(Command.MOVE_NORTH)
sim.update(0.5)
for event in sim.drain_events():
    print(event.text())
```

`Simulation` exposes its state as attributes: `app_state`, `game_state`, `game`,
`player`, `logs`, `birds`, `message` and `message_visible`. `spawn_logs()` and
`reset()` can also be called directly.

Other modules:

- `loglog.vec`: the `Vec3` and `IVec3` vector types.
- `loglog.collision`: the axis-aligned box `Aabb3d`, `GameObjectType`,
  `CollisionEvent` and `detect_collisions`.
- `loglog.game`: the board and level data (`Game`, `Level`, `LogSequence`,
  `Direction`), the states `AppState` and `GameState`, `GameEvent`, and the easing
  functions `ease_in_out_cubic` and `ease_out_bounce`.
- `loglog.colors`: `Color`, `hex_to_color`, `hex_to_srgb`, `hex_to_vec4`, the
  `Easle` palette, and `color_gradient`, which builds a square RGBA8 `GradientImage`.
- `loglog.app`: the window front end, with `key_to_command`, `world_to_screen`
  and `main`.

## What it does not do

The window draws the board with flat shapes in an isometric view: there are no 3D
models, lighting or shadows beyond simple ellipses, and no sound. There is a single
built-in level; levels cannot be loaded from files, and winning restarts that same
level rather than moving on to another.

## Running the tests

```
pip install .[test]
pytest
```