"""Window front end: keyboard input, projection of the board and drawing."""

from __future__ import annotations

import argparse
import math
import os
import sys
from typing import Optional, Sequence, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from loglog.game import TILE_HALF_SIZE  # noqa: E402
from loglog.simulation import Command, Simulation  # noqa: E402
from loglog.vec import Vec3  # noqa: E402

_COS_30 = math.cos(math.radians(30.0))

_KEY_COMMANDS = {
    pygame.K_w: Command.MOVE_NORTH,
    pygame.K_d: Command.MOVE_WEST,
    pygame.K_s: Command.MOVE_SOUTH,
    pygame.K_a: Command.MOVE_EAST,
    pygame.K_j: Command.JUMP,
    pygame.K_SPACE: Command.PAUSE,
    pygame.K_z: Command.TOGGLE_SKIP_ACTION,
    pygame.K_x: Command.TOGGLE_SKIP_COLLISION,
    pygame.K_ESCAPE: Command.QUIT,
}

Point = Tuple[float, float]
RGB = Tuple[int, int, int]


def _linear_to_srgb8(value: float) -> int:
    value = max(0.0, min(1.0, value))
    if value <= 0.0031308:
        encoded = value * 12.92
    else:
        encoded = 1.055 * value ** (1.0 / 2.4) - 0.055
    return round(encoded * 255.0)


def _linear_rgb(r: float, g: float, b: float) -> RGB:
    return (_linear_to_srgb8(r), _linear_to_srgb8(g), _linear_to_srgb8(b))


def _srgb(r: float, g: float, b: float) -> RGB:
    return (round(r * 255.0), round(g * 255.0), round(b * 255.0))


CLEAR_COLOR = _srgb(0.5, 0.5, 0.9)
TILE_COLOR = _linear_rgb(0.51, 0.54, 0.075)
TILE_EDGE_COLOR = _linear_rgb(0.51, 0.34, 0.075)
PLAYER_COLOR = _linear_rgb(0.8, 0.1, 0.1)
NOSE_COLOR = _linear_rgb(1.0, 0.875, 0.545)
LOG_COLOR = (120, 78, 40)
BIRD_COLOR = (255, 215, 0)
SHADOW_COLOR = _linear_rgb(0.1, 0.0, 0.1)
TEXT_COLOR = (255, 255, 255)
GOLD = (255, 215, 0)


def key_to_command(key: int) -> Optional[Command]:
    """Return the simulation command bound to a pygame key code, or None."""
    return _KEY_COMMANDS.get(key)


def world_to_screen(position: Vec3, origin: Point, scale: float) -> Point:
    """Project a world position onto the screen with an isometric view.

    The board's origin lands on ``origin``; ``scale`` is pixels per world unit.
    Increasing X or Z moves a point away from the viewer (up the screen) and
    increasing Y lifts it straight up.
    """
    ox, oy = origin
    sx = ox + (position.z - position.x) * scale * _COS_30
    sy = oy - (position.x + position.z) * scale * 0.5 - position.y * scale
    return (sx, sy)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="loglog",
        description="Dodge rolling logs and jump to rescue the birds.",
    )
    parser.add_argument("--width", type=_positive_int, default=960)
    parser.add_argument("--height", type=_positive_int, default=720)
    parser.add_argument("--fps", type=_positive_int, default=60)
    parser.add_argument("--scale", type=_positive_int, default=40,
                        help="pixels per world unit")
    parser.add_argument("--max-frames", type=_positive_int, default=None,
                        help="stop after this many frames")
    return parser.parse_args(argv)


def _draw_tiles(screen, sim: Simulation, origin: Point, scale: float) -> None:
    game = sim.game
    for y in range(game.board_size_y):
        for x in range(game.board_size_x):
            corners = [
                world_to_screen(Vec3(x + dx, 0.0, y + dz), origin, scale)
                for dx, dz in (
                    (-TILE_HALF_SIZE, -TILE_HALF_SIZE),
                    (TILE_HALF_SIZE, -TILE_HALF_SIZE),
                    (TILE_HALF_SIZE, TILE_HALF_SIZE),
                    (-TILE_HALF_SIZE, TILE_HALF_SIZE),
                )
            ]
            pygame.draw.polygon(screen, TILE_COLOR, corners)
            pygame.draw.polygon(screen, TILE_EDGE_COLOR, corners, 1)


def _draw_log(screen, log, origin: Point, scale: float) -> None:
    half = log.aabb.half_extents()
    p = log.position
    left = world_to_screen(Vec3(p.x - half.x, p.y, p.z), origin, scale)
    right = world_to_screen(Vec3(p.x + half.x, p.y, p.z), origin, scale)
    thickness = max(1, int(scale * half.y * 2.0))
    pygame.draw.line(screen, LOG_COLOR, left, right, thickness)


def _draw_player(screen, player, origin: Point, scale: float) -> None:
    p = player.position
    half = player.aabb.half_extents()
    base = world_to_screen(Vec3(p.x, p.y - half.y, p.z), origin, scale)
    top = world_to_screen(Vec3(p.x, p.y + half.y, p.z), origin, scale)
    width = max(2.0, scale * half.x * 2.0)
    rect = pygame.Rect(0, 0, int(width), max(1, int(base[1] - top[1])))
    rect.midbottom = (int(base[0]), int(base[1]))
    pygame.draw.rect(screen, PLAYER_COLOR, rect)
    nose = world_to_screen(
        Vec3(p.x, p.y + TILE_HALF_SIZE - 0.1, p.z + TILE_HALF_SIZE), origin, scale
    )
    pygame.draw.circle(screen, NOSE_COLOR, (int(nose[0]), int(nose[1])),
                       max(1, int(scale * 0.08)))


def _draw_bird(screen, bird, player, origin: Point, scale: float) -> None:
    radius = max(2, int(scale * 0.2))
    if bird.carried:
        if player is None:
            return
        position = player.position + bird.position
    else:
        position = bird.position
        shadow = world_to_screen(Vec3(position.x, 0.0, position.z), origin, scale)
        pygame.draw.ellipse(
            screen,
            SHADOW_COLOR,
            pygame.Rect(int(shadow[0] - radius), int(shadow[1] - radius * 0.3),
                        radius * 2, max(1, int(radius * 0.6))),
        )
    centre = world_to_screen(position, origin, scale)
    pygame.draw.circle(screen, BIRD_COLOR, (int(centre[0]), int(centre[1])), radius)


def _draw(screen, font, sim: Simulation, origin: Point, scale: float) -> None:
    screen.fill(CLEAR_COLOR)
    _draw_tiles(screen, sim, origin, scale)

    drawables = []
    for log in sim.logs:
        drawables.append((log.position, lambda log=log: _draw_log(screen, log, origin, scale)))
    for bird in sim.birds:
        anchor = sim.player.position if bird.carried and sim.player else bird.position
        drawables.append(
            (anchor, lambda bird=bird: _draw_bird(screen, bird, sim.player, origin, scale))
        )
    if sim.player is not None:
        player = sim.player
        drawables.append((player.position, lambda: _draw_player(screen, player, origin, scale)))

    # Farther objects (larger x + z) are drawn first.
    for _, draw in sorted(drawables, key=lambda item: -(item[0].x + item[0].z)):
        draw()

    label = font.render("Rescued Birds: ", True, TEXT_COLOR)
    count = font.render(str(sim.game.bevy_count), True, GOLD)
    screen.blit(label, (12, 12))
    screen.blit(count, (12 + label.get_width(), 12))

    if sim.message_visible and sim.message:
        message = font.render(sim.message, True, TEXT_COLOR)
        rect = message.get_rect(center=screen.get_rect().center)
        screen.blit(message, rect)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until it is closed."""
    args = _parse_args(argv)
    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("loglog")
        clock = pygame.time.Clock()
        font = pygame.font.Font(None, 32)
        sim = Simulation()
        origin = (args.width / 2.0, args.height - 100.0)
        frames = 0
        open_window = True
        while open_window and sim.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    open_window = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                    command = key_to_command(event.key)
                    if command is None:
                        continue
                    # Quitting reacts to the key being released, everything else to the press.
                    on_release = command is Command.QUIT
                    if (event.type == pygame.KEYUP) == on_release:
                        sim.handle_command(command)
            if not open_window or not sim.running:
                break
            dt = clock.tick(args.fps) / 1000.0
            sim.update(dt)
            _draw(screen, font, sim, origin, float(args.scale))
            pygame.display.flip()
            frames += 1
            if args.max_frames is not None and frames >= args.max_frames:
                break
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())