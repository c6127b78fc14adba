"""Game rules: board, log sequences, directions, states and easing curves."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from loglog.vec import IVec3, Vec3

logger = logging.getLogger(__name__)

PLAYER_ACTION_ANIMATION_DURATION = 0.44
GAME_MOVE_ANIMATION_DURATION = 0.47
PLAYER_JUMP_ANIMATION_DURATION = 0.39
PLAYER_JUMP_LAND_ANIMATION_DURATION = 0.42
SEQUENCE_LENGTH = 8
BIRD_Y = 2

TILE_SIZE = 1.0
TILE_HALF_SIZE = 0.5

LOG1_OFFSET_X = 2
LOG2_OFFSET_X = 6
LOG3_OFFSET_X = 10

DIST = 1

PALETTE = (
    "#FF8383",
    "#FFF574",
    "#A1D6CB",
    "#A19AD3",
    "#ca5a2e",
    "#FFF574",
    "#A1D6CB",
    "#A19AD3",
)


class AppState(enum.Enum):
    """Top-level application states."""

    ASSET_LOADING = "asset_loading"
    IN_GAME = "in_game"
    END_GAME = "end_game"
    WIN_GAME = "win_game"


class GameState(enum.Enum):
    """Turn phases while a game is in progress."""

    PLAYER_IDLE = "player_idle"
    PLAYER_ACTION_IN_PROGRESS = "player_action_in_progress"
    GAME_TURN_IN_PROGRESS = "game_turn_in_progress"
    PLAYER_FINISHING_JUMP = "player_finishing_jump"
    PAUSED = "paused"


class GameEvent(enum.Enum):
    """Events that end a game."""

    OVER = "over"
    WIN = "win"

    def text(self) -> str:
        """Return the message shown to the player for this event."""
        if self is GameEvent.OVER:
            return "GAME OVER"
        return "ALL BIRDS RESCUED"


class Direction(enum.Enum):
    """Movement directions on the board (the XZ plane)."""

    NONE = "none"
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def value_vector(self) -> IVec3:
        return _DIRECTION_VECTORS[self]

    def value(self) -> IVec3:  # type: ignore[override]
        """Return the unit step for this direction."""
        return _DIRECTION_VECTORS[self]


_DIRECTION_VECTORS = {
    Direction.NORTH: IVec3(0, 0, DIST),
    Direction.EAST: IVec3(DIST, 0, 0),
    Direction.SOUTH: IVec3(0, 0, -DIST),
    Direction.WEST: IVec3(-DIST, 0, 0),
    Direction.NONE: IVec3.ZERO,
}


def format_array_with_bracket(values: Sequence[Any], index: int) -> str:
    """Join ``values`` with commas, wrapping the one at ``index`` in brackets."""
    return ", ".join(
        f"[{value}]" if i == index else f"{value}" for i, value in enumerate(values)
    )


def _fixed(values: Sequence[int], name: str) -> Tuple[int, ...]:
    result = tuple(values)
    if len(result) != SEQUENCE_LENGTH:
        raise ValueError(
            f"{name} must hold exactly {SEQUENCE_LENGTH} values, got {len(result)}"
        )
    return result


def _zeros() -> Tuple[int, ...]:
    return (0,) * SEQUENCE_LENGTH


@dataclass
class LogSequence:
    """A repeating pattern of log spawns for one lane of the board."""

    log_sequence_nth_step: Tuple[int, ...] = field(default_factory=_zeros)
    log_sequence_step_length: int = 0
    spawn_offset_x: Tuple[int, ...] = field(default_factory=_zeros)
    spawn_offset_z: Tuple[int, ...] = field(default_factory=_zeros)
    spawn_offset_x_base: int = 0
    sequence_index: int = 0
    sequence_step_counter: int = 0

    def __post_init__(self) -> None:
        self.log_sequence_nth_step = _fixed(
            self.log_sequence_nth_step, "log_sequence_nth_step"
        )
        self.spawn_offset_x = _fixed(self.spawn_offset_x, "spawn_offset_x")
        self.spawn_offset_z = _fixed(self.spawn_offset_z, "spawn_offset_z")

    def seq_idx(self, step: int) -> int:
        """Return the position in the pattern that ``step`` falls on."""
        return step % len(self.log_sequence_nth_step)

    def check_seq(self, step: int, mod_val: int) -> bool:
        """Return True if ``step`` modulo the pattern entry equals ``mod_val``.

        Raises ZeroDivisionError when the entry for this step is zero.
        """
        return step % self.log_sequence_nth_step[self.seq_idx(step)] == mod_val

    def nth_step(self) -> int:
        """Return the pattern entry at the current sequence index."""
        return self.log_sequence_nth_step[self.sequence_index]

    def step_length(self) -> int:
        """Return how many steps the sequence spawns for."""
        return self.log_sequence_step_length

    def spawn_offset_x_at(self) -> int:
        """Return the X spawn offset for the current sequence index."""
        return self.spawn_offset_x_base + self.spawn_offset_x[self.sequence_index]

    def spawn_offset_z_at(self) -> int:
        """Return the Z spawn offset for the current sequence index."""
        return self.spawn_offset_z[self.sequence_index]

    def describe(self) -> str:
        """Return a multi-line summary of the sequence with the current index marked."""
        idx = self.sequence_index
        return "\n".join(
            [
                f"seq:         [{format_array_with_bracket(self.log_sequence_nth_step, idx)}]",
                f"seq offx:    [{format_array_with_bracket(self.spawn_offset_x, idx)}]",
                f"seq offz:    [{format_array_with_bracket(self.spawn_offset_z, idx)}]",
                f"seq_idx:     [{idx}]",
                f"seq_nth:     [{self.nth_step()}]",
                f"offsetx:     [{self.spawn_offset_x_at()}]",
                f"offsetz:     [{self.spawn_offset_z_at()}]",
            ]
        )


@dataclass
class Level:
    """Log sequences and bird positions for one level.

    ``bird_map`` maps a bird's board position to whatever object stands for
    it once spawned (``None`` until then).
    """

    seq: List[LogSequence] = field(default_factory=list)
    bird_map: Dict[IVec3, Any] = field(default_factory=dict)


def _default_levels() -> List[Level]:
    return [
        Level(
            seq=[
                LogSequence(
                    log_sequence_step_length=2,
                    log_sequence_nth_step=(1, 0, 1, 1, 1, 0, 0, 0),
                    spawn_offset_z=(0, 1, 0, 0, 0, 0, 0, 0),
                    spawn_offset_x=(0, 1, 0, 0, 1, 0, 0, 0),
                    spawn_offset_x_base=LOG1_OFFSET_X,
                ),
                LogSequence(
                    log_sequence_step_length=2,
                    log_sequence_nth_step=(0, 1, 1, 0, 1, 0, 0, 0),
                    spawn_offset_z=(0, 0, 0, 0, 0, 0, 0, 0),
                    spawn_offset_x=(0, 1, 0, 0, 1, 0, 0, 0),
                    spawn_offset_x_base=LOG2_OFFSET_X,
                ),
                LogSequence(
                    log_sequence_step_length=2,
                    log_sequence_nth_step=(1, 0, 1, 1, 0, 1, 0, 1),
                    spawn_offset_z=(0, 0, 1, 0, 0, 0, 0, 0),
                    spawn_offset_x=(0, 0, 0, 0, 0, 0, 0, 0),
                    spawn_offset_x_base=LOG3_OFFSET_X,
                ),
            ],
            bird_map={
                IVec3(7, BIRD_Y, 2): None,
                IVec3(8, BIRD_Y, 7): None,
                IVec3(3, BIRD_Y, 5): None,
            },
        )
    ]


@dataclass
class Game:
    """Board dimensions, player position, turn counter and levels."""

    board_size_x: int = 12
    board_size_y: int = 12
    start: Tuple[int, int] = (3, 0)
    player_pos: IVec3 = IVec3(3, 0, 0)
    current_step: int = 0
    current_level_index: int = 0
    levels: List[Level] = field(default_factory=_default_levels)
    bevy_count: int = 0

    def board_size_as_vec3(self) -> Vec3:
        """Return the board size as a world vector on the XZ plane."""
        return Vec3(float(self.board_size_x), 0.0, float(self.board_size_y))

    def board_size(self) -> Tuple[int, int]:
        """Return the board size as ``(x, y)``."""
        return (self.board_size_x, self.board_size_y)

    def is_valid_player_move(self, direction: Direction) -> bool:
        """Return True if moving the player in ``direction`` stays on the board."""
        pos = self.player_pos + direction.value()
        if 0 <= pos.x < self.board_size_x and 0 <= pos.z < self.board_size_y:
            return True
        logger.info("outside boundary: %r", pos)
        return False

    def is_valid_board_pos(self, pos: IVec3, direction: Direction) -> bool:
        """Return True if ``pos`` stepped by ``direction`` is within the board.

        The far edges are inclusive, so a position one past the last tile
        still counts as on the board.
        """
        pos = pos + direction.value()
        if -1 < pos.x <= self.board_size_x and -1 < pos.z <= self.board_size_y:
            return True
        logger.info("outside boundary: %r", pos)
        return False

    def current_level(self) -> Level:
        """Return the level being played."""
        return self.levels[self.current_level_index]


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out over ``0..1``."""
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - math.pow(-2.0 * t + 2.0, 3) / 2.0


def ease_out_bounce(t: float) -> float:
    """Bouncing ease-out curve used for the jump landing."""
    n1 = 7.5625
    d1 = 2.75
    if t < 1.0 / d1:
        return n1 * t * t
    if t < 2.0 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t - 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375