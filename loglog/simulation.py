"""Engine-free turn simulation: player actions, rolling logs, birds and game states."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loglog.collision import Aabb3d, CollisionEvent, GameObjectType, detect_collisions
from loglog.game import (
    BIRD_Y,
    GAME_MOVE_ANIMATION_DURATION,
    PLAYER_ACTION_ANIMATION_DURATION,
    PLAYER_JUMP_ANIMATION_DURATION,
    PLAYER_JUMP_LAND_ANIMATION_DURATION,
    TILE_HALF_SIZE,
    TILE_SIZE,
    AppState,
    Direction,
    Game,
    GameEvent,
    GameState,
    ease_in_out_cubic,
    ease_out_bounce,
)
from loglog.vec import IVec3, Vec3

logger = logging.getLogger(__name__)

PLAYER_START = Vec3(6.0, TILE_HALF_SIZE, 0.0)
PLAYER_END_DURATION = 1.6
PLAYER_WIN_DURATION = 2.6
PLAYER_END_SPEED = 4.5
LOG_ROLL_SPEED = -math.pi
JUMP_ARC_HEIGHT = 0.2
LOG_HALF_EXTENTS = Vec3(TILE_SIZE * 2.0, TILE_HALF_SIZE * 0.5, TILE_HALF_SIZE * 0.5)


@dataclass
class ActionTimer:
    """A one-shot timer measured in seconds."""

    duration: float = 1.0
    elapsed: float = 0.0
    _just_finished: bool = field(default=False, init=False, repr=False)

    def tick(self, dt: float) -> "ActionTimer":
        """Advance the timer by ``dt`` seconds, clamping at the duration."""
        if dt < 0:
            raise ValueError("time step must not be negative")
        was_finished = self.finished()
        self.elapsed = min(self.duration, self.elapsed + dt)
        self._just_finished = not was_finished and self.finished()
        return self

    def fraction(self) -> float:
        """Return progress through the timer, from 0.0 to 1.0."""
        if self.duration == 0:
            return 1.0
        return self.elapsed / self.duration

    def finished(self) -> bool:
        """Return True once the full duration has elapsed."""
        return self.elapsed >= self.duration

    def just_finished(self) -> bool:
        """Return True if the most recent tick completed the timer."""
        return self._just_finished

    def reset(self) -> None:
        """Start the timer again from zero."""
        self.elapsed = 0.0
        self._just_finished = False


class Command(enum.Enum):
    """Player inputs understood by the simulation."""

    MOVE_NORTH = "move_north"
    MOVE_EAST = "move_east"
    MOVE_SOUTH = "move_south"
    MOVE_WEST = "move_west"
    JUMP = "jump"
    PAUSE = "pause"
    TOGGLE_SKIP_ACTION = "toggle_skip_action"
    TOGGLE_SKIP_COLLISION = "toggle_skip_collision"
    QUIT = "quit"


_MOVES: Dict[Command, Direction] = {
    Command.MOVE_NORTH: Direction.NORTH,
    Command.MOVE_EAST: Direction.EAST,
    Command.MOVE_SOUTH: Direction.SOUTH,
    Command.MOVE_WEST: Direction.WEST,
}


@dataclass
class _Motion:
    start: Vec3
    target: Vec3


def _player_aabb() -> Aabb3d:
    return Aabb3d.from_center(
        Vec3(2.0, TILE_HALF_SIZE, 0.0),
        Vec3(TILE_HALF_SIZE * 0.5, TILE_HALF_SIZE * 1.1, TILE_HALF_SIZE * 0.5),
    )


@dataclass
class Player:
    """The player's piece on the board."""

    position: Vec3 = PLAYER_START
    aabb: Aabb3d = field(default_factory=_player_aabb)
    motion: Optional[_Motion] = None
    end_timer: Optional[ActionTimer] = None
    win_timer: Optional[ActionTimer] = None
    spin: float = 0.0


@dataclass
class LogPiece:
    """A log rolling down the board towards the player's side."""

    position: Vec3
    aabb: Optional[Aabb3d] = None
    roll: Optional[_Motion] = None
    rotation: float = 0.0

    def __post_init__(self) -> None:
        if self.aabb is None:
            self.aabb = Aabb3d.from_center(self.position, LOG_HALF_EXTENTS)


@dataclass
class Bird:
    """A bird waiting to be rescued; once carried its position is relative to the player."""

    board_pos: IVec3
    position: Vec3
    yaw: float = math.pi
    carried: bool = False


class Simulation:
    """Runs the game's state machine without any rendering.

    Requested state changes take effect at the end of ``handle_command`` or
    ``update``; changes requested while a state is being entered or left take
    effect on the following call.
    """

    def __init__(self) -> None:
        self.game = Game()
        self.app_state = AppState.ASSET_LOADING
        self.game_state: Optional[GameState] = None
        self.moving = Direction.NONE
        self.jumping = False
        self.timer = ActionTimer()
        self.player: Optional[Player] = None
        self.logs: List[LogPiece] = []
        self.birds: List[Bird] = []
        self.skip_player_action = False
        self.skip_player_collision = False
        self.message = ""
        self.message_visible = False
        self.running = True
        self._paused_from: Optional[GameState] = None
        self._events: List[GameEvent] = []
        self._next_app_state: Optional[AppState] = AppState.IN_GAME
        self._next_game_state: Optional[GameState] = None
        self._apply_transitions()

    # ----------------------------------------------------------------- input

    def handle_command(self, command: Command) -> None:
        """Apply one player input."""
        if self.app_state is AppState.IN_GAME:
            if self.game_state is GameState.PLAYER_IDLE:
                self._handle_idle_command(command)
            if command is Command.PAUSE and self.game_state is not None:
                self._toggle_pause()
            elif command is Command.TOGGLE_SKIP_ACTION:
                self.skip_player_action = not self.skip_player_action
                logger.info("Debug skip player action toggled: %s", self.skip_player_action)
            elif command is Command.TOGGLE_SKIP_COLLISION:
                self.skip_player_collision = not self.skip_player_collision
                logger.info(
                    "Debug skip player collision toggled: %s", self.skip_player_collision
                )
        self._apply_transitions()

    def _handle_idle_command(self, command: Command) -> None:
        if command in _MOVES:
            self.moving = _MOVES[command]
            self.jumping = False
            logger.info("Player chooses MOVE.")
            self._next_game_state = GameState.PLAYER_ACTION_IN_PROGRESS
        elif command is Command.JUMP:
            self.jumping = True
            logger.info("Player chooses to JUMP.")
            self._next_game_state = GameState.PLAYER_ACTION_IN_PROGRESS
        elif command is Command.QUIT:
            self.running = False

    def _toggle_pause(self) -> None:
        if self.game_state is GameState.PAUSED:
            previous, self._paused_from = self._paused_from, None
            if previous is None:
                logger.warning("No state recorded before pausing; resuming to PlayerIdle.")
                previous = GameState.PLAYER_IDLE
            logger.info("Resuming to %s", previous)
            self._next_game_state = previous
        else:
            logger.info("Pausing game from %s.", self.game_state)
            self._paused_from = self.game_state
            self._next_game_state = GameState.PAUSED

    # ----------------------------------------------------------------- frame

    def update(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds."""
        if dt < 0:
            raise ValueError("time step must not be negative")
        if self.app_state is AppState.IN_GAME:
            self._update_in_game(dt)
        elif self.app_state is AppState.WIN_GAME:
            self._roll_logs(dt)
            self._update_win_timer(dt)
        elif self.app_state is AppState.END_GAME:
            self.message = GameEvent.OVER.text()
            self._update_player_end(dt)
            self._roll_logs(dt)
        self._apply_transitions()

    def _update_in_game(self, dt: float) -> None:
        state = self.game_state
        if state is GameState.PLAYER_IDLE:
            if self.skip_player_action:
                self._next_game_state = GameState.PLAYER_ACTION_IN_PROGRESS
        elif state is GameState.PLAYER_ACTION_IN_PROGRESS:
            self._process_player_action(dt)
        elif state is GameState.GAME_TURN_IN_PROGRESS:
            self._process_game_turn(dt)
            self._roll_logs(dt)
        elif state is GameState.PLAYER_FINISHING_JUMP:
            self._process_finishing_jump(dt)

        self._update_aabbs()
        events: List[CollisionEvent] = []
        if state is GameState.GAME_TURN_IN_PROGRESS:
            events = detect_collisions(self._collision_objects())
        self._handle_collisions(events)

    def _process_player_action(self, dt: float) -> None:
        self.timer.tick(dt)
        player = self.player
        if player is None or player.motion is None:
            return
        motion = player.motion
        eased = ease_in_out_cubic(self.timer.fraction())
        position = motion.start.lerp(motion.target, eased)
        if self.jumping:
            arc = JUMP_ARC_HEIGHT * math.sin(eased * math.pi)
            position = Vec3(position.x, position.y + arc, position.z)
        player.position = position

        if self.timer.just_finished():
            player.position = motion.target
            player.motion = None
            if self.jumping:
                logger.info("Jump start finished; player is in mid-air.")
            else:
                logger.info("Move finished.")
            self._next_game_state = GameState.GAME_TURN_IN_PROGRESS

        if player.motion is not None:
            self.game.player_pos = player.motion.target.as_ivec3()

    def _process_game_turn(self, dt: float) -> None:
        self.timer.tick(dt)
        progress = self.timer.fraction()
        gone = set()
        for log in self.logs:
            if log.roll is None:
                continue
            log.position = log.roll.start.lerp(log.roll.target, progress)
            if progress > 0.9:
                board_pos = log.position.as_ivec3()
                if not self.game.is_valid_board_pos(board_pos, Direction.WEST):
                    logger.info("Log went out of bounds; removing it.")
                    gone.add(id(log))

        if self.timer.just_finished():
            for log in self.logs:
                if log.roll is None:
                    continue
                log.position = log.roll.target
                log.rotation = 0.0
                log.roll = None
            if self.jumping:
                self._next_game_state = GameState.PLAYER_FINISHING_JUMP
            else:
                self._next_game_state = GameState.PLAYER_IDLE

        self.logs = [log for log in self.logs if id(log) not in gone]

    def _roll_logs(self, dt: float) -> None:
        for log in self.logs:
            if log.roll is not None:
                log.rotation += dt * LOG_ROLL_SPEED

    def _process_finishing_jump(self, dt: float) -> None:
        self.timer.tick(dt)
        player = self.player
        if player is None or player.motion is None:
            return
        motion = player.motion
        eased = abs(ease_out_bounce(self.timer.fraction()))
        player.position = motion.start.lerp(motion.target, eased)
        if self.timer.just_finished():
            player.position = motion.target
            player.motion = None
            self.jumping = False
            self._next_game_state = GameState.PLAYER_IDLE

    def _update_aabbs(self) -> None:
        if self.player is not None:
            self.player.aabb.update_center(self.player.position)
        for log in self.logs:
            log.aabb.update_center(log.position)

    def _collision_objects(self):
        if self.player is not None:
            yield GameObjectType.PLAYER, self.player.aabb
        for log in self.logs:
            yield GameObjectType.LOG, log.aabb

    def _handle_collisions(self, events: List[CollisionEvent]) -> None:
        if self.skip_player_collision:
            return
        for _event in events:
            if self.player is None:
                return
            if self.player.end_timer is None:
                self.player.end_timer = ActionTimer(PLAYER_END_DURATION)
            self._emit(GameEvent.OVER)
            self._next_app_state = AppState.END_GAME

    def _update_player_end(self, dt: float) -> None:
        player = self.player
        if player is None or player.end_timer is None:
            return
        player.end_timer.tick(dt)
        elapsed = player.end_timer.elapsed
        p = player.position
        player.position = Vec3(
            p.x,
            p.y + PLAYER_END_SPEED * 0.5 * elapsed,
            p.z - PLAYER_END_SPEED * elapsed,
        )
        player.spin += PLAYER_END_SPEED * elapsed * math.pi
        if player.end_timer.finished():
            self.player = None
            self.birds = [bird for bird in self.birds if not bird.carried]
            self._next_app_state = AppState.IN_GAME

    def _update_win_timer(self, dt: float) -> None:
        player = self.player
        if player is None or player.win_timer is None:
            return
        if player.win_timer.tick(dt).finished():
            self.game = Game()
            self._next_app_state = AppState.IN_GAME

    # ---------------------------------------------------------------- events

    def _emit(self, event: GameEvent) -> None:
        self._events.append(event)
        self.message = event.text()
        self.message_visible = True
        if event is GameEvent.WIN:
            logger.info("winner!")
            if self.player is None:
                return
            if self.player.win_timer is None:
                self.player.win_timer = ActionTimer(PLAYER_WIN_DURATION)
            self._next_app_state = AppState.WIN_GAME

    def drain_events(self) -> List[GameEvent]:
        """Return the game events raised since the last call and forget them."""
        events, self._events = self._events, []
        return events

    # ---------------------------------------------------------------- spawning

    def spawn_logs(self) -> List[LogPiece]:
        """Spawn the logs due at the current step and return them."""
        step = self.game.current_step
        board_size_y = self.game.board_size_y
        spawned: List[LogPiece] = []
        for seq in self.game.current_level().seq:
            idx = seq.seq_idx(step)
            if seq.log_sequence_nth_step[idx] > 0:
                seq.sequence_index = idx
                logger.info("Spawning log\n%s", seq.describe())
                center = Vec3(
                    seq.spawn_offset_x_at() - TILE_HALF_SIZE,
                    TILE_HALF_SIZE * 0.5,
                    float(board_size_y - seq.spawn_offset_z_at()),
                )
                spawned.append(LogPiece(center))
        self.logs.extend(spawned)
        return spawned

    def _setup_environment(self) -> None:
        level = self.game.current_level()
        for key in list(level.bird_map):
            bird = Bird(board_pos=key, position=key.as_vec3())
            level.bird_map[key] = bird
            self.birds.append(bird)
        self.player = Player()
        self._next_game_state = GameState.PLAYER_IDLE

    def reset(self) -> None:
        """Remove every game object and restore the default game."""
        self.player = None
        self.logs = []
        self.birds = []
        logger.info("resetting game")
        self.game = Game()

    # ------------------------------------------------------------- transitions

    def _apply_transitions(self) -> None:
        next_app, self._next_app_state = self._next_app_state, None
        next_game, self._next_game_state = self._next_game_state, None
        if next_app is not None and next_app is not self.app_state:
            self._change_app_state(next_app)
            next_game = None
        if (
            next_game is not None
            and self.game_state is not None
            and next_game is not self.game_state
        ):
            logger.info("GAMESTATE TRANSITION: %s => %s", self.game_state, next_game)
            self._exit_game_state(self.game_state)
            self.game_state = next_game
            self._enter_game_state(next_game)

    def _change_app_state(self, target: AppState) -> None:
        if self.game_state is not None:
            self._exit_game_state(self.game_state)
            self.game_state = None
        if self.app_state in (AppState.END_GAME, AppState.WIN_GAME):
            self.reset()
        self.app_state = target
        if target is AppState.IN_GAME:
            self.message_visible = False
            self._setup_environment()
            self.game_state = GameState.PLAYER_IDLE
            self._enter_game_state(GameState.PLAYER_IDLE)

    def _enter_game_state(self, state: GameState) -> None:
        if state is GameState.PLAYER_IDLE:
            self.spawn_logs()
        elif state is GameState.PLAYER_ACTION_IN_PROGRESS:
            self._setup_player_action()
        elif state is GameState.GAME_TURN_IN_PROGRESS:
            self._setup_game_turn()
        elif state is GameState.PLAYER_FINISHING_JUMP:
            self._setup_jump_landing()
        elif state is GameState.PAUSED:
            logger.info("Game is paused.")

    def _exit_game_state(self, state: GameState) -> None:
        if state is GameState.PLAYER_ACTION_IN_PROGRESS:
            self._check_for_bird()
        elif state is GameState.GAME_TURN_IN_PROGRESS:
            self.game.current_step += 1
            logger.info("Advancing to turn number: %d", self.game.current_step)
        elif state is GameState.PAUSED:
            logger.info("Resuming game activities.")

    def _setup_player_action(self) -> None:
        duration = (
            PLAYER_JUMP_ANIMATION_DURATION
            if self.jumping
            else PLAYER_ACTION_ANIMATION_DURATION
        )
        self.timer = ActionTimer(duration)
        if self.player is None:
            return
        start = self.player.position
        if self.jumping:
            target = Vec3(start.x, start.y + 1.0, start.z)
        else:
            target = start + self.moving.value().as_vec3()
        self.player.motion = _Motion(start, target)

    def _setup_game_turn(self) -> None:
        self.timer = ActionTimer(GAME_MOVE_ANIMATION_DURATION)
        for log in self.logs:
            start = log.position
            log.roll = _Motion(start, Vec3(start.x, start.y, start.z - TILE_SIZE * 2.0))

    def _setup_jump_landing(self) -> None:
        self.timer = ActionTimer(PLAYER_JUMP_LAND_ANIMATION_DURATION)
        if self.player is None:
            return
        start = self.player.position
        self.player.motion = _Motion(start, Vec3(start.x, start.y - 1.0, start.z))

    def _check_for_bird(self) -> None:
        if not self.jumping or self.player is None:
            return
        p = self.player.position.as_ivec3()
        key = IVec3(p.x, BIRD_Y, p.z)
        bird_map = self.game.current_level().bird_map
        if key not in bird_map:
            return
        bird = bird_map.pop(key)
        if isinstance(bird, Bird):
            diff = float(self.game.bevy_count + 1)
            bird.position = Vec3(0.0, 0.5 * diff, 0.0)
            bird.yaw += 0.65 * diff
            bird.carried = True
        logger.info("bird found")
        self._rescue_bird()

    def _rescue_bird(self) -> None:
        level = self.game.current_level()
        logger.info("birds left: %d", len(level.bird_map))
        self.game.bevy_count += 1
        if not level.bird_map:
            self._emit(GameEvent.WIN)