import pytest

from loglog.game import (
    TILE_SIZE,
    AppState,
    Direction,
    GameEvent,
    GameState,
)
from loglog.simulation import ActionTimer, Bird, Command, LogPiece, Simulation
from loglog.vec import IVec3, Vec3

STEP = 0.5
START = Vec3(6.0, 0.5, 0.0)


def settle(sim, limit=20):
    for _ in range(limit):
        if sim.app_state is not AppState.IN_GAME:
            return
        if sim.game_state is GameState.PLAYER_IDLE:
            return
        sim.update(STEP)


def turn(sim, command):
    sim.handle_command(command)
    settle(sim)


def test_timer_progress_and_finish():
    timer = ActionTimer(1.0)
    timer.tick(0.5)
    assert timer.fraction() == pytest.approx(0.5)
    assert not timer.finished()
    assert not timer.just_finished()
    timer.tick(0.75)
    assert timer.finished()
    assert timer.just_finished()
    assert timer.elapsed == 1.0
    timer.tick(0.1)
    assert timer.finished()
    assert not timer.just_finished()


def test_timer_reset():
    timer = ActionTimer(0.4)
    timer.tick(1.0)
    timer.reset()
    assert timer.fraction() == 0.0
    assert not timer.finished()


def test_timer_rejects_negative_step():
    with pytest.raises(ValueError):
        ActionTimer().tick(-0.1)


def test_update_rejects_negative_step():
    with pytest.raises(ValueError):
        Simulation().update(-1.0)


def test_initial_state():
    sim = Simulation()
    assert sim.app_state is AppState.IN_GAME
    assert sim.game_state is GameState.PLAYER_IDLE
    assert sim.player.position == START
    bird_map = sim.game.current_level().bird_map
    assert len(sim.birds) == len(bird_map) == 3
    for key, bird in bird_map.items():
        assert isinstance(bird, Bird)
        assert bird.board_pos == key
        assert bird.position == key.as_vec3()
    assert len(sim.logs) == 2


def test_spawn_logs_is_deterministic_for_a_step():
    sim = Simulation()
    first = [log.position for log in sim.logs]
    again = sim.spawn_logs()
    assert [log.position for log in again] == first
    assert all(log.aabb.center() == log.position for log in again)
    assert len(sim.logs) == 2 * len(first)


def test_move_north():
    sim = Simulation()
    sim.handle_command(Command.MOVE_NORTH)
    assert sim.game_state is GameState.PLAYER_ACTION_IN_PROGRESS
    sim.update(STEP)
    expected = START + Direction.NORTH.value().as_vec3()
    assert sim.game_state is GameState.GAME_TURN_IN_PROGRESS
    assert sim.player.position == expected
    assert sim.player.motion is None


def test_game_turn_rolls_logs_and_advances_step():
    sim = Simulation()
    before = {id(log): log.position for log in sim.logs}
    turn(sim, Command.MOVE_EAST)
    assert sim.game_state is GameState.PLAYER_IDLE
    assert sim.game.current_step == 1
    moved = [log for log in sim.logs if id(log) in before]
    assert len(moved) == len(before)
    for log in moved:
        old = before[id(log)]
        assert log.position == Vec3(old.x, old.y, old.z - TILE_SIZE * 2.0)
        assert log.roll is None


def test_commands_ignored_while_action_in_progress():
    sim = Simulation()
    sim.handle_command(Command.MOVE_NORTH)
    target = sim.player.motion.target
    sim.handle_command(Command.MOVE_EAST)
    assert sim.game_state is GameState.PLAYER_ACTION_IN_PROGRESS
    assert sim.player.motion.target == target
    assert sim.moving is Direction.NORTH


def test_pause_and_resume():
    sim = Simulation()
    sim.handle_command(Command.MOVE_NORTH)
    sim.update(0.1)
    sim.handle_command(Command.PAUSE)
    assert sim.game_state is GameState.PAUSED
    frozen = sim.player.position
    sim.update(STEP)
    assert sim.player.position == frozen
    sim.handle_command(Command.PAUSE)
    assert sim.game_state is GameState.PLAYER_ACTION_IN_PROGRESS


def test_skip_player_action_starts_action_without_input():
    sim = Simulation()
    sim.handle_command(Command.TOGGLE_SKIP_ACTION)
    assert sim.skip_player_action
    sim.update(0.0)
    assert sim.game_state is GameState.PLAYER_ACTION_IN_PROGRESS


def test_quit_stops_running():
    sim = Simulation()
    sim.handle_command(Command.QUIT)
    assert sim.running is False


def test_collision_ends_game_then_restarts():
    sim = Simulation()
    sim.logs.append(LogPiece(Vec3(6.0, 0.25, 3.0)))
    sim.handle_command(Command.MOVE_NORTH)
    sim.update(STEP)
    sim.update(STEP)
    assert sim.app_state is AppState.END_GAME
    assert sim.game_state is None
    assert sim.drain_events() == [GameEvent.OVER]
    assert sim.drain_events() == []
    assert sim.message == "GAME OVER"
    assert sim.message_visible

    before = sim.player.position
    sim.update(0.8)
    assert sim.player.position.z < before.z
    assert sim.player.position.y > before.y

    sim.update(1.6)
    assert sim.app_state is AppState.IN_GAME
    assert sim.game_state is GameState.PLAYER_IDLE
    assert sim.player.position == START
    assert sim.game.current_step == 0
    assert not sim.message_visible


def test_skip_collision_prevents_game_over():
    sim = Simulation()
    sim.handle_command(Command.TOGGLE_SKIP_COLLISION)
    sim.logs.append(LogPiece(Vec3(6.0, 0.25, 3.0)))
    turn(sim, Command.MOVE_NORTH)
    assert sim.app_state is AppState.IN_GAME
    assert sim.drain_events() == []


def test_log_leaving_board_is_removed():
    sim = Simulation()
    stray = LogPiece(Vec3(3.0, 0.25, 1.0))
    sim.logs.append(stray)
    turn(sim, Command.MOVE_NORTH)
    assert all(log is not stray for log in sim.logs)
    assert sim.app_state is AppState.IN_GAME


def test_jump_rescues_bird():
    sim = Simulation()
    sim.handle_command(Command.TOGGLE_SKIP_COLLISION)
    key = IVec3(7, 2, 2)
    bird = sim.game.current_level().bird_map[key]
    for command in (Command.MOVE_EAST, Command.MOVE_NORTH, Command.MOVE_NORTH):
        turn(sim, command)
    assert sim.player.position == Vec3(7.0, 0.5, 2.0)
    turn(sim, Command.JUMP)
    assert sim.game_state is GameState.PLAYER_IDLE
    assert sim.player.position == Vec3(7.0, 0.5, 2.0)
    assert sim.jumping is False
    assert sim.game.bevy_count == 1
    bird_map = sim.game.current_level().bird_map
    assert key not in bird_map
    assert len(bird_map) == 2
    assert bird.carried
    assert bird.position == Vec3(0.0, 0.5, 0.0)


def test_rescuing_last_bird_wins():
    sim = Simulation()
    sim.handle_command(Command.TOGGLE_SKIP_COLLISION)
    key = IVec3(7, 2, 2)
    bird_map = sim.game.current_level().bird_map
    for other in [k for k in bird_map if k != key]:
        del bird_map[other]
    for command in (Command.MOVE_EAST, Command.MOVE_NORTH, Command.MOVE_NORTH):
        turn(sim, command)
    turn(sim, Command.JUMP)
    assert sim.app_state is AppState.WIN_GAME
    assert sim.drain_events() == [GameEvent.WIN]
    assert sim.message == "ALL BIRDS RESCUED"
    assert sim.game.bevy_count == 1

    sim.update(2.6)
    assert sim.app_state is AppState.IN_GAME
    assert sim.game.bevy_count == 0
    assert len(sim.game.current_level().bird_map) == 3


def test_reset_clears_everything():
    sim = Simulation()
    turn(sim, Command.MOVE_NORTH)
    assert sim.game.current_step == 1
    sim.reset()
    assert sim.player is None
    assert sim.logs == []
    assert sim.birds == []
    assert sim.game.current_step == 0