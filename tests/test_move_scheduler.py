import pytest

from slide2048.components.move import Direction, MoveResult
from slide2048.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_MOVE_REQUEST,
    EVENT_MOVE_RESOLVED,
    EVENT_NEW_GAME_REQUEST,
)
from slide2048.systems.animation import AnimationSystem
from slide2048.systems.move_scheduler import MoveScheduler, SchedulerPhase

from helpers import Recorder, drive, grid


class FakeBoard:
    """Stands in for BoardSystem; records calls and reports every move as changed."""

    def __init__(self, changed=True):
        self.changed = changed
        self.calls: list[Direction] = []
        self.resets = 0
        self.on_apply = None
        self._next_id = 0

    def apply_move(self, direction):
        self._next_id += 1
        self.calls.append(direction)
        if self.on_apply is not None:
            self.on_apply(self._next_id)
        return MoveResult(move_id=self._next_id, direction=direction, changed=self.changed)

    def reset(self):
        self.resets += 1


@pytest.fixture
def setup():
    bus = EventBus()
    board = FakeBoard()
    scheduler = MoveScheduler(board, bus)
    return bus, board, scheduler


def test_first_request_resolves_immediately(setup):
    bus, board, scheduler = setup
    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.LEFT)
    assert board.calls == [Direction.LEFT]
    assert scheduler.phase is SchedulerPhase.RESOLVING
    assert scheduler.in_flight.move_id == 1


def test_requests_wait_for_in_flight_move_to_settle(setup):
    bus, board, scheduler = setup
    scheduler.request_move(Direction.LEFT)
    scheduler.request_move(Direction.UP)
    drive(bus, 30)
    # Still blocked: nothing reported the animation complete.
    assert board.calls == [Direction.LEFT]
    assert scheduler.pending == (Direction.UP,)

    bus.emit(EVENT_ANIMATION_COMPLETE, kind='move', move_id=1)
    assert board.calls == [Direction.LEFT, Direction.UP]
    assert scheduler.phase is SchedulerPhase.RESOLVING
    assert scheduler.pending == ()

    bus.emit(EVENT_ANIMATION_COMPLETE, kind='move', move_id=2)
    assert scheduler.phase is SchedulerPhase.IDLE


def test_backlog_beyond_two_requests_is_dropped(setup):
    bus, board, scheduler = setup
    assert scheduler.request_move(Direction.LEFT)
    assert scheduler.request_move(Direction.RIGHT)
    assert scheduler.request_move(Direction.UP)
    assert not scheduler.request_move(Direction.DOWN)
    assert scheduler.dropped == 1
    assert scheduler.pending == (Direction.RIGHT, Direction.UP)

    scheduler.settle(1)
    scheduler.settle(2)
    scheduler.settle(3)
    assert board.calls == [Direction.LEFT, Direction.RIGHT, Direction.UP]
    assert scheduler.phase is SchedulerPhase.IDLE


def test_unchanged_move_does_not_wait_for_animation():
    bus = EventBus()
    board = FakeBoard(changed=False)
    scheduler = MoveScheduler(board, bus)
    scheduler.request_move(Direction.LEFT)
    assert scheduler.phase is SchedulerPhase.IDLE
    assert scheduler.in_flight is None
    scheduler.request_move(Direction.RIGHT)
    assert board.calls == [Direction.LEFT, Direction.RIGHT]


def test_stale_or_unrelated_completions_are_ignored(setup):
    bus, board, scheduler = setup
    scheduler.request_move(Direction.LEFT)
    scheduler.request_move(Direction.RIGHT)

    assert scheduler.settle(99) is False
    bus.emit(EVENT_ANIMATION_COMPLETE, kind='fade', items=[])
    bus.emit(EVENT_ANIMATION_COMPLETE, kind='move')
    assert board.calls == [Direction.LEFT]
    assert scheduler.phase is SchedulerPhase.RESOLVING


def test_new_game_abandons_backlog_and_in_flight_move(setup):
    bus, board, scheduler = setup
    scheduler.request_move(Direction.LEFT)
    scheduler.request_move(Direction.RIGHT)

    bus.emit(EVENT_NEW_GAME_REQUEST)

    assert board.resets == 1
    assert scheduler.pending == ()
    assert scheduler.phase is SchedulerPhase.IDLE
    # The abandoned move finishing later must not unblock anything.
    assert scheduler.settle(1) is False

    scheduler.request_move(Direction.DOWN)
    assert board.calls == [Direction.LEFT, Direction.DOWN]


def test_settle_timeout_forces_progress():
    bus = EventBus()
    board = FakeBoard()
    scheduler = MoveScheduler(board, bus, settle_timeout=0.1)
    scheduler.request_move(Direction.LEFT)
    scheduler.request_move(Direction.UP)
    drive(bus, 2, dt=0.04)
    assert board.calls == [Direction.LEFT]
    drive(bus, 1, dt=0.04)
    assert board.calls == [Direction.LEFT, Direction.UP]


def test_invalid_direction_fails_fast(setup):
    bus, board, scheduler = setup
    with pytest.raises(ValueError):
        scheduler.request_move("diagonal")
    with pytest.raises(ValueError):
        bus.emit(EVENT_MOVE_REQUEST, direction=None)
    assert board.calls == []


def test_string_directions_are_accepted(setup):
    bus, board, scheduler = setup
    bus.emit(EVENT_MOVE_REQUEST, direction="Up")
    assert board.calls == [Direction.UP]


def test_request_made_while_resolving_is_queued_not_applied(setup):
    bus, board, scheduler = setup

    def request_during_apply(move_id):
        if move_id == 1:
            scheduler.request_move(Direction.DOWN)

    board.on_apply = request_during_apply
    scheduler.request_move(Direction.LEFT)
    assert board.calls == [Direction.LEFT]
    assert scheduler.pending == (Direction.DOWN,)

    scheduler.settle(1)
    assert board.calls == [Direction.LEFT, Direction.DOWN]


def test_completion_reported_during_apply_settles_the_move(setup):
    bus, board, scheduler = setup
    board.on_apply = lambda move_id: bus.emit(EVENT_ANIMATION_COMPLETE, kind='move', move_id=move_id)
    scheduler.request_move(Direction.LEFT)
    assert scheduler.phase is SchedulerPhase.IDLE
    scheduler.request_move(Direction.RIGHT)
    assert board.calls == [Direction.LEFT, Direction.RIGHT]


def test_new_game_requested_during_apply_wins(setup):
    bus, board, scheduler = setup
    scheduler.request_move(Direction.LEFT)
    scheduler.request_move(Direction.RIGHT)
    board.on_apply = lambda move_id: bus.emit(EVENT_NEW_GAME_REQUEST)
    scheduler.settle(1)
    assert board.calls == [Direction.LEFT, Direction.RIGHT]
    assert board.resets == 1
    assert scheduler.phase is SchedulerPhase.IDLE
    assert scheduler.in_flight is None


def test_queued_move_waits_for_real_slide_animation(board, world, bus):
    AnimationSystem(world, bus)
    scheduler = MoveScheduler(board, bus)
    resolved = Recorder(bus, EVENT_MOVE_RESOLVED)
    board.load_cells(grid([None, None, None, 2]))

    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.LEFT)
    after_left = board.cells()
    bus.emit(EVENT_MOVE_REQUEST, direction=Direction.RIGHT)

    # Three cells of travel take 0.24s; the board must not move under the animation.
    drive(bus, 5)
    assert board.cells() == after_left
    assert [p["result"].direction for p in resolved.payloads] == [Direction.LEFT]

    drive(bus, 30)
    assert [p["result"].direction for p in resolved.payloads] == [Direction.LEFT, Direction.RIGHT]
    drive(bus, 30)
    assert scheduler.phase is SchedulerPhase.IDLE
