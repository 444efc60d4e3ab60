import random

from slide2048.components.move import TileEventKind
from slide2048.systems.board import BoardSystem
from slide2048.world import create_world

from helpers import CHECKERBOARD


def test_spawn_distribution_is_mostly_twos(bus):
    world = create_world(bus, rng=random.Random(1234))
    board = BoardSystem(world, bus)
    empty = [None] * 16
    fours = 0
    total = 5000
    for _ in range(total):
        board.load_cells(empty)
        (spawned,) = board.spawn_tiles(1)
        assert spawned.value in (2, 4)
        if spawned.value == 4:
            fours += 1
    assert 0.17 < fours / total < 0.23


def test_spawn_never_exceeds_empty_slots(board):
    cells = list(CHECKERBOARD)
    cells[5] = None
    board.load_cells(cells)
    spawned = board.spawn_tiles(3)
    assert len(spawned) == 1
    assert spawned[0].to_cell == (1, 1)
    assert spawned[0].kind is TileEventKind.SPAWNED
    assert spawned[0].from_cell is None
    assert board.spawn_tiles(1) == []


def test_spawn_adds_values_to_score(board):
    board.load_cells([None] * 16)
    score = board.score
    spawned = board.spawn_tiles(4)
    assert len(spawned) == 4
    assert len({ev.to_cell for ev in spawned}) == 4
    assert board.score == score + sum(ev.value for ev in spawned)


def test_same_seed_same_game(bus):
    def first_cells(seed):
        world = create_world(bus, rng=random.Random(seed))
        return BoardSystem(world, bus).cells()

    assert first_cells(11) == first_cells(11)
