import numpy as np
import pytest

from scrapbot.board import Owner
from scrapbot.distance import UNREACHABLE, DistanceBoard, Ordering


def brute_force_distances(board, owner):
    """relax every edge until nothing changes"""
    distances = [[UNREACHABLE] * board.width for _ in range(board.height)]
    sources = set()
    for cell in board.cells():
        if cell.owner == owner and cell.units > 0:
            distances[cell.y][cell.x] = 0
            sources.add((cell.x, cell.y))
        elif cell.owner == owner and not cell.recycler:
            distances[cell.y][cell.x] = 1
            sources.add((cell.x, cell.y))
    changed = True
    while changed:
        changed = False
        for cell in board.cells():
            own = distances[cell.y][cell.x]
            if own == UNREACHABLE:
                continue
            for neighbour in board.neighbors4(cell.x, cell.y):
                if (cell.x, cell.y) in sources and neighbour.owner == owner:
                    continue
                if neighbour.is_traversable and own + 1 < distances[neighbour.y][neighbour.x]:
                    distances[neighbour.y][neighbour.x] = own + 1
                    changed = True
    return np.array(distances)


def test_scenario_labels(scenario_board):
    distances = DistanceBoard.from_owner(scenario_board, Owner.ME)
    assert [distances.get(x, 0) for x in range(3)] == [0, 1, 2]


def test_scenario_labels_from_opponent(scenario_board):
    distances = DistanceBoard.from_owner(scenario_board, Owner.OPPONENT)
    assert [distances.get(x, 0) for x in range(3)] == [2, 1, 0]


@pytest.mark.parametrize('owner', [Owner.ME, Owner.OPPONENT])
def test_matches_brute_force(rng, random_board, owner):
    for _ in range(25):
        board = random_board(rng)
        distances = DistanceBoard.from_owner(board, owner)
        np.testing.assert_array_equal(distances.distances, brute_force_distances(board, owner))


def test_idempotent(rng, random_board):
    board = random_board(rng, width=8, height=7)
    first = DistanceBoard.from_owner(board, Owner.ME)
    second = DistanceBoard.from_owner(board, Owner.ME)
    assert np.array_equal(first.distances, second.distances)


def test_empty_owned_tile_costs_a_spawn(tile, make_board):
    board = make_board([[tile(owner=Owner.ME), tile(), tile()]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert [distances.get(x, 0) for x in range(3)] == [1, 2, 3]


def test_recycler_tile_is_not_a_source(tile, make_board):
    board = make_board([[tile(owner=Owner.ME, recycler=1, in_range=1), tile(in_range=1)]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert not distances.reachable.any()


def test_grass_isolates(tile, make_board):
    board = make_board([[tile(owner=Owner.ME, units=1), tile(scrap=0), tile()]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert distances.get(0, 0) == 0
    assert not distances.is_reachable(1, 0)
    assert not distances.is_reachable(2, 0)


def test_dying_tile_blocks(tile, make_board):
    board = make_board([[tile(owner=Owner.ME, units=1), tile(scrap=1, in_range=1), tile()]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert distances.get(1, 0) == UNREACHABLE
    assert distances.get(2, 0) == UNREACHABLE


def test_no_presence_is_unreachable(tile, make_board):
    board = make_board([[tile(), tile()], [tile(), tile()]])
    distances = DistanceBoard.from_owner(board, Owner.OPPONENT)
    assert not distances.reachable.any()


def test_capped(tile, make_board):
    board = make_board([[tile(owner=Owner.ME, units=1), tile(scrap=0), tile()]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    np.testing.assert_array_equal(distances.capped(99), [[0, 99, 99]])


def test_direction_towards(scenario_board):
    distances = DistanceBoard.from_owner(scenario_board, Owner.ME)
    assert distances.direction_towards(1, 0, Ordering.LESS) == [False, False, False, True]
    assert distances.direction_towards(1, 0, Ordering.GREATER) == [False, True, False, False]
    assert distances.direction_towards(0, 0, Ordering.EQUAL) == [False, False, False, False]


def test_direction_towards_unreachable_is_greater(tile, make_board):
    board = make_board([[tile(owner=Owner.ME, units=1), tile(scrap=0)]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert distances.direction_towards(0, 0, Ordering.GREATER) == [False, True, False, False]


def test_sources_do_not_step_onto_own_recycler(tile, make_board):
    board = make_board([[tile(owner=Owner.ME, units=1, in_range=1), tile(owner=Owner.ME, recycler=1, in_range=1), tile(scrap=0)]])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert [distances.get(x, 0) for x in range(3)] == [0, UNREACHABLE, UNREACHABLE]


def test_own_recycler_reached_through_unowned_tile(tile, make_board):
    board = make_board([
        [tile(owner=Owner.ME, units=1), tile(owner=Owner.ME, recycler=1, in_range=1)],
        [tile(in_range=1), tile(in_range=1)],
    ])
    distances = DistanceBoard.from_owner(board, Owner.ME)
    assert distances.get(1, 0) == 3
