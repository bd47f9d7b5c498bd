"""Shared fixtures for the scrapbot test suite."""

import numpy as np
import pytest
from scipy.signal import convolve2d

from scrapbot.board import FEATURES, KERNEL_MANHATTAN, Board, Owner


@pytest.fixture
def tile():
    """Factory for one cell record in input channel order."""
    def make(scrap=5, owner=Owner.NEUTRAL, units=0, recycler=0, can_build=0, can_spawn=0, in_range=0):
        return [scrap, int(owner), units, recycler, can_build, can_spawn, in_range]
    return make


@pytest.fixture
def make_board():
    """Factory for a Board from rows of cell records."""
    def make(rows, my_matter=0, op_matter=0):
        return Board(np.array(rows), my_matter, op_matter)
    return make


@pytest.fixture
def scenario_board(tile, make_board):
    """1x3: my unit, a neutral tile, an opponent unit."""
    return make_board([[
        tile(scrap=5, owner=Owner.ME, units=1),
        tile(scrap=5),
        tile(scrap=5, owner=Owner.OPPONENT, units=1),
    ]])


@pytest.fixture
def random_board():
    """Factory for consistent random boards: recyclers only on scrap, ranges derived."""
    def make(rng, width=6, height=5):
        array = np.zeros((height, width, len(FEATURES)), dtype=int)
        scrap = rng.integers(0, 4, size=(height, width))
        recycler = ((rng.random((height, width)) < 0.15) & (scrap > 0)).astype(int)
        owner = rng.integers(-1, 2, size=(height, width))
        units = rng.integers(0, 3, size=(height, width)) * (owner != Owner.NEUTRAL) * (scrap > 0) * (recycler == 0)
        array[:, :, FEATURES['scrap_amount']] = scrap
        array[:, :, FEATURES['owner']] = owner
        array[:, :, FEATURES['units']] = units
        array[:, :, FEATURES['recycler']] = recycler
        array[:, :, FEATURES['in_range_of_recycler']] = convolve2d(recycler, KERNEL_MANHATTAN, mode='same') > 0
        return Board(array)
    return make


@pytest.fixture
def rng():
    return np.random.default_rng(seed=12345)
