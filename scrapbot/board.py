from dataclasses import dataclass
from enum import IntEnum

import numpy as np
from scipy import ndimage
from scipy.signal import convolve2d

MATTER_PER_ACTION = 10

FEATURES = {
    "scrap_amount": 0,
    "owner": 1,
    "units": 2,
    "recycler": 3,
    "can_build": 4,
    "can_spawn": 5,
    "in_range_of_recycler": 6,
}

# N, E, S, W as (dx, dy)
OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))

KERNEL_MANHATTAN = np.array(
    [[0, 1, 0],
     [1, 1, 1],
     [0, 1, 0]])
KERNEL_ADJACENT = np.array(
    [[0, 1, 0],
     [1, 0, 1],
     [0, 1, 0]])


class Owner(IntEnum):
    """Values match the owner codes of the game input."""
    ME = 1
    OPPONENT = 0
    NEUTRAL = -1


@dataclass(frozen=True)
class Cell:
    x: int
    y: int
    scrap_amount: int
    owner: Owner
    units: int
    recycler: bool
    can_build: bool
    can_spawn: bool
    in_range_of_recycler: bool

    @property
    def is_grass(self) -> bool:
        return self.scrap_amount == 0

    @property
    def is_traversable(self) -> bool:
        return self.scrap_amount > 1 or (self.scrap_amount == 1 and not self.in_range_of_recycler)


def adjacent_in_range(x, y, width, height):
    """returns the N, E, S, W neighbour coordinates, None where off the board"""
    slots = []
    for dx, dy in OFFSETS:
        nx, ny = x + dx, y + dy
        slots.append((nx, ny) if 0 <= nx < width and 0 <= ny < height else None)
    return slots


class Board:

    def __init__(self, input_array, my_matter=0, op_matter=0):
        array = np.array(input_array, dtype=np.int32)
        if array.ndim != 3 or array.shape[2] != len(FEATURES):
            raise ValueError(f"expected a (height, width, {len(FEATURES)}) array, got {array.shape}")
        self._input_array = array
        self.validate()
        self._input_array.setflags(write=False)
        self.height, self.width = array.shape[0], array.shape[1]
        self.my_matter = my_matter
        self.op_matter = op_matter
        self._islands = None

    @classmethod
    def from_input(cls, width, height, values, my_matter=0, op_matter=0):
        """values: flat row-major list of width * height * 7 ints, as read from the game"""
        array = np.array(values, dtype=np.int32)
        if array.size != width * height * len(FEATURES):
            raise ValueError(f"expected {width * height * len(FEATURES)} values, got {array.size}")
        return cls(array.reshape(height, width, len(FEATURES)), my_matter, op_matter)

    def validate(self) -> None:
        if not np.isin(self.owner, [owner.value for owner in Owner]).all():
            raise ValueError(f"unknown owner code in {np.unique(self.owner)}")
        if (self.scrap_amount < 0).any() or (self.units < 0).any():
            raise ValueError("scrap_amount and units must be non-negative")
        if ((self.recycler > 0) & (self.scrap_amount == 0)).any():
            raise ValueError("recycler on a grass cell")

    def __str__(self):
        return (
            f"{'='*30}\n"
            f"Matter: {self.my_matter} vs {self.op_matter} | "
            f"Units: {self.unit_total(Owner.ME)} vs {self.unit_total(Owner.OPPONENT)}"
            f"\n{'='*30}"
        )

    def dim_to_array(self, dimension: str) -> np.ndarray:
        """example: dim_to_array('units') == 0"""
        if dimension not in FEATURES:
            raise ValueError(f"{dimension} is not in {FEATURES.keys()}")
        return self._input_array[:, :, FEATURES[dimension]]

    @property
    def scrap_amount(self):
        return self.dim_to_array('scrap_amount')

    @property
    def owner(self):
        return self.dim_to_array('owner')

    @property
    def units(self):
        return self.dim_to_array('units')

    @property
    def recycler(self):
        return self.dim_to_array('recycler')

    @property
    def can_build(self):
        return self.dim_to_array('can_build')

    @property
    def can_spawn(self):
        return self.dim_to_array('can_spawn')

    @property
    def in_range_of_recycler(self):
        return self.dim_to_array('in_range_of_recycler')

    @property
    def owner_me(self):
        return self.owner == Owner.ME

    @property
    def owner_op(self):
        return self.owner == Owner.OPPONENT

    @property
    def owner_ne(self):
        return self.owner == Owner.NEUTRAL

    @property
    def units_me(self):
        return self.units * self.owner_me

    @property
    def units_op(self):
        return self.units * self.owner_op

    @property
    def is_grass(self):
        return self.scrap_amount == 0

    @property
    def traversable(self):
        """grass now, or grass after the next harvest, is not traversable"""
        return (self.scrap_amount > 1) | ((self.scrap_amount == 1) & (self.in_range_of_recycler == 0))

    @property
    def tile_live(self):
        return self.traversable & (self.recycler == 0)

    def in_bounds(self, x, y) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x, y) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) out of bounds for {self.width}x{self.height}")
        scrap, owner, units, recycler, can_build, can_spawn, in_range = (int(v) for v in self._input_array[y, x])
        return Cell(
            x=x,
            y=y,
            scrap_amount=scrap,
            owner=Owner(owner),
            units=units,
            recycler=recycler == 1,
            can_build=can_build == 1,
            can_spawn=can_spawn == 1,
            in_range_of_recycler=in_range == 1,
        )

    def cells(self):
        return [self.cell(x, y) for y in range(self.height) for x in range(self.width)]

    def is_traversable(self, x, y) -> bool:
        return self.cell(x, y).is_traversable

    def neighbors4(self, x, y) -> list:
        return [self.cell(*xy) for xy in adjacent_in_range(x, y, self.width, self.height) if xy is not None]

    def neighbors_plus_self(self, x, y) -> list:
        return [self.cell(x, y)] + self.neighbors4(x, y)

    def unit_total(self, owner: Owner) -> int:
        return int(self.units[self.owner == owner].sum())

    def adjacent_units(self, owner: Owner) -> np.ndarray:
        return convolve2d(self.units * (self.owner == owner), KERNEL_ADJACENT, mode='same').astype(int)

    def adjacent_unit_total(self, x, y, owner: Owner) -> int:
        return sum(cell.units for cell in self.neighbors4(x, y) if cell.owner == owner)

    def advance_harvest_cycle(self):
        """returns a new board one harvest later; self is left untouched"""
        recyclers_in_range = convolve2d(self.recycler, KERNEL_MANHATTAN, mode='same').astype(int)
        scrap_amount = np.maximum(self.scrap_amount - recyclers_in_range, 0)
        recycler = self.recycler * (scrap_amount > 0)
        in_range = convolve2d(recycler, KERNEL_MANHATTAN, mode='same') > 0

        array = self._input_array.copy()
        array[:, :, FEATURES['scrap_amount']] = scrap_amount
        array[:, :, FEATURES['recycler']] = recycler
        array[:, :, FEATURES['in_range_of_recycler']] = in_range
        return Board(array, self.my_matter, self.op_matter)

    @property
    def islands(self) -> np.ndarray:
        """4-connected components of live tiles, 0 where the tile is not live"""
        if self._islands is None:
            self._islands = ndimage.label(self.tile_live.astype(int), structure=KERNEL_MANHATTAN)[0]
        return self._islands

    def island_presence(self, mask) -> set:
        return set(np.unique(self.islands[mask & (self.islands > 0)]).tolist())

    @property
    def island_shared(self) -> set:
        return self.island_presence(self.owner_me) & self.island_presence(self.owner_op)

    @property
    def island_active(self) -> set:
        """islands still worth fighting for: contested, or mine with neutral tiles left"""
        captured_but_incomplete = self.island_presence(self.owner_me) & self.island_presence(self.owner_ne)
        return self.island_shared | captured_but_incomplete

    @property
    def on_active_island(self) -> np.ndarray:
        return np.isin(self.islands, list(self.island_active))
