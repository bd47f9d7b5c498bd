import heapq
from enum import IntEnum
from itertools import count

import numpy as np

from scrapbot.board import Board, Owner, adjacent_in_range

UNREACHABLE = int(np.iinfo(np.int32).max)


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class DistanceBoard:
    """Turns needed for an owner's units to reach each cell.

    Owned cells with units are sources at distance 0. Owned cells without units
    and without a recycler are sources at distance 1, since a unit has to be
    spawned there first. Sources step only onto cells the owner does not hold;
    from there every cell is reached by stepping over traversable cells, one
    turn per step.
    """

    def __init__(self, distances: np.ndarray):
        self.distances = distances
        self.height, self.width = distances.shape

    @classmethod
    def from_owner(cls, board: Board, owner: Owner):
        distances = np.full((board.height, board.width), UNREACHABLE, dtype=np.int64)
        traversable = board.traversable
        owned = board.owner == owner

        # (distance, insertion order, x, y)
        frontier = []
        insertion = count()
        seeds = []
        sources = (
            (0, owned & (board.units > 0)),
            (1, owned & (board.units == 0) & (board.recycler == 0)),
        )
        for distance, mask in sources:
            for y, x in np.argwhere(mask):
                distances[y, x] = distance
                seeds.append((distance, int(x), int(y)))
        # sources only step onto cells they do not own
        for distance, x, y in seeds:
            for xy in adjacent_in_range(x, y, board.width, board.height):
                if xy is None:
                    continue
                nx, ny = xy
                if traversable[ny, nx] and not owned[ny, nx] and distance + 1 < distances[ny, nx]:
                    distances[ny, nx] = distance + 1
                    heapq.heappush(frontier, (distance + 1, next(insertion), nx, ny))

        while frontier:
            distance, _, x, y = heapq.heappop(frontier)
            if distance > distances[y, x]:
                continue
            for xy in adjacent_in_range(x, y, board.width, board.height):
                if xy is None:
                    continue
                nx, ny = xy
                if traversable[ny, nx] and distance + 1 < distances[ny, nx]:
                    distances[ny, nx] = distance + 1
                    heapq.heappush(frontier, (distance + 1, next(insertion), nx, ny))

        distances.setflags(write=False)
        return cls(distances)

    def get(self, x, y) -> int:
        return int(self.distances[y, x])

    def is_reachable(self, x, y) -> bool:
        return self.get(x, y) != UNREACHABLE

    @property
    def reachable(self) -> np.ndarray:
        return self.distances != UNREACHABLE

    def capped(self, cap: int) -> np.ndarray:
        """distances with UNREACHABLE replaced by cap"""
        return np.where(self.reachable, self.distances, cap)

    def direction_towards(self, x, y, ordering: Ordering) -> list:
        """for each of N, E, S, W: does the neighbour compare to this cell as ordering asks"""
        own = self.get(x, y)
        directions = []
        for xy in adjacent_in_range(x, y, self.width, self.height):
            if xy is None:
                directions.append(False)
                continue
            other = self.get(*xy)
            directions.append((other > own) - (other < own) == ordering)
        return directions
