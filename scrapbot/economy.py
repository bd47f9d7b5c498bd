import numpy as np

from scrapbot.board import OFFSETS, Board, adjacent_in_range

UNENDING = int(np.iinfo(np.int32).max)


def shift(array: np.ndarray, dx: int, dy: int, fill=0) -> np.ndarray:
    """out[y, x] = array[y + dy, x + dx], fill where that falls off the board"""
    height, width = array.shape
    padded = np.pad(array, 1, mode='constant', constant_values=fill)
    return padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]


class YieldBoard:
    """Matter a recycler would collect at each cell before its own tile runs out.

    A recycler takes one scrap per turn from itself and each neighbour, and
    stops once its own tile is exhausted, so every neighbour gives at most
    the scrap of the recycler tile.
    """

    def __init__(self, prospective_scrap: np.ndarray):
        self.prospective_scrap = prospective_scrap
        self.height, self.width = prospective_scrap.shape

    @classmethod
    def without_recycling(cls, board: Board):
        return cls(cls._prospective(board, np.zeros((board.height, board.width), dtype=bool)))

    @classmethod
    def with_recycling(cls, board: Board, in_range=None):
        """scrap already in range of a recycler counts as claimed and yields nothing"""
        claimed = board.in_range_of_recycler > 0 if in_range is None else np.asarray(in_range, dtype=bool)
        return cls(cls._prospective(board, claimed))

    @staticmethod
    def _prospective(board: Board, claimed: np.ndarray) -> np.ndarray:
        scrap = board.scrap_amount.astype(np.int64)
        total = np.where(claimed, 0, scrap)
        neighbour_scrap = np.where(board.traversable & ~claimed, scrap, 0)
        for dx, dy in OFFSETS:
            total += np.minimum(scrap, shift(neighbour_scrap, dx, dy))
        return total

    def get(self, x, y) -> int:
        return int(self.prospective_scrap[y, x])

    def total(self, mask) -> int:
        return int(self.prospective_scrap[mask].sum())


class RecyclerRangeBoard:
    """Recycler coverage that planning can extend with not yet submitted builds."""

    def __init__(self, board: Board):
        self.initial = board.in_range_of_recycler > 0
        self.in_range = self.initial.copy()
        self.height, self.width = self.in_range.shape

    def get(self, x, y) -> bool:
        return bool(self.in_range[y, x])

    def mark_recycler(self, x, y) -> None:
        self.in_range[y, x] = True
        for xy in adjacent_in_range(x, y, self.width, self.height):
            if xy is not None:
                self.in_range[xy[1], xy[0]] = True

    @property
    def newly_covered(self) -> np.ndarray:
        return self.in_range & ~self.initial


class MineDurationBoard:
    """Harvest cycles until each cell turns to grass, assuming no new recyclers."""

    def __init__(self, board: Board, horizon: int = 12):
        self.durations = np.where(board.is_grass, 0, UNENDING)
        self.height, self.width = self.durations.shape
        future = board
        for turn in range(1, horizon + 1):
            if not future.recycler.any():
                break
            future = future.advance_harvest_cycle()
            self.durations[(self.durations == UNENDING) & future.is_grass] = turn

    def get(self, x, y) -> int:
        return int(self.durations[y, x])
