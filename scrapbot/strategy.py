from abc import ABC, abstractmethod
from time import perf_counter

import numpy as np

from scrapbot.actions import BuildAction, MessageAction, MoveAction, SpawnAction
from scrapbot.bidding import LoadBoard
from scrapbot.board import MATTER_PER_ACTION, Board, Owner, adjacent_in_range
from scrapbot.config import StrategyConfig
from scrapbot.distance import DistanceBoard, Ordering
from scrapbot.economy import MineDurationBoard, RecyclerRangeBoard, YieldBoard
from scrapbot.protocol import VERBOSE, debug


class Strategy(ABC):

    def __init__(self, config: StrategyConfig = None):
        self.config = config if config is not None else StrategyConfig()

    @abstractmethod
    def produce_actions(self, board: Board) -> list:
        pass


class SimpleEconomyStrategy(Strategy):
    """Keeps more matter + 10 * units on the board than the opponent while
    sending every unit towards enemy territory."""

    def __init__(self, config: StrategyConfig = None):
        super().__init__(config)
        self.rng = np.random.default_rng(self.config.seed)

    def produce_actions(self, board: Board) -> list:
        distance_me = DistanceBoard.from_owner(board, Owner.ME)
        distance_op = DistanceBoard.from_owner(board, Owner.OPPONENT)
        arrivals = LoadBoard(board.width, board.height)

        stopclock = perf_counter()
        actions = self.move_actions(board, distance_me, distance_op, arrivals)
        debug(f'  - MOVE: {round((perf_counter() - stopclock) * 1000, 1)}ms')

        stopclock = perf_counter()
        builds = self.build_actions(board, distance_op)
        actions += builds
        debug(f'  - BUILD: {round((perf_counter() - stopclock) * 1000, 1)}ms')

        stopclock = perf_counter()
        matter = board.my_matter - MATTER_PER_ACTION * len(builds)
        built = {(action.x, action.y) for action in builds}
        actions += self.spawn_actions(board, distance_op, arrivals, matter, built)
        debug(f'  - SPAWN: {round((perf_counter() - stopclock) * 1000, 1)}ms')

        if self.config.taunt:
            actions.append(MessageAction.taunt(self.rng))
        return actions

    def material_score(self, board: Board, owner: Owner, yields: YieldBoard) -> float:
        matter = board.my_matter if owner == Owner.ME else board.op_matter
        harvest = yields.total((board.recycler > 0) & (board.owner == owner))
        return matter + MATTER_PER_ACTION * board.unit_total(owner) + self.config.harvest_discount * harvest

    def ownership_bias(self, board: Board, x, y) -> float:
        owner = board.owner[y, x]
        if owner == Owner.ME:
            return self.config.own_tile_bias
        if owner == Owner.NEUTRAL:
            return self.config.neutral_tile_bias
        return 0.0

    def move_actions(self, board, distance_me, distance_op, arrivals) -> list:
        actions = []
        walkable = board.tile_live
        groups = [(int(x), int(y)) for y, x in np.argwhere(board.units_me > 0)]
        # closest to the opponent first, row-major among equals
        groups.sort(key=lambda xy: distance_op.get(*xy))

        for x, y in groups:
            units = int(board.units[y, x])
            targets, costs = [], []
            for xy in adjacent_in_range(x, y, board.width, board.height):
                if xy is None or not walkable[xy[1], xy[0]] or not distance_op.is_reachable(*xy):
                    continue
                targets.append(xy)
                costs.append(
                    distance_op.get(*xy) * self.config.move_distance_weight
                    + self.ownership_bias(board, *xy)
                )
            if targets:
                allocation = arrivals.allocate(targets, costs, units)
            else:
                allocation = self.fallback_move(board, distance_me, x, y, units, arrivals)
            actions += [MoveAction(amount, x, y, to_x, to_y) for (to_x, to_y), amount in allocation]
        return actions

    def fallback_move(self, board, distance_me, x, y, units, arrivals) -> list:
        """no opponent in reach: push outwards from own territory, neutral tiles first"""
        walkable = board.tile_live
        outwards = [
            xy for xy, away in zip(adjacent_in_range(x, y, board.width, board.height),
                                   distance_me.direction_towards(x, y, Ordering.GREATER))
            if away and walkable[xy[1], xy[0]]
        ]
        if not outwards:
            VERBOSE and debug(f'units at {(x, y)} stay')
            return []
        unowned = [xy for xy in outwards if board.owner[xy[1], xy[0]] != Owner.ME]
        to_x, to_y = (unowned or outwards)[0]
        arrivals.commit(to_x, to_y, units)
        return [((to_x, to_y), units)]

    def build_actions(self, board: Board, distance_op: DistanceBoard) -> list:
        yields = YieldBoard.without_recycling(board)
        my_score = self.material_score(board, Owner.ME, yields)
        op_score = self.material_score(board, Owner.OPPONENT, yields)
        debug(f'score: me {my_score} | op {op_score}')
        if my_score >= op_score + self.config.score_margin:
            return []

        max_builds = min(self.config.max_builds_per_turn, board.my_matter // MATTER_PER_ACTION)
        ranges = RecyclerRangeBoard(board)
        enemy_adjacent = board.adjacent_units(Owner.OPPONENT)
        distance = distance_op.capped(board.width + board.height)

        built = np.zeros((board.height, board.width), dtype=bool)
        actions = []
        for _ in range(max_builds):
            unclaimed = YieldBoard.with_recycling(board, ranges.in_range).prospective_scrap
            eligible = (
                (board.can_build > 0)
                & ~ranges.newly_covered
                & ~built
                & (unclaimed >= self.config.min_build_yield)
            )
            if not eligible.any():
                break
            scores = (
                self.config.enemy_adjacency_weight * enemy_adjacent
                + unclaimed
                - self.config.build_distance_penalty * distance
            ).astype(float)
            scores[~eligible] = np.nan
            row, col = np.unravel_index(np.nanargmax(scores), scores.shape)
            built[row, col] = True
            ranges.mark_recycler(int(col), int(row))
            actions.append(BuildAction(int(col), int(row)))
        return actions

    def spawn_actions(self, board, distance_op, arrivals, matter, built) -> list:
        budget = matter // MATTER_PER_ACTION
        if budget <= 0:
            return []

        lifetimes = MineDurationBoard(board, self.config.lifetime_horizon)
        eligible = (
            (board.can_spawn > 0)
            & board.traversable
            & board.on_active_island
            & (lifetimes.durations > self.config.min_spawn_lifetime)
        )
        for x, y in built:
            eligible[y, x] = False
        targets = [(int(x), int(y)) for y, x in np.argwhere(eligible)]
        if not targets:
            debug('No tiles worth a SPAWN')
            return []

        distance = distance_op.capped(board.width + board.height)
        targets.sort(key=lambda xy: distance[xy[1], xy[0]])
        costs = [int(board.units_me[y, x]) + int(distance[y, x]) for x, y in targets]
        allocation = arrivals.allocate(targets, costs, budget)
        return [SpawnAction(amount, x, y) for (x, y), amount in allocation]


STRATEGIES = {
    "simple_economy": SimpleEconomyStrategy,
}


def create_strategy(config: StrategyConfig) -> Strategy:
    if config.strategy not in STRATEGIES:
        raise ValueError(f"{config.strategy} is not in {STRATEGIES.keys()}")
    return STRATEGIES[config.strategy](config)
