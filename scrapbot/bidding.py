import numpy as np


def aspiration_bidding(costs, budget, capacities=None) -> list:
    """spread budget indivisible units over candidates, cheapest first, ties in input order"""
    # aspiration rises by one per full pass; a candidate takes a unit while cost + placed < aspiration
    k = len(costs)
    if k == 0:
        return []
    placed = [0] * k
    if capacities is not None:
        budget = min(budget, sum(capacities))
    if budget <= 0:
        return placed

    aspiration = min(costs)
    index = 0
    while budget > 0:
        has_room = capacities is None or placed[index] < capacities[index]
        if has_room and costs[index] + placed[index] < aspiration:
            placed[index] += 1
            budget -= 1
        index += 1
        if index == k:
            index = 0
            aspiration += 1
    return placed


class LoadBoard:
    """Units already committed to each destination during the current turn."""

    def __init__(self, width, height):
        self.load = np.zeros((height, width), dtype=np.int64)

    def get(self, x, y) -> int:
        return int(self.load[y, x])

    def commit(self, x, y, amount) -> None:
        self.load[y, x] += amount

    def allocate(self, targets, base_costs, budget, capacities=None) -> list:
        """runs aspiration_bidding on base cost plus current load and commits the result"""
        costs = [cost + self.get(x, y) for (x, y), cost in zip(targets, base_costs)]
        placed = aspiration_bidding(costs, budget, capacities)
        allocation = []
        for (x, y), amount in zip(targets, placed):
            if amount > 0:
                self.commit(x, y, amount)
                allocation.append(((x, y), amount))
        return allocation
