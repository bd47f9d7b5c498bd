import argparse
import pathlib
from time import perf_counter

import numpy as np

from scrapbot.config import StrategyConfig
from scrapbot.protocol import InputOutput, debug
from scrapbot.strategy import create_strategy


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="scrapbot",
        description="Turn-by-turn bot for the scrap, robots and recyclers grid game",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=None,
        help="Path to a YAML strategy config (default: built-in defaults)",
    )
    parser.add_argument(
        "--replay",
        type=pathlib.Path,
        default=None,
        help="Read turns from a recorded input log instead of stdin",
    )
    return parser.parse_args(argv)


def run(io: InputOutput, config: StrategyConfig) -> int:
    """plays turns until the input runs out, returns the number of turns played"""
    strategy = create_strategy(config)
    width, height = io.read_dimensions()
    frame = 0
    perf = []

    while True:
        try:
            start = perf_counter()
            board = io.read_board(width, height)
            frame += 1
            debug(f"\n{'='*50}\nframe = {frame}\n{'='*50}")
            actions = strategy.produce_actions(board)
            io.send_action(actions)
            perf.append(round((perf_counter() - start) * 1000, 1))
            debug(f"Time: {perf[-1]}ms ({round(np.mean(perf), 1)}ms)")
        except EOFError:
            debug("End of input stream")
            break
    return frame


def main(argv=None) -> None:
    args = parse_args(argv)
    config = StrategyConfig.from_yaml(args.config) if args.config is not None else StrategyConfig()
    run(InputOutput(args.replay), config)
