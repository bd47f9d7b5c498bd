import sys

from scrapbot.actions import format_actions
from scrapbot.board import FEATURES, Board

VERBOSE = 0


def debug(message) -> None:
    print(message, file=sys.stderr, flush=True)


def input_stream(path):
    """replays a recorded input log one line per call, like input() on stdin"""
    with open(path, 'r') as f:
        print_logs = [line.strip() for line in f]
    idx = -1

    def inner():
        nonlocal idx
        idx += 1
        if idx < len(print_logs):
            return print_logs[idx]
        else:
            raise EOFError("End of input stream")
    return inner


class InputOutput:

    def __init__(self, path=None, output=None):
        self.input = input_stream(path) if path is not None else input
        self.output = output if output is not None else sys.stdout

    def get_input(self, n: int = 1) -> list:
        lst = [self.input().split() for _ in range(n)]
        return [int(item) for sublist in lst for item in sublist]

    def read_dimensions(self) -> tuple:
        width, height = self.get_input()
        return width, height

    def read_board(self, width, height) -> Board:
        my_matter, op_matter = self.get_input()
        values = self.get_input(width * height)
        if len(values) != width * height * len(FEATURES):
            raise ValueError(f"expected {len(FEATURES)} values per cell, got {len(values)} for {width * height} cells")
        board = Board.from_input(width, height, values, my_matter, op_matter)
        VERBOSE and debug(f"{board}")
        return board

    def send_action(self, actions: list) -> str:
        message = format_actions(actions)
        print(message, file=self.output, flush=True)
        return message
