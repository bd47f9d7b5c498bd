from dataclasses import dataclass

TAUNTS = (
    "Be prepared to get scrapped!",
    "Let's see if Santa made your Robots run on coal!",
    "Ah! A good game to you... Unless your name is Jaap!",
    "Better to give in. You wouldn't want to end up on my naughty list, would you?",
)


@dataclass(frozen=True)
class MoveAction:
    amount: int
    from_x: int
    from_y: int
    to_x: int
    to_y: int

    def __str__(self):
        return f"MOVE {self.amount} {self.from_x} {self.from_y} {self.to_x} {self.to_y}"


@dataclass(frozen=True)
class BuildAction:
    x: int
    y: int

    def __str__(self):
        return f"BUILD {self.x} {self.y}"


@dataclass(frozen=True)
class SpawnAction:
    amount: int
    x: int
    y: int

    def __str__(self):
        return f"SPAWN {self.amount} {self.x} {self.y}"


@dataclass(frozen=True)
class MessageAction:
    text: str

    def __str__(self):
        return f"MESSAGE {self.text}"

    @classmethod
    def taunt(cls, rng):
        return cls(TAUNTS[int(rng.integers(len(TAUNTS)))])


@dataclass(frozen=True)
class WaitAction:

    def __str__(self):
        return "WAIT"


def format_actions(actions: list) -> str:
    """one semicolon-terminated command per action; the game needs at least one"""
    if len(actions) == 0:
        actions = [WaitAction()]
    return "".join(f"{action};" for action in actions)
