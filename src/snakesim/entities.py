# src/snakesim/entities.py
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from .catalog import FoodKind, ObstacleKind

Position = Tuple[int, int]


class Snake:
    """
    The snake's body on the grid.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: Iterable[Position]):
        self.positions = deque(positions)

    @property
    def head(self) -> Position:
        return self.positions[0]

    @property
    def tail(self) -> Position:
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, cell) -> bool:
        return cell in self.positions

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)


@dataclass(frozen=True)
class Food:
    position: Position
    kind: FoodKind
    spawned_at: int   # engine clock, ms


@dataclass(frozen=True)
class Obstacle:
    position: Position
    kind: ObstacleKind
    spawned_at: int   # engine clock, ms
