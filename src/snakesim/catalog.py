# src/snakesim/catalog.py
"""
Static food and obstacle tables.

Kinds are plain records; everything that acts on them (weighted selection,
score and length effects) lives in the engine.
"""
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class FoodKind:
    name: str
    display_name: str
    score_value: int       # may be negative (poison)
    length_change: int     # segments gained (>0) or lost (<0)
    effect_duration: int   # ms, 0 = no timed effect
    speed_change: int      # applied while the timed effect lasts
    spawn_weight: float

    @property
    def is_temporary(self) -> bool:
        return self.effect_duration > 0


@dataclass(frozen=True)
class ObstacleKind:
    name: str
    display_name: str
    spawn_weight: float


# Insertion order is the iteration order of weighted selection
FOOD_KINDS: Dict[str, FoodKind] = {
    kind.name: kind
    for kind in (
        FoodKind("NORMAL",   "Normal Apple",      10,  1,    0,   0, 1.0),
        FoodKind("POISON",   "Poison",           -20, -2,    0,   0, 0.15),
        FoodKind("BONUS",    "Bonus Cherry",      50,  2,    0,   0, 0.1),
        FoodKind("FREEZE",   "Freeze Berry",      15,  1, 3000, -50, 0.2),
        FoodKind("SPEED",    "Speed Strawberry",  20,  1, 3000,  50, 0.15),
        FoodKind("TELEPORT", "Teleport Fruit",    25,  0,    0,   0, 0.1),
    )
}

OBSTACLE_KINDS: Dict[str, ObstacleKind] = {
    kind.name: kind
    for kind in (
        ObstacleKind("STONE", "Stone",       0.3),
        ObstacleKind("WOOD",  "Wood Branch", 0.3),
        ObstacleKind("WALL",  "Wall",        0.2),
    )
}

DEFAULT_FOOD_KIND = "NORMAL"
DEFAULT_OBSTACLE_KIND = "STONE"


def food_kind(name: str) -> FoodKind:
    return FOOD_KINDS[name]


def obstacle_kind(name: str) -> ObstacleKind:
    return OBSTACLE_KINDS[name]
