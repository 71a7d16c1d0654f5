"""Grid snake simulation: deterministic engine plus a pygame front end."""

from .catalog import FOOD_KINDS, OBSTACLE_KINDS, FoodKind, ObstacleKind
from .config import DOWN, LEFT, RIGHT, UP, GameConfig
from .engine import SnakeEngine, pick_weighted
from .entities import Food, Obstacle, Snake
from .events import GameEventListener

__all__ = [
    "UP", "DOWN", "LEFT", "RIGHT",
    "GameConfig",
    "FoodKind", "ObstacleKind", "FOOD_KINDS", "OBSTACLE_KINDS",
    "Snake", "Food", "Obstacle",
    "GameEventListener",
    "SnakeEngine", "pick_weighted",
]
