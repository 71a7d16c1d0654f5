# src/snakesim/config.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple

from .catalog import FOOD_KINDS, OBSTACLE_KINDS

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

DIRECTIONS = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}

Direction = Tuple[int, int]


def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def opposite(direction: Direction) -> Direction:
    return (-direction[0], -direction[1])


# ----- Rule set (what you'd tweak for difficulty) -----
@dataclass(frozen=True)
class GameConfig:
    """
    Immutable rule set for one session.

    Speeds and intervals are in milliseconds; a lower speed value means a
    shorter tick interval, i.e. a faster snake.
    """
    # grid
    grid_width: int = 20
    grid_height: int = 20

    # collision rules
    wall_collision_enabled: bool = True
    self_collision_enabled: bool = True
    obstacle_collision_enabled: bool = True
    wrap_around_mode: bool = False

    # speed curve
    base_game_speed: int = 200
    min_game_speed: int = 50
    max_game_speed: int = 500
    speed_decrease_per_threshold: int = 10
    score_threshold_for_speed_increase: int = 50

    # scoring
    score_multiplier: float = 1.0

    # food
    max_food_items: int = 3
    food_spawn_interval: int = 5000
    enabled_food_kinds: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"NORMAL", "BONUS", "POISON", "FREEZE"})
    )

    # obstacles
    obstacles_enabled: bool = True
    max_obstacles: int = 5
    obstacle_spawn_interval: int = 10000
    enabled_obstacle_kinds: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"STONE", "WOOD"})
    )

    # snake
    initial_snake_length: int = 3
    min_snake_length: int = 2

    # None -> fresh entropy every session
    seed: Optional[int] = None

    def __post_init__(self):
        # kind sets may arrive as any iterable of names
        object.__setattr__(self, "enabled_food_kinds", frozenset(self.enabled_food_kinds))
        object.__setattr__(self, "enabled_obstacle_kinds", frozenset(self.enabled_obstacle_kinds))

        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError(f"Grid must be non-empty, got {self.grid_width}x{self.grid_height}")
        if self.min_game_speed > self.max_game_speed:
            raise ValueError(
                f"min_game_speed ({self.min_game_speed}) exceeds max_game_speed ({self.max_game_speed})"
            )
        if self.score_threshold_for_speed_increase <= 0:
            raise ValueError("score_threshold_for_speed_increase must be positive")
        if self.speed_decrease_per_threshold < 0:
            raise ValueError("speed_decrease_per_threshold must not be negative")
        for name in ("max_food_items", "food_spawn_interval", "max_obstacles", "obstacle_spawn_interval"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.min_snake_length < 1:
            raise ValueError("min_snake_length must be at least 1")
        if self.initial_snake_length < self.min_snake_length:
            raise ValueError(
                f"initial_snake_length ({self.initial_snake_length}) is below "
                f"min_snake_length ({self.min_snake_length})"
            )
        # The starting body is laid out leftwards from the centre cell
        if self.initial_snake_length > self.grid_width // 2 + 1:
            raise ValueError(
                f"initial_snake_length ({self.initial_snake_length}) does not fit a "
                f"grid {self.grid_width} cells wide"
            )

        unknown = self.enabled_food_kinds - set(FOOD_KINDS)
        if unknown:
            raise ValueError(f"Unknown food kinds: {sorted(unknown)}")
        unknown = self.enabled_obstacle_kinds - set(OBSTACLE_KINDS)
        if unknown:
            raise ValueError(f"Unknown obstacle kinds: {sorted(unknown)}")

    def current_speed(self, score: int) -> int:
        """Tick interval for a given score, clamped to [min_game_speed, max_game_speed]."""
        steps = score // self.score_threshold_for_speed_increase
        speed = self.base_game_speed - steps * self.speed_decrease_per_threshold
        return max(self.min_game_speed, min(self.max_game_speed, speed))

    def is_food_kind_enabled(self, name: str) -> bool:
        return name in self.enabled_food_kinds

    def is_obstacle_kind_enabled(self, name: str) -> bool:
        return self.obstacles_enabled and name in self.enabled_obstacle_kinds

    def with_overrides(self, **changes) -> "GameConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = GameConfig()
