# src/snakesim/engine.py
"""
Deterministic snake simulation.

The engine owns all game state and advances it one tick per call. It does
no I/O and no scheduling: a driver calls ``set_direction`` any number of
times and then ``tick`` once per interval, and reads snapshots back out.
Randomness and time are injected so a session can be replayed exactly.
"""
from __future__ import annotations

import logging
import math
import random
import time
from typing import Callable, List, Optional, Sequence, TypeVar

import numpy as np  # type: ignore

from .catalog import (
    DEFAULT_FOOD_KIND,
    DEFAULT_OBSTACLE_KIND,
    FOOD_KINDS,
    OBSTACLE_KINDS,
)
from .config import DEFAULT_CONFIG, DIRECTIONS, RIGHT, Direction, GameConfig, is_opposite
from .entities import Food, Obstacle, Position, Snake
from .events import GameEventListener

logger = logging.getLogger(__name__)

# ----- Lifecycle -----
UNINITIALIZED = "uninitialized"
READY = "ready"
RUNNING = "running"
GAME_OVER = "game_over"

# ----- Board snapshot cell codes -----
EMPTY, SNAKE, HEAD, FOOD, OBSTACLE = 0, 1, 2, 3, 4

# Random cells sampled before a spawn attempt gives up
MAX_PLACEMENT_ATTEMPTS = 100

K = TypeVar("K")


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def pick_weighted(kinds: Sequence[K], rng: random.Random, default: K) -> K:
    """
    Weighted random choice over ``kinds`` (anything with ``spawn_weight``).

    Draws r in [0, total) and returns the first kind whose cumulative weight
    reaches r. Falls back to ``default`` when ``kinds`` is empty or carries
    no weight at all.
    """
    total = sum(max(k.spawn_weight, 0.0) for k in kinds)
    if not kinds or total <= 0:
        return default

    draw = rng.random() * total
    cumulative = 0.0
    for kind in kinds:
        if kind.spawn_weight <= 0:
            continue
        cumulative += kind.spawn_weight
        if draw <= cumulative:
            return kind
    # float rounding can leave draw a hair above the final sum
    return kinds[-1]


class SnakeEngine:
    """
    Single-player snake session.

    Args:
        config: rule set, shared by reference and never mutated
        listener: receives score / game-over / food / obstacle / speed events
        rng: random source for spawn kind and position; defaults to
            ``random.Random(config.seed)``
        clock: zero-argument callable returning milliseconds, used by the
            spawn timers
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listener: Optional[GameEventListener] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.listener = listener if listener is not None else GameEventListener()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.clock = clock if clock is not None else _monotonic_ms

        self._snake = Snake([])
        self._foods: List[Food] = []
        self._obstacles: List[Obstacle] = []
        self._direction: Direction = RIGHT
        self._pending: Direction = RIGHT
        self._phase = UNINITIALIZED
        self._score = 0
        self._speed = self.config.base_game_speed
        self._last_food_spawn = 0
        self._last_obstacle_spawn = 0
        self._death_cause: Optional[str] = None
        self._ticks = 0

    # ------------------------------------------------------------------
    # Read accessors (snapshots only)
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self.config.grid_width

    @property
    def height(self) -> int:
        return self.config.grid_height

    @property
    def phase(self) -> str:
        return self._phase

    @property
    def alive(self) -> bool:
        return self._phase in (READY, RUNNING)

    @property
    def score(self) -> int:
        return self._score

    @property
    def current_speed(self) -> int:
        return self._speed

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def pending_direction(self) -> Direction:
        return self._pending

    @property
    def death_cause(self) -> Optional[str]:
        return self._death_cause

    @property
    def tick_count(self) -> int:
        return self._ticks

    @property
    def snake(self) -> List[Position]:
        return list(self._snake)

    @property
    def foods(self) -> List[Food]:
        return list(self._foods)

    @property
    def obstacles(self) -> List[Obstacle]:
        return list(self._obstacles)

    def board(self) -> np.ndarray:
        """Fresh (height, width) int8 grid of cell codes; later layers win."""
        grid = np.full((self.height, self.width), EMPTY, dtype=np.int8)
        for obstacle in self._obstacles:
            x, y = obstacle.position
            grid[y, x] = OBSTACLE
        for food in self._foods:
            x, y = food.position
            grid[y, x] = FOOD
        for x, y in self._snake:
            if self._in_bounds(x, y):
                grid[y, x] = SNAKE
        if len(self._snake) and self._in_bounds(*self._snake.head):
            hx, hy = self._snake.head
            grid[hy, hx] = HEAD
        return grid

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Start a fresh session: new snake, no obstacles, one food item."""
        cfg = self.config
        start_x, start_y = cfg.grid_width // 2, cfg.grid_height // 2
        self._snake = Snake((start_x - i, start_y) for i in range(cfg.initial_snake_length))
        self._foods = []
        self._obstacles = []
        self._direction = RIGHT
        self._pending = RIGHT
        self._score = 0
        self._speed = cfg.base_game_speed
        self._death_cause = None
        self._ticks = 0

        now = self.clock()
        self._last_food_spawn = now
        self._last_obstacle_spawn = now
        self._phase = READY

        # The opening food ignores both the timer and the cap
        self._spawn_food(now)
        logger.debug("Session reset on %dx%d grid", cfg.grid_width, cfg.grid_height)
        self.listener.on_score_changed(self._score)

    def set_direction(self, direction: Direction) -> None:
        """Queue a turn for the next tick; 180° turns against the applied direction are ignored."""
        direction = tuple(direction)
        if direction not in DIRECTIONS.values():
            raise ValueError(f"Not a grid direction: {direction!r}")
        if not self.alive:
            return
        if is_opposite(direction, self._direction):
            return
        self._pending = direction

    def tick(self) -> None:
        """Advance the session by one cell. No-op unless ready or running."""
        if not self.alive:
            return
        self._phase = RUNNING
        self._ticks += 1
        cfg = self.config

        # 1) Commit direction once per tick
        self._direction = self._pending

        # 2) Next head cell
        hx, hy = self._snake.head
        dx, dy = self._direction
        nx, ny = hx + dx, hy + dy

        # 3) Edges: wrap or wall
        if cfg.wrap_around_mode:
            nx, ny = nx % cfg.grid_width, ny % cfg.grid_height
        elif cfg.wall_collision_enabled and not self._in_bounds(nx, ny):
            self._game_over("wall")
            return
        new_head = (nx, ny)

        # 4) Self: occupancy at the start of the tick, tail included
        if cfg.self_collision_enabled and new_head in self._snake:
            self._game_over("self")
            return

        # 5) Obstacles
        if cfg.obstacle_collision_enabled and self._obstacle_at(new_head) is not None:
            self.listener.on_obstacle_hit()
            self._game_over("obstacle")
            return

        # 6) Move / eat
        self._snake.positions.appendleft(new_head)
        food = self._food_at(new_head)
        if food is None:
            self._snake.positions.pop()
        else:
            self._consume(food)
            if not self.alive:
                return

        # 7) Timed spawns
        now = self.clock()
        self._try_spawn_food(now)
        self._try_spawn_obstacle(now)

    def place_food(self, position: Position, kind_name: str = DEFAULT_FOOD_KIND) -> Food:
        """
        Put a food item of ``kind_name`` on ``position``, replacing any food
        already there. Raises ValueError for cells off the grid or under the
        snake or an obstacle.
        """
        kind = FOOD_KINDS[kind_name]
        position = self._check_placement(position, allow_food=True)
        self._foods = [f for f in self._foods if f.position != position]
        food = Food(position, kind, self.clock())
        self._foods.append(food)
        logger.debug("Placed %s at %s", kind.name, position)
        return food

    def place_obstacle(self, position: Position, kind_name: str = DEFAULT_OBSTACLE_KIND) -> Obstacle:
        """Put an obstacle on a free cell. Raises ValueError if the cell is taken or off the grid."""
        kind = OBSTACLE_KINDS[kind_name]
        position = self._check_placement(position, allow_food=False)
        obstacle = Obstacle(position, kind, self.clock())
        self._obstacles.append(obstacle)
        logger.debug("Placed %s at %s", kind.name, position)
        return obstacle

    # ------------------------------------------------------------------
    # Food consumption
    # ------------------------------------------------------------------
    def _consume(self, food: Food) -> None:
        kind = food.kind
        cfg = self.config

        self._score += self._scaled_score(kind.score_value)

        if kind.length_change > 0:
            # The head insertion already grew the snake by one
            tail = self._snake.tail
            for _ in range(kind.length_change - 1):
                self._snake.positions.append(tail)
        elif kind.length_change < 0:
            for _ in range(-kind.length_change):
                if len(self._snake) <= cfg.min_snake_length:
                    self._game_over("starved")
                    return
                self._snake.positions.pop()

        self._foods.remove(food)

        new_speed = cfg.current_speed(self._score)
        if new_speed != self._speed:
            self._speed = new_speed
            self.listener.on_speed_changed(new_speed)

        self.listener.on_score_changed(self._score)
        self.listener.on_food_eaten(kind)

    def _scaled_score(self, value: int) -> int:
        # halves round up, so 12.5 scores 13 and -12.5 scores -12
        return int(math.floor(value * self.config.score_multiplier + 0.5))

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------
    def _try_spawn_food(self, now: int) -> None:
        cfg = self.config
        if now - self._last_food_spawn < cfg.food_spawn_interval:
            return
        if len(self._foods) >= cfg.max_food_items:
            return
        self._spawn_food(now)
        self._last_food_spawn = now

    def _try_spawn_obstacle(self, now: int) -> None:
        cfg = self.config
        if not cfg.obstacles_enabled:
            return
        if now - self._last_obstacle_spawn < cfg.obstacle_spawn_interval:
            return
        if len(self._obstacles) >= cfg.max_obstacles:
            return
        self._spawn_obstacle(now)
        self._last_obstacle_spawn = now

    def _spawn_food(self, now: int) -> Optional[Food]:
        enabled = [k for name, k in FOOD_KINDS.items() if self.config.is_food_kind_enabled(name)]
        kind = pick_weighted(enabled, self.rng, FOOD_KINDS[DEFAULT_FOOD_KIND])
        position = self._find_empty_cell()
        if position is None:
            logger.debug("No free cell for %s, skipping spawn", kind.name)
            return None
        food = Food(position, kind, now)
        self._foods.append(food)
        logger.debug("Spawned %s at %s", kind.name, position)
        return food

    def _spawn_obstacle(self, now: int) -> Optional[Obstacle]:
        enabled = [k for name, k in OBSTACLE_KINDS.items() if self.config.is_obstacle_kind_enabled(name)]
        kind = pick_weighted(enabled, self.rng, OBSTACLE_KINDS[DEFAULT_OBSTACLE_KIND])
        position = self._find_empty_cell()
        if position is None:
            logger.debug("No free cell for %s, skipping spawn", kind.name)
            return None
        obstacle = Obstacle(position, kind, now)
        self._obstacles.append(obstacle)
        logger.debug("Spawned %s at %s", kind.name, position)
        return obstacle

    def _find_empty_cell(self) -> Optional[Position]:
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            cell = (self.rng.randrange(self.width), self.rng.randrange(self.height))
            if self._is_free(cell):
                return cell
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _is_free(self, cell: Position) -> bool:
        return (
            cell not in self._snake
            and self._food_at(cell) is None
            and self._obstacle_at(cell) is None
        )

    def _food_at(self, cell: Position) -> Optional[Food]:
        for food in self._foods:
            if food.position == cell:
                return food
        return None

    def _obstacle_at(self, cell: Position) -> Optional[Obstacle]:
        for obstacle in self._obstacles:
            if obstacle.position == cell:
                return obstacle
        return None

    def _check_placement(self, position: Position, allow_food: bool) -> Position:
        x, y = position
        if not self._in_bounds(x, y):
            raise ValueError(f"{position} is outside the {self.width}x{self.height} grid")
        cell = (x, y)
        if cell in self._snake or self._obstacle_at(cell) is not None:
            raise ValueError(f"{cell} is occupied")
        if not allow_food and self._food_at(cell) is not None:
            raise ValueError(f"{cell} is occupied")
        return cell

    def _game_over(self, cause: str) -> None:
        self._phase = GAME_OVER
        self._death_cause = cause
        logger.info("Game over (%s) with score %d after %d ticks", cause, self._score, self._ticks)
        self.listener.on_game_over(self._score)

    def __repr__(self):
        return (
            f"<SnakeEngine phase={self._phase}, score={self._score}, "
            f"length={len(self._snake)}, foods={len(self._foods)}, obstacles={len(self._obstacles)}>"
        )
