# src/snakesim/main.py
from __future__ import annotations
import argparse
import logging
import random
from typing import Callable, List, Optional

from .catalog import FoodKind
from .config import DEFAULT_CONFIG, DIRECTIONS, GameConfig, is_opposite
from .effects import EffectTracker
from .engine import SnakeEngine
from .events import GameEventListener

logger = logging.getLogger(__name__)


class DriverListener(GameEventListener):
    """Bridges engine events to the driver: timed effects and log lines."""

    def __init__(self, effects: EffectTracker, clock: Callable[[], int]):
        self.effects = effects
        self.clock = clock
        self.final_score: Optional[int] = None

    def on_food_eaten(self, kind: FoodKind) -> None:
        self.effects.add(kind, self.clock())
        logger.debug("Ate %s", kind.display_name)

    def on_speed_changed(self, new_speed: int) -> None:
        logger.info("Speed is now %d ms per tick", new_speed)

    def on_obstacle_hit(self) -> None:
        logger.info("Hit an obstacle")

    def on_game_over(self, final_score: int) -> None:
        self.final_score = final_score


def build_config(args: argparse.Namespace) -> GameConfig:
    return DEFAULT_CONFIG.with_overrides(
        grid_width=args.width,
        grid_height=args.height,
        wrap_around_mode=args.wrap,
        obstacles_enabled=not args.no_obstacles,
        seed=args.seed,
    )


# ---------- Headless ----------
def steering_rng(config: GameConfig) -> random.Random:
    """Random turns for headless play, seeded apart from the engine's spawn draws."""
    return random.Random(None if config.seed is None else config.seed + 1)


def run_headless(config: GameConfig, ticks: int) -> SnakeEngine:
    """
    Drive the engine without a window: random turns, simulated time.
    Each tick advances the clock by the effect-adjusted interval.
    """
    now = [0]
    clock = lambda: now[0]
    effects = EffectTracker(config)
    listener = DriverListener(effects, clock)
    engine = SnakeEngine(config, listener=listener, clock=clock)
    steer = steering_rng(config)

    engine.reset()
    for _ in range(ticks):
        if not engine.alive:
            break
        choices: List = [d for d in DIRECTIONS.values() if not is_opposite(d, engine.direction)]
        engine.set_direction(steer.choice(choices))
        now[0] += effects.interval(engine.current_speed, now[0])
        engine.tick()
    return engine


# ---------- Interactive (pygame) ----------
def run_interactive(config: GameConfig, cell_size: int) -> None:
    import pygame  # type: ignore
    from .view import draw_game, draw_game_over, draw_paused

    keymap = {
        pygame.K_UP: DIRECTIONS["UP"],       pygame.K_w: DIRECTIONS["UP"],
        pygame.K_DOWN: DIRECTIONS["DOWN"],   pygame.K_s: DIRECTIONS["DOWN"],
        pygame.K_LEFT: DIRECTIONS["LEFT"],   pygame.K_a: DIRECTIONS["LEFT"],
        pygame.K_RIGHT: DIRECTIONS["RIGHT"], pygame.K_d: DIRECTIONS["RIGHT"],
    }

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((config.grid_width * cell_size, config.grid_height * cell_size))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    effects = EffectTracker(config)
    listener = DriverListener(effects, pygame.time.get_ticks)
    engine = SnakeEngine(config, listener=listener, clock=pygame.time.get_ticks)
    engine.reset()

    paused = True
    last_move = pygame.time.get_ticks()
    running = True

    while running:
        # 1) input
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in keymap:
                    engine.set_direction(keymap[event.key])
                elif event.key == pygame.K_SPACE and engine.alive:
                    paused = not paused
                    last_move = pygame.time.get_ticks()
                elif event.key == pygame.K_r and not engine.alive:
                    effects.clear()
                    engine.reset()
                    paused = True

        # 2) update, gated on the effect-adjusted interval
        now = pygame.time.get_ticks()
        if not paused and engine.alive:
            if now - last_move >= effects.interval(engine.current_speed, now):
                engine.tick()
                last_move = now

        # 3) render
        draw_game(screen, font, engine, cell_size)
        if not engine.alive:
            draw_game_over(screen, font, engine.score)
        elif paused:
            draw_paused(screen, font)
        pygame.display.flip()
        clock.tick(60)  # high FPS; movement gated above

    pygame.quit()


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Grid snake")
    p.add_argument("--width", type=int, default=DEFAULT_CONFIG.grid_width)
    p.add_argument("--height", type=int, default=DEFAULT_CONFIG.grid_height)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--wrap", action="store_true", help="leave one edge, re-enter from the opposite one")
    p.add_argument("--no-obstacles", action="store_true")
    p.add_argument("--cell-size", type=int, default=20, help="pixels per grid cell")
    p.add_argument("--headless", action="store_true", help="run without a window and print the final board")
    p.add_argument("--ticks", type=int, default=200, help="ticks to simulate in headless mode")
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = build_config(args)

    if args.headless:
        from .view import format_board

        engine = run_headless(config, args.ticks)
        print(format_board(engine.board()))
        print(f"ticks={engine.tick_count}, score={engine.score}, alive={engine.alive}, "
              f"death={engine.death_cause}")
        return

    run_interactive(config, args.cell_size)


if __name__ == "__main__":
    main()
