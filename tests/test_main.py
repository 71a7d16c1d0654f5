"""Tests for the driver layer: CLI parsing, headless runs and text rendering."""

import random

import numpy as np

from snakesim.catalog import food_kind
from snakesim.config import GameConfig
from snakesim.effects import EffectTracker
from snakesim.engine import EMPTY, FOOD, HEAD, OBSTACLE, SNAKE
from snakesim.main import DriverListener, build_config, main, parse_args, run_headless, steering_rng
from snakesim.view import format_board


class TestCli:

    def test_defaults(self):
        args = parse_args([])
        config = build_config(args)
        assert config.grid_width == 20
        assert config.wrap_around_mode is False
        assert config.obstacles_enabled is True
        assert args.headless is False

    def test_overrides(self):
        config = build_config(parse_args(["--width", "12", "--height", "8", "--wrap",
                                          "--no-obstacles", "--seed", "3"]))
        assert (config.grid_width, config.grid_height) == (12, 8)
        assert config.wrap_around_mode is True
        assert config.obstacles_enabled is False
        assert config.seed == 3

    def test_headless_main_prints_board(self, capsys):
        main(["--headless", "--width", "8", "--height", "6", "--seed", "1", "--ticks", "5"])
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 7
        assert all(len(row) == 8 for row in out[:6])
        assert out[-1].startswith("ticks=")


class TestHeadless:

    def test_seeded_runs_repeat(self):
        """Same seed, same simulated clock: identical sessions."""
        config = GameConfig(grid_width=12, grid_height=12, seed=42)
        a = run_headless(config, 50)
        b = run_headless(config, 50)
        assert a.snake == b.snake
        assert a.score == b.score
        assert [f.position for f in a.foods] == [f.position for f in b.foods]

    def test_steering_seeded_apart_from_spawns(self):
        """Headless turns do not replay the engine's spawn draws."""
        config = GameConfig(seed=42)
        steer = steering_rng(config)
        expected = random.Random(43)
        spawn = random.Random(42)
        draws = [steer.random() for _ in range(5)]
        assert draws == [expected.random() for _ in range(5)]
        assert draws != [spawn.random() for _ in range(5)]

    def test_unseeded_steering(self):
        assert isinstance(steering_rng(GameConfig()), random.Random)

    def test_stops_at_tick_budget_or_death(self):
        engine = run_headless(GameConfig(grid_width=12, grid_height=12, seed=7), 30)
        assert engine.tick_count <= 30
        assert engine.alive or engine.death_cause is not None


class TestDriverListener:

    def test_records_timed_effects(self):
        tracker = EffectTracker(GameConfig())
        listener = DriverListener(tracker, clock=lambda: 100)
        listener.on_food_eaten(food_kind("FREEZE"))
        assert len(tracker.active(100)) == 1

    def test_keeps_final_score(self):
        listener = DriverListener(EffectTracker(GameConfig()), clock=lambda: 0)
        listener.on_game_over(70)
        assert listener.final_score == 70


class TestFormatBoard:

    def test_symbols(self):
        board = np.array([[EMPTY, SNAKE, HEAD], [FOOD, OBSTACLE, EMPTY]], dtype=np.int8)
        assert format_board(board) == ".o@\n*#."
