"""Shared fixtures for the engine tests."""

import random

import pytest

from snakesim.config import GameConfig
from snakesim.engine import SnakeEngine
from snakesim.events import GameEventListener


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class PinnedRandom(random.Random):
    """Random source whose cell picks always land on (0, 0)."""

    def randrange(self, *args, **kwargs):
        return 0


class EventRecorder(GameEventListener):
    """Listener that keeps every event as (name, payload) in arrival order."""

    def __init__(self):
        self.events = []

    def on_score_changed(self, score):
        self.events.append(("score", score))

    def on_game_over(self, final_score):
        self.events.append(("game_over", final_score))

    def on_food_eaten(self, kind):
        self.events.append(("food", kind.name))

    def on_obstacle_hit(self):
        self.events.append(("obstacle", None))

    def on_speed_changed(self, new_speed):
        self.events.append(("speed", new_speed))

    def named(self, name):
        return [payload for event, payload in self.events if event == name]

    def clear(self):
        self.events = []


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def quiet_config():
    """10x10 grid where timers never fire during a test and nothing spawns by surprise."""
    return GameConfig(
        grid_width=10,
        grid_height=10,
        food_spawn_interval=10**9,
        obstacle_spawn_interval=10**9,
    )


@pytest.fixture
def make_engine(clock, recorder, quiet_config):
    """
    Build and reset an engine; keyword overrides are applied to the quiet
    config. Unless an rng is given, the opening food lands on (0, 0), out of
    the snake's way.
    """

    def _make(rng=None, **overrides):
        config = quiet_config.with_overrides(**overrides) if overrides else quiet_config
        engine = SnakeEngine(config, listener=recorder, rng=rng if rng is not None else PinnedRandom(1234), clock=clock)
        engine.reset()
        recorder.clear()
        return engine

    return _make
