# src/snakesim/effects.py
"""
Timed food effects, interpreted by the driver.

The engine reports which kind was eaten but never expires anything; the
driver feeds temporary kinds into an EffectTracker and asks it for the
tick interval to wait before the next ``tick``.
"""
from dataclasses import dataclass
from typing import List

from .catalog import FoodKind
from .config import GameConfig


@dataclass(frozen=True)
class ActiveEffect:
    kind: FoodKind
    expires_at: int   # ms, same clock as the driver loop


class EffectTracker:
    def __init__(self, config: GameConfig):
        self.config = config
        self._effects: List[ActiveEffect] = []

    def add(self, kind: FoodKind, now_ms: int) -> None:
        """Start a timed effect for ``kind``; permanent kinds are ignored."""
        if not kind.is_temporary:
            return
        self._effects.append(ActiveEffect(kind, now_ms + kind.effect_duration))

    def active(self, now_ms: int) -> List[ActiveEffect]:
        self._effects = [e for e in self._effects if e.expires_at > now_ms]
        return list(self._effects)

    def clear(self) -> None:
        self._effects = []

    def interval(self, base_speed: int, now_ms: int) -> int:
        """
        Tick interval with effects applied.

        A positive speed_change speeds the snake up, so it shortens the
        interval; the result stays inside the configured speed bounds.
        """
        delta = sum(e.kind.speed_change for e in self.active(now_ms))
        interval = base_speed - delta
        return max(self.config.min_game_speed, min(self.config.max_game_speed, interval))
