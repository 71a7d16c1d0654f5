# src/snakesim/events.py
from .catalog import FoodKind


class GameEventListener:
    """
    Receiver for engine notifications.

    Every method is a no-op here; subclasses override the ones they care
    about. The engine calls them synchronously, before the call that
    produced the event returns.
    """

    def on_score_changed(self, score: int) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass

    def on_food_eaten(self, kind: FoodKind) -> None:
        pass

    def on_obstacle_hit(self) -> None:
        pass

    def on_speed_changed(self, new_speed: int) -> None:
        pass
