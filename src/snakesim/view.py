# src/snakesim/view.py
from typing import Dict, Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .engine import EMPTY, FOOD, HEAD, OBSTACLE, SNAKE, SnakeEngine

Color = Tuple[int, int, int]

# ----- Colors -----
BG     = (20, 20, 24)
GREEN  = (80, 200, 80)
LIME   = (140, 240, 120)
GREY   = (120, 120, 130)
TEXT   = (220, 220, 230)

FOOD_COLORS: Dict[str, Color] = {
    "NORMAL":   (200, 70, 70),
    "POISON":   (150, 60, 190),
    "BONUS":    (240, 200, 60),
    "FREEZE":   (90, 170, 240),
    "SPEED":    (240, 130, 40),
    "TELEPORT": (230, 90, 200),
}

OBSTACLE_COLORS: Dict[str, Color] = {
    "STONE": (120, 120, 130),
    "WOOD":  (130, 90, 50),
    "WALL":  (90, 90, 100),
}

BOARD_CHARS = {EMPTY: ".", SNAKE: "o", HEAD: "@", FOOD: "*", OBSTACLE: "#"}


def format_board(board: np.ndarray) -> str:
    """Text rendering of an engine board snapshot, top row first."""
    return "\n".join("".join(BOARD_CHARS[int(c)] for c in row) for row in board)


def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Color, cell_size: int) -> None:
    rect = pygame.Rect(gx * cell_size, gy * cell_size, cell_size, cell_size)
    pygame.draw.rect(screen, color, rect)


def draw_game(screen: pygame.Surface, font: pygame.font.Font, engine: SnakeEngine, cell_size: int) -> None:
    screen.fill(BG)

    board = engine.board()
    for obstacle in engine.obstacles:
        x, y = obstacle.position
        draw_cell(screen, x, y, OBSTACLE_COLORS.get(obstacle.kind.name, GREY), cell_size)
    for food in engine.foods:
        x, y = food.position
        draw_cell(screen, x, y, FOOD_COLORS.get(food.kind.name, FOOD_COLORS["NORMAL"]), cell_size)
    # snake cells come from the snapshot so off-grid segments are skipped
    for y, x in np.argwhere(board == SNAKE):
        draw_cell(screen, int(x), int(y), GREEN, cell_size)
    for y, x in np.argwhere(board == HEAD):
        draw_cell(screen, int(x), int(y), LIME, cell_size)

    txt = font.render(f"Score: {engine.score}", True, TEXT)
    screen.blit(txt, (8, 6))


def _draw_overlay(screen: pygame.Surface, font: pygame.font.Font, lines) -> None:
    width, height = screen.get_size()
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    top = height // 2 - 16 * (len(lines) - 1)
    for i, (text, color) in enumerate(lines):
        surf = font.render(text, True, color)
        screen.blit(surf, surf.get_rect(center=(width // 2, top + 30 * i)))


def draw_game_over(screen: pygame.Surface, font: pygame.font.Font, score: int) -> None:
    _draw_overlay(screen, font, [
        ("GAME OVER", (240, 240, 250)),
        ("Press R to restart", TEXT),
        (f"Score: {score}", TEXT),
    ])


def draw_paused(screen: pygame.Surface, font: pygame.font.Font) -> None:
    _draw_overlay(screen, font, [
        ("PAUSED", (240, 240, 250)),
        ("Press SPACE to play", TEXT),
    ])
