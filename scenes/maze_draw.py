"""scenes/maze_draw.py — Rendering helpers for the maze scene.

All pure-draw functions live here so that MazeScene.draw() stays thin.
Every function receives the data it needs as parameters; there is no implicit
coupling to the scene object.  Cell ``(x, z)`` fills the square whose
top-left pixel is ``(ox + x·cell, oy + z·cell)``.
"""

from __future__ import annotations
import math
import pygame
from core.app import App
from core.constants import (
    CELL_COLORS, GOAL_COLOR, PLAYER_COLOR, PURSUER_COLOR, PATH_COLOR,
)
from core.maze import Grid


# ── Cells ───────────────────────────────────────────────────────────

def draw_grid(surface: pygame.Surface, grid: Grid,
              ox: int, oy: int, cell: int, show_lines: bool = False):
    for z in range(grid.size):
        for x in range(grid.size):
            color = CELL_COLORS.get(grid.cells[z][x], (255, 0, 255))
            rect = pygame.Rect(ox + x * cell, oy + z * cell, cell, cell)
            pygame.draw.rect(surface, color, rect)
            if show_lines:
                pygame.draw.rect(surface, (0, 0, 0), rect, 1)


def _to_px(x: float, z: float, ox: int, oy: int, cell: int) -> tuple[int, int]:
    return int(ox + (x + 0.5) * cell), int(oy + (z + 0.5) * cell)


# ── Goal / path / entities ──────────────────────────────────────────

def draw_goal(surface: pygame.Surface, goal: tuple[int, int],
              ox: int, oy: int, cell: int):
    cx, cy = _to_px(goal[0], goal[1], ox, oy, cell)
    half = max(2, int(cell * 0.3))
    pygame.draw.rect(surface, GOAL_COLOR, (cx - half, cy - half, half * 2, half * 2))


def draw_path(surface: pygame.Surface, path: list[tuple[int, int]],
              start: tuple[float, float], ox: int, oy: int, cell: int):
    if not path:
        return
    points = [_to_px(start[0], start[1], ox, oy, cell)]
    points += [_to_px(x, z, ox, oy, cell) for x, z in path]
    if len(points) >= 2:
        pygame.draw.lines(surface, PATH_COLOR, False, points, 2)


def draw_pursuers(surface: pygame.Surface,
                  pursuers: list[tuple[int, float, float, bool]],
                  ox: int, oy: int, cell: int):
    radius = max(2, int(cell * 0.4))
    for _eid, x, z, alive in pursuers:
        if not alive:
            continue
        pygame.draw.circle(surface, PURSUER_COLOR, _to_px(x, z, ox, oy, cell), radius)


def draw_player(surface: pygame.Surface, pose: tuple[float, float, float],
                ox: int, oy: int, cell: int):
    x, z, yaw = pose
    cx, cy = _to_px(x, z, ox, oy, cell)
    radius = max(2, int(cell * 0.25))
    pygame.draw.circle(surface, PLAYER_COLOR, (cx, cy), radius)
    tip = (int(cx + math.cos(yaw) * cell * 0.6), int(cy + math.sin(yaw) * cell * 0.6))
    pygame.draw.line(surface, PLAYER_COLOR, (cx, cy), tip, 2)


# ── Minimap ─────────────────────────────────────────────────────────

def draw_minimap(surface: pygame.Surface, grid: Grid,
                 pose: tuple[float, float, float] | None,
                 pursuers: list[tuple[int, float, float, bool]],
                 x0: int, y0: int, size_px: int):
    cell = max(1, size_px // grid.size)
    draw_grid(surface, grid, x0, y0, cell)
    draw_goal(surface, grid.goal, x0, y0, cell)
    draw_pursuers(surface, pursuers, x0, y0, cell)
    if pose is not None:
        cx, cy = _to_px(pose[0], pose[1], x0, y0, cell)
        pygame.draw.circle(surface, PLAYER_COLOR, (cx, cy), max(1, cell // 4))
    pygame.draw.rect(surface, (200, 200, 200), (x0, y0, cell * grid.size, cell * grid.size), 1)


# ── HUD ────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, *, elapsed: float,
             level: int, score: int, message: str | None,
             auto_active: bool):
    app.draw_text_bg(surface, f"Time: {int(elapsed)}s", 8, 8)
    app.draw_text_bg(surface, f"Level: {level}", 8, 26)
    app.draw_text_bg(surface, f"Score: {score}", 8, 44)
    if auto_active:
        app.draw_text_bg(surface, "AUTO", 8, 62, color=PATH_COLOR)

    if message:
        img = app.font_lg.render(message, True, (255, 255, 255))
        sw, sh = surface.get_size()
        x = (sw - img.get_width()) // 2
        y = sh // 2 - img.get_height() // 2
        app.draw_text_bg(surface, message, x, y, font=app.font_lg, pad=6)
