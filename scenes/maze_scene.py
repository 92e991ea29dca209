"""
scenes/maze_scene.py — Top-down maze view

Feeds input into the game state machine, shows notices, and draws the
maze, goal, pursuers, player, active path, HUD, and a minimap.

Keys: W/S or Up/Down drive, A/D or Left/Right turn, P autopath,
Space or LMB attack, G grid lines, F5 reload tuning, Esc quit.
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.app import App
from core.constants import MINIMAP_SIZE, TILE_SIZE
from core.events import Notice
from core import tuning as tuning_mod
from logic.game_state import GameStateMachine
from logic.input_manager import InputManager
from scenes.maze_draw import (
    draw_grid, draw_goal, draw_path, draw_pursuers, draw_player,
    draw_minimap, draw_hud,
)


class MazeScene(Scene):
    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.machine: GameStateMachine | None = None
        self.input = InputManager()
        self.show_lines = False

        # Current notice (MessageSink)
        self.message: str | None = None
        self.message_left = 0.0

    def on_enter(self, app: App):
        if self.machine is None:
            self.machine = GameStateMachine(seed=self.seed)
            print(f"[MAZE] run seed {self.machine.seed}")
            self.machine.bus.subscribe("Notice", self._on_notice)
            self.machine.bus.drain()

    def _on_notice(self, ev: Notice):
        self.message = ev.text
        self.message_left = ev.duration

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type == pygame.WINDOWFOCUSLOST:
            self.input.release_all()
            return
        self.input.feed(event)

    def update(self, dt: float, app: App):
        if self.input.just("quit"):
            app.pop_scene()
            return
        if self.input.just("reload"):
            tuning_mod.reload()
        if self.input.just("grid_lines"):
            self.show_lines = not self.show_lines

        self.machine.update(self.input.controls(), dt)
        self.input.begin_frame()

        if self.message_left > 0:
            self.message_left -= dt
            if self.message_left <= 0:
                self.message = None

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((0, 0, 0))
        m = self.machine
        grid = m.grid
        sw, sh = surface.get_size()

        cell = max(4, min(TILE_SIZE * 2, min(sw, sh) // grid.size))
        ox = (sw - cell * grid.size) // 2
        oy = (sh - cell * grid.size) // 2

        pose = m.player_pose()
        pursuers = m.pursuer_poses()
        path = m.active_path()

        draw_grid(surface, grid, ox, oy, cell, self.show_lines)
        draw_goal(surface, grid.goal, ox, oy, cell)
        if pose is not None:
            draw_path(surface, path, (pose[0], pose[1]), ox, oy, cell)
        draw_pursuers(surface, pursuers, ox, oy, cell)
        if pose is not None:
            draw_player(surface, pose, ox, oy, cell)

        draw_minimap(surface, grid, pose, pursuers,
                     sw - MINIMAP_SIZE - 8, 8, MINIMAP_SIZE)
        draw_hud(surface, app, elapsed=m.state.elapsed, level=m.state.level,
                 score=m.state.score, message=self.message,
                 auto_active=bool(path))
