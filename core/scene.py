"""
core/scene.py — Scene interface

A Scene is one screen of the game.  ``App`` keeps a stack of them and
forwards events, ticks, and draws to the top one only.

    class TitleScene(Scene):
        def handle_event(self, event, app):
            if event.type == pygame.KEYDOWN:
                app.push_scene(MazeScene())

        def draw(self, surface, app):
            app.draw_text(surface, "press any key", 40, 40)

The maze view (``scenes/maze_scene.py``) is the only scene today.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Scene became the top of the stack."""

    def on_exit(self, app: App):
        """Scene was popped or covered."""

    def handle_event(self, event: pygame.event.Event, app: App):
        """One raw pygame event."""

    def update(self, dt: float, app: App):
        """Advance by *dt* seconds."""

    def draw(self, surface: pygame.Surface, app: App):
        """Render onto the virtual surface."""
