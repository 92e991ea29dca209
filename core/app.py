"""
core/app.py — Pygame window and scene stack

The app owns the window and the frame loop.  Game code lives in
Scenes; the app only routes events, dt and the draw surface to
whichever scene is on top.

    app = App(title="Maze Chase", width=960, height=640)
    app.push_scene(MazeScene())
    app.run()

Every scene draws onto a fixed ``width × height`` canvas which is then
stretched to the real window, so scene code never sees the window size.
"""

from __future__ import annotations
import pygame
from core.scene import Scene


class App:
    def __init__(self, title: str = "Maze Chase", width: int = 960, height: int = 640,
                 fps: int = 60):
        pygame.init()
        pygame.display.set_caption(title)
        self.canvas = pygame.Surface((width, height))
        self._window_size = (width, height)
        self.screen = pygame.display.set_mode(self._window_size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.max_dt = 0.1           # s; longer frames are clamped
        self.dt = 0.0
        self.running = True
        self.fullscreen = False

        self._stack: list[Scene] = []

        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font = pygame.font.SysFont("monospace", 14)
        self.font_lg = pygame.font.SysFont("monospace", 22)

    # ── Scenes ──────────────────────────────────────────────────────

    @property
    def scene(self) -> Scene | None:
        return self._stack[-1] if self._stack else None

    def push_scene(self, scene: Scene):
        top = self.scene
        if top is not None:
            top.on_exit(self)
        self._stack.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        """Drop the top scene.  Popping the last one ends the loop."""
        if not self._stack:
            return
        self._stack.pop().on_exit(self)
        if self._stack:
            self._stack[-1].on_enter(self)
        else:
            self.running = False

    # ── Loop ────────────────────────────────────────────────────────

    def run(self):
        while self.running:
            self.dt = min(self.clock.tick(self.fps) / 1000.0, self.max_dt)
            self._pump_events()
            if self.scene is not None:
                self.scene.update(self.dt, self)
            if self.scene is not None:
                self.scene.draw(self.canvas, self)
            pygame.transform.scale(self.canvas, self.screen.get_size(), self.screen)
            pygame.display.flip()
        pygame.quit()

    def _pump_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                self.toggle_fullscreen()
            elif event.type == pygame.VIDEORESIZE and not self.fullscreen:
                self._window_size = (event.w, event.h)
                self.screen = pygame.display.set_mode(self._window_size, pygame.RESIZABLE)
            elif self.scene is not None:
                self.scene.handle_event(event, self)

    def toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(self._window_size, pygame.RESIZABLE)

    # ── Text ────────────────────────────────────────────────────────

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None) -> pygame.Rect:
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2) -> pygame.Rect:
        """Text on a translucent box, for HUD lines over the maze."""
        img = (font or self.font).render(text, True, color)
        box = pygame.Surface((img.get_width() + pad * 2, img.get_height() + pad * 2),
                             pygame.SRCALPHA)
        box.fill(bg)
        surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))
