"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and the game's per-tick ``Controls``.
The scene feeds in raw events; the manager maps them to *intents*.
Game logic never touches raw keycodes.

Usage (in maze_scene):

    self.input = InputManager()
    # each frame:
    for event in events:
        self.input.feed(event)
    controls = self.input.controls()
    if self.input.just("reload"):
        ...
    self.input.begin_frame()

Held state is tracked from KEYDOWN/KEYUP pairs rather than polled, so
the manager works on synthetic events without an open display.
"""

from __future__ import annotations
import pygame

from components import Controls


# ── Intent names ─────────────────────────────────────────────────────
# Held:   forward  back  turn_left  turn_right
# Press:  autopath  attack  reload  grid_lines  quit


# ── Default key bindings ────────────────────────────────────────────

# Keyboard keys are pygame key constants.  Mouse buttons use negative
# constants: -1 = LMB, -3 = RMB.

_HELD_BINDS: dict[str, list[int]] = {
    "forward":      [pygame.K_w, pygame.K_UP],
    "back":         [pygame.K_s, pygame.K_DOWN],
    "turn_left":    [pygame.K_a, pygame.K_LEFT],
    "turn_right":   [pygame.K_d, pygame.K_RIGHT],
}

_PRESS_BINDS: dict[str, list[int]] = {
    "autopath":     [pygame.K_p],
    "attack":       [pygame.K_SPACE, -1],   # Space or LMB
    "reload":       [pygame.K_F5],
    "grid_lines":   [pygame.K_g],
    "quit":         [pygame.K_ESCAPE],
}


class InputManager:
    """Maps pygame events to held and pressed intents."""

    def __init__(self):
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Raw keys currently down
        self._down: set[int] = set()

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Forget this frame's rising edges."""
        self._pressed.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event."""
        if event.type == pygame.KEYDOWN:
            self._down.add(event.key)
            for intent, keys in _PRESS_BINDS.items():
                if event.key in keys:
                    self._pressed.add(intent)

        elif event.type == pygame.KEYUP:
            self._down.discard(event.key)

        elif event.type == pygame.MOUSEBUTTONDOWN:
            neg_button = -event.button  # -1 for LMB, -3 for RMB
            for intent, keys in _PRESS_BINDS.items():
                if neg_button in keys:
                    self._pressed.add(intent)

    def release_all(self):
        """Drop every held intent (window lost focus)."""
        self._down.clear()

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """True if the intent is continuously held down."""
        return any(k in self._down for k in _HELD_BINDS.get(intent, ()))

    def controls(self) -> Controls:
        """Build this tick's ``Controls``.  Opposite holds cancel out."""
        forward = int(self.held("forward")) - int(self.held("back"))
        turn = int(self.held("turn_left")) - int(self.held("turn_right"))
        return Controls(
            forward=forward,
            turn=turn,
            autopath=self.just("autopath"),
            attack=self.just("attack"),
        )
