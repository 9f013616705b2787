"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and game actions.  The scene feeds in
raw events; the manager maps them to *intents* (movement, debug
toggles) and to the logical targeting actions of
``logic.targeting.actions``.

Other systems read intents and actions — they never touch raw keycodes.

Usage (in dungeon_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)
    self.input.end_frame()          # captures held-key state

    frame = targeting_tick(world, self.target, self.input.actions(), ...)
    if self.input.just("toggle_debug"):
        ...
    move = self.input.movement()    # → (dx, dy) normalised
"""

from __future__ import annotations
import pygame

from logic.targeting.actions import (
    SelectNearest, CycleForward, CycleBackward, PointerPick,
    ResetTarget, Attack, TargetAction,
)


# ── Default key bindings ────────────────────────────────────────────

# Each binding is  (pygame key constant, modifier mask or 0)
# For mouse buttons we use negative constants: -1 = LMB, -3 = RMB
# A binding with a modifier wins over a plain binding of the same key,
# so Shift+Tab cycles backward without also cycling forward.

_BINDS: dict[str, list[tuple[int, int]]] = {
    # Movement  (held, continuous)
    "move_up":         [(pygame.K_w, 0), (pygame.K_UP, 0)],
    "move_down":       [(pygame.K_s, 0), (pygame.K_DOWN, 0)],
    "move_left":       [(pygame.K_a, 0), (pygame.K_LEFT, 0)],
    "move_right":      [(pygame.K_d, 0), (pygame.K_RIGHT, 0)],
    # Targeting  (press, discrete)
    "select_nearest":  [(pygame.K_t, 0)],
    "cycle_forward":   [(pygame.K_TAB, 0), (pygame.K_e, 0)],
    "cycle_backward":  [(pygame.K_TAB, pygame.KMOD_SHIFT), (pygame.K_q, 0)],
    "reset_target":    [(pygame.K_ESCAPE, 0)],
    "pick":            [(-1, 0)],                  # LMB
    "attack":          [(pygame.K_f, 0), (pygame.K_x, 0), (pygame.K_SPACE, 0)],
    # Debug / toggles
    "toggle_debug":    [(pygame.K_F1, 0)],
    "toggle_grid":     [(pygame.K_g, 0)],
    "reload_tuning":   [(pygame.K_F5, 0)],
    "respawn":         [(pygame.K_r, 0)],
}

# Intent → logical targeting action (pick is built from the event pos)
_ACTIONS: dict[str, type] = {
    "select_nearest": SelectNearest,
    "cycle_forward":  CycleForward,
    "cycle_backward": CycleBackward,
    "reset_target":   ResetTarget,
    "attack":         Attack,
}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Event → intent / action mapper.

    Call ``begin_frame()`` before processing events,
    ``feed(event)`` for each pygame event,
    ``end_frame()`` after all events.

    Then use ``actions()`` for this frame's targeting actions (in
    arrival order), ``just(intent)`` for other discrete presses and
    ``held(intent)`` for continuous holds.
    """

    def __init__(self, binds: dict[str, list[tuple[int, int]]] | None = None):
        self._binds = binds if binds is not None else _BINDS
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Intents currently held (key is down right now)
        self._held: set[str] = set()
        # Targeting actions queued this frame, in arrival order
        self._actions: list[TargetAction] = []
        # Scroll-wheel steps this frame (+ = zoom in)
        self.wheel: int = 0

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self._actions.clear()
        self.wheel = 0

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  Maps it to intents and actions."""
        if event.type == pygame.KEYDOWN:
            for intent in self._key_intents(event.key, getattr(event, "mod", 0)):
                self._press(intent, event)

        elif event.type == pygame.MOUSEBUTTONDOWN:
            neg_button = -event.button  # -1 for LMB, -3 for RMB
            for intent, key_list in self._binds.items():
                if any(key == neg_button for key, _mod in key_list):
                    self._press(intent, event)

        elif event.type == pygame.MOUSEWHEEL:
            self.wheel += event.y

    def end_frame(self):
        """Snapshot held-key state for continuous intents (movement)."""
        self._held.clear()
        keys = pygame.key.get_pressed()
        for intent, key_list in self._binds.items():
            for key, req_mod in key_list:
                if key < 0 or req_mod:
                    continue
                if keys[key]:
                    self._held.add(intent)
                    break

    # ── queries ─────────────────────────────────────────────────

    def actions(self) -> list[TargetAction]:
        """Targeting actions queued this frame, oldest first."""
        return list(self._actions)

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """True if the intent is continuously held down."""
        return intent in self._held

    def movement(self) -> tuple[float, float]:
        """Return a normalised (dx, dy) movement vector from held keys."""
        dx = 0.0
        dy = 0.0
        if self.held("move_up"):
            dy -= 1.0
        if self.held("move_down"):
            dy += 1.0
        if self.held("move_left"):
            dx -= 1.0
        if self.held("move_right"):
            dx += 1.0
        # Normalise diagonal so player doesn't move √2× faster
        if dx != 0.0 and dy != 0.0:
            mag = (dx * dx + dy * dy) ** 0.5
            dx /= mag
            dy /= mag
        return dx, dy

    # ── internal ────────────────────────────────────────────────

    def _key_intents(self, key: int, mods: int) -> list[str]:
        with_mod: list[str] = []
        plain: list[str] = []
        for intent, key_list in self._binds.items():
            for bkey, req_mod in key_list:
                if bkey != key:
                    continue
                if req_mod == 0:
                    plain.append(intent)
                    break
                if mods & req_mod:
                    with_mod.append(intent)
                    break
        return with_mod or plain

    def _press(self, intent: str, event: pygame.event.Event):
        self._pressed.add(intent)
        if intent == "pick":
            sx, sy = event.pos
            self._actions.append(PointerPick(sx=float(sx), sy=float(sy)))
        elif intent in _ACTIONS:
            self._actions.append(_ACTIONS[intent]())
