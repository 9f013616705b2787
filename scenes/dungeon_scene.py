"""
scenes/dungeon_scene.py — One dungeon room with lock-on combat

Camera follows the player.  WASD to move.

    T             — lock on to the nearest enemy
    Tab / E       — next target      Shift+Tab / Q — previous target
    Left click    — lock on to the enemy under the pointer
    Esc           — drop the lock
    F / X / Space — attack the locked target (blocked if none / too far)
    Scroll wheel  — zoom            R — next room
    F1 debug log  G grid            F5 reload tuning

The playfield canvas sits below the HUD bar, so pointer picks go
through a canvas origin that is not (0, 0).
"""

from __future__ import annotations
import random
import pygame
from core.scene import Scene
from core.app import App
from core.constants import TILE_SIZE, ATTACK_RANGE
from core.events import EventBus
from core.viewport import Viewport, viewport_from_camera
from core import tuning as tuning_mod
from components import (
    Camera, GameClock, DevLog, Player, Position, Collider, Hostile,
)
from logic.input_manager import InputManager
from logic.entity_factory import spawn_player, populate_room
from logic.damage import tick_hit_flash
from logic.targeting import TargetState, SelectNearest, ResetTarget
from logic.tick import (
    FrameResult, targeting_tick, advance_clock, input_system, movement_system,
)
from scenes.dungeon_draw import (
    draw_room, draw_entities, draw_range_ring, draw_target_marker,
    draw_hud, draw_debug_overlay,
)

_HUD_H = 40
_MESSAGE_TIME = 2.0       # s


class DungeonScene(Scene):
    def __init__(self, width: int = 24, height: int = 16,
                 enemies: int = 6, seed: int | None = None):
        self.map_w = width
        self.map_h = height
        self.enemy_count = enemies
        self.rng = random.Random(seed)
        self.room_no = 0
        self.room = ""

        self.input = InputManager()
        self.target = TargetState()
        self.frame = FrameResult()
        self.viewport: Viewport | None = None
        self._pending: list = []

        self.show_debug = False
        self.show_grid = True
        self.message = ""
        self.message_timer = 0.0
        self._level_msg = ""

    # ── Lifecycle ────────────────────────────────────────────────────

    def on_enter(self, app: App):
        world = app.world
        for res in (Camera(), GameClock(), EventBus(), DevLog()):
            if world.res(type(res)) is None:
                world.set_res(res)
        world.res(EventBus).subscribe("PlayerLeveledUp", self._on_level_up)
        if world.query_one(Player) is None:
            spawn_player(world, self.map_w / 2.0, self.map_h / 2.0, "")
        self._enter_room(app)

    def _enter_room(self, app: App):
        """Clear the old room, spawn a fresh one, and lock on."""
        world = app.world
        old_room = self.room
        self.room_no += 1
        self.room = f"room-{self.room_no}"

        # Move the player out first so clearing the old room spares it
        res = world.query_one(Player, Position)
        if res:
            pid, _, pos = res
            pos.x, pos.y, pos.room = self.map_w / 2.0, self.map_h / 2.0, self.room
            world.room_set(pid, self.room)
        if old_room:
            world.clear_room(old_room)
        world.purge()

        populate_room(world, self.room, self.map_w, self.map_h,
                      self.enemy_count, rng=self.rng)
        # Reset, then the same auto-select a SelectNearest press would do
        self._pending = [ResetTarget(), SelectNearest()]
        self._show(f"Entered {self.room}")

    def _show(self, text: str):
        self.message = text
        self.message_timer = _MESSAGE_TIME

    def _on_level_up(self, event):
        self._level_msg = f"LEVEL UP! Now level {event.level}!"

    # ── Input ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        self.input.feed(event)

    # ── Update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        world = app.world
        self.input.end_frame()

        if self.input.just("toggle_debug"):
            self.show_debug = not self.show_debug
        if self.input.just("toggle_grid"):
            self.show_grid = not self.show_grid
        if self.input.just("reload_tuning"):
            tuning_mod.reload()
        if self.input.just("respawn"):
            self._enter_room(app)

        cam = world.res(Camera)
        if self.input.wheel:
            zmin = tuning_mod.get("camera", "zoom_min", 0.5)
            zmax = tuning_mod.get("camera", "zoom_max", 3.0)
            step = tuning_mod.get("camera", "zoom_step", 1.15)
            cam.zoom = max(zmin, min(zmax, cam.zoom * step ** self.input.wheel))

        advance_clock(world, dt)
        input_system(world, self.input.movement())
        movement_system(world, dt, bounds=(self.map_w, self.map_h))
        tick_hit_flash(world, dt)

        # Camera follows the player centre; picks use this frame's view
        res = world.query_one(Player, Position, Collider)
        if res:
            _, _, pos, col = res
            cam.x, cam.y = pos.x + col.half_w, pos.y + col.half_h
        sw, sh = app.virtual_size
        self.viewport = viewport_from_camera(cam, (0, _HUD_H, sw, sh - _HUD_H),
                                             TILE_SIZE)

        actions = self._pending + self.input.actions()
        self._pending = []
        self.frame = targeting_tick(world, self.target, actions,
                                    viewport=self.viewport)
        for outcome in self.frame.outcomes:
            self._show(outcome.message)
        if self.frame.outcomes and world.query_one(Hostile) is None:
            self._show("Room cleared! Press R")
        if self._level_msg:
            self._show(self._level_msg)
            self._level_msg = ""

        world.purge()
        self.input.begin_frame()

        if self.message_timer > 0.0:
            self.message_timer -= dt
            if self.message_timer <= 0.0:
                self.message = ""

    # ── Draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((10, 8, 12))
        vp = self.viewport
        if vp is not None:
            clip = surface.get_clip()
            surface.set_clip(pygame.Rect(*map(int, vp.canvas)))
            draw_room(surface, vp, self.map_w, self.map_h, self.show_grid)
            draw_range_ring(surface, app, vp,
                            tuning_mod.get("targeting", "attack_range", ATTACK_RANGE))
            draw_entities(surface, app, vp, self.room)
            draw_target_marker(surface, app, vp, self.frame.target_id,
                               self.frame.range)
            if self.show_debug:
                draw_debug_overlay(surface, app, vp)
            surface.set_clip(clip)
        draw_hud(surface, app, self, _HUD_H)
