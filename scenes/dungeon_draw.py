"""scenes/dungeon_draw.py — Rendering helpers for the dungeon scene.

All pure-draw functions live here so that DungeonScene.draw() stays
thin.  Every world-space position goes through
``core.viewport.world_to_screen`` — the same transform pointer picks
invert — so what you click is what you see.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import (
    ROOM_FLOOR, ROOM_GRID, ROOM_WALL,
    TARGET_IN_RANGE, TARGET_OUT_OF_RANGE, RANGE_RING,
)
from core.viewport import Viewport, world_to_screen
from components import (
    Position, Sprite, Collider, Health, HitFlash, Player, Hostile,
    Identity, DevLog,
)
from logic.targeting import RangeReport, range_text


def _rect(vp: Viewport, x: float, y: float, w: float, h: float) -> pygame.Rect:
    sx, sy = world_to_screen(x, y, vp)
    return pygame.Rect(int(sx), int(sy),
                       max(1, int(w * vp.zoom)), max(1, int(h * vp.zoom)))


# ── Room ────────────────────────────────────────────────────────────

def draw_room(surface: pygame.Surface, vp: Viewport,
              width: int, height: int, show_grid: bool):
    pygame.draw.rect(surface, ROOM_FLOOR, _rect(vp, 0, 0, width, height))
    if show_grid:
        for col in range(width + 1):
            top = world_to_screen(col, 0, vp)
            bottom = world_to_screen(col, height, vp)
            pygame.draw.line(surface, ROOM_GRID, top, bottom, 1)
        for row in range(height + 1):
            left = world_to_screen(0, row, vp)
            right = world_to_screen(width, row, vp)
            pygame.draw.line(surface, ROOM_GRID, left, right, 1)
    pygame.draw.rect(surface, ROOM_WALL, _rect(vp, 0, 0, width, height), 3)


# ── Entities (bodies + health bars) ─────────────────────────────────

def draw_entities(surface: pygame.Surface, app: App, vp: Viewport, room: str):
    entities = []
    for eid, pos, sprite, col in app.world.query_room(room, Position, Sprite, Collider):
        entities.append((sprite.layer, eid, pos, sprite, col))
    entities.sort(key=lambda e: e[0])

    for _, eid, pos, sprite, col in entities:
        rect = _rect(vp, pos.x, pos.y, col.width, col.height)
        color = (255, 255, 255) if app.world.has(eid, HitFlash) else sprite.color
        pygame.draw.rect(surface, color, rect)
        app.draw_text(surface, sprite.char, rect.x + 3, rect.y + 2,
                      color=(0, 0, 0), font=app.font_sm)

        if app.world.has(eid, Player) or not app.world.has(eid, Health):
            continue
        hp = app.world.get(eid, Health)
        ratio = max(0.0, hp.current / hp.maximum)
        bar = pygame.Rect(rect.x, rect.y - 6, rect.w, 4)
        pygame.draw.rect(surface, (51, 51, 51), bar)
        if ratio > 0.5:
            fill = (76, 175, 80)
        elif ratio > 0.25:
            fill = (255, 193, 7)
        else:
            fill = (244, 67, 54)
        pygame.draw.rect(surface, fill, (bar.x, bar.y, max(1, int(bar.w * ratio)), bar.h))


# ── Target feedback ─────────────────────────────────────────────────

def draw_range_ring(surface: pygame.Surface, app: App, vp: Viewport,
                    attack_range: float):
    res = app.world.query_one(Player, Position, Collider)
    if not res:
        return
    _, _, pos, col = res
    cx, cy = world_to_screen(pos.x + col.half_w, pos.y + col.half_h, vp)
    ring_px = int(attack_range * vp.zoom)
    if ring_px <= 0:
        return
    ring_surf = pygame.Surface((ring_px * 2 + 2, ring_px * 2 + 2), pygame.SRCALPHA)
    pygame.draw.circle(ring_surf, (*RANGE_RING, 30), (ring_px + 1, ring_px + 1), ring_px)
    pygame.draw.circle(ring_surf, (*RANGE_RING, 70), (ring_px + 1, ring_px + 1), ring_px, 1)
    surface.blit(ring_surf, (int(cx) - ring_px - 1, int(cy) - ring_px - 1))


def draw_target_marker(surface: pygame.Surface, app: App, vp: Viewport,
                       target_id: int | None, report: RangeReport | None):
    """Bracket the current target; green in range, amber too far."""
    if target_id is None or report is None:
        return
    pos = app.world.get(target_id, Position)
    col = app.world.get(target_id, Collider)
    if pos is None or col is None:
        return
    color = TARGET_IN_RANGE if report.in_range else TARGET_OUT_OF_RANGE
    rect = _rect(vp, pos.x, pos.y, col.width, col.height).inflate(10, 10)
    pygame.draw.rect(surface, color, rect, 2)
    # Chevron above the health bar
    tip = (rect.centerx, rect.top - 8)
    pygame.draw.polygon(surface, color, [(tip[0] - 6, tip[1] - 8),
                                         (tip[0] + 6, tip[1] - 8), tip])

    res = app.world.query_one(Player, Position, Collider)
    if res and not report.in_range:
        _, _, ppos, pcol = res
        start = world_to_screen(ppos.x + pcol.half_w, ppos.y + pcol.half_h, vp)
        pygame.draw.line(surface, color, start, rect.center, 1)
        app.draw_text(surface, f"{report.distance:.1f} m",
                      rect.right + 4, rect.top, color, app.font_sm)


# ── HUD ─────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, scene, hud_h: int):
    sw = surface.get_width()
    pygame.draw.rect(surface, (20, 18, 24), (0, 0, sw, hud_h))

    name = "—"
    if scene.frame.target_id is not None:
        ident = app.world.get(scene.frame.target_id, Identity)
        name = ident.name if ident else f"#{scene.frame.target_id}"
    color = (200, 200, 200)
    if scene.frame.range is not None:
        color = TARGET_IN_RANGE if scene.frame.range.in_range else TARGET_OUT_OF_RANGE
    app.draw_text(surface, f"Target: {name}", 8, 6, color)
    app.draw_text(surface, range_text(scene.frame.range), 8, 22, color, app.font_sm)

    res = app.world.query_one(Player, Health)
    if res:
        _, player, hp = res
        app.draw_text(surface,
                      f"Lv {player.level}   HP {hp.current:.0f}/{hp.maximum:.0f}   "
                      f"XP {player.xp}/{player.xp_needed}   "
                      f"Defeated {player.enemies_defeated}",
                      260, 6, (255, 215, 0))
    left = sum(1 for _ in app.world.query_room(scene.room, Hostile))
    app.draw_text(surface, f"Room: {scene.room}   Enemies: {left}",
                  260, 22, (160, 180, 170), app.font_sm)

    if scene.message:
        app.draw_text(surface, scene.message, sw - 260, 14, (255, 255, 255))


def draw_debug_overlay(surface: pygame.Surface, app: App, vp: Viewport):
    log = app.world.res(DevLog)
    y = surface.get_height() - 16
    app.draw_text(surface,
                  f"pan=({vp.pan_x:.1f}, {vp.pan_y:.1f}) zoom={vp.zoom:.1f}px/m",
                  8, y, (0, 255, 0), app.font_sm)
    if log is None:
        return
    for entry in reversed(log.recent(8)):
        y -= 13
        app.draw_text(surface,
                      f"{entry['t']:7.2f} [{entry['cat']}] {entry['msg']} → {entry['eid']}",
                      8, y, (0, 200, 0), app.font_sm)
