"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.
Anything a designer might want to tweak at runtime lives in
``data/tuning.toml`` instead; the values here are the fallbacks
passed to ``core.tuning.get``.

Unit System
-----------
All gameplay distances are measured in **tiles**, where:

    1 tile = 1 metre   (the canonical spatial unit)

    Distance / position     m       (metres)
    Speed                   m/s     (metres per second)
    Time                    s       (seconds)
    Health / damage         HP      (hit points)

Rendering converts to pixels via ``TILE_SIZE`` (px per metre at zoom
1.0).  No targeting code references pixels — only the viewport and
the renderer.

Range Hierarchy (small → large):
    0.9 m   Body width (player and enemy colliders)
    1.0 m   Pick radius (click / tap tolerance around an enemy centre)
    2.0 m   Attack range (sword reach, centre to centre)
"""


# Render
TILE_SIZE = 32     # px per metre at zoom 1.0

# ── Targeting defaults ──────────────────────────────────────────────
ATTACK_RANGE = 2.0        # m, inclusive boundary
PICK_RADIUS = 1.0         # m, generous for touch imprecision

# ── Bodies ──────────────────────────────────────────────────────────
PLAYER_WIDTH = 0.9        # m
PLAYER_HEIGHT = 1.2       # m
ENEMY_WIDTH = 0.9         # m
ENEMY_HEIGHT = 1.1        # m

# ── Room palette ────────────────────────────────────────────────────
ROOM_FLOOR = (34, 30, 38)
ROOM_GRID = (48, 42, 54)
ROOM_WALL = (90, 84, 96)

# ── Target feedback colours ─────────────────────────────────────────
TARGET_IN_RANGE = (80, 220, 100)
TARGET_OUT_OF_RANGE = (230, 180, 60)
RANGE_RING = (100, 180, 255)
