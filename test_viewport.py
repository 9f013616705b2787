"""test_viewport.py — Screen ↔ world mapping and pointer picks.

Covers the inverse relationship between the renderer's forward
transform and pointer mapping, the canvas-origin offset, declined
mappings, and the camera-centred viewport the dungeon scene builds.

Run:  python test_viewport.py
"""
from __future__ import annotations
import sys, math, random, traceback

from core.viewport import (
    Viewport, screen_to_world, world_to_screen, point_in_canvas,
    viewport_from_camera,
)
from components import Camera
from logic.targeting import EnemySnapshot, pick_at_screen

# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    print(f"  [FAIL] {label}")
    if detail:
        for line in detail.strip().splitlines():
            print(f"         {line}")

def _close(a: tuple[float, float], b: tuple[float, float]) -> bool:
    return math.isclose(a[0], b[0], abs_tol=1e-9) and math.isclose(a[1], b[1], abs_tol=1e-9)


# ═══════════════════════════════════════════════════════════════════
#  1. Known values
# ═══════════════════════════════════════════════════════════════════

def test_known_values():
    print("\n=== 1: Known values ===")
    vp = Viewport(pan_x=2.0, pan_y=-1.0, zoom=32.0, canvas=(0, 40, 960, 600))
    # (100 - 0) / 32 - 2 = 1.125 ; (200 - 40) / 32 + 1 = 6.0
    assert _close(screen_to_world(100, 200, vp), (1.125, 6.0))
    ok("Canvas origin is subtracted before unscaling")

    assert _close(world_to_screen(1.125, 6.0, vp), (100.0, 200.0))
    ok("Forward transform lands back on the pixel")

    unit = Viewport(zoom=1.0, canvas=(0, 0, 10, 10))
    assert _close(screen_to_world(7, 3, unit), (7.0, 3.0))
    ok("Identity viewport maps pixels to metres 1:1")


# ═══════════════════════════════════════════════════════════════════
#  2. Round trip
# ═══════════════════════════════════════════════════════════════════

def test_round_trip():
    print("\n=== 2: Round trip ===")
    rng = random.Random(7)
    viewports = [
        Viewport(pan_x=0.0, pan_y=0.0, zoom=1.0, canvas=(0, 0, 800, 600)),
        Viewport(pan_x=13.25, pan_y=-4.5, zoom=0.37, canvas=(12, 40, 640, 480)),
        Viewport(pan_x=-250.0, pan_y=99.9, zoom=96.0, canvas=(-30, 7, 320, 200)),
    ]
    for vp in viewports:
        for _ in range(50):
            w = (rng.uniform(-500, 500), rng.uniform(-500, 500))
            s = world_to_screen(*w, vp)
            back = screen_to_world(*s, vp)
            assert math.isclose(back[0], w[0], rel_tol=1e-9, abs_tol=1e-9), (vp, w, back)
            assert math.isclose(back[1], w[1], rel_tol=1e-9, abs_tol=1e-9), (vp, w, back)
    ok("screen_to_world(world_to_screen(p)) ≈ p across pan / zoom / origin")


# ═══════════════════════════════════════════════════════════════════
#  3. Declined mappings
# ═══════════════════════════════════════════════════════════════════

def test_declines():
    print("\n=== 3: Declined mappings ===")
    assert screen_to_world(10, 10, None) is None
    assert screen_to_world(10, 10, Viewport(canvas=None)) is None
    assert screen_to_world(10, 10, Viewport(zoom=0.0, canvas=(0, 0, 5, 5))) is None
    assert world_to_screen(1, 1, Viewport(zoom=-2.0, canvas=(0, 0, 5, 5))) is None
    ok("No viewport / no canvas / bad zoom → None")

    enemies = [EnemySnapshot(id=1, x=0.0, y=0.0)]
    assert pick_at_screen(0, 0, None, enemies, 5.0) is None
    ok("Pointer pick declines without a canvas")

    vp = Viewport(zoom=1.0, canvas=(10, 20, 100, 50))
    assert point_in_canvas(10, 20, vp)
    assert point_in_canvas(109, 69, vp)
    assert not point_in_canvas(110, 20, vp)
    assert not point_in_canvas(50, 19, vp)
    assert not point_in_canvas(50, 30, None)
    ok("point_in_canvas is half-open on the far edges")


# ═══════════════════════════════════════════════════════════════════
#  4. Camera-centred viewport
# ═══════════════════════════════════════════════════════════════════

def test_camera_viewport():
    print("\n=== 4: Camera viewport ===")
    canvas = (0, 40, 960, 600)
    cam = Camera(x=12.0, y=8.0, zoom=1.5)
    vp = viewport_from_camera(cam, canvas, 32)
    assert vp.zoom == 48.0
    assert _close(world_to_screen(12.0, 8.0, vp), (480.0, 340.0))
    ok("Camera focus is drawn at the canvas centre")

    # One metre right of the focus is one zoomed tile right of centre
    assert _close(world_to_screen(13.0, 8.0, vp), (528.0, 340.0))
    assert _close(screen_to_world(480.0 - 48.0, 340.0 + 96.0, vp), (11.0, 10.0))
    ok("Zoom scales offsets from the focus")

    assert viewport_from_camera(None, canvas, 32) is None
    assert viewport_from_camera(cam, None, 32) is None
    assert viewport_from_camera(Camera(zoom=0.0), canvas, 32) is None
    ok("Missing camera / canvas or zero zoom → no viewport")


def test_pick_through_viewport():
    print("\n=== 5: Pick through the viewport ===")
    cam = Camera(x=10.0, y=10.0, zoom=1.0)
    vp = viewport_from_camera(cam, (0, 40, 960, 600), 32)
    enemies = [EnemySnapshot(id=1, x=12.0, y=10.0),
               EnemySnapshot(id=2, x=12.0, y=11.5),
               EnemySnapshot(id=3, x=10.0, y=10.0, alive=False)]

    sx, sy = world_to_screen(12.2, 10.1, vp)
    assert pick_at_screen(sx, sy, vp, enemies, 1.0).id == 1
    ok("Click drawn on enemy 1 picks enemy 1")

    sx, sy = world_to_screen(12.0, 11.3, vp)
    assert pick_at_screen(sx, sy, vp, enemies, 1.0).id == 2
    ok("Nearer of two overlapping pick circles wins")

    sx, sy = world_to_screen(10.0, 10.0, vp)
    assert pick_at_screen(sx, sy, vp, enemies, 0.5) is None
    ok("Clicking a dead enemy's spot picks nothing")


# ═══════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Known values", test_known_values),
        ("Round trip", test_round_trip),
        ("Declines", test_declines),
        ("Camera viewport", test_camera_viewport),
        ("Pick through viewport", test_pick_through_viewport),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            fail(name, traceback.format_exc())

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Viewport Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
