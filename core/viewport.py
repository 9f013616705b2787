"""core/viewport.py — Screen ↔ world coordinate mapping.

The renderer places a world point on screen with::

    sx = (wx + pan_x) * zoom + canvas_x
    sy = (wy + pan_y) * zoom + canvas_y

``screen_to_world`` is the algebraic inverse of exactly that
composition (pan first, then scale, then canvas offset).  Every draw
call in the dungeon scene goes through ``world_to_screen`` so clicks
and sprites can never drift apart.

Units: pan is in metres (world units), zoom is screen pixels per metre.

Both directions return ``None`` when the viewport is unusable (no
canvas yet, zero/negative zoom) — pointer picks are declined rather
than resolved against a nonsense coordinate.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from components import Camera


@dataclass(frozen=True)
class Viewport:
    """Per-frame snapshot of how world space maps onto the canvas."""
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0                                   # px per metre
    canvas: tuple[float, float, float, float] | None = None  # (x, y, w, h)


def _usable(viewport: Viewport | None) -> bool:
    return (viewport is not None
            and viewport.canvas is not None
            and viewport.zoom > 0.0)


def screen_to_world(sx: float, sy: float,
                    viewport: Viewport | None) -> tuple[float, float] | None:
    """Map a pointer position (screen px) to world metres, or ``None``."""
    if not _usable(viewport):
        return None
    rect_x, rect_y = viewport.canvas[0], viewport.canvas[1]
    wx = (sx - rect_x) / viewport.zoom - viewport.pan_x
    wy = (sy - rect_y) / viewport.zoom - viewport.pan_y
    return wx, wy


def world_to_screen(wx: float, wy: float,
                    viewport: Viewport | None) -> tuple[float, float] | None:
    """Map a world point to screen px — the renderer's forward transform."""
    if not _usable(viewport):
        return None
    rect_x, rect_y = viewport.canvas[0], viewport.canvas[1]
    sx = (wx + viewport.pan_x) * viewport.zoom + rect_x
    sy = (wy + viewport.pan_y) * viewport.zoom + rect_y
    return sx, sy


def point_in_canvas(sx: float, sy: float, viewport: Viewport | None) -> bool:
    """True if the screen point lies inside the canvas rectangle."""
    if viewport is None or viewport.canvas is None:
        return False
    x, y, w, h = viewport.canvas
    return x <= sx < x + w and y <= sy < y + h


def viewport_from_camera(cam: "Camera | None",
                         canvas: tuple[float, float, float, float] | None,
                         tile_size: float) -> Viewport | None:
    """Build the frame's Viewport so ``cam.(x, y)`` sits at canvas centre.

    ``tile_size`` is px per metre at zoom 1.0.
    """
    if cam is None or canvas is None:
        return None
    zoom = tile_size * cam.zoom
    if zoom <= 0.0:
        return None
    _, _, w, h = canvas
    pan_x = w / (2.0 * zoom) - cam.x
    pan_y = h / (2.0 * zoom) - cam.y
    return Viewport(pan_x=pan_x, pan_y=pan_y, zoom=zoom,
                    canvas=(float(canvas[0]), float(canvas[1]),
                            float(w), float(h)))
