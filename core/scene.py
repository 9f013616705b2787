"""
core/scene.py — Scene interface

Every screen in the game is a Scene. The app holds a stack of them.
Only the top scene gets update/draw calls. Scenes below stay frozen.

Within a frame the order is fixed: every ``handle_event`` call, then
one ``update``, then one ``draw``.  Scenes queue input in
``handle_event`` and act on it in ``update``, so everything the frame
does sees one consistent state.

    class MyScene(Scene):
        def handle_event(self, event, app):
            self.input.feed(event)

        def update(self, dt, app):
            ...
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed)."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Queue a single pygame event for this frame's update."""
        pass

    def update(self, dt: float, app: App):
        """Advance simulation. dt is seconds."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
        pass
