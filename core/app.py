"""
core/app.py — Pygame application shell

Handles the window, main loop, and scene stack.
You don't edit this file to build your game.
You write Scenes and push them.

    app = App(title="Lock-On", width=960, height=640)
    app.push_scene(DungeonScene())
    app.run()

The window uses ``pygame.SCALED``: SDL letterboxes the fixed virtual
resolution and delivers mouse/touch positions already in virtual
pixels, so scenes never rescale pointer coordinates themselves.
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.ecs import World


class App:
    def __init__(self, title: str = "Lock-On", width: int = 960, height: int = 640):
        pygame.init()
        self._virtual_size = (width, height)
        self.screen = pygame.display.set_mode((width, height),
                                              pygame.SCALED | pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 60
        self.dt = 0.0

        # Scene stack; only the top scene is active
        self._scenes: list[Scene] = []

        # The ECS world, shared across all scenes
        self.world = World()

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        self._scenes.append(scene)
        scene.on_enter(self)

    # -- Coordinate mapping --

    @property
    def virtual_size(self) -> tuple[int, int]:
        return self._virtual_size

    # -- Main loop --

    def run(self):
        while self.running:
            self.dt = self.clock.tick(self.fps) / 1000.0

            # Events are queued on the scene and drained in update()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                    pygame.display.toggle_fullscreen()
                elif self.scene:
                    self.scene.handle_event(event, self)

            if self.scene:
                self.scene.update(self.dt, self)
                self.scene.draw(self.screen, self)

            pygame.display.flip()

        pygame.quit()

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        img = f.render(text, True, color)
        return surface.blit(img, (x, y))
