"""
core/app.py — Pygame application shell

Handles the window, the control loop, and the scene stack.
You write Scenes and push/pop them.

    app = App(title="Baba's Adventure", width=960, height=640)
    app.push_scene(WorldScene(world))
    app.run()

One loop iteration waits for at most one input event (bounded by
``poll_timeout_ms``), hands it to the top scene, updates, draws.
A timed-out wait yields ``NOEVENT`` and the scene still updates.
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.tuning import get as _tun


class App:
    def __init__(self, title: str = "Adventure", width: int | None = None,
                 height: int | None = None):
        pygame.init()
        width = width or int(_tun("render", "window_width", 960))
        height = height or int(_tun("render", "window_height", 640))
        self._windowed_size = (width, height)
        # The virtual (design) resolution; all game rendering targets this.
        self._virtual_size = (width, height)
        self._render_surface = pygame.Surface((width, height))
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = int(_tun("render", "fps", 60))
        self.poll_timeout_ms = int(_tun("input", "poll_timeout_ms", 10))
        self.dt = 0.0

        # Scene stack; only the top scene is active
        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        if self._scenes:
            self._scenes[-1].on_exit(self)
            self._scenes.pop()
        if self._scenes:
            self._scenes[-1].on_enter(self)

    # -- Main loop --

    def run(self):
        while self.running:
            event = pygame.event.wait(self.poll_timeout_ms)

            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self._windowed_size = (event.w, event.h)
                self.screen = pygame.display.set_mode(
                    (event.w, event.h), pygame.RESIZABLE)
                if self.scene:
                    self.scene.on_enter(self)
            elif event.type != pygame.NOEVENT and self.scene:
                self.scene.handle_event(event, self)

            self.dt = self.clock.tick(self.fps) / 1000.0

            if self.scene:
                self.scene.update(self.dt, self)

            # Draw to the fixed-size virtual surface, then scale to screen
            if self.scene:
                self.scene.draw(self._render_surface, self)

            pygame.transform.scale(self._render_surface,
                                   self.screen.get_size(), self.screen)
            pygame.display.flip()

        pygame.quit()

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        img = f.render(text, True, color)
        return surface.blit(img, (x, y))
