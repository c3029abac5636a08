"""
core/scene.py — Scene interface

Every screen is a Scene. The app holds a stack of them.
Only the top scene gets events, update and draw calls.

    class MyScene(Scene):
        def handle_event(self, event, app):
            # at most one pygame event per loop iteration
            pass

        def update(self, dt, app):
            # runs every iteration, event or not
            pass

        def draw(self, surface, app):
            pass
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active or the window resizes."""
        pass

    def on_exit(self, app: App):
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Process a single pygame event."""
        pass

    def update(self, dt: float, app: App):
        """Advance the world. dt is seconds."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass
