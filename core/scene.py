"""
core/scene.py — Base class for anything the App can drive.

Override only the hooks you need; the defaults do nothing.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Became the top of the stack."""

    def on_exit(self, app: App):
        """Popped, or covered by another scene."""

    def handle_events(self, events: list[pygame.event.Event], app: App):
        pass

    def update(self, dt: float, app: App):
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass
