from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from .frame_data import FrameData

if TYPE_CHECKING:
    from marker_engine.app.context import Context
    from marker_engine.input.events import InputEvent


class Game:
    """
    Base interface games should implement.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Called once after the game module loads."""
        ...

    def on_calibrated(self) -> None:
        """Called once, when both marker colors have been sampled."""
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Called every frame; dt_ms is milliseconds elapsed."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        """Draw your game to the provided surface."""
        ...

    def on_event(self, event: InputEvent) -> None:
        """Optional: handle key presses drained from the input queue."""
        ...

    def on_unload(self) -> None:
        """Optional: cleanup when the game exits."""
        ...
