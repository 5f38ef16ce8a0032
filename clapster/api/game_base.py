from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

from .frame_data import FrameData

if TYPE_CHECKING:
    from clapster.app.context import Context


class Game:
    """
    Plugin interface for a game folder under games/.
    The host calls these in order: on_load, then per frame on_event* ->
    on_update -> on_draw, and on_unload when the window closes.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Build game objects. manifest is the folder's parsed manifest.yaml."""
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Advance one frame. frame.taps holds the taps since the last call."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Raw pygame events (keyboard shortcuts etc.); taps arrive via on_update."""
        ...

    def on_resize(self, size: tuple[int, int]) -> None:
        ...

    def on_unload(self) -> None:
        ...
