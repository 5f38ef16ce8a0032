from __future__ import annotations
import pygame
from typing import List, Tuple

from clapster.api.config import EngineConfig
from clapster.api.frame_data import Point

_BTN_NAME = {1: "left", 2: "middle", 3: "right"}


class TapInput:
    """
    Collects taps between frames:
    - A left mouse button press or a finger touch-down counts as one tap.
    - Respects --mirror by converting window coords -> logical coords.
    - drain() hands this frame's taps to the game and starts a new batch.
    """

    def __init__(self, cfg: EngineConfig, buttons: Tuple[str, ...] = ("left",)):
        self.mirror = cfg.mirror
        self.buttons = buttons
        self._taps: List[Point] = []

    def _to_logical(self, x: float, y: float, w: int, h: int) -> Tuple[float, float]:
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> None:
        w, h = screen_size

        if event.type == pygame.MOUSEBUTTONDOWN:
            # touch screens also emit synthetic mouse events; FINGERDOWN covers those
            if getattr(event, "touch", False):
                return
            if _BTN_NAME.get(event.button) in self.buttons:
                self._taps.append(Point(*self._to_logical(*event.pos, w, h)))

        elif event.type == pygame.FINGERDOWN:
            # finger coords are normalized 0..1
            self._taps.append(
                Point(*self._to_logical(event.x * w, event.y * h, w, h)))

        # Defensive: if window loses focus, drop anything pending
        elif event.type == pygame.WINDOWFOCUSLOST:
            self._taps.clear()

    def drain(self) -> List[Point]:
        taps, self._taps = self._taps, []
        return taps
