import math
import pygame
from typing import Tuple


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    surface.blit(font.render(text, True, color), pos)


def draw_text_centered(surface: pygame.Surface, text: str, center: Tuple[int, int], color=(230, 230, 230), size=24):
    font = pygame.font.SysFont(None, size)
    img = font.render(text, True, color)
    surface.blit(img, img.get_rect(center=center))


def draw_progress_ring(surface: pygame.Surface, center: Tuple[float, float], radius: float, pct: float,
                       color=(235, 235, 235), width: int = 2):
    """Arc starting at the top, sweeping pct (0..1) of a full turn."""
    pct = max(0.0, min(1.0, pct))
    if pct <= 0:
        return
    cx, cy = center
    rect = pygame.Rect(cx - radius, cy - radius, radius * 2, radius * 2)
    start_angle = 0.5 * math.pi
    end_angle = start_angle + 2 * math.pi * pct
    pygame.draw.arc(surface, color, rect, start_angle, end_angle, width)
