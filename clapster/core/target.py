from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

# Hand colors, picked at random per target
TARGET_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (70, 130, 255),   # blue
    (240, 60, 60),    # red
    (60, 200, 90),    # green
    (255, 150, 30),   # orange
    (170, 80, 220),   # purple
    (255, 120, 180),  # pink
    (250, 220, 50),   # yellow
)


@dataclass(frozen=True)
class Target:
    id: str
    x: float
    y: float
    created_at: float
    time_to_live: float
    color: Tuple[int, int, int] = TARGET_COLORS[0]

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float) -> bool:
        # strictly greater: a target is still valid exactly at its lifetime
        return now - self.created_at > self.time_to_live

    def remaining_fraction(self, now: float) -> float:
        left = self.time_to_live - (now - self.created_at)
        return max(0.0, min(1.0, left / self.time_to_live))


def hit_test(targets: Iterable[Target], x: float, y: float, radius: float) -> Optional[Target]:
    """Topmost (last spawned) target whose circle contains (x, y)."""
    r2 = radius * radius
    hit = None
    for t in targets:
        dx = x - t.x
        dy = y - t.y
        if dx * dx + dy * dy <= r2:
            hit = t
    return hit
