from __future__ import annotations
from typing import List, Tuple

from .difficulty import DifficultyTier
from .random_source import RandomSource
from .target import TARGET_COLORS, Target

DEFAULT_TARGET_SIZE = 50.0   # px; also the edge margin so targets stay fully visible


class TargetSpawner:
    """Creates randomly placed targets for one spawn event."""

    def __init__(self, rng: RandomSource, bounds: Tuple[float, float], margin: float = DEFAULT_TARGET_SIZE):
        self.rng = rng
        self.bounds = bounds
        self.margin = margin

    def set_bounds(self, width: float, height: float) -> None:
        self.bounds = (float(width), float(height))

    def count_for(self, tier: DifficultyTier) -> int:
        if tier.max_targets_per_spawn > 1 and self.rng.chance() < tier.multi_spawn_chance:
            return self.rng.randint(2, tier.max_targets_per_spawn)
        return 1

    def random_position(self) -> Tuple[float, float]:
        w, h = self.bounds
        m = self.margin
        x = self.rng.uniform(m, max(m, w - m))
        y = self.rng.uniform(m, max(m, h - m))
        return x, y

    def spawn(self, tier: DifficultyTier, now: float) -> List[Target]:
        out: List[Target] = []
        for _ in range(self.count_for(tier)):
            x, y = self.random_position()
            out.append(Target(
                id=self.rng.new_id(),
                x=x,
                y=y,
                created_at=now,
                time_to_live=tier.target_lifetime,
                color=self.rng.choice(TARGET_COLORS),
            ))
        return out
