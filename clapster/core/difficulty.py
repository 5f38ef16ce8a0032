from __future__ import annotations
from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class DifficultyTier:
    name: str
    target_lifetime: float      # seconds a target stays reactable
    spawn_interval: float       # seconds between spawn events
    multi_spawn_chance: float   # 0..1, only used when max_targets_per_spawn > 1
    max_targets_per_spawn: int
    score_threshold: int        # score needed to reach this tier
    color: Color = (230, 230, 230)


DEFAULT_TIERS: List[DifficultyTier] = [
    DifficultyTier("Beginner",    2.0, 2.0, 0.0, 1, 0,   (230, 230, 230)),
    DifficultyTier("Easy",        1.8, 1.8, 0.0, 1, 5,   (60, 200, 90)),
    DifficultyTier("Medium",      1.6, 1.6, 0.1, 1, 15,  (70, 130, 255)),
    DifficultyTier("Challenging", 1.4, 1.5, 0.2, 2, 25,  (0, 128, 0)),
    DifficultyTier("Hard",        1.2, 1.3, 0.3, 2, 40,  (255, 150, 30)),
    DifficultyTier("Very Hard",   1.0, 1.1, 0.4, 2, 60,  (255, 153, 0)),
    DifficultyTier("Expert",      0.9, 1.0, 0.5, 3, 85,  (240, 60, 60)),
    DifficultyTier("Master",      0.8, 0.9, 0.6, 3, 110, (170, 80, 220)),
    DifficultyTier("Legendary",   0.7, 0.8, 0.7, 3, 140, (255, 214, 0)),
]


class DifficultyTable:
    """
    Ordered, immutable sequence of tiers sorted by score threshold.

    Tier 0 must start at threshold 0 and thresholds must strictly increase,
    so every score >= 0 maps to exactly one tier.
    """

    def __init__(self, tiers: Iterable[DifficultyTier] = DEFAULT_TIERS):
        self._tiers: Tuple[DifficultyTier, ...] = tuple(tiers)
        _validate(self._tiers)
        self._thresholds = [t.score_threshold for t in self._tiers]

    def __len__(self) -> int:
        return len(self._tiers)

    def __getitem__(self, index: int) -> DifficultyTier:
        return self._tiers[index]

    def __iter__(self):
        return iter(self._tiers)

    @property
    def max_index(self) -> int:
        return len(self._tiers) - 1

    def tier_for_score(self, score: int) -> int:
        """Highest tier index whose threshold is <= score."""
        return max(0, bisect_right(self._thresholds, score) - 1)

    @classmethod
    def from_manifest(cls, manifest: dict) -> "DifficultyTable":
        """Build from a manifest's optional `tiers:` list, else the defaults."""
        raw = (manifest or {}).get("tiers")
        if not raw:
            return cls(DEFAULT_TIERS)
        return cls(tier_from_dict(entry) for entry in raw)


def tier_from_dict(entry: dict[str, Any]) -> DifficultyTier:
    try:
        color = tuple(int(c) for c in entry.get("color", (230, 230, 230)))
        return DifficultyTier(
            name=str(entry["name"]),
            target_lifetime=float(entry["target_lifetime"]),
            spawn_interval=float(entry["spawn_interval"]),
            multi_spawn_chance=float(entry.get("multi_spawn_chance", 0.0)),
            max_targets_per_spawn=int(entry.get("max_targets_per_spawn", 1)),
            score_threshold=int(entry["score_threshold"]),
            color=color,  # type: ignore[arg-type]
        )
    except KeyError as e:
        raise ValueError(f"Tier entry missing field {e.args[0]!r}: {entry}") from e
    except (TypeError, ValueError) as e:
        raise ValueError(f"Tier entry has a bad value ({e}): {entry}") from e


def _validate(tiers: Sequence[DifficultyTier]) -> None:
    if not tiers:
        raise ValueError("Difficulty table needs at least one tier")
    if tiers[0].score_threshold != 0:
        raise ValueError(
            f"First tier {tiers[0].name!r} must have score_threshold 0")

    prev = None
    for t in tiers:
        if t.target_lifetime <= 0:
            raise ValueError(f"Tier {t.name!r}: target_lifetime must be > 0")
        if t.spawn_interval <= 0:
            raise ValueError(f"Tier {t.name!r}: spawn_interval must be > 0")
        if not 0.0 <= t.multi_spawn_chance <= 1.0:
            raise ValueError(
                f"Tier {t.name!r}: multi_spawn_chance must be within [0, 1]")
        if t.max_targets_per_spawn < 1:
            raise ValueError(
                f"Tier {t.name!r}: max_targets_per_spawn must be >= 1")
        if prev is not None and t.score_threshold <= prev.score_threshold:
            raise ValueError(
                f"Tier {t.name!r}: score_threshold must be greater than "
                f"{prev.name!r} ({prev.score_threshold})")
        prev = t
