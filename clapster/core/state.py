from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .target import Target


class Phase(Enum):
    Idle = 1
    Active = 2
    Over = 3


class GameOverReason(Enum):
    none = ""
    missed_target = "You weren't quick enough!"
    tapped_outside = "You missed the target!"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot handed to listeners after every mutation."""
    phase: Phase
    score: int
    current_tier_index: int
    tier_name: str
    active_targets: Tuple[Target, ...]
    game_over_reason: GameOverReason = GameOverReason.none
    max_tier_reached: bool = False

    @property
    def is_active(self) -> bool:
        return self.phase is Phase.Active

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.Over

    def target_ids(self) -> Tuple[str, ...]:
        return tuple(t.id for t in self.active_targets)
