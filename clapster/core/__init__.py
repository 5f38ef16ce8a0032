from .difficulty import DEFAULT_TIERS, DifficultyTable, DifficultyTier
from .random_source import RandomSource
from .reaction import ReactionEngine
from .scheduler import Scheduler, TimerHandle
from .scoreboard import MemoryScoreboard, NullScoreboard, Scoreboard
from .spawner import TargetSpawner
from .state import GameOverReason, GameState, Phase
from .target import Target, hit_test

__all__ = [
    "DEFAULT_TIERS", "DifficultyTable", "DifficultyTier",
    "RandomSource", "ReactionEngine", "Scheduler", "TimerHandle",
    "MemoryScoreboard", "NullScoreboard", "Scoreboard", "TargetSpawner",
    "GameOverReason", "GameState", "Phase", "Target", "hit_test",
]
