from __future__ import annotations
import logging
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class Scoreboard(Protocol):
    def submit(self, final_score: int) -> None:
        ...


class NullScoreboard:
    def submit(self, final_score: int) -> None:
        logger.debug("score %d not submitted (no scoreboard)", final_score)


class MemoryScoreboard:
    """Keeps the best score and a short history for the current session only."""

    def __init__(self, history_size: int = 10):
        if history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {history_size}")
        self.history_size = history_size
        self.history: List[int] = []
        self.best: Optional[int] = None
        self.games_played = 0

    def submit(self, final_score: int) -> None:
        self.games_played += 1
        self.history.append(final_score)
        del self.history[:-self.history_size]
        if self.best is None or final_score > self.best:
            self.best = final_score
            logger.info("new best score: %d", final_score)
