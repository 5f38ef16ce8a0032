"""Shared fixtures: a controllable clock and a seeded engine."""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from clapster.core import (
    DifficultyTable,
    DifficultyTier,
    RandomSource,
    ReactionEngine,
    Scheduler,
)


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> float:
        self.now += dt
        return self.now


class RecordingScoreboard:
    def __init__(self) -> None:
        self.submitted: list[int] = []

    def submit(self, final_score: int) -> None:
        self.submitted.append(final_score)


def make_tier(name: str, threshold: int, lifetime: float = 2.0, interval: float = 1.0,
              multi: float = 0.0, max_per_spawn: int = 1) -> DifficultyTier:
    return DifficultyTier(
        name=name,
        target_lifetime=lifetime,
        spawn_interval=interval,
        multi_spawn_chance=multi,
        max_targets_per_spawn=max_per_spawn,
        score_threshold=threshold,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scoreboard() -> RecordingScoreboard:
    return RecordingScoreboard()


@pytest.fixture
def two_tiers() -> DifficultyTable:
    return DifficultyTable([
        make_tier("Slow", 0, lifetime=2.0, interval=1.0),
        make_tier("Fast", 5, lifetime=1.0, interval=0.5),
    ])


@pytest.fixture
def engine(clock, scoreboard, two_tiers) -> ReactionEngine:
    return ReactionEngine(
        tiers=two_tiers,
        scheduler=Scheduler(),
        rng=RandomSource(seed=1234),
        clock=clock,
        bounds=(400.0, 700.0),
        target_size=50.0,
        tick_interval=0.1,
        scoreboard=scoreboard,
    )
