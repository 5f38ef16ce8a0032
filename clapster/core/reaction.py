"""
Reaction engine: the authoritative state machine for one player's game.

    Idle -> Active -> Over -> Idle
              ^        |
              +--------+  (start again from the game-over screen)

While Active, two repeating timers run on the injected Scheduler:

  spawn  every tier.spawn_interval   -> spawn(now)
  tick   every tick_interval          -> tick(now), ends the game on a miss

Both are cancelled and re-created when the tier goes up, and cancelled
whenever the game leaves Active. Listeners get (event, GameState) after
every mutation; the scoreboard gets the final score on every game over.
"""
from __future__ import annotations
import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

from .difficulty import DifficultyTable, DifficultyTier
from .random_source import RandomSource
from .scheduler import Scheduler, TimerHandle
from .scoreboard import NullScoreboard, Scoreboard
from .spawner import DEFAULT_TARGET_SIZE, TargetSpawner
from .state import GameOverReason, GameState, Phase
from .target import Target

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.1          # seconds between expiry checks
DEFAULT_BOUNDS = (390.0, 700.0)      # playfield until the host reports its size

Listener = Callable[[str, GameState], None]


class ReactionEngine:
    def __init__(
        self,
        tiers: Optional[DifficultyTable] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.monotonic,
        bounds: Tuple[float, float] = DEFAULT_BOUNDS,
        target_size: float = DEFAULT_TARGET_SIZE,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        scoreboard: Optional[Scoreboard] = None,
    ):
        self.tiers = tiers if tiers is not None else DifficultyTable()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.rng = rng if rng is not None else RandomSource()
        self.clock = clock
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be > 0, got {tick_interval}")
        self.tick_interval = tick_interval
        self.scoreboard: Scoreboard = scoreboard if scoreboard is not None else NullScoreboard()
        self.spawner = TargetSpawner(self.rng, bounds, margin=target_size)

        self.phase = Phase.Idle
        self.score = 0
        self.tier_index = 0
        self.game_over_reason = GameOverReason.none
        # insertion ordered: later spawns draw on top
        self.targets: Dict[str, Target] = {}

        self._listeners: List[Listener] = []
        self._spawn_timer: Optional[TimerHandle] = None
        self._tick_timer: Optional[TimerHandle] = None

    # ------------- observation -------------
    @property
    def current_tier(self) -> DifficultyTier:
        return self.tiers[self.tier_index]

    @property
    def state(self) -> GameState:
        return GameState(
            phase=self.phase,
            score=self.score,
            current_tier_index=self.tier_index,
            tier_name=self.current_tier.name,
            active_targets=tuple(self.targets.values()),
            game_over_reason=self.game_over_reason,
            max_tier_reached=self.tier_index >= self.tiers.max_index,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception:
                logger.exception("listener %r failed on %s", listener, event)

    # ------------- inbound -------------
    def start(self) -> None:
        self._stop_timers()
        self.phase = Phase.Active
        self.score = 0
        self.tier_index = 0
        self.game_over_reason = GameOverReason.none
        self.targets.clear()
        self._start_timers(self.clock())
        logger.info("game started (tier %s)", self.current_tier.name)
        self._emit("start")

    def go_to_menu(self) -> None:
        self._stop_timers()
        self.phase = Phase.Idle
        self.score = 0
        self.tier_index = 0
        self.game_over_reason = GameOverReason.none
        self.targets.clear()
        logger.info("back to menu")
        self._emit("menu")

    def update_playfield_bounds(self, width: float, height: float) -> None:
        self.spawner.set_bounds(width, height)
        self._emit("bounds")

    def tap(self, target_id: str) -> bool:
        """Returns True if the tap hit a live target."""
        if self.phase is not Phase.Active:
            return False
        if self.targets.pop(target_id, None) is None:
            # already expired or removed; tap lost the race
            return False

        self.score += 1
        new_index = max(self.tier_index, self.tiers.tier_for_score(self.score))
        if new_index > self.tier_index:
            self.tier_index = new_index
            self._start_timers(self.clock())
            logger.info("tier up: %s at score %d",
                        self.current_tier.name, self.score)
            self._emit("tap")
            self._emit("tier_change")
        else:
            self._emit("tap")
        return True

    def tap_outside(self) -> None:
        if self.phase is Phase.Active:
            self._end(GameOverReason.tapped_outside)

    # ------------- timer-driven -------------
    def advance(self, now: Optional[float] = None) -> int:
        """Run due timers. Hosts call this once per frame."""
        return self.scheduler.run_due(self.clock() if now is None else now)

    def tick(self, now: float) -> bool:
        """Ends the game if any target outlived its lifetime. True on a miss."""
        if self.phase is not Phase.Active:
            return False
        for t in self.targets.values():
            if t.is_expired(now):
                logger.info("missed target %s (age %.2fs > %.2fs)",
                            t.id, t.age(now), t.time_to_live)
                self._end(GameOverReason.missed_target)
                return True
        return False

    def spawn(self, now: float) -> List[Target]:
        if self.phase is not Phase.Active:
            return []
        new = self.spawner.spawn(self.current_tier, now)
        for t in new:
            self.targets[t.id] = t
        logger.debug("spawned %d target(s), %d active",
                     len(new), len(self.targets))
        self._emit("spawn")
        return new

    # ------------- helpers -------------
    def _end(self, reason: GameOverReason) -> None:
        self._stop_timers()
        self.phase = Phase.Over
        self.game_over_reason = reason
        logger.info("game over: %s, score %d", reason.name, self.score)
        self._emit("game_over")
        try:
            self.scoreboard.submit(self.score)
        except Exception:
            logger.exception("score submission failed")

    def _start_timers(self, now: float) -> None:
        self._stop_timers()
        tier = self.current_tier
        self._spawn_timer = self.scheduler.call_every(
            tier.spawn_interval, self.spawn, now, name="spawn")
        self._tick_timer = self.scheduler.call_every(
            self.tick_interval, self.tick, now, name="tick")

    def _stop_timers(self) -> None:
        if self._spawn_timer is not None:
            self._spawn_timer.cancel()
            self._spawn_timer = None
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None
