"""Headless tests for the clap game plugin driving the reaction engine."""

from __future__ import annotations

import pygame
import pytest

from clapster.api.config import EngineConfig
from clapster.api.frame_data import FrameData, Point
from clapster.app.context import Context
from clapster.app.loader import game_root_for, load_game_manifest, load_game_module
from clapster.core import GameOverReason, Phase
from conftest import FakeClock

pytestmark = pytest.mark.unit

SIZE = (400, 800)


@pytest.fixture
def module():
    return load_game_module(game_root_for("clap"))


@pytest.fixture
def game(module, clock):
    manifest = load_game_manifest(game_root_for("clap"))
    cfg = EngineConfig(screen_size=SIZE, seed=21, sound=False)
    ctx = Context(screen=None, cfg=cfg, resources={}, screen_size=SIZE, clock=clock)
    g = module.get_game()
    g.on_load(ctx, manifest)
    return g


def _frame(clock: FakeClock, *taps) -> FrameData:
    return FrameData(timestamp=clock.now, taps=[Point(x, y) for x, y in taps])


def _screen_pos(module, target):
    return target.x, target.y + module.SCORE_CARD_HEIGHT


class TestStartScreen:
    def test_loads_idle_with_sound_off(self, game):
        assert game.engine.phase is Phase.Idle
        assert game.sound.enabled is False

    def test_any_tap_starts(self, game, clock):
        game.on_update(16, _frame(clock, (5, 5)))
        assert game.engine.phase is Phase.Active

    def test_no_tap_stays_idle(self, game, clock):
        game.on_update(16, _frame(clock))
        assert game.engine.phase is Phase.Idle

    def test_space_starts(self, game):
        game.on_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
        assert game.engine.phase is Phase.Active


class TestPlaying:
    def test_playfield_excludes_score_card(self, game, module):
        assert game.engine.spawner.bounds == (400.0, 800.0 - module.SCORE_CARD_HEIGHT)

    def test_tapping_a_target_scores(self, game, module, clock):
        game.engine.start()
        t = game.engine.spawn(clock.now)[0]
        game.on_update(16, _frame(clock, _screen_pos(module, t)))
        assert game.engine.state.score == 1
        assert game.engine.state.active_targets == ()

    def test_tap_on_empty_playfield_ends_game(self, game, clock):
        game.engine.start()
        game.on_update(16, _frame(clock, (200, 500)))
        state = game.engine.state
        assert state.is_over
        assert state.game_over_reason is GameOverReason.tapped_outside
        assert game.scoreboard.best == 0

    def test_tap_on_score_card_is_ignored(self, game, clock):
        game.engine.start()
        game.on_update(16, _frame(clock, (200, 30)))
        assert game.engine.phase is Phase.Active

    def test_frames_drive_spawn_and_miss(self, game, clock):
        game.engine.start()
        spawned = False
        while clock.now < 10.0 and game.engine.phase is Phase.Active:
            clock.advance(0.05)
            game.on_update(50, _frame(clock))
            spawned = spawned or bool(game.engine.state.active_targets)
        assert spawned
        assert game.engine.state.game_over_reason is GameOverReason.missed_target
        assert game.scoreboard.games_played == 1

    def test_tier_change_sets_flash(self, game, module, clock):
        game.engine.start()
        for _ in range(5):
            t = game.engine.spawn(clock.now)[0]
            game.on_update(16, _frame(clock, _screen_pos(module, t)))
        assert game.engine.state.current_tier_index == 1
        assert game.tier_flash_until == pytest.approx(clock.now + module.TIER_FLASH_SEC)

    def test_resize_updates_bounds_and_buttons(self, game, module):
        game.on_resize((600, 1000))
        assert game.engine.spawner.bounds == (600.0, 1000.0 - module.SCORE_CARD_HEIGHT)
        assert game.play_rect.centerx == 300


class TestGameOverScreen:
    def _lose(self, game, clock):
        game.engine.start()
        game.on_update(16, _frame(clock, (200, 500)))
        assert game.engine.phase is Phase.Over

    def test_play_again_button(self, game, clock):
        self._lose(game, clock)
        game.on_update(16, _frame(clock, game.play_rect.center))
        assert game.engine.phase is Phase.Active

    def test_menu_button(self, game, clock):
        self._lose(game, clock)
        game.on_update(16, _frame(clock, game.menu_rect.center))
        assert game.engine.phase is Phase.Idle

    def test_tap_elsewhere_stays_over(self, game, clock):
        self._lose(game, clock)
        game.on_update(16, _frame(clock, (1, 1)))
        assert game.engine.phase is Phase.Over

    def test_m_key_returns_to_menu(self, game, clock):
        self._lose(game, clock)
        game.on_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_m))
        assert game.engine.phase is Phase.Idle


def test_cli_tick_interval_overrides_manifest(module, clock):
    cfg = EngineConfig(screen_size=SIZE, sound=False, tick_interval=0.25)
    ctx = Context(screen=None, cfg=cfg, resources={}, screen_size=SIZE, clock=clock)
    g = module.get_game()
    g.on_load(ctx, {"options": {"tick_interval": 0.5}})
    assert g.engine.tick_interval == 0.25


def test_zero_cli_tick_interval_is_not_treated_as_unset(module, clock):
    cfg = EngineConfig(screen_size=SIZE, sound=False, tick_interval=0)
    ctx = Context(screen=None, cfg=cfg, resources={}, screen_size=SIZE, clock=clock)
    g = module.get_game()
    with pytest.raises(ValueError, match="tick_interval"):
        g.on_load(ctx, {"options": {"tick_interval": 0.5}})


def test_negative_manifest_tick_interval_fails_at_load(module, clock):
    cfg = EngineConfig(screen_size=SIZE, sound=False)
    ctx = Context(screen=None, cfg=cfg, resources={}, screen_size=SIZE, clock=clock)
    g = module.get_game()
    with pytest.raises(ValueError, match="tick_interval"):
        g.on_load(ctx, {"options": {"tick_interval": -1}})


def test_unload_stops_timers(game):
    game.engine.start()
    game.on_unload()
    assert game.engine.scheduler.active_count == 0
