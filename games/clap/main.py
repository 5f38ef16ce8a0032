from __future__ import annotations
import time
import pygame
from pathlib import Path

from clapster.api import Game, FrameData
from clapster.app.context import Context
from clapster.audio.sound import SoundManager
from clapster.core import (
    DifficultyTable,
    GameState,
    MemoryScoreboard,
    Phase,
    RandomSource,
    ReactionEngine,
    hit_test,
)
from clapster.core.reaction import DEFAULT_TICK_INTERVAL
from clapster.render.shapes import draw_progress_ring, draw_text, draw_text_centered

# Layout
SCORE_CARD_HEIGHT = 100            # px reserved at the top for score + tier
BUTTON_WIDTH = 260
BUTTON_HEIGHT = 64
BUTTON_GAP = 20

# Gameplay
TARGET_SIZE = 50                   # px; hit circle diameter and edge margin
TIER_FLASH_SEC = 0.5               # tier label highlight after a tier change

# UX
HUD_COLOR = (230, 230, 230)
DIM_COLOR = (150, 150, 160)
GAME_OVER_COLOR = (240, 70, 70)
GOLD_COLOR = (255, 214, 0)
BUTTON_COLOR = (230, 230, 230)
RING_COLOR = (235, 235, 235)

HUD_FONT_SIZE = 28
BIG_FONT_SIZE = 56


class ClapGame(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        options = manifest.get("options", {}) or {}

        self.target_size = float(options.get("target_size", TARGET_SIZE))
        tick_interval = ctx.cfg.tick_interval
        if tick_interval is None:
            tick_interval = float(options.get("tick_interval", DEFAULT_TICK_INTERVAL))
        self.clock = ctx.clock or time.monotonic

        self.scoreboard = MemoryScoreboard()
        self.engine = ReactionEngine(
            tiers=DifficultyTable.from_manifest(manifest),
            rng=RandomSource(seed=ctx.cfg.seed),
            clock=self.clock,
            bounds=self._playfield_bounds(ctx.screen_size),
            target_size=self.target_size,
            tick_interval=tick_interval,
            scoreboard=self.scoreboard,
        )
        self.engine.subscribe(self._on_engine_event)

        sound_file = options.get("sound_file")
        game_root = ctx.resources.get("game_root")
        self.sound = SoundManager(
            enabled=bool(ctx.cfg.sound and options.get("sound", True)),
            sound_file=Path(game_root) / sound_file if (sound_file and game_root) else None,
        )

        self.now = self.clock()
        self.tier_flash_until = 0.0
        self._layout_buttons(ctx.screen_size)

    # ------------- helpers -------------
    @staticmethod
    def _playfield_bounds(size) -> tuple[float, float]:
        w, h = size
        return float(w), float(max(0, h - SCORE_CARD_HEIGHT))

    def _layout_buttons(self, size):
        w, h = size
        x = (w - BUTTON_WIDTH) // 2
        y = h // 2 + 60
        self.play_rect = pygame.Rect(x, y, BUTTON_WIDTH, BUTTON_HEIGHT)
        self.menu_rect = pygame.Rect(
            x, y + BUTTON_HEIGHT + BUTTON_GAP, BUTTON_WIDTH, BUTTON_HEIGHT)

    def _on_engine_event(self, event: str, state: GameState) -> None:
        if event == "tier_change":
            self.tier_flash_until = self.clock() + TIER_FLASH_SEC

    def _handle_play_tap(self, x: float, y: float) -> None:
        py = y - SCORE_CARD_HEIGHT
        if py < 0:
            return  # score card is not part of the playfield
        hit = hit_test(self.engine.targets.values(), x, py, self.target_size / 2)
        if hit is not None:
            self.engine.tap(hit.id)
            self.sound.play()
        else:
            self.engine.tap_outside()

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        self.now = frame.timestamp
        phase = self.engine.phase

        if phase is Phase.Idle:
            if frame.taps:
                self.engine.start()
            return

        if phase is Phase.Over:
            for p in frame.taps:
                if self.play_rect.collidepoint(p.x, p.y):
                    self.engine.start()
                    return
                if self.menu_rect.collidepoint(p.x, p.y):
                    self.engine.go_to_menu()
                    return
            return

        # --------- playing ---------
        # taps first: a tap landing in the same frame as expiry still counts
        for p in frame.taps:
            self._handle_play_tap(p.x, p.y)
            if self.engine.phase is not Phase.Active:
                return
        self.engine.advance(self.now)

    def on_draw(self, surface: pygame.Surface) -> None:
        state = self.engine.state
        if state.phase is Phase.Idle:
            self._draw_start_screen(surface)
        elif state.phase is Phase.Over:
            self._draw_game_over(surface, state)
        else:
            self._draw_score_card(surface, state)
            self._draw_targets(surface, state)

    def _draw_score_card(self, surface, state: GameState) -> None:
        w, _ = self.ctx.screen_size
        tier = self.engine.tiers[state.current_tier_index]
        draw_text(surface, f"Score: {state.score}", (20, 20), HUD_COLOR, size=HUD_FONT_SIZE)
        flashing = self.now < self.tier_flash_until
        size = HUD_FONT_SIZE + (8 if flashing else 0)
        draw_text(surface, tier.name, (20, 56), tier.color, size=size)
        pygame.draw.line(surface, DIM_COLOR, (0, SCORE_CARD_HEIGHT - 1),
                         (w, SCORE_CARD_HEIGHT - 1), 1)

    def _draw_targets(self, surface, state: GameState) -> None:
        r = self.target_size / 2
        for t in state.active_targets:
            center = (int(t.x), int(t.y + SCORE_CARD_HEIGHT))
            pygame.draw.circle(surface, t.color, center, int(r))
            # lifetime ring (countdown)
            draw_progress_ring(surface, center, r + 6,
                               t.remaining_fraction(self.now), RING_COLOR, 2)
            if self.ctx.cfg.debug:
                draw_text(surface, t.id[:4], (center[0] - 12, center[1] + int(r) + 4),
                          DIM_COLOR, size=16)

    def _draw_start_screen(self, surface) -> None:
        w, h = self.ctx.screen_size
        draw_text_centered(surface, "Clapster", (w // 2, h // 3), HUD_COLOR, size=BIG_FONT_SIZE)
        draw_text_centered(surface, "Tap the hands before they vanish",
                           (w // 2, h // 3 + 50), DIM_COLOR, size=24)
        draw_text_centered(surface, "Tap anywhere to start", (w // 2, h // 2 + 40),
                           HUD_COLOR, size=HUD_FONT_SIZE)
        best = self.scoreboard.best
        if best is not None:
            draw_text_centered(surface, f"Best: {best}", (w // 2, h // 2 + 80),
                               DIM_COLOR, size=24)

    def _draw_game_over(self, surface, state: GameState) -> None:
        w, h = self.ctx.screen_size
        cx = w // 2
        draw_text_centered(surface, "Game Over", (cx, h // 5), GAME_OVER_COLOR, size=BIG_FONT_SIZE)
        draw_text_centered(surface, state.game_over_reason.message,
                           (cx, h // 5 + 50), DIM_COLOR, size=26)
        draw_text_centered(surface, f"Score: {state.score}  ({state.tier_name})",
                           (cx, h // 5 + 100), HUD_COLOR, size=HUD_FONT_SIZE)
        if self.scoreboard.best is not None:
            draw_text_centered(surface, f"Best: {self.scoreboard.best}",
                               (cx, h // 5 + 136), DIM_COLOR, size=24)
        if state.max_tier_reached:
            draw_text_centered(surface, "Maximum difficulty reached!",
                               (cx, h // 5 + 170), GOLD_COLOR, size=24)

        pygame.draw.rect(surface, BUTTON_COLOR, self.play_rect, width=3)
        draw_text_centered(surface, "Play Again", self.play_rect.center, BUTTON_COLOR, size=26)
        pygame.draw.rect(surface, BUTTON_COLOR, self.menu_rect, width=3)
        draw_text_centered(surface, "Menu", self.menu_rect.center, BUTTON_COLOR, size=26)

    def on_event(self, event: pygame.event.Event) -> None:
        # Keyboard fallback: space/enter starts, M/backspace returns to menu
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_SPACE, pygame.K_RETURN):
            if self.engine.phase is not Phase.Active:
                self.engine.start()
        elif event.key in (pygame.K_m, pygame.K_BACKSPACE):
            self.engine.go_to_menu()

    def on_resize(self, size) -> None:
        self.ctx.screen_size = size
        self.engine.update_playfield_bounds(*self._playfield_bounds(size))
        self._layout_buttons(size)

    def on_unload(self) -> None:
        self.engine.go_to_menu()


def get_game():
    return ClapGame()
