from __future__ import annotations
import logging
import pygame

from clapster.api.config import EngineConfig
from clapster.api.frame_data import FrameData
from clapster.app.context import Context
from clapster.app.loader import game_root_for, load_game_manifest, load_game_module
from clapster.input.tap_input import TapInput

logger = logging.getLogger(__name__)

BACKGROUND = (12, 14, 18)


def _seconds() -> float:
    return pygame.time.get_ticks() / 1000.0


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    mirror: bool = False,
    debug: bool = False,
    seed: int | None = None,
    tick_interval: float | None = None,
    sound: bool = True,
    fps: int = 60,
):
    # load game before opening a window so config errors surface cleanly
    game_root = game_root_for(game_id)
    manifest = load_game_manifest(game_root)
    module = load_game_module(game_root)
    game = module.get_game()

    pygame.init()
    pygame.display.set_caption(f"Clapster - {manifest.get('name', game_id)}")
    screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    cfg = EngineConfig(
        screen_size=screen_size,
        mirror=mirror,
        debug=debug,
        seed=seed,
        tick_interval=tick_interval,
        sound=sound,
    )

    input_layer = TapInput(cfg)

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not mirror else pygame.Surface(
        screen_size).convert()

    ctx = Context(
        screen=render_surface,
        cfg=cfg,
        resources={"game_root": game_root},
        screen_size=screen_size,
        clock=_seconds,
    )

    game.on_load(ctx, manifest)
    logger.info("loaded game %s (%dx%d)", game_id, *screen_size)

    running = True
    try:
        while running:
            dt = clock.tick(fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    screen_size = (event.w, event.h)
                    ctx.screen_size = screen_size
                    screen = pygame.display.get_surface()
                    render_surface = screen if not mirror else pygame.Surface(
                        screen_size).convert()
                    ctx.screen = render_surface
                    game.on_resize(screen_size)
                input_layer.handle_pygame_event(event, screen_size)
                game.on_event(event)

            frame_data = FrameData(timestamp=_seconds(),
                                   taps=input_layer.drain())

            # ---- draw to render_surface ----
            render_surface.fill(BACKGROUND)
            game.on_update(dt, frame_data)
            game.on_draw(render_surface)

            # ---- present to window ----
            if mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        game.on_unload()
        pygame.quit()
