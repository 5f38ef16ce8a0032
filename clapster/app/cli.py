import argparse
import logging
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

from clapster.app.loop import run_game


def parse_screen(value: str) -> tuple[int, int]:
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"screen size must be positive, got {value!r}")
    return w, h


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clapster reaction game")
    parser.add_argument("--game", default="clap", help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default="480x800", help="Screen size WxH, e.g. 480x800")
    parser.add_argument("--mirror", action="store_true", help="Mirror the game window horizontally")
    parser.add_argument("--debug", action="store_true", help="Show target ids and timers on screen")
    parser.add_argument("--seed", type=int, default=None, help="Seed for repeatable target placement")
    parser.add_argument("--tick-interval", type=float, default=None,
                        help="Seconds between missed-target checks (overrides manifest)")
    parser.add_argument("--mute", action="store_true", help="Disable the tap sound")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run_game(
        game_id=args.game,
        screen_size=args.screen,
        mirror=args.mirror,
        debug=args.debug,
        seed=args.seed,
        tick_interval=args.tick_interval,
        sound=not args.mute,
    )


if __name__ == "__main__":
    main()
