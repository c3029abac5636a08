"""
main.py — Bootstrap

1. Load tuning
2. Load the map → World (exit 1 if it does not validate)
3. Create the app, push the world scene
4. Run

    python main.py                  # maps/demo.map
    python main.py --level cave.map
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path

from core import tuning
from core.loader import load_world
from core.validate import MapValidationError
from components import DevLog

MAPS_DIR = Path(__file__).resolve().parent / "maps"
DEFAULT_LEVEL = "demo.map"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid adventure on a text map.")
    parser.add_argument(
        "--level",
        default=DEFAULT_LEVEL,
        help=f"map file name under maps/ (default: {DEFAULT_LEVEL})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    tuning.load()

    log = DevLog()
    try:
        world = load_world(MAPS_DIR / args.level, log=log)
    except MapValidationError as exc:
        print(f"[MAP] {args.level} rejected at stage '{exc.stage}':")
        for msg in exc.messages:
            print(f"[MAP]   {msg}")
        return 1
    for entry in log.entries:
        if entry["level"] == "warning":
            print(f"[MAP] warning: {entry['msg']}")

    # Imported late so map checking works without a display
    from core.app import App
    from scenes.world_scene import WorldScene

    app = App(title=f"Adventure: {args.level}")
    app.push_scene(WorldScene(world))
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
