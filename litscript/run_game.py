#!/usr/bin/env python3
"""``lit``: load a compiled LitScript game and print a summary of it."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from litscript.errors import LitError, LitIOError
from litscript.game import Game, game_to_dict, load_game
from litscript.renderer import SoftwareRenderer


def _load(path: Path) -> Game:
    try:
        data_file = path.open("rb")
    except OSError as exc:
        raise LitIOError(exc) from exc
    with data_file:
        return load_game(data_file, SoftwareRenderer())


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lit",
        description=(
            "Load a compiled LitScript game with the software renderer, "
            "simulate a number of frames and print a JSON summary."
        ),
    )
    parser.add_argument("data_file", help="Path to the compiled bytecode file.")
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of frames to simulate; every material is loaded each frame.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        game = _load(Path(args.data_file))
        for _ in range(max(args.frames, 0)):
            for res_id in game.resources.material_ids():
                game.get_resource(res_id)
            game.end_frame()
    except LitError as exc:
        print(f"A fatal error occurred: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(game_to_dict(game), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
