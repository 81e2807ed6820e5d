"""
Command line entry point.

Usage:
    sweeper [--width W] [--height H] [--mine-percent P] [--seed N]
            [--exact-mines] [--mode {keys,commands}] [--emoji] [--debug]
"""
import argparse
import logging
from typing import List, Optional

import numpy as np

from .game.board import BoardConfig, DEFAULT
from .game.engine import Engine
from .terminal.session import BaseSession, CommandSession, KeyboardSession


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sweeper",
        description="Minesweeper in the terminal - flag every mine to win",
    )
    parser.add_argument(
        "--width", type=int, default=DEFAULT.width, help="Number of columns"
    )
    parser.add_argument(
        "--height", type=int, default=DEFAULT.height, help="Number of rows"
    )
    parser.add_argument(
        "--mine-percent",
        type=int,
        default=DEFAULT.mine_percent,
        help="Target mine density in percent",
    )
    parser.add_argument(
        "--exact-mines",
        action="store_true",
        help="Place exactly the target number of mines",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the mine layout"
    )
    parser.add_argument(
        "--mode",
        choices=["keys", "commands"],
        default="keys",
        help="Cursor keys, or typed 'f x y' / 'r x y' commands",
    )
    parser.add_argument(
        "--emoji", action="store_true", help="Draw counts as keycap emoji"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show the mine layout and debug logging",
    )
    return parser


def build_session(args: argparse.Namespace) -> BaseSession:
    """Create the engine and the session chosen on the command line."""
    config = BoardConfig(
        width=args.width,
        height=args.height,
        mine_percent=args.mine_percent,
        exact_mines=args.exact_mines,
    )
    engine = Engine(config, np.random.default_rng(args.seed))

    session_cls = KeyboardSession if args.mode == "keys" else CommandSession
    return session_cls(engine, debug=args.debug, emoji_numbers=args.emoji)


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run a session."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        session = build_session(args)
    except ValueError as err:
        parser.error(str(err))

    session.console.print("minesweeper time")
    session.run()


if __name__ == "__main__":
    main()
