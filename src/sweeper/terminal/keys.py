"""
Input decoding for the terminal front end.

Keys and typed lines are turned into ``Command`` values; the sessions
apply them to the engine. Unknown keys decode to ``None`` and malformed
lines raise ``CommandError``.
"""
import os
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Optional

from ..game.board import Board

if os.name == "nt":
    import msvcrt
else:
    import select
    import termios
    import tty


# ============================================================================
# Commands
# ============================================================================

class Action(Enum):
    """What a command asks the engine to do."""

    MOVE = auto()
    REVEAL = auto()
    FLAG = auto()
    RESTART = auto()
    QUIT = auto()


@dataclass(frozen=True)
class Command:
    """
    One decoded input event.

    ``dx``/``dy`` are used by MOVE. ``x``/``y`` name an explicit cell for
    REVEAL and FLAG; when they are None the cursor cell is meant.
    """

    action: Action
    dx: int = 0
    dy: int = 0
    x: Optional[int] = None
    y: Optional[int] = None

    @property
    def at_cursor(self) -> bool:
        return self.x is None or self.y is None


class CommandError(ValueError):
    """A typed command could not be parsed."""


UP = "\x1b[A"
DOWN = "\x1b[B"
RIGHT = "\x1b[C"
LEFT = "\x1b[D"
ESCAPE = "\x1b"
CTRL_C = "\x03"

KEYMAP: Dict[str, Command] = {
    UP: Command(Action.MOVE, 0, -1),
    DOWN: Command(Action.MOVE, 0, 1),
    LEFT: Command(Action.MOVE, -1, 0),
    RIGHT: Command(Action.MOVE, 1, 0),
    "w": Command(Action.MOVE, 0, -1),
    "s": Command(Action.MOVE, 0, 1),
    "a": Command(Action.MOVE, -1, 0),
    "d": Command(Action.MOVE, 1, 0),
    "k": Command(Action.MOVE, 0, -1),
    "j": Command(Action.MOVE, 0, 1),
    "h": Command(Action.MOVE, -1, 0),
    "l": Command(Action.MOVE, 1, 0),
    " ": Command(Action.REVEAL),
    "\r": Command(Action.REVEAL),
    "\n": Command(Action.REVEAL),
    "f": Command(Action.FLAG),
    "r": Command(Action.RESTART),
    "q": Command(Action.QUIT),
    ESCAPE: Command(Action.QUIT),
    CTRL_C: Command(Action.QUIT),
}


def decode_key(key: str) -> Optional[Command]:
    """Map one key press to a command, or None if it means nothing."""
    if key in KEYMAP:
        return KEYMAP[key]
    return KEYMAP.get(key.lower()) if len(key) == 1 else None


def parse_command(line: str, board: Board) -> Command:
    """
    Parse a typed command such as ``f 3 4`` or ``r 0 0``.

    ``f x y`` flags, any other verb followed by two coordinates reveals.
    A lone ``q`` quits and a lone ``r`` restarts.

    Raises:
        CommandError: On a wrong token count, non-integer coordinates
            or coordinates outside the board.
    """
    tokens = line.split()
    if len(tokens) == 1 and tokens[0].lower() == "q":
        return Command(Action.QUIT)
    if len(tokens) == 1 and tokens[0].lower() == "r":
        return Command(Action.RESTART)
    if len(tokens) != 3:
        raise CommandError("bad number of tokens. try again")

    verb, raw_x, raw_y = tokens
    try:
        x, y = int(raw_x), int(raw_y)
    except ValueError:
        raise CommandError("please type a number") from None
    if not board.in_bounds(x, y):
        raise CommandError(
            f"({x}, {y}) is off the board; x must be below {board.width} "
            f"and y below {board.height}"
        )

    action = Action.FLAG if verb.lower() == "f" else Action.REVEAL
    return Command(action, x=x, y=y)


# ============================================================================
# Raw Key Reading
# ============================================================================

# Windows reports arrows as a prefix byte followed by a scan code
_WINDOWS_ARROWS = {"H": UP, "P": DOWN, "K": LEFT, "M": RIGHT}


def read_key(fd: Optional[int] = None) -> str:
    """
    Block until one key is pressed and return it.

    Arrow keys come back as their ANSI escape sequence on every
    platform, so ``decode_key`` only needs one table.

    Args:
        fd: Terminal to read from (default: standard input). Ignored on
            Windows, where the console is always used.
    """
    if os.name == "nt":
        return read_windows_key(msvcrt.getwch)

    if fd is None:
        fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        # TCSANOW keeps keys typed while the board was redrawing
        tty.setraw(fd, termios.TCSANOW)
        return read_raw_key(fd)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def read_raw_key(fd: int) -> str:
    """
    Read one key from a terminal already in raw mode.

    Bytes come straight from the descriptor so ``select`` sees exactly
    what is still unread.
    """
    data = os.read(fd, 1)
    # A bare escape has nothing queued behind it
    if data == ESCAPE.encode() and select.select([fd], [], [], 0.05)[0]:
        data += os.read(fd, 2)
    return data.decode("utf-8", errors="replace")


def read_windows_key(getwch: Callable[[], str]) -> str:
    """Read one key through ``msvcrt.getwch``, translating arrow scan codes."""
    key = getwch()
    if key in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(getwch(), "")
    return key
