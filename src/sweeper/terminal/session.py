"""
Interactive sessions: the read, apply, redraw loop.

Two front ends share one loop: keyboard play with a cursor, and typed
``f x y`` / ``r x y`` commands.
"""
import logging
from abc import ABC, abstractmethod
from functools import partial
from typing import Callable, Optional

from rich.console import Console

from ..game.engine import Engine, RoundOutcome
from .keys import Action, Command, CommandError, decode_key, parse_command, read_key
from .render import render_board, render_debug

logger = logging.getLogger(__name__)

LOST_PROMPT = "Game over! Try again? [y/n]: "
WON_PROMPT = "You won! Play again? [y/n]: "


def apply_command(engine: Engine, command: Command) -> RoundOutcome:
    """
    Run exactly one engine operation for a command.

    QUIT is handled by the session loop and never reaches here.
    """
    if command.action is Action.MOVE:
        return engine.move_cursor(command.dx, command.dy)
    if command.action is Action.REVEAL:
        if command.at_cursor:
            return engine.reveal_at_cursor()
        return engine.reveal(command.x, command.y)
    if command.action is Action.FLAG:
        if command.at_cursor:
            return engine.flag_at_cursor()
        return engine.flag(command.x, command.y)
    if command.action is Action.RESTART:
        engine.restart()
        return RoundOutcome.CONTINUE
    raise ValueError(f"Cannot apply {command.action.name} to the engine")


# ============================================================================
# Base Session
# ============================================================================

class BaseSession(ABC):
    """
    Abstract play loop.

    Subclasses supply commands and the answer to the play-again prompt;
    the loop draws, applies and decides when the session ends.
    """

    def __init__(
        self,
        engine: Engine,
        console: Optional[Console] = None,
        debug: bool = False,
        emoji_numbers: bool = False,
    ) -> None:
        """
        Initialize the session.

        Args:
            engine: Engine to drive.
            console: Where to draw (default: a new rich Console).
            debug: Print the full mine layout above the board.
            emoji_numbers: Draw counts as keycap emoji.
        """
        self.engine = engine
        self.console = console or Console()
        self.debug = debug
        self.emoji_numbers = emoji_numbers

    @abstractmethod
    def next_command(self) -> Optional[Command]:
        """
        Wait for the next input event.

        Returns:
            The decoded command, or None for input that means nothing.
        """

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question and return True for yes."""

    def draw(self, show_mines: bool = False) -> None:
        if self.debug:
            self.console.print(render_debug(self.engine.board), markup=False)
        self.console.print(
            render_board(self.engine, show_mines, self.emoji_numbers)
        )

    def run(self) -> Optional[RoundOutcome]:
        """
        Play until the player quits or declines another game.

        Returns:
            Outcome of the last finished game, or None if the player quit.
        """
        while True:
            self.draw()
            command = self.next_command()
            if command is None:
                continue
            if command.action is Action.QUIT:
                logger.debug("Player quit")
                return None

            outcome = apply_command(self.engine, command)
            if not outcome.is_over:
                continue

            self.draw(show_mines=outcome is RoundOutcome.LOST)
            prompt = LOST_PROMPT if outcome is RoundOutcome.LOST else WON_PROMPT
            if not self.confirm(prompt):
                return outcome
            self.engine.restart()


# ============================================================================
# Keyboard Session
# ============================================================================

class KeyboardSession(BaseSession):
    """Cursor-driven play reading single key presses."""

    def __init__(
        self,
        engine: Engine,
        console: Optional[Console] = None,
        read: Callable[[], str] = read_key,
        debug: bool = False,
        emoji_numbers: bool = False,
    ) -> None:
        super().__init__(engine, console, debug, emoji_numbers)
        self.read = read

    def draw(self, show_mines: bool = False) -> None:
        self.console.clear()
        super().draw(show_mines)
        self.console.print(
            "arrows/wasd/hjkl move, space reveal, f flag, r restart, q quit",
            style="dim",
        )

    def next_command(self) -> Optional[Command]:
        return decode_key(self.read())

    def confirm(self, prompt: str) -> bool:
        self.console.print(prompt, end="", markup=False)
        answer = self.read()
        self.console.print()
        return answer.lower() == "y"


# ============================================================================
# Command Session
# ============================================================================

class CommandSession(BaseSession):
    """Play by typing ``f x y`` to flag or ``r x y`` to reveal."""

    def __init__(
        self,
        engine: Engine,
        console: Optional[Console] = None,
        read: Optional[Callable[[str], str]] = None,
        debug: bool = False,
        emoji_numbers: bool = False,
    ) -> None:
        super().__init__(engine, console, debug, emoji_numbers)
        self.read = read or partial(self.console.input, markup=False)

    def next_command(self) -> Optional[Command]:
        line = self.read("Command: ")
        try:
            return parse_command(line, self.engine.board)
        except CommandError as err:
            self.console.print(str(err), style="red", markup=False)
            return None

    def confirm(self, prompt: str) -> bool:
        return self.read(prompt).strip().lower() == "y"
