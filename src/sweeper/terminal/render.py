"""
Rendering for the terminal front end.

Turns engine state into rich ``Text`` for display. Nothing here mutates
the engine.
"""
from typing import Optional

from rich.text import Text

from ..game.board import Board
from ..game.cell import Cell, CellState
from ..game.engine import Engine

HIDDEN_GLYPH = "🔲"
FLAG_GLYPH = "⛳"
MINE_GLYPH = "💣"

# Background of the cursor's row and column, and of the cursor cell itself
CROSSHAIR_STYLE = "on color(240)"
CURSOR_STYLE = "on color(242)"


def count_glyph(count: int, emoji_numbers: bool = False) -> str:
    """Two-column token for a revealed count, blank for zero."""
    if count == 0:
        return "  "
    if emoji_numbers:
        return f"{count}\ufe0f\u20e3"
    return f"{count} "


def render_glyph(
    cell: Cell, show_mines: bool = False, emoji_numbers: bool = False
) -> str:
    """
    Pick the display token for one cell.

    Args:
        cell: Cell to draw.
        show_mines: Draw unrevealed mines as mines (end of game view).
        emoji_numbers: Use keycap emoji for counts instead of digits.

    Returns:
        A token two terminal columns wide.
    """
    if cell.state == CellState.REVEALED or (show_mines and cell.is_mine):
        if cell.is_mine:
            return MINE_GLYPH
        return count_glyph(cell.adjacent_mines, emoji_numbers)
    if cell.state == CellState.FLAGGED:
        return FLAG_GLYPH
    return HIDDEN_GLYPH


def _cell_style(engine: Engine, x: int, y: int) -> Optional[str]:
    cursor = engine.cursor
    if x == cursor.x and y == cursor.y:
        return CURSOR_STYLE
    if x == cursor.x or y == cursor.y:
        return CROSSHAIR_STYLE
    return None


def render_board(
    engine: Engine, show_mines: bool = False, emoji_numbers: bool = False
) -> Text:
    """Render the whole grid with the cursor crosshair highlighted."""
    text = Text()
    board = engine.board
    for y in range(board.height):
        for x in range(board.width):
            glyph = render_glyph(board.cell_at(x, y), show_mines, emoji_numbers)
            text.append(glyph, style=_cell_style(engine, x, y))
        text.append("\n")
    return text


def render_debug(board: Board) -> str:
    """
    Dump the full mine layout with axis labels.

    Every cell is shown regardless of state, mines as ``[*]`` and safe
    cells as their count.
    """
    header = "    " + "".join(f" {x:02} " for x in range(board.width))
    lines = [header]
    for y in range(board.height):
        row = f" {y:02} "
        for x in range(board.width):
            cell = board.cell_at(x, y)
            row += "[*] " if cell.is_mine else f"[{cell.adjacent_mines}] "
        lines.append(row)
    return "\n".join(lines)
