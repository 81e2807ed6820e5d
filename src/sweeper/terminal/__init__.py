"""
Terminal front end.

Rendering, key decoding and the interactive session loops.
"""
from .keys import Action, Command, CommandError, decode_key, parse_command, read_key
from .render import render_board, render_debug, render_glyph
from .session import BaseSession, CommandSession, KeyboardSession, apply_command

__all__ = [
    "Action",
    "Command",
    "CommandError",
    "decode_key",
    "parse_command",
    "read_key",
    "render_board",
    "render_debug",
    "render_glyph",
    "BaseSession",
    "CommandSession",
    "KeyboardSession",
    "apply_command",
]
