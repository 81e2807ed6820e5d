"""
Terminal Minesweeper.

Flag every mine to win; reveal one and the game is over.
"""
__version__ = "0.1.0"
