"""
Unit tests for key decoding and typed command parsing.
"""
import os
from typing import Iterator, Tuple

import pytest
from sweeper.game import Board, BoardConfig
from sweeper.terminal.keys import (
    Action,
    Command,
    CommandError,
    DOWN,
    LEFT,
    RIGHT,
    UP,
    decode_key,
    parse_command,
    read_key,
    read_raw_key,
    read_windows_key,
)


@pytest.fixture
def board() -> Board:
    return Board(BoardConfig(8, 6, 0))


# ============================================================================
# Key Decoding Tests
# ============================================================================

class TestDecodeKey:
    """Test single key press decoding."""

    @pytest.mark.parametrize(
        "key, dx, dy",
        [
            (UP, 0, -1), (DOWN, 0, 1), (LEFT, -1, 0), (RIGHT, 1, 0),
            ("w", 0, -1), ("s", 0, 1), ("a", -1, 0), ("d", 1, 0),
            ("k", 0, -1), ("j", 0, 1), ("h", -1, 0), ("l", 1, 0),
        ],
    )
    def test_movement_keys(self, key: str, dx: int, dy: int) -> None:
        assert decode_key(key) == Command(Action.MOVE, dx, dy)

    @pytest.mark.parametrize(
        "key, action",
        [
            (" ", Action.REVEAL), ("\r", Action.REVEAL),
            ("f", Action.FLAG), ("r", Action.RESTART),
            ("q", Action.QUIT), ("\x1b", Action.QUIT), ("\x03", Action.QUIT),
        ],
    )
    def test_action_keys(self, key: str, action: Action) -> None:
        command = decode_key(key)
        assert command.action is action
        assert command.at_cursor is True

    def test_uppercase_letters_decode_like_lowercase(self) -> None:
        assert decode_key("F") == decode_key("f")
        assert decode_key("W") == decode_key("w")

    @pytest.mark.parametrize("key", ["x", "9", "\x1b[Z", "", "ff"])
    def test_unrecognized_keys_are_none(self, key: str) -> None:
        """Unknown input is a no-op, not an error."""
        assert decode_key(key) is None


# ============================================================================
# Command Parsing Tests
# ============================================================================

class TestParseCommand:
    """Test typed command parsing."""

    def test_flag_command(self, board: Board) -> None:
        assert parse_command("f 3 4\n", board) == Command(Action.FLAG, x=3, y=4)

    def test_other_verbs_reveal(self, board: Board) -> None:
        assert parse_command("r 0 5", board) == Command(Action.REVEAL, x=0, y=5)
        assert parse_command("c 7 0", board).action is Action.REVEAL

    def test_explicit_cell_is_not_cursor(self, board: Board) -> None:
        assert parse_command("f 1 1", board).at_cursor is False

    def test_lone_q_quits_and_lone_r_restarts(self, board: Board) -> None:
        assert parse_command("q", board).action is Action.QUIT
        assert parse_command(" R \n", board).action is Action.RESTART

    @pytest.mark.parametrize("line", ["", "f", "f 1", "f 1 2 3", "hello"])
    def test_bad_token_count(self, board: Board, line: str) -> None:
        with pytest.raises(CommandError, match="bad number of tokens"):
            parse_command(line, board)

    def test_non_integer_coordinates(self, board: Board) -> None:
        with pytest.raises(CommandError, match="please type a number"):
            parse_command("f one 2", board)

    @pytest.mark.parametrize("line", ["f 8 0", "r 0 6", "r -1 2"])
    def test_out_of_bounds_coordinates(self, board: Board, line: str) -> None:
        """Off-board coordinates are reported, never passed on."""
        with pytest.raises(CommandError, match="off the board"):
            parse_command(line, board)

    def test_command_error_is_value_error(self, board: Board) -> None:
        with pytest.raises(ValueError):
            parse_command("f", board)


# ============================================================================
# Raw Key Reading Tests
# ============================================================================

@pytest.fixture
def raw_pty() -> Iterator[Tuple[int, int]]:
    """Pseudo-terminal pair whose slave end is already in raw mode."""
    tty = pytest.importorskip("tty")
    master, slave = os.openpty()
    tty.setraw(slave)
    yield master, slave
    os.close(master)
    os.close(slave)


@pytest.mark.skipif(os.name == "nt", reason="needs a POSIX terminal")
class TestReadKey:
    """Test reading key presses from a real terminal device."""

    @pytest.mark.parametrize(
        "sequence, dx, dy",
        [(UP, 0, -1), (DOWN, 0, 1), (LEFT, -1, 0), (RIGHT, 1, 0)],
    )
    def test_arrow_sequence_decodes_to_move(
        self, raw_pty: Tuple[int, int], sequence: str, dx: int, dy: int
    ) -> None:
        """The whole escape sequence is read as one key."""
        master, slave = raw_pty
        os.write(master, sequence.encode())
        key = read_key(slave)
        assert key == sequence
        assert decode_key(key) == Command(Action.MOVE, dx, dy)

    def test_lone_escape_quits(self, raw_pty: Tuple[int, int]) -> None:
        master, slave = raw_pty
        os.write(master, b"\x1b")
        key = read_key(slave)
        assert key == "\x1b"
        assert decode_key(key).action is Action.QUIT

    def test_keys_are_read_one_at_a_time(self, raw_pty: Tuple[int, int]) -> None:
        """Typed-ahead keys stay queued for the next read."""
        master, slave = raw_pty
        os.write(master, b"fq")
        assert read_raw_key(slave) == "f"
        assert read_raw_key(slave) == "q"

    def test_arrow_after_letter(self, raw_pty: Tuple[int, int]) -> None:
        master, slave = raw_pty
        os.write(master, ("w" + DOWN).encode())
        assert read_raw_key(slave) == "w"
        assert read_raw_key(slave) == DOWN

    def test_terminal_settings_are_restored(
        self, raw_pty: Tuple[int, int]
    ) -> None:
        termios = pytest.importorskip("termios")
        master, slave = raw_pty
        before = termios.tcgetattr(slave)
        os.write(master, b" ")
        assert read_key(slave) == " "
        assert termios.tcgetattr(slave) == before


class TestReadWindowsKey:
    """Test the Windows console scan-code translation with a stub getwch."""

    @staticmethod
    def getwch(*keys: str):
        return iter(keys).__next__

    @pytest.mark.parametrize("prefix", ["\x00", "\xe0"])
    @pytest.mark.parametrize(
        "scan_code, expected",
        [("H", UP), ("P", DOWN), ("K", LEFT), ("M", RIGHT)],
    )
    def test_arrow_scan_codes(
        self, prefix: str, scan_code: str, expected: str
    ) -> None:
        key = read_windows_key(self.getwch(prefix, scan_code))
        assert key == expected
        assert decode_key(key).action is Action.MOVE

    def test_unknown_scan_code_is_ignored(self) -> None:
        """F-keys and the like decode to nothing."""
        key = read_windows_key(self.getwch("\x00", ";"))
        assert key == ""
        assert decode_key(key) is None

    def test_plain_key_passes_through(self) -> None:
        assert read_windows_key(self.getwch("f")) == "f"
        assert read_windows_key(self.getwch("\x1b")) == "\x1b"
