from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

SIZE = 9
BOX = 3

Board = List[List[int]]  # 0 = empty, values 1..9
Cell = Tuple[int, int]   # (row, col), 0-based


class PuzzleFormatError(ValueError):
    """Raised when a puzzle string cannot be read as an 81-cell board."""


def empty_board() -> Board:
    return [[0] * SIZE for _ in range(SIZE)]


def clone_board(board: Board) -> Board:
    return [row[:] for row in board]


def box_origin(r: int, c: int) -> Cell:
    return (r // BOX) * BOX, (c // BOX) * BOX


def check_board_shape(board: Board) -> Tuple[bool, str]:
    """
    Checks:
      - board is 9 x 9
      - values are integers in 0..9
    Conflicts between placed digits are not checked here (see engine.validate).
    """
    if len(board) != SIZE or any(len(row) != SIZE for row in board):
        return False, "Board must be 9 x 9."

    for r in range(SIZE):
        for c in range(SIZE):
            v = board[r][c]
            if not isinstance(v, int) or isinstance(v, bool):
                return False, f"Invalid value at ({r+1},{c+1}): {v!r} (not an integer)."
            if v < 0 or v > SIZE:
                return False, f"Invalid value at ({r+1},{c+1}): {v} (allowed: 0..{SIZE})."
    return True, "OK"


def parse_puzzle(text: str) -> Board:
    """
    Read an 81-character puzzle string into a board.
    '.' or '0' is an empty cell, '1'..'9' a given digit. Whitespace is ignored
    so grids pasted one row per line also parse.
    """
    chars = [ch for ch in text if not ch.isspace()]
    if len(chars) != SIZE * SIZE:
        raise PuzzleFormatError(f"Puzzle must have {SIZE * SIZE} cells, got {len(chars)}.")

    board = empty_board()
    for i, ch in enumerate(chars):
        if ch == ".":
            continue
        if ch not in "0123456789":
            raise PuzzleFormatError(f"Invalid character {ch!r} at position {i+1}.")
        board[i // SIZE][i % SIZE] = int(ch)
    return board


def format_puzzle(board: Board) -> str:
    return "".join(str(v) for row in board for v in row)


@dataclass
class Puzzle:
    board: Board
    givens: List[List[bool]] = field(default_factory=list)  # True where prefilled
    label: str = ""

    def __post_init__(self) -> None:
        if not self.givens:
            self.givens = [[v != 0 for v in row] for row in self.board]

    @staticmethod
    def from_string(text: str, label: str = "") -> "Puzzle":
        return Puzzle(board=parse_puzzle(text), label=label)

    def is_given(self, r: int, c: int) -> bool:
        return self.givens[r][c]

    def to_string(self) -> str:
        return format_puzzle(self.board)
