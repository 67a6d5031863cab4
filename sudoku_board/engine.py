from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from .models import BOX, SIZE, Board, Cell, clone_board, box_origin

log = logging.getLogger(__name__)

StopFlag = Callable[[], bool]


class SolveCancelled(RuntimeError):
    """Raised from solve() when its stop flag is set mid-search."""


# -----------------------------
# Constraint checking
# -----------------------------

def is_safe(board: Board, row: int, col: int, digit: int) -> bool:
    """
    True if no other cell in the row, column or 3x3 box of (row, col) holds digit.
    The value currently at (row, col) is not looked at.
    """
    for j in range(SIZE):
        if j != col and board[row][j] == digit:
            return False
    for i in range(SIZE):
        if i != row and board[i][col] == digit:
            return False
    br, bc = box_origin(row, col)
    for i in range(br, br + BOX):
        for j in range(bc, bc + BOX):
            if (i, j) != (row, col) and board[i][j] == digit:
                return False
    return True


@dataclass
class Validation:
    ok: bool
    conflicts: Set[Cell] = field(default_factory=set)

    def __bool__(self) -> bool:
        return self.ok


def check_cell(board: Board, row: int, col: int) -> Optional[bool]:
    """Live check for one cell: None if empty, else whether its digit fits."""
    v = board[row][col]
    if v == 0:
        return None
    board[row][col] = 0  # blank so the cell can't clash with itself
    try:
        return is_safe(board, row, col, v)
    finally:
        board[row][col] = v


def validate(board: Board) -> Validation:
    conflicts: Set[Cell] = set()
    for r in range(SIZE):
        for c in range(SIZE):
            if check_cell(board, r, c) is False:
                conflicts.add((r, c))
    return Validation(ok=not conflicts, conflicts=conflicts)


# -----------------------------
# Backtracking search
# -----------------------------

def find_empty(board: Board) -> Optional[Cell]:
    for r in range(SIZE):
        for c in range(SIZE):
            if board[r][c] == 0:
                return r, c
    return None


def solve(board: Board, should_stop: Optional[StopFlag] = None) -> bool:
    """
    Fill board in place by depth-first backtracking.
    Empty cells are taken in row-major order and digits tried 1..9, so the
    first solution in that order wins. Returns False if none exists; board
    contents are then unspecified, snapshot first if they matter.
    Givens that already clash fail up front, before any search.
    """
    if not validate(board).ok:
        log.debug("solve refused: givens conflict")
        return False

    steps = [0]

    def dfs() -> bool:
        if should_stop is not None and should_stop():
            raise SolveCancelled(f"stopped after {steps[0]} placements")

        pos = find_empty(board)
        if pos is None:
            return True  # solved
        r, c = pos

        for d in range(1, SIZE + 1):
            if not is_safe(board, r, c, d):
                continue
            board[r][c] = d
            steps[0] += 1
            if dfs():
                return True
            board[r][c] = 0  # backtrack
        return False

    ok = dfs()
    log.debug("solve finished: solved=%s placements=%d", ok, steps[0])
    return ok


@dataclass
class SolveResult:
    status: str  # "solved" | "unsolvable" | "timeout"
    board: Board
    elapsed_ms: float

    @property
    def solved(self) -> bool:
        return self.status == "solved"


def solve_in_background(board: Board, timeout: Optional[float] = None) -> SolveResult:
    """
    Run solve() on a worker thread against a private copy of board.
    If it has not finished after `timeout` seconds the worker is told to stop
    and the result is "timeout". The caller's board is never touched.
    """
    work = clone_board(board)
    stop = threading.Event()
    outcome: List[bool] = []
    errors: List[BaseException] = []

    def run() -> None:
        try:
            outcome.append(solve(work, should_stop=stop.is_set))
        except SolveCancelled:
            pass
        except Exception as e:  # re-raised on the calling thread
            errors.append(e)

    t0 = time.perf_counter()
    worker = threading.Thread(target=run, name="sudoku-solver", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        stop.set()
        worker.join()
    elapsed_ms = (time.perf_counter() - t0) * 1000.0

    if errors:
        raise errors[0]
    if not outcome:
        log.info("solve timed out after %.2f ms", elapsed_ms)
        return SolveResult(status="timeout", board=clone_board(board), elapsed_ms=elapsed_ms)
    if outcome[0]:
        return SolveResult(status="solved", board=work, elapsed_ms=elapsed_ms)
    return SolveResult(status="unsolvable", board=clone_board(board), elapsed_ms=elapsed_ms)
