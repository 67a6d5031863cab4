from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

import streamlit as st

from sudoku_board.engine import solve_in_background, validate
from sudoku_board.models import BOX, SIZE, Board, Cell, Puzzle, check_board_shape, format_puzzle
from sudoku_board.presets import PresetCycler
from sudoku_board.storage import (
    load_presets,
    resolve_log_level,
    resolve_presets_path,
    resolve_solve_timeout,
)

logging.basicConfig(
    level=resolve_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("sudoku_board.app")

PRESETS_PATH = resolve_presets_path()


@st.cache_data(show_spinner=False)
def _load_presets_cached(path: str) -> List[str]:
    return load_presets(path)


def cell_key(r: int, c: int) -> str:
    return f"cell_{r}_{c}"


def no_givens() -> List[List[bool]]:
    return [[False] * SIZE for _ in range(SIZE)]


# -----------------------------
# Session state helpers
# -----------------------------

def set_board(board: Board, givens: Optional[List[List[bool]]] = None) -> None:
    for r in range(SIZE):
        for c in range(SIZE):
            v = board[r][c]
            st.session_state[cell_key(r, c)] = str(v) if v else ""
    if givens is not None:
        st.session_state.givens = givens


def set_status(text: str, kind: str = "info") -> None:
    st.session_state.status = (text, kind)


def load_puzzle(puzzle: Puzzle) -> None:
    set_board(puzzle.board, puzzle.givens)
    st.session_state.solution = None
    set_status(f"Puzzle loaded {puzzle.label}")


def parse_board() -> Tuple[Board, List[str]]:
    """
    Read cell widget values from session_state and build an int board.
    Returns (board, errors). Empty string or '0' => 0.
    """
    errors: List[str] = []
    board: Board = [[0] * SIZE for _ in range(SIZE)]

    for r in range(SIZE):
        for c in range(SIZE):
            raw = str(st.session_state.get(cell_key(r, c), "")).strip()
            if raw in ("", "0", "."):
                continue
            if len(raw) != 1 or raw not in "123456789":
                errors.append(f"Cell ({r+1},{c+1}) must be a digit 1..9, got '{raw}'")
                continue
            board[r][c] = int(raw)

    return board, errors


def read_board() -> Optional[Board]:
    """Parsed board ready for the engine, or None after reporting why not."""
    board, errors = parse_board()
    if errors:
        set_status("; ".join(errors), "error")
        return None
    ok, msg = check_board_shape(board)
    if not ok:
        set_status(msg, "error")
        return None
    return board


# -----------------------------
# Actions (run as callbacks, before widgets are rebuilt)
# -----------------------------

def on_next_puzzle() -> None:
    cycler = PresetCycler(_load_presets_cached(PRESETS_PATH), st.session_state.preset_index)
    puzzle = cycler.advance()
    st.session_state.preset_index = cycler.index
    load_puzzle(puzzle)
    st.toast(f"Loaded puzzle {puzzle.label}")


def on_clear() -> None:
    set_board([[0] * SIZE for _ in range(SIZE)], no_givens())
    st.session_state.solution = None
    set_status("Cleared")


def on_validate() -> None:
    board = read_board()
    if board is None:
        return
    result = validate(board)
    if result.ok:
        set_status("Board valid", "ok")
    else:
        set_status("Conflicts found", "error")


def on_solve() -> None:
    board = read_board()
    if board is None:
        return
    if not validate(board).ok:
        set_status("Conflicts found", "error")
        st.toast("Fix conflicts first")
        return

    result = solve_in_background(board, timeout=resolve_solve_timeout())
    log.info("solve %s in %.2f ms", result.status, result.elapsed_ms)
    if result.solved:
        set_board(result.board)
        st.session_state.solution = format_puzzle(result.board)
        set_status(f"Solved in {result.elapsed_ms:.2f} ms", "ok")
        st.toast("Solved!")
    elif result.status == "timeout":
        set_status(f"Gave up after {result.elapsed_ms / 1000:.1f} s", "error")
        st.toast("Solver timed out")
    else:
        # result.board is the untouched snapshot; the inputs were never changed
        set_status("Unsolvable", "error")
        st.toast("No solution found")


# -----------------------------
# Rendering
# -----------------------------

def render_board_html(board: Board, givens: List[List[bool]], conflicts: Set[Cell], title: str) -> None:
    """
    Render the grid with thick box borders; givens bold, conflicts red.
    """
    html = [f"<div class='sudoku-wrap'><div class='sudoku-title'>{title}</div>"]
    html.append("<table class='sudoku'>")
    for r in range(SIZE):
        html.append("<tr>")
        for c in range(SIZE):
            v = board[r][c]
            cls = []
            if r % BOX == 0:
                cls.append("top")
            if c % BOX == 0:
                cls.append("left")
            if (r + 1) % BOX == 0:
                cls.append("bottom")
            if (c + 1) % BOX == 0:
                cls.append("right")
            if givens[r][c]:
                cls.append("given")
            if (r, c) in conflicts:
                cls.append("invalid")
            cls_attr = f" class='{' '.join(cls)}'" if cls else ""
            disp = "" if v == 0 else str(v)
            html.append(f"<td{cls_attr}>{disp}</td>")
        html.append("</tr>")
    html.append("</table></div>")

    st.markdown("".join(html), unsafe_allow_html=True)


def render_status() -> None:
    text, kind = st.session_state.status
    if kind == "error":
        st.error(text)
    elif kind == "ok":
        st.success(text)
    else:
        st.info(text)


st.set_page_config(page_title="Sudoku Board", layout="wide")

st.markdown(
    """
<style>
div[data-testid="stTextInput"] input {
    text-align: center;
    font-size: 22px !important;
    height: 2.8rem;
    padding: 0.25rem 0.25rem;
}
div[data-testid="stTextInput"] { margin-bottom: 0rem; }

.sudoku-wrap { margin-top: 0.5rem; }
.sudoku-title { font-size: 1.05rem; font-weight: 600; margin: 0.5rem 0 0.35rem 0; }
table.sudoku { border-collapse: collapse; }
table.sudoku td {
    width: 2.8rem;
    height: 2.8rem;
    text-align: center;
    vertical-align: middle;
    font-size: 22px;
    border: 1px solid rgba(49, 51, 63, 0.25);
}
table.sudoku td.top { border-top: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.left { border-left: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.bottom { border-bottom: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.right { border-right: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.given { font-weight: 700; }
table.sudoku td.invalid { background: rgba(239, 68, 68, 0.25); color: rgb(185, 28, 28); }

.sudoku-spacer { height: 0.25rem; }
</style>
""",
    unsafe_allow_html=True,
)

st.title("Sudoku Board")
st.caption("Type digits 1..9 (blank = empty). **Validate** highlights conflicts, **Solve** fills the rest.")

if "preset_index" not in st.session_state:
    st.session_state.preset_index = 0
    load_puzzle(PresetCycler(_load_presets_cached(PRESETS_PATH)).current())

# ---- Sidebar controls ----
with st.sidebar:
    st.header("Puzzles")
    st.button("Next puzzle", on_click=on_next_puzzle, use_container_width=True)
    st.button("Clear board", on_click=on_clear, use_container_width=True)
    st.divider()
    st.caption(f"Presets: `{PRESETS_PATH}`")

givens = st.session_state.givens

# ---- Input grid in a form (prevents rerun on every keystroke) ----
with st.form("sudoku_form", clear_on_submit=False):
    spacer_w = 0.18
    widths = []
    for g in range(BOX):
        widths.extend([1.0] * BOX)
        if g != BOX - 1:
            widths.append(spacer_w)

    for r in range(SIZE):
        cols = st.columns(widths, gap="small")
        col_idx = 0
        for c in range(SIZE):
            if c > 0 and c % BOX == 0:
                col_idx += 1  # skip spacer column
            with cols[col_idx]:
                st.text_input(
                    label=f"r{r+1}c{c+1}",
                    key=cell_key(r, c),
                    label_visibility="collapsed",
                    max_chars=1,
                    disabled=givens[r][c],
                )
            col_idx += 1

        if (r + 1) % BOX == 0 and (r + 1) != SIZE:
            st.markdown("<div class='sudoku-spacer'></div>", unsafe_allow_html=True)

    colA, colB, _ = st.columns([1, 1, 2])
    colA.form_submit_button("Validate", on_click=on_validate, use_container_width=True)
    colB.form_submit_button("Solve", on_click=on_solve, use_container_width=True)

render_status()

board, parse_errors = parse_board()
if parse_errors:
    st.write("\n".join([f"- {e}" for e in parse_errors]))
else:
    render_board_html(board, givens, validate(board).conflicts, "Current board")

if st.session_state.solution:
    st.download_button(
        "Download solution as puzzle string",
        data=(st.session_state.solution + "\n").encode("utf-8"),
        file_name="sudoku_solution.txt",
        mime="text/plain",
    )
