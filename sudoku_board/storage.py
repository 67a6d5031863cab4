from __future__ import annotations

import json
import logging
import os
from typing import List, Optional, Sequence

from .models import PuzzleFormatError, format_puzzle, parse_puzzle
from .presets import PUZZLES

log = logging.getLogger(__name__)

DEFAULT_SOLVE_TIMEOUT = 10.0


def default_presets_path() -> str:
    # Repo-local by default (works well for Streamlit Community Cloud too).
    return os.path.join(".", "data", "presets.json")


def resolve_presets_path() -> str:
    return os.environ.get("SUDOKU_PRESETS", default_presets_path())


def resolve_solve_timeout() -> float:
    raw = os.environ.get("SUDOKU_SOLVE_TIMEOUT", "")
    if not raw:
        return DEFAULT_SOLVE_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        log.warning("ignoring SUDOKU_SOLVE_TIMEOUT=%r (not a number)", raw)
        return DEFAULT_SOLVE_TIMEOUT
    return value if value > 0 else DEFAULT_SOLVE_TIMEOUT


def resolve_log_level() -> str:
    name = os.environ.get("SUDOKU_LOG_LEVEL", "INFO").upper()
    # getLevelName maps known names to ints, anything else to "Level X"
    if not isinstance(logging.getLevelName(name), int):
        log.warning("ignoring SUDOKU_LOG_LEVEL=%r (unknown level)", name)
        return "INFO"
    return name


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)


def load_presets(path: Optional[str] = None) -> List[str]:
    """
    Built-in puzzles followed by the ones found in the presets file.
    Entries that don't parse are skipped with a warning.
    """
    p = path or resolve_presets_path()
    puzzles = list(PUZZLES)
    if not os.path.exists(p):
        return puzzles
    with open(p, "r", encoding="utf-8") as f:
        raw = json.load(f)

    extra = 0
    for i, text in enumerate(raw.get("puzzles", [])):
        try:
            normalized = format_puzzle(parse_puzzle(str(text)))
        except PuzzleFormatError as e:
            log.warning("skipping preset %d in %s: %s", i + 1, p, e)
            continue
        if normalized not in puzzles:
            puzzles.append(normalized)
            extra += 1
    log.info("loaded %d extra preset(s) from %s", extra, p)
    return puzzles


def save_presets(puzzles: Sequence[str], path: Optional[str] = None) -> None:
    p = path or resolve_presets_path()
    ensure_parent_dir(p)
    with open(p, "w", encoding="utf-8") as f:
        json.dump({"puzzles": list(puzzles)}, f, ensure_ascii=False, indent=2)
