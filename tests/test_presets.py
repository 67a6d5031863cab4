# tests/test_presets.py
import pytest

from sudoku_board.engine import validate
from sudoku_board.presets import PUZZLES, PresetCycler


def test_builtin_presets_are_valid():
    assert len(PUZZLES) == 4
    cycler = PresetCycler()
    for _ in range(len(cycler)):
        puzzle = cycler.current()
        assert validate(puzzle.board).ok
        cycler.advance()


def test_cycler_wraps():
    cycler = PresetCycler(PUZZLES[:2])
    assert cycler.current().label == "#1"
    assert cycler.advance().label == "#2"
    assert cycler.advance().to_string() == PUZZLES[0]
    assert cycler.index == 0


def test_cycler_index_is_normalized():
    assert PresetCycler(index=5).index == 1


def test_cycler_needs_puzzles():
    with pytest.raises(ValueError):
        PresetCycler([])
