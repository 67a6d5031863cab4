# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudoku_board" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku_board.models import empty_board, parse_puzzle  # noqa: E402

EASY = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
EASY_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


@pytest.fixture
def blank():
    return empty_board()


@pytest.fixture
def easy():
    return parse_puzzle(EASY)


@pytest.fixture
def solved():
    return parse_puzzle(EASY_SOLUTION)
