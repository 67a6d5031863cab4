from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import Puzzle

log = logging.getLogger(__name__)

# 81 chars each, 0 = empty
PUZZLES: List[str] = [
    # Easy
    "530070000600195000098000060800060003400803001700020006060000280000419005000080079",
    # Medium
    "000260701680070090190004500820100040004602900050003028009300074040050036703018000",
    # Hard
    "005300000800000020070010500400005300010070006003200080060500009004000030000009700",
    # Very hard
    "000000907000420180000705026100904000050000040000507009920108000034059000507000000",
]


class PresetCycler:
    """Cycles through a fixed list of puzzle strings, wrapping at the end."""

    def __init__(self, puzzles: Optional[Sequence[str]] = None, index: int = 0) -> None:
        self.puzzles = list(puzzles) if puzzles is not None else list(PUZZLES)
        if not self.puzzles:
            raise ValueError("PresetCycler needs at least one puzzle")
        self.index = index % len(self.puzzles)

    def __len__(self) -> int:
        return len(self.puzzles)

    def current(self) -> Puzzle:
        return Puzzle.from_string(self.puzzles[self.index], label=f"#{self.index + 1}")

    def advance(self) -> Puzzle:
        self.index = (self.index + 1) % len(self.puzzles)
        log.debug("advanced to preset #%d", self.index + 1)
        return self.current()
