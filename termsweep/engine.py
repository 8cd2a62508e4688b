from __future__ import annotations
import operator
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Optional, Sequence

import numpy as np

from .errors import InvalidConfiguration

Coordinate = Tuple[int, int]

MINE_CHAR = '*'


class LabelKind(str, Enum):
    MINE = 'MINE'
    EMPTY = 'EMPTY'
    COUNT = 'COUNT'


@dataclass(frozen=True)
class CellLabel:
    """What a cell holds: a mine, nothing nearby, or a count of 1..8 neighbouring mines."""
    kind: LabelKind
    count: int = 0

    @classmethod
    def for_count(cls, count: int) -> CellLabel:
        return EMPTY if count == 0 else cls(LabelKind.COUNT, int(count))

    @property
    def is_mine(self) -> bool:
        return self.kind is LabelKind.MINE

    @property
    def is_empty(self) -> bool:
        return self.kind is LabelKind.EMPTY


MINE = CellLabel(LabelKind.MINE)
EMPTY = CellLabel(LabelKind.EMPTY)


def count_adjacent_mines(mines: np.ndarray, row: int, col: int) -> int:
    """Number of mines in the 8-neighbourhood of (row, col), clipped at the edges."""
    rows, cols = mines.shape
    window = mines[max(0, row - 1):min(rows, row + 2), max(0, col - 1):min(cols, col + 2)]
    return int(np.count_nonzero(window)) - int(bool(mines[row, col]))


def adjacency_counts(mines: np.ndarray) -> np.ndarray:
    rows, cols = mines.shape
    padded = np.pad(mines.astype(np.int8), 1)
    counts = np.zeros((rows, cols), dtype=np.int8)
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            counts += padded[1 + dr:1 + dr + rows, 1 + dc:1 + dc + cols]
    return counts


class Board:
    """Immutable square grid of mines and their adjacency counts.

    ``mines`` is a boolean array, ``counts`` the number of neighbouring mines for
    every cell (mine cells included, callers look at ``mines`` first). Both arrays
    are read-only once the board exists.
    """

    def __init__(self, mines: np.ndarray):
        mines = np.array(mines, dtype=bool)
        if mines.ndim != 2 or mines.shape[0] != mines.shape[1] or mines.shape[0] < 1:
            raise InvalidConfiguration(f'board must be a non-empty square grid, got shape {mines.shape}')
        counts = adjacency_counts(mines)
        mines.flags.writeable = False
        counts.flags.writeable = False
        self.mines = mines
        self.counts = counts
        self.size = mines.shape[0]
        self.num_mines = int(np.count_nonzero(mines))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        # Only '*' matters; every other character is a safe cell.
        if any(len(r) != len(rows) for r in rows):
            raise InvalidConfiguration('rows must form a square grid')
        return cls(np.array([[ch == MINE_CHAR for ch in r] for r in rows], dtype=bool))

    def label(self, row: int, col: int) -> CellLabel:
        if self.mines[row, col]:
            return MINE
        return CellLabel.for_count(self.counts[row, col])

    def labels(self) -> List[List[CellLabel]]:
        return [[self.label(r, c) for c in range(self.size)] for r in range(self.size)]


def generate(size: int, mines: int, rng: Optional[random.Random] = None) -> Board:
    """Build a size x size board with exactly ``mines`` mines placed uniformly at random.

    Cells are drawn from ``rng`` and redrawn on collision until enough distinct
    cells hold a mine. Without an explicit ``rng`` a fresh, OS-seeded one is used.
    """
    try:
        size = operator.index(size)
        mines = operator.index(mines)
    except TypeError:
        raise InvalidConfiguration(f'grid size and mine count must be integers, got {size!r}, {mines!r}') from None
    if size < 1 or mines < 0 or mines >= size * size:
        raise InvalidConfiguration(
            f'invalid grid size or number of mines: size={size}, mines={mines} '
            f'(need size >= 1 and 0 <= mines < {max(size, 0) ** 2})'
        )
    rng = rng if rng is not None else random.Random()
    grid = np.zeros((size, size), dtype=bool)
    placed = 0
    while placed < mines:
        row = rng.randrange(size)
        col = rng.randrange(size)
        if not grid[row, col]:
            grid[row, col] = True
            placed += 1
    return Board(grid)


class RevealOutcome(str, Enum):
    IGNORED = 'IGNORED'    # out of bounds or already revealed
    FLAGGED = 'FLAGGED'
    REVEALED = 'REVEALED'
    EXPLODED = 'EXPLODED'
    WON = 'WON'


class Minefield:
    """A board plus the player's revealed and flagged masks."""

    def __init__(self, board: Board):
        self.board = board
        self.size = board.size
        self.num_mines = board.num_mines
        self.revealed = np.zeros((self.size, self.size), dtype=bool)
        self.flagged = np.zeros((self.size, self.size), dtype=bool)
        self.moves = 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        coords = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self.in_bounds(nr, nc):
                    coords.append((nr, nc))
        return coords

    def label(self, row: int, col: int) -> CellLabel:
        return self.board.label(row, col)

    def is_revealed(self, row: int, col: int) -> bool:
        return bool(self.revealed[row, col])

    def is_flagged(self, row: int, col: int) -> bool:
        return bool(self.flagged[row, col])

    def reveal(self, row: int, col: int) -> RevealOutcome:
        if not self.in_bounds(row, col) or self.revealed[row, col]:
            return RevealOutcome.IGNORED
        if self.flagged[row, col]:
            return RevealOutcome.FLAGGED
        self.revealed[row, col] = True
        self.moves += 1
        if self.board.mines[row, col]:
            return RevealOutcome.EXPLODED
        if self.board.counts[row, col] == 0:
            self._flood_fill(row, col)
        if self.is_cleared():
            return RevealOutcome.WON
        return RevealOutcome.REVEALED

    def _flood_fill(self, row: int, col: int) -> None:
        # Mines and flagged cells are never opened here; flags stay in place.
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            for nr, nc in self.neighbors(r, c):
                if self.revealed[nr, nc] or self.flagged[nr, nc] or self.board.mines[nr, nc]:
                    continue
                self.revealed[nr, nc] = True
                if self.board.counts[nr, nc] == 0:
                    stack.append((nr, nc))

    def toggle_flag(self, row: int, col: int) -> Optional[bool]:
        """Flip the flag on a hidden cell and return its new value, or None if not flaggable."""
        if not self.in_bounds(row, col) or self.revealed[row, col]:
            return None
        self.flagged[row, col] = not self.flagged[row, col]
        return bool(self.flagged[row, col])

    def is_cleared(self) -> bool:
        return self.safe_cells_remaining == 0

    @property
    def revealed_count(self) -> int:
        return int(np.count_nonzero(self.revealed))

    @property
    def safe_cells_remaining(self) -> int:
        return int(np.count_nonzero(~self.board.mines & ~self.revealed))

    @property
    def flags_placed(self) -> int:
        return int(np.count_nonzero(self.flagged))

    @property
    def mines_remaining(self) -> int:
        return self.num_mines - self.flags_placed
