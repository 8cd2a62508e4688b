from __future__ import annotations
import random
import re
from enum import Enum
from typing import Optional

from .engine import Board, Coordinate, Minefield, RevealOutcome, generate
from .errors import (
    AlreadyRevealed,
    FlaggedCell,
    InvalidFormat,
    InvalidNumber,
    MoveRejected,
    OutOfBounds,
)

CURSOR_PROMPT = 'Arrows move, space reveals, f flags, ? for help.'
TEXT_PROMPT = 'Enter your move:'

BOOM_MESSAGE = 'BOOM! Game Over.'
WIN_MESSAGE = 'Congratulations! You won in {moves} moves.'
ALREADY_REVEALED_MESSAGE = 'Cell already revealed. Choose another.'
FLAGGED_MESSAGE = 'Cannot reveal flagged cell. Unflag it first.'
FLAG_REVEALED_MESSAGE = 'Cannot flag revealed cell.'

_INTEGER = re.compile(r'[+-]?[0-9]+')


class GameStatus(str, Enum):
    """Possible game states."""
    IN_PROGRESS = 'IN_PROGRESS'
    LOST = 'LOST'
    WON = 'WON'


def parse_coordinates(raw: str) -> Coordinate:
    """Parse ``"row,col"`` into a pair of ints. Bounds are not checked here."""
    parts = raw.split(',')
    if len(parts) != 2:
        raise InvalidFormat('Invalid input format. Use row,col (e.g., 0,1)')
    tokens = [p.strip() for p in parts]
    # plain ASCII decimal only: no underscores, no other scripts' digits
    if not all(_INTEGER.fullmatch(t) for t in tokens):
        raise InvalidNumber('Invalid row or column value. Must be numbers.')
    return int(tokens[0]), int(tokens[1])


class Game:
    """One session: the minefield, the cursor, the status line and the outcome.

    Every mutating operation is ignored once the game is won or lost; the final
    message stays in place until the session ends.
    """

    def __init__(self, field: Minefield, prompt: str = CURSOR_PROMPT):
        self.field = field
        self.cursor: Coordinate = (0, 0)
        self.status = GameStatus.IN_PROGRESS
        self.prompt = prompt
        self.message = prompt

    @classmethod
    def new(cls, size: int, mines: int, seed: Optional[int] = None, prompt: str = CURSOR_PROMPT) -> Game:
        rng = random.Random(int(seed)) if seed is not None else random.Random()
        return cls(Minefield(generate(size, mines, rng)), prompt=prompt)

    @property
    def board(self) -> Board:
        return self.field.board

    @property
    def size(self) -> int:
        return self.field.size

    @property
    def moves(self) -> int:
        return self.field.moves

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.IN_PROGRESS

    def move_cursor(self, d_row: int, d_col: int) -> None:
        if self.is_over:
            return
        row, col = self.cursor
        last = self.size - 1
        self.cursor = (min(max(row + d_row, 0), last), min(max(col + d_col, 0), last))

    def reveal_at_cursor(self) -> str:
        return self.reveal(*self.cursor)

    def toggle_flag(self) -> str:
        if self.is_over:
            return self.message
        if self.field.toggle_flag(*self.cursor) is None:
            self.message = FLAG_REVEALED_MESSAGE
        else:
            self.message = self.prompt
        return self.message

    def handle_input(self, raw: str) -> str:
        """Text-coordinate front-end: reveal the cell named by ``"row,col"``."""
        if self.is_over:
            return self.message
        try:
            row, col = parse_coordinates(raw)
        except MoveRejected as exc:
            self.message = exc.message
            return self.message
        return self.reveal(row, col)

    def reveal(self, row: int, col: int) -> str:
        if self.is_over:
            return self.message
        try:
            self._check_revealable(row, col)
        except MoveRejected as exc:
            self.message = exc.message
            return self.message

        outcome = self.field.reveal(row, col)
        if outcome is RevealOutcome.EXPLODED:
            self.status = GameStatus.LOST
            self.message = BOOM_MESSAGE
        elif outcome is RevealOutcome.WON:
            self.status = GameStatus.WON
            self.message = WIN_MESSAGE.format(moves=self.moves)
        else:
            self.message = self.prompt
        return self.message

    def _check_revealable(self, row: int, col: int) -> None:
        if not self.field.in_bounds(row, col):
            raise OutOfBounds(f'Coordinates out of bounds (0-{self.size - 1}).')
        if self.field.is_revealed(row, col):
            raise AlreadyRevealed(ALREADY_REVEALED_MESSAGE)
        if self.field.is_flagged(row, col):
            raise FlaggedCell(FLAGGED_MESSAGE)
