from __future__ import annotations


class MinesweeperError(Exception):
    """Base class for every error raised by termsweep."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Grid size or mine count cannot produce a board."""


class MoveRejected(MinesweeperError):
    """A requested move was refused; the game state is unchanged.

    ``message`` is the text shown to the player.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFormat(MoveRejected):
    pass


class InvalidNumber(MoveRejected):
    pass


class OutOfBounds(MoveRejected):
    pass


class AlreadyRevealed(MoveRejected):
    pass


class FlaggedCell(MoveRejected):
    pass
