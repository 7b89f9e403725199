"""
Errors raised when a move cannot be performed.

All of them leave the game untouched, so callers can report the problem and
ask for another position.
"""

from .board import Owner, Position


class MoveError(ValueError):
    """Base class for rejected moves."""


class GameOverError(MoveError):
    def __init__(self):
        super().__init__(
            "The game is over so no more moves can be performed. "
            "Start the next game to keep playing."
        )


class PositionAlreadyOwnedError(MoveError):
    def __init__(self, position: Position, owner: Owner):
        self.position = position
        self.owner = owner
        super().__init__(
            f"The square at row {position.row}, column {position.column} "
            f"is already owned by {owner.mark}."
        )


class InvalidPositionError(MoveError):
    def __init__(self, position: Position):
        self.position = position
        super().__init__(
            f"Row {position.row}, column {position.column} is not on the board."
        )
