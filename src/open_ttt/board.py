"""
Board representation shared by the game and the opponent search.

Cells are stored in a flat row-major list of Owner values:
  - Owner.NONE (0): empty
  - Owner.PLAYER_X (+1): X
  - Owner.PLAYER_O (-1): O
"""

from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union


class Position(NamedTuple):
    """Board position denoted by zero-based row and column."""
    row: int
    column: int


class Size(NamedTuple):
    """Number of rows and columns of a board."""
    rows: int
    columns: int


class Owner(IntEnum):
    """Owner of a single square."""
    NONE = 0
    PLAYER_X = 1
    PLAYER_O = -1

    @property
    def mark(self) -> str:
        return _MARKS[self]


_MARKS = {Owner.NONE: " ", Owner.PLAYER_X: "X", Owner.PLAYER_O: "O"}
_OWNERS_BY_MARK = {"X": Owner.PLAYER_X, "O": Owner.PLAYER_O, " ": Owner.NONE, ".": Owner.NONE}


class Board:
    """
    Grid of squares, each owned by one of the players or by no one.

    Positions outside the board are never an error to probe: get() returns
    None and set() returns False, so code walking lines of squares can run
    off the edge safely.
    """

    def __init__(self, size: Union[Size, Tuple[int, int]] = Size(3, 3)):
        size = Size(*size)
        if size.rows < 1 or size.columns < 1:
            raise ValueError(
                f"Invalid board size {tuple(size)}: rows and columns must be at least 1."
            )
        self._size = size
        self._cells: List[Owner] = [Owner.NONE] * (size.rows * size.columns)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[Owner, str]]]) -> "Board":
        """
        Build a board from nested rows of owners or marks ('X', 'O', ' ').

        Example:
            Board.from_rows(["XO ", " X ", "  O"])
        """
        if not rows or not rows[0]:
            raise ValueError("At least one row and one column are required.")
        board = cls(Size(len(rows), len(rows[0])))
        for r, row in enumerate(rows):
            if len(row) != board.size.columns:
                raise ValueError(f"Row {r} has {len(row)} squares, expected {board.size.columns}.")
            for c, value in enumerate(row):
                owner = value if isinstance(value, Owner) else _OWNERS_BY_MARK[value.upper()]
                board.set(Position(r, c), owner)
        return board

    @property
    def size(self) -> Size:
        return self._size

    def contains(self, position: Tuple[int, int]) -> bool:
        """Check if the position lies within the board."""
        row, column = position
        return 0 <= row < self._size.rows and 0 <= column < self._size.columns

    def get(self, position: Tuple[int, int]) -> Optional[Owner]:
        """Return the owner of the position, or None if it is outside the board."""
        if not self.contains(position):
            return None
        return self._cells[self._index(position)]

    def set(self, position: Tuple[int, int], owner: Owner) -> bool:
        """
        Change the owner of a single square.

        Returns:
            False if the position is outside the board (nothing changes), else True
        """
        if not self.contains(position):
            return False
        self._cells[self._index(position)] = Owner(owner)
        return True

    def positions(self) -> Iterator[Position]:
        """Iterate over every position in row-major order."""
        for r in range(self._size.rows):
            for c in range(self._size.columns):
                yield Position(r, c)

    def squares(self) -> Iterator[Tuple[Position, Owner]]:
        """Iterate over (position, owner) pairs in row-major order."""
        for position, owner in zip(self.positions(), self._cells):
            yield position, owner

    def __iter__(self) -> Iterator[Tuple[Position, Owner]]:
        return self.squares()

    def cells(self) -> List[int]:
        """Flat row-major list of owner values (+1 / -1 / 0)."""
        return [int(owner) for owner in self._cells]

    def is_full(self) -> bool:
        return Owner.NONE not in self._cells

    def is_empty(self) -> bool:
        return all(owner == Owner.NONE for owner in self._cells)

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone._size = self._size
        clone._cells = self._cells[:]
        return clone

    __copy__ = copy

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    def __repr__(self) -> str:
        rows = ["".join(owner.mark for owner in self._row(r)) for r in range(self._size.rows)]
        return f"Board.from_rows({rows!r})"

    def __str__(self) -> str:
        separator = "+---" * self._size.columns + "+"
        lines = [separator]
        for r in range(self._size.rows):
            lines.append("".join(f"| {owner.mark} " for owner in self._row(r)) + "|")
            lines.append(separator)
        return "\n".join(lines)

    def _row(self, row: int) -> List[Owner]:
        start = row * self._size.columns
        return self._cells[start:start + self._size.columns]

    def _index(self, position: Tuple[int, int]) -> int:
        row, column = position
        return row * self._size.columns + column
