"""
TicTacToe game rules and state management.

A Game owns the board and the current State. Each accepted move updates the
board and recomputes the State:
  - PlayerXMove / PlayerOMove: side to move
  - PlayerXWin / PlayerOWin: game over, carries the winning positions
  - CatsGame: game over, board full without a winner
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, Iterator, List, Set, Tuple

from .board import Board, Owner, Position, Size
from .errors import GameOverError, InvalidPositionError, PositionAlreadyOwnedError

logger = logging.getLogger(__name__)

BOARD_SIZE = Size(3, 3)


@dataclass(frozen=True)
class State:
    """Base class of the game states."""

    def is_game_over(self) -> bool:
        return False


@dataclass(frozen=True)
class PlayerXMove(State):
    """Player X's turn to mark an empty square."""


@dataclass(frozen=True)
class PlayerOMove(State):
    """Player O's turn to mark an empty square."""


@dataclass(frozen=True)
class PlayerXWin(State):
    """Player X has won; holds every position that contributed to the win."""
    winning_positions: FrozenSet[Position] = field(default_factory=frozenset)

    def is_game_over(self) -> bool:
        return True


@dataclass(frozen=True)
class PlayerOWin(State):
    """Player O has won; holds every position that contributed to the win."""
    winning_positions: FrozenSet[Position] = field(default_factory=frozenset)

    def is_game_over(self) -> bool:
        return True


@dataclass(frozen=True)
class CatsGame(State):
    """The board is full and neither player has won."""

    def is_game_over(self) -> bool:
        return True


def owner_to_move(state: State) -> Owner:
    """
    Owner whose mark the next move places.

    Raises:
        RuntimeError: if the state is game over (there is no side to move)
    """
    if isinstance(state, PlayerXMove):
        return Owner.PLAYER_X
    if isinstance(state, PlayerOMove):
        return Owner.PLAYER_O
    raise RuntimeError(f"No player can move when the game is over ({state!r}).")


def next_turn(state: State) -> State:
    """Return the move state of the other player."""
    if isinstance(state, PlayerXMove):
        return PlayerOMove()
    if isinstance(state, PlayerOMove):
        return PlayerXMove()
    raise RuntimeError(f"Cannot switch turns when the game is over ({state!r}).")


Step = Callable[[Position], Position]


def _walk(board: Board, start: Position, step: Step) -> List[Position]:
    """Follow step from start until it leaves the board."""
    sequence = []
    position = start
    while board.contains(position):
        sequence.append(position)
        position = step(position)
    return sequence


def _sequences(board: Board) -> Iterator[List[Position]]:
    """Rows, columns, main diagonal and anti-diagonal of the board."""
    rows, columns = board.size
    for r in range(rows):
        yield _walk(board, Position(r, 0), lambda p: Position(p.row, p.column + 1))
    for c in range(columns):
        yield _walk(board, Position(0, c), lambda p: Position(p.row + 1, p.column))
    yield _walk(board, Position(0, 0), lambda p: Position(p.row + 1, p.column + 1))
    yield _walk(board, Position(0, columns - 1), lambda p: Position(p.row + 1, p.column - 1))


def winning_positions(board: Board) -> Set[Position]:
    """
    Union of all sequences completely owned by a single player.

    A single move can complete several lines at once (e.g. a row and a
    diagonal), so the result may hold more than one line.
    """
    side = min(board.size)
    winners: Set[Position] = set()
    for sequence in _sequences(board):
        if len(sequence) < side:
            continue
        owners = {board.get(p) for p in sequence}
        if len(owners) == 1 and Owner.NONE not in owners:
            winners.update(sequence)
    return winners


def compute_state(board: Board, previous: State) -> State:
    """Determine the state after the player to move in previous has marked a square."""
    winners = winning_positions(board)
    if winners:
        owner = board.get(next(iter(winners)))
        if owner == Owner.PLAYER_X:
            return PlayerXWin(frozenset(winners))
        return PlayerOWin(frozenset(winners))
    if board.is_full():
        return CatsGame()
    return next_turn(previous)


class Game:
    """
    Single round-based game of TicTacToe.

    The first round is started by player X; start_next_game() alternates the
    starting player for every following round.
    """

    def __init__(self):
        self._board = Board(BOARD_SIZE)
        self._state: State = PlayerXMove()
        self._next_game_state: State = PlayerOMove()

    @classmethod
    def from_moves(cls, moves: Iterable[Tuple[int, int]]) -> "Game":
        """Create a game and perform the moves in order, alternating players."""
        game = cls()
        for position in moves:
            game.do_move(position)
        return game

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> State:
        return self._state

    def free_positions(self) -> Iterator[Position]:
        """Positions that are not owned, in board order; empty once the game is over."""
        if self._state.is_game_over():
            return
        for position, owner in self._board.squares():
            if owner == Owner.NONE:
                yield position

    def can_move(self, position: Tuple[int, int]) -> bool:
        """Check if do_move() would accept the position."""
        return (
            not self._state.is_game_over()
            and self._board.get(position) == Owner.NONE
        )

    def do_move(self, position: Tuple[int, int]) -> State:
        """
        Mark the position for the player whose turn it is.

        Returns:
            The new state of the game

        Raises:
            GameOverError: the game is already over
            InvalidPositionError: the position is outside the board
            PositionAlreadyOwnedError: the square is already marked
        """
        position = Position(*position)
        if self._state.is_game_over():
            raise GameOverError()
        owner = self._board.get(position)
        if owner is None:
            raise InvalidPositionError(position)
        if owner != Owner.NONE:
            raise PositionAlreadyOwnedError(position, owner)

        self._board.set(position, owner_to_move(self._state))
        self._state = compute_state(self._board, self._state)
        return self._state

    def start_next_game(self) -> State:
        """
        Clear the board and begin a new round.

        The player that did not start the previous round moves first.
        """
        self._board = Board(BOARD_SIZE)
        self._state = self._next_game_state
        self._next_game_state = next_turn(self._state)
        logger.debug("Starting next game with %s", type(self._state).__name__)
        return self._state

    def copy(self) -> "Game":
        clone = Game.__new__(Game)
        clone._board = self._board.copy()
        clone._state = self._state
        clone._next_game_state = self._next_game_state
        return clone

    __copy__ = copy

    def __repr__(self) -> str:
        return f"Game(state={self._state!r}, board={self._board!r})"
