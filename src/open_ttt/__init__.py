"""
open_ttt - TicTacToe rules engine and computer opponent.

Provides a game state machine (board, turns, win detection, alternating
starting player) and a minimax opponent with configurable difficulty.
"""

from .board import Board, Owner, Position, Size
from .game import (
    Game,
    State,
    PlayerXMove,
    PlayerOMove,
    PlayerXWin,
    PlayerOWin,
    CatsGame,
)
from .errors import MoveError, GameOverError, PositionAlreadyOwnedError, InvalidPositionError
from .difficulty import Difficulty, Custom, MistakeProbability
from .minimax import Opponent, Outcome, best_position, worst_outcome, best_outcome
from .symmetries import canonical_key, apply_symmetry_board, SYM_MAPS
from .eval import BattleConfig, BattleScores, battle, battle_difficulties, play_game

__version__ = "0.1.0"
__all__ = [
    "Board",
    "Owner",
    "Position",
    "Size",
    "Game",
    "State",
    "PlayerXMove",
    "PlayerOMove",
    "PlayerXWin",
    "PlayerOWin",
    "CatsGame",
    "MoveError",
    "GameOverError",
    "PositionAlreadyOwnedError",
    "InvalidPositionError",
    "Difficulty",
    "Custom",
    "MistakeProbability",
    "Opponent",
    "Outcome",
    "best_position",
    "worst_outcome",
    "best_outcome",
    "canonical_key",
    "apply_symmetry_board",
    "SYM_MAPS",
    "BattleConfig",
    "BattleScores",
    "battle",
    "battle_difficulties",
    "play_game",
]
