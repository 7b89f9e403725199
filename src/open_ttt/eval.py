"""
Self-play evaluation.

Opponents battle each other over many rounds of one Game, so the first move
alternates between them. Used to check that the unbeatable opponent never
loses and that the difficulties get progressively stronger.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from tqdm.auto import trange

from .difficulty import Policy
from .game import CatsGame, Game, PlayerOWin, PlayerXMove, PlayerXWin, State
from .minimax import Opponent

logger = logging.getLogger(__name__)


@dataclass
class BattleConfig:
    """Battle configuration."""

    # Rounds to play
    games: int = 100

    # Random seed; None draws fresh entropy
    seed: Optional[int] = None

    # Show a progress bar
    progress: bool = False


@dataclass
class BattleScores:
    """Tally of finished rounds."""
    player_x_wins: int = 0
    player_o_wins: int = 0
    cats_games: int = 0

    @property
    def total_games(self) -> int:
        return self.player_x_wins + self.player_o_wins + self.cats_games

    def record(self, state: State):
        if isinstance(state, PlayerXWin):
            self.player_x_wins += 1
        elif isinstance(state, PlayerOWin):
            self.player_o_wins += 1
        elif isinstance(state, CatsGame):
            self.cats_games += 1
        else:
            raise RuntimeError(f"Cannot record a game that is not over ({state!r}).")

    def _percent(self, value: int) -> float:
        total = self.total_games
        return 100.0 * value / total if total else 0.0

    @property
    def player_x_win_percent(self) -> float:
        return self._percent(self.player_x_wins)

    @property
    def player_o_win_percent(self) -> float:
        return self._percent(self.player_o_wins)

    @property
    def cats_game_percent(self) -> float:
        return self._percent(self.cats_games)

    def __str__(self) -> str:
        return (
            f"{self.player_x_win_percent:3.0f}% - "
            f"{self.player_o_win_percent:3.0f}% - "
            f"{self.cats_game_percent:3.0f}%"
        )


def play_game(game: Game, player_x: Opponent, player_o: Opponent) -> State:
    """Let the opponents alternate moves until the round is over."""
    while not game.state.is_game_over():
        player = player_x if isinstance(game.state, PlayerXMove) else player_o
        position = player.get_move(game)
        game.do_move(position)
    return game.state


def battle(
    player_x: Opponent,
    player_o: Opponent,
    games: int = 100,
    progress: bool = False,
) -> BattleScores:
    """
    Play several rounds between two opponents.

    Player X and player O keep their marks for the whole battle; the game
    alternates which of them moves first.

    Returns:
        BattleScores from the point of view of the marks
    """
    game = Game()
    scores = BattleScores()
    for _ in trange(games, desc="Battle", disable=not progress, leave=False):
        scores.record(play_game(game, player_x, player_o))
        game.start_next_game()

    logger.info("Battle over %d games (X - O - cat's): %s", scores.total_games, scores)
    return scores


def battle_difficulties(
    player_x_difficulty: Policy,
    player_o_difficulty: Policy,
    config: Optional[BattleConfig] = None,
) -> BattleScores:
    """Battle two opponents built from difficulties, sharing one seeded random source."""
    config = config or BattleConfig()
    rng = random.Random(config.seed)
    player_x = Opponent(player_x_difficulty, rng=rng)
    player_o = Opponent(player_o_difficulty, rng=rng)
    return battle(player_x, player_o, games=config.games, progress=config.progress)
