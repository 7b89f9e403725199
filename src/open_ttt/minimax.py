"""
Minimax opponent with difficulty-controlled pruning.

The opponent classifies every free position by the outcome it leads to when
both sides play their best from there on. Positions the difficulty policy
chooses not to examine are reported as UNKNOWN.
"""

import logging
import random
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Mapping, Optional, Tuple, Union

from .board import Owner, Position
from .difficulty import Difficulty, MistakeProbability, Policy, as_policy
from .game import Game, PlayerOWin, PlayerXWin, CatsGame, State, owner_to_move
from .symmetries import canonical_key

logger = logging.getLogger(__name__)

# Deepest possible recursion on a 3x3 board is 9 plies.
MAX_DEPTH = 64


class Outcome(Enum):
    """Result of choosing a position, from the opponent's perspective."""
    WIN = "win"
    LOSS = "loss"
    CATS_GAME = "cats_game"
    UNKNOWN = "unknown"


# Ranking used when picking a move and on the opponent's own plies.
BEST_TO_WORST = (Outcome.WIN, Outcome.CATS_GAME, Outcome.UNKNOWN, Outcome.LOSS)
# Ranking used on the adversary's plies; UNKNOWN only when nothing else is known.
WORST_TO_BEST = (Outcome.LOSS, Outcome.CATS_GAME, Outcome.WIN)


def outcome_from_state(state: State, ai_player: Owner) -> Outcome:
    """
    Outcome of a finished game for ai_player.

    Raises:
        RuntimeError: if the game is not over
    """
    if isinstance(state, CatsGame):
        return Outcome.CATS_GAME
    if isinstance(state, PlayerXWin):
        return Outcome.WIN if ai_player == Owner.PLAYER_X else Outcome.LOSS
    if isinstance(state, PlayerOWin):
        return Outcome.WIN if ai_player == Owner.PLAYER_O else Outcome.LOSS
    raise RuntimeError(f"Cannot determine an outcome, the game is not over ({state!r}).")


def worst_outcome(outcomes: Iterable[Outcome]) -> Outcome:
    """
    Worst known outcome: LOSS, then CATS_GAME, then WIN.

    UNKNOWN is returned if there are no outcomes or all of them are unknown.
    """
    found = set(outcomes)
    for outcome in WORST_TO_BEST:
        if outcome in found:
            return outcome
    return Outcome.UNKNOWN


def best_outcome(outcomes: Iterable[Outcome]) -> Outcome:
    """Best outcome by WIN > CATS_GAME > UNKNOWN > LOSS; UNKNOWN when empty."""
    found = set(outcomes)
    for outcome in BEST_TO_WORST:
        if outcome in found:
            return outcome
    return Outcome.UNKNOWN


def best_position(
    outcomes: Mapping[Position, Outcome],
    rng: Optional[random.Random] = None,
) -> Optional[Position]:
    """
    Pick a position with the best outcome.

    Ties are broken uniformly at random. None is returned for an empty mapping.
    """
    by_outcome: Dict[Outcome, list] = {}
    for position, outcome in outcomes.items():
        by_outcome.setdefault(outcome, []).append(position)

    chooser = rng if rng is not None else random
    for outcome in BEST_TO_WORST:
        if outcome in by_outcome:
            return chooser.choice(by_outcome[outcome])
    return None


class Opponent:
    """
    Computer controlled player.

    Can play either side; which one is decided from the game passed in. Also
    usable as a hint system through evaluate().

    Args:
        difficulty: Difficulty preset, Custom policy, MistakeProbability, a
            float mistake probability or a depth -> bool function
        rng: random source for tie breaks and pruning; seed it for
            reproducible play
    """

    def __init__(
        self,
        difficulty: Union[Policy, float, Callable[[int], bool]] = Difficulty.UNBEATABLE,
        rng: Optional[random.Random] = None,
    ):
        self.difficulty = as_policy(difficulty)
        self.rng = rng if rng is not None else random.Random()
        # Cache: (canonical board, side to move, ai player) -> outcome
        self._cache: Dict[Tuple[Hashable, Owner, Owner], Outcome] = {}

    @classmethod
    def from_mistake_probability(
        cls, mistake_probability: float, rng: Optional[random.Random] = None
    ) -> "Opponent":
        """Opponent that skips every node with the same probability."""
        return cls(MistakeProbability(mistake_probability), rng=rng)

    def get_move(self, game: Game) -> Optional[Position]:
        """Position the opponent wants to mark, or None if the game is over."""
        return best_position(self.evaluate(game), self.rng)

    def evaluate(self, game: Game) -> Dict[Position, Outcome]:
        """
        Outcome of every free position for the player whose turn it is.

        Returns an empty dict when the game is over.
        """
        outcomes: Dict[Position, Outcome] = {}
        if game.state.is_game_over():
            return outcomes

        ai_player = owner_to_move(game.state)
        for position in game.free_positions():
            outcomes[position] = self._evaluate_position(game, position, ai_player, 0)

        logger.debug(
            "Evaluated %d positions for %s: %s",
            len(outcomes),
            ai_player.mark,
            {tuple(p): o.value for p, o in outcomes.items()},
        )
        return outcomes

    def clear_cache(self):
        """Clear the transposition table."""
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    def _evaluate_position(
        self, game: Game, position: Position, ai_player: Owner, depth: int
    ) -> Outcome:
        """Outcome of marking position in game. Recursive."""
        assert depth <= MAX_DEPTH, f"Search depth {depth} exceeds the limit of {MAX_DEPTH}."
        assert game.can_move(position), (
            f"Cannot evaluate {position}: the game is over or the square is taken."
        )

        if not self.difficulty.should_evaluate(depth, self.rng):
            return Outcome.UNKNOWN

        # Every opening move leads to a cat's game against perfect play.
        if game.board.is_empty():
            return Outcome.CATS_GAME

        game = game.copy()
        state = game.do_move(position)
        if state.is_game_over():
            return outcome_from_state(state, ai_player)

        return self._evaluate_node(game, ai_player, depth + 1)

    def _evaluate_node(self, game: Game, ai_player: Owner, depth: int) -> Outcome:
        """Minimax value of a position that is not over, for the side to move."""
        to_move = owner_to_move(game.state)
        key = None
        if self.difficulty.is_deterministic:
            key = (canonical_key(game.board), to_move, ai_player)
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        ai_to_move = to_move == ai_player
        # Nothing beats a win on our ply or a loss on theirs.
        decisive = Outcome.WIN if ai_to_move else Outcome.LOSS
        outcomes = []
        for position in game.free_positions():
            outcome = self._evaluate_position(game, position, ai_player, depth)
            outcomes.append(outcome)
            if outcome is decisive:
                break

        result = best_outcome(outcomes) if ai_to_move else worst_outcome(outcomes)
        if key is not None:
            self._cache[key] = result
        return result
