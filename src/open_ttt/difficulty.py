"""
Difficulty policies for the opponent search.

A policy decides, for a node at a given search depth, whether the node is
evaluated or skipped. Skipped nodes are reported as Outcome.UNKNOWN, which is
how weaker opponents fail to see threats deeper in the game tree.

Depth starts at 0 for the opponent's own candidate moves and increases by one
for every ply below them.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union


class Difficulty(Enum):
    """Preset difficulties, from random play to a flawless opponent."""

    NONE = "none"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    UNBEATABLE = "unbeatable"

    def should_evaluate(self, depth: int, rng: random.Random) -> bool:
        if self is Difficulty.NONE:
            return False
        if self is Difficulty.EASY:
            return depth == 0 and rng.random() < 0.5
        if self is Difficulty.MEDIUM:
            return rng.random() < (0.9 if depth == 0 else 0.75)
        if self is Difficulty.HARD:
            return depth <= 1 or rng.random() < 0.97
        return True

    @property
    def is_deterministic(self) -> bool:
        return self in (Difficulty.NONE, Difficulty.UNBEATABLE)


@dataclass(frozen=True)
class Custom:
    """
    Caller supplied policy.

    The function receives the depth of the node and returns True to evaluate
    it. It is not called for every node: game over positions and the opening
    position are answered without consulting the full tree.
    """
    should_evaluate_node: Callable[[int], bool]
    name: str = "custom"

    def should_evaluate(self, depth: int, rng: random.Random) -> bool:
        return bool(self.should_evaluate_node(depth))

    @property
    def is_deterministic(self) -> bool:
        return False


@dataclass(frozen=True)
class MistakeProbability:
    """
    Depth independent policy: every node is skipped with the same probability.

    0.0 plays a perfect game, 1.0 always picks a random position. Values
    outside [0, 1] are clamped.
    """
    probability: float

    def __post_init__(self):
        object.__setattr__(self, "probability", min(1.0, max(0.0, float(self.probability))))

    def should_evaluate(self, depth: int, rng: random.Random) -> bool:
        if self.probability == 0.0:
            return True
        if self.probability == 1.0:
            return False
        return rng.random() >= self.probability

    @property
    def is_deterministic(self) -> bool:
        return self.probability in (0.0, 1.0)


Policy = Union[Difficulty, Custom, MistakeProbability]


def as_policy(difficulty: Union[Policy, float, Callable[[int], bool]]) -> Policy:
    """Normalize the accepted difficulty forms into a policy."""
    if isinstance(difficulty, (Difficulty, Custom, MistakeProbability)):
        return difficulty
    if isinstance(difficulty, (int, float)) and not isinstance(difficulty, bool):
        return MistakeProbability(difficulty)
    if callable(difficulty):
        return Custom(difficulty)
    raise TypeError(f"Unsupported difficulty: {difficulty!r}")
