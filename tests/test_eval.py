import random
import unittest

from open_ttt.difficulty import Difficulty
from open_ttt.eval import BattleConfig, BattleScores, battle, battle_difficulties, play_game
from open_ttt.game import CatsGame, Game, PlayerOWin, PlayerXMove, PlayerXWin
from open_ttt.minimax import Opponent


class TestBattleScores(unittest.TestCase):

    def test_record(self):
        scores = BattleScores()
        scores.record(PlayerXWin(frozenset()))
        scores.record(PlayerOWin(frozenset()))
        scores.record(CatsGame())
        scores.record(CatsGame())
        self.assertEqual(scores.total_games, 4)
        self.assertEqual(scores.player_x_wins, 1)
        self.assertEqual(scores.player_o_wins, 1)
        self.assertEqual(scores.cats_games, 2)
        self.assertAlmostEqual(scores.cats_game_percent, 50.0)
        self.assertEqual(str(scores), " 25% -  25% -  50%")

    def test_record_rejects_unfinished_game(self):
        with self.assertRaises(RuntimeError):
            BattleScores().record(PlayerXMove())

    def test_empty_percentages(self):
        self.assertEqual(BattleScores().player_x_win_percent, 0.0)


class TestSelfPlay(unittest.TestCase):

    def test_play_game_finishes(self):
        rng = random.Random(5)
        game = Game()
        state = play_game(game, Opponent(Difficulty.NONE, rng), Opponent(Difficulty.NONE, rng))
        self.assertTrue(state.is_game_over())
        self.assertEqual(state, game.state)

    def test_unbeatable_never_loses_to_random(self):
        rng = random.Random(2024)
        random_ai = Opponent(Difficulty.NONE, rng=rng)
        unbeatable_ai = Opponent(Difficulty.UNBEATABLE, rng=rng)

        scores = battle(random_ai, unbeatable_ai, games=100)
        self.assertEqual(scores.total_games, 100)
        self.assertEqual(scores.player_x_wins, 0, "The random opponent beat the unbeatable one.")

        scores = battle(unbeatable_ai, random_ai, games=100)
        self.assertEqual(scores.player_o_wins, 0, "The random opponent beat the unbeatable one.")

    def test_unbeatable_against_itself_is_always_cats_game(self):
        scores = battle_difficulties(
            Difficulty.UNBEATABLE, Difficulty.UNBEATABLE, BattleConfig(games=10, seed=1)
        )
        self.assertEqual(scores.cats_games, 10)

    def test_hard_never_beats_unbeatable(self):
        scores = battle_difficulties(
            Difficulty.HARD, Difficulty.UNBEATABLE, BattleConfig(games=6, seed=3)
        )
        self.assertEqual(scores.total_games, 6)
        self.assertEqual(scores.player_x_wins, 0)

    def test_mistake_probability_opponent_never_loses_when_flawless(self):
        rng = random.Random(11)
        flawless = Opponent.from_mistake_probability(0.0, rng=rng)
        rando = Opponent.from_mistake_probability(1.0, rng=rng)
        scores = battle(rando, flawless, games=50)
        self.assertEqual(scores.player_x_wins, 0)


if __name__ == '__main__':
    unittest.main()
