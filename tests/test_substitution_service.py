import unittest

from conftest import make_game, make_players
from courtside.models import GameStatus
from courtside.services import (
    InvalidMinutesError, InvalidSubstitutionError, PersistenceService, PlayerNotFoundError,
    SubstitutionService
)


class SubstitutionServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = PersistenceService()
        for player in make_players(7):
            self.store.save_player(player)
        self.lineup = ["p1", "p2", "p3", "p4", "p5"]
        self.store.save_game(make_game(
            "g1", [f"p{i}" for i in range(1, 8)], [self.lineup], status=GameStatus.IN_PROGRESS
        ))
        self.service = SubstitutionService(self.store)

    def _slot_minutes(self):
        return self.store.load_game("g1").get_rotation(1, 1).player_minutes

    def test_full_slot_is_split_evenly(self) -> None:
        rotation = self.service.substitute("g1", 1, 1, "p1", "p6")

        self.assertEqual(rotation.player_minutes["p1"], 2)
        self.assertEqual(rotation.player_minutes["p6"], 2)
        self.assertEqual(rotation.players_on_court, ["p6", "p2", "p3", "p4", "p5"])

        game = self.store.load_game("g1")
        self.assertEqual(len(game.rotations), 1)
        self.assertEqual(game.get_rotation(1, 1).player_minutes, rotation.player_minutes)
        self.assertEqual(game.stats["p1"].play_time_minutes, 2)
        self.assertEqual(game.stats["p6"].play_time_minutes, 2)

    def test_repeated_substitutions_conserve_minutes(self) -> None:
        self.service.substitute("g1", 1, 1, "p1", "p6")
        self.service.substitute("g1", 1, 1, "p6", "p1")
        self.service.substitute("g1", 1, 1, "p2", "p7")

        minutes = self._slot_minutes()
        # p6 had 2, handed 1 back to p1
        self.assertEqual(minutes, {"p1": 3, "p6": 1, "p2": 2, "p7": 2, "p3": 4, "p4": 4, "p5": 4})
        self.assertLessEqual(sum(minutes.values()), 4 * len(minutes))
        self.assertTrue(all(value <= 4 for value in minutes.values()))

        court = self.store.load_game("g1").get_rotation(1, 1).players_on_court
        self.assertEqual(sorted(court), ["p1", "p3", "p4", "p5", "p7"])

    def test_one_minute_left_moves_entirely(self) -> None:
        self.service.set_player_minutes("g1", 1, 1, "p1", 1)
        self.service.substitute("g1", 1, 1, "p1", "p6")

        minutes = self._slot_minutes()
        self.assertNotIn("p1", minutes)
        self.assertEqual(minutes["p6"], 1)

    def test_player_without_credit_hands_over_nothing(self) -> None:
        self.service.set_player_minutes("g1", 1, 1, "p2", 0)
        rotation = self.service.substitute("g1", 1, 1, "p2", "p6")

        minutes = self._slot_minutes()
        self.assertEqual(minutes, {"p1": 4, "p3": 4, "p4": 4, "p5": 4})
        self.assertEqual(sum(minutes.values()), 16)
        self.assertEqual(rotation.players_on_court, ["p1", "p6", "p3", "p4", "p5"])

    def test_incoming_credit_is_capped(self) -> None:
        self.service.set_player_minutes("g1", 1, 1, "p6", 3)
        self.service.substitute("g1", 1, 1, "p1", "p6")

        self.assertEqual(self._slot_minutes()["p6"], 4)

    def test_invalid_substitutions(self) -> None:
        before = self.store.load_game("g1")

        with self.assertRaises(InvalidSubstitutionError):
            self.service.substitute("g1", 1, 2, "p1", "p6")
        with self.assertRaises(InvalidSubstitutionError):
            self.service.substitute("g1", 1, 1, "p6", "p7")
        with self.assertRaises(InvalidSubstitutionError):
            self.service.substitute("g1", 1, 1, "p1", "p1")
        with self.assertRaises(PlayerNotFoundError):
            self.service.substitute("g1", 1, 1, "p1", "ghost")
        with self.assertRaises(ValueError):
            self.service.substitute("g1", 5, 1, "p1", "p6")

        self.assertEqual(self.store.load_game("g1"), before)

    def test_set_player_minutes(self) -> None:
        rotation = self.service.set_player_minutes("g1", 1, 1, "p2", 8)
        self.assertEqual(rotation.player_minutes["p2"], 8)

        rotation = self.service.set_player_minutes("g1", 1, 1, "p2", 0)
        self.assertNotIn("p2", rotation.player_minutes)
        self.assertEqual(self.store.load_game("g1").stats["p2"].play_time_minutes, 0)

        with self.assertRaises(InvalidMinutesError):
            self.service.set_player_minutes("g1", 1, 1, "p2", 9)
        with self.assertRaises(InvalidMinutesError):
            self.service.set_player_minutes("g1", 1, 1, "p2", -1)
        with self.assertRaises(InvalidSubstitutionError):
            self.service.set_player_minutes("g1", 2, 1, "p2", 4)
        with self.assertRaises(PlayerNotFoundError):
            self.service.set_player_minutes("g1", 1, 1, "ghost", 4)
        self.assertNotIn("ghost", self._slot_minutes())


if __name__ == "__main__":
    unittest.main()
