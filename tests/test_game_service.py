"""
Unit tests for the game lifecycle: attendance, live lineups and slot advancement.
"""
import unittest

from conftest import make_players
from courtside.models import GameStatus
from courtside.services import (
    GameService, InsufficientRosterError, InvalidRotationError, PersistenceService,
    PlayerNotFoundError
)


class GameServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = PersistenceService()
        for player in make_players(8):
            self.store.save_player(player)
        self.service = GameService(self.store)
        self.game = self.service.create_game("  Hawks ", "2024-02-03", "Gym")

    def test_create_game(self) -> None:
        game = self.store.load_game(self.game.id)
        self.assertEqual(game.opponent, "Hawks")
        self.assertEqual(game.status, GameStatus.SCHEDULED)
        self.assertEqual(game.attendance, [])
        self.assertIsNone(game.current_quarter)

    def test_set_attendance(self) -> None:
        game = self.service.set_attendance(self.game.id, ["p2", "p1", "p2"])
        self.assertEqual(game.attendance, ["p2", "p1"])

        with self.assertRaises(PlayerNotFoundError):
            self.service.set_attendance(self.game.id, ["p1", "ghost"])
        self.assertEqual(self.store.load_game(self.game.id).attendance, ["p2", "p1"])

    def test_start_requires_attendance(self) -> None:
        with self.assertRaises(InsufficientRosterError):
            self.service.start_game(self.game.id)

        self.service.set_attendance(self.game.id, ["p1"])
        game = self.service.start_game(self.game.id)
        self.assertEqual(game.status, GameStatus.IN_PROGRESS)
        self.assertEqual((game.current_quarter, game.current_swap), (1, 1))
        self.assertEqual(self.service.get_in_progress_game().id, self.game.id)

    def test_add_rotation_validation(self) -> None:
        self.service.set_attendance(self.game.id, [f"p{i}" for i in range(1, 8)])

        with self.assertRaises(InvalidRotationError):
            self.service.add_rotation(self.game.id, 1, 1, [])
        with self.assertRaises(InvalidRotationError):
            self.service.add_rotation(self.game.id, 1, 1, ["p1", "p2", "p3", "p4", "p5", "p6"])
        with self.assertRaises(InvalidRotationError):
            self.service.add_rotation(self.game.id, 1, 1, ["p1", "p8"])

        rotation = self.service.add_rotation(self.game.id, 1, 1, ["p1", "p2", "p2"])
        self.assertEqual(rotation.players_on_court, ["p1", "p2"])
        self.assertEqual(rotation.player_minutes, {"p1": 4, "p2": 4})

        with self.assertRaises(InvalidRotationError):
            self.service.add_rotation(self.game.id, 1, 1, ["p3"])

        game = self.store.load_game(self.game.id)
        self.assertEqual(len(game.rotations), 1)
        self.assertEqual(game.stats["p1"].play_time_minutes, 4)
        self.assertEqual(game.stats["p3"].play_time_minutes, 0)

    def test_live_game_flow(self) -> None:
        self.service.set_attendance(self.game.id, [f"p{i}" for i in range(1, 8)])

        with self.assertRaises(InvalidRotationError):
            self.service.advance_slot(self.game.id)

        self.service.start_game(self.game.id)
        self.assertEqual(self.service.get_current_players_on_court(self.game.id), [])
        self.assertEqual(len(self.service.get_available_players(self.game.id)), 7)

        self.service.add_rotation(self.game.id, 1, 1, ["p1", "p2", "p3", "p4", "p5"])
        on_court = [p.id for p in self.service.get_current_players_on_court(self.game.id)]
        bench = [p.id for p in self.service.get_available_players(self.game.id)]
        self.assertEqual(on_court, ["p1", "p2", "p3", "p4", "p5"])
        self.assertEqual(bench, ["p6", "p7"])

        for expected in [(1, 2), (2, 1), (2, 2), (3, 1), (3, 2), (4, 1), (4, 2)]:
            game = self.service.advance_slot(self.game.id)
            self.assertEqual((game.current_quarter, game.current_swap), expected)
            self.assertEqual(game.status, GameStatus.IN_PROGRESS)

        game = self.service.advance_slot(self.game.id)
        self.assertEqual(game.status, GameStatus.COMPLETED)
        with self.assertRaises(InvalidRotationError):
            self.service.advance_slot(self.game.id)
        with self.assertRaises(InvalidRotationError):
            self.service.start_game(self.game.id)

    def test_end_game_and_listing(self) -> None:
        older = self.service.create_game("Owls", "2023-12-01")
        self.service.end_game(older.id)

        self.assertEqual([g.id for g in self.service.list_games()], [self.game.id, older.id])
        self.assertEqual([g.id for g in self.service.get_completed_games()], [older.id])
        self.assertIsNone(self.service.get_in_progress_game())

        self.service.delete_game(older.id)
        self.assertEqual(len(self.service.list_games()), 1)


if __name__ == "__main__":
    unittest.main()
