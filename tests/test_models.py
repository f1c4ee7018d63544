import unittest

from courtside.models import (
    Game, GameStatus, Player, PlayerGameStats, Rotation, jersey_sort_key, upgrade_rotations
)
from courtside.utils import iter_slots, next_slot, parse_slot_key, rotation_number, slot_for, slot_key


class SlotArithmeticTests(unittest.TestCase):
    def test_rotation_numbers_round_trip(self) -> None:
        for number, quarter, swap in iter_slots():
            self.assertEqual(rotation_number(quarter, swap), number)
            self.assertEqual(slot_for(number), (quarter, swap))
        self.assertEqual(slot_for(3), (2, 1))
        self.assertEqual(slot_for(8), (4, 2))

    def test_next_slot_stops_after_last(self) -> None:
        self.assertEqual(next_slot(1, 1), (1, 2))
        self.assertEqual(next_slot(1, 2), (2, 1))
        self.assertIsNone(next_slot(4, 2))

    def test_slot_key(self) -> None:
        self.assertEqual(slot_key(3, 2), "3-2")
        self.assertEqual(parse_slot_key("3-2"), (3, 2))

    def test_out_of_range_slot_numbers(self) -> None:
        with self.assertRaises(ValueError):
            slot_for(0)
        with self.assertRaises(ValueError):
            slot_for(9)


class PlayerModelTests(unittest.TestCase):
    def test_jersey_sort_key_is_numeric_first(self) -> None:
        numbers = ["10", "", "2", "A", "07"]
        ordered = sorted(numbers, key=jersey_sort_key)
        self.assertEqual(ordered, ["2", "07", "10", "", "A"])

    def test_from_dict_accepts_camel_case(self) -> None:
        player = Player.from_dict({"id": "x", "name": "Sam", "number": 4, "createdAt": 12})
        self.assertEqual(player.number, "4")
        self.assertEqual(player.created_at, 12.0)

    def test_stats_swaps_default_to_full_game(self) -> None:
        stats = PlayerGameStats()
        self.assertIsNone(stats.swaps_attended)
        self.assertEqual(stats.effective_swaps_attended, 8)

        stats = PlayerGameStats.from_dict({"swapsAttended": 3, "made_2pt": 2, "made_3pt": 1})
        self.assertEqual(stats.effective_swaps_attended, 3)
        self.assertEqual(stats.points, 7)


class LegacyRotationUpgradeTests(unittest.TestCase):
    def test_flat_minutes_become_player_minutes(self) -> None:
        rotation = Rotation.from_dict({"quarter": 1, "swap": 1, "playersOnCourt": ["a", "b"]})
        self.assertEqual(rotation.player_minutes, {"a": 4, "b": 4})

        rotation = Rotation.from_dict(
            {"quarter": 1, "swap": 2, "players_on_court": ["a"], "minutes": 2}
        )
        self.assertEqual(rotation.player_minutes, {"a": 2})

    def test_split_entries_merge_into_one_slot(self) -> None:
        game = Game.from_dict({
            "id": "g1",
            "attendance": ["a", "b", "c"],
            "rotations": [
                {"quarter": 1, "swap": 1, "playersOnCourt": ["a", "b"], "minutes": 2},
                {"quarter": 1, "swap": 1, "playersOnCourt": ["c", "b"], "minutes": 2},
                {"quarter": 1, "swap": 2, "playersOnCourt": ["a"], "minutes": 4},
            ],
        })

        self.assertEqual(len(game.rotations), 2)
        first = game.get_rotation(1, 1)
        self.assertEqual(first.players_on_court, ["c", "b"])
        self.assertEqual(first.player_minutes, {"a": 2, "b": 4, "c": 2})

    def test_merged_minutes_are_capped_at_slot_length(self) -> None:
        merged = upgrade_rotations([
            Rotation(1, 1, ["a"], {"a": 4}),
            Rotation(1, 1, ["a"], {"a": 3}),
        ])
        self.assertEqual(merged[0].player_minutes, {"a": 4})

    def test_upgrade_is_idempotent(self) -> None:
        game = Game.from_dict({
            "id": "g1",
            "attendance": ["a", "b", "a"],
            "rotations": [
                {"quarter": 2, "swap": 1, "playersOnCourt": ["b"], "minutes": 4},
                {"quarter": 1, "swap": 1, "playersOnCourt": ["a"], "minutes": 4},
            ],
            "status": "in-progress",
            "currentQuarter": 2,
            "currentSwap": 1,
        })
        self.assertEqual(game.attendance, ["a", "b"])
        self.assertEqual([r.number for r in game.rotations], [1, 3])
        self.assertEqual(game.status, GameStatus.IN_PROGRESS)

        again = Game.from_dict(game.to_dict())
        self.assertEqual(again, game)
        self.assertEqual(upgrade_rotations(game.rotations), game.rotations)


if __name__ == "__main__":
    unittest.main()
