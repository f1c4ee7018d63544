import pytest

from conftest import make_game
from courtside.models import GameStatus
from courtside.services import GameNotFoundError, InvalidRotationError, ManualOverrideService


@pytest.fixture
def manual(roster_store):
    roster_store.save_game(make_game("g1", ["p1", "p2", "p3", "p4"], status=GameStatus.SCHEDULED))
    return ManualOverrideService(roster_store)


def test_set_and_get(manual):
    assert manual.get_manual_rotation("g1", 2, 1) is None

    assert manual.set_manual_rotation("g1", 2, 1, ["p3", "p1", "p3"]) == ["p3", "p1"]
    assert manual.get_manual_rotation("g1", 2, 1) == ["p3", "p1"]
    assert manual.get_all_manual_rotations("g1") == {"2-1": ["p3", "p1"]}


def test_non_attending_players_are_rejected(manual):
    with pytest.raises(InvalidRotationError):
        manual.set_manual_rotation("g1", 1, 1, ["p1", "p9"])
    assert manual.get_manual_rotation("g1", 1, 1) is None


def test_toggle_is_symmetric_difference(manual):
    assert manual.toggle_player("g1", 1, 1, "p2") == ["p2"]
    assert manual.toggle_player("g1", 1, 1, "p4") == ["p2", "p4"]
    assert manual.toggle_player("g1", 1, 1, "p2") == ["p4"]
    assert manual.toggle_player("g1", 1, 1, "p4") == []


def test_clear(manual):
    manual.set_manual_rotation("g1", 4, 2, ["p1"])
    assert manual.clear_manual_rotation("g1", 4, 2) is True
    assert manual.clear_manual_rotation("g1", 4, 2) is False
    assert manual.get_manual_rotation("g1", 4, 2) is None


def test_seed_missing_never_overwrites(manual):
    manual.set_manual_rotation("g1", 1, 1, ["p1"])

    stored = manual.seed_missing("g1", {"1-1": ["p2"], "1-2": ["p3", "p4"]})

    assert stored == {"1-2": ["p3", "p4"]}
    assert manual.get_manual_rotation("g1", 1, 1) == ["p1"]
    assert manual.get_manual_rotation("g1", 1, 2) == ["p3", "p4"]


def test_invalid_slot_and_game(manual):
    with pytest.raises(ValueError):
        manual.get_manual_rotation("g1", 0, 1)
    with pytest.raises(ValueError):
        manual.set_manual_rotation("g1", 1, 3, ["p1"])
    with pytest.raises(GameNotFoundError):
        manual.get_manual_rotation("nope", 1, 1)
