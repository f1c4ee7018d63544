"""Shared fixtures: an in-memory store with a numbered roster and game builders."""
from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from courtside.models import Game, GameStatus, Player, PlayerGameStats, Rotation
from courtside.services import PersistenceService
from courtside.utils import slot_for


def make_players(count: int) -> List[Player]:
    """Players p1..pN with jersey numbers 1..N, created in that order."""
    return [
        Player(id=f"p{i}", name=f"Player {i}", number=str(i), created_at=float(i))
        for i in range(1, count + 1)
    ]


def make_game(
    game_id: str,
    attendance: Sequence[str],
    lineups: Iterable[Sequence[str]] = (),
    swaps_attended: Optional[Dict[str, int]] = None,
    created_at: float = 0.0,
    status: GameStatus = GameStatus.COMPLETED,
) -> Game:
    """
    Build a game whose slots 1..k were played by the given lineups, each
    player credited a full slot.
    """
    rotations = []
    for number, lineup in enumerate(lineups, start=1):
        quarter, swap = slot_for(number)
        rotations.append(Rotation(
            quarter=quarter,
            swap=swap,
            players_on_court=list(lineup),
            player_minutes={player_id: 4 for player_id in lineup},
        ))
    stats = {
        player_id: PlayerGameStats(swaps_attended=swaps)
        for player_id, swaps in (swaps_attended or {}).items()
    }
    return Game(
        id=game_id,
        opponent="Opponent",
        date="2024-01-01",
        attendance=list(attendance),
        rotations=rotations,
        stats=stats,
        status=status,
        created_at=created_at,
    )


@pytest.fixture
def store():
    """Empty in-memory persistence service."""
    return PersistenceService()


@pytest.fixture
def roster_store():
    """In-memory store with ten players, p1..p10."""
    service = PersistenceService()
    for player in make_players(10):
        service.save_player(player)
    return service
