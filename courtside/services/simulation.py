"""
Running per-player totals for a game being planned.

A GameSimulation starts from each attending player's history in other games
and folds in slots one at a time, whether they were actually played or only
projected. It is a local working copy; nothing here touches stored games.
"""
import logging
from typing import Dict, Iterable, List, Mapping

from ..models import Game, Player
from ..utils.constants import SLOT_COUNT
from .scoring import PlayerContext, RankingContext
from .stats_service import season_stats

logger = logging.getLogger(__name__)


class GameSimulation:
    """Simulated current-game totals for the attending players."""

    def __init__(self, game: Game, players: Iterable[Player], history_games: Iterable[Game]):
        """
        Initialize the simulation at the start of the game.

        Args:
            game: Game being planned
            players: Attending players, in attendance order
            history_games: Games used for historical totals; ``game`` itself
                is excluded if present
        """
        history_games = list(history_games)
        self.game_id = game.id
        self._players: Dict[str, Player] = {p.id: p for p in players}
        self._history = {
            player_id: season_stats(player_id, history_games, exclude_game_id=game.id)
            for player_id in self._players
        }
        self._swaps_attended = {
            player_id: game.swaps_attended(player_id) for player_id in self._players
        }
        self.minutes: Dict[str, float] = {player_id: 0 for player_id in self._players}
        self.slots_played: Dict[str, int] = {player_id: 0 for player_id in self._players}
        self.slots_elapsed = 0

    @property
    def player_ids(self) -> List[str]:
        return list(self._players)

    def player(self, player_id: str) -> Player:
        return self._players[player_id]

    def fold(self, player_minutes: Mapping[str, float]) -> None:
        """
        Credit one slot's minutes to the running totals.

        Players credited with any minutes count as having played the slot;
        minutes for players not attending are ignored.
        """
        for player_id, minutes in player_minutes.items():
            if player_id not in self.minutes:
                logger.debug("Ignoring minutes for non-attending player %s", player_id)
                continue
            self.minutes[player_id] += minutes
            if minutes > 0:
                self.slots_played[player_id] += 1
        self.slots_elapsed = min(SLOT_COUNT, self.slots_elapsed + 1)

    def context(self) -> RankingContext:
        """Ranking context reflecting everything folded so far."""
        players = {}
        for player_id, player in self._players.items():
            swaps = self._swaps_attended[player_id]
            players[player_id] = PlayerContext(
                player_id=player_id,
                history=self._history[player_id],
                number=player.number,
                created_at=player.created_at,
                game_minutes=self.minutes[player_id],
                game_slots_played=self.slots_played[player_id],
                game_slots_elapsed=min(self.slots_elapsed, swaps),
                swaps_attended=swaps,
            )
        return RankingContext(players=players)
