"""
Season and per-game statistics for the Courtside rotation manager.

Season figures are folded from the game records every time they are asked
for; nothing is cached because minutes change while a game is live.
"""
import logging
from typing import Iterable, List, Optional

from ..models import Game, PlayerGameStats, SeasonStats
from ..utils.constants import SLOT_COUNT
from .errors import PlayerNotFoundError
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


def calculate_play_time(game: Game, player_id: str) -> float:
    """Minutes credited to a player across a game's rotation history."""
    return sum(rotation.minutes_for(player_id) for rotation in game.rotations)


def refresh_play_time(game: Game) -> None:
    """Recompute ``play_time_minutes`` for every attending player in place."""
    for player_id in game.attendance:
        stats = game.stats.setdefault(player_id, PlayerGameStats())
        stats.play_time_minutes = calculate_play_time(game, player_id)


def season_stats(
    player_id: str,
    games: Iterable[Game],
    exclude_game_id: Optional[str] = None,
) -> SeasonStats:
    """
    Fold a player's game records into season totals.

    For every game the player attended, ``swaps_attended / 8`` (a full game
    when unset) is added to the effective games attended and the game's
    credited minutes to the total. Normalized play time is minutes per
    effective game, or 0 with no attendance.

    Args:
        player_id: Player to aggregate
        games: Games to fold over
        exclude_game_id: Game to leave out, typically the one being planned

    Returns:
        SeasonStats for the player
    """
    games_attended = 0
    games_played = 0
    effective_games = 0.0
    slots_attended = 0
    total_minutes: float = 0
    attempts = 0
    made = 0
    points = 0

    for game in games:
        if game.id == exclude_game_id or not game.is_attending(player_id):
            continue

        games_attended += 1
        stats = game.stats_for(player_id)
        swaps = stats.effective_swaps_attended
        effective_games += swaps / SLOT_COUNT
        slots_attended += swaps

        minutes = calculate_play_time(game, player_id)
        if minutes > 0:
            games_played += 1
        total_minutes += minutes

        attempts += stats.attempts_1pt + stats.attempts_2pt + stats.attempts_3pt
        made += stats.made_1pt + stats.made_2pt + stats.made_3pt
        points += stats.points

    return SeasonStats(
        player_id=player_id,
        total_minutes=total_minutes,
        games_attended=games_attended,
        games_played=games_played,
        effective_games_attended=effective_games,
        slots_attended=slots_attended,
        normalized_play_time=total_minutes / effective_games if effective_games > 0 else 0.0,
        total_points=points,
        field_goal_percentage=(made / attempts) * 100 if attempts > 0 else 0.0,
    )


class StatsService:
    """
    Service for reading and updating player statistics.

    Provides season aggregation over the stored games as well as the
    per-game counters tracked from the bench.
    """

    def __init__(self, persistence_service: PersistenceService):
        self.persistence_service = persistence_service

    def get_player_season_stats(
        self, player_id: str, exclude_game_id: Optional[str] = None
    ) -> SeasonStats:
        """
        Season totals for one player.

        Raises:
            PlayerNotFoundError: If the player does not exist
        """
        if not self.persistence_service.has_player(player_id):
            raise PlayerNotFoundError(player_id)
        return season_stats(player_id, self.persistence_service.list_games(), exclude_game_id)

    def get_all_player_season_stats(self) -> List[SeasonStats]:
        games = self.persistence_service.list_games()
        return [season_stats(p.id, games) for p in self.persistence_service.list_players()]

    def get_player_game_stats(self, game_id: str, player_id: str) -> PlayerGameStats:
        game = self.persistence_service.load_game(game_id)
        return game.stats_for(player_id)

    def update_player_game_stats(self, game_id: str, player_id: str, **updates) -> PlayerGameStats:
        """
        Overwrite individual counters for a player in a game.

        Raises:
            ValueError: If an unknown or negative counter is given
        """
        unknown = set(updates) - set(PlayerGameStats.COUNTERS)
        if unknown:
            raise ValueError(f"Unknown stats: {', '.join(sorted(unknown))}")
        if any(value < 0 for value in updates.values()):
            raise ValueError("Stat counters cannot be negative")

        game = self.persistence_service.load_game(game_id)
        stats = game.stats.setdefault(player_id, PlayerGameStats())
        for name, value in updates.items():
            setattr(stats, name, int(value))
        self.persistence_service.save_game(game)
        return stats

    def increment_stat(self, game_id: str, player_id: str, stat: str, amount: int = 1) -> PlayerGameStats:
        """Add ``amount`` to a counter; counters never drop below zero."""
        current = getattr(self.get_player_game_stats(game_id, player_id), stat, None)
        if current is None or stat not in PlayerGameStats.COUNTERS:
            raise ValueError(f"Unknown stat: {stat}")
        return self.update_player_game_stats(game_id, player_id, **{stat: max(0, current + amount)})

    def set_swaps_attended(self, game_id: str, player_id: str, swaps: int) -> PlayerGameStats:
        """
        Record partial attendance for a player who arrived late or left early.

        Raises:
            ValueError: If swaps is outside 0..8
        """
        if not 0 <= swaps <= SLOT_COUNT:
            raise ValueError(f"Swaps attended must be between 0 and {SLOT_COUNT}")

        game = self.persistence_service.load_game(game_id)
        stats = game.stats.setdefault(player_id, PlayerGameStats())
        stats.swaps_attended = swaps
        self.persistence_service.save_game(game)
        logger.info("Player %s attended %d/%d swaps of game %s", player_id, swaps, SLOT_COUNT, game_id)
        return stats

    def update_play_time_for_game(self, game_id: str) -> Game:
        """Recompute stored play time for everyone attending a game."""
        game = self.persistence_service.load_game(game_id)
        refresh_play_time(game)
        self.persistence_service.save_game(game)
        return game
