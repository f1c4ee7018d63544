"""
Game service for the Courtside rotation manager.

This module drives a game through its lifecycle: scheduling, marking
attendance, starting, recording each slot's lineup, advancing the live slot
pointer and completing the game.
"""
import logging
import uuid
from typing import Iterable, List, Optional

from ..models import Game, GameStatus, Player, Rotation
from ..utils import next_slot, now_ts, slot_key, validate_slot
from ..utils.constants import PLAYERS_ON_COURT, SLOT_MINUTES
from .errors import InsufficientRosterError, InvalidRotationError
from .persistence_service import PersistenceService
from .stats_service import refresh_play_time

logger = logging.getLogger(__name__)


class GameService:
    """
    Service managing games and the live slot pointer.

    Every mutating method loads a copy of the game, applies the change and
    saves only once validation has passed.
    """

    def __init__(self, persistence_service: PersistenceService):
        self.persistence_service = persistence_service

    # ---------- Scheduling ---------- #

    def create_game(self, opponent: str, date: str, location: str = "") -> Game:
        """Schedule a new game with no attendance."""
        game = Game(
            id=str(uuid.uuid4()),
            opponent=opponent.strip(),
            date=date,
            location=location.strip(),
            created_at=now_ts(),
        )
        self.persistence_service.save_game(game)
        logger.info("Created game %s vs %s on %s", game.id, game.opponent, game.date)
        return game

    def get_game(self, game_id: str) -> Game:
        return self.persistence_service.load_game(game_id)

    def list_games(self) -> List[Game]:
        """All games, most recent date first."""
        return sorted(self.persistence_service.list_games(), key=lambda g: g.date, reverse=True)

    def get_completed_games(self) -> List[Game]:
        return [g for g in self.list_games() if g.status is GameStatus.COMPLETED]

    def get_in_progress_game(self) -> Optional[Game]:
        for game in self.persistence_service.list_games():
            if game.status is GameStatus.IN_PROGRESS:
                return game
        return None

    def delete_game(self, game_id: str) -> None:
        self.persistence_service.delete_game(game_id)
        logger.info("Deleted game %s", game_id)

    def set_attendance(self, game_id: str, player_ids: Iterable[str]) -> Game:
        """
        Replace the attendance list of a game.

        Raises:
            GameNotFoundError: If the game does not exist
            PlayerNotFoundError: If a player id is unknown
        """
        game = self.persistence_service.load_game(game_id)
        attendance: List[str] = []
        for player_id in player_ids:
            self.persistence_service.get_player(player_id)
            if player_id not in attendance:
                attendance.append(player_id)

        game.attendance = attendance
        self.persistence_service.save_game(game)
        logger.info("Game %s attendance: %d players", game_id, len(attendance))
        return game

    # ---------- Live game ---------- #

    def start_game(self, game_id: str) -> Game:
        """
        Put a game in progress at Q1 swap 1.

        Raises:
            InsufficientRosterError: If nobody is marked as attending
            InvalidRotationError: If the game is already completed
        """
        game = self.persistence_service.load_game(game_id)
        if game.status is GameStatus.COMPLETED:
            raise InvalidRotationError(f"Game {game_id} is already completed")
        if not game.attendance:
            raise InsufficientRosterError("Cannot start game without players in attendance")

        game.status = GameStatus.IN_PROGRESS
        game.current_quarter, game.current_swap = 1, 1
        self.persistence_service.save_game(game)
        logger.info("Started game %s with %d players", game_id, len(game.attendance))
        return game

    def add_rotation(self, game_id: str, quarter: int, swap: int, player_ids: Iterable[str]) -> Rotation:
        """
        Record the lineup that played a slot, each player credited a full slot.

        Raises:
            GameNotFoundError: If the game does not exist
            InvalidRotationError: If the lineup has no players or more than
                five, includes a player not attending, or the slot already
                has a history entry
        """
        validate_slot(quarter, swap)
        game = self.persistence_service.load_game(game_id)

        lineup: List[str] = []
        for player_id in player_ids:
            if player_id not in lineup:
                lineup.append(player_id)

        if not 1 <= len(lineup) <= PLAYERS_ON_COURT:
            raise InvalidRotationError(
                f"Rotation must have between 1 and {PLAYERS_ON_COURT} players on court"
            )
        absent = [player_id for player_id in lineup if not game.is_attending(player_id)]
        if absent:
            raise InvalidRotationError(f"Players not attending this game: {', '.join(absent)}")
        if game.get_rotation(quarter, swap) is not None:
            raise InvalidRotationError(
                f"Q{quarter} swap {swap} already has a rotation; use a substitution to change it"
            )

        rotation = Rotation(
            quarter=quarter,
            swap=swap,
            players_on_court=lineup,
            player_minutes={player_id: SLOT_MINUTES for player_id in lineup},
        )
        game.rotations.append(rotation)
        game.rotations.sort(key=lambda r: r.number)
        refresh_play_time(game)
        self.persistence_service.save_game(game)
        logger.info("Game %s slot %s lineup: %s", game_id, slot_key(quarter, swap), lineup)
        return rotation

    def advance_slot(self, game_id: str) -> Game:
        """
        Move the live pointer to the next slot; completes the game after the last one.

        Raises:
            InvalidRotationError: If the game is not in progress
        """
        game = self._in_progress(game_id)
        following = next_slot(game.current_quarter, game.current_swap)
        if following is None:
            game.status = GameStatus.COMPLETED
            logger.info("Game %s completed after the final slot", game_id)
        else:
            game.current_quarter, game.current_swap = following
            logger.info("Game %s advanced to %s", game_id, slot_key(*following))
        self.persistence_service.save_game(game)
        return game

    def end_game(self, game_id: str) -> Game:
        game = self.persistence_service.load_game(game_id)
        game.status = GameStatus.COMPLETED
        refresh_play_time(game)
        self.persistence_service.save_game(game)
        logger.info("Ended game %s", game_id)
        return game

    def get_current_players_on_court(self, game_id: str) -> List[Player]:
        """Players on court in the live slot (empty before its lineup is recorded)."""
        game = self.persistence_service.load_game(game_id)
        rotation = game.current_rotation()
        if rotation is None:
            return []
        return [self.persistence_service.get_player(p) for p in rotation.players_on_court]

    def get_available_players(self, game_id: str) -> List[Player]:
        """Attending players who are on the bench in the live slot."""
        game = self.persistence_service.load_game(game_id)
        rotation = game.current_rotation()
        on_court = set(rotation.players_on_court) if rotation is not None else set()
        return [
            self.persistence_service.get_player(player_id)
            for player_id in game.attendance
            if player_id not in on_court
        ]

    def _in_progress(self, game_id: str) -> Game:
        game = self.persistence_service.load_game(game_id)
        if game.status is not GameStatus.IN_PROGRESS or game.current_quarter is None:
            raise InvalidRotationError(f"Game {game_id} is not in progress")
        return game
