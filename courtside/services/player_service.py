"""
Player service for the Courtside rotation manager.

This module provides roster management: creating, renaming and removing
players, with jersey numbers kept unique across the team.
"""
import logging
import uuid
from typing import List, Optional

from ..models import Player
from ..utils import now_ts
from .errors import PlayerValidationError
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


class PlayerService:
    """
    Service class for managing the team roster.

    Provides player creation with validation, updates, and removal of a
    player from every stored game.
    """

    MAX_NUMBER_LENGTH = 3

    def __init__(self, persistence_service: PersistenceService):
        """
        Initialize PlayerService.

        Args:
            persistence_service: Store holding players and games
        """
        self.persistence_service = persistence_service

    def validate_player_data(
        self, name: str, number: str, player_id: Optional[str] = None
    ) -> List[str]:
        """
        Validate player data and return list of validation errors.

        Args:
            name: Player's name
            number: Jersey number
            player_id: Id of the player being updated, excluded from the
                uniqueness check

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not name or not name.strip():
            errors.append("Player name is required")

        number = (number or "").strip()
        if not number:
            errors.append("Player number is required")
        elif len(number) > self.MAX_NUMBER_LENGTH:
            errors.append(f"Player number must be at most {self.MAX_NUMBER_LENGTH} characters")
        else:
            taken = [
                p for p in self.persistence_service.list_players()
                if p.number == number and p.id != player_id
            ]
            if taken:
                errors.append(f"Player number {number} is already taken")

        return errors

    def create_player(self, name: str, number: str) -> Player:
        """
        Create and store a new player.

        Raises:
            PlayerValidationError: If the data is invalid
        """
        errors = self.validate_player_data(name, number)
        if errors:
            raise PlayerValidationError("; ".join(errors))

        player = Player(
            id=str(uuid.uuid4()),
            name=name.strip(),
            number=number.strip(),
            created_at=now_ts(),
        )
        self.persistence_service.save_player(player)
        logger.info("Created player %s (#%s)", player.name, player.number)
        return player

    def update_player(
        self, player_id: str, name: Optional[str] = None, number: Optional[str] = None
    ) -> Player:
        """
        Rename a player or change their jersey number.

        Raises:
            PlayerNotFoundError: If the player does not exist
            PlayerValidationError: If the new data is invalid
        """
        player = self.persistence_service.get_player(player_id)
        new_name = player.name if name is None else name
        new_number = player.number if number is None else number

        errors = self.validate_player_data(new_name, new_number, player_id=player_id)
        if errors:
            raise PlayerValidationError("; ".join(errors))

        player.name = new_name.strip()
        player.number = new_number.strip()
        self.persistence_service.save_player(player)
        return player

    def delete_player(self, player_id: str) -> None:
        """
        Remove a player from the roster and from every game.

        Raises:
            PlayerNotFoundError: If the player does not exist
        """
        self.persistence_service.delete_player(player_id)

        for game in self.persistence_service.list_games():
            if not self._forget(game, player_id):
                continue
            self.persistence_service.save_game(game)
        logger.info("Deleted player %s", player_id)

    def list_players(self) -> List[Player]:
        return self.persistence_service.list_players()

    @staticmethod
    def _forget(game, player_id: str) -> bool:
        touched = player_id in game.attendance or player_id in game.stats
        game.attendance = [p for p in game.attendance if p != player_id]
        game.stats.pop(player_id, None)
        for rotation in game.rotations:
            if player_id in rotation.players_on_court or player_id in rotation.player_minutes:
                touched = True
            rotation.players_on_court = [p for p in rotation.players_on_court if p != player_id]
            rotation.player_minutes.pop(player_id, None)
        for key, lineup in game.manual_rotations.items():
            if player_id in lineup:
                touched = True
                game.manual_rotations[key] = [p for p in lineup if p != player_id]
        return touched
