"""
Persistence service for the Courtside rotation manager.

This module stores players and games, either purely in memory or backed by
a JSON file, and hands out copies so that callers can change a game and
save it only once an operation has fully succeeded.
"""
import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional

from ..models import Game, Player
from ..utils.constants import DATA_VERSION
from .errors import GameNotFoundError, PlayerNotFoundError

logger = logging.getLogger(__name__)


class PersistenceService:
    """
    Store for the roster and the game history.

    When ``file_path`` is given the store is loaded from that file on
    creation and written back on every save; otherwise it lives in memory.
    Loading a game always runs the rotation upgrade in :meth:`Game.from_dict`.
    """

    def __init__(self, file_path: Optional[str] = None):
        """
        Initialize the persistence service.

        Args:
            file_path: Optional path to the JSON data file

        Raises:
            json.JSONDecodeError: If the data file contains invalid JSON
        """
        self.file_path = file_path
        self._players: Dict[str, Player] = {}
        self._games: Dict[str, Game] = {}

        if file_path and os.path.exists(file_path):
            self._apply(self.load_data_from_file(file_path))

    # ---------- Players ---------- #

    def save_player(self, player: Player) -> Player:
        """Insert or replace a player."""
        self._players[player.id] = copy.deepcopy(player)
        self._write()
        return player

    def get_player(self, player_id: str) -> Player:
        """
        Get a player by id.

        Raises:
            PlayerNotFoundError: If no player has this id
        """
        player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return copy.deepcopy(player)

    def has_player(self, player_id: str) -> bool:
        return player_id in self._players

    def list_players(self) -> List[Player]:
        """All players, oldest first."""
        players = sorted(self._players.values(), key=lambda p: (p.created_at, p.id))
        return [copy.deepcopy(p) for p in players]

    def delete_player(self, player_id: str) -> None:
        if self._players.pop(player_id, None) is None:
            raise PlayerNotFoundError(player_id)
        self._write()

    def list_attending_players(self, game_id: str) -> List[Player]:
        """
        Players marked as attending a game, in attendance order.

        Raises:
            GameNotFoundError: If the game does not exist
            PlayerNotFoundError: If attendance references an unknown player
        """
        game = self.load_game(game_id)
        return [self.get_player(player_id) for player_id in game.attendance]

    # ---------- Games ---------- #

    def save_game(self, game: Game) -> Game:
        """Insert or replace a game."""
        self._games[game.id] = game.copy()
        self._write()
        return game

    def load_game(self, game_id: str) -> Game:
        """
        Get a copy of a game by id.

        Raises:
            GameNotFoundError: If no game has this id
        """
        game = self._games.get(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game.copy()

    def list_games(self) -> List[Game]:
        """All games, in creation order."""
        games = sorted(self._games.values(), key=lambda g: (g.created_at, g.id))
        return [g.copy() for g in games]

    def delete_game(self, game_id: str) -> None:
        if self._games.pop(game_id, None) is None:
            raise GameNotFoundError(game_id)
        self._write()

    # ---------- Serialization ---------- #

    def to_json(self) -> Dict[str, Any]:
        """
        Convert the whole store to a JSON-serializable dictionary.

        Returns:
            Dictionary with players, games and the data format version
        """
        return {
            "version": DATA_VERSION,
            "players": [p.to_dict() for p in self.list_players()],
            "games": [g.to_dict() for g in self.list_games()],
        }

    @staticmethod
    def save_data_to_file(data: Dict[str, Any], file_path: str) -> None:
        """
        Save store data to a JSON file.

        Args:
            data: Dictionary produced by :meth:`to_json`
            file_path: Path where to save the file

        Raises:
            OSError: If the file cannot be written
        """
        # Ensure directory exists
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def load_data_from_file(file_path: str) -> Dict[str, Any]:
        """
        Load store data from a JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file contains invalid JSON
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Data file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _apply(self, data: Dict[str, Any]) -> None:
        version = data.get("version", 1)
        if version != DATA_VERSION:
            logger.info("Upgrading data file from version %s to %s", version, DATA_VERSION)

        for entry in data.get("players", []):
            try:
                player = Player.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable player entry: %s", e)
                continue
            self._players[player.id] = player

        for entry in data.get("games", []):
            try:
                game = Game.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable game entry: %s", e)
                continue
            self._games[game.id] = game

    def _write(self) -> None:
        if self.file_path:
            self.save_data_to_file(self.to_json(), self.file_path)
