"""
Service Factory for dependency injection.

This module provides a factory for creating service instances that share a
single persistence store, so every service sees the same roster and games.
"""
from typing import Dict, Optional

from .game_service import GameService
from .manual_override_service import ManualOverrideService
from .optimizer_service import RosterOptimizer
from .persistence_service import PersistenceService
from .player_service import PlayerService
from .rotation_service import RotationService
from .stats_service import StatsService
from .substitution_service import SubstitutionService


class ServiceFactory:
    """
    Factory for creating service instances with their dependencies injected.

    The persistence service is created lazily and shared by every service
    built by the same factory.
    """

    def __init__(
        self,
        data_file: Optional[str] = None,
        persistence_service: Optional[PersistenceService] = None,
    ):
        """
        Initialize the factory.

        Args:
            data_file: Optional JSON file backing the store
            persistence_service: Existing store to use instead of creating one
        """
        self._data_file = data_file
        self._persistence_service = persistence_service
        self._manual_override_service: Optional[ManualOverrideService] = None

    def create_player_service(self) -> PlayerService:
        return PlayerService(self.get_persistence_service())

    def create_game_service(self) -> GameService:
        return GameService(self.get_persistence_service())

    def create_stats_service(self) -> StatsService:
        return StatsService(self.get_persistence_service())

    def create_rotation_service(self) -> RotationService:
        return RotationService(self.get_persistence_service())

    def create_substitution_service(self) -> SubstitutionService:
        return SubstitutionService(self.get_persistence_service())

    def create_optimizer(self) -> RosterOptimizer:
        """
        Create RosterOptimizer with injected dependencies.

        Returns:
            Optimizer sharing the factory's manual override store
        """
        return RosterOptimizer(
            persistence_service=self.get_persistence_service(),
            manual_override_service=self.get_manual_override_service(),
        )

    def create_complete_service_suite(self) -> Dict[str, object]:
        """
        Create a complete suite of services with proper dependencies.

        Returns:
            Dictionary containing all configured services
        """
        return {
            'persistence': self.get_persistence_service(),
            'players': self.create_player_service(),
            'games': self.create_game_service(),
            'stats': self.create_stats_service(),
            'rotations': self.create_rotation_service(),
            'substitutions': self.create_substitution_service(),
            'manual': self.get_manual_override_service(),
            'optimizer': self.create_optimizer(),
        }

    def get_persistence_service(self) -> PersistenceService:
        """Get singleton persistence service."""
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(self._data_file)
        return self._persistence_service

    def get_manual_override_service(self) -> ManualOverrideService:
        """Get singleton manual override service."""
        if self._manual_override_service is None:
            self._manual_override_service = ManualOverrideService(self.get_persistence_service())
        return self._manual_override_service
