"""
Services package for the Courtside rotation manager.

This package contains service classes that handle business logic, from
season statistics and scoring strategies to the game optimizer.
"""
from .errors import (
    GameNotFoundError, InsufficientRosterError, InvalidMinutesError,
    InvalidRotationError, InvalidSubstitutionError, PlayerNotFoundError,
    PlayerValidationError, RotationError
)
from .persistence_service import PersistenceService
from .stats_service import StatsService, calculate_play_time, season_stats
from .scoring import (
    PlayerContext, RankingContext, RotationStrategy, ScoringStrategy,
    describe_priority, get_strategy, rank
)
from .simulation import GameSimulation
from .manual_override_service import ManualOverrideService
from .optimizer_service import RosterOptimizer, fairness_score
from .substitution_service import SubstitutionService
from .player_service import PlayerService
from .game_service import GameService
from .rotation_service import RotationService
from .service_factory import ServiceFactory

__all__ = [
    "RotationError", "GameNotFoundError", "PlayerNotFoundError",
    "InvalidSubstitutionError", "InvalidMinutesError", "InsufficientRosterError",
    "InvalidRotationError", "PlayerValidationError", "PersistenceService",
    "StatsService", "calculate_play_time", "season_stats", "PlayerContext",
    "RankingContext", "RotationStrategy", "ScoringStrategy", "describe_priority",
    "get_strategy", "rank", "GameSimulation", "ManualOverrideService",
    "RosterOptimizer", "fairness_score", "SubstitutionService", "PlayerService",
    "GameService", "RotationService", "ServiceFactory"
]
