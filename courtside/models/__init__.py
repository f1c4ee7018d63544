"""
Models package for the Courtside rotation manager.

This package contains the core data models used throughout the application.
"""
from .player import Player, PlayerGameStats, jersey_sort_key
from .game import Game, GameStatus, Rotation, upgrade_rotations
from .schedule import (
    GameRosterOptimization, OptimizedRotation, PlayerScheduleSummary,
    RotationRecommendation, SeasonStats
)

__all__ = [
    "Player", "PlayerGameStats", "jersey_sort_key", "Game", "GameStatus", "Rotation",
    "upgrade_rotations", "GameRosterOptimization", "OptimizedRotation",
    "PlayerScheduleSummary", "RotationRecommendation", "SeasonStats"
]
