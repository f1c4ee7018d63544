"""
Courtside Rotations

Rotation planning for youth basketball: tracks who played each of a game's
eight slots and recommends lineups so that playing time stays even across
the season.

This package provides the rotation services and a Flask JSON API for
coaches to drive a game from the bench.
"""
from .models import Game, Player, Rotation
from .services import PersistenceService, RosterOptimizer, RotationStrategy, ServiceFactory
from .ui import create_app, run_web_app
from .utils import APP_TITLE, configure_logging

__version__ = "1.0.0"

__all__ = [
    "Game", "Player", "Rotation", "PersistenceService", "RosterOptimizer",
    "RotationStrategy", "ServiceFactory", "create_app", "run_web_app",
    "APP_TITLE", "configure_logging"
]
