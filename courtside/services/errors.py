"""
Exceptions raised by the rotation services.

All of them are fatal to the operation that raised them and leave stored
data untouched; callers are expected to report them rather than retry.
"""


class RotationError(Exception):
    """Base class for rotation engine errors."""
    pass


class GameNotFoundError(RotationError):
    """Referenced game id is not in storage."""

    def __init__(self, game_id: str):
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id


class PlayerNotFoundError(RotationError):
    """Referenced player id is not in storage."""

    def __init__(self, player_id: str):
        super().__init__(f"Player not found: {player_id}")
        self.player_id = player_id


class InvalidSubstitutionError(RotationError):
    """Slot has no history entry, or the outgoing player is not on court."""
    pass


class InvalidMinutesError(RotationError):
    """Explicit minute edit outside the accepted range."""
    pass


class InsufficientRosterError(RotationError):
    """No attending players available to fill a slot."""
    pass


class InvalidRotationError(RotationError):
    """Lineup or game state change that the live game flow does not allow."""
    pass


class PlayerValidationError(RotationError):
    """Roster entry rejected by player validation."""
    pass
