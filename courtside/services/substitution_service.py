"""
In-slot substitutions and minute corrections for the Courtside rotation manager.

A substitution splits the minutes of one rotation slot between the player
coming off and the player going on. The slot keeps a single history entry;
only its on-court set and per-player minutes change.
"""
import logging

from ..models import Game, Rotation
from ..utils import slot_key, validate_slot
from ..utils.constants import MAX_EDIT_MINUTES, SLOT_MINUTES
from .errors import InvalidMinutesError, InvalidSubstitutionError
from .persistence_service import PersistenceService
from .stats_service import refresh_play_time

logger = logging.getLogger(__name__)


def split_minutes(rotation: Rotation, player_out: str, player_in: str) -> Rotation:
    """
    Apply a substitution to a rotation entry in place.

    The outgoing player's credited minutes are halved (at least 1, at most
    a full slot, never more than the player holds); the incoming player's
    credit is capped at the slot length. The incoming player takes the
    outgoing player's place in the on-court list.

    Raises:
        InvalidSubstitutionError: If the outgoing player is not on court or
            both ids are the same
    """
    if player_out == player_in:
        raise InvalidSubstitutionError("A player cannot be substituted for themselves")
    if player_out not in rotation.players_on_court:
        raise InvalidSubstitutionError(
            f"Player {player_out} is not on court in Q{rotation.quarter} swap {rotation.swap}"
        )

    total = rotation.minutes_for(player_out)
    exchanged = min(total, max(1, min(SLOT_MINUTES, int(total // 2))))

    remaining = total - exchanged
    if remaining > 0:
        rotation.player_minutes[player_out] = remaining
    else:
        rotation.player_minutes.pop(player_out, None)
    incoming = min(SLOT_MINUTES, rotation.minutes_for(player_in) + exchanged)
    if incoming > 0:
        rotation.player_minutes[player_in] = incoming

    on_court = list(rotation.players_on_court)
    if player_in in on_court:
        on_court.remove(player_out)
    else:
        on_court[on_court.index(player_out)] = player_in
    rotation.players_on_court = on_court
    return rotation


class SubstitutionService:
    """Edits the minutes recorded for slots that have been played."""

    def __init__(self, persistence_service: PersistenceService):
        self.persistence_service = persistence_service

    def substitute(
        self, game_id: str, quarter: int, swap: int, player_out: str, player_in: str
    ) -> Rotation:
        """
        Substitute a player mid-slot.

        Args:
            game_id: Game being played
            quarter: Quarter of the slot (1-4)
            swap: Swap of the slot (1-2)
            player_out: Player leaving the court
            player_in: Player joining the court

        Returns:
            The updated rotation entry

        Raises:
            GameNotFoundError: If the game does not exist
            PlayerNotFoundError: If the incoming player does not exist
            InvalidSubstitutionError: If the slot has no history entry, the
                outgoing player is not on court or both ids are the same
        """
        validate_slot(quarter, swap)
        game = self.persistence_service.load_game(game_id)
        self.persistence_service.get_player(player_in)

        rotation = self._rotation(game, quarter, swap)
        split_minutes(rotation, player_out, player_in)
        refresh_play_time(game)
        self.persistence_service.save_game(game)

        logger.info(
            "Game %s slot %s: %s off (%s min), %s on (%s min)",
            game_id, slot_key(quarter, swap),
            player_out, rotation.minutes_for(player_out),
            player_in, rotation.minutes_for(player_in),
        )
        return rotation

    def set_player_minutes(
        self, game_id: str, quarter: int, swap: int, player_id: str, minutes: float
    ) -> Rotation:
        """
        Overwrite the minutes credited to a player for a played slot.

        Setting 0 removes the player's credit for the slot.

        Raises:
            GameNotFoundError: If the game does not exist
            PlayerNotFoundError: If the player does not exist
            InvalidSubstitutionError: If the slot has no history entry
            InvalidMinutesError: If minutes is outside 0..8
        """
        validate_slot(quarter, swap)
        if not 0 <= minutes <= MAX_EDIT_MINUTES:
            raise InvalidMinutesError(f"Minutes must be between 0 and {MAX_EDIT_MINUTES}, got {minutes}")

        game = self.persistence_service.load_game(game_id)
        self.persistence_service.get_player(player_id)
        rotation = self._rotation(game, quarter, swap)
        if minutes > 0:
            rotation.player_minutes[player_id] = minutes
        else:
            rotation.player_minutes.pop(player_id, None)
        refresh_play_time(game)
        self.persistence_service.save_game(game)

        logger.info("Game %s slot %s: %s set to %s min", game_id, slot_key(quarter, swap), player_id, minutes)
        return rotation

    @staticmethod
    def _rotation(game: Game, quarter: int, swap: int) -> Rotation:
        rotation = game.get_rotation(quarter, swap)
        if rotation is None:
            raise InvalidSubstitutionError(
                f"No rotation recorded for Q{quarter} swap {swap} of game {game.id}"
            )
        return rotation
