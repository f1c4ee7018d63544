"""
Manual lineup overrides for the Courtside rotation manager.

When the coach plans a game by hand, each slot's lineup is stored on the
game keyed by slot ("Q-S"). The optimizer uses these entries verbatim in
manual mode and seeds missing ones from the preferred strategy.
"""
import logging
from typing import Dict, Iterable, List, Optional

from ..utils import slot_key, validate_slot
from .errors import InvalidRotationError
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


def _unique(player_ids: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for player_id in player_ids:
        if player_id not in seen:
            seen.append(player_id)
    return seen


class ManualOverrideService:
    """Per-slot manual lineups stored on the game aggregate."""

    def __init__(self, persistence_service: PersistenceService):
        self.persistence_service = persistence_service

    def get_manual_rotation(self, game_id: str, quarter: int, swap: int) -> Optional[List[str]]:
        """
        Manual lineup for a slot.

        Returns:
            Player ids in the order they were chosen, or None if the slot has
            no manual entry

        Raises:
            GameNotFoundError: If the game does not exist
            ValueError: If quarter or swap is out of range
        """
        validate_slot(quarter, swap)
        game = self.persistence_service.load_game(game_id)
        entry = game.manual_rotations.get(slot_key(quarter, swap))
        return list(entry) if entry is not None else None

    def get_all_manual_rotations(self, game_id: str) -> Dict[str, List[str]]:
        game = self.persistence_service.load_game(game_id)
        return {key: list(ids) for key, ids in game.manual_rotations.items()}

    def set_manual_rotation(
        self, game_id: str, quarter: int, swap: int, player_ids: Iterable[str]
    ) -> List[str]:
        """
        Replace the manual lineup for a slot.

        Raises:
            GameNotFoundError: If the game does not exist
            InvalidRotationError: If a player is not attending the game
        """
        validate_slot(quarter, swap)
        game = self.persistence_service.load_game(game_id)
        lineup = _unique(player_ids)

        absent = [player_id for player_id in lineup if not game.is_attending(player_id)]
        if absent:
            raise InvalidRotationError(f"Players not attending this game: {', '.join(absent)}")

        game.manual_rotations[slot_key(quarter, swap)] = lineup
        self.persistence_service.save_game(game)
        logger.info("Manual lineup for game %s slot %s: %s", game_id, slot_key(quarter, swap), lineup)
        return list(lineup)

    def toggle_player(self, game_id: str, quarter: int, swap: int, player_id: str) -> List[str]:
        """
        Add a player to a slot's manual lineup, or remove them if present.

        A slot without a manual entry starts from an empty lineup.
        """
        current = self.get_manual_rotation(game_id, quarter, swap) or []
        if player_id in current:
            lineup = [p for p in current if p != player_id]
        else:
            lineup = current + [player_id]
        return self.set_manual_rotation(game_id, quarter, swap, lineup)

    def clear_manual_rotation(self, game_id: str, quarter: int, swap: int) -> bool:
        """Remove a slot's manual entry; returns False when there was none."""
        validate_slot(quarter, swap)
        game = self.persistence_service.load_game(game_id)
        if game.manual_rotations.pop(slot_key(quarter, swap), None) is None:
            return False
        self.persistence_service.save_game(game)
        return True

    def seed_missing(self, game_id: str, entries: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """
        Store generated lineups for slots that still have no manual entry.

        Existing entries are never overwritten.

        Returns:
            The entries that were actually stored
        """
        if not entries:
            return {}
        game = self.persistence_service.load_game(game_id)
        stored = {}
        for key, lineup in entries.items():
            if key not in game.manual_rotations:
                game.manual_rotations[key] = list(lineup)
                stored[key] = list(lineup)
        if stored:
            self.persistence_service.save_game(game)
            logger.info("Seeded manual lineups for game %s: %s", game_id, sorted(stored))
        return stored
