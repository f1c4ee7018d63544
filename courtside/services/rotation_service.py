"""
Live rotation recommendations for the Courtside rotation manager.

During a game the coach asks who should go on next. Recommendations are
ranked with the same context the optimizer builds, folded over the slots
already played.
"""
import logging
from typing import AbstractSet, List, Optional, Tuple, Union

from ..models import Game, RotationRecommendation
from ..utils import next_slot, slot_key
from ..utils.constants import PLAYERS_ON_COURT
from .persistence_service import PersistenceService
from .scoring import RotationStrategy, describe_priority, get_strategy
from .simulation import GameSimulation

logger = logging.getLogger(__name__)


def upcoming_slot(game: Game) -> Optional[Tuple[int, int]]:
    """
    Slot the next lineup is chosen for.

    The live slot while it has no recorded lineup, otherwise the one after
    it; Q1 swap 1 before the game starts, None once the last slot is played.
    """
    if game.current_quarter is None or game.current_swap is None:
        return 1, 1
    if game.current_rotation() is None:
        return game.current_quarter, game.current_swap
    return next_slot(game.current_quarter, game.current_swap)


class RotationService:
    """Ranks attending players for the next lineup of a live game."""

    def __init__(self, persistence_service: PersistenceService):
        self.persistence_service = persistence_service

    def recommend(
        self,
        game_id: str,
        strategy: Union[str, RotationStrategy] = RotationStrategy.SIMPLE,
        count: int = PLAYERS_ON_COURT,
        exclude: AbstractSet[str] = frozenset(),
    ) -> List[RotationRecommendation]:
        """
        Recommend players for the upcoming slot.

        Args:
            game_id: Game being played
            strategy: Strategy used to rank players
            count: Maximum number of recommendations
            exclude: Player ids to leave out, e.g. those currently on court

        Returns:
            Recommendations, most deserving first

        Raises:
            GameNotFoundError: If the game does not exist
            PlayerNotFoundError: If attendance references an unknown player
        """
        strategy = RotationStrategy.parse(strategy)
        game = self.persistence_service.load_game(game_id)
        players = self.persistence_service.list_attending_players(game_id)

        simulation = GameSimulation(game, players, self.persistence_service.list_games())
        for rotation in sorted(game.rotations, key=lambda r: r.number):
            simulation.fold(rotation.player_minutes)
        context = simulation.context()

        candidates = [p for p in simulation.player_ids if p not in exclude]
        ranked = get_strategy(strategy).rank(candidates, context)

        slot = upcoming_slot(game)
        if strategy is RotationStrategy.MANUAL and slot is not None:
            manual = [
                p for p in game.manual_rotations.get(slot_key(*slot), [])
                if p in candidates
            ]
            ranked = manual + [p for p in ranked if p not in manual]

        recommendations = []
        for index, player_id in enumerate(ranked[:max(0, count)]):
            player = simulation.player(player_id)
            player_context = context.get(player_id)
            level, reason = describe_priority(player_context, context)
            recommendations.append(RotationRecommendation(
                player_id=player_id,
                player_name=player.name,
                player_number=player.number,
                rank=index + 1,
                normalized_play_time=player_context.normalized_play_time,
                total_play_time=player_context.total_minutes,
                current_game_minutes=player_context.game_minutes,
                games_attended=player_context.history.games_attended,
                priority_level=level,
                reason=reason,
            ))

        logger.debug(
            "Recommendations for game %s (%s): %s",
            game_id, strategy.value, [r.player_id for r in recommendations],
        )
        return recommendations
