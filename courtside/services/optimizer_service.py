"""Game roster optimizer: precomputes all eight rotation slots of a game."""

from __future__ import annotations

import logging
import math
import statistics
from typing import Dict, Iterable, List, Optional, Union

from ..models import GameRosterOptimization, OptimizedRotation, PlayerScheduleSummary
from ..utils import fmt_minutes, iter_slots, now_ts, slot_key
from ..utils.constants import (
    ACTUAL_REASONING, PLAYERS_ON_COURT, PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM,
    SCHEDULE_DEVIATION_PERCENT, SLOT_MINUTES,
)
from .errors import InsufficientRosterError
from .manual_override_service import ManualOverrideService
from .persistence_service import PersistenceService
from .scoring import RankingContext, RotationStrategy, even_share_minutes, get_strategy, weighted_score
from .simulation import GameSimulation

logger = logging.getLogger(__name__)

MANUAL_REASONING = "manual"


def fairness_score(minutes: Iterable[float]) -> int:
    """
    Score how evenly minutes are spread, 100 meaning perfectly even.

    Uses the population standard deviation of per-player game minutes; every
    8 minutes of deviation costs 100 points, floored at 0. Halves round up.
    """
    values = list(minutes)
    if len(values) < 2:
        return 100
    spread = statistics.pstdev(values)
    return int(math.floor(100 - min(100.0, (spread / 8) * 100) + 0.5))


class RosterOptimizer:
    """
    Plans every slot of a game with a scoring strategy.

    Slots already played are copied from history unchanged; the remaining
    slots are filled one after another, each projection feeding into the
    ranking of the next so that a player who sits several slots climbs the
    order quickly.
    """

    def __init__(
        self,
        persistence_service: PersistenceService,
        manual_override_service: Optional[ManualOverrideService] = None,
    ):
        self.persistence_service = persistence_service
        self.manual_override_service = (
            manual_override_service or ManualOverrideService(persistence_service)
        )

    def optimize(
        self,
        game_id: str,
        attending_player_ids: Optional[Iterable[str]] = None,
        strategy: Union[str, RotationStrategy] = RotationStrategy.SIMPLE,
    ) -> GameRosterOptimization:
        """
        Build a full 8-slot plan for a game.

        Args:
            game_id: Game to plan
            attending_player_ids: Players available for unplayed slots;
                defaults to the game's attendance
            strategy: Strategy used for unplayed slots

        Returns:
            GameRosterOptimization with one rotation per slot

        Raises:
            GameNotFoundError: If the game does not exist
            PlayerNotFoundError: If an attending id is unknown
            InsufficientRosterError: If a slot must be filled with nobody attending
        """
        strategy = RotationStrategy.parse(strategy)
        game = self.persistence_service.load_game(game_id)

        attending: List[str] = []
        for player_id in (game.attendance if attending_player_ids is None else attending_player_ids):
            if player_id not in attending:
                attending.append(player_id)
        players = [self.persistence_service.get_player(player_id) for player_id in attending]

        simulation = GameSimulation(game, players, self.persistence_service.list_games())
        scorer = get_strategy(strategy)
        rotations: List[OptimizedRotation] = []
        seeds: Dict[str, List[str]] = {}

        for number, quarter, swap in iter_slots():
            actual = game.get_rotation(quarter, swap)
            if actual is not None:
                rotations.append(OptimizedRotation(
                    quarter=quarter,
                    swap=swap,
                    player_ids=list(actual.players_on_court),
                    minutes_per_player=dict(actual.player_minutes),
                    reasoning=ACTUAL_REASONING,
                ))
                simulation.fold(actual.player_minutes)
                continue

            if not attending:
                raise InsufficientRosterError(
                    f"No attending players to fill Q{quarter} swap {swap} of game {game_id}"
                )

            context = simulation.context()
            key = slot_key(quarter, swap)
            manual = game.manual_rotations.get(key) if strategy is RotationStrategy.MANUAL else None

            if manual is not None:
                lineup = list(manual)
                reasoning = MANUAL_REASONING
            else:
                lineup = scorer.rank(attending, context)[:PLAYERS_ON_COURT]
                reasoning = self._reasoning(scorer.strategy, lineup[0], simulation, context)
                if strategy is RotationStrategy.MANUAL:
                    seeds[key] = list(lineup)

            minutes = {player_id: SLOT_MINUTES for player_id in lineup}
            rotations.append(OptimizedRotation(
                quarter=quarter,
                swap=swap,
                player_ids=lineup,
                minutes_per_player=minutes,
                reasoning=reasoning,
            ))
            simulation.fold(minutes)
            logger.debug("Game %s slot %d (%s): %s", game_id, number, reasoning, lineup)

        if seeds:
            self.manual_override_service.seed_missing(game_id, seeds)

        score = fairness_score(simulation.minutes.values())
        logger.info(
            "Optimized game %s with %s strategy: %d players, fairness %d",
            game_id, strategy.value, len(attending), score,
        )
        return GameRosterOptimization(
            game_id=game_id,
            strategy=strategy.value,
            rotations=rotations,
            player_summary=self._summarize(attending, rotations, simulation.minutes),
            fairness_score=score,
            generated_at=now_ts(),
        )

    @staticmethod
    def _reasoning(
        strategy: RotationStrategy,
        top_player_id: str,
        simulation: GameSimulation,
        context: RankingContext,
    ) -> str:
        name = simulation.player(top_player_id).name or "Player"
        player = context.get(top_player_id)
        if strategy is RotationStrategy.WEIGHTED:
            return f"{name} (Priority: {weighted_score(player, context):.2f})"
        if strategy is RotationStrategy.PREFERRED:
            return f"{name} has {fmt_minutes(player.game_minutes)} min this game (fewest)"
        return f"{name} has {player.normalized_play_time:.1f} min/game (lowest)"

    @staticmethod
    def _summarize(
        attending: List[str],
        rotations: List[OptimizedRotation],
        minutes: Dict[str, float],
    ) -> Dict[str, PlayerScheduleSummary]:
        target = even_share_minutes(len(attending))
        summary = {}
        for player_id in attending:
            total = minutes.get(player_id, 0)
            played = [
                index + 1
                for index, rotation in enumerate(rotations)
                if rotation.minutes_per_player.get(player_id, 0) > 0
            ]
            percent = ((total - target) / target) * 100 if target > 0 else 0.0

            if percent < -SCHEDULE_DEVIATION_PERCENT:
                level = PRIORITY_HIGH
                notes = f"Scheduled {round(total)} min ({round(percent)}% below target)"
            elif percent > SCHEDULE_DEVIATION_PERCENT:
                level = PRIORITY_LOW
                notes = f"Scheduled {round(total)} min ({round(percent)}% above target)"
            else:
                level = PRIORITY_MEDIUM
                notes = f"Scheduled {round(total)} min (balanced)"

            summary[player_id] = PlayerScheduleSummary(
                total_minutes=total,
                rotations_played=played,
                priority_level=level,
                notes=notes,
            )
        return summary
