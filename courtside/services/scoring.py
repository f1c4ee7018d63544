"""Scoring strategies that rank players for the next rotation slot.

Every strategy is a pure function of a :class:`RankingContext`: the same
candidates and context always produce the same order, most in need of
minutes first. Ordering never depends on the iteration order of the
candidate collection; every sort key ends in a unique value.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Tuple, Union

from ..models import SeasonStats, jersey_sort_key
from ..utils import fmt_minutes
from ..utils.constants import (
    DEFAULT_AVERAGE_NORMALIZED_MINUTES, GAME_PLAYER_MINUTES, PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM,
    RECOMMENDATION_DEVIATION_PERCENT, SLOT_COUNT, SLOT_MINUTES, TARGET_GAME_MINUTES,
    WEIGHT_CURRENT_GAME, WEIGHT_GAMES_ATTENDED, WEIGHT_HISTORICAL, WEIGHT_SWAPS_ATTENDED,
)
from .errors import PlayerNotFoundError

logger = logging.getLogger(__name__)

# Float noise from fractional attendance must not split genuine ties
_PRECISION = 9


def _q(value: float) -> float:
    return round(value, _PRECISION)


def even_share_minutes(attending_count: int) -> float:
    """Minutes per player if a whole game were split evenly among attendees."""
    if attending_count <= 0:
        return 0.0
    return min(float(SLOT_COUNT * SLOT_MINUTES), GAME_PLAYER_MINUTES / attending_count)


class RotationStrategy(Enum):
    """How lineups are chosen for slots that have not been played."""
    SIMPLE = "simple"
    WEIGHTED = "weighted"
    PREFERRED = "preferred"
    MANUAL = "manual"

    @classmethod
    def parse(cls, value: Union[str, "RotationStrategy"]) -> "RotationStrategy":
        """
        Accept an enum member or its string value.

        Raises:
            ValueError: If the value names no strategy
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown rotation strategy '{value}' (expected one of: {names})") from None


@dataclass(frozen=True)
class PlayerContext:
    """
    Everything the strategies know about one attending player.

    Attributes:
        player_id: Player identifier
        history: Season totals from every other game
        number: Jersey number
        created_at: Player creation timestamp
        game_minutes: Minutes credited in the current game so far, including
            simulated slots when called from the optimizer
        game_slots_played: Current-game slots the player has been credited in
        game_slots_elapsed: Current-game slots processed while the player was present
        swaps_attended: Slots of the current game the player is present for (0-8)
    """
    player_id: str
    history: SeasonStats
    number: str = ""
    created_at: float = 0.0
    game_minutes: float = 0
    game_slots_played: int = 0
    game_slots_elapsed: int = 0
    swaps_attended: int = SLOT_COUNT

    @property
    def total_minutes(self) -> float:
        """Historical plus current-game minutes."""
        return self.history.total_minutes + self.game_minutes

    @property
    def effective_games_attended(self) -> float:
        return self.history.effective_games_attended + self.game_slots_played / SLOT_COUNT

    @property
    def normalized_play_time(self) -> float:
        """Minutes per effective game, current game included."""
        games = self.effective_games_attended
        return self.total_minutes / games if games > 0 else 0.0

    @property
    def prior_minutes_per_slot(self) -> float:
        """Minutes per slot attended in other games; infinite without history."""
        if self.history.slots_attended <= 0:
            return math.inf
        return self.history.total_minutes / self.history.slots_attended

    @property
    def combined_minutes_per_slot(self) -> float:
        slots = self.history.slots_attended + self.game_slots_elapsed
        if slots <= 0:
            return math.inf
        return self.total_minutes / slots


@dataclass
class RankingContext:
    """Per-player contexts for everyone attending the game being planned."""

    players: Dict[str, PlayerContext] = field(default_factory=dict)

    @property
    def attending_count(self) -> int:
        return len(self.players)

    @property
    def target_minutes(self) -> float:
        """Weighted-score target: the 32-minute game split across attendees."""
        if not self.players:
            return TARGET_GAME_MINUTES / 2
        return TARGET_GAME_MINUTES / self.attending_count

    @property
    def average_historical_normalized(self) -> float:
        with_history = [
            p.history.normalized_play_time
            for p in self.players.values()
            if p.history.total_minutes > 0 or p.history.games_attended > 0
        ]
        if not with_history:
            return DEFAULT_AVERAGE_NORMALIZED_MINUTES
        return sum(with_history) / len(with_history)

    @property
    def max_games_attended(self) -> int:
        return max([p.history.games_attended for p in self.players.values()] + [1])

    def get(self, player_id: str) -> PlayerContext:
        try:
            return self.players[player_id]
        except KeyError:
            raise PlayerNotFoundError(player_id) from None


class ScoringStrategy(ABC):
    """Abstract base class for ranking strategies."""

    strategy: RotationStrategy

    def rank(self, candidates: Iterable[str], context: RankingContext) -> List[str]:
        """
        Order candidates from most to least in need of playing time.

        Args:
            candidates: Player ids eligible for the slot
            context: Ranking context covering every attending player

        Returns:
            Candidate ids, most deserving first

        Raises:
            PlayerNotFoundError: If a candidate has no context entry
        """
        players = [context.get(player_id) for player_id in set(candidates)]
        players.sort(key=lambda p: self.sort_key(p, context))
        ranked = [p.player_id for p in players]
        logger.debug("%s ranking: %s", self.strategy.value, ranked)
        return ranked

    @abstractmethod
    def sort_key(self, player: PlayerContext, context: RankingContext) -> Tuple:
        """Ascending sort key; lower keys play sooner."""
        pass


class SimpleStrategy(ScoringStrategy):
    """Least normalized play time first, then fewest total minutes."""

    strategy = RotationStrategy.SIMPLE

    def sort_key(self, player: PlayerContext, context: RankingContext) -> Tuple:
        return (
            _q(player.normalized_play_time),
            _q(player.total_minutes),
            player.created_at,
            player.player_id,
        )


def weighted_score(player: PlayerContext, context: RankingContext) -> float:
    """
    Multi-factor priority score; lower means higher priority.

    Weights:
    - 50% current game minutes against the even-share target
    - 30% historical normalized time against the attendees' average
    - -15% games attended against the most attended (fewer games plays sooner)
    - 5% share of the current game the player is present for
    """
    target = context.target_minutes
    current_game = player.game_minutes / target if target > 0 else 0.0

    average = context.average_historical_normalized
    historical = player.history.normalized_play_time / average if average > 0 else 0.0

    games_attended = player.history.games_attended / context.max_games_attended
    swaps = player.swaps_attended / SLOT_COUNT

    return (
        WEIGHT_CURRENT_GAME * current_game
        + WEIGHT_HISTORICAL * historical
        + WEIGHT_GAMES_ATTENDED * games_attended
        + WEIGHT_SWAPS_ATTENDED * swaps
    )


class WeightedStrategy(ScoringStrategy):
    """Blended priority score; equal scores fall back to the simple ordering."""

    strategy = RotationStrategy.WEIGHTED

    def sort_key(self, player: PlayerContext, context: RankingContext) -> Tuple:
        return (_q(weighted_score(player, context)),) + SimpleStrategy().sort_key(player, context)


class PreferredStrategy(ScoringStrategy):
    """
    Strict five-level comparison, first difference decides:

    1. current-game minutes, ascending
    2. minutes per slot attended in other games, ascending (no history last)
    3. slots attended in other games, descending
    4. minutes per slot across history and this game, ascending
    5. jersey number, ascending
    """

    strategy = RotationStrategy.PREFERRED

    def sort_key(self, player: PlayerContext, context: RankingContext) -> Tuple:
        return (
            _q(player.game_minutes),
            _q(player.prior_minutes_per_slot),
            -player.history.slots_attended,
            _q(player.combined_minutes_per_slot),
            jersey_sort_key(player.number),
            player.player_id,
        )


_STRATEGIES: Dict[RotationStrategy, ScoringStrategy] = {
    RotationStrategy.SIMPLE: SimpleStrategy(),
    RotationStrategy.WEIGHTED: WeightedStrategy(),
    RotationStrategy.PREFERRED: PreferredStrategy(),
}


def get_strategy(strategy: Union[str, "RotationStrategy"]) -> ScoringStrategy:
    """
    Scoring strategy for a rotation strategy setting.

    Manual lineups are ranked with the preferred strategy whenever a slot
    has no manual entry.
    """
    strategy = RotationStrategy.parse(strategy)
    if strategy is RotationStrategy.MANUAL:
        strategy = RotationStrategy.PREFERRED
    return _STRATEGIES[strategy]


def rank(
    strategy: Union[str, "RotationStrategy"],
    candidates: Iterable[str],
    context: RankingContext,
) -> List[str]:
    """Rank candidates with the named strategy."""
    return get_strategy(strategy).rank(candidates, context)


def describe_priority(player: PlayerContext, context: RankingContext) -> Tuple[str, str]:
    """
    Priority level and a short explanation for a recommendation.

    Returns:
        Tuple of (priority level, reason)
    """
    # Compare against the even share of the slots played so far
    share = even_share_minutes(context.attending_count)
    expected = share * player.game_slots_elapsed / SLOT_COUNT
    deviation = player.game_minutes - expected
    percent = (deviation / expected) * 100 if expected > 0 else 0.0

    if percent < -RECOMMENDATION_DEVIATION_PERCENT:
        level = PRIORITY_HIGH
        reason = f"Needs {fmt_minutes(round(abs(deviation), 1))} more minutes to reach target"
    elif percent > RECOMMENDATION_DEVIATION_PERCENT:
        level = PRIORITY_LOW
        reason = f"Has {fmt_minutes(round(deviation, 1))} extra minutes above target"
    else:
        level = PRIORITY_MEDIUM
        reason = "Playing time is balanced"

    missed = context.max_games_attended - player.history.games_attended
    if player.history.games_attended < context.max_games_attended * 0.7:
        reason += f" (missed {missed} games)"
    return level, reason
