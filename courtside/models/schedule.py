"""Dataclasses describing derived playing-time figures and rotation plans."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..utils.constants import ACTUAL_REASONING


@dataclass(frozen=True)
class SeasonStats:
    """Season totals for one player, derived from game records on demand."""

    player_id: str
    total_minutes: float = 0
    games_attended: int = 0
    games_played: int = 0
    effective_games_attended: float = 0.0
    slots_attended: int = 0
    normalized_play_time: float = 0.0
    total_points: int = 0
    field_goal_percentage: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "total_minutes": self.total_minutes,
            "games_attended": self.games_attended,
            "games_played": self.games_played,
            "effective_games_attended": self.effective_games_attended,
            "slots_attended": self.slots_attended,
            "normalized_play_time": self.normalized_play_time,
            "total_points": self.total_points,
            "field_goal_percentage": self.field_goal_percentage,
        }


@dataclass
class RotationRecommendation:
    """A ranked suggestion for the next slot."""

    player_id: str
    player_name: str
    player_number: str
    rank: int
    normalized_play_time: float
    total_play_time: float
    current_game_minutes: float
    games_attended: int
    priority_level: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "player_number": self.player_number,
            "rank": self.rank,
            "normalized_play_time": round(self.normalized_play_time, 2),
            "total_play_time": self.total_play_time,
            "current_game_minutes": self.current_game_minutes,
            "games_attended": self.games_attended,
            "priority_level": self.priority_level,
            "reason": self.reason,
        }


@dataclass
class OptimizedRotation:
    """One slot of a precomputed plan, either copied from history or projected."""

    quarter: int
    swap: int
    player_ids: List[str]
    minutes_per_player: Dict[str, float]
    reasoning: str

    @property
    def is_actual(self) -> bool:
        return self.reasoning == ACTUAL_REASONING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quarter": self.quarter,
            "swap": self.swap,
            "player_ids": list(self.player_ids),
            "minutes_per_player": dict(self.minutes_per_player),
            "reasoning": self.reasoning,
        }


@dataclass
class PlayerScheduleSummary:
    """Projected playing time for one player across the whole plan."""

    total_minutes: float
    rotations_played: List[int]
    priority_level: str
    notes: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_minutes": self.total_minutes,
            "rotations_played": list(self.rotations_played),
            "priority_level": self.priority_level,
            "notes": self.notes,
        }


@dataclass
class GameRosterOptimization:
    """Full 8-slot plan for a game plus descriptive fairness figures."""

    game_id: str
    strategy: str
    rotations: List[OptimizedRotation] = field(default_factory=list)
    player_summary: Dict[str, PlayerScheduleSummary] = field(default_factory=dict)
    fairness_score: int = 100
    generated_at: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "strategy": self.strategy,
            "rotations": [rotation.to_dict() for rotation in self.rotations],
            "player_summary": {
                player_id: summary.to_dict()
                for player_id, summary in self.player_summary.items()
            },
            "fairness_score": self.fairness_score,
            "generated_at": self.generated_at,
        }
