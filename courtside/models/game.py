"""
Game model for the Courtside rotation manager.

This module contains the Rotation and Game dataclasses. A Game is the
aggregate root: attendance, rotation history, per-player stats, the live
slot pointer and manual lineup overrides all live on it.
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .player import PlayerGameStats
from ..utils.constants import SLOT_MINUTES
from ..utils.slots import rotation_number, slot_key


class GameStatus(Enum):
    """Lifecycle of a game."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass
class Rotation:
    """
    Rotation history for one slot.

    Attributes:
        quarter: Quarter number (1-4)
        swap: Swap within the quarter (1-2)
        players_on_court: Players currently on court for this slot
        player_minutes: Minutes credited per player for this slot, including
            players who were substituted out
    """
    quarter: int
    swap: int
    players_on_court: List[str] = field(default_factory=list)
    player_minutes: Dict[str, float] = field(default_factory=dict)

    @property
    def number(self) -> int:
        """Rotation number (1-8)."""
        return rotation_number(self.quarter, self.swap)

    @property
    def key(self) -> str:
        return slot_key(self.quarter, self.swap)

    def minutes_for(self, player_id: str) -> float:
        """Minutes credited to a player in this slot (0 if none)."""
        return self.player_minutes.get(player_id, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "quarter": self.quarter,
            "swap": self.swap,
            "players_on_court": list(self.players_on_court),
            "player_minutes": dict(self.player_minutes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rotation":
        """
        Create a rotation from a stored dictionary.

        Entries saved before per-player minutes existed only carry a flat
        ``minutes`` value; every player on court is credited with it.
        """
        players = list(data.get("players_on_court", data.get("playersOnCourt", [])))
        minutes = data.get("player_minutes", data.get("playerMinutes"))
        if minutes is None:
            flat = data.get("minutes", SLOT_MINUTES)
            minutes = {player_id: flat for player_id in players}
        return cls(
            quarter=int(data["quarter"]),
            swap=int(data["swap"]),
            players_on_court=players,
            player_minutes={k: v for k, v in dict(minutes).items() if v > 0},
        )


def upgrade_rotations(entries: Iterable[Rotation]) -> List[Rotation]:
    """
    Merge rotation entries into one canonical entry per slot.

    Older saves appended a second entry for a slot on every substitution.
    Entries for the same slot are folded together in order: credited minutes
    are summed per player and capped at the slot length, and the on-court
    set of the latest entry wins. Applying this to already canonical data
    returns an equal list.

    Args:
        entries: Rotation entries in the order they were recorded

    Returns:
        One rotation per slot, sorted by rotation number
    """
    merged: Dict[int, Rotation] = {}
    for entry in entries:
        existing = merged.get(entry.number)
        if existing is None:
            merged[entry.number] = Rotation(
                quarter=entry.quarter,
                swap=entry.swap,
                players_on_court=list(entry.players_on_court),
                player_minutes=dict(entry.player_minutes),
            )
            continue
        for player_id, minutes in entry.player_minutes.items():
            total = existing.player_minutes.get(player_id, 0) + minutes
            existing.player_minutes[player_id] = min(SLOT_MINUTES, total)
        existing.players_on_court = list(entry.players_on_court)
    return [merged[number] for number in sorted(merged)]


@dataclass
class Game:
    """
    Represents a single game and everything recorded about it.

    Attributes:
        id: Unique identifier
        opponent: Opposing team name
        date: ISO date string
        location: Venue
        attendance: Ids of players present, in the order they were marked
        rotations: Rotation history, one entry per played slot
        stats: Per-player game statistics keyed by player id
        status: Lifecycle status
        current_quarter: Quarter of the live slot, if the game has started
        current_swap: Swap of the live slot, if the game has started
        manual_rotations: Coach-chosen lineups keyed by slot key ("Q-S")
        created_at: Creation timestamp (epoch seconds)
    """
    id: str
    opponent: str = ""
    date: str = ""
    location: str = ""
    attendance: List[str] = field(default_factory=list)
    rotations: List[Rotation] = field(default_factory=list)
    stats: Dict[str, PlayerGameStats] = field(default_factory=dict)
    status: GameStatus = GameStatus.SCHEDULED
    current_quarter: Optional[int] = None
    current_swap: Optional[int] = None
    manual_rotations: Dict[str, List[str]] = field(default_factory=dict)
    created_at: float = 0.0

    def is_attending(self, player_id: str) -> bool:
        return player_id in self.attendance

    def get_rotation(self, quarter: int, swap: int) -> Optional[Rotation]:
        """Get the history entry for a slot, if the slot has been played."""
        for rotation in self.rotations:
            if rotation.quarter == quarter and rotation.swap == swap:
                return rotation
        return None

    def current_rotation(self) -> Optional[Rotation]:
        """History entry for the live slot, if any."""
        if self.current_quarter is None or self.current_swap is None:
            return None
        return self.get_rotation(self.current_quarter, self.current_swap)

    def current_rotation_number(self) -> Optional[int]:
        if self.current_quarter is None or self.current_swap is None:
            return None
        return rotation_number(self.current_quarter, self.current_swap)

    def stats_for(self, player_id: str) -> PlayerGameStats:
        """Stats for a player, or an empty record when nothing is tracked yet."""
        return self.stats.get(player_id) or PlayerGameStats()

    def swaps_attended(self, player_id: str) -> int:
        """Slots the player was present for in this game (8 when unset)."""
        return self.stats_for(player_id).effective_swaps_attended

    def copy(self) -> "Game":
        """Deep copy, used for simulation and all-or-nothing updates."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert game to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the game
        """
        return {
            "id": self.id,
            "opponent": self.opponent,
            "date": self.date,
            "location": self.location,
            "attendance": list(self.attendance),
            "rotations": [rotation.to_dict() for rotation in self.rotations],
            "stats": {player_id: stats.to_dict() for player_id, stats in self.stats.items()},
            "status": self.status.value,
            "current_quarter": self.current_quarter,
            "current_swap": self.current_swap,
            "manual_rotations": {k: list(v) for k, v in self.manual_rotations.items()},
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        """
        Create game from dictionary for JSON deserialization.

        Rotation history is passed through :func:`upgrade_rotations`, so the
        returned game always holds one rotation per slot with per-player
        minutes regardless of how it was saved.

        Args:
            data: Dictionary representation of game

        Returns:
            Game instance
        """
        rotations = upgrade_rotations(
            Rotation.from_dict(entry) for entry in data.get("rotations", [])
        )
        stats = {
            player_id: PlayerGameStats.from_dict(entry)
            for player_id, entry in (data.get("stats") or {}).items()
        }
        manual = data.get("manual_rotations", data.get("manualRotations")) or {}

        # Keep attendance ordered but without duplicates
        attendance: List[str] = []
        for player_id in data.get("attendance", []):
            if player_id not in attendance:
                attendance.append(player_id)

        return cls(
            id=data["id"],
            opponent=data.get("opponent", ""),
            date=data.get("date", ""),
            location=data.get("location", ""),
            attendance=attendance,
            rotations=rotations,
            stats=stats,
            status=GameStatus(data.get("status", GameStatus.SCHEDULED.value)),
            current_quarter=data.get("current_quarter", data.get("currentQuarter")),
            current_swap=data.get("current_swap", data.get("currentSwap")),
            manual_rotations={k: list(v) for k, v in manual.items()},
            created_at=float(data.get("created_at", data.get("createdAt", 0.0)) or 0.0),
        )
