"""
Player models for the Courtside rotation manager.

This module contains the Player dataclass, which carries a player's identity,
and PlayerGameStats, which tracks what a player did in one game including
how much of the game they were present for.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..utils.constants import SLOT_COUNT


def jersey_sort_key(number: Optional[str]) -> Tuple[int, int, str]:
    """
    Ordering key for jersey numbers.

    Numeric jerseys sort numerically ("2" before "10") and ahead of
    non-numeric or missing ones, which sort lexically.
    """
    number = (number or "").strip()
    if number.isdigit():
        return (0, int(number), number)
    return (1, 0, number)


@dataclass
class Player:
    """
    Represents a basketball player on the team roster.

    Attributes:
        id: Unique identifier
        name: Player's full name
        number: Jersey number as entered by the coach (e.g. "23")
        created_at: Creation timestamp (epoch seconds), used only as a
            last-resort ordering key
    """
    id: str
    name: str
    number: str = ""
    created_at: float = 0.0

    def jersey_sort_key(self) -> Tuple[int, int, str]:
        return jersey_sort_key(self.number)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            number=str(data.get("number") or ""),
            created_at=float(data.get("created_at", data.get("createdAt", 0.0)) or 0.0),
        )


@dataclass
class PlayerGameStats:
    """
    Per-player statistics for a single game.

    ``swaps_attended`` counts how many of the 8 slots the player was present
    for; ``None`` means the player was there for the whole game.
    """
    steals: int = 0
    rebounds: int = 0
    attempts_1pt: int = 0
    made_1pt: int = 0
    attempts_2pt: int = 0
    made_2pt: int = 0
    attempts_3pt: int = 0
    made_3pt: int = 0
    play_time_minutes: float = 0
    swaps_attended: Optional[int] = None

    COUNTERS = (
        "steals", "rebounds",
        "attempts_1pt", "made_1pt",
        "attempts_2pt", "made_2pt",
        "attempts_3pt", "made_3pt",
    )

    @property
    def effective_swaps_attended(self) -> int:
        """Slots attended, defaulting to the full game when unset."""
        if self.swaps_attended is None:
            return SLOT_COUNT
        return self.swaps_attended

    @property
    def points(self) -> int:
        return self.made_1pt + 2 * self.made_2pt + 3 * self.made_3pt

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {name: getattr(self, name) for name in self.COUNTERS}
        data["play_time_minutes"] = self.play_time_minutes
        data["swaps_attended"] = self.swaps_attended
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PlayerGameStats":
        """Create from dictionary for JSON deserialization."""
        if not data:
            return cls()
        swaps = data.get("swaps_attended", data.get("swapsAttended"))
        return cls(
            **{name: int(data.get(name, 0) or 0) for name in cls.COUNTERS},
            play_time_minutes=data.get("play_time_minutes", data.get("playTimeMinutes", 0)) or 0,
            swaps_attended=int(swaps) if swaps is not None else None,
        )
