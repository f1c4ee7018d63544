"""
Slot arithmetic for the 4 quarter x 2 swap game format.

A slot is one (quarter, swap) window; slots are numbered 1..8 in play order.
"""
from typing import Iterator, Optional, Tuple

from .constants import QUARTER_COUNT, SLOT_COUNT, SWAPS_PER_QUARTER


def validate_slot(quarter: int, swap: int) -> None:
    """
    Check that a quarter/swap pair names a real slot.

    Raises:
        ValueError: If quarter or swap is out of range
    """
    if not 1 <= quarter <= QUARTER_COUNT:
        raise ValueError(f"Quarter must be between 1 and {QUARTER_COUNT}, got {quarter}")
    if not 1 <= swap <= SWAPS_PER_QUARTER:
        raise ValueError(f"Swap must be between 1 and {SWAPS_PER_QUARTER}, got {swap}")


def rotation_number(quarter: int, swap: int) -> int:
    """
    Calculate the rotation number (1-8) for a quarter and swap.

    Example:
        >>> rotation_number(1, 1)
        1
        >>> rotation_number(4, 2)
        8
    """
    return (quarter - 1) * SWAPS_PER_QUARTER + swap


def slot_for(number: int) -> Tuple[int, int]:
    """
    Map a rotation number back to its (quarter, swap) pair.

    Raises:
        ValueError: If number is outside 1..8
    """
    if not 1 <= number <= SLOT_COUNT:
        raise ValueError(f"Rotation number must be between 1 and {SLOT_COUNT}, got {number}")
    quarter = (number + SWAPS_PER_QUARTER - 1) // SWAPS_PER_QUARTER
    swap = (number - 1) % SWAPS_PER_QUARTER + 1
    return quarter, swap


def next_slot(quarter: int, swap: int) -> Optional[Tuple[int, int]]:
    """
    Get the slot following the given one.

    Returns:
        The next (quarter, swap) pair, or None after the final slot
    """
    number = rotation_number(quarter, swap)
    if number >= SLOT_COUNT:
        return None
    return slot_for(number + 1)


def slot_key(quarter: int, swap: int) -> str:
    """Key used for per-slot maps such as manual overrides, e.g. ``"2-1"``."""
    return f"{quarter}-{swap}"


def parse_slot_key(key: str) -> Tuple[int, int]:
    """Inverse of :func:`slot_key`."""
    quarter, _, swap = key.partition("-")
    return int(quarter), int(swap)


def iter_slots() -> Iterator[Tuple[int, int, int]]:
    """Yield ``(number, quarter, swap)`` for every slot in play order."""
    for number in range(1, SLOT_COUNT + 1):
        quarter, swap = slot_for(number)
        yield number, quarter, swap
