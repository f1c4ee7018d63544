"""
Time helpers for the Courtside rotation manager.

The rotation engine has no clock; timestamps are only recorded as creation
metadata and as a last-resort ordering key.
"""
import time


def fmt_minutes(minutes: float) -> str:
    """
    Format a minute count for display.

    Args:
        minutes: Number of minutes, possibly fractional

    Returns:
        Whole minutes without decimals, otherwise one decimal place

    Example:
        >>> fmt_minutes(4)
        '4'
        >>> fmt_minutes(5.333)
        '5.3'
    """
    if float(minutes).is_integer():
        return str(int(minutes))
    return f"{minutes:.1f}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()
