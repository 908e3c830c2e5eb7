import math
from typing import Tuple


def characters_per_minute(typed: int, elapsed_seconds: float) -> int:
    if elapsed_seconds <= 0 or typed <= 0:
        return 0
    return int(math.floor(typed * 60.0 / elapsed_seconds))


def characters_per_second(typed: int, elapsed_seconds: float) -> int:
    if elapsed_seconds <= 0 or typed <= 0:
        return 0
    return int(math.floor(typed / elapsed_seconds))


def compute_speed(typed: int, elapsed_seconds: float) -> Tuple[int, int]:
    """
    Whole characters per minute and per second for a finished run.
    A run that took no measurable time scores 0/0 instead of dividing by zero.
    """
    return (
        characters_per_minute(typed, elapsed_seconds),
        characters_per_second(typed, elapsed_seconds),
    )


def remaining_seconds(time_limit: float, elapsed_seconds: float) -> float:
    return max(0.0, time_limit - elapsed_seconds)


def format_remaining(seconds: float) -> str:
    # round up so a fresh 180 s test reads 03:00, not 02:59
    whole = max(0, int(math.ceil(seconds - 1e-9)))
    minutes, secs = divmod(whole, 60)
    return f"{minutes:02d}:{secs:02d}"
