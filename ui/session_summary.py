# ui/session_summary.py
from __future__ import annotations
from typing import List, Sequence

from app.state import SessionPhase, UserResult


def format_record(record: UserResult) -> str:
    return (
        f"{record.name} - {record.characters_per_minute} char/min, "
        f"{record.characters_per_second} char/sec"
    )


def format_leaderboard(records: Sequence[UserResult]) -> List[str]:
    """Header plus one line per record, in the order given (ranked by the store)."""
    return ["Leaderboard:"] + [format_record(r) for r in records]


def format_result(result: UserResult, elapsed: float, phase: SessionPhase) -> List[str]:
    if phase is SessionPhase.TIMED_OUT:
        head = "Time is up! Test finished."
    else:
        head = "Test complete!"
    return [
        f"{head} Characters per minute: {result.characters_per_minute}, "
        f"characters per second: {result.characters_per_second}",
        f"Time: {elapsed:.2f} sec",
    ]
