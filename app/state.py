from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from core.threads import CancellationToken


@dataclass(frozen=True)
class UserResult:
    name: str
    characters_per_minute: int
    characters_per_second: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "charactersPerMinute": self.characters_per_minute,
            "charactersPerSecond": self.characters_per_second,
        }


class SessionPhase(Enum):
    AWAITING_NAME = "awaiting_name"
    AWAITING_READY = "awaiting_ready"
    RUNNING = "running"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"


@dataclass
class SessionState:
    passage: str = ""
    characters_typed: int = 0
    phase: SessionPhase = SessionPhase.AWAITING_NAME
    name: str = ""
    elapsed: float = 0.0
    token: CancellationToken = field(default_factory=CancellationToken)
    result: Optional[UserResult] = None
