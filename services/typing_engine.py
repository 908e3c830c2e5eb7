# services/typing_engine.py
from dataclasses import dataclass

@dataclass
class TypingStats:
    keystrokes: int = 0
    correct_chars: int = 0
    misses: int = 0

class TypingEngine:
    def __init__(self, target_text: str = ""):
        self.set_text(target_text)
        self.stats = TypingStats()

    def set_text(self, text: str):
        self.target = text or ""
        self.position = 0

    @property
    def expected(self) -> str:
        if self.completed:
            return ""
        return self.target[self.position]

    @property
    def completed(self) -> bool:
        return self.position >= len(self.target)

    def process_key(self, ch: str) -> bool:
        """Advance on an exact match only; a miss leaves the cursor where it is."""
        if not ch or self.completed:
            return False
        self.stats.keystrokes += 1
        if ch == self.target[self.position]:
            self.stats.correct_chars += 1
            self.position += 1
            return True
        self.stats.misses += 1
        return False
