# app/themes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List

from colorama import Back, Fore, Style


@dataclass(frozen=True)
class Theme:
    name: str
    pending: str    # passage text not yet typed
    correct: str    # matched characters
    wrong: str      # expected character after a miss
    secondary: str  # countdown, hints
    accent: str     # headers, results

    def paint(self, color: str, text: str) -> str:
        if not color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"


# -------- Built-in themes --------
THEMES: List[Theme] = [
    Theme(
        name="Classic",
        pending=Style.NORMAL,
        correct=Fore.GREEN,
        wrong=Back.RED + Fore.WHITE,
        secondary=Fore.CYAN,
        accent=Fore.YELLOW + Style.BRIGHT,
    ),
    Theme(
        name="Mono",
        pending=Style.DIM,
        correct=Style.BRIGHT,
        wrong="\x1b[7m",  # reverse video, no colors needed
        secondary="",
        accent=Style.BRIGHT,
    ),
]

DEFAULT_THEME_INDEX = 0


def get_theme(index: int = DEFAULT_THEME_INDEX) -> Theme:
    if 0 <= index < len(THEMES):
        return THEMES[index]
    return THEMES[DEFAULT_THEME_INDEX]
