# ui/console.py
from __future__ import annotations
import sys
import threading
from typing import Iterable, Optional, TextIO, Tuple

from colorama import Cursor, ansi

from app.calculation import format_remaining
from app.themes import Theme, get_theme
from utils.terminal import terminal_width

HEADER_ROW = 1
PASSAGE_TOP = 3


class ConsoleSurface:
    """
    The only writer to the terminal.

    Each call composes one frame and writes it under a lock, so the countdown
    thread and the input loop never interleave. While a passage is on screen
    the two draw on different rows, and every frame ends by putting the
    cursor back on the typing caret.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        stdin: Optional[TextIO] = None,
        theme: Optional[Theme] = None,
        width: Optional[int] = None,
    ):
        self.stream = stream or sys.stdout
        self.stdin = stdin or sys.stdin
        self.theme = theme or get_theme()
        self.width = max(1, width or terminal_width())
        self._lock = threading.Lock()
        self._passage = ""
        self._caret = 0

    # ---------------- layout ----------------
    def _rows(self) -> int:
        return max(1, -(-len(self._passage) // self.width))

    @property
    def countdown_row(self) -> int:
        return PASSAGE_TOP + self._rows() + 1

    @property
    def status_row(self) -> int:
        return self.countdown_row + 1

    @property
    def report_row(self) -> int:
        return self.status_row + 2

    def cell(self, index: int) -> Tuple[int, int]:
        """(row, column) of passage character ``index``, both 1-based."""
        row, col = divmod(index, self.width)
        return PASSAGE_TOP + row, col + 1

    def _goto(self, index: int) -> str:
        row, col = self.cell(index)
        return Cursor.POS(col, row)

    # ---------------- output ----------------
    def _emit(self, frame: str, caret: Optional[int] = None, restore: bool = False) -> None:
        with self._lock:
            if caret is not None:
                self._caret = caret
            if restore:
                frame += self._goto(self._caret)
            self.stream.write(frame)
            self.stream.flush()

    def clear(self) -> None:
        self._passage = ""
        self._caret = 0
        self._emit(ansi.clear_screen() + Cursor.POS(1, 1))

    def write_lines(self, lines: Iterable[str]) -> None:
        self._emit("".join(f"{line}\n" for line in lines))

    def warn(self, message: str) -> None:
        self.write_lines([self.theme.paint(self.theme.wrong, f"Warning: {message}")])

    def show_passage(self, text: str, header: str = "Start typing:") -> None:
        self._passage = text
        self._caret = 0
        parts = [ansi.clear_screen(), Cursor.POS(1, HEADER_ROW), self.theme.paint(self.theme.accent, header)]
        for start in range(0, len(text), self.width):
            parts.append(self._goto(start))
            parts.append(self.theme.paint(self.theme.pending, text[start:start + self.width]))
        parts.append(self._goto(0))
        self._emit("".join(parts))

    def mark_correct(self, index: int, ch: str) -> None:
        self._emit(self._goto(index) + self.theme.paint(self.theme.correct, ch), caret=index + 1, restore=True)

    def mark_wrong(self, index: int, ch: str) -> None:
        self._emit(self._goto(index) + self.theme.paint(self.theme.wrong, ch), caret=index, restore=True)

    def show_remaining(self, seconds: float) -> None:
        label = f"Time remaining: {format_remaining(seconds)}"
        self._emit(
            Cursor.POS(1, self.countdown_row)
            + ansi.clear_line()
            + self.theme.paint(self.theme.secondary, label),
            restore=True,
        )

    def show_timeout(self) -> None:
        self._emit(
            Cursor.POS(1, self.status_row)
            + ansi.clear_line()
            + self.theme.paint(self.theme.accent, "Time is up! Press any key to see your results."),
            restore=True,
        )

    def finish(self) -> None:
        """Leave the positioned layout; later output flows below it."""
        self._emit(Cursor.POS(1, self.report_row))

    # ---------------- input ----------------
    def prompt(self, text: str) -> str:
        self._emit(text)
        line = self.stdin.readline()
        if line == "":
            raise EOFError("input closed")
        return line.rstrip("\r\n")
