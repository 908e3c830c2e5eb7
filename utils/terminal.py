import contextlib
import os
import shutil
import sys

import colorama

if os.name == "nt":
    import msvcrt
else:
    import termios
    import tty

CTRL_C = "\x03"
CTRL_D = "\x04"

_KEY_MAP = {
    "\r": "\n",
    "\x7f": "\b",
    "\x08": "\b",
}


@contextlib.contextmanager
def key_mode():
    """
    Put the terminal in cbreak mode for as long as the block runs: keys are
    delivered one at a time and are not echoed. Input already waiting is
    kept, and the previous mode is restored on the way out.

    Does nothing on Windows, where msvcrt reads keys without echo, or when
    stdin is not a terminal.
    """
    if os.name == "nt" or not sys.stdin.isatty():
        yield
        return
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd, termios.TCSANOW)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def _read_raw() -> str:
    if os.name == "nt":
        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            # arrow/function keys arrive as a two-part sequence
            msvcrt.getwch()
            return ""
        return ch
    return sys.stdin.read(1)


def read_key() -> str:
    """
    Block until one key is pressed and return it as a character.
    Returns "" for keys that produce no character.

    Call it inside ``key_mode()``; otherwise a POSIX terminal hands over
    keys only after Enter.
    """
    ch = _read_raw()
    if ch == CTRL_C:
        raise KeyboardInterrupt
    if ch == CTRL_D or (ch == "" and os.name != "nt"):
        raise EOFError("stdin closed")
    return _KEY_MAP.get(ch, ch)


class TerminalKeys:
    """Key source backed by the real keyboard."""

    def capture(self):
        return key_mode()

    def read_key(self) -> str:
        return read_key()


def terminal_width(default: int = 80) -> int:
    return shutil.get_terminal_size((default, 24)).columns


def prepare_console() -> None:
    for stream in (sys.stdout, sys.stdin):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")
    colorama.just_fix_windows_console()
