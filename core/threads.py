# core/threads.py
import threading
from typing import Callable, Optional


class CancellationToken:
    """
    One-shot stop signal shared by the input loop and the countdown.
    Whichever side finishes first cancels it; the other side observes it.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)


def start_daemon(target: Callable[[], None], name: str) -> threading.Thread:
    t = threading.Thread(target=target, name=name, daemon=True)
    t.start()
    return t
