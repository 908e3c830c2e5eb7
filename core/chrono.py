# core/chrono.py
import logging
import threading
from typing import Callable, Optional

from app.calculation import remaining_seconds
from core.threads import CancellationToken, start_daemon

log = logging.getLogger(__name__)


class Countdown:
    """
    Ticks once per interval on its own thread, reporting the time left
    through ``on_tick``. When the limit passes it calls ``on_timeout`` and
    cancels the shared token; when anyone else cancels the token it just stops.
    """

    def __init__(
        self,
        time_limit: float,
        elapsed: Callable[[], float],
        token: CancellationToken,
        on_tick: Callable[[float], None],
        on_timeout: Callable[[], None],
        interval: float = 1.0,
    ):
        self.time_limit = time_limit
        self._elapsed = elapsed
        self.token = token
        self._on_tick = on_tick
        self._on_timeout = on_timeout
        self.interval = interval
        self.ticks = 0
        self.timed_out = False
        self._thread: Optional[threading.Thread] = None

    def start(self):
        if self._thread is not None:
            return
        self._thread = start_daemon(self._run, name="countdown")

    def stop(self, timeout: Optional[float] = None):
        self.token.cancel()
        self.join(timeout)

    def join(self, timeout: Optional[float] = None):
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        while not self.token.cancelled:
            left = remaining_seconds(self.time_limit, self._elapsed())
            if left <= 0:
                self.timed_out = True
                log.info("Countdown reached zero after %d ticks", self.ticks)
                self._on_timeout()
                self.token.cancel()
                break
            self._on_tick(left)
            self.ticks += 1
            # wake early if the input loop finished first
            self.token.wait(min(self.interval, left))
