# services/session.py
from __future__ import annotations
import logging
import random
from typing import Callable, ContextManager, Optional, Protocol, Sequence

from app import config
from app.calculation import compute_speed
from app.errors import PersistenceError
from app.state import SessionPhase, SessionState, UserResult
from app.timer import HighResTimer
from core.chrono import Countdown
from services.typing_engine import TypingEngine
from ui.console import ConsoleSurface
from ui.session_summary import format_leaderboard, format_result
from utils.file_handler import PASSAGES, pick_passage, validate_passages
from utils.records import RecordsStore

log = logging.getLogger(__name__)


class KeySource(Protocol):
    def capture(self) -> ContextManager[None]: ...

    def read_key(self) -> str: ...


class TypingSession:
    """
    One run of the test: name -> ready -> typing -> results.

    The input loop runs on the caller's thread and blocks on ``keys``; the
    countdown runs on its own thread. They share only ``state.token``.
    """

    def __init__(
        self,
        store: RecordsStore,
        surface: ConsoleSurface,
        keys: KeySource,
        passages: Sequence[str] = PASSAGES,
        time_limit: float = config.TIME_LIMIT_SECONDS,
        tick_interval: float = config.TICK_SECONDS,
        rng: Optional[random.Random] = None,
        clock_factory: Callable[[], HighResTimer] = HighResTimer,
    ):
        self.store = store
        self.surface = surface
        self.keys = keys
        self.passages = validate_passages(passages)
        self.time_limit = time_limit
        self.tick_interval = tick_interval
        self.rng = rng
        self.clock = clock_factory()
        self.state = SessionState()
        self.engine = TypingEngine()
        self.countdown: Optional[Countdown] = None

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def token(self):
        return self.state.token

    def run(self) -> UserResult:
        self.state.name = self._await_name()
        idx, passage = pick_passage(self.passages, self.rng)
        self.state.passage = passage
        self.engine.set_text(passage)
        log.info("Session for %r using passage #%d (%d chars)", self.state.name, idx, len(passage))

        self._await_ready()
        self._run_test()
        return self._report()

    # ---------------- phases ----------------
    def _await_name(self) -> str:
        self.state.phase = SessionPhase.AWAITING_NAME
        return self.surface.prompt("Enter your name: ")

    def _await_ready(self) -> None:
        self.state.phase = SessionPhase.AWAITING_READY
        self.surface.clear()
        self.surface.prompt(f"Welcome, {self.state.name}! Press Enter when you are ready.")

    def _run_test(self) -> None:
        self.state.phase = SessionPhase.RUNNING
        self.surface.show_passage(self.state.passage)
        self.clock.start()
        self.countdown = Countdown(
            self.time_limit,
            self.clock.elapsed_sec,
            self.token,
            on_tick=self.surface.show_remaining,
            on_timeout=self.surface.show_timeout,
            interval=self.tick_interval,
        )
        self.countdown.start()
        try:
            with self.keys.capture():
                self._input_loop()
        finally:
            self.token.cancel()
            elapsed = self.clock.stop()
            self.countdown.join()

        if self.engine.completed:
            self.state.phase = SessionPhase.COMPLETED
            self.state.elapsed = elapsed
        else:
            self.state.phase = SessionPhase.TIMED_OUT
            self.state.elapsed = min(elapsed, float(self.time_limit))

    def _input_loop(self) -> None:
        engine = self.engine
        while not engine.completed:
            key = self.keys.read_key()
            # a key that arrives after time ran out does not count
            if self.token.cancelled:
                break
            index = engine.position
            if engine.process_key(key):
                self.surface.mark_correct(index, key)
            elif key:
                self.surface.mark_wrong(index, engine.expected)
            self.state.characters_typed = engine.position

    def _report(self) -> UserResult:
        state = self.state
        cpm, cps = compute_speed(state.characters_typed, state.elapsed)
        result = UserResult(name=state.name, characters_per_minute=cpm, characters_per_second=cps)
        state.result = result
        log.info(
            "Session %s: %r typed %d/%d chars in %.2fs (%d cpm, %d cps; %d keystrokes, %d misses)",
            state.phase.value, state.name, state.characters_typed, len(state.passage),
            state.elapsed, cpm, cps, self.engine.stats.keystrokes, self.engine.stats.misses,
        )

        self.surface.finish()
        self.surface.write_lines(format_result(result, state.elapsed, state.phase))
        try:
            self.store.append(result)
        except PersistenceError as e:
            # the entry stays in memory; the next successful save writes it out
            log.warning("Result for %r not saved: %s", state.name, e)
            self.surface.warn(f"{e}. Your result is kept for this run and will be saved with the next one.")
        self.surface.write_lines([""] + format_leaderboard(self.store.get_ranked()))
        return result
