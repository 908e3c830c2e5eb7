# main.py
from __future__ import annotations
import logging
import sys
from typing import Sequence

from app import config
from app.errors import CorpusError, CorruptDataError, PersistenceError
from app.themes import get_theme
from services.session import KeySource, TypingSession
from ui.console import ConsoleSurface
from utils.file_handler import load_passages
from utils.records import RecordsStore
from utils.terminal import TerminalKeys, prepare_console


def setup_logging(log_file: str = config.LOG_FILE) -> None:
    console = logging.StreamHandler(sys.stderr)
    # the typing screen lives on stdout; keep routine chatter off it
    console.setLevel(logging.WARNING)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            console,
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        if issubclass(exctype, KeyboardInterrupt):
            sys.__excepthook__(exctype, value, tb)
            return
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        sys.exit(1)

    sys.excepthook = excepthook


def build_surface() -> ConsoleSurface:
    return ConsoleSurface(theme=get_theme(config.THEME_INDEX))


def open_store(surface: ConsoleSurface, path: str = config.RECORDS_PATH) -> RecordsStore:
    store = RecordsStore(path)
    try:
        store.load()
    except CorruptDataError as e:
        logging.warning("Records file corrupt: %s", e)
        surface.warn(str(e))
        try:
            backup = store.recover()
        except PersistenceError as err:
            logging.error("Could not set aside corrupt records: %s", err)
            surface.warn(f"{err}. Starting with an empty leaderboard for this run.")
        else:
            surface.warn(f"Starting a fresh leaderboard; the old file was moved to {backup}.")
    except PersistenceError as e:
        # unreadable is not corrupt: leave the file where it is
        logging.error("Records file could not be read: %s", e)
        surface.warn(f"{e}. Results from this run will not be saved.")
        store.detach()
    return store


def wants_another(surface: ConsoleSurface) -> bool:
    answer = surface.prompt("\nPress Enter to take the test again, or type q to quit: ")
    return answer.strip().lower() not in config.QUIT_WORDS


def run(
    surface: ConsoleSurface,
    keys: KeySource,
    store: RecordsStore,
    passages: Sequence[str],
    time_limit: float = config.TIME_LIMIT_SECONDS,
) -> int:
    sessions = 0
    try:
        while True:
            TypingSession(store, surface, keys, passages=passages, time_limit=time_limit).run()
            sessions += 1
            if not wants_another(surface):
                break
            surface.clear()
    except (EOFError, KeyboardInterrupt):
        surface.write_lines(["", "Bye!"])
    logging.info("Exiting after %d session(s)", sessions)
    return sessions


def main() -> int:
    setup_logging()
    prepare_console()
    surface = build_surface()

    try:
        passages = load_passages()
    except CorpusError as e:
        logging.error("Passage corpus unusable: %s", e)
        surface.warn(str(e))
        return 2

    store = open_store(surface)
    run(surface, TerminalKeys(), store, passages)
    return 0


if __name__ == "__main__":
    sys.exit(main())
