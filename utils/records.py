import json
import logging
import os
from typing import Any, Dict, List, Optional

from app import config
from app.errors import CorruptDataError, PersistenceError
from app.state import UserResult

log = logging.getLogger(__name__)

# current keys first, then the PascalCase ones older records.json files carry
_FIELD_ALIASES = {
    "name": ("name", "Name"),
    "characters_per_minute": ("charactersPerMinute", "CharactersPerMinute"),
    "characters_per_second": ("charactersPerSecond", "CharactersPerSecond"),
}


def _pick(item: Dict[str, Any], field: str):
    for key in _FIELD_ALIASES[field]:
        if key in item:
            return item[key]
    raise ValueError(f"missing field {_FIELD_ALIASES[field][0]!r}")


def _speed(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{field} must be a non-negative integer, got {value!r}")
    return value


def result_from_dict(item: Any) -> UserResult:
    if not isinstance(item, dict):
        raise ValueError(f"record must be an object, got {type(item).__name__}")
    name = _pick(item, "name")
    if not isinstance(name, str):
        raise ValueError(f"name must be a string, got {name!r}")
    return UserResult(
        name=name,
        characters_per_minute=_speed(_pick(item, "characters_per_minute"), "charactersPerMinute"),
        characters_per_second=_speed(_pick(item, "characters_per_second"), "charactersPerSecond"),
    )


class RecordsStore:
    """
    Leaderboard backed by a single JSON file.

    Every append rewrites the whole file, so memory and disk agree once the
    call returns. A failed write keeps the new entry in memory; the next
    successful ``append`` or ``save`` puts it on disk.
    """

    def __init__(self, path: str = config.RECORDS_PATH):
        self.path = str(path)
        self._records: List[UserResult] = []
        self._loaded = False
        self._read_only = False

    # ---------------- Read ----------------
    def load(self) -> List[UserResult]:
        if not os.path.exists(self.path):
            log.info("No records file at %s, starting empty", self.path)
            self._records = []
            self._loaded = True
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            # the file may be fine; only parse failures count as corrupt
            raise PersistenceError(f"Cannot read records from {self.path}: {e}", self.path) from e

        try:
            records = self._parse(raw)
        except ValueError as e:  # JSONDecodeError included
            raise CorruptDataError(f"Records file {self.path} is corrupt: {e}", self.path) from e

        self._records = records
        self._loaded = True
        log.info("Loaded %d records from %s", len(records), self.path)
        return list(records)

    def _parse(self, raw: str) -> List[UserResult]:
        if not raw.strip():
            return []
        data = json.loads(raw)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"expected a list of records, got {type(data).__name__}")
        return [result_from_dict(item) for item in data]

    @property
    def records(self) -> List[UserResult]:
        self._ensure_loaded()
        return list(self._records)

    def get_ranked(self) -> List[UserResult]:
        self._ensure_loaded()
        # sorted() is stable: equal CPM keeps insertion order
        return sorted(self._records, key=lambda r: r.characters_per_minute, reverse=True)

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._records)

    # ---------------- Write ----------------
    def append(self, result: UserResult) -> None:
        self._ensure_loaded()
        self._records.append(result)
        self.save()

    def save(self) -> None:
        if self._read_only:
            raise PersistenceError(f"Not saving records: {self.path} could not be read and is left as is", self.path)
        payload = [r.to_dict() for r in self._records]
        tmp_path = self.path + config.TMP_SUFFIX
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            log.error("Failed to write %d records to %s: %s", len(payload), self.path, e)
            self._discard(tmp_path)
            raise PersistenceError(f"Could not save records to {self.path}: {e}", self.path) from e

    def recover(self) -> Optional[str]:
        """
        Move an unreadable records file aside and start over with an empty
        board. Returns where the old file went, or None if there was none.
        """
        self._records = []
        self._loaded = True
        if not os.path.exists(self.path):
            return None
        backup = self.path + config.CORRUPT_SUFFIX
        try:
            os.replace(self.path, backup)
        except OSError as e:
            raise PersistenceError(f"Could not move {self.path} aside: {e}", self.path) from e
        log.warning("Moved corrupt records file to %s", backup)
        return backup

    def detach(self) -> None:
        """
        Keep an empty board in memory and never write to ``path``. Used when
        the file exists but cannot be read, so it is not overwritten.
        """
        self._records = []
        self._loaded = True
        self._read_only = True
        log.warning("Records at %s are unavailable; keeping results in memory only", self.path)

    # ---------------- helpers ----------------
    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    @staticmethod
    def _discard(path: str) -> None:
        if os.path.exists(path):
            try:
                os.remove(path)
            except OSError as e:
                log.warning("Could not remove temp file %s: %s", path, e)
