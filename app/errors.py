# app/errors.py
class TypemasterError(Exception):
    """Base for every error the app raises on purpose."""


class RecordsError(TypemasterError):
    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class CorruptDataError(RecordsError):
    """Records file exists but is not a valid list of results."""


class PersistenceError(RecordsError):
    """Records could not be written to disk."""


class CorpusError(TypemasterError):
    """Passage corpus is empty or malformed."""
