import io

import pytest

from app.themes import get_theme
from tests.fakes import RecordingStream
from ui.console import ConsoleSurface
from utils.records import RecordsStore


@pytest.fixture
def stream():
    return RecordingStream()


@pytest.fixture
def make_surface(stream):
    def _make(lines="", width=40):
        return ConsoleSurface(stream=stream, stdin=io.StringIO(lines), theme=get_theme(0), width=width)
    return _make


@pytest.fixture
def store(tmp_path):
    return RecordsStore(str(tmp_path / "records.json"))
