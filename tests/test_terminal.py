import io
import os
import select
import sys
import threading

import pytest

from utils import terminal

posix_only = pytest.mark.skipif(os.name == "nt", reason="needs a POSIX pty")


class TestReadKey:
    @pytest.mark.parametrize(
        "raw, key",
        [
            ("a", "a"),
            ("Z", "Z"),
            (" ", " "),
            ("é", "é"),
            ("\r", "\n"),
            ("\n", "\n"),
            ("\x7f", "\b"),
            ("\x08", "\b"),
        ],
    )
    def test_key_mapping(self, monkeypatch, raw, key):
        monkeypatch.setattr(terminal, "_read_raw", lambda: raw)
        assert terminal.read_key() == key

    def test_ctrl_c_interrupts(self, monkeypatch):
        monkeypatch.setattr(terminal, "_read_raw", lambda: "\x03")
        with pytest.raises(KeyboardInterrupt):
            terminal.read_key()

    def test_ctrl_d_is_end_of_input(self, monkeypatch):
        monkeypatch.setattr(terminal, "_read_raw", lambda: "\x04")
        with pytest.raises(EOFError):
            terminal.read_key()

    @posix_only
    def test_closed_stdin_is_end_of_input(self, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))
        with pytest.raises(EOFError):
            terminal.read_key()

    def test_terminal_keys_delegates(self, monkeypatch):
        monkeypatch.setattr(terminal, "_read_raw", lambda: "\r")
        assert terminal.TerminalKeys().read_key() == "\n"


@pytest.fixture
def pty_stdin(monkeypatch):
    """A pseudo-terminal installed as sys.stdin; yields the master fd."""
    pty = pytest.importorskip("pty")
    master, slave = pty.openpty()
    stdin = open(slave, "r", encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    try:
        yield master
    finally:
        stdin.close()
        os.close(master)


def _read_keys(count, timeout=2.0):
    """Read ``count`` keys on a helper thread so a lost key fails instead of hanging."""
    keys = []

    def reader():
        for _ in range(count):
            keys.append(terminal.read_key())

    thread = threading.Thread(target=reader, daemon=True)
    thread.start()
    thread.join(timeout)
    return keys


def _screen_output(master, timeout=0.2):
    ready, _, _ = select.select([master], [], [], timeout)
    return os.read(master, 1024) if ready else b""


@posix_only
class TestKeyMode:
    def test_key_typed_before_read_is_kept(self, pty_stdin):
        with terminal.key_mode():
            os.write(pty_stdin, b"a")
            assert _read_keys(1) == ["a"]

    def test_keys_typed_between_reads_are_kept(self, pty_stdin):
        with terminal.key_mode():
            os.write(pty_stdin, b"h")
            assert _read_keys(1) == ["h"]
            # arrives while the caller is busy drawing
            os.write(pty_stdin, b"i!")
            assert _read_keys(2) == ["i", "!"]

    def test_keys_are_not_echoed(self, pty_stdin):
        with terminal.key_mode():
            os.write(pty_stdin, b"xyz")
            assert _read_keys(3) == ["x", "y", "z"]
            assert _screen_output(pty_stdin) == b""

    def test_keys_arrive_without_enter(self, pty_stdin):
        with terminal.key_mode():
            os.write(pty_stdin, b"q")
            assert _read_keys(1, timeout=1.0) == ["q"]

    def test_mode_is_restored(self, pty_stdin):
        import termios

        fd = sys.stdin.fileno()
        before = termios.tcgetattr(fd)
        with terminal.key_mode():
            inside = termios.tcgetattr(fd)
            assert not inside[3] & termios.ECHO
            assert not inside[3] & termios.ICANON
        assert termios.tcgetattr(fd) == before

    def test_mode_is_restored_on_error(self, pty_stdin):
        import termios

        fd = sys.stdin.fileno()
        before = termios.tcgetattr(fd)
        with pytest.raises(KeyboardInterrupt):
            with terminal.key_mode():
                raise KeyboardInterrupt
        assert termios.tcgetattr(fd) == before

    def test_terminal_keys_capture_uses_key_mode(self, pty_stdin):
        import termios

        with terminal.TerminalKeys().capture():
            assert not termios.tcgetattr(sys.stdin.fileno())[3] & termios.ECHO


class TestKeyModeWithoutTerminal:
    def test_piped_stdin_is_left_alone(self, monkeypatch):
        stdin = io.StringIO("abc")
        monkeypatch.setattr(sys, "stdin", stdin)
        with terminal.key_mode():
            assert sys.stdin.read(1) == "a"


class RecordingStdio:
    def __init__(self):
        self.encodings = []

    def reconfigure(self, encoding):
        self.encodings.append(encoding)


class TestPrepareConsole:
    def test_switches_to_utf8_and_enables_ansi(self, monkeypatch):
        out, inp = RecordingStdio(), RecordingStdio()
        calls = []
        monkeypatch.setattr(sys, "stdout", out)
        monkeypatch.setattr(sys, "stdin", inp)
        monkeypatch.setattr(terminal.colorama, "just_fix_windows_console", lambda: calls.append(True))

        terminal.prepare_console()

        assert out.encodings == ["utf-8"]
        assert inp.encodings == ["utf-8"]
        assert calls == [True]

    def test_streams_without_reconfigure_are_skipped(self, monkeypatch):
        calls = []
        monkeypatch.setattr(sys, "stdout", io.StringIO())
        monkeypatch.setattr(sys, "stdin", io.StringIO())
        monkeypatch.setattr(terminal.colorama, "just_fix_windows_console", lambda: calls.append(True))

        terminal.prepare_console()

        assert calls == [True]


def test_terminal_width_falls_back(monkeypatch):
    monkeypatch.setattr(terminal.shutil, "get_terminal_size", lambda fallback: os.terminal_size(fallback))
    assert terminal.terminal_width(default=72) == 72
