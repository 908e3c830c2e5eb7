from services.typing_engine import TypingEngine


def test_match_advances():
    engine = TypingEngine("abc")
    assert engine.process_key("a")
    assert engine.position == 1
    assert engine.expected == "b"


def test_mismatch_does_not_advance():
    engine = TypingEngine("abc")
    assert not engine.process_key("x")
    assert not engine.process_key("B")
    assert engine.position == 0
    assert engine.stats.misses == 2
    assert engine.stats.correct_chars == 0


def test_completes_on_last_char():
    engine = TypingEngine("ab")
    for ch in "axb":
        engine.process_key(ch)
    assert engine.completed
    assert engine.expected == ""
    assert not engine.process_key("c")
    assert engine.position == 2


def test_empty_key_is_ignored():
    engine = TypingEngine("a")
    assert not engine.process_key("")
    assert engine.stats.keystrokes == 0

