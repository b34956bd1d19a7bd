"""Tests for keyboard input."""

from contextlib import contextmanager

import pytest
from blessed.keyboard import Keystroke

from copilot_usage.ui.terminal import KeyReader, key_name


class FakeTerminal:
    """Terminal double handing out scripted keystrokes."""

    def __init__(self, *keys: Keystroke) -> None:
        self.keys = list(keys)
        self.timeouts: list[float] = []
        self.in_cbreak = False

    @contextmanager
    def cbreak(self):
        self.in_cbreak = True
        try:
            yield
        finally:
            self.in_cbreak = False

    def inkey(self, timeout=None) -> Keystroke:
        self.timeouts.append(timeout)
        return self.keys.pop(0) if self.keys else Keystroke("")


class TestKeyName:
    """Test keystroke to key name mapping."""

    @pytest.mark.parametrize(
        ("keystroke", "expected"),
        [
            (Keystroke("\x1b[A", code=259, name="KEY_UP"), "up"),
            (Keystroke("\x1b[B", code=258, name="KEY_DOWN"), "down"),
            (Keystroke("\x1bOA", code=259, name="KEY_UP"), "up"),
            (Keystroke("\x1b[5~", code=339, name="KEY_PGUP"), "pageup"),
            (Keystroke("\x1b[6~", code=338, name="KEY_PGDOWN"), "pagedown"),
            (Keystroke("\n", code=343, name="KEY_ENTER"), "enter"),
            (Keystroke("\x1b", code=361, name="KEY_ESCAPE"), "escape"),
            (Keystroke("\x7f", code=263, name="KEY_BACKSPACE"), "backspace"),
        ],
    )
    def test_sequences(self, keystroke, expected):
        assert key_name(keystroke) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("q", "q"), ("/", "/"), ("é", "é"), ("\r", "enter"), ("\t", "tab"), ("\x1b", "escape")],
    )
    def test_plain_characters(self, text, expected):
        assert key_name(Keystroke(text)) == expected

    def test_timeout_gives_none(self):
        assert key_name(Keystroke("")) is None

    def test_unprintable_ignored(self):
        assert key_name(Keystroke("\x01")) is None

    def test_unhandled_sequence_ignored(self):
        assert key_name(Keystroke("\x1b[15~", code=269, name="KEY_F5")) is None


class TestKeyReader:
    """Test polling through the terminal."""

    def test_cbreak_only_inside_context(self):
        terminal = FakeTerminal()
        reader = KeyReader(terminal)

        with reader:
            assert terminal.in_cbreak
        assert not terminal.in_cbreak

    def test_poll_passes_timeout(self):
        terminal = FakeTerminal(Keystroke("\x1b[B", code=258, name="KEY_DOWN"))

        with KeyReader(terminal) as reader:
            assert reader.poll(0.25) == "down"
            assert reader.poll(0.5) is None

        assert terminal.timeouts == [0.25, 0.5]

    def test_negative_timeout_clamped(self):
        terminal = FakeTerminal()

        with KeyReader(terminal) as reader:
            reader.poll(-1.0)

        assert terminal.timeouts == [0.0]
