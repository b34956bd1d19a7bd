"""Keyboard input for the dashboard, read through blessed."""

import logging
from contextlib import ExitStack

from blessed import Terminal
from blessed.keyboard import Keystroke

logger = logging.getLogger(__name__)

SEQUENCE_NAMES = {
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "escape",
    "KEY_TAB": "tab",
    "KEY_BTAB": "backtab",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_PGUP": "pageup",
    "KEY_PGDOWN": "pagedown",
    "KEY_HOME": "home",
    "KEY_END": "end",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x1b": "escape",
}


def key_name(keystroke: Keystroke) -> str | None:
    """Map a blessed keystroke to the key names the dashboard handles.

    Printable characters map to themselves; special keys map to names such
    as ``up``, ``enter`` or ``escape``.

    Returns:
        Key name, or None for an empty keystroke or a key the dashboard ignores
    """
    if not keystroke:
        return None

    if keystroke.is_sequence:
        name = SEQUENCE_NAMES.get(keystroke.name or "")
        if name is None:
            name = CONTROL_KEYS.get(str(keystroke))
        if name is None:
            logger.debug(f"Ignoring key {keystroke.name or repr(str(keystroke))}")
        return name

    text = str(keystroke)
    if text in CONTROL_KEYS:
        return CONTROL_KEYS[text]
    return text if text.isprintable() else None


class KeyReader:
    """Puts the terminal in cbreak mode and yields one key per poll.

    Ctrl+C still raises KeyboardInterrupt in cbreak mode. Use as a context
    manager so the terminal settings are restored on exit.
    """

    def __init__(self, terminal: Terminal | None = None) -> None:
        self.terminal = terminal or Terminal()
        self._stack = ExitStack()

    def __enter__(self) -> "KeyReader":
        self._stack.enter_context(self.terminal.cbreak())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._stack.close()

    def poll(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for a key.

        Returns:
            Key name, or None if no key the dashboard handles arrived in time
        """
        return key_name(self.terminal.inkey(timeout=max(0.0, timeout)))
