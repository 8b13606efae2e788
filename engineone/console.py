"""Interactive command console: line editing, history and tab completion."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Optional, TextIO

__all__ = ["History", "Console", "RawTerminal"]

_log = logging.getLogger(__name__)

MAX_COMPLETIONS = 10
_FREQUENCY_LIMIT = 0xFFFFFFFF // 2

_HIGHLIGHT = "\x1b[30m\x1b[47m"
_NORMAL = "\x1b[0m"
_PROMPT = "> "


def _checked_length(length: int) -> int:
    if length <= 0:
        _log.warning("History length is not a whole number. Setting to 1.")
        return 1
    return length


class History:
    """A fixed-size list of previously executed lines, most recent first."""

    def __init__(self, length: int) -> None:
        self._lines: list[str] = [""] * _checked_length(length)

    def resize(self, length: int) -> int:
        """Grow or shrink the history; return the length actually used."""
        length = _checked_length(length)
        if length < len(self._lines):
            del self._lines[length:]
        else:
            self._lines.extend([""] * (length - len(self._lines)))
        return length

    def add(self, line: str) -> None:
        """Put ``line`` at the front, moving it there if it is already stored."""
        try:
            position = self._lines.index(line)
        except ValueError:
            self._lines.pop()
        else:
            del self._lines[position]
        self._lines.insert(0, line)

    def get(self, index: int) -> tuple[str, int]:
        """Return the line at ``index`` and the index it was actually read from.

        The index is clamped to the history, then moved towards the front
        past empty entries.
        """
        index = max(0, min(index, len(self._lines) - 1))
        while not self._lines[index] and index > 0:
            index -= 1
        return self._lines[index], index

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)


class Console:
    """A line editor fed one character at a time from a raw terminal."""

    def __init__(
        self,
        names: Iterable[str],
        execute: Callable[[str], object],
        history_length: int,
        out: Optional[TextIO] = None,
    ) -> None:
        self.frequencies: dict[str, int] = dict.fromkeys(names, 0)
        self.history = History(history_length)
        self.command = ""
        self.cursor = 0
        self.quit = False
        self.command_complete = ""
        self._execute = execute
        self._out = out if out is not None else sys.stdout
        self._printed_prompt = False
        self._escape = False
        self._control_sequence = False
        self._history_index = -1
        self._tabs = 0

    def _write(self, text: str) -> None:
        self._out.write(text)

    def _flush(self) -> None:
        self._out.flush()

    def _redraw(self) -> None:
        length = len(self.command)
        if self.cursor < length:
            self._write("#" * (length - self.cursor))
            self.cursor = length
        self._write("\b \b" * self.cursor)
        self._write(self.command)
        self.cursor = length
        self._flush()

    def _recall(self, step: int) -> None:
        self._history_index += step
        self.command, self._history_index = self.history.get(self._history_index)
        self._redraw()

    def _handle_control(self, char: str) -> None:
        if char == "A":
            self._recall(1)
        elif char == "B":
            self._recall(-1)
        elif char == "C":
            if self.cursor < len(self.command):
                self._write(self.command[self.cursor])
                self._flush()
                self.cursor += 1
        elif char == "D":
            if self.cursor > 0:
                self.cursor -= 1
                self._write("\b")
                self._flush()

    def _enter(self) -> None:
        if self._tabs > 0 and self.command_complete:
            self._tabs = 0
            start = self.command.rfind(" ") + 1
            self.command = self.command[:start] + self.command_complete
            self._redraw()
            return
        self._write("\n")
        self._execute(self.command)
        if self.command:
            self.history.add(self.command)
            self.log_frequency(self.command)
        self._printed_prompt = False
        self._history_index = -1
        self.cursor = 0
        self.command = ""

    def _backspace(self) -> None:
        if self.cursor <= 0:
            return
        cursor = self.cursor
        old_length = len(self.command)
        self.command = self.command[: cursor - 1] + self.command[cursor:]
        self._write("\b" + self.command[cursor - 1 :] + " " + "\b" * (old_length - cursor + 1))
        self._flush()
        self.cursor = cursor - 1

    def _complete(self) -> None:
        start = self.command.rfind(" ") + 1
        fragment, bad_complete, self._tabs = self.complete_fragment(self.command[start:], self._tabs)
        self.command = self.command[:start] + fragment
        if bad_complete:
            self.cursor = 0
        else:
            self._tabs = 0
        self._redraw()

    def _insert(self, char: str) -> None:
        self.command = self.command[: self.cursor] + char + self.command[self.cursor :]
        self.cursor += 1
        rest = self.command[self.cursor :]
        self._write(char + rest + "\b" * len(rest))
        self._flush()

    def feed(self, char: str) -> None:
        """Process one character of terminal input."""
        if len(char) != 1:
            raise ValueError("feed takes exactly one character")
        if not self._printed_prompt:
            self._printed_prompt = True
            self._write(_PROMPT)
            self._flush()

        if self._control_sequence:
            self._handle_control(char)
            self._control_sequence = False
            return
        if self._escape:
            if char == "[":
                self._control_sequence = True
            self._escape = False
            return

        if char == "\r":
            self._enter()
        elif char == "\x7f":
            self._backspace()
        elif char == "\x1b":
            self._escape = True
        elif char == "\x03":
            self._write("\n")
            self.command = ""
            self.cursor = 0
            self._printed_prompt = False
            self._history_index = -1
        elif char == "\x04":
            if not self.command:
                self._write("\n")
                self.quit = True
        elif char == "\t":
            self._complete()
        elif " " <= char <= "~":
            self._insert(char)

        self._tabs = self._tabs + 1 if char == "\t" else 0

    def feed_text(self, text: str) -> None:
        """Process every character of ``text`` in order."""
        for char in text:
            self.feed(char)

    def complete_fragment(self, fragment: str, tabs: int) -> tuple[str, bool, int]:
        """Complete ``fragment`` against the known names.

        Returns the (possibly completed) fragment, whether there were several
        candidates, and the tab count after wrapping. With several candidates
        the list is shown, the one selected by ``tabs`` highlighted and kept
        in ``command_complete``.
        """
        matches = [name for name in self.frequencies if name.startswith(fragment)]
        matches.sort(key=lambda name: self.frequencies[name], reverse=True)
        matches = matches[:MAX_COMPLETIONS]

        bad_complete = len(matches) > 1
        if bad_complete:
            self._write("\n")
        if tabs >= len(matches):
            tabs = 0

        if len(matches) == 1:
            fragment = matches[0]
        else:
            for position, name in enumerate(matches):
                if position == tabs:
                    self.command_complete = name
                    self._write(f"{_HIGHLIGHT}{name}{_NORMAL}\n")
                else:
                    self._write(f"{name}\n")

        if bad_complete:
            self._write(_PROMPT)
            self._flush()
        else:
            self.command_complete = ""
        return fragment, bad_complete, tabs

    def log_frequency(self, line: str) -> None:
        """Count a use of the first name the command word of ``line`` is a prefix of."""
        command = line.partition(" ")[0]
        normalize = False
        for name in self.frequencies:
            if name.startswith(command):
                self.frequencies[name] += 1
                normalize = self.frequencies[name] > _FREQUENCY_LIMIT
                break
        if normalize:
            for name in self.frequencies:
                self.frequencies[name] //= 2

    def set_history_length(self, length: int) -> int:
        """Resize the history; return the length actually used."""
        return self.history.resize(length)


class RawTerminal:
    """Puts a terminal into raw, non-blocking mode for the life of a ``with`` block."""

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved_attrs: Optional[list] = None
        self._saved_flags: Optional[int] = None

    def __enter__(self) -> RawTerminal:
        if not os.isatty(self.fd):
            raise OSError("Not a TTY.")
        import fcntl
        import termios

        self._saved_attrs = termios.tcgetattr(self.fd)
        attrs = termios.tcgetattr(self.fd)
        attrs[0] &= ~(
            termios.IGNBRK
            | termios.BRKINT
            | termios.ICRNL
            | termios.INLCR
            | termios.PARMRK
            | termios.INPCK
            | termios.ISTRIP
            | termios.IXON
        )
        attrs[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.IEXTEN | termios.ISIG)
        attrs[2] &= ~(termios.CSIZE | termios.PARENB)
        attrs[2] |= termios.CS8
        attrs[4] = termios.B9600
        attrs[5] = termios.B9600
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, attrs)
        self._saved_flags = fcntl.fcntl(self.fd, fcntl.F_GETFL)
        fcntl.fcntl(self.fd, fcntl.F_SETFL, self._saved_flags | os.O_NONBLOCK)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        import fcntl
        import termios

        if self._saved_attrs is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_attrs)
            self._saved_attrs = None
        if self._saved_flags is not None:
            fcntl.fcntl(self.fd, fcntl.F_SETFL, self._saved_flags)
            self._saved_flags = None

    def read_char(self) -> Optional[str]:
        """Return one pending character, or None if there is none."""
        try:
            data = os.read(self.fd, 1)
        except BlockingIOError:
            return None
        if not data:
            return None
        return chr(data[0])