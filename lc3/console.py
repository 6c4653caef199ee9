"""Character I/O for the machine.

The core never touches stdin/stdout directly; traps and the keyboard device
talk to a `Console`:

  key_available()  non-blocking poll
  read_char()      blocking read of one character code
  write(text)      output, flushed with flush()

`TerminalConsole` is the real terminal. `BufferConsole` is scripted input and
captured output for tests and batch runs.
"""
import os
import sys
from collections import deque
from contextlib import contextmanager
from typing import Iterable, Union

from .errors import ConsoleClosed

EOF = 0xFFFF  # getchar() returning EOF, truncated to a word


class Console:
    def key_available(self) -> bool:
        raise NotImplementedError

    def read_char(self) -> int:
        raise NotImplementedError

    def write(self, text: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        pass

    @contextmanager
    def raw_mode(self):
        """Unbuffered, unechoed input for the duration of the block."""
        yield self


class BufferConsole(Console):
    def __init__(self, keys: Union[str, bytes, Iterable[int]] = ()):
        self._keys = deque()
        self.output = ""
        self.feed(keys)

    def feed(self, keys: Union[str, bytes, Iterable[int]]) -> None:
        if isinstance(keys, str):
            keys = [ord(c) for c in keys]
        self._keys.extend(k & 0xFFFF for k in keys)

    def key_available(self) -> bool:
        return bool(self._keys)

    def read_char(self) -> int:
        if not self._keys:
            raise ConsoleClosed("no input left")
        return self._keys.popleft()

    def write(self, text: str) -> None:
        self.output += text


class TerminalConsole(Console):
    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def key_available(self) -> bool:
        if sys.platform == "win32":
            import msvcrt
            return msvcrt.kbhit()
        import select
        return select.select([self.stdin], [], [], 0) == ([self.stdin], [], [])

    def read_char(self) -> int:
        if sys.platform == "win32":
            import msvcrt
            key = msvcrt.getwch()
            # Enter arrives as CR; POSIX cbreak mode delivers LF
            return 10 if key == "\r" else ord(key)
        data = os.read(self.stdin.fileno(), 1)
        return data[0] if data else EOF

    def write(self, text: str) -> None:
        # one byte per character like putc(), never UTF-8 above x7F
        out = getattr(self.stdout, "buffer", None)
        if out is None:
            self.stdout.write(text)
            return
        out.write(text.encode("latin-1", errors="replace"))

    def flush(self) -> None:
        self.stdout.flush()

    @contextmanager
    def raw_mode(self):
        if sys.platform == "win32" or not self.stdin.isatty():
            # msvcrt reads are already unbuffered and unechoed
            yield self
            return
        import termios
        import tty
        fd = self.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        # cbreak keeps Ctrl-C as SIGINT so the caller sees KeyboardInterrupt
        tty.setcbreak(fd)
        try:
            yield self
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
