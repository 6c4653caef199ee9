"""Terminal stand-in for the debugger: program output is appended to a
read-only text view and key presses in the view become keyboard input."""
from collections import deque

from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtCore import Qt, QEventLoop, Signal
from PySide6.QtGui import QTextCursor, QFontDatabase

from lc3.console import Console
from lc3.errors import ConsoleClosed

class ConsolePanel(QPlainTextEdit):
    key_pressed = Signal()

    def __init__(self):
        super().__init__()
        self.setReadOnly(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        self.setPlaceholderText("Program output. Click here and type for keyboard input.")
        self.keys = deque()

    def keyPressEvent(self, event):
        text = event.text()
        if not text:
            super().keyPressEvent(event)
            return
        self.push_key(10 if text == "\r" else ord(text[0]))

    def push_key(self, code: int):
        # LC-3 programs expect a bare newline for Enter
        self.keys.append(code)
        self.key_pressed.emit()

    def append_text(self, text: str):
        cursor = self.textCursor()
        cursor.movePosition(QTextCursor.End)
        cursor.insertText(text)
        self.setTextCursor(cursor)
        self.ensureCursorVisible()


class QtConsole(Console):
    """Console backed by a ConsolePanel."""

    def __init__(self, panel: ConsolePanel):
        self.panel = panel
        self._loop = None
        self._cancelled = False

    @property
    def waiting(self) -> bool:
        return self._loop is not None

    def key_available(self) -> bool:
        return bool(self.panel.keys)

    def read_char(self) -> int:
        # GETC/IN block the machine, not the window: wait in a nested loop
        self._cancelled = False
        while not self.panel.keys:
            self._loop = QEventLoop()
            self.panel.key_pressed.connect(self._loop.quit)
            self.panel.setFocus()
            try:
                self._loop.exec()
            finally:
                self.panel.key_pressed.disconnect(self._loop.quit)
                self._loop = None
            if self._cancelled:
                raise ConsoleClosed("input wait cancelled")
        return self.panel.keys.popleft()

    def cancel_read(self):
        """Abandon a pending read_char; it raises ConsoleClosed."""
        if self._loop is not None:
            self._cancelled = True
            self._loop.quit()

    def write(self, text: str) -> None:
        self.panel.append_text(text)

    def clear(self):
        self.panel.keys.clear()
        self.panel.clear()
