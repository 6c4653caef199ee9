"""PySide6 debugger window for the LC-3 simulator."""
