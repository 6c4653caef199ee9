"""Exception types raised outside the instruction core.

Instructions themselves never fault: reserved opcodes and unknown trap
vectors are ignored. Errors only come from the collaborators around the
machine (image files, scripted consoles)."""
from typing import Optional


class LC3Error(Exception):
    """Base class for all simulator errors."""


class ImageLoadError(LC3Error):
    def __init__(self, path: Optional[str], reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to load image: {path or '<bytes>'} ({reason})")


class ConsoleClosed(LC3Error):
    """Raised when a console has no more input to give."""
