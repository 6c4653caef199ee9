"""Memory-mapped keyboard: KBSR/KBDR.

The device is lazy. Nothing happens until a program reads KBSR; that read
polls the console once and leaves the result in the two cells:

  key waiting  → KBSR = x8000, KBDR = character code
  no key       → KBSR = x0000, KBDR untouched
"""
import logging

from .memory import KBSR, KBDR

logger = logging.getLogger(__name__)

READY = 0x8000  # KBSR bit 15


class KeyboardDevice:
    def __init__(self, console):
        self.console = console

    def register(self, memory):
        """Wire the status-register poll into `memory`."""
        self.memory = memory
        memory.register_io_handler(KBSR, self._poll)

    def _poll(self, addr: int):
        if self.console.key_available():
            key = self.console.read_char()
            self.memory.write(KBSR, READY)
            self.memory.write(KBDR, key)
            logger.debug("keyboard: key x%04X ready", key)
        else:
            self.memory.write(KBSR, 0)
