"""TRAP service routines.

Real LC-3 traps jump through the vector table into OS code. Here the OS is
not loaded; each vector is handled directly in Python against the console.
"""
import logging
from enum import IntEnum

logger = logging.getLogger(__name__)

IN_PROMPT = "Enter a character: "


class TrapVector(IntEnum):
    GETC = 0x20   # read a character, no echo
    OUT = 0x21    # write a character
    PUTS = 0x22   # write a word string
    IN = 0x23     # prompt, read and echo a character
    PUTSP = 0x24  # write a byte string (two chars per word)
    HALT = 0x25


class TrapDispatcher:
    def __init__(self, cpu):
        self.cpu = cpu
        self._routines = {
            TrapVector.GETC: self.getc,
            TrapVector.OUT: self.out,
            TrapVector.PUTS: self.puts,
            TrapVector.IN: self.in_,
            TrapVector.PUTSP: self.putsp,
            TrapVector.HALT: self.halt,
        }

    def dispatch(self, vector: int):
        routine = self._routines.get(vector)
        if routine is None:
            logger.debug("ignoring unknown trap vector x%02X", vector)
            return
        routine()

    @property
    def console(self):
        return self.cpu.console

    def getc(self):
        reg = self.cpu.reg
        reg[0] = self.console.read_char()
        reg.update_flags(0)

    def out(self):
        self.console.write(chr(self.cpu.reg[0] & 0xFF))
        self.console.flush()

    def puts(self):
        mem, addr = self.cpu.mem, self.cpu.reg[0]
        chars = []
        word = mem.peek(addr)
        while word:
            chars.append(chr(word & 0xFF))
            addr = (addr + 1) & 0xFFFF
            word = mem.peek(addr)
        self.console.write("".join(chars))
        self.console.flush()

    def in_(self):
        reg = self.cpu.reg
        self.console.write(IN_PROMPT)
        self.console.flush()
        key = self.console.read_char()
        self.console.write(chr(key & 0xFF))
        self.console.flush()
        reg[0] = key
        reg.update_flags(0)

    def putsp(self):
        mem, addr = self.cpu.mem, self.cpu.reg[0]
        chars = []
        word = mem.peek(addr)
        while word:
            chars.append(chr(word & 0xFF))     # low byte first
            high = word >> 8
            if high:
                chars.append(chr(high))
            addr = (addr + 1) & 0xFFFF
            word = mem.peek(addr)
        self.console.write("".join(chars))
        self.console.flush()

    def halt(self):
        self.console.write("HALT\n")
        self.console.flush()
        self.cpu.halt()
