"""64K-word LC-3 memory with device register intercepts.

  $0000–$00FF  Trap vector table
  $0100–$01FF  Interrupt vector table
  $0200–$2FFF  OS and supervisor stack
  $3000–$FDFF  User programs
  $FE00–$FFFF  Device registers (only the keyboard pair is modelled)
"""
from typing import Callable, Dict, Iterable

MEM_SIZE = 1 << 16  # Number of 16-bit words in memory

# Device register addresses
KBSR = 0xFE00  # keyboard status
KBDR = 0xFE02  # keyboard data
DSR = 0xFE04   # display status (not modelled)
DDR = 0xFE06   # display data (not modelled)
MCR = 0xFFFE   # machine control (not modelled)


class Memory:
    def __init__(self):
        self.mem = [0]*MEM_SIZE
        # addr → read_fn(addr); runs before the stored value is returned
        self._io_read_handlers: Dict[int, Callable[[int], None]] = {}

    def read(self, addr: int) -> int:
        """Read a 16-bit word, letting a device refresh its register first."""
        addr &= 0xFFFF
        handler = self._io_read_handlers.get(addr)
        if handler is not None:
            handler(addr)
        return self.mem[addr]

    def write(self, addr: int, value: int):
        """Write a 16-bit word to memory"""
        self.mem[addr & 0xFFFF] = value & 0xFFFF  # Mask to 16 bits

    def peek(self, addr: int) -> int:
        """Read without device side effects (debugger views, string traps)."""
        return self.mem[addr & 0xFFFF]

    def load(self, words: Iterable[int], origin: int) -> int:
        """Copy `words` in from `origin`; stops at the top of the address space.

        Returns the number of words placed."""
        count = 0
        for addr, word in zip(range(origin & 0xFFFF, MEM_SIZE), words):
            self.mem[addr] = word & 0xFFFF
            count += 1
        return count

    def register_io_handler(self, addr: int, read_fn: Callable[[int], None]):
        """Register a device hook called on every read of `addr`.

        The hook updates the backing cells itself; `read` then returns
        whatever the cell holds."""
        self._io_read_handlers[addr & 0xFFFF] = read_fn

    def reset(self):
        self.mem[:] = [0]*MEM_SIZE

    def dump(self, start: int, length: int = 64, cols: int = 8) -> str:
        """Hex dump of `length` words from `start`, `cols` words per line."""
        lines = []
        for offset in range(0, length, cols):
            addr = (start + offset) & 0xFFFF
            words = ' '.join(f'{self.mem[(addr + i) & 0xFFFF]:04X}'
                             for i in range(min(cols, length - offset)))
            lines.append(f'x{addr:04X}  {words}')
        return '\n'.join(lines)
