"""LC-3 simulator core: registers, memory, decoder, traps and the CPU loop."""
from .console import BufferConsole, Console, TerminalConsole
from .cpu_core import CPU, MachineState
from .decoder import Opcode, decode, disassemble
from .errors import ConsoleClosed, ImageLoadError, LC3Error
from .loader import ProgramImage, parse_image, read_image
from .registers import CondFlag, Registers
from .traps import TrapVector

__version__ = "0.2.0"
