import logging
from enum import Enum
from typing import Optional

from .alu import ALU
from .console import BufferConsole
from .decoder import Instruction, Opcode, decode, disassemble
from .keyboard import KeyboardDevice
from .memory import Memory
from .registers import Registers
from .traps import TrapDispatcher

logger = logging.getLogger(__name__)


class MachineState(Enum):
    RUNNING = "RUNNING"
    HALTED = "HALTED"


class CPU:
    """
    Software LC-3: one instruction stream, run until the HALT trap.
    ─────────────────────────────────────────────────────
    • fetch()  : read the word at PC into IR, PC++
    • execute(): decode IR and run the opcode handler
    • step()   : one cycle (fetch → execute)
    • run()    : step until HALTED
    • reset()  : clear registers and memory
    """

    def __init__(self, console=None, trace: bool = False):
        self.console = console if console is not None else BufferConsole()
        self.reg = Registers()   # R0..R7, PC, IR, COND
        self.mem = Memory()      # 64K words + keyboard registers
        self.keyboard = KeyboardDevice(self.console)
        self.keyboard.register(self.mem)
        self.traps = TrapDispatcher(self)
        self.state = MachineState.RUNNING
        self.trace = trace
        self.steps = 0
        self._pc_loaded = False
        self._dispatch = self._build_dispatch()

    def _build_dispatch(self):
        return {
            Opcode.BR: self._op_br,
            Opcode.ADD: self._op_add,
            Opcode.LD: self._op_ld,
            Opcode.ST: self._op_st,
            Opcode.JSR: self._op_jsr,
            Opcode.AND: self._op_and,
            Opcode.LDR: self._op_ldr,
            Opcode.STR: self._op_str,
            Opcode.RTI: self._op_reserved,
            Opcode.NOT: self._op_not,
            Opcode.LDI: self._op_ldi,
            Opcode.STI: self._op_sti,
            Opcode.JMP: self._op_jmp,
            Opcode.RES: self._op_reserved,
            Opcode.LEA: self._op_lea,
            Opcode.TRAP: self._op_trap,
        }

    # ───────────────────────────── loading ────────────────────────────
    def load_image(self, image):
        """Place a ProgramImage in memory; the first image loaded sets PC."""
        count = self.mem.load(image.words, image.origin)
        if count and logger.isEnabledFor(logging.DEBUG):
            logger.debug("image at x%04X:\n%s", image.origin,
                         self.mem.dump(image.origin, min(count, 64)))
        if not self._pc_loaded:
            self.reg.pc = image.origin
            self._pc_loaded = True

    @property
    def halted(self) -> bool:
        return self.state is MachineState.HALTED

    def halt(self):
        self.state = MachineState.HALTED
        logger.info("halted after %d instructions", self.steps)

    # ───────────────────────────── fetch ─────────────────────────────
    def fetch(self):
        """Read the 16-bit word at PC into IR, PC += 1"""
        self.reg.ir = self.mem.read(self.reg.pc)
        self.reg.pc = self.reg.pc + 1  # 16-bit wrap-around in Registers

    # ───────────────────────── decode / execute ──────────────────────
    def execute(self):
        instr = decode(self.reg.ir)
        self._dispatch[instr.opcode](instr)

    # ───────────── ADD (0001) / AND (0101) / NOT (1001) ─────────────
    def _op_add(self, instr: Instruction):
        self._alu("ADD", instr)

    def _op_and(self, instr: Instruction):
        self._alu("AND", instr)

    def _alu(self, op: str, instr: Instruction):
        a = self.reg[instr.sr1]
        b = instr.imm5 if instr.imm_flag else self.reg[instr.sr2]
        self.reg[instr.dr] = ALU.execute(op, a, b)
        self.reg.update_flags(instr.dr)

    def _op_not(self, instr: Instruction):
        self.reg[instr.dr] = ALU.complement(self.reg[instr.sr1])
        self.reg.update_flags(instr.dr)

    # ───────────── BR (0000) ──────────────
    def _op_br(self, instr: Instruction):
        if instr.cond_mask & self.reg.cond:
            self.reg.pc = self.reg.pc + instr.pc_offset9

    # ───────────── JMP / RET (1100) ───────
    def _op_jmp(self, instr: Instruction):
        self.reg.pc = self.reg[instr.base_r]

    # ───────────── JSR / JSRR (0100) ──────
    def _op_jsr(self, instr: Instruction):
        self.reg[7] = self.reg.pc            # link (incremented PC)
        if instr.long_flag:                  # JSR (PC + off11)
            self.reg.pc = self.reg.pc + instr.pc_offset11
        else:                                # JSRR (BaseR)
            self.reg.pc = self.reg[instr.base_r]

    # ───────────── LD (0010) / LDI (1010) / LDR (0110) ───────────────
    def _pc_relative(self, instr: Instruction) -> int:
        return (self.reg.pc + instr.pc_offset9) & 0xFFFF

    def _base_relative(self, instr: Instruction) -> int:
        return (self.reg[instr.base_r] + instr.offset6) & 0xFFFF

    def _op_ld(self, instr: Instruction):
        self.reg[instr.dr] = self.mem.read(self._pc_relative(instr))
        self.reg.update_flags(instr.dr)

    def _op_ldi(self, instr: Instruction):
        ptr = self.mem.read(self._pc_relative(instr))
        self.reg[instr.dr] = self.mem.read(ptr)
        self.reg.update_flags(instr.dr)

    def _op_ldr(self, instr: Instruction):
        self.reg[instr.dr] = self.mem.read(self._base_relative(instr))
        self.reg.update_flags(instr.dr)

    # ───────────── LEA (1110) ─────────────
    def _op_lea(self, instr: Instruction):
        self.reg[instr.dr] = self._pc_relative(instr)
        self.reg.update_flags(instr.dr)

    # ───────────── ST (0011) / STI (1011) / STR (0111) ───────────────
    def _op_st(self, instr: Instruction):
        self.mem.write(self._pc_relative(instr), self.reg[instr.dr])

    def _op_sti(self, instr: Instruction):
        ptr = self.mem.read(self._pc_relative(instr))
        self.mem.write(ptr, self.reg[instr.dr])

    def _op_str(self, instr: Instruction):
        self.mem.write(self._base_relative(instr), self.reg[instr.dr])

    # ───────────── TRAP (1111) ────────────
    def _op_trap(self, instr: Instruction):
        self.reg[7] = self.reg.pc
        self.traps.dispatch(instr.trapvect8)

    # ───────────── RTI (1000) / RES (1101) ──
    def _op_reserved(self, instr: Instruction):
        logger.debug("ignoring %s at x%04X", instr.opcode.name,
                     (self.reg.pc - 1) & 0xFFFF)

    # ───────────────────────────── runner ─────────────────────────────
    def step(self) -> MachineState:
        """Run one instruction cycle (fetch-decode-exec)."""
        if self.halted:
            return self.state
        pc = self.reg.pc
        self.fetch()
        if self.trace:
            logger.debug("x%04X: %s", pc, disassemble(self.reg.ir, pc))
        self.steps += 1
        self.execute()
        return self.state

    def run(self, max_steps: Optional[int] = None) -> int:
        """Step until HALT (or `max_steps` instructions); returns the count run."""
        start = self.steps
        while not self.halted:
            if max_steps and self.steps - start >= max_steps:
                logger.warning("step limit %d reached at PC=x%04X",
                               max_steps, self.reg.pc)
                break
            self.step()
        return self.steps - start

    def reset(self):
        """Return registers and memory to the power-on state."""
        self.reg = Registers()
        self.mem.reset()
        self.state = MachineState.RUNNING
        self.steps = 0
        self._pc_loaded = False

    def __repr__(self):
        regs = " ".join(f"R{i}=x{v:04X}" for i, v in enumerate(self.reg.gpr))
        return (f"<CPU PC=x{self.reg.pc:04X} {regs} "
                f"COND={self.reg.cond.letter} {self.state.value}>")
