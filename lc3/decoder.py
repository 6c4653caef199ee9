"""Instruction decoding and disassembly.

Every LC-3 instruction is one 16-bit word with the opcode in bits [15:12].
The remaining fields overlap and their meaning depends on the opcode, so
`Instruction` exposes all of them and each handler picks what it needs:

  DR/SR      bits [11:9]     destination / store source register
  SR1/BaseR  bits [8:6]
  SR2        bits [2:0]
  imm flag   bit 5           ADD/AND immediate form
  imm5       bits [4:0]      sign-extended
  offset6    bits [5:0]      LDR/STR, sign-extended
  PCoffset9  bits [8:0]      BR/LD/LDI/LEA/ST/STI, sign-extended
  PCoffset11 bits [10:0]     JSR, sign-extended
  long flag  bit 11          JSR vs JSRR
  nzp        bits [11:9]     BR condition mask
  trapvect8  bits [7:0]
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .alu import sign_extend
from .traps import TrapVector


class Opcode(IntEnum):
    BR = 0b0000
    ADD = 0b0001
    LD = 0b0010
    ST = 0b0011
    JSR = 0b0100
    AND = 0b0101
    LDR = 0b0110
    STR = 0b0111
    RTI = 0b1000   # unused: no supervisor mode
    NOT = 0b1001
    LDI = 0b1010
    STI = 0b1011
    JMP = 0b1100
    RES = 0b1101   # reserved
    LEA = 0b1110
    TRAP = 0b1111


def _signed(value: int) -> int:
    return value - 0x10000 if value & 0x8000 else value


@dataclass(frozen=True)
class Instruction:
    word: int

    @property
    def opcode(self) -> Opcode:
        return Opcode((self.word >> 12) & 0xF)

    @property
    def dr(self) -> int:
        return (self.word >> 9) & 0x7

    @property
    def sr1(self) -> int:
        return (self.word >> 6) & 0x7

    base_r = sr1

    @property
    def sr2(self) -> int:
        return self.word & 0x7

    @property
    def imm_flag(self) -> bool:
        return bool((self.word >> 5) & 1)

    @property
    def imm5(self) -> int:
        return sign_extend(self.word & 0x1F, 5)

    @property
    def offset6(self) -> int:
        return sign_extend(self.word & 0x3F, 6)

    @property
    def pc_offset9(self) -> int:
        return sign_extend(self.word & 0x1FF, 9)

    @property
    def pc_offset11(self) -> int:
        return sign_extend(self.word & 0x7FF, 11)

    @property
    def long_flag(self) -> bool:
        return bool((self.word >> 11) & 1)

    @property
    def cond_mask(self) -> int:
        return (self.word >> 9) & 0x7

    @property
    def trapvect8(self) -> int:
        return self.word & 0xFF


def decode(word: int) -> Instruction:
    return Instruction(word & 0xFFFF)


def disassemble(word: int, address: Optional[int] = None) -> str:
    """Render one word as LC-3 assembly.

    `address` is where the word lives; when given, PC-relative operands are
    shown as absolute targets (x3005) instead of signed offsets (#4).
    """
    ins = decode(word)
    op = ins.opcode

    def target(offset: int) -> str:
        if address is None:
            return f"#{_signed(offset)}"
        return f"x{(address + 1 + offset) & 0xFFFF:04X}"

    if op in (Opcode.ADD, Opcode.AND):
        src2 = f"#{_signed(ins.imm5)}" if ins.imm_flag else f"R{ins.sr2}"
        return f"{op.name} R{ins.dr}, R{ins.sr1}, {src2}"
    if op == Opcode.NOT:
        return f"NOT R{ins.dr}, R{ins.sr1}"
    if op == Opcode.BR:
        if ins.cond_mask == 0:
            return "NOP"
        nzp = "".join(c for c, bit in zip("nzp", (4, 2, 1)) if ins.cond_mask & bit)
        return f"BR{nzp} {target(ins.pc_offset9)}"
    if op == Opcode.JMP:
        return "RET" if ins.base_r == 7 else f"JMP R{ins.base_r}"
    if op == Opcode.JSR:
        if ins.long_flag:
            return f"JSR {target(ins.pc_offset11)}"
        return f"JSRR R{ins.base_r}"
    if op in (Opcode.LD, Opcode.LDI, Opcode.LEA, Opcode.ST, Opcode.STI):
        return f"{op.name} R{ins.dr}, {target(ins.pc_offset9)}"
    if op in (Opcode.LDR, Opcode.STR):
        return f"{op.name} R{ins.dr}, R{ins.base_r}, #{_signed(ins.offset6)}"
    if op == Opcode.TRAP:
        try:
            return TrapVector(ins.trapvect8).name
        except ValueError:
            return f"TRAP x{ins.trapvect8:02X}"
    # RTI / RES
    return f".FILL x{word & 0xFFFF:04X}"
