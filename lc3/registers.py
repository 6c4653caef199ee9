from dataclasses import dataclass, field
from enum import IntFlag
from typing import List

GENERAL_REGS = 8          # R0–R7
SPECIAL_REGS = ["PC", "IR", "COND"]
PC_START = 0x3000         # default load address for user programs


class CondFlag(IntFlag):
    POS = 1 << 0
    ZRO = 1 << 1
    NEG = 1 << 2

    @property
    def letter(self) -> str:
        return {CondFlag.POS: "P", CondFlag.ZRO: "Z", CondFlag.NEG: "N"}.get(self, "?")


@dataclass
class Registers:
    gpr: List[int] = field(default_factory=lambda: [0]*GENERAL_REGS)
    pc: int = PC_START
    ir: int = 0
    cond: CondFlag = CondFlag.ZRO

    def __getitem__(self, idx: int) -> int:
        if 0 <= idx < GENERAL_REGS:
            return self.gpr[idx]
        raise IndexError("Invalid register index")

    def __setitem__(self, idx: int, value: int) -> None:
        if 0 <= idx < GENERAL_REGS:
            self.gpr[idx] = value & 0xFFFF
        else:
            raise IndexError("Invalid register index")

    def __setattr__(self, name, value):
        # PC and IR are 16-bit like the general registers
        if name in ("pc", "ir"):
            value &= 0xFFFF
        super().__setattr__(name, value)

    def update_flags(self, idx: int) -> None:
        """Set COND from the value now held in register `idx`."""
        value = self[idx]
        if value == 0:
            self.cond = CondFlag.ZRO
        elif value >> 15:           # bit 15 set → negative
            self.cond = CondFlag.NEG
        else:
            self.cond = CondFlag.POS

    def snapshot(self) -> dict:
        """Plain dict of every register, used by the debugger and tests."""
        regs = {f"R{i}": v for i, v in enumerate(self.gpr)}
        regs.update(PC=self.pc, IR=self.ir, COND=int(self.cond))
        return regs
