"""Widget that shows R0–R7 and the special registers (PC, IR, COND) in a
compact table. Updates are pulled from the CPU instance via the `refresh()`
slot, which the main window triggers after each step or run batch."""
from PySide6.QtWidgets import QWidget, QTableWidget, QTableWidgetItem, QVBoxLayout
from PySide6.QtCore import Slot

from lc3.registers import GENERAL_REGS, SPECIAL_REGS, CondFlag

class RegisterPanel(QWidget):
    HEADERS = [f"R{i}" for i in range(GENERAL_REGS)] + SPECIAL_REGS

    def __init__(self, cpu):
        super().__init__()
        self.cpu = cpu
        self.table = QTableWidget(len(self.HEADERS), 2)
        self.table.setHorizontalHeaderLabels(["Reg", "Value"])
        for row, name in enumerate(self.HEADERS):
            self.table.setItem(row, 0, QTableWidgetItem(name))
            self.table.setItem(row, 1, QTableWidgetItem("x0000"))
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setStretchLastSection(True)

        layout = QVBoxLayout(self)
        layout.addWidget(self.table)
        self.setLayout(layout)
        self.refresh()

    @Slot()
    def refresh(self):
        """Update table values from CPU state."""
        regs = self.cpu.reg.snapshot()
        for row, name in enumerate(self.HEADERS):
            val = regs[name]
            if name == "COND":
                text = CondFlag(val).letter
            elif row < GENERAL_REGS:
                signed = val - 0x10000 if val & 0x8000 else val
                text = f"x{val:04X}  ({signed})"
            else:
                text = f"x{val:04X}"
            self.table.item(row, 1).setText(text)
