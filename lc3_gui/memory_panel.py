"""Central widget that displays all 65536 memory words in a scrollable table.

Cells are read with `Memory.peek` so that scrolling past the keyboard
registers never polls the keyboard."""
from PySide6.QtWidgets import QTableView, QWidget, QVBoxLayout
from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex
from PySide6.QtGui import QBrush, QColor

from lc3.memory import MEM_SIZE
from lc3.decoder import disassemble

MEM_COLS = 16  # 16 columns x 4096 rows == 65536 words
PC_BRUSH = QBrush(QColor("#ffe08a"))

class MemoryModel(QAbstractTableModel):
    def __init__(self, cpu):
        super().__init__()
        self.cpu = cpu

    # Qt model overrides
    def rowCount(self, parent=QModelIndex()):
        return MEM_SIZE // MEM_COLS

    def columnCount(self, parent=QModelIndex()):
        return MEM_COLS

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        addr = index.row()*MEM_COLS + index.column()
        if role == Qt.DisplayRole:
            return f"{self.cpu.mem.peek(addr):04X}"
        if role == Qt.ToolTipRole:
            return f"x{addr:04X}: {disassemble(self.cpu.mem.peek(addr), addr)}"
        if role == Qt.BackgroundRole and addr == self.cpu.reg.pc:
            return PC_BRUSH
        return None

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return f"+{section:X}"
        return f"x{section*MEM_COLS:04X}"

    def refresh(self):
        top_left = self.index(0, 0)
        bottom_right = self.index(self.rowCount()-1, self.columnCount()-1)
        self.dataChanged.emit(top_left, bottom_right)

class MemoryPanel(QWidget):
    def __init__(self, cpu):
        super().__init__()
        self.cpu = cpu
        self.model = MemoryModel(cpu)
        self.view = QTableView()
        self.view.setModel(self.model)
        self.view.horizontalHeader().setStretchLastSection(True)
        self.view.setSelectionMode(QTableView.NoSelection)
        layout = QVBoxLayout(self)
        layout.addWidget(self.view)
        self.setLayout(layout)

    def refresh(self):
        self.model.refresh()

    def show_address(self, addr: int):
        index = self.model.index((addr & 0xFFFF) // MEM_COLS, addr % MEM_COLS)
        self.view.scrollTo(index, QTableView.PositionAtCenter)

    def show_pc(self):
        self.show_address(self.cpu.reg.pc)
