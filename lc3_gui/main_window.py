from PySide6.QtWidgets import QMainWindow, QDockWidget, QApplication
from PySide6.QtCore import Qt
from .register_panel import RegisterPanel
from .memory_panel import MemoryPanel
from .control_panel import ControlPanel
from .console_panel import ConsolePanel, QtConsole
from lc3.cpu_core import CPU
from lc3.config import SimConfig
import sys

class MainWindow(QMainWindow):
    def __init__(self, images=(), config=None):
        super().__init__()
        config = config or SimConfig()
        self.images = list(images)
        self.start_pc = config.start_pc
        self.console_panel = ConsolePanel()
        self.console = QtConsole(self.console_panel)
        self.cpu = CPU(self.console, trace=config.trace)
        self.load_images()
        title = ", ".join(img.path or "image" for img in self.images)
        self.setWindowTitle(f"LC-3 Simulator — {title}" if title else "LC-3 Simulator")

        # central widget: memory
        self.memory_panel = MemoryPanel(self.cpu)
        self.setCentralWidget(self.memory_panel)

        # dock 1: registers
        self.register_panel = RegisterPanel(self.cpu)
        reg_dock = QDockWidget("Registers", self)
        reg_dock.setWidget(self.register_panel)
        self.addDockWidget(Qt.LeftDockWidgetArea, reg_dock)

        # dock 2: console
        con_dock = QDockWidget("Console", self)
        con_dock.setWidget(self.console_panel)
        self.addDockWidget(Qt.RightDockWidgetArea, con_dock)

        # dock 3: controls
        self.control_panel = ControlPanel(self.cpu, self.load_images,
                                          config.batch_size, config.tick_ms)
        self.control_panel.state_changed.connect(self.refresh)
        ctrl_dock = QDockWidget("Control", self)
        ctrl_dock.setWidget(self.control_panel)
        self.addDockWidget(Qt.BottomDockWidgetArea, ctrl_dock)
        self.memory_panel.show_pc()

    def load_images(self):
        self.console.clear()
        for image in self.images:
            self.cpu.load_image(image)
        if self.start_pc is not None:
            self.cpu.reg.pc = self.start_pc

    def refresh(self):
        self.register_panel.refresh()
        self.memory_panel.refresh()
        self.memory_panel.show_pc()


def run(images=(), config=None) -> int:
    app = QApplication.instance() or QApplication(sys.argv[:1])
    mw = MainWindow(images, config)
    mw.resize(1280, 960)
    mw.show()
    return app.exec()
