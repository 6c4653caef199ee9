"""Run/step/reset buttons controlling the CPU and updating views."""
from PySide6.QtWidgets import QWidget, QPushButton, QHBoxLayout, QLabel
from PySide6.QtCore import QTimer, Signal, Slot

from lc3.decoder import disassemble
from lc3.errors import ConsoleClosed

class ControlPanel(QWidget):
    state_changed = Signal()

    def __init__(self, cpu, reload, batch_size=500, tick_ms=20):
        super().__init__()
        self.cpu = cpu
        self.reload = reload          # callable that re-places the images
        self.batch_size = batch_size
        # true while cpu.run is on the stack (GETC/IN may be waiting for a key)
        self._busy = False
        self._reset_pending = False

        self.btn_step = QPushButton("Step")
        self.btn_run  = QPushButton("Run")
        self.btn_reset = QPushButton("Reset")
        self.status = QLabel("Ready")

        layout = QHBoxLayout(self)
        for w in (self.btn_step, self.btn_run, self.btn_reset, self.status):
            layout.addWidget(w)
        self.setLayout(layout)

        self.timer = QTimer(self)
        self.timer.setInterval(tick_ms)
        self.timer.timeout.connect(self.run_batch)

        # connections
        self.btn_step.clicked.connect(self.step)
        self.btn_run.clicked.connect(self.toggle_run)
        self.btn_reset.clicked.connect(self.reset)
        self.show_status()

    @property
    def busy(self) -> bool:
        return self._busy

    def _set_busy(self, busy):
        self._busy = busy
        self.btn_step.setEnabled(not busy)
        self.btn_run.setEnabled(not busy)

    def _execute(self, count):
        if self._busy:
            return
        self._set_busy(True)
        error = None
        try:
            self.cpu.run(max_steps=count)
        except ConsoleClosed as e:
            if not self._reset_pending:
                error = e
        except Exception as e:
            error = e
        finally:
            self._set_busy(False)

        if self._reset_pending:
            self._reset_pending = False
            self._reset_now()
            return
        if error is not None:
            self.stop()
            self.status.setText(str(error))
            self.state_changed.emit()
            return
        if self.cpu.halted:
            self.stop()
        self.show_status()
        self.state_changed.emit()

    @Slot()
    def step(self):
        self._execute(1)

    @Slot()
    def run_batch(self):
        self._execute(self.batch_size)

    @Slot()
    def toggle_run(self):
        if self.timer.isActive():
            self.stop()
        elif not self.cpu.halted and not self._busy:
            self.timer.start()
            self.btn_run.setText("Pause")

    def stop(self):
        self.timer.stop()
        self.btn_run.setText("Run")

    @Slot()
    def reset(self):
        self.stop()
        if self._busy:
            # unwind the instruction waiting for a key; _execute resets after
            self._reset_pending = True
            self.cpu.console.cancel_read()
            return
        self._reset_now()

    def _reset_now(self):
        self.cpu.reset()
        self.reload()
        self.show_status()
        self.state_changed.emit()

    def show_status(self):
        if self.cpu.halted:
            self.status.setText(f"HALTED after {self.cpu.steps} instructions")
            return
        pc = self.cpu.reg.pc
        word = self.cpu.mem.peek(pc)
        self.status.setText(f"PC=x{pc:04X}  {disassemble(word, pc)}")
