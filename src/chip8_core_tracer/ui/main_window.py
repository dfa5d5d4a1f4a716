# chip8_core_tracer/ui/main_window.py
"""
CHIP-8 実行画面のウィンドウ。
画面表示、レジスタ表示、キー入力の受け付けと、命令サイクル駆動スレッドの管理を行います。
"""
import logging
import time

from PySide6.QtWidgets import QMainWindow, QDockWidget, QToolBar, QLabel
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QThread, QTimer, Signal, Slot

from chip8_core_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_core_tracer.common.errors import Chip8Error
from chip8_core_tracer.config.models import MachineConfig
from .beep import BeepSink
from .display_view import DisplayView
from .key_bindings import Command, KeyBindings
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# @intent:constant 画面とレジスタ表示の更新周期（ミリ秒）。
REFRESH_INTERVAL_MS = 16

# @intent:responsibility step() を一定周期で呼び出す命令サイクル駆動スレッド。
class CpuThread(QThread):
    """
    未定義命令やスタック異常が発生した場合は fault を送出して停止します。
    """
    fault = Signal(str)

    def __init__(self, cpu: Chip8Cpu, cycle_hz: int):
        super().__init__()
        self.cpu = cpu
        self.period = 1.0 / cycle_hz
        self._running = False

    def run(self):
        self._running = True
        while self._running:
            try:
                # 一時停止中も停止要求を観測できるよう、ゲート待ちを打ち切る
                self.cpu.step(timeout=0.05)
            except Chip8Error as e:
                logger.error("Execution halted: %s", e)
                self._running = False
                self.fault.emit(str(e))
                return
            time.sleep(self.period)

    def stop(self):
        self._running = False


# @intent:responsibility 画面、レジスタ表示、ブザー、キー入力を束ね、実行スレッドの開始と終了を管理します。
class MainWindow(QMainWindow):
    def __init__(self, cpu: Chip8Cpu, config: MachineConfig, rom_name: str = "", parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.config = config
        self.bindings = KeyBindings(config.keymap)
        self.setWindowTitle(f"CHIP-8 Core Tracer - {rom_name}" if rom_name else "CHIP-8 Core Tracer")

        self.beep_sink = BeepSink(self)
        self.cpu.set_beep_handler(self.beep_sink)

        self.display_view = DisplayView(
            cpu.display,
            scale=config.display.scale,
            foreground=config.display.foreground,
            background=config.display.background,
        )
        self.setCentralWidget(self.display_view)

        self._create_toolbar()
        self._create_register_dock()
        self.status_label = QLabel("Running")
        self.statusBar().addWidget(self.status_label)
        self.statusBar().addPermanentWidget(self.beep_sink.indicator)

        self.cpu_thread = CpuThread(cpu, config.cycle_hz)
        self.cpu_thread.fault.connect(self._on_fault)

        self.refresh_timer = QTimer(self)
        self.refresh_timer.timeout.connect(self._refresh)
        self.refresh_timer.start(REFRESH_INTERVAL_MS)

    # @intent:responsibility 命令サイクル駆動スレッドを開始します。
    def start(self):
        self.cpu_thread.start()

    def _create_toolbar(self):
        toolbar = QToolBar("Machine")
        self.addToolBar(toolbar)

        self.pause_action = QAction("Pause (F5)", self)
        self.pause_action.triggered.connect(self.toggle_pause)
        toolbar.addAction(self.pause_action)

        self.inspect_action = QAction("Inspect (F6)", self)
        self.inspect_action.triggered.connect(self.inspect)
        toolbar.addAction(self.inspect_action)

    def _create_register_dock(self):
        register_dock = QDockWidget("Registers", self)
        register_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self.cpu)
        register_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, register_dock)

    @Slot()
    def _refresh(self):
        self.display_view.refresh()
        self.register_view.update_registers()

    @Slot()
    def toggle_pause(self):
        if self.cpu.paused:
            self.cpu.resume()
            self.pause_action.setText("Pause (F5)")
            self.status_label.setText("Running")
        else:
            self.cpu.pause()
            self.pause_action.setText("Resume (F5)")
            self.status_label.setText("Paused")

    @Slot()
    def inspect(self):
        dump = self.cpu.inspect()
        logger.info("Machine state:\n%s", dump)
        logger.debug("Screen:\n%s", self.cpu.display.render_text())
        self.register_view.show_dump(dump)

    @Slot(str)
    def _on_fault(self, message: str):
        self.status_label.setText(f"Halted: {message}")
        self.register_view.show_dump(self.cpu.inspect())

    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        command = self.bindings.command(event.key())
        if command is Command.TOGGLE_PAUSE:
            self.toggle_pause()
        elif command is Command.INSPECT:
            self.inspect()
        elif command is Command.QUIT:
            self.close()
        else:
            key = self.bindings.chip8_key(event.text())
            if key is not None:
                self.cpu.key_down(key)
                return
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        key = self.bindings.chip8_key(event.text())
        if key is not None:
            self.cpu.key_up(key)
            return
        super().keyReleaseEvent(event)

    # @intent:responsibility 終了時に実行スレッドとタイマースレッドを停止します。
    def closeEvent(self, event: QCloseEvent):
        self.refresh_timer.stop()
        self.cpu_thread.stop()
        # キー入力待ち・一時停止中のサイクルも shutdown で解放される
        self.cpu.resume()
        self.cpu.shutdown()
        self.cpu_thread.wait()
        event.accept()
