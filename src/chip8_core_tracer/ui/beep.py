# chip8_core_tracer/ui/beep.py
"""
ブザー（Beep Sink）の実装。

beep はタイマースレッドや実行スレッドから呼ばれるため、
Signal を経由してGUIスレッドで処理します。
鳴動中はステータスバーのインジケータを点灯させ、停止通知で消灯します。
"""
from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QApplication, QLabel

BEEP_TEXT = "BEEP"
BEEP_STYLE = "color: #101010; background-color: #FFD700; padding: 0 6px; font-weight: bold;"

# @intent:responsibility 鳴動開始/停止の遷移を受け取り、システムビープとインジケータに反映します。
class BeepSink(QObject):
    state_changed = Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.active = False
        self.indicator = QLabel()
        self.indicator.setStyleSheet(BEEP_STYLE)
        self.indicator.hide()
        self.state_changed.connect(self._on_state_changed)

    # @intent:responsibility 任意のスレッドから呼び出せるブザー通知口。Chip8Cpu.set_beep_handler に渡します。
    def __call__(self, on: bool) -> None:
        self.state_changed.emit(on)

    @Slot(bool)
    def _on_state_changed(self, on: bool) -> None:
        if on and not self.active:
            QApplication.beep()
        self.active = on
        self.indicator.setText(BEEP_TEXT if on else "")
        self.indicator.setVisible(on)
