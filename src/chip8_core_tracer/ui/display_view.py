# chip8_core_tracer/ui/display_view.py
"""
CHIP-8 フレームバッファを描画するウィジェット。
フレームバッファの内容は読み出すのみで、変更しません。
"""
from typing import List

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QPainter, QColor, QPaintEvent
from PySide6.QtCore import QSize

from chip8_core_tracer.devices.display import FrameBuffer

# @intent:responsibility 64x32のピクセルグリッドを指定倍率で拡大して描画します。
class DisplayView(QWidget):
    def __init__(self, framebuffer: FrameBuffer, scale: int = 10,
                 foreground: str = "#33FF66", background: str = "#101010", parent=None):
        super().__init__(parent)
        self._framebuffer = framebuffer
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._frame: List[bytes] = framebuffer.get_frame()
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def sizeHint(self) -> QSize:
        return QSize(self._framebuffer.width * self._scale, self._framebuffer.height * self._scale)

    # @intent:responsibility 再描画要求が立っていればフレームを取り込み、要求を下ろして再描画します。
    # @intent:return 再描画を行った場合は True。
    def refresh(self) -> bool:
        if not self._framebuffer.needs_redraw:
            return False
        self._frame = self._framebuffer.get_frame()
        self._framebuffer.acknowledge_redraw()
        self.update()
        return True

    def current_frame(self) -> List[bytes]:
        return list(self._frame)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)

        cols = self._framebuffer.width
        rows = self._framebuffer.height
        cell = max(1, min(self.width() // cols, self.height() // rows))
        offset_x = (self.width() - cell * cols) // 2
        offset_y = (self.height() - cell * rows) // 2

        for y, row in enumerate(self._frame):
            for x, pixel in enumerate(row):
                if pixel:
                    painter.fillRect(offset_x + x * cell, offset_y + y * cell, cell, cell, self._foreground)
        painter.end()
