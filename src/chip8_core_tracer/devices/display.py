# chip8_core_tracer/devices/display.py
"""
64x32 モノクロフレームバッファ。

画面消去とスプライト描画の命令からのみ変更され、外部のレンダラが読み出します。
再描画フラグはコアが立て、レンダラ側の消費ループが下ろします。
"""
from typing import List

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# @intent:responsibility ピクセルのオン/オフ状態と再描画要求フラグを保持します。
class FrameBuffer:
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self._rows = [bytearray(width) for _ in range(height)]
        self._needs_redraw = False

    @property
    def needs_redraw(self) -> bool:
        return self._needs_redraw

    # @intent:responsibility 再描画要求を立てます。コア側からのみ呼ばれます。
    def request_redraw(self) -> None:
        self._needs_redraw = True

    # @intent:responsibility レンダラがフレームを描き終えたことを通知し、再描画フラグを下ろします。
    def acknowledge_redraw(self) -> None:
        self._needs_redraw = False

    def clear(self) -> None:
        for row in self._rows:
            row[:] = bytes(self.width)
        self._needs_redraw = True

    def get_pixel(self, x: int, y: int) -> int:
        return self._rows[y % self.height][x % self.width]

    def xor_pixel(self, x: int, y: int) -> bool:
        """
        座標 (x, y) を画面サイズで折り返した位置のピクセルを反転します。
        反転前に点灯していた（衝突した）場合は True を返します。
        """
        row = self._rows[y % self.height]
        col = x % self.width
        collided = row[col] == 1
        row[col] ^= 1
        return collided

    def get_frame(self) -> List[bytes]:
        """
        現在のピクセル状態のコピーを行単位（0/1 のバイト列）で返します。
        返り値を変更してもフレームバッファには影響しません。
        """
        return [bytes(row) for row in self._rows]

    # @intent:responsibility 診断用にフレームを '#' と '.' のテキストとして描画します。
    def render_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if p else off for p in row) for row in self._rows)
