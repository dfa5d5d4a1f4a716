# chip8_core_tracer/devices/keypad.py
"""
16キーの入力ラッチ。

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

外部の入力ソースが key_down/key_up を呼び、命令実行側が状態を参照します。
"""
import threading
from typing import List, Optional

from chip8_core_tracer.common.errors import InvalidKeyError

KEY_COUNT = 16

# @intent:responsibility 各キーの押下状態と、キー入力待ち命令を解除するための「最後に押されたキー」を保持します。
class Keypad:
    def __init__(self):
        self._lock = threading.Lock()
        self._pressed: List[bool] = [False] * KEY_COUNT
        self._last_key: Optional[int] = None

    @staticmethod
    def _validate(key) -> int:
        if isinstance(key, bool) or not isinstance(key, int) or not 0 <= key < KEY_COUNT:
            raise InvalidKeyError(key)
        return key

    def key_down(self, key: int) -> None:
        key = self._validate(key)
        with self._lock:
            self._pressed[key] = True
            self._last_key = key

    def key_up(self, key: int) -> None:
        key = self._validate(key)
        with self._lock:
            self._pressed[key] = False

    # @intent:responsibility キーの押下状態を返します。存在しないキー番号は常に未押下として扱います。
    def is_pressed(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            return False
        return self._pressed[key]

    @property
    def last_key(self) -> Optional[int]:
        return self._last_key

    # @intent:responsibility 最後に押されたキーを取り出し、スロットを空にします。
    def take_last_key(self) -> Optional[int]:
        with self._lock:
            key = self._last_key
            self._last_key = None
            return key

    def reset(self) -> None:
        with self._lock:
            self._pressed = [False] * KEY_COUNT
            self._last_key = None
