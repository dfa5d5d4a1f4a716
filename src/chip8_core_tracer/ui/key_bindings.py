# chip8_core_tracer/ui/key_bindings.py
"""
キーボードイベントとCHIP-8のキー番号・操作コマンドの対応付け。
"""
from enum import Enum
from typing import Dict, Optional

from PySide6.QtCore import Qt

# @intent:responsibility CHIP-8キー以外に割り当てられた操作コマンド。
class Command(Enum):
    TOGGLE_PAUSE = "toggle_pause"
    INSPECT = "inspect"
    QUIT = "quit"


def _key_code(key) -> int:
    return key.value if hasattr(key, "value") else int(key)


COMMAND_KEYS = {
    _key_code(Qt.Key_F5): Command.TOGGLE_PAUSE,
    _key_code(Qt.Key_F6): Command.INSPECT,
    _key_code(Qt.Key_Escape): Command.QUIT,
}

class KeyBindings:
    """
    keymap はキーの文字（"1", "Q" など）からCHIP-8キー番号への辞書です。大文字小文字は区別しません。
    """
    def __init__(self, keymap: Dict[str, int]):
        self._keymap = {name.upper(): key for name, key in keymap.items()}

    def chip8_key(self, text: str) -> Optional[int]:
        if not text:
            return None
        return self._keymap.get(text.upper())

    def command(self, qt_key) -> Optional[Command]:
        return COMMAND_KEYS.get(_key_code(qt_key))
