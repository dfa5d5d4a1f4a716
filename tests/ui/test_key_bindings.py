"""
キーボードとCHIP-8キー・操作コマンドの対応付けを検証するテスト。
"""
from PySide6.QtCore import Qt

from chip8_core_tracer.config.models import DEFAULT_KEYMAP
from chip8_core_tracer.ui.key_bindings import Command, KeyBindings


def test_default_layout():
    bindings = KeyBindings(DEFAULT_KEYMAP)
    assert bindings.chip8_key("1") == 0x1
    assert bindings.chip8_key("4") == 0xC
    assert bindings.chip8_key("x") == 0x0
    assert bindings.chip8_key("V") == 0xF
    assert bindings.chip8_key("P") is None
    assert bindings.chip8_key("") is None

def test_custom_keymap_is_case_insensitive():
    bindings = KeyBindings({"j": 0x5})
    assert bindings.chip8_key("J") == 0x5
    assert bindings.chip8_key("1") is None

def test_commands():
    bindings = KeyBindings(DEFAULT_KEYMAP)
    assert bindings.command(Qt.Key_F5) is Command.TOGGLE_PAUSE
    assert bindings.command(Qt.Key_F6) is Command.INSPECT
    assert bindings.command(Qt.Key_Escape) is Command.QUIT
    assert bindings.command(Qt.Key_A) is None
