# chip8_core_tracer/common/errors.py
"""
エミュレータ全体で使用する例外の定義。

ROMロード、命令デコード、スタック操作、キー入力の各失敗を
呼び出し元が区別して扱えるように、共通の基底クラスを持たせています。
"""

# @intent:responsibility 本パッケージが送出する全ての例外の基底クラス。
class Chip8Error(Exception):
    pass

# @intent:responsibility ROMの読み込み・配置に失敗したことを表します。サイクル開始前に致命的エラーとして扱われます。
class RomLoadError(Chip8Error):
    pass

# @intent:responsibility デコードテーブルに一致しない命令語を表します。
class UnknownOpcodeError(Chip8Error):
    """
    未定義の命令語に遭遇したことを表す例外。
    フェッチ時に進めたPCは巻き戻されません。
    """
    def __init__(self, opcode: int):
        super().__init__(f"Unknown opcode: {opcode:#06x}")
        self.opcode = opcode

# @intent:responsibility スタックポインタが有効範囲を超えた（オーバーフロー/アンダーフロー）ことを表します。
class StackFault(Chip8Error):
    def __init__(self, reason: str, sp: int):
        super().__init__(f"Stack {reason} (SP={sp})")
        self.reason = reason
        self.sp = sp

# @intent:responsibility 0x0-0xF の範囲外のキー番号が入力されたことを表します。
class InvalidKeyError(Chip8Error, ValueError):
    def __init__(self, key):
        super().__init__(f"Key index {key!r} is not in range 0x0-0xF.")
        self.key = key
