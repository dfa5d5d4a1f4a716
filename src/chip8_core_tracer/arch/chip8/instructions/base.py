# chip8_core_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通定義とユーティリティ。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from chip8_core_tracer.core.snapshot import Operation
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from chip8_core_tracer.devices.display import FrameBuffer
from chip8_core_tracer.devices.keypad import Keypad
from chip8_core_tracer.common.types import BeepHandler

# @intent:constant メモリアクセス時に有効なアドレスビット (0x000-0xFFF)。
ADDRESS_MASK = 0x0FFF

# @intent:responsibility デコード結果の命令種別タグ。命令1つにつき1メンバーを持ちます。
class OpKind(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1nnn"
    CALL = "2nnn"
    SE_BYTE = "3xkk"
    SNE_BYTE = "4xkk"
    SE_REG = "5xy0"
    LD_BYTE = "6xkk"
    ADD_BYTE = "7xkk"
    LD_REG = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD_REG = "8xy4"
    SUB = "8xy5"
    SHR = "8xy6"
    SUBN = "8xy7"
    SHL = "8xyE"
    SNE_REG = "9xy0"
    LD_I = "Annn"
    JP_V0 = "Bnnn"
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"
    SKNP = "ExA1"
    LD_VX_DT = "Fx07"
    LD_KEY = "Fx0A"
    LD_DT = "Fx15"
    LD_ST = "Fx18"
    ADD_I = "Fx1E"
    LD_FONT = "Fx29"
    BCD = "Fx33"
    STORE = "Fx55"
    LOAD = "Fx65"

# @intent:responsibility 命令語から一度だけ抽出した各フィールドと命令種別を保持する、タグ付きのデコード結果。
@dataclass(frozen=True)
class Chip8Operation(Operation):
    """
    フィールドの意味:
        x   : 上位バイトの下位4bit
        y   : 下位バイトの上位4bit
        n   : 下位バイトの下位4bit
        kk  : 下位バイト
        nnn : 命令語の下位12bit
    """
    opcode: int = 0
    kind: Optional[OpKind] = None
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0

# @intent:responsibility 命令実行時にレジスタ・メモリ以外で必要となる周辺機器と設定をまとめます。
@dataclass
class ExecutionContext:
    display: FrameBuffer
    keypad: Keypad
    beep: BeepHandler
    # キーが押されるまで待機して番号を返す。停止要求で中断された場合は None
    wait_for_key: Callable[[], Optional[int]]
    random_byte: Callable[[], int]
    legacy_index_increment: bool = False

# @intent:utility_function 次の命令を読み飛ばします。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function インデックスレジスタからの相対アドレスを12bitに折り返して返します。
def index_address(state: Chip8CpuState, offset: int = 0) -> int:
    return (state.i + offset) & ADDRESS_MASK
