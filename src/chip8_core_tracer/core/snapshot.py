# chip8_core_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル実行直後のCPUとバスの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、診断時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_core_tracer.core.state import CpuState
from chip8_core_tracer.transport.bus import BusAccess


# @intent:responsibility 実行された命令の表示用情報を記録します。
@dataclass(frozen=True)
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    アーキテクチャ固有のデコード結果はこれを拡張します。
    """
    opcode_hex: str  # 例: "6005"
    mnemonic: str  # 例: "LD"
    operands: List[str] = field(default_factory=list)  # 例: ["V0", "0x05"]

    # @intent:responsibility "LD V0, 0x05" のような表示用文字列を返します。
    def render(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    cycle_count: int  # 累計実行命令数
    instruction_text: Optional[str] = None  # 例: "ADD V0, 0x03"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1命令サイクル実行直後の状態を記録した不変のデータ構造。
    state は生成時点のコピーであり、以降のサイクルの影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
