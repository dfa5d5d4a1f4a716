# chip8_core_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

命令サイクル（ゲート通過、フェッチ、デコード、実行、記録）の骨格を定義します。
アーキテクチャ固有の処理はサブクラスが実装します。
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.core.pause import PauseGate
from chip8_core_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_core_tracer.core.state import CpuState
from chip8_core_tracer.common.types import RegisterLayoutInfo

# @intent:responsibility 一時停止ゲートを通過する命令サイクルと、UI向けの問い合わせ口を定義します。
class AbstractCpu(ABC):
    """
    状態はサブクラスが生成し、外部からは get_state() を通して参照します。
    """
    def __init__(self, bus: Bus, gate: Optional[PauseGate] = None):
        self._bus = bus
        self._gate = gate if gate is not None else PauseGate()
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        ...

    # @intent:responsibility 状態と累計サイクル数を初期値に戻します。
    def reset(self) -> None:
        with self._gate.locked():
            self._state = self._create_initial_state()
            self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    @property
    def gate(self) -> PauseGate:
        return self._gate

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 次の命令語を読み出し、PCを命令長分進めます。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility 命令語を解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ゲート通過→ログクリア→フェッチ→デコード→実行→Snapshot生成）を定義します。
    def step(self, timeout: Optional[float] = None) -> Optional[Snapshot]:
        """
        CPUを1命令サイクル進め、実行直後の状態を含むSnapshotを返します。
        一時停止中は再開まで待機し、timeout 秒以内に再開されなかった場合は
        状態を一切変更せずに None を返します。
        デコードや実行で発生した例外は呼び出し元へそのまま伝播します。
        """
        with self._gate.hold(timeout) as proceed:
            if not proceed:
                return None

            self._bus.get_and_clear_activity_log()

            # フェッチ時点でPCは進む。以降で例外が発生しても巻き戻さない
            opcode = self._fetch()
            operation = self._decode(opcode)
            self._execute(operation)

            return self._create_snapshot(operation)

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += 1
        return Snapshot(
            state=self._copy_state(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, instruction_text=operation.render()),
            bus_activity=bus_activity,
        )

    # @intent:responsibility Snapshot用に現在の状態の独立したコピーを返します。
    @abstractmethod
    def _copy_state(self) -> CpuState:
        pass

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """レジスタ名から現在値への辞書。"""

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """レジスタ表示のグループ分け。"""
