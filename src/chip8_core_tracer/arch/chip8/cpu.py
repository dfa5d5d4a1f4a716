# chip8_core_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

命令サイクルの駆動は外部（UIの実行スレッドやテスト）から step() を繰り返し呼び出して行い、
DT/STの減算は TimerSubsystem が独立したスレッドで行います。
両者は同じ PauseGate を通過してから状態を変更します。
"""
import logging
import random
import threading
from typing import Dict, List, Optional

from chip8_core_tracer.common.types import BeepHandler, RegisterInfo, RegisterLayoutInfo
from chip8_core_tracer.core.cpu import AbstractCpu
from chip8_core_tracer.core.pause import PauseGate
from chip8_core_tracer.devices.display import FrameBuffer
from chip8_core_tracer.devices.keypad import Keypad
from chip8_core_tracer.devices.timers import TimerSubsystem, TIMER_HZ
from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from chip8_core_tracer.arch.chip8.font import FONT_BASE, FONT_SET
from chip8_core_tracer.arch.chip8.instructions import (
    Chip8Operation, ExecutionContext, decode_opcode, execute_instruction,
)
from chip8_core_tracer.arch.chip8.instructions.base import ADDRESS_MASK

logger = logging.getLogger(__name__)

# @intent:constant キー入力待ち命令のポーリング間隔（秒）。
KEY_POLL_INTERVAL = 0.0016

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。

    ライフサイクル:
        1. 生成
        2. initialize() でフォント配置・PCリセット・タイマー開始
        3. step() の繰り返し
        4. shutdown() でタイマースレッドを解放
    """
    def __init__(self, bus: Bus, display: Optional[FrameBuffer] = None, keypad: Optional[Keypad] = None,
                 gate: Optional[PauseGate] = None, legacy_index_increment: bool = False,
                 timer_hz: float = TIMER_HZ, key_poll_interval: float = KEY_POLL_INTERVAL,
                 rng: Optional[random.Random] = None):
        super().__init__(bus, gate)
        self.display = display if display is not None else FrameBuffer()
        self.keypad = keypad if keypad is not None else Keypad()
        self.key_poll_interval = key_poll_interval
        self._rng = rng if rng is not None else random.Random()
        self._beep_handler: Optional[BeepHandler] = None
        self._shutdown_event = threading.Event()
        self._timers = TimerSubsystem(self._gate, self.get_state, self._emit_beep, timer_hz)
        self._ctx = ExecutionContext(
            display=self.display,
            keypad=self.keypad,
            beep=self._emit_beep,
            wait_for_key=self._wait_for_key,
            random_byte=lambda: self._rng.randrange(256),
            legacy_index_increment=legacy_index_increment,
        )

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    def get_state(self) -> Chip8CpuState:
        return self._state

    def _copy_state(self) -> Chip8CpuState:
        return self._state.copy()

    @property
    def timers(self) -> TimerSubsystem:
        return self._timers

    # @intent:responsibility Fx55/Fx65 実行後にIを進める旧来の挙動を有効にするかどうか。
    @property
    def legacy_index_increment(self) -> bool:
        return self._ctx.legacy_index_increment

    @legacy_index_increment.setter
    def legacy_index_increment(self, enabled: bool) -> None:
        self._ctx.legacy_index_increment = enabled

    # @intent:responsibility フォントを配置し、PCをプログラム先頭に戻し、タイマーを開始します。
    def initialize(self, start_timers: bool = True) -> None:
        self._bus.load_block(FONT_BASE, FONT_SET)
        self.reset()
        self.display.clear()
        self.display.acknowledge_redraw()
        self.keypad.reset()
        self._shutdown_event.clear()
        if start_timers:
            self._timers.start()

    # @intent:responsibility タイマースレッドを停止し、キー入力待ち中のサイクルを中断させます。
    def shutdown(self) -> None:
        self._shutdown_event.set()
        self._gate.notify()
        self._timers.stop()

    def set_beep_handler(self, handler: Optional[BeepHandler]) -> None:
        self._beep_handler = handler

    def _emit_beep(self, on: bool) -> None:
        if self._beep_handler is None:
            logger.debug("Beep %s ignored: no handler registered", "on" if on else "off")
            return
        self._beep_handler(on)

    # --- 一時停止制御 ---

    # @intent:responsibility 命令サイクルとタイマーの両方を停止させます。既に停止中なら何もしません。
    def pause(self) -> None:
        self._gate.engage()

    # @intent:responsibility 一時停止を解除します。停止していなければ何もしません。
    def resume(self) -> None:
        self._gate.release()

    @property
    def paused(self) -> bool:
        return self._gate.engaged

    # --- 入力ソース向けAPI ---

    def key_down(self, key: int) -> None:
        self.keypad.key_down(key)

    def key_up(self, key: int) -> None:
        self.keypad.key_up(key)

    # --- 命令サイクル ---

    # @intent:responsibility PCの位置から2バイトの命令語を読み出し、実行前にPCを2進めます。
    def _fetch(self) -> int:
        pc = self._state.pc
        high = self._bus.read(pc & ADDRESS_MASK)
        low = self._bus.read((pc + 1) & ADDRESS_MASK)
        opcode = (high << 8) | low
        self._state.opcode = opcode
        self._state.pc = (pc + 2) & 0xFFFF
        return opcode

    def _decode(self, opcode: int) -> Chip8Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Chip8Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._ctx)

    # @intent:responsibility キーが押されるまで一定間隔でポーリングします。
    # @intent:pre-condition step() 内（ゲートのロック保持中）から呼ばれる必要があります。
    # @intent:rationale 待機中はロックを手放すため、タイマーは進行し、一時停止要求も受け付けられます。
    def _wait_for_key(self) -> Optional[int]:
        logger.debug("Waiting for keypress")
        while not self._shutdown_event.is_set():
            if not self._gate.engaged:
                key = self.keypad.take_last_key()
                if key is not None:
                    logger.debug("Got keypress %X", key)
                    return key
            self._gate.wait(self.key_poll_interval)
        logger.debug("Key wait interrupted by shutdown")
        return None

    # --- 診断 ---

    def inspect(self) -> str:
        """
        現在のマシン状態を人間が読める形式で返します。状態は変更しません。
        """
        with self._gate.locked():
            s = self._state
            lines = [
                f"Opcode: 0x{s.opcode:04X}",
                "V     : " + " ".join(f"{value:02X}" for value in s.v),
                "Stack : " + " ".join(f"{addr:03X}" for addr in s.stack),
                f"SP    : {s.sp}",
                f"I     : 0x{s.i:04X}",
                f"PC    : 0x{s.pc:04X}",
                f"ST    : {s.st}",
                f"DT    : {s.dt}",
            ]
        return "\n".join(lines) + "\n"

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": value for index, value in enumerate(s.v)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.dt, "ST": s.st})
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(16)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]
