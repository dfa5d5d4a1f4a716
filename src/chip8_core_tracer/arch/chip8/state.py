# chip8_core_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_core_tracer.core.state import CpuState
from chip8_core_tracer.common.errors import StackFault

# @intent:constant プログラムのロード先であり、リセット時のPC。
PROGRAM_START = 0x200
REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF

# @intent:responsibility 16本の汎用レジスタ、インデックスレジスタ、コールスタック、2つのタイマーの状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。

    SPは「最後に積んだスロット」を指します。CALLはSPを進めてから格納するため
    スロット0は使われず、入れ子は最大15段です。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000  # Index register (16bit, 上位ビットはマスクしない)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    dt: int = 0  # Delay timer
    st: int = 0  # Sound timer
    opcode: int = 0x0000  # 直近にフェッチした命令語（診断用）

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # @intent:responsibility 戻り先アドレスをスタックに積みます。
    # @intent:post-condition SPが15を超える場合は状態を変更せずにStackFaultを送出します。
    def push(self, address: int) -> None:
        if self.sp + 1 >= STACK_DEPTH:
            raise StackFault("overflow", self.sp)
        self.sp += 1
        self.stack[self.sp] = address & 0xFFFF

    # @intent:responsibility スタックから戻り先アドレスを取り出します。
    # @intent:post-condition 空のスタック（SP=0）からの取り出しはStackFaultを送出します。
    def pop(self) -> int:
        if self.sp == 0:
            raise StackFault("underflow", self.sp)
        address = self.stack[self.sp]
        self.sp -= 1
        return address

    def copy(self) -> "Chip8CpuState":
        return Chip8CpuState(
            pc=self.pc, sp=self.sp, v=list(self.v), i=self.i, stack=list(self.stack),
            dt=self.dt, st=self.st, opcode=self.opcode,
        )
