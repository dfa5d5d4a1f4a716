# chip8_core_tracer/arch/chip8/instructions/alu.py
"""
CHIP-8 算術・論理演算命令の実装。

8xy4/5/6/7/E はVFをフラグとして必ず書き換えます。
x が 0xF の場合も、演算結果を書いた後にフラグを書くため、VFにはフラグが残ります。
"""
from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, ExecutionContext

# 7xkk - ADD Vx, byte (キャリーは捨て、VFは変更しない)
def execute_add_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# 8xy0 - LD Vx, Vy
def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.v[op.y]

# 8xy1 - OR Vx, Vy
def execute_or(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] |= state.v[op.y]

# 8xy2 - AND Vx, Vy
def execute_and(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] &= state.v[op.y]

# 8xy3 - XOR Vx, Vy
def execute_xor(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] ^= state.v[op.y]

# 8xy4 - ADD Vx, Vy (VF = carry)
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.v[op.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# 8xy5 - SUB Vx, Vy (VF = NOT borrow)
def execute_sub(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vx - vy) & 0xFF
    state.vf = 1 if vx > vy else 0

# 8xy6 - SHR Vx (VF = 押し出された最下位bit)
def execute_shr(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    vx = state.v[op.x]
    state.v[op.x] = vx >> 1
    state.vf = vx & 0x01

# 8xy7 - SUBN Vx, Vy (Vx = Vy - Vx, VF = NOT borrow)
def execute_subn(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    vx, vy = state.v[op.x], state.v[op.y]
    state.v[op.x] = (vy - vx) & 0xFF
    state.vf = 1 if vy > vx else 0

# 8xyE - SHL Vx (VF = 押し出された最上位bit)
def execute_shl(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    vx = state.v[op.x]
    state.v[op.x] = (vx << 1) & 0xFF
    state.vf = (vx >> 7) & 0x01

# Cxkk - RND Vx, byte
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = ctx.random_byte() & op.kk

# Fx1E - ADD I, Vx
# @intent:rationale 16bitで折り返すのみで、0xFFFを超えてもVFは変更しません。
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF
