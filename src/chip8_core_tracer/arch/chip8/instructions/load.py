# chip8_core_tracer/arch/chip8/instructions/load.py
"""
CHIP-8 ロード・ストア・タイマー・キー入力待ち命令の実装。
"""
from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from chip8_core_tracer.arch.chip8.font import glyph_address
from .base import Chip8Operation, ExecutionContext, index_address

# 6xkk - LD Vx, byte
def execute_ld_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = op.kk

# Annn - LD I, addr
def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.i = op.nnn

# Fx07 - LD Vx, DT
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.dt

# Fx15 - LD DT, Vx
def execute_ld_dt(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.dt = state.v[op.x]

# Fx18 - LD ST, Vx
# @intent:responsibility STに0以外を設定した場合、ブザーへ鳴動開始を通知します。停止通知はタイマー側が行います。
def execute_ld_st(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.st = state.v[op.x]
    if state.st > 0:
        ctx.beep(True)

# Fx0A - LD Vx, K
# @intent:responsibility キーが押されるまで命令の進行を止め、押されたキー番号をVxに格納します。
# @intent:post-condition 停止要求で待機が中断された場合はPCを戻し、レジスタは変更しません。
def execute_ld_key(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    key = ctx.wait_for_key()
    if key is None:
        state.pc = (state.pc - 2) & 0xFFFF
        return
    state.v[op.x] = key

# Fx29 - LD F, Vx
def execute_ld_font(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.i = glyph_address(state.v[op.x])

# Fx33 - LD B, Vx
def execute_bcd(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    value = state.v[op.x]
    bus.write(index_address(state, 0), value // 100)
    bus.write(index_address(state, 1), (value // 10) % 10)
    bus.write(index_address(state, 2), value % 10)

# Fx55 - LD [I], Vx
def execute_store(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    for reg in range(op.x + 1):
        bus.write(index_address(state, reg), state.v[reg])
    if ctx.legacy_index_increment:
        state.i = (state.i + op.x + 1) & 0xFFFF

# Fx65 - LD Vx, [I]
def execute_load(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    for reg in range(op.x + 1):
        state.v[reg] = bus.read(index_address(state, reg))
    if ctx.legacy_index_increment:
        state.i = (state.i + op.x + 1) & 0xFFFF
