# chip8_core_tracer/arch/chip8/instructions/control.py
"""
CHIP-8 分岐・サブルーチン・条件スキップ命令の実装。
"""
from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, ExecutionContext, skip_next

# 00EE - RET
def execute_ret(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.pc = state.pop()

# 1nnn - JP addr
def execute_jp(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.pc = op.nnn

# 2nnn - CALL addr
# @intent:rationale フェッチ時に進めたPC（次の命令）を戻り先として積みます。
def execute_call(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.push(state.pc)
    state.pc = op.nnn

# Bnnn - JP V0, addr
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    state.pc = (state.v[0] + op.nnn) & 0xFFFF

# 3xkk - SE Vx, byte
def execute_se_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

# 4xkk - SNE Vx, byte
def execute_sne_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

# 5xy0 - SE Vx, Vy
def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# 9xy0 - SNE Vx, Vy
def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# Ex9E - SKP Vx
def execute_skp(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    if ctx.keypad.is_pressed(state.v[op.x]):
        skip_next(state)

# ExA1 - SKNP Vx
def execute_sknp(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    if not ctx.keypad.is_pressed(state.v[op.x]):
        skip_next(state)
