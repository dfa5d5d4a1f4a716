# chip8_core_tracer/arch/chip8/instructions/display.py
"""
CHIP-8 画面操作命令の実装。
"""
from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from .base import Chip8Operation, ExecutionContext, index_address

SPRITE_WIDTH = 8

# 00E0 - CLS
def execute_cls(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    ctx.display.clear()

# Dxyn - DRW Vx, Vy, nibble
# @intent:responsibility Iから n バイトのスプライトをXOR描画し、点灯中のピクセルを消した場合にVF=1とします。
# @intent:rationale 画面端ではクリップせず、座標を画面サイズで折り返します。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Chip8Operation, ctx: ExecutionContext) -> None:
    origin_x = state.v[op.x]
    origin_y = state.v[op.y]
    state.vf = 0
    collided = False

    for row in range(op.n):
        sprite_byte = bus.read(index_address(state, row))
        for col in range(SPRITE_WIDTH):
            if not (sprite_byte >> (SPRITE_WIDTH - 1 - col)) & 0x01:
                continue
            if ctx.display.xor_pixel(origin_x + col, origin_y + row):
                collided = True

    if collided:
        state.vf = 1
    ctx.display.request_redraw()
