# chip8_core_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_core_tracer.transport.bus import Bus
from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from chip8_core_tracer.common.errors import UnknownOpcodeError
from .base import Chip8Operation, ExecutionContext, OpKind
from .maps import DECODE_MAP, EXECUTE_MAP

# @intent:responsibility 命令語を一度だけ解析し、タグ付きのChip8Operationを返します。
# @intent:post-condition どのエントリにも一致しない命令語はUnknownOpcodeErrorを送出します。
def decode_opcode(opcode: int) -> Chip8Operation:
    """
    16bitの命令語をデコードします。
    """
    opcode &= 0xFFFF
    x = (opcode >> 8) & 0x0F
    y = (opcode >> 4) & 0x0F
    n = opcode & 0x0F
    kk = opcode & 0xFF
    nnn = opcode & 0x0FFF

    for entry in DECODE_MAP.get(opcode >> 12, []):
        if opcode & entry.mask == entry.pattern:
            return Chip8Operation(
                opcode_hex=f"{opcode:04X}",
                mnemonic=entry.mnemonic,
                operands=entry.operands(x, y, n, kk, nnn),
                opcode=opcode,
                kind=entry.kind,
                x=x, y=y, n=n, kk=kk, nnn=nnn,
            )
    raise UnknownOpcodeError(opcode)

# @intent:responsibility デコード済みの命令を実行し、CPUの状態を変更します。
def execute_instruction(operation: Chip8Operation, state: Chip8CpuState, bus: Bus, ctx: ExecutionContext) -> None:
    executor = EXECUTE_MAP.get(operation.kind)
    if executor is None:
        raise UnknownOpcodeError(operation.opcode)
    executor(state, bus, operation, ctx)
