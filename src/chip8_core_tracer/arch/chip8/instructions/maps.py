# chip8_core_tracer/arch/chip8/instructions/maps.py
"""
命令語パターンと命令実装のマッピング定義。
"""
from typing import Callable, Dict, List, NamedTuple

from .base import OpKind
from . import alu
from . import control
from . import display
from . import load

# @intent:data_structure デコードテーブルの1エントリ。(opcode & mask) == pattern で一致します。
class OpcodeEntry(NamedTuple):
    mask: int
    pattern: int
    kind: OpKind
    mnemonic: str
    operands: Callable[[int, int, int, int, int], List[str]]  # (x, y, n, kk, nnn) -> 表示用オペランド


def _none(x, y, n, kk, nnn): return []
def _addr(x, y, n, kk, nnn): return [f"0x{nnn:03X}"]
def _vx(x, y, n, kk, nnn): return [f"V{x:X}"]
def _vx_byte(x, y, n, kk, nnn): return [f"V{x:X}", f"0x{kk:02X}"]
def _vx_vy(x, y, n, kk, nnn): return [f"V{x:X}", f"V{y:X}"]
def _i_addr(x, y, n, kk, nnn): return ["I", f"0x{nnn:03X}"]
def _v0_addr(x, y, n, kk, nnn): return ["V0", f"0x{nnn:03X}"]
def _draw(x, y, n, kk, nnn): return [f"V{x:X}", f"V{y:X}", f"{n}"]
def _vx_dt(x, y, n, kk, nnn): return [f"V{x:X}", "DT"]
def _vx_key(x, y, n, kk, nnn): return [f"V{x:X}", "K"]
def _dt_vx(x, y, n, kk, nnn): return ["DT", f"V{x:X}"]
def _st_vx(x, y, n, kk, nnn): return ["ST", f"V{x:X}"]
def _i_vx(x, y, n, kk, nnn): return ["I", f"V{x:X}"]
def _font_vx(x, y, n, kk, nnn): return ["F", f"V{x:X}"]
def _bcd_vx(x, y, n, kk, nnn): return ["B", f"V{x:X}"]
def _mem_vx(x, y, n, kk, nnn): return ["[I]", f"V{x:X}"]
def _vx_mem(x, y, n, kk, nnn): return [f"V{x:X}", "[I]"]


# @intent:map 命令語の上位4bitから、その系列に属するデコードエントリへのマッピングテーブル。
DECODE_MAP: Dict[int, List[OpcodeEntry]] = {
    0x0: [
        OpcodeEntry(0xFFFF, 0x00E0, OpKind.CLS, "CLS", _none),
        OpcodeEntry(0xFFFF, 0x00EE, OpKind.RET, "RET", _none),
    ],
    0x1: [OpcodeEntry(0xF000, 0x1000, OpKind.JP, "JP", _addr)],
    0x2: [OpcodeEntry(0xF000, 0x2000, OpKind.CALL, "CALL", _addr)],
    0x3: [OpcodeEntry(0xF000, 0x3000, OpKind.SE_BYTE, "SE", _vx_byte)],
    0x4: [OpcodeEntry(0xF000, 0x4000, OpKind.SNE_BYTE, "SNE", _vx_byte)],
    0x5: [OpcodeEntry(0xF00F, 0x5000, OpKind.SE_REG, "SE", _vx_vy)],
    0x6: [OpcodeEntry(0xF000, 0x6000, OpKind.LD_BYTE, "LD", _vx_byte)],
    0x7: [OpcodeEntry(0xF000, 0x7000, OpKind.ADD_BYTE, "ADD", _vx_byte)],
    0x8: [
        OpcodeEntry(0xF00F, 0x8000, OpKind.LD_REG, "LD", _vx_vy),
        OpcodeEntry(0xF00F, 0x8001, OpKind.OR, "OR", _vx_vy),
        OpcodeEntry(0xF00F, 0x8002, OpKind.AND, "AND", _vx_vy),
        OpcodeEntry(0xF00F, 0x8003, OpKind.XOR, "XOR", _vx_vy),
        OpcodeEntry(0xF00F, 0x8004, OpKind.ADD_REG, "ADD", _vx_vy),
        OpcodeEntry(0xF00F, 0x8005, OpKind.SUB, "SUB", _vx_vy),
        OpcodeEntry(0xF00F, 0x8006, OpKind.SHR, "SHR", _vx),
        OpcodeEntry(0xF00F, 0x8007, OpKind.SUBN, "SUBN", _vx_vy),
        OpcodeEntry(0xF00F, 0x800E, OpKind.SHL, "SHL", _vx),
    ],
    0x9: [OpcodeEntry(0xF00F, 0x9000, OpKind.SNE_REG, "SNE", _vx_vy)],
    0xA: [OpcodeEntry(0xF000, 0xA000, OpKind.LD_I, "LD", _i_addr)],
    0xB: [OpcodeEntry(0xF000, 0xB000, OpKind.JP_V0, "JP", _v0_addr)],
    0xC: [OpcodeEntry(0xF000, 0xC000, OpKind.RND, "RND", _vx_byte)],
    0xD: [OpcodeEntry(0xF000, 0xD000, OpKind.DRW, "DRW", _draw)],
    0xE: [
        OpcodeEntry(0xF0FF, 0xE09E, OpKind.SKP, "SKP", _vx),
        OpcodeEntry(0xF0FF, 0xE0A1, OpKind.SKNP, "SKNP", _vx),
    ],
    0xF: [
        OpcodeEntry(0xF0FF, 0xF007, OpKind.LD_VX_DT, "LD", _vx_dt),
        OpcodeEntry(0xF0FF, 0xF00A, OpKind.LD_KEY, "LD", _vx_key),
        OpcodeEntry(0xF0FF, 0xF015, OpKind.LD_DT, "LD", _dt_vx),
        OpcodeEntry(0xF0FF, 0xF018, OpKind.LD_ST, "LD", _st_vx),
        OpcodeEntry(0xF0FF, 0xF01E, OpKind.ADD_I, "ADD", _i_vx),
        OpcodeEntry(0xF0FF, 0xF029, OpKind.LD_FONT, "LD", _font_vx),
        OpcodeEntry(0xF0FF, 0xF033, OpKind.BCD, "LD", _bcd_vx),
        OpcodeEntry(0xF0FF, 0xF055, OpKind.STORE, "LD", _mem_vx),
        OpcodeEntry(0xF0FF, 0xF065, OpKind.LOAD, "LD", _vx_mem),
    ],
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。OpKindの全メンバーを網羅します。
EXECUTE_MAP = {
    OpKind.CLS: display.execute_cls,
    OpKind.RET: control.execute_ret,
    OpKind.JP: control.execute_jp,
    OpKind.CALL: control.execute_call,
    OpKind.SE_BYTE: control.execute_se_byte,
    OpKind.SNE_BYTE: control.execute_sne_byte,
    OpKind.SE_REG: control.execute_se_reg,
    OpKind.LD_BYTE: load.execute_ld_byte,
    OpKind.ADD_BYTE: alu.execute_add_byte,
    OpKind.LD_REG: alu.execute_ld_reg,
    OpKind.OR: alu.execute_or,
    OpKind.AND: alu.execute_and,
    OpKind.XOR: alu.execute_xor,
    OpKind.ADD_REG: alu.execute_add_reg,
    OpKind.SUB: alu.execute_sub,
    OpKind.SHR: alu.execute_shr,
    OpKind.SUBN: alu.execute_subn,
    OpKind.SHL: alu.execute_shl,
    OpKind.SNE_REG: control.execute_sne_reg,
    OpKind.LD_I: load.execute_ld_i,
    OpKind.JP_V0: control.execute_jp_v0,
    OpKind.RND: alu.execute_rnd,
    OpKind.DRW: display.execute_drw,
    OpKind.SKP: control.execute_skp,
    OpKind.SKNP: control.execute_sknp,
    OpKind.LD_VX_DT: load.execute_ld_vx_dt,
    OpKind.LD_KEY: load.execute_ld_key,
    OpKind.LD_DT: load.execute_ld_dt,
    OpKind.LD_ST: load.execute_ld_st,
    OpKind.ADD_I: alu.execute_add_i,
    OpKind.LD_FONT: load.execute_ld_font,
    OpKind.BCD: load.execute_bcd,
    OpKind.STORE: load.execute_store,
    OpKind.LOAD: load.execute_load,
}
