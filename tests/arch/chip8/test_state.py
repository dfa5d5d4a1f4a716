import pytest

from chip8_core_tracer.arch.chip8.state import Chip8CpuState, PROGRAM_START
from chip8_core_tracer.common.errors import StackFault

# @intent:test_suite CHIP-8のレジスタ状態とスタック操作を検証します。


def test_initial_state():
    state = Chip8CpuState()
    assert state.pc == PROGRAM_START
    assert state.v == [0] * 16
    assert state.stack == [0] * 16
    assert (state.i, state.sp, state.dt, state.st) == (0, 0, 0, 0)

def test_register_lists_are_not_shared():
    a = Chip8CpuState()
    b = Chip8CpuState()
    a.v[0] = 1
    assert b.v[0] == 0

def test_push_pop_order():
    state = Chip8CpuState()
    state.push(0x222)
    state.push(0x444)
    assert state.pop() == 0x444
    assert state.pop() == 0x222
    assert state.sp == 0

def test_underflow_and_overflow():
    state = Chip8CpuState()
    with pytest.raises(StackFault):
        state.pop()
    for depth in range(15):
        state.push(depth)
    with pytest.raises(StackFault):
        state.push(0xFFF)
    assert state.sp == 15

def test_copy_is_independent():
    state = Chip8CpuState()
    state.v[1] = 9
    state.push(0x300)
    clone = state.copy()

    state.v[1] = 0
    state.pop()

    assert clone.v[1] == 9
    assert clone.sp == 1
    assert clone.stack[1] == 0x300
