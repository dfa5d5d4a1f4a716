import pytest

from chip8_core_tracer.common.errors import StackFault

# @intent:test_suite 分岐・サブルーチン・条件スキップ命令を検証します。


def test_jp(machine, load_words):
    cpu, _ = machine
    load_words(0x1345)

    cpu.step()

    assert cpu.get_state().pc == 0x345

def test_call_and_ret(machine, load_words):
    cpu, _ = machine
    load_words(0x2300)
    load_words(0x00EE, at=0x300)
    state = cpu.get_state()

    cpu.step()
    assert state.pc == 0x300
    assert state.sp == 1
    assert state.stack[1] == 0x202

    cpu.step()
    assert state.pc == 0x202
    assert state.sp == 0

def test_ret_on_empty_stack_faults(machine, load_words):
    cpu, _ = machine
    load_words(0x00EE)

    with pytest.raises(StackFault, match="underflow"):
        cpu.step()

    assert cpu.get_state().pc == 0x202

def test_call_overflow_faults_after_fifteen_levels(machine, load_words):
    cpu, _ = machine
    load_words(0x2200)  # CALL 0x200 (自分自身を呼び続ける)

    for _ in range(15):
        cpu.step()
    assert cpu.get_state().sp == 15

    with pytest.raises(StackFault) as excinfo:
        cpu.step()
    assert excinfo.value.reason == "overflow"
    assert cpu.get_state().sp == 15

def test_jp_v0(machine, load_words):
    cpu, _ = machine
    cpu.get_state().v[0] = 0x04
    load_words(0xB300)

    cpu.step()

    assert cpu.get_state().pc == 0x304

@pytest.mark.parametrize("opcode, vx, skipped", [
    (0x3105, 0x05, True),
    (0x3105, 0x06, False),
    (0x4105, 0x05, False),
    (0x4105, 0x06, True),
])
def test_skip_on_byte(machine, load_words, opcode, vx, skipped):
    cpu, _ = machine
    cpu.get_state().v[1] = vx
    load_words(opcode)

    cpu.step()

    assert cpu.get_state().pc == (0x204 if skipped else 0x202)

@pytest.mark.parametrize("opcode, vy, skipped", [
    (0x5120, 0x07, True),
    (0x5120, 0x08, False),
    (0x9120, 0x07, False),
    (0x9120, 0x08, True),
])
def test_skip_on_register(machine, load_words, opcode, vy, skipped):
    cpu, _ = machine
    cpu.get_state().v[1] = 0x07
    cpu.get_state().v[2] = vy
    load_words(opcode)

    cpu.step()

    assert cpu.get_state().pc == (0x204 if skipped else 0x202)

def test_skp_and_sknp_follow_keypad(machine, load_words):
    cpu, _ = machine
    cpu.get_state().v[1] = 0x0A
    load_words(0xE19E, 0x0000, 0xE1A1)
    cpu.key_down(0x0A)

    cpu.step()
    assert cpu.get_state().pc == 0x204

    cpu.key_up(0x0A)
    cpu.step()
    assert cpu.get_state().pc == 0x208

def test_skp_with_nonexistent_key_does_not_skip(machine, load_words):
    cpu, _ = machine
    cpu.get_state().v[1] = 0x20
    load_words(0xE19E)

    cpu.step()

    assert cpu.get_state().pc == 0x202
