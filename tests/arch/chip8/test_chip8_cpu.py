import threading
import time

import pytest

from chip8_core_tracer.arch.chip8.font import FONT_BASE, FONT_SET
from chip8_core_tracer.common.errors import InvalidKeyError, UnknownOpcodeError
from chip8_core_tracer.core.snapshot import Snapshot
from chip8_core_tracer.transport.bus import BusAccessType

# @intent:test_suite Chip8Cpuのライフサイクル、命令サイクル、一時停止、診断出力を検証します。


def test_initialize_loads_font_and_resets_pc(machine):
    cpu, bus = machine
    assert [bus.peek(FONT_BASE + k) for k in range(len(FONT_SET))] == list(FONT_SET)
    assert cpu.get_state().pc == 0x200
    assert not cpu.timers.running

def test_two_instruction_program(machine, load_words):
    cpu, _ = machine
    load_words(0x6005, 0x7003)

    cpu.step()
    cpu.step()

    assert cpu.get_state().v[0] == 8
    assert cpu.get_state().pc == 0x204
    assert cpu.cycle_count == 2

def test_unknown_opcode_keeps_advanced_pc(machine, load_words):
    cpu, _ = machine
    load_words(0xFFFF)

    with pytest.raises(UnknownOpcodeError) as excinfo:
        cpu.step()

    assert excinfo.value.opcode == 0xFFFF
    assert cpu.get_state().pc == 0x202
    assert cpu.get_state().opcode == 0xFFFF

def test_snapshot_contents(machine, load_words):
    cpu, _ = machine
    load_words(0x6005)

    snapshot = cpu.step()

    assert isinstance(snapshot, Snapshot)
    assert snapshot.metadata.instruction_text == "LD V0, 0x05"
    assert snapshot.metadata.cycle_count == 1
    assert [access.address for access in snapshot.bus_activity] == [0x200, 0x201]
    assert all(access.access_type == BusAccessType.READ for access in snapshot.bus_activity)

    cpu.get_state().v[0] = 0x99
    assert snapshot.state.v[0] == 0x05

def test_snapshot_records_previous_memory(machine, load_words):
    cpu, bus = machine
    bus.load(0x300, 0x77)
    cpu.get_state().i = 0x300
    load_words(0xF055)

    snapshot = cpu.step()

    writes = [a for a in snapshot.bus_activity if a.access_type == BusAccessType.WRITE]
    assert len(writes) == 1
    assert writes[0].address == 0x300
    assert writes[0].previous_data == 0x77
    assert writes[0].data == 0x00

def test_pause_blocks_cycles_and_ticks(machine, load_words):
    cpu, _ = machine
    load_words(0x6005, 0x7003)
    cpu.get_state().dt = 10

    cpu.pause()
    for _ in range(5):
        assert cpu.step(timeout=0.005) is None
        assert cpu.timers.tick(timeout=0.005) is False
    state = cpu.get_state()
    assert (state.pc, state.v[0], state.dt) == (0x200, 0, 10)

    cpu.resume()
    assert cpu.step(timeout=0.005) is not None
    assert (state.pc, state.v[0]) == (0x202, 5)
    assert cpu.timers.tick(timeout=0.005) is True
    assert state.dt == 9

def test_pause_is_idempotent_and_resume_is_safe(machine):
    cpu, _ = machine
    cpu.resume()
    assert not cpu.paused

    cpu.pause()
    cpu.pause()
    assert cpu.paused

    cpu.resume()
    assert not cpu.paused

def test_paused_step_waits_for_resume(machine, load_words):
    cpu, _ = machine
    load_words(0x6005)
    cpu.pause()
    worker = threading.Thread(target=cpu.step)
    worker.start()

    time.sleep(0.05)
    assert worker.is_alive()
    assert cpu.get_state().pc == 0x200

    cpu.resume()
    worker.join(timeout=2.0)
    assert not worker.is_alive()
    assert cpu.get_state().v[0] == 5

def test_beep_stops_when_sound_timer_expires(machine, load_words):
    cpu, _ = machine
    beeps = []
    cpu.set_beep_handler(beeps.append)
    cpu.get_state().v[0] = 2
    load_words(0xF018)

    cpu.step()
    cpu.timers.tick()
    cpu.timers.tick()
    cpu.timers.tick()

    assert beeps == [True, False]
    assert cpu.get_state().st == 0

def test_invalid_key_is_rejected(machine):
    cpu, _ = machine
    with pytest.raises(InvalidKeyError):
        cpu.key_down(16)
    with pytest.raises(InvalidKeyError):
        cpu.key_up(-1)

def test_inspect_dump(machine, load_words):
    cpu, _ = machine
    load_words(0x6A05)
    cpu.step()

    dump = cpu.inspect()

    assert "Opcode: 0x6A05" in dump
    assert "V     : 00 00 00 00 00 00 00 00 00 00 05 00 00 00 00 00" in dump
    assert "PC    : 0x0202" in dump
    assert "SP    : 0" in dump
    assert "I     : 0x0000" in dump
    assert "ST    : 0" in dump
    assert "DT    : 0" in dump
    assert cpu.get_state().pc == 0x202

def test_register_map_and_layout(machine):
    cpu, _ = machine
    cpu.get_state().v[0xF] = 1

    registers = cpu.get_register_map()
    layout = cpu.get_register_layout()

    assert registers["VF"] == 1
    assert registers["PC"] == 0x200
    assert [group.group_name for group in layout] == ["General", "Pointers", "Timers"]
    names = {reg.name for group in layout for reg in group.registers}
    assert names == set(registers)

def test_timer_thread_lifecycle(machine):
    cpu, _ = machine
    cpu.get_state().dt = 30

    cpu.timers.start()
    assert cpu.timers.running
    time.sleep(0.2)
    cpu.shutdown()

    assert not cpu.timers.running
    assert cpu.get_state().dt < 30
