"""
chip8_core_tracer.devices.timersモジュールの単体テスト。
"""
import time

import pytest

from chip8_core_tracer.arch.chip8.state import Chip8CpuState
from chip8_core_tracer.core.pause import PauseGate
from chip8_core_tracer.devices.timers import TimerSubsystem

# @intent:test_suite 60Hzタイマーの減算、ブザー停止通知、スレッドのライフサイクルを検証します。

@pytest.fixture
def state():
    return Chip8CpuState()

def test_counts_down_to_zero(state):
    timers = TimerSubsystem(PauseGate(), lambda: state)
    state.dt = 60
    for _ in range(60):
        timers.tick()
    assert state.dt == 0
    timers.tick()
    assert state.dt == 0

def test_beep_off_reported_once(state):
    events = []
    timers = TimerSubsystem(PauseGate(), lambda: state, events.append)
    state.st = 2
    for _ in range(5):
        timers.tick()
    assert events == [False]

def test_paused_tick_changes_nothing(state):
    gate = PauseGate()
    timers = TimerSubsystem(gate, lambda: state)
    state.dt = 5
    gate.engage()
    assert timers.tick(timeout=0.01) is False
    assert state.dt == 5

@pytest.mark.parametrize("hz", [0, -60])
def test_rejects_non_positive_frequency(state, hz):
    with pytest.raises(ValueError):
        TimerSubsystem(PauseGate(), lambda: state, hz=hz)

def test_thread_start_stop(state):
    timers = TimerSubsystem(PauseGate(), lambda: state, hz=200)
    state.dt = 255
    timers.start()
    timers.start()
    assert timers.running
    time.sleep(0.1)
    timers.stop()
    assert not timers.running
    assert state.dt < 255
