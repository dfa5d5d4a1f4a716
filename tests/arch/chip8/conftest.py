import random

import pytest

from chip8_core_tracer.transport.bus import Bus, RAM
from chip8_core_tracer.arch.chip8.cpu import Chip8Cpu

RNG_SEED = 1234


@pytest.fixture
def machine():
    """
    タイマースレッドを起動せずに初期化したCPUとバスを返します。
    """
    bus = Bus()
    bus.register_device(0x000, 0xFFF, RAM(0x1000))
    cpu = Chip8Cpu(bus, rng=random.Random(RNG_SEED), key_poll_interval=0.001)
    cpu.initialize(start_timers=False)
    yield cpu, bus
    cpu.shutdown()


@pytest.fixture
def load_words(machine):
    """
    16bitの命令語を指定アドレス（既定 0x200）から順に配置する関数を返します。
    """
    _, bus = machine

    def _load(*words, at=0x200):
        for index, word in enumerate(words):
            bus.load(at + index * 2, (word >> 8) & 0xFF)
            bus.load(at + index * 2 + 1, word & 0xFF)

    return _load


@pytest.fixture
def rng_seed():
    return RNG_SEED
