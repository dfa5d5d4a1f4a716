"""
chip8_core_tracer.loader.loaderモジュールの単体テスト。
"""
import pytest

from chip8_core_tracer.common.errors import RomLoadError
from chip8_core_tracer.loader.loader import RomLoader, MAX_ROM_SIZE
from chip8_core_tracer.loader.roms import DEMO_ROM
from chip8_core_tracer.transport.bus import Bus, RAM, MEMORY_SIZE

# @intent:test_suite ROMのプログラム領域への配置とサイズ検証を検証します。

@pytest.fixture
def bus():
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    return bus

def test_bytes_are_placed_at_program_start(bus):
    count = RomLoader().load_rom_bytes(b"\x60\x05\x70\x03", bus)
    assert count == 4
    assert [bus.peek(0x200 + k) for k in range(4)] == [0x60, 0x05, 0x70, 0x03]
    assert bus.get_and_clear_activity_log() == []

def test_full_size_rom_fits(bus):
    assert RomLoader().load_rom_bytes(bytes([0xAB]) * MAX_ROM_SIZE, bus) == MAX_ROM_SIZE
    assert bus.peek(0xFFF) == 0xAB

def test_oversized_rom_writes_nothing(bus):
    with pytest.raises(RomLoadError):
        RomLoader().load_rom_bytes(bytes([0xAB]) * (MAX_ROM_SIZE + 1), bus)
    assert bus.peek(0x200) == 0

def test_load_from_file(bus, tmp_path):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(b"\x00\xE0")
    assert RomLoader().load_rom_file(rom, bus) == 2
    assert bus.peek(0x201) == 0xE0

def test_missing_file(bus, tmp_path):
    with pytest.raises(RomLoadError):
        RomLoader().load_rom_file(tmp_path / "missing.ch8", bus)

def test_demo_rom_fits():
    assert 0 < len(DEMO_ROM) <= MAX_ROM_SIZE
    assert len(DEMO_ROM) % 2 == 0
