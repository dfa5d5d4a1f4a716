"""
chip8_core_tracer.transport.busモジュールの単体テスト。
"""
import pytest

from chip8_core_tracer.transport.bus import Bus, BusAccessType, Device, RAM, MEMORY_SIZE

# @intent:test_suite メモリバスとRAMデバイスの読み書き、アクセスログ、エラー処理を検証します。

@pytest.fixture
def bus():
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    return bus

class TestRAM:
    # @intent:test_case_init RAMがゼロ初期化されることを検証します。
    def test_zero_initialized(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(ram.read(a) == 0 for a in range(16))

    @pytest.mark.parametrize("size", [0, -1, 1.5])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            RAM(size)

    # @intent:test_case_oob 範囲外アクセスと8bit超過データが拒否されることを検証します。
    def test_rejects_out_of_range(self):
        ram = RAM(4)
        with pytest.raises(IndexError):
            ram.read(4)
        with pytest.raises(IndexError):
            ram.write(-1, 0)
        with pytest.raises(ValueError):
            ram.write(0, 0x100)

class TestBus:
    # @intent:test_case_register 不正なデバイス登録が拒否されることを検証します。
    def test_register_validation(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x10, 0x0F, RAM(1))
        with pytest.raises(ValueError):
            bus.register_device(0x000, 0xFFF, RAM(0x100))
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x0FF, object())

    def test_unmapped_address(self):
        bus = Bus()
        bus.register_device(0x000, 0x0FF, RAM(0x100))
        with pytest.raises(IndexError):
            bus.read(0x100)

    # @intent:test_case_log read/writeがログに記録され、取得時にクリアされることを検証します。
    def test_activity_log(self, bus):
        bus.load(0x300, 0x11)
        bus.write(0x300, 0x22)
        assert bus.read(0x300) == 0x22

        log = bus.get_and_clear_activity_log()
        assert [a.access_type for a in log] == [BusAccessType.WRITE, BusAccessType.READ]
        assert log[0].previous_data == 0x11
        assert log[0].data == 0x22
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_unlogged peek/load/load_blockはログに残らないことを検証します。
    def test_unlogged_access(self, bus):
        bus.load_block(0x200, b"\x12\x34\x56")
        assert [bus.peek(0x200 + k) for k in range(3)] == [0x12, 0x34, 0x56]
        assert bus.get_and_clear_activity_log() == []

    def test_custom_device(self):
        class Latch(Device):
            def __init__(self):
                self.value = 0

            def read(self, address):
                return self.value

            def write(self, address, data):
                self.value = data

        bus = Bus()
        latch = Latch()
        bus.register_device(0x10, 0x10, latch)
        bus.write(0x10, 0x5A)
        assert latch.value == 0x5A
        assert bus.read(0x10) == 0x5A
