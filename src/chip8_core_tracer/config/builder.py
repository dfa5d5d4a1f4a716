# chip8_core_tracer/config/builder.py
import random
from typing import Tuple
from chip8_core_tracer.transport.bus import Bus, RAM, MEMORY_SIZE
from chip8_core_tracer.devices.display import FrameBuffer
from chip8_core_tracer.devices.keypad import Keypad
from chip8_core_tracer.arch.chip8.cpu import Chip8Cpu
from .models import MachineConfig

# @intent:responsibility 設定（Config）に基づいて、Bus、RAM、周辺機器、CPUを生成・接続し、初期化します。
class SystemBuilder:
    def build_system(self, config: MachineConfig, start_timers: bool = True) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        rng = random.Random(config.rng_seed) if config.rng_seed is not None else None
        cpu = Chip8Cpu(
            bus,
            display=FrameBuffer(),
            keypad=Keypad(),
            legacy_index_increment=config.legacy_index_increment,
            timer_hz=config.timer_hz,
            key_poll_interval=config.key_poll_interval,
            rng=rng,
        )
        cpu.initialize(start_timers=start_timers)
        return cpu, bus
