# chip8_core_tracer/loader/loader.py
"""
ROMローダーモジュール。
ROMのバイト列をそのままプログラム領域 (0x200-) に配置します。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_core_tracer.transport.bus import Bus, MEMORY_SIZE
from chip8_core_tracer.arch.chip8.state import PROGRAM_START
from chip8_core_tracer.common.errors import RomLoadError

logger = logging.getLogger(__name__)

# @intent:constant 配置可能なROMの最大サイズ (0x200-0xFFF)。
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START

class RomLoader:
    """
    ROMファイルまたはバイト列を検証し、バスへロードするローダー。
    """
    # @intent:responsibility バイト列をプログラム領域に配置し、配置したバイト数を返します。
    # @intent:post-condition 最大サイズを超える場合は1バイトも書き込まずにRomLoadErrorを送出します。
    def load_rom_bytes(self, data: bytes, bus: Bus, start_address: int = PROGRAM_START) -> int:
        data = bytes(data)
        capacity = MEMORY_SIZE - start_address
        if len(data) > capacity:
            raise RomLoadError(
                f"ROM is {len(data)} bytes; only {capacity} bytes fit at {start_address:#05x}."
            )
        bus.load_block(start_address, data)
        logger.debug("Loaded %d ROM bytes at %#05x", len(data), start_address)
        return len(data)

    def load_rom_file(self, file_path: Union[str, Path], bus: Bus) -> int:
        try:
            data = Path(file_path).read_bytes()
        except OSError as e:
            raise RomLoadError(f"Failed reading ROM file {file_path}: {e}") from e
        return self.load_rom_bytes(data, bus)
