# chip8_core_tracer/config/models.py
from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:constant 既定のキー配置。PCキーボード左側の4x4ブロックをCHIP-8の16キーに対応させます。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#101010"

@dataclass
class MachineConfig:
    legacy_index_increment: bool = False  # True: Fx55/Fx65 実行後に I += x + 1
    cycle_hz: int = 700
    timer_hz: int = 60
    key_poll_interval: float = 0.0016
    rng_seed: Optional[int] = None
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
