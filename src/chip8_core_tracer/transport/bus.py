# chip8_core_tracer/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8の4KBアドレス空間 (0x000-0xFFF) を表します。
命令実行中の読み書きはアクセスログに残り、Snapshotの bus_activity になります。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

# @intent:constant CHIP-8のアドレス空間サイズ。
MEMORY_SIZE = 0x1000

class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 1回のメモリアクセスを記録します。WRITEでは上書き前の値も保持します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType
    previous_data: Optional[int] = None

# @intent:responsibility バスに接続できる記憶装置のインターフェース。アドレスはデバイス内オフセットです。
class Device(ABC):
    @abstractmethod
    def read(self, offset: int) -> int:
        ...

    @abstractmethod
    def write(self, offset: int, value: int) -> None:
        ...

class RAM(Device):
    """
    ゼロ初期化されたバイト配列。範囲外のオフセットは IndexError、8bitに収まらない値は ValueError です。
    """
    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ValueError(f"RAM size must be a positive integer, got {size!r}.")
        self._cells = bytearray(size)

    def _check(self, offset: int) -> None:
        if not 0 <= offset < len(self._cells):
            raise IndexError(f"Offset {offset:#05x} is outside RAM of {len(self._cells)} bytes.")

    def read(self, offset: int) -> int:
        self._check(offset)
        return self._cells[offset]

    def write(self, offset: int, value: int) -> None:
        self._check(offset)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Value {value!r} does not fit in a byte.")
        self._cells[offset] = value

    def get_size(self) -> int:
        return len(self._cells)

# @intent:responsibility アドレスを担当デバイスへ振り分け、命令による read/write を記録します。
class Bus:
    """
    read/write はアクセスログに記録されます。
    peek/load はログに残らないため、診断表示やフォント・ROMの初期配置に使います。
    """
    def __init__(self):
        self._regions: List[Tuple[int, int, Device]] = []
        self._activity: List[BusAccess] = []

    # @intent:pre-condition 0 <= start <= end。RAMの場合はサイズが範囲の長さと一致する必要があります。
    def register_device(self, start: int, end: int, device: Device) -> None:
        if start < 0 or end < start:
            raise ValueError(f"Bad address range {start:#05x}-{end:#05x}.")
        if not isinstance(device, Device):
            raise TypeError(f"{type(device).__name__} is not a Device.")
        span = end - start + 1
        if isinstance(device, RAM) and device.get_size() != span:
            raise ValueError(f"RAM of {device.get_size()} bytes cannot cover a {span}-byte range.")
        self._regions.append((start, end, device))

    def _resolve(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._regions:
            if start <= address <= end:
                return device, address - start
        raise IndexError(f"No device mapped at {address:#05x}.")

    def read(self, address: int) -> int:
        device, offset = self._resolve(address)
        value = device.read(offset)
        self._activity.append(BusAccess(address, value, BusAccessType.READ))
        return value

    def write(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        previous = device.read(offset)
        device.write(offset, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE, previous))

    def peek(self, address: int) -> int:
        device, offset = self._resolve(address)
        return device.read(offset)

    def load(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)

    def load_block(self, address: int, data: bytes) -> None:
        for offset, byte in enumerate(data):
            self.load(address + offset, byte)

    # @intent:responsibility 蓄積したアクセスログを返し、空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        activity, self._activity = self._activity, []
        return activity
