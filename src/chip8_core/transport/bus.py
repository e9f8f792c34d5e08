# chip8_core/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8の4KBアドレス空間を、フォントROMとプログラムRAMの2つのデバイスに振り分けます。
命令実行中の読み書きはアクセスログに残り、Snapshotとしてホストに渡されます。
ローダーとインスペクタ（逆アセンブラ、メモリダンプ）はログを残さない経路を使います。
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

logger = logging.getLogger(__name__)


class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"


# @intent:responsibility 1回のバイトアクセス（アドレス、値、種別）を記録します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType


# @intent:responsibility バスにぶら下がるメモリデバイスの共通インターフェース。
# @intent:pre-condition アドレスはデバイス先頭からのオフセットで渡されます。
class Device(ABC):
    @abstractmethod
    def read(self, address: int) -> int:
        pass

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        pass


# @intent:responsibility ゼロ初期化されたバイト配列によるRAM。プログラム領域とワーク領域を保持します。
class RAM(Device):
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def _check(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for {type(self).__name__} of size {self._size}.")

    def read(self, address: int) -> int:
        self._check(address)
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        self._check(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    def get_size(self) -> int:
        return self._size


# @intent:responsibility フォントアトラスを格納する読み込み専用メモリ。
# @intent:rationale ストア命令がフォント領域を指しても失敗させず、書き込みを捨てます。
class ROM(RAM):
    def write(self, address: int, data: int) -> None:
        self._check(address)

    # @intent:responsibility ロード時専用の書き込み口です。
    def load_data(self, address: int, data: int) -> None:
        super().write(address, data)


# @intent:responsibility アドレスをデバイスとオフセットに解決し、実行時アクセスを記録します。
class Bus:
    """
    (開始, 終了, デバイス) の登録リストでアドレス空間を表現するバス。
    範囲の重複は検査しません。マップの構成は create_bus() の責務です。
    """
    def __init__(self):
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []

    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")
        span = end_address - start_address + 1
        if isinstance(device, RAM) and device.get_size() != span:
            raise ValueError(
                f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                f"the specified address range size ({span} bytes)."
            )
        self._memory_map.append((start_address, end_address, device))

    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise IndexError(f"Address {address:#06x} not mapped to any device.")

    # @intent:responsibility 前回の取得以降に記録されたアクセスを返し、ログを空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        log, self._bus_activity_log = self._bus_activity_log, []
        return log

    def read(self, address: int) -> int:
        device, offset = self._find_device(address)
        data = device.read(offset)
        self._bus_activity_log.append(BusAccess(address, data, BusAccessType.READ))
        return data

    # @intent:responsibility ログを残さずに読み出します。逆アセンブラとメモリダンプ用です。
    def peek(self, address: int) -> int:
        device, offset = self._find_device(address)
        return device.read(offset)

    # @intent:responsibility 命令による書き込み。ROM宛ての書き込みは捨てられますが、アクセスとしては記録します。
    def write(self, address: int, data: int) -> None:
        device, offset = self._find_device(address)
        if isinstance(device, ROM):
            logger.debug("ignored write to ROM at %03X (data=%02X)", address, data)
        device.write(offset, data)
        self._bus_activity_log.append(BusAccess(address, data, BusAccessType.WRITE))

    # @intent:responsibility ロード時の書き込み。ROMにも書き込め、ログには残しません。
    def load(self, address: int, data: int) -> None:
        device, offset = self._find_device(address)
        if isinstance(device, ROM):
            device.load_data(offset, data)
        else:
            device.write(offset, data)

    def load_block(self, address: int, data: bytes) -> None:
        for i, byte in enumerate(data):
            self.load(address + i, byte)


# @intent:utility_function メモリ範囲を "0200  00 e0 ..." 形式の行に整形します。行頭は16バイト境界に揃えます。
def format_memory_dump(bus: Bus, start: int, length: int) -> List[str]:
    lines: List[str] = []
    end = start + length
    row_start = start & ~0xF
    while row_start < end:
        cells = [
            f"{bus.peek(addr):02x}" if start <= addr < end else "  "
            for addr in range(row_start, row_start + 16)
        ]
        lines.append(f"{row_start:04x}  " + " ".join(cells).rstrip())
        row_start += 16
    return lines
