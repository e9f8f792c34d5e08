# chip8_core/loader/loader.py
"""
プログラムローダーモジュール。
ヘッダなしのROMイメージ（.ch8）および Intel HEX 形式のロードをサポートします。
"""
import logging
from pathlib import Path
from typing import Dict, Union

from chip8_core.core.errors import RomTooLargeError
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.arch.chip8.state import MEMORY_SIZE, PROGRAM_START, PROGRAM_SIZE

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class RomLoader:
    """
    ヘッダなしのバイナリROMファイルを読み込み、0x200 から配置するローダー。
    """
    def read_rom(self, file_path: PathLike) -> bytes:
        data = Path(file_path).read_bytes()
        if len(data) > PROGRAM_SIZE:
            raise RomTooLargeError(len(data), PROGRAM_SIZE)
        return data

    def load_rom(self, file_path: PathLike, cpu: Chip8Cpu) -> int:
        """
        ROMファイルをロードし、ロードしたバイト数を返します。
        """
        data = self.read_rom(file_path)
        cpu.load_program(data)
        logger.info("loaded ROM %s", file_path)
        return len(data)


class IntelHexLoader:
    """
    Intel HEX形式のファイルを解析し、データをプログラム領域にロードするローダー。
    全レコードを検証してから書き込むため、エラー時にメモリは変更されません。
    """
    def parse_intel_hex(self, file_path: PathLike) -> Dict[int, int]:
        image: Dict[int, int] = {}
        current_extended_linear_address = 0x0000

        with open(file_path, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or not line.startswith(':'):
                    continue

                comment_start = line.find(';')
                if comment_start != -1:
                    line = line[:comment_start].strip()

                if len(line) < 11:
                    raise ValueError(f"Invalid Intel HEX record format on line {line_num}: Too short - {line}")

                try:
                    data_length = int(line[1:3], 16)
                    address_field = int(line[3:7], 16)
                    record_type = int(line[7:9], 16)
                    data_part_str = line[9:-2]
                    checksum_field = int(line[-2:], 16)
                except ValueError as e:
                    raise ValueError(f"Error parsing Intel HEX line {line_num}: {line} - {e}")

                if len(data_part_str) != data_length * 2:
                    raise ValueError(f"Data length mismatch on line {line_num}")

                try:
                    data_bytes = bytes.fromhex(data_part_str)
                except ValueError as e:
                    raise ValueError(f"Error parsing Intel HEX line {line_num}: {line} - {e}")

                checksum_sum = data_length + (address_field >> 8) + (address_field & 0xFF) + record_type
                checksum_sum += sum(data_bytes)
                calculated_checksum = (~checksum_sum + 1) & 0xFF

                if calculated_checksum != checksum_field:
                    raise ValueError(f"Checksum mismatch on line {line_num}: Calculated {calculated_checksum:02X}, Expected {checksum_field:02X}")

                if record_type == 0x00:
                    load_address = current_extended_linear_address + address_field
                    for i, value in enumerate(data_bytes):
                        target = load_address + i
                        if not PROGRAM_START <= target < MEMORY_SIZE:
                            raise ValueError(
                                f"Record on line {line_num} writes {target:#06x}, outside the program region "
                                f"{PROGRAM_START:#05x}-{MEMORY_SIZE - 1:#05x}"
                            )
                        image[target] = value
                elif record_type == 0x01:
                    break
                elif record_type == 0x04:
                    current_extended_linear_address = int(data_part_str, 16) << 16
                elif record_type == 0x02:
                    current_extended_linear_address = int(data_part_str, 16) << 4
                elif record_type in (0x03, 0x05):
                    pass
                else:
                    raise ValueError(f"Unknown Intel HEX record type {record_type:02X} on line {line_num}")

        return image

    def load_intel_hex(self, file_path: PathLike, cpu: Chip8Cpu) -> int:
        """
        HEXファイルをロードし、書き込んだバイト数を返します。
        """
        image = self.parse_intel_hex(file_path)
        bus = cpu.get_bus()
        for address in sorted(image):
            bus.load(address, image[address])
        logger.info("loaded %d bytes from Intel HEX %s", len(image), file_path)
        return len(image)
