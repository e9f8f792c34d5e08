# src/chip8_core/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用しますが、バスアクセスログを汚さないように
peek によって命令語を読み出します。
"""
from typing import List

from chip8_core.common.types import DisassemblyLine
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.instructions import decode_opcode
from chip8_core.arch.chip8.state import MEMORY_SIZE

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    データ領域も命令語として解釈されるため、未定義の語は "BAD" として表示されます。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, MEMORY_SIZE)

    while current_addr + 1 < end_addr:
        high = bus.peek(current_addr)
        low = bus.peek(current_addr + 1)
        operation = decode_opcode((high << 8) | low)
        result.append((current_addr, f"{high:02X} {low:02X}", operation.to_text()))
        current_addr += operation.length

    return result
