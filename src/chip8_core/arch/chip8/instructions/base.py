# src/chip8_core/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_core.core.errors import BadInstructionError
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.config.models import ShiftQuirk
from chip8_core.arch.chip8.display import Display
from chip8_core.arch.chip8.keypad import Keypad
from chip8_core.arch.chip8.state import Chip8CpuState, ADDRESS_MASK


# @intent:data_structure レジスタ以外に命令が参照する周辺装置と互換性設定をまとめます。
@dataclass
class ExecutionContext:
    display: Display
    keypad: Keypad
    rng: random.Random = field(default_factory=random.Random)
    shift_quirk: ShiftQuirk = ShiftQuirk.CANONICAL


# @intent:utility_function バスから16ビット命令語をビッグエンディアン形式で読み込みます。
def read_word(bus: Bus, addr: int) -> int:
    """Big-endian 16-bit read."""
    return (bus.read(addr & ADDRESS_MASK) << 8) | bus.read((addr + 1) & ADDRESS_MASK)

# @intent:utility_function Iレジスタ起点の実効アドレスを4KB空間で折り返して求めます。
def effective_address(base: int, offset: int = 0) -> int:
    return (base + offset) & ADDRESS_MASK

# @intent:utility_function 実行中の命令の先頭アドレスを返します（PCは実行前に2進められている）。
def fault_address(state: Chip8CpuState) -> int:
    return (state.pc - 2) & ADDRESS_MASK

# @intent:utility_function 条件成立時に次の命令をスキップします。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        state.pc = (state.pc + 2) & ADDRESS_MASK

# @intent:utility_function 命令語から Operation を組み立てます。
def make_operation(word: int, mnemonic: str, operands: Optional[List[str]] = None, handler: Optional[str] = None) -> Operation:
    return Operation(
        opcode_hex=f"{word:04X}",
        mnemonic=mnemonic,
        operands=operands or [],
        handler=handler or mnemonic,
        word=word,
    )

def reg(index: int) -> str:
    return f"V{index:X}"

def addr(value: int) -> str:
    return f"${value:03X}"

def byte(value: int) -> str:
    return f"${value:02X}"

# --- BAD ---
# @intent:responsibility 未定義の命令語を、明示的な BAD 命令としてデコードします。
def decode_bad(word: int) -> Operation:
    return make_operation(word, "BAD", [f"${word:04X}"], "BAD")

# @intent:responsibility BAD 命令の実行は致命的エラーとしてホストに通知します。
def execute_bad(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    raise BadInstructionError(fault_address(state), op.word)
