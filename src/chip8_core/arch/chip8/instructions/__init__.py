# src/chip8_core/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_core.transport.bus import Bus
from chip8_core.core.snapshot import Operation
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext
from .maps import FAMILY_DECODE_MAP, SUB_DECODE_MAPS, EXECUTE_MAP, BAD_DECODER

# @intent:responsibility 16ビット命令語をデコードします。
# @intent:post-condition どの命令語に対しても必ずOperationを返します（未定義の命令語はBAD）。
def decode_opcode(word: int) -> Operation:
    """
    CHIP-8の命令語をデコードし、Operationオブジェクトを返します。
    """
    word &= 0xFFFF
    family = word >> 12
    decoder = FAMILY_DECODE_MAP.get(family)
    if decoder is None and family in SUB_DECODE_MAPS:
        table, mask = SUB_DECODE_MAPS[family]
        decoder = table.get(word & mask)
    if decoder is None:
        decoder = BAD_DECODER
    return decoder(word)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus, ctx: ExecutionContext) -> None:
    """
    デコードされた命令を実行し、CPUの状態を変更します。
    ハンドラが見つからない場合はBAD命令として扱います。
    """
    executor = EXECUTE_MAP.get(operation.handler, EXECUTE_MAP["BAD"])
    executor(state, bus, operation, ctx)
