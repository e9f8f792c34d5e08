# chip8_core/core/errors.py
"""
例外定義モジュール。

ロード時の回復可能なエラーと、実行時の致命的なエラーを型で区別します。
実行時エラーは step() から送出され、停止・リセット・再ロードの判断はホストに委ねます。
"""
from typing import Optional


class Chip8Error(Exception):
    """Base error for the virtual machine."""


# @intent:responsibility プログラム領域に収まらないイメージのロードを拒否します。
class RomTooLargeError(Chip8Error):
    """Raised when a program image exceeds the 3584-byte program region."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM of {size} bytes exceeds the {limit}-byte program region.")
        self.size = size
        self.limit = limit


# @intent:responsibility 命令実行中の致命的エラー。発生位置(PC)と命令語を保持します。
class ExecutionError(Chip8Error):
    """Fatal error raised out of step()."""

    reason = "execution error"

    def __init__(self, address: int, opcode: int, detail: Optional[str] = None):
        message = f"{self.reason} at {address:03X} (opcode {opcode:04X})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.address = address
        self.opcode = opcode


class BadInstructionError(ExecutionError):
    reason = "bad instruction"


class StackOverflowError(ExecutionError):
    reason = "stack overflow"


class StackUnderflowError(ExecutionError):
    reason = "stack underflow"
