"""
chip8_core: CHIP-8 仮想マシンのコアインタプリタ。

ホスト（描画、入力、音声、タイミング制御）は公開インターフェースを通じて本パッケージを利用します。
"""
from chip8_core.arch.chip8 import Chip8Cpu, Chip8CpuState, Display, Keypad, create_bus
from chip8_core.config.builder import SystemBuilder, create_machine
from chip8_core.config.loader import ConfigLoader
from chip8_core.config.models import MachineConfig, QuirkConfig, ShiftQuirk, SpriteEdgeMode
from chip8_core.core.errors import (
    Chip8Error,
    RomTooLargeError,
    ExecutionError,
    BadInstructionError,
    StackOverflowError,
    StackUnderflowError,
)
from chip8_core.core.snapshot import Operation, Metadata, Snapshot

__all__ = [
    "Chip8Cpu",
    "Chip8CpuState",
    "Display",
    "Keypad",
    "create_bus",
    "SystemBuilder",
    "create_machine",
    "ConfigLoader",
    "MachineConfig",
    "QuirkConfig",
    "ShiftQuirk",
    "SpriteEdgeMode",
    "Chip8Error",
    "RomTooLargeError",
    "ExecutionError",
    "BadInstructionError",
    "StackOverflowError",
    "StackUnderflowError",
    "Operation",
    "Metadata",
    "Snapshot",
]
