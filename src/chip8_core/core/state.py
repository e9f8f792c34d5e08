# chip8_core/core/state.py
"""
Core Layer (レジスタ状態の基底)
"""
from dataclasses import dataclass

# @intent:responsibility 全アーキテクチャに共通するPCとSPのみを持ちます。CHIP-8のレジスタは arch/chip8/state.py で追加します。
@dataclass
class CpuState:
    pc: int = 0x000
    sp: int = 0
