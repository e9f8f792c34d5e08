# src/chip8_core/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_core.core.state import CpuState

# @intent:constant CHIP-8のメモリマップとレジスタファイルの寸法を定義します。
MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0x0FFF
PROGRAM_START = 0x200
PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes
REGISTER_COUNT = 16
STACK_SIZE = 16
FLAG_REGISTER = 0xF  # VF: キャリー/ボロー/衝突フラグ

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP）、スタック、タイマー、キー入力待ち状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    メモリはBus、フレームバッファとキーパッドはそれぞれのデバイスが保持します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # V0-VF
    i: int = 0x000      # Address Register
    dt: int = 0x00      # Delay Timer
    st: int = 0x00      # Sound Timer
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    # @intent:rationale LD Vx, K の実行中は、格納先レジスタ番号を保持して命令フェッチを停止します。
    key_wait_register: Optional[int] = None

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def waiting_for_key(self) -> bool:
        return self.key_wait_register is not None

    # @intent:responsibility リストを含むフィールドを複製した独立コピーを返します。
    def copy(self) -> "Chip8CpuState":
        return Chip8CpuState(
            pc=self.pc,
            sp=self.sp,
            v=list(self.v),
            i=self.i,
            dt=self.dt,
            st=self.st,
            stack=list(self.stack),
            key_wait_register=self.key_wait_register,
        )
