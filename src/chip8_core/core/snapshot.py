# chip8_core/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUとバスの状態を記録した不変のデータ構造を定義します。
ホストへの情報提供と、テスト時の状態検証に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_core.core.state import CpuState
from chip8_core.transport.bus import BusAccessType, BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド、ディスパッチキー）を記録するデータクラス。
    命令語から一律に抽出されるフィールド (nnn, n, kk, x, y) はプロパティとして提供します。
    """
    opcode_hex: str # 例: "00E0"
    mnemonic: str # 例: "CLS"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "$2A"]
    handler: str = "" # EXECUTE_MAPのキー
    word: int = 0 # 16bit命令語
    cycle_count: int = 1 # 1命令 = 1サイクル
    length: int = 2 # 命令のバイト長

    @property
    def nnn(self) -> int:
        return self.word & 0x0FFF

    @property
    def n(self) -> int:
        return self.word & 0x000F

    @property
    def kk(self) -> int:
        return self.word & 0x00FF

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0x0F

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0x0F

    # @intent:responsibility ニーモニックとオペランドを1行のアセンブリ表記に整形します。
    def to_text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、命令表記など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "LD V1, $2A"
    waiting_for_key: bool = False

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの状態を記録した不変のデータ構造。
    stateは実行直後の状態のコピーであり、以降のstep()の影響を受けません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:utility_function このサイクルで書き込まれたアドレスの一覧を返します。
    def written_addresses(self) -> List[int]:
        return [a.address for a in self.bus_activity if a.access_type == BusAccessType.WRITE]
