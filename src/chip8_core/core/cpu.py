# chip8_core/core/cpu.py
"""
Core Layer (命令サイクル)

フェッチ、デコード、実行の流れを AbstractCpu.step() に固定し、
命令語の形式や命令の意味はサブクラスと Instruction Layer に任せます。
"""
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, List, Optional

from chip8_core.transport.bus import Bus
from chip8_core.core.snapshot import Snapshot, Operation, Metadata
from chip8_core.core.state import CpuState
from chip8_core.common.types import DisassemblyLine, RegisterLayoutInfo


# @intent:responsibility 状態の保持と1命令分の実行サイクルを提供する基底クラス。
class AbstractCpu(ABC):
    # @intent:constant PCの折り返しマスク。アドレス幅に合わせてサブクラスで上書きします。
    ADDRESS_MASK = 0xFFFF

    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility 状態とサイクル数を初期化します。メモリはBusが所有するため変更しません。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    # @intent:rationale 返り値は実行中の状態そのものです。不変のコピーが必要な場合はSnapshotを使います。
    def get_state(self) -> CpuState:
        return self._state

    def get_bus(self) -> Bus:
        return self._bus

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のPCから命令語を読み出します。PCは変更しません。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行し、実行後の状態とバスアクセスを収めたSnapshotを返します。
    # @intent:rationale PCは実行前に命令長だけ進めます。ジャンプやスキップ命令はその値を基準に上書きします。
    def step(self) -> Snapshot:
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        suspended = self._handle_suspended(initial_pc)
        if suspended is not None:
            return suspended

        operation = self._decode(self._fetch())
        self._update_pc(operation)
        self._execute(operation)
        return self._create_snapshot(initial_pc, operation)

    # @intent:return 命令をフェッチせずにサイクルを終える場合はそのSnapshot、通常はNone。
    def _handle_suspended(self, current_pc: int) -> Optional[Snapshot]:
        return None

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & self.ADDRESS_MASK

    def _copy_state(self) -> CpuState:
        return replace(self._state)

    # @intent:responsibility サイクル数を加算し、このサイクルのバスアクセスを回収してSnapshotを組み立てます。
    def _create_snapshot(self, initial_pc: int, operation: Operation, waiting: bool = False) -> Snapshot:
        self._cycle_count += operation.cycle_count
        return Snapshot(
            state=self._copy_state(),
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                symbol_info=f"{initial_pc:03X}: {operation.to_text()}",
                waiting_for_key=waiting,
            ),
            bus_activity=self._bus.get_and_clear_activity_log(),
        )

    # @intent:responsibility ホスト表示用に、レジスタ名から値への辞書を返します。
    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass

    # @intent:responsibility レジスタの表示グループと各レジスタのビット幅を返します。
    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    # @intent:responsibility メモリ範囲を (address, hex_bytes, mnemonic) の行リストに変換します。
    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        pass
