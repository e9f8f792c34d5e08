# src/chip8_core/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

ホストは set_keys() でキー状態を渡した後に step() を命令レートで呼び出し、
tick() を60Hzで呼び出します。実行タイミングの制御はホストの責務です。
"""
import logging
import random
from typing import Dict, List, Optional

from chip8_core.common.types import DisassemblyLine, KeyStates, RegisterInfo, RegisterLayoutInfo
from chip8_core.config.models import QuirkConfig
from chip8_core.core.cpu import AbstractCpu
from chip8_core.core.errors import ExecutionError, RomTooLargeError
from chip8_core.core.snapshot import Operation, Snapshot
from chip8_core.transport.bus import Bus, RAM, ROM, format_memory_dump
from chip8_core.arch.chip8 import disassembler
from chip8_core.arch.chip8.display import Display
from chip8_core.arch.chip8.font import FONT, FONT_START, FONT_SIZE
from chip8_core.arch.chip8.keypad import Keypad
from chip8_core.arch.chip8.state import (
    Chip8CpuState, ADDRESS_MASK, MEMORY_SIZE, PROGRAM_START, PROGRAM_SIZE, REGISTER_COUNT,
)
from chip8_core.arch.chip8.instructions import ExecutionContext, decode_opcode, execute_instruction
from chip8_core.arch.chip8.instructions.base import read_word, make_operation, reg

logger = logging.getLogger(__name__)


# @intent:responsibility フォントROMとRAMからなる4KBのアドレス空間を構築します。
def create_bus() -> Bus:
    """
    0x000-0x04F にフォントアトラスを格納したROM、0x050-0xFFF にRAMを配置したBusを返します。
    """
    bus = Bus()
    font_end = FONT_START + FONT_SIZE - 1
    bus.register_device(FONT_START, font_end, ROM(FONT_SIZE))
    bus.register_device(font_end + 1, MEMORY_SIZE - 1, RAM(MEMORY_SIZE - FONT_SIZE))
    bus.load_block(FONT_START, FONT)
    return bus


# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシン。レジスタ状態、メモリ(Bus)、フレームバッファ、キーパッドを所有します。
    """
    ADDRESS_MASK = ADDRESS_MASK

    def __init__(self, bus: Optional[Bus] = None, quirks: Optional[QuirkConfig] = None,
                 rng: Optional[random.Random] = None):
        super().__init__(bus if bus is not None else create_bus())
        self._quirks = quirks or QuirkConfig()
        self._display = Display(self._quirks.sprite_edges)
        self._keypad = Keypad()
        self._context = ExecutionContext(
            display=self._display,
            keypad=self._keypad,
            rng=rng if rng is not None else random.Random(),
            shift_quirk=self._quirks.shift,
        )

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility レジスタ、スタック、タイマー、フレームバッファを初期化します。
    # @intent:rationale ロード済みプログラムと自己書き換えの結果はメモリに残ります。キー状態はホストの所有物のため保持します。
    def reset(self) -> None:
        super().reset()
        self._display.clear()
        logger.debug("machine reset, pc=%03X", self._state.pc)

    # @intent:responsibility プログラムイメージを 0x200 から配置します。
    # @intent:pre-condition イメージは3584バイト以下である必要があります。超える場合はメモリを変更せずに拒否します。
    def load_program(self, data: bytes) -> None:
        """
        ヘッダなしのプログラムイメージをプログラム領域にコピーします。
        短いイメージの場合、残りの領域は変更しません。
        """
        if len(data) > PROGRAM_SIZE:
            raise RomTooLargeError(len(data), PROGRAM_SIZE)
        self._bus.load_block(PROGRAM_START, bytes(data))
        logger.info("loaded %d byte program at %03X", len(data), PROGRAM_START)

    def _fetch(self) -> int:
        return read_word(self._bus, self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility Operationを実行し、状態を更新します。致命的エラーはログ出力後にそのまま送出します。
    def _execute(self, operation: Operation) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X: %s", (self._state.pc - operation.length) & ADDRESS_MASK, operation.to_text())
        try:
            execute_instruction(operation, self._state, self._bus, self._context)
        except ExecutionError as exc:
            logger.error("%s", exc)
            raise

    # @intent:responsibility キー入力待ち状態の場合、命令をフェッチせずにキーパッドを確認します。
    # @intent:rationale 待ち状態はブロックせず、ホストが毎サイクル step() を呼び直すことで解除されます。
    def _handle_suspended(self, current_pc: int) -> Optional[Snapshot]:
        target = self._state.key_wait_register
        if target is None:
            return None

        word = 0xF00A | (target << 8)
        operation = make_operation(word, "LD", [reg(target), "K"], "LD_VX_K")
        key = self._keypad.first_pressed()
        if key is None:
            return self._create_snapshot(current_pc, operation, waiting=True)

        self._state.v[target] = key
        self._state.key_wait_register = None
        logger.debug("key %X latched into %s", key, reg(target))
        return self._create_snapshot(current_pc, operation)

    def _copy_state(self) -> Chip8CpuState:
        return self._state.copy()

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減算します（0で下限）。
    def tick(self) -> None:
        state = self._state
        if state.dt:
            state.dt -= 1
        if state.st:
            state.st -= 1

    # --- Host interface ---
    def set_keys(self, states: KeyStates) -> None:
        self._keypad.set_keys(states)

    def press(self, key: int) -> None:
        self._keypad.press(key)

    def release(self, key: int) -> None:
        self._keypad.release(key)

    def release_all_keys(self) -> None:
        self._keypad.release_all()

    def get_keys(self) -> List[bool]:
        return self._keypad.get_keys()

    @property
    def display(self) -> Display:
        return self._display

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def quirks(self) -> QuirkConfig:
        return self._quirks

    # @intent:responsibility サウンドタイマーが0でない間、ホストは音を鳴らすべきです。
    @property
    def sound_active(self) -> bool:
        return self._state.st > 0

    @property
    def waiting_for_key(self) -> bool:
        return self._state.waiting_for_key

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{n:X}": s.v[n] for n in range(REGISTER_COUNT)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.dt, "ST": s.st})
        return registers

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [RegisterInfo("DT", 8), RegisterInfo("ST", 8)]),
        ]

    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)

    # @intent:responsibility 指定範囲のメモリを16進ダンプ形式で返します。
    # @intent:rationale length 省略時は start からメモリ末尾まで。範囲は 0xFFF で打ち切ります。
    def dump_memory(self, start: int = 0x000, length: Optional[int] = None) -> List[str]:
        available = max(MEMORY_SIZE - start, 0)
        length = available if length is None else min(length, available)
        return format_memory_dump(self._bus, start, length)
