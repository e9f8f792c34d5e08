# src/chip8_core/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_core.core.errors import StackOverflowError, StackUnderflowError
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState, STACK_SIZE, ADDRESS_MASK
from .base import ExecutionContext, fault_address, skip_if, make_operation, reg, addr, byte

# --- JP addr ---
# @intent:responsibility JP (1NNN) 命令をデコードします。
def decode_jp(word: int) -> Operation:
    return make_operation(word, "JP", [addr(word & 0x0FFF)], "JP")

# @intent:responsibility JP命令を実行し、PCを12ビットアドレスに設定します。
def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = op.nnn

# --- JP V0, addr ---
def decode_jp_v0(word: int) -> Operation:
    return make_operation(word, "JP", ["V0", addr(word & 0x0FFF)], "JP_V0")

# @intent:responsibility JP V0 命令を実行します。ジャンプ先は4KB空間で折り返します。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = (op.nnn + state.v[0]) & ADDRESS_MASK

# --- CALL addr ---
def decode_call(word: int) -> Operation:
    return make_operation(word, "CALL", [addr(word & 0x0FFF)], "CALL")

# @intent:responsibility CALL命令を実行し、戻りアドレスをスタックに積んでジャンプします。
# @intent:pre-condition スタックに空きがない場合は状態を変更せずにStackOverflowErrorを送出します。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    if state.sp >= STACK_SIZE:
        raise StackOverflowError(fault_address(state), op.word, f"call depth exceeds {STACK_SIZE}")
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = op.nnn

# --- RET ---
def decode_ret(word: int) -> Operation:
    return make_operation(word, "RET", [], "RET")

# @intent:pre-condition スタックが空の場合は状態を変更せずにStackUnderflowErrorを送出します。
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    if state.sp == 0:
        raise StackUnderflowError(fault_address(state), op.word, "return with empty stack")
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- SE Vx, byte ---
def decode_se_byte(word: int) -> Operation:
    return make_operation(word, "SE", [reg((word >> 8) & 0xF), byte(word & 0xFF)], "SE_BYTE")

def execute_se_byte(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    skip_if(state, state.v[op.x] == op.kk)

# --- SNE Vx, byte ---
def decode_sne_byte(word: int) -> Operation:
    return make_operation(word, "SNE", [reg((word >> 8) & 0xF), byte(word & 0xFF)], "SNE_BYTE")

def execute_sne_byte(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    skip_if(state, state.v[op.x] != op.kk)

# --- SE Vx, Vy ---
def decode_se_reg(word: int) -> Operation:
    return make_operation(word, "SE", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)], "SE_REG")

def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    skip_if(state, state.v[op.x] == state.v[op.y])

# --- SNE Vx, Vy ---
def decode_sne_reg(word: int) -> Operation:
    return make_operation(word, "SNE", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)], "SNE_REG")

def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    skip_if(state, state.v[op.x] != state.v[op.y])
