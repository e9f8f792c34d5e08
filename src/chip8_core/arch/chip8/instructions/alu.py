# src/chip8_core/arch/chip8/instructions/alu.py
"""
レジスタロードおよび算術論理演算命令の実装。

全てのレジスタ演算は8ビットで折り返します。VFを更新する命令は
「フラグ代入 → 演算結果の代入」の順序で状態を変更します。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.config.models import ShiftQuirk
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, make_operation, reg, byte


def _xy(word: int):
    return [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF)]

# --- LD Vx, byte ---
def decode_ld_byte(word: int) -> Operation:
    return make_operation(word, "LD", [reg((word >> 8) & 0xF), byte(word & 0xFF)], "LD_BYTE")

def execute_ld_byte(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = op.kk

# --- ADD Vx, byte ---
def decode_add_byte(word: int) -> Operation:
    return make_operation(word, "ADD", [reg((word >> 8) & 0xF), byte(word & 0xFF)], "ADD_BYTE")

# @intent:responsibility 即値を加算します。キャリーフラグは変化しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# --- LD Vx, Vy ---
def decode_ld_reg(word: int) -> Operation:
    return make_operation(word, "LD", _xy(word), "LD_REG")

def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.v[op.y]

# --- OR / AND / XOR ---
def decode_or(word: int) -> Operation:
    return make_operation(word, "OR", _xy(word), "OR")

def execute_or(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] |= state.v[op.y]

def decode_and(word: int) -> Operation:
    return make_operation(word, "AND", _xy(word), "AND")

def execute_and(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] &= state.v[op.y]

def decode_xor(word: int) -> Operation:
    return make_operation(word, "XOR", _xy(word), "XOR")

def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- ADD Vx, Vy ---
def decode_add_reg(word: int) -> Operation:
    return make_operation(word, "ADD", _xy(word), "ADD_REG")

# @intent:responsibility 和が255を超えればVF=1。フラグを先に書き込むため、x==Fの場合は和で上書きされます。
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.vf = 1 if state.v[op.x] + state.v[op.y] > 0xFF else 0
    state.v[op.x] = (state.v[op.x] + state.v[op.y]) & 0xFF

# --- SUB Vx, Vy ---
def decode_sub(word: int) -> Operation:
    return make_operation(word, "SUB", _xy(word), "SUB")

# @intent:responsibility Vx - Vy。ボローが発生しない (Vx >= Vy) 場合にVF=1。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.vf = 1 if state.v[op.x] >= state.v[op.y] else 0
    state.v[op.x] = (state.v[op.x] - state.v[op.y]) & 0xFF

# --- SUBN Vx, Vy ---
def decode_subn(word: int) -> Operation:
    return make_operation(word, "SUBN", _xy(word), "SUBN")

# @intent:responsibility Vy - Vx。ボローが発生しない (Vy >= Vx) 場合にVF=1。
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.vf = 1 if state.v[op.y] >= state.v[op.x] else 0
    state.v[op.x] = (state.v[op.y] - state.v[op.x]) & 0xFF

# --- SHR Vx ---
def decode_shr(word: int) -> Operation:
    return make_operation(word, "SHR", [reg((word >> 8) & 0xF)], "SHR")

# @intent:responsibility 右シフト。VFに格納するビットはShiftQuirkに従います。
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    value = state.v[op.x]
    if ctx.shift_quirk is ShiftQuirk.REFERENCE:
        state.vf = 1 if (value & 0x0F) >> 3 == 1 else 0
    else:
        state.vf = value & 0x01
    state.v[op.x] >>= 1

# --- SHL Vx ---
def decode_shl(word: int) -> Operation:
    return make_operation(word, "SHL", [reg((word >> 8) & 0xF)], "SHL")

# @intent:responsibility 左シフト。REFERENCEでは8ビット値の bit 15 を参照するため、VFは常に0になります。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    value = state.v[op.x]
    if ctx.shift_quirk is ShiftQuirk.REFERENCE:
        state.vf = 1 if value >> 15 == 1 else 0
    else:
        state.vf = (value >> 7) & 0x01
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF

# --- RND Vx, byte ---
def decode_rnd(word: int) -> Operation:
    return make_operation(word, "RND", [reg((word >> 8) & 0xF), byte(word & 0xFF)], "RND")

# @intent:responsibility 乱数バイトと即値マスクの論理積を格納します。乱数源はExecutionContextから注入されます。
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = ctx.rng.randrange(0x100) & op.kk
