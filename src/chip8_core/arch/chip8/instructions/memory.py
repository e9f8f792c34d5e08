# src/chip8_core/arch/chip8/instructions/memory.py
"""
Iレジスタ、メモリ一括転送、BCD、フォント、タイマー命令の実装。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.font import glyph_address
from chip8_core.arch.chip8.state import Chip8CpuState, ADDRESS_MASK
from .base import ExecutionContext, effective_address, make_operation, reg, addr

# --- LD I, addr ---
def decode_ld_i(word: int) -> Operation:
    return make_operation(word, "LD", ["I", addr(word & 0x0FFF)], "LD_I")

def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.i = op.nnn

# --- ADD I, Vx ---
def decode_add_i(word: int) -> Operation:
    return make_operation(word, "ADD", ["I", reg((word >> 8) & 0xF)], "ADD_I")

# @intent:responsibility Iに加算します。4KB空間で折り返し、VFは変化しません。
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.i = (state.i + state.v[op.x]) & ADDRESS_MASK

# --- LD [I], Vx ---
def decode_ld_mem_vx(word: int) -> Operation:
    return make_operation(word, "LD", ["[I]", reg((word >> 8) & 0xF)], "LD_MEM_VX")

# @intent:responsibility V0..Vx を I 以降のメモリへ書き込み、I を x+1 進めます。
def execute_ld_mem_vx(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    for k in range(op.x + 1):
        bus.write(effective_address(state.i, k), state.v[k])
    state.i = (state.i + op.x + 1) & 0xFFFF

# --- LD Vx, [I] ---
def decode_ld_vx_mem(word: int) -> Operation:
    return make_operation(word, "LD", [reg((word >> 8) & 0xF), "[I]"], "LD_VX_MEM")

# @intent:responsibility I 以降のメモリから V0..Vx を読み込み、I を x+1 進めます。
def execute_ld_vx_mem(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    for k in range(op.x + 1):
        state.v[k] = bus.read(effective_address(state.i, k))
    state.i = (state.i + op.x + 1) & 0xFFFF

# --- LD B, Vx ---
def decode_ld_b(word: int) -> Operation:
    return make_operation(word, "LD", ["B", reg((word >> 8) & 0xF)], "LD_B")

# @intent:responsibility Vxを10進3桁（百、十、一の位）に分解し、I, I+1, I+2 に格納します。
def execute_ld_b(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    value = state.v[op.x]
    bus.write(effective_address(state.i, 0), value // 100)
    bus.write(effective_address(state.i, 1), (value % 100) // 10)
    bus.write(effective_address(state.i, 2), value % 10)

# --- LD F, Vx ---
def decode_ld_f(word: int) -> Operation:
    return make_operation(word, "LD", ["F", reg((word >> 8) & 0xF)], "LD_F")

# @intent:responsibility Vxの下位ニブルに対応するフォントグリフのアドレスをIに設定します。
def execute_ld_f(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.i = glyph_address(state.v[op.x])

# --- LD Vx, DT ---
def decode_ld_vx_dt(word: int) -> Operation:
    return make_operation(word, "LD", [reg((word >> 8) & 0xF), "DT"], "LD_VX_DT")

def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.dt

# --- LD DT, Vx ---
def decode_ld_dt_vx(word: int) -> Operation:
    return make_operation(word, "LD", ["DT", reg((word >> 8) & 0xF)], "LD_DT_VX")

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.dt = state.v[op.x]

# --- LD ST, Vx ---
def decode_ld_st_vx(word: int) -> Operation:
    return make_operation(word, "LD", ["ST", reg((word >> 8) & 0xF)], "LD_ST_VX")

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.st = state.v[op.x]
