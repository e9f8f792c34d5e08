# src/chip8_core/arch/chip8/instructions/keys.py
"""
キーパッド命令の実装。

LD Vx, K はブロックせず、キーが押されていなければCPUをキー入力待ち状態にします。
待ち状態の解除は Chip8Cpu.step() が行います。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, skip_if, make_operation, reg

# --- SKP Vx ---
def decode_skp(word: int) -> Operation:
    return make_operation(word, "SKP", [reg((word >> 8) & 0xF)], "SKP")

def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    skip_if(state, ctx.keypad.is_pressed(state.v[op.x]))

# --- SKNP Vx ---
def decode_sknp(word: int) -> Operation:
    return make_operation(word, "SKNP", [reg((word >> 8) & 0xF)], "SKNP")

def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    skip_if(state, not ctx.keypad.is_pressed(state.v[op.x]))

# --- LD Vx, K ---
def decode_ld_vx_k(word: int) -> Operation:
    return make_operation(word, "LD", [reg((word >> 8) & 0xF), "K"], "LD_VX_K")

# @intent:responsibility 押下中のキーがあれば最小番号をVxに格納し、なければキー入力待ち状態に入ります。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    key = ctx.keypad.first_pressed()
    if key is None:
        state.key_wait_register = op.x
    else:
        state.v[op.x] = key
