# src/chip8_core/arch/chip8/instructions/draw.py
"""
描画命令（画面クリア、スプライト描画）の実装。
"""
from chip8_core.core.snapshot import Operation
from chip8_core.transport.bus import Bus
from chip8_core.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext, effective_address, make_operation, reg

# --- CLS ---
def decode_cls(word: int) -> Operation:
    return make_operation(word, "CLS", [], "CLS")

def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    ctx.display.clear()

# --- DRW Vx, Vy, nibble ---
def decode_drw(word: int) -> Operation:
    return make_operation(
        word, "DRW", [reg((word >> 8) & 0xF), reg((word >> 4) & 0xF), f"{word & 0xF:X}"], "DRW"
    )

# @intent:responsibility I から n バイトのスプライトを (Vx, Vy) にXOR描画し、衝突の有無をVFに格納します。
# @intent:rationale VFのクリアは座標の読み出しより前に行います（x または y が F の場合、座標は0になる）。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation, ctx: ExecutionContext) -> None:
    state.vf = 0
    x = state.v[op.x]
    y = state.v[op.y]
    sprite = bytes(bus.read(effective_address(state.i, row)) for row in range(op.n))
    if ctx.display.draw_sprite(x, y, sprite):
        state.vf = 1
