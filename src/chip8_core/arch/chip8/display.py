# src/chip8_core/arch/chip8/display.py
"""
CHIP-8 フレームバッファ。

64x32 の1ビットピクセルを行優先で保持します。
変更はCLS命令とDRW命令からのみ行われ、ホストのレンダラーは読み取り専用で参照します。
"""
from typing import List

from chip8_core.config.models import SpriteEdgeMode

SCREEN_W = 64
SCREEN_H = 32
SCREEN_SIZE = SCREEN_W * SCREEN_H


# @intent:responsibility フレームバッファの保持、クリア、XORスプライト描画を提供します。
class Display:
    def __init__(self, edge_mode: SpriteEdgeMode = SpriteEdgeMode.WRAP):
        self._pixels = bytearray(SCREEN_SIZE)
        self.edge_mode = edge_mode

    def clear(self) -> None:
        self._pixels = bytearray(SCREEN_SIZE)

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < SCREEN_W and 0 <= y < SCREEN_H):
            raise IndexError(f"Pixel ({x}, {y}) outside {SCREEN_W}x{SCREEN_H} framebuffer.")
        return self._pixels[y * SCREEN_W + x] == 1

    # @intent:responsibility スプライトをXOR合成し、点灯→消灯の遷移が1つでもあればTrueを返します。
    # @intent:rationale 衝突判定は行単位ではなくスプライト全体で集計します。
    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        """
        spriteの各バイトを1行(8ピクセル、MSBが左端)として (x, y) に描画します。
        """
        collision = False
        origin_x = x % SCREEN_W
        origin_y = y % SCREEN_H
        wrap = self.edge_mode is SpriteEdgeMode.WRAP

        for row, byte in enumerate(sprite):
            py = origin_y + row
            if py >= SCREEN_H:
                if not wrap:
                    break
                py %= SCREEN_H
            for col in range(8):
                if not byte & (0x80 >> col):
                    continue
                px = origin_x + col
                if px >= SCREEN_W:
                    if not wrap:
                        break
                    px %= SCREEN_W
                index = py * SCREEN_W + px
                if self._pixels[index]:
                    collision = True
                self._pixels[index] ^= 1
        return collision

    def rows(self) -> List[List[bool]]:
        return [
            [self._pixels[y * SCREEN_W + x] == 1 for x in range(SCREEN_W)]
            for y in range(SCREEN_H)
        ]

    def to_bytes(self) -> bytes:
        """Row-major copy of the framebuffer, one byte (0 or 1) per pixel."""
        return bytes(self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)

    # @intent:utility_function テストやログ出力用に、点灯ピクセルを'#'で表した文字列を返します。
    def render_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if p else off for p in row) for row in self.rows())
