# src/chip8_core/arch/chip8/font.py
"""
組み込みフォントアトラス。

16個の16進数字グリフ (0-F) を各5バイトで保持します。
1バイトが4x5ピクセルグリフの1行に対応し、上位ビットが左端です。
"""

FONT_START = 0x000
GLYPH_SIZE = 5

FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

FONT_SIZE = len(FONT)  # 80 bytes


def glyph_address(digit: int) -> int:
    """Memory offset of the glyph for the low nibble of ``digit``."""
    return FONT_START + (digit & 0x0F) * GLYPH_SIZE
