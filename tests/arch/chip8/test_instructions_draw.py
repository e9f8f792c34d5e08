import unittest
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.arch.chip8.font import glyph_address
from chip8_core.config.models import QuirkConfig, SpriteEdgeMode

class TestChip8DrawInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.bus = self.cpu.get_bus()
        self.state = self.cpu.get_state()

    def _execute(self, word, cpu=None):
        cpu = cpu or self.cpu
        state = cpu.get_state()
        cpu.get_bus().write(state.pc, word >> 8)
        cpu.get_bus().write(state.pc + 1, word & 0xFF)
        return cpu.step()

    def _place_sprite(self, address, rows, cpu=None):
        cpu = cpu or self.cpu
        for offset, byte in enumerate(rows):
            cpu.get_bus().write(address + offset, byte)
        cpu.get_state().i = address

    def test_draw_font_glyph(self):
        self.state.i = glyph_address(0)
        # DRW V0, V1, 5 at (0, 0)
        self._execute(0xD015)
        display = self.cpu.display
        self.assertEqual(display.lit_count(), 14)
        self.assertTrue(display.get_pixel(0, 0))
        self.assertTrue(display.get_pixel(3, 0))
        self.assertFalse(display.get_pixel(1, 1))
        self.assertEqual(self.state.v[0xF], 0)

    def test_draw_twice_erases_and_sets_collision(self):
        self.state.i = glyph_address(8)
        self._execute(0xD015)
        self.assertEqual(self.state.v[0xF], 0)
        self._execute(0xD015)
        self.assertEqual(self.state.v[0xF], 1)
        self.assertEqual(self.cpu.display.lit_count(), 0)

    def test_collision_counts_any_row(self):
        self._place_sprite(0x300, [0x80])
        self.state.v[0] = 10
        self.state.v[1] = 11
        self._execute(0xD011)
        # second sprite only overlaps on its second row
        self._place_sprite(0x310, [0x01, 0x80])
        self.state.v[1] = 10
        self._execute(0xD012)
        self.assertEqual(self.state.v[0xF], 1)
        self.assertFalse(self.cpu.display.get_pixel(10, 11))
        self.assertTrue(self.cpu.display.get_pixel(17, 10))

    def test_cls(self):
        self.state.i = glyph_address(1)
        self._execute(0xD015)
        self.assertGreater(self.cpu.display.lit_count(), 0)
        self._execute(0x00E0)
        self.assertEqual(self.cpu.display.lit_count(), 0)

    def test_wrap_mode_wraps_each_pixel(self):
        self._place_sprite(0x300, [0xFF, 0xFF])
        self.state.v[0] = 62
        self.state.v[1] = 31
        self._execute(0xD012)
        display = self.cpu.display
        self.assertEqual(display.lit_count(), 16)
        self.assertTrue(display.get_pixel(63, 31))
        self.assertTrue(display.get_pixel(5, 31))
        self.assertTrue(display.get_pixel(0, 0))

    def test_clip_mode_discards_overflow(self):
        cpu = Chip8Cpu(quirks=QuirkConfig(sprite_edges=SpriteEdgeMode.CLIP))
        self._place_sprite(0x300, [0xFF, 0xFF], cpu=cpu)
        cpu.get_state().v[0] = 62
        cpu.get_state().v[1] = 31
        self._execute(0xD012, cpu=cpu)
        display = cpu.display
        self.assertEqual(display.lit_count(), 2)
        self.assertTrue(display.get_pixel(62, 31))
        self.assertTrue(display.get_pixel(63, 31))
        self.assertFalse(display.get_pixel(0, 31))
        self.assertFalse(display.get_pixel(62, 0))

    def test_start_coordinates_wrap_in_both_modes(self):
        for mode in (SpriteEdgeMode.WRAP, SpriteEdgeMode.CLIP):
            cpu = Chip8Cpu(quirks=QuirkConfig(sprite_edges=mode))
            self._place_sprite(0x300, [0x80], cpu=cpu)
            cpu.get_state().v[0] = 64 + 2
            cpu.get_state().v[1] = 32 + 3
            self._execute(0xD011, cpu=cpu)
            self.assertTrue(cpu.display.get_pixel(2, 3), mode)

    def test_flag_cleared_before_coordinates_are_read(self):
        self._place_sprite(0x300, [0x80])
        self.state.v[0xF] = 10
        self.state.v[0] = 4
        # DRW VF, V0, 1: VF reads as 0 once cleared
        self._execute(0xDF01)
        self.assertTrue(self.cpu.display.get_pixel(0, 4))
        self.assertFalse(self.cpu.display.get_pixel(10, 4))
        self.assertEqual(self.state.v[0xF], 0)

    def test_zero_height_sprite(self):
        self.state.v[0xF] = 1
        self._execute(0xD010)
        self.assertEqual(self.cpu.display.lit_count(), 0)
        self.assertEqual(self.state.v[0xF], 0)

if __name__ == '__main__':
    unittest.main()
