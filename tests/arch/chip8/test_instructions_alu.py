import random
import unittest
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.config.models import QuirkConfig, ShiftQuirk

class TestChip8AluInstructions(unittest.TestCase):
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

    def test_ld_byte(self):
        # LD V3, $42
        self._execute(0x6342)
        self.assertEqual(self.state.v[3], 0x42)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_byte_wraps_without_flag(self):
        self.state.v[2] = 0xFF
        self.state.v[0xF] = 0x07
        # ADD V2, $02 -> 0x101 -> 0x01
        self._execute(0x7202)
        self.assertEqual(self.state.v[2], 0x01)
        self.assertEqual(self.state.v[0xF], 0x07) # VF unchanged

    def test_ld_reg(self):
        self.state.v[5] = 0x99
        self._execute(0x8150)
        self.assertEqual(self.state.v[1], 0x99)

    def test_or_and_xor(self):
        self.state.v[1] = 0b1100
        self.state.v[2] = 0b1010
        self._execute(0x8121) # OR
        self.assertEqual(self.state.v[1], 0b1110)

        self.state.v[1] = 0b1100
        self._execute(0x8122) # AND
        self.assertEqual(self.state.v[1], 0b1000)

        self.state.v[1] = 0b1100
        self._execute(0x8123) # XOR
        self.assertEqual(self.state.v[1], 0b0110)

    def test_add_reg_no_carry(self):
        self.state.v[1] = 0x10
        self.state.v[2] = 0x20
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 0x30)
        self.assertEqual(self.state.v[0xF], 0)

    def test_add_reg_carry(self):
        self.state.v[1] = 0xF0
        self.state.v[2] = 0x20
        self._execute(0x8124)
        self.assertEqual(self.state.v[1], 0x10)
        self.assertEqual(self.state.v[0xF], 1)

    def test_add_reg_into_vf_overwrites_flag(self):
        # Flag is written first, then VF += V2 uses the flag value.
        self.state.v[0xF] = 0xFF
        self.state.v[2] = 0x02
        self._execute(0x8F24)
        self.assertEqual(self.state.v[0xF], 0x03) # flag(1) + 2

    def test_flag_property_reflects_alu_results(self):
        # SUB V3, V4 with no borrow, then SHL V3 (bit 7 clear)
        self.state.v[3] = 0x05
        self.state.v[4] = 0x01
        snapshot = self._execute(0x8345)
        self.assertEqual(snapshot.state.vf, 1)
        self._execute(0x830E)
        self.assertEqual(self.state.vf, 0)
        self.assertEqual(self.state.v[3], 0x08)

    def test_sub_no_borrow(self):
        self.state.v[1] = 0x30
        self.state.v[2] = 0x10
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0x20)
        self.assertEqual(self.state.v[0xF], 1)

    def test_sub_equal_is_no_borrow(self):
        self.state.v[1] = 0x10
        self.state.v[2] = 0x10
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0x00)
        self.assertEqual(self.state.v[0xF], 1)

    def test_sub_borrow(self):
        self.state.v[1] = 0x10
        self.state.v[2] = 0x30
        self._execute(0x8125)
        self.assertEqual(self.state.v[1], 0xE0)
        self.assertEqual(self.state.v[0xF], 0)

    def test_subn(self):
        self.state.v[1] = 0x10
        self.state.v[2] = 0x30
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 0x20)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[1] = 0x30
        self.state.v[2] = 0x10
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 0xE0)
        self.assertEqual(self.state.v[0xF], 0)

    def test_shr_canonical(self):
        self.state.v[4] = 0b00000101
        self._execute(0x8406)
        self.assertEqual(self.state.v[4], 0b00000010)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[4] = 0b00001000
        self._execute(0x8406)
        self.assertEqual(self.state.v[4], 0b00000100)
        self.assertEqual(self.state.v[0xF], 0)

    def test_shl_canonical(self):
        self.state.v[4] = 0b10000001
        self._execute(0x840E)
        self.assertEqual(self.state.v[4], 0b00000010)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[4] = 0b01000000
        self._execute(0x840E)
        self.assertEqual(self.state.v[4], 0b10000000)
        self.assertEqual(self.state.v[0xF], 0)

    def test_shift_reference_quirk(self):
        cpu = Chip8Cpu(quirks=QuirkConfig(shift=ShiftQuirk.REFERENCE))
        state = cpu.get_state()

        # SHR: flag is bit 3
        state.v[4] = 0b00001000
        self._execute(0x8406, cpu)
        self.assertEqual(state.v[4], 0b00000100)
        self.assertEqual(state.v[0xF], 1)

        state.v[4] = 0b00000001
        self._execute(0x8406, cpu)
        self.assertEqual(state.v[0xF], 0)

        # SHL: bit 15 of an 8-bit value is never set
        state.v[4] = 0xFF
        self._execute(0x840E, cpu)
        self.assertEqual(state.v[4], 0xFE)
        self.assertEqual(state.v[0xF], 0)

    def test_rnd_uses_injected_generator(self):
        cpu_a = Chip8Cpu(rng=random.Random(1234))
        cpu_b = Chip8Cpu(rng=random.Random(1234))
        self._execute(0xC5FF, cpu_a)
        self._execute(0xC5FF, cpu_b)
        self.assertEqual(cpu_a.get_state().v[5], cpu_b.get_state().v[5])

    def test_rnd_applies_mask(self):
        for _ in range(20):
            self._execute(0xC50F)
            self.assertEqual(self.state.v[5] & 0xF0, 0)
            self.state.pc = 0x200

        self._execute(0xC500)
        self.assertEqual(self.state.v[5], 0)

    def test_registers_stay_in_byte_range(self):
        rng = random.Random(7)
        for _ in range(200):
            word = 0x8000 | (rng.randrange(15) << 8) | (rng.randrange(16) << 4) | rng.choice([0, 1, 2, 3, 4, 5, 6, 7, 0xE])
            for n in range(16):
                self.state.v[n] = rng.randrange(256)
            self.state.pc = 0x200
            self._execute(word)
            for value in self.state.v:
                self.assertTrue(0 <= value <= 0xFF)

if __name__ == '__main__':
    unittest.main()
