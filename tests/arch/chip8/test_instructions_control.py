import unittest
from chip8_core.arch.chip8.cpu import Chip8Cpu
from chip8_core.core.errors import StackOverflowError, StackUnderflowError, BadInstructionError

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.bus = self.cpu.get_bus()
        self.state = self.cpu.get_state()

    def _execute(self, word, current_pc=0x200):
        self.bus.write(current_pc, word >> 8)
        self.bus.write(current_pc + 1, word & 0xFF)
        self.state.pc = current_pc
        return self.cpu.step()

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_jp_v0(self):
        self.state.v[0] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

    def test_jp_v0_wraps_address_space(self):
        self.state.v[0] = 0xFF
        self._execute(0xBFF0)
        self.assertEqual(self.state.pc, (0xFF0 + 0xFF) & 0xFFF)

    def test_call_and_ret(self):
        self._execute(0x2300, current_pc=0x200)
        self.assertEqual(self.state.pc, 0x300)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.stack[0], 0x202)

        self._execute(0x00EE, current_pc=0x300)
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def test_call_overflow(self):
        self.state.sp = 16
        with self.assertRaises(StackOverflowError) as ctx:
            self._execute(0x2300, current_pc=0x240)
        self.assertEqual(ctx.exception.address, 0x240)
        self.assertEqual(ctx.exception.opcode, 0x2300)
        self.assertEqual(self.state.sp, 16)

    def test_sixteen_nested_calls_are_allowed(self):
        for depth in range(16):
            self._execute(0x2400, current_pc=0x200 + depth * 2)
        self.assertEqual(self.state.sp, 16)
        with self.assertRaises(StackOverflowError):
            self._execute(0x2400, current_pc=0x400)

    def test_ret_underflow(self):
        with self.assertRaises(StackUnderflowError) as ctx:
            self._execute(0x00EE, current_pc=0x250)
        self.assertEqual(ctx.exception.address, 0x250)
        self.assertEqual(self.state.sp, 0)

    def test_se_byte(self):
        self.state.v[1] = 0x42
        self._execute(0x3142)
        self.assertEqual(self.state.pc, 0x204) # skipped
        self._execute(0x3143)
        self.assertEqual(self.state.pc, 0x202) # not skipped

    def test_sne_byte(self):
        self.state.v[1] = 0x42
        self._execute(0x4143)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x4142)
        self.assertEqual(self.state.pc, 0x202)

    def test_se_reg(self):
        self.state.v[1] = 5
        self.state.v[2] = 5
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x204)
        self.state.v[2] = 6
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_reg(self):
        self.state.v[1] = 5
        self.state.v[2] = 6
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x204)
        self.state.v[2] = 5
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x202)

    def test_bad_instruction(self):
        for word in (0x0000, 0x0123, 0x8128, 0x812F, 0xE100, 0xF1FF):
            with self.assertRaises(BadInstructionError) as ctx:
                self._execute(word, current_pc=0x260)
            self.assertEqual(ctx.exception.address, 0x260)
            self.assertEqual(ctx.exception.opcode, word)

if __name__ == '__main__':
    unittest.main()
