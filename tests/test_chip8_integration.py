from chip8_core import create_machine

def _program(cpu, words, start=0x200):
    bus = cpu.get_bus()
    for offset, word in enumerate(words):
        bus.load(start + offset * 2, word >> 8)
        bus.load(start + offset * 2 + 1, word & 0xFF)

def test_chip8_score_display():
    cpu = create_machine()

    # 0200: LD VA, $05
    # 0202: LD I, $300
    # 0204: LD B, VA      -> 0300: 00 00 05
    # 0206: LD V2, [I]    -> V0..V2 = 0, 0, 5
    # 0208: LD F, V2
    # 020A: LD V0, $00
    # 020C: LD V1, $00
    # 020E: DRW V0, V1, 5
    # 0210: CALL $220
    # 0212: JP $212
    _program(cpu, [0x6A05, 0xA300, 0xFA33, 0xF265, 0xF229, 0x6000, 0x6100, 0xD015, 0x2220, 0x1212])
    # 0220: LD V3, $07
    # 0222: RET
    _program(cpu, [0x6307, 0x00EE], start=0x220)

    for _ in range(14):
        cpu.step()

    state = cpu.get_state()
    bus = cpu.get_bus()
    assert [bus.peek(a) for a in range(0x300, 0x304)] == [0, 0, 5, 0]
    assert state.v[2] == 5
    assert state.v[3] == 7
    assert state.sp == 0
    assert state.pc == 0x212
    assert state.i == 5 * 5
    assert state.v[0xF] == 0

    # glyph "5": F0 80 F0 10 F0
    assert cpu.display.lit_count() == 14
    assert cpu.display.render_text().splitlines()[:5] == [
        "####" + "." * 60,
        "#..." + "." * 60,
        "####" + "." * 60,
        "...#" + "." * 60,
        "####" + "." * 60,
    ]
    assert cpu.cycle_count == 14

def test_chip8_timer_countdown_loop():
    cpu = create_machine()

    # 0200: LD V0, $03
    # 0202: LD DT, V0
    # 0204: LD V1, DT
    # 0206: SE V1, $00
    # 0208: JP $204
    # 020A: JP $20A
    _program(cpu, [0x6003, 0xF015, 0xF107, 0x3100, 0x1204, 0x120A])

    for _ in range(50):
        if cpu.get_state().pc == 0x20A:
            break
        cpu.step()
        if cpu.get_state().pc == 0x204:
            cpu.tick()

    assert cpu.get_state().pc == 0x20A
    assert cpu.get_state().dt == 0
