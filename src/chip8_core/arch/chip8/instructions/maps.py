# src/chip8_core/arch/chip8/instructions/maps.py
"""
命令語と命令実装のマッピング定義。

最上位ニブル（命令ファミリ）で FAMILY_DECODE_MAP を引き、
0/E/F ファミリは下位バイト、8 ファミリは下位ニブルでさらにサブテーブルを引きます。
"""
from . import alu
from . import control
from . import draw
from . import keys
from . import memory
from .base import decode_bad, execute_bad

# @intent:map 0ファミリ（下位バイトで判別）。
SYSTEM_DECODE_MAP = {
    0xE0: draw.decode_cls,
    0xEE: control.decode_ret,
}

# @intent:map 8ファミリ（下位ニブルで判別）。未定義の8,9,A,B,C,D,FはBADになります。
ARITH_DECODE_MAP = {
    0x0: alu.decode_ld_reg,
    0x1: alu.decode_or,
    0x2: alu.decode_and,
    0x3: alu.decode_xor,
    0x4: alu.decode_add_reg,
    0x5: alu.decode_sub,
    0x6: alu.decode_shr,
    0x7: alu.decode_subn,
    0xE: alu.decode_shl,
}

# @intent:map Eファミリ（下位バイトで判別）。
KEY_DECODE_MAP = {
    0x9E: keys.decode_skp,
    0xA1: keys.decode_sknp,
}

# @intent:map Fファミリ（下位バイトで判別）。
MISC_DECODE_MAP = {
    0x07: memory.decode_ld_vx_dt,
    0x0A: keys.decode_ld_vx_k,
    0x15: memory.decode_ld_dt_vx,
    0x18: memory.decode_ld_st_vx,
    0x1E: memory.decode_add_i,
    0x29: memory.decode_ld_f,
    0x33: memory.decode_ld_b,
    0x55: memory.decode_ld_mem_vx,
    0x65: memory.decode_ld_vx_mem,
}

# @intent:map 最上位ニブルからデコード関数へのマッピングテーブル。
# サブテーブルを持つファミリ (0, 8, E, F) は __init__.decode_opcode 側で解決します。
FAMILY_DECODE_MAP = {
    0x1: control.decode_jp,
    0x2: control.decode_call,
    0x3: control.decode_se_byte,
    0x4: control.decode_sne_byte,
    0x5: control.decode_se_reg,
    0x6: alu.decode_ld_byte,
    0x7: alu.decode_add_byte,
    0x9: control.decode_sne_reg,
    0xA: memory.decode_ld_i,
    0xB: control.decode_jp_v0,
    0xC: alu.decode_rnd,
    0xD: draw.decode_drw,
}

# @intent:map (ファミリ, サブテーブル, サブキー抽出) の対応表。
SUB_DECODE_MAPS = {
    0x0: (SYSTEM_DECODE_MAP, 0x00FF),
    0x8: (ARITH_DECODE_MAP, 0x000F),
    0xE: (KEY_DECODE_MAP, 0x00FF),
    0xF: (MISC_DECODE_MAP, 0x00FF),
}

BAD_DECODER = decode_bad

# @intent:map Operation.handler から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    "JP": control.execute_jp,
    "JP_V0": control.execute_jp_v0,
    "CALL": control.execute_call,
    "RET": control.execute_ret,
    "SE_BYTE": control.execute_se_byte,
    "SNE_BYTE": control.execute_sne_byte,
    "SE_REG": control.execute_se_reg,
    "SNE_REG": control.execute_sne_reg,

    # ALU
    "LD_BYTE": alu.execute_ld_byte,
    "ADD_BYTE": alu.execute_add_byte,
    "LD_REG": alu.execute_ld_reg,
    "OR": alu.execute_or,
    "AND": alu.execute_and,
    "XOR": alu.execute_xor,
    "ADD_REG": alu.execute_add_reg,
    "SUB": alu.execute_sub,
    "SHR": alu.execute_shr,
    "SUBN": alu.execute_subn,
    "SHL": alu.execute_shl,
    "RND": alu.execute_rnd,

    # Memory / Timers
    "LD_I": memory.execute_ld_i,
    "ADD_I": memory.execute_add_i,
    "LD_MEM_VX": memory.execute_ld_mem_vx,
    "LD_VX_MEM": memory.execute_ld_vx_mem,
    "LD_B": memory.execute_ld_b,
    "LD_F": memory.execute_ld_f,
    "LD_VX_DT": memory.execute_ld_vx_dt,
    "LD_DT_VX": memory.execute_ld_dt_vx,
    "LD_ST_VX": memory.execute_ld_st_vx,

    # Display
    "CLS": draw.execute_cls,
    "DRW": draw.execute_drw,

    # Keypad
    "SKP": keys.execute_skp,
    "SKNP": keys.execute_sknp,
    "LD_VX_K": keys.execute_ld_vx_k,

    # Bad Instruction
    "BAD": execute_bad,
}
