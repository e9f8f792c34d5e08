"""
レイヤー間で受け渡す値の型定義。
"""
from typing import List, NamedTuple, Sequence, Tuple

# @intent:data_structure キーパッド16キーの押下状態。ホストが step() の前に渡します。
KeyStates = Sequence[bool]

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_bytes, mnemonic)。
DisassemblyLine = Tuple[int, str, str]

class RegisterInfo(NamedTuple):
    name: str
    width: int  # bits

# @intent:data_structure ホストがレジスタを並べるためのグループ定義（"General", "Pointers", "Timers"）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
