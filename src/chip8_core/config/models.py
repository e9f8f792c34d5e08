from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# @intent:responsibility SHR/SHLで VF に格納するビットの選択肢を定義します。
class ShiftQuirk(Enum):
    CANONICAL = "canonical"  # SHR: bit 0, SHL: bit 7
    REFERENCE = "reference"  # SHR: bit 3, SHL: bit 15 (常に0)


# @intent:responsibility 画面端をまたぐスプライト描画の扱いを定義します。
class SpriteEdgeMode(Enum):
    WRAP = "wrap"  # 全ピクセル座標を幅/高さで剰余
    CLIP = "clip"  # 開始座標のみ剰余、はみ出したピクセルは破棄


@dataclass
class QuirkConfig:
    shift: ShiftQuirk = ShiftQuirk.CANONICAL
    sprite_edges: SpriteEdgeMode = SpriteEdgeMode.WRAP


@dataclass
class MachineConfig:
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    random_seed: Optional[int] = None
    rom_path: Optional[str] = None
