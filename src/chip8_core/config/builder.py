import random
from typing import Optional

from chip8_core.arch.chip8.cpu import Chip8Cpu, create_bus
from chip8_core.loader.loader import RomLoader
from .models import MachineConfig

# @intent:responsibility マシン構成（Config）に基づいて、Bus、CPUを生成・接続し、ROMをロードします。
class SystemBuilder:
    def build_system(self, config: MachineConfig) -> Chip8Cpu:
        bus = create_bus()
        rng = random.Random(config.random_seed)
        cpu = Chip8Cpu(bus, quirks=config.quirks, rng=rng)

        if config.rom_path:
            RomLoader().load_rom(config.rom_path, cpu)

        return cpu


# @intent:responsibility 構成からマシンを生成する簡易エントリポイント。構成省略時は既定値を使用します。
def create_machine(config: Optional[MachineConfig] = None) -> Chip8Cpu:
    return SystemBuilder().build_system(config or MachineConfig())
