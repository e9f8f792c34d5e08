import yaml
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from .models import MachineConfig, QuirkConfig, ShiftQuirk, SpriteEdgeMode

E = TypeVar("E", bound=Enum)


class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Machine config must be a mapping, got {type(data).__name__}")

        quirk_data = data.get("quirks", {}) or {}
        quirks = QuirkConfig(
            shift=self._parse_enum(ShiftQuirk, quirk_data.get("shift"), ShiftQuirk.CANONICAL),
            sprite_edges=self._parse_enum(SpriteEdgeMode, quirk_data.get("sprite_edges"), SpriteEdgeMode.WRAP),
        )

        seed = data.get("random_seed")
        rom = data.get("rom")

        return MachineConfig(
            quirks=quirks,
            random_seed=None if seed is None else self._parse_int(seed),
            rom_path=None if rom is None else str(rom),
        )

    def _parse_enum(self, enum_type: Type[E], value: Optional[str], default: E) -> E:
        if value is None:
            return default
        try:
            return enum_type(str(value).lower())
        except ValueError:
            choices = ", ".join(member.value for member in enum_type)
            raise ValueError(f"Invalid {enum_type.__name__} '{value}' (expected one of: {choices})")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
