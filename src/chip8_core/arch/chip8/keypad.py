# src/chip8_core/arch/chip8/keypad.py
"""
16キーの入力ラッチ。

物理入力源はホストが所有し、マシンはホストが書き込んだ真偽値のスナップショットのみを保持します。
"""
from typing import List, Optional

from chip8_core.common.types import KeyStates

KEY_COUNT = 16


# @intent:responsibility 論理キー 0x0-0xF の押下状態を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT

    # @intent:pre-condition statesは長さ16のシーケンスである必要があります。
    def set_keys(self, states: KeyStates) -> None:
        if len(states) != KEY_COUNT:
            raise ValueError(f"Expected {KEY_COUNT} key states, got {len(states)}.")
        self._keys = [bool(s) for s in states]

    def press(self, key: int) -> None:
        self._keys[self._check(key)] = True

    def release(self, key: int) -> None:
        self._keys[self._check(key)] = False

    def release_all(self) -> None:
        self._keys = [False] * KEY_COUNT

    def is_pressed(self, key: int) -> bool:
        return self._keys[key & 0x0F]

    # @intent:responsibility 押下中のキーのうち最小の番号を返します。なければNone。
    def first_pressed(self) -> Optional[int]:
        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def get_keys(self) -> List[bool]:
        return list(self._keys)

    def _check(self, key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not a logical key (0x0-0xF).")
        return key
