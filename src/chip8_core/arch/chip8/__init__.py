# src/chip8_core/arch/chip8/__init__.py
"""
CHIP-8 Architecture Package
"""
from .cpu import Chip8Cpu, create_bus
from .state import Chip8CpuState
from .display import Display, SCREEN_W, SCREEN_H
from .keypad import Keypad
