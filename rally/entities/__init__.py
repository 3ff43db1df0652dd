"""
Entity definitions for the register combat engine.

This module exports:
- Robot (a player's piece and its program)
- ProgramCard (a card bound to a register)
"""

from .robot import ProgramCard, Robot, UNPLACED

__all__ = [
    "Robot",
    "ProgramCard",
    "UNPLACED",
]
