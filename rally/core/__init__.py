"""
Core types and constants for the register combat engine.
"""

# Instead of from rally.core.types import Orientation, you can do: from rally.core import Orientation
from .types import (
    GridPos,
    OFF_BOARD,
    Orientation,
    Rotation,
    ProgramCardType,
    TileKind,
    TileExecution,
    StepOutcome,
)
from .cards import ALL_PRIORITIES, card_type_for, is_valid_priority
from .config import DEFAULT_RULES, RulesConfig


__all__ = [
    "GridPos",
    "OFF_BOARD",
    "Orientation",
    "Rotation",
    "ProgramCardType",
    "TileKind",
    "TileExecution",
    "StepOutcome",
    "ALL_PRIORITIES",
    "card_type_for",
    "is_valid_priority",
    "DEFAULT_RULES",
    "RulesConfig",
]
