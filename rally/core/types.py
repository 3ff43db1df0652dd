"""
Core type definitions for the register combat engine.

This module contains the fundamental types, enums, and constants used
throughout the system. Apart from the small rotation helpers on
Orientation, there is no game logic here.
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Tuple

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Grid position: (x, y) where:
# - X increases to the RIGHT
# - Y increases DOWNWARD (screen convention, row index)
# - Origin (0, 0) is the TOP-LEFT cell
GridPos = Tuple[int, int]

# Position of a robot that has been removed from play (fell into a pit or
# off the edge). Never resolves to a tile.
OFF_BOARD: GridPos = (-1, -1)


class Orientation(Enum):
    """
    A side of a tile, or the direction a robot is facing.

    Each orientation provides the (dx, dy) delta of a single step
    in that direction.
    """
    TOP = (0, -1)
    RIGHT = (1, 0)
    BOTTOM = (0, 1)
    LEFT = (-1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        """Get the (dx, dy) step delta."""
        return self.value

    @property
    def opposite(self) -> Orientation:
        """Top <-> Bottom, Left <-> Right."""
        return _OPPOSITE[self]

    def rotated_left(self) -> Orientation:
        """Quarter turn counterclockwise: Bottom -> Right -> Top -> Left -> Bottom."""
        return _LEFT_OF[self]

    def rotated_right(self) -> Orientation:
        """Quarter turn clockwise (three left turns)."""
        return self.rotated_left().rotated_left().rotated_left()

    def step(self, pos: GridPos) -> GridPos:
        """Position one cell away from `pos` in this direction."""
        dx, dy = self.delta
        return (pos[0] + dx, pos[1] + dy)

    def __str__(self) -> str:
        return self.name


_OPPOSITE = {
    Orientation.TOP: Orientation.BOTTOM,
    Orientation.BOTTOM: Orientation.TOP,
    Orientation.LEFT: Orientation.RIGHT,
    Orientation.RIGHT: Orientation.LEFT,
}

_LEFT_OF = {
    Orientation.BOTTOM: Orientation.RIGHT,
    Orientation.RIGHT: Orientation.TOP,
    Orientation.TOP: Orientation.LEFT,
    Orientation.LEFT: Orientation.BOTTOM,
}


class Rotation(Enum):
    """Turning direction of a gear. NONE is not a valid gear configuration."""
    NONE = "none"
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    def __str__(self) -> str:
        return self.value

    def apply(self, facing: Orientation) -> Orientation:
        """Rotate `facing` a quarter turn in this direction."""
        if self == Rotation.CLOCKWISE:
            return facing.rotated_right()
        if self == Rotation.COUNTERCLOCKWISE:
            return facing.rotated_left()
        return facing


# ============================================================================
# PROGRAM CARDS
# ============================================================================

class ProgramCardType(Enum):
    """Movement instruction printed on a program card."""
    U_TURN = auto()
    ROTATE_LEFT = auto()
    ROTATE_RIGHT = auto()
    BACK_UP = auto()
    MOVE_1 = auto()
    MOVE_2 = auto()
    MOVE_3 = auto()

    def __str__(self) -> str:
        return self.name


# ============================================================================
# TILES & PHASES
# ============================================================================

class TileKind(Enum):
    """Tile variant: a pit swallows robots, a floor can carry walls and mechanisms."""
    PIT = "pit"
    FLOOR = "floor"

    def __str__(self) -> str:
        return self.value


class TileExecution(Enum):
    """Board-element phase a mechanism is being executed for."""
    EXPRESS_CONVEYOR = "express_conveyor"
    CONVEYOR = "conveyor"
    PUSHER = "pusher"
    GEAR = "gear"

    def __str__(self) -> str:
        return self.value


class StepOutcome(Enum):
    """What happened when a robot tried to move a single cell."""
    MOVED = "moved"
    BLOCKED_EXIT = "blocked_exit"  # wall on the current tile
    BLOCKED_ENTRY = "blocked_entry"  # wall on the target tile
    FELL = "fell"  # pit or board edge, robot removed from play
    OFF_BOARD = "off_board"  # robot was already out of play
    ROTATED = "rotated"  # turn-in-place cards

    def __str__(self) -> str:
        return self.value
