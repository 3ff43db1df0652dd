"""
Board model for the register combat engine.

This module provides:
- Board: The fixed grid of tiles
- Tile: Pit / floor variant with walls and attachments
- Conveyor, Pusher, Gear, LaserEmitter: Tile attachments
"""

from .tiles import Conveyor, Gear, LaserEmitter, Pusher, Tile
from .board import Board

__all__ = [
    "Board",
    "Tile",
    "Conveyor",
    "Pusher",
    "Gear",
    "LaserEmitter",
]
