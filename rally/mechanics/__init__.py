"""
Mechanics module - Turn resolution systems.

This module provides the resolvers the Game runs each register:
- MovementResolver: Executes program cards
- BoardElementResolver: Conveyors, pushers and gears
- LaserResolver: Board laser fire
- Deck: Dealing and reclaiming program cards

The resolvers are stateless - they mutate the robots passed to them,
never themselves. The Deck is the one stateful piece: it owns the card pool.
"""

from .movement import MovementResolver, MovementResult, step_robot
from .board_elements import BoardElementResolver, ElementResult, ELEMENT_PHASES
from .lasers import LaserResolver, LaserHit, robot_at
from .deck import Deck

__all__ = [
    "MovementResolver",
    "MovementResult",
    "step_robot",
    "BoardElementResolver",
    "ElementResult",
    "ELEMENT_PHASES",
    "LaserResolver",
    "LaserHit",
    "robot_at",
    "Deck",
]
