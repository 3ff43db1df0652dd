"""
Register combat engine.

Simulates the turns of a grid-based, program-card-driven robot combat
board game: robots program five registers with movement cards, then the
Game resolves each register through movement, board elements and lasers.
"""

from .core import (
    ALL_PRIORITIES,
    OFF_BOARD,
    GridPos,
    Orientation,
    ProgramCardType,
    Rotation,
    RulesConfig,
    StepOutcome,
    TileExecution,
    TileKind,
    card_type_for,
)
from .world import Board, Conveyor, Gear, LaserEmitter, Pusher, Tile
from .entities import ProgramCard, Robot
from .mechanics import Deck, ElementResult, LaserHit, MovementResult
from .game import Game, RegisterReport

__all__ = [
    "ALL_PRIORITIES",
    "OFF_BOARD",
    "GridPos",
    "Orientation",
    "ProgramCardType",
    "Rotation",
    "RulesConfig",
    "StepOutcome",
    "TileExecution",
    "TileKind",
    "card_type_for",
    "Board",
    "Tile",
    "Conveyor",
    "Gear",
    "LaserEmitter",
    "Pusher",
    "Robot",
    "ProgramCard",
    "Deck",
    "ElementResult",
    "LaserHit",
    "MovementResult",
    "Game",
    "RegisterReport",
]
