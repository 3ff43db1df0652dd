"""
Tiles and the mechanisms that can be attached to them.

A tile is either a pit or a floor. Floors may carry walls on any of their
four sides and any combination of independent attachments:
- Conveyor (normal or express)
- Pusher (active only on some registers)
- Gear
- Laser emitters (at most one per wall side)

Mechanisms expose a single `execute` operation that the turn orchestrator
invokes during the matching board-element phase.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, Tuple, FrozenSet

from ..core.types import Orientation, Rotation, TileKind, TileExecution

if TYPE_CHECKING:
    from ..entities.robot import Robot
    from ..game import Game


@dataclass(frozen=True)
class Conveyor:
    """
    A conveyor belt carrying robots one cell per conveyor phase.

    Express conveyors run twice per register: once in the express phase
    and once more, together with normal belts, in the conveyor phase.

    Attributes:
        direction: Direction the belt moves robots
        express: Whether this belt also runs in the express phase
    """
    direction: Orientation
    express: bool = False

    def runs_in(self, phase: TileExecution) -> bool:
        if phase == TileExecution.EXPRESS_CONVEYOR:
            return self.express
        return phase == TileExecution.CONVEYOR

    def execute(self, game: Game, robot: Robot, register: int) -> None:
        from ..mechanics.movement import step_robot

        step_robot(game.board, robot, self.direction)


@dataclass(frozen=True)
class Pusher:
    """
    A wall-mounted pusher.

    Attributes:
        mount: Side of the tile the pusher is mounted on
        registers: Registers on which the pusher fires
    """
    mount: Orientation
    registers: FrozenSet[int]

    def __post_init__(self):
        if not self.registers:
            raise ValueError("Pusher must be active on at least one register")
        if any(register < 1 for register in self.registers):
            raise ValueError(f"Pusher registers must be >= 1: {sorted(self.registers)}")
        object.__setattr__(self, "registers", frozenset(self.registers))

    @property
    def push_direction(self) -> Orientation:
        """Pushers shove robots away from the wall they hang on."""
        return self.mount.opposite

    def is_active(self, register: int) -> bool:
        return register in self.registers

    def execute(self, game: Game, robot: Robot, register: int) -> None:
        if not self.is_active(register):
            return

        from ..mechanics.movement import step_robot

        step_robot(game.board, robot, self.push_direction)


@dataclass(frozen=True)
class Gear:
    """A gear turning whatever robot stands on it a quarter turn."""
    rotation: Rotation

    def __post_init__(self):
        if not isinstance(self.rotation, Rotation) or self.rotation == Rotation.NONE:
            raise ValueError(f"Gear needs a rotation direction, got {self.rotation!r}")

    def execute(self, game: Game, robot: Robot, register: int) -> None:
        robot.facing = self.rotation.apply(robot.facing)


@dataclass(frozen=True)
class LaserEmitter:
    """
    A laser mounted on one side of a floor tile.

    Attributes:
        mount: Side of the tile the emitter hangs on
        damage: Damage dealt to the first robot in the beam
    """
    mount: Orientation
    damage: int = 1

    def __post_init__(self):
        if self.damage < 1:
            raise ValueError(f"Laser damage must be positive: {self.damage}")


@dataclass(frozen=True)
class Tile:
    """
    One board cell.

    Build tiles with `Tile.pit()` or `Tile.floor(...)` rather than directly.

    Attributes:
        kind: PIT or FLOOR
        walls: Sides of the tile carrying an impassable wall
        conveyor: Optional conveyor belt
        pusher: Optional pusher
        gear: Optional gear
        lasers: Laser emitters, at most one per side
    """
    kind: TileKind
    walls: FrozenSet[Orientation] = field(default_factory=frozenset)
    conveyor: Optional[Conveyor] = None
    pusher: Optional[Pusher] = None
    gear: Optional[Gear] = None
    lasers: Tuple[LaserEmitter, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "walls", frozenset(self.walls))
        object.__setattr__(self, "lasers", tuple(self.lasers))

        if self.kind == TileKind.PIT:
            if self.walls or self.conveyor or self.pusher or self.gear or self.lasers:
                raise ValueError("A pit cannot carry walls or mechanisms")
            return

        if any(not isinstance(side, Orientation) for side in self.walls):
            raise ValueError(f"Walls must be Orientation values: {self.walls}")

        mounts = [laser.mount for laser in self.lasers]
        if len(mounts) != len(set(mounts)):
            raise ValueError(f"At most one laser per side, got mounts {mounts}")

    # FACTORY METHODS
    @staticmethod
    def pit() -> Tile:
        return Tile(TileKind.PIT)

    @staticmethod
    def floor(
        walls: Iterable[Orientation] = (),
        conveyor: Optional[Conveyor] = None,
        pusher: Optional[Pusher] = None,
        gear: Optional[Gear] = None,
        lasers: Iterable[LaserEmitter] = (),
    ) -> Tile:
        return Tile(
            TileKind.FLOOR,
            walls=frozenset(walls),
            conveyor=conveyor,
            pusher=pusher,
            gear=gear,
            lasers=tuple(lasers),
        )

    @property
    def is_pit(self) -> bool:
        return self.kind == TileKind.PIT

    @property
    def is_floor(self) -> bool:
        return self.kind == TileKind.FLOOR

    def has_wall(self, side: Orientation) -> bool:
        """Check for a wall on one side of the tile."""
        return side in self.walls

    def mechanism_for(self, phase: TileExecution):
        """
        Get the mechanism that acts during a board-element phase.

        Args:
            phase: Board-element phase being executed

        Returns:
            The attached Conveyor, Pusher or Gear, or None if this tile
            has nothing to do in that phase
        """
        if phase in (TileExecution.EXPRESS_CONVEYOR, TileExecution.CONVEYOR):
            if self.conveyor is not None and self.conveyor.runs_in(phase):
                return self.conveyor
            return None
        if phase == TileExecution.PUSHER:
            return self.pusher
        if phase == TileExecution.GEAR:
            return self.gear
        return None

    def __str__(self) -> str:
        if self.is_pit:
            return "Pit"
        parts = []
        if self.walls:
            parts.append("walls=" + ",".join(sorted(side.name for side in self.walls)))
        if self.conveyor:
            parts.append(f"{'express ' if self.conveyor.express else ''}conveyor {self.conveyor.direction}")
        if self.pusher:
            parts.append(f"pusher {self.pusher.mount} {sorted(self.pusher.registers)}")
        if self.gear:
            parts.append(f"gear {self.gear.rotation}")
        for laser in self.lasers:
            parts.append(f"laser {laser.mount}x{laser.damage}")
        return f"Floor({'; '.join(parts)})"
