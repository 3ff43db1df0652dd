"""
LaserResolver - Board laser fire.

Every laser emitter on the board fires once per register. A beam leaves
the emitter's own cell and travels across the board until it:
- Leaves the board
- Enters a floor through a wall on the side facing the emitter
- Hits a robot (damage is applied and the beam stops)
- Tries to leave a floor through a wall on the far side

Pits let beams pass untouched. Damage is applied as soon as a beam hits,
so later emitters in the same phase see it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.types import GridPos, Orientation
from infra.logger import get_logger

if TYPE_CHECKING:
    from ..world.board import Board
    from ..world.tiles import LaserEmitter
    from ..entities.robot import Robot

log = get_logger(__name__)

# Beam travel per mount side: a beam leaves the wall it hangs on.
BEAM_DELTAS: Dict[Orientation, Tuple[int, int]] = {
    Orientation.TOP: (0, 1),
    Orientation.BOTTOM: (0, -1),
    Orientation.LEFT: (1, 0),
    Orientation.RIGHT: (-1, 0),
}


@dataclass
class LaserHit:
    """
    A robot struck by a beam.

    Attributes:
        robot: Name of the robot hit
        position: Cell where it was hit
        emitter_pos: Cell of the firing emitter
        mount: Side the emitter is mounted on
        damage: Damage dealt
    """
    robot: str
    position: GridPos
    emitter_pos: GridPos
    mount: Orientation
    damage: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "robot": self.robot,
            "position": self.position,
            "emitter_pos": self.emitter_pos,
            "mount": self.mount.name,
            "damage": self.damage,
        }


def beam_path(start: GridPos, mount: Orientation) -> Iterator[GridPos]:
    """Yield the cells a beam visits, starting with the emitter cell (unbounded)."""
    dx, dy = BEAM_DELTAS[mount]
    x, y = start
    while True:
        yield (x, y)
        x, y = x + dx, y + dy


class LaserResolver:
    """Stateless resolver for the laser phase."""

    def fire(self, board: Board, robots: Sequence[Robot]) -> List[LaserHit]:
        """
        Fire every emitter on the board, in row-major cell order.

        Args:
            board: Board carrying the emitters
            robots: Robots that can be hit (damage modified in-place)

        Returns:
            Every hit, in firing order
        """
        hits: List[LaserHit] = []

        for pos, tile in board.cells():
            if not tile.is_floor:
                continue
            for emitter in tile.lasers:
                hit = self.trace(board, robots, pos, emitter)
                if hit is not None:
                    hits.append(hit)

        return hits

    def trace(
        self,
        board: Board,
        robots: Sequence[Robot],
        origin: GridPos,
        emitter: LaserEmitter,
    ) -> Optional[LaserHit]:
        """
        Trace a single beam and apply its damage.

        Returns:
            The hit, or None if the beam was stopped before reaching a robot
        """
        mount = emitter.mount
        exit_side = mount.opposite
        skip_first = True

        for pos in beam_path(origin, mount):
            tile = board.tile(pos)
            if tile is None:
                return None
            if tile.is_pit:
                continue

            # The emitter's own wall never blocks its beam.
            if not skip_first and tile.has_wall(mount):
                return None
            skip_first = False

            robot = robot_at(robots, pos)
            if robot is not None:
                robot.damage += emitter.damage
                log.info(
                    "%s hit by laser from %s (%s) for %d damage",
                    robot.label(), origin, mount, emitter.damage,
                )
                return LaserHit(
                    robot=robot.name,
                    position=pos,
                    emitter_pos=origin,
                    mount=mount,
                    damage=emitter.damage,
                )

            if tile.has_wall(exit_side):
                return None

        return None


def robot_at(robots: Sequence[Robot], pos: GridPos) -> Optional[Robot]:
    """First robot in `robots` standing on `pos`, or None."""
    for robot in robots:
        if robot.position == pos:
            return robot
    return None
