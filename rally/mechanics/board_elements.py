"""
Board element phases.

After robots move, the board itself acts on them in a fixed order:
express conveyors, all conveyors, pushers, gears. Each phase walks the
robot list once, looks up the floor under every robot still in play and
lets the matching mechanism act on it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List

from ..core.types import GridPos, Orientation, TileExecution
from infra.logger import get_logger

if TYPE_CHECKING:
    from ..game import Game

log = get_logger(__name__)

# Order in which board elements act within a register.
ELEMENT_PHASES = (
    TileExecution.EXPRESS_CONVEYOR,
    TileExecution.CONVEYOR,
    TileExecution.PUSHER,
    TileExecution.GEAR,
)


@dataclass
class ElementResult:
    """
    Effect of one mechanism on one robot.

    Attributes:
        robot: Name of the robot acted upon
        phase: Board element phase
        old_pos: Position before the mechanism acted
        new_pos: Position afterwards (OFF_BOARD if carried into a pit)
        old_facing: Facing before
        new_facing: Facing afterwards
    """
    robot: str
    phase: TileExecution
    old_pos: GridPos
    new_pos: GridPos
    old_facing: Orientation
    new_facing: Orientation

    @property
    def changed(self) -> bool:
        return self.old_pos != self.new_pos or self.old_facing != self.new_facing

    def to_dict(self) -> Dict[str, Any]:
        return {
            "robot": self.robot,
            "phase": self.phase.value,
            "old_pos": self.old_pos,
            "new_pos": self.new_pos,
            "old_facing": self.old_facing.name,
            "new_facing": self.new_facing.name,
        }


class BoardElementResolver:
    """Stateless runner for the board element phases."""

    def run_phase(self, game: Game, phase: TileExecution, register: int) -> List[ElementResult]:
        """
        Run one board element phase.

        Every robot is visited once, in the game's robot order. A robot
        carried onto a tile that was already handled in this phase is not
        acted upon again.

        Args:
            game: Game whose board and robots are used (robots modified in-place)
            phase: Phase to run
            register: Current register (pushers only fire on some registers)

        Returns:
            One ElementResult per mechanism invocation
        """
        results: List[ElementResult] = []

        for robot in game.robots:
            mechanism = game.board.mechanism_at(robot.position, phase)
            if mechanism is None:
                continue

            old_pos, old_facing = robot.position, robot.facing
            mechanism.execute(game, robot, register)

            result = ElementResult(
                robot=robot.name,
                phase=phase,
                old_pos=old_pos,
                new_pos=robot.position,
                old_facing=old_facing,
                new_facing=robot.facing,
            )
            results.append(result)
            if result.changed:
                log.debug(
                    "%s %s: %s %s -> %s %s",
                    phase, robot.label(), old_pos, old_facing, robot.position, robot.facing,
                )

        return results

    def run_all(self, game: Game, register: int) -> List[ElementResult]:
        """Run every board element phase in order."""
        results: List[ElementResult] = []
        for phase in ELEMENT_PHASES:
            results.extend(self.run_phase(game, phase, register))
        return results
