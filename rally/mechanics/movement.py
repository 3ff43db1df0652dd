"""
MovementResolver - Program card execution.

This module handles:
- Dispatching a register's card to its movement type
- Turning robots in place
- The single-step move shared by cards, conveyors and pushers
- Generating movement results and logs

Robots do not push each other: nothing checks whether the target cell is
occupied, so two robots can end up on the same cell.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, List
from dataclasses import dataclass, field

from ..core.cards import card_type_for
from ..core.types import GridPos, Orientation, ProgramCardType, StepOutcome
from infra.logger import get_logger

if TYPE_CHECKING:
    from ..world.board import Board
    from ..entities.robot import Robot

log = get_logger(__name__)


@dataclass
class MovementResult:
    """
    Result of executing one program card.

    Attributes:
        robot: Name of the robot that acted
        card: Priority of the executed card
        card_type: Movement type of the card
        old_pos: Position before the card
        new_pos: Position after the card (OFF_BOARD if it fell)
        old_facing: Facing before the card
        new_facing: Facing after the card
        steps: Outcome of every single step or turn, in order
    """
    robot: str
    card: int
    card_type: ProgramCardType
    old_pos: GridPos
    new_pos: GridPos
    old_facing: Orientation
    new_facing: Orientation
    steps: List[StepOutcome] = field(default_factory=list)

    @property
    def outcome(self) -> StepOutcome:
        """Outcome of the last step taken."""
        return self.steps[-1] if self.steps else StepOutcome.OFF_BOARD

    @property
    def fell(self) -> bool:
        return StepOutcome.FELL in self.steps

    def to_dict(self) -> Dict[str, Any]:
        """Serialize movement result to a plain dict."""
        return {
            "robot": self.robot,
            "card": self.card,
            "card_type": self.card_type.name,
            "old_pos": self.old_pos,
            "new_pos": self.new_pos,
            "old_facing": self.old_facing.name,
            "new_facing": self.new_facing.name,
            "steps": [step.value for step in self.steps],
        }


def step_robot(board: Board, robot: Robot, direction: Orientation) -> StepOutcome:
    """
    Try to move a robot a single cell.

    Rules, in order:
    1. A robot with no floor under it (off the board or on a pit) is out
       of play and does not move.
    2. A wall on the current tile toward `direction` keeps it in place.
    3. A missing target tile or a pit removes it from play.
    4. A wall on the target tile facing back toward it keeps it in place.
    5. Otherwise it moves.

    Args:
        board: Board being played on
        robot: Robot to move (modified in-place)
        direction: Direction of travel, independent of the robot's facing

    Returns:
        StepOutcome describing what happened
    """
    current = board.floor(robot.position)
    if current is None:
        return StepOutcome.OFF_BOARD

    if current.has_wall(direction):
        log.debug("%s blocked leaving %s toward %s", robot.label(), robot.position, direction)
        return StepOutcome.BLOCKED_EXIT

    target = direction.step(robot.position)
    target_tile = board.tile(target)

    if target_tile is None or target_tile.is_pit:
        where = "into a pit" if target_tile is not None else "off the board"
        log.info("%s fell %s at %s", robot.label(), where, target)
        robot.remove_from_play()
        return StepOutcome.FELL

    if target_tile.has_wall(direction.opposite):
        log.debug("%s blocked entering %s from %s", robot.label(), target, direction.opposite)
        return StepOutcome.BLOCKED_ENTRY

    robot.position = target
    return StepOutcome.MOVED


class MovementResolver:
    """
    Stateless resolver for program cards.

    All methods are stateless - they modify the robot passed in,
    never the resolver itself.
    """

    def execute_move(self, board: Board, robot: Robot, register: int) -> MovementResult:
        """
        Execute the card a robot has bound to a register.

        Args:
            board: Board being played on
            robot: Robot acting (modified in-place)
            register: Register number (1..robot_registers)

        Returns:
            MovementResult for the card

        Raises:
            ValueError: If the register is invalid or holds no card
        """
        priority = robot.card_at_register(register)
        if priority is None:
            raise ValueError(f"{robot.label()} has no card in register {register}")

        card_type = card_type_for(priority)
        old_pos, old_facing = robot.position, robot.facing

        steps = self.execute_card(board, robot, card_type)

        result = MovementResult(
            robot=robot.name,
            card=priority,
            card_type=card_type,
            old_pos=old_pos,
            new_pos=robot.position,
            old_facing=old_facing,
            new_facing=robot.facing,
            steps=steps,
        )
        log.debug(
            "%s register %d plays %d (%s): %s %s -> %s %s",
            robot.label(), register, priority, card_type,
            old_pos, old_facing, robot.position, robot.facing,
        )
        return result

    def execute_card(self, board: Board, robot: Robot, card: ProgramCardType) -> List[StepOutcome]:
        """
        Apply one card type to a robot.

        Robots that are out of play ignore every card.

        Returns:
            Outcome of each step or turn the card produced
        """
        if not robot.is_on_board(board):
            return [StepOutcome.OFF_BOARD]

        if card == ProgramCardType.U_TURN:
            self.rotate_left(robot, times=2)
            return [StepOutcome.ROTATED]
        if card == ProgramCardType.ROTATE_LEFT:
            self.rotate_left(robot)
            return [StepOutcome.ROTATED]
        if card == ProgramCardType.ROTATE_RIGHT:
            self.rotate_left(robot, times=3)
            return [StepOutcome.ROTATED]
        if card == ProgramCardType.BACK_UP:
            return [self.back_up(board, robot)]
        if card == ProgramCardType.MOVE_1:
            return self.move_forward(board, robot, 1)
        if card == ProgramCardType.MOVE_2:
            return self.move_forward(board, robot, 2)
        if card == ProgramCardType.MOVE_3:
            return self.move_forward(board, robot, 3)

        raise ValueError(f"Unknown card type: {card!r}")

    def rotate_left(self, robot: Robot, times: int = 1) -> None:
        for _ in range(times):
            robot.facing = robot.facing.rotated_left()

    def move_forward(self, board: Board, robot: Robot, distance: int) -> List[StepOutcome]:
        """Repeat single steps in the facing direction; a fallen robot stays out."""
        return [step_robot(board, robot, robot.facing) for _ in range(distance)]

    def back_up(self, board: Board, robot: Robot) -> StepOutcome:
        """
        Turn around, step once, turn back.

        The robot ends up one cell behind where it started (walls and pits
        permitting) with its facing unchanged.
        """
        self.rotate_left(robot, times=2)
        outcome = step_robot(board, robot, robot.facing)
        self.rotate_left(robot, times=2)
        return outcome
