"""
Game - Turn orchestrator for the register combat engine.

Usage:
    from rally import Game, Board, Robot, Orientation

    game = Game(board, robots, seed=7)
    game.start_turn()
    # ... robots place their cards with robot.place_card(card, register) ...
    while game.execute_next_register() > 0:
        pass
    game.end_turn()

Each register runs, in order:
1. Robots move (highest card priority first)
2. Express conveyors move 1 space
3. Express and normal conveyors move 1 space
4. Pushers push if active this register
5. Gears rotate 90 degrees
6. Lasers fire
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .core.config import RulesConfig
from .core.types import GridPos
from .entities.robot import Robot
from .mechanics import (
    BoardElementResolver,
    Deck,
    ElementResult,
    LaserHit,
    LaserResolver,
    MovementResult,
    robot_at,
)
from .world.board import Board
from infra.logger import get_logger

log = get_logger(__name__)


@dataclass
class RegisterReport:
    """
    Everything that happened during one register.

    Attributes:
        register: Register number
        movements: Program cards executed, in execution order
        elements: Board element effects, in phase order
        laser_hits: Laser hits, in firing order
    """
    register: int
    movements: List[MovementResult] = field(default_factory=list)
    elements: List[ElementResult] = field(default_factory=list)
    laser_hits: List[LaserHit] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the register report to a plain dict."""
        return {
            "register": self.register,
            "movements": [m.to_dict() for m in self.movements],
            "elements": [e.to_dict() for e in self.elements],
            "laser_hits": [h.to_dict() for h in self.laser_hits],
        }


class Game:
    """
    One game instance: a board, its robots and the turn in progress.

    The Game owns the register counter and runs the phases; movement,
    board elements, lasers and dealing are delegated to the mechanics
    resolvers. It is single-threaded: nothing here is safe to share
    between threads without external locking.

    Attributes:
        board: Board being played on
        robots: Robots in play order (robots out of play stay in the list)
        rules: Rule constants shared by every robot
        deck: Program card pool
    """

    def __init__(
            self,
            board: Board,
            robots: Iterable[Robot],
            rules: Optional[RulesConfig] = None,
            deck: Optional[Deck] = None,
            seed: Optional[int] = None
    ):
        """
        Initialize a game.

        Args:
            board: Board to play on
            robots: Participating robots
            rules: Rule constants (defaults to the standard rules)
            deck: Card pool (defaults to the full program deck seeded with `seed`)
            seed: Random seed for the default deck

        Raises:
            ValueError: If board or robots is None, robot names repeat, or a
                robot starts on a pit
        """
        if board is None:
            raise ValueError("Game needs a board")
        if robots is None:
            raise ValueError("Game needs a robot collection")

        self.board = board
        self.robots: List[Robot] = list(robots)
        self.rules = rules if rules is not None else RulesConfig()
        self.deck = deck if deck is not None else Deck(seed=seed)

        names = [robot.name for robot in self.robots]
        if len(names) != len(set(names)):
            raise ValueError(f"Robot names must be unique: {names}")

        for robot in self.robots:
            tile = board.tile(robot.position)
            if tile is not None and tile.is_pit:
                raise ValueError(f"{robot.label()} cannot start on the pit at {robot.position}")

        for robot in self.robots:
            robot.rules = self.rules

        # Past the last register until the first start_turn()
        self._register = self.rules.robot_registers + 1
        self._reports: List[RegisterReport] = []

        self._elements = BoardElementResolver()
        self._lasers = LaserResolver()

    @property
    def register(self) -> int:
        """Register that will execute next (robot_registers + 1 once the turn is done)."""
        return self._register

    @property
    def reports(self) -> List[RegisterReport]:
        """Reports of the registers executed so far this turn."""
        return list(self._reports)

    # ========================================================================
    # TURN FLOW
    # ========================================================================

    def start_turn(self, deal_cards: bool = True) -> None:
        """
        Begin a turn.

        Args:
            deal_cards: Deal cards to robots. Turn off to re-simulate a turn
                with the cards already placed.
        """
        if deal_cards:
            self.deck.deal(self.robots)

        # Registers are numbered from 1.
        self._register = 1
        self._reports = []
        log.info("Turn started (deal_cards=%s)", deal_cards)

    def execute_next_register(self) -> int:
        """
        Execute the next register.

        Returns:
            Registers that were left when the call began, counting the one
            just executed (5, 4, 3, 2, 1 with five registers). Once the turn
            is complete further calls do nothing and return 0.
        """
        remaining = max(0, self.rules.robot_registers - self._register + 1)

        if remaining > 0:
            report = RegisterReport(register=self._register)

            report.movements = self._execute_moves()

            report.elements = self._elements.run_all(self, self._register)

            report.laser_hits = self._lasers.fire(self.board, self.robots)

            self._reports.append(report)
            log.debug(
                "Register %d done: %d moves, %d element effects, %d laser hits",
                self._register, len(report.movements), len(report.elements),
                len(report.laser_hits),
            )
            self._register += 1

        return remaining

    def run_turn(self, deal_cards: bool = True) -> List[RegisterReport]:
        """
        Start a turn and execute every register.

        Cards are not reclaimed; call end_turn() when done inspecting.
        """
        self.start_turn(deal_cards)
        while self.execute_next_register() > 0:
            pass
        return self.reports

    def end_turn(self) -> None:
        """
        Finish the turn: every unlocked card goes back to the deck.

        Damage repair and other end-of-turn effects are not modelled.
        """
        self.deck.reclaim(self.robots)
        log.info("Turn ended; %d cards in deck", self.deck.remaining)

    # ========================================================================
    # PHASES
    # ========================================================================

    def _execute_moves(self) -> List[MovementResult]:
        """
        Run the movement phase: highest priority card moves first.

        Equal priorities keep robot order (stable sort). Robots with no
        card in this register sit the phase out.
        """
        queue = []
        for robot in self.robots:
            card = robot.card_at_register(self._register)
            if card is None:
                log.debug("%s has no card in register %d", robot.label(), self._register)
                continue
            queue.append((robot, card))

        queue.sort(key=lambda entry: entry[1], reverse=True)

        return [robot.execute_move(self.board, self._register) for robot, _ in queue]

    # ========================================================================
    # UTILITY
    # ========================================================================

    def robot_at(self, pos: GridPos) -> Optional[Robot]:
        """First robot standing on `pos`, or None."""
        return robot_at(self.robots, pos)

    def robots_in_play(self) -> List[Robot]:
        """Robots still standing on a floor tile."""
        return [robot for robot in self.robots if robot.is_on_board(self.board)]

    def snapshot(self) -> Dict[str, Any]:
        """Plain dict of the game state, for inspection and tests."""
        return {
            "board": {"width": self.board.width, "height": self.board.height},
            "register": self._register,
            "rules": self.rules.to_dict(),
            "deck_remaining": self.deck.remaining,
            "robots": [robot.to_dict() for robot in self.robots],
        }

    def __str__(self) -> str:
        return (f"Game(board={self.board}, robots={len(self.robots_in_play())}/"
                f"{len(self.robots)}, register={self._register})")
