from pathlib import Path
import sys

import pytest

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rally.core.types import Orientation
from rally.entities import Robot
from rally.world import Board

# Handy priorities, one per card type
U_TURN = 10
ROTATE_LEFT = 70
ROTATE_RIGHT = 80
BACK_UP = 430
MOVE_1 = 490
MOVE_2 = 670
MOVE_3 = 790


@pytest.fixture
def open_board() -> Board:
    """An 8x8 board of plain floor."""
    return Board(8, 8)


@pytest.fixture
def make_robot():
    """Build a robot and bind cards to registers: make_robot("A", (1, 1), cards={1: MOVE_1})."""
    def _make(name, pos, facing=Orientation.TOP, cards=None, damage=0, rules=None):
        robot = Robot(name=name, position=pos, facing=facing)
        if rules is not None:
            robot.rules = rules
        for register, priority in (cards or {}).items():
            robot.deal_card(priority)
            robot.place_card(priority, register)
        robot.damage = damage
        return robot

    return _make
