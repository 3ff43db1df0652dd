import pytest

from rally.core.types import OFF_BOARD, Orientation, ProgramCardType, StepOutcome
from rally.mechanics import MovementResolver, step_robot
from rally.world import Board, Tile

from conftest import BACK_UP, MOVE_1, MOVE_2, MOVE_3, ROTATE_LEFT, ROTATE_RIGHT, U_TURN


def test_move_1_steps_in_facing_direction(open_board, make_robot):
    robot = make_robot("A", (3, 3), Orientation.TOP, cards={1: MOVE_1})

    result = robot.execute_move(open_board, 1)

    assert robot.position == (3, 2)
    assert robot.facing == Orientation.TOP
    assert result.card_type == ProgramCardType.MOVE_1
    assert result.old_pos == (3, 3)
    assert result.new_pos == (3, 2)
    assert result.outcome == StepOutcome.MOVED


@pytest.mark.parametrize("facing, expected", [
    (Orientation.TOP, (3, 2)),
    (Orientation.BOTTOM, (3, 4)),
    (Orientation.RIGHT, (4, 3)),
    (Orientation.LEFT, (2, 3)),
])
def test_move_1_in_every_direction(open_board, make_robot, facing, expected):
    robot = make_robot("A", (3, 3), facing, cards={1: MOVE_1})
    robot.execute_move(open_board, 1)
    assert robot.position == expected


def test_wall_on_current_tile_blocks_exit(make_robot):
    board = Board(5, 5, {(2, 2): Tile.floor(walls=[Orientation.RIGHT])})
    robot = make_robot("A", (2, 2), Orientation.RIGHT, cards={1: MOVE_1})

    result = robot.execute_move(board, 1)

    assert robot.position == (2, 2)
    assert robot.facing == Orientation.RIGHT
    assert result.outcome == StepOutcome.BLOCKED_EXIT


def test_wall_on_target_tile_blocks_entry(make_robot):
    board = Board(5, 5, {(3, 2): Tile.floor(walls=[Orientation.LEFT])})
    robot = make_robot("A", (2, 2), Orientation.RIGHT, cards={1: MOVE_3})

    result = robot.execute_move(board, 1)

    assert robot.position == (2, 2)
    assert result.steps == [StepOutcome.BLOCKED_ENTRY] * 3


def test_wall_on_far_side_of_target_does_not_block(make_robot):
    board = Board(5, 5, {(3, 2): Tile.floor(walls=[Orientation.RIGHT])})
    robot = make_robot("A", (2, 2), Orientation.RIGHT, cards={1: MOVE_2})

    robot.execute_move(board, 1)

    # Enters (3, 2) but cannot leave it through its right wall
    assert robot.position == (3, 2)


def test_moving_off_the_edge_removes_robot(open_board, make_robot):
    robot = make_robot("A", (0, 0), Orientation.TOP, cards={1: MOVE_1, 2: MOVE_1})

    result = robot.execute_move(open_board, 1)

    assert robot.position == OFF_BOARD
    assert result.fell
    assert not robot.is_on_board(open_board)

    # Further cards are no-ops
    result = robot.execute_move(open_board, 2)
    assert robot.position == OFF_BOARD
    assert result.steps == [StepOutcome.OFF_BOARD]


def test_moving_into_a_pit_removes_robot(make_robot):
    board = Board(5, 5, {(2, 1): Tile.pit()})
    robot = make_robot("A", (2, 3), Orientation.TOP, cards={1: MOVE_3})

    result = robot.execute_move(board, 1)

    assert robot.position == OFF_BOARD
    assert result.steps == [StepOutcome.MOVED, StepOutcome.FELL, StepOutcome.OFF_BOARD]


def test_off_board_robot_ignores_turns(open_board, make_robot):
    robot = make_robot("A", OFF_BOARD, Orientation.TOP, cards={1: ROTATE_LEFT})

    robot.execute_move(open_board, 1)

    assert robot.facing == Orientation.TOP


def test_back_up_keeps_facing(open_board, make_robot):
    for facing in Orientation:
        robot = make_robot("A", (3, 3), facing, cards={1: BACK_UP})

        robot.execute_move(open_board, 1)

        assert robot.facing == facing
        assert robot.position == facing.opposite.step((3, 3))


def test_back_up_respects_walls_behind(make_robot):
    board = Board(5, 5, {(2, 2): Tile.floor(walls=[Orientation.BOTTOM])})
    robot = make_robot("A", (2, 2), Orientation.TOP, cards={1: BACK_UP})

    result = robot.execute_move(board, 1)

    assert robot.position == (2, 2)
    assert robot.facing == Orientation.TOP
    assert result.outcome == StepOutcome.BLOCKED_EXIT


@pytest.mark.parametrize("card, expected", [
    (U_TURN, Orientation.BOTTOM),
    (ROTATE_LEFT, Orientation.LEFT),
    (ROTATE_RIGHT, Orientation.RIGHT),
])
def test_turn_cards(open_board, make_robot, card, expected):
    robot = make_robot("A", (3, 3), Orientation.TOP, cards={1: card})

    result = robot.execute_move(open_board, 1)

    assert robot.facing == expected
    assert robot.position == (3, 3)
    assert result.outcome == StepOutcome.ROTATED


def test_right_right_left_left_is_identity(open_board, make_robot):
    robot = make_robot("A", (3, 3), Orientation.LEFT, cards={
        1: ROTATE_RIGHT, 2: 100, 3: ROTATE_LEFT, 4: 90,
    })
    for register in range(1, 5):
        robot.execute_move(open_board, register)
    assert robot.facing == Orientation.LEFT


def test_invalid_register_or_missing_card_raises(open_board, make_robot):
    robot = make_robot("A", (3, 3), cards={1: MOVE_1})

    with pytest.raises(ValueError):
        robot.execute_move(open_board, 0)
    with pytest.raises(ValueError):
        robot.execute_move(open_board, 6)
    with pytest.raises(ValueError):
        robot.execute_move(open_board, 2)

    assert robot.position == (3, 3)


def test_robots_do_not_push_each_other(open_board, make_robot):
    mover = make_robot("A", (3, 4), Orientation.TOP, cards={1: MOVE_1})
    make_robot("B", (3, 3))

    mover.execute_move(open_board, 1)

    # Both robots share the cell; pushing is not modelled
    assert mover.position == (3, 3)


def test_step_robot_ignores_facing(open_board, make_robot):
    robot = make_robot("A", (3, 3), Orientation.TOP)

    assert step_robot(open_board, robot, Orientation.RIGHT) == StepOutcome.MOVED
    assert robot.position == (4, 3)
    assert robot.facing == Orientation.TOP


def test_resolver_dispatch_is_total(open_board, make_robot):
    resolver = MovementResolver()
    for card_type in ProgramCardType:
        for facing in Orientation:
            robot = make_robot("A", (3, 3), facing)
            steps = resolver.execute_card(open_board, robot, card_type)
            assert steps
            assert robot.is_on_board(open_board)


def test_robot_on_a_pit_cannot_drive_out(make_robot):
    board = Board(4, 4, {(1, 2): Tile.pit()})
    robot = make_robot("A", (1, 2), Orientation.TOP, cards={1: MOVE_1})

    result = robot.execute_move(board, 1)

    assert not robot.is_on_board(board)
    assert robot.position == (1, 2)
    assert result.steps == [StepOutcome.OFF_BOARD]
    assert step_robot(board, robot, Orientation.TOP) == StepOutcome.OFF_BOARD
