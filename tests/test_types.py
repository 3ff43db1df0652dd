import pytest

from rally.core.cards import ALL_PRIORITIES, CARD_TYPE_BY_PRIORITY, card_type_for, is_valid_priority
from rally.core.types import Orientation, ProgramCardType, Rotation


def test_four_left_turns_return_to_start():
    for facing in Orientation:
        turned = facing
        for _ in range(4):
            turned = turned.rotated_left()
        assert turned == facing


def test_left_rotation_cycle():
    assert Orientation.BOTTOM.rotated_left() == Orientation.RIGHT
    assert Orientation.RIGHT.rotated_left() == Orientation.TOP
    assert Orientation.TOP.rotated_left() == Orientation.LEFT
    assert Orientation.LEFT.rotated_left() == Orientation.BOTTOM


def test_right_rotation_undoes_left_rotation():
    for facing in Orientation:
        assert facing.rotated_left().rotated_right() == facing
        assert facing.rotated_right().rotated_right().rotated_left().rotated_left() == facing


def test_opposites():
    assert Orientation.TOP.opposite == Orientation.BOTTOM
    assert Orientation.BOTTOM.opposite == Orientation.TOP
    assert Orientation.LEFT.opposite == Orientation.RIGHT
    assert Orientation.RIGHT.opposite == Orientation.LEFT


def test_step_uses_screen_coordinates():
    assert Orientation.TOP.step((3, 3)) == (3, 2)
    assert Orientation.BOTTOM.step((3, 3)) == (3, 4)
    assert Orientation.RIGHT.step((3, 3)) == (4, 3)
    assert Orientation.LEFT.step((3, 3)) == (2, 3)


def test_gear_rotation_directions():
    assert Rotation.CLOCKWISE.apply(Orientation.TOP) == Orientation.RIGHT
    assert Rotation.COUNTERCLOCKWISE.apply(Orientation.TOP) == Orientation.LEFT


def test_program_deck_composition():
    assert len(ALL_PRIORITIES) == 84
    counts = {}
    for card_type in CARD_TYPE_BY_PRIORITY.values():
        counts[card_type] = counts.get(card_type, 0) + 1
    assert counts == {
        ProgramCardType.U_TURN: 6,
        ProgramCardType.ROTATE_LEFT: 18,
        ProgramCardType.ROTATE_RIGHT: 18,
        ProgramCardType.BACK_UP: 6,
        ProgramCardType.MOVE_1: 18,
        ProgramCardType.MOVE_2: 12,
        ProgramCardType.MOVE_3: 6,
    }


@pytest.mark.parametrize("priority, expected", [
    (10, ProgramCardType.U_TURN),
    (60, ProgramCardType.U_TURN),
    (70, ProgramCardType.ROTATE_LEFT),
    (410, ProgramCardType.ROTATE_LEFT),
    (80, ProgramCardType.ROTATE_RIGHT),
    (420, ProgramCardType.ROTATE_RIGHT),
    (430, ProgramCardType.BACK_UP),
    (490, ProgramCardType.MOVE_1),
    (660, ProgramCardType.MOVE_1),
    (670, ProgramCardType.MOVE_2),
    (780, ProgramCardType.MOVE_2),
    (790, ProgramCardType.MOVE_3),
    (840, ProgramCardType.MOVE_3),
])
def test_card_type_lookup(priority, expected):
    assert card_type_for(priority) == expected


@pytest.mark.parametrize("priority", [0, 5, 850, -10, 495])
def test_invalid_priority_is_rejected(priority):
    assert not is_valid_priority(priority)
    with pytest.raises(ValueError):
        card_type_for(priority)
