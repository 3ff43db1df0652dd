"""
Program card priorities.

Every card in the program deck is identified by its priority. The priority
both orders movement within a register (higher acts first) and determines
the card's movement type through a fixed table.
"""

from __future__ import annotations
from typing import Dict, List, Tuple

from .types import ProgramCardType

# (first priority, last priority, step, card type) for each block of the deck
_PRIORITY_BLOCKS: List[Tuple[int, int, int, ProgramCardType]] = [
    (10, 60, 10, ProgramCardType.U_TURN),
    (70, 410, 20, ProgramCardType.ROTATE_LEFT),
    (80, 420, 20, ProgramCardType.ROTATE_RIGHT),
    (430, 480, 10, ProgramCardType.BACK_UP),
    (490, 660, 10, ProgramCardType.MOVE_1),
    (670, 780, 10, ProgramCardType.MOVE_2),
    (790, 840, 10, ProgramCardType.MOVE_3),
]

CARD_TYPE_BY_PRIORITY: Dict[int, ProgramCardType] = {
    priority: card_type
    for first, last, step, card_type in _PRIORITY_BLOCKS
    for priority in range(first, last + 1, step)
}

# The full 84-card program deck, lowest priority first.
ALL_PRIORITIES: Tuple[int, ...] = tuple(sorted(CARD_TYPE_BY_PRIORITY))


def card_type_for(priority: int) -> ProgramCardType:
    """
    Get the movement type of a card.

    Args:
        priority: Card priority

    Returns:
        The card's ProgramCardType

    Raises:
        ValueError: If no card in the deck carries this priority
    """
    try:
        return CARD_TYPE_BY_PRIORITY[priority]
    except KeyError:
        raise ValueError(f"Invalid card priority: {priority}") from None


def is_valid_priority(priority: int) -> bool:
    """Check whether a priority belongs to the program deck."""
    return priority in CARD_TYPE_BY_PRIORITY
