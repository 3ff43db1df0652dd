"""
Deck - The program card pool and the hands dealt from it.

The Deck:
- Decides how many cards each robot receives (fewer when damaged)
- Shuffles and deals at the start of a turn
- Takes back every unlocked card at the end of a turn

Cards locked in a robot's registers stay with the robot and are not in
the pool until damage no longer locks them.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from ..core.cards import ALL_PRIORITIES, card_type_for
from infra.logger import get_logger

if TYPE_CHECKING:
    from ..entities.robot import Robot

log = get_logger(__name__)


class Deck:
    """
    The shared pool of program cards.

    Attributes:
        rng: Random source used for shuffling
    """

    def __init__(
            self,
            priorities: Iterable[int] = ALL_PRIORITIES,
            rng: Optional[random.Random] = None,
            seed: Optional[int] = None
    ):
        """
        Initialize a deck.

        Args:
            priorities: Cards in the deck (defaults to the full program deck)
            rng: Random source; built from `seed` when omitted
            seed: Seed for a new random source (ignored if rng is given)

        Raises:
            ValueError: If a priority is invalid or repeated
        """
        cards = list(priorities)
        for priority in cards:
            card_type_for(priority)
        if len(cards) != len(set(cards)):
            raise ValueError("Deck priorities must be unique")

        self._pile: List[int] = cards
        self.rng = rng if rng is not None else random.Random(seed)

    @property
    def remaining(self) -> int:
        """Number of cards currently in the pool."""
        return len(self._pile)

    def cards_to_deal(self, robot: Robot) -> int:
        return robot.cards_to_receive()

    def deal(self, robots: Sequence[Robot]) -> None:
        """
        Shuffle the pool and deal each robot its share, in robot order.

        Raises:
            RuntimeError: If the pool cannot cover every robot, or a robot's
                hand would overflow (nothing is dealt in either case)
        """
        wanted = [self.cards_to_deal(robot) for robot in robots]
        if sum(wanted) > len(self._pile):
            raise RuntimeError(
                f"Deck has {len(self._pile)} cards, {sum(wanted)} needed to deal"
            )
        for robot, count in zip(robots, wanted):
            if len(robot.hand) + count > robot.rules.cards_per_robot:
                raise RuntimeError(
                    f"{robot.label()} still holds {len(robot.hand)} cards; "
                    "reclaim before dealing again"
                )

        self.rng.shuffle(self._pile)

        for robot, count in zip(robots, wanted):
            dealt = self._pile[:count]
            del self._pile[:count]
            for priority in dealt:
                robot.deal_card(priority)
            log.debug("Dealt %d cards to %s", count, robot.label())

    def reclaim(self, robots: Sequence[Robot]) -> None:
        """Return every robot's unlocked cards to the pool."""
        for robot in robots:
            returned = robot.pick_up_cards()
            self._pile.extend(returned)
            log.debug("Reclaimed %d cards from %s", len(returned), robot.label())
