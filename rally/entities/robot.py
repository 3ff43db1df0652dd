"""
Robot entity - A player's piece on the board.

Robots hold:
- Position and facing
- Accumulated damage and the powered-down flag
- A hand of program cards, each bound to a register (0 = in hand)

Register bookkeeping lives here; movement rules live in
mechanics.movement and are reached through `execute_move`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.cards import card_type_for
from ..core.config import DEFAULT_RULES, RulesConfig
from ..core.types import GridPos, OFF_BOARD, Orientation, ProgramCardType
from ..mechanics.movement import MovementResolver, MovementResult

if TYPE_CHECKING:
    from ..world.board import Board

UNPLACED = 0

_movement = MovementResolver()


@dataclass
class ProgramCard:
    """A card in a robot's hand and the register it is bound to (0 = unplaced)."""
    priority: int
    register: int = UNPLACED

    @property
    def card_type(self) -> ProgramCardType:
        return card_type_for(self.priority)


@dataclass(eq=False)
class Robot:
    """
    A robot and its program.

    Attributes:
        name: Unique display name
        position: Current cell, or OFF_BOARD once removed from play
        facing: Direction the robot is facing
        damage: Accumulated damage (never negative)
        powered_down: Powered-down flag (read by presentation layers)
        rules: Rule constants; the Game replaces this with its own rules
    """
    name: str
    position: GridPos
    facing: Orientation = Orientation.TOP
    damage: int = 0
    powered_down: bool = False
    rules: RulesConfig = field(default=DEFAULT_RULES, repr=False)
    _cards: List[ProgramCard] = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Robot needs a name")
        if self.damage < 0:
            raise ValueError(f"Damage cannot be negative: {self.damage}")
        if not isinstance(self.facing, Orientation):
            raise ValueError(f"Facing must be an Orientation, got {self.facing!r}")
        self.position = tuple(self.position)

    def label(self) -> str:
        return f"Robot {self.name}"

    def is_on_board(self, board: Board) -> bool:
        """A robot is in play while it stands on a floor tile."""
        return board.floor(self.position) is not None

    def remove_from_play(self) -> None:
        self.position = OFF_BOARD

    # ========================================================================
    # HAND & REGISTERS
    # ========================================================================

    def deal_card(self, priority: int) -> None:
        """
        Add a freshly dealt card to the hand, unplaced.

        Only the Deck should call this.

        Raises:
            ValueError: If the priority is not a deck card or already in hand
            RuntimeError: If the hand is already full
        """
        card_type_for(priority)
        if any(card.priority == priority for card in self._cards):
            raise ValueError(f"{self.label()} already holds card {priority}")
        if len(self._cards) >= self.rules.cards_per_robot:
            raise RuntimeError(
                f"{self.label()} hand is full ({self.rules.cards_per_robot} cards)"
            )
        self._cards.append(ProgramCard(priority))

    @property
    def hand(self) -> List[ProgramCard]:
        """Copy of every held card, placed or not."""
        return [ProgramCard(card.priority, card.register) for card in self._cards]

    def cards_to_place(self) -> List[int]:
        """Priorities of the cards still in hand (not bound to a register)."""
        return [card.priority for card in self._cards if card.register == UNPLACED]

    def card_at_register(self, register: int) -> Optional[int]:
        """
        Get the card bound to a register.

        Args:
            register: Register number (1..robot_registers)

        Returns:
            The card's priority, or None if nothing is bound there

        Raises:
            ValueError: If the register is out of range
        """
        self._check_register(register)
        for card in self._cards:
            if card.register == register:
                return card.priority
        return None

    def place_card(self, card: int, register: int) -> None:
        """
        Bind a card from the hand to a register.

        A card already bound elsewhere is moved.

        Raises:
            ValueError: If the register is invalid, the card is not held, or
                the register already holds another card
        """
        self._check_register(register)

        held = next((c for c in self._cards if c.priority == card), None)
        if held is None:
            raise ValueError(f"{self.label()} does not hold card {card}")

        occupant = self.card_at_register(register)
        if occupant is not None and occupant != card:
            raise ValueError(
                f"{self.label()} register {register} already holds card {occupant}"
            )

        held.register = register

    def pick_up_cards(self) -> List[int]:
        """
        Remove every card not locked by damage from the hand.

        Returns:
            Priorities of the removed cards, in ascending register order
        """
        threshold = self.unlocked_register_limit()
        ordered = sorted(self._cards, key=lambda c: c.register)

        picked = [card for card in ordered if card.register <= threshold]
        self._cards = [card for card in ordered if card.register > threshold]

        return [card.priority for card in picked]

    def reset_cards(self) -> None:
        """Return every unlocked placed card to the hand, keeping it held."""
        threshold = self.unlocked_register_limit()
        self._cards.sort(key=lambda c: c.register)
        for card in self._cards:
            if card.register <= threshold:
                card.register = UNPLACED

    def cards_to_receive(self) -> int:
        """Cards dealt to this robot at the start of a turn (fewer when damaged)."""
        return max(0, self.rules.cards_per_robot - self.damage)

    def locked_registers(self) -> int:
        """
        Number of registers whose card stays put because of damage.

        Locked registers are the highest-numbered ones. With a hand at least
        as large as the register count this is always 0.
        """
        rules = self.rules
        return max(0, rules.robot_registers - rules.cards_per_robot - self.damage)

    def unlocked_register_limit(self) -> int:
        """Highest register whose card can still be picked up or reset."""
        return self.rules.robot_registers - self.locked_registers()

    def _check_register(self, register: int) -> None:
        if not self.rules.is_valid_register(register):
            raise ValueError(
                f"Invalid register {register}; expected 1..{self.rules.robot_registers}"
            )

    # ========================================================================
    # MOVEMENT
    # ========================================================================

    def execute_move(self, board: Board, register: int) -> MovementResult:
        """Execute the card bound to `register` (see MovementResolver.execute_move)."""
        return _movement.execute_move(board, self, register)

    # ========================================================================
    # UTILITY
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the robot's public state as a plain dict."""
        return {
            "name": self.name,
            "position": self.position,
            "facing": self.facing.name,
            "damage": self.damage,
            "powered_down": self.powered_down,
            "locked_registers": self.locked_registers(),
            "cards": [
                {"priority": card.priority, "register": card.register}
                for card in sorted(self._cards, key=lambda c: (c.register, c.priority))
            ],
        }

    def __str__(self) -> str:
        return f"{self.label()} at {self.position} facing {self.facing} (damage={self.damage})"
