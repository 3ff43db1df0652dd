"""
Rules configuration.

RulesConfig holds the numeric constants of the game that a table may want
to tweak. It is immutable once built; load it from a dict or a JSON file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RulesConfig(BaseModel):
    """
    Numeric game rules.

    Attributes:
        robot_registers: Number of program registers executed per turn
        cards_per_robot: Cards dealt to an undamaged robot each turn
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    robot_registers: int = Field(default=5, ge=1)
    cards_per_robot: int = Field(default=9, ge=1)

    @model_validator(mode="after")
    def _hand_covers_registers(self) -> RulesConfig:
        if self.cards_per_robot < self.robot_registers:
            raise ValueError(
                f"cards_per_robot ({self.cards_per_robot}) must be at least "
                f"robot_registers ({self.robot_registers})"
            )
        return self

    @property
    def registers(self) -> range:
        """Playable register numbers, in execution order."""
        return range(1, self.robot_registers + 1)

    def is_valid_register(self, register: int) -> bool:
        return 1 <= register <= self.robot_registers

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RulesConfig:
        """Build rules from a dict (unknown keys are rejected)."""
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def load_json(cls, path: str | Path) -> RulesConfig:
        """
        Load rules from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            pydantic.ValidationError: If the content is not a valid rule set
        """
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))


DEFAULT_RULES = RulesConfig()
