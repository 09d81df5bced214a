"""
Robot State Model
Heading set and the single robot's position/placement.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Direction(Enum):
    """Cardinal heading. Unset heading is None on RobotState, not a member here."""

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    @property
    def offset(self) -> Tuple[int, int]:
        """(dx, dy) for one step forward."""
        return _OFFSETS[self]

    def left(self) -> "Direction":
        """Heading after a 90° counter-clockwise turn."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % 4]

    def right(self) -> "Direction":
        """Heading after a 90° clockwise turn."""
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % 4]

    @classmethod
    def from_token(cls, token: str) -> Optional["Direction"]:
        """
        Look up a direction token (N, NORTH, E, EAST, ...).

        Case-sensitive. Returns None for anything unrecognized.
        """
        return _TOKENS.get(token)


_CLOCKWISE = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)

_OFFSETS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

_TOKENS: Dict[str, Direction] = {}
for _direction in Direction:
    _TOKENS[_direction.value] = _direction
    _TOKENS[_direction.value[0]] = _direction


@dataclass(frozen=True)
class RobotState:
    """
    Position and heading of the robot.

    x, y and heading are only meaningful while placed is True.
    Frozen so every transition builds a new value and a rejected command
    can never leave a half-updated state behind.
    """

    x: int = 0
    y: int = 0
    heading: Optional[Direction] = None
    placed: bool = False

    @classmethod
    def unplaced(cls) -> "RobotState":
        return cls()

    def placed_at(self, x: int, y: int, heading: Direction) -> "RobotState":
        return RobotState(x=x, y=y, heading=heading, placed=True)

    def forward_cell(self) -> Tuple[int, int]:
        """Cell one step ahead of the current heading (may be off the board)."""
        dx, dy = self.heading.offset
        return self.x + dx, self.y + dy

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for logging and transcripts."""
        if not self.placed:
            return {"placed": False}
        return {
            "placed": True,
            "x": self.x,
            "y": self.y,
            "facing": self.heading.value,
        }
