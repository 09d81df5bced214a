"""
Verification Layer
Deterministic bounds checks for placements and moves.
Called BY the interpreter before any state change is applied.
"""

import os
from typing import Optional, Tuple
from src.core.errors import IllegalMoveError, InvalidPlacementError
from src.core.robot.state import Direction, RobotState
from src.core.observability.logging import get_logger

logger = get_logger("verify")

DEFAULT_BOARD_SIZE = 5


class Board:
    """
    Square N×N board with origin (0, 0) at the south-west corner.

    Attributes:
        size: Side length N; valid coordinates are 0..N-1 on both axes
    """

    def __init__(self, size: Optional[int] = None):
        """
        Args:
            size: Side length (default: $BOARD_SIZE or 5)

        Raises:
            ValueError: If size is not a positive integer
        """
        if size is None:
            raw = os.getenv("BOARD_SIZE", str(DEFAULT_BOARD_SIZE))
            try:
                size = int(raw)
            except ValueError:
                raise ValueError(f"BOARD_SIZE must be an integer, got '{raw}'")
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def __repr__(self) -> str:
        return f"Board(size={self.size})"


def verify_placement(
    board: Board,
    x: int,
    y: int,
    direction_token: str
) -> Direction:
    """
    Validate a PLACE request against the board.

    Direction is checked before coordinates.

    Args:
        board: Board to place on
        x, y: Requested coordinates
        direction_token: Raw direction token from the command line

    Returns:
        The resolved Direction

    Raises:
        InvalidPlacementError: Unknown direction or coordinates off the board
    """
    direction = Direction.from_token(direction_token)
    if direction is None:
        logger.warning("Invalid direction", token=direction_token)
        raise InvalidPlacementError(f"Invalid direction '{direction_token}'")

    if not board.contains(x, y):
        logger.warning("Placement out of bounds", x=x, y=y, board_size=board.size)
        raise InvalidPlacementError(
            f"Ignoring invalid PLACE co-ordinates ({x}, {y}): "
            f"board is {board.size}x{board.size}"
        )

    return direction


def verify_move(board: Board, state: RobotState) -> Tuple[int, int]:
    """
    Validate a MOVE from the given placed state.

    Args:
        board: Board the robot is on
        state: Current (placed) robot state

    Returns:
        (x, y) of the destination cell

    Raises:
        IllegalMoveError: Destination is off the board
    """
    target = state.forward_cell()
    if not board.contains(*target):
        logger.warning("Move off board rejected",
                       x=state.x, y=state.y, facing=state.heading.value)
        raise IllegalMoveError(
            f"Ignoring attempt to move robot off table "
            f"(at {state.x},{state.y} facing {state.heading.value})"
        )
    return target
