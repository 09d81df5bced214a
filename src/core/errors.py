"""
Error Taxonomy
Fatal source errors vs recoverable per-command errors.

Parser and verifier raise CommandError subclasses; the interpreter turns them
into Diagnostics and keeps going. Anything else reaching the CLI aborts the run.
"""

from enum import Enum


class ErrorKind(Enum):
    """Category of a rejected command."""

    MALFORMED_COMMAND = "MALFORMED_COMMAND"
    INVALID_PLACEMENT = "INVALID_PLACEMENT"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"


class RobotSimulationError(Exception):
    """Base class for all simulation errors."""


class UnreadableSourceError(RobotSimulationError):
    """Named input file cannot be opened. Fatal."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read input file '{path}': {reason}")


class CommandError(RobotSimulationError):
    """
    Recoverable rejection of a single command.

    Attributes:
        kind: ErrorKind used in the resulting Diagnostic
    """

    kind: ErrorKind = ErrorKind.MALFORMED_COMMAND


class MalformedCommandError(CommandError):
    """Unknown verb or unparseable argument list."""

    kind = ErrorKind.MALFORMED_COMMAND


class InvalidPlacementError(CommandError):
    """PLACE with out-of-bounds coordinates or an unknown direction."""

    kind = ErrorKind.INVALID_PLACEMENT


class IllegalMoveError(CommandError):
    """MOVE that would take the robot off the board."""

    kind = ErrorKind.ILLEGAL_MOVE
