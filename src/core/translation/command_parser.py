"""
Command Parser
Turns one line of the command language into a typed Command.

Grammar (case-sensitive):
    PLACE <x> <y> <direction>
    MOVE | LEFT | RIGHT | REPORT

PLACE arguments are separated by a run of whitespace and/or a single comma,
so "PLACE 0,0,NORTH", "PLACE 0, 0, NORTH" and "PLACE 0 0 NORTH" are the
same command. Direction tokens are resolved later by the verifier.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from src.core.errors import MalformedCommandError


class CommandType(Enum):
    PLACE = "PLACE"
    MOVE = "MOVE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    REPORT = "REPORT"


@dataclass(frozen=True)
class Command:
    """
    Parsed command.

    Attributes:
        type: Command verb
        x, y: PLACE coordinates (None for other verbs)
        direction_token: Raw PLACE direction token, unvalidated
    """

    type: CommandType
    x: Optional[int] = None
    y: Optional[int] = None
    direction_token: Optional[str] = None


# Keeps int() below the interpreter's digit-conversion limit
MAX_COORDINATE_DIGITS = 18

_SEP = r"(?:\s*,\s*|\s+)"
_PLACE_ARGS = re.compile(
    rf"(?P<x>[+-]?[0-9]+){_SEP}(?P<y>[+-]?[0-9]+){_SEP}(?P<direction>[^,\s]+)"
)


def parse_command(line: str) -> Command:
    """
    Parse a single command line.

    Args:
        line: Raw line; surrounding whitespace is ignored

    Returns:
        Command

    Raises:
        MalformedCommandError: Empty line, unknown verb, or bad argument list

    Example:
        >>> parse_command("PLACE 1,2,EAST")
        Command(type=<CommandType.PLACE: 'PLACE'>, x=1, y=2, direction_token='EAST')
    """
    parts = line.strip().split(None, 1)
    if not parts:
        raise MalformedCommandError("Empty command")

    verb = parts[0]
    args = parts[1] if len(parts) > 1 else ""

    try:
        command_type = CommandType(verb)
    except ValueError:
        raise MalformedCommandError(f"Ignoring invalid command '{verb}'")

    if command_type is CommandType.PLACE:
        return _parse_place(args)

    if args:
        raise MalformedCommandError(f"{verb} takes no arguments, got '{args}'")

    return Command(type=command_type)


def _parse_place(args: str) -> Command:
    match = _PLACE_ARGS.fullmatch(args)
    if match is None:
        raise MalformedCommandError(
            f"Malformed PLACE arguments '{args}': expected PLACE <x>,<y>,<direction>"
        )
    coordinates = (match.group("x"), match.group("y"))
    if any(len(c.lstrip("+-")) > MAX_COORDINATE_DIGITS for c in coordinates):
        raise MalformedCommandError(
            f"Malformed PLACE arguments: coordinates are limited to "
            f"{MAX_COORDINATE_DIGITS} digits"
        )
    return Command(
        type=CommandType.PLACE,
        x=int(coordinates[0]),
        y=int(coordinates[1]),
        direction_token=match.group("direction"),
    )
