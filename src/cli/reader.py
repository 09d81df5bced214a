"""
Command Reader
Lazy line source over a named file or standard input.
"""

import sys
from typing import Iterator, Optional, TextIO
from src.core.errors import UnreadableSourceError
from src.core.observability.logging import get_logger

logger = get_logger("reader")


def open_source(path: Optional[str]) -> TextIO:
    """
    Open the input source.

    Args:
        path: File to read, or None for standard input

    Raises:
        UnreadableSourceError: If the named file cannot be opened
    """
    if path is None:
        return sys.stdin
    try:
        return open(path, "r", encoding="utf-8")
    except OSError as e:
        logger.error("Cannot open input file", path=path, error=str(e))
        raise UnreadableSourceError(path, e.strerror or str(e)) from e


def read_command_lines(path: Optional[str] = None) -> Iterator[str]:
    """
    Yield lines one at a time with the terminator and leading whitespace stripped.

    The file is opened on first iteration, not on call. Standard input is
    never closed.

    Args:
        path: File to read, or None for standard input

    Raises:
        UnreadableSourceError: Named file missing, unreadable or not UTF-8
    """
    stream = open_source(path)
    try:
        for line in stream:
            yield line.rstrip("\r\n").lstrip()
    except UnicodeDecodeError as e:
        logger.error("Input file is not valid UTF-8", path=path, error=str(e))
        raise UnreadableSourceError(path or "stdin", "not valid UTF-8 text") from e
    finally:
        if stream is not sys.stdin:
            stream.close()
