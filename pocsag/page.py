"""
Page records and the input line format.

Lines are either ADDRESS:MESSAGE or ADDRESS:FUNCTION:MESSAGE.
Without a function field the page is sent as alphanumeric text (3).
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from . import FUNC_ALPHA, MAX_ADDRESS


_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """
    A message to one pager.
    """
    address: int
    function_code: int = FUNC_ALPHA
    message: str = ""

    def __post_init__(self):
        """Validate fields after initialization."""
        if not 0 <= self.address <= MAX_ADDRESS:
            raise ValueError(f"Address exceeds 21 bits: {self.address}")
        if not 0 <= self.function_code <= 3:
            raise ValueError(
                f"Invalid function: {self.function_code}. Must be between 0 and 3."
            )

    def to_string(self) -> str:
        return f"{self.address}:{self.function_code}:{self.message}"

    def __str__(self) -> str:
        return self.to_string()


def _parse_int(field: str, name: str) -> int:
    try:
        return int(field.strip())
    except ValueError:
        raise ValueError(f"Malformed line: {name} is not a number: {field!r}") from None


def parse_line(line: str) -> Optional[Page]:
    """
    Parse an input line into a Page.

    Formats:
    - "1234567:Hello" -> address 1234567, function 3, "Hello"
    - "1234567:0:Hello" -> address 1234567, function 0, "Hello"
    - "8:1:12:30" -> address 8, function 1, "12:30"

    Args:
        line: Input line, with or without a trailing newline

    Returns:
        Page, or None for an empty line

    Raises:
        ValueError: If the line is malformed or a field is out of range
    """
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    if not line:
        return None

    parts = line.split(":", 2)
    if len(parts) == 1:
        raise ValueError("Malformed line: missing colon separator")

    address = _parse_int(parts[0], "address")
    if len(parts) == 2:
        return Page(address, FUNC_ALPHA, parts[1])

    function_code = _parse_int(parts[1], "function")
    return Page(address, function_code, parts[2])


def read_pages(
    lines: Iterable[str],
    skip_invalid: bool = False,
) -> Iterator[Tuple[int, Page]]:
    """
    Parse pages from lines, skipping empty ones.

    Args:
        lines: Input lines
        skip_invalid: Log and skip malformed lines instead of raising

    Yields:
        (line_number, page) pairs, line numbers starting at 1

    Raises:
        ValueError: On a malformed line, unless skip_invalid is set
    """
    for number, line in enumerate(lines, start=1):
        try:
            page = parse_line(line)
        except ValueError as e:
            if not skip_invalid:
                raise ValueError(f"line {number}: {e}") from e
            _logger.warning(f"Skipping line {number}: {e}")
            continue
        if page is not None:
            yield number, page
