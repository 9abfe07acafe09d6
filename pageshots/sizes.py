import re
from typing import Iterable

from pageshots.errors import InvalidSizeFormat
from pageshots.models import ViewportSize

DEFAULT_SIZE = "1440x1080"

SIZE_PATTERN = re.compile(r"([0-9]+)x([0-9]+)")


def parse_size(value: str) -> ViewportSize:
    """Parse a ``WIDTHxHEIGHT`` string into a ViewportSize.

    The separator is a lowercase ``x`` and both sides must be plain ASCII
    digits. Magnitude is not checked, ``0x0`` parses fine.

    Raises:
        InvalidSizeFormat: If ``value`` is not exactly ``<digits>x<digits>``.

    Example:
        >>> parse_size("1000x800")
        ViewportSize(width=1000, height=800)
    """
    match = SIZE_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidSizeFormat(value)
    return ViewportSize(width=int(match.group(1), 10), height=int(match.group(2), 10))


def parse_sizes(values: Iterable[str] | None) -> list[ViewportSize]:
    """Parse every size string, falling back to DEFAULT_SIZE when none are given."""
    values = list(values or [])
    if not values:
        values = [DEFAULT_SIZE]
    return [parse_size(value) for value in values]
