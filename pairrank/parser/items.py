"""Item list parser.

Turns pasted text (one ``name<delimiter>url`` entry per line) into an ordered
list of items.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_LINE_SPLIT_PATTERN = re.compile(r'\r?\n')


@dataclass(frozen=True)
class Item:
    """A named entity with an associated URL."""
    name: str
    url: str


class ItemListParser:
    """Parser for pasted item lists."""

    def __init__(self, delimiter: str = ','):
        """Initialize parser.

        Args:
            delimiter: Single character separating name from url
                       (a space or a comma)
        """
        if len(delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
        self.delimiter = delimiter

    def parse_line(self, line: str) -> Item | None:
        """Parse one line, splitting on the first delimiter.

        Returns:
            Item, or None when the line has no delimiter or an empty field
        """
        line = line.strip()
        idx = line.find(self.delimiter)
        if idx == -1:
            return None

        name = line[:idx].strip()
        url = line[idx + 1:].strip()
        if not name or not url:
            return None
        return Item(name=name, url=url)

    def parse(self, content: str) -> list[Item]:
        """Parse pasted text into items, preserving input order.

        Malformed lines are dropped. Duplicate names are kept as-is.
        """
        items: list[Item] = []
        seen: set[str] = set()

        for lineno, line in enumerate(_LINE_SPLIT_PATTERN.split(content.strip()), 1):
            item = self.parse_line(line)
            if item is None:
                if line.strip():
                    logger.debug("Dropping malformed line %d: %r", lineno, line)
                continue

            if item.name in seen:
                logger.warning(
                    "Duplicate item name %r on line %d - scores keyed by name will collide",
                    item.name, lineno,
                )
            seen.add(item.name)
            items.append(item)

        return items


def parse_items(content: str, delimiter: str = ',') -> list[Item]:
    """Convenience function to parse an item list.

    Args:
        content: Pasted text
        delimiter: Name/url separator

    Returns:
        Ordered list of items
    """
    return ItemListParser(delimiter=delimiter).parse(content)
