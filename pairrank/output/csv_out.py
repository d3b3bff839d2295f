"""CSV-like export of a final ranking.

Lines are ``rank,name,url[,value]`` joined by newlines with no trailing
newline. Fields are written verbatim unless escaping is requested, so names
or URLs containing commas produce ambiguous lines by default.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path

from ..engine.state import RankedItem


def _quote_fields(fields: list[str]) -> str:
    buf = io.StringIO()
    csv.writer(buf, lineterminator='').writerow(fields)
    return buf.getvalue()


class CSVOutput:
    """CSV output formatter."""

    def __init__(self, include_value: bool = False, escape: bool = False):
        """Initialize formatter.

        Args:
            include_value: Append each item's score or rating
            escape: Quote fields containing commas, quotes or newlines
        """
        self.include_value = include_value
        self.escape = escape

    def generate(self, ranked: list[RankedItem]) -> str:
        lines = []
        for rank, entry in enumerate(ranked, 1):
            fields = [str(rank), entry.item.name, entry.item.url]
            if self.include_value:
                fields.append('' if entry.value is None else str(entry.value))
            lines.append(_quote_fields(fields) if self.escape else ','.join(fields))
        return '\n'.join(lines)

    def save(self, ranked: list[RankedItem], output_path: str | Path) -> None:
        Path(output_path).write_text(self.generate(ranked), encoding='utf-8', newline='')


def export_csv(
    ranked: list[RankedItem],
    output_path: str | Path | None = None,
    include_value: bool = False,
    escape: bool = False
) -> str | None:
    """Convenience function to export a ranking.

    Returns:
        CSV text if no output_path, None otherwise
    """
    output = CSVOutput(include_value=include_value, escape=escape)

    if output_path:
        output.save(ranked, output_path)
        return None
    else:
        return output.generate(ranked)
