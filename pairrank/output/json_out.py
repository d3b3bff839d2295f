"""JSON output formatter for rankings.

Generates structured JSON for programmatic use.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import __version__
from ..engine.state import RankedItem
from ..engine.variants import VARIANT_PROFILES, Variant


class JSONOutput:
    """JSON output formatter."""

    def __init__(self, variant: Variant):
        self.variant = variant
        self.profile = VARIANT_PROFILES[variant]

    def generate(
        self,
        ranked: list[RankedItem],
        complete: bool = True,
        remaining: int | None = 0
    ) -> dict:
        """Generate JSON-serializable dictionary.

        Args:
            ranked: Items in ranked order
            complete: Whether all comparisons have been made
            remaining: Comparisons left, None for open-ended sessions

        Returns:
            Dictionary ready for JSON serialization
        """
        result: dict[str, Any] = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "tool": "pairrank",
                "version": __version__,
                "variant": self.variant.value,
                "strategy": self.profile.strategy.value,
                "complete": complete,
                "remaining": remaining,
                "total_items": len(ranked),
            }
        }

        result["rankings"] = [
            {
                "rank": rank,
                "name": entry.item.name,
                "url": entry.item.url,
                "value": entry.value,
            }
            for rank, entry in enumerate(ranked, 1)
        ]

        return result

    def to_json(self, ranked: list[RankedItem], indent: int = 2, **kwargs) -> str:
        data = self.generate(ranked, **kwargs)
        return json.dumps(data, indent=indent, default=str)

    def save(self, ranked: list[RankedItem], output_path: str | Path, **kwargs) -> None:
        content = self.to_json(ranked, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')
