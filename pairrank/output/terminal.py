"""Rich terminal output for ranking sessions.

Renders the pairwise-choice view, the ranking table and the completion view.
Theme: Catppuccin Mocha (https://catppuccin.com/palette/)
"""

from __future__ import annotations

from typing import IO

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.style import Style
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .. import __version__
from ..engine.pairs import ComparisonPair
from ..engine.state import RankedItem
from ..engine.variants import VARIANT_PROFILES, Variant

# Catppuccin Mocha palette (subset)
MOCHA = {
    "mauve": "#cba6f7",
    "red": "#f38ba8",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "sapphire": "#74c7ec",
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "text": "#cdd6f4",
    "subtext0": "#a6adc8",
    "overlay0": "#6c7086",
    "surface1": "#45475a",
    "crust": "#11111b",
}

MOCHA_THEME = Theme({
    "info": MOCHA["sapphire"],
    "warning": MOCHA["peach"],
    "danger": MOCHA["red"],
    "success": MOCHA["green"],
})

# Medal colours for the top three
_RANK_COLORS = {
    1: MOCHA["yellow"],
    2: MOCHA["lavender"],
    3: MOCHA["peach"],
}


def _rank_badge(rank: int) -> Text:
    color = _RANK_COLORS.get(rank, MOCHA["surface1"])
    badge = Text()
    badge.append(f" {rank} ", style=f"bold {MOCHA['crust']} on {color}")
    return badge


def _option_panel(index: int, item_name: str, url: str) -> Panel:
    body = Text()
    body.append(item_name, style=f"bold {MOCHA['text']}")
    body.append("\n")
    body.append(url, style=Style(color=MOCHA["sapphire"], link=url))
    return Panel(
        body,
        title=f"[bold {MOCHA['mauve']}]{index}[/bold {MOCHA['mauve']}]",
        title_align="left",
        box=ROUNDED,
        border_style=MOCHA["surface1"],
        padding=(0, 1),
    )


class TerminalOutput:
    """Rich terminal output formatter."""

    def __init__(
        self,
        variant: Variant,
        console: Console | None = None,
        no_color: bool = False,
    ):
        """Initialize terminal output.

        Args:
            variant: Active variant
            console: Optional Rich console instance
            no_color: If True, disable colored output
        """
        if console:
            self.console = console
        elif no_color:
            self.console = Console(no_color=True, highlight=False)
        else:
            self.console = Console(theme=MOCHA_THEME)

        self.variant = variant
        self.profile = VARIANT_PROFILES[variant]

    def print_header(self) -> None:
        self.console.print(
            Panel(
                Align.center(
                    Text(
                        f"PAIRRANK v{__version__} - {self.variant.value} "
                        f"({self.profile.strategy.value.replace('_', ' ')})",
                        style=f"bold {MOCHA['mauve']}",
                    )
                ),
                box=ROUNDED,
                border_style=MOCHA["mauve"],
                padding=(0, 1),
            )
        )

    def print_pair(self, pair: ComparisonPair, remaining: int | None = None) -> None:
        """Print the two options side by side.

        Args:
            pair: Pair on offer
            remaining: Comparisons left, None for open-ended sessions
        """
        self.console.print(Text("Which do you prefer?", style=f"bold {MOCHA['blue']}"))
        self.console.print(
            Columns(
                [
                    _option_panel(1, pair.first.name, pair.first.url),
                    _option_panel(2, pair.second.name, pair.second.url),
                ],
                equal=True,
                expand=True,
            )
        )
        if remaining is not None:
            self.console.print(
                f"[{MOCHA['subtext0']}]Remaining comparisons: {remaining}[/{MOCHA['subtext0']}]"
            )

    def print_rankings(self, ranked: list[RankedItem]) -> None:
        table = Table(box=ROUNDED, border_style=MOCHA["surface1"], show_edge=True)
        table.add_column("#", justify="right")
        table.add_column("Name", style=f"bold {MOCHA['text']}")
        table.add_column("URL", style=MOCHA["sapphire"], overflow="fold")
        show_value = any(entry.value is not None for entry in ranked)
        if show_value:
            table.add_column("Rating" if self.profile.value_column else "Wins", justify="right")

        for rank, entry in enumerate(ranked, 1):
            row = [_rank_badge(rank), entry.item.name, entry.item.url]
            if show_value:
                row.append('' if entry.value is None else str(entry.value))
            table.add_row(*row)

        self.console.print(table)

    def print_complete(self) -> None:
        self.console.print(
            Panel(
                Text("All comparisons complete!", style=f"bold {MOCHA['green']}"),
                box=ROUNDED,
                border_style=MOCHA["green"],
                padding=(0, 1),
            )
        )

    def print_notice(self, message: str) -> None:
        self.console.print(Text(message, style=MOCHA["overlay0"]))

    def ask_choice(self, stream: IO[str] | None = None) -> str:
        """Prompt for ``1``, ``2`` or ``q``."""
        return Prompt.ask(
            "Choose",
            console=self.console,
            choices=["1", "2", "q"],
            stream=stream,
        )
