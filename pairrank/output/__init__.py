"""Output formatters for rankings."""

from .csv_out import CSVOutput
from .json_out import JSONOutput
from .terminal import TerminalOutput

__all__ = ["TerminalOutput", "CSVOutput", "JSONOutput"]
