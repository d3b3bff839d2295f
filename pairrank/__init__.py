"""pairrank - pairwise-comparison ranking tool."""

__version__ = "0.1.0"
