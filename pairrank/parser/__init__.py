"""Parsers for pasted item lists."""

from .items import Item, ItemListParser, parse_items

__all__ = [
    "Item",
    "ItemListParser",
    "parse_items",
]
