"""Tests for the item list parser."""

import logging

import pytest
from pairrank.parser.items import Item, ItemListParser, parse_items


class TestItemListParser:
    """Tests for ItemListParser."""

    def test_space_delimited(self):
        """Test splitting on the first space."""
        items = parse_items("RoomA https://photos.app.goo.gl/a\nRoomB https://photos.app.goo.gl/b", delimiter=' ')
        assert items == [
            Item("RoomA", "https://photos.app.goo.gl/a"),
            Item("RoomB", "https://photos.app.goo.gl/b"),
        ]

    def test_comma_delimited(self):
        """Test splitting on the first comma."""
        items = parse_items("Alpha,http://a\nBeta,http://b")
        assert [i.name for i in items] == ["Alpha", "Beta"]
        assert items[1].url == "http://b"

    def test_split_on_first_delimiter_only(self):
        """Test that the url keeps later delimiters."""
        items = parse_items("Alpha,http://a/?x=1,2", delimiter=',')
        assert items == [Item("Alpha", "http://a/?x=1,2")]

        items = parse_items("Alpha http://a b", delimiter=' ')
        assert items == [Item("Alpha", "http://a b")]

    def test_fields_trimmed(self):
        """Test whitespace trimming around each field."""
        items = parse_items("  Alpha ,  http://a  \n", delimiter=',')
        assert items == [Item("Alpha", "http://a")]

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        items = parse_items("A,http://x\r\nB,http://y\r\n")
        assert [i.url for i in items] == ["http://x", "http://y"]

    def test_malformed_lines_dropped(self):
        """Test lines with no delimiter or empty fields are skipped."""
        content = "A,http://x\nnodelimiter\n,http://nameless\nB,\n\nC,http://z"
        items = parse_items(content)
        assert [i.name for i in items] == ["A", "C"]

    def test_empty_input(self):
        """Test empty input yields no items."""
        assert parse_items("") == []
        assert parse_items("   \n  \n") == []

    def test_order_preserved(self):
        """Test input order is kept."""
        names = ["Zeta", "Alpha", "Mid"]
        items = parse_items("\n".join(f"{n},http://{n}" for n in names))
        assert [i.name for i in items] == names

    def test_duplicates_kept_and_warned(self, caplog):
        """Test duplicate names are kept and logged."""
        with caplog.at_level(logging.WARNING, logger="pairrank.parser.items"):
            items = parse_items("A,http://x\nA,http://y")
        assert len(items) == 2
        assert "Duplicate item name 'A'" in caplog.text

    def test_parse_line(self):
        """Test single-line parsing."""
        parser = ItemListParser(delimiter=' ')
        assert parser.parse_line("A http://x") == Item("A", "http://x")
        assert parser.parse_line("A") is None
        assert parser.parse_line("") is None

    def test_invalid_delimiter(self):
        """Test multi-character delimiters are rejected."""
        with pytest.raises(ValueError):
            ItemListParser(delimiter=', ')

    def test_item_is_immutable(self):
        """Test items are frozen."""
        item = Item("A", "http://x")
        with pytest.raises(AttributeError):
            item.name = "B"
