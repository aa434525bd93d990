"""
Tests for splitting statement text by card.
"""
from ..core.sections import is_card_marker, split_by_card, split_sections


class TestCardMarker:

    def test_masked_card_number(self):
        assert is_card_marker("1234 56XX XXXX 7890")
        assert is_card_marker("   1234 56XX XXXX 7890  ")

    def test_not_a_marker(self):
        """Anything besides the masked number on the line disqualifies it."""
        assert not is_card_marker("Card 1234 56XX XXXX 7890")
        assert not is_card_marker("1234 5678 9012 3456")
        assert not is_card_marker("1234 56xx xxxx 7890")
        assert not is_card_marker("")


class TestSplitByCard:
    """Grouping lines under card markers."""

    def test_lines_before_first_marker_dropped(self, sample_text):
        card_data = split_by_card(sample_text)
        all_lines = [line for lines in card_data.values() for line in lines]
        assert "ACME BANK CARD SERVICES" not in all_lines
        assert "DEC 01 DEC 02 $99.99LINE BEFORE ANY CARD" not in all_lines

    def test_cards_in_order_of_first_appearance(self, sample_text):
        assert list(split_by_card(sample_text)) == ["1234 56XX XXXX 7890", "9876 54XX XXXX 3210"]

    def test_reappearing_marker_accumulates(self, sample_text):
        """A card seen twice keeps one bucket, in document order."""
        lines = split_by_card(sample_text)["1234 56XX XXXX 7890"]
        assert lines == [
            "Trans Post Amount Description",
            "DEC 22 DEC 23-$45.67NETFLIX",
            "DEC 28 DEC 29 $120.00GROCERY MART",
            "JAN 05 JAN 06 $9.99SPOTIFY",
            "Subtotal $84.32",
            "JAN 10 JAN 11 $30.00BOOKSTORE",
            "Page 2 of 2",
        ]

    def test_lines_kept_verbatim(self):
        """Only the marker is trimmed; content lines are stored as-is."""
        card_data = split_by_card("  1234 56XX XXXX 7890 \n  indented line  \n")
        assert card_data == {"1234 56XX XXXX 7890": ["  indented line  "]}

    def test_no_marker(self):
        assert split_by_card("STATEMENT PERIOD: Dec 20, 2023 to Jan 19, 2024\nnothing here") == {}

    def test_empty_section(self):
        assert split_by_card("1234 56XX XXXX 7890") == {"1234 56XX XXXX 7890": []}

    def test_split_sections_models(self, sample_text):
        sections = split_sections(sample_text)
        assert [s.card_key for s in sections] == ["1234 56XX XXXX 7890", "9876 54XX XXXX 3210"]
        assert sections[1].lines == ["JAN 02 JAN 03 $15.00COFFEE HOUSE"]
