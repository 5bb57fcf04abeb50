"""Tests for card reference parsing."""

import pytest

from scryfetch.models.card import ParsedCard
from scryfetch.parsers.card_reference import parse_card_reference, parse_card_references


class TestQuantity:
    def test_defaults_to_one(self) -> None:
        """Lines without a leading number have quantity 1."""
        card = parse_card_reference("Black Lotus")

        assert card is not None
        assert card.quantity == 1
        assert card.name == "Black Lotus"

    @pytest.mark.parametrize("quantity", [1, 4, 20, 250])
    def test_leading_number_is_quantity(self, quantity: int) -> None:
        """"<N> <rest>" yields quantity N and the name from <rest>."""
        card = parse_card_reference(f"{quantity} Lightning Bolt -foil")
        rest = parse_card_reference("Lightning Bolt -foil")

        assert card is not None and rest is not None
        assert card.quantity == quantity
        assert card.name == rest.name
        assert card.custom_flags == rest.custom_flags

    def test_number_without_space_is_part_of_name(self) -> None:
        """A number glued to the name is not a quantity."""
        card = parse_card_reference("4Black Lotus")

        assert card is not None
        assert card.quantity == 1
        assert card.name == "4Black Lotus"

    def test_zero_falls_back_to_one(self) -> None:
        """Quantity is always at least 1."""
        card = parse_card_reference("0 Black Lotus")

        assert card is not None
        assert card.quantity == 1
        assert card.name == "Black Lotus"

    def test_non_ascii_digits_are_not_a_quantity(self) -> None:
        """Only ASCII digits form a quantity prefix."""
        card = parse_card_reference("٤ Black Lotus")

        assert card is not None
        assert card.quantity == 1
        assert card.name == "٤ Black Lotus"

    def test_code_after_quantity(self) -> None:
        """Set/number codes work with a quantity prefix."""
        card = parse_card_reference("3 m3c/331/de")

        assert card is not None
        assert card.quantity == 3
        assert card.name == "m3c/331/de"


class TestFlags:
    def test_language_is_extracted(self) -> None:
        """-l becomes the language and is removed from custom flags."""
        card = parse_card_reference("Black Lotus -l=fr -x=1 -x=2 -y")

        assert card is not None
        assert card.name == "Black Lotus"
        assert card.language == "fr"
        assert dict(card.custom_flags) == {"x": "2", "y": None}
        assert "l" not in card.custom_flags

    def test_no_language_flag(self) -> None:
        """Without -l the language is None."""
        card = parse_card_reference("2 Black Lotus -foil")

        assert card is not None
        assert card.language is None
        assert dict(card.custom_flags) == {"foil": None}

    def test_repeated_language_last_wins(self) -> None:
        """The last -l flag is the language."""
        card = parse_card_reference("Black Lotus -l=de -l=ja")

        assert card is not None
        assert card.language == "ja"

    def test_custom_flags_are_read_only(self) -> None:
        """ParsedCard flags cannot be mutated after parsing."""
        card = parse_card_reference("Black Lotus -foil")

        assert card is not None
        with pytest.raises(TypeError):
            card.custom_flags["foil"] = "1"  # type: ignore[index]


class TestNameFlagBoundary:
    def test_trailing_flag_like_token_is_a_flag(self) -> None:
        """A dash-letter token at the end of the line is a flag."""
        card = parse_card_reference("Jace -Beleren")

        assert card is not None
        assert card.name == "Jace"
        assert dict(card.custom_flags) == {"Beleren": None}

    def test_flag_like_token_inside_name_stays_in_name(self) -> None:
        """Flags only count when every following token is also a flag."""
        card = parse_card_reference("Jace -Beleren foo -foil")

        assert card is not None
        assert card.name == "Jace -Beleren foo"
        assert dict(card.custom_flags) == {"foil": None}

    def test_hyphenated_names_are_untouched(self) -> None:
        """Hyphens within words are not flags."""
        card = parse_card_reference("Lim-Dûl's Vault")

        assert card is not None
        assert card.name == "Lim-Dûl's Vault"
        assert dict(card.custom_flags) == {}

    def test_line_of_only_a_flag_is_a_name(self) -> None:
        """A flag needs whitespace before it, so a lone flag is the name."""
        card = parse_card_reference("-l=fr")

        assert card is not None
        assert card.name == "-l=fr"
        assert card.language is None

    def test_empty_line_gives_empty_name(self) -> None:
        """The parser does not reject empty names."""
        card = parse_card_reference("   ")

        assert card == ParsedCard(name="")

    def test_surrounding_whitespace_is_stripped(self) -> None:
        """Leading and trailing whitespace are not part of the name."""
        card = parse_card_reference("  2   Black Lotus   -foil  ")

        assert card is not None
        assert card.quantity == 2
        assert card.name == "Black Lotus"
        assert dict(card.custom_flags) == {"foil": None}


class TestParseCardReferences:
    def test_parses_each_line(self, sample_card_list: str) -> None:
        """One ParsedCard per non-comment, non-blank line, in order."""
        cards = parse_card_references(sample_card_list)

        assert [c.name for c in cards] == ["Black Lotus", "m3c/331/de", "Command Tower"]
        assert [c.quantity for c in cards] == [4, 1, 2]

    def test_flags_survive(self, sample_card_list: str) -> None:
        """Flags and language are parsed per line."""
        cards = parse_card_references(sample_card_list)

        assert cards[1].language == "fr"
        assert dict(cards[1].custom_flags) == {"foil": None}
        assert dict(cards[2].custom_flags) == {"condition": "NM"}

    def test_empty_input(self) -> None:
        """Empty or whitespace-only input yields an empty list."""
        assert parse_card_references("") == []
        assert parse_card_references("\n  \n") == []
