"""
scryfetch: resolve free-form card references against the Scryfall API.
"""

from scryfetch.models.card import ParsedCard
from scryfetch.parsers.card_reference import parse_card_reference, parse_card_references
from scryfetch.services.scryfall import ScryfallService

__all__ = [
    "ParsedCard",
    "ScryfallService",
    "parse_card_reference",
    "parse_card_references",
]
