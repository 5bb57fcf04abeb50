from scryfetch.models.card import ParsedCard
from scryfetch.models.scryfall import ScryfallCard, ScryfallList

__all__ = [
    "ParsedCard",
    "ScryfallCard",
    "ScryfallList",
]
