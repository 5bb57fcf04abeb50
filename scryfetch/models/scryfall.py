"""
Shapes of the Scryfall payloads this package reads.

Only the fields used here are declared; real payloads carry many more
and are passed through untouched.
"""

from typing import TypedDict


class ScryfallCard(TypedDict, total=False):
    """One printing of a card as returned by /cards endpoints."""

    id: str
    name: str
    printed_name: str
    lang: str
    set: str
    collector_number: str
    games: list[str]
    prints_search_uri: str


class ScryfallList(TypedDict, total=False):
    """List envelope returned by search endpoints."""

    object: str
    data: list[ScryfallCard]
    has_more: bool
    next_page: str
