"""
scryfetch services.

Throttled access to the Scryfall API.
"""

from scryfetch.services.delayer import Delayer
from scryfetch.services.scryfall import (
    CardLookup,
    LookupKind,
    ScryfallService,
    build_request_uri,
    classify_card,
)

__all__ = [
    "CardLookup",
    "Delayer",
    "LookupKind",
    "ScryfallService",
    "build_request_uri",
    "classify_card",
]
