from scryfetch.parsers.card_reference import (
    CARD_REFERENCE_PATTERN,
    parse_card_reference,
    parse_card_references,
)
from scryfetch.parsers.flags import FLAG_PATTERN, parse_flags

__all__ = [
    "CARD_REFERENCE_PATTERN",
    "FLAG_PATTERN",
    "parse_card_reference",
    "parse_card_references",
    "parse_flags",
]
