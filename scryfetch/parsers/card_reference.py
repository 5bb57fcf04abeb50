"""
Parser for free-form card reference lines.

Line format:
    [<quantity>] <name or code or id> [-l=<language>] [<custom flags>]

Example:
    4 Lightning Bolt
    m3c/331/de -l=fr -foil
    56ebc372-aabd-4174-a943-c7bf59e5028d -condition=NM

The flags suffix is the longest run of flag tokens reaching the end of the
line. A flag-looking token followed by anything else is part of the name:
"Jace -Beleren foo" is all name, while "Jace -Beleren" is the name "Jace"
with the flag "Beleren".
"""

import re

from scryfetch.models.card import ParsedCard
from scryfetch.parsers.flags import parse_flags

# Groups: (quantity, name, flags)
# The lazy name lets the flags group claim the longest possible suffix
CARD_REFERENCE_PATTERN = re.compile(
    r"^(?:([0-9]+)\s+)?"  # optional quantity
    r"(.*?)"  # name, code or id
    r"((?:\s-[a-zA-Z]+(?:=\S*)?)*)$"  # trailing flags
)

LANGUAGE_FLAG = "l"

COMMENT_PREFIXES = ("#", "//")


def _parse_quantity(raw: str | None) -> int:
    """Quantity from the prefix, falling back to 1 when missing or not positive."""
    if raw is None:
        return 1
    try:
        quantity = int(raw)
    except ValueError:
        return 1
    return quantity if quantity >= 1 else 1


def parse_card_reference(line: str) -> ParsedCard | None:
    """
    Parse one line of text into a ParsedCard.

    Args:
        line: A single card request, e.g. "2 Black Lotus -l=fr -foil"

    Returns:
        ParsedCard, or None if the line does not match the reference grammar.
        An empty name is returned as-is; lookups for it will find nothing.
    """
    match = CARD_REFERENCE_PATTERN.match(line.strip())
    if match is None:
        return None

    raw_quantity, name, raw_flags = match.groups()

    flags = parse_flags(raw_flags)
    language = flags.pop(LANGUAGE_FLAG, None)

    return ParsedCard(
        name=name.strip(),
        quantity=_parse_quantity(raw_quantity),
        language=language,
        custom_flags=flags,
    )


def parse_card_references(text: str) -> list[ParsedCard]:
    """
    Parse a multi-line card list into ParsedCards.

    Blank lines and comment lines ("#" or "//") are skipped.

    Args:
        text: Card list, one reference per line

    Returns:
        List of ParsedCard objects in input order. Empty list if input is empty.
    """
    if not text or not text.strip():
        return []

    cards: list[ParsedCard] = []

    for line in text.splitlines():
        line = line.strip()

        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        card = parse_card_reference(line)
        if card is not None:
            cards.append(card)

    return cards
