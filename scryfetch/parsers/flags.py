"""
Parser for trailing card flags.

Flag format:
    -<letters>[=<value>]

Examples:
    -foil          -> {"foil": None}
    -l=fr          -> {"l": "fr"}
    -note=         -> {"note": ""}
"""

import re

# Pattern: a whitespace-delimited "-name" or "-name=value" token
# Groups: (name, value); value is None when there is no "="
FLAG_PATTERN = re.compile(r"(?:^|\s)-([a-zA-Z]+)(?:=(\S*))?(?=\s|$)")


def parse_flags(segment: str | None) -> dict[str, str | None]:
    """
    Parse a flags segment into a name -> value mapping.

    Args:
        segment: Trailing flags text, e.g. " -l=fr -foil". May be empty or None.

    Returns:
        Dict of flag names to values. A flag given without "=" maps to None.
        When a flag repeats, the last occurrence wins.

    Tokens that are not valid flags (e.g. "-1", "--x", "-a1") are ignored.
    """
    if not segment:
        return {}

    flags: dict[str, str | None] = {}
    for match in FLAG_PATTERN.finditer(segment):
        name, value = match.groups()
        flags[name] = value

    return flags
