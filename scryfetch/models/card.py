from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ParsedCard:
    """
    A card request parsed from one line of user input.

    Attributes:
        name: Card name, set/collector code ("m3c/331/de") or Scryfall ID
        quantity: Number of copies requested, always >= 1
        language: Language override from the -l flag (e.g., "fr")
        custom_flags: Any other flags, name -> value (None when no "=value")
    """

    name: str
    quantity: int = 1
    language: str | None = None
    custom_flags: Mapping[str, str | None] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only view so the reference stays immutable
        object.__setattr__(self, "custom_flags", MappingProxyType(dict(self.custom_flags)))
