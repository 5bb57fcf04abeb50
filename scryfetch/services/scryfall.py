"""
Scryfall API client.

Resolves ParsedCards to Scryfall card objects. Every request goes through
a shared Delayer so the client stays under Scryfall's rate limit.

API docs: https://scryfall.com/docs/api
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from scryfetch.config import VALID_LANGUAGES, settings
from scryfetch.models.card import ParsedCard
from scryfetch.models.scryfall import ScryfallCard, ScryfallList
from scryfetch.services.delayer import Delayer

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C", bound=ParsedCard)

# Scryfall card IDs: lowercase 8-4-4-4-12 hex
SCRYFALL_ID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")

# "<set>/<collector number>[/<lang>]", e.g. "m3c/331" or "m3c/331/de"
SET_NUMBER_PATTERN = re.compile(r"[a-zA-Z0-9]{3,5}/[^/]+(?:/(?:[a-zA-Z]{2,3})?)?")

PAPER_GAME = "paper"

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


class LookupKind(str, Enum):
    """Which Scryfall endpoint a card name is resolved through."""

    SCRYFALL_ID = "scryfall_id"
    SET_NUMBER = "set_number"
    FUZZY_NAME = "fuzzy_name"


@dataclass(frozen=True, slots=True)
class CardLookup:
    """
    A classified card name, ready to be turned into a request.

    Attributes:
        kind: Endpoint to use
        value: ID, set/number code (language override applied) or name
    """

    kind: LookupKind
    value: str


def classify_card(card: ParsedCard) -> CardLookup:
    """
    Decide how a ParsedCard should be looked up.

    Checked in order: Scryfall ID, set/number code, then fuzzy name.
    For codes, a recognized language override replaces any language
    segment already in the code.

    Args:
        card: Parsed card reference

    Returns:
        CardLookup with the endpoint kind and the value to request
    """
    name = card.name

    if SCRYFALL_ID_PATTERN.fullmatch(name):
        return CardLookup(LookupKind.SCRYFALL_ID, name)

    if SET_NUMBER_PATTERN.fullmatch(name):
        code = name
        if card.language is not None and card.language in VALID_LANGUAGES:
            code = "/".join(name.split("/")[:2]) + f"/{card.language}"
        return CardLookup(LookupKind.SET_NUMBER, code)

    return CardLookup(LookupKind.FUZZY_NAME, name)


def build_request_uri(lookup: CardLookup, api_url: str) -> str:
    """
    Build the Scryfall request URI for a classified lookup.

    Args:
        lookup: Result of classify_card
        api_url: Scryfall API base URL, without trailing slash

    Returns:
        Absolute request URI
    """
    if lookup.kind is LookupKind.FUZZY_NAME:
        return f"{api_url}/cards/named/?fuzzy={quote(lookup.value, safe=_URI_COMPONENT_SAFE)}"

    # IDs and set/number codes share the direct endpoint
    return f"{api_url}/cards/{lookup.value}"


async def _gather_all(pending: Iterable[Awaitable[Any]]) -> None:
    """Await every awaitable, then raise the first failure, if any."""
    results = await asyncio.gather(*pending, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result


class ScryfallService:
    """
    Client for resolving card references against Scryfall.

    Not-found responses resolve to None. Transport errors (httpx.HTTPError,
    undecodable JSON) propagate, except in the callback operations where
    they are logged and reported as None for the affected card.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        api_url: str | None = None,
        delay: float | None = None,
    ) -> None:
        """
        Initialize the Scryfall client.

        Args:
            client: HTTP client to use. If None, one is created on first use
                and closed by aclose().
            api_url: Scryfall API base URL. Defaults to settings.api_url.
            delay: Seconds between request starts. Defaults to settings.api_delay_ms.
        """
        self.api_url = (api_url or settings.api_url).rstrip("/")
        self.delayer = Delayer(settings.api_delay_ms / 1000 if delay is None else delay)
        self.headers = {"User-Agent": settings.user_agent, "Accept": "application/json"}
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=settings.timeout, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ScryfallService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get_card(self, card: ParsedCard) -> ScryfallCard | None:
        """
        Fetch the Scryfall card matching a ParsedCard.

        Args:
            card: Parsed card reference

        Returns:
            Scryfall card object, or None if Scryfall found no match

        Raises:
            httpx.HTTPError: If the request itself fails
        """
        lookup = classify_card(card)
        uri = build_request_uri(lookup, self.api_url)
        logger.debug("Resolving %r via %s", card.name, lookup.kind.value)
        result: ScryfallCard | None = await self._call_api(uri)
        return result

    async def get_card_prints(
        self,
        card: ScryfallCard,
        include_multilingual: bool = False,
        only_paper: bool = True,
    ) -> list[ScryfallCard] | None:
        """
        Fetch every printing of an already resolved card.

        Follows all result pages. Not throttled beyond the shared delayer,
        so prefer get_card_prints_and_do() for many cards.

        Args:
            card: Scryfall card object carrying prints_search_uri
            include_multilingual: Also return non-English printings
            only_paper: Keep only printings available in paper

        Returns:
            List of printings in Scryfall order, or None if any page failed
            or the card has no prints_search_uri

        Raises:
            httpx.HTTPError: If a request itself fails
        """
        uri = card.get("prints_search_uri")
        if not uri:
            logger.debug("Card %r has no prints_search_uri", card.get("name"))
            return None

        if include_multilingual:
            uri = str(httpx.URL(uri).copy_add_param("include_multilingual", "true"))

        def select(prints: list[ScryfallCard]) -> list[ScryfallCard]:
            if not only_paper:
                return prints
            return [p for p in prints if PAPER_GAME in p.get("games", [])]

        return await self.fetch_list(uri, select)

    async def get_cards_batch(self, cards: Sequence[ParsedCard]) -> list[ScryfallCard | None]:
        """
        Fetch cards for several ParsedCards concurrently.

        Args:
            cards: Parsed card references

        Returns:
            One result per input, in input order (None where not found)

        Raises:
            httpx.HTTPError: If any request itself fails
        """
        return list(await asyncio.gather(*(self.get_card(card) for card in cards)))

    async def get_cards_and_do(
        self,
        cards: Sequence[C],
        callback: Callable[[C, ScryfallCard | None], object],
    ) -> None:
        """
        Fetch each card and call `callback(card, result)` as soon as it resolves.

        The callback runs exactly once per input. `result` is None if no card
        was found or the request failed.

        Args:
            cards: Parsed card references (passed back to the callback as-is)
            callback: Called with each input and its Scryfall card

        Raises:
            Exception: The first exception raised by a callback, once every
                input has been handled
        """

        async def resolve(card: C) -> None:
            found = await self._resolve_or_none(card, self.get_card(card))
            callback(card, found)

        await _gather_all(resolve(card) for card in cards)

    async def get_card_prints_and_do(
        self,
        cards: Sequence[C],
        callback: Callable[[C, list[ScryfallCard] | None], object],
        include_multilingual: bool = False,
        only_paper: bool = True,
    ) -> None:
        """
        Fetch all printings of each card and call `callback(card, prints)`.

        The callback runs exactly once per input, as soon as that input is
        done. `prints` is None if no card was found or a request failed.

        Args:
            cards: Parsed card references (passed back to the callback as-is)
            callback: Called with each input and its printings
            include_multilingual: Also return non-English printings
            only_paper: Keep only printings available in paper

        Raises:
            Exception: The first exception raised by a callback, once every
                input has been handled
        """

        async def resolve_prints(card: ParsedCard) -> list[ScryfallCard] | None:
            found = await self.get_card(card)
            if found is None:
                return None
            return await self.get_card_prints(found, include_multilingual, only_paper)

        async def resolve(card: C) -> None:
            prints = await self._resolve_or_none(card, resolve_prints(card))
            callback(card, prints)

        await _gather_all(resolve(card) for card in cards)

    async def fetch_list(
        self,
        uri: str,
        transform: Callable[[list[Any]], T],
    ) -> T | None:
        """
        Fetch a list endpoint and every following page.

        Args:
            uri: First page URI
            transform: Applied once to the concatenated entries of all pages

        Returns:
            Transformed entries, or None if any page was not found

        Raises:
            httpx.HTTPError: If a request itself fails
        """
        entries: list[Any] = []
        next_uri: str | None = uri

        while next_uri is not None:
            page: ScryfallList | None = await self._call_api(next_uri)
            if page is None:
                return None

            entries.extend(page.get("data", []))

            next_uri = page.get("next_page") if page.get("has_more") else None
            if next_uri is not None:
                logger.debug("Following next page %s", next_uri)

        return transform(entries)

    async def _resolve_or_none(self, card: ParsedCard, pending: Awaitable[T]) -> T | None:
        try:
            return await pending
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Lookup failed for %r: %s", card.name, e)
            return None

    async def _call_api(self, uri: str) -> Any:
        response = await self.delayer.submit(lambda: self.client.get(uri, headers=self.headers))

        if not response.is_success:
            logger.debug("Scryfall returned %d for %s", response.status_code, uri)
            return None

        return response.json()
