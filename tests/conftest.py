from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from scryfetch.models.scryfall import ScryfallCard
from scryfetch.services.scryfall import ScryfallService

API_URL = "https://api.scryfall.com"


@pytest.fixture
def black_lotus() -> ScryfallCard:
    """Scryfall payload for Black Lotus (Limited Edition Beta)."""
    return ScryfallCard(
        id="b0faa7f2-b547-42c4-a810-839da50dadfe",
        name="Black Lotus",
        lang="en",
        set="leb",
        collector_number="233",
        games=["paper"],
        prints_search_uri=(
            f"{API_URL}/cards/search?order=released&q=oracleid%3A5089ec1a&unique=prints"
        ),
    )


@pytest.fixture
def command_tower_fr() -> ScryfallCard:
    """Scryfall payload for the French Command Tower from M3C."""
    return ScryfallCard(
        id="d3f1e8a0-1111-4c4c-9a9a-0123456789ab",
        name="Command Tower",
        printed_name="Tour de commandement",
        lang="fr",
        set="m3c",
        collector_number="331",
        games=["paper"],
    )


@pytest_asyncio.fixture
async def service() -> AsyncIterator[ScryfallService]:
    """ScryfallService without request spacing, for respx-mocked tests."""
    async with ScryfallService(api_url=API_URL, delay=0.0) as scryfall:
        yield scryfall


@pytest.fixture
def sample_card_list() -> str:
    """Sample card list as typed by a user."""
    return """# Vintage staples
4 Black Lotus
m3c/331/de -l=fr -foil

// utility
2 Command Tower -condition=NM"""
