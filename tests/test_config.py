import pytest

from scryfetch.config import VALID_LANGUAGES, Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SCRYFETCH_API_DELAY_MS", raising=False)
        monkeypatch.delenv("SCRYFETCH_API_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.api_url == "https://api.scryfall.com"
        assert settings.api_delay_ms == 100

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings come from SCRYFETCH_* variables."""
        monkeypatch.setenv("SCRYFETCH_API_DELAY_MS", "250")
        monkeypatch.setenv("SCRYFETCH_API_URL", "http://localhost:8080")

        settings = Settings(_env_file=None)

        assert settings.api_delay_ms == 250
        assert settings.api_url == "http://localhost:8080"


def test_valid_languages() -> None:
    assert VALID_LANGUAGES == {"en", "es", "fr", "de", "it", "pt", "ja", "ko", "ru", "zhs", "zht"}
