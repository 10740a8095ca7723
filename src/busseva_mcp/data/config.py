from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from busseva_mcp.matching.stop_matcher import MatchPolicy


class BusSevaConfig(BaseSettings):
    """Configuration for the bus directory corpus and search defaults.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_url: str = Field(
        default="https://busseva-backend.onrender.com/api", alias="BUSSEVA_API_URL"
    )
    # When set, routes are read from this JSON file instead of the API
    routes_file: Path | None = Field(default=None, alias="BUSSEVA_ROUTES_FILE")
    http_timeout_seconds: float = Field(default=30.0, alias="BUSSEVA_HTTP_TIMEOUT")
    suggestion_limit: int = Field(default=3, alias="BUSSEVA_SUGGESTION_LIMIT")
    # Stricter matching rules, off by default
    guard_common_words: bool = Field(default=False, alias="BUSSEVA_GUARD_COMMON_WORDS")
    short_word_ratio: bool = Field(default=False, alias="BUSSEVA_SHORT_WORD_RATIO")

    @property
    def routes_url(self) -> str:
        """Listing endpoint for all bus routes."""
        return f"{self.api_url.rstrip('/')}/buses"

    @property
    def match_policy(self) -> MatchPolicy:
        """Matching rules selected by the strict-matching flags."""
        return MatchPolicy(
            guard_common_words=self.guard_common_words,
            short_word_ratio=self.short_word_ratio,
        )


@lru_cache
def get_config() -> BusSevaConfig:
    """Get bus directory configuration (cached singleton).

    Returns:
        BusSevaConfig with values from .env file or environment variables.
    """
    return BusSevaConfig()
