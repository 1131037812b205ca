import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Season the analytics feed is read for (MoneyPuck uses the start year)
    season_year: str = Field("2025", description="Season start year, e.g. 2025 for 2025-26.")

    # Upstream endpoints
    moneypuck_base_url: str = Field(
        "https://moneypuck.com/moneypuck/playerData/seasonSummary",
        description="Base URL of the MoneyPuck season summary CSVs.",
    )
    nhl_standings_url: str = Field(
        "https://api-web.nhle.com/v1/standings/now",
        description="Official NHL standings endpoint.",
    )
    espn_scoreboard_url: str = Field(
        "https://site.api.espn.com/apis/site/v2/sports/hockey/nhl/scoreboard",
        description="ESPN scoreboard endpoint (events, competitors, odds).",
    )
    starters_url: Optional[str] = Field(
        None,
        description="JSON feed of confirmed starting goalies. Disabled when unset.",
    )

    # Cache lifetimes (seconds)
    analytics_ttl_seconds: int = Field(60 * 30, ge=0)
    standings_ttl_seconds: int = Field(60 * 30, ge=0)
    odds_ttl_seconds: int = Field(60 * 5, ge=0)
    starters_ttl_seconds: int = Field(60 * 15, ge=0)
    scoreboard_cache_dates: int = Field(
        7, ge=1, description="Most scoreboard dates kept in the cache at once."
    )

    # HTTP behaviour
    request_timeout_seconds: float = Field(30.0, gt=0)
    fetch_max_attempts: int = Field(
        1,
        ge=1,
        le=5,
        description="Total attempts per upstream request (1 disables retries).",
    )
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SAVANT_",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def moneypuck_teams_url(self) -> str:
        return f"{self.moneypuck_base_url}/{self.season_year}/regular/teams.csv"

    @property
    def moneypuck_goalies_url(self) -> str:
        return f"{self.moneypuck_base_url}/{self.season_year}/regular/goalies.csv"


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
