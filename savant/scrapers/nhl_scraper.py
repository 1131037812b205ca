# savant/scrapers/nhl_scraper.py
from typing import Any, Dict, List

from loguru import logger

from .base_scraper import BaseScraper, ScraperError


def parse_standings(payload: Any) -> List[Dict[str, Any]]:
    """Extracts the per-team standings rows from the NHL API payload."""
    if not isinstance(payload, dict) or not isinstance(payload.get("standings"), list):
        raise ScraperError("NHL standings payload has no 'standings' list")
    return [row for row in payload["standings"] if isinstance(row, dict)]


class NhlScraper(BaseScraper):
    """Scraper for the official NHL web API."""

    source_name = "NHL"

    async def fetch_standings(self) -> Any:
        logger.info("Fetching NHL standings")
        return await self._get_json(self.settings.nhl_standings_url)
