# savant/scrapers/espn_scraper.py
from typing import Any, Dict, List

from loguru import logger

from .base_scraper import BaseScraper, ScraperError


def parse_scoreboard(payload: Any) -> List[Dict[str, Any]]:
    """Returns the list of events from an ESPN scoreboard payload."""
    if not isinstance(payload, dict):
        raise ScraperError("ESPN scoreboard payload is not an object")
    events = payload.get("events") or []
    if not isinstance(events, list):
        raise ScraperError("ESPN scoreboard 'events' is not a list")
    return [event for event in events if isinstance(event, dict)]


class EspnScraper(BaseScraper):
    """Scraper for the ESPN NHL scoreboard (events, competitors and odds)."""

    source_name = "ESPN"

    async def fetch_scoreboard(self, date: str) -> Any:
        """Fetch the scoreboard for a ``YYYYMMDD`` date."""
        logger.info(f"Fetching ESPN scoreboard for {date}")
        return await self._get_json(self.settings.espn_scoreboard_url, params={"dates": date})
