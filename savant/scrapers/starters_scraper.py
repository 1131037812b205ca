# savant/scrapers/starters_scraper.py
from typing import Any, Dict, List

from loguru import logger

from savant.normalization.teams import UNKNOWN_TEAM, normalize_team_code
from .base_scraper import BaseScraper, ScraperError

CONFIRMED_LABELS = {"confirmed", "official", "true", "yes"}


def parse_starters(payload: Any) -> Dict[str, Dict[str, Any]]:
    """Maps canonical team code to its announced starter.

    Accepts either a bare list of entries or an object with a ``starters``
    list. Each entry needs a team and a goalie name; ``status`` (or
    ``confirmed``) tells whether the start is confirmed.
    """
    entries: List[Any]
    if isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict) and isinstance(payload.get("starters"), list):
        entries = payload["starters"]
    else:
        raise ScraperError("Starting goalie payload has no list of starters")

    starters: Dict[str, Dict[str, Any]] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        code = normalize_team_code(entry.get("team"))
        goalie = str(entry.get("goalie") or entry.get("name") or "").strip()
        if code == UNKNOWN_TEAM or not goalie:
            logger.debug(f"Skipping unusable starter entry: {entry}")
            continue
        status = str(entry.get("status", entry.get("confirmed", ""))).strip().lower()
        starters[code] = {"goalie": goalie, "confirmed": status in CONFIRMED_LABELS}
    return starters


class StartersScraper(BaseScraper):
    """Scraper for a JSON feed of announced starting goalies."""

    source_name = "Starters"

    async def fetch_starters(self) -> Any:
        if not self.settings.starters_url:
            raise ScraperError("No starting goalie feed configured")
        logger.info("Fetching starting goalies")
        return await self._get_json(self.settings.starters_url)
