# savant/scrapers/moneypuck_scraper.py
import csv
from io import StringIO
from typing import Any, Dict, List

from loguru import logger

from .base_scraper import BaseScraper

SourceRecord = Dict[str, Any]


def parse_csv_records(text: str) -> List[SourceRecord]:
    """Parses a header-row CSV into one dict per non-empty row."""
    reader = csv.DictReader(StringIO(text.lstrip("\ufeff")))
    records = [
        row
        for row in reader
        if any(value not in (None, "") for value in row.values())
    ]
    if not records:
        raise ValueError("CSV contained no data rows")
    return records


class MoneyPuckScraper(BaseScraper):
    """Scraper for the MoneyPuck season-summary CSVs (teams and goalies)."""

    source_name = "MoneyPuck"

    async def fetch_teams(self) -> str:
        url = self.settings.moneypuck_teams_url
        logger.info(f"Fetching MoneyPuck team summary: {url}")
        return await self._get_text(url)

    async def fetch_goalies(self) -> str:
        url = self.settings.moneypuck_goalies_url
        logger.info(f"Fetching MoneyPuck goalie summary: {url}")
        return await self._get_text(url)
