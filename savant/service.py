import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
from loguru import logger

from savant.calculation.team_stats import TeamStatsCalculator
from savant.config.settings import AppSettings, settings as default_settings
from savant.models.enums import DataSource
from savant.models.game import GameOdds
from savant.normalization.schedule import ScheduleAdapter, hockey_date, normalize_date
from savant.normalization.teams import UNKNOWN_TEAM, is_known_team, normalize_team_code
from savant.scrapers.base_scraper import build_client
from savant.scrapers.espn_scraper import EspnScraper
from savant.scrapers.moneypuck_scraper import MoneyPuckScraper, parse_csv_records
from savant.scrapers.nhl_scraper import NhlScraper, parse_standings
from savant.scrapers.starters_scraper import StartersScraper, parse_starters
from savant.storage.cache import SourceCache


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SavantService:
    """Fetches, caches and combines the upstream sources for one request.

    Independent fetches run concurrently. The analytics dataset is mandatory
    for matchups and the scoreboard is mandatory for schedules; every other
    source degrades to a default when it fails.
    """

    def __init__(
        self,
        app_settings: Optional[AppSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        cache: Optional[SourceCache] = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        self.settings = app_settings or default_settings
        self.client = client or build_client(self.settings)
        self.cache = cache or SourceCache()
        self.now = now

        self.moneypuck = MoneyPuckScraper(self.client, app_settings=self.settings)
        self.nhl = NhlScraper(self.client, app_settings=self.settings)
        self.espn = EspnScraper(self.client, app_settings=self.settings)
        self.starters = StartersScraper(self.client, app_settings=self.settings)
        self.schedule = ScheduleAdapter(
            self.cache,
            self.espn,
            self.settings.odds_ttl_seconds,
            max_dates=self.settings.scoreboard_cache_dates,
        )

    # --- Cached datasets ---

    async def team_rows(self) -> List[Dict[str, Any]]:
        return await self.cache.get_or_refresh(
            DataSource.MONEYPUCK_TEAMS.value,
            self.moneypuck.fetch_teams,
            parse_csv_records,
            self.settings.analytics_ttl_seconds,
        )

    async def goalie_rows(self) -> List[Dict[str, Any]]:
        return await self.cache.get_or_refresh(
            DataSource.MONEYPUCK_GOALIES.value,
            self.moneypuck.fetch_goalies,
            parse_csv_records,
            self.settings.analytics_ttl_seconds,
        )

    async def standings(self) -> List[Dict[str, Any]]:
        return await self.cache.get_or_refresh(
            DataSource.NHL_STANDINGS.value,
            self.nhl.fetch_standings,
            parse_standings,
            self.settings.standings_ttl_seconds,
        )

    async def starting_goalies(self) -> Dict[str, Dict[str, Any]]:
        if not self.settings.starters_url:
            return {}
        return await self.cache.get_or_refresh(
            DataSource.STARTING_GOALIES.value,
            self.starters.fetch_starters,
            parse_starters,
            self.settings.starters_ttl_seconds,
        )

    # --- Request modes ---

    def today(self) -> str:
        return hockey_date(self.now())

    async def get_schedule(self, date: Optional[str] = None) -> Dict[str, Any]:
        target_date = normalize_date(date, self.now())
        games = await self.schedule.list_games(target_date)
        logger.info(f"Schedule for {target_date}: {len(games)} games")
        return {
            "games": [game.model_dump(mode="json", by_alias=True) for game in games],
            "count": len(games),
            "date": target_date,
        }

    async def get_matchup(self, home: str, away: str) -> Dict[str, Any]:
        home_code = normalize_team_code(home)
        away_code = normalize_team_code(away)
        logger.info(f"Matchup requested: {away!r} ({away_code}) @ {home!r} ({home_code})")
        for raw, code in ((home, home_code), (away, away_code)):
            if code != UNKNOWN_TEAM and not is_known_team(code):
                logger.warning(f"'{raw}' is not a known franchise; looking it up as '{code}'")

        teams, standings, goalies, starters, odds = await asyncio.gather(
            self.team_rows(),
            self.standings(),
            self.goalie_rows(),
            self.starting_goalies(),
            self.schedule.find_odds(self.today(), home_code, away_code),
            return_exceptions=True,
        )

        # Analytics are mandatory; everything else degrades
        if isinstance(teams, BaseException):
            raise teams
        standings = self._optional("standings", standings, None)
        goalies = self._optional("goalies", goalies, None)
        starters = self._optional("starting goalies", starters, {})
        odds = self._optional("odds", odds, GameOdds())

        calculator = TeamStatsCalculator(teams, standings, goalies, starters)
        return {
            "home": calculator.compute(home_code).model_dump(mode="json", by_alias=True),
            "away": calculator.compute(away_code).model_dump(mode="json", by_alias=True),
            "odds": odds.model_dump(mode="json"),
        }

    @staticmethod
    def _optional(name: str, result: Any, default: Any) -> Any:
        if isinstance(result, BaseException):
            logger.warning(f"Optional source '{name}' unavailable, using default: {result}")
            return default
        return result

    async def aclose(self) -> None:
        await self.client.aclose()
        logger.info("Closed upstream HTTP client")
