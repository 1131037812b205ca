from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from loguru import logger

from savant.models.enums import DataSource
from savant.models.game import DEFAULT_LINE, DEFAULT_TOTAL, GameOdds, GameSummary, TeamSide
from savant.normalization.teams import UNKNOWN_TEAM, normalize_team_code
from savant.scrapers.espn_scraper import EspnScraper, parse_scoreboard
from savant.storage.cache import SourceCache

# The league schedules by Eastern time; a UTC clock rolls over hours early.
EASTERN = ZoneInfo("America/New_York")


def hockey_date(now: Optional[datetime] = None) -> str:
    """Today's date as ``YYYYMMDD`` in US Eastern time."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(EASTERN).strftime("%Y%m%d")


def normalize_date(value: Optional[str], now: Optional[datetime] = None) -> str:
    """Strips dashes from a ``YYYY-MM-DD`` date; defaults to today (Eastern)."""
    if value and value.strip():
        return value.strip().replace("-", "")
    return hockey_date(now)


def _parse_score(value: Any) -> Optional[int]:
    if isinstance(value, dict):
        value = value.get("value", value.get("displayValue"))
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _side(competitor: Dict[str, Any]) -> TeamSide:
    team = competitor.get("team") or {}
    name = team.get("displayName") or team.get("name") or team.get("abbreviation") or "Unknown"
    return TeamSide(
        name=name,
        code=normalize_team_code(team.get("abbreviation") or name),
        score=_parse_score(competitor.get("score")),
    )


def _competitors(event: Dict[str, Any]) -> Optional[Tuple[Dict[str, Any], Dict[str, Any]]]:
    """(home, away) competitor dicts, by ``homeAway`` or else index order."""
    competitions = event.get("competitions") or []
    if not competitions or not isinstance(competitions[0], dict):
        return None
    competitors = competitions[0].get("competitors") or []
    if len(competitors) < 2:
        return None
    by_side = {c.get("homeAway"): c for c in competitors if isinstance(c, dict)}
    if "home" in by_side and "away" in by_side:
        return by_side["home"], by_side["away"]
    return competitors[0], competitors[1]


def extract_odds(event: Dict[str, Any]) -> GameOdds:
    """The first listed market of an event, with defaults for anything missing."""
    competitions = event.get("competitions") or [{}]
    markets = competitions[0].get("odds") if isinstance(competitions[0], dict) else None
    if not markets or not isinstance(markets[0], dict):
        return GameOdds()
    market = markets[0]
    line = market.get("details") or DEFAULT_LINE
    total = market.get("overUnder")
    return GameOdds(
        line=str(line),
        total=str(total) if total not in (None, "") else DEFAULT_TOTAL,
    )


def summarize_event(event: Dict[str, Any]) -> Optional[GameSummary]:
    sides = _competitors(event)
    if sides is None:
        logger.warning(f"Skipping ESPN event {event.get('id')} without two competitors")
        return None
    home, away = sides
    status = ((event.get("status") or {}).get("type") or {}).get("shortDetail", "")
    return GameSummary(
        id=str(event.get("id", "")),
        date=event.get("date"),
        status=status,
        home_team=_side(home),
        away_team=_side(away),
        odds=extract_odds(event),
    )


def list_games(events: List[Dict[str, Any]]) -> List[GameSummary]:
    games = []
    for event in events:
        game = summarize_event(event)
        if game is not None:
            games.append(game)
    return games


def find_odds(games: List[GameSummary], team_a: str, team_b: str) -> GameOdds:
    """Odds for the game between two canonical codes, in either home/away order."""
    if UNKNOWN_TEAM in (team_a, team_b):
        return GameOdds()
    for game in games:
        if game.involves(team_a, team_b):
            return game.odds
    logger.debug(f"No scheduled game found for {team_a} vs {team_b}")
    return GameOdds()


class ScheduleAdapter:
    """Reads the day's games and betting lines from the cached scoreboard."""

    key_prefix = f"{DataSource.ESPN_SCOREBOARD.value}:"

    def __init__(
        self, cache: SourceCache, scraper: EspnScraper, ttl: float, max_dates: int = 7
    ):
        self.cache = cache
        self.scraper = scraper
        self.ttl = ttl
        self.max_dates = max_dates

    async def list_games(self, date: str) -> List[GameSummary]:
        """Games for a ``YYYYMMDD`` date. Raises SourceUnavailableError on first failure."""
        key = f"{self.key_prefix}{date}"
        # Other dates' scoreboards are dropped once stale, and never exceed max_dates
        self.cache.prune(self.key_prefix, self.ttl, keep=key, max_entries=self.max_dates)
        events = await self.cache.get_or_refresh(
            key,
            lambda: self.scraper.fetch_scoreboard(date),
            parse_scoreboard,
            self.ttl,
        )
        return list_games(events)

    async def find_odds(self, date: str, team_a: str, team_b: str) -> GameOdds:
        return find_odds(await self.list_games(date), team_a, team_b)
