"""Shared fixtures: synthetic upstream data served through httpx.MockTransport."""
import csv
from collections import Counter
from datetime import datetime, timezone
from io import StringIO
from typing import Any, Dict, List

import httpx
import pytest

from savant.config.settings import AppSettings
from savant.service import SavantService
from savant.storage.cache import SourceCache

STARTERS_URL = "https://starters.test/today.json"

TEAM_ROWS: List[Dict[str, Any]] = [
    {
        "team": "BOS", "situation": "all", "games_played": "5", "iceTime": "3600",
        "goalsFor": "10", "goalsAgainst": "6", "penaltiesAgainst": "8", "penaltiesFor": "10",
        "penalityMinutesFor": "40", "faceOffsWonFor": "150", "faceOffsWonAgainst": "100",
    },
    {
        "team": "BOS", "situation": "5on5", "games_played": "5", "iceTime": "1800",
        "goalsFor": "6", "goalsAgainst": "3", "xGoalsPercentage": "0.55", "xGoalsAgainst": "2.5",
        "corsiPercentage": "0.52", "highDangerShotsFor": "30", "highDangerShotsAgainst": "10",
        "shotsOnGoalFor": "60", "shotsOnGoalAgainst": "50",
    },
    {"team": "BOS", "situation": "5on4", "goalsFor": "2", "iceTime": "600"},
    {"team": "BOS", "situation": "4on5", "goalsAgainst": "1", "iceTime": "700"},
    {
        "team": "TOR", "situation": "all", "games_played": "4", "iceTime": "7200",
        "goalsFor": "8", "goalsAgainst": "12", "penalityMinutesFor": "",
        "faceOffWinPercentage": "0.48",
    },
    {
        "team": "TOR", "situation": "5on5", "games_played": "4", "iceTime": "3600",
        "xGoalsPercentage": "0.45", "xGoalsAgainst": "3", "corsiPercentage": "0.47",
        "shootingPercentage": "0.09",
    },
    {"team": "T.B", "situation": "all", "games_played": "6", "iceTime": "3600", "goalsFor": "3"},
    {"team": "T.B", "situation": "5on5", "games_played": "6", "iceTime": "3600"},
    # Only the all-situations split: never a complete team
    {"team": "MTL", "situation": "all", "games_played": "5", "iceTime": "3600"},
]

GOALIE_ROWS: List[Dict[str, Any]] = [
    {
        "name": "Jeremy Swayman", "team": "BOS", "situation": "all", "games_played": "4",
        "icetime": "14000", "xGoals": "12", "goals": "10", "ongoal": "120",
    },
    {
        "name": "Joonas Korpisalo", "team": "BOS", "situation": "all", "games_played": "1",
        "icetime": "3600", "xGoals": "3", "goals": "4", "ongoal": "30",
    },
    {
        "name": "Joonas Korpisalo", "team": "BOS", "situation": "5on5", "games_played": "1",
        "icetime": "3000", "xGoals": "2", "goals": "3", "ongoal": "25",
    },
    {
        "name": "Anthony Stolarz", "team": "TOR", "situation": "all", "games_played": "3",
        "icetime": "10800", "xGoals": "9", "goals": "9", "ongoal": "90",
    },
    {
        "name": "Joseph Woll", "team": "TOR", "situation": "all", "games_played": "3",
        "icetime": "9000", "xGoals": "8", "goals": "7", "ongoal": "80",
    },
]

STANDINGS = {
    "standings": [
        {
            "teamAbbrev": {"default": "BOS"}, "gamesPlayed": 5,
            "wins": 3, "losses": 1, "otLosses": 1,
        },
        {
            "teamAbbrev": {"default": "TOR"}, "gamesPlayed": 4,
            "wins": 1, "losses": 3, "otLosses": 0,
        },
    ]
}

STARTERS = [{"team": "Boston Bruins", "goalie": "Korpisalo", "status": "Confirmed"}]


def espn_event(event_id, home, away, odds=None, home_away=True, status="7:00 PM EST"):
    competitors = [
        {"team": {"displayName": home[0], "abbreviation": home[1]}, "score": "0"},
        {"team": {"displayName": away[0], "abbreviation": away[1]}, "score": "0"},
    ]
    if home_away:
        competitors[0]["homeAway"] = "home"
        competitors[1]["homeAway"] = "away"
    competition = {"competitors": competitors}
    if odds is not None:
        competition["odds"] = odds
    return {
        "id": event_id,
        "date": "2026-01-16T00:00Z",
        "status": {"type": {"shortDetail": status}},
        "competitions": [competition],
    }


SCOREBOARD = {
    "events": [
        espn_event(
            "401",
            ("Boston Bruins", "BOS"),
            ("Toronto Maple Leafs", "TOR"),
            odds=[{"details": "BOS -1.5", "overUnder": 6.0}],
        ),
        espn_event(
            "402",
            ("New Jersey Devils", "NJ"),
            ("Tampa Bay Lightning", "TB"),
            home_away=False,
        ),
    ]
}


def to_csv(rows: List[Dict[str, Any]]) -> str:
    fieldnames: List[str] = []
    for row in rows:
        fieldnames.extend(key for key in row if key not in fieldnames)
    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


class FakeClock:
    """Monotonic clock the tests move forward by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """Routes scraper requests to canned payloads and counts calls per source."""

    def __init__(self):
        self.calls: Counter = Counter()
        self.failing: set = set()
        self.scoreboard_dates: List[str] = []
        self.teams_csv = to_csv(TEAM_ROWS)
        self.goalies_csv = to_csv(GOALIE_ROWS)
        self.standings = STANDINGS
        self.scoreboard = SCOREBOARD
        self.starters = STARTERS

    def _source(self, request: httpx.Request) -> str:
        url = str(request.url)
        if url.endswith("teams.csv"):
            return "teams"
        if url.endswith("goalies.csv"):
            return "goalies"
        if "standings" in url:
            return "standings"
        if "scoreboard" in url:
            self.scoreboard_dates.append(request.url.params.get("dates"))
            return "scoreboard"
        if url == STARTERS_URL:
            return "starters"
        return "unknown"

    def handler(self, request: httpx.Request) -> httpx.Response:
        source = self._source(request)
        self.calls[source] += 1
        if source in self.failing or source == "unknown":
            return httpx.Response(503, text="unavailable")
        if source == "teams":
            return httpx.Response(200, text=self.teams_csv)
        if source == "goalies":
            return httpx.Response(200, text=self.goalies_csv)
        if source == "standings":
            return httpx.Response(200, json=self.standings)
        if source == "scoreboard":
            return httpx.Response(200, json=self.scoreboard)
        return httpx.Response(200, json=self.starters)


# 17:00 UTC on Jan 15 is noon Eastern: both clocks agree on the date
FIXED_NOW = datetime(2026, 1, 15, 17, 0, tzinfo=timezone.utc)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> AppSettings:
    return AppSettings(starters_url=STARTERS_URL, fetch_max_attempts=1)


@pytest.fixture
def make_service(upstream, clock, test_settings):
    """Factory so a test can choose its own wall-clock time."""

    def _make(now: datetime = FIXED_NOW) -> SavantService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
        return SavantService(
            app_settings=test_settings,
            client=client,
            cache=SourceCache(clock=clock),
            now=lambda: now,
        )

    return _make


@pytest.fixture
def service(make_service) -> SavantService:
    return make_service()
