"""Per-team statistics synthesized from the analytics and standings feeds.

Metric policy (one formula per metric):

* goals for/against: per 60 minutes of all-situations ice time
* expected goals, shot share, shooting, high-danger share, PDO: 5-on-5 split
* power play: 5-on-4 goals for over penalties drawn (0 with no opportunities)
* penalty kill: 100 minus 4-on-5 goals against over penalties taken
  (100 with no opportunities)
* penalty minutes: per game played
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from loguru import logger

from savant.calculation.goalies import select_goalie
from savant.models.enums import Situation
from savant.models.team import TeamNotFound, TeamStats
from savant.normalization import fields as f
from savant.normalization.fields import get_float, safe_divide
from savant.normalization.teams import UNKNOWN_TEAM, normalize_team_code

Record = Mapping[str, Any]
TeamResult = Union[TeamStats, TeamNotFound]


def per_60(value: float, ice_time_seconds: float) -> float:
    """Rate per 60 minutes; ice time is floored at one second."""
    return value * 3600 / max(ice_time_seconds, 1.0)


def power_play_percent(goals: float, opportunities: float) -> float:
    if opportunities <= 0:
        return 0.0
    return goals / opportunities * 100


def penalty_kill_percent(goals_against: float, times_shorthanded: float) -> float:
    if times_shorthanded <= 0:
        return 100.0
    return 100 - goals_against / times_shorthanded * 100


def high_danger_share(hd_for: float, hd_against: float) -> float:
    """Share of high-danger chances; exactly 50 when there are none."""
    total = hd_for + hd_against
    if total <= 0:
        return 50.0
    return hd_for / total * 100


def _standings_code(row: Record) -> str:
    abbrev = row.get("teamAbbrev")
    if isinstance(abbrev, dict):
        abbrev = abbrev.get("default")
    return normalize_team_code(abbrev)


class TeamStatsCalculator:
    """Matches a canonical team code across sources and derives its stats."""

    def __init__(
        self,
        team_rows: Iterable[Record],
        standings: Optional[Iterable[Record]] = None,
        goalie_rows: Optional[Iterable[Record]] = None,
        starters: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        self._rows: Dict[Tuple[str, str], Record] = {}
        for row in team_rows:
            key = (normalize_team_code(row.get("team")), str(row.get("situation", "")))
            # First row per (team, situation) wins
            self._rows.setdefault(key, row)

        self._standings: Dict[str, Record] = {}
        for row in standings or []:
            self._standings.setdefault(_standings_code(row), row)

        self._goalie_rows: List[Record] = list(goalie_rows or [])
        self._starters = starters or {}
        # Goalie data is optional; a team only gets a goalie when the feed was loaded
        self._include_goalies = goalie_rows is not None

        logger.debug(
            f"TeamStatsCalculator initialized with {len(self._rows)} team rows, "
            f"{len(self._standings)} standings rows, {len(self._goalie_rows)} goalie rows."
        )

    def row(self, code: str, situation: Situation) -> Optional[Record]:
        return self._rows.get((code, situation.value))

    def compute(self, code: str) -> TeamResult:
        """Builds TeamStats for ``code``, or a TeamNotFound marker."""
        row_all = self.row(code, Situation.ALL)
        row_5v5 = self.row(code, Situation.FIVE_ON_FIVE)
        if code == UNKNOWN_TEAM or row_all is None or row_5v5 is None:
            logger.warning(f"Stats not found for team '{code}'")
            return TeamNotFound(name=code)

        row_pp = self.row(code, Situation.POWER_PLAY)
        row_pk = self.row(code, Situation.PENALTY_KILL)
        standing = self._standings.get(code)

        ice_all = get_float(row_all, f.ICE_TIME)
        ice_5v5 = get_float(row_5v5, f.ICE_TIME)

        games_played = get_float(standing, ["gamesPlayed"]) or get_float(row_all, f.GAMES_PLAYED)

        goalie = None
        if self._include_goalies:
            goalie = select_goalie(code, self._goalie_rows, self._starters)

        return TeamStats(
            name=code,
            gf_per_game=per_60(get_float(row_all, f.GOALS_FOR), ice_all),
            ga_per_game=per_60(get_float(row_all, f.GOALS_AGAINST), ice_all),
            pp_percent=power_play_percent(
                get_float(row_pp, f.GOALS_FOR),
                get_float(row_all, f.PENALTIES_DRAWN),
            ),
            pk_percent=penalty_kill_percent(
                get_float(row_pk, f.GOALS_AGAINST),
                get_float(row_all, f.PENALTIES_TAKEN),
            ),
            pims_per_game=get_float(row_all, f.PENALTY_MINUTES) / max(games_played, 1.0),
            faceoff_percent=self._faceoff_percent(row_all),
            xgf_percent=get_float(row_5v5, f.X_GOALS_PERCENTAGE) * 100,
            xga_per60=per_60(get_float(row_5v5, f.X_GOALS_AGAINST), ice_5v5),
            hdcf_percent=high_danger_share(
                get_float(row_5v5, f.HIGH_DANGER_FOR),
                get_float(row_5v5, f.HIGH_DANGER_AGAINST),
            ),
            corsi_percent=get_float(row_5v5, f.CORSI_PERCENTAGE) * 100,
            shooting_percent=self._shooting_percent(row_5v5),
            pdo=self._pdo(row_5v5),
            games_played=int(games_played),
            record=self._record(standing),
            goalie=goalie,
        )

    @staticmethod
    def _shooting_percent(row: Record) -> float:
        pct = get_float(row, f.SHOOTING_PERCENTAGE)
        if pct:
            return pct * 100
        return safe_divide(get_float(row, f.GOALS_FOR), get_float(row, f.SHOTS_ON_GOAL_FOR)) * 100

    @staticmethod
    def _faceoff_percent(row: Record) -> float:
        pct = get_float(row, f.FACEOFF_PERCENTAGE)
        if pct:
            return pct * 100
        won = get_float(row, f.FACEOFFS_WON_FOR)
        lost = get_float(row, f.FACEOFFS_WON_AGAINST)
        return safe_divide(won, won + lost, default=0.5) * 100

    @staticmethod
    def _pdo(row: Record) -> Optional[float]:
        pdo = get_float(row, f.PDO)
        if pdo:
            # Feeds publish PDO either as a ratio (1.012) or already scaled (101.2)
            return pdo * 100 if pdo < 10 else pdo
        shots_for = get_float(row, f.SHOTS_ON_GOAL_FOR)
        shots_against = get_float(row, f.SHOTS_ON_GOAL_AGAINST)
        if shots_for <= 0 or shots_against <= 0:
            return None
        shooting = get_float(row, f.GOALS_FOR) / shots_for
        saves = 1 - get_float(row, f.GOALS_AGAINST) / shots_against
        return (shooting + saves) * 100

    @staticmethod
    def _record(standing: Optional[Record]) -> Optional[str]:
        if not standing:
            return None
        wins = int(get_float(standing, ["wins"]))
        losses = int(get_float(standing, ["losses"]))
        ot_losses = int(get_float(standing, ["otLosses"]))
        return f"{wins}-{losses}-{ot_losses}"
