from typing import Any, Dict, Iterable, List, Mapping, Optional

from loguru import logger

from savant.models.enums import GoalieStatus, Situation
from savant.models.team import GoalieSummary
from savant.normalization import fields as f
from savant.normalization.fields import get_float, safe_divide
from savant.normalization.teams import normalize_team_code

PLACEHOLDER_GOALIE = GoalieSummary(name="Average Goalie", status=GoalieStatus.UNCONFIRMED)


def _last_name(full_name: str) -> str:
    """'Swayman, Jeremy' and 'Jeremy Swayman' both give 'swayman'."""
    name = full_name.strip()
    if "," in name:
        return name.split(",", 1)[0].strip().lower()
    parts = name.split()
    return parts[-1].lower() if parts else ""


def summarize_goalie(row: Mapping[str, Any], status: GoalieStatus) -> GoalieSummary:
    """Builds a GoalieSummary from an all-situations goaltender row."""
    goals = get_float(row, f.GOALIE_GOALS)
    expected = get_float(row, f.GOALIE_X_GOALS)
    shots = get_float(row, f.GOALIE_SHOTS)
    ice_time = get_float(row, f.GOALIE_ICE_TIME)

    sv_pct = 1 - safe_divide(goals, shots) if shots > 0 else PLACEHOLDER_GOALIE.sv_pct
    gaa = safe_divide(goals * 3600, ice_time, default=PLACEHOLDER_GOALIE.gaa)

    return GoalieSummary(
        name=str(row.get("name") or PLACEHOLDER_GOALIE.name),
        gsax=round(expected - goals, 2),
        sv_pct=round(sv_pct, 3),
        gaa=round(gaa, 2),
        status=status,
    )


def team_goalies(code: str, goalie_rows: Iterable[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """All-situations goaltender rows belonging to ``code``."""
    return [
        row
        for row in goalie_rows
        if normalize_team_code(row.get("team")) == code
        and row.get("situation", Situation.ALL.value) == Situation.ALL.value
    ]


def select_goalie(
    code: str,
    goalie_rows: Optional[Iterable[Mapping[str, Any]]],
    starters: Optional[Dict[str, Dict[str, Any]]] = None,
) -> GoalieSummary:
    """Picks the goaltender expected to start for ``code``.

    An announced starter is matched to the roster by last name. Without one,
    the goalie with the most games played (then ice time) is the projected
    number one. No roster at all yields a league-average placeholder.
    """
    roster = team_goalies(code, goalie_rows or [])
    if not roster:
        logger.debug(f"No goalie rows for {code}, using placeholder")
        return PLACEHOLDER_GOALIE

    starter = (starters or {}).get(code)
    if starter:
        last_name = _last_name(starter["goalie"])
        for row in roster:
            if last_name and last_name in str(row.get("name", "")).lower():
                status = GoalieStatus.CONFIRMED if starter.get("confirmed") else GoalieStatus.PROJECTED
                return summarize_goalie(row, status)
        logger.info(f"Announced starter '{starter['goalie']}' not on {code} roster")

    workhorse = max(
        roster,
        key=lambda row: (
            get_float(row, f.GOALIE_GAMES_PLAYED),
            get_float(row, f.GOALIE_ICE_TIME),
        ),
    )
    return summarize_goalie(workhorse, GoalieStatus.PROJECTED)
