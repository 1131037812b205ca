import math
from typing import Any, Iterable, Mapping, Optional

# Synonym lists for columns that have been renamed across analytics snapshots.
# Order is priority: the first usable column wins.
GAMES_PLAYED = ("games_played", "gamesPlayed", "GP")
ICE_TIME = ("iceTime", "icetime", "timeOnIce")
GOALS_FOR = ("goalsFor", "GF")
GOALS_AGAINST = ("goalsAgainst", "GA")
X_GOALS_AGAINST = ("xGoalsAgainst", "xGA")
X_GOALS_PERCENTAGE = ("xGoalsPercentage", "xGF%")
CORSI_PERCENTAGE = ("corsiPercentage", "CF%")
SHOOTING_PERCENTAGE = ("shootingPercentage", "SH%")
SHOTS_ON_GOAL_FOR = ("shotsOnGoalFor", "SOGF")
SHOTS_ON_GOAL_AGAINST = ("shotsOnGoalAgainst", "SOGA")
HIGH_DANGER_FOR = ("highDangerShotsFor", "highDangerxGoalsFor", "flurryAdjustedxGoalsFor")
HIGH_DANGER_AGAINST = (
    "highDangerShotsAgainst",
    "highDangerxGoalsAgainst",
    "flurryAdjustedxGoalsAgainst",
)
PENALTIES_DRAWN = ("penaltiesDrawn", "penaltiesAgainst")
PENALTIES_TAKEN = ("penaltiesTaken", "penaltiesFor")
PENALTY_MINUTES = ("penaltiesMinutes", "penalityMinutesFor", "penaltyMinutesFor", "pim")
FACEOFF_PERCENTAGE = ("faceOffWinPercentage", "faceoffWinPercentage", "FO%")
FACEOFFS_WON_FOR = ("faceOffsWonFor",)
FACEOFFS_WON_AGAINST = ("faceOffsWonAgainst",)
PDO = ("PDO", "pdo")

# Goaltender feed columns
GOALIE_GAMES_PLAYED = ("games_played", "gamesPlayed", "GP")
GOALIE_ICE_TIME = ("icetime", "iceTime")
GOALIE_X_GOALS = ("xGoals", "xGoalsAgainst")
GOALIE_GOALS = ("goals", "goalsAgainst")
GOALIE_SHOTS = ("ongoal", "shotsOnGoal", "shotsAgainst")


def get_float(record: Optional[Mapping[str, Any]], keys: Iterable[str]) -> float:
    """Return the first usable numeric value among ``keys`` in ``record``.

    A key is usable when it is present, not None, not a blank string and
    parses as a finite float. Falls back to 0.0; never raises.
    """
    if not record:
        return 0.0
    for key in keys:
        value = record.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if isinstance(value, bool):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            return number
    return 0.0


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Division that returns ``default`` instead of failing or producing inf/NaN."""
    if not denominator:
        return default
    result = numerator / denominator
    return result if math.isfinite(result) else default
