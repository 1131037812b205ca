from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import GoalieStatus


class GoalieSummary(BaseModel):
    """The goaltender expected to start for a team."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    name: str
    gsax: float = 0.0  # Goals saved above expected
    sv_pct: float = Field(0.905, serialization_alias="svPct")
    gaa: float = 3.0
    status: GoalieStatus = GoalieStatus.UNCONFIRMED


class TeamStats(BaseModel):
    """Synthesized per-team statistics for one side of a matchup."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str  # Canonical team code
    gf_per_game: float
    ga_per_game: float
    pp_percent: float
    pk_percent: float
    pims_per_game: float
    faceoff_percent: float
    xgf_percent: float
    xga_per60: float
    hdcf_percent: float
    corsi_percent: float
    shooting_percent: float
    pdo: Optional[float] = None

    # Context from the official standings, when available
    games_played: int = 0
    record: Optional[str] = None

    goalie: Optional[GoalieSummary] = None


class TeamNotFound(BaseModel):
    """Marker returned in place of TeamStats when a team has no analytics rows."""

    name: str
    error: str = "Stats Not Found"
