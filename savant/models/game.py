from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LINE = "OFF"
DEFAULT_TOTAL = "6.5"
ODDS_SOURCE = "ESPN"


class GameOdds(BaseModel):
    """Betting-line summary for a scheduled game. Never null: defaults stand in."""

    model_config = ConfigDict(frozen=True)

    source: str = ODDS_SOURCE
    line: str = DEFAULT_LINE
    total: str = DEFAULT_TOTAL


class TeamSide(BaseModel):
    """One competitor in a scheduled game."""

    name: str
    code: str  # Canonical team code
    score: Optional[int] = None


class GameSummary(BaseModel):
    """Represents a single scheduled game from the scoreboard."""

    id: str
    date: Optional[str] = None  # Kickoff timestamp as reported upstream (UTC ISO 8601)
    status: str = ""
    home_team: TeamSide = Field(serialization_alias="homeTeam")
    away_team: TeamSide = Field(serialization_alias="awayTeam")
    odds: GameOdds = Field(default_factory=GameOdds)

    @property
    def description(self) -> str:
        """A human-readable description of the game."""
        return f"{self.away_team.code} @ {self.home_team.code} ({self.status})"

    def involves(self, team_a: str, team_b: str) -> bool:
        """True when the game is between the two canonical codes, in either order."""
        codes = {self.home_team.code, self.away_team.code}
        return team_a != team_b and codes == {team_a, team_b}
