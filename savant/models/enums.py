from enum import Enum


class Situation(str, Enum):
    """Strength-state splits as labelled in the analytics feed's `situation` column."""

    ALL = "all"
    FIVE_ON_FIVE = "5on5"
    POWER_PLAY = "5on4"
    PENALTY_KILL = "4on5"


class GoalieStatus(str, Enum):
    CONFIRMED = "Confirmed"
    PROJECTED = "Projected #1"
    UNCONFIRMED = "Unconfirmed"


class DataSource(str, Enum):
    """Cache keys for the independently refreshed upstream datasets."""

    MONEYPUCK_TEAMS = "moneypuck_teams"
    MONEYPUCK_GOALIES = "moneypuck_goalies"
    NHL_STANDINGS = "nhl_standings"
    ESPN_SCOREBOARD = "espn_scoreboard"
    STARTING_GOALIES = "starting_goalies"
