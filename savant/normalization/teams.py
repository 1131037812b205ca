"""Team identity resolution.

Every upstream names franchises its own way: MoneyPuck uses dotted codes
(``T.B``, ``S.J``), ESPN uses two-letter forms (``TB``, ``NJ``) and city names
(``UTAH``), and the NHL API uses three-letter codes. Everything is resolved
to one canonical three-letter code before records are matched.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping

UNKNOWN_TEAM = "UNK"

_ALIASES: Dict[str, str] = {
    # Pacific
    "ANA": "ANA", "ANAHEIM DUCKS": "ANA", "ANAHEIM": "ANA", "DUCKS": "ANA",
    "CGY": "CGY", "CALGARY FLAMES": "CGY", "CALGARY": "CGY", "FLAMES": "CGY",
    "EDM": "EDM", "EDMONTON OILERS": "EDM", "EDMONTON": "EDM", "OILERS": "EDM",
    "LAK": "LAK", "LOS ANGELES KINGS": "LAK", "L.A": "LAK", "LA": "LAK", "KINGS": "LAK",
    "SJS": "SJS", "SAN JOSE SHARKS": "SJS", "S.J": "SJS", "SJ": "SJS", "SHARKS": "SJS",
    "SEA": "SEA", "SEATTLE KRAKEN": "SEA", "SEATTLE": "SEA", "KRAKEN": "SEA",
    "VAN": "VAN", "VANCOUVER CANUCKS": "VAN", "VANCOUVER": "VAN", "CANUCKS": "VAN",
    "VGK": "VGK", "VEGAS GOLDEN KNIGHTS": "VGK", "VEG": "VGK", "VEGAS": "VGK",
    "GOLDEN KNIGHTS": "VGK",
    # Central
    "CHI": "CHI", "CHICAGO BLACKHAWKS": "CHI", "CHICAGO": "CHI", "BLACKHAWKS": "CHI",
    "COL": "COL", "COLORADO AVALANCHE": "COL", "COLORADO": "COL", "AVALANCHE": "COL",
    "DAL": "DAL", "DALLAS STARS": "DAL", "DALLAS": "DAL", "STARS": "DAL",
    "MIN": "MIN", "MINNESOTA WILD": "MIN", "MINNESOTA": "MIN", "WILD": "MIN",
    "NSH": "NSH", "NASHVILLE PREDATORS": "NSH", "NASHVILLE": "NSH", "PREDATORS": "NSH",
    "STL": "STL", "ST. LOUIS BLUES": "STL", "ST LOUIS BLUES": "STL", "ST. LOUIS": "STL",
    "BLUES": "STL",
    "UTA": "UTA", "UTAH HOCKEY CLUB": "UTA", "UTAH MAMMOTH": "UTA", "UTAH": "UTA",
    "WPG": "WPG", "WINNIPEG JETS": "WPG", "WINNIPEG": "WPG", "JETS": "WPG",
    # Relocated: Arizona/Phoenix Coyotes -> Utah
    "ARI": "UTA", "PHX": "UTA", "ARIZONA COYOTES": "UTA", "PHOENIX COYOTES": "UTA",
    # Atlantic
    "BOS": "BOS", "BOSTON BRUINS": "BOS", "BOSTON": "BOS", "BRUINS": "BOS",
    "BUF": "BUF", "BUFFALO SABRES": "BUF", "BUFFALO": "BUF", "SABRES": "BUF",
    "DET": "DET", "DETROIT RED WINGS": "DET", "DETROIT": "DET", "RED WINGS": "DET",
    "FLA": "FLA", "FLORIDA PANTHERS": "FLA", "FLORIDA": "FLA", "PANTHERS": "FLA",
    "MTL": "MTL", "MONTREAL CANADIENS": "MTL", "MONTRÉAL CANADIENS": "MTL",
    "MONTREAL": "MTL", "CANADIENS": "MTL",
    "OTT": "OTT", "OTTAWA SENATORS": "OTT", "OTTAWA": "OTT", "SENATORS": "OTT",
    "TBL": "TBL", "TAMPA BAY LIGHTNING": "TBL", "T.B": "TBL", "TB": "TBL",
    "TAMPA BAY": "TBL", "LIGHTNING": "TBL",
    "TOR": "TOR", "TORONTO MAPLE LEAFS": "TOR", "TORONTO": "TOR", "MAPLE LEAFS": "TOR",
    # Metropolitan
    "CAR": "CAR", "CAROLINA HURRICANES": "CAR", "CAROLINA": "CAR", "HURRICANES": "CAR",
    "CBJ": "CBJ", "COLUMBUS BLUE JACKETS": "CBJ", "COLUMBUS": "CBJ", "BLUE JACKETS": "CBJ",
    "NJD": "NJD", "NEW JERSEY DEVILS": "NJD", "N.J": "NJD", "NJ": "NJD",
    "NEW JERSEY": "NJD", "DEVILS": "NJD",
    "NYI": "NYI", "NEW YORK ISLANDERS": "NYI", "NY ISLANDERS": "NYI", "ISLANDERS": "NYI",
    "NYR": "NYR", "NEW YORK RANGERS": "NYR", "NY RANGERS": "NYR", "RANGERS": "NYR",
    "PHI": "PHI", "PHILADELPHIA FLYERS": "PHI", "PHILADELPHIA": "PHI", "FLYERS": "PHI",
    "PIT": "PIT", "PITTSBURGH PENGUINS": "PIT", "PITTSBURGH": "PIT", "PENGUINS": "PIT",
    "WSH": "WSH", "WASHINGTON CAPITALS": "WSH", "WAS": "WSH", "WASHINGTON": "WSH",
    "CAPITALS": "WSH",
}

# Read-only view; built once at import
TEAM_ALIASES: Mapping[str, str] = MappingProxyType(_ALIASES)

CANONICAL_CODES = frozenset(TEAM_ALIASES.values())


def normalize_team_code(value: Any) -> str:
    """Resolve any supported team identifier to its canonical three-letter code.

    Unrecognized three-character input is trusted as already canonical and
    returned as-is; anything else unrecognized resolves to ``UNK``.
    """
    if value is None:
        return UNKNOWN_TEAM
    clean = str(value).strip().upper()
    if not clean:
        return UNKNOWN_TEAM
    code = TEAM_ALIASES.get(clean)
    if code:
        return code
    return clean if len(clean) == 3 else UNKNOWN_TEAM


def is_known_team(code: str) -> bool:
    return code in CANONICAL_CODES
