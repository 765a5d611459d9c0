"""
Team directory

Static, read-only lookup between NHL team codes and the numeric team IDs used
by the NHL API, plus resolution of user-supplied team selectors.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping


logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


@dataclass(frozen=True, slots=True)
class Team:
    id: int
    code: str
    name: str


TEAMS: tuple[Team, ...] = (
    Team(24, "ANA", "Anaheim Ducks"),
    Team(53, "ARI", "Arizona Coyotes"),
    Team(1, "BOS", "Boston Bruins"),
    Team(7, "BUF", "Buffalo Sabres"),
    Team(12, "CAR", "Carolina Hurricanes"),
    Team(29, "CBJ", "Columbus Blue Jackets"),
    Team(20, "CGY", "Calgary Flames"),
    Team(16, "CHI", "Chicago Blackhawks"),
    Team(21, "COL", "Colorado Avalanche"),
    Team(25, "DAL", "Dallas Stars"),
    Team(17, "DET", "Detroit Red Wings"),
    Team(22, "EDM", "Edmonton Oilers"),
    Team(13, "FLA", "Florida Panthers"),
    Team(26, "LAK", "Los Angeles Kings"),
    Team(30, "MIN", "Minnesota Wild"),
    Team(8, "MTL", "Montreal Canadiens"),
    Team(6, "NJD", "New Jersey Devils"),
    Team(18, "NSH", "Nashville Predators"),
    Team(2, "NYI", "New York Islanders"),
    Team(3, "NYR", "New York Rangers"),
    Team(9, "OTT", "Ottawa Senators"),
    Team(4, "PHI", "Philadelphia Flyers"),
    Team(5, "PIT", "Pittsburgh Penguins"),
    Team(55, "SEA", "Seattle Kraken"),
    Team(28, "SJS", "San Jose Sharks"),
    Team(19, "STL", "St. Louis Blues"),
    Team(14, "TBL", "Tampa Bay Lightning"),
    Team(10, "TOR", "Toronto Maple Leafs"),
    Team(23, "VAN", "Vancouver Canucks"),
    Team(54, "VGK", "Vegas Golden Knights"),
    Team(52, "WPG", "Winnipeg Jets"),
    Team(15, "WSH", "Washington Capitals"),
)

# Dallas Stars
DEFAULT_TEAM_ID = 25

_TEAMS_BY_CODE: Mapping[str, Team] = MappingProxyType({team.code: team for team in TEAMS})
_TEAMS_BY_ID: Mapping[int, Team] = MappingProxyType({team.id: team for team in TEAMS})


class UnknownTeamIdentifier(ValueError):
    """Raised when a token is neither a known team code nor an integer ID"""

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"invalid team identifier: {token} (use city code like CHI or numeric ID like 16)"
        )


def team_by_code(code: str) -> Team | None:
    return _TEAMS_BY_CODE.get(code.strip().upper())


def team_by_id(team_id: int) -> Team | None:
    return _TEAMS_BY_ID.get(team_id)


def resolve_team(token: str) -> int:
    """
    Convert a team identifier (city code or numeric ID) to a team ID.

    Codes are matched case-insensitively; numeric tokens must be plain
    integers. Numeric IDs outside the directory are accepted as-is.

    Raises:
        UnknownTeamIdentifier: If the token is neither form
    """
    normalized = token.strip().upper()

    team = _TEAMS_BY_CODE.get(normalized)
    if team is not None:
        return team.id

    if _INTEGER_PATTERN.match(normalized):
        return int(normalized)

    raise UnknownTeamIdentifier(normalized)


def resolve_teams(tokens: Iterable[str]) -> list[int]:
    """Resolve every token in order, failing on the first invalid one."""
    return [resolve_team(token) for token in tokens]


def parse_team_selector(value: str) -> list[int]:
    """Resolve a comma-separated selector such as ``"CHI,25,BOS"``."""
    return resolve_teams(value.split(","))


def resolve_team_selection(selector: str | None, all_teams: bool = False) -> list[int]:
    """
    Turn the command-line team options into the team ID list for a run.

    An empty list means "all teams".
    """
    if all_teams:
        return []
    if selector:
        return parse_team_selector(selector)
    logger.debug("No team selector given, defaulting to team %s", DEFAULT_TEAM_ID)
    return [DEFAULT_TEAM_ID]
