"""
Small helpers shared by the statistics modules
"""
import math
from typing import Iterable, List

from footystats.models import Match


def normalize_team(name: str) -> str:
    """Team-name key used for every comparison: trimmed and case-folded"""
    return (name or "").strip().casefold()


def same_team(a: str, b: str) -> bool:
    return normalize_team(a) == normalize_team(b)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)"""
    return int(math.floor(value + 0.5))


def plays_in(match: Match, team: str) -> bool:
    return same_team(match.home_team, team) or same_team(match.away_team, team)


def is_home(match: Match, team: str) -> bool:
    return same_team(match.home_team, team)


def team_matches(team: str, matches: Iterable[Match]) -> List[Match]:
    """All matches where ``team`` played on either side"""
    return [m for m in matches if plays_in(m, team)]


def head_to_head_matches(home_team: str, away_team: str, matches: Iterable[Match]) -> List[Match]:
    """Meetings between the two teams, at either venue"""
    return [
        m for m in matches
        if (same_team(m.home_team, home_team) and same_team(m.away_team, away_team))
        or (same_team(m.home_team, away_team) and same_team(m.away_team, home_team))
    ]


def goals_for_and_against(match: Match, team: str):
    """(scored, conceded) for ``team`` in ``match``, measured from its own side"""
    if is_home(match, team):
        return match.home_goals, match.away_goals
    return match.away_goals, match.home_goals


def result_letter(scored: int, conceded: int) -> str:
    if scored > conceded:
        return "W"
    if scored < conceded:
        return "L"
    return "D"


def is_ht_ft_reversal(match: Match) -> bool:
    """Half-time leader lost at full time; a level score at either stage never counts"""
    ht_home, ht_away = match.ht_home_goals, match.ht_away_goals
    ft_home, ft_away = match.home_goals, match.away_goals
    return (ht_home > ht_away and ft_home < ft_away) or (ht_home < ht_away and ft_home > ft_away)
