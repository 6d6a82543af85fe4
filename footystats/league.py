"""
Whole-competition statistics
"""
from typing import Iterable, List

import numpy as np

from footystats.models import LeagueStatistics, Match, StandingsEntry
from footystats.standings import calculate_standings


def calculate_league_statistics(matches: Iterable[Match]) -> LeagueStatistics:
    """
    Calculate league-wide aggregates

    Args:
        matches: All matches of the competition, played or scheduled

    Returns:
        LeagueStatistics; an empty input gives zeros and "-" placeholders
    """
    matches = list(matches or [])
    if not matches:
        return LeagueStatistics()

    completed = [m for m in matches if m.is_completed]
    home = np.array([m.home_goals for m in completed], dtype=int)
    away = np.array([m.away_goals for m in completed], dtype=int)
    totals = home + away
    total_goals = int(totals.sum())

    standings = calculate_standings(matches)

    return LeagueStatistics(
        total_matches=len(matches),
        completed_matches=len(completed),
        total_goals=total_goals,
        average_goals_per_match=total_goals / len(completed) if completed else 0.0,
        home_wins=int(np.sum(home > away)),
        away_wins=int(np.sum(home < away)),
        draws=int(np.sum(home == away)),
        most_goals_scored_in_match=int(totals.max()) if completed else 0,
        # at least one side kept a clean sheet
        clean_sheets=int(np.sum((home == 0) | (away == 0))),
        top_scorer=get_top_scoring_team(standings),
        most_clean_sheets=get_most_clean_sheets_team(standings),
    )


def get_top_scoring_team(standings: List[StandingsEntry]) -> str:
    """Team with the most goals scored; the higher-placed team wins ties"""
    if not standings:
        return "-"
    best = standings[0]
    for entry in standings[1:]:
        if entry.goals_for > best.goals_for:
            best = entry
    return best.team


def get_most_clean_sheets_team(standings: List[StandingsEntry]) -> str:
    """Team with the fewest goals conceded, used as a stand-in for clean sheets"""
    if not standings:
        return "-"
    # a team that has not played yet has conceded nothing
    candidates = [e for e in standings if e.played > 0] or standings
    best = candidates[0]
    for entry in candidates[1:]:
        if entry.goals_against < best.goals_against:
            best = entry
    return best.team
