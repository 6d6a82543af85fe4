"""
League table built from a match list
"""
from typing import Dict, Iterable, List

import pandas as pd

from footystats.models import Match, StandingsEntry
from footystats.utils import normalize_team, result_letter

DEFAULT_FORM_LENGTH = 5
POINTS = {"W": 3, "D": 1, "L": 0}

_TOTALS = ["played", "won", "drawn", "lost", "goals_for", "goals_against", "points"]


def _team_rows(matches: List[Match]) -> pd.DataFrame:
    """One row per team per completed match, in match-list order"""
    rows = []
    for order, match in enumerate(matches):
        if not match.is_completed:
            continue
        home, away = match.home_goals, match.away_goals
        rows.append((order, normalize_team(match.home_team), home, away, result_letter(home, away)))
        rows.append((order, normalize_team(match.away_team), away, home, result_letter(away, home)))

    df = pd.DataFrame(rows, columns=["order", "team", "goals_for", "goals_against", "result"])
    df["played"] = 1
    df["won"] = (df["result"] == "W").astype(int)
    df["drawn"] = (df["result"] == "D").astype(int)
    df["lost"] = (df["result"] == "L").astype(int)
    df["points"] = df["result"].map(POINTS).astype(int)
    return df


def calculate_standings(matches: Iterable[Match],
                        form_length: int = DEFAULT_FORM_LENGTH) -> List[StandingsEntry]:
    """
    Build the league table for a list of matches

    Every team that appears in a match gets a row, but only completed matches
    count towards the totals. Ties on points are broken by goal difference,
    then goals scored, then team name.

    Args:
        matches: Matches in chronological order
        form_length: Number of recent results kept in ``form``

    Returns:
        Standings entries ordered by position
    """
    matches = list(matches)
    if not matches:
        return []

    # first spelling seen is the one displayed
    names: Dict[str, str] = {}
    for match in matches:
        names.setdefault(normalize_team(match.home_team), match.home_team.strip())
        names.setdefault(normalize_team(match.away_team), match.away_team.strip())

    df = _team_rows(matches)
    table = (
        df.groupby("team")[_TOTALS].sum()
        .reindex(list(names), fill_value=0)
        .astype(int)
    )
    table["goal_difference"] = table["goals_for"] - table["goals_against"]
    table["name_key"] = table.index
    table = table.sort_values(
        ["points", "goal_difference", "goals_for", "name_key"],
        ascending=[False, False, False, True],
        kind="mergesort",
    )

    form: Dict[str, tuple] = {}
    if not df.empty:
        recent = df.sort_values("order", kind="mergesort").groupby("team").tail(form_length)
        form = recent.groupby("team")["result"].agg(tuple).to_dict()

    return [
        StandingsEntry(
            position=position,
            team=names[key],
            played=int(row.played),
            won=int(row.won),
            drawn=int(row.drawn),
            lost=int(row.lost),
            goals_for=int(row.goals_for),
            goals_against=int(row.goals_against),
            goal_difference=int(row.goal_difference),
            points=int(row.points),
            form=form.get(key, ()),
        )
        for position, (key, row) in enumerate(table.iterrows(), start=1)
    ]
