"""
Head-to-head driven prediction engine
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List

import numpy as np

from footystats.models import AdvancedPrediction, Match, PredictionPattern
from footystats.utils import (
    goals_for_and_against,
    head_to_head_matches,
    result_letter,
    round_half_up,
    team_matches,
)
from footystats.value_bets import ODDS_VALUES

RECENT_GAMES = 5


@dataclass(frozen=True)
class WinnerPrediction:
    winner: str  # home, draw, away or unknown
    confidence: float


def _pct(count: int, total: int) -> float:
    return round(count / total * 100, 2)


def calculate_both_teams_to_score_prob(matches: Iterable[Match]) -> float:
    """Percentage of matches where both sides scored, to 2 decimals"""
    matches = list(matches)
    if not matches:
        return 0.0
    both = sum(1 for m in matches if m.home_goals > 0 and m.away_goals > 0)
    return _pct(both, len(matches))


def calculate_average_goals(matches: Iterable[Match]) -> Dict[str, float]:
    """Average total, home and away goals per match"""
    matches = list(matches)
    if not matches:
        return {"average_total_goals": 0.0, "average_home_goals": 0.0, "average_away_goals": 0.0}

    home = np.array([m.home_goals for m in matches], dtype=float)
    away = np.array([m.away_goals for m in matches], dtype=float)
    return {
        "average_total_goals": round(float(np.mean(home + away)), 2),
        "average_home_goals": round(float(np.mean(home)), 2),
        "average_away_goals": round(float(np.mean(away)), 2),
    }


def calculate_form_index(matches: Iterable[Match], team: str,
                         recent_games: int = RECENT_GAMES) -> float:
    """
    Share of available points a team took in its first ``recent_games`` listed matches

    Lists are expected newest first, as match feeds usually are.

    Returns:
        Percentage of the maximum possible points, 0 for unknown teams
    """
    if not team:
        return 0.0
    recent = team_matches(team, matches)[:recent_games]
    if not recent:
        return 0.0

    points = 0
    for match in recent:
        letter = result_letter(*goals_for_and_against(match, team))
        points += {"W": 3, "D": 1, "L": 0}[letter]
    return round(points / (len(recent) * 3) * 100, 2)


def calculate_head_to_head_stats(matches: Iterable[Match]) -> Dict[str, float]:
    """Home/away/draw counts and percentages by venue side over a match list"""
    matches = list(matches)
    stats = {"home_wins": 0, "away_wins": 0, "draws": 0}
    for match in matches:
        if match.home_goals > match.away_goals:
            stats["home_wins"] += 1
        elif match.home_goals < match.away_goals:
            stats["away_wins"] += 1
        else:
            stats["draws"] += 1

    total = len(matches)
    stats["home_win_percentage"] = _pct(stats["home_wins"], total) if total else 0.0
    stats["away_win_percentage"] = _pct(stats["away_wins"], total) if total else 0.0
    stats["draw_percentage"] = _pct(stats["draws"], total) if total else 0.0
    return stats


def calculate_expected_goals(team: str, matches: Iterable[Match]) -> float:
    """Average goals a team scores per match, from its own side"""
    if not team:
        return 0.0
    played = team_matches(team, matches)
    if not played:
        return 0.0
    scored = [goals_for_and_against(m, team)[0] for m in played]
    return round(float(np.mean(scored)), 2)


def predict_winner(home_team: str, away_team: str, matches: Iterable[Match]) -> WinnerPrediction:
    """
    Vote on the fixture's winner from the two teams' previous meetings

    Meetings are counted from ``home_team``'s point of view whatever the venue.
    An outcome needs strictly more votes than both others; anything else falls
    through to a draw.
    """
    if not home_team or not away_team:
        return WinnerPrediction("unknown", 0.0)
    meetings = head_to_head_matches(home_team, away_team, matches)
    if not meetings:
        return WinnerPrediction("unknown", 0.0)

    votes = {"home": 0, "draw": 0, "away": 0}
    for match in meetings:
        letter = result_letter(*goals_for_and_against(match, home_team))
        votes[{"W": "home", "D": "draw", "L": "away"}[letter]] += 1

    total = len(meetings)
    if votes["home"] > votes["away"] and votes["home"] > votes["draw"]:
        return WinnerPrediction("home", round(votes["home"] / total, 2))
    if votes["away"] > votes["home"] and votes["away"] > votes["draw"]:
        return WinnerPrediction("away", round(votes["away"] / total, 2))
    return WinnerPrediction("draw", round(votes["draw"] / total, 2))


def calculate_win_probability(prediction: WinnerPrediction, outcome: str) -> float:
    """Probability of ``outcome``: the winner keeps its confidence, the other two split the rest"""
    if prediction.winner == "unknown":
        return round(1 / 3, 2)
    if prediction.winner == outcome:
        return prediction.confidence
    return round((1 - prediction.confidence) / 2, 2)


def run_prediction(home_team: str, away_team: str, matches: Iterable[Match]) -> AdvancedPrediction:
    """
    Run the full engine for one fixture

    Args:
        home_team: Home team name
        away_team: Away team name
        matches: Match history

    Returns:
        AdvancedPrediction with expected goals, winner vote, model bundle and patterns
    """
    matches = list(matches)
    home_xg = calculate_expected_goals(home_team, matches)
    away_xg = calculate_expected_goals(away_team, matches)
    btts = calculate_both_teams_to_score_prob(matches)
    winner = predict_winner(home_team, away_team, matches)

    patterns: List[PredictionPattern] = []
    if btts > 50:
        patterns.append(PredictionPattern(
            type="both_teams_score",
            confidence=btts / 100,
            description=f"Based on historical data, both teams have a {btts}% probability of scoring",
            historical_success=btts,
            odds_value=ODDS_VALUES["both_teams_score"],
        ))
    if winner.winner == "draw":
        draw_pct = round_half_up(winner.confidence * 100)
        patterns.append(PredictionPattern(
            type="draw",
            confidence=winner.confidence,
            description=f"Historical data shows {draw_pct}% probability of a draw",
            historical_success=draw_pct,
            odds_value=ODDS_VALUES["draw"],
        ))

    model_predictions = {
        "random_forest": "insufficient_data" if winner.winner == "unknown" else f"{winner.winner}_win",
        "poisson": {
            "home_goals": round_half_up(home_xg),
            "away_goals": round_half_up(away_xg),
        },
        "elo": {
            "home_win_prob": calculate_win_probability(winner, "home"),
            "draw_prob": calculate_win_probability(winner, "draw"),
            "away_win_prob": calculate_win_probability(winner, "away"),
        },
    }

    return AdvancedPrediction(
        home_expected_goals=home_xg,
        away_expected_goals=away_xg,
        both_teams_to_score_prob=btts,
        predicted_winner=winner.winner,
        confidence=winner.confidence,
        model_predictions=model_predictions,
        patterns=patterns,
    )
