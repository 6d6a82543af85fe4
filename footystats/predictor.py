"""
Match outcome prediction from historical results
"""
import datetime
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from footystats.engine import run_prediction
from footystats.logging_setup import get_logger
from footystats.models import (
    HTFT_TYPES,
    HalfTimeFullTime,
    HeadToHeadStat,
    Match,
    MatchPrediction,
    ScorePrediction,
)
from footystats.utils import (
    goals_for_and_against,
    head_to_head_matches,
    is_ht_ft_reversal,
    normalize_team,
    result_letter,
    round_half_up,
    team_matches,
)
from footystats.value_bets import calculate_value_bets

logger = get_logger(__name__)

# Constants
HOME_ADVANTAGE = 1.2
HEAD_TO_HEAD_FACTOR = 1.2
MAX_CONFIDENCE = 90
FALLBACK_HOME_SCORE = 1
FALLBACK_AWAY_SCORE = 0
FALLBACK_CONFIDENCE = 30
# Odds quoted for an HT/FT outcome that never happened in the sample
MAX_HTFT_ODDS = 50.0

HTFT_LABELS = {
    "home": "Home",
    "draw": "Draw",
    "away": "Away",
}


def _average_goals(team: str, matches: List[Match]) -> Tuple[float, float]:
    """(average scored, average conceded) for a team over its matches"""
    if not matches:
        return 0.0, 0.0
    goals = np.array([goals_for_and_against(m, team) for m in matches], dtype=float)
    scored, conceded = goals.mean(axis=0)
    return float(scored), float(conceded)


def predict_match_outcome(home_team: str, away_team: str,
                          matches: Iterable[Match]) -> ScorePrediction:
    """
    Predict a scoreline from each side's scoring and conceding averages

    Args:
        home_team: Home team name
        away_team: Away team name
        matches: Match history

    Returns:
        ScorePrediction; teams without history get 1-0 at confidence 30
    """
    matches = list(matches)
    home_matches = team_matches(home_team, matches)
    away_matches = team_matches(away_team, matches)
    meetings = head_to_head_matches(home_team, away_team, matches)

    home_scored, home_conceded = _average_goals(home_team, home_matches)
    away_scored, away_conceded = _average_goals(away_team, away_matches)

    home_score = round_half_up((home_scored * HOME_ADVANTAGE + away_conceded) / 2)
    away_score = round_half_up((away_scored + home_conceded) / 2)

    sample = len(home_matches) + len(away_matches)
    factor = HEAD_TO_HEAD_FACTOR if meetings else 1
    confidence = min(round_half_up(sample / 10 * factor * 100), MAX_CONFIDENCE)

    return ScorePrediction(
        home_score=home_score or FALLBACK_HOME_SCORE,
        away_score=away_score or FALLBACK_AWAY_SCORE,
        confidence=confidence or FALLBACK_CONFIDENCE,
    )


def get_head_to_head_stats(home_team: str, away_team: str,
                           matches: Iterable[Match]) -> HeadToHeadStat:
    """
    Summarise previous meetings from ``home_team``'s point of view

    Args:
        home_team: Team whose wins count as home wins
        away_team: Opponent
        matches: Match history

    Returns:
        HeadToHeadStat, all zeros when the teams never met
    """
    stat = HeadToHeadStat(home_team=home_team, away_team=away_team)
    meetings = head_to_head_matches(home_team, away_team, matches)
    if not meetings:
        return stat

    for match in meetings:
        scored, conceded = goals_for_and_against(match, home_team)
        stat.home_goals += scored
        stat.away_goals += conceded
        letter = result_letter(scored, conceded)
        if letter == "W":
            stat.home_wins += 1
        elif letter == "L":
            stat.away_wins += 1
        else:
            stat.draws += 1
        if match.home_goals > 0 and match.away_goals > 0:
            stat.both_teams_scored += 1
        if is_ht_ft_reversal(match):
            stat.htft_reversals += 1

    stat.total_matches = len(meetings)
    stat.avg_total_goals = round((stat.home_goals + stat.away_goals) / len(meetings), 2)
    return stat


def _leader(home: int, away: int) -> str:
    if home > away:
        return "home"
    if home < away:
        return "away"
    return "draw"


def analyze_half_time_full_time(matches: Iterable[Match]) -> List[HalfTimeFullTime]:
    """
    Frequency of the nine half-time/full-time outcomes

    Reversals come first, highest odds first, then the other outcomes by
    confidence.

    Args:
        matches: Matches to sample; those without a half-time score are ignored

    Returns:
        Nine HalfTimeFullTime entries, or an empty list without usable data
    """
    sample = [m for m in matches if m.is_completed and m.has_half_time]
    if not sample:
        return []

    counts = dict.fromkeys(HTFT_TYPES, 0)
    for match in sample:
        ht = _leader(match.ht_home_goals, match.ht_away_goals)
        ft = _leader(match.home_goals, match.away_goals)
        counts[f"{ht}_{ft}"] += 1

    entries = []
    for htft_type in HTFT_TYPES:
        ht, ft = htft_type.split("_")
        share = counts[htft_type] / len(sample)
        odds = round(1 / share, 2) if share > 0 else MAX_HTFT_ODDS
        entries.append(HalfTimeFullTime(
            type=htft_type,
            label=f"{HTFT_LABELS[ht]} / {HTFT_LABELS[ft]}",
            is_reversal=htft_type in ("home_away", "away_home"),
            odds=min(odds, MAX_HTFT_ODDS),
            confidence=round(share, 4),
        ))

    reversals = sorted((e for e in entries if e.is_reversal), key=lambda e: -e.odds)
    regular = sorted((e for e in entries if not e.is_reversal), key=lambda e: -e.confidence)
    return reversals + regular


def _result_from_score(home: int, away: int) -> str:
    return {"home": "home_win", "away": "away_win", "draw": "draw"}[_leader(home, away)]


class MatchPredictor:
    """
    Builds full match predictions from a fixed match history
    """

    def __init__(self, matches: Iterable[Match], advanced: bool = False):
        """
        Initialize the predictor

        Args:
            matches: Match history the predictions are based on
            advanced: Use the head-to-head engine instead of scoring averages
        """
        self.matches = list(matches)
        self.advanced = advanced

    @property
    def teams(self) -> List[str]:
        """Distinct team names in the history, sorted"""
        names = {}
        for match in self.matches:
            names.setdefault(normalize_team(match.home_team), match.home_team.strip())
            names.setdefault(normalize_team(match.away_team), match.away_team.strip())
        return sorted(names.values(), key=normalize_team)

    def _fixture(self, home_team: str, away_team: str) -> Match:
        return Match(
            date=datetime.datetime.now().isoformat(timespec="seconds"),
            home_team=home_team,
            away_team=away_team,
        )

    def predict(self, home_team: str, away_team: str) -> MatchPrediction:
        """
        Predict a fixture

        Args:
            home_team: Home team name
            away_team: Away team name

        Returns:
            MatchPrediction with result, scoreline, patterns, HT/FT analysis
            and head-to-head summary

        Raises:
            ValueError: If a team name is blank or both names are the same team
        """
        if not home_team or not home_team.strip() or not away_team or not away_team.strip():
            raise ValueError("Both teams are required")
        if normalize_team(home_team) == normalize_team(away_team):
            raise ValueError("A team cannot play itself")

        fixture = self._fixture(home_team, away_team)
        head_to_head = get_head_to_head_stats(home_team, away_team, self.matches)
        meetings = head_to_head_matches(home_team, away_team, self.matches)
        htft = analyze_half_time_full_time(meetings or self.matches)

        if self.advanced:
            engine = run_prediction(home_team, away_team, self.matches)
            poisson = engine.model_predictions["poisson"]
            # no meetings means no vote; reported as a draw
            result = {"home": "home_win", "away": "away_win"}.get(engine.predicted_winner, "draw")
            prediction = MatchPrediction(
                match=fixture,
                predicted_result=result,
                confidence_level=engine.confidence,
                predicted_score=(poisson["home_goals"], poisson["away_goals"]),
                patterns=engine.patterns,
                htft_analysis=htft,
                head_to_head=head_to_head,
            )
        else:
            score = predict_match_outcome(home_team, away_team, self.matches)
            prediction = MatchPrediction(
                match=fixture,
                predicted_result=_result_from_score(score.home_score, score.away_score),
                confidence_level=score.confidence / 100,
                predicted_score=(score.home_score, score.away_score),
                patterns=calculate_value_bets(home_team, away_team, self.matches),
                htft_analysis=htft,
                head_to_head=head_to_head,
            )

        logger.debug("Prediction generated", home_team=home_team, away_team=away_team,
                     advanced=self.advanced, result=prediction.predicted_result)
        return prediction

    def predict_batch(self, fixtures: Sequence[Tuple[str, str]]) -> List[MatchPrediction]:
        """
        Predict several fixtures

        Args:
            fixtures: (home team, away team) pairs

        Returns:
            List of predictions
        """
        return [self.predict(home, away) for home, away in fixtures]
