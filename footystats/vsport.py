"""
Virtual-sport ("V-sport") value calculator and simulated live ticker
"""
import datetime
import random
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional

import numpy as np

from footystats.logging_setup import get_logger
from footystats.models import BettingValue, Match, PredictionPattern
from footystats.utils import (
    goals_for_and_against,
    head_to_head_matches,
    is_home,
    result_letter,
    round_half_up,
    same_team,
    team_matches,
)
from footystats.value_bets import ODDS_VALUES

logger = get_logger(__name__)

HOME_ADVANTAGE = 1.3
AWAY_FACTOR = 0.8
BTTS_GOALS_THRESHOLD = 0.8
MATCH_DURATION = datetime.timedelta(minutes=4)
FIXTURE_STATUSES = ("upcoming", "betting_open", "in_progress", "completed")


@dataclass(frozen=True)
class TeamProbabilities:
    home_win_prob: float
    draw_prob: float
    away_win_prob: float
    home_expected_goals: float
    away_expected_goals: float


@dataclass(frozen=True)
class VSportStats:
    total_matches: int = 0
    home_wins: int = 0
    draws: int = 0
    away_wins: int = 0
    average_goals: float = 0.0
    both_teams_scored_percentage: float = 0.0
    over_2_5_percentage: float = 0.0
    winning_at_half_won_percentage: float = 0.0


def _estimate_probabilities(home_team: str, away_team: str,
                            matches: List[Match]) -> TeamProbabilities:
    """Outcome estimate from meetings when there are any, otherwise from each side's own record"""
    meetings = head_to_head_matches(home_team, away_team, matches)
    if meetings:
        letters = [result_letter(*goals_for_and_against(m, home_team)) for m in meetings]
        total = len(meetings)
        return TeamProbabilities(
            home_win_prob=letters.count("W") / total,
            draw_prob=letters.count("D") / total,
            away_win_prob=letters.count("L") / total,
            home_expected_goals=float(np.mean([goals_for_and_against(m, home_team)[0] for m in meetings])),
            away_expected_goals=float(np.mean([goals_for_and_against(m, away_team)[0] for m in meetings])),
        )

    home_matches = team_matches(home_team, matches)
    away_matches = team_matches(away_team, matches)
    home_at_home = [m for m in home_matches if is_home(m, home_team)]
    away_on_road = [m for m in away_matches if same_team(m.away_team, away_team)]

    home_win_rate = sum(1 for m in home_at_home if m.home_goals > m.away_goals) / max(1, len(home_at_home))
    away_win_rate = sum(1 for m in away_on_road if m.away_goals > m.home_goals) / max(1, len(away_on_road))
    home_draw_rate = sum(1 for m in home_matches if m.home_goals == m.away_goals) / max(1, len(home_matches))
    away_draw_rate = sum(1 for m in away_matches if m.home_goals == m.away_goals) / max(1, len(away_matches))
    home_goals = sum(m.home_goals for m in home_at_home) / max(1, len(home_at_home))
    away_goals = sum(m.away_goals for m in away_on_road) / max(1, len(away_on_road))

    return TeamProbabilities(
        home_win_prob=(home_win_rate * HOME_ADVANTAGE + (1 - away_win_rate)) / 2,
        draw_prob=(home_draw_rate + away_draw_rate) / 2,
        away_win_prob=((1 - home_win_rate) + away_win_rate * AWAY_FACTOR) / 2,
        home_expected_goals=home_goals * HOME_ADVANTAGE,
        away_expected_goals=away_goals,
    )


def calculate_value_rating(expected_value: float) -> int:
    """0-5 rating of a V-sport pick (0 means no value)"""
    if expected_value <= 0:
        return 0
    if expected_value < 0.1:
        return 1
    if expected_value < 0.2:
        return 2
    if expected_value < 0.3:
        return 3
    if expected_value < 0.4:
        return 4
    return 5


def calculate_betting_value(home_odds: float, draw_odds: float, away_odds: float,
                            home_team: str, away_team: str,
                            matches: Iterable[Match]) -> BettingValue:
    """
    Pick the outcome with the highest expected value against the quoted odds

    Args:
        home_odds: Decimal odds for a home win
        draw_odds: Decimal odds for a draw
        away_odds: Decimal odds for an away win
        home_team: Home team name
        away_team: Away team name
        matches: Match history

    Returns:
        BettingValue; ``best_bet`` is None when no outcome has positive EV

    Raises:
        ValueError: If any odds are not positive
    """
    if min(home_odds, draw_odds, away_odds) <= 0:
        raise ValueError("Odds must be positive")
    matches = list(matches or [])
    if not matches:
        return BettingValue(best_bet=None, confidence=0.0, expected_value=0.0, value_rating=0)

    estimate = _estimate_probabilities(home_team, away_team, matches)
    total = estimate.home_win_prob + estimate.draw_prob + estimate.away_win_prob
    if total <= 0:
        return BettingValue(best_bet=None, confidence=0.0, expected_value=0.0, value_rating=0)
    model = {
        "home": estimate.home_win_prob / total,
        "draw": estimate.draw_prob / total,
        "away": estimate.away_win_prob / total,
    }
    odds = {"home": home_odds, "draw": draw_odds, "away": away_odds}
    implied = {outcome: 1 / price for outcome, price in odds.items()}
    evs = {outcome: odds[outcome] * model[outcome] - 1 for outcome in odds}

    best = "home"
    for outcome in ("draw", "away"):
        if evs[outcome] > evs[best]:
            best = outcome
    expected_value = evs[best]
    best_bet = best if expected_value > 0 else None

    logger.debug("Betting value calculated", home_team=home_team, away_team=away_team,
                 implied=implied, model=model, best_bet=best_bet)
    return BettingValue(
        best_bet=best_bet,
        confidence=model[best] if best_bet else 0.0,
        expected_value=expected_value,
        value_rating=calculate_value_rating(expected_value),
    )


def find_vsport_betting_patterns(home_team: str, away_team: str, matches: Iterable[Match],
                                 home_odds: float, draw_odds: float,
                                 away_odds: float) -> List[PredictionPattern]:
    """Value pick (when EV is positive) plus a both-teams-score pattern for strong attacks"""
    matches = list(matches or [])
    patterns: List[PredictionPattern] = []

    value = calculate_betting_value(home_odds, draw_odds, away_odds, home_team, away_team, matches)
    if value.best_bet and value.expected_value > 0:
        odds = {"home": home_odds, "draw": draw_odds, "away": away_odds}[value.best_bet]
        patterns.append(PredictionPattern(
            type="draw" if value.best_bet == "draw" else "specific_score",
            confidence=value.confidence,
            description=(f"Value bet detected on {value.best_bet} outcome with expected value "
                         f"{value.expected_value * 100:.2f}%"),
            historical_success=round_half_up(value.confidence * 100),
            odds_value=odds,
        ))

    if not matches:
        return patterns
    estimate = _estimate_probabilities(home_team, away_team, matches)
    strong_attacks = (estimate.home_expected_goals > BTTS_GOALS_THRESHOLD
                      and estimate.away_expected_goals > BTTS_GOALS_THRESHOLD)
    btts_prob = 0.75 if strong_attacks else 0.45
    if btts_prob > 0.6:
        patterns.append(PredictionPattern(
            type="both_teams_score",
            confidence=btts_prob,
            description=(f"Both teams have a good scoring record, {btts_prob * 100:.0f}% "
                         f"probability of both scoring"),
            historical_success=round_half_up(btts_prob * 100),
            odds_value=ODDS_VALUES["both_teams_score"],
        ))
    return patterns


def calculate_vsport_stats(matches: Iterable[Match]) -> VSportStats:
    """Summary numbers for a batch of completed virtual matches"""
    completed = [m for m in matches if m.is_completed]
    if not completed:
        return VSportStats()

    home = np.array([m.home_goals for m in completed])
    away = np.array([m.away_goals for m in completed])
    total = len(completed)

    with_ht = [m for m in completed if m.has_half_time]
    leaders = [m for m in with_ht if m.ht_home_goals != m.ht_away_goals]
    held_on = [
        m for m in leaders
        if (m.ht_home_goals > m.ht_away_goals) == (m.home_goals > m.away_goals)
        and m.home_goals != m.away_goals
    ]

    return VSportStats(
        total_matches=total,
        home_wins=int(np.sum(home > away)),
        draws=int(np.sum(home == away)),
        away_wins=int(np.sum(home < away)),
        average_goals=round(float(np.mean(home + away)), 2),
        both_teams_scored_percentage=round(float(np.mean((home > 0) & (away > 0))) * 100, 2),
        over_2_5_percentage=round(float(np.mean((home + away) > 2.5)) * 100, 2),
        winning_at_half_won_percentage=round(len(held_on) / len(leaders) * 100, 2) if leaders else 0.0,
    )


@dataclass(frozen=True)
class VSportFixture:
    """A virtual match on the ticker"""

    id: str
    home_team: str
    away_team: str
    kickoff: datetime.datetime
    status: str
    home_odds: float
    draw_odds: float
    away_odds: float
    round: int = 1
    home_score: Optional[int] = None
    away_score: Optional[int] = None

    def __post_init__(self):
        if self.status not in FIXTURE_STATUSES:
            raise ValueError(f"Unknown fixture status: {self.status}")

    def to_match(self) -> Match:
        return Match(
            date=self.kickoff.isoformat(timespec="minutes"),
            home_team=self.home_team,
            away_team=self.away_team,
            home_score=self.home_score,
            away_score=self.away_score,
            round=self.round,
            id=self.id,
        )


def update_match_statuses(fixtures: Iterable[VSportFixture], now: datetime.datetime,
                          rng: random.Random) -> List[VSportFixture]:
    """
    Move fixtures along their lifecycle

    Betting closes at kickoff; a match finishes four minutes later with a
    simulated score drawn from ``rng``.

    Returns:
        New fixture list; the input is left unchanged
    """
    updated = []
    for fixture in fixtures:
        if fixture.status == "betting_open" and fixture.kickoff <= now:
            fixture = replace(fixture, status="in_progress")
        elif fixture.status == "in_progress" and now - fixture.kickoff > MATCH_DURATION:
            fixture = replace(
                fixture,
                status="completed",
                home_score=rng.randrange(4),
                away_score=rng.randrange(3),
            )
        updated.append(fixture)
    return updated


def time_until(kickoff: datetime.datetime, now: datetime.datetime) -> str:
    """Countdown as m:ss, or "Started" once kickoff has passed"""
    diff = int((kickoff - now).total_seconds())
    if diff < 0:
        return "Started"
    minutes, seconds = divmod(diff, 60)
    return f"{minutes}:{seconds:02d}"


def default_fixtures(now: datetime.datetime) -> List[VSportFixture]:
    """Demo round in every lifecycle state"""
    minutes = datetime.timedelta(minutes=1)
    return [
        VSportFixture("vs-1", "Virtual Arsenal", "Virtual Chelsea", now + 3 * minutes,
                      "betting_open", 2.4, 3.1, 2.9),
        VSportFixture("vs-2", "Virtual Man City", "Virtual Liverpool", now + 7 * minutes,
                      "upcoming", 1.9, 3.5, 3.8),
        VSportFixture("vs-3", "Virtual Tottenham", "Virtual Man United", now - 2 * minutes,
                      "in_progress", 2.2, 3.3, 3.1, home_score=1, away_score=0),
        VSportFixture("vs-4", "Virtual Newcastle", "Virtual Aston Villa", now - 8 * minutes,
                      "completed", 2.0, 3.4, 3.7, home_score=2, away_score=1),
    ]


class VSportTicker:
    """
    Simulated live ticker with an injectable clock and random source
    """

    def __init__(self, fixtures: Optional[List[VSportFixture]] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime.datetime] = datetime.datetime.now):
        self.clock = clock
        self.rng = rng or random.Random()
        self.fixtures = list(fixtures) if fixtures is not None else default_fixtures(clock())

    def refresh(self) -> List[VSportFixture]:
        self.fixtures = update_match_statuses(self.fixtures, self.clock(), self.rng)
        logger.info("V-sport fixtures updated",
                    completed=sum(1 for f in self.fixtures if f.status == "completed"))
        return self.fixtures

    def by_status(self) -> Dict[str, List[VSportFixture]]:
        grouped: Dict[str, List[VSportFixture]] = {status: [] for status in FIXTURE_STATUSES}
        for fixture in self.fixtures:
            grouped[fixture.status].append(fixture)
        return grouped

    def completed_matches(self) -> List[Match]:
        return [f.to_match() for f in self.fixtures if f.status == "completed"]

    def value_for(self, fixture: VSportFixture, history: Iterable[Match]) -> BettingValue:
        return calculate_betting_value(fixture.home_odds, fixture.draw_odds, fixture.away_odds,
                                       fixture.home_team, fixture.away_team, history)
