"""
Data models for the football statistics package
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

PATTERN_TYPES = ("both_teams_score", "draw", "ht_ft_reversal", "specific_score")
RESULT_TYPES = ("home_win", "draw", "away_win")
HTFT_TYPES = (
    "home_home", "home_draw", "home_away",
    "draw_home", "draw_draw", "draw_away",
    "away_home", "away_draw", "away_away",
)


def _check_score(name: str, value: Optional[int]) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} cannot be negative, got {value}")


@dataclass(frozen=True)
class Match:
    """A played or scheduled fixture. Missing scores count as 0 in aggregates."""

    date: str
    home_team: str
    away_team: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    ht_home_score: Optional[int] = None
    ht_away_score: Optional[int] = None
    round: Optional[Union[str, int]] = None
    venue: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        """Validate match data"""
        if not self.home_team or not self.home_team.strip():
            raise ValueError("home_team cannot be empty")
        if not self.away_team or not self.away_team.strip():
            raise ValueError("away_team cannot be empty")
        _check_score("home_score", self.home_score)
        _check_score("away_score", self.away_score)
        _check_score("ht_home_score", self.ht_home_score)
        _check_score("ht_away_score", self.ht_away_score)

    @property
    def is_completed(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def has_half_time(self) -> bool:
        return self.ht_home_score is not None and self.ht_away_score is not None

    @property
    def home_goals(self) -> int:
        return self.home_score or 0

    @property
    def away_goals(self) -> int:
        return self.away_score or 0

    @property
    def ht_home_goals(self) -> int:
        return self.ht_home_score or 0

    @property
    def ht_away_goals(self) -> int:
        return self.ht_away_score or 0

    @property
    def total_goals(self) -> int:
        return self.home_goals + self.away_goals

    @property
    def key(self) -> str:
        """Identifier used to tie value bets and predictions to this fixture"""
        if self.id:
            return self.id
        return f"{self.home_team}-{self.away_team}-{self.date}"

    @property
    def round_label(self) -> str:
        return "Unknown" if self.round is None else str(self.round)


@dataclass
class StandingsEntry:
    """One team's row in the league table"""

    position: int
    team: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
    form: Tuple[str, ...] = ()


@dataclass
class LeagueStatistics:
    """Whole-competition aggregates"""

    total_matches: int = 0
    completed_matches: int = 0
    total_goals: int = 0
    average_goals_per_match: float = 0.0
    home_wins: int = 0
    away_wins: int = 0
    draws: int = 0
    most_goals_scored_in_match: int = 0
    clean_sheets: int = 0
    top_scorer: str = "-"
    most_clean_sheets: str = "-"


@dataclass
class PredictionPattern:
    """A qualitative betting signal with its historical hit rate"""

    type: str
    confidence: float
    description: str
    historical_success: float
    odds_value: float

    def __post_init__(self):
        """Validate pattern data"""
        if self.type not in PATTERN_TYPES:
            raise ValueError(f"Unknown pattern type: {self.type}")
        if self.confidence < 0 or self.confidence > 1:
            raise ValueError("Confidence must be between 0 and 1")


@dataclass
class HalfTimeFullTime:
    """One of the nine half-time/full-time outcomes"""

    type: str
    label: str
    is_reversal: bool
    odds: float
    confidence: float


@dataclass
class HeadToHeadStat:
    """Mutual history of two teams, seen from ``home_team``'s side"""

    home_team: str
    away_team: str
    total_matches: int = 0
    home_wins: int = 0
    draws: int = 0
    away_wins: int = 0
    home_goals: int = 0
    away_goals: int = 0
    both_teams_scored: int = 0
    avg_total_goals: float = 0.0
    htft_reversals: int = 0


@dataclass(frozen=True)
class ScorePrediction:
    """Predicted scoreline with a 0-100 confidence"""

    home_score: int
    away_score: int
    confidence: int


@dataclass
class ValueBet:
    """A recorded bet on a pattern. Settlement fills in ``is_won`` and ``actual_return``."""

    match_id: str
    pattern: PredictionPattern
    stake: float
    bookmaker_odds: float
    potential_return: float
    expected_value: float
    value_rating: int
    recommended_stake: int
    is_won: Optional[bool] = None
    actual_return: Optional[float] = None

    def __post_init__(self):
        """Validate bet data"""
        if self.stake <= 0:
            raise ValueError("Stake must be positive")
        if self.bookmaker_odds <= 1:
            raise ValueError("Bookmaker odds must be greater than 1")

    @property
    def is_settled(self) -> bool:
        return self.is_won is not None


@dataclass
class MatchPrediction:
    """Bundled output of one prediction run"""

    match: Match
    predicted_result: str
    confidence_level: float
    predicted_score: Optional[Tuple[int, int]] = None
    patterns: List[PredictionPattern] = field(default_factory=list)
    htft_analysis: List[HalfTimeFullTime] = field(default_factory=list)
    head_to_head: Optional[HeadToHeadStat] = None
    value_bets: List[ValueBet] = field(default_factory=list)

    def __post_init__(self):
        """Validate prediction data"""
        if self.predicted_result not in RESULT_TYPES:
            raise ValueError(f"Unknown result type: {self.predicted_result}")
        if self.confidence_level < 0 or self.confidence_level > 1:
            raise ValueError("Confidence must be between 0 and 1")

    def __str__(self):
        """String representation of prediction"""
        score = ""
        if self.predicted_score is not None:
            score = f"  Score: {self.predicted_score[0]}-{self.predicted_score[1]}\n"
        lines = [
            f"Prediction for {self.match.home_team} vs {self.match.away_team}:\n",
            f"  Result: {self.predicted_result}\n",
            score,
            f"  Confidence: {self.confidence_level:.2%}",
        ]
        for pattern in self.patterns:
            lines.append(
                f"\n  - {pattern.type}: {pattern.historical_success:.0f}% "
                f"(odds {pattern.odds_value:.2f})"
            )
        return "".join(lines)


@dataclass
class AdvancedPrediction:
    """Output of the head-to-head driven prediction engine"""

    home_expected_goals: float
    away_expected_goals: float
    both_teams_to_score_prob: float
    predicted_winner: str
    confidence: float
    model_predictions: Dict[str, object]
    patterns: List[PredictionPattern] = field(default_factory=list)


@dataclass(frozen=True)
class BettingValue:
    """Best expected-value pick for a fixture priced with home/draw/away odds"""

    best_bet: Optional[str]
    confidence: float
    expected_value: float
    value_rating: int
