"""
Session state: saved predictions, value bets and prediction history
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from footystats.logging_setup import get_logger
from footystats.models import Match, MatchPrediction, PredictionPattern, ValueBet
from footystats.utils import normalize_team
from footystats.value_bets import ValueBetTracker

logger = get_logger(__name__)

HIGH_CONFIDENCE = 0.7


@dataclass
class PatternUsage:
    count: int = 0
    total_confidence: float = 0.0

    @property
    def avg_confidence(self) -> float:
        return self.total_confidence / self.count if self.count else 0.0


@dataclass
class HistorySummary:
    total_predictions: int = 0
    evaluated_predictions: int = 0
    correct_predictions: int = 0
    success_rate: float = 0.0
    high_confidence: int = 0
    patterns: Dict[str, PatternUsage] = field(default_factory=dict)


def _fixture_key(home_team: str, away_team: str):
    return normalize_team(home_team), normalize_team(away_team)


def _actual_result(home_score: int, away_score: int) -> str:
    if home_score > away_score:
        return "home_win"
    if home_score < away_score:
        return "away_win"
    return "draw"


class PredictionSession:
    """
    Holds predictions and bets for one session; nothing is persisted
    """

    def __init__(self):
        self.predictions: List[MatchPrediction] = []
        self.tracker = ValueBetTracker()
        self._outcomes: Dict[tuple, bool] = {}

    @property
    def value_bets(self) -> List[ValueBet]:
        return self.tracker.bets

    @property
    def active_prediction(self) -> Optional[MatchPrediction]:
        """Most recently saved prediction"""
        return self.predictions[-1] if self.predictions else None

    def _find(self, home_team: str, away_team: str) -> Optional[int]:
        key = _fixture_key(home_team, away_team)
        for index, prediction in enumerate(self.predictions):
            if _fixture_key(prediction.match.home_team, prediction.match.away_team) == key:
                return index
        return None

    def save_prediction(self, prediction: MatchPrediction) -> None:
        """Save a prediction, replacing any earlier one for the same fixture"""
        index = self._find(prediction.match.home_team, prediction.match.away_team)
        if index is None:
            self.predictions.append(prediction)
            logger.info("Prediction saved", home_team=prediction.match.home_team,
                        away_team=prediction.match.away_team)
        else:
            self.predictions[index] = prediction
            self._outcomes.pop(_fixture_key(prediction.match.home_team, prediction.match.away_team), None)

    def record_value_bet(self, match: Match, pattern: PredictionPattern,
                         bookmaker_odds: float, stake: float) -> ValueBet:
        """Price and record a bet, then attach it to the matching prediction"""
        bet = self.tracker.record_bet(match, pattern, bookmaker_odds, stake)
        self._attach(bet)
        return bet

    def save_value_bet(self, bet: ValueBet) -> None:
        """Record an already priced bet and attach it to the prediction for the same match"""
        self.tracker.add(bet)
        self._attach(bet)

    def _attach(self, bet: ValueBet) -> None:
        for prediction in self.predictions:
            if prediction.match.key == bet.match_id:
                prediction.value_bets.append(bet)

    def update_value_bet(self, bet: ValueBet) -> None:
        """Replace a recorded bet (same match and pattern) with an updated copy"""
        if not self.tracker.replace(bet):
            raise KeyError(f"No bet recorded for {bet.match_id} ({bet.pattern.type})")
        for prediction in self.predictions:
            prediction.value_bets = [
                bet if (b.match_id == bet.match_id and b.pattern.type == bet.pattern.type) else b
                for b in prediction.value_bets
            ]

    def record_result(self, home_team: str, away_team: str,
                      home_score: int, away_score: int) -> bool:
        """
        Mark the saved prediction for a fixture as right or wrong

        Returns:
            Whether the predicted result matched

        Raises:
            KeyError: If no prediction was saved for the fixture
        """
        index = self._find(home_team, away_team)
        if index is None:
            raise KeyError(f"No prediction saved for {home_team} vs {away_team}")
        correct = self.predictions[index].predicted_result == _actual_result(home_score, away_score)
        self._outcomes[_fixture_key(home_team, away_team)] = correct
        return correct

    def history_summary(self) -> HistorySummary:
        summary = HistorySummary(total_predictions=len(self.predictions))
        for prediction in self.predictions:
            if prediction.confidence_level > HIGH_CONFIDENCE:
                summary.high_confidence += 1
            for pattern in prediction.patterns:
                usage = summary.patterns.setdefault(pattern.type, PatternUsage())
                usage.count += 1
                usage.total_confidence += pattern.confidence

        outcomes = [
            self._outcomes[key]
            for key in (_fixture_key(p.match.home_team, p.match.away_team) for p in self.predictions)
            if key in self._outcomes
        ]
        summary.evaluated_predictions = len(outcomes)
        summary.correct_predictions = sum(outcomes)
        if outcomes:
            summary.success_rate = summary.correct_predictions / len(outcomes) * 100
        return summary
