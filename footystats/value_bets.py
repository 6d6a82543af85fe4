"""
Frequency-based betting patterns and the value-bet tracker
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from footystats.logging_setup import get_logger
from footystats.models import Match, PredictionPattern, ValueBet
from footystats.utils import is_ht_ft_reversal, round_half_up

logger = get_logger(__name__)

# Static payout multipliers per pattern type
ODDS_VALUES = {
    "both_teams_score": 1.8,
    "draw": 3.4,
    "ht_ft_reversal": 4.5,
    "specific_score": 6.5,
}

# (threshold %, confidence above, confidence at or below)
CONFIDENCE_BUCKETS = {
    "both_teams_score": (60, 0.7, 0.5),
    "draw": (30, 0.6, 0.4),
    "ht_ft_reversal": (20, 0.5, 0.3),
    "specific_score": (15, 0.4, 0.2),
}


@dataclass(frozen=True)
class PatternFrequencies:
    """Share of matches (in percent) showing each pattern"""

    both_teams_scored_rate: float
    draw_rate: float
    htft_reversal_rate: float
    one_nil_home_win_rate: float
    two_one_home_win_rate: float
    one_all_draw_rate: float
    scoreless_draw_rate: float


@dataclass(frozen=True)
class BetSummary:
    """Running totals over recorded bets"""

    total_stake: float
    total_return: float
    won_bets: int
    total_bets: int
    roi: float


def default_betting_patterns() -> List[PredictionPattern]:
    """Patterns used when there is no usable match history"""
    return [
        PredictionPattern(
            type="both_teams_score",
            confidence=0.5,
            description="Based on league averages, both teams have a moderate chance of scoring",
            historical_success=55,
            odds_value=ODDS_VALUES["both_teams_score"],
        ),
        PredictionPattern(
            type="draw",
            confidence=0.3,
            description="Average draw rate in this league",
            historical_success=25,
            odds_value=ODDS_VALUES["draw"],
        ),
        PredictionPattern(
            type="ht_ft_reversal",
            confidence=0.2,
            description="Result reversals between halftime and fulltime occur occasionally",
            historical_success=15,
            odds_value=ODDS_VALUES["ht_ft_reversal"],
        ),
        PredictionPattern(
            type="specific_score",
            confidence=0.15,
            description="Common scorelines include 1-1",
            historical_success=10,
            odds_value=ODDS_VALUES["specific_score"],
        ),
    ]


def calculate_pattern_frequencies(matches: List[Match]) -> PatternFrequencies:
    """
    Count how often each pattern occurs

    Args:
        matches: Non-empty list of completed matches

    Returns:
        PatternFrequencies with percentages of ``len(matches)``
    """
    total = len(matches)

    def rate(predicate) -> float:
        return sum(1 for m in matches if predicate(m)) / total * 100

    return PatternFrequencies(
        both_teams_scored_rate=rate(lambda m: m.home_goals > 0 and m.away_goals > 0),
        draw_rate=rate(lambda m: m.home_goals == m.away_goals),
        htft_reversal_rate=rate(is_ht_ft_reversal),
        one_nil_home_win_rate=rate(lambda m: (m.home_goals, m.away_goals) == (1, 0)),
        two_one_home_win_rate=rate(lambda m: (m.home_goals, m.away_goals) == (2, 1)),
        one_all_draw_rate=rate(lambda m: (m.home_goals, m.away_goals) == (1, 1)),
        scoreless_draw_rate=rate(lambda m: (m.home_goals, m.away_goals) == (0, 0)),
    )


def _bucket(pattern_type: str, rate: float) -> float:
    threshold, high, low = CONFIDENCE_BUCKETS[pattern_type]
    return high if rate > threshold else low


def calculate_value_bets(home_team: str, away_team: str,
                         matches: Iterable[Match]) -> List[PredictionPattern]:
    """
    Build the four standard betting patterns from league history

    The rates come from every completed match with a half-time score, not
    only the meetings of the two teams.

    Args:
        home_team: Home team of the fixture being analysed
        away_team: Away team of the fixture being analysed
        matches: Match history

    Returns:
        Four patterns: both teams score, draw, HT/FT reversal and a 1-1 score
    """
    completed = [m for m in (matches or []) if m.is_completed and m.has_half_time]
    if not completed:
        logger.debug("No completed matches, using default patterns",
                     home_team=home_team, away_team=away_team)
        return default_betting_patterns()

    freq = calculate_pattern_frequencies(completed)
    btts = freq.both_teams_scored_rate
    draw = freq.draw_rate
    reversal = freq.htft_reversal_rate
    one_all = freq.one_all_draw_rate

    return [
        PredictionPattern(
            type="both_teams_score",
            confidence=_bucket("both_teams_score", btts),
            description=f"Both teams have scored in {btts:.0f}% of matches",
            historical_success=round_half_up(btts),
            odds_value=ODDS_VALUES["both_teams_score"],
        ),
        PredictionPattern(
            type="draw",
            confidence=_bucket("draw", draw),
            description=f"Matches ended in a draw {draw:.0f}% of the time",
            historical_success=round_half_up(draw),
            odds_value=ODDS_VALUES["draw"],
        ),
        PredictionPattern(
            type="ht_ft_reversal",
            confidence=_bucket("ht_ft_reversal", reversal),
            description=f"Result at halftime was different from full time in {reversal:.0f}% of matches",
            historical_success=round_half_up(reversal),
            odds_value=ODDS_VALUES["ht_ft_reversal"],
        ),
        PredictionPattern(
            type="specific_score",
            confidence=_bucket("specific_score", one_all),
            description=f"Score of 1-1 occurred in {one_all:.0f}% of matches",
            historical_success=round_half_up(one_all),
            odds_value=ODDS_VALUES["specific_score"],
        ),
    ]


def calculate_expected_value(pattern: PredictionPattern, odds: float) -> float:
    """
    Expected profit per unit stake, using the pattern's hit rate as the probability

    Args:
        pattern: Pattern being backed
        odds: Decimal bookmaker odds

    Returns:
        p * (odds - 1) - (1 - p)
    """
    probability = pattern.historical_success / 100
    return probability * (odds - 1) - (1 - probability)


def calculate_value_rating(expected_value: float) -> int:
    """1-5 rating used when recording a bet (differs from the V-sport scale)"""
    if expected_value <= 0:
        return 1
    if expected_value < 0.1:
        return 2
    if expected_value < 0.2:
        return 3
    if expected_value < 0.4:
        return 4
    return 5


class ValueBetTracker:
    """
    Records value bets and their settlement for the current session
    """

    def __init__(self):
        self._bets: List[ValueBet] = []

    @property
    def bets(self) -> List[ValueBet]:
        return list(self._bets)

    def record_bet(self, match: Match, pattern: PredictionPattern,
                   bookmaker_odds: float, stake: float) -> ValueBet:
        """
        Record a new bet on a pattern

        Args:
            match: Fixture the bet is placed on
            pattern: Pattern being backed
            bookmaker_odds: Decimal odds taken
            stake: Amount staked

        Returns:
            The recorded ValueBet

        Raises:
            ValueError: If stake or odds are invalid
        """
        expected_value = calculate_expected_value(pattern, bookmaker_odds)
        value_rating = calculate_value_rating(expected_value)
        bet = ValueBet(
            match_id=match.key,
            pattern=pattern,
            stake=float(stake),
            bookmaker_odds=float(bookmaker_odds),
            potential_return=float(stake) * float(bookmaker_odds),
            expected_value=expected_value,
            value_rating=value_rating,
            recommended_stake=round_half_up(value_rating * 10),
        )
        self._bets.append(bet)
        logger.info("Value bet recorded", match_id=bet.match_id,
                    pattern=pattern.type, expected_value=round(expected_value, 4))
        return bet

    def add(self, bet: ValueBet) -> None:
        self._bets.append(bet)

    def find(self, match_id: str, pattern_type: str) -> Optional[ValueBet]:
        for bet in self._bets:
            if bet.match_id == match_id and bet.pattern.type == pattern_type:
                return bet
        return None

    def replace(self, updated: ValueBet) -> bool:
        """Swap in an updated copy of a bet; returns False when no bet matches"""
        for index, bet in enumerate(self._bets):
            if bet.match_id == updated.match_id and bet.pattern.type == updated.pattern.type:
                self._bets[index] = updated
                return True
        return False

    def settle_bet(self, match_id: str, pattern_type: str, won: bool) -> ValueBet:
        """
        Mark a bet as won or lost

        Raises:
            KeyError: If no bet was recorded for the match and pattern
        """
        bet = self.find(match_id, pattern_type)
        if bet is None:
            raise KeyError(f"No bet recorded for {match_id} ({pattern_type})")
        bet.is_won = won
        bet.actual_return = bet.potential_return if won else 0.0
        logger.info("Value bet settled", match_id=match_id,
                    pattern=pattern_type, won=won)
        return bet

    def summary(self) -> BetSummary:
        total_stake = sum(b.stake for b in self._bets)
        total_return = sum(b.actual_return or 0.0 for b in self._bets)
        roi = (total_return - total_stake) / total_stake * 100 if total_stake > 0 else 0.0
        return BetSummary(
            total_stake=total_stake,
            total_return=total_return,
            won_bets=sum(1 for b in self._bets if b.is_won),
            total_bets=len(self._bets),
            roi=roi,
        )

    def __len__(self):
        return len(self._bets)
