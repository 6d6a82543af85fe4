"""
Unit tests for betting patterns and the value-bet tracker
"""
import unittest

from footystats.models import Match
from footystats.value_bets import (
    ValueBetTracker,
    calculate_expected_value,
    calculate_pattern_frequencies,
    calculate_value_bets,
    calculate_value_rating,
    default_betting_patterns,
)


def league():
    return [
        Match("2024-01-01", "A", "B", 1, 1, 0, 1),
        Match("2024-01-02", "C", "D", 2, 1, 0, 1),
        Match("2024-01-03", "E", "F", 0, 0, 0, 0),
        Match("2024-01-04", "G", "H", 1, 0, 1, 0),
    ]


class TestValueBets(unittest.TestCase):
    """Test calculate_value_bets"""

    def test_defaults_without_history(self):
        """No usable history gives the four default patterns"""
        patterns = calculate_value_bets("A", "B", [])
        self.assertEqual(
            [p.type for p in patterns],
            ["both_teams_score", "draw", "ht_ft_reversal", "specific_score"],
        )
        self.assertEqual([p.odds_value for p in patterns], [1.8, 3.4, 4.5, 6.5])
        self.assertEqual([p.historical_success for p in patterns], [55, 25, 15, 10])
        self.assertEqual([p.confidence for p in patterns], [0.5, 0.3, 0.2, 0.15])

    def test_defaults_for_unplayed_matches(self):
        """Matches without results or half-time scores are not sampled"""
        matches = [Match("2024-01-01", "A", "B"), Match("2024-01-02", "A", "B", 1, 0)]
        self.assertEqual(calculate_value_bets("A", "B", matches), default_betting_patterns())

    def test_patterns_from_history(self):
        """Test rates and confidence buckets"""
        btts, draw, reversal, one_all = calculate_value_bets("A", "B", league())

        self.assertEqual(btts.historical_success, 50)
        self.assertEqual(btts.confidence, 0.5)
        self.assertEqual(btts.description, "Both teams have scored in 50% of matches")

        self.assertEqual(draw.historical_success, 50)
        self.assertEqual(draw.confidence, 0.6)

        self.assertEqual(reversal.historical_success, 25)
        self.assertEqual(reversal.confidence, 0.5)

        self.assertEqual(one_all.historical_success, 25)
        self.assertEqual(one_all.confidence, 0.4)
        self.assertEqual(one_all.odds_value, 6.5)

    def test_pattern_frequencies(self):
        """Test scoreline frequencies"""
        freq = calculate_pattern_frequencies(league())
        self.assertEqual(freq.one_nil_home_win_rate, 25.0)
        self.assertEqual(freq.two_one_home_win_rate, 25.0)
        self.assertEqual(freq.scoreless_draw_rate, 25.0)
        self.assertEqual(freq.htft_reversal_rate, 25.0)

    def test_level_half_time_is_not_reversal(self):
        """A level score at half time never counts as a reversal"""
        freq = calculate_pattern_frequencies([Match("2024-01-01", "A", "B", 2, 1, 1, 1)])
        self.assertEqual(freq.htft_reversal_rate, 0.0)


class TestValueRating(unittest.TestCase):
    """Test expected value and rating"""

    def test_expected_value(self):
        """EV uses the pattern's hit rate as probability"""
        pattern = calculate_value_bets("A", "B", league())[0]
        self.assertAlmostEqual(calculate_expected_value(pattern, 3.0), 0.5)
        self.assertAlmostEqual(calculate_expected_value(pattern, 2.0), 0.0)

    def test_rating_scale(self):
        """Ratings run from 1 to 5"""
        self.assertEqual(calculate_value_rating(-0.2), 1)
        self.assertEqual(calculate_value_rating(0.0), 1)
        self.assertEqual(calculate_value_rating(0.05), 2)
        self.assertEqual(calculate_value_rating(0.15), 3)
        self.assertEqual(calculate_value_rating(0.3), 4)
        self.assertEqual(calculate_value_rating(0.4), 5)


class TestValueBetTracker(unittest.TestCase):
    """Test ValueBetTracker"""

    def setUp(self):
        self.tracker = ValueBetTracker()
        self.match = Match("2024-01-01", "A", "B", id="m-1")
        self.btts, self.draw = default_betting_patterns()[:2]

    def test_record_bet(self):
        """Test pricing a recorded bet"""
        bet = self.tracker.record_bet(self.match, self.btts, bookmaker_odds=3.0, stake=10)
        self.assertEqual(bet.match_id, "m-1")
        self.assertEqual(bet.potential_return, 30.0)
        self.assertAlmostEqual(bet.expected_value, 0.65)
        self.assertEqual(bet.value_rating, 5)
        self.assertEqual(bet.recommended_stake, 50)
        self.assertFalse(bet.is_settled)
        self.assertEqual(len(self.tracker), 1)

    def test_invalid_bet(self):
        """Bad stakes and odds are rejected and nothing is recorded"""
        with self.assertRaises(ValueError):
            self.tracker.record_bet(self.match, self.btts, bookmaker_odds=2.0, stake=0)

        with self.assertRaises(ValueError):
            self.tracker.record_bet(self.match, self.btts, bookmaker_odds=1.0, stake=10)

        self.assertEqual(len(self.tracker), 0)

    def test_settle_and_summary(self):
        """Test settlement and the running summary"""
        self.tracker.record_bet(self.match, self.btts, bookmaker_odds=3.0, stake=10)
        self.tracker.record_bet(self.match, self.draw, bookmaker_odds=3.4, stake=10)

        won = self.tracker.settle_bet("m-1", "both_teams_score", won=True)
        lost = self.tracker.settle_bet("m-1", "draw", won=False)
        self.assertEqual(won.actual_return, 30.0)
        self.assertEqual(lost.actual_return, 0.0)

        summary = self.tracker.summary()
        self.assertEqual(summary.total_stake, 20.0)
        self.assertEqual(summary.total_return, 30.0)
        self.assertEqual(summary.won_bets, 1)
        self.assertEqual(summary.total_bets, 2)
        self.assertAlmostEqual(summary.roi, 50.0)

    def test_settle_unknown_bet(self):
        """Settling a bet that was never recorded raises KeyError"""
        with self.assertRaises(KeyError):
            self.tracker.settle_bet("m-9", "draw", won=True)

    def test_empty_summary(self):
        """No bets gives a zero ROI"""
        summary = self.tracker.summary()
        self.assertEqual(summary.total_bets, 0)
        self.assertEqual(summary.roi, 0.0)


if __name__ == "__main__":
    unittest.main()
