"""
Unit tests for the head-to-head prediction engine
"""
import unittest

from footystats.engine import (
    WinnerPrediction,
    calculate_average_goals,
    calculate_both_teams_to_score_prob,
    calculate_expected_goals,
    calculate_form_index,
    calculate_head_to_head_stats,
    calculate_win_probability,
    predict_winner,
    run_prediction,
)
from footystats.models import Match


class TestPredictWinner(unittest.TestCase):
    """Test predict_winner"""

    def test_home_dominance(self):
        """Three home wins out of three"""
        matches = [Match(f"2024-01-0{d}", "A", "B", 2, 0) for d in (1, 2, 3)]
        self.assertEqual(predict_winner("A", "B", matches), WinnerPrediction("home", 1.0))
        self.assertEqual(predict_winner("a", "b", matches), WinnerPrediction("home", 1.0))

    def test_away_dominance(self):
        """Wins by the second team are away wins, at either venue"""
        matches = [
            Match("2024-01-01", "A", "B", 0, 1),
            Match("2024-01-02", "B", "A", 2, 0),
        ]
        self.assertEqual(predict_winner("A", "B", matches), WinnerPrediction("away", 1.0))

    def test_split_record(self):
        """No outright majority falls through to a draw"""
        matches = [
            Match("2024-01-01", "A", "B", 1, 0),
            Match("2024-01-02", "A", "B", 0, 1),
        ]
        self.assertEqual(predict_winner("A", "B", matches), WinnerPrediction("draw", 0.0))

    def test_unknown(self):
        """No meetings or a missing name gives unknown"""
        matches = [Match("2024-01-01", "A", "C", 1, 0)]
        self.assertEqual(predict_winner("A", "B", matches), WinnerPrediction("unknown", 0.0))
        self.assertEqual(predict_winner("", "B", matches).winner, "unknown")


class TestEngineStatistics(unittest.TestCase):
    """Test the engine's statistics helpers"""

    def setUp(self):
        self.matches = [
            Match("2024-01-01", "A", "B", 2, 1),
            Match("2024-01-08", "C", "A", 1, 1),
            Match("2024-01-15", "A", "D", 0, 1),
        ]

    def test_both_teams_to_score(self):
        """Percentage of matches where both sides scored"""
        self.assertEqual(calculate_both_teams_to_score_prob(self.matches), 66.67)
        self.assertEqual(calculate_both_teams_to_score_prob([]), 0.0)

    def test_average_goals(self):
        """Test average goal figures"""
        averages = calculate_average_goals(self.matches[:2])
        self.assertEqual(averages["average_total_goals"], 2.5)
        self.assertEqual(averages["average_home_goals"], 1.5)
        self.assertEqual(averages["average_away_goals"], 1.0)
        self.assertEqual(calculate_average_goals([])["average_total_goals"], 0.0)

    def test_form_index(self):
        """Win, draw and loss give four points of nine"""
        self.assertEqual(calculate_form_index(self.matches, "A"), 44.44)
        self.assertEqual(calculate_form_index(self.matches, "A", recent_games=1), 100.0)
        self.assertEqual(calculate_form_index(self.matches, "Z"), 0.0)

    def test_head_to_head_counts(self):
        """Counts are by venue side"""
        stats = calculate_head_to_head_stats(self.matches)
        self.assertEqual((stats["home_wins"], stats["away_wins"], stats["draws"]), (1, 1, 1))
        self.assertEqual(stats["home_win_percentage"], 33.33)
        self.assertEqual(calculate_head_to_head_stats([])["draw_percentage"], 0.0)

    def test_expected_goals(self):
        """Average goals scored from the team's own side"""
        self.assertEqual(calculate_expected_goals("A", self.matches), 1.0)
        self.assertEqual(calculate_expected_goals("C", self.matches), 1.0)
        self.assertEqual(calculate_expected_goals("Z", self.matches), 0.0)

    def test_win_probability(self):
        """Winner keeps its confidence, the other outcomes share the rest"""
        self.assertEqual(calculate_win_probability(WinnerPrediction("unknown", 0.0), "home"), 0.33)
        prediction = WinnerPrediction("home", 0.6)
        self.assertEqual(calculate_win_probability(prediction, "home"), 0.6)
        self.assertEqual(calculate_win_probability(prediction, "draw"), 0.2)
        self.assertEqual(calculate_win_probability(prediction, "away"), 0.2)


class TestRunPrediction(unittest.TestCase):
    """Test run_prediction"""

    def test_no_history(self):
        """Empty history gives an unknown, evenly split prediction"""
        result = run_prediction("A", "B", [])
        self.assertEqual(result.predicted_winner, "unknown")
        self.assertEqual(result.model_predictions["random_forest"], "insufficient_data")
        self.assertEqual(result.model_predictions["poisson"], {"home_goals": 0, "away_goals": 0})
        self.assertEqual(
            result.model_predictions["elo"],
            {"home_win_prob": 0.33, "draw_prob": 0.33, "away_win_prob": 0.33},
        )
        self.assertEqual(result.patterns, [])

    def test_dominant_home_side(self):
        """Test a one-sided history"""
        matches = [Match(f"2024-01-0{d}", "A", "B", 3, 0) for d in (1, 2, 3)]
        result = run_prediction("A", "B", matches)
        self.assertEqual(result.predicted_winner, "home")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.home_expected_goals, 3.0)
        self.assertEqual(result.away_expected_goals, 0.0)
        self.assertEqual(result.model_predictions["random_forest"], "home_win")
        self.assertEqual(result.model_predictions["poisson"], {"home_goals": 3, "away_goals": 0})
        self.assertEqual(result.model_predictions["elo"]["home_win_prob"], 1.0)
        self.assertEqual(result.model_predictions["elo"]["draw_prob"], 0.0)
        self.assertEqual(result.patterns, [])

    def test_draw_and_btts_patterns(self):
        """Drawn meetings with goals at both ends raise both patterns"""
        matches = [Match(f"2024-01-0{d}", "A", "B", 2, 2) for d in (1, 2)]
        result = run_prediction("A", "B", matches)
        self.assertEqual(result.predicted_winner, "draw")
        self.assertEqual([p.type for p in result.patterns], ["both_teams_score", "draw"])
        self.assertEqual(result.patterns[0].confidence, 1.0)
        self.assertEqual(result.patterns[1].historical_success, 100)


if __name__ == "__main__":
    unittest.main()
