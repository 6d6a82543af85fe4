"""
Unit tests for the league table and league statistics
"""
import unittest

from footystats.league import (
    calculate_league_statistics,
    get_most_clean_sheets_team,
    get_top_scoring_team,
)
from footystats.models import LeagueStatistics, Match
from footystats.standings import calculate_standings


def season():
    return [
        Match("2024-01-01", "A", "B", 2, 1),
        Match("2024-01-08", "B", "C", 1, 1),
        Match("2024-01-15", "C", "A", 0, 3),
        Match("2024-01-22", "A", "B", 0, 0),
    ]


class TestStandings(unittest.TestCase):
    """Test calculate_standings"""

    def test_empty_input(self):
        """No matches gives an empty table"""
        self.assertEqual(calculate_standings([]), [])

    def test_table_totals(self):
        """Test points, goals and form per team"""
        table = calculate_standings(season())
        self.assertEqual([e.team for e in table], ["A", "B", "C"])
        self.assertEqual([e.position for e in table], [1, 2, 3])

        a, b, c = table
        self.assertEqual((a.played, a.won, a.drawn, a.lost), (3, 2, 1, 0))
        self.assertEqual((a.goals_for, a.goals_against, a.goal_difference), (5, 1, 4))
        self.assertEqual(a.points, 7)
        self.assertEqual(a.form, ("W", "W", "D"))

        self.assertEqual((b.played, b.points, b.goals_for, b.goals_against), (3, 2, 2, 3))
        self.assertEqual(b.form, ("L", "D", "D"))
        self.assertEqual((c.played, c.points, c.goal_difference), (2, 1, -3))

    def test_points_sum(self):
        """Total points are 3 per decisive match and 2 per draw"""
        matches = season()
        decisive = sum(1 for m in matches if m.home_score != m.away_score)
        draws = len(matches) - decisive
        total = sum(e.points for e in calculate_standings(matches))
        self.assertEqual(total, 3 * decisive + 2 * draws)

    def test_tie_breaks(self):
        """Equal points are split by goal difference, goals scored, then name"""
        matches = [
            Match("2024-01-01", "P", "Q", 2, 0),
            Match("2024-01-01", "R", "S", 1, 0),
            Match("2024-01-08", "Beta", "Alpha", 1, 1),
        ]
        table = [e.team for e in calculate_standings(matches)]
        self.assertEqual(table, ["P", "R", "Alpha", "Beta", "S", "Q"])

    def test_goals_scored_tie_break(self):
        """Same points and goal difference: more goals scored ranks higher"""
        matches = [
            Match("2024-01-01", "Low", "X", 1, 0),
            Match("2024-01-01", "High", "Y", 3, 2),
        ]
        table = [e.team for e in calculate_standings(matches)]
        self.assertEqual(table[:2], ["High", "Low"])

    def test_form_is_recent_and_oldest_first(self):
        """Form keeps the last results in chronological order"""
        results = [(1, 0), (0, 1), (1, 1), (2, 0), (0, 3), (4, 0)]
        matches = [
            Match(f"2024-01-{day:02d}", "A", f"Opp{day}", hs, as_)
            for day, (hs, as_) in enumerate(results, start=1)
        ]
        a = calculate_standings(matches)[0]
        self.assertEqual(a.team, "A")
        self.assertEqual(a.form, ("L", "D", "W", "L", "W"))
        self.assertEqual(len(calculate_standings(matches, form_length=3)[0].form), 3)

    def test_scheduled_matches_ignored(self):
        """Unplayed matches list the team but add nothing"""
        matches = season() + [Match("2024-02-01", "D", "A")]
        table = calculate_standings(matches)
        d = [e for e in table if e.team == "D"][0]
        self.assertEqual((d.played, d.points, d.form), (0, 0, ()))
        self.assertEqual(table[-1].team, "D")
        self.assertEqual([e for e in table if e.team == "A"][0].played, 3)

    def test_team_names_case_insensitive(self):
        """Differently cased names are one team, shown with the first spelling"""
        matches = [
            Match("2024-01-01", "Arsenal", "Chelsea", 1, 0),
            Match("2024-01-08", "chelsea ", "ARSENAL", 0, 2),
        ]
        table = calculate_standings(matches)
        self.assertEqual(len(table), 2)
        self.assertEqual(table[0].team, "Arsenal")
        self.assertEqual(table[0].points, 6)

    def test_deterministic(self):
        """Same input gives the same table"""
        self.assertEqual(calculate_standings(season()), calculate_standings(season()))


class TestLeagueStatistics(unittest.TestCase):
    """Test calculate_league_statistics"""

    def test_empty_league(self):
        """Empty input gives zeros and placeholders"""
        stats = calculate_league_statistics([])
        self.assertEqual(stats, LeagueStatistics())
        self.assertEqual(stats.total_matches, 0)
        self.assertEqual(stats.top_scorer, "-")
        self.assertEqual(stats.most_clean_sheets, "-")

    def test_league_aggregates(self):
        """Test league-wide totals"""
        matches = season() + [Match("2024-02-01", "D", "A")]
        stats = calculate_league_statistics(matches)
        self.assertEqual(stats.total_matches, 5)
        self.assertEqual(stats.completed_matches, 4)
        self.assertEqual(stats.total_goals, 8)
        self.assertAlmostEqual(stats.average_goals_per_match, 2.0)
        self.assertEqual((stats.home_wins, stats.draws, stats.away_wins), (1, 2, 1))
        self.assertEqual(stats.home_wins + stats.draws + stats.away_wins, stats.completed_matches)
        self.assertEqual(stats.most_goals_scored_in_match, 3)
        self.assertEqual(stats.clean_sheets, 2)
        self.assertEqual(stats.top_scorer, "A")
        # D has not played, so it cannot have the best defence
        self.assertEqual(stats.most_clean_sheets, "A")

    def test_only_scheduled_matches(self):
        """A league with no results yet has zero goals"""
        stats = calculate_league_statistics([Match("2024-01-01", "A", "B")])
        self.assertEqual(stats.total_matches, 1)
        self.assertEqual(stats.completed_matches, 0)
        self.assertEqual(stats.average_goals_per_match, 0.0)
        self.assertEqual(stats.most_goals_scored_in_match, 0)

    def test_leaders_from_standings(self):
        """Leaders come from the table; empty table gives placeholders"""
        table = calculate_standings(season())
        self.assertEqual(get_top_scoring_team(table), "A")
        self.assertEqual(get_most_clean_sheets_team(table), "A")
        self.assertEqual(get_top_scoring_team([]), "-")
        self.assertEqual(get_most_clean_sheets_team([]), "-")


if __name__ == "__main__":
    unittest.main()
