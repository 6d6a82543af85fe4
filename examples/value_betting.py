"""
Example of finding patterns and tracking value bets over a session
"""
from pathlib import Path

from footystats import load_matches
from footystats.league import calculate_league_statistics
from footystats.predictor import MatchPredictor
from footystats.session import PredictionSession

DATA_FILE = Path(__file__).parent / "data" / "sample_matches.csv"


def main():
    """Run value betting example"""
    print("footystats - Value Betting Example\n")

    matches = load_matches(DATA_FILE)
    stats = calculate_league_statistics(matches)
    print(f"{stats.completed_matches} matches, {stats.average_goals_per_match:.2f} goals per match\n")

    session = PredictionSession()
    prediction = MatchPredictor(matches).predict("Arsenal", "Chelsea")
    session.save_prediction(prediction)

    # Back every pattern at a flat price to see which ones carry value
    for pattern in prediction.patterns:
        bet = session.record_value_bet(prediction.match, pattern, bookmaker_odds=3.0, stake=10)
        print(f"{pattern.type:<18} EV {bet.expected_value:+.2f}  rating {bet.value_rating}/5")

    session.tracker.settle_bet(prediction.match.key, "draw", won=False)
    session.tracker.settle_bet(prediction.match.key, "both_teams_score", won=True)

    summary = session.tracker.summary()
    print(f"\nStaked {summary.total_stake:.2f}, returned {summary.total_return:.2f} "
          f"(ROI {summary.roi:+.1f}%)")

    correct = session.record_result("Arsenal", "Chelsea", 2, 0)
    print(f"Prediction was {'correct' if correct else 'wrong'}")


if __name__ == "__main__":
    main()
