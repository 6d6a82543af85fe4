"""
Command-line interface for footystats
"""
import argparse
import random
import sys
from typing import List

from footystats.config import Settings
from footystats.exceptions import IngestionError
from footystats.ingestion import load_matches
from footystats.league import calculate_league_statistics
from footystats.logging_setup import setup_logging
from footystats.models import Match
from footystats.predictor import MatchPredictor
from footystats.standings import calculate_standings
from footystats.value_bets import calculate_value_bets
from footystats.vsport import VSportTicker, calculate_betting_value, time_until

RULE = "=" * 60


def create_sample_matches() -> List[Match]:
    """A short season used by the demo command"""
    rows = [
        ("2024-08-10 15:00", "Liverpool", "Arsenal", 2, 1, 1, 1),
        ("2024-08-10 17:30", "Chelsea", "Tottenham", 1, 1, 0, 1),
        ("2024-08-17 15:00", "Arsenal", "Chelsea", 3, 0, 2, 0),
        ("2024-08-17 17:30", "Tottenham", "Liverpool", 0, 2, 0, 0),
        ("2024-08-24 15:00", "Liverpool", "Chelsea", 1, 1, 1, 0),
        ("2024-08-24 17:30", "Arsenal", "Tottenham", 2, 2, 0, 1),
        ("2024-08-31 15:00", "Arsenal", "Liverpool", 1, 0, 0, 0),
        ("2024-08-31 17:30", "Tottenham", "Chelsea", 2, 1, 0, 1),
    ]
    return [
        Match(date, home, away, hs, as_, hths, htas)
        for date, home, away, hs, as_, hths, htas in rows
    ]


def _load(args) -> List[Match]:
    return load_matches(args.csv, round_size=args.settings.round_size)


def print_standings(matches: List[Match], form_length: int) -> None:
    print(f"{'Pos':>3}  {'Team':<24}{'P':>3}{'W':>3}{'D':>3}{'L':>3}{'GF':>4}{'GA':>4}{'GD':>5}{'Pts':>5}  Form")
    for entry in calculate_standings(matches, form_length=form_length):
        print(
            f"{entry.position:>3}  {entry.team:<24}{entry.played:>3}{entry.won:>3}{entry.drawn:>3}"
            f"{entry.lost:>3}{entry.goals_for:>4}{entry.goals_against:>4}"
            f"{entry.goal_difference:>+5}{entry.points:>5}  {''.join(entry.form)}"
        )


def standings_command(args):
    """Handle standings command"""
    print_standings(_load(args), args.settings.form_length)
    return 0


def overview_command(args):
    """Handle overview command"""
    stats = calculate_league_statistics(_load(args))
    print("\n" + RULE)
    print(f"Matches:            {stats.completed_matches}/{stats.total_matches} played")
    print(f"Goals:              {stats.total_goals} ({stats.average_goals_per_match:.2f} per match)")
    print(f"Home/Draw/Away:     {stats.home_wins}/{stats.draws}/{stats.away_wins}")
    print(f"Most goals (match): {stats.most_goals_scored_in_match}")
    print(f"Clean sheets:       {stats.clean_sheets}")
    print(f"Top scorer:         {stats.top_scorer}")
    print(f"Best defence:       {stats.most_clean_sheets}")
    print(RULE + "\n")
    return 0


def predict_command(args):
    """Handle predict command"""
    predictor = MatchPredictor(_load(args), advanced=args.advanced)
    prediction = predictor.predict(args.home_team, args.away_team)

    print("\n" + RULE)
    print(prediction)
    h2h = prediction.head_to_head
    if h2h is not None and h2h.total_matches:
        print(f"\n  Head to head: {h2h.home_wins}W {h2h.draws}D {h2h.away_wins}L "
              f"in {h2h.total_matches} ({h2h.avg_total_goals:.2f} goals/match)")
    print(RULE + "\n")
    return 0


def value_bets_command(args):
    """Handle value-bets command"""
    patterns = calculate_value_bets(args.home_team, args.away_team, _load(args))
    print("\n" + RULE)
    for pattern in patterns:
        print(f"{pattern.type:<18} {pattern.historical_success:>5.0f}%  "
              f"odds {pattern.odds_value:.2f}  confidence {pattern.confidence:.2f}")
        print(f"  {pattern.description}")
    print(RULE + "\n")
    return 0


def vsport_command(args):
    """Handle vsport command"""
    home_odds, draw_odds, away_odds = args.odds
    value = calculate_betting_value(home_odds, draw_odds, away_odds,
                                    args.home_team, args.away_team, _load(args))
    print("\n" + RULE)
    if value.best_bet is None:
        print("No value found at these odds")
    else:
        print(f"Best bet:       {value.best_bet}")
        print(f"Model prob.:    {value.confidence:.2%}")
        print(f"Expected value: {value.expected_value:+.2%}")
        print(f"Value rating:   {value.value_rating}/5")
    print(RULE + "\n")
    return 0


def demo_command(args):
    """Handle demo command"""
    print("\n" + RULE)
    print("footystats - Demo Mode")
    print(RULE + "\n")

    matches = create_sample_matches()
    print_standings(matches, args.settings.form_length)
    print()

    predictor = MatchPredictor(matches)
    for prediction in predictor.predict_batch([("Liverpool", "Arsenal"), ("Chelsea", "Tottenham")]):
        print(prediction)
        print("-" * 60 + "\n")

    ticker = VSportTicker(rng=random.Random(args.settings.random_seed))
    now = ticker.clock()
    for fixture in ticker.refresh():
        score = ""
        if fixture.home_score is not None:
            score = f" {fixture.home_score}-{fixture.away_score}"
        print(f"[{fixture.status:<12}] {fixture.home_team} vs {fixture.away_team}{score}"
              f" ({time_until(fixture.kickoff, now)})")
    print()
    return 0


def _add_fixture_args(parser):
    parser.add_argument("csv", help="Match CSV file")
    parser.add_argument("--home-team", required=True, help="Home team name")
    parser.add_argument("--away-team", required=True, help="Away team name")


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Football match statistics and predictions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run demo with a built-in mini season
  footystats demo

  # League table from a CSV file
  footystats standings matches.csv

  # Predict a fixture
  footystats predict matches.csv --home-team "Liverpool" --away-team "Arsenal"
        """
    )
    parser.add_argument("--log-level", help="Override FOOTYSTATS_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    demo_parser = subparsers.add_parser("demo", help="Run demo with sample data")
    demo_parser.set_defaults(func=demo_command)

    standings_parser = subparsers.add_parser("standings", help="Print the league table")
    standings_parser.add_argument("csv", help="Match CSV file")
    standings_parser.set_defaults(func=standings_command)

    overview_parser = subparsers.add_parser("overview", help="Print league statistics")
    overview_parser.add_argument("csv", help="Match CSV file")
    overview_parser.set_defaults(func=overview_command)

    predict_parser = subparsers.add_parser("predict", help="Predict match outcome")
    _add_fixture_args(predict_parser)
    predict_parser.add_argument("--advanced", action="store_true",
                                help="Use the head-to-head prediction engine")
    predict_parser.set_defaults(func=predict_command)

    value_parser = subparsers.add_parser("value-bets", help="Show betting patterns")
    _add_fixture_args(value_parser)
    value_parser.set_defaults(func=value_bets_command)

    vsport_parser = subparsers.add_parser("vsport", help="Find value against quoted odds")
    _add_fixture_args(vsport_parser)
    vsport_parser.add_argument("--odds", nargs=3, type=float, required=True,
                               metavar=("HOME", "DRAW", "AWAY"), help="Decimal odds")
    vsport_parser.set_defaults(func=vsport_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = Settings.from_env()
    if args.log_level:
        settings.log_level = args.log_level
    settings.validate()
    setup_logging(settings.log_level, settings.log_file, settings.enable_colors)
    args.settings = settings

    try:
        return args.func(args)
    except IngestionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
