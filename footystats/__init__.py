"""
footystats - football match statistics, predictions and value-bet tracking
"""

__version__ = "0.1.0"
__author__ = "Andy Cheng"

from footystats.engine import run_prediction
from footystats.exceptions import FootyStatsError, IngestionError
from footystats.ingestion import load_matches, parse_matches_csv
from footystats.league import calculate_league_statistics
from footystats.models import Match, MatchPrediction, PredictionPattern, StandingsEntry
from footystats.predictor import MatchPredictor, get_head_to_head_stats, predict_match_outcome
from footystats.standings import calculate_standings
from footystats.value_bets import ValueBetTracker, calculate_value_bets

__all__ = [
    "FootyStatsError",
    "IngestionError",
    "Match",
    "MatchPrediction",
    "MatchPredictor",
    "PredictionPattern",
    "StandingsEntry",
    "ValueBetTracker",
    "calculate_league_statistics",
    "calculate_standings",
    "calculate_value_bets",
    "get_head_to_head_stats",
    "load_matches",
    "parse_matches_csv",
    "predict_match_outcome",
    "run_prediction",
]
