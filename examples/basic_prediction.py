"""
Basic example of predicting a fixture from a match file
"""
from pathlib import Path

from footystats import MatchPredictor, load_matches

DATA_FILE = Path(__file__).parent / "data" / "sample_matches.csv"


def main():
    """Run basic prediction example"""
    print("footystats - Basic Example\n")

    matches = load_matches(DATA_FILE)
    print(f"Loaded {len(matches)} matches\n")

    predictor = MatchPredictor(matches)

    print("Making prediction...\n")
    prediction = predictor.predict("Liverpool", "Arsenal")

    print(prediction)
    print("\n" + "="*60)
    print("Analysis:")
    print(f"  - Predicted result: {prediction.predicted_result}")
    print(f"  - Confidence level: {prediction.confidence_level:.1%}")

    if prediction.confidence_level > 0.6:
        print("  - This is a HIGH confidence prediction")
    elif prediction.confidence_level > 0.4:
        print("  - This is a MEDIUM confidence prediction")
    else:
        print("  - This is a LOW confidence prediction")

    reversals = [e for e in prediction.htft_analysis if e.is_reversal]
    for entry in reversals:
        print(f"  - HT/FT {entry.label}: {entry.confidence:.0%} (fair odds {entry.odds:.2f})")

    print("="*60)


if __name__ == "__main__":
    main()
