"""
Loading match lists from CSV files
"""
import datetime
import re
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

import pandas as pd

from footystats.exceptions import IngestionError
from footystats.logging_setup import get_logger
from footystats.models import Match

logger = get_logger(__name__)

REQUIRED_COLUMNS = ["date", "home_team", "away_team", "home_score", "away_score"]
OPTIONAL_COLUMNS = ["ht_home_score", "ht_away_score", "venue"]
DEFAULT_ROUND_SIZE = 8

_YMD = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DMY = re.compile(r"^(\d{2})[/-](\d{2})[/-](\d{4})$")
_TIME_ONLY = re.compile(r"^\d{2}:\d{2}$")
_TRAILING_TIME = re.compile(r"(\d{2}:\d{2})$")
_LEADING_INT = re.compile(r"^\s*(\d+)")
_QUOTED = re.compile(r'^"(.*)"$')

Source = Union[str, Path, IO]


def _unquote(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return _QUOTED.sub(r"\1", str(value).strip()).strip()


def parse_csv_date(value: str, today: Optional[datetime.date] = None) -> datetime.datetime:
    """
    Parse a date in one of the supported formats

    Supports YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY and a bare HH:MM (taken as
    ``today`` at that time); anything else goes through pandas' generic parser.

    Args:
        value: Date text
        today: Date used for bare times (default: today)

    Returns:
        Parsed datetime

    Raises:
        IngestionError: If the value cannot be read as a date
    """
    text = _unquote(value)
    try:
        match = _YMD.match(text)
        if match:
            year, month, day = (int(part) for part in match.groups())
            return datetime.datetime(year, month, day)
        match = _DMY.match(text)
        if match:
            day, month, year = (int(part) for part in match.groups())
            return datetime.datetime(year, month, day)
    except ValueError as e:
        raise IngestionError(f"Invalid date format: {text}") from e

    if _TIME_ONLY.match(text):
        hours, minutes = (int(part) for part in text.split(":"))
        base = today or datetime.date.today()
        try:
            return datetime.datetime(base.year, base.month, base.day, hours, minutes)
        except ValueError as e:
            raise IngestionError(f"Invalid date format: {text}") from e

    if not text:
        raise IngestionError("Invalid date format: empty value")
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError) as e:
        raise IngestionError(f"Invalid date format: {text}") from e
    if pd.isna(parsed):
        raise IngestionError(f"Invalid date format: {text}")
    return parsed.to_pydatetime()


def _extract_time(date_value: str) -> Optional[str]:
    match = _TRAILING_TIME.search(date_value)
    return match.group(1) if match else None


def _extract_score(value) -> int:
    """Leading digits of a cell, 0 when there are none"""
    match = _LEADING_INT.match(_unquote(value))
    return int(match.group(1)) if match else 0


def _read_frame(source: Source) -> pd.DataFrame:
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise IngestionError("No data found in CSV file") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestionError("CSV parsing errors detected. Please check format.") from e
    df.columns = [_unquote(column) for column in df.columns]
    return df


def parse_matches_csv(source: Source, today: Optional[datetime.date] = None,
                      round_size: int = DEFAULT_ROUND_SIZE) -> List[Match]:
    """
    Parse a match CSV into Match objects

    Rounds are numbered from the sorted distinct kickoff times (HH:MM) found in
    the date column. Rows without a kickoff time fall back to blocks of
    ``round_size`` rows. Rows holding only a time get a synthetic date, one week
    per round from ``today``.

    Args:
        source: File path or open file object
        today: Reference date for bare times (default: today)
        round_size: Rows per round for the positional fallback

    Returns:
        List of matches in file order

    Raises:
        IngestionError: If columns are missing, a date is unreadable or no rows parse
    """
    df = _read_frame(source)
    if df.empty:
        raise IngestionError("No data found in CSV file")

    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise IngestionError(
            f"Missing required columns: {', '.join(missing)}. Please check the CSV format.",
            missing_columns=missing,
        )

    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = ""
    df = df[REQUIRED_COLUMNS + OPTIONAL_COLUMNS].apply(lambda column: column.map(_unquote))

    usable = (df["date"] != "") & (df["home_team"] != "") & (df["away_team"] != "")
    skipped = int((~usable).sum())
    if skipped:
        logger.warning("Skipping incomplete rows", skipped=skipped)
    df = df[usable].reset_index(drop=True)
    if df.empty:
        raise IngestionError("No valid matches found in the CSV file. Please check the format.")

    times = sorted({t for t in df["date"].map(_extract_time) if t})
    time_to_round: Dict[str, int] = {t: index for index, t in enumerate(times, start=1)}
    base = today or datetime.date.today()

    matches = []
    for index, row in df.iterrows():
        date_value = row["date"]
        time_part = _extract_time(date_value)
        round_number = time_to_round.get(time_part) if time_part else None
        if round_number is None:
            round_number = index // round_size + 1

        if _TIME_ONLY.match(date_value):
            synthetic = base + datetime.timedelta(weeks=round_number - 1)
            date_value = f"{synthetic.isoformat()} {date_value}"
        else:
            parse_csv_date(date_value, today=base)

        matches.append(Match(
            date=date_value,
            home_team=row["home_team"],
            away_team=row["away_team"],
            home_score=_extract_score(row["home_score"]),
            away_score=_extract_score(row["away_score"]),
            ht_home_score=_extract_score(row["ht_home_score"]),
            ht_away_score=_extract_score(row["ht_away_score"]),
            round=f"Round {round_number}",
            venue=row["venue"] or None,
        ))

    logger.debug("Parsed match rows", rows=len(matches), rounds=len(times) or None)
    return matches


def load_matches(path: Union[str, Path], **kwargs) -> List[Match]:
    """
    Load matches from a CSV file on disk

    Raises:
        IngestionError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise IngestionError(f"File not found: {path}")
    matches = parse_matches_csv(path, **kwargs)
    logger.info("Loaded matches", file=path.name, matches=len(matches))
    return matches
