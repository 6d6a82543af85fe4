"""
Exception types raised by footystats
"""
from typing import Optional, Sequence


class FootyStatsError(Exception):
    """Base class for footystats errors"""


class IngestionError(FootyStatsError, ValueError):
    """Raised when a match file cannot be turned into a match list"""

    def __init__(self, message: str, missing_columns: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.missing_columns = list(missing_columns or [])
