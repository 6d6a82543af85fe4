"""
Runtime settings, read from the environment (and an optional .env file)
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv

ENV_PREFIX = "FOOTYSTATS_"


@dataclass
class Settings:
    """Settings shared by the CLI and the examples"""

    log_level: str = "INFO"
    log_file: Optional[Path] = None
    enable_colors: bool = True

    # Number of recent results kept in a standings form column
    form_length: int = 5
    # Rows per round when a kickoff time cannot be read from the date column
    round_size: int = 8
    # Seed for the simulated V-sport ticker; None means unseeded
    random_seed: Optional[int] = None

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Load settings from FOOTYSTATS_* environment variables.

        Args:
            env_file: Path to .env file (default: .env in the working directory)

        Returns:
            Settings instance
        """
        if env_file is None:
            env_file = Path(".env")
        if env_file.exists():
            load_dotenv(env_file)

        def get_env(key: str, default: Any, converter: Callable = str) -> Any:
            value = os.getenv(ENV_PREFIX + key)
            if value is None or value == "":
                return default
            try:
                if converter is bool:
                    return value.lower() in ("true", "1", "yes")
                return converter(value)
            except (ValueError, TypeError):
                return default

        return cls(
            log_level=get_env("LOG_LEVEL", "INFO"),
            log_file=get_env("LOG_FILE", None, Path),
            enable_colors=get_env("COLORS", True, bool),
            form_length=get_env("FORM_LENGTH", 5, int),
            round_size=get_env("ROUND_SIZE", 8, int),
            random_seed=get_env("SEED", None, int),
        )

    def validate(self) -> None:
        """
        Validate settings.

        Raises:
            ValueError: If any setting is out of range
        """
        if self.form_length < 1:
            raise ValueError("form_length must be at least 1")
        if self.round_size < 1:
            raise ValueError("round_size must be at least 1")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {self.log_level}")
