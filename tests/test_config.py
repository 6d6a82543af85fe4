"""
Unit tests for settings and logging setup
"""
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from footystats.config import Settings
from footystats.logging_setup import get_logger, setup_logging

MISSING_ENV = Path("/nonexistent/.env")


class TestSettings(unittest.TestCase):
    """Test Settings"""

    def test_defaults(self):
        """Test default settings"""
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env(MISSING_ENV)
        self.assertEqual(settings.log_level, "INFO")
        self.assertIsNone(settings.log_file)
        self.assertTrue(settings.enable_colors)
        self.assertEqual(settings.form_length, 5)
        self.assertEqual(settings.round_size, 8)
        self.assertIsNone(settings.random_seed)

    def test_from_environment(self):
        """FOOTYSTATS_* variables override the defaults"""
        env = {
            "FOOTYSTATS_LOG_LEVEL": "DEBUG",
            "FOOTYSTATS_LOG_FILE": "logs/footystats.log",
            "FOOTYSTATS_COLORS": "false",
            "FOOTYSTATS_FORM_LENGTH": "3",
            "FOOTYSTATS_SEED": "42",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env(MISSING_ENV)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.log_file, Path("logs/footystats.log"))
        self.assertFalse(settings.enable_colors)
        self.assertEqual(settings.form_length, 3)
        self.assertEqual(settings.random_seed, 42)

    def test_invalid_number_uses_default(self):
        """Unparseable numbers fall back to defaults"""
        with mock.patch.dict(os.environ, {"FOOTYSTATS_ROUND_SIZE": "many"}, clear=True):
            settings = Settings.from_env(MISSING_ENV)
        self.assertEqual(settings.round_size, 8)

    def test_env_file(self):
        """Values are read from a .env file"""
        with tempfile.TemporaryDirectory() as tmp:
            env_file = Path(tmp) / ".env"
            env_file.write_text("FOOTYSTATS_ROUND_SIZE=10\n", encoding="utf-8")
            with mock.patch.dict(os.environ, {}, clear=True):
                settings = Settings.from_env(env_file)
        self.assertEqual(settings.round_size, 10)

    def test_validate(self):
        """Test settings validation"""
        Settings().validate()

        with self.assertRaises(ValueError):
            Settings(form_length=0).validate()

        with self.assertRaises(ValueError):
            Settings(round_size=0).validate()

        with self.assertRaises(ValueError):
            Settings(log_level="LOUD").validate()


class TestLogging(unittest.TestCase):
    """Test logging setup"""

    def test_log_file(self):
        """Log records reach the configured file"""
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "footystats.log"
            setup_logging("INFO", log_file, enable_colors=False)
            get_logger("footystats.tests").info("Standings built", teams=4)
            for handler in logging.getLogger().handlers:
                handler.flush()
            content = log_file.read_text(encoding="utf-8")
            for handler in logging.getLogger().handlers:
                handler.close()
            logging.getLogger().handlers = []

        self.assertIn("Standings built", content)
        self.assertIn("teams=4", content)


if __name__ == "__main__":
    unittest.main()
