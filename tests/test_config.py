# Area: Shared Tests
"""Tests for EngineSettings loading from the environment."""

from unittest.mock import patch

from edugame.config import EngineSettings, load_settings


class TestLoadSettings:

    def test_defaults(self):
        settings = load_settings(env={})
        assert settings == EngineSettings()
        assert settings.life_loss_grace_seconds == 1
        assert settings.info_points == 10

    def test_values_from_env(self):
        settings = load_settings(env={
            "EDUGAME_LOG_LEVEL": "debug",
            "EDUGAME_LOG_FILE": "/tmp/game.log",
            "EDUGAME_LIFE_LOSS_GRACE_SECONDS": "0",
            "EDUGAME_INFO_POINTS": "25",
            "EDUGAME_DEFAULT_GAME_TYPE": "flashcard",
        })
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "/tmp/game.log"
        assert settings.life_loss_grace_seconds == 0
        assert settings.info_points == 25
        assert settings.default_game_type == "flashcard"

    def test_bad_integers_fall_back(self):
        settings = load_settings(env={
            "EDUGAME_LIFE_LOSS_GRACE_SECONDS": "soon",
            "EDUGAME_INFO_POINTS": "-5",
        })
        assert settings.life_loss_grace_seconds == 1
        assert settings.info_points == 10

    def test_dotenv_loaded_for_process_env(self):
        with patch("edugame.config.load_dotenv") as mock_load, \
                patch.dict("os.environ", {"EDUGAME_INFO_POINTS": "3"}):
            settings = load_settings()
        mock_load.assert_called_once()
        assert settings.info_points == 3

    def test_dotenv_skipped_for_explicit_env(self):
        with patch("edugame.config.load_dotenv") as mock_load:
            load_settings(env={})
        mock_load.assert_not_called()

    def test_dotenv_can_be_disabled(self):
        with patch("edugame.config.load_dotenv") as mock_load:
            load_settings(dotenv=False)
        mock_load.assert_not_called()
