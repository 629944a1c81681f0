"""
Configuration Factory Tests
Tests for the centralized configuration management system.
"""

import os
from unittest.mock import patch

import pytest

from config_factory import (
    ConfigurationFactory, AppConfig, Environment, ConfigError, DEFAULT_SECRET_KEY,
    load_config, load_config_from_dict, get_config, reset_config, override_config
)
from src.config.game_settings import GameSettings, get_game_settings


@pytest.fixture(autouse=True)
def restore_global_config():
    """The factory is a process-wide singleton shared with the app."""
    yield
    reset_config()
    load_config()


class TestAppConfig:
    """Test AppConfig dataclass"""

    def test_config_initialization_with_defaults(self):
        config = AppConfig()

        assert config.secret_key == DEFAULT_SECRET_KEY
        assert config.debug is False
        assert config.port == 3001
        assert config.max_rounds == 6
        assert config.round_duration_seconds == 60
        assert config.between_rounds_delay_seconds == 5
        assert config.min_players_required == 2
        assert config.max_player_name_length == 20
        assert config.room_code_length == 6
        assert config.phrases_file == 'phrases.yaml'
        assert config.socketio_async_mode == 'eventlet'
        assert config.environment == Environment.DEVELOPMENT
        assert config.is_development

    @pytest.mark.parametrize("field_name, value", [
        ('port', 0),
        ('port', 70000),
        ('max_rounds', 0),
        ('round_duration_seconds', 1),
        ('between_rounds_delay_seconds', -1),
        ('min_players_required', 0),
        ('max_player_name_length', 0),
        ('room_code_length', 2),
        ('socketio_async_mode', 'asyncio'),
    ])
    def test_invalid_values_rejected(self, field_name, value):
        with pytest.raises(ConfigError):
            AppConfig(**{field_name: value})

    def test_production_requires_secret_key(self):
        with pytest.raises(ConfigError, match="SECRET_KEY"):
            AppConfig(environment=Environment.PRODUCTION)

        config = AppConfig(environment=Environment.PRODUCTION, secret_key='s3cret')
        assert config.is_production

    def test_allowed_origins_parsing(self):
        config = AppConfig(cors_allowed_origins=' https://a.example , ,https://b.example')
        assert config.allowed_origins == ['https://a.example', 'https://b.example']
        assert AppConfig().allowed_origins == []


class TestConfigurationFactory:
    """Test loading configuration"""

    def test_singleton(self):
        assert ConfigurationFactory() is ConfigurationFactory()

    @patch.dict(os.environ, {
        'FLASK_ENV': 'testing',
        'PORT': '8080',
        'MAX_ROUNDS': '3',
        'ROUND_DURATION_SECONDS': '30',
        'BETWEEN_ROUNDS_DELAY_SECONDS': '2',
        'PHRASES_FILE': 'custom.yaml',
        'SOCKETIO_ASYNC_MODE': 'threading',
        'DEBUG': 'false',
    })
    def test_load_from_environment(self):
        config = load_config()

        assert config.environment == Environment.TESTING
        assert config.is_testing
        assert config.port == 8080
        assert config.max_rounds == 3
        assert config.round_duration_seconds == 30
        assert config.between_rounds_delay_seconds == 2
        assert config.phrases_file == 'custom.yaml'
        assert config.debug is False
        assert get_config() is config

    @patch.dict(os.environ, {'FLASK_ENV': 'testing', 'PORT': 'not-a-number', 'SOCKETIO_ASYNC_MODE': 'threading'})
    def test_invalid_integer_falls_back_to_default(self):
        assert load_config().port == 3001

    @patch.dict(os.environ, {'FLASK_ENV': 'production', 'SOCKETIO_ASYNC_MODE': 'eventlet'})
    def test_production_without_secret_fails(self):
        os.environ.pop('SECRET_KEY', None)
        with pytest.raises(ConfigError):
            load_config()

    @patch.dict(os.environ, {'EMOJI_FLASK_ENV': 'testing', 'EMOJI_MAX_ROUNDS': '9',
                             'EMOJI_SOCKETIO_ASYNC_MODE': 'threading'})
    def test_env_prefix(self):
        assert load_config('EMOJI_').max_rounds == 9

    def test_load_from_dict(self):
        config = load_config_from_dict({'max_rounds': 2, 'environment': 'testing'})
        assert config.max_rounds == 2
        assert config.environment == Environment.TESTING

    def test_get_config_before_load(self):
        reset_config()
        with pytest.raises(ConfigError):
            get_config()

    def test_override_setting(self):
        load_config_from_dict({'environment': 'testing'})

        override_config('max_rounds', 4)

        assert get_config().max_rounds == 4

    def test_override_is_validated(self):
        load_config_from_dict({'environment': 'testing'})
        with pytest.raises(ConfigError):
            override_config('round_duration_seconds', 0)

    def test_to_dict_and_flask_config(self):
        load_config_from_dict({'environment': 'testing', 'secret_key': 'abc'})
        factory = ConfigurationFactory()

        as_dict = factory.to_dict()
        flask_config = factory.get_flask_config()

        assert as_dict['environment'] == 'testing'
        assert as_dict['max_rounds'] == 6
        assert flask_config['SECRET_KEY'] == 'abc'
        assert flask_config['PHRASES_FILE'] == 'phrases.yaml'


class TestGameSettings:
    """Test the game-facing settings view"""

    def test_defaults(self):
        settings = GameSettings()
        assert settings.round_duration_seconds == 60
        assert settings.between_rounds_delay_seconds == 5

    def test_built_from_app_config(self):
        config = load_config_from_dict({'environment': 'testing', 'max_rounds': 3, 'round_duration_seconds': 20})

        settings = get_game_settings(config)

        assert settings.max_rounds == 3
        assert settings.round_duration_seconds == 20
        assert get_game_settings() is settings

    def test_falls_back_to_defaults_without_config(self):
        reset_config()
        assert get_game_settings() == GameSettings()
