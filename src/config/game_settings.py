"""
Game Settings Configuration Module

Provides centralized access to game-specific configuration values
with fallbacks for when no application configuration has been loaded.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSettings:
    """Timing and sizing rules applied to every room."""
    max_rounds: int = 6
    round_duration_seconds: int = 60
    between_rounds_delay_seconds: int = 5
    min_players_required: int = 2
    max_player_name_length: int = 20
    room_code_length: int = 6

    @classmethod
    def from_app_config(cls, app_config) -> 'GameSettings':
        return cls(
            max_rounds=app_config.max_rounds,
            round_duration_seconds=app_config.round_duration_seconds,
            between_rounds_delay_seconds=app_config.between_rounds_delay_seconds,
            min_players_required=app_config.min_players_required,
            max_player_name_length=app_config.max_player_name_length,
            room_code_length=app_config.room_code_length,
        )


# Global instance for easy access
_game_settings_instance = None


def get_game_settings(app_config=None) -> GameSettings:
    """
    Get or create the global game settings instance.

    Args:
        app_config: Optional app config to build the settings from

    Returns:
        GameSettings instance
    """
    global _game_settings_instance

    if app_config is not None:
        _game_settings_instance = GameSettings.from_app_config(app_config)
    elif _game_settings_instance is None:
        try:
            from config_factory import get_config
            _game_settings_instance = GameSettings.from_app_config(get_config())
        except Exception as e:
            logger.warning(f"Could not load configuration: {e}, using defaults")
            _game_settings_instance = GameSettings()

    return _game_settings_instance


def reset_game_settings():
    """Reset the global game settings instance (mainly for testing)."""
    global _game_settings_instance
    _game_settings_instance = None
