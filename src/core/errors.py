"""
Core error definitions for the Emoji Guesser game

Provides error codes and the game exception that don't depend on other services.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Room Management Errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    GAME_IN_PROGRESS = "GAME_IN_PROGRESS"
    ALREADY_IN_ROOM = "ALREADY_IN_ROOM"
    INVALID_PLAYER_NAME = "INVALID_PLAYER_NAME"

    # Game Flow Errors
    NOT_HOST = "NOT_HOST"
    ALREADY_STARTED = "ALREADY_STARTED"
    NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"

    # System Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


DEFAULT_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.ROOM_NOT_FOUND: "Room not found",
    ErrorCode.GAME_IN_PROGRESS: "Game already in progress",
    ErrorCode.ALREADY_IN_ROOM: "You are already in a room",
    ErrorCode.INVALID_PLAYER_NAME: "Player name must be between 1 and 20 characters",
    ErrorCode.NOT_HOST: "Only the host can start the game",
    ErrorCode.ALREADY_STARTED: "Game has already started",
    ErrorCode.NOT_ENOUGH_PLAYERS: "Need at least 2 players to start",
    ErrorCode.INTERNAL_ERROR: "An internal error occurred",
}


class GameError(Exception):
    """Recoverable error reported only to the connection that caused it."""

    def __init__(self, code: ErrorCode, message: Optional[str] = None, details: Optional[Dict] = None):
        self.code = code
        self.message = message or DEFAULT_MESSAGES.get(code, code.value)
        self.details = details or {}
        super().__init__(self.message)
