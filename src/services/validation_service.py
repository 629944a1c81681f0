"""
Validation Service for the Emoji Guesser Game

Checks and normalizes inbound event payloads before they reach a room.
"""

import logging
import re
from typing import Any, Dict, Optional

from src.core.errors import ErrorCode, GameError

logger = logging.getLogger(__name__)


class ValidationService:
    """Service responsible for input validation and normalization."""

    MAX_GUESS_LENGTH = 200
    ROOM_CODE_PATTERN = re.compile(r'^[A-Z0-9]+$')

    def __init__(self, max_player_name_length: int = 20, room_code_length: int = 6):
        self.max_player_name_length = max_player_name_length
        self.room_code_length = room_code_length

    def get_payload(self, data: Any) -> Optional[Dict[str, Any]]:
        """Return the payload if it is a dictionary, else None."""
        if not isinstance(data, dict):
            logger.debug(f"Dropping malformed payload of type {type(data).__name__}")
            return None
        return data

    def validate_player_name(self, player_name: Any) -> str:
        """
        Validate and trim a display name.

        Raises:
            GameError: INVALID_PLAYER_NAME if missing, blank or too long
        """
        if not isinstance(player_name, str) or not player_name.strip():
            raise GameError(ErrorCode.INVALID_PLAYER_NAME, "Player name is required")

        player_name = player_name.strip()
        if len(player_name) > self.max_player_name_length:
            raise GameError(
                ErrorCode.INVALID_PLAYER_NAME,
                f"Player name must be {self.max_player_name_length} characters or less",
                {"max_length": self.max_player_name_length, "actual_length": len(player_name)}
            )
        return player_name

    def normalize_room_code(self, room_code: Any) -> str:
        """
        Uppercase and trim a room code.

        Raises:
            GameError: ROOM_NOT_FOUND if the code cannot name any room
        """
        if not isinstance(room_code, str):
            raise GameError(ErrorCode.ROOM_NOT_FOUND)

        room_code = room_code.strip().upper()
        if len(room_code) != self.room_code_length or not self.ROOM_CODE_PATTERN.match(room_code):
            raise GameError(ErrorCode.ROOM_NOT_FOUND)
        return room_code

    def extract_guess(self, data: Any) -> Optional[str]:
        """Pull the guess text out of a payload; None means drop the request."""
        payload = self.get_payload(data)
        if payload is None:
            return None

        guess = payload.get('guess')
        if not isinstance(guess, str) or not guess.strip():
            logger.debug("Dropping guess with no text")
            return None
        return guess.strip()[:self.MAX_GUESS_LENGTH]
