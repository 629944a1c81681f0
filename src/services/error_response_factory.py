"""
Error Response Factory for the Emoji Guesser Game

Builds the payload of ``error`` events and provides the decorator that turns
handler exceptions into those events.
"""

import logging
import traceback
from functools import wraps
from typing import Any, Dict, Optional

from flask_socketio import emit

from src.core.errors import DEFAULT_MESSAGES, ErrorCode, GameError

logger = logging.getLogger(__name__)


class ErrorResponseFactory:
    """Factory responsible for creating standardized error responses."""

    def create_error_response(self, code: ErrorCode, message: str, details: Optional[Dict] = None) -> Dict:
        """
        Create the payload of an ``error`` event.

        Args:
            code: Error code enum
            message: Human-readable error message
            details: Optional additional error details

        Returns:
            Error payload
        """
        response = {
            "code": code.value,
            "message": message
        }
        if details:
            response["details"] = details
        return response

    def emit_error(self, code: ErrorCode, message: str, details: Optional[Dict] = None):
        """Emit an error to the connection currently being handled."""
        error_response = self.create_error_response(code, message, details)

        logger.warning(f"Emitting error: {code.value} - {message}")
        emit('error', error_response)

    def emit_game_error(self, error: GameError):
        self.emit_error(error.code, error.message, error.details)

    def handle_exception(self, e: Exception, context: str = "Unknown") -> tuple:
        """
        Map an exception to an error code and message.

        Returns:
            Tuple of (error_code, error_message)
        """
        if isinstance(e, GameError):
            return e.code, e.message

        logger.error(f"Unexpected exception in {context}: {str(e)}")
        logger.error(f"Exception traceback: {traceback.format_exc()}")

        return ErrorCode.INTERNAL_ERROR, DEFAULT_MESSAGES[ErrorCode.INTERNAL_ERROR]


def with_error_handling(func):
    """
    Decorator for Socket.IO event handlers to provide consistent error handling.

    GameError becomes an ``error`` event for the calling connection; anything
    else is logged and reported as INTERNAL_ERROR.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        factory = ErrorResponseFactory()
        try:
            return func(*args, **kwargs)
        except GameError as e:
            factory.emit_game_error(e)
        except Exception as e:
            error_code, error_message = factory.handle_exception(e, func.__name__)
            factory.emit_error(error_code, error_message)

    return wrapper
