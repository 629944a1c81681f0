"""
Base Handler Classes

This module provides base classes for Socket.IO handlers with common patterns
for service access, payload validation and logging.
"""

import logging
from abc import ABC
from typing import Any, Optional, Tuple
from flask import request

from container import get_container

logger = logging.getLogger(__name__)


class BaseHandler(ABC):
    """
    Abstract base class for all Socket.IO handlers.

    Services are resolved from the global container on access, so handlers
    always see the container that is configured at call time.
    """

    @property
    def _container(self):
        return get_container()

    @property
    def session_directory(self):
        """Get the session directory."""
        return self._container.get('SessionDirectory')

    @property
    def session_service(self):
        """Get the session service."""
        return self._container.get('SessionService')

    @property
    def validation_service(self):
        """Get the validation service."""
        return self._container.get('ValidationService')

    @property
    def current_handle(self) -> str:
        """Connection handle of the requesting client."""
        return request.sid  # type: ignore[attr-defined]

    def log_handler_start(self, handler_name: str, data: Any = None) -> None:
        """Log the start of handler execution."""
        logger.info(f'{handler_name} called by client: {self.current_handle}')
        if data:
            logger.debug(f'{handler_name} data: {data}')

    def log_handler_success(self, handler_name: str, message: Optional[str] = None) -> None:
        """Log successful handler completion."""
        log_msg = f'{handler_name} completed successfully for client: {self.current_handle}'
        if message:
            log_msg += f' - {message}'
        logger.info(log_msg)


class ValidationHandlerMixin:
    """
    Mixin for handlers that need common validation patterns.

    Each method returns None when the payload should be dropped without a
    reply, and raises GameError when the client should be told why.
    """

    # Type hints for expected attributes from BaseHandler
    validation_service: Any

    def validate_create_room_data(self, data: Any) -> Optional[str]:
        payload = self.validation_service.get_payload(data)
        if payload is None:
            return None
        return self.validation_service.validate_player_name(payload.get('playerName'))

    def validate_room_join_data(self, data: Any) -> Optional[Tuple[str, str]]:
        """
        Validate room join data and extract the room code and player name.

        Returns:
            Tuple of (room_code, player_name), or None for a malformed payload

        Raises:
            GameError: If the name is invalid or the code cannot name a room
        """
        payload = self.validation_service.get_payload(data)
        if payload is None:
            return None
        player_name = self.validation_service.validate_player_name(payload.get('playerName'))
        room_code = self.validation_service.normalize_room_code(payload.get('roomId'))
        return room_code, player_name

    def validate_guess_data(self, data: Any) -> Optional[str]:
        return self.validation_service.extract_guess(data)


class BaseRoomHandler(BaseHandler, ValidationHandlerMixin):
    """Base class for handlers that deal with room membership."""
    pass


class BaseGameHandler(BaseHandler, ValidationHandlerMixin):
    """Base class for handlers that deal with game operations."""
    pass
