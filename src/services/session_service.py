"""
Session Service - Maps Socket.IO connections to the room they play in.

This service handles:
- Session creation and cleanup
- Socket ID to room code mapping
- Session lookup by room
"""

import logging
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class SessionService:
    """Manages player sessions keyed by Socket.IO connection ID."""

    def __init__(self):
        # socket_id -> {'room_id', 'player_name'}
        self._player_sessions: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()
        logger.info("SessionService initialized")

    def create_session(self, socket_id: str, room_id: str, player_name: str) -> None:
        """Create or replace the session for a connection.

        Args:
            socket_id: Socket.IO connection ID
            room_id: Code of the room the player is in
            player_name: Player's display name
        """
        with self._lock:
            self._player_sessions[socket_id] = {
                'room_id': room_id,
                'player_name': player_name
            }
        logger.debug(f"Created session for player {player_name} ({socket_id}) in room {room_id}")

    def get_room_id(self, socket_id: str) -> Optional[str]:
        session_info = self._player_sessions.get(socket_id)
        return session_info['room_id'] if session_info else None

    def has_session(self, socket_id: str) -> bool:
        return socket_id in self._player_sessions

    def remove_session(self, socket_id: str) -> Optional[Dict[str, str]]:
        """Remove a session.

        Returns:
            The removed session info or None if not found
        """
        with self._lock:
            session_info = self._player_sessions.pop(socket_id, None)
        if session_info:
            logger.debug(f"Removed session for player {session_info['player_name']} ({socket_id})")
        return session_info

    def get_sessions_count(self) -> int:
        return len(self._player_sessions)

    def clear(self) -> None:
        with self._lock:
            self._player_sessions.clear()
