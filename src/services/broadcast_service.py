"""
Broadcast Service - Centralized Socket.IO message delivery.

Delivers room notifications through Flask-SocketIO and keeps transport-level
room membership in step with game rooms.
"""

import logging
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = '/'


class BroadcastService:
    """Centralized service for all Socket.IO emissions."""

    def __init__(self, socketio, namespace: str = DEFAULT_NAMESPACE):
        """Initialize the broadcast service.

        Args:
            socketio: Flask-SocketIO instance for emitting messages
            namespace: Socket.IO namespace the game runs on
        """
        self.socketio = socketio
        self.namespace = namespace

    # Core emission methods

    def emit_to_room(self, event: str, data: Dict[str, Any], room_id: str, skip_sid: Optional[str] = None):
        """Emit an event to all players in a room."""
        try:
            self.socketio.emit(event, data, to=room_id, skip_sid=skip_sid, namespace=self.namespace)
            logger.debug(f'Emitted {event} to room {room_id}')
        except Exception as e:
            logger.error(f'Error emitting {event} to room {room_id}: {e}')

    def emit_to_player(self, event: str, data: Dict[str, Any], socket_id: str):
        """Emit an event to a specific connection."""
        try:
            self.socketio.emit(event, data, to=socket_id, namespace=self.namespace)
            logger.debug(f'Emitted {event} to player {socket_id}')
        except Exception as e:
            logger.error(f'Error emitting {event} to player {socket_id}: {e}')

    def dispatch(self, notifications: Iterable, room_id: str):
        """Deliver room notifications in order.

        Notifications addressed to the room code are broadcast; anything
        else is treated as a single connection.
        """
        for notification in notifications:
            if notification.target == room_id:
                self.emit_to_room(notification.event, notification.payload, room_id, skip_sid=notification.skip)
            else:
                self.emit_to_player(notification.event, notification.payload, notification.target)

    # Room membership

    def add_to_room(self, socket_id: str, room_id: str):
        """Subscribe a connection to a room's broadcasts."""
        self.socketio.server.enter_room(socket_id, room_id, namespace=self.namespace)
        logger.debug(f'Client {socket_id} joined Socket.IO room: {room_id}')

    def remove_from_room(self, socket_id: str, room_id: str):
        """Unsubscribe a connection from a room's broadcasts."""
        try:
            self.socketio.server.leave_room(socket_id, room_id, namespace=self.namespace)
            logger.debug(f'Client {socket_id} left Socket.IO room: {room_id}')
        except Exception as e:
            logger.error(f'Error removing {socket_id} from room {room_id}: {e}')
