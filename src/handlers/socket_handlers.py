"""
Socket.IO event handlers for the Emoji Guesser game.

This module provides the main registration function and the
connection/disconnection handlers.
"""

import logging
from flask import request
from flask_socketio import emit

from container import get_container
from .socket_event_router import setup_router
from .room_connection_handler import RoomConnectionHandler
from .game_action_handler import GameActionHandler

logger = logging.getLogger(__name__)


def register_socket_handlers(socketio_instance):
    """Register all socket handlers with the SocketIO instance."""
    router = setup_router()

    room_handler = RoomConnectionHandler()
    game_handler = GameActionHandler()

    # Connection lifecycle events bypass the router
    socketio_instance.on_event('connect', handle_connect)
    socketio_instance.on_event('disconnect', handle_disconnect)

    router.register_route('create_room', room_handler.handle_create_room)
    router.register_route('join_room', room_handler.handle_join_room)
    router.register_route('start_game', game_handler.handle_start_game)
    router.register_route('submit_guess', game_handler.handle_submit_guess)

    router.register_with_socketio(socketio_instance)

    logger.info(f"Registered {len(router.get_registered_events())} socket event handlers")
    return router


def handle_connect(auth=None):
    """Handle client connection with Origin enforcement in production."""
    app_config = get_container().get('ConfigurationFactory').get_config()

    origin = request.headers.get('Origin')
    if app_config.is_production and app_config.allowed_origins:
        if origin and origin not in app_config.allowed_origins:
            logger.warning(f'Rejecting connection from disallowed Origin: {origin}')
            return False
    logger.info(f'Client connected: {request.sid} from Origin: {origin}')  # type: ignore[attr-defined]
    emit('connected', {'playerId': request.sid})  # type: ignore[attr-defined]


def handle_disconnect(reason=None):
    """Handle client disconnection; the player leaves whatever room they were in."""
    logger.info(f'Client disconnected: {request.sid}')  # type: ignore[attr-defined]
    try:
        get_container().get('SessionDirectory').leave(request.sid)  # type: ignore[attr-defined]
    except Exception:
        logger.exception(f'Error cleaning up after {request.sid}')  # type: ignore[attr-defined]
