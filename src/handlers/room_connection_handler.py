"""
Room Connection Handler

This module handles Socket.IO events related to room membership:
creating a room and joining an existing one.
"""

import logging

from src.services.error_response_factory import with_error_handling
from .base_handler import BaseRoomHandler

logger = logging.getLogger(__name__)


class RoomConnectionHandler(BaseRoomHandler):
    """Handler for room creation and joining."""

    @with_error_handling
    def handle_create_room(self, data=None):
        """
        Handle a player opening a new room as its host.

        Expected data format:
        {
            'playerName': 'display_name'
        }
        """
        self.log_handler_start('handle_create_room', data)

        player_name = self.validate_create_room_data(data)
        if player_name is None:
            return

        room = self.session_directory.create_room(self.current_handle, player_name)
        self.log_handler_success('handle_create_room', f'Player {player_name} created room {room.code}')

    @with_error_handling
    def handle_join_room(self, data=None):
        """
        Handle a player joining an existing room.

        Expected data format:
        {
            'roomId': 'ABC123',
            'playerName': 'display_name'
        }
        """
        self.log_handler_start('handle_join_room', data)

        join_data = self.validate_room_join_data(data)
        if join_data is None:
            return
        room_code, player_name = join_data

        self.session_directory.join_room(self.current_handle, room_code, player_name)
        self.log_handler_success('handle_join_room', f'Player {player_name} joined room {room_code}')
