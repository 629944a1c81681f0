"""
REST API endpoints for the Emoji Guesser server.
"""

import logging
from flask import Blueprint, jsonify

from src.core.errors import DEFAULT_MESSAGES, ErrorCode

logger = logging.getLogger(__name__)


def create_api_blueprint(services):
    """Create and configure the API Blueprint with service dependencies."""
    session_directory = services['session_directory']
    phrase_catalog = services['phrase_catalog']

    api = Blueprint('api', __name__, url_prefix='/api')

    @api.route('/health')
    def health():
        """Liveness probe with a few counters."""
        return {
            'status': 'ok',
            'rooms': session_directory.get_room_count(),
            'phrases': phrase_catalog.get_phrase_count(),
        }

    @api.route('/find-available-room')
    def find_available_room():
        """Find a room that's waiting for players."""
        room_code = session_directory.find_available_room()
        if room_code:
            logger.info(f'Found available room: {room_code}')
        return {'roomId': room_code}

    @api.route('/rooms/<room_code>')
    def room_snapshot(room_code):
        """Public view of a room; never includes the current answer."""
        snapshot = session_directory.get_room_snapshot(room_code.strip().upper())
        if snapshot is None:
            error = {
                'code': ErrorCode.ROOM_NOT_FOUND.value,
                'message': DEFAULT_MESSAGES[ErrorCode.ROOM_NOT_FOUND]
            }
            return jsonify({'error': error}), 404
        return snapshot

    return api
