"""
API Routes Unit Tests

Tests for the REST endpoints in src/routes/api.py against a real session
directory with mocked delivery.
"""

from unittest.mock import Mock

import pytest
from flask import Flask

from src.routes.api import create_api_blueprint


@pytest.fixture
def client(session_directory, catalog):
    app = Flask(__name__)
    app.register_blueprint(create_api_blueprint({
        'session_directory': session_directory,
        'phrase_catalog': catalog
    }))
    return app.test_client()


class TestApiRoutesBlueprintCreation:
    """Test API blueprint creation and configuration"""

    def test_registers_routes(self):
        blueprint = create_api_blueprint({'session_directory': Mock(), 'phrase_catalog': Mock()})
        app = Flask(__name__)
        app.register_blueprint(blueprint)

        rules = {rule.rule for rule in app.url_map.iter_rules()}

        assert blueprint.name == 'api'
        assert {'/api/health', '/api/find-available-room', '/api/rooms/<room_code>'} <= rules


class TestHealthRoute:

    def test_health(self, client, session_directory):
        session_directory.create_room('h1', 'Alice')

        response = client.get('/api/health')

        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok', 'rooms': 1, 'phrases': 3}


class TestFindAvailableRoute:

    def test_no_rooms(self, client):
        assert client.get('/api/find-available-room').get_json() == {'roomId': None}

    def test_waiting_room_found(self, client, session_directory):
        room = session_directory.create_room('h1', 'Alice')
        assert client.get('/api/find-available-room').get_json() == {'roomId': room.code}

    def test_started_room_not_offered(self, client, session_directory):
        room = session_directory.create_room('h1', 'Alice')
        session_directory.join_room('g1', room.code, 'Bob')
        session_directory.start_game('h1')

        assert client.get('/api/find-available-room').get_json() == {'roomId': None}


class TestRoomSnapshotRoute:

    def test_existing_room(self, client, session_directory):
        room = session_directory.create_room('h1', 'Alice')

        response = client.get(f'/api/rooms/{room.code.lower()}')

        assert response.status_code == 200
        body = response.get_json()
        assert body['roomId'] == room.code
        assert body['phase'] == 'waiting'
        assert body['players'] == [{'id': 'h1', 'name': 'Alice', 'totalScore': 0, 'isHost': True}]

    def test_running_round_hides_answer(self, client, session_directory):
        room = session_directory.create_room('h1', 'Alice')
        session_directory.join_room('g1', room.code, 'Bob')
        session_directory.start_game('h1')

        body = client.get(f'/api/rooms/{room.code}').get_json()

        assert body['phase'] == 'in_round'
        assert room.current_phrase.answer not in str(body)

    def test_unknown_room(self, client):
        response = client.get('/api/rooms/NOPE00')

        assert response.status_code == 404
        assert response.get_json() == {'error': {'code': 'ROOM_NOT_FOUND', 'message': 'Room not found'}}
