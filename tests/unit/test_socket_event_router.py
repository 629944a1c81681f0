"""
Socket Event Router Unit Tests
Tests route registration, middleware and SocketIO binding.
"""

import logging

import pytest
from unittest.mock import Mock, patch
from flask import Flask

from src.handlers import socket_event_router
from src.handlers.socket_event_router import (
    EventRouteNotFoundError, SocketEventRouter, get_router, setup_router
)


class TestSocketEventRouter:
    """Test SocketEventRouter"""

    def setup_method(self):
        self.router = SocketEventRouter()

    def test_register_and_handle(self):
        handler = Mock(__name__='handler', return_value='ok')
        self.router.register_route('create_room', handler)

        assert self.router.handle_event('create_room', {'playerName': 'A'}) == 'ok'
        handler.assert_called_once_with({'playerName': 'A'})
        assert self.router.has_route('create_room')
        assert self.router.get_registered_events() == ['create_room']

    def test_route_decorator(self):
        @self.router.route('start_game')
        def on_start(data):
            return 'started'

        assert self.router.handle_event('start_game') == 'started'

    def test_unknown_event(self):
        with pytest.raises(EventRouteNotFoundError):
            self.router.handle_event('nope')

    def test_middleware_runs_in_order_and_can_replace_payload(self):
        seen = []

        def first(event_name, data):
            seen.append(('first', data))
            return {'replaced': True}

        def second(event_name, data):
            seen.append(('second', data))

        handler = Mock(__name__='handler')
        self.router.add_middleware(first)
        self.router.add_middleware(second)
        self.router.register_route('submit_guess', handler)

        self.router.handle_event('submit_guess', {'guess': 'x'})

        assert seen == [('first', {'guess': 'x'}), ('second', {'replaced': True})]
        handler.assert_called_once_with({'replaced': True})

    def test_register_with_socketio(self):
        socketio = Mock()
        handler = Mock(__name__='handler', return_value='done')
        self.router.register_route('join_room', handler)

        self.router.register_with_socketio(socketio)

        event_name, bound = socketio.on_event.call_args.args
        assert event_name == 'join_room'
        assert bound.__name__ == 'on_join_room'
        assert bound({'roomId': 'ABC123'}) == 'done'
        assert bound() == 'done'
        handler.assert_called_with(None)


class TestDefaultRouter:
    """Test module-level router setup"""

    def setup_method(self):
        self.app = Flask(__name__)

    def teardown_method(self):
        socket_event_router._default_router = None

    def test_get_router_before_setup(self):
        socket_event_router._default_router = None
        with pytest.raises(RuntimeError):
            get_router()

    def test_setup_router_logs_requests(self, caplog):
        router = setup_router()
        handler = Mock(__name__='handler', return_value=None)
        router.register_route('start_game', handler)

        with self.app.test_request_context():
            with patch('src.handlers.socket_event_router.request') as mock_request:
                mock_request.sid = 'sid1'
                with caplog.at_level(logging.INFO, logger='src.handlers.socket_event_router'):
                    router.handle_event('start_game', {'x': 1})

        assert get_router() is router
        handler.assert_called_once_with({'x': 1})
        assert any('sid1' in record.getMessage() for record in caplog.records)
