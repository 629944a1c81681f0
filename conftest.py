"""
Global pytest configuration and fixtures.
Provides deterministic game fixtures and the configured application for tests.
"""

import os
import pytest
from unittest.mock import Mock

# Must be set before the app module is imported
os.environ['FLASK_ENV'] = 'testing'
os.environ['SOCKETIO_ASYNC_MODE'] = 'threading'
os.environ.setdefault('PHRASES_FILE', os.path.join(os.path.dirname(os.path.abspath(__file__)), 'phrases.yaml'))


@pytest.fixture(scope="function", autouse=True)
def reset_game_settings_fixture():
    """Game settings are cached globally; start each test from defaults."""
    from src.config.game_settings import reset_game_settings
    reset_game_settings()
    yield
    reset_game_settings()


@pytest.fixture
def settings():
    from src.config.game_settings import GameSettings
    return GameSettings()


@pytest.fixture
def catalog():
    from tests.helpers.room_helpers import make_catalog
    return make_catalog()


@pytest.fixture
def clock():
    from tests.helpers.timing import FakeClock
    return FakeClock()


@pytest.fixture
def scheduler():
    from tests.helpers.timing import ManualScheduler
    return ManualScheduler()


@pytest.fixture
def broadcast_service():
    """BroadcastService stand-in that records dispatched notifications."""
    return Mock()


@pytest.fixture
def session_directory(catalog, broadcast_service, scheduler, clock, settings):
    from src.services.session_service import SessionService
    from src.session_directory import SessionDirectory
    return SessionDirectory(catalog, broadcast_service, scheduler, SessionService(), settings=settings, clock=clock)


@pytest.fixture(scope="session")
def app():
    """Create Flask app for testing."""
    from app import app as flask_app
    return flask_app


@pytest.fixture(scope="session")
def socketio():
    """SocketIO instance of the application under test."""
    from app import socketio as socketio_instance
    return socketio_instance


@pytest.fixture
def live_directory(app):
    """
    The application's session directory with timers under test control.

    Rooms created during the test are dropped afterwards.
    """
    from container import get_container
    from tests.helpers.timing import FakeClock, ManualScheduler

    directory = get_container().get('SessionDirectory')
    original_scheduler, original_clock = directory.scheduler, directory._clock
    directory.scheduler = ManualScheduler()
    directory._clock = FakeClock()
    yield directory
    directory.shutdown()
    directory.scheduler, directory._clock = original_scheduler, original_clock
