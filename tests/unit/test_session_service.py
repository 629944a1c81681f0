"""
Session Service Unit Tests
Tests for the connection-to-room session registry.
"""

import threading

from src.services.session_service import SessionService


class TestSessionService:
    """Test SessionService basic functionality"""

    def setup_method(self):
        """Setup test fixtures for each test"""
        self.session_service = SessionService()

    def test_initialization(self):
        assert self.session_service._player_sessions == {}
        assert self.session_service.get_sessions_count() == 0

    def test_create_session(self):
        self.session_service.create_session("socket123", "ROOM01", "TestPlayer")

        assert self.session_service.get_room_id("socket123") == "ROOM01"
        assert self.session_service.has_session("socket123")

    def test_create_session_replaces_existing(self):
        self.session_service.create_session("socket123", "ROOM01", "Name1")
        self.session_service.create_session("socket123", "ROOM02", "Name2")

        assert self.session_service.get_sessions_count() == 1
        assert self.session_service.get_room_id("socket123") == "ROOM02"

    def test_missing_session(self):
        assert self.session_service.get_room_id("nope") is None
        assert not self.session_service.has_session("nope")

    def test_remove_session(self):
        self.session_service.create_session("socket123", "ROOM01", "TestPlayer")

        removed = self.session_service.remove_session("socket123")

        assert removed['player_name'] == "TestPlayer"
        assert not self.session_service.has_session("socket123")
        assert self.session_service.remove_session("socket123") is None

    def test_clear(self):
        self.session_service.create_session("s1", "ROOM01", "A")
        self.session_service.clear()
        assert self.session_service.get_sessions_count() == 0

    def test_concurrent_session_creation(self):
        def create(i):
            self.session_service.create_session(f"s{i}", "ROOM01", f"P{i}")

        threads = [threading.Thread(target=create, args=(i,)) for i in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert self.session_service.get_sessions_count() == 50
