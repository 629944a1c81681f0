"""
Session Directory for the Emoji Guesser Game

Owns the registry of active rooms, routes player actions to the right room
and delivers what the room produced. Every operation on a room, including
its timer callbacks, runs under that room's lock so a room only ever
processes one event at a time; rooms never share a lock.
"""

import logging
import random
import string
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from src.config.game_settings import GameSettings, get_game_settings
from src.core.errors import ErrorCode, GameError
from src.core.game_phases import GamePhase
from src.game_room import GameRoom, RoomUpdate, ScheduledTransition
from src.phrase_catalog import PhraseCatalog

logger = logging.getLogger(__name__)


class SessionDirectory:
    """Maps connections and room codes to rooms."""

    CODE_ALPHABET = string.ascii_uppercase + string.digits
    MAX_CODE_ATTEMPTS = 100

    def __init__(
        self,
        catalog: PhraseCatalog,
        broadcast_service,
        scheduler,
        session_service,
        settings: Optional[GameSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None
    ):
        self.catalog = catalog
        self.broadcast_service = broadcast_service
        self.scheduler = scheduler
        self.session_service = session_service
        self.settings = settings or get_game_settings()
        self._clock = clock
        self._rng = rng or random.Random()

        self._rooms: Dict[str, GameRoom] = {}
        self._room_locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    # Player actions

    def create_room(self, handle: str, player_name: str) -> GameRoom:
        """
        Open a new room with the caller as host.

        Raises:
            GameError: ALREADY_IN_ROOM if the connection is already playing
        """
        self._ensure_not_in_room(handle)

        with self._registry_lock:
            code = self._generate_code()
            room = GameRoom(code, self.catalog, settings=self.settings, clock=self._clock)
            update = room.create(handle, player_name)
            lock = threading.RLock()
            self._rooms[code] = room
            self._room_locks[code] = lock

        with lock:
            self.session_service.create_session(handle, code, player_name)
            self.broadcast_service.add_to_room(handle, code)
            self._apply(room, update)
        return room

    def join_room(self, handle: str, room_code: str, player_name: str) -> GameRoom:
        """
        Add the caller to an existing room.

        Raises:
            GameError: ALREADY_IN_ROOM, ROOM_NOT_FOUND or GAME_IN_PROGRESS
        """
        self._ensure_not_in_room(handle)

        room, lock = self._lookup(room_code)
        if room is None:
            raise GameError(ErrorCode.ROOM_NOT_FOUND)

        with lock:
            if not self._is_current(room):
                raise GameError(ErrorCode.ROOM_NOT_FOUND)
            update = room.join(handle, player_name)
            self.session_service.create_session(handle, room.code, player_name)
            self.broadcast_service.add_to_room(handle, room.code)
            self._apply(room, update)
        return room

    def start_game(self, handle: str) -> None:
        self._run_for_player(handle, lambda room: room.start_game(handle))

    def submit_guess(self, handle: str, guess: str) -> None:
        self._run_for_player(handle, lambda room: room.submit_guess(handle, guess))

    def leave(self, handle: str) -> None:
        """Remove a connection from its room, destroying the room when it empties."""
        session_info = self.session_service.remove_session(handle)
        if not session_info:
            return

        room, lock = self._lookup(session_info['room_id'])
        if room is None:
            return

        with lock:
            update = room.leave(handle)
            self.broadcast_service.remove_from_room(handle, room.code)
            if room.is_empty:
                self._destroy(room)
            else:
                self._apply(room, update)

    # Queries

    def get_room(self, room_code: str) -> Optional[GameRoom]:
        return self._lookup(room_code)[0]

    def get_room_snapshot(self, room_code: str) -> Optional[Dict]:
        room, lock = self._lookup(room_code)
        if room is None:
            return None
        with lock:
            return room.to_dict()

    def get_room_codes(self) -> List[str]:
        with self._registry_lock:
            return list(self._rooms.keys())

    def get_room_count(self) -> int:
        return len(self._rooms)

    def find_available_room(self) -> Optional[str]:
        """Code of the oldest room still waiting for players, if any."""
        with self._registry_lock:
            rooms = list(self._rooms.values())
        for room in rooms:
            if room.phase == GamePhase.WAITING and not room.is_empty:
                return room.code
        return None

    def shutdown(self) -> None:
        """Drop every room; pending timers find nothing to act on."""
        with self._registry_lock:
            count = len(self._rooms)
            self._rooms.clear()
            self._room_locks.clear()
        sessions = self.session_service.get_sessions_count()
        self.session_service.clear()
        logger.info(f"Session directory shut down, dropped {count} rooms and {sessions} sessions")

    # Internals

    def _ensure_not_in_room(self, handle: str) -> None:
        if self.session_service.has_session(handle):
            raise GameError(ErrorCode.ALREADY_IN_ROOM)

    def _generate_code(self) -> str:
        # Caller holds the registry lock
        for _ in range(self.MAX_CODE_ATTEMPTS):
            code = ''.join(self._rng.choice(self.CODE_ALPHABET) for _ in range(self.settings.room_code_length))
            if code not in self._rooms:
                return code
        raise RuntimeError("Could not allocate a unique room code")

    def _lookup(self, room_code: str) -> Tuple[Optional[GameRoom], Optional[threading.RLock]]:
        with self._registry_lock:
            return self._rooms.get(room_code), self._room_locks.get(room_code)

    def _is_current(self, room: GameRoom) -> bool:
        return self._rooms.get(room.code) is room

    def _destroy(self, room: GameRoom) -> None:
        with self._registry_lock:
            if self._rooms.get(room.code) is room:
                del self._rooms[room.code]
                self._room_locks.pop(room.code, None)
        logger.info(f"Room {room.code} destroyed, no players left")

    def _run_for_player(self, handle: str, operation: Callable[[GameRoom], RoomUpdate]) -> None:
        room_code = self.session_service.get_room_id(handle)
        if room_code is None:
            logger.debug(f"Ignoring request from {handle}, not in a room")
            return

        room, lock = self._lookup(room_code)
        if room is None:
            return

        with lock:
            if not self._is_current(room):
                return
            self._apply(room, operation(room))

    def _apply(self, room: GameRoom, update: RoomUpdate) -> None:
        # Caller holds the room lock, so delivery order matches processing order
        self.broadcast_service.dispatch(update.notifications, room.code)
        for transition in update.transitions:
            self.scheduler.schedule(transition.delay_seconds, self._fire_transition, room, transition)

    def _fire_transition(self, room: GameRoom, transition: ScheduledTransition) -> None:
        _, lock = self._lookup(room.code)
        if lock is None:
            logger.debug(f"Dropping {transition.action} for destroyed room {room.code}")
            return

        with lock:
            if not self._is_current(room):
                return
            self._apply(room, room.fire(transition))
