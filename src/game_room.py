"""
Game Room for the Emoji Guesser Game

One room's players, rounds and scores. The room is a state machine:

    waiting -> in_round -> between_rounds -> in_round -> ... -> finished

Operations never touch the network. Each returns a RoomUpdate listing the
notifications to deliver and the delayed transitions to schedule; the
caller is responsible for serializing calls per room.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from src.config.game_settings import GameSettings, get_game_settings
from src.core.errors import ErrorCode, GameError
from src.core.game_phases import GamePhase
from src.phrase_catalog import PhraseCatalog, PhraseRecord
from src.services.answer_matcher import AnswerMatcher
from src.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """A connected participant in a room."""
    id: str
    name: str
    join_seq: int
    total_score: int = 0
    is_host: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'totalScore': self.total_score,
            'isHost': self.is_host
        }


@dataclass
class RoundAnswer:
    """A correct answer recorded during the current round."""
    elapsed_ms: int
    points: int


@dataclass
class Notification:
    """
    An outbound event.

    ``target`` is either a room code (broadcast to the room) or a connection
    handle (sent to that connection only). ``skip`` excludes one connection
    from a room broadcast.
    """
    event: str
    payload: Dict[str, Any]
    target: str
    skip: Optional[str] = None


class Transition:
    """Names of delayed transitions a room can request."""
    END_ROUND = 'end_round'
    START_ROUND = 'start_round'
    END_GAME = 'end_game'


@dataclass
class ScheduledTransition:
    """A delayed transition, tagged with the round it was requested in."""
    action: str
    delay_seconds: float
    round_index: int


@dataclass
class RoomUpdate:
    """Everything a room operation produced."""
    notifications: List[Notification] = field(default_factory=list)
    transitions: List[ScheduledTransition] = field(default_factory=list)

    def notify(self, event: str, payload: Dict[str, Any], target: str, skip: Optional[str] = None) -> None:
        self.notifications.append(Notification(event, payload, target, skip))

    def schedule(self, action: str, delay_seconds: float, round_index: int) -> None:
        self.transitions.append(ScheduledTransition(action, delay_seconds, round_index))

    @property
    def events(self) -> List[str]:
        return [n.event for n in self.notifications]


class GameRoom:
    """State machine for a single game."""

    def __init__(
        self,
        code: str,
        catalog: PhraseCatalog,
        settings: Optional[GameSettings] = None,
        matcher: Optional[AnswerMatcher] = None,
        scoring: Optional[ScoringService] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.code = code
        self.catalog = catalog
        self.settings = settings or get_game_settings()
        self.matcher = matcher or AnswerMatcher()
        self.scoring = scoring or ScoringService()
        self._clock = clock

        self.host_id: Optional[str] = None
        self.players: Dict[str, Player] = {}
        self.round_index = 0
        self.max_rounds = self.settings.max_rounds
        self.phase = GamePhase.WAITING
        self.current_phrase: Optional[PhraseRecord] = None
        self.used_phrases: Set[PhraseRecord] = set()
        self.round_start_time: Optional[float] = None
        self.round_answers: Dict[str, RoundAnswer] = {}
        self._round_answer_names: Dict[str, str] = {}
        self._next_join_seq = 0

    # Queries

    @property
    def is_empty(self) -> bool:
        return not self.players

    def ordered_players(self) -> List[Player]:
        return sorted(self.players.values(), key=lambda p: p.join_seq)

    def player_list(self) -> List[Dict[str, Any]]:
        return [player.to_dict() for player in self.ordered_players()]

    def leaderboard(self) -> List[Dict[str, Any]]:
        return self.scoring.build_leaderboard(self.players.values())

    def answered_count(self) -> int:
        """Answers recorded this round, including those of players who have since left."""
        return len(self.round_answers)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot safe to show to any client (no current answer)."""
        return {
            'roomId': self.code,
            'hostId': self.host_id,
            'phase': self.phase.value,
            'round': self.round_index,
            'maxRounds': self.max_rounds,
            'players': self.player_list(),
            'playersAnswered': self.answered_count() if self.phase == GamePhase.IN_ROUND else 0,
        }

    # Lobby operations

    def create(self, host_handle: str, host_name: str) -> RoomUpdate:
        """Seat the creating connection as the first player and host."""
        if self.players:
            raise RuntimeError(f"Room {self.code} already has players")

        update = RoomUpdate()
        self._add_player(host_handle, host_name, is_host=True)
        self.host_id = host_handle
        logger.info(f"Room {self.code} created by {host_name} ({host_handle})")

        update.notify('room_created', {
            'roomId': self.code,
            'isHost': True,
            'players': self.player_list()
        }, host_handle)
        return update

    def join(self, handle: str, name: str) -> RoomUpdate:
        """
        Add a player to a room that has not started yet.

        Raises:
            GameError: GAME_IN_PROGRESS once the game has started
        """
        if self.phase != GamePhase.WAITING:
            raise GameError(ErrorCode.GAME_IN_PROGRESS)

        update = RoomUpdate()
        player = self._add_player(handle, name)
        logger.info(f"Player {name} ({handle}) joined room {self.code}")

        players = self.player_list()
        update.notify('room_joined', {
            'roomId': self.code,
            'isHost': False,
            'players': players
        }, handle)
        update.notify('player_joined', {
            'player': player.to_dict(),
            'players': players
        }, self.code, skip=handle)
        return update

    def start_game(self, requester: str) -> RoomUpdate:
        """
        Start round one.

        Raises:
            GameError: NOT_HOST, ALREADY_STARTED or NOT_ENOUGH_PLAYERS
        """
        if requester != self.host_id:
            raise GameError(ErrorCode.NOT_HOST)
        if self.phase != GamePhase.WAITING:
            raise GameError(ErrorCode.ALREADY_STARTED)
        if len(self.players) < self.settings.min_players_required:
            raise GameError(
                ErrorCode.NOT_ENOUGH_PLAYERS,
                f"Need at least {self.settings.min_players_required} players to start"
            )

        update = RoomUpdate()
        logger.info(f"Game started in room {self.code} with {len(self.players)} players")
        self._start_round(update)
        return update

    def leave(self, handle: str) -> RoomUpdate:
        """Remove a player in any phase, handing the host role on if needed."""
        update = RoomUpdate()
        player = self.players.pop(handle, None)
        if player is None:
            return update

        logger.info(f"Player {player.name} ({handle}) left room {self.code}")

        if not self.players:
            self.host_id = None
            return update

        if handle == self.host_id:
            new_host = self.ordered_players()[0]
            new_host.is_host = True
            self.host_id = new_host.id
            logger.info(f"Host of room {self.code} reassigned to {new_host.name} ({new_host.id})")

        update.notify('player_left', {
            'playerId': handle,
            'playerName': player.name,
            'hostId': self.host_id,
            'players': self.player_list()
        }, self.code)

        if self.phase == GamePhase.IN_ROUND and self._all_answered():
            self._end_round(update)
        return update

    # Round operations

    def submit_guess(self, handle: str, text: str) -> RoomUpdate:
        """
        Evaluate a guess for the current round.

        Guesses outside a round, from unknown connections, or from players
        who already answered are ignored.
        """
        update = RoomUpdate()
        player = self.players.get(handle)
        if self.phase != GamePhase.IN_ROUND or player is None or handle in self.round_answers:
            logger.debug(f"Ignoring guess from {handle} in room {self.code} during {self.phase.value}")
            return update

        if not self.matcher.is_acceptable(text, self.current_phrase.answer):
            update.notify('incorrect_guess', {'guess': text}, handle)
            return update

        elapsed_ms = max(0, int((self._clock() - self.round_start_time) * 1000))
        points = self.scoring.calculate_points(elapsed_ms, self.current_phrase.difficulty)
        player.total_score += points
        self.round_answers[handle] = RoundAnswer(elapsed_ms=elapsed_ms, points=points)
        self._round_answer_names[handle] = player.name
        logger.info(f"Player {player.name} answered round {self.round_index} in room {self.code} "
                    f"after {elapsed_ms}ms for {points} points")

        update.notify('correct_guess', {
            'playerId': handle,
            'playerName': player.name,
            'points': points,
            'timeToAnswer': elapsed_ms,
            'playersAnswered': self.answered_count(),
            'totalPlayers': len(self.players),
            'totalScore': player.total_score
        }, self.code)

        if self._all_answered():
            self._end_round(update)
        return update

    def fire(self, transition: ScheduledTransition) -> RoomUpdate:
        """Run a delayed transition if the room is still where it was scheduled."""
        handlers = {
            Transition.END_ROUND: self.on_round_timeout,
            Transition.START_ROUND: self.on_next_round_due,
            Transition.END_GAME: self.on_game_end_due,
        }
        return handlers[transition.action](transition.round_index)

    def on_round_timeout(self, round_index: int) -> RoomUpdate:
        update = RoomUpdate()
        if self.phase == GamePhase.IN_ROUND and self.round_index == round_index:
            logger.info(f"Round {round_index} timed out in room {self.code}")
            self._end_round(update)
        return update

    def on_next_round_due(self, round_index: int) -> RoomUpdate:
        update = RoomUpdate()
        if self.phase == GamePhase.BETWEEN_ROUNDS and self.round_index == round_index:
            self._start_round(update)
        return update

    def on_game_end_due(self, round_index: int) -> RoomUpdate:
        update = RoomUpdate()
        if self.phase == GamePhase.BETWEEN_ROUNDS and self.round_index == round_index:
            self._end_game(update)
        return update

    # Internal transitions

    def _add_player(self, handle: str, name: str, is_host: bool = False) -> Player:
        player = Player(id=handle, name=name, join_seq=self._next_join_seq, is_host=is_host)
        self._next_join_seq += 1
        self.players[handle] = player
        return player

    def _all_answered(self) -> bool:
        return bool(self.players) and len(self.round_answers) >= len(self.players)

    def _start_round(self, update: RoomUpdate) -> None:
        if self.phase == GamePhase.FINISHED or self.round_index >= self.max_rounds:
            return

        phrase = self.catalog.sample(excluding=self.used_phrases)
        if phrase is None:
            logger.info(f"Phrase catalog exhausted in room {self.code}, ending game")
            self._end_game(update)
            return

        self.round_index += 1
        self.phase = GamePhase.IN_ROUND
        self.current_phrase = phrase
        self.used_phrases.add(phrase)
        self.round_answers.clear()
        self._round_answer_names.clear()
        self.round_start_time = self._clock()
        logger.info(f"Round {self.round_index}/{self.max_rounds} started in room {self.code}")

        update.notify('round_started', {
            'round': self.round_index,
            'maxRounds': self.max_rounds,
            'emojis': phrase.emojis,
            'difficulty': phrase.difficulty,
            'duration': self.settings.round_duration_seconds
        }, self.code)
        update.schedule(Transition.END_ROUND, self.settings.round_duration_seconds, self.round_index)

    def _end_round(self, update: RoomUpdate) -> None:
        self.phase = GamePhase.BETWEEN_ROUNDS
        logger.info(f"Round {self.round_index} ended in room {self.code}")

        results = [
            {
                'playerId': player_id,
                'playerName': self._round_answer_names.get(player_id, 'Unknown'),
                'timeToAnswer': answer.elapsed_ms,
                'points': answer.points
            }
            for player_id, answer in self.round_answers.items()
        ]
        update.notify('round_ended', {
            'round': self.round_index,
            'answer': self.current_phrase.answer,
            'results': results,
            'leaderboard': self.leaderboard()
        }, self.code)

        delay = self.settings.between_rounds_delay_seconds
        if self.round_index >= self.max_rounds or not self.catalog.has_unused(self.used_phrases):
            update.schedule(Transition.END_GAME, delay, self.round_index)
        else:
            update.schedule(Transition.START_ROUND, delay, self.round_index)

    def _end_game(self, update: RoomUpdate) -> None:
        self.phase = GamePhase.FINISHED
        final_leaderboard = self.leaderboard()
        winner = final_leaderboard[0] if final_leaderboard else None
        logger.info(f"Game ended in room {self.code}, winner: {winner['name'] if winner else None}")

        update.notify('game_ended', {
            'winner': winner,
            'finalLeaderboard': final_leaderboard
        }, self.code)
