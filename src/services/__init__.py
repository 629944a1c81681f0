"""
Services package for the Emoji Guesser game

Contains single-purpose services used by rooms, handlers and the session directory.
"""

from .answer_matcher import AnswerMatcher
from .scoring_service import ScoringService
from .session_service import SessionService
from .broadcast_service import BroadcastService
from .round_scheduler import RoundScheduler
from .validation_service import ValidationService
from .error_response_factory import ErrorResponseFactory

__all__ = [
    'AnswerMatcher',
    'ScoringService',
    'SessionService',
    'BroadcastService',
    'RoundScheduler',
    'ValidationService',
    'ErrorResponseFactory'
]
