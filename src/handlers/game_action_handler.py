"""
Game Action Handler

This module handles Socket.IO events related to game actions:
starting the game and submitting guesses.
"""

import logging

from src.services.error_response_factory import with_error_handling
from .base_handler import BaseGameHandler

logger = logging.getLogger(__name__)


class GameActionHandler(BaseGameHandler):
    """Handler for in-game actions."""

    @with_error_handling
    def handle_start_game(self, data=None):
        """
        Handle the host's request to start the game.
        Rejected with an error unless the caller is the host of a waiting
        room with enough players.
        """
        self.log_handler_start('handle_start_game', data)
        self.session_directory.start_game(self.current_handle)

    @with_error_handling
    def handle_submit_guess(self, data=None):
        """
        Handle a guess for the current round.

        Expected data format:
        {
            'guess': 'free text'
        }

        Guesses outside a round, repeat guesses and empty guesses are
        dropped without a reply.
        """
        self.log_handler_start('handle_submit_guess', data)

        guess = self.validate_guess_data(data)
        if guess is None:
            return

        self.session_directory.submit_guess(self.current_handle, guess)
