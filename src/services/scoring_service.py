"""
Scoring Service for the Emoji Guesser Game

Handles point calculation for correct guesses and leaderboard ranking.
"""

import logging
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)


class ScoringService:
    """Point values and player rankings."""

    MAX_ANSWER_TIME_MS = 60000
    POINTS_PER_DIFFICULTY = 100
    BONUS_PER_SECOND = 10

    def calculate_points(self, elapsed_ms: int, difficulty: int) -> int:
        """
        Points for a correct guess.

        Args:
            elapsed_ms: Milliseconds between round start and the guess
            difficulty: Phrase difficulty, 1 to 3

        Returns:
            ``difficulty * 100`` plus 10 points for every full second left
            in the answer window
        """
        base_points = difficulty * self.POINTS_PER_DIFFICULTY
        seconds_left = (self.MAX_ANSWER_TIME_MS - elapsed_ms) // 1000
        time_bonus = max(0, seconds_left * self.BONUS_PER_SECOND)
        return base_points + time_bonus

    def build_leaderboard(self, players: Iterable) -> List[Dict]:
        """
        Rank players by total score, highest first.

        Ties go to whoever joined the room earlier.

        Args:
            players: Player objects with ``id``, ``name``, ``total_score``
                and ``join_seq`` attributes

        Returns:
            List of leaderboard entries with rank information
        """
        ranked = sorted(players, key=lambda p: (-p.total_score, p.join_seq))
        return [
            {
                'rank': index + 1,
                'playerId': player.id,
                'name': player.name,
                'score': player.total_score,
            }
            for index, player in enumerate(ranked)
        ]
