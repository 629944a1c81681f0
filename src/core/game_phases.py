"""
Game Phase Enumeration

Defines the room phase states used throughout the application.
"""

from enum import Enum


class GamePhase(Enum):
    """Game phase enumeration."""
    WAITING = "waiting"
    IN_ROUND = "in_round"
    BETWEEN_ROUNDS = "between_rounds"
    FINISHED = "finished"
