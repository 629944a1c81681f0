"""
Scoring Service Unit Tests
Tests for point calculation and leaderboard ordering.
"""

import pytest

from src.game_room import Player
from src.services.scoring_service import ScoringService


class TestCalculatePoints:
    """Test ScoringService.calculate_points"""

    def setup_method(self):
        self.scoring = ScoringService()

    @pytest.mark.parametrize("elapsed_ms, difficulty, expected", [
        (0, 1, 700),
        (0, 3, 900),
        (999, 1, 690),
        (1000, 1, 690),
        (10500, 2, 690),
        (59999, 1, 100),
        (60000, 2, 200),
        (90000, 3, 300),
    ])
    def test_points(self, elapsed_ms, difficulty, expected):
        assert self.scoring.calculate_points(elapsed_ms, difficulty) == expected

    def test_points_never_increase_with_elapsed_time(self):
        scores = [self.scoring.calculate_points(ms, 2) for ms in range(0, 70000, 250)]
        assert all(later <= earlier for earlier, later in zip(scores, scores[1:]))

    def test_points_increase_with_difficulty(self):
        for elapsed_ms in (0, 12345, 60000, 120000):
            easy, medium, hard = (self.scoring.calculate_points(elapsed_ms, d) for d in (1, 2, 3))
            assert easy < medium < hard


class TestBuildLeaderboard:
    """Test ScoringService.build_leaderboard"""

    def setup_method(self):
        self.scoring = ScoringService()

    def test_sorted_by_score_descending(self):
        players = [
            Player(id='a', name='Ann', join_seq=0, total_score=100),
            Player(id='b', name='Bob', join_seq=1, total_score=300),
            Player(id='c', name='Cid', join_seq=2, total_score=200),
        ]

        leaderboard = self.scoring.build_leaderboard(players)

        assert [entry['name'] for entry in leaderboard] == ['Bob', 'Cid', 'Ann']
        assert [entry['rank'] for entry in leaderboard] == [1, 2, 3]
        assert leaderboard[0] == {'rank': 1, 'playerId': 'b', 'name': 'Bob', 'score': 300}

    def test_ties_broken_by_join_order(self):
        players = [
            Player(id='late', name='Late', join_seq=5, total_score=250),
            Player(id='early', name='Early', join_seq=1, total_score=250),
        ]

        leaderboard = self.scoring.build_leaderboard(players)

        assert [entry['playerId'] for entry in leaderboard] == ['early', 'late']

    def test_empty(self):
        assert self.scoring.build_leaderboard([]) == []
