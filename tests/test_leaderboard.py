"""
Leaderboard Store Tests

Tests for score validation, ranking, trimming, queries and stats, run
against both the in-memory and the JSON file backend.

Run with: pytest tests/test_leaderboard.py -v
"""

import json

import pytest

from tapper.leaderboard import (
    MAX_RECORDS,
    InvalidScoreError,
    JsonFileLeaderboard,
    LeaderboardStorageError,
    MemoryLeaderboard,
)


@pytest.fixture(params=['memory', 'json'])
def board(request, fake_clock, tmp_path):
    """Each test runs against both backends."""
    if request.param == 'memory':
        return MemoryLeaderboard(clock=fake_clock)
    return JsonFileLeaderboard(tmp_path / 'scores.json', clock=fake_clock)


class TestSave:
    """Test saving and validation."""

    def test_save_returns_record(self, board, fake_clock):
        record = board.save(1250, 'Alice')

        assert record.score == 1250
        assert record.label == 'Alice'
        assert record.timestamp == int(fake_clock.now)
        assert record.id
        assert board.list() == [record]

    def test_default_label(self, board):
        assert board.save(10).label == 'Player'
        assert board.save(10, '   ').label == 'Player'
        assert board.save(10, '  Bob  ').label == 'Bob'

    @pytest.mark.parametrize("score", [-1, 1.5, True, False, '100', None, float('nan')])
    def test_rejects_invalid_scores(self, board, score):
        """Invalid scores raise before anything is stored."""
        with pytest.raises(InvalidScoreError):
            board.save(score)
        assert len(board) == 0

    def test_invalid_score_is_value_error(self, board):
        with pytest.raises(ValueError):
            board.save(-5)

    def test_integral_float_accepted(self, board):
        record = board.save(300.0)
        assert record.score == 300
        assert isinstance(record.score, int)

    def test_zero_accepted(self, board):
        assert board.save(0).score == 0

    def test_unique_ids(self, board):
        ids = {board.save(1).id for _ in range(5)}
        assert len(ids) == 5


class TestRanking:
    """Test ordering and the top-100 cap."""

    def test_highest_first(self, board):
        for score in (100, 300, 200):
            board.save(score)
        assert [r.score for r in board.list()] == [300, 200, 100]

    def test_ties_go_to_earlier(self, board, fake_clock):
        first = board.save(500, 'early')
        fake_clock.advance(1000)
        second = board.save(500, 'late')
        assert [r.id for r in board.list()] == [first.id, second.id]

    def test_keeps_top_hundred(self, board):
        for score in range(105):
            board.save(score)

        records = board.list(100)
        assert len(board) == MAX_RECORDS
        assert records[0].score == 104
        assert records[-1].score == 5

    def test_low_score_evicted_immediately(self, board):
        for _ in range(MAX_RECORDS):
            board.save(1000)
        board.save(1)
        assert len(board) == MAX_RECORDS
        assert board.stats().min == 1000


class TestQueries:
    """Test list and by_label limits."""

    @pytest.fixture
    def full_board(self, board):
        for score in range(30):
            board.save(score, 'alice' if score % 2 else 'Bob')
        return board

    @pytest.mark.parametrize("limit,expected", [
        (20, 20),
        (5, 5),
        (0, 20),
        (-5, 1),
        (1000, 30),
        ('7', 7),
        ('abc', 20),
        (None, 20),
        (float('inf'), 20),
        (float('nan'), 20),
    ])
    def test_list_limit_clamped(self, full_board, limit, expected):
        assert len(full_board.list(limit)) == expected

    def test_infinite_limit_returns_all(self, board):
        for score in (10, 30, 20):
            board.save(score)
        assert [r.score for r in board.list(float('inf'))] == [30, 20, 10]
        assert len(board.by_label('Player', float('-inf'))) == 3

    def test_list_default(self, full_board):
        assert len(full_board.list()) == 20

    def test_by_label_case_insensitive(self, full_board):
        records = full_board.by_label('ALICE', 50)
        assert len(records) == 15
        assert all(r.label == 'alice' for r in records)
        assert [r.score for r in records] == sorted((r.score for r in records), reverse=True)

    def test_by_label_default_limit(self, full_board):
        assert len(full_board.by_label('bob')) == 10

    def test_by_label_limit_capped(self, board):
        for _ in range(60):
            board.save(5, 'Carol')
        assert len(board.by_label('carol', 500)) == 50

    def test_by_label_unknown(self, full_board):
        assert full_board.by_label('nobody') == []


class TestStats:
    """Test aggregate stats."""

    def test_empty(self, board):
        stats = board.stats()
        assert (stats.count, stats.average, stats.max, stats.min) == (0, 0, 0, 0)

    def test_stats(self, board):
        for score in (100, 200, 250):
            board.save(score)
        stats = board.stats()
        assert stats.count == 3
        assert stats.average == 183
        assert stats.max == 250
        assert stats.min == 100

    def test_average_rounds_half_up(self, board):
        board.save(1)
        board.save(2)
        assert board.stats().average == 2


class TestMaintenance:
    """Test clear and relabeling."""

    def test_clear(self, board):
        board.save(10)
        board.clear()
        assert board.list() == []
        assert board.stats().count == 0

    def test_update_recent_label(self, board, fake_clock):
        old = board.save(100, 'Player')
        fake_clock.advance(30_000)
        recent = board.save(200, 'player')
        board.save(300, 'Someone')
        fake_clock.advance(40_000)

        updated = board.update_recent_label('Player', 'Dana')

        assert updated == 1
        labels = {r.id: r.label for r in board.list()}
        assert labels[recent.id] == 'Dana'
        assert labels[old.id] == 'Player'

    def test_update_same_label_is_noop(self, board):
        board.save(100, 'Player')
        assert board.update_recent_label('player', 'PLAYER') == 0
        assert board.list()[0].label == 'Player'

    def test_update_custom_window(self, board, fake_clock):
        board.save(100, 'Player')
        fake_clock.advance(5_000)
        assert board.update_recent_label('Player', 'Eve', max_age_ms=1_000) == 0
        assert board.update_recent_label('Player', 'Eve', max_age_ms=10_000) == 1


class TestJsonFile:
    """Test JSON persistence specifics."""

    def test_persists_across_instances(self, tmp_path, fake_clock):
        path = tmp_path / 'scores.json'
        JsonFileLeaderboard(path, clock=fake_clock).save(42, 'Zoe')

        reloaded = JsonFileLeaderboard(path)
        assert [(r.score, r.label) for r in reloaded.list()] == [(42, 'Zoe')]

    def test_file_format(self, tmp_path):
        path = tmp_path / 'scores.json'
        JsonFileLeaderboard(path, clock=lambda: 1234).save(7, 'Ann')

        data = json.loads(path.read_text())
        assert len(data) == 1
        assert data[0]['score'] == 7
        assert data[0]['label'] == 'Ann'
        assert data[0]['timestamp'] == 1234
        assert set(data[0]) == {'id', 'score', 'label', 'timestamp'}

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / 'nested' / 'dir' / 'scores.json'
        JsonFileLeaderboard(path).save(1)
        assert path.exists()

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / 'scores.json'
        path.write_text('{not json')

        board = JsonFileLeaderboard(path)
        assert board.list() == []

        board.save(5)
        assert [r.score for r in JsonFileLeaderboard(path).list()] == [5]

    def test_wrong_shape_reads_empty(self, tmp_path):
        path = tmp_path / 'scores.json'
        path.write_text(json.dumps([{'score': 'lots'}]))
        assert JsonFileLeaderboard(path).list() == []

    def test_write_failure_raises(self, tmp_path):
        """A path that cannot be written raises a storage error."""
        board = JsonFileLeaderboard(tmp_path)
        with pytest.raises(LeaderboardStorageError):
            board.save(10)

    def test_clear_removes_file(self, tmp_path):
        path = tmp_path / 'scores.json'
        board = JsonFileLeaderboard(path)
        board.save(10)
        board.clear()
        assert not path.exists()
        board.clear()
