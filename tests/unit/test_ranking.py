"""Unit tests for the deterministic leaderboard ranking."""

from gamehub.games.ranking import rank_entries
from gamehub.games.schemas import MathModeLeaderboardEntry, SnakeLeaderboardEntry, TypeMasterLeaderboardEntry


def _math(username: str, total_correct: int, accuracy: float | None) -> MathModeLeaderboardEntry:
    return MathModeLeaderboardEntry(
        username=username,
        sessions_played=1,
        total_questions=total_correct,
        total_correct=total_correct,
        total_incorrect=0,
        avg_difficulty=1.0,
        accuracy_percentage=accuracy,
        operators_played=1,
    )


def _snake(username: str, best: int, total: int) -> SnakeLeaderboardEntry:
    return SnakeLeaderboardEntry(
        username=username, sessions_played=1, best_score=best, avg_score=float(best), total_score=total
    )


def _typing(username: str, best_wpm: int, avg_accuracy: float, mastery: float) -> TypeMasterLeaderboardEntry:
    return TypeMasterLeaderboardEntry(
        username=username,
        sessions_played=1,
        best_wpm=best_wpm,
        avg_wpm=float(best_wpm),
        avg_accuracy=avg_accuracy,
        best_accuracy=avg_accuracy,
        total_keys_typed=100,
        total_mistakes=0,
        lessons_completed=1,
        mastery_score=mastery,
    )


class TestMathModeRanking:
    FIELDS = ("total_correct", "accuracy_percentage")

    def test_total_correct_first(self):
        ranked = rank_entries([_math("a", 10, 99.0), _math("b", 20, 50.0)], self.FIELDS)
        assert [e.username for e in ranked] == ["b", "a"]

    def test_tie_broken_by_accuracy(self):
        ranked = rank_entries([_math("low", 8, 60.0), _math("high", 8, 80.0)], self.FIELDS)
        assert [e.username for e in ranked] == ["high", "low"]

    def test_null_accuracy_sorts_last(self):
        ranked = rank_entries([_math("none", 0, None), _math("zero", 0, 0.0)], self.FIELDS)
        assert [e.username for e in ranked] == ["zero", "none"]

    def test_full_tie_broken_by_username(self):
        ranked = rank_entries([_math("bob", 5, 50.0), _math("Alice", 5, 50.0)], self.FIELDS)
        assert [e.username for e in ranked] == ["Alice", "bob"]


class TestSnakeRanking:
    def test_best_then_total(self):
        entries = [_snake("a", 100, 100), _snake("b", 150, 150), _snake("c", 150, 300)]
        ranked = rank_entries(entries, ("best_score", "total_score"))
        assert [e.username for e in ranked] == ["c", "b", "a"]


class TestTypeMasterRanking:
    def test_global_view_by_mastery(self):
        entries = [_typing("fast", 90, 70.0, 63.0), _typing("steady", 70, 99.0, 69.3)]
        ranked = rank_entries(entries, ("mastery_score", "best_wpm"))
        assert ranked[0].username == "steady"

    def test_lesson_view_by_wpm_then_accuracy(self):
        entries = [_typing("a", 60, 90.0, 54.0), _typing("b", 60, 95.0, 57.0), _typing("c", 80, 50.0, 40.0)]
        ranked = rank_entries(entries, ("best_wpm", "avg_accuracy"))
        assert [e.username for e in ranked] == ["c", "b", "a"]


class TestRankNumbers:
    def test_ranks_are_contiguous(self):
        entries = [_snake(f"user{i}", 1000 - i, 0) for i in range(10)]
        ranked = rank_entries(entries, ("best_score", "total_score"))
        assert [e.rank for e in ranked] == list(range(1, 11))

    def test_capped_at_limit(self):
        entries = [_snake(f"user{i}", i, i) for i in range(75)]
        ranked = rank_entries(entries, ("best_score", "total_score"), limit=50)
        assert len(ranked) == 50
        assert ranked[0].best_score == 74
        assert ranked[-1].rank == 50

    def test_empty(self):
        assert rank_entries([], ("best_score",)) == []
