# ABOUTME: Scores a learner's session with the weighted point rubric and buckets the total.
# ABOUTME: Provides per-rule breakdowns for score, accuracy, difficulty, progress, and consistency.

from __future__ import annotations

from dataclasses import dataclass

from src.common.schemas import LearnerAggregate, LearnerCategory, SessionMetrics


class RubricThresholds:
    FAST_MIN_POINTS = 70
    SLOW_MAX_POINTS = 35
    MAX_POINTS = 110

    # (minimum percentage, points), checked top-down.
    SCORE_BANDS = ((85, 40), (70, 30), (50, 15))
    ACCURACY_BANDS = ((85, 30), (70, 20), (50, 10))

    # (difficulty, minimum score percentage, points), first match wins.
    DIFFICULTY_BONUSES = (("hard", 60, 15), ("medium", 70, 10), ("easy", 80, 5))

    # (minimum xp, minimum level or None, points), first match wins.
    PROGRESS_BANDS = ((1000, 5, 15), (500, 3, 10), (100, None, 5))

    STREAK_BANDS = ((7, 10), (3, 5))


@dataclass(frozen=True)
class ScoreBreakdown:
    score_percentage: float
    score_points: int
    accuracy_points: int
    difficulty_points: int
    progress_points: int
    consistency_points: int

    @property
    def total(self) -> int:
        return (
            self.score_points
            + self.accuracy_points
            + self.difficulty_points
            + self.progress_points
            + self.consistency_points
        )

    def as_rows(self):
        return [
            ("Score", self.score_points),
            ("Accuracy", self.accuracy_points),
            ("Difficulty bonus", self.difficulty_points),
            ("Overall progress", self.progress_points),
            ("Consistency", self.consistency_points),
        ]


def score_percentage(score: float, max_score: float) -> float:
    if not max_score:
        return 0.0
    return score / max_score * 100


def _banded(value: float, bands) -> int:
    for minimum, points in bands:
        if value >= minimum:
            return points
    return 0


def score_points(percentage: float) -> int:
    return _banded(percentage, RubricThresholds.SCORE_BANDS)


def accuracy_points(accuracy: float) -> int:
    return _banded(accuracy * 100, RubricThresholds.ACCURACY_BANDS)


def difficulty_points(difficulty: str, percentage: float) -> int:
    for name, minimum, points in RubricThresholds.DIFFICULTY_BONUSES:
        if difficulty == name and percentage >= minimum:
            return points
    return 0


def progress_points(xp: float, level: float) -> int:
    for min_xp, min_level, points in RubricThresholds.PROGRESS_BANDS:
        if xp >= min_xp and (min_level is None or level >= min_level):
            return points
    return 0


def consistency_points(streak: float) -> int:
    return _banded(streak, RubricThresholds.STREAK_BANDS)


def score_breakdown(session: SessionMetrics, aggregate: LearnerAggregate) -> ScoreBreakdown:
    """
    Apply each rubric rule to already-normalized inputs.

    The difficulty bonus is an if/else-if chain: a hard session that misses the
    hard threshold earns nothing, it is never re-checked against the medium or
    easy rules.
    """

    percentage = score_percentage(session.score, session.max_score)
    return ScoreBreakdown(
        score_percentage=percentage,
        score_points=score_points(percentage),
        accuracy_points=accuracy_points(session.accuracy),
        difficulty_points=difficulty_points(session.difficulty, percentage),
        progress_points=progress_points(aggregate.xp, aggregate.level),
        consistency_points=consistency_points(aggregate.streak),
    )


def performance_score(session: SessionMetrics, aggregate: LearnerAggregate) -> int:
    return score_breakdown(session, aggregate).total


def category_for_score(points: float) -> LearnerCategory:
    if points >= RubricThresholds.FAST_MIN_POINTS:
        return LearnerCategory.FAST
    if points <= RubricThresholds.SLOW_MAX_POINTS:
        return LearnerCategory.SLOW
    return LearnerCategory.NEUTRAL
