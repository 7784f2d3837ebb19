# ABOUTME: Converts quiz submissions into session metrics for classification.
# ABOUTME: Applies the profile update policy used when an assignment is completed.

from __future__ import annotations

from typing import Any, Optional

from src.common.schemas import CATEGORY_VALUES, LearnerCategory, SessionMetrics, coerce_number

POINTS_PER_QUESTION = 10
SECONDS_PER_QUESTION = 30


def infer_quiz_accuracy(score: float, total_questions: float) -> float:
    """
    Estimate accuracy from a submitted quiz score.

    Scores up to the question count are treated as a count of correct answers;
    larger scores are treated as points at POINTS_PER_QUESTION each.
    """

    if total_questions <= 0:
        return 0.0
    if score <= total_questions:
        return score / total_questions
    return score / (total_questions * POINTS_PER_QUESTION)


def session_from_quiz(score: Any, total_questions: Any) -> SessionMetrics:
    score_value = coerce_number(score)
    total = coerce_number(total_questions)
    return SessionMetrics.from_mapping(
        {
            "score": score_value,
            "max_score": total * POINTS_PER_QUESTION,
            "accuracy": infer_quiz_accuracy(score_value, total),
            "duration_seconds": total * SECONDS_PER_QUESTION,
            "difficulty": "medium",
            "completed_level": 1,
        }
    )


def resolve_profile_category(current: Optional[str], new: LearnerCategory) -> LearnerCategory:
    """Assignment completions only overwrite the stored category with a decisive label."""

    if new != LearnerCategory.NEUTRAL:
        return LearnerCategory(new)
    if current in CATEGORY_VALUES:
        return LearnerCategory(current)
    return LearnerCategory.NEUTRAL
