# ABOUTME: Encodes session metrics and learner stats into the shadow model's feature vector.
# ABOUTME: Keeps feature order aligned with the exported scaler and classifier graphs.

from __future__ import annotations

import numpy as np

from src.common.schemas import DIFFICULTIES, LearnerAggregate, SessionMetrics

FEATURE_NAMES = (
    "score",
    "max_score",
    "accuracy",
    "duration",
    "completed_level",
    "difficulty_easy",
    "difficulty_medium",
    "difficulty_hard",
    "xp",
    "level",
    "streak",
)


def build_feature_vector(session: SessionMetrics, aggregate: LearnerAggregate) -> np.ndarray:
    """Return a float32 array of shape (1, len(FEATURE_NAMES))."""

    one_hot = [1.0 if session.difficulty == name else 0.0 for name in DIFFICULTIES]
    values = [
        session.score,
        session.max_score,
        session.accuracy,
        session.duration_seconds,
        session.completed_level,
        *one_hot,
        aggregate.xp,
        aggregate.level,
        aggregate.streak,
    ]
    return np.asarray(values, dtype=np.float32).reshape(1, len(FEATURE_NAMES))
