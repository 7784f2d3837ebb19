# ABOUTME: Tests lenient coercion of session metrics and learner aggregates.
# ABOUTME: Ensures malformed payloads fall back to defaults instead of raising.

import math

from src.common.schemas import (
    LearnerAggregate,
    LearnerCategory,
    SessionMetrics,
    coerce_number,
    normalize_difficulty,
    to_number,
)


def test_to_number_parses_loose_values():
    assert to_number("12.5") == 12.5
    assert to_number(" 3 ") == 3.0
    assert to_number("") == 0.0
    assert to_number(True) == 1.0
    assert to_number("abc") is None
    assert to_number(None) is None
    assert to_number(float("nan")) is None
    assert to_number([1, 2]) is None


def test_coerce_number_uses_default_for_falsy():
    assert coerce_number("abc") == 0.0
    assert coerce_number(None, 100.0) == 100.0
    assert coerce_number(0, 100.0) == 100.0
    assert coerce_number("40", 100.0) == 40.0


def test_normalize_difficulty():
    assert normalize_difficulty("HARD") == "hard"
    assert normalize_difficulty(" Easy ") == "easy"
    assert normalize_difficulty("impossible") == "medium"
    assert normalize_difficulty(None) == "medium"
    assert normalize_difficulty(3) == "medium"


def test_session_from_camel_case_payload():
    session = SessionMetrics.from_mapping(
        {"score": "45", "maxScore": 50, "accuracy": 0.9, "duration": 120, "difficulty": "Hard", "completedLevel": 3}
    )
    assert session == SessionMetrics(
        score=45.0, max_score=50.0, accuracy=0.9, duration_seconds=120.0, difficulty="hard", completed_level=3.0
    )


def test_session_defaults_for_missing_and_invalid_fields():
    session = SessionMetrics.from_mapping({"score": "abc", "maxScore": 0})
    assert session.score == 0.0
    assert session.max_score == 100.0
    assert session.accuracy == 0.0
    assert session.difficulty == "medium"
    assert session.completed_level == 1.0


def test_duration_falls_back_to_time_taken():
    session = SessionMetrics.from_mapping({"duration": 0, "timeTaken": 240})
    assert session.duration_seconds == 240.0


def test_coerce_renormalizes_dataclass_fields():
    raw = SessionMetrics(score="abc", max_score=None, difficulty="HARD")
    session = SessionMetrics.coerce(raw)
    assert session.score == 0.0
    assert session.max_score == 100.0
    assert session.difficulty == "hard"


def test_learner_aggregate_coercion():
    learner = LearnerAggregate.coerce({"xp": "1200", "level": None, "streak": float("nan")})
    assert learner == LearnerAggregate(xp=1200.0, level=1.0, streak=0.0)
    assert LearnerAggregate.coerce(None) == LearnerAggregate()
    assert not math.isnan(learner.streak)


def test_category_is_string_valued():
    assert LearnerCategory("fast") is LearnerCategory.FAST
    assert LearnerCategory.SLOW == "slow"
    assert str(LearnerCategory.NEUTRAL) == "neutral"


def test_oversized_integers_coerce_to_infinity():
    assert to_number(10**400) == math.inf
    assert to_number(-(10**400)) == -math.inf
    assert coerce_number(10**400) == math.inf
    assert LearnerAggregate.from_mapping({"xp": 10**400}).xp == math.inf


def test_to_number_rejects_python_only_spellings():
    assert to_number("1_000") is None
    assert to_number("inf") is None
    assert to_number("-inf") is None
    assert to_number("nan ") is None
    assert to_number("infinity") is None
    assert coerce_number("inf") == 0.0


def test_to_number_accepts_client_numeric_strings():
    assert to_number("Infinity") == math.inf
    assert to_number("-Infinity") == -math.inf
    assert to_number("0x10") == 16.0
    assert to_number("0b101") == 5.0
    assert to_number("1e3") == 1000.0
    assert to_number(".5") == 0.5
    assert to_number("5.") == 5.0
    assert to_number("+7") == 7.0
