# ABOUTME: Defines canonical data structures shared by the classifier and batch tools.
# ABOUTME: Centralizes session metrics, learner aggregates, and category labels with lenient coercion.

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

DIFFICULTIES = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY = "medium"
DEFAULT_MAX_SCORE = 100.0


class LearnerCategory(str, Enum):
    """Label written onto a learner profile after a session."""

    FAST = "fast"
    NEUTRAL = "neutral"
    SLOW = "slow"

    def __str__(self) -> str:
        return self.value


CATEGORY_VALUES = tuple(category.value for category in LearnerCategory)


_DECIMAL_PATTERN = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_RADIX_PATTERN = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def _parse_numeric_text(text: str) -> Optional[float]:
    """Accept only the string forms a JSON client's `Number()` accepts; `1_000`, `inf` and `nan` are rejected."""

    if _RADIX_PATTERN.fullmatch(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            return math.inf
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    if text.lstrip("+-") == "Infinity":
        return -math.inf if text.startswith("-") else math.inf
    return float(text)


def to_number(value: Any) -> Optional[float]:
    """
    Parse a loosely-typed value into a float.

    Returns None for values that are not numbers (None, NaN, unparseable strings).
    Blank strings parse to 0.0 and booleans to 0/1, matching how JSON payloads
    from the mobile client are interpreted. Integers too large for a float
    become signed infinity.
    """

    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        number = _parse_numeric_text(text)
        if number is None:
            return None
    else:
        try:
            number = float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
        except (TypeError, ValueError):
            return None
    if math.isnan(number):
        return None
    return number


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Coerce with `Number(x) || default` semantics: missing, invalid, or zero yields the default."""

    number = to_number(value)
    return number if number else default


def normalize_difficulty(value: Any) -> str:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in DIFFICULTIES:
            return text
    return DEFAULT_DIFFICULTY


def _lookup(payload: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the first truthy value among alias keys (`a || b` style fallback)."""

    fallback = None
    for key in keys:
        if key not in payload:
            continue
        value = payload[key]
        if to_number(value) or (isinstance(value, str) and value.strip()):
            return value
        if fallback is None:
            fallback = value
    return fallback


@dataclass(frozen=True)
class SessionMetrics:
    """Performance data from one completed game or quiz attempt."""

    score: float = 0.0
    max_score: float = DEFAULT_MAX_SCORE
    accuracy: float = 0.0  # fraction in [0, 1]
    duration_seconds: float = 0.0
    difficulty: str = DEFAULT_DIFFICULTY
    completed_level: float = 1.0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SessionMetrics":
        """Build metrics from a JSON payload or table row, accepting snake_case and camelCase keys."""

        return cls(
            score=coerce_number(_lookup(payload, ("score",))),
            max_score=coerce_number(_lookup(payload, ("max_score", "maxScore")), DEFAULT_MAX_SCORE),
            accuracy=coerce_number(_lookup(payload, ("accuracy",))),
            duration_seconds=coerce_number(
                _lookup(payload, ("duration_seconds", "durationSeconds", "duration", "time_taken", "timeTaken"))
            ),
            difficulty=normalize_difficulty(_lookup(payload, ("difficulty",))),
            completed_level=coerce_number(_lookup(payload, ("completed_level", "completedLevel")), 1.0),
        )

    @classmethod
    def coerce(cls, value: Any) -> "SessionMetrics":
        """Accept an existing instance or a mapping; fields are always re-normalized."""

        if isinstance(value, SessionMetrics):
            return cls.from_mapping(asdict(value))
        if value is None:
            return cls()
        return cls.from_mapping(value)


@dataclass(frozen=True)
class LearnerAggregate:
    """Cumulative profile statistics independent of any single session."""

    xp: float = 0.0
    level: float = 1.0
    streak: float = 0.0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "LearnerAggregate":
        return cls(
            xp=coerce_number(payload.get("xp")),
            level=coerce_number(payload.get("level"), 1.0),
            streak=coerce_number(payload.get("streak")),
        )

    @classmethod
    def coerce(cls, value: Any) -> "LearnerAggregate":
        if isinstance(value, LearnerAggregate):
            return cls.from_mapping(asdict(value))
        if value is None:
            return cls()
        return cls.from_mapping(value)
