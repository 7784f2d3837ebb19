# ABOUTME: Makes the shared common package importable across classifier modules.
# ABOUTME: Re-exports schema types and coercion helpers for convenience.

from .schemas import (
    CATEGORY_VALUES,
    LearnerAggregate,
    LearnerCategory,
    SessionMetrics,
    coerce_number,
    normalize_difficulty,
    to_number,
)

__all__ = [
    "CATEGORY_VALUES",
    "LearnerAggregate",
    "LearnerCategory",
    "SessionMetrics",
    "coerce_number",
    "normalize_difficulty",
    "to_number",
]
