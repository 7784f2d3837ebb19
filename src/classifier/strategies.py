# ABOUTME: Declares pluggable classification strategies and the shadow model interface.
# ABOUTME: Ships the rule-based default and decodes raw labels emitted by experimental models.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import numpy as np

from src.common.schemas import CATEGORY_VALUES, LearnerAggregate, LearnerCategory, SessionMetrics, to_number

from .rules import ScoreBreakdown, category_for_score, score_breakdown


class ClassificationStrategy(Protocol):
    def classify(self, session: SessionMetrics, aggregate: LearnerAggregate) -> LearnerCategory:
        ...


class ShadowModel(Protocol):
    """Experimental model evaluated next to the rules; its output is observed, never applied."""

    async def predict(self, features: np.ndarray) -> Any:
        ...


class RuleBasedStrategy:
    """Default strategy: the weighted point rubric."""

    def breakdown(self, session: SessionMetrics, aggregate: LearnerAggregate) -> ScoreBreakdown:
        return score_breakdown(session, aggregate)

    def classify(self, session: SessionMetrics, aggregate: LearnerAggregate) -> LearnerCategory:
        return category_for_score(self.breakdown(session, aggregate).total)


@dataclass(frozen=True)
class ShadowObservation:
    rule_category: LearnerCategory
    shadow_category: LearnerCategory
    raw_label: Any

    @property
    def agrees(self) -> bool:
        return self.rule_category == self.shadow_category


def decode_model_label(raw: Any) -> LearnerCategory:
    """
    Map a raw classifier output onto a category.

    Label 0 means slow and 1 means fast; category names pass through. Anything
    else, including unknown strings, decodes to neutral.
    """

    if isinstance(raw, np.ndarray):
        if raw.size == 0:
            return LearnerCategory.NEUTRAL
        raw = raw.ravel()[0]
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in CATEGORY_VALUES:
            return LearnerCategory(text)
        if not text:
            return LearnerCategory.NEUTRAL

    number: Optional[float] = to_number(raw)
    if number == 0:
        return LearnerCategory.SLOW
    if number == 1:
        return LearnerCategory.FAST
    return LearnerCategory.NEUTRAL
