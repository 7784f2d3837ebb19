# ABOUTME: Classifies learners as fast, neutral, or slow after a completed game session.
# ABOUTME: Wraps an injectable strategy, degrades to neutral on errors, and runs optional shadow models.

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from src.common.schemas import LearnerAggregate, LearnerCategory, SessionMetrics

from .features import build_feature_vector
from .strategies import (
    ClassificationStrategy,
    RuleBasedStrategy,
    ShadowModel,
    ShadowObservation,
    decode_model_label,
)

DEFAULT_SHADOW_TIMEOUT = 0.5

ShadowCallback = Callable[[ShadowObservation], None]


class LearnerClassifier:
    """
    Assigns a learner category from one session and the learner's running stats.

    The classifier holds no mutable state; every call is independent. Callers
    persist the returned category onto the learner profile themselves.
    """

    def __init__(
        self,
        strategy: Optional[ClassificationStrategy] = None,
        shadow: Optional[ShadowModel] = None,
        shadow_timeout: float = DEFAULT_SHADOW_TIMEOUT,
        on_shadow: Optional[ShadowCallback] = None,
    ):
        self.strategy = strategy or RuleBasedStrategy()
        self.shadow = shadow
        self.shadow_timeout = shadow_timeout
        self.on_shadow = on_shadow

    def classify(self, session: Any, aggregate: Any) -> LearnerCategory:
        """
        Return the category for a session and learner aggregate.

        Both arguments may be dataclasses or raw mappings. Never raises: any
        failure while computing yields neutral so game completion is not blocked.
        """

        try:
            metrics = SessionMetrics.coerce(session)
            learner = LearnerAggregate.coerce(aggregate)
            return LearnerCategory(self.strategy.classify(metrics, learner))
        except Exception as exc:
            print(f"[classifier] Classification failed, defaulting to neutral: {exc!r}")
            return LearnerCategory.NEUTRAL

    async def classify_async(self, session: Any, aggregate: Any) -> LearnerCategory:
        """Classify, then consult the shadow model if one is configured. The returned label is always the strategy's."""

        category = self.classify(session, aggregate)
        if self.shadow is not None:
            await self.observe_shadow(session, aggregate, category)
        return category

    async def observe_shadow(
        self, session: Any, aggregate: Any, category: LearnerCategory
    ) -> Optional[ShadowObservation]:
        try:
            features = build_feature_vector(SessionMetrics.coerce(session), LearnerAggregate.coerce(aggregate))
            raw_label = await asyncio.wait_for(self.shadow.predict(features), timeout=self.shadow_timeout)
        except asyncio.TimeoutError:
            print(f"[classifier] Shadow model timed out after {self.shadow_timeout}s")
            return None
        except Exception as exc:
            print(f"[classifier] Shadow model failed: {exc!r}")
            return None

        observation = ShadowObservation(
            rule_category=category,
            shadow_category=decode_model_label(raw_label),
            raw_label=raw_label,
        )
        print(
            f"[classifier] Shadow prediction: {observation.shadow_category.value} "
            f"(applied: {category.value}, agrees={observation.agrees})"
        )
        if self.on_shadow is not None:
            try:
                self.on_shadow(observation)
            except Exception as exc:
                print(f"[classifier] Shadow callback failed: {exc!r}")
        return observation


async def load_classifier(
    shadow_loader: Optional[Callable[[], Awaitable[ShadowModel]]] = None,
    strategy: Optional[ClassificationStrategy] = None,
    shadow_timeout: float = DEFAULT_SHADOW_TIMEOUT,
    on_shadow: Optional[ShadowCallback] = None,
) -> LearnerClassifier:
    """
    Build a ready-to-use classifier, awaiting the shadow model load when one is requested.

    A failed load leaves the classifier without a shadow model; the rule-based
    path is unaffected.
    """

    shadow = None
    if shadow_loader is not None:
        print("[classifier] Loading shadow model...")
        try:
            shadow = await shadow_loader()
        except Exception as exc:
            print(f"[classifier] Failed to load shadow model: {exc!r}")
        else:
            print("[classifier] Shadow model loaded")
    return LearnerClassifier(
        strategy=strategy,
        shadow=shadow,
        shadow_timeout=shadow_timeout,
        on_shadow=on_shadow,
    )
