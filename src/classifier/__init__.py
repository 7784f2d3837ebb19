# ABOUTME: Groups the learner classification engine and its batch tooling.
# ABOUTME: Re-exports the classifier, strategies, rubric helpers, and shadow model support.

from .classifier import LearnerClassifier, load_classifier
from .features import FEATURE_NAMES, build_feature_vector
from .rules import RubricThresholds, ScoreBreakdown, category_for_score, performance_score, score_breakdown
from .strategies import (
    ClassificationStrategy,
    RuleBasedStrategy,
    ShadowModel,
    ShadowObservation,
    decode_model_label,
)
from .submissions import resolve_profile_category, session_from_quiz

__all__ = [
    "LearnerClassifier",
    "load_classifier",
    "FEATURE_NAMES",
    "build_feature_vector",
    "RubricThresholds",
    "ScoreBreakdown",
    "category_for_score",
    "performance_score",
    "score_breakdown",
    "ClassificationStrategy",
    "RuleBasedStrategy",
    "ShadowModel",
    "ShadowObservation",
    "decode_model_label",
    "resolve_profile_category",
    "session_from_quiz",
]
