# ABOUTME: Measures how often an experimental shadow model agrees with the rule-based labels.
# ABOUTME: Computes agreement, Cohen's kappa, and confusion tables over collected observations.

from typing import Iterable, Mapping, Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, cohen_kappa_score, confusion_matrix

from src.common.schemas import LearnerCategory

from .strategies import ShadowObservation

LABEL_ORDER = [LearnerCategory.SLOW.value, LearnerCategory.NEUTRAL.value, LearnerCategory.FAST.value]


def observations_to_frame(observations: Sequence[ShadowObservation]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "rule_category": [obs.rule_category.value for obs in observations],
            "shadow_category": [obs.shadow_category.value for obs in observations],
        },
        columns=["rule_category", "shadow_category"],
    )


def evaluate_shadow_agreement(
    observations: pd.DataFrame, metrics: Iterable[str] = ("agreement", "cohen_kappa")
) -> Mapping[str, float]:
    """
    Evaluate shadow labels against the applied rule-based labels.

    Parameters
    ----------
    observations : pd.DataFrame
        Expected columns: ['rule_category', 'shadow_category'].
    metrics : Iterable[str]
        Metric identifiers: 'agreement' or 'cohen_kappa'.
    """

    metrics = list(metrics)
    if observations is None or len(observations) == 0:
        return {metric: np.nan for metric in metrics}

    y_rule = observations["rule_category"].astype(str)
    y_shadow = observations["shadow_category"].astype(str)

    results = {}
    for metric in metrics:
        if metric == "agreement":
            results[metric] = float(accuracy_score(y_rule, y_shadow))
        elif metric == "cohen_kappa":
            # Kappa is undefined when both sides use one shared label.
            if len(set(y_rule) | set(y_shadow)) < 2:
                results[metric] = 1.0
            else:
                results[metric] = float(cohen_kappa_score(y_rule, y_shadow, labels=LABEL_ORDER))
        else:
            raise ValueError(f"Unsupported metric '{metric}'.")

    return results


def shadow_confusion_frame(observations: pd.DataFrame) -> pd.DataFrame:
    """Rows are rule-based labels, columns are shadow labels."""

    if observations is None or len(observations) == 0:
        matrix = np.zeros((len(LABEL_ORDER), len(LABEL_ORDER)), dtype=int)
    else:
        matrix = confusion_matrix(
            observations["rule_category"].astype(str),
            observations["shadow_category"].astype(str),
            labels=LABEL_ORDER,
        )
    return pd.DataFrame(matrix, index=LABEL_ORDER, columns=LABEL_ORDER)
