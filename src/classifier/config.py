# ABOUTME: Loads classifier settings from YAML into frozen dataclasses.
# ABOUTME: Covers shadow model timeouts, batch reclassification paths, and configured classifier setup.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping, Optional

import yaml

from .classifier import DEFAULT_SHADOW_TIMEOUT, LearnerClassifier, load_classifier
from .strategies import ShadowModel


@dataclass(frozen=True)
class ShadowConfig:
    timeout_seconds: float = DEFAULT_SHADOW_TIMEOUT


@dataclass(frozen=True)
class ReclassifyConfig:
    students_path: Path = Path("data/students.csv")
    games_path: Path = Path("data/game_results.csv")
    report_path: Optional[Path] = None


@dataclass(frozen=True)
class ClassifierConfig:
    shadow: ShadowConfig = field(default_factory=ShadowConfig)
    reclassify: ReclassifyConfig = field(default_factory=ReclassifyConfig)

    @classmethod
    def from_dict(cls, cfg: Optional[Mapping[str, Any]]) -> "ClassifierConfig":
        cfg = cfg or {}
        shadow_cfg = cfg.get("shadow") or {}
        reclassify_cfg = dict(cfg.get("reclassify") or {})
        for key in ("students_path", "games_path", "report_path"):
            if reclassify_cfg.get(key) is not None:
                reclassify_cfg[key] = Path(reclassify_cfg[key])
        return cls(
            shadow=ShadowConfig(**shadow_cfg),
            reclassify=ReclassifyConfig(**reclassify_cfg),
        )


def load_config(config_path: Path) -> ClassifierConfig:
    with open(config_path) as f:
        cfg = yaml.safe_load(f)
    return ClassifierConfig.from_dict(cfg)


async def build_classifier(
    cfg: ClassifierConfig,
    shadow_loader: Optional[Callable[[], Awaitable[ShadowModel]]] = None,
) -> LearnerClassifier:
    """Programmatic entrypoint: a ready classifier honoring the configured shadow timeout."""

    return await load_classifier(shadow_loader=shadow_loader, shadow_timeout=cfg.shadow.timeout_seconds)
