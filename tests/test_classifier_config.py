# ABOUTME: Tests YAML loading of classifier settings into dataclasses.
# ABOUTME: Verifies defaults for missing sections and path conversion.

import asyncio
from pathlib import Path

from src.classifier.config import ClassifierConfig, build_classifier, load_config


def test_load_config_from_yaml(tmp_path):
    config_path = tmp_path / "classifier.yaml"
    config_path.write_text(
        """
shadow:
  timeout_seconds: 0.25
reclassify:
  students_path: exports/students.parquet
  games_path: exports/games.parquet
  report_path: reports/out.csv
""",
        encoding="utf-8",
    )

    cfg = load_config(config_path)

    assert cfg.shadow.timeout_seconds == 0.25
    assert cfg.reclassify.students_path == Path("exports/students.parquet")
    assert cfg.reclassify.report_path == Path("reports/out.csv")


def test_missing_sections_use_defaults(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg == ClassifierConfig()
    assert cfg.reclassify.report_path is None


def test_repo_config_is_loadable():
    cfg = load_config(Path(__file__).resolve().parents[1] / "configs" / "classifier.yaml")
    assert cfg.shadow.timeout_seconds == 0.5
    assert cfg.reclassify.games_path == Path("data/game_results.csv")


def test_build_classifier_applies_shadow_timeout():
    cfg = ClassifierConfig.from_dict({"shadow": {"timeout_seconds": 0.1}})

    class _Shadow:
        async def predict(self, features):
            return 1

    async def loader():
        return _Shadow()

    classifier = asyncio.run(build_classifier(cfg, shadow_loader=loader))
    assert classifier.shadow_timeout == 0.1
    assert classifier.shadow is not None
