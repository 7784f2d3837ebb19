# ABOUTME: Re-runs classification for every student against their most recent game result.
# ABOUTME: Produces a per-student report of old versus new categories for maintenance runs.

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.common.schemas import CATEGORY_VALUES, LearnerAggregate, LearnerCategory, SessionMetrics

from .classifier import LearnerClassifier
from .rules import performance_score

STATUS_ALREADY_CORRECT = "already_correct"
STATUS_UPDATED = "updated"
STATUS_NO_GAMES = "no_games"
STATUSES = (STATUS_ALREADY_CORRECT, STATUS_UPDATED, STATUS_NO_GAMES)

REPORT_COLUMNS = ["user_id", "name", "old_category", "new_category", "performance_score", "status"]
STUDENT_REQUIRED_COLUMNS = {"user_id"}
GAME_REQUIRED_COLUMNS = {"user_id", "score"}


def read_table(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".csv":
        return pd.read_csv(path)
    raise ValueError(f"Unsupported table format '{path.suffix}'. Expected .csv or .parquet.")


def write_table(df: pd.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".parquet":
        df.to_parquet(path, index=False)
    else:
        df.to_csv(path, index=False)


def latest_games(games_df: pd.DataFrame) -> pd.DataFrame:
    """Keep the most recent game per user; without `created_at`, the last row wins."""

    games = games_df.copy()
    if "created_at" in games.columns:
        games["created_at"] = pd.to_datetime(games["created_at"], utc=True, errors="coerce")
        games = games.sort_values("created_at", kind="mergesort", na_position="first")
    return games.groupby("user_id", sort=False).tail(1).set_index("user_id")


def _row_to_dict(row: pd.Series) -> Dict:
    return {key: (None if _is_missing(value) else value) for key, value in row.items()}


def _is_missing(value) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _existing_category(value) -> str:
    if isinstance(value, str) and value.strip().lower() in CATEGORY_VALUES:
        return value.strip().lower()
    return LearnerCategory.NEUTRAL.value


def reclassify_students(
    students_df: pd.DataFrame,
    games_df: pd.DataFrame,
    classifier: Optional[LearnerClassifier] = None,
) -> pd.DataFrame:
    """
    Classify each student from their latest game and compare with the stored category.

    Students with no games are reset to neutral.
    """

    missing = STUDENT_REQUIRED_COLUMNS - set(students_df.columns)
    if missing:
        raise ValueError(f"Students table missing columns: {sorted(missing)}")
    missing = GAME_REQUIRED_COLUMNS - set(games_df.columns)
    if missing and not games_df.empty:
        raise ValueError(f"Games table missing columns: {sorted(missing)}")

    classifier = classifier or LearnerClassifier()
    latest = latest_games(games_df) if not games_df.empty else pd.DataFrame()

    rows: List[Dict] = []
    for _, student in students_df.iterrows():
        user_id = student["user_id"]
        old_category = _existing_category(student.get("learner_category"))
        name = student.get("name", user_id)
        name = user_id if _is_missing(name) else name

        if user_id not in latest.index:
            rows.append(
                {
                    "user_id": user_id,
                    "name": name,
                    "old_category": old_category,
                    "new_category": LearnerCategory.NEUTRAL.value,
                    "performance_score": None,
                    "status": STATUS_NO_GAMES,
                }
            )
            continue

        session = SessionMetrics.from_mapping(_row_to_dict(latest.loc[user_id]))
        aggregate = LearnerAggregate.from_mapping(_row_to_dict(student))
        new_category = classifier.classify(session, aggregate).value
        rows.append(
            {
                "user_id": user_id,
                "name": name,
                "old_category": old_category,
                "new_category": new_category,
                "performance_score": performance_score(session, aggregate),
                "status": STATUS_ALREADY_CORRECT if new_category == old_category else STATUS_UPDATED,
            }
        )
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def summarize_reclassification(report: pd.DataFrame) -> Dict[str, int]:
    summary = {status: int((report["status"] == status).sum()) for status in STATUSES}
    summary["changed"] = int((report["old_category"] != report["new_category"]).sum())
    summary["total"] = int(len(report))
    return summary
