# ABOUTME: Verifies the classification CLI commands run end to end.
# ABOUTME: Exercises classify, verify, and reclassify through Typer's test runner.

import pandas as pd
from typer.testing import CliRunner

from scripts import classify_learners

runner = CliRunner()


def test_cli_registers_commands():
    app = classify_learners.app
    command_names = {cmd.name or cmd.callback.__name__ for cmd in app.registered_commands}
    assert {"classify", "reclassify", "verify"} <= command_names


def test_classify_command_prints_category():
    result = runner.invoke(
        classify_learners.app,
        ["classify", "--score", "95", "--accuracy", "0.95", "--difficulty", "hard", "--xp", "1000", "--level", "10", "--streak", "50"],
    )
    assert result.exit_code == 0, result.output
    assert "FAST" in result.output
    assert "110/110" in result.output


def test_verify_reference_scenarios_pass():
    result = runner.invoke(classify_learners.app, ["verify"])
    assert result.exit_code == 0, result.output
    assert "All reference scenarios match" in result.output


def test_reclassify_writes_report(tmp_path):
    students = tmp_path / "students.csv"
    games = tmp_path / "games.csv"
    report = tmp_path / "report.csv"
    pd.DataFrame(
        {"user_id": ["u1", "u2"], "name": ["Asha", "Ben"], "xp": [0, 0], "level": [1, 1], "streak": [0, 0],
         "learner_category": ["fast", "neutral"]}
    ).to_csv(students, index=False)
    pd.DataFrame({"user_id": ["u1"], "score": [10], "max_score": [100], "accuracy": [0.1]}).to_csv(games, index=False)

    result = runner.invoke(
        classify_learners.app,
        ["reclassify", "--students-path", str(students), "--games-path", str(games), "--output", str(report)],
    )

    assert result.exit_code == 0, result.output
    written = pd.read_csv(report)
    assert written.set_index("user_id").loc["u1", "new_category"] == "slow"
    assert written.set_index("user_id").loc["u2", "status"] == "no_games"


def test_reclassify_missing_table_exits(tmp_path):
    result = runner.invoke(
        classify_learners.app,
        ["reclassify", "--students-path", str(tmp_path / "nope.csv"), "--games-path", str(tmp_path / "nope.csv")],
    )
    assert result.exit_code == 1


def test_reclassify_empty_table_exits_cleanly(tmp_path):
    students = tmp_path / "students.csv"
    games = tmp_path / "games.csv"
    students.write_text("", encoding="utf-8")
    games.write_text("user_id,score\nu1,10\n", encoding="utf-8")

    result = runner.invoke(
        classify_learners.app,
        ["reclassify", "--students-path", str(students), "--games-path", str(games)],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


def test_reclassify_malformed_csv_exits_cleanly(tmp_path):
    students = tmp_path / "students.csv"
    games = tmp_path / "games.csv"
    students.write_text('user_id,name\nu1,"Asha\n', encoding="utf-8")
    games.write_text("user_id,score\nu1,10\n", encoding="utf-8")

    result = runner.invoke(
        classify_learners.app,
        ["reclassify", "--students-path", str(students), "--games-path", str(games)],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
