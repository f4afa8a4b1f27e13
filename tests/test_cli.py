"""End-to-end tests for the command-line interface."""

import pandas as pd
import pytest

from rota.cli import main
from rota.domain.db import get_session
from rota.domain.repositories import AssignmentRepository

CONFIG = """
week: [Mon, Tue, Wed, Thu, Fri]
people:
  - name: Alice
    skills: [kitchen]
  - name: Bob
    skills: [kitchen]
    unavailable: [Fri]
  - name: Carol
    skills: [kitchen, keys]
tasks:
  - name: Lock-up
    skills: [keys]
    rule: same-person-all-period
  - name: Dishes
    skills: [kitchen]
    rule: paired-with:Drying
  - name: Drying
    days: [Mon, Wed]
  - name: Coffee
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "rota.yaml"
    path.write_text(CONFIG)
    return path


def test_generate_writes_schedule(tmp_path, config_path, capsys):
    out = tmp_path / "weekly_schedule.csv"
    main(["generate", "--config", str(config_path), "--out", str(out),
          "--history", str(out), "--seed", "3"])

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df.columns) == ["Day", "Lock-up", "Dishes", "Drying", "Coffee"]
    assert list(df["Day"]) == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert set(df["Lock-up"]) == {"Carol"}
    assert list(df["Drying"]) == [df["Dishes"][0], "", df["Dishes"][2], "", ""]

    output = capsys.readouterr().out
    assert "No previous schedule found" in output
    assert "Schedule written to" in output


def test_second_run_reads_previous_output(tmp_path, config_path, capsys):
    out = tmp_path / "weekly_schedule.csv"
    args = ["generate", "--config", str(config_path), "--out", str(out), "--history", str(out)]
    main(args + ["--seed", "1"])
    main(args + ["--seed", "2", "--orientation", "task-rows"])

    assert "Loaded previous schedule" in capsys.readouterr().out
    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df.columns) == ["Task", "Mon", "Tue", "Wed", "Thu", "Fri"]


def test_validate_and_summarize(tmp_path, config_path, capsys):
    out = tmp_path / "schedule.csv"
    main(["generate", "--config", str(config_path), "--out", str(out),
          "--history", str(tmp_path / "none.csv"), "--seed", "5"])
    capsys.readouterr()

    main(["validate", "--config", str(config_path), "--schedule", str(out)])
    assert "Validation passed" in capsys.readouterr().out

    main(["summarize", "--config", str(config_path), "--schedule", str(out)])
    assert "Assignments per person" in capsys.readouterr().out


def test_unfilled_slot_is_reported(tmp_path, capsys):
    path = tmp_path / "rota.yaml"
    path.write_text(
        "week: [Mon]\npeople:\n  - name: Alice\ntasks:\n  - name: Surgery\n    skills: [surgeon]\n"
    )
    out = tmp_path / "out.csv"
    main(["generate", "--config", str(path), "--out", str(out), "--history", str(tmp_path / "none.csv")])

    output = capsys.readouterr().out
    assert "[WARN] Could not fill 'Surgery' on Mon" in output
    assert out.exists()


def test_bad_config_exits(tmp_path):
    with pytest.raises(SystemExit, match="cannot read config"):
        main(["generate", "--config", str(tmp_path / "missing.yaml")])


@pytest.mark.integration
def test_database_history_round_trip(tmp_path, config_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'rota.db'}"
    out = tmp_path / "schedule.csv"
    missing = str(tmp_path / "none.csv")
    main(["generate", "--config", str(config_path), "--out", str(out),
          "--history", missing, "--db", db_url, "--seed", "1"])
    capsys.readouterr()

    main(["generate", "--config", str(config_path), "--out", str(out),
          "--history", missing, "--db", db_url, "--seed", "2"])
    assert "Loaded previous schedule from database" in capsys.readouterr().out


@pytest.mark.integration
def test_failed_write_leaves_database_untouched(tmp_path, config_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'rota.db'}"
    # A directory cannot be opened as the output file
    with pytest.raises(OSError):
        main(["generate", "--config", str(config_path), "--out", str(tmp_path),
              "--history", str(tmp_path / "none.csv"), "--db", db_url, "--seed", "1"])
    assert "[ERROR] Generation failed" in capsys.readouterr().out

    session = get_session(db_url)
    try:
        assert AssignmentRepository.counts(session) == {}
    finally:
        session.close()
