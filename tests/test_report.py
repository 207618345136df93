import csv
import datetime as dt
import json
from pathlib import Path

import pytest
from codebreaker.harness import pretty_summary, summarize, write_csv, write_manifest
from codebreaker.harness.io import git_commit_or_unknown, timestamp_id


def _result(secret, guesses, success=True, error=None):
    return {
        "secret": secret, "success": success, "guesses": guesses, "error": error,
        "time_ms": 1.5, "solver_id": "minimax_entropy",
        "history": [("1234", "WWWW")] * (guesses - 1) + [(secret, "CCCC" if success else "CWWW")],
    }


def test_summarize_distribution():
    results = [_result("0001", 4), _result("0002", 4), _result("0003", 5),
               _result("0004", 8), _result("0005", 10, success=False, error="too_many_moves")]
    rep = summarize(results)
    assert rep["total_cases"] == 5
    assert rep["success_count"] == 4 and rep["error_count"] == 1
    assert rep["success_rate"] == pytest.approx(80.0)
    assert rep["average_moves"] == pytest.approx(5.25)
    assert rep["median_moves"] == pytest.approx(4.5)
    assert rep["max_moves"] == 8
    assert rep["move_distribution"] == {4: 2, 5: 1, 8: 1}
    assert rep["errors"] == {"too_many_moves": 1}
    assert rep["four_or_less"] == 2 and rep["five_or_less"] == 3 and rep["eight_plus"] == 1

    s = pretty_summary(rep)
    assert "success=80.00%" in s and "too_many_moves=1" in s
    json.dumps(rep)


def test_summarize_empty():
    rep = summarize([])
    assert rep["total_cases"] == 0 and rep["move_distribution"] == {}
    assert "cases=0" in pretty_summary(rep)


def test_write_csv_and_manifest(tmp_path: Path):
    results = [_result("0123", 2), _result("9999", 1)]
    p = write_csv(results, str(tmp_path / "out" / "run.csv"), max_moves=10)
    with open(p, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]["secret"] == "'0123"
    assert rows[0]["guess_2"] == "'0123" and rows[0]["patt_2"] == "CCCC"
    assert rows[1]["guess_2"] == ""
    assert "patt_10" in rows[0]

    m = write_manifest({"run_id": timestamp_id(), "report": summarize(results)},
                       str(tmp_path / "m.json"))
    data = json.loads(Path(m).read_text(encoding="utf-8"))
    assert data["report"]["success_count"] == 2
    assert data["run_id"].endswith("Z")


def test_timestamp_id_is_utc():
    tz = dt.timezone(dt.timedelta(hours=2))
    assert timestamp_id(dt.datetime(2025, 8, 20, 4, 41, 21, tzinfo=tz)) == "20250820T024121Z"
    assert timestamp_id(dt.datetime(2025, 8, 20, 2, 41, 21)) == "20250820T024121Z"


def test_git_commit_outside_a_repo(tmp_path: Path):
    assert git_commit_or_unknown(str(tmp_path)) == "unknown"
