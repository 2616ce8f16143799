"""Tests for the command line demonstration harness."""
from __future__ import annotations

import json

from pearldive import cavern_demo


def test_demo_prints_cavern_and_path(capsys, monkeypatch):
    monkeypatch.delenv("PEARLDIVE_SEED", raising=False)
    monkeypatch.delenv("PEARLDIVE_MAX_ATTEMPTS", raising=False)
    exit_code = cavern_demo.main(["--width", "20", "--height", "15", "--seed", "7", "--path"])
    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "#" * 20
    assert len(lines[14]) == 20
    assert lines[15].startswith("attempts=")
    assert "path" in lines[16].lower()


def test_demo_writes_metrics(tmp_path, capsys):
    output_path = tmp_path / "metrics.json"
    exit_code = cavern_demo.main(
        [
            "--width", "30",
            "--height", "30",
            "--seed", "3",
            "--seeds", "3", "4",
            "--metrics-out", str(output_path),
        ]
    )
    assert exit_code == 0
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert [entry["seed"] for entry in payload["metrics"]] == [3, 4]


def test_demo_reports_invalid_dimensions(capsys):
    assert cavern_demo.main(["--width", "2"]) == 2
    assert capsys.readouterr().out == ""
