from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from roborate.cli.main import app

runner = CliRunner()


def test_compute_reads_stdin(fixtures_dir: Path):
    payload = (fixtures_dir / "sample_work_order.json").read_text(encoding="utf-8")
    result = runner.invoke(app, ["compute"], input=payload)
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == '{"value":13725}'


def test_compute_dash_reads_stdin(fixtures_dir: Path):
    payload = (fixtures_dir / "sample_work_order.json").read_text(encoding="utf-8")
    result = runner.invoke(app, ["compute", "-"], input=payload)
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"value": 13725}


def test_compute_from_file_with_config(fixtures_dir: Path):
    result = runner.invoke(
        app,
        [
            "compute",
            str(fixtures_dir / "sample_work_order.json"),
            "--config",
            str(fixtures_dir / "hourly_config.yaml"),
        ],
    )
    assert result.exit_code == 0, result.output
    # 2.75h standardDay, 1h standardNight, 4.25h extraNight (Saturday) at hourly rates.
    assert json.loads(result.stdout) == {"value": 228.75}


def test_compute_week_long_shift(fixtures_dir: Path):
    result = runner.invoke(app, ["compute", str(fixtures_dir / "week_work_order.yaml")])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"value": 202200}


def test_compute_no_breaks_flag(fixtures_dir: Path):
    result = runner.invoke(
        app, ["compute", str(fixtures_dir / "week_work_order.yaml"), "--no-breaks"]
    )
    assert result.exit_code == 0, result.output
    # 80h standardDay, 33h standardNight, 28h extraDay, 15h extraNight.
    assert json.loads(result.stdout) == {"value": 227400}


def test_compute_rejects_malformed_input():
    result = runner.invoke(app, ["compute"], input='{"shift": {}}')
    assert result.exit_code == 1
    assert '{"value"' not in result.stdout


def test_compute_rejects_inverted_shift(fixtures_dir: Path):
    document = json.loads((fixtures_dir / "sample_work_order.json").read_text(encoding="utf-8"))
    document["shift"]["end"] = document["shift"]["start"]
    result = runner.invoke(app, ["compute"], input=json.dumps(document))
    assert result.exit_code == 1


def test_compute_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["compute", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_compute_writes_telemetry(fixtures_dir: Path, tmp_path: Path):
    log = tmp_path / "telemetry" / "runs.jsonl"
    result = runner.invoke(
        app,
        ["compute", str(fixtures_dir / "sample_work_order.json"), "--telemetry-log", str(log)],
    )
    assert result.exit_code == 0, result.output
    record = json.loads(log.read_text(encoding="utf-8").splitlines()[-1])
    assert record["status"] == "ok"
    assert record["value"] == 13725
    assert record["segments"] == 3
    assert record["config"]["rate_unit"] == "minute"


def test_compute_failure_writes_telemetry(tmp_path: Path):
    log = tmp_path / "runs.jsonl"
    result = runner.invoke(app, ["compute", "--telemetry-log", str(log)], input="[]")
    assert result.exit_code == 1
    record = json.loads(log.read_text(encoding="utf-8").splitlines()[-1])
    assert record["status"] == "error"
    assert record["error"]


def test_segments_command_writes_csv(fixtures_dir: Path, tmp_path: Path):
    out = tmp_path / "segments.csv"
    result = runner.invoke(
        app,
        ["segments", str(fixtures_dir / "sample_work_order.json"), "--out", str(out)],
    )
    assert result.exit_code == 0, result.output
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "start,end,label,units,rate,amount"
    assert len(lines) == 4
    assert lines[3].split(",")[2] == "extraNight"


def test_check_bands_reports_partition(fixtures_dir: Path):
    result = runner.invoke(app, ["check-bands", str(fixtures_dir / "sample_work_order.json")])
    assert result.exit_code == 0, result.output
    assert "partition" in result.stdout


def test_check_bands_rejects_overlap(tmp_path: Path):
    document = {
        "shift": {"start": "2038-01-01T20:15:00", "end": "2038-01-02T04:15:00"},
        "roboRate": {
            "day": {"start": "07:00:00", "end": "23:00:00", "value": 20},
            "night": {"start": "22:00:00", "end": "07:00:00", "value": 25},
        },
    }
    path = tmp_path / "order.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    result = runner.invoke(app, ["check-bands", str(path)])
    assert result.exit_code == 1


def test_compute_rejects_band_time_with_offset(fixtures_dir: Path, tmp_path: Path):
    document = json.loads((fixtures_dir / "sample_work_order.json").read_text(encoding="utf-8"))
    document["roboRate"]["standardDay"]["end"] = "23:00:00Z"
    log = tmp_path / "runs.jsonl"
    result = runner.invoke(
        app, ["compute", "--telemetry-log", str(log)], input=json.dumps(document)
    )
    assert result.exit_code == 1
    assert not isinstance(result.exception, TypeError)
    record = json.loads(log.read_text(encoding="utf-8").splitlines()[-1])
    assert record["status"] == "error"


def test_compute_rejects_zero_width_band(fixtures_dir: Path):
    document = json.loads((fixtures_dir / "sample_work_order.json").read_text(encoding="utf-8"))
    document["roboRate"]["extraDay"]["end"] = document["roboRate"]["extraDay"]["start"]
    result = runner.invoke(app, ["compute"], input=json.dumps(document))
    assert result.exit_code == 1
    assert not isinstance(result.exception, TypeError)
