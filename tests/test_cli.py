from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from framegraph.cli.main import main, parse_producer


def test_cli_help() -> None:
    out = subprocess.check_output([sys.executable, "-m", "framegraph.cli", "--help"]).decode()
    assert "validate" in out and "inspect" in out and "chain" in out


def test_cli_chain_help() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "framegraph.cli", "chain", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "--from" in result.stdout
    assert "--producer" in result.stdout


def test_cli_chain_subprocess(robot_file: Path) -> None:
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "framegraph.cli",
            "chain",
            "-c",
            str(robot_file),
            "--from",
            "body",
            "--to",
            "laser",
        ],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "Transformation chain: body => laser" in result.stdout


def test_validate(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate", "-c", str(robot_file)]) == 0
    assert "OK (6 frames, 5 transformations)" in capsys.readouterr().out


def test_validate_invalid_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("static_transforms:\n  - {from: body, to: body}\n")
    assert main(["validate", "-c", str(path)]) == 1
    assert "Error" in capsys.readouterr().err

    path.write_text("- a\n- b\n")
    assert main(["validate", "-c", str(path)]) == 1
    assert "must contain a mapping" in capsys.readouterr().err


def test_validate_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate", "-c", str(tmp_path / "missing.yaml")]) == 1
    assert "not found" in capsys.readouterr().err


def test_inspect(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", "-c", str(robot_file)]) == 0
    out = capsys.readouterr().out
    assert "servo_low => servo_high produced by dynamixel" in out
    assert "Max seek depth: 20" in out


def test_chain(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["chain", "-c", str(robot_file), "--from", "body", "--to", "laser"]) == 0
    out = capsys.readouterr().out
    assert "Transformation chain: body => laser" in out
    assert "servo_low => servo_high produced by dynamixel" in out
    assert "Producers needed: dynamixel" in out


def test_chain_with_producer_override(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["chain", "-c", str(robot_file), "--from", "body", "--to", "laser"]
    assert main(argv + ["--producer", "body:laser=tracker"]) == 0
    out = capsys.readouterr().out
    assert "body => laser produced by tracker" in out
    assert "Producers needed: tracker" in out


def test_chain_not_found(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["chain", "-c", str(robot_file), "--from", "odometry", "--to", "camera", "--max-depth", "2"]
    assert main(argv) == 1
    assert "max seek depth reached" in capsys.readouterr().err


def test_chain_rejects_zero_max_depth(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["chain", "-c", str(robot_file), "--from", "body", "--to", "laser", "--max-depth", "0"]
    assert main(argv) == 1
    assert "max_seek_depth must be at least 1" in capsys.readouterr().err


def test_chain_unknown_frame(robot_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["chain", "-c", str(robot_file), "--from", "body", "--to", "moon"]) == 1
    assert "frame 'moon' is not known" in capsys.readouterr().err


def test_log_file(robot_file: Path, tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "run.jsonl"
    argv = ["--log-file", str(log_path), "chain", "-c", str(robot_file), "--from", "body", "--to", "laser"]
    result = subprocess.run(
        [sys.executable, "-m", "framegraph.cli", "-v"] + argv,
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    records = [json.loads(line) for line in log_path.read_text().splitlines()]
    messages = [r["message"] for r in records]
    assert "found transformation chain" in messages
    found = records[messages.index("found transformation chain")]
    assert found["length"] == 3


def test_parse_producer() -> None:
    assert parse_producer("a:b=tracker") == (("a", "b"), "tracker")
    with pytest.raises(Exception):
        parse_producer("a=b")


def test_invalid_producer_argument(robot_file: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["chain", "-c", str(robot_file), "--from", "a", "--to", "b", "--producer", "nonsense"])
    assert exc_info.value.code == 2
