"""Tests for the CLI entry point."""

import json
import subprocess
import sys


def run_cli(*args, stdin: str | None = None) -> subprocess.CompletedProcess:
    """Run the CLI with given args and return CompletedProcess."""
    return subprocess.run(
        [sys.executable, "-m", "lab_normalizer"] + list(args),
        capture_output=True,
        text=True,
        input=stdin,
    )


def test_cli_help_exits_zero():
    """--help returns exit code 0."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "--input" in result.stdout
    assert "--text" in result.stdout
    assert "--dry-run" in result.stdout


def test_cli_dry_run_produces_valid_json():
    """--input --dry-run produces valid JSON with success=True."""
    result = run_cli("--input", "data/samples/report.png", "--dry-run")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    data = json.loads(result.stdout)
    assert data["success"] is True
    assert len(data["stages"]) == 4
    assert data["record"]["extracted_values"]["HGB"] == "13.4"


def test_cli_text_input():
    """--text normalizes the given OCR text."""
    result = run_cli("--text", "Hemoglobin 134 g/dL")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    data = json.loads(result.stdout)
    assert data["record"]["extracted_values"] == {"HGB": "13.4"}
    assert data["record"]["results"][0]["status"] == "Normal"


def test_cli_text_from_stdin():
    """--text - reads the OCR text from stdin."""
    result = run_cli("--text", "-", stdin="WBC 2.0\n")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    data = json.loads(result.stdout)
    assert data["record"]["results"][0]["status"] == "Low"


def test_cli_summary_format():
    """--format summary prints a table with statuses and notes."""
    result = run_cli("--text", "WBC 2.0\nHGB 13.4", "--format", "summary")
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "| Test" in result.stdout
    assert "White Blood Cell count [WBC]" in result.stdout
    assert "Low" in result.stdout
    assert "Notes:" in result.stdout


def test_cli_borderline_pct_option():
    """--borderline-pct widens the borderline bands."""
    result = run_cli("--text", "WBC 7", "--borderline-pct", "60")
    data = json.loads(result.stdout)
    assert data["record"]["results"][0]["status"] == "Borderline Low"


def test_cli_output_file(tmp_path):
    """--output writes the JSON to a file."""
    out = tmp_path / "result.json"
    result = run_cli("--text", "HGB 13.4", "--output", str(out))
    assert result.returncode == 0
    assert json.loads(out.read_text())["success"] is True


def test_cli_missing_input_file_exits_two():
    """A nonexistent image outside dry-run mode is an input error."""
    result = run_cli("--input", "/nonexistent/report.png")
    assert result.returncode == 2
    assert "not found" in result.stderr


def test_cli_invalid_args_exits_nonzero():
    """Missing required args returns non-zero exit code."""
    result = run_cli("--dry-run")  # Missing --input, --batch or --text
    assert result.returncode != 0


def test_cli_expected_adds_evaluation(tmp_path):
    """--expected wraps the result and adds extraction scores."""
    expected = tmp_path / "expected.json"
    expected.write_text(json.dumps({"HGB": "13.4"}))
    result = run_cli("--text", "Hemoglobin 134 g/dL", "--expected", str(expected))
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    data = json.loads(result.stdout)
    assert data["results"]["record"]["extracted_values"] == {"HGB": "13.4"}
    assert data["evaluation"]["scored"] == 1
    assert data["evaluation"]["mean_f1"] == 1.0


def test_cli_expected_summary_format(tmp_path):
    """The summary format ends with the evaluation lines."""
    expected = tmp_path / "expected.json"
    expected.write_text(json.dumps({"HGB": "13.4", "WBC": "6.2"}))
    result = run_cli(
        "--text", "Hemoglobin 134 g/dL", "--expected", str(expected), "--format", "summary"
    )
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "Evaluation" in result.stdout
    assert "missing WBC" in result.stdout


def test_cli_missing_expected_file_exits_two(tmp_path):
    """A missing --expected file exits with code 2 before any work."""
    result = run_cli("--text", "HGB 13.4", "--expected", str(tmp_path / "missing.json"))
    assert result.returncode == 2
    assert "not found" in result.stderr
