"""
Tests for the firelab command-line interface.
"""

import json
import sys

import pytest

from firelab import FinancialInputs, __version__
from firelab.cli import main


def run_cli(monkeypatch, *argv):
    """Run the CLI with the given arguments and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["firelab", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


@pytest.fixture
def config_file(tmp_path):
    def _write(inputs=None, monte_carlo=None, **extra):
        doc = {"inputs": inputs or {}, **extra}
        if monte_carlo is not None:
            doc["monte_carlo"] = monte_carlo
        path = tmp_path / "scenario.json"
        path.write_text(json.dumps(doc), encoding="utf-8")
        return str(path)

    return _write


class TestExample:
    def test_example_prints_defaults(self, monkeypatch, capsys):
        assert run_cli(monkeypatch, "example") == 0

        doc = json.loads(capsys.readouterr().out)
        assert doc["inputs"] == FinancialInputs().to_dict()
        assert doc["monte_carlo"]["num_simulations"] == 1000

    def test_version(self, monkeypatch, capsys):
        assert run_cli(monkeypatch, "--version") == 0
        assert __version__ in capsys.readouterr().out


class TestValidate:
    def test_valid_file(self, monkeypatch, capsys, config_file):
        path = config_file()

        assert run_cli(monkeypatch, "validate", "-i", path, "--current-year", "2025") == 0
        assert "✅ Validation passed" in capsys.readouterr().out

    def test_invalid_allocation(self, monkeypatch, capsys, config_file):
        path = config_file({"stocks_percent": 50})

        assert run_cli(monkeypatch, "validate", "-i", path, "--current-year", "2025") == 1
        out = capsys.readouterr().out
        assert "❌ Validation failed" in out
        assert "Asset allocation must sum to 100%, currently 80.00%" in out

    def test_json_format(self, monkeypatch, capsys, config_file):
        path = config_file({"annual_labor_income": -1})

        code = run_cli(
            monkeypatch, "validate", "-i", path, "--current-year", "2025", "--format", "json"
        )

        assert code == 1
        report = json.loads(capsys.readouterr().out)
        assert report["errors"] == ["Annual labor income cannot be negative"]
        assert report["is_valid"] is False

    def test_unknown_field(self, monkeypatch, capsys, config_file):
        path = config_file({"salary": 1})

        assert run_cli(monkeypatch, "validate", "-i", path) == 1
        assert "Unknown FinancialInputs fields" in capsys.readouterr().err

    def test_unknown_section(self, monkeypatch, capsys, config_file):
        path = config_file(extras={})

        assert run_cli(monkeypatch, "validate", "-i", path) == 1
        assert "Unknown top-level sections" in capsys.readouterr().err

    def test_bad_monte_carlo_section(self, monkeypatch, capsys, config_file):
        path = config_file(monte_carlo={"num_simulations": 0})

        assert run_cli(monkeypatch, "validate", "-i", path) == 1
        assert "num_simulations" in capsys.readouterr().err

    def test_non_numeric_value(self, monkeypatch, capsys, config_file):
        path = config_file({"initial_savings": "abc"})

        assert run_cli(monkeypatch, "validate", "-i", path) == 1
        assert "FinancialInputs.initial_savings must be a number" in capsys.readouterr().err

    def test_non_boolean_flag(self, monkeypatch, capsys, config_file):
        path = config_file({"stop_working_at_fire": "yes"})

        assert run_cli(monkeypatch, "validate", "-i", path) == 1
        assert "stop_working_at_fire must be true or false" in capsys.readouterr().err

    def test_missing_file(self, monkeypatch, capsys, tmp_path):
        path = str(tmp_path / "missing.json")

        assert run_cli(monkeypatch, "validate", "-i", path) == 1
        assert "Validation failed" in capsys.readouterr().err


class TestProject:
    def test_project_to_file(self, monkeypatch, capsys, config_file, tmp_path):
        path = config_file()
        output = tmp_path / "projection.json"

        code = run_cli(
            monkeypatch, "project", "-i", path, "-o", str(output), "--current-year", "2025"
        )

        assert code == 0
        assert "✅ Results written to" in capsys.readouterr().out
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["projections"]) == 66
        assert data["projections"][0]["portfolio_value"] == 50000
        assert data["validation_errors"] is None

    def test_project_to_stdout(self, monkeypatch, capsys, config_file):
        path = config_file({"desired_withdrawal_rate": 0})

        assert run_cli(monkeypatch, "project", "-i", path, "--current-year", "2025") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["years_to_fire"] == 0

    def test_string_age_is_rejected(self, monkeypatch, capsys, config_file):
        path = config_file({"max_age": "100"})

        assert run_cli(monkeypatch, "project", "-i", path, "--current-year", "2025") == 1
        assert "FinancialInputs.max_age must be a number" in capsys.readouterr().err

    def test_whole_float_ages_are_accepted(self, monkeypatch, capsys, config_file):
        path = config_file({"max_age": 100.0, "year_of_birth": 1990.0})

        assert run_cli(monkeypatch, "project", "-i", path, "--current-year", "2025") == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["projections"]) == 66
        assert data["projections"][0]["age"] == 35

    def test_fractional_age_is_rejected(self, monkeypatch, capsys, config_file):
        path = config_file({"retirement_age": 66.5})

        assert run_cli(monkeypatch, "project", "-i", path, "--current-year", "2025") == 1
        assert "retirement_age must be a whole number" in capsys.readouterr().err

    def test_fractional_trial_count_is_rejected(self, monkeypatch, capsys, config_file):
        path = config_file(monte_carlo={"num_simulations": 10.5})

        assert run_cli(monkeypatch, "simulate", "-i", path, "--seed", "1") == 1
        assert "num_simulations must be a whole number" in capsys.readouterr().err

    def test_project_with_errors(self, monkeypatch, capsys, config_file):
        path = config_file({"max_age": 200})

        assert run_cli(monkeypatch, "project", "-i", path, "--current-year", "2025") == 1
        assert "❌ Maximum age must be 150 or less" in capsys.readouterr().err


class TestSimulate:
    def test_summary(self, monkeypatch, capsys, config_file):
        path = config_file()

        code = run_cli(
            monkeypatch,
            "simulate",
            "-i",
            path,
            "--trials",
            "10",
            "--seed",
            "1",
            "--current-year",
            "2025",
        )

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["num_simulations"] == 10
        assert data["success_count"] + data["failure_count"] == 10
        assert "simulations" not in data

    def test_runs_and_reproducibility(self, monkeypatch, capsys, config_file):
        path = config_file(monte_carlo={"num_simulations": 5})
        args = ("simulate", "-i", path, "--seed", "7", "--runs", "--current-year", "2025")

        assert run_cli(monkeypatch, *args) == 0
        first = json.loads(capsys.readouterr().out)
        assert run_cli(monkeypatch, *args) == 0
        second = json.loads(capsys.readouterr().out)

        assert len(first["simulations"]) == 5
        assert first == second

    def test_logs(self, monkeypatch, capsys, config_file, tmp_path):
        path = config_file(monte_carlo={"num_simulations": 3})
        output = tmp_path / "logs.json"

        code = run_cli(
            monkeypatch,
            "simulate",
            "-i",
            path,
            "-o",
            str(output),
            "--seed",
            "1",
            "--logs",
            "--current-year",
            "2025",
        )

        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["logs"]) == 3
        assert data["fixed_parameters"]["num_simulations"] == 3

    def test_invalid_withdrawal_rate(self, monkeypatch, capsys, config_file):
        path = config_file({"desired_withdrawal_rate": 0})

        assert run_cli(monkeypatch, "simulate", "-i", path, "--trials", "5") == 1
        assert "desired_withdrawal_rate must be greater than 0" in capsys.readouterr().err
