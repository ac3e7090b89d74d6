"""Unit tests for the bacmap CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from bacmap import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep CLI runs from installing root handlers on captured streams."""
    calls = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: calls.append(kwargs))
    return calls


class TestNormalizeCommand:
    """Test single-point normalization."""

    def test_normalize(self) -> None:
        result = runner.invoke(cli.app, ["normalize", "ZN-T_SP", "--equipment-type", "VAV"])

        assert result.exit_code == 0
        assert "Zone Temperature Setpoint" in result.output
        assert "temperature-setpoint" in result.output
        assert "0.90 (high)" in result.output

    def test_log_level_option(self, no_logging_setup) -> None:
        result = runner.invoke(cli.app, ["--log-level", "DEBUG", "normalize", "SAT"])

        assert result.exit_code == 0
        assert no_logging_setup == [{"level": "DEBUG"}]

    def test_invalid_overlay(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("ACRONYM_OVERRIDES_PATH", str(tmp_path / "missing.yaml"))

        result = runner.invoke(cli.app, ["normalize", "SAT"])

        assert result.exit_code == 1
        assert "Acronym overlay invalid" in result.output


class TestNormalizeFileCommand:
    """Test CSV batch normalization."""

    def test_summary(self, tmp_path: Path) -> None:
        path = tmp_path / "points.csv"
        path.write_text(
            "Name,Description,Object_Type,Object_Instance,Units\n"
            "ZN-T_SP,,AV,2,°F\n"
            "SAT1,Supply air temp,AI,1,°F\n"
            "XYZZY,,BI,3,\n"
            "BAD,,trend-log,4,\n",
            encoding="utf-8",
        )

        result = runner.invoke(cli.app, ["normalize-file", str(path), "-e", "VAV"])

        assert result.exit_code == 0
        assert "Skipping line 5" in result.output
        assert "Total: 3 points" in result.output
        assert "high=2" in result.output
        assert "unknown=1" in result.output
        assert "1 points need manual review" in result.output
        assert "Tokens missing from the acronym dictionary" in result.output
        assert "XYZZY" in result.output.split("Tokens missing")[1]

    def test_no_gap_table_when_all_resolved(self, tmp_path: Path) -> None:
        path = tmp_path / "points.csv"
        path.write_text("Name,Object_Type,Object_Instance\nSAT1,AI,1\n", encoding="utf-8")

        result = runner.invoke(cli.app, ["normalize-file", str(path)])

        assert result.exit_code == 0
        assert "Tokens missing" not in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(cli.app, ["normalize-file", str(tmp_path / "missing.csv")])

        assert result.exit_code == 1
        assert "File not found" in result.output


class TestSimilarityCommand:
    """Test the similarity scorer command."""

    def test_identical(self) -> None:
        result = runner.invoke(cli.app, ["similarity", "VAV-101", "VAV101"])

        assert result.exit_code == 0
        assert "1.0000" in result.output

    def test_containment(self) -> None:
        result = runner.invoke(cli.app, ["similarity", "AHU", "AHU-1"])
        assert "0.7500" in result.output


class TestPairCommand:
    """Test equipment pairing between inventories."""

    def test_pair(self, tmp_path: Path) -> None:
        sources = tmp_path / "sources.csv"
        targets = tmp_path / "targets.csv"
        sources.write_text("id,name,type\ns1,AHU-1,AHU\ns2,Boiler,Boiler\n", encoding="utf-8")
        targets.write_text("id,name,type\n101,ahu-1,Air Handling Unit\n102,Chiller,Chiller\n", encoding="utf-8")

        result = runner.invoke(cli.app, ["pair", str(sources), str(targets)])

        assert result.exit_code == 0
        assert "1 exact, 0 suggested" in result.output
        assert "Unmatched: Boiler" in result.output

    def test_missing_inventory(self, tmp_path: Path) -> None:
        sources = tmp_path / "sources.csv"
        sources.write_text("id,name,type\n", encoding="utf-8")

        result = runner.invoke(cli.app, ["pair", str(sources), str(tmp_path / "nope.csv")])

        assert result.exit_code == 1
