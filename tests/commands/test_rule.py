"""Tests for `ifsctl rule` and `ifsctl iterations`."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ifsctl.cli import cli
from ifsctl.domain.models import DEFAULT_CONFIG
from tests.conftest import read_fractal, write_fractal


@pytest.fixture
def empty_file(tmp_path: Path) -> Path:
    return write_fractal(tmp_path / "castle.json", DEFAULT_CONFIG.to_wire())


@pytest.mark.usefixtures("_isolated_project")
class TestRuleCommands:
    def test_add_then_list(self, cli_runner: CliRunner, empty_file: Path) -> None:
        added = cli_runner.invoke(
            cli, ["rule", "add", str(empty_file), "--cell", "0", "1", "0", "--step", "1"]
        )
        assert added.exit_code == 0, added.output

        listed = cli_runner.invoke(cli, ["--json", "rule", "list", str(empty_file), "--step", "1"])
        payload = json.loads(listed.stdout)
        assert payload["data"]["count"] == 1
        assert payload["data"]["items"][0]["cell"] == [0, 1, 0]

    def test_add_occupied_cell_fails(self, cli_runner: CliRunner, empty_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["rule", "add", str(empty_file), "--cell", "0", "0", "0", "--step", "1"]
        )
        assert result.exit_code == 1
        assert "not an empty cell" in result.stderr
        assert read_fractal(empty_file)["rules"] == []

    def test_add_default(self, cli_runner: CliRunner, empty_file: Path) -> None:
        result = cli_runner.invoke(cli, ["rule", "add", str(empty_file)])
        assert result.exit_code == 0
        assert read_fractal(empty_file)["rules"][0]["position"] == [0.0, 1.0, 0.0]

    def test_set_and_remove(self, cli_runner: CliRunner, fractal_file: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["rule", "set", str(fractal_file), "1", "--rotation", "0", "0", "1.5", "--scale", "0.2"],
        )
        assert result.exit_code == 0
        rule = read_fractal(fractal_file)["rules"][1]
        assert rule["rotation"] == [0.0, 0.0, 1.5]
        assert rule["scale"] == 0.2

        removed = cli_runner.invoke(cli, ["-q", "rule", "remove", str(fractal_file), "0"])
        assert removed.exit_code == 0
        assert removed.stdout.strip() == "OK: remove_rule"
        assert len(read_fractal(fractal_file)["rules"]) == 1

    def test_remove_out_of_range(self, cli_runner: CliRunner, fractal_file: Path) -> None:
        result = cli_runner.invoke(cli, ["rule", "remove", str(fractal_file), "9"])
        assert result.exit_code == 1
        assert "out of range" in result.stderr

    def test_set_iterations(self, cli_runner: CliRunner, fractal_file: Path) -> None:
        result = cli_runner.invoke(cli, ["iterations", str(fractal_file), "6"])
        assert result.exit_code == 0
        assert read_fractal(fractal_file)["iterations"] == 6
