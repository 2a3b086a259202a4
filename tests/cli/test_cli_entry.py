"""CLI entry regression tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner

from thumbparams.cli_entry import main

WriteConfig = Callable[[str], Path]


def test_size_json_output(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--size", "100x50", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["sizing"] == {"mode": "size", "width": 100, "height": 50}
    assert payload["keep_aspect_ratio"] is True
    assert payload["output_format"] == "original"
    assert payload["output_format_type"] == "default"
    assert payload["filters"] == []
    assert payload["resizer"] == "progressive"
    assert payload["region"] is None


def test_scale_overrides_size(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--scale", "0.5", "--size", "10x10", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["sizing"] == {"mode": "scale", "factor": 0.5}


def test_missing_sizing_is_reported(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--json"])

    assert result.exit_code == 1
    assert "Neither the size nor the scaling factor has been set" in result.output


def test_invalid_scale_is_reported(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--scale=-2"])

    assert result.exit_code == 1
    assert "Scaling factor is less than or equal to 0" in result.output


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-standard JSON constant {token}")


def test_non_finite_quality_json_is_valid(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--size", "10x10", "--quality", "nan", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output, parse_constant=_reject_constant)
    assert payload["quality"] == "nan"


def test_malformed_size_is_a_usage_error(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--size", "100by50"])

    assert result.exit_code == 2
    assert "WIDTHxHEIGHT" in result.output


def test_unknown_resizer_is_a_usage_error(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--scale", "1", "--resizer", "lanczos"])

    assert result.exit_code == 2


def test_region_and_source_plan(runner: CliRunner) -> None:
    result = runner.invoke(
        main,
        ["--scale", "0.25", "--region", "center:800x400", "--source", "1920x1080", "--resizer", "BILINEAR", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["region"] == "800 × 400 @ center"
    assert payload["resizer"] == "bilinear"
    assert payload["plan"] == {"source": [1920, 1080], "output": [200, 100], "steps": [[200, 100]]}


def test_progressive_plan_lists_passes(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--size", "100x75", "--source", "1600x1200", "--json"])

    assert result.exit_code == 0, result.output
    steps = json.loads(result.output)["plan"]["steps"]
    assert steps == [[800, 600], [400, 300], [200, 150], [100, 75]]


def test_coordinate_region_outside_source_fails(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--scale", "1", "--region", "5000,5000,10,10", "--source", "100x100"])

    assert result.exit_code == 1
    assert "lies outside" in result.output


def test_bad_region_is_a_usage_error(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--scale", "1", "--region", "1,2,3"])

    assert result.exit_code == 2


def test_config_file_with_overrides(runner: CliRunner, write_config: WriteConfig) -> None:
    path = write_config(
        """
[thumbnail]
width = 320
height = 240
format = "jpeg"
quality = 0.6

[cli]
json_pretty = true
"""
    )

    result = runner.invoke(main, ["--config", str(path), "--quality", "1.5", "--no-keep-aspect-ratio"])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("{\n")
    payload = json.loads(result.output)
    assert payload["sizing"] == {"mode": "size", "width": 320, "height": 240}
    assert payload["output_format"] == "jpeg"
    assert payload["quality"] == 1.5
    assert payload["keep_aspect_ratio"] is False


def test_config_errors_are_reported(runner: CliRunner, write_config: WriteConfig) -> None:
    path = write_config("[thumbnail]\nscale = \"half\"\n")

    result = runner.invoke(main, ["--config", str(path)])

    assert result.exit_code == 1
    assert "Config error: thumbnail.scale must be a number" in result.output


def test_rich_summary(runner: CliRunner) -> None:
    result = runner.invoke(
        main,
        ["--size", "160x120", "--format", "png", "--source", "640x480", "--no-color"],
        env={"COLUMNS": "200"},
    )

    assert result.exit_code == 0, result.output
    assert "Thumbnail parameters" in result.output
    assert "mode=size" in result.output
    assert "size=160 × 120" in result.output
    assert "region=whole image" in result.output
    assert "format=png" in result.output
    assert "output=160 × 120" in result.output
    assert "passes=320 × 240 -> 160 × 120" in result.output
