from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.helpers.filters import RecordingFilter
from thumbparams.builder import ThumbnailParameterBuilder


@pytest.fixture
def builder() -> ThumbnailParameterBuilder:
    return ThumbnailParameterBuilder()


@pytest.fixture
def make_filter() -> Callable[[str], RecordingFilter]:
    return RecordingFilter


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes TOML text to a temporary config file."""

    def _write(text: str, name: str = "thumbs.toml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()
