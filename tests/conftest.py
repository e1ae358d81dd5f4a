"""Shared pytest fixtures for nsidctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from nsidctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate each test from env config, logging handlers, and telemetry.

    The CLI reconfigures the root logger and may enable telemetry on every
    invocation; both are process-wide.
    """
    monkeypatch.delenv("NSIDCTL_CONFIG", raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    nsid_logger = logging.getLogger("nsidctl")
    nsid_level = nsid_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    nsid_logger.setLevel(nsid_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no nsidctl.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    monkeypatch.chdir(tmp_path)
