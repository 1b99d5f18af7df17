"""
Shared fixtures for c8ctl tests.

Every test runs against an empty data directory and working directory under
tmp_path, with no CAMUNDA_* variables and a fresh runtime session.
"""

import logging
import os
import sys
from pathlib import Path

import pytest

_CLEARED_ENV_VARS = {"DEBUG", "C8CTL_DEBUG", "C8CTL_LOG_DIR", "C8CTL_DATA_DIR"}


def _reset_process_state() -> None:
    from c8ctl.logging import set_debug_mode
    from c8ctl.plugins import clear_loaded_plugins, clear_registry_cache
    from c8ctl.runtime import c8ctl

    c8ctl.reset()
    clear_loaded_plugins()
    clear_registry_cache()
    set_debug_mode(False)

    # main() binds a handler to the current stderr; drop it so records
    # propagate to caplog instead of a closed capture stream.
    c8ctl_logger = logging.getLogger("c8ctl")
    for handler in c8ctl_logger.handlers[:]:
        c8ctl_logger.removeHandler(handler)
        handler.close()
    c8ctl_logger.propagate = True
    c8ctl_logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point c8ctl at temporary data and working directories."""
    for var in list(os.environ):
        if var.startswith("CAMUNDA_") or var in _CLEARED_ENV_VARS:
            monkeypatch.delenv(var, raising=False)

    data_dir = tmp_path / "data"
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.setenv("C8CTL_DATA_DIR", str(data_dir))
    monkeypatch.chdir(work_dir)
    monkeypatch.setattr(sys, "path", list(sys.path))

    _reset_process_state()
    yield data_dir
    _reset_process_state()


@pytest.fixture
def data_dir(isolated_environment) -> Path:
    """The temporary c8ctl data directory."""
    return isolated_environment


@pytest.fixture
def work_dir() -> Path:
    """The temporary working directory (plugins are scanned from here)."""
    return Path.cwd()
