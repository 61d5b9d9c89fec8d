"""Shared fixtures for unit tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config at a temp dir and drop any TEMPLAR_* variables."""
    for key in list(os.environ):
        if key.startswith("TEMPLAR_"):
            monkeypatch.delenv(key)

    config_file = tmp_path / "home" / "config.yaml"
    monkeypatch.setenv("TEMPLAR_CONFIG_FILE", str(config_file))
    return config_file
