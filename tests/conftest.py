"""Shared fixtures."""

import pytest

from lookup_engine import config as config_module
from lookup_engine.cli.commands import config_cmd


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at tmp_path and clear LOOKUP_* env vars."""
    config_dir = tmp_path / "lookup-engine"
    config_file = config_dir / "config.json"

    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for env_var in config_module.ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)

    config_module.reset_config()
    yield config_file
    config_module.reset_config()
