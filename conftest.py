"""Pytest configuration and fixtures for bedrockgen tests.

CRITICAL: Protects the user's configuration from test modifications.
"""

import shutil
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def protect_user_config():
    """Protect ~/.bedrockgen/config.toml from being modified by tests.

    This fixture:
    1. Backs up the real config.toml before any tests run
    2. Restores it after all tests complete
    """
    config_path = Path.home() / ".bedrockgen" / "config.toml"
    backup_path = Path.home() / ".bedrockgen" / ".config.toml.pytest-backup"

    config_existed = config_path.exists()
    if config_existed:
        shutil.copy2(config_path, backup_path)

    yield

    if config_existed and backup_path.exists():
        shutil.copy2(backup_path, config_path)
        backup_path.unlink()
    elif backup_path.exists():
        backup_path.unlink()


@pytest.fixture
def isolated_config(tmp_path):
    """Provide isolated config directory for tests.

    Use this fixture instead of modifying ~/.bedrockgen/config.toml.
    """
    config_dir = tmp_path / ".bedrockgen"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def mock_config_path(isolated_config, monkeypatch):
    """Point ConfigManager at the isolated config directory.

    Example:
        def test_something(mock_config_path):
            ConfigManager.save_config(config)  # Safe!
    """
    from bedrockgen.config_manager import ConfigManager

    config_file = isolated_config / "config.toml"
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_DIR", isolated_config)
    monkeypatch.setattr(ConfigManager, "DEFAULT_CONFIG_FILE", config_file)

    return config_file
