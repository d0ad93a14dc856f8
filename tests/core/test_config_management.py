# tests/core/test_config_management.py
import json

import pytest

from a11yscan.utils import config_manager as config_module
from a11yscan.utils.config_manager import ConfigManager, DEFAULT_SETTINGS

MOCK_SETTINGS_CONTENT = {
    "server": {
        "port": 8080
    },
    "logging": {
        "level": "WARNING"
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Points the ConfigManager at a temporary package root holding a fake
    settings.json, and restores the real configuration afterwards.
    """
    (tmp_path / "settings.json").write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(config_module, "get_package_root", lambda: tmp_path)

    manager = ConfigManager()
    manager.reset()
    yield manager, tmp_path

    monkeypatch.undo()
    manager.reset()


def test_config_manager_is_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load_merges_defaults(config_env):
    manager, _ = config_env
    config = manager.get_all()

    assert config["server"]["port"] == 8080
    assert config["logging"]["level"] == "WARNING"
    # Keys absent from settings.json come from the defaults
    assert config["server"]["max_upload_bytes"] == DEFAULT_SETTINGS["server"]["max_upload_bytes"]


def test_config_manager_get_nested(config_env):
    manager, _ = config_env

    assert manager.get_nested("server.port") == 8080
    assert manager.get_nested("non.existent.key", "default") == "default"
    assert manager.get_nested("server.port.deeper", "default") == "default"


def test_config_manager_set_nested_casts_type(config_env):
    manager, _ = config_env

    manager.set_nested("server.port", "9000")
    assert manager.get_nested("server.port") == 9000

    manager.set_nested("feature.enabled", True)
    assert manager.get_nested("feature.enabled") is True


def test_config_manager_reset_discards_changes(config_env):
    manager, _ = config_env

    manager.set_nested("server.port", 1)
    manager.reset()

    assert manager.get_nested("server.port") == 8080


def test_config_manager_missing_file_uses_defaults(config_env):
    manager, root = config_env
    (root / "settings.json").unlink()

    manager.reset()

    assert manager.get_all() == DEFAULT_SETTINGS


def test_config_manager_invalid_file_uses_defaults(config_env):
    manager, root = config_env
    (root / "settings.json").write_text("{not json")

    manager.reset()

    assert manager.get_nested("server.port") == DEFAULT_SETTINGS["server"]["port"]


def test_apply_overrides_sets_typed_values(config_env):
    manager, _ = config_env

    manager.apply_overrides(["server.port=9000", "logging.level = DEBUG", "feature.flag=on"])

    assert manager.get_nested("server.port") == 9000
    assert manager.get_nested("logging.level") == "DEBUG"
    assert manager.get_nested("feature.flag") == "on"


def test_apply_overrides_parses_booleans(config_env):
    manager, _ = config_env
    manager.set_nested("feature.enabled", True)

    manager.apply_overrides(["feature.enabled=false"])

    assert manager.get_nested("feature.enabled") is False


@pytest.mark.parametrize("assignment", ["no-equals-sign", "=value", "server.port.deeper=1"])
def test_apply_overrides_rejects_bad_assignments(config_env, assignment):
    manager, _ = config_env

    with pytest.raises(ValueError):
        manager.apply_overrides([assignment])
