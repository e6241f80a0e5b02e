"""Tests for the config store (file over env, pushed overrides on top)."""
from campus.config_store import ConfigStore, read_config_file
from campus.settings import Settings


def test_file_overrides_env(tmp_path, monkeypatch):
    monkeypatch.setenv("NOTIFICATION_LIST_LIMIT", "20")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    config = tmp_path / "config.yaml"
    config.write_text("notification_list_limit: 30\n")

    store = ConfigStore(Settings, str(config))
    store.load_initial()

    settings = store.get_settings()
    assert settings.notification_list_limit == 30
    assert settings.log_level == "DEBUG"


def test_overrides_and_clear(tmp_path):
    store = ConfigStore(Settings, str(tmp_path / "absent.yaml"))
    store.update({"seed_default_roles": False})
    assert store.get_settings().seed_default_roles is False

    store.clear_overrides()
    assert store.get_settings().seed_default_roles is True


def test_invalid_override_keeps_previous(tmp_path):
    store = ConfigStore(Settings, str(tmp_path / "absent.yaml"))
    store.update({"notification_list_limit": "not-a-number"})
    assert store.get_settings().notification_list_limit == 50


def test_read_config_file_formats(tmp_path):
    as_json = tmp_path / "c.json"
    as_json.write_text('{"debug": true}')
    assert read_config_file(as_json) == {"debug": True}

    as_text = tmp_path / "c.txt"
    as_text.write_text("debug: true")
    assert read_config_file(as_text) == {}

    not_a_mapping = tmp_path / "list.yaml"
    not_a_mapping.write_text("- a\n- b\n")
    assert read_config_file(not_a_mapping) == {}
