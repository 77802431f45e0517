import json

import pytest
from pydantic import ValidationError

import strongcache.config.settings as settings_mod
from strongcache.config import CacheSettings, build_cache


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_explicit_path(tmp_path):
    path = _write(tmp_path / "cache.json", {"max_size": 7, "sizing": "bytes"})

    settings = CacheSettings.load(path)

    assert settings.max_size == 7
    assert settings.sizing == "bytes"


def test_load_from_env(tmp_path, monkeypatch):
    path = _write(tmp_path / "env.json", {"max_size": 3})
    monkeypatch.setenv(settings_mod.ENV_CONFIG_KEY, str(path))

    assert CacheSettings.load().max_size == 3


def test_explicit_path_wins_over_env(tmp_path, monkeypatch):
    env_path = _write(tmp_path / "env.json", {"max_size": 3})
    explicit = _write(tmp_path / "explicit.json", {"max_size": 9})
    monkeypatch.setenv(settings_mod.ENV_CONFIG_KEY, str(env_path))

    assert CacheSettings.load(explicit).max_size == 9


def test_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        CacheSettings.load(tmp_path / "nope.json")


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv(settings_mod.ENV_CONFIG_KEY, raising=False)
    monkeypatch.setattr(settings_mod, "CONFIG_DIR", tmp_path)

    settings = CacheSettings.load()

    assert settings.max_size == 128
    assert settings.sizing == "count"


def test_config_dir_prefers_cache_json_over_sample(tmp_path, monkeypatch):
    monkeypatch.delenv(settings_mod.ENV_CONFIG_KEY, raising=False)
    monkeypatch.setattr(settings_mod, "CONFIG_DIR", tmp_path)
    _write(tmp_path / settings_mod.SAMPLE_CONFIG_NAME, {"max_size": 1})
    _write(tmp_path / settings_mod.DEFAULT_CONFIG_NAME, {"max_size": 2})

    assert CacheSettings.load().max_size == 2


def test_negative_max_size_rejected():
    with pytest.raises(ValidationError):
        CacheSettings(max_size=-1)


def test_unknown_sizing_rejected():
    with pytest.raises(ValidationError):
        CacheSettings(sizing="pages")


def test_build_cache_uses_selected_sizing(recorder):
    cache = build_cache(CacheSettings(max_size=4, sizing="bytes"), on_entry_removed=recorder)
    cache.put("a", b"abc")
    cache.put("b", b"de")

    assert cache.max_size() == 4
    assert cache.size() == 2
    assert recorder.evicted_keys == ["a"]


def test_build_cache_defaults():
    cache = build_cache()
    assert cache.max_size() == 128
    cache.put("a", "anything")
    assert cache.size() == 1
