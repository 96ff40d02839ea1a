from pathlib import Path

import pytest

from sitecms.config import DEFAULT_ADMIN_KEY, load_config

ENV_VARS = (
    "HOST", "PORT", "ADMIN_KEY", "DATA_DIR", "UPLOADS_DIR", "PUBLIC_DIR",
    "MAX_UPLOAD_BYTES", "CORS_ORIGINS", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    config = load_config(base_dir=tmp_path)
    assert config.port == 3000
    assert config.admin_key == DEFAULT_ADMIN_KEY
    assert config.uses_default_admin_key
    assert config.data_dir == tmp_path / "data"
    assert config.content_file == tmp_path / "data" / "site-content.json"
    assert config.uploads_dir == tmp_path / "uploads"
    assert config.max_upload_bytes == 10 * 1024 * 1024


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ADMIN_KEY", "real-key")
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "media"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    config = load_config(base_dir=tmp_path)
    assert config.port == 8080
    assert config.admin_key == "real-key"
    assert not config.uses_default_admin_key
    assert config.uploads_dir == Path(tmp_path / "media")
    assert config.log_level == "DEBUG"


def test_empty_admin_key_counts_as_default(monkeypatch, tmp_path):
    monkeypatch.setenv("ADMIN_KEY", "")
    assert load_config(base_dir=tmp_path).uses_default_admin_key


def test_bad_port_fails_fast(monkeypatch, tmp_path):
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(ValueError):
        load_config(base_dir=tmp_path)


def test_ensure_dirs(tmp_path):
    config = load_config(base_dir=tmp_path)
    config.ensure_dirs()
    assert config.data_dir.is_dir()
    assert config.uploads_dir.is_dir()
