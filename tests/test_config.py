import logging

from todo_api import config


def _write_settings(tmp_path, monkeypatch, body: str):
    path = tmp_path / "settings.toml"
    path.write_text(body, encoding="utf-8")
    monkeypatch.setattr(config, "SETTINGS_PATH", path)
    return path


def test_env_overrides_settings(tmp_path, monkeypatch):
    _write_settings(tmp_path, monkeypatch, '[auth]\njwt_secret = "from-file"\n')
    monkeypatch.delenv("TODO_API_JWT_SECRET", raising=False)
    assert config.get_jwt_secret() == "from-file"
    monkeypatch.setenv("TODO_API_JWT_SECRET", "from-env")
    assert config.get_jwt_secret() == "from-env"


def test_defaults_without_settings_file(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "SETTINGS_PATH", tmp_path / "missing.toml")
    monkeypatch.delenv("TODO_API_JWT_SECRET", raising=False)
    monkeypatch.delenv("TODO_API_BCRYPT_ROUNDS", raising=False)
    monkeypatch.delenv("TODO_API_LOG_LEVEL", raising=False)
    assert config.get_jwt_secret() == config.DEFAULT_JWT_SECRET
    assert config.get_bcrypt_rounds() == config.DEFAULT_BCRYPT_ROUNDS
    assert config.get_log_level() == logging.INFO


def test_unreadable_settings_fall_back(tmp_path, monkeypatch):
    _write_settings(tmp_path, monkeypatch, "this is = = not toml")
    monkeypatch.delenv("TODO_API_JWT_SECRET", raising=False)
    assert config.get_jwt_secret() == config.DEFAULT_JWT_SECRET


def test_bcrypt_rounds_are_clamped(monkeypatch):
    monkeypatch.setenv("TODO_API_BCRYPT_ROUNDS", "2")
    assert config.get_bcrypt_rounds() == 4
    monkeypatch.setenv("TODO_API_BCRYPT_ROUNDS", "99")
    assert config.get_bcrypt_rounds() == 31
    monkeypatch.setenv("TODO_API_BCRYPT_ROUNDS", "abc")
    assert config.get_bcrypt_rounds() == config.DEFAULT_BCRYPT_ROUNDS


def test_log_level_from_settings(tmp_path, monkeypatch):
    _write_settings(tmp_path, monkeypatch, '[logging]\nlevel = "debug"\n')
    monkeypatch.delenv("TODO_API_LOG_LEVEL", raising=False)
    assert config.get_log_level() == logging.DEBUG


def test_relative_sqlite_path_resolves_next_to_settings(tmp_path, monkeypatch):
    _write_settings(tmp_path, monkeypatch, "")
    url = config._ensure_sqlite_directory("sqlite:///data/todo.db")
    expected = (tmp_path / "data" / "todo.db").resolve().as_posix()
    assert url == f"sqlite:///{expected}"
    assert (tmp_path / "data").is_dir()


def test_get_engine_rebuilds_on_url_change(monkeypatch):
    monkeypatch.setattr(config, "_ENGINE", config._ENGINE)
    monkeypatch.setattr(config, "DATABASE_URL", "sqlite:///:memory:")
    first = config.get_engine("sqlite:///:memory:")
    assert config.get_engine("sqlite:///:memory:") is first
    second = config.get_engine("sqlite://")
    assert second is not first
    assert str(second.url) == "sqlite://"
