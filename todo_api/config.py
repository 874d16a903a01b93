"""Application configuration values and helpers.

Centralizes runtime configuration for:
  - Database URL (supports local file or server URL)
  - Session token signing and password hashing
  - Log level

Values can be provided via environment variables or a user settings file at
``~/.todo_api/settings.toml``.

Environment variables (quick overrides):
  - DATABASE_URL: full SQLAlchemy URL; overrides settings.toml
  - TODO_API_SETTINGS_PATH: alternative settings.toml location
  - TODO_API_JWT_SECRET: secret used to sign session tokens
  - TODO_API_BCRYPT_ROUNDS: bcrypt cost factor
  - TODO_API_LOG_LEVEL: root log level (INFO, DEBUG, ...)
"""

from __future__ import annotations

import atexit
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine, make_url
from sqlmodel import create_engine

logger = logging.getLogger(__name__)

APP_STORAGE_ROOT = Path.home() / ".todo_api"

DEFAULT_JWT_SECRET = "todo-api-development-signing-secret"  # override outside development
DEFAULT_BCRYPT_ROUNDS = 12
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _determine_settings_path() -> Path:
    override = os.getenv("TODO_API_SETTINGS_PATH")
    if override:
        return Path(override).expanduser().resolve()
    return (APP_STORAGE_ROOT / "settings.toml").resolve()


SETTINGS_PATH = _determine_settings_path()


def _ensure_sqlite_directory(url: str) -> str:
    try:
        url_obj = make_url(url)
    except Exception:
        return url
    if url_obj.get_backend_name() != "sqlite":
        return url
    database = url_obj.database or ""
    if not database or database == ":memory:" or database.startswith("file:"):
        return url
    db_path = Path(database)
    if not db_path.is_absolute():
        db_path = (SETTINGS_PATH.parent / db_path).resolve()
        url_obj = url_obj.set(database=db_path.as_posix())
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return url_obj.render_as_string(hide_password=False)


DEFAULT_URL = f"sqlite:///{(APP_STORAGE_ROOT / 'todo.db').resolve().as_posix()}"


def _read_settings_dict() -> Dict[str, Any]:
    if not SETTINGS_PATH.exists():
        return {}
    try:
        with open(SETTINGS_PATH, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
        return {}


def _from_settings(section: str, key: str, default: Any) -> Any:
    data = _read_settings_dict()
    value = (data.get(section) or {}).get(key)
    return default if value in (None, "") else value


def _value_from_env_or_settings(env: str, section: str, key: str, default: Any) -> Any:
    return os.getenv(env) or _from_settings(section, key, default)


def _coerce_positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def load_settings() -> str:
    """Return database URL from env or settings.toml."""
    url = os.getenv("DATABASE_URL") or _from_settings("database", "url", DEFAULT_URL)
    return _ensure_sqlite_directory(str(url))


def get_jwt_secret() -> str:
    return str(
        _value_from_env_or_settings(
            "TODO_API_JWT_SECRET", "auth", "jwt_secret", DEFAULT_JWT_SECRET
        )
    )


def get_bcrypt_rounds() -> int:
    raw = _value_from_env_or_settings(
        "TODO_API_BCRYPT_ROUNDS", "auth", "bcrypt_rounds", DEFAULT_BCRYPT_ROUNDS
    )
    # bcrypt accepts cost factors 4..31
    return min(max(_coerce_positive_int(raw, DEFAULT_BCRYPT_ROUNDS), 4), 31)


def get_log_level() -> int:
    name = str(
        _value_from_env_or_settings(
            "TODO_API_LOG_LEVEL", "logging", "level", DEFAULT_LOG_LEVEL
        )
    ).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging() -> None:
    """Install the terminal log handler used by the server entrypoints."""
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)


def _create_engine(url: str) -> Engine:
    if make_url(url).get_backend_name() == "sqlite":
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(url, echo=False)


DATABASE_URL = load_settings()
_ENGINE: Engine = _create_engine(DATABASE_URL)


def dispose_engine() -> None:
    """Dispose the global engine, releasing any pooled connections."""
    _ENGINE.dispose()


atexit.register(dispose_engine)


def get_engine(url: Optional[str] = None) -> Engine:
    """Return engine, recreating if the URL changed."""
    global _ENGINE, DATABASE_URL
    new_url = _ensure_sqlite_directory(url) if url is not None else load_settings()
    if new_url != DATABASE_URL:
        logger.info("Database URL changed, rebuilding engine")
        DATABASE_URL = new_url
        _ENGINE.dispose()
        _ENGINE = _create_engine(DATABASE_URL)
    return _ENGINE
