"""
db/config.py

Environment-driven configuration shared by the API process, the
command-line scripts and Alembic.

Values come from the process environment, optionally seeded from `.env`
and `.env.local` files at the project root. Malformed values fall back to
their defaults rather than failing at import time; `app.main` reports
them at startup instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILES: tuple[str, ...] = (".env", ".env.local")
CLOUD_LIKE_ENVIRONMENTS = {"prod", "production", "staging", "cloud"}
_TRUTHY = {"1", "true", "yes", "on"}


def load_env_files(root: Path | None = None) -> None:
    """
    Seed os.environ from `.env` files; real environment variables win.

    Accepts `KEY=VALUE` and `export KEY=VALUE`, with optional quotes.
    """

    base = root or PROJECT_ROOT
    for env_path in (base / name for name in ENV_FILES):
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if line.startswith("export "):
                line = line[len("export "):].lstrip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            if key:
                os.environ.setdefault(key, value.strip().strip('"').strip("'"))


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def env_str(name: str, default: str) -> str:
    """Non-blank string setting, stripped."""
    _load_env_once()
    value = (os.getenv(name) or "").strip()
    return value or default


def env_bool(name: str, default: bool) -> bool:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Integer setting; unparseable values yield ``default``."""
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def normalize_postgres_url(url: str) -> str:
    """
    Rewrite bare postgres URLs to SQLAlchemy's psycopg (v3) driver form.
    """

    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def resolve_database_url() -> str:
    """
    Pick the database URL for this process.

    DATABASE_URL wins; CLOUD_DATABASE_URL is used only when ENVIRONMENT is
    cloud-like; LOCAL_DATABASE_URL is the last resort.
    """

    load_env_files()

    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    candidates = [os.getenv("DATABASE_URL", "")]
    if environment in CLOUD_LIKE_ENVIRONMENTS:
        candidates.append(os.getenv("CLOUD_DATABASE_URL", ""))
    candidates.append(os.getenv("LOCAL_DATABASE_URL", ""))

    for candidate in candidates:
        if candidate.strip():
            return normalize_postgres_url(candidate.strip())

    raise RuntimeError(
        "No database URL configured. Set DATABASE_URL, or configure "
        "LOCAL_DATABASE_URL / CLOUD_DATABASE_URL."
    )


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Connection pool settings for the deal warehouse database.
    """

    url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800

    @classmethod
    def from_env(cls) -> DatabaseSettings:
        return cls(
            url=resolve_database_url(),
            echo=env_bool("SQL_ECHO", False),
            pool_size=max(1, env_int("DB_POOL_SIZE", 5)),
            max_overflow=max(0, env_int("DB_MAX_OVERFLOW", 10)),
            pool_recycle=env_int("DB_POOL_RECYCLE", 1800),
        )
