"""
app/main.py

FastAPI entry point for the FX deals warehouse.

    uvicorn app.main:app
"""

from __future__ import annotations

import codecs
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _validate_env() -> None:
    """
    Check configuration before anything touches the database.

    Collects every problem and raises one RuntimeError so the operator can
    fix them all in a single restart.
    """

    from db.config import load_env_files, resolve_database_url

    load_env_files()
    errors: list[str] = []

    try:
        resolve_database_url()
    except RuntimeError as exc:
        errors.append(str(exc))

    skew_raw = os.getenv("FX_IMPORT_MAX_FUTURE_SKEW_HOURS")
    if skew_raw is not None and not skew_raw.strip().isdigit():
        errors.append(
            f"FX_IMPORT_MAX_FUTURE_SKEW_HOURS='{skew_raw}' is not a non-negative integer."
        )

    encoding = os.getenv("FX_IMPORT_CSV_ENCODING", "").strip()
    if encoding:
        try:
            codecs.lookup(encoding)
        except LookupError:
            errors.append(f"FX_IMPORT_CSV_ENCODING='{encoding}' is not a known codec.")

    if errors:
        raise RuntimeError(
            "Startup validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _verify_database() -> None:
    """
    Refuse to serve until the database is reachable and migrated.

    Every ORM table must exist, and fx_deals must carry its unique
    constraint on deal_id: duplicate detection under concurrent imports
    depends on it. Nothing is auto-migrated.
    """

    from sqlalchemy import inspect as sa_inspect
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    import db.models  # noqa: F401  registers all ORM models on Base.metadata
    from db.base import Base
    from db.models.fx_deal import DEAL_ID_UNIQUE_CONSTRAINT
    from db.session import get_engine

    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
            inspector = sa_inspect(connection)
            missing = sorted(set(Base.metadata.tables) - set(inspector.get_table_names()))
            constraints = (
                {uc["name"] for uc in inspector.get_unique_constraints("fx_deals")}
                if "fx_deals" not in missing
                else set()
            )
    except SQLAlchemyError as exc:
        raise RuntimeError("Database unavailable.") from exc

    if missing:
        logger.critical(
            "Schema mismatch: missing table(s) %s. Run 'alembic upgrade head' and restart.",
            ", ".join(missing),
        )
        raise RuntimeError(f"Schema mismatch: missing table(s) {', '.join(missing)}.")

    if DEAL_ID_UNIQUE_CONSTRAINT not in constraints:
        logger.critical("fx_deals has no %s constraint", DEAL_ID_UNIQUE_CONSTRAINT)
        raise RuntimeError(
            f"Schema mismatch: fx_deals is missing unique constraint {DEAL_ID_UNIQUE_CONSTRAINT}."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    _verify_database()
    logger.info("Database reachable and schema up to date")
    yield


def create_app() -> FastAPI:
    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="FX Deals Warehouse API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import fx_deals_router, import_errors_router

    application.include_router(fx_deals_router)
    application.include_router(import_errors_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
