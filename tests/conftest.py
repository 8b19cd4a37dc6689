"""
tests/conftest.py

Shared fixtures.

Database tests run against in-memory SQLite. pysqlite's own transaction
handling breaks SAVEPOINT, so the engine below emits BEGIN itself.
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import db.models  # noqa: F401  registers all ORM models on Base.metadata
from app.domain.fx_deal import DealRecord
from app.repositories.errors import DealNotFoundError, DuplicateDealError
from db.base import Base


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ---------------------------------------------------------------------------
# In-memory collaborators for service tests
# ---------------------------------------------------------------------------


class InMemoryDealStore:
    """
    Dict-backed deal store. Deal ids listed in ``broken_ids`` fail with a
    non-duplicate error, standing in for a storage outage.
    """

    def __init__(self, broken_ids: set[str] | None = None) -> None:
        self.deals: dict[str, DealRecord] = {}
        self.broken_ids = broken_ids or set()

    def exists(self, deal_id: str) -> bool:
        return deal_id in self.deals

    def insert(self, record: DealRecord) -> DealRecord:
        if record.deal_id in self.broken_ids:
            raise RuntimeError(f"connection reset while storing {record.deal_id}")
        if record.deal_id in self.deals:
            raise DuplicateDealError(record.deal_id)
        self.deals[record.deal_id] = record
        return record

    def get(self, deal_id: str) -> DealRecord:
        try:
            return self.deals[deal_id]
        except KeyError:
            raise DealNotFoundError(deal_id) from None

    def list_all(self) -> list[DealRecord]:
        return list(self.deals.values())


class RecordingErrorSink:
    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []

    def record(
        self,
        *,
        row_number: int | None,
        deal_id: str | None,
        message: str,
        error_type: str,
    ) -> None:
        self.entries.append(
            {
                "row_number": row_number,
                "deal_id": deal_id,
                "message": message,
                "error_type": error_type,
            }
        )


@pytest.fixture()
def deal_store() -> InMemoryDealStore:
    return InMemoryDealStore()


@pytest.fixture()
def error_sink() -> RecordingErrorSink:
    return RecordingErrorSink()


def make_record(deal_id: str = "D1", **overrides: Any) -> DealRecord:
    """A deal that passes every validation rule unless overridden."""
    values: dict[str, Any] = {
        "deal_id": deal_id,
        "currency_from": "USD",
        "currency_to": "EUR",
        "deal_timestamp": datetime(2024, 1, 15, 10, 30, 0),
        "deal_amount": Decimal("1000.50"),
        "exchange_rate": None,
    }
    values.update(overrides)
    return DealRecord(**values)


@pytest.fixture()
def valid_record() -> DealRecord:
    return make_record()


@pytest.fixture()
def deal_factory():
    return make_record
