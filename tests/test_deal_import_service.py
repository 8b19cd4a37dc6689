"""
tests/test_deal_import_service.py

Pytest unit tests for DealImportService.

Storage and the audit sink are in-memory doubles from conftest; no
database is involved.

Coverage
--------
- Single valid deal
- Mixed batch with validation and duplicate failures
- Duplicates inside one batch
- CSV uploads with blank and malformed rows
- Unknown failures: generic caller message, full reason in the audit sink
- Count invariant and error ordering
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from app.domain.fx_deal import RowCandidate
from app.services.csv_deal_reader import CSVUpload, InvalidFileError
from app.services.deal_import_service import DealImportService
from app.validators.fx_deal_validator import FxDealValidator
from db.models.import_error import ImportErrorType

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture()
def service() -> DealImportService:
    return DealImportService(validator=FxDealValidator(clock=lambda: NOW))


def _batch(*records) -> list[RowCandidate]:
    return [RowCandidate(row_number=i, record=record) for i, record in enumerate(records, start=1)]


def _assert_counts_add_up(summary) -> None:
    assert summary.total_records == (
        summary.successful_imports + summary.failed_imports + summary.duplicate_imports
    )
    assert len(summary.errors) == summary.failed_imports + summary.duplicate_imports


# ---------------------------------------------------------------------------
# Single deal
# ---------------------------------------------------------------------------


def test_single_valid_deal(service, deal_store, error_sink, deal_factory) -> None:
    record = deal_factory(
        "DEAL-001",
        deal_amount=Decimal("10000.50"),
        exchange_rate=0.85,
        deal_timestamp=NOW,
    )

    summary = service.import_deal(record=record, store=deal_store, error_sink=error_sink)

    assert summary.to_dict() == {
        "total_records": 1,
        "successful_imports": 1,
        "failed_imports": 0,
        "duplicate_imports": 0,
        "errors": [],
    }
    assert deal_store.get("DEAL-001").exchange_rate == 0.85
    assert error_sink.entries == []


def test_single_invalid_deal_is_reported_at_row_one(service, deal_store, error_sink, deal_factory) -> None:
    summary = service.import_deal(
        record=deal_factory(currency_to="USD", currency_from="USD"),
        store=deal_store,
        error_sink=error_sink,
    )

    assert summary.failed_imports == 1
    assert summary.errors[0].row_number == 1
    assert summary.errors[0].error_type == ImportErrorType.VALIDATION
    assert deal_store.list_all() == []


# ---------------------------------------------------------------------------
# Batches
# ---------------------------------------------------------------------------


def test_mixed_batch(service, deal_store, error_sink, deal_factory) -> None:
    deal_store.insert(deal_factory("D3"))

    summary = service.import_deals(
        candidates=_batch(
            deal_factory("D1"),
            deal_factory("D2", currency_to="XYZ"),
            deal_factory("D3"),
            deal_factory("D4"),
        ),
        store=deal_store,
        error_sink=error_sink,
    )

    assert (summary.total_records, summary.successful_imports, summary.failed_imports, summary.duplicate_imports) == (
        4,
        2,
        1,
        1,
    )
    assert [(e.row_number, e.deal_id, e.error_type) for e in summary.errors] == [
        (2, "D2", ImportErrorType.VALIDATION),
        (3, "D3", ImportErrorType.DUPLICATE),
    ]
    assert summary.errors[0].error_message == "To currency 'XYZ' is not a valid ISO 4217 currency code"
    assert summary.errors[1].error_message == "Deal with ID 'D3' already exists"
    assert sorted(deal_store.deals) == ["D1", "D3", "D4"]
    _assert_counts_add_up(summary)


def test_duplicate_within_one_batch(service, deal_store, error_sink, deal_factory) -> None:
    summary = service.import_deals(
        candidates=_batch(deal_factory("SAME"), deal_factory("SAME", deal_amount=Decimal("1"))),
        store=deal_store,
        error_sink=error_sink,
    )

    assert summary.successful_imports == 1
    assert summary.duplicate_imports == 1
    assert summary.errors[0].row_number == 2
    assert deal_store.get("SAME").deal_amount == Decimal("1000.50")


def test_reimport_is_rejected_as_duplicate(service, deal_store, error_sink, deal_factory) -> None:
    candidates = _batch(deal_factory("D1"), deal_factory("D2"))

    first = service.import_deals(candidates=candidates, store=deal_store, error_sink=error_sink)
    second = service.import_deals(candidates=candidates, store=deal_store, error_sink=error_sink)

    assert first.successful_imports == 2
    assert second.successful_imports == 0
    assert second.duplicate_imports == 2
    assert len(deal_store.deals) == 2


def test_empty_batch(service, deal_store, error_sink) -> None:
    summary = service.import_deals(candidates=[], store=deal_store, error_sink=error_sink)

    assert summary.total_records == 0
    assert summary.errors == []


def test_every_failure_reaches_the_sink(service, deal_store, error_sink, deal_factory) -> None:
    deal_store.insert(deal_factory("DUP"))

    service.import_deals(
        candidates=_batch(
            deal_factory("BAD", deal_amount=Decimal("0")),
            deal_factory("DUP"),
            deal_factory("OK"),
        ),
        store=deal_store,
        error_sink=error_sink,
    )

    assert error_sink.entries == [
        {
            "row_number": 1,
            "deal_id": "BAD",
            "message": "Deal amount must be greater than zero",
            "error_type": ImportErrorType.VALIDATION,
        },
        {
            "row_number": 2,
            "deal_id": "DUP",
            "message": "Deal with ID 'DUP' already exists",
            "error_type": ImportErrorType.DUPLICATE,
        },
    ]


def test_future_timestamp_is_a_validation_failure(service, deal_store, error_sink, deal_factory) -> None:
    summary = service.import_deals(
        candidates=_batch(deal_factory(deal_timestamp=NOW + timedelta(days=2))),
        store=deal_store,
        error_sink=error_sink,
    )

    assert summary.failed_imports == 1
    assert summary.errors[0].error_message == "Deal timestamp cannot be more than 1 day in the future"


# ---------------------------------------------------------------------------
# Unknown failures
# ---------------------------------------------------------------------------


def test_unexpected_store_error_does_not_stop_the_batch(service, deal_store, error_sink, deal_factory) -> None:
    deal_store.broken_ids = {"D2"}

    summary = service.import_deals(
        candidates=_batch(deal_factory("D1"), deal_factory("D2"), deal_factory("D3")),
        store=deal_store,
        error_sink=error_sink,
    )

    assert summary.successful_imports == 2
    assert summary.failed_imports == 1
    assert summary.errors[0].error_type == ImportErrorType.UNKNOWN
    assert summary.errors[0].error_message == "internal error"
    assert error_sink.entries[0]["message"] == "connection reset while storing D2"
    assert error_sink.entries[0]["error_type"] == ImportErrorType.UNKNOWN
    _assert_counts_add_up(summary)


def test_unknown_message_is_configurable(deal_store, error_sink, deal_factory) -> None:
    service = DealImportService(
        validator=FxDealValidator(clock=lambda: NOW),
        unknown_error_message="something went wrong",
    )
    deal_store.broken_ids = {"D1"}

    summary = service.import_deal(record=deal_factory("D1"), store=deal_store, error_sink=error_sink)

    assert summary.errors[0].error_message == "something went wrong"


def test_validator_crash_is_an_unknown_failure(deal_store, error_sink, deal_factory) -> None:
    class ExplodingValidator:
        def validate(self, record) -> None:
            raise KeyError("rules table missing")

    service = DealImportService(validator=ExplodingValidator())  # type: ignore[arg-type]

    summary = service.import_deal(record=deal_factory(), store=deal_store, error_sink=error_sink)

    assert summary.errors[0].error_type == ImportErrorType.UNKNOWN
    assert "rules table missing" in error_sink.entries[0]["message"]
    assert deal_store.deals == {}


# ---------------------------------------------------------------------------
# CSV uploads
# ---------------------------------------------------------------------------


def test_csv_with_blank_and_short_rows(service, deal_store, error_sink) -> None:
    upload = CSVUpload(
        content=(
            b"deal_id,currency_from,currency_to,deal_timestamp,deal_amount\n"
            b"C1,USD,EUR,2024-01-15 10:30:00,100.25\n"
            b"\n"
            b"C3,USD,EUR\n"
        ),
        content_type="text/csv",
    )

    summary = service.import_csv(upload=upload, store=deal_store, error_sink=error_sink)

    assert summary.total_records == 2
    assert summary.successful_imports == 1
    assert summary.failed_imports == 1
    error = summary.errors[0]
    assert (error.row_number, error.deal_id, error.error_type) == (3, "C3", ImportErrorType.VALIDATION)
    assert error.error_message == "Row must contain at least 5 columns. Found: 3"
    assert deal_store.get("C1").exchange_rate is None


def test_csv_parse_error_message_is_kept(service, deal_store, error_sink) -> None:
    upload = CSVUpload(
        content=b"h1,h2,h3,h4,h5\nC1,USD,EUR,2024-01-15 10:30:00,12abc\n",
        content_type="text/plain",
    )

    summary = service.import_csv(upload=upload, store=deal_store, error_sink=error_sink)

    assert summary.errors[0].error_message == "Invalid amount format at row 1: 12abc"
    assert error_sink.entries[0]["message"] == "Invalid amount format at row 1: 12abc"


def test_empty_csv_upload_raises(service, deal_store, error_sink) -> None:
    with pytest.raises(InvalidFileError):
        service.import_csv(
            upload=CSVUpload(content=b"", content_type="text/csv"),
            store=deal_store,
            error_sink=error_sink,
        )

    assert error_sink.entries == []


def test_failing_sink_does_not_abort_the_batch(service, deal_store, deal_factory) -> None:
    class BrokenSink:
        def __init__(self) -> None:
            self.calls = 0

        def record(self, **kwargs) -> None:
            self.calls += 1
            raise ValueError("sink down")

    sink = BrokenSink()

    summary = service.import_deals(
        candidates=_batch(deal_factory("BAD", currency_from="EUR"), deal_factory("OK")),
        store=deal_store,
        error_sink=sink,
    )

    assert sink.calls == 1
    assert summary.total_records == 2
    assert summary.successful_imports == 1
    assert summary.failed_imports == 1
    assert summary.errors[0].deal_id == "BAD"
    assert "OK" in deal_store.deals
