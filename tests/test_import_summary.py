from __future__ import annotations

import unittest

from app.domain.fx_deal import ImportOutcome, ImportOutcomeStatus, ImportSummary
from db.models.import_error import ImportErrorType


class TestImportSummary(unittest.TestCase):
    def test_counts_and_error_order(self) -> None:
        summary = ImportSummary.from_outcomes(
            [
                ImportOutcome.success(row_number=1, deal_id="A"),
                ImportOutcome.duplicate_failure(row_number=2, deal_id="B", reason="Deal with ID 'B' already exists"),
                ImportOutcome.validation_failure(row_number=3, deal_id="C", reason="Deal amount cannot be null"),
                ImportOutcome.unknown_failure(
                    row_number=4,
                    deal_id="D",
                    public_message="internal error",
                    reason="connection refused",
                ),
            ]
        )

        self.assertEqual(summary.total_records, 4)
        self.assertEqual(summary.successful_imports, 1)
        self.assertEqual(summary.failed_imports, 2)
        self.assertEqual(summary.duplicate_imports, 1)
        self.assertEqual(
            [(e.row_number, e.error_type) for e in summary.errors],
            [
                (2, ImportErrorType.DUPLICATE),
                (3, ImportErrorType.VALIDATION),
                (4, ImportErrorType.UNKNOWN),
            ],
        )

    def test_unknown_failure_keeps_detail_private(self) -> None:
        outcome = ImportOutcome.unknown_failure(
            row_number=1,
            deal_id="X",
            public_message="internal error",
            reason="psycopg.OperationalError: server closed the connection",
        )
        summary = ImportSummary.from_outcomes([outcome])

        self.assertEqual(summary.errors[0].error_message, "internal error")
        self.assertIn("server closed", outcome.detail)
        self.assertNotIn("server closed", str(summary.to_dict()))

    def test_success_has_no_error_type(self) -> None:
        self.assertIsNone(ImportOutcome.success(row_number=1, deal_id="A").error_type)

    def test_unsupported_status_is_rejected(self) -> None:
        bogus = ImportOutcome(status="skipped", row_number=1, deal_id="A")

        with self.assertRaises(ValueError):
            ImportSummary.from_outcomes([bogus])

    def test_empty(self) -> None:
        summary = ImportSummary.from_outcomes([])

        self.assertEqual(summary.to_dict()["total_records"], 0)
        self.assertEqual(ImportOutcomeStatus.SUCCESS, "success")


if __name__ == "__main__":
    unittest.main()
