"""
Import FX deals from a CSV file on disk.

    python -m scripts.import_deals_csv deals.csv
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.services.csv_deal_reader import CSVUpload, InvalidFileError
from app.services.deal_import_service import get_deal_import_service
from app.services.deal_store import TransactionalDealStore
from app.services.import_error_recorder import ImportErrorRecorder
from db.session import session_scope


def main() -> int:
    parser = argparse.ArgumentParser(description="Import FX deals from a CSV file.")
    parser.add_argument("path", type=Path, help="CSV file; the first row is a header.")
    parser.add_argument(
        "--content-type",
        dest="content_type",
        default="text/csv",
        help="Content type to declare for the file (default: text/csv).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        help="Root log level (default: WARNING).",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.strip().upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    upload = CSVUpload(
        content=args.path.read_bytes(),
        content_type=args.content_type,
        filename=args.path.name,
    )

    service = get_deal_import_service()
    with session_scope() as db:
        try:
            summary = service.import_csv(
                upload=upload,
                store=TransactionalDealStore(db),
                error_sink=ImportErrorRecorder(db),
            )
        except InvalidFileError as exc:
            print(json.dumps({"error": str(exc)}, indent=2))
            return 2

    print(json.dumps(summary.to_dict(), indent=2))
    return 0 if not summary.errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
