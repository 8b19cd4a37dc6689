"""
app/config.py

Settings for the FX deal import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from db.config import env_bool, env_int, env_str


@dataclass(frozen=True)
class DealImportSettings:
    """
    Runtime settings for the FX deal import pipeline.

    ``max_future_skew_hours`` bounds how far ahead of the local clock a
    deal timestamp may be. ``unknown_error_message`` is what callers see
    for unexpected failures; the real reason only goes to the audit trail.
    """

    log_import_errors: bool = True
    max_future_skew_hours: int = 24
    csv_encoding: str = "utf-8-sig"
    unknown_error_message: str = "internal error"

    @property
    def max_future_skew(self) -> timedelta:
        return timedelta(hours=self.max_future_skew_hours)


@lru_cache(maxsize=1)
def get_deal_import_settings() -> DealImportSettings:
    defaults = DealImportSettings()
    return DealImportSettings(
        log_import_errors=env_bool("FX_IMPORT_LOG_ERRORS", defaults.log_import_errors),
        max_future_skew_hours=max(0, env_int("FX_IMPORT_MAX_FUTURE_SKEW_HOURS", defaults.max_future_skew_hours)),
        csv_encoding=env_str("FX_IMPORT_CSV_ENCODING", defaults.csv_encoding),
        unknown_error_message=env_str("FX_IMPORT_UNKNOWN_ERROR_MESSAGE", defaults.unknown_error_message),
    )
