"""
app/repositories/errors.py

Repository-layer exceptions for FX deal persistence.
"""

from __future__ import annotations


class DealRepositoryError(Exception):
    """Base exception for deal repository failures."""


class DuplicateDealError(DealRepositoryError):
    """Raised when a deal with the same deal_id is already stored."""

    def __init__(self, deal_id: str | None) -> None:
        super().__init__(f"Deal with ID '{deal_id}' already exists")
        self.deal_id = deal_id


class DealNotFoundError(DealRepositoryError):
    """Raised when no deal exists for the requested deal_id."""

    def __init__(self, deal_id: str) -> None:
        super().__init__(f"Deal with ID '{deal_id}' not found")
        self.deal_id = deal_id
