"""Custom exceptions for the modeling package."""

from __future__ import annotations


class InsufficientHistoryError(ValueError):
    """Raised when a routine needs more bars than were supplied."""

    def __init__(
        self,
        message: str | None = None,
        *,
        required: int,
        available: int,
    ) -> None:
        self.required = int(required)
        self.available = int(available)

        details = message or "Insufficient price history for the requested operation."
        super().__init__(f"{details} Required {self.required} bars, got {self.available}.")


__all__ = ["InsufficientHistoryError"]
