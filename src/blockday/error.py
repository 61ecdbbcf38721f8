# SPDX-License-Identifier: MIT


class BlockdayError(Exception):
    """Base class for failures reported back to the caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BlockdayError):
    """Malformed input rejected before any write."""


class ConflictError(BlockdayError):
    """A one-off occurrence would overlap an existing one on the same date."""


class NotFoundError(BlockdayError):
    """A referenced template, occurrence or backlog item is missing."""


class StorageError(BlockdayError):
    """The storage collaborator failed to read or write."""
