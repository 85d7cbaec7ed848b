class RecordStoreError(Exception):
    """Base exception for record store operations."""


class BookNotFoundError(RecordStoreError):
    """Raised when a book does not exist or belongs to another user."""
