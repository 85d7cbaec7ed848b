from dataclasses import dataclass
from datetime import datetime


@dataclass
class BookRecord:
    """Represents a row from the books table."""

    id: int
    user_id: str
    title: str
    author: str
    cover_storage_key: str | None = None
    cover_url: str | None = None
    created_at: datetime | None = None
