from typing import Any

from psycopg.rows import dict_row

from coverscan.database.connection import get_connection
from coverscan.database.exceptions import BookNotFoundError
from coverscan.database.models import BookRecord

_COLUMNS = "id, user_id, title, author, cover_storage_key, cover_url, created_at"


class BookRepository:
    """Database operations for the books table.

    Every operation is scoped to one user; rows of other users are invisible.
    """

    def insert(
        self,
        user_id: str,
        title: str,
        author: str,
        cover_storage_key: str | None = None,
        cover_url: str | None = None,
    ) -> BookRecord:
        """Insert a book and return the stored row."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO books (user_id, title, author, cover_storage_key, cover_url)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (user_id, title, author, cover_storage_key, cover_url),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return self._to_record(row)

    def select(self, user_id: str, search: str = "") -> list[BookRecord]:
        """List a user's books whose title contains search, case-insensitively."""
        pattern = f"%{_escape_like(search)}%"
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM books
                    WHERE user_id = %s AND title ILIKE %s
                    ORDER BY created_at DESC, id DESC
                    """,
                    (user_id, pattern),
                )
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    def delete(self, user_id: str, book_id: int) -> None:
        """Delete one of the user's books.

        Raises:
            BookNotFoundError: if no such book exists for this user.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM books WHERE id = %s AND user_id = %s",
                    (book_id, user_id),
                )
                if cur.rowcount == 0:
                    raise BookNotFoundError(f"Book {book_id} not found")
            conn.commit()

    @staticmethod
    def _to_record(row: dict[str, Any]) -> BookRecord:
        return BookRecord(
            id=row["id"],
            user_id=str(row["user_id"]),
            title=row["title"],
            author=row["author"],
            cover_storage_key=row.get("cover_storage_key"),
            cover_url=row.get("cover_url"),
            created_at=row.get("created_at"),
        )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
