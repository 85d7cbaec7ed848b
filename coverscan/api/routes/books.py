"""Book list routes backed by the record store."""

from fastapi import APIRouter, Query, status

from coverscan.api.dependencies import BookRepositoryDep, CurrentUserDep
from coverscan.api.errors import ApiError
from coverscan.api.schemas import BookCreateRequest, BookListResponse, BookResponse
from coverscan.database.exceptions import BookNotFoundError
from coverscan.database.models import BookRecord

router = APIRouter(prefix="/books", tags=["books"])


def _to_response(record: BookRecord) -> BookResponse:
    return BookResponse(
        id=record.id,
        title=record.title,
        author=record.author,
        cover_storage_key=record.cover_storage_key,
        cover_url=record.cover_url,
        created_at=record.created_at,
    )


@router.get("", response_model=BookListResponse)
def list_books(
    user_id: CurrentUserDep,
    repo: BookRepositoryDep,
    search: str = Query("", description="Case-insensitive title substring"),
) -> BookListResponse:
    books = [_to_response(r) for r in repo.select(user_id, search)]
    return BookListResponse(books=books, total=len(books))


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def add_book(
    body: BookCreateRequest,
    user_id: CurrentUserDep,
    repo: BookRepositoryDep,
) -> BookResponse:
    record = repo.insert(
        user_id,
        title=body.title,
        author=body.author,
        cover_storage_key=body.cover_storage_key,
        cover_url=body.cover_url,
    )
    return _to_response(record)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, user_id: CurrentUserDep, repo: BookRepositoryDep) -> None:
    try:
        repo.delete(user_id, book_id)
    except BookNotFoundError as exc:
        raise ApiError(
            "Book not found", str(exc), status_code=status.HTTP_404_NOT_FOUND
        ) from exc
