"""
Libraries Router

The caller's personal library. Every endpoint requires a bearer token and
works on the library of the token's user; there is no way to address
another user's library.

Membership rules live in library_api.services.relationships; errors it
raises (404/400/409) are turned into responses by the handler in main.py.
"""

from fastapi import APIRouter, Request

from library_api.config import get_settings
from library_api.dependencies import CurrentUser, DbSession
from library_api.schemas import BookResponse, LibraryBooksRequest, LibraryResponse
from library_api.services import relationships
from library_api.services.projection import project_book
from library_api.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/libraries",
    tags=["Libraries"],
    responses={
        401: {"description": "Not authenticated"},
    },
)


@router.get(
    "/me",
    response_model=list[BookResponse],
    summary="My books",
    description="Books in your library, in the order they were added.",
    responses={404: {"description": "Your library is missing or empty"}},
)
def get_my_books(db: DbSession, current_user: CurrentUser) -> list[BookResponse]:
    books = relationships.get_library_books(db, current_user.id)
    return [project_book(book) for book in books]


@router.post(
    "/me/books/{book_id}",
    response_model=LibraryResponse,
    summary="Add a book to my library",
    description="Creates your library on the first addition.",
    responses={
        404: {"description": "Book not found"},
        409: {"description": "Book already in your library"},
    },
)
@limiter.limit(settings.rate_limit_write)
def add_book(
    request: Request,
    book_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> LibraryResponse:
    library = relationships.attach_book_to_library(db, current_user.id, book_id)
    return LibraryResponse.model_validate(library)


@router.post(
    "/me/books",
    response_model=LibraryResponse,
    summary="Add several books to my library",
    description="Either every book is added or none is.",
    responses={
        400: {"description": "No book ids given"},
        404: {"description": "Some books not found"},
        409: {"description": "Some books already in your library"},
    },
)
@limiter.limit(settings.rate_limit_write)
def add_books(
    request: Request,
    body: LibraryBooksRequest,
    db: DbSession,
    current_user: CurrentUser,
) -> LibraryResponse:
    library = relationships.attach_books_to_library(db, current_user.id, body.book_ids)
    return LibraryResponse.model_validate(library)


@router.delete(
    "/me/books/{book_id}",
    response_model=LibraryResponse,
    summary="Remove a book from my library",
    responses={400: {"description": "Book not in your library"}},
)
@limiter.limit(settings.rate_limit_write)
def remove_book(
    request: Request,
    book_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> LibraryResponse:
    library = relationships.detach_book_from_library(db, current_user.id, book_id)
    return LibraryResponse.model_validate(library)


@router.delete(
    "/me/books",
    response_model=LibraryResponse,
    summary="Remove several books from my library",
    description="Either every book is removed or none is.",
    responses={400: {"description": "Some books not in your library"}},
)
@limiter.limit(settings.rate_limit_write)
def remove_books(
    request: Request,
    body: LibraryBooksRequest,
    db: DbSession,
    current_user: CurrentUser,
) -> LibraryResponse:
    library = relationships.detach_books_from_library(db, current_user.id, body.book_ids)
    return LibraryResponse.model_validate(library)
