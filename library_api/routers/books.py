"""
Books Router

Endpoints for books. Reads are public; writes require an admin token.

This router demonstrates:
- Author links maintained through the relationship service
- One-level response projection (book -> author summaries)
- Lookups by title and by author
- Rate limiting on writes
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from library_api.config import get_settings
from library_api.dependencies import AdminUser, DbSession
from library_api.models import Author, AuthorBook, Book
from library_api.schemas import (
    BookCreate,
    BookResponse,
    BookSummary,
    BookUpdate,
)
from library_api.services import relationships
from library_api.services.projection import project_book, project_book_summary
from library_api.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================

def _with_authors():
    return selectinload(Book.author_books).selectinload(AuthorBook.author)


def get_book_or_404(db: DbSession, book_id: int) -> Book:
    """
    Get a book by ID or raise 404.

    Author links are eager-loaded, so projecting the book does not issue
    one query per author.
    """
    stmt = select(Book).options(_with_authors()).where(Book.id == book_id)
    book = db.execute(stmt).scalar_one_or_none()

    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )
    return book


def summaries_or_404(books: list[Book], detail: str) -> list[BookSummary]:
    if not books:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return [project_book_summary(book) for book in books]


# =============================================================================
# Read Endpoints
# =============================================================================

@router.get(
    "/",
    response_model=list[BookResponse],
    summary="List all books",
    description="Every book with its authors, by ascending id.",
)
def list_books(db: DbSession) -> list[BookResponse]:
    stmt = select(Book).options(_with_authors()).order_by(Book.id)
    books = db.execute(stmt).scalars().all()
    return [project_book(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
def get_book(book_id: int, db: DbSession) -> BookResponse:
    return project_book(get_book_or_404(db, book_id))


@router.get(
    "/title/{title}",
    response_model=list[BookResponse],
    summary="Find books by title",
    description="Books whose title contains the text (case-insensitive).",
)
def get_books_by_title(title: str, db: DbSession) -> list[BookResponse]:
    stmt = (
        select(Book)
        .options(_with_authors())
        .where(Book.title.ilike(f"%{title}%"))
        .order_by(Book.id)
    )
    books = db.execute(stmt).scalars().all()

    if not books:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No books with title '{title}'",
        )
    return [project_book(book) for book in books]


@router.get(
    "/by-author/{author_id}",
    response_model=list[BookSummary],
    summary="Books by author ID",
    responses={400: {"description": "Author does not exist"}},
)
def get_books_by_author(author_id: int, db: DbSession) -> list[BookSummary]:
    if db.get(Author, author_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"No author with id {author_id}",
        )

    stmt = (
        select(Book)
        .join(Book.author_books)
        .where(AuthorBook.author_id == author_id)
        .order_by(Book.id)
    )
    books = list(db.execute(stmt).scalars().all())
    return summaries_or_404(books, f"Author {author_id} has no books")


@router.get(
    "/by-author-name/{name}",
    response_model=list[BookSummary],
    summary="Books by author name",
    description="""
    Books by every author whose name or surname contains the text
    (case-insensitive). A book written by several matching authors is
    listed once.
    """,
    responses={400: {"description": "No author matches"}},
)
def get_books_by_author_name(name: str, db: DbSession) -> list[BookSummary]:
    matches_author = or_(Author.name.ilike(f"%{name}%"), Author.surname.ilike(f"%{name}%"))

    if db.execute(select(Author.id).where(matches_author)).first() is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"No author named '{name}'",
        )

    stmt = (
        select(Book)
        .join(Book.author_books)
        .join(AuthorBook.author)
        .where(matches_author)
        .distinct()
        .order_by(Book.id)
    )
    books = list(db.execute(stmt).scalars().all())
    return summaries_or_404(books, f"Authors matching '{name}' have no books")


# =============================================================================
# Write Endpoints (admin)
# =============================================================================

@router.post(
    "/",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a book linked to one or more existing authors.",
    responses={400: {"description": "Missing or unknown author ids"}},
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    admin: AdminUser,
) -> BookResponse:
    book = relationships.create_book_with_authors(
        db, book_data.book_fields(), book_data.author_ids
    )
    return project_book(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Replace a book",
    description="Replace every field of a book, including its authors.",
)
@limiter.limit(settings.rate_limit_write)
def replace_book(
    request: Request,
    book_id: int,
    book_data: BookCreate,
    db: DbSession,
    admin: AdminUser,
) -> BookResponse:
    book = get_book_or_404(db, book_id)

    for field, value in book_data.book_fields().items():
        setattr(book, field, value)

    book = relationships.replace_book_authors(db, book, book_data.author_ids)
    return project_book(book)


@router.patch(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="""
    Change only the fields present in the body.
    When `author_ids` is present it replaces the book's authors.
    """,
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    admin: AdminUser,
) -> BookResponse:
    update_data = book_data.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    book = get_book_or_404(db, book_id)
    author_ids = update_data.pop("author_ids", None)

    for field, value in update_data.items():
        setattr(book, field, value)

    if author_ids is not None:
        book = relationships.replace_book_authors(db, book, author_ids)
    else:
        db.commit()
        db.refresh(book)

    return project_book(book)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Delete a book with its author links, library entries and comments.",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: int,
    db: DbSession,
    admin: AdminUser,
) -> None:
    book = get_book_or_404(db, book_id)
    db.delete(book)
    db.commit()

    logger.info(f"Book {book_id} deleted by {admin.email}")
