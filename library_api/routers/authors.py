"""
Authors Router

Endpoints for authors. Reads are public; writes require an admin token.

Every author is returned with a one-level list of its books (see
library_api.schemas.views).
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from library_api.config import get_settings
from library_api.dependencies import AdminUser, DbSession, Sorting
from library_api.models import Author, AuthorBook
from library_api.schemas import AuthorCreate, AuthorResponse, AuthorUpdate
from library_api.services.ordering import order_authors
from library_api.services.projection import project_author
from library_api.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        404: {"description": "Author not found"},
    },
)


def _with_books():
    return selectinload(Author.author_books).selectinload(AuthorBook.book)


def get_author_or_404(db: DbSession, author_id: int) -> Author:
    """Get an author by ID or raise 404."""
    stmt = select(Author).options(_with_books()).where(Author.id == author_id)
    author = db.execute(stmt).scalar_one_or_none()

    if author is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Author with id {author_id} not found",
        )
    return author


def find_authors(db: DbSession, column, term: str) -> list[Author]:
    """Authors whose column contains term, case-insensitively."""
    stmt = (
        select(Author)
        .options(_with_books())
        .where(column.ilike(f"%{term}%"))
        .order_by(Author.id)
    )
    return list(db.execute(stmt).scalars().all())


def projected_or_404(authors: list[Author], detail: str) -> list[AuthorResponse]:
    if not authors:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return [project_author(author) for author in authors]


def ensure_unique_name(
    db: DbSession,
    name: str,
    surname: str,
    exclude_id: int | None = None,
) -> None:
    """Reject a second author with the same name and surname (400)."""
    stmt = select(Author.id).where(Author.name == name, Author.surname == surname)
    if exclude_id is not None:
        stmt = stmt.where(Author.id != exclude_id)

    if db.execute(stmt).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Author {name} {surname} already exists",
        )


# =============================================================================
# Read Endpoints
# =============================================================================

@router.get(
    "/",
    response_model=list[AuthorResponse],
    summary="List all authors",
    description="""
    List every author with its books, in the requested order.

    - `sort_by`: 1 = name, 2 = surname, 3 = birth date, other = id
    - `direction`: 1 = ascending, other = descending

    With neither parameter given the list is by ascending id.
    """,
)
def list_authors(db: DbSession, sorting: Sorting) -> list[AuthorResponse]:
    authors = order_authors(db, sorting.sort_by, sorting.direction)
    return projected_or_404(authors, "No authors found")


@router.get(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Get an author by ID",
)
def get_author(author_id: int, db: DbSession) -> AuthorResponse:
    return project_author(get_author_or_404(db, author_id))


@router.get(
    "/name/{name}",
    response_model=list[AuthorResponse],
    summary="Find authors by name",
    description="Authors whose given name contains the text (case-insensitive).",
)
def get_authors_by_name(name: str, db: DbSession) -> list[AuthorResponse]:
    authors = find_authors(db, Author.name, name)
    return projected_or_404(authors, f"No authors named '{name}'")


@router.get(
    "/surname/{surname}",
    response_model=list[AuthorResponse],
    summary="Find authors by surname",
    description="Authors whose surname contains the text (case-insensitive).",
)
def get_authors_by_surname(surname: str, db: DbSession) -> list[AuthorResponse]:
    authors = find_authors(db, Author.surname, surname)
    return projected_or_404(authors, f"No authors with surname '{surname}'")


@router.get(
    "/search/{term}",
    response_model=list[AuthorResponse],
    summary="Search authors",
    description="Name matches are returned if there are any; otherwise surname matches.",
)
def search_authors(term: str, db: DbSession) -> list[AuthorResponse]:
    authors = find_authors(db, Author.name, term)
    if not authors:
        authors = find_authors(db, Author.surname, term)
    return projected_or_404(authors, f"No authors matching '{term}'")


# =============================================================================
# Write Endpoints (admin)
# =============================================================================

@router.post(
    "/",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    responses={400: {"description": "Author already exists"}},
)
@limiter.limit(settings.rate_limit_write)
def create_author(
    request: Request,
    author_data: AuthorCreate,
    db: DbSession,
    admin: AdminUser,
) -> AuthorResponse:
    ensure_unique_name(db, author_data.name, author_data.surname)

    author = Author(**author_data.model_dump())
    db.add(author)
    db.commit()
    db.refresh(author)

    logger.info(f"Author {author.id} created by {admin.email}")

    return project_author(author)


@router.put(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Replace an author",
    description="Replace every field of an author. Omitted optional fields are cleared.",
)
@limiter.limit(settings.rate_limit_write)
def replace_author(
    request: Request,
    author_id: int,
    author_data: AuthorCreate,
    db: DbSession,
    admin: AdminUser,
) -> AuthorResponse:
    author = get_author_or_404(db, author_id)
    ensure_unique_name(db, author_data.name, author_data.surname, exclude_id=author_id)

    for field, value in author_data.model_dump().items():
        setattr(author, field, value)

    db.commit()
    db.refresh(author)

    return project_author(author)


@router.patch(
    "/{author_id}",
    response_model=AuthorResponse,
    summary="Update an author",
    description="Change only the fields present in the body.",
)
@limiter.limit(settings.rate_limit_write)
def update_author(
    request: Request,
    author_id: int,
    author_data: AuthorUpdate,
    db: DbSession,
    admin: AdminUser,
) -> AuthorResponse:
    update_data = author_data.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    author = get_author_or_404(db, author_id)
    ensure_unique_name(
        db,
        update_data.get("name", author.name),
        update_data.get("surname", author.surname),
        exclude_id=author_id,
    )

    for field, value in update_data.items():
        setattr(author, field, value)

    db.commit()
    db.refresh(author)

    return project_author(author)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an author",
    description="Delete an author and its links to books. The books themselves stay.",
)
@limiter.limit(settings.rate_limit_write)
def delete_author(
    request: Request,
    author_id: int,
    db: DbSession,
    admin: AdminUser,
) -> None:
    author = get_author_or_404(db, author_id)
    db.delete(author)
    db.commit()

    logger.info(f"Author {author_id} deleted by {admin.email}")
