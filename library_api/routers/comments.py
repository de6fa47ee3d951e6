"""
Comments Router

Comments are nested under the book they belong to.

Endpoints:
- GET /books/{book_id}/comments/ - List comments on a book
- GET /books/{book_id}/comments/mine - The caller's comments on a book
- GET /books/{book_id}/comments/{comment_id} - Get one comment
- POST /books/{book_id}/comments/ - Comment on a book (authenticated)
- PUT /books/{book_id}/comments/{comment_id} - Replace text (owner only)
- DELETE /books/{book_id}/comments/{comment_id} - Delete (owner only)

Business Rules:
- A comment is only reachable through its own book
- Only the comment's author can change or delete it
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import select

from library_api.config import get_settings
from library_api.dependencies import CurrentUser, DbSession
from library_api.exceptions import ForbiddenError
from library_api.models import Book, Comment, User
from library_api.schemas.comment import CommentCreate, CommentResponse
from library_api.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/books/{book_id}/comments",
    tags=["Comments"],
    responses={
        404: {"description": "Book or comment not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================

def ensure_book_exists(db: DbSession, book_id: int) -> None:
    if db.get(Book, book_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Book with id {book_id} not found",
        )


def get_comment_or_404(db: DbSession, book_id: int, comment_id: int) -> Comment:
    """Get a comment on this book, or raise 404 (also when it is on another book)."""
    ensure_book_exists(db, book_id)

    comment = db.get(Comment, comment_id)
    if comment is None or comment.book_id != book_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Comment with id {comment_id} not found on book {book_id}",
        )
    return comment


def ensure_owner(comment: Comment, user: User) -> None:
    if comment.user_id != user.id:
        raise ForbiddenError("You can only modify your own comments")


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/",
    response_model=list[CommentResponse],
    summary="List comments on a book",
)
def list_comments(book_id: int, db: DbSession) -> list[CommentResponse]:
    ensure_book_exists(db, book_id)

    stmt = select(Comment).where(Comment.book_id == book_id).order_by(Comment.id)
    comments = db.execute(stmt).scalars().all()
    return [CommentResponse.model_validate(c) for c in comments]


@router.get(
    "/mine",
    response_model=list[CommentResponse],
    summary="My comments on a book",
)
def list_my_comments(
    book_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> list[CommentResponse]:
    ensure_book_exists(db, book_id)

    stmt = (
        select(Comment)
        .where(Comment.book_id == book_id, Comment.user_id == current_user.id)
        .order_by(Comment.id)
    )
    comments = db.execute(stmt).scalars().all()
    return [CommentResponse.model_validate(c) for c in comments]


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Get a comment",
)
def get_comment(book_id: int, comment_id: int, db: DbSession) -> CommentResponse:
    return CommentResponse.model_validate(get_comment_or_404(db, book_id, comment_id))


@router.post(
    "/",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a book",
)
@limiter.limit(settings.rate_limit_write)
def create_comment(
    request: Request,
    book_id: int,
    comment_data: CommentCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> CommentResponse:
    ensure_book_exists(db, book_id)

    comment = Comment(
        content=comment_data.content,
        book_id=book_id,
        user_id=current_user.id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"Comment {comment.id} created on book {book_id} by user {current_user.id}")

    return CommentResponse.model_validate(comment)


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Edit a comment",
    responses={403: {"description": "Not the comment's author"}},
)
@limiter.limit(settings.rate_limit_write)
def update_comment(
    request: Request,
    book_id: int,
    comment_id: int,
    comment_data: CommentCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> CommentResponse:
    comment = get_comment_or_404(db, book_id, comment_id)
    ensure_owner(comment, current_user)

    comment.content = comment_data.content
    db.commit()
    db.refresh(comment)

    return CommentResponse.model_validate(comment)


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    responses={403: {"description": "Not the comment's author"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_comment(
    request: Request,
    book_id: int,
    comment_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> None:
    comment = get_comment_or_404(db, book_id, comment_id)
    ensure_owner(comment, current_user)

    db.delete(comment)
    db.commit()

    logger.info(f"Comment {comment_id} deleted by user {current_user.id}")
