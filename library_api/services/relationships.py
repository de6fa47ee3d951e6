"""
Relationship Maintenance Service

Owns every change to the two many-to-many relationships in the catalog:

    Author <-> Book      through AuthorBook   (author_books)
    Library <-> Book     through LibraryBook  (library_books)

WHY a Service and not Router Code?
==================================
The rules that keep join tables consistent (a book needs authors, a book is
in a library at most once, a missing membership cannot be removed) are
shared by several endpoints. Keeping them here means:
- routers stay thin: load, call, project
- the rules are tested directly against a Session, without HTTP
- every operation is one read-decide-write sequence ending in one commit

Every function takes the request's Session as its first argument. Failures
are raised as domain exceptions (library_api.exceptions) and nothing is
persisted when one is raised.

Usage:
    from library_api.services import relationships

    library = relationships.attach_book_to_library(db, user.id, book_id)
"""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from library_api.exceptions import BadRequestError, ConflictError, NotFoundError
from library_api.models.author import Author
from library_api.models.book import AuthorBook, Book
from library_api.models.library import Library, LibraryBook

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def _distinct(ids: Iterable[int]) -> list[int]:
    """Drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def _get_library(db: Session, user_id: int) -> Library | None:
    query = (
        select(Library)
        .options(selectinload(Library.library_books))
        .where(Library.user_id == user_id)
    )
    return db.scalar(query)


def _already_present(book_ids: list[int]) -> ConflictError:
    if len(book_ids) == 1:
        return ConflictError(f"Book {book_ids[0]} is already in your library")
    return ConflictError(f"Books already in your library: {book_ids}")


def _append_memberships(library: Library, books: list[Book]) -> None:
    present = [book.id for book in books if library.find_membership(book.id)]
    if present:
        raise _already_present(present)

    for book in books:
        library.library_books.append(LibraryBook(book=book))


def _commit(db: Session, book_ids: list[int]) -> None:
    """
    Commit new memberships.

    A primary key violation on library_books means another request added
    the same book first; it is reported as a conflict after rolling back.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error on commit: {e.orig}")
        raise _already_present(book_ids) from e


def _add_to_library(db: Session, user_id: int, books: list[Book]) -> Library:
    """
    Add memberships for books to the user's library, creating it if needed.

    If another request creates the library between our read and our commit,
    the unique user_id rejects our copy. The existing library is then
    reloaded and the memberships are checked and added once more.
    """
    book_ids = [book.id for book in books]

    library = _get_library(db, user_id)
    if library is not None:
        _append_memberships(library, books)
        _commit(db, book_ids)
        return library

    library = Library(user_id=user_id)
    db.add(library)
    _append_memberships(library, books)
    logger.info(f"Creating library for user {user_id}")

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        library = _get_library(db, user_id)
        if library is None:
            raise
        logger.info(f"Library for user {user_id} was created concurrently, reusing it")
        _append_memberships(library, books)
        _commit(db, book_ids)

    return library


def _resolve_authors(db: Session, author_ids: list[int]) -> list[Author]:
    """
    Load the requested authors, in request order.

    Raises:
        BadRequestError: no ids given, or some ids do not resolve
    """
    if not author_ids:
        raise BadRequestError("A book must have at least one author")

    requested = _distinct(author_ids)
    authors = db.scalars(select(Author).where(Author.id.in_(requested))).all()

    if len(authors) != len(requested):
        found = {author.id for author in authors}
        missing = [author_id for author_id in requested if author_id not in found]
        raise BadRequestError(f"Authors not found: {missing}")

    by_id = {author.id: author for author in authors}
    return [by_id[author_id] for author_id in requested]


# =============================================================================
# Library <-> Book
# =============================================================================

def attach_book_to_library(db: Session, user_id: int, book_id: int) -> Library:
    """
    Add one book to the user's library, creating the library if needed.

    Raises:
        NotFoundError: the book does not exist
        ConflictError: the book is already in the library
    """
    book = db.get(Book, book_id)
    if book is None:
        raise NotFoundError(f"Book with id {book_id} not found")

    library = _add_to_library(db, user_id, [book])
    db.refresh(library)

    logger.info(f"Added book {book_id} to library {library.id} (user {user_id})")
    return library


def attach_books_to_library(db: Session, user_id: int, book_ids: list[int]) -> Library:
    """
    Add several books at once. Either every book is added or none is.

    Raises:
        BadRequestError: no ids given
        NotFoundError: some ids are not books
        ConflictError: some books are already in the library
    """
    requested = _distinct(book_ids)
    if not requested:
        raise BadRequestError("No book ids given")

    books = db.scalars(select(Book).where(Book.id.in_(requested))).all()
    by_id = {book.id: book for book in books}
    missing = [book_id for book_id in requested if book_id not in by_id]
    if missing:
        raise NotFoundError(f"Books not found: {missing}")

    library = _add_to_library(db, user_id, [by_id[book_id] for book_id in requested])
    db.refresh(library)

    logger.info(f"Added books {requested} to library {library.id} (user {user_id})")
    return library


def detach_book_from_library(db: Session, user_id: int, book_id: int) -> Library:
    """
    Remove one book from the user's library.

    Raises:
        BadRequestError: the user has no books, or this book is not among them
    """
    library = _get_library(db, user_id)
    if library is None or not library.library_books:
        raise BadRequestError("Your library has no books")

    membership = library.find_membership(book_id)
    if membership is None:
        raise BadRequestError(f"Book {book_id} is not in your library")

    library.library_books.remove(membership)
    db.commit()
    db.refresh(library)

    logger.info(f"Removed book {book_id} from library {library.id} (user {user_id})")
    return library


def detach_books_from_library(db: Session, user_id: int, book_ids: list[int]) -> Library:
    """
    Remove several books at once. Either every book is removed or none is.

    Raises:
        BadRequestError: no ids given, the library is empty, or some books
            are not in it
    """
    requested = _distinct(book_ids)
    if not requested:
        raise BadRequestError("No book ids given")

    library = _get_library(db, user_id)
    if library is None or not library.library_books:
        raise BadRequestError("Your library has no books")

    memberships = [library.find_membership(book_id) for book_id in requested]
    absent = [book_id for book_id, m in zip(requested, memberships) if m is None]
    if absent:
        raise BadRequestError(f"Books not in your library: {absent}")

    for membership in memberships:
        library.library_books.remove(membership)
    db.commit()
    db.refresh(library)

    logger.info(f"Removed books {requested} from library {library.id} (user {user_id})")
    return library


def get_library_books(db: Session, user_id: int) -> list[Book]:
    """
    Books in the user's library, in the order they were added.

    Raises:
        NotFoundError: the user has no library or it is empty
    """
    query = (
        select(Library)
        .options(
            selectinload(Library.library_books)
            .selectinload(LibraryBook.book)
            .selectinload(Book.author_books)
            .selectinload(AuthorBook.author)
        )
        .where(Library.user_id == user_id)
    )
    library = db.scalar(query)
    if library is None or not library.library_books:
        raise NotFoundError("Your library has no books")

    return [membership.book for membership in library.library_books]


# =============================================================================
# Author <-> Book
# =============================================================================

def create_book_with_authors(db: Session, book_data: dict, author_ids: list[int]) -> Book:
    """
    Create a book together with its author links.

    Args:
        book_data: Column values for Book (see BookCreate.book_fields)
        author_ids: Ids of existing authors; repeated ids count once

    Raises:
        BadRequestError: no authors given, or some ids do not resolve
    """
    authors = _resolve_authors(db, author_ids)

    book = Book(**book_data)
    book.author_books = [AuthorBook(author=author) for author in authors]
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Created book {book.id} with authors {[a.id for a in authors]}")
    return book


def replace_book_authors(db: Session, book: Book, author_ids: list[int]) -> Book:
    """
    Make the book's author links exactly the requested set.

    Links that stay are left untouched; only removed and added pairs are
    written. Commits the session, so pending column changes on the book are
    saved together with the links.

    Raises:
        BadRequestError: no authors given, or some ids do not resolve
    """
    authors = _resolve_authors(db, author_ids)
    wanted = {author.id for author in authors}

    for link in list(book.author_books):
        if link.author_id not in wanted:
            book.author_books.remove(link)

    current = set(book.author_ids)
    for author in authors:
        if author.id not in current:
            book.author_books.append(AuthorBook(author=author))

    db.commit()
    db.refresh(book)

    logger.info(f"Book {book.id} authors set to {sorted(wanted)}")
    return book
