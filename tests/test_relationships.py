"""
Tests for the Relationship Maintenance Service

These call library_api.services.relationships directly with the test
session, without going through HTTP.
"""

from datetime import UTC, date, datetime

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from library_api.database import Base
from library_api.exceptions import BadRequestError, ConflictError, NotFoundError
from library_api.models import AuthorBook, Book, Library, LibraryBook, User
from library_api.services import relationships
from tests.conftest import make_book


def membership_count(db, library_id: int, book_id: int) -> int:
    stmt = select(func.count()).select_from(LibraryBook).where(
        LibraryBook.library_id == library_id,
        LibraryBook.book_id == book_id,
    )
    return db.execute(stmt).scalar()


def book_payload(title: str = "Labyrinths") -> dict:
    return {
        "title": title,
        "synopsis": None,
        "identifier_url": "https://openlibrary.org/works/OL1W",
        "cover_source": "https://covers.example.com/labyrinths.jpg",
        "publication_date": date(1962, 1, 1),
    }


class TestAttachBook:
    """Tests for attach_book_to_library()."""

    def test_first_attach_creates_library(self, db_session, sample_user, sample_book):
        library = relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        assert library.user_id == sample_user.id
        assert library.book_ids == [sample_book.id]

    def test_attach_twice_is_conflict(self, db_session, sample_user, sample_book):
        library = relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        with pytest.raises(ConflictError):
            relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        assert membership_count(db_session, library.id, sample_book.id) == 1

    def test_attach_missing_book(self, db_session, sample_user):
        with pytest.raises(NotFoundError):
            relationships.attach_book_to_library(db_session, sample_user.id, 99999)

        assert db_session.scalar(select(Library).where(Library.user_id == sample_user.id)) is None

    def test_attach_adds_to_existing_library(
        self, db_session, sample_user, sample_book, shared_book
    ):
        first = relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)
        second = relationships.attach_book_to_library(db_session, sample_user.id, shared_book.id)

        assert second.id == first.id
        assert sorted(second.book_ids) == sorted([sample_book.id, shared_book.id])


class TestAttachBooks:
    """Tests for attach_books_to_library()."""

    def test_attach_several(self, db_session, sample_user, sample_book, shared_book):
        library = relationships.attach_books_to_library(
            db_session, sample_user.id, [sample_book.id, shared_book.id]
        )
        assert sorted(library.book_ids) == sorted([sample_book.id, shared_book.id])

    def test_repeated_ids_count_once(self, db_session, sample_user, sample_book):
        library = relationships.attach_books_to_library(
            db_session, sample_user.id, [sample_book.id, sample_book.id]
        )
        assert library.book_ids == [sample_book.id]

    def test_empty_list(self, db_session, sample_user):
        with pytest.raises(BadRequestError):
            relationships.attach_books_to_library(db_session, sample_user.id, [])

    def test_missing_id_adds_nothing(self, db_session, sample_user, sample_book):
        with pytest.raises(NotFoundError) as exc_info:
            relationships.attach_books_to_library(db_session, sample_user.id, [sample_book.id, 99999])

        assert "99999" in exc_info.value.detail
        assert db_session.scalar(select(func.count()).select_from(LibraryBook)) == 0

    def test_present_id_adds_nothing(self, db_session, sample_user, sample_book, shared_book):
        relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        with pytest.raises(ConflictError):
            relationships.attach_books_to_library(
                db_session, sample_user.id, [shared_book.id, sample_book.id]
            )

        library = db_session.scalar(select(Library).where(Library.user_id == sample_user.id))
        assert library.book_ids == [sample_book.id]


class TestDetachBook:
    """Tests for detach_book_from_library() and detach_books_from_library()."""

    def test_detach_member(self, db_session, sample_user, sample_book, shared_book):
        relationships.attach_books_to_library(
            db_session, sample_user.id, [sample_book.id, shared_book.id]
        )

        library = relationships.detach_book_from_library(db_session, sample_user.id, sample_book.id)

        assert library.book_ids == [shared_book.id]

    def test_detach_without_library(self, db_session, sample_user, sample_book):
        with pytest.raises(BadRequestError):
            relationships.detach_book_from_library(db_session, sample_user.id, sample_book.id)

    def test_detach_non_member_leaves_library_unchanged(
        self, db_session, sample_user, sample_book, shared_book
    ):
        relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        with pytest.raises(BadRequestError):
            relationships.detach_book_from_library(db_session, sample_user.id, shared_book.id)

        library = db_session.scalar(select(Library).where(Library.user_id == sample_user.id))
        assert library.book_ids == [sample_book.id]

    def test_detach_from_emptied_library(self, db_session, sample_user, sample_book):
        relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)
        relationships.detach_book_from_library(db_session, sample_user.id, sample_book.id)

        with pytest.raises(BadRequestError):
            relationships.detach_book_from_library(db_session, sample_user.id, sample_book.id)

    def test_bulk_detach_is_all_or_nothing(
        self, db_session, sample_user, sample_book, shared_book
    ):
        relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        with pytest.raises(BadRequestError) as exc_info:
            relationships.detach_books_from_library(
                db_session, sample_user.id, [sample_book.id, shared_book.id]
            )

        assert str(shared_book.id) in exc_info.value.detail
        library = db_session.scalar(select(Library).where(Library.user_id == sample_user.id))
        assert library.book_ids == [sample_book.id]

    def test_bulk_detach(self, db_session, sample_user, sample_book, shared_book):
        relationships.attach_books_to_library(
            db_session, sample_user.id, [sample_book.id, shared_book.id]
        )

        library = relationships.detach_books_from_library(
            db_session, sample_user.id, [shared_book.id, sample_book.id]
        )

        assert library.book_ids == []


class TestGetLibraryBooks:
    """Tests for get_library_books()."""

    def test_no_library(self, db_session, sample_user):
        with pytest.raises(NotFoundError):
            relationships.get_library_books(db_session, sample_user.id)

    def test_books_in_order_added(self, db_session, sample_user, sample_book, shared_book):
        relationships.attach_book_to_library(db_session, sample_user.id, shared_book.id)
        relationships.attach_book_to_library(db_session, sample_user.id, sample_book.id)

        books = relationships.get_library_books(db_session, sample_user.id)

        assert [book.id for book in books] == [shared_book.id, sample_book.id]

    def test_same_timestamp_ordered_by_book_id(
        self, db_session, sample_user, sample_book, shared_book
    ):
        added_at = datetime(2024, 1, 1, tzinfo=UTC)
        library = Library(user_id=sample_user.id)
        library.library_books = [
            LibraryBook(book=shared_book, added_at=added_at),
            LibraryBook(book=sample_book, added_at=added_at),
        ]
        db_session.add(library)
        db_session.commit()

        books = relationships.get_library_books(db_session, sample_user.id)

        assert [book.id for book in books] == [sample_book.id, shared_book.id]


class TestCreateBookWithAuthors:
    """Tests for create_book_with_authors()."""

    def test_creates_book_and_links(self, db_session, sample_author, second_author):
        book = relationships.create_book_with_authors(
            db_session, book_payload(), [sample_author.id, second_author.id]
        )

        assert book.id is not None
        assert sorted(book.author_ids) == sorted([sample_author.id, second_author.id])

    def test_repeated_author_id_links_once(self, db_session, sample_author):
        book = relationships.create_book_with_authors(
            db_session, book_payload(), [sample_author.id, sample_author.id]
        )
        assert book.author_ids == [sample_author.id]

    def test_no_authors(self, db_session):
        with pytest.raises(BadRequestError):
            relationships.create_book_with_authors(db_session, book_payload(), [])

        assert db_session.scalar(select(func.count()).select_from(Book)) == 0

    def test_unknown_author_persists_nothing(self, db_session, sample_author):
        with pytest.raises(BadRequestError):
            relationships.create_book_with_authors(
                db_session, book_payload(), [sample_author.id, 99999]
            )

        assert db_session.scalar(select(func.count()).select_from(Book)) == 0
        assert db_session.scalar(select(func.count()).select_from(AuthorBook)) == 0


class TestReplaceBookAuthors:
    """Tests for replace_book_authors()."""

    def test_replace_with_overlapping_set(self, db_session, shared_book, sample_author, second_author):
        book = relationships.replace_book_authors(db_session, shared_book, [second_author.id])
        assert book.author_ids == [second_author.id]

    def test_replace_keeps_and_adds(self, db_session, sample_book, sample_author, second_author):
        book = relationships.replace_book_authors(
            db_session, sample_book, [sample_author.id, second_author.id]
        )
        assert sorted(book.author_ids) == sorted([sample_author.id, second_author.id])

    def test_replace_with_unknown_author(self, db_session, sample_book, sample_author):
        with pytest.raises(BadRequestError):
            relationships.replace_book_authors(db_session, sample_book, [99999])

        assert sample_book.author_ids == [sample_author.id]

    def test_other_books_keep_their_authors(self, db_session, sample_author, second_author):
        first = make_book(db_session, "Ficciones", [sample_author])
        second = make_book(db_session, "El Aleph", [sample_author])

        relationships.replace_book_authors(db_session, first, [second_author.id])

        db_session.refresh(second)
        assert second.author_ids == [sample_author.id]


# =============================================================================
# CONCURRENT WRITERS
# =============================================================================
# Two sessions on a file-backed database, each with its own connection and
# real commits and rollbacks. A writer that read before the other committed
# is simulated by handing it that earlier read.


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'library.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


@pytest.fixture
def reader_and_books(session_factory) -> tuple[int, int, int]:
    """A user without a library and two books, as (user_id, book_id, other_book_id)."""
    with session_factory() as db:
        user = User(email="reader@example.com", hashed_password="not-a-real-hash")
        db.add(user)
        db.commit()
        first = make_book(db, "Ficciones", [])
        second = make_book(db, "El Aleph", [])
        return user.id, first.id, second.id


def library_book_ids(session_factory, user_id: int) -> list[int]:
    with session_factory() as db:
        library = db.scalar(select(Library).where(Library.user_id == user_id))
        return sorted(library.book_ids)


class TestConcurrentAttach:
    """Attaches that race another request between their read and their commit."""

    def test_same_book_into_existing_library(self, session_factory, reader_and_books, monkeypatch):
        user_id, book_id, _ = reader_and_books
        with session_factory() as db:
            db.add(Library(user_id=user_id))
            db.commit()

        first, second = session_factory(), session_factory()
        stale = relationships._get_library(second, user_id)

        relationships.attach_book_to_library(first, user_id, book_id)

        monkeypatch.setattr(relationships, "_get_library", lambda db, uid: stale)
        with pytest.raises(ConflictError):
            relationships.attach_book_to_library(second, user_id, book_id)

        first.close()
        second.close()
        assert library_book_ids(session_factory, user_id) == [book_id]

    def test_other_book_while_library_is_created(
        self, session_factory, reader_and_books, monkeypatch
    ):
        user_id, book_id, other_book_id = reader_and_books
        first, second = session_factory(), session_factory()

        relationships.attach_book_to_library(first, user_id, book_id)

        real_get_library = relationships._get_library
        reads = []

        def library_not_yet_created(db, uid):
            reads.append(uid)
            if len(reads) == 1:
                return None
            return real_get_library(db, uid)

        monkeypatch.setattr(relationships, "_get_library", library_not_yet_created)
        library = relationships.attach_book_to_library(second, user_id, other_book_id)

        assert sorted(library.book_ids) == sorted([book_id, other_book_id])

        first.close()
        second.close()
        assert library_book_ids(session_factory, user_id) == sorted([book_id, other_book_id])
        with session_factory() as db:
            assert db.scalar(select(func.count()).select_from(Library)) == 1

    def test_same_book_while_library_is_created(
        self, session_factory, reader_and_books, monkeypatch
    ):
        user_id, book_id, _ = reader_and_books
        first, second = session_factory(), session_factory()

        relationships.attach_book_to_library(first, user_id, book_id)

        real_get_library = relationships._get_library
        reads = []

        def library_not_yet_created(db, uid):
            reads.append(uid)
            if len(reads) == 1:
                return None
            return real_get_library(db, uid)

        monkeypatch.setattr(relationships, "_get_library", library_not_yet_created)
        with pytest.raises(ConflictError) as exc_info:
            relationships.attach_books_to_library(second, user_id, [book_id])

        assert str(book_id) in exc_info.value.detail
        first.close()
        second.close()
        assert library_book_ids(session_factory, user_id) == [book_id]
