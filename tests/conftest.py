"""
pytest Fixtures for Authors Library API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

Every test runs inside a transaction on a single connection that is rolled
back afterwards, so commits made by routes and services never leak into
the next test.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are cached on first import, so these must come first.
import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"

from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Author, AuthorBook, Book, Comment, User
from library_api.services.security import ADMIN_CLAIM, create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: no disk I/O and no external database needed.
# StaticPool keeps the single connection (and so the database) alive.


@pytest.fixture(scope="session")
def engine():
    """Create a SQLite in-memory database engine with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection whose transaction is rolled back
    after the test.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client that uses the test session.

    get_db is overridden so every request shares db_session.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# AUTH HELPERS
# =============================================================================

def get_auth_header(user: User) -> dict[str, str]:
    """Bearer header for user, with the admin claim when the user is an admin."""
    claims = {"sub": str(user.id), "email": user.email}
    if user.is_admin:
        claims[ADMIN_CLAIM] = True
    token = create_access_token(claims)
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

def make_author(db: Session, name: str, surname: str, birth_date: date, **extra) -> Author:
    author = Author(name=name, surname=surname, birth_date=birth_date, **extra)
    db.add(author)
    db.commit()
    db.refresh(author)
    return author


def make_book(db: Session, title: str, authors: list[Author], **extra) -> Book:
    fields = {
        "identifier_url": f"https://openlibrary.org/works/{title.replace(' ', '_')}",
        "cover_source": f"https://covers.example.com/{title.replace(' ', '_')}.jpg",
        "publication_date": date(1944, 1, 1),
    }
    fields.update(extra)
    book = Book(title=title, **fields)
    book.author_books = [AuthorBook(author=author) for author in authors]
    db.add(book)
    db.commit()
    db.refresh(book)
    return book


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    return make_author(
        db_session,
        "Jorge Luis",
        "Borges",
        date(1899, 8, 24),
        description="Argentine short-story writer, essayist and poet.",
        biography_url="https://en.wikipedia.org/wiki/Jorge_Luis_Borges",
    )


@pytest.fixture
def second_author(db_session: Session) -> Author:
    """Create a second author for multi-author books."""
    return make_author(db_session, "Adolfo", "Bioy Casares", date(1914, 9, 15))


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book linked to sample_author."""
    return make_book(
        db_session,
        "Ficciones",
        [sample_author],
        synopsis="A collection of short stories.",
    )


@pytest.fixture
def shared_book(db_session: Session, sample_author: Author, second_author: Author) -> Book:
    """Create a book written by both sample authors."""
    return make_book(
        db_session,
        "Six Problems for Don Isidro Parodi",
        [sample_author, second_author],
        publication_date=date(1942, 1, 1),
    )


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a regular (non-admin) user."""
    user = User(
        email="reader@example.com",
        hashed_password=hash_password("SecurePass123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second user for ownership scenarios."""
    user = User(
        email="second@example.com",
        hashed_password=hash_password("SecurePass456"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """Create an admin user."""
    user = User(
        email="admin@example.com",
        hashed_password=hash_password("AdminPass123"),
        is_admin=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user_headers(sample_user: User) -> dict[str, str]:
    return get_auth_header(sample_user)


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return get_auth_header(admin_user)


@pytest.fixture
def sample_comment(db_session: Session, sample_book: Book, sample_user: User) -> Comment:
    """Create a comment by sample_user on sample_book."""
    comment = Comment(
        content="The library of Babel still haunts me.",
        book_id=sample_book.id,
        user_id=sample_user.id,
    )
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment
