#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample authors and books, and makes sure an
admin account exists so the catalog can be edited through the API.

USAGE:
    # From the project root with the venv activated
    python scripts/seed_data.py

    # Choose the admin credentials
    ADMIN_EMAIL=me@example.com ADMIN_PASSWORD=Str0ngPassword python scripts/seed_data.py

This script:
1. Creates tables if they do not exist
2. Clears the existing catalog (authors, books, libraries, comments)
3. Creates sample authors and books linked through author_books
4. Creates the admin account, or promotes it if it already exists
"""

import os
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Author, AuthorBook, Book, Comment, Library, LibraryBook, User
from library_api.services.relationships import create_book_with_authors
from library_api.services.security import hash_password

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "AdminPass123"


def clear_data(db: Session) -> None:
    """Clear the catalog. User accounts are kept."""
    print("Clearing existing data...")
    for model in (Comment, LibraryBook, Library, AuthorBook, Book, Author):
        db.execute(delete(model))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors, keyed by surname."""
    print("Creating authors...")
    authors_data = [
        {
            "name": "George",
            "surname": "Orwell",
            "description": "English novelist and essayist, journalist and critic.",
            "birth_date": date(1903, 6, 25),
            "biography_url": "https://en.wikipedia.org/wiki/George_Orwell",
        },
        {
            "name": "Jane",
            "surname": "Austen",
            "description": "English novelist known for her six major novels.",
            "birth_date": date(1775, 12, 16),
            "biography_url": "https://en.wikipedia.org/wiki/Jane_Austen",
        },
        {
            "name": "Jorge Luis",
            "surname": "Borges",
            "description": "Argentine short-story writer, essayist and poet.",
            "birth_date": date(1899, 8, 24),
            "biography_url": "https://en.wikipedia.org/wiki/Jorge_Luis_Borges",
        },
        {
            "name": "Adolfo",
            "surname": "Bioy Casares",
            "description": "Argentine fiction writer, journalist and translator.",
            "birth_date": date(1914, 9, 15),
            "biography_url": "https://en.wikipedia.org/wiki/Adolfo_Bioy_Casares",
        },
        {
            "name": "Ursula",
            "surname": "Le Guin",
            "description": "American author of speculative fiction.",
            "birth_date": date(1929, 10, 21),
            "biography_url": "https://en.wikipedia.org/wiki/Ursula_K._Le_Guin",
        },
    ]

    authors = {}
    for data in authors_data:
        author = Author(**data)
        db.add(author)
        authors[data["surname"]] = author

    db.commit()
    for author in authors.values():
        db.refresh(author)

    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books through the relationship service."""
    print("Creating books...")

    books_data = [
        {
            "title": "Nineteen Eighty-Four",
            "synopsis": "A dystopian novel set in a totalitarian society under constant surveillance.",
            "identifier_url": "https://openlibrary.org/works/OL1168083W",
            "cover_source": "https://covers.openlibrary.org/b/id/9267242-L.jpg",
            "publication_date": date(1949, 6, 8),
            "authors": ["Orwell"],
        },
        {
            "title": "Animal Farm",
            "synopsis": "An allegorical novella reflecting events leading up to the Russian Revolution.",
            "identifier_url": "https://openlibrary.org/works/OL1168007W",
            "cover_source": "https://covers.openlibrary.org/b/id/11261770-L.jpg",
            "publication_date": date(1945, 8, 17),
            "authors": ["Orwell"],
        },
        {
            "title": "Pride and Prejudice",
            "synopsis": "A romantic novel following the emotional development of Elizabeth Bennet.",
            "identifier_url": "https://openlibrary.org/works/OL66554W",
            "cover_source": "https://covers.openlibrary.org/b/id/14348537-L.jpg",
            "publication_date": date(1813, 1, 28),
            "authors": ["Austen"],
        },
        {
            "title": "Ficciones",
            "synopsis": "A collection of short stories.",
            "identifier_url": "https://openlibrary.org/works/OL2663656W",
            "cover_source": "https://covers.openlibrary.org/b/id/8236356-L.jpg",
            "publication_date": date(1944, 1, 1),
            "authors": ["Borges"],
        },
        {
            "title": "Six Problems for Don Isidro Parodi",
            "synopsis": "Detective stories written under the pseudonym H. Bustos Domecq.",
            "identifier_url": "https://openlibrary.org/works/OL2663700W",
            "cover_source": "https://covers.openlibrary.org/b/id/2389184-L.jpg",
            "publication_date": date(1942, 1, 1),
            "authors": ["Borges", "Bioy Casares"],
        },
        {
            "title": "The Dispossessed",
            "synopsis": "An ambiguous utopia.",
            "identifier_url": "https://openlibrary.org/works/OL59863W",
            "cover_source": "https://covers.openlibrary.org/b/id/6979861-L.jpg",
            "publication_date": date(1974, 5, 1),
            "authors": ["Le Guin"],
        },
    ]

    books = []
    for data in books_data:
        author_surnames = data.pop("authors")
        author_ids = [authors[surname].id for surname in author_surnames]
        books.append(create_book_with_authors(db, data, author_ids))

    print(f"Created {len(books)} books.")
    return books


def ensure_admin(db: Session, email: str, password: str) -> User:
    """Create the admin account, or give an existing account admin rights."""
    user = db.scalar(select(User).where(User.email == email.lower()))

    if user is None:
        user = User(
            email=email.lower(),
            hashed_password=hash_password(password),
            is_admin=True,
        )
        db.add(user)
        print(f"Created admin account {user.email}.")
    else:
        user.is_admin = True
        print(f"Granted admin to existing account {user.email}.")

    db.commit()
    db.refresh(user)
    return user


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears the existing catalog before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors)
        admin = ensure_admin(
            db,
            os.environ.get("ADMIN_EMAIL", DEFAULT_ADMIN_EMAIL),
            os.environ.get("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
        )

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print(f"  - Admin: {admin.email}")
        print("\nYou can now access the API at http://localhost:8001")
        print("API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
