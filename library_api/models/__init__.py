"""
SQLAlchemy Models Package

Model Relationships:
- Author <-> Book: Many-to-Many through the AuthorBook join entity
- Library <-> Book: Many-to-Many through the LibraryBook join entity
- User -> Library: One-to-One (one library per user)
- Book -> Comment, User -> Comment: One-to-Many

Import all models here so that:
1. They are available as: from library_api.models import Book, Author
2. Every table is registered on Base.metadata before create_all()
"""

# The order matters for SQLAlchemy to resolve string relationship targets
from library_api.models.author import Author
from library_api.models.book import AuthorBook, Book
from library_api.models.user import User
from library_api.models.library import Library, LibraryBook
from library_api.models.comment import Comment

__all__ = [
    "Author",
    "AuthorBook",
    "Book",
    "User",
    "Library",
    "LibraryBook",
    "Comment",
]
