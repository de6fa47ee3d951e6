"""
Book Model

The central model of the catalog, plus the AuthorBook join entity.

WHY a Join Entity and not a Table?
==================================
A many-to-many relationship needs a junction table. SQLAlchemy can model it
either as a bare Table (secondary=...) or as a mapped class (the
"association object" pattern). AuthorBook is a mapped class so that:
- its composite primary key (author_id, book_id) is explicit
- services can inspect, add and remove individual edges
- both sides project through the same join records
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.author import Author
    from library_api.models.comment import Comment
    from library_api.models.library import LibraryBook


# =============================================================================
# Join Entity
# =============================================================================
class AuthorBook(Base):
    """
    One edge of the Author <-> Book relationship.

    Table: author_books

    The composite primary key makes each (author, book) pair unique.
    """

    __tablename__ = "author_books"

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )

    author: Mapped["Author"] = relationship("Author", back_populates="author_books")
    book: Mapped["Book"] = relationship("Book", back_populates="author_books")

    def __repr__(self) -> str:
        return f"AuthorBook(author_id={self.author_id}, book_id={self.book_id})"


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (required)
    - synopsis: Optional summary
    - identifier_url: URL identifying the book externally (required)
    - cover_source: Reference to the cover image (required)
    - publication_date: When the book was published

    Relationships:
    - author_books: join records to Author (at least one at creation time)
    - library_books: memberships in user libraries
    - comments: user comments on the book

    Deleting a book deletes its join records, memberships and comments.
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(250),
        index=True,
        nullable=False,
        comment="Book title"
    )

    synopsis: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book synopsis"
    )

    identifier_url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="External identifier URL of the book"
    )

    cover_source: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Reference to the cover image"
    )

    # Date (not DateTime) because only the day matters
    publication_date: Mapped[date] = mapped_column(
        Date,
        index=True,
        nullable=False,
        comment="Date of publication"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author_books: Mapped[list["AuthorBook"]] = relationship(
        "AuthorBook",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    library_books: Mapped[list["LibraryBook"]] = relationship(
        "LibraryBook",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    @property
    def author_ids(self) -> list[int]:
        """Ids of the authors linked to this book."""
        return [link.author_id for link in self.author_books]

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
