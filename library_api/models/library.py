"""
Library Model

A user's personal collection of books.

Business Rules:
- One library per user (unique user_id)
- A library is created implicitly the first time its owner adds a book
- Libraries are never deleted explicitly
- A book appears at most once per library (LibraryBook composite key)
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.book import Book
    from library_api.models.user import User


class LibraryBook(Base):
    """
    Membership of a Book in a Library.

    Table: library_books

    The composite primary key (book_id, library_id) is what rejects a second
    membership for the same pair at the database level.
    """

    __tablename__ = "library_books"

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    )
    library_id: Mapped[int] = mapped_column(
        ForeignKey("libraries.id", ondelete="CASCADE"),
        primary_key=True,
    )

    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        comment="When the book was added to the library",
    )

    book: Mapped["Book"] = relationship("Book", back_populates="library_books")
    library: Mapped["Library"] = relationship("Library", back_populates="library_books")

    def __repr__(self) -> str:
        return f"LibraryBook(book_id={self.book_id}, library_id={self.library_id})"


class Library(Base):
    """
    Library model.

    Table: libraries

    Attributes:
        id: Primary key
        user_id: Owning user (unique)
        library_books: Membership records, in insertion order (ties by book id)
    """

    __tablename__ = "libraries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="library")
    library_books: Mapped[list["LibraryBook"]] = relationship(
        "LibraryBook",
        back_populates="library",
        cascade="all, delete-orphan",
        order_by=[LibraryBook.added_at, LibraryBook.book_id],
    )

    def find_membership(self, book_id: int) -> "LibraryBook | None":
        """Return the membership record for book_id, if any."""
        for membership in self.library_books:
            if membership.book_id == book_id:
                return membership
        return None

    @property
    def book_ids(self) -> list[int]:
        return [membership.book_id for membership in self.library_books]

    def __repr__(self) -> str:
        return f"<Library(id={self.id}, user_id={self.user_id}, books={len(self.library_books)})>"
