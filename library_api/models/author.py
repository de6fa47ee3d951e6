"""
Author Model

Represents an author in the catalog.

An author is linked to books through AuthorBook join records (see
library_api.models.book), not through a plain association table: the join
row is an entity of its own with a composite primary key.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

# TYPE_CHECKING avoids circular imports at runtime while keeping type hints
if TYPE_CHECKING:
    from library_api.models.book import AuthorBook


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - author_books: One-to-Many to AuthorBook join records. Deleting an
      author deletes its join records; the books themselves stay.

    Example:
        author = Author(
            name="Jorge Luis",
            surname="Borges",
            birth_date=date(1899, 8, 24),
        )
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    name: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
        comment="Author's given name"
    )

    surname: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
        comment="Author's family name"
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Short description of the author"
    )

    birth_date: Mapped[date] = mapped_column(
        Date,
        index=True,
        nullable=False,
        comment="Author's date of birth"
    )

    photo_source: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Reference to the author's photo"
    )

    biography_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="URL of an external biography"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author_books: Mapped[list["AuthorBook"]] = relationship(
        "AuthorBook",
        back_populates="author",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}', surname='{self.surname}')"
