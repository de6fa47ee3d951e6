"""
User Model

Represents an account that can sign in, own a library and write comments.

The is_admin flag is the source of the admin claim placed in access tokens
at login time. Changing it takes effect for tokens issued afterwards.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base

if TYPE_CHECKING:
    from library_api.models.comment import Comment
    from library_api.models.library import Library


class User(Base):
    """
    User model representing registered accounts.

    Table: users

    Relationships:
    - library: One-to-One (created lazily on the first added book)
    - comments: One-to-Many

    Example:
        user = User(
            email="reader@example.com",
            hashed_password=hash_password("SecurePass123"),
        )
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address (used for login)"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Whether tokens issued to this user carry the admin claim"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the user registered"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    library: Mapped["Library | None"] = relationship(
        "Library",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, email='{self.email}', is_admin={self.is_admin})"
