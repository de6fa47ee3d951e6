"""
Book Pydantic Schemas

Request shapes for book operations. Response shapes (which embed author
summaries) live in library_api.schemas.views.
"""

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from library_api.utils.validators import first_letter_uppercase, http_url


class BookFields(BaseModel):
    """Shared book fields, without input validation."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=250,
        description="Book title",
        examples=["Ficciones", "The Dispossessed"],
    )

    synopsis: str | None = Field(
        default=None,
        max_length=5000,
        description="Book synopsis",
        examples=["A collection of short stories..."],
    )

    identifier_url: str = Field(
        ...,
        max_length=2000,
        description="External identifier URL of the book",
        examples=["https://openlibrary.org/works/OL2663656W"],
    )

    cover_source: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Reference to the cover image",
        examples=["https://covers.example.com/ficciones.jpg"],
    )

    publication_date: date = Field(
        ...,
        description="Date of publication",
        examples=["1944-01-01"],
    )


class BookBase(BookFields):
    """
    Book fields as accepted in requests.

    Contains validation for:
    - title capitalization
    - identifier_url format (absolute http(s) URL)
    """

    @field_validator("title")
    @classmethod
    def title_is_capitalized(cls, v: str) -> str:
        return first_letter_uppercase(v, "Title")

    @field_validator("identifier_url")
    @classmethod
    def identifier_url_is_url(cls, v: str) -> str:
        return http_url(v, "Identifier URL")


class BookCreate(BookBase):
    """
    Schema for creating or fully replacing a book.

    author_ids is required in meaning: an empty list is rejected with 400 by
    the relationship service, since a book cannot exist without authors.

    Example request body:
    {
        "title": "Ficciones",
        "identifier_url": "https://openlibrary.org/works/OL2663656W",
        "cover_source": "https://covers.example.com/ficciones.jpg",
        "publication_date": "1944-01-01",
        "author_ids": [1]
    }
    """

    author_ids: list[int] = Field(
        default_factory=list,
        description="Ids of the book's authors (at least one)",
        examples=[[1, 2]],
    )

    def book_fields(self) -> dict:
        """Column values for the Book model, without the relationship ids."""
        return self.model_dump(exclude={"author_ids"})


class BookUpdate(BaseModel):
    """
    Schema for partially updating a book (PATCH).

    When author_ids is present it replaces the whole author set.
    """

    title: str | None = Field(default=None, min_length=1, max_length=250)
    synopsis: str | None = Field(default=None, max_length=5000)
    identifier_url: str | None = Field(default=None, max_length=2000)
    cover_source: str | None = Field(default=None, min_length=1, max_length=2000)
    publication_date: date | None = Field(default=None)
    author_ids: list[int] | None = Field(
        default=None,
        description="Ids of the book's authors (replaces existing)",
    )

    @field_validator("title")
    @classmethod
    def title_is_capitalized(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return first_letter_uppercase(v, "Title")

    @field_validator("identifier_url")
    @classmethod
    def identifier_url_is_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return http_url(v, "Identifier URL")

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "BookUpdate":
        """An explicit null may only clear the synopsis."""
        for field in ("title", "identifier_url", "cover_source", "publication_date", "author_ids"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self
