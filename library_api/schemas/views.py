"""
Response View Models

The shapes the API returns for authors and books.

WHY Summaries?
==============
Author <-> Book is bidirectional in the database: an author has books, each
book has authors, each of those authors has books, and so on. Responses are
trees, cut after one level:

- AuthorResponse embeds BookSummary items (books WITHOUT their authors)
- BookResponse embeds AuthorSummary items (authors WITHOUT their books)

The summaries simply have no field for the reciprocal list, so no response
can nest further than one level. The mapping from ORM objects to these
shapes is in library_api.services.projection.
"""

from pydantic import ConfigDict, Field

from library_api.schemas.author import AuthorFields
from library_api.schemas.book import BookFields


class AuthorSummary(AuthorFields):
    """Author scalar fields, as embedded in a book response."""

    id: int = Field(..., description="Unique identifier", examples=[1, 42])

    model_config = ConfigDict(from_attributes=True)


class BookSummary(BookFields):
    """Book scalar fields, as embedded in an author response."""

    id: int = Field(..., description="Unique identifier", examples=[1, 42])

    model_config = ConfigDict(from_attributes=True)


class AuthorResponse(AuthorSummary):
    """An author with the books linked to it."""

    books: list[BookSummary] = Field(
        default=[],
        description="Books by this author (without their authors)",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Jorge Luis",
                "surname": "Borges",
                "description": "Argentine short-story writer, essayist and poet.",
                "birth_date": "1899-08-24",
                "photo_source": None,
                "biography_url": "https://en.wikipedia.org/wiki/Jorge_Luis_Borges",
                "books": [
                    {
                        "id": 1,
                        "title": "Ficciones",
                        "synopsis": None,
                        "identifier_url": "https://openlibrary.org/works/OL2663656W",
                        "cover_source": "https://covers.example.com/ficciones.jpg",
                        "publication_date": "1944-01-01",
                    }
                ],
            }
        },
    )


class BookResponse(BookSummary):
    """A book with the authors linked to it."""

    authors: list[AuthorSummary] = Field(
        default=[],
        description="Authors of this book (without their books)",
    )

    model_config = ConfigDict(from_attributes=True)
