"""
View Projection

Maps ORM objects onto the response shapes in library_api.schemas.views.

Each projection walks the join records one level and stops: an author's
books are projected as BookSummary (no authors), a book's authors as
AuthorSummary (no books). The relationships must already be loaded, or
loadable from the session that is still open for the request.
"""

from library_api.models.author import Author
from library_api.models.book import Book
from library_api.schemas.views import (
    AuthorResponse,
    AuthorSummary,
    BookResponse,
    BookSummary,
)


def project_book_summary(book: Book) -> BookSummary:
    return BookSummary.model_validate(book)


def project_author_summary(author: Author) -> AuthorSummary:
    return AuthorSummary.model_validate(author)


def project_author(author: Author) -> AuthorResponse:
    """Author fields plus the summaries of its books."""
    summary = project_author_summary(author)
    books = [project_book_summary(link.book) for link in author.author_books]
    return AuthorResponse(**summary.model_dump(), books=books)


def project_book(book: Book) -> BookResponse:
    """Book fields plus the summaries of its authors."""
    summary = project_book_summary(book)
    authors = [project_author_summary(link.author) for link in book.author_books]
    return BookResponse(**summary.model_dump(), authors=authors)
