"""
Pydantic Schemas Package

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Control exactly what data is exposed in API responses
2. Different rules for create vs update vs response
3. Responses are trees: bidirectional ORM graphs are cut after one level

Schema Naming Convention:
- XxxBase: Shared fields between create and response
- XxxCreate: Fields required to create (or fully replace) a record
- XxxUpdate: Fields allowed in a partial update (all optional)
- XxxSummary: One-level shape embedded in another entity's response
- XxxResponse: Fields returned in API responses
"""

from library_api.schemas.account import (
    AdminChangeRequest,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from library_api.schemas.author import AuthorBase, AuthorCreate, AuthorUpdate
from library_api.schemas.book import BookBase, BookCreate, BookUpdate
from library_api.schemas.comment import CommentCreate, CommentResponse
from library_api.schemas.library import LibraryBooksRequest, LibraryResponse
from library_api.schemas.views import (
    AuthorResponse,
    AuthorSummary,
    BookResponse,
    BookSummary,
)

__all__ = [
    # Account schemas
    "AdminChangeRequest",
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorSummary",
    "AuthorResponse",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookSummary",
    "BookResponse",
    # Comment schemas
    "CommentCreate",
    "CommentResponse",
    # Library schemas
    "LibraryBooksRequest",
    "LibraryResponse",
]
