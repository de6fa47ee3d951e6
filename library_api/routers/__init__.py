"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

WHY Routers?
============
1. Organization: Group related endpoints together
2. Modularity: Each router can have its own prefix, tags, dependencies
3. Maintainability: Easy to find and modify endpoint code

Router Structure:
- accounts.py: /api/v1/accounts/* (register, login, admin changes)
- authors.py: /api/v1/authors/* endpoints
- books.py: /api/v1/books/* endpoints
- comments.py: /api/v1/books/{book_id}/comments/* endpoints
- libraries.py: /api/v1/libraries/me/* endpoints

Each router is imported and registered in main.py.
"""

from library_api.routers.accounts import router as accounts_router
from library_api.routers.authors import router as authors_router
from library_api.routers.books import router as books_router
from library_api.routers.comments import router as comments_router
from library_api.routers.libraries import router as libraries_router

__all__ = [
    "accounts_router",
    "authors_router",
    "books_router",
    "comments_router",
    "libraries_router",
]
