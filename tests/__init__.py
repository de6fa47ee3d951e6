"""
Test Suite for the Authors Library API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data, auth headers)
- test_accounts.py: /api/v1/accounts endpoints
- test_authors.py: /api/v1/authors endpoints
- test_books.py: /api/v1/books endpoints
- test_comments.py: /api/v1/books/{book_id}/comments endpoints
- test_libraries.py: /api/v1/libraries endpoints
- test_ordering.py: author ordering service
- test_relationships.py: relationship maintenance service
- test_projection.py: response projection

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_libraries.py

    # Run with verbose output
    pytest -v
"""
