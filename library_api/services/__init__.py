"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- ordering.py: Author listing with the sort-field/direction decision table
- projection.py: ORM objects -> one-level response views
- rate_limiter.py: Rate limiting with slowapi (in-memory storage)
- relationships.py: Author<->Book and Library<->Book join maintenance
- security.py: Password hashing and JWT utilities
"""
