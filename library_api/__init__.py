"""
Authors Library API Package

Backend for a catalog of authors and books, per-user libraries and
book comments.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- exceptions.py: Domain errors raised by the service layer
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (session, auth)
- models/: SQLAlchemy ORM models, including the join entities
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Ordering, relationship maintenance, projection, security
"""

__version__ = "0.1.0"
