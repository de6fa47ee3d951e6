"""
Utilities Package

Helper functions shared across the application:
- validators.py: reusable field checks for the Pydantic schemas
"""
