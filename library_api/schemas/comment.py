"""
Comment Pydantic Schemas

Schemas:
- CommentCreate: Create or replace a comment's text
- CommentResponse: Comment data returned by the API

Business Rules:
- Content is required and cannot be only whitespace
- Only the comment's owner can replace or delete it
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentCreate(BaseModel):
    """
    Schema for creating a comment (and for replacing its content).

    Example request body:
    {
        "content": "The library of Babel still haunts me."
    }
    """

    content: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Comment text",
        examples=["The library of Babel still haunts me."],
    )

    @field_validator("content")
    @classmethod
    def content_must_not_be_empty(cls, v: str) -> str:
        """Reject whitespace-only comments and normalize surrounding space."""
        if not v.strip():
            raise ValueError("Content cannot be empty or whitespace")
        return v.strip()


class CommentResponse(BaseModel):
    """Schema for comment responses."""

    id: int = Field(..., description="Comment ID")
    content: str = Field(..., description="Comment text")
    book_id: int = Field(..., description="Book the comment belongs to")
    user_id: int = Field(..., description="User who wrote the comment")
    created_at: datetime = Field(..., description="When the comment was created")
    updated_at: datetime = Field(..., description="When the comment was last edited")

    model_config = ConfigDict(from_attributes=True)
